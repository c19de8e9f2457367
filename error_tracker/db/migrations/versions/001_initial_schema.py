"""Initial schema

Revision ID: 001
Revises: 
Create Date: 2024-01-01 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None

PROGRAMMING_LANGUAGES = (
    'JavaScript', 'TypeScript', 'Python', 'Java', 'C++', 'React', 'Node.js',
    'PHP', 'Go', 'Rust', 'C#', 'Swift', 'Kotlin', 'Ruby',
)
CATEGORIES = (
    'Syntax Error', 'Logic Error', 'Runtime Error', 'Type Error', 'API Error',
    'Database Error', 'Performance Issue', 'Security Issue', 'Build Error',
    'Deployment Error', 'Configuration Error', 'Network Error',
)
SEVERITIES = ('Low', 'Medium', 'High', 'Critical')


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('api_token_hash', sa.String(length=64), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_api_token_hash'), 'users', ['api_token_hash'], unique=True)
    
    # Create error_logs table
    op.create_table(
        'error_logs',
        sa.Column('id', sa.String(length=32), nullable=False),
        sa.Column('owner_id', sa.String(length=32), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('programming_language', sa.Enum(*PROGRAMMING_LANGUAGES, name='programminglanguage'), nullable=False),
        sa.Column('category', sa.Enum(*CATEGORIES, name='errorcategory'), nullable=False),
        sa.Column('solution', sa.Text(), nullable=False),
        sa.Column('severity', sa.Enum(*SEVERITIES, name='severity'), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('is_resolved', sa.Boolean(), nullable=False),
        sa.Column('time_to_resolve', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_error_logs_programming_language'), 'error_logs', ['programming_language'], unique=False)
    op.create_index(op.f('ix_error_logs_category'), 'error_logs', ['category'], unique=False)
    op.create_index('ix_error_logs_owner_created', 'error_logs', ['owner_id', 'created_at'], unique=False)
    op.create_index('ix_error_logs_owner_language', 'error_logs', ['owner_id', 'programming_language'], unique=False)
    op.create_index('ix_error_logs_owner_category', 'error_logs', ['owner_id', 'category'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_error_logs_owner_category', table_name='error_logs')
    op.drop_index('ix_error_logs_owner_language', table_name='error_logs')
    op.drop_index('ix_error_logs_owner_created', table_name='error_logs')
    op.drop_index(op.f('ix_error_logs_category'), table_name='error_logs')
    op.drop_index(op.f('ix_error_logs_programming_language'), table_name='error_logs')
    op.drop_table('error_logs')
    
    op.drop_index(op.f('ix_users_api_token_hash'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
    
    sa.Enum(name='severity').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='errorcategory').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='programminglanguage').drop(op.get_bind(), checkfirst=True)
