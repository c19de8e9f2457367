"""User database model"""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from error_tracker.config.timezone import utc_now
from error_tracker.db.database import Base
from error_tracker.utils.identifiers import new_record_id


class User(Base):
    """
    User model; the owner of error log records.

    `api_token_hash` is credential material and never leaves the service.
    """
    __tablename__ = "users"
    
    id = Column(String(32), primary_key=True, default=new_record_id)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    api_token_hash = Column(String(64), nullable=False, unique=True, index=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    
    # Relationship
    error_logs = relationship("ErrorLog", back_populates="owner", passive_deletes=True)
    
    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"
