import argparse

from sqlalchemy.orm import Session

from error_tracker.config import get_config
from error_tracker.db.database import create_all_tables, init_database
from error_tracker.db.queries import create_user, get_user_by_email, rotate_user_token
from error_tracker.db.session import get_db_session
from error_tracker.utils.identifiers import hash_api_token, issue_api_token


def upsert_user(db: Session, name: str, email: str) -> tuple[bool, str, str]:
    """Create the user, or issue a fresh token for an existing one.

    Returns (created, user_id, token). The token is only ever shown here;
    the database keeps its digest.
    """
    token = issue_api_token()
    user = get_user_by_email(db, email)
    created = False
    if not user:
        if not name:
            raise ValueError("Name required to create a new user")
        user = create_user(db, name, email, hash_api_token(token))
        created = True
    else:
        if name:
            user.name = name
        user = rotate_user_token(db, user, hash_api_token(token))
    return created, user.id, token


def main():
    parser = argparse.ArgumentParser(description="Create a user or rotate their API token.")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", default="")
    args = parser.parse_args()

    config = get_config()
    init_database(config.database.url)
    create_all_tables()

    with get_db_session("issuing API token") as db:
        created, user_id, token = upsert_user(db, args.name.strip(), args.email.strip().lower())

    print(("Created" if created else "Updated") + f" user {user_id} <{args.email}>")
    print(f"API token (shown once): {token}")


if __name__ == "__main__":
    main()
