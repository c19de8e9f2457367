"""Record identifiers and API token digests"""
import hashlib
import secrets
import uuid


def new_record_id() -> str:
    """Generate a new record identifier (32 lowercase hex chars)"""
    return uuid.uuid4().hex


def is_valid_record_id(value: str) -> bool:
    """Check that a value is a well-formed record identifier (lowercase hex, as issued)"""
    if not isinstance(value, str) or len(value) != 32:
        return False
    try:
        return uuid.UUID(hex=value).hex == value
    except ValueError:
        return False


def issue_api_token() -> str:
    """Generate a new opaque bearer token"""
    return secrets.token_urlsafe(32)


def hash_api_token(token: str) -> str:
    """SHA-256 digest of a bearer token, the only form that is stored"""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
