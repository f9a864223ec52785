from flask import current_app, has_app_context
from werkzeug.security import check_password_hash, generate_password_hash

DEFAULT_HASH_METHOD = "scrypt"


def _method() -> str:
    if has_app_context():
        return current_app.config.get("PASSWORD_HASH_METHOD") or DEFAULT_HASH_METHOD
    return DEFAULT_HASH_METHOD


def hash_password(password: str, method: str | None = None) -> str:
    """Salted adaptive hash (per-password random salt, fixed work factor from config)."""
    return generate_password_hash(password, method=method or _method())


def verify_password(password_hash: str, password: str) -> bool:
    """Constant-time comparison against a stored hash."""
    return check_password_hash(password_hash, password)
