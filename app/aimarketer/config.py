import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    secret_key: str
    env: str
    database_url: str

    db_auto_create: bool
    login_generic_errors: bool
    password_hash_method: str

    session_file_dir: str

    # process / server
    port: int
    workers: int


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _getflag(name: str, default: str = "0") -> bool:
    return _getenv(name, default).lower() in ("1", "true", "yes", "on")


def _getint(name: str, default: str) -> int:
    raw = _getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Invalid {name} value '{raw}'. Must be an integer.") from None


def load_settings() -> Settings:
    return Settings(
        secret_key=_getenv("SECRET_KEY", "change-me"),
        env=_getenv("ENV", "development"),
        database_url=_getenv("DATABASE_URL", "sqlite:///users.db"),
        db_auto_create=_getflag("DB_AUTO_CREATE", "1"),
        login_generic_errors=_getflag("LOGIN_GENERIC_ERRORS", "0"),
        password_hash_method=_getenv("PASSWORD_HASH_METHOD", "scrypt"),
        session_file_dir=_getenv("SESSION_FILE_DIR", "flask_session"),
        port=_getint("PORT", "3000"),
        workers=_getint("WEB_CONCURRENCY", "1"),
    )


def load_config() -> dict:
    s = load_settings()
    is_production = s.env in ("prod", "production")
    return {
        "SECRET_KEY": s.secret_key,
        "ENV": s.env,
        "DATABASE_URL": s.database_url,
        "DB_AUTO_CREATE": s.db_auto_create,
        "LOGIN_GENERIC_ERRORS": s.login_generic_errors,
        "PASSWORD_HASH_METHOD": s.password_hash_method,
        # server-side sessions: the cookie carries only an opaque id
        "SESSION_TYPE": "cachelib",
        "SESSION_FILE_DIR": s.session_file_dir,
        "SESSION_PERMANENT": False,  # browser-session cookie
        # security defaults
        "SESSION_COOKIE_HTTPONLY": True,
        "SESSION_COOKIE_SAMESITE": "Lax",
        "SESSION_COOKIE_SECURE": is_production,  # Require HTTPS in production
        # pages are re-read from disk when edited
        "TEMPLATES_AUTO_RELOAD": True,
        # form posts only, no uploads
        "MAX_CONTENT_LENGTH": 1 * 1024 * 1024,
    }
