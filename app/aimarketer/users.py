from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.aimarketer.models import ROLE_ADMIN, ROLE_USER, User
from app.aimarketer.security import hash_password, verify_password

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class RegistrationError(Exception):
    """Username taken, empty input or store failure. Deliberately not distinguished."""


class AuthError(Exception):
    pass


class UserNotFound(AuthError):
    pass


class InvalidCredentials(AuthError):
    pass


def create_user(s: "Session", username: str, password: str, role: str = ROLE_USER) -> User:
    """
    Blind insert: the unique constraint settles duplicate and concurrent registrations.
    Commits on success, rolls back and raises RegistrationError otherwise.
    """
    if not username or not password:
        raise RegistrationError("username and password are required")

    try:
        password_hash = hash_password(password)
    except ValueError as e:
        # Unknown PASSWORD_HASH_METHOD.
        logger.error("Password hashing failed for username=%r: %s", username, e)
        raise RegistrationError("hashing error") from e

    user = User(username=username, password_hash=password_hash, role=role)
    s.add(user)
    try:
        s.commit()
    except IntegrityError as e:
        s.rollback()
        logger.info("Registration rejected for username=%r: %s", username, e.orig)
        raise RegistrationError("username taken") from e
    except SQLAlchemyError as e:
        s.rollback()
        logger.error("Registration insert failed for username=%r: %s", username, e)
        raise RegistrationError("store error") from e
    return user


def get_user(s: "Session", username: str) -> User | None:
    return s.query(User).filter(User.username == username).one_or_none()


def authenticate(s: "Session", username: str, password: str) -> User:
    """
    Exact-match lookup plus hash verification.
    Raises UserNotFound / InvalidCredentials; store errors propagate as SQLAlchemyError.
    """
    user = get_user(s, username)
    if user is None:
        raise UserNotFound(username)
    if not verify_password(user.password_hash, password):
        raise InvalidCredentials(username)
    return user


def ensure_admin(s: "Session", username: str, password: str) -> bool:
    """
    Seed an admin account if the username is free. Never overwrites an existing row.
    Returns True when a row was created. Caller commits.
    """
    if get_user(s, username) is not None:
        logger.info("Admin user %r already exists.", username)
        return False
    s.add(User(username=username, password_hash=hash_password(password), role=ROLE_ADMIN))
    s.flush()
    logger.info("Admin user %r created.", username)
    return True
