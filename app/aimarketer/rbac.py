from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import current_app, g, request

from app.aimarketer.models import ROLE_ADMIN


def user_has_role(user: dict | None, role: str) -> bool:
    """Uses the role copied into the session at login; it is not re-read from users."""
    if not user:
        return False
    return user.get("role") == role


def require_role(role: str = ROLE_ADMIN) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(fn)
        def wrapped(*args: Any, **kwargs: Any):
            user = getattr(g, "current_user", None)
            # Anonymous and under-privileged sessions get the same bare 403, no redirect.
            if not user_has_role(user, role):
                current_app.logger.warning(
                    "Forbidden: path=%s required_role=%s session_role=%s request_id=%s",
                    request.path,
                    role,
                    user.get("role") if user else None,
                    getattr(g, "request_id", None),
                )
                return "Access denied", 403, {"Content-Type": "text/plain; charset=utf-8"}
            return fn(*args, **kwargs)

        return wrapped

    return decorator
