from __future__ import annotations

from typing import TYPE_CHECKING

from app.aimarketer.modules.feedback.models import Feedback

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


REQUIRED_FIELDS = ("name", "email", "phone", "query")


class FeedbackValidationError(ValueError):
    def __init__(self, missing: list[str]):
        super().__init__(f"Missing required fields: {', '.join(missing)}")
        self.missing = missing


def validate_feedback_payload(payload: dict) -> list[str]:
    """Returns the required fields that are absent or blank. Email/phone shape is not checked."""
    return [f for f in REQUIRED_FIELDS if not (payload.get(f) or "").strip()]


def create_feedback(s: "Session", payload: dict) -> Feedback:
    """Insert one row with the submitted values as-is. Caller commits."""
    missing = validate_feedback_payload(payload)
    if missing:
        raise FeedbackValidationError(missing)
    fb = Feedback(
        name=payload["name"],
        email=payload["email"],
        phone=payload["phone"],
        query=payload["query"],
    )
    s.add(fb)
    s.flush()
    return fb


def list_feedback(s: "Session") -> list[Feedback]:
    return s.query(Feedback).order_by(Feedback.id.asc()).all()
