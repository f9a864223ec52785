from __future__ import annotations

from flask import Blueprint, current_app, g, render_template, request, url_for
from sqlalchemy.exc import SQLAlchemyError

from app.aimarketer.db import db_session
from app.aimarketer.modules.feedback.service import (
    REQUIRED_FIELDS,
    FeedbackValidationError,
    create_feedback,
    list_feedback,
)
from app.aimarketer.pages import render_page, render_result
from app.aimarketer.rbac import require_role

bp = Blueprint("feedback", __name__)


# ---------- Form ----------
@bp.get("/feedback")
def feedback_get():
    return render_page("feedback/form.html")


@bp.post("/feedback")
def feedback_post():
    s = db_session()
    payload = {f: request.form.get(f) for f in REQUIRED_FIELDS}

    try:
        fb = create_feedback(s, payload)
        s.commit()
    except FeedbackValidationError:
        return render_result("All fields are required.", url_for("feedback.feedback_get"), "Go back", error=True)
    except SQLAlchemyError as e:
        s.rollback()
        current_app.logger.error("Error inserting feedback (request_id=%s): %s", getattr(g, "request_id", None), e)
        return "An error occurred while saving your feedback."

    current_app.logger.info("Feedback #%s stored", fb.id)
    return render_result("Thank you for your feedback!", url_for("routes.index"), "Return Home")


# ---------- Summary (admin) ----------
@bp.get("/feedback-summary")
@require_role("admin")
def feedback_summary():
    try:
        rows = list_feedback(db_session())
    except SQLAlchemyError as e:
        current_app.logger.error("DB error retrieving feedback: %s", e)
        return "Error retrieving feedback"
    return render_template("feedback/summary.html", rows=rows)
