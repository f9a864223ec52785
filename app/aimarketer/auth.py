from __future__ import annotations

import uuid

from flask import Blueprint, current_app, g, redirect, request, session, url_for
from sqlalchemy.exc import SQLAlchemyError

from app.aimarketer.db import db_session
from app.aimarketer.pages import render_page, render_result
from app.aimarketer.users import InvalidCredentials, RegistrationError, UserNotFound, authenticate, create_user

bp = Blueprint("auth", __name__)


def load_current_user() -> None:
    """
    Loads g.current_user (username/role) from the signed session cookie.
    Also assigns a simple per-request request_id (for log correlation).
    """
    if not getattr(g, "request_id", None):
        g.request_id = uuid.uuid4().hex
    if request.path.startswith(("/static/", "/healthz")):
        g.current_user = None
        return

    username = session.get("username")
    if not username:
        g.current_user = None
        return
    g.current_user = {"username": username, "role": session.get("role")}


@bp.get("/register")
def register_get():
    return render_page("auth/register.html")


@bp.post("/register")
def register_post():
    username = request.form.get("username") or ""
    password = request.form.get("password") or ""

    try:
        create_user(db_session(), username, password)
    except RegistrationError:
        return render_result("Username taken or error occurred.", url_for("auth.register_get"), "Try Again", error=True)

    current_app.logger.info("Registered user %r (request_id=%s)", username, getattr(g, "request_id", None))
    return render_result("Registration successful!", url_for("auth.login_get"), "Go to Login")


@bp.get("/login")
def login_get():
    return render_page("auth/login.html")


@bp.post("/login")
def login_post():
    username = request.form.get("username") or ""
    password = request.form.get("password") or ""
    retry = url_for("auth.login_get")

    try:
        user = authenticate(db_session(), username, password)
    except UserNotFound:
        if current_app.config.get("LOGIN_GENERIC_ERRORS"):
            return render_result("Invalid credentials.", retry, "Try Again", error=True)
        return render_result("User not found.", retry, "Try Again")
    except InvalidCredentials:
        return render_result("Invalid credentials.", retry, "Try Again", error=True)
    except SQLAlchemyError as e:
        current_app.logger.error("Login lookup failed (request_id=%s): %s", getattr(g, "request_id", None), e)
        return render_result("Database error.", retry, "Try Again", error=True)
    except ValueError as e:
        # Unparseable stored hash or unknown hash method.
        current_app.logger.error("Password comparison failed for %r: %s", username, e)
        return render_result("Error comparing passwords.", retry, "Try Again", error=True)

    session.clear()
    session["username"] = user.username
    session["role"] = user.role
    # Fresh id at login so a pre-login id cannot be reused.
    current_app.session_interface.regenerate(session)
    current_app.logger.info("Login ok for %r role=%s", user.username, user.role)
    return redirect(url_for("routes.index"))


@bp.get("/logout")
def logout():
    username = session.get("username")
    # Emptied server-side session: the stored record is deleted and the cookie expired.
    session.clear()
    if username:
        current_app.logger.info("Logout for %r", username)
    return redirect(url_for("routes.index"))
