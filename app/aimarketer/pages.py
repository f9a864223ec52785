"""
Page rendering with the session-aware navigation fragment.

Every public page extends base.html, which renders `nav_items` into the navbar slot.
Jinja autoescaping covers the username shown in the welcome label.
"""
from __future__ import annotations

from dataclasses import dataclass

from flask import g, render_template

from app.aimarketer.models import ROLE_ADMIN


@dataclass(frozen=True)
class NavItem:
    label: str
    href: str | None = None  # None renders a plain label
    css: str = ""


def build_nav(username: str | None, role: str | None = None) -> list[NavItem]:
    """Navigation for the current session: login/register when anonymous, welcome/logout otherwise."""
    if not username:
        return [
            NavItem("Login", "/login", "text-primary"),
            NavItem("Register", "/register", "text-secondary"),
        ]
    items = [NavItem(f"Welcome, {username}", None, "text-success")]
    if role == ROLE_ADMIN:
        items.append(NavItem("Feedback Summary", "/feedback-summary", "text-warning"))
    items.append(NavItem("Logout", "/logout", "text-danger"))
    return items


def render_page(template: str, **context) -> str:
    user = getattr(g, "current_user", None) or {}
    nav = build_nav(user.get("username"), user.get("role"))
    return render_template(template, nav_items=nav, **context)


def render_result(message: str, link_href: str, link_label: str, *, error: bool = False) -> str:
    """Short HTML fragment answering a form post (message plus one follow-up link)."""
    return render_template(
        "partials/result.html",
        message=message,
        link_href=link_href,
        link_label=link_label,
        error=error,
    )
