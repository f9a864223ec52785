from flask import Blueprint

from app.aimarketer.pages import render_page

bp = Blueprint("routes", __name__)


@bp.get("/")
def index():
    return render_page("public/index.html")


@bp.get("/products")
def products():
    return render_page("public/products.html")


@bp.get("/healthz")
def healthz():
    """
    Liveness check. No DB or session access, so it answers while the store is down.
    """
    return "ok", 200, {"Content-Type": "text/plain; charset=utf-8"}
