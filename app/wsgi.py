"""
WSGI entry point.

gunicorn:   gunicorn app.wsgi:app
local dev:  python -m app.wsgi   (listens on $PORT, default 3000)
"""
import logging
import os

from app.aimarketer import create_app
from app.aimarketer.config import load_settings

logging.basicConfig(
    level=(os.environ.get("LOG_LEVEL") or "INFO").strip().upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()


if __name__ == "__main__":
    port = load_settings().port
    logging.getLogger(__name__).info("Server running at http://localhost:%s", port)
    app.run(host="0.0.0.0", port=port)
