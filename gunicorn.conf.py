"""Gunicorn configuration for the ASGI app (`gunicorn app.main:app`)."""

import os

worker_class = "uvicorn.workers.UvicornWorker"

bind = f"0.0.0.0:{os.getenv('PORT', '8000')}"

workers = int(os.getenv("WEB_CONCURRENCY", "2"))
timeout = int(os.getenv("GUNICORN_TIMEOUT", "60"))
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", "30"))

# Application logs are JSON on stdout; see app.core.logging
accesslog = None
errorlog = "-"
