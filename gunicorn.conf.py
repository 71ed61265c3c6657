"""Gunicorn config for container deployment."""
import os

# Bind to the platform's PORT or default 8000
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# The uploaded dataset lives in process memory, so every worker holds its own.
# Keep a single worker unless uploads are routed with sticky sessions.
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "1"))

# Large workbooks take a while to parse
timeout = 120

graceful_timeout = 30

# Keep-alive must exceed the proxy keep-alive (commonly 60s)
keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("MERCHANT_SUMMARY_LOG_LEVEL", "info").lower()
