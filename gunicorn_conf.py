import os

bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
# The operator session, page caches and notifications live in the worker process,
# so more than one worker means more than one independent console
workers = int(os.getenv("WEB_CONCURRENCY", 1))
worker_class = "uvicorn.workers.UvicornWorker"
proc_name = "propconnect-admin"
timeout = int(os.getenv("GUNICORN_TIMEOUT", 30))
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", 30))
keepalive = int(os.getenv("GUNICORN_KEEPALIVE", 5))

loglevel = os.getenv("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
