"""Gunicorn configuration for production deployment."""

import multiprocessing
import os

bind = os.environ.get('GUNICORN_BIND', '0.0.0.0:8000')

# Requests only compute over the posted reservations, so sync workers
# bound to the CPU count are enough.
workers = int(os.environ.get('GUNICORN_WORKERS', multiprocessing.cpu_count() * 2 + 1))
worker_class = 'sync'

timeout = 30
graceful_timeout = 30
keepalive = 5

# Same directory as the application log (LOG_DIR)
_log_dir = os.environ.get('LOG_DIR') or 'logs'
os.makedirs(_log_dir, exist_ok=True)
accesslog = os.path.join(_log_dir, 'gunicorn-access.log')
errorlog = os.path.join(_log_dir, 'gunicorn-error.log')
loglevel = 'info'

proc_name = 'lodgedesk'
preload_app = True

max_requests = 1000
max_requests_jitter = 50

limit_request_line = 8190
limit_request_fields = 100
limit_request_field_size = 8190
