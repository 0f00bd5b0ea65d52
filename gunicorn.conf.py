# gunicorn.conf.py
import os
import logging
import sys

# Application factory
wsgi_app = "app:create_app()"

# Configure logging to stdout
accesslog = '-'
errorlog = '-'
loglevel = 'info'

# Get PORT from environment or use default
port = os.getenv('PORT', '8080')
bind = f"0.0.0.0:{port}"

# One process owns the lookup state machine; its lock serializes mutations
# across the worker's threads.
workers = 1
threads = int(os.getenv('GUNICORN_THREADS', 4))

# Log configuration on startup
def on_starting(server):
    logger = logging.getLogger('gunicorn.error')
    logger.setLevel(logging.INFO)
    logger.addHandler(logging.StreamHandler(sys.stdout))
    logger.info(f"Starting gunicorn with {workers} worker and {threads} threads on port {port}")
    logger.info(f"Worker timeout set to {timeout} seconds")

# Must exceed the worst-case oracle dispatch: (retries + 1) * ORACLE_TIMEOUT plus backoff
timeout = 60
keepalive = 120
worker_class = "gthread"

# Process naming
proc_name = "verse_oracle"
default_proc_name = "verse_oracle"

# Graceful server restart
graceful_timeout = 30  # Give workers 30 seconds to finish serving requests
