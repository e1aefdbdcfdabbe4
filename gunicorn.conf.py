"""
Gunicorn configuration for the Loyalty Points API.

    gunicorn -c gunicorn.conf.py run:app
"""
import os

bind = f"0.0.0.0:{os.getenv('PORT', '8080')}"

# Every request is a synchronous request/response cycle against the database
workers = int(os.getenv('GUNICORN_WORKERS', '2'))
worker_class = 'sync'
timeout = 30  # Store calls fail fast; a hung worker is killed
keepalive = 5

# Logging
accesslog = '-'  # stdout
errorlog = '-'   # stderr
loglevel = os.getenv('LOG_LEVEL', 'info')
capture_output = True

proc_name = 'loyalty-api'

preload_app = True

graceful_timeout = 30


def on_starting(server):
    print("[Gunicorn] Starting Loyalty API server...")


def on_exit(server):
    print("[Gunicorn] Loyalty API server shutting down...")
