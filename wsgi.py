"""WSGI entrypoint for Gunicorn.

Usage:
  gunicorn -w 1 -b 0.0.0.0:8000 wsgi:app

Keep a single worker when AUTO_CRAWL is on: each worker runs its own scheduler.
"""

from kqxs import create_app

app = create_app()
