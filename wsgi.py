"""WSGI entrypoint for Gunicorn.

Usage:
  gunicorn -w 1 --threads 4 -b 0.0.0.0:8000 wsgi:app

The per-game locks live in process memory, so run a single worker process.
"""

from bingo import create_app

app = create_app()
