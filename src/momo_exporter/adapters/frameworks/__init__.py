"""Serving boundary adapters (ASGI, FastAPI)."""
