"""Adapters connecting the engine to HTTP, prometheus_client and logging."""
