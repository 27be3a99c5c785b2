"""Adapters connecting the core domain to SQLite, ASGI and logging."""
