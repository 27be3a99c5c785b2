"""Framework adapters: FastAPI routes and ASGI middleware."""
