"""ASGI application (FastAPI) and exception handlers."""
