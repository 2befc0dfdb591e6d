"""
Application package.

``main`` assembles the FastAPI application; ``core`` holds
configuration, storage, security and error mapping; ``schemas`` the
pydantic payload models; ``services`` the business logic; and ``api``
the routers mounted under ``/api``.
"""

from .main import app, create_app  # noqa: F401
