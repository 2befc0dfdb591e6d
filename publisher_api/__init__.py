"""
Top-level package for the Publisher API.

The server lives in ``publisher_api.app`` (``publisher_api.app.main:app``
for ASGI servers, ``create_app`` to build a configured instance) and a
``requests``-based client in ``publisher_api.client``.
"""

__all__ = []
