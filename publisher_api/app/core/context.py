"""
Application context shared with request handlers.

``create_app`` builds one ``AppContext`` holding the settings and the
database handle and stores it on ``app.state``.  Handlers obtain it
through the ``get_context`` dependency rather than importing
module-level singletons, which keeps several independently configured
applications (one per test, for instance) from interfering.
"""

from dataclasses import dataclass

from fastapi import Request

from .config import Settings
from .db import Database


@dataclass
class AppContext:
    settings: Settings
    db: Database


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context of the running application."""
    return request.app.state.context
