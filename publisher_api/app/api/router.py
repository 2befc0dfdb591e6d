"""
Top-level API router.

Aggregates the domain routers under one router that ``create_app``
mounts at ``/api``.  Paths not registered here fall through to
FastAPI's default 404, whatever the ``Authorization`` header says.
"""

from fastapi import APIRouter

from .endpoints import auth, publishers


router = APIRouter()

# The auth router defines /signup and /signin itself, so no prefix here.
router.include_router(auth.router, tags=["auth"])
router.include_router(publishers.router, prefix="/publisher", tags=["publishers"])
