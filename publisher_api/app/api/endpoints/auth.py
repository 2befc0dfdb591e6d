"""
Account endpoints.

``POST /signup`` registers a user and answers with a bearer token as
plain text.  ``GET /signin`` exchanges HTTP Basic credentials of an
existing user for a fresh token.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import PlainTextResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from publisher_api.app.core.context import AppContext, get_context
from publisher_api.app.core.errors import AuthError
from publisher_api.app.core.security import create_access_token
from publisher_api.app.core.validation import require_valid
from publisher_api.app.schemas.user import UserCreate
from publisher_api.app.services.user_service import UserService


logger = logging.getLogger(__name__)

router = APIRouter()

basic_auth = HTTPBasic(auto_error=False)


@router.post("/signup", response_class=PlainTextResponse)
async def signup(
    payload: Any = Body(None),
    context: AppContext = Depends(get_context),
) -> str:
    """Register a new user and return a bearer token.

    ``username``, ``password`` and ``email`` are all required; a
    missing one answers 400 with an empty body and creates nothing.
    A taken username answers 409.
    """
    data = require_valid(UserCreate, payload)
    user = await UserService(context.db).create_user(data)
    return create_access_token({"sub": user.id}, context.settings)


@router.get("/signin", response_class=PlainTextResponse)
async def signin(
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_auth),
    context: AppContext = Depends(get_context),
) -> str:
    """Return a new bearer token for valid Basic credentials."""
    if credentials is None:
        raise AuthError("Not authenticated")
    user = await UserService(context.db).authenticate(credentials.username, credentials.password)
    if not user:
        raise AuthError("Invalid credentials")
    logger.info("User %s signed in", user.username)
    return create_access_token({"sub": user.id}, context.settings)
