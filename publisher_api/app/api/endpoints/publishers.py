"""
Publisher endpoints.

Every route depends on ``get_current_user``, so a request without a
valid bearer token is answered with 401 before its body is looked at.
The body is read only after that check and validated with
``require_valid`` before the service is called; a body missing
``name`` or ``desc`` answers 400 with an empty response and leaves
storage untouched.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request, Response, status

from publisher_api.app.core.context import AppContext, get_context
from publisher_api.app.core.security import get_current_user
from publisher_api.app.core.validation import read_json_body, require_valid
from publisher_api.app.schemas.publisher import PublisherCreate, PublisherRead, PublisherUpdate
from publisher_api.app.services.publisher_service import PublisherService


router = APIRouter()


def get_publisher_service(context: AppContext = Depends(get_context)) -> PublisherService:
    return PublisherService(context.db, enforce_ownership=context.settings.enforce_ownership)


@router.post("", response_model=PublisherRead)
async def create_publisher(
    request: Request,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: PublisherService = Depends(get_publisher_service),
) -> PublisherRead:
    """Create a publisher owned by the caller.

    A ``userID`` sent in the body is ignored.
    """
    data = require_valid(PublisherCreate, await read_json_body(request))
    return await service.create_publisher(data, current_user["user_id"])


@router.get("", response_model=List[PublisherRead])
async def list_publishers(
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: PublisherService = Depends(get_publisher_service),
) -> List[PublisherRead]:
    """List the caller's own publishers."""
    return await service.list_publishers(current_user["user_id"])


@router.get("/{publisher_id}", response_model=PublisherRead)
async def get_publisher(
    publisher_id: str,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: PublisherService = Depends(get_publisher_service),
) -> PublisherRead:
    return await service.get_publisher(publisher_id, current_user["user_id"])


@router.put("/{publisher_id}", response_model=PublisherRead)
async def update_publisher(
    publisher_id: str,
    request: Request,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: PublisherService = Depends(get_publisher_service),
) -> PublisherRead:
    """Replace ``name`` and ``desc`` of a publisher.

    Both fields are required.  ``created`` and ``userID`` never change.
    """
    data = require_valid(PublisherUpdate, await read_json_body(request))
    return await service.update_publisher(publisher_id, data, current_user["user_id"])


@router.delete("/{publisher_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_publisher(
    publisher_id: str,
    current_user: Dict[str, Any] = Depends(get_current_user),
    service: PublisherService = Depends(get_publisher_service),
) -> Response:
    await service.delete_publisher(publisher_id, current_user["user_id"])
    return Response(status_code=status.HTTP_204_NO_CONTENT)
