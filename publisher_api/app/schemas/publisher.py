"""
Pydantic models for publisher data.

``PublisherCreate`` and ``PublisherUpdate`` both require ``name`` and
``desc``; an update replaces both fields at once.  Any ``userID`` in a
request body is ignored, the owner always comes from the
authenticated caller.  ``PublisherRead`` is the JSON shape returned
by every publisher route.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class PublisherBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["test publisher"])
    desc: str = Field(..., min_length=1, examples=["test publisher description"])


class PublisherCreate(PublisherBase):
    pass


class PublisherUpdate(PublisherBase):
    pass


class PublisherRead(PublisherBase):
    """Schema for reading a publisher from the API."""

    id: str
    user_id: str = Field(..., alias="userID")
    created: datetime

    # Services build instances with ``user_id=``; the API reads and
    # writes ``userID``.
    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }
