"""Body validation results."""

import pytest

from publisher_api.app.core.errors import ValidationError
from publisher_api.app.core.validation import require_valid, validate_payload
from publisher_api.app.schemas.publisher import PublisherCreate
from publisher_api.app.schemas.user import UserCreate


def test_valid_payload_is_ok():
    result = validate_payload(PublisherCreate, {"name": "n", "desc": "d", "extra": 1})
    assert result.ok
    assert result.value.name == "n"
    assert result.errors == []


def test_missing_field_is_reported():
    result = validate_payload(PublisherCreate, {"name": "n"})
    assert not result.ok
    assert result.value is None
    assert [e["loc"] for e in result.errors] == [("desc",)]


@pytest.mark.parametrize("payload", [None, [], "text", 3])
def test_non_object_payload_is_not_ok(payload):
    result = validate_payload(UserCreate, payload)
    assert not result.ok
    assert result.errors


def test_require_valid_raises_validation_error():
    with pytest.raises(ValidationError) as excinfo:
        require_valid(UserCreate, {"username": "invaliduser"})
    assert excinfo.value.status_code == 400
    assert {e["loc"][0] for e in excinfo.value.errors} == {"password", "email"}
