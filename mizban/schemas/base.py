"""
Base Schemas.

The response envelope every MizbanCloud endpoint returns, the base classes
for resource and request-body models, and the tolerant field types used to
absorb inconsistent encodings from the upstream API.
"""

from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

STRICT_CONTEXT_KEY = "strict_tolerant"
"""
Validation context key. When set to True, TolerantBool and TolerantString
raise on values they would otherwise silently default.
"""

_TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def _strict(info: ValidationInfo) -> bool:
    return bool(info.context and info.context.get(STRICT_CONTEXT_KEY))


def _to_bool(value: Any, info: ValidationInfo) -> bool:
    """
    Decode a boolean sent as true/false, 0/1 or a boolean string.

    Numbers are true when nonzero. Strings accept 1/t/T/TRUE/true/True and
    0/f/F/FALSE/false/False. null and anything unrecognized decode to False.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if value is None:
        return False
    if isinstance(value, str):
        if value in _TRUE_STRINGS:
            return True
        if value in _FALSE_STRINGS:
            return False
    if _strict(info):
        raise ValueError(f"cannot interpret {value!r} as a boolean")
    return False


def _to_str(value: Any, info: ValidationInfo) -> str:
    """
    Decode a string sent either bare or as an array of strings.

    Arrays of strings yield their first element, or "" when empty. null
    array elements count as "". null and anything unrecognized decode to "".
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, list) and all(item is None or isinstance(item, str) for item in value):
        return (value[0] or "") if value else ""
    if _strict(info):
        raise ValueError(f"cannot interpret {value!r} as a string")
    return ""


TolerantBool = Annotated[bool, BeforeValidator(_to_bool)]
"""Boolean that also accepts 0/1 and boolean strings. Serializes as a JSON bool."""

TolerantString = Annotated[str, BeforeValidator(_to_str)]
"""String that also accepts a one-element string array. Serializes as a JSON string."""


class Envelope(BaseModel):
    """
    Standard API response envelope.

    success response: {"success": true,  "message": str, "data": <any>}
    error response:   {"success": false, "message": str, "errors"?: {...}}

    `data` is kept as opaque JSON; decode it with `extract`.
    """

    success: bool = False
    message: str = ""
    data: Any = None

    model_config = ConfigDict(strict=True)

    @field_validator("success", mode="before")
    @classmethod
    def _null_success(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("message", mode="before")
    @classmethod
    def _null_message(cls, value: Any) -> Any:
        return "" if value is None else value


class ErrorEnvelope(BaseModel):
    """Error response with optional field-level validation reasons."""

    success: bool = False
    message: str = ""
    errors: dict[str, Any] = Field(default_factory=dict)


class Resource(BaseModel):
    """
    Base for decoded API resources.

    Unknown fields are ignored and JSON null leaves a field at its default,
    so partially populated records still decode.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class RequestBody(BaseModel):
    """
    Base for JSON request bodies.

    Fields left as None are omitted from the request instead of being sent
    as null.
    """

    model_config = ConfigDict(populate_by_name=True)


class EnabledRequest(RequestBody):
    """Body for the many on/off toggle endpoints."""

    enabled: bool
