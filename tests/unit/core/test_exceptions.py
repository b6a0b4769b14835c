"""Unit tests for the exception hierarchy."""

import pytest

from mizban.core.exceptions import (
    APIError,
    BuildError,
    ConfigError,
    DecodeError,
    InvalidInputError,
    MalformedResponseError,
    MizbanError,
    RateLimitedError,
    TransportError,
    UnauthorizedError,
)


@pytest.mark.parametrize(
    ("exc_class", "code"),
    [
        (BuildError, "REQ_BUILD_FAILED"),
        (TransportError, "NET_TRANSPORT_ERROR"),
        (UnauthorizedError, "AUTH_UNAUTHORIZED"),
        (RateLimitedError, "RATE_LIMITED"),
        (MalformedResponseError, "RESP_MALFORMED"),
        (DecodeError, "RESP_DECODE_ERROR"),
        (ConfigError, "CFG_ERROR"),
        (InvalidInputError, "VAL_INVALID_INPUT"),
    ],
)
def test_error_codes(exc_class: type[MizbanError], code: str):
    exc = exc_class()
    assert isinstance(exc, MizbanError)
    assert exc.code == code
    assert str(exc) == exc.message


def test_unauthorized_message_points_to_login():
    assert UnauthorizedError().message == "unauthorized: please login again using 'mizban login'"


def test_rate_limited_message():
    assert RateLimitedError().message == "rate limited: please wait and try again"


def test_api_error_keeps_server_message_and_field_errors():
    exc = APIError("Domain already exists", errors={"domain": ["taken"]}, status_code=422)
    assert exc.message == "Domain already exists"
    assert exc.errors == {"domain": ["taken"]}
    assert exc.status_code == 422
    assert exc.code == "API_ERROR"


def test_api_error_defaults_to_no_field_errors():
    assert APIError("nope").errors == {}
