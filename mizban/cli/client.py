"""
HTTP Client for CLI.

Performs authenticated calls against the MizbanCloud API and classifies
every outcome into either a decoded Envelope or a single MizbanError:

    401                 -> UnauthorizedError
    429                 -> RateLimitedError
    unparseable body    -> MalformedResponseError
    success=false       -> APIError (server message verbatim)
    network / timeout   -> TransportError
    bad URL / body      -> BuildError

No retries are performed. The client takes its token and base URL from the
Config object it is constructed with.
"""

from typing import Any, TypeVar, get_origin

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json

from mizban import __version__
from mizban.core.config import Config
from mizban.core.exceptions import (
    APIError,
    BuildError,
    DecodeError,
    MalformedResponseError,
    RateLimitedError,
    TransportError,
    UnauthorizedError,
)
from mizban.core.logging import get_logger, log_with_source
from mizban.schemas.base import STRICT_CONTEXT_KEY, Envelope, ErrorEnvelope

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0

T = TypeVar("T")


def _encode_body(body: Any) -> bytes | None:
    """Serialize a request body to JSON bytes."""
    if body is None:
        return None
    if isinstance(body, BaseModel):
        return body.model_dump_json(exclude_none=True, by_alias=True).encode("utf-8")
    return to_json(body)


class APIClient:
    """
    HTTP client for MizbanCloud API communication.

    Features:
    - Base URL and bearer token from the Config it is given
    - JSON request bodies from pydantic models or plain dicts
    - Uniform classification of failures into MizbanError subclasses
    - Structured logging of requests/responses (token never logged)

    Usage:
        with APIClient(config) as client:
            envelope = client.get("/v1/cloud/servers")
            servers = extract(envelope, list[Server])
    """

    def __init__(
        self,
        config: Config,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            config: Loaded CLI configuration (token and base URL).
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, used by tests.
        """
        self.config = config
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                timeout=self.timeout,
                follow_redirects=True,
                headers={"User-Agent": f"mizban-cli/{__version__}"},
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            self._client.close()
        self._client = None

    def __enter__(self) -> "APIClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        return headers

    def request(self, method: str, path: str, body: Any = None) -> Envelope:
        """
        Make an API request and unwrap the response envelope.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: API path appended verbatim to the base URL (e.g., /v1/cloud/servers)
            body: Optional pydantic model or JSON-serializable value

        Returns:
            The parsed Envelope with `data` left undecoded

        Raises:
            BuildError: If the URL or body is invalid
            TransportError: On network failure or timeout
            UnauthorizedError: On HTTP 401
            RateLimitedError: On HTTP 429
            MalformedResponseError: If the body is not an envelope
            APIError: If the envelope reports success=false
        """
        url = self.config.base_url + path
        client = self._get_client()

        try:
            content = _encode_body(body)
            request = client.build_request(method, url, content=content, headers=self._headers())
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise BuildError(f"error marshaling request body: {e}") from e
        except httpx.InvalidURL as e:
            raise BuildError(f"error creating request: {e}") from e

        log_with_source(
            logger,
            "api",
            "debug",
            "API request",
            method=method,
            path=path,
            authenticated="Authorization" in request.headers,
        )

        try:
            response = client.send(request)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                "api",
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise TransportError(f"error making request: {e}") from e

        raw = response.content

        log_with_source(
            logger,
            "api",
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
            size=len(raw),
        )

        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise UnauthorizedError()

        if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
            raise RateLimitedError()

        try:
            envelope = Envelope.model_validate_json(raw)
        except ValidationError as e:
            raise MalformedResponseError(f"error parsing response: {_first_error(e)}") from e

        if not envelope.success:
            raise APIError(
                envelope.message,
                errors=_field_errors(raw),
                status_code=response.status_code,
            )

        return envelope

    def get(self, path: str) -> Envelope:
        """Make a GET request."""
        return self.request("GET", path)

    def post(self, path: str, body: Any = None) -> Envelope:
        """Make a POST request."""
        return self.request("POST", path, body)

    def put(self, path: str, body: Any = None) -> Envelope:
        """Make a PUT request."""
        return self.request("PUT", path, body)

    def delete(self, path: str) -> Envelope:
        """Make a DELETE request."""
        return self.request("DELETE", path)


def extract(envelope: Envelope, target: type[T], strict: bool = False) -> T:
    """
    Decode an envelope's data into the requested shape.

    Args:
        envelope: Envelope returned by APIClient
        target: A model class or any type pydantic can validate (list[Server], dict[str, Any], ...)
        strict: Make tolerant fields raise on unrecognized input instead of defaulting

    A null `data` decodes to the empty value of the target: [] for list
    targets, an all-defaults model, or {} for dicts.

    Raises:
        DecodeError: If the data does not match the target shape
    """
    data = envelope.data
    if data is None:
        data = _empty_value(target)

    adapter: TypeAdapter[T] = TypeAdapter(target)
    try:
        return adapter.validate_python(
            data,
            context={STRICT_CONTEXT_KEY: strict},
        )
    except ValidationError as e:
        raise DecodeError(f"error parsing data: {_first_error(e)}") from e


def _empty_value(target: Any) -> Any:
    origin = get_origin(target) or target
    if origin in (list, tuple, set, frozenset):
        return []
    if origin is dict or (isinstance(origin, type) and issubclass(origin, BaseModel)):
        return {}
    return None


def _field_errors(raw: bytes) -> dict[str, Any]:
    try:
        return ErrorEnvelope.model_validate_json(raw).errors
    except ValidationError:
        return {}


def _first_error(exc: ValidationError) -> str:
    """Condense a pydantic ValidationError into one readable line."""
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    extra = f" (+{len(errors) - 1} more)" if len(errors) > 1 else ""
    return f"{location}: {message}{extra}" if location else f"{message}{extra}"
