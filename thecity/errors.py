"""Custom exception hierarchy for The City API errors."""

from __future__ import annotations

import sys
from typing import Any, ClassVar, Iterable, Mapping

from thecity.base import is_present
from thecity.rate_limit import RateLimit
from thecity.response import body_of, headers_of, status_of


class CityError(Exception):
    """Base exception for The City client failures.

    Carries the API message, the optional application error ``code``, the
    rate-limit snapshot taken from the response headers and the value the
    error was built from (``wrapped_exception``).
    """

    HTTP_STATUS_CODE: ClassVar[int | None] = None

    def __init__(
        self,
        exception: BaseException | str | None = None,
        response_headers: Mapping[str, Any] | None = None,
        code: int | None = None,
    ) -> None:
        if exception is None:
            exception = sys.exc_info()[1]
        self.wrapped_exception = exception
        self.rate_limit = RateLimit(response_headers or {})
        self.code = code
        self.message = _message_of(exception)
        super().__init__(self.message)

    @classmethod
    def from_response(cls, response: Any) -> CityError:
        """Create an error from a response's body and headers."""
        message, code = parse_error(body_of(response))
        return cls(message, headers_of(response), code)

    @classmethod
    def errors(cls) -> dict[int, type[CityError]]:
        """Return the status code to error type registry."""
        return dict(_REGISTRY)


class ConfigurationError(CityError, ValueError):
    """Raised when client configuration values are invalid."""


class DecodeError(CityError):
    """Raised when a response body cannot be decoded."""


class TransportError(CityError):
    """Raised when network or protocol-level failures occur."""


class ClientError(CityError):
    """Raised for 4xx responses."""


class BadRequest(ClientError):
    HTTP_STATUS_CODE = 400


class Unauthorized(ClientError):
    HTTP_STATUS_CODE = 401


class Forbidden(ClientError):
    HTTP_STATUS_CODE = 403


class NotFound(ClientError):
    HTTP_STATUS_CODE = 404


class NotAcceptable(ClientError):
    HTTP_STATUS_CODE = 406


class UnprocessableEntity(ClientError):
    HTTP_STATUS_CODE = 422


class TooManyRequests(ClientError):
    """Raised when the API rate limit is exceeded."""

    HTTP_STATUS_CODE = 429


class ServerError(CityError):
    """Raised for 5xx responses."""


class InternalServerError(ServerError):
    HTTP_STATUS_CODE = 500


class BadGateway(ServerError):
    HTTP_STATUS_CODE = 502


class ServiceUnavailable(ServerError):
    HTTP_STATUS_CODE = 503


class GatewayTimeout(ServerError):
    HTTP_STATUS_CODE = 504


HTTP_ERRORS: tuple[type[CityError], ...] = (
    BadRequest,
    Unauthorized,
    Forbidden,
    NotFound,
    NotAcceptable,
    UnprocessableEntity,
    TooManyRequests,
    InternalServerError,
    BadGateway,
    ServiceUnavailable,
    GatewayTimeout,
)


def build_registry(error_types: Iterable[type[CityError]]) -> dict[int, type[CityError]]:
    """Map each type's ``HTTP_STATUS_CODE`` to the type.

    Raises:
        TypeError: If a type has no status code or two types share one.
    """
    registry: dict[int, type[CityError]] = {}
    for error_type in error_types:
        status = error_type.HTTP_STATUS_CODE
        if status is None:
            raise TypeError(f'{error_type.__name__} does not define HTTP_STATUS_CODE')
        if status in registry:
            raise TypeError(
                f'{error_type.__name__} and {registry[status].__name__} '
                f'both claim status {status}'
            )
        registry[status] = error_type
    return registry


_REGISTRY = build_registry(HTTP_ERRORS)


def error_for_status(status: int) -> type[CityError] | None:
    """Return the error type for an HTTP status, ``None`` for non-error statuses."""
    error_type = _REGISTRY.get(status)
    if error_type is not None:
        return error_type
    if 400 <= status < 500:
        return ClientError
    if 500 <= status < 600:
        return ServerError
    return None


def error_from_response(response: Any) -> CityError | None:
    """Classify a response, returning ``None`` when it is not an error."""
    status = status_of(response)
    if status is None:
        return None
    error_type = error_for_status(status)
    if error_type is None:
        return None
    return error_type.from_response(response)


def parse_error(body: Any) -> tuple[str, int | None]:
    """Extract ``(message, code)`` from an error body, never raising."""
    if not isinstance(body, Mapping):
        return '', None
    error = body.get('error')
    if is_present(error):
        return str(error), None
    errors = body.get('errors')
    if not is_present(errors):
        return '', None
    if not isinstance(errors, (list, tuple)):
        errors = [errors]
    first = errors[0] if errors else None
    if isinstance(first, Mapping):
        message = first.get('message')
        return _chomp('' if message is None else str(message)), first.get('code')
    if first is None:
        return '', None
    return _chomp(str(first)), None


def _chomp(text: str) -> str:
    if text.endswith('\r\n'):
        return text[:-2]
    if text.endswith(('\n', '\r')):
        return text[:-1]
    return text


def _message_of(exception: BaseException | str | None) -> str:
    if exception is None:
        return ''
    message = getattr(exception, 'message', None)
    if isinstance(message, str):
        return message
    return str(exception)
