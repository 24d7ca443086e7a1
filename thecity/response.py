"""Transport-neutral view of an HTTP response."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx


@dataclass(slots=True)
class Response:
    """Status, parsed body and headers of one API response.

    Entities and errors are built from this shape. Plain mappings with
    ``status``/``body``/``response_headers`` keys are accepted wherever a
    ``Response`` is.
    """

    status: int
    body: Any = None
    headers: httpx.Headers = field(default_factory=httpx.Headers)

    @property
    def response_headers(self) -> httpx.Headers:
        return self.headers

    @property
    def is_error(self) -> bool:
        return self.status >= 400

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> Response:
        """Adapt an ``httpx.Response``, decoding JSON bodies.

        Raises:
            ValueError: If the response claims JSON but the body is not valid JSON.
        """
        body: Any = None
        if response.content:
            content_type = response.headers.get('Content-Type', '')
            if 'json' in content_type:
                body = response.json()
            else:
                body = response.text
        return cls(status=response.status_code, body=body, headers=response.headers)


def body_of(response: Any) -> Any:
    if isinstance(response, Mapping):
        return response.get('body')
    return getattr(response, 'body', None)


def headers_of(response: Any) -> Mapping[str, Any]:
    if isinstance(response, Mapping):
        headers = response.get('response_headers', response.get('headers'))
    else:
        headers = getattr(response, 'headers', None)
    return headers or {}


def status_of(response: Any) -> int | None:
    if isinstance(response, Mapping):
        return response.get('status')
    return getattr(response, 'status', None)
