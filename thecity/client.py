"""Async HTTP client for The City API."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any, Mapping, TypeVar

import httpx

from thecity.base import Base
from thecity.config import Config
from thecity.errors import (
    CityError,
    DecodeError,
    TooManyRequests,
    TransportError,
    error_from_response,
)
from thecity.response import Response

logger = logging.getLogger(__name__)

EntityT = TypeVar('EntityT', bound=Base)


class CityClient:
    """Async HTTP client for The City API.

    Failed responses are classified into :class:`thecity.errors.CityError`
    subtypes by status code. Rate-limited and network failures are retried
    with exponential backoff; everything else fails immediately.

    Example:
        >>> client = CityClient(Config.from_env())
        >>> group = await client.get_entity('/groups/42', Group)
        >>> if group.has_profile_pic_uri():
        >>>     print(group.profile_pic_uri.host)
    """

    def __init__(
        self,
        config: Config,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport

    @property
    def config(self) -> Config:
        return self._config

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> Response:
        return await self.request('GET', path, params=params)

    async def post(self, path: str, body: Mapping[str, Any] | None = None) -> Response:
        return await self.request('POST', path, json=body)

    async def get_entity(
        self,
        path: str,
        entity: type[EntityT],
        params: Mapping[str, Any] | None = None,
    ) -> EntityT:
        """Fetch ``path`` and wrap its body in ``entity``.

        The built entity keeps a reference to this client as ``entity.client``.
        """
        response = await self.get(path, params)
        return entity.from_response(response, {'client': self})

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Response:
        """Make an HTTP request with exponential backoff retry logic.

        Raises:
            TooManyRequests: Still rate limited after all retries.
            TransportError: Network or HTTP protocol errors.
            DecodeError: The response body is not valid JSON.
            CityError: The API answered with any other error status.
        """
        last_exception: CityError | None = None

        for attempt in range(self._config.max_retries + 1):
            try:
                response = await self._send(method, path, params=params, json=json)
            except (httpx.ConnectError, httpx.TimeoutException) as exc:
                last_exception = TransportError(exc)
                if attempt < self._config.max_retries:
                    delay = self._calculate_backoff_delay(attempt)
                    logger.warning('%s %s failed (%s), retrying in %.2fs', method, path, exc, delay)
                    await asyncio.sleep(delay)
                    continue
                raise last_exception from exc
            except httpx.HTTPError as exc:
                raise TransportError(exc) from exc

            error = error_from_response(response)
            if error is None:
                return response
            if isinstance(error, TooManyRequests) and attempt < self._config.max_retries:
                last_exception = error
                delay = self._calculate_backoff_delay(attempt, error.rate_limit.reset_in)
                logger.warning('%s %s rate limited, retrying in %.2fs', method, path, delay)
                await asyncio.sleep(delay)
                continue
            raise error

        # This should never be reached, but just in case
        if last_exception:
            raise last_exception
        raise CityError('Unexpected error in retry loop')

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None,
        json: Any,
    ) -> Response:
        async with httpx.AsyncClient(
            base_url=self._config.base_url,
            headers=self._config.headers(),
            timeout=self._config.timeout,
            transport=self._transport,
        ) as client:
            logger.debug('%s %s params=%s', method, path, params)
            raw = await client.request(method, path, params=params, json=json)

        try:
            return Response.from_httpx(raw)
        except ValueError as exc:
            if raw.is_error:
                # an unreadable error body still classifies by status
                logger.debug('Undecodable %s body for %s %s', raw.status_code, method, path)
                return Response(status=raw.status_code, body=raw.text, headers=raw.headers)
            raise DecodeError(exc, raw.headers) from exc

    def _calculate_backoff_delay(self, attempt: int, reset_in: int | None = None) -> float:
        """Calculate exponential backoff delay with jitter.

        A server-provided reset time replaces the exponential delay; both are
        capped at ``retry_max_delay``.
        """
        if reset_in:
            return min(float(reset_in), self._config.retry_max_delay)

        delay = self._config.retry_base_delay * (2**attempt)
        delay = min(delay, self._config.retry_max_delay)

        # Add jitter (±25% randomization)
        jitter = delay * 0.25 * (2 * random.random() - 1)
        delay += jitter

        return max(0.1, delay)
