"""Rate-limit metadata parsed from The City API response headers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

import httpx

LIMIT_HEADER = 'X-City-RateLimit-Limit-By-Ip'
REMAINING_HEADER = 'X-City-RateLimit-Remaining-By-Ip'
RESET_HEADER = 'X-City-RateLimit-Reset'
RETRY_AFTER_HEADER = 'Retry-After'


class RateLimit:
    """Throttling state reported by the API.

    Header lookups are case-insensitive. Missing or malformed headers read as
    ``None``, so a ``RateLimit`` built from no headers is valid but empty.
    """

    def __init__(self, headers: Mapping[str, Any] | httpx.Headers | None = None) -> None:
        self.headers = httpx.Headers(
            {str(key): str(value) for key, value in (headers or {}).items()}
        )

    @property
    def attrs(self) -> dict[str, str]:
        return dict(self.headers.items())

    def to_dict(self) -> dict[str, str]:
        return self.attrs

    @property
    def limit(self) -> int | None:
        return _read_int(self.headers.get(LIMIT_HEADER))

    @property
    def remaining(self) -> int | None:
        return _read_int(self.headers.get(REMAINING_HEADER))

    @property
    def reset_at(self) -> datetime | None:
        timestamp = _read_int(self.headers.get(RESET_HEADER))
        if timestamp is None:
            return None
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)

    @property
    def reset_in(self) -> int | None:
        """Seconds until the limit resets, falling back to ``Retry-After``."""
        reset_at = self.reset_at
        if reset_at is not None:
            delta = reset_at - datetime.now(timezone.utc)
            return max(int(delta.total_seconds()), 0)
        retry_after = _read_int(self.headers.get(RETRY_AFTER_HEADER))
        if retry_after is None:
            return None
        return max(retry_after, 0)

    def __repr__(self) -> str:
        return f'RateLimit(limit={self.limit!r}, remaining={self.remaining!r})'


def _read_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None
