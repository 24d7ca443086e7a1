"""Settings for :class:`thecity.client.CityClient`."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Mapping

import httpx

from thecity import __version__
from thecity.errors import ConfigurationError

ENV_PREFIX = 'THECITY_'


def _default_user_agent() -> str:
    return f'thecity-python/{__version__}'


@dataclass(frozen=True, slots=True)
class Config:
    """Connection and retry settings, validated on construction.

    Every field can be set from the environment as ``THECITY_<FIELD>``
    (``THECITY_ACCESS_TOKEN``, ``THECITY_MAX_RETRIES`` ...).

    Raises:
        ConfigurationError: If a value is out of range or the base URL is not
            an absolute http(s) URL.
    """

    base_url: str = 'https://api.onthecity.org'
    access_token: str | None = None
    user_agent: str = field(default_factory=_default_user_agent)
    timeout: float = 20.0
    max_retries: int = 3
    retry_base_delay: float = 1.0
    retry_max_delay: float = 60.0

    def __post_init__(self) -> None:
        object.__setattr__(self, 'base_url', _check_base_url(self.base_url))
        if self.timeout <= 0:
            raise ConfigurationError(f'timeout must be positive: {self.timeout}')
        if self.max_retries < 0:
            raise ConfigurationError(f'max_retries must be non-negative: {self.max_retries}')
        if not 0 < self.retry_base_delay <= self.retry_max_delay:
            raise ConfigurationError(
                f'retry delays must satisfy 0 < retry_base_delay ({self.retry_base_delay}) '
                f'<= retry_max_delay ({self.retry_max_delay})'
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Build settings from ``THECITY_*`` variables, defaults for the rest.

        Raises:
            ConfigurationError: If a variable cannot be read as its field's type.
        """
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for setting in fields(cls):
            name = ENV_PREFIX + setting.name.upper()
            raw = environ.get(name)
            if not raw:
                continue
            cast = _CASTS.get(setting.name, str)
            try:
                values[setting.name] = cast(raw.strip())
            except ValueError:
                raise ConfigurationError(f'{name} is not a valid {cast.__name__}: {raw!r}') from None
        return cls(**values)

    def headers(self) -> dict[str, str]:
        """Default headers sent with every request."""
        headers = {'User-Agent': self.user_agent, 'Accept': 'application/json'}
        if self.access_token:
            headers['Authorization'] = f'Bearer {self.access_token}'
        return headers


_CASTS: dict[str, Callable[[str], Any]] = {
    'timeout': float,
    'max_retries': int,
    'retry_base_delay': float,
    'retry_max_delay': float,
}


def _check_base_url(base_url: str) -> str:
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as exc:
        raise ConfigurationError(f'Invalid base_url {base_url!r}: {exc}') from exc
    if url.scheme not in ('http', 'https') or not url.host:
        raise ConfigurationError(f'base_url must be an absolute http(s) URL: {base_url!r}')
    return base_url.rstrip('/')
