"""Client core for The City API: response entities and typed errors."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as distribution_version

from .version import Version

try:  # pragma: no cover - fallback only triggers when metadata missing
    __version__: str = distribution_version('thecity')
except PackageNotFoundError:  # pragma: no cover
    __version__ = Version.to_string()

from .base import Attribute, Base, ObjectAttribute, URIAttribute  # noqa: E402
from .client import CityClient  # noqa: E402
from .config import Config  # noqa: E402
from .errors import CityError, error_for_status, error_from_response  # noqa: E402
from .null_object import NULL, NullObject  # noqa: E402
from .rate_limit import RateLimit  # noqa: E402
from .response import Response  # noqa: E402

__all__ = [
    'Attribute',
    'Base',
    'CityClient',
    'CityError',
    'Config',
    'NULL',
    'NullObject',
    'ObjectAttribute',
    'RateLimit',
    'Response',
    'URIAttribute',
    'Version',
    'error_for_status',
    'error_from_response',
    '__version__',
]
