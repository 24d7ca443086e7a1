"""Version information for the thecity package."""

from __future__ import annotations


class Version:
    MAJOR = 0
    MINOR = 0
    PATCH = 9
    PRE: str | None = None

    @classmethod
    def to_string(cls) -> str:
        parts = (cls.MAJOR, cls.MINOR, cls.PATCH, cls.PRE)
        return '.'.join(str(part) for part in parts if part is not None)
