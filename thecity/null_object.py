"""Shared stand-in for nested entities that are missing from a response."""

from __future__ import annotations

from typing import Any, Iterator


class NullObject:
    """Falsy singleton that answers every attribute read with itself.

    Nested entity fields return it when the raw value is absent, so chained
    reads such as ``group.place.country.name`` never raise. Predicates
    (``has_*``) return ``False`` and item access returns ``None``.
    """

    _instance: NullObject | None = None

    def __new__(cls) -> NullObject:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def instance(cls) -> NullObject:
        return cls()

    def __getattr__(self, name: str) -> Any:
        # only reached for names not defined on the class
        if name.startswith('_'):
            raise AttributeError(name)
        if name.startswith('has_'):
            return _absent
        return self

    def __call__(self, *args: Any, **kwargs: Any) -> NullObject:
        return self

    def __getitem__(self, name: str) -> None:
        return None

    def __bool__(self) -> bool:
        return False

    def __len__(self) -> int:
        return 0

    def __iter__(self) -> Iterator[Any]:
        return iter(())

    def __eq__(self, other: object) -> bool:
        return other is None or isinstance(other, NullObject)

    def __hash__(self) -> int:
        return hash(None)

    def __repr__(self) -> str:
        return 'NULL'

    def __copy__(self) -> NullObject:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> NullObject:
        return self

    def __reduce__(self) -> str:
        return 'NULL'

    @property
    def attrs(self) -> dict[str, Any]:
        return {}

    attributes = attrs

    def to_dict(self) -> dict[str, Any]:
        return {}

    to_hash = to_dict


def _absent(*args: Any, **kwargs: Any) -> bool:
    return False


NULL = NullObject()
