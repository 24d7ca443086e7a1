"""Base entity type built from raw API response bodies."""

from __future__ import annotations

import logging
from typing import Any, Callable, ClassVar, Mapping

import httpx

from thecity.null_object import NULL
from thecity.response import body_of

logger = logging.getLogger(__name__)

Reader = Callable[['Base'], Any]


def is_present(value: Any) -> bool:
    """Return whether a raw value counts as set (anything but ``None``/``False``)."""
    return value is not None and value is not False


class Attribute:
    """Scalar field read straight from ``attrs[name]``."""

    def __init__(self) -> None:
        self.name = ''
        self.key = ''

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self.key = name

    def __get__(self, instance: Base | None, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return instance._memoize(self.name, lambda: self.compute(instance))

    def __set__(self, instance: Base, value: Any) -> None:
        raise AttributeError(f'{self.name} is read-only')

    def compute(self, instance: Base) -> Any:
        return instance.attrs.get(self.key)

    def present_on(self, instance: Base) -> bool:
        return is_present(instance.attrs.get(self.key))

    def aliases(self) -> tuple[str, ...]:
        return (self.name,)


class ObjectAttribute(Attribute):
    """Field that wraps its raw mapping in another entity type.

    ``entity`` may be a ``Base`` subclass or its class name; names are
    resolved on first read so entity types can reference each other in any
    order. With ``context``, the nested mapping also receives the parent's
    remaining attributes under that key.
    """

    def __init__(self, entity: type[Base] | str, context: str | None = None) -> None:
        super().__init__()
        self.entity = entity
        self.context = context

    def compute(self, instance: Base) -> Any:
        value = instance.attrs.get(self.key)
        if not is_present(value):
            return NULL
        entity = self.resolve()
        if self.context is None:
            return entity(value)
        siblings = dict(instance.attrs)
        siblings.pop(self.key, None)
        return entity({**value, self.context: siblings})

    def resolve(self) -> type[Base]:
        if isinstance(self.entity, str):
            logger.debug('Resolving entity %s for field %s', self.entity, self.name)
            self.entity = Base.entity_named(self.entity)
        return self.entity


class URIAttribute(Attribute):
    """URI field also reachable under its ``url`` spelling.

    A field declared as ``profile_uri`` reads the raw ``profile_url`` key and
    parses it into an :class:`httpx.URL`. Both ``profile_uri`` and
    ``profile_url`` (and their ``has_`` predicates) return the same value.
    """

    def __set_name__(self, owner: type, name: str) -> None:
        segments = name.split('_')
        if 'uri' not in segments:
            raise TypeError(f"URI field {name!r} must contain a 'uri' segment")
        segments[segments.index('uri')] = 'url'
        self.name = name
        self.key = '_'.join(segments)

    def compute(self, instance: Base) -> httpx.URL | None:
        value = instance.attrs.get(self.key)
        if not is_present(value):
            return None
        return httpx.URL(value)

    def aliases(self) -> tuple[str, ...]:
        return (self.name, self.key)


def _reader(field: Attribute) -> Reader:
    def read(entity: Base) -> Any:
        return field.__get__(entity, type(entity))

    return read


def _override(name: str, member: Any) -> Reader:
    if callable(member):
        return lambda entity: getattr(entity, name)()
    return lambda entity: getattr(entity, name)


def _predicate(field: Attribute) -> Reader:
    def has(entity: Base) -> bool:
        return field.present_on(entity)

    has.__name__ = f'has_{field.name}'
    has.__doc__ = f'Return whether the raw {field.key!r} value is present.'
    return has


class Base:
    """Read-only view over a raw attribute mapping.

    Subclasses declare their fields as class attributes::

        class Group(Base):
            id = Attribute()
            name = Attribute()
            place = ObjectAttribute('Place', context='group')
            profile_pic_uri = URIAttribute()

    Every field gets a memoized accessor and a ``has_<name>()`` predicate.
    The memo cache is never invalidated, so values already read stay the same
    after :meth:`update` or :meth:`delete`.
    """

    _readers: ClassVar[dict[str, Reader]] = {}
    _entities: ClassVar[dict[str, type[Base]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        readers = dict(cls._readers)
        members = list(vars(cls).items())
        # plain members shadowing an inherited field take over its name
        for name, member in members:
            if name in readers and not isinstance(member, Attribute):
                readers[name] = _override(name, member)
        for _, field in members:
            if not isinstance(field, Attribute):
                continue
            predicate = _predicate(field)
            for alias in field.aliases():
                if alias != field.name:
                    setattr(cls, alias, field)
                setattr(cls, f'has_{alias}', predicate)
                readers[alias] = _reader(field)
                readers[f'has_{alias}'] = predicate
        cls._readers = readers
        Base._entities[cls.__name__] = cls

    @classmethod
    def entity_named(cls, name: str) -> type[Base]:
        try:
            return Base._entities[name]
        except KeyError:
            raise LookupError(f'Unknown entity type: {name}') from None

    @classmethod
    def from_response(cls, response: Any, options: Mapping[str, Any] | None = None) -> Base:
        """Build an entity from a response's parsed body."""
        return cls(body_of(response), options)

    def __init__(
        self,
        attrs: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        self._attrs = _as_attrs(attrs)
        self._memo: dict[str, Any] = {}
        self.client = (options or {}).get('client')

    @property
    def attrs(self) -> dict[str, Any]:
        return self._attrs

    attributes = attrs

    def to_dict(self) -> dict[str, Any]:
        return self._attrs

    to_hash = to_dict

    def update(self, values: Mapping[str, Any]) -> dict[str, Any]:
        self._attrs.update(values)
        return self._attrs

    def delete(self, name: str) -> Any:
        return self._attrs.pop(name, None)

    def __getitem__(self, name: str) -> Any:
        """Read a field or predicate by name, ``None`` if no such field exists.

        Predicates answer to both ``has_<name>`` and ``<name>?``.
        """
        if name.endswith('?'):
            name = f'has_{name[:-1]}'
        reader = self._readers.get(name)
        if reader is None:
            return None
        return reader(self)

    def _memoize(self, key: str, compute: Callable[[], Any]) -> Any:
        try:
            return self._memo[key]
        except KeyError:
            pass
        # first published value wins when two readers race
        return self._memo.setdefault(key, compute())

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._attrs!r})'


def _as_attrs(attrs: Any) -> dict[str, Any]:
    if attrs is None:
        return {}
    if isinstance(attrs, dict):
        return attrs
    if isinstance(attrs, Mapping):
        return dict(attrs)
    logger.debug('Ignoring non-mapping attributes of type %s', type(attrs).__name__)
    return {}
