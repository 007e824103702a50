# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Typed registries over an EntryStore.

ClassRegistry and SingletonClassRegistry wrap the untyped EntryStore for one
base class. The store only sees zero-argument callables; the typed wrappers
check classes against the base class on registration and check results on
creation, so callers always get an instance of the base class back.

Logging Strategy:
    - DEBUG: Registry creation, singleton construction
    - WARNING: Not used here (duplicates are reported by the store)
"""

import logging
import threading
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterator, TypeVar

from . import _state
from ._metadata import Entry, describe_origin
from ._store import EntryStore
from .constants import DEFAULT_DUPLICATE_POLICY

if TYPE_CHECKING:
    from ._identity import RegistryTag

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _duplicate_policy() -> str:
    """Policy set by discover_registrations(), or the default before it runs."""
    return _state._duplicate_policy or DEFAULT_DUPLICATE_POLICY


class _RegistryBase(Generic[T]):
    """Storage and introspection shared by both registry variants."""

    def __init__(self, tag: "RegistryTag") -> None:
        self.tag = tag
        self._store = EntryStore(tag.name)
        logger.debug(f"Created {tag.kind} registry '{tag.name}'")

    @property
    def name(self) -> str:
        return self.tag.name

    @property
    def base_class(self) -> type:
        return self.tag.base_class

    def _check_class(self, name: str, obj: Any) -> None:
        if isinstance(obj, type) and not issubclass(obj, self.base_class):
            raise TypeError(
                f"Cannot register {obj.__qualname__} as '{name}' in registry "
                f"'{self.name}': not a subclass of {self.base_class.__qualname__}"
            )

    def _check_instance(self, name: str, obj: Any) -> T:
        if not isinstance(obj, self.base_class):
            raise TypeError(
                f"Entry '{name}' in registry '{self.name}' produced {type(obj).__qualname__}, "
                f"expected an instance of {self.base_class.__qualname__}"
            )
        return obj

    def _add(self, name: str, factory: Callable[[], Any], origin: str) -> bool:
        return self._store.register(
            name, factory, origin=origin, on_duplicate=_duplicate_policy()
        )

    def class_count(self) -> int:
        return self._store.count()

    def class_name(self, index: int) -> str:
        """Name at position index in registration order.

        Raises:
            EntryIndexError: If index is not in [0, class_count())
        """
        return self._store.name_at(index)

    def class_names(self) -> list[str]:
        return self._store.names()

    def has_class(self, name: str) -> bool:
        return name in self._store

    def lookup(self, name: str) -> Callable[[], Any] | None:
        return self._store.lookup(name)

    def entries(self) -> Iterator[Entry]:
        return iter(self._store)

    def __len__(self) -> int:
        return self._store.count()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"base_class={self.base_class.__qualname__}, entries={self.class_count()})"
        )


class ClassRegistry(_RegistryBase[T]):
    """Registry whose entries construct a new instance on every call."""

    def add_class(self, name: str, creator: Callable[[], T], *, origin: str | None = None) -> bool:
        """Register a zero-argument creator (usually the class itself).

        Raises:
            TypeError: If creator is a class that doesn't derive from the base class
            DuplicateRegistrationError: If name exists and policy is 'error'
        """
        self._check_class(name, creator)
        return self._add(name, creator, origin if origin is not None else describe_origin(creator))

    def create_object(self, name: str) -> T | None:
        """Create a new instance of the entry, or None if name is absent.

        The caller owns the returned object.
        """
        creator = self._store.lookup(name)
        if creator is None:
            return None
        return self._check_instance(name, creator())


class _LazyInstance:
    """Construct-on-first-use holder for one singleton class.

    Uses double-checked locking: after construction every call is a plain
    attribute read.
    """

    def __init__(self, cls: type) -> None:
        self.cls = cls
        self._instance: Any = None
        self._constructed = False
        self._lock = threading.Lock()

    def __call__(self) -> Any:
        if not self._constructed:
            with self._lock:
                if not self._constructed:
                    self._instance = self.cls()
                    self._constructed = True
                    logger.debug(f"Constructed singleton {self.cls.__qualname__}")
        return self._instance

    @property
    def constructed(self) -> bool:
        return self._constructed


class SingletonClassRegistry(_RegistryBase[T]):
    """Registry whose entries return one shared, lazily built instance."""

    def __init__(self, tag: "RegistryTag") -> None:
        super().__init__(tag)
        self._holders: dict[type, _LazyInstance] = {}
        self._holders_lock = threading.Lock()

    def singleton_getter(self, cls: type) -> Callable[[], T]:
        """Return the construct-once getter for cls, shared by all its names."""
        with self._holders_lock:
            holder = self._holders.get(cls)
            if holder is None:
                holder = _LazyInstance(cls)
                self._holders[cls] = holder
            return holder

    def add_class(self, name: str, getter: Callable[[], T], *, origin: str | None = None) -> bool:
        """Register a zero-argument getter that returns the shared instance.

        A class passed as getter is wrapped in its construct-once holder.
        """
        if isinstance(getter, type):
            self._check_class(name, getter)
            getter = self.singleton_getter(getter)
        target = getter.cls if isinstance(getter, _LazyInstance) else getter
        return self._add(name, getter, origin if origin is not None else describe_origin(target))

    def add_singleton_class(self, name: str, cls: type) -> bool:
        """Register cls so its single instance is built on first retrieval.

        Raises:
            TypeError: If cls doesn't derive from the base class
        """
        if not isinstance(cls, type):
            raise TypeError(f"add_singleton_class expects a class, got {cls!r}")
        return self.add_class(name, cls)

    def get_singleton(self, name: str) -> T | None:
        """Return the shared instance for name, or None if name is absent.

        The instance lives for the rest of the process; callers must not
        dispose of it.
        """
        getter = self._store.lookup(name)
        if getter is None:
            return None
        return self._check_instance(name, getter())
