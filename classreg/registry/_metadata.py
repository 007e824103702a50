# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Metadata structures for the registry system.

Defines data structures used throughout the registry:
- RegistryKind: Enum for registry variants (factory, singleton)
- Entry: One registered name and its factory
- Helper functions for describing registered objects
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable


class RegistryKind(Enum):
    """Registry variant enumeration.

    Attributes:
        FACTORY: Every lookup constructs a new instance
        SINGLETON: Every lookup returns one shared, lazily built instance
    """

    FACTORY = auto()
    SINGLETON = auto()

    def __str__(self) -> str:
        """String representation for display and serialization."""
        return self.name.lower()

    @classmethod
    def from_string(cls, s: str) -> "RegistryKind":
        """Parse registry kind from string (case-insensitive).

        Raises:
            ValueError: If string doesn't match any registry kind

        Example:
            >>> RegistryKind.from_string('singleton')
            <RegistryKind.SINGLETON: 2>
        """
        try:
            return cls[s.upper()]
        except (KeyError, AttributeError):
            valid = ", ".join(str(k) for k in cls)
            raise ValueError(f"Invalid registry kind: {s!r}. Must be one of: {valid}") from None


@dataclass(frozen=True)
class Entry:
    """A registered name bound to its factory.

    Attributes:
        name: Entry name, unique within one registry
        factory: Zero-argument callable returning a new instance (factory
            registries) or the shared instance (singleton registries)
        origin: 'module:qualname' of the implementation, for display only
    """

    name: str
    factory: Callable[[], Any]
    origin: str = ""


def describe_origin(obj: Any) -> str:
    """Return 'module:qualname' for a class or function, '' if unknown.

    Example:
        >>> describe_origin(GzipCodec)
        'codecs.gzip:GzipCodec'
    """
    module = getattr(obj, "__module__", None)
    qualname = getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None)
    if module and qualname:
        return f"{module}:{qualname}"
    return qualname or ""
