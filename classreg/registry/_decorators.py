# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Class registration via ClassRegisterer and the @register_class decorator.

Two equivalent ways to make an implementation discoverable by name:

    # Decorator at class definition
    @register_class(CODECS, 'gzip')
    class GzipCodec(Codec):
        ...

    # Explicit registration step, called once by discover_registrations()
    def register_all():
        ClassRegisterer(CODECS, 'gzip', GzipCodec)

Logging Strategy:
    - DEBUG: Individual registrations
    - INFO: Not used in this module (registration is low-level)
"""

import logging
from typing import Any, Callable

from ._accessor import registry_instance
from ._identity import RegistryTag, resolve_tag
from .constants import REGISTRY_NAME_ATTR

logger = logging.getLogger(__name__)


class ClassRegisterer:
    """Performs exactly one registration when constructed.

    Binds (registry, entry name, factory). For singleton registries a class
    factory is wrapped so its instance is built on first retrieval.

    Args:
        tag: Registry tag or registry name
        name: Entry name within the registry
        factory: Implementation class, or a zero-argument callable (a creator
            for factory registries, a shared-instance getter for singleton
            registries)

    Examples:
        >>> ClassRegisterer(CODECS, 'lz4', Lz4Codec).registered
        True
    """

    def __init__(self, tag: RegistryTag | str, name: str, factory: Callable[[], Any]):
        self.tag = resolve_tag(tag)
        self.name = name
        self.factory = factory
        self.registered = False

        registry = registry_instance(self.tag)
        self.registered = registry.add_class(name, factory)

    def __repr__(self) -> str:
        state = "registered" if self.registered else "not registered"
        return f"ClassRegisterer({self.tag.name!r}, {self.name!r}, {state})"


def _default_entry_name(cls: type) -> str:
    return getattr(cls, REGISTRY_NAME_ATTR, None) or cls.__name__


def register_class(tag: RegistryTag | str, name: str | None = None):
    """Register a class into a registry.

    Decorator for implementation classes. The class is returned unchanged,
    with (registry name, entry name) appended to its __registry_names__.

    Args:
        tag: Registry tag or registry name
        name: Entry name (default: cls.registry_name or cls.__name__)

    Returns:
        Decorator that registers and returns the class

    Raises:
        TypeError: If the class doesn't derive from the registry's base class
        DuplicateRegistrationError: If the name is taken and policy is 'error'

    Examples:
        >>> @register_class(CODECS, 'gzip')
        ... class GzipCodec(Codec):
        ...     pass
        ...
        >>> @register_class(CLOCKS)
        ... class SystemClock(Clock):
        ...     registry_name = 'system'
    """
    def register(cls):
        entry_name = name or _default_entry_name(cls)
        registerer = ClassRegisterer(tag, entry_name, cls)

        # Own attribute only; subclasses must not inherit the parent's names
        names = cls.__dict__.get('__registry_names__', ())
        cls.__registry_names__ = names + ((registerer.tag.name, entry_name),)
        return cls
    return register


__all__ = ['ClassRegisterer', 'register_class']
