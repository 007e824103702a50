# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Registry identities.

A RegistryTag selects which registry a registration or query targets. Tags
are created by define_registry() / define_singleton_registry() and are
unique per registry name. Several tags may share one base class; each has
its own namespace of entry names.
"""

import logging
from dataclasses import dataclass

from . import _state
from ._metadata import RegistryKind
from .exceptions import RegistryDefinitionError, UnknownRegistryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistryTag:
    """Identity of one registry.

    Attributes:
        name: Registry name, unique process-wide
        base_class: Base class every registered implementation must satisfy
        kind: Factory or singleton variant
    """

    name: str
    base_class: type
    kind: RegistryKind = RegistryKind.FACTORY

    @property
    def registry_type(self) -> type:
        """Registry class backing this identity."""
        from ._registries import ClassRegistry, SingletonClassRegistry

        if self.kind == RegistryKind.SINGLETON:
            return SingletonClassRegistry
        return ClassRegistry

    @property
    def is_singleton(self) -> bool:
        return self.kind == RegistryKind.SINGLETON

    def __str__(self) -> str:
        return self.name


def _define(name: str, base_class: type, kind: RegistryKind) -> RegistryTag:
    if not isinstance(base_class, type):
        raise TypeError(f"base_class for registry '{name}' must be a class, got {base_class!r}")

    tag = RegistryTag(name=name, base_class=base_class, kind=kind)

    with _state._definitions_lock:
        existing = _state._definitions.get(name)
        if existing is not None:
            if existing == tag:
                # Re-declaration from a reloaded module - same identity
                return existing
            raise RegistryDefinitionError(
                f"Registry '{name}' is already defined as a {existing.kind} registry of "
                f"{existing.base_class.__qualname__}; cannot redefine it as a {kind} "
                f"registry of {base_class.__qualname__}"
            )
        _state._definitions[name] = tag

    logger.debug(f"Defined {kind} registry '{name}' for {base_class.__qualname__}")
    return tag


def define_registry(name: str, base_class: type) -> RegistryTag:
    """Declare a factory registry for base_class.

    Example:
        >>> CODECS = define_registry('Codec', Codec)
        >>> create_object(CODECS, 'gzip')
    """
    return _define(name, base_class, RegistryKind.FACTORY)


def define_singleton_registry(name: str, base_class: type) -> RegistryTag:
    """Declare a singleton registry for base_class.

    Implementations registered here must be constructible without arguments.
    """
    return _define(name, base_class, RegistryKind.SINGLETON)


def get_registry_tag(name: str) -> RegistryTag:
    """Resolve a registry name to its tag.

    Raises:
        UnknownRegistryError: If no registry with this name was defined
    """
    tag = _state._definitions.get(name)
    if tag is None:
        available = ", ".join(_state._definitions) or "none"
        raise UnknownRegistryError(
            f"Registry '{name}' is not defined. Defined registries: {available}"
        )
    return tag


def list_registries() -> list[RegistryTag]:
    """Return every defined registry tag in definition order."""
    return list(_state._definitions.values())


def resolve_tag(tag_or_name: "RegistryTag | str") -> RegistryTag:
    if isinstance(tag_or_name, RegistryTag):
        return tag_or_name
    return get_registry_tag(tag_or_name)
