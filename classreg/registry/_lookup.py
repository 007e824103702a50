# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Lookup and public API for the registry system.

Provides name-based access to registered implementations:
- Factory registries: create_object()
- Singleton registries: get_singleton()
- Introspection: class_count(), class_name(), list_classes(), has_class()

Every function accepts a RegistryTag or a registry name. Unknown entry
names yield None; unknown registry names raise UnknownRegistryError.
"""

import logging
from typing import Any

from ._accessor import registry_instance
from ._identity import RegistryTag, resolve_tag
from .exceptions import RegistryKindError

logger = logging.getLogger(__name__)


def format_not_found(tag: RegistryTag | str, name: str) -> str:
    """Format a hint for an entry name that isn't registered.

    Not used by the lookups themselves (they return None); available for
    callers that want to report the miss.
    """
    registry = registry_instance(tag)
    available = registry.class_names()

    msg = f"No entry named '{name}' in registry '{registry.name}'.\n"
    if available:
        msg += f"\nAvailable: {', '.join(available[:10])}"
        if len(available) > 10:
            msg += f" ... and {len(available) - 10} more"
    else:
        msg += "\nThe registry is empty.\n"
        msg += "\nTroubleshooting:\n"
        msg += "  1. Check registration_modules in classreg.yaml\n"
        msg += "  2. Check the module calls register_class() or defines register_all()\n"
    return msg


# ============================================================================
# Public API: Object Access
# ============================================================================

def create_object(tag: RegistryTag | str, name: str) -> Any | None:
    """Create a new instance of a registered implementation.

    Args:
        tag: Factory registry tag or name
        name: Entry name

    Returns:
        New instance owned by the caller, or None if name isn't registered

    Raises:
        RegistryKindError: If tag is a singleton registry

    Examples:
        >>> codec = create_object(CODECS, 'gzip')
        >>> create_object(CODECS, 'zstd') is None
        True
    """
    tag = resolve_tag(tag)
    if tag.is_singleton:
        raise RegistryKindError(
            f"Registry '{tag.name}' is a singleton registry; use get_singleton()"
        )
    obj = registry_instance(tag).create_object(name)
    if obj is None:
        logger.debug(f"create_object: '{name}' not registered in '{tag.name}'")
    return obj


def get_singleton(tag: RegistryTag | str, name: str) -> Any | None:
    """Return the shared instance of a registered implementation.

    The first call for an implementation constructs it; later calls return
    the same object.

    Args:
        tag: Singleton registry tag or name
        name: Entry name

    Returns:
        Shared instance, or None if name isn't registered

    Raises:
        RegistryKindError: If tag is a factory registry
    """
    tag = resolve_tag(tag)
    if not tag.is_singleton:
        raise RegistryKindError(
            f"Registry '{tag.name}' is a factory registry; use create_object()"
        )
    obj = registry_instance(tag).get_singleton(name)
    if obj is None:
        logger.debug(f"get_singleton: '{name}' not registered in '{tag.name}'")
    return obj


# ============================================================================
# Public API: Introspection
# ============================================================================

def class_count(tag: RegistryTag | str) -> int:
    """Number of distinct names registered in the registry."""
    return registry_instance(tag).class_count()


def class_name(tag: RegistryTag | str, index: int) -> str:
    """Name registered at position index (registration order).

    Raises:
        EntryIndexError: If index is not in [0, class_count(tag))
    """
    return registry_instance(tag).class_name(index)


def list_classes(tag: RegistryTag | str) -> list[str]:
    """All names in the registry, in registration order."""
    return registry_instance(tag).class_names()


def has_class(tag: RegistryTag | str, name: str) -> bool:
    return registry_instance(tag).has_class(name)
