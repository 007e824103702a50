# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""classreg Class Registry.

Public API for registry definition, class registration, discovery and lookup.

Definition (shared by implementations and callers):
    from classreg.registry import define_registry, define_singleton_registry

    CODECS = define_registry('Codec', Codec)
    CLOCKS = define_singleton_registry('Clock', Clock)

Registration (for implementation authors):
    from classreg.registry import register_class, ClassRegisterer

    @register_class(CODECS, 'gzip')
    class GzipCodec(Codec):
        ...

    def register_all():
        ClassRegisterer(CODECS, 'lz4', Lz4Codec)

Discovery and Lookup (for callers):
    from classreg.registry import discover_registrations, create_object

    discover_registrations()  # Once at startup

    codec = create_object('Codec', 'gzip')
    clock = get_singleton(CLOCKS, 'system')
"""

from ._accessor import registry_instance
from ._decorators import ClassRegisterer, register_class
from ._discovery import discover_registrations
from ._identity import (
    RegistryTag,
    define_registry,
    define_singleton_registry,
    get_registry_tag,
    list_registries,
)
from ._lookup import (
    class_count,
    class_name,
    create_object,
    format_not_found,
    get_singleton,
    has_class,
    list_classes,
)
from ._metadata import Entry, RegistryKind
from ._registries import ClassRegistry, SingletonClassRegistry
from ._store import EntryStore
from .constants import ENTRY_POINT_GROUP, REGISTER_ALL_HOOK
from .exceptions import (
    DiscoveryError,
    DuplicateRegistrationError,
    EntryIndexError,
    RegistryDefinitionError,
    RegistryError,
    RegistryKindError,
    UnknownRegistryError,
)

# ============================================================================
# Registry Lifecycle Management
# ============================================================================


def reset_registry() -> None:
    """Reset registries to the uninitialized state.

    Drops every registry instance (with its entries and singletons), the
    discovery record and the duplicate policy it read. Registry definitions
    are kept. Used for testing only: this is not an unregistration API, and
    modules already imported will not re-run their decorators.

    Example:
        >>> from classreg.registry import reset_registry
        >>> reset_registry()
        >>> discover_registrations()  # Re-discover with new config
    """
    import classreg.registry._state as registry_state

    with registry_state._discovery_lock:
        with registry_state._registries_lock:
            registry_state._registries.clear()
        registry_state._processed_sources.clear()
        registry_state._registrations_discovered = False
        registry_state._duplicate_policy = None


def is_initialized() -> bool:
    """Check if startup discovery has completed.

    Example:
        >>> is_initialized()
        False
        >>> discover_registrations()
        >>> is_initialized()
        True
    """
    from ._state import _registrations_discovered

    return _registrations_discovered


__all__ = [
    # Constants
    "ENTRY_POINT_GROUP",
    "REGISTER_ALL_HOOK",
    # Data Structures
    "Entry",
    "EntryStore",
    "RegistryKind",
    "RegistryTag",
    "ClassRegistry",
    "SingletonClassRegistry",
    # Definition
    "define_registry",
    "define_singleton_registry",
    "get_registry_tag",
    "list_registries",
    "registry_instance",
    # Registration
    "ClassRegisterer",
    "register_class",
    # Discovery and Lifecycle
    "discover_registrations",
    "reset_registry",
    "is_initialized",
    # Lookup
    "create_object",
    "get_singleton",
    "class_count",
    "class_name",
    "list_classes",
    "has_class",
    "format_not_found",
    # Exceptions
    "RegistryError",
    "DuplicateRegistrationError",
    "EntryIndexError",
    "RegistryDefinitionError",
    "UnknownRegistryError",
    "RegistryKindError",
    "DiscoveryError",
]
