# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
classreg: Name-keyed class registries

Implementation modules register classes under string names against a shared
base class; callers create instances, or fetch process-wide singletons, by
name alone.

Quick Start:
    >>> from classreg import define_registry, register_class, create_object
    >>> CODECS = define_registry('Codec', Codec)
    >>>
    >>> @register_class(CODECS, 'gzip')
    ... class GzipCodec(Codec):
    ...     pass
    >>>
    >>> codec = create_object(CODECS, 'gzip')
    >>> create_object(CODECS, 'zstd') is None
    True

Startup registration from configured modules and entry points:
    >>> from classreg import discover_registrations
    >>> discover_registrations()
"""

__version__ = "0.1.0"

from .registry import (
    ClassRegisterer,
    DiscoveryError,
    DuplicateRegistrationError,
    EntryIndexError,
    RegistryDefinitionError,
    RegistryError,
    RegistryKindError,
    RegistryTag,
    UnknownRegistryError,
    class_count,
    class_name,
    create_object,
    define_registry,
    define_singleton_registry,
    discover_registrations,
    get_registry_tag,
    get_singleton,
    has_class,
    is_initialized,
    list_classes,
    list_registries,
    register_class,
    registry_instance,
    reset_registry,
)

__all__ = [
    "__version__",
    "RegistryTag",
    "define_registry",
    "define_singleton_registry",
    "registry_instance",
    "get_registry_tag",
    "list_registries",
    "ClassRegisterer",
    "register_class",
    "discover_registrations",
    "reset_registry",
    "is_initialized",
    "create_object",
    "get_singleton",
    "class_count",
    "class_name",
    "list_classes",
    "has_class",
    "RegistryError",
    "DuplicateRegistrationError",
    "EntryIndexError",
    "RegistryDefinitionError",
    "UnknownRegistryError",
    "RegistryKindError",
    "DiscoveryError",
]
