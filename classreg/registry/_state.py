# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Shared runtime state for the registry system.

This module contains the process-wide mutable state shared across the
identity, accessor and discovery modules. Extracted to avoid circular
dependencies. Nothing here is part of the public API: registries are only
reached through registry_instance(), definitions through define_registry()
and get_registry_tag().
"""

import threading

# Registry definitions - maps registry name -> RegistryTag, in definition order
_definitions: dict = {}
_definitions_lock = threading.Lock()

# Registry instances - maps RegistryTag -> ClassRegistry / SingletonClassRegistry
# Populated lazily by registry_instance()
_registries: dict = {}
_registries_lock = threading.Lock()

# Registration modules and entry points already processed by discovery
# Each is processed at most once per process (until reset)
_processed_sources: set[str] = set()
_discovery_lock = threading.RLock()

# Discovery state flag - tracks whether startup discovery has completed
_registrations_discovered = False

# Duplicate policy read from configuration by the last discovery run
# (None until then: registrations use DEFAULT_DUPLICATE_POLICY)
_duplicate_policy: str | None = None
