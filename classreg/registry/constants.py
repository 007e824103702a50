# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Centralized constants for the registry system.

Eliminates magic strings for entry point groups, hook names and
duplicate-registration policies.
"""

# Entry point group scanned during discovery (a Python packaging entry point
# group, not a filesystem directory)
ENTRY_POINT_GROUP = 'classreg.registrations'

# Module-level hook called once per registration module during discovery
REGISTER_ALL_HOOK = 'register_all'

# Class attribute consulted for the default entry name
REGISTRY_NAME_ATTR = 'registry_name'

# Duplicate registration policies
DUPLICATE_ERROR = 'error'
DEFAULT_DUPLICATE_POLICY = DUPLICATE_ERROR
