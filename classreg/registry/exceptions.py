# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Registry Exceptions

Custom exceptions for the classreg registry system.

Unknown entry names are not errors: lookups return None for them. These
exceptions cover caller logic errors and build-time correctness defects.
"""


class RegistryError(Exception):
    """Base exception for registry errors."""
    pass


class DuplicateRegistrationError(RegistryError):
    """Raised when a name is registered twice in one registry."""

    def __init__(self, registry_name: str, entry_name: str, existing_origin: str = ""):
        self.registry_name = registry_name
        self.entry_name = entry_name
        self.existing_origin = existing_origin
        msg = f"Registry '{registry_name}' already has an entry named '{entry_name}'"
        if existing_origin:
            msg += f" (registered by {existing_origin})"
        super().__init__(msg)


class EntryIndexError(RegistryError, IndexError):
    """Raised when a registration-order index is outside [0, count)."""
    pass


class RegistryDefinitionError(RegistryError):
    """Raised when a registry name is declared twice with different bindings."""
    pass


class UnknownRegistryError(RegistryError, KeyError):
    """Raised when a registry name was never defined."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class RegistryKindError(RegistryError, TypeError):
    """Raised when the factory API is used on a singleton registry or vice versa."""
    pass


class DiscoveryError(RegistryError):
    """Raised when a registration module or entry point fails to load."""
    pass
