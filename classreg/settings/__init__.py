# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""classreg configuration module.

Provides type-safe configuration management with Pydantic Settings.
"""

from .loader import get_config, get_default_config, load_config, reset_config, set_config
from .schema import LoggingConfig, RegistryConfig

__all__ = [
    "RegistryConfig",
    "LoggingConfig",
    "load_config",
    "get_config",
    "reset_config",
    "set_config",
    "get_default_config",
]
