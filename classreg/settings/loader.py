# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Configuration loading and management for classreg."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError
from rich.console import Console

from .schema import RegistryConfig, _project_file_var

console = Console(stderr=True)


def load_config(
    project_file: Optional[Path] = None,
    **cli_overrides: Any
) -> RegistryConfig:
    """Load configuration with hierarchical priority.

    Priority order (highest to lowest):
    1. CLI arguments (passed as kwargs)
    2. Environment variables (CLASSREG_* prefix)
    3. Project config file (classreg.yaml)
    4. Built-in defaults

    Special handling:
    - CLASSREG_LOG_LEVEL env var overrides logging.level (shorthand for CLASSREG_LOGGING__LEVEL)

    Args:
        project_file: Path to project config file (for non-standard locations)
        **cli_overrides: CLI argument overrides

    Returns:
        RegistryConfig object
    """
    if 'logging' not in cli_overrides and 'CLASSREG_LOG_LEVEL' in os.environ:
        cli_overrides['logging'] = {'level': os.environ['CLASSREG_LOG_LEVEL']}

    token = _project_file_var.set(Path(project_file) if project_file else None)
    try:
        return RegistryConfig(**cli_overrides)
    except ValidationError as e:
        console.print("[bold red]Configuration validation failed:[/bold red]")
        for error in e.errors():
            field = " → ".join(str(x) for x in error["loc"])
            console.print(f"  [red]{field}: {error['msg']}[/red]")
        raise
    finally:
        _project_file_var.reset(token)


# Configuration pinned by an application (the CLI pins the one built from its options)
_pinned_config: Optional[RegistryConfig] = None


@lru_cache(maxsize=1)
def _cached_config() -> RegistryConfig:
    return load_config()


def get_config() -> RegistryConfig:
    """Get the pinned configuration, or the cached one loaded from env and files."""
    if _pinned_config is not None:
        return _pinned_config
    return _cached_config()


def set_config(config: RegistryConfig) -> None:
    """Pin the configuration returned by get_config()."""
    global _pinned_config
    _pinned_config = config


def reset_config() -> None:
    """Reset the cached and pinned configuration (mainly for testing)."""
    global _pinned_config
    _pinned_config = None
    _cached_config.cache_clear()


def get_default_config() -> RegistryConfig:
    """Get a configuration instance with only default values (no files or env vars)."""
    return RegistryConfig.model_construct()
