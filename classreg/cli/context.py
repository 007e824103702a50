# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from __future__ import annotations  # PEP 563: Postponed evaluation of annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

# Type hints only - settings imported lazily inside methods
if TYPE_CHECKING:
    from classreg.settings import RegistryConfig

logger = logging.getLogger(__name__)


@dataclass
class ApplicationContext:
    """CLI execution context: loaded configuration plus startup registration."""

    config_file: Path | None = None
    overrides: dict[str, Any] = field(default_factory=dict)

    # Loaded configuration
    config: "RegistryConfig | None" = None

    @classmethod
    def from_cli_args(
        cls,
        config_file: Path | None,
        log_level: str | None,
        modules: tuple[str, ...] = (),
    ) -> "ApplicationContext":
        """Create context from CLI arguments and perform all initialization.

        Loads configuration, configures logging and runs startup discovery.

        Args:
            config_file: Path to config file override
            log_level: Logging level override (None keeps the configured level)
            modules: Extra registration modules appended to the configured ones

        Raises:
            ConfigurationError: If configuration fails to load
            RegistrationError: If startup discovery fails
        """
        from classreg._internal.logging import setup_logging

        context = cls(config_file=config_file)
        if log_level:
            context.overrides["logging"] = {"level": log_level}

        context.load_configuration()
        config = context.get_effective_config()

        if modules:
            config.registration_modules = [*config.registration_modules, *modules]

        setup_logging(level=config.logging.level)
        logger.debug(f"CLI initialized with logs={config.logging.level}, config_file={config_file}")

        context.discover()
        return context

    def load_configuration(self) -> None:
        import yaml
        from pydantic import ValidationError

        from classreg.settings import load_config, set_config

        from .exceptions import ConfigurationError

        try:
            self.config = load_config(project_file=self.config_file, **self.overrides)
        except (ValidationError, yaml.YAMLError, FileNotFoundError) as e:
            raise ConfigurationError("Failed to load configuration", details=[str(e)]) from e

        # Library code reads get_config(); make it see the CLI's effective config
        set_config(self.config)

    def discover(self) -> None:
        from classreg.registry import (
            DiscoveryError,
            DuplicateRegistrationError,
            discover_registrations,
        )

        from .exceptions import RegistrationError

        try:
            discover_registrations()
        except (DiscoveryError, DuplicateRegistrationError) as e:
            raise RegistrationError("Failed to load registrations", details=[str(e)]) from e

    def get_effective_config(self) -> "RegistryConfig":
        if self.config is None:
            self.load_configuration()
        return self.config
