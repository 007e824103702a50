# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""classreg configuration schema using Pydantic.

Configuration Priority
----------------------
Settings are loaded from multiple sources with the following priority (highest to lowest):
1. CLI arguments (passed to RegistryConfig constructor)
2. Environment variables (CLASSREG_* prefix)
3. Project config file (classreg.yaml)
4. Built-in defaults (Field defaults in RegistryConfig)

The project config file is found by walking up from the CWD, or looked up
only in CLASSREG_PROJECT_DIR when that variable is set.
"""

import logging
import os
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from classreg._internal.io.yaml import load_config_file
from classreg.registry.constants import DEFAULT_DUPLICATE_POLICY

logger = logging.getLogger(__name__)

_PROJECT_CONFIG_FILE = "classreg.yaml"
_PROJECT_DIR_ENV = "CLASSREG_PROJECT_DIR"

# Explicit project file for the RegistryConfig being constructed (set by load_config)
_project_file_var: ContextVar[Path | None] = ContextVar("classreg_project_file", default=None)


def _find_project_config() -> Path | None:
    """Find project configuration file with upward directory walk.

    Search order:
    1. If CLASSREG_PROJECT_DIR is set, check that directory only
    2. Otherwise, walk up from CWD to find classreg.yaml

    Returns:
        Path to config file, or None if not found
    """
    if project_dir_override := os.environ.get(_PROJECT_DIR_ENV):
        candidate = Path(project_dir_override).resolve() / _PROJECT_CONFIG_FILE
        # Don't fall through to the upward walk - the user set the location
        return candidate if candidate.exists() else None

    current = Path.cwd().resolve()
    while current != current.parent:
        candidate = current / _PROJECT_CONFIG_FILE
        if candidate.exists():
            return candidate
        current = current.parent

    return None


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Settings source reading the project classreg.yaml.

    Raises:
        yaml.YAMLError: If the config file has syntax errors
        FileNotFoundError: If an explicit project_file doesn't exist
    """

    def __init__(self, settings_cls: type[BaseSettings], project_file: Path | None = None):
        super().__init__(settings_cls)
        # Explicit file must exist; a typo should not silently fall back to defaults
        self.project_file = Path(project_file) if project_file is not None else _find_project_config()

        self._data: dict[str, Any] = {}
        if self.project_file is not None:
            self._data = load_config_file(self.project_file)
            logger.debug(f"Loaded config file {self.project_file}")

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        if field_name in self._data:
            return self._data[field_name], field_name, True
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._data.copy()


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="warning",
        description="Console verbosity level: quiet | normal | verbose | debug (or error | warning | info)",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("level")
    @classmethod
    def _check_level(cls, v: str) -> str:
        from classreg._internal.logging import LEVEL_MAP

        if v.lower() not in LEVEL_MAP:
            raise ValueError(f"Unknown log level '{v}'. Must be one of: {', '.join(LEVEL_MAP)}")
        return v.lower()


class RegistryConfig(BaseSettings):
    """Configuration schema with hierarchical priority.

    Priority order (highest to lowest):
    1. CLI arguments (passed to constructor)
    2. Environment variables (CLASSREG_* prefix)
    3. Project config (classreg.yaml)
    4. Built-in defaults
    """

    registration_modules: list[str] = Field(
        default_factory=list,
        description=(
            "Modules imported at startup, in order. Importing fires @register_class "
            "decorators, then each module's register_all() is called once."
        ),
    )
    load_entry_points: bool = Field(
        default=True,
        description="Also run registrations published under the 'classreg.registrations' entry point group",
    )
    duplicate_policy: Literal["error", "warn"] = Field(
        default=DEFAULT_DUPLICATE_POLICY,
        description=(
            "What to do when a name is registered twice in one registry: "
            "'error' fails fast, 'warn' logs and keeps the first registration"
        ),
    )
    strict_discovery: bool = Field(
        default=True,
        description="Raise when a registration module or entry point fails to load (otherwise log and skip)",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )

    model_config = SettingsConfigDict(
        env_prefix="CLASSREG_",
        env_nested_delimiter="__",
        validate_assignment=True,
        extra="forbid",
        case_sensitive=False,
        env_file=None,  # Config files handled via custom source
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources.

        Priority order (first source wins):
        1. Init settings (CLI/constructor args)
        2. Environment variables (CLASSREG_*)
        3. YAML project file (custom source)
        4. Field defaults (built into pydantic)
        """
        return (
            init_settings,
            env_settings,
            YamlSettingsSource(settings_cls, project_file=_project_file_var.get()),
        )

