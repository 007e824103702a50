# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""classreg CLI commands.

Single source of truth for CLI command registration, used by cli.py's
LazyGroup for lazy loading.
"""

# Format: 'command_name': (relative_module, attribute_name)
_COMMAND_REGISTRY = {
    "list": (".registry", "list_cmd"),
    "show": (".registry", "show_cmd"),
    "create": (".registry", "create_cmd"),
    "config": (".config", "config_cmd"),
}

COMMAND_MAP = {
    name: (f"classreg.cli.commands{module}", attr)
    for name, (module, attr) in _COMMAND_REGISTRY.items()
}

__all__ = ["COMMAND_MAP"]
