# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""classreg command-line interface.

Commands:
    classreg list                 Registries and their entry counts
    classreg show REGISTRY        Entries of one registry, in registration order
    classreg create REGISTRY NAME Create (or fetch the singleton of) an entry
    classreg config               Effective configuration

Configuration is managed through ApplicationContext (context.py); commands
receive it via @click.pass_obj. Console script defined in setup.py.
"""

from .cli import create_cli, main

__all__ = [
    "create_cli",
    "main",
]
