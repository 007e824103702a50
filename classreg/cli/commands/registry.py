# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Registry inspection and object creation commands."""

import click
from rich.markup import escape
from rich.table import Table

from ..constants import ExitCode
from ..context import ApplicationContext
from ..utils import console, error_exit, success


def _resolve_or_exit(registry_name: str):
    from classreg.registry import UnknownRegistryError, get_registry_tag

    try:
        return get_registry_tag(registry_name)
    except UnknownRegistryError as e:
        error_exit(str(e), code=ExitCode.USAGE)


@click.command("list", context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", "-v", is_flag=True, help="Also list entry names under each registry")
@click.option("--kind", "-k", type=click.Choice(["factory", "singleton"], case_sensitive=False),
              help="Only list registries of this kind")
@click.pass_obj
def list_cmd(ctx: ApplicationContext, verbose: bool, kind: str | None) -> None:
    """Show all defined registries with their kind, base class and size."""
    from classreg.registry import RegistryKind, class_count, list_classes, list_registries

    tags = list_registries()
    if kind:
        wanted = RegistryKind.from_string(kind)
        tags = [tag for tag in tags if tag.kind is wanted]
    if not tags:
        console.print("[yellow]No registries defined.[/yellow]")
        console.print("Add modules to 'registration_modules' in classreg.yaml or pass --module.")
        return

    table = Table(title="Registries")
    table.add_column("Registry", style="cyan")
    table.add_column("Kind", style="white")
    table.add_column("Base class", style="white")
    table.add_column("Entries", justify="right")

    for tag in tags:
        base = f"{tag.base_class.__module__}.{tag.base_class.__qualname__}"
        table.add_row(tag.name, str(tag.kind), base, str(class_count(tag)))

    console.print(table)

    if verbose:
        for tag in tags:
            console.print(f"\n  [green]{escape(tag.name)}:[/green]")
            for name in list_classes(tag):
                console.print(f"    • {escape(name)}")


@click.command("show", context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("registry")
@click.pass_obj
def show_cmd(ctx: ApplicationContext, registry: str) -> None:
    """Show the entries of REGISTRY in registration order."""
    from classreg.registry import registry_instance

    tag = _resolve_or_exit(registry)
    reg = registry_instance(tag)

    table = Table(title=f"{tag.name} ({tag.kind}, {reg.class_count()} entries)")
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Implementation", style="white")

    for index, entry in enumerate(reg.entries()):
        table.add_row(str(index), escape(entry.name), escape(entry.origin or "?"))

    console.print(table)


@click.command("create", context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("registry")
@click.argument("name")
@click.pass_obj
def create_cmd(ctx: ApplicationContext, registry: str, name: str) -> None:
    """Create entry NAME of REGISTRY (or fetch its singleton) and print it."""
    from classreg.registry import create_object, format_not_found, get_singleton

    tag = _resolve_or_exit(registry)
    obj = get_singleton(tag, name) if tag.is_singleton else create_object(tag, name)

    if obj is None:
        error_exit(format_not_found(tag, name), code=ExitCode.ERROR)

    verb = "Fetched singleton" if tag.is_singleton else "Created"
    success(f"{verb} {escape(name)} from {escape(tag.name)}: {escape(repr(obj))}")
