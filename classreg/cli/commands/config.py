# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import logging

import click
import yaml
from rich.syntax import Syntax

from ..context import ApplicationContext
from ..utils import console

logger = logging.getLogger(__name__)


@click.command("config", context_settings={"help_option_names": ["-h", "--help"]})
@click.pass_obj
def config_cmd(ctx: ApplicationContext) -> None:
    """Display the effective configuration.

    \b
    Priority (highest first): CLI options, CLASSREG_* environment
    variables, classreg.yaml, built-in defaults.
    """
    config = ctx.get_effective_config()
    logger.debug("Showing effective config")

    rendered = yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False, default_flow_style=False)
    console.print(Syntax(rendered, "yaml", theme="ansi_dark", background_color="default"))
