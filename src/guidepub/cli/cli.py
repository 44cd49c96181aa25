"""CLI entrypoint: Typer app definition, logging setup and command registration"""

import logging
from typing import Annotated

import typer

from guidepub.cli.commands import (
    build_cmd, category_cmd, check_cmd, commit_cmd, init_cmd, related_cmd, show_cmd, tag_cmd,
)
from guidepub.config import load_config


app = typer.Typer(name="guidepub", no_args_is_help=True, help="Technical guide catalog builder")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log at DEBUG level")] = False,
    ):
    """Configure logging from config.yaml / GUIDEPUB_LOG_LEVEL before running a command."""
    try:
        level = "DEBUG" if verbose else load_config().log_level
    except ValueError:
        # the command reports the config error itself
        level = "WARNING"
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("guidepub").setLevel(level)


app.command(name="build")(build_cmd)
app.command(name="check")(check_cmd)
app.command(name="show")(show_cmd)
app.command(name="related")(related_cmd)
app.command(name="tag")(tag_cmd)
app.command(name="category")(category_cmd)
app.command(name="commit")(commit_cmd)
app.command(name="init")(init_cmd)
