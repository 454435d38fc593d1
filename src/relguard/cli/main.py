"""relguard CLI."""

from pathlib import Path

import click

from relguard import __version__
from relguard.cli.check import check_command
from relguard.cli.delete import delete_command
from relguard.cli.tree import tree_command
from relguard.cli.utils import cli_errors
from relguard.config.loader import load_config
from relguard.core.logging import clear_request_id, configure_logging, set_request_id
from relguard.scan.ops import RelationGuard, set_default_guard


@click.group()
@click.version_option(version=__version__, prog_name="relguard")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: ./.relguard.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_file: Path | None) -> None:
    """relguard - inspect and cascade-delete related records."""
    ctx.ensure_object(dict)
    with cli_errors():
        config = load_config(config_file=config_file)
    if verbose:
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)
    set_request_id()
    ctx.call_on_close(clear_request_id)

    guard = RelationGuard.from_config(config.guard)
    set_default_guard(guard)

    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config
    ctx.obj["guard"] = guard


cli.add_command(tree_command, name="tree")
cli.add_command(check_command, name="check")
cli.add_command(delete_command, name="delete")


if __name__ == "__main__":
    cli()
