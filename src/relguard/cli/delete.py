"""relguard delete command - delete a record and everything depending on it."""

from collections import Counter
from typing import Any

import click
import questionary
from rich.console import Console

from relguard.cli.utils import (
    cli_errors,
    coerce_identifier,
    open_store,
    require_capability,
    resolve_model,
)
from relguard.config.models import RelguardConfig
from relguard.scan.models import ResultTree, tree_ids


def _confirm() -> bool:
    answer = questionary.select(
        "This action cannot be undone. Are you sure?",
        choices=[
            questionary.Choice("No, keep the records", value=False),
            questionary.Choice("Yes, delete everything", value=True),
        ],
        style=questionary.Style(
            [
                ("question", "bold"),
                ("highlighted", "fg:red bold"),
                ("selected", "fg:red"),
            ]
        ),
    ).ask()
    return bool(answer)


def _print_preview(console: Console, model: str, key: Any, preview: ResultTree) -> None:
    counts = Counter(entity_type.__name__ for entity_type, _ in tree_ids(preview))
    console.print("\n[bold]The following will be permanently deleted:[/bold]\n")
    console.print(f"  [cyan]•[/cyan] {model} {key}")
    for name, count in counts.items():
        console.print(f"  [cyan]•[/cyan] {count} x {name}")
    console.print()


@click.command()
@click.argument("model")
@click.argument("identifier", metavar="ID")
@click.option("--database-url", envvar="RELGUARD__DATABASE__URL", help="SQLAlchemy database URL")
@click.option("--models-module", help="Module bare model names are looked up in")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_command(
    ctx: click.Context,
    model: str,
    identifier: str,
    database_url: str | None,
    models_module: str | None,
    yes: bool,
) -> None:
    """Delete a record and all of its dependents, deepest first.

    Runs in a single transaction: any failure rolls the whole cascade back.
    """
    config: RelguardConfig = ctx.obj["config"]
    guard = ctx.obj["guard"]
    console = Console(stderr=True, highlight=False)

    with cli_errors():
        entity_type = resolve_model(model, models_module or config.cli.models_module)
        key = coerce_identifier(entity_type, identifier)
        store = open_store(config, database_url)
        try:
            with store.transaction() as session:
                instance = guard.find(session, entity_type, key)
                require_capability(entity_type)
                _print_preview(console, entity_type.__name__, key, guard.cascade_preview(session, instance))

                if not yes and not _confirm():
                    console.print("[dim]Cancelled[/dim]")
                    session.rollback()
                    return

                deleted = instance.force_cascade_delete()
        finally:
            store.dispose()

    console.print(f"[green]✓[/green] Deleted {deleted} record(s)")
