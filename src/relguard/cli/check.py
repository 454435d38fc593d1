"""relguard check command - report whether a record can be deleted safely."""

import json

import click

from relguard.cli.utils import (
    cli_errors,
    coerce_identifier,
    open_store,
    require_capability,
    resolve_model,
)
from relguard.config.models import RelguardConfig

EXIT_UNSAFE = 2


@click.command()
@click.argument("model")
@click.argument("identifier", metavar="ID")
@click.option("--database-url", envvar="RELGUARD__DATABASE__URL", help="SQLAlchemy database URL")
@click.option("--models-module", help="Module bare model names are looked up in")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def check_command(
    ctx: click.Context,
    model: str,
    identifier: str,
    database_url: str | None,
    models_module: str | None,
    as_json: bool,
) -> None:
    """Check whether a record has no dependents one level down.

    Exits 0 when safe to delete, 2 when dependents exist.
    """
    config: RelguardConfig = ctx.obj["config"]

    with cli_errors():
        entity_type = resolve_model(model, models_module or config.cli.models_module)
        key = coerce_identifier(entity_type, identifier)
        store = open_store(config, database_url)
        try:
            with store.session() as session:
                instance = ctx.obj["guard"].find(session, entity_type, key)
                require_capability(entity_type)
                safe = instance.can_be_safely_deleted()
        finally:
            store.dispose()

    if as_json:
        click.echo(json.dumps({"model": entity_type.__name__, "id": str(key), "safe": safe}))
    elif safe:
        click.echo(f"{entity_type.__name__} {key}: safe to delete")
    else:
        click.echo(f"{entity_type.__name__} {key}: has dependents")

    if not safe:
        ctx.exit(EXIT_UNSAFE)
