"""relguard tree command - visualize a record's relations and their ids."""

import json

import click
from rich.console import Console

from relguard.cli.render import render_tree, tree_header
from relguard.cli.utils import (
    cli_errors,
    coerce_identifier,
    open_store,
    require_capability,
    resolve_model,
)
from relguard.config.models import RelguardConfig
from relguard.scan.models import tree_to_dict


# DEPTH may be -1, which would otherwise parse as an option
@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("model", required=False)
@click.argument("identifier", metavar="ID", required=False)
@click.argument("depth", required=False, type=int)
@click.option("--database-url", envvar="RELGUARD__DATABASE__URL", help="SQLAlchemy database URL")
@click.option("--models-module", help="Module bare model names are looked up in")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def tree_command(
    ctx: click.Context,
    model: str | None,
    identifier: str | None,
    depth: int | None,
    database_url: str | None,
    models_module: str | None,
    as_json: bool,
) -> None:
    """Visualize a model's relations and their ids as a tree.

    MODEL is a class name in the models module, or a dotted path.
    DEPTH is the nesting depth (-1 for unlimited).
    """
    config: RelguardConfig = ctx.obj["config"]
    model = model or click.prompt("Enter the model class (e.g., User)")
    identifier = identifier or click.prompt("Enter the model ID")
    if depth is None:
        depth = config.guard.default_depth

    with cli_errors():
        entity_type = resolve_model(model, models_module or config.cli.models_module)
        key = coerce_identifier(entity_type, identifier)
        store = open_store(config, database_url)
        try:
            with store.session() as session:
                instance = ctx.obj["guard"].find(session, entity_type, key)
                require_capability(entity_type)
                result = instance.relation_structure(depth)

                if as_json:
                    click.echo(json.dumps(tree_to_dict(result), default=str))
                    return

                console = Console(highlight=False, soft_wrap=True)
                console.print()
                console.print(render_tree(result, tree_header(entity_type.__name__, key, depth)))
                console.print()
        finally:
            store.dispose()
