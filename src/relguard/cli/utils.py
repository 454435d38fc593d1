"""CLI utilities: model lookup, identifier parsing and error translation."""

from __future__ import annotations

import importlib
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import click
from sqlalchemy import inspect

from relguard.config.models import RelguardConfig
from relguard.core.errors import GuardError, RelguardError
from relguard.scan.mixins import HasRelationalDependencies
from relguard.scan.schema import mapper_for
from relguard.store.engine import Store


def _split_model_path(name: str, models_module: str) -> tuple[str, str]:
    if ":" in name:
        module, _, attr = name.partition(":")
        return module, attr
    if "." in name:
        module, _, attr = name.rpartition(".")
        return module, attr
    return models_module, name


def resolve_model(name: str, models_module: str) -> type[Any]:
    """Find a mapped model class by bare name, ``module.Class`` or ``module:Class``.

    Raises:
        GuardError: If the module or class cannot be found, or the class is not mapped.
    """
    module_name, attr = _split_model_path(name, models_module)
    qualified = f"{module_name}.{attr}"
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise GuardError.unresolvable_type(qualified, f"cannot import {module_name}: {e}") from e

    entity_type = getattr(module, attr, None)
    if not isinstance(entity_type, type):
        raise GuardError.unresolvable_type(qualified, "no such class")
    if mapper_for(entity_type) is None:
        raise GuardError.unresolvable_type(qualified, "class is not a mapped model")
    return entity_type


def require_capability(entity_type: type[Any]) -> None:
    """Ensure the model mixes in HasRelationalDependencies."""
    if not issubclass(entity_type, HasRelationalDependencies):
        raise GuardError.capability_missing(
            entity_type.__name__, "relation_structure() (mix in HasRelationalDependencies)"
        )


def coerce_identifier(entity_type: type[Any], raw: str) -> Any:
    """Convert a command line id to the primary key's Python type.

    Composite keys are given comma separated, in key column order.
    """
    columns = inspect(entity_type).primary_key
    parts = [raw] if len(columns) == 1 else raw.split(",")
    if len(parts) != len(columns):
        raise GuardError.record_not_found(entity_type.__name__, raw)

    values: list[Any] = []
    for column, part in zip(columns, parts, strict=True):
        try:
            python_type = column.type.python_type
        except NotImplementedError:
            values.append(part)
            continue
        try:
            values.append(python_type(part.strip()))
        except (TypeError, ValueError) as e:
            raise GuardError.record_not_found(entity_type.__name__, raw) from e
    return values[0] if len(values) == 1 else tuple(values)


def open_store(config: RelguardConfig, database_url: str | None) -> Store:
    url = database_url or config.database.url
    if not url:
        raise click.ClickException(
            "No database URL configured. Pass --database-url or set RELGUARD__DATABASE__URL."
        )
    return Store(url, busy_timeout_ms=config.database.busy_timeout_ms, echo=config.database.echo)


@contextmanager
def cli_errors() -> Iterator[None]:
    """Turn relguard errors into click errors (exit code 1, message on stderr)."""
    try:
        yield
    except RelguardError as e:
        raise click.ClickException(e.message) from e
