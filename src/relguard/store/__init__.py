"""Store module exports."""

from relguard.store.engine import Store, create_store_engine
from relguard.store.ops import (
    batch_delete,
    delete_instance,
    find,
    hydrate,
    load_related,
    primary_key,
)

__all__ = [
    "Store",
    "create_store_engine",
    "batch_delete",
    "delete_instance",
    "find",
    "hydrate",
    "load_related",
    "primary_key",
]
