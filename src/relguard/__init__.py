"""relguard - relation-aware safe and cascading deletes for SQLModel models."""

from relguard.scan.cascade import CascadeDeleteEngine
from relguard.scan.loader import RelationTreeLoader, merge_trees
from relguard.scan.mixins import HasRelationalDependencies
from relguard.scan.models import (
    UNLIMITED_DEPTH,
    Cardinality,
    RelationDescriptor,
    ResultNode,
    ResultTree,
    tree_ids,
    tree_to_dict,
)
from relguard.scan.ops import (
    RelationGuard,
    get_default_guard,
    relations_are_empty,
    set_default_guard,
)
from relguard.scan.schema import RelationSchemaResolver, register_relations
from relguard.scan.spec import RelationSpecBuilder

__version__ = "0.1.0"

__all__ = [
    "UNLIMITED_DEPTH",
    "CascadeDeleteEngine",
    "Cardinality",
    "HasRelationalDependencies",
    "RelationDescriptor",
    "RelationGuard",
    "RelationSchemaResolver",
    "RelationSpecBuilder",
    "RelationTreeLoader",
    "ResultNode",
    "ResultTree",
    "get_default_guard",
    "merge_trees",
    "register_relations",
    "relations_are_empty",
    "set_default_guard",
    "tree_ids",
    "tree_to_dict",
]
