"""Relation scanning: schema discovery, spec building and pattern parsing.

Storage-backed pieces (loader, cascade engine, guard operations) live in
their own modules and are re-exported from the top-level package.
"""

from relguard.scan.models import (
    UNLIMITED_DEPTH,
    WILDCARD,
    Cardinality,
    PatternPath,
    RelationDescriptor,
    RelationSpec,
    ResultNode,
    ResultTree,
    SpecNode,
    tree_ids,
    tree_to_dict,
)
from relguard.scan.patterns import parse_pattern, parse_patterns
from relguard.scan.schema import RelationSchemaResolver, register_relations
from relguard.scan.spec import RelationSpecBuilder

__all__ = [
    "UNLIMITED_DEPTH",
    "WILDCARD",
    "Cardinality",
    "PatternPath",
    "RelationDescriptor",
    "RelationSchemaResolver",
    "RelationSpec",
    "RelationSpecBuilder",
    "ResultNode",
    "ResultTree",
    "SpecNode",
    "parse_pattern",
    "parse_patterns",
    "register_relations",
    "tree_ids",
    "tree_to_dict",
]
