"""Data types shared by the relation scanner and the cascade engine.

A scan runs in two phases:
- A RelationSpec (relation name -> SpecNode) is built from an entity type,
  a list of selection patterns and a depth bound. No I/O.
- A ResultTree (relation name -> ResultNode) is collected by walking the
  spec against a live instance.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

WILDCARD = "*"
UNLIMITED_DEPTH = -1


class Cardinality(str, Enum):
    """How many target records a relation can hold for one parent."""

    ONE = "one"
    MANY = "many"


@dataclass(frozen=True, slots=True)
class RelationDescriptor:
    """A relation declared directly on an entity type."""

    name: str
    cardinality: Cardinality
    target_type: type[Any]


@dataclass(frozen=True, slots=True)
class PatternPath:
    """One parsed selection pattern.

    ``"*"`` parses to a wildcard with no segments; ``"posts.comments"``
    parses to segments ``("posts", "comments")``.
    """

    segments: tuple[str, ...] = ()
    wildcard: bool = False

    @property
    def head(self) -> str | None:
        return self.segments[0] if self.segments else None

    def tail(self) -> PatternPath | None:
        """Path below the first segment, or None if nothing remains."""
        if len(self.segments) < 2:
            return None
        rest = self.segments[1:]
        if rest == (WILDCARD,):
            return PatternPath(wildcard=True)
        return PatternPath(segments=rest)

    def __str__(self) -> str:
        return WILDCARD if self.wildcard else ".".join(self.segments)


@dataclass(slots=True)
class SpecNode:
    """A relation selected for traversal.

    ``depth`` is the remaining depth at this node (-1 = unlimited);
    ``patterns`` are the child patterns that produced ``children``.
    """

    relation: RelationDescriptor
    depth: int
    patterns: tuple[PatternPath, ...] = ()
    children: dict[str, SpecNode] = field(default_factory=dict)


RelationSpec = dict[str, SpecNode]


@dataclass(slots=True)
class ResultNode:
    """Identifiers collected for one relation, merged across all parents."""

    entity_type: type[Any]
    ids: list[Any] = field(default_factory=list)
    nested: dict[str, ResultNode] = field(default_factory=dict)

    def add_ids(self, ids: list[Any]) -> None:
        """Append ids not seen yet, keeping first-seen order."""
        seen = set(self.ids)
        for identifier in ids:
            if identifier not in seen:
                seen.add(identifier)
                self.ids.append(identifier)

    def is_empty(self) -> bool:
        return not self.ids and all(child.is_empty() for child in self.nested.values())

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "ids": list(self.ids),
            "model": self.entity_type.__name__,
            "nested": tree_to_dict(self.nested),
        }


ResultTree = dict[str, ResultNode]


def tree_to_dict(tree: ResultTree) -> dict[str, Any]:
    return {name: node.to_dict() for name, node in tree.items()}


def tree_ids(tree: ResultTree) -> Iterator[tuple[type[Any], Any]]:
    """Yield every (entity_type, id) pair in the tree, parents before children."""
    for node in tree.values():
        for identifier in node.ids:
            yield node.entity_type, identifier
        yield from tree_ids(node.nested)
