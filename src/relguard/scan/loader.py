"""Walks a RelationSpec against a live instance and collects identifiers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import structlog
from sqlmodel import Session

from relguard.scan.models import RelationSpec, ResultNode, ResultTree
from relguard.store.ops import hydrate, load_related, primary_key

logger = structlog.get_logger()


def merge_trees(trees: Iterable[ResultTree]) -> ResultTree:
    """Merge sibling result trees into one.

    Ids are unioned in first-seen order and nested subtrees are merged
    recursively, so grandchildren reached through different siblings are
    all kept. Inputs are left untouched.
    """
    merged: ResultTree = {}
    seen: dict[int, set[Any]] = {}
    for tree in trees:
        _merge_into(merged, tree, seen)
    return merged


def _merge_into(merged: ResultTree, tree: ResultTree, seen: dict[int, set[Any]]) -> None:
    # seen is keyed by id() of the accumulated node; each node keeps one id set
    for name, node in tree.items():
        target = merged.get(name)
        if target is None:
            target = merged[name] = ResultNode(entity_type=node.entity_type)
            seen[id(target)] = set()
        known = seen[id(target)]
        for identifier in node.ids:
            if identifier not in known:
                known.add(identifier)
                target.ids.append(identifier)
        _merge_into(target.nested, node.nested, seen)


class RelationTreeLoader:
    """Collects a ResultTree for one root instance."""

    def load(self, session: Session | None, instance: Any, spec: RelationSpec) -> ResultTree:
        """Hydrate everything the spec reaches, then collect.

        The walk starts from the copy of the root held by ``session``, which
        may differ from ``instance`` when the instance belongs to another
        session or none. Without a session the walk falls back to whatever
        the instance has loaded or can lazy-load on attribute access.
        """
        root = instance
        if session is not None and spec:
            root = hydrate(session, instance, spec)
        tree = self.collect(root, spec)
        logger.debug(
            "relation_tree_collected",
            model=type(instance).__name__,
            id=primary_key(root),
            relations=list(tree),
        )
        return tree

    def collect(self, instance: Any, spec: RelationSpec) -> ResultTree:
        result: ResultTree = {}
        for name, node in spec.items():
            related = load_related(instance, node.relation)

            collected = ResultNode(entity_type=node.relation.target_type)
            collected.add_ids([primary_key(r) for r in related])
            collected.nested = merge_trees([self.collect(r, node.children) for r in related])

            result[name] = collected
        return result
