"""Rich rendering of result trees."""

from __future__ import annotations

from typing import Any

from rich.markup import escape
from rich.tree import Tree

from relguard.scan.models import ResultTree


def tree_header(model: str, identifier: Any, depth: int) -> str:
    return (
        f"Relation Tree for [yellow]{escape(model)}[/yellow] "
        f"(ID: [cyan]{escape(str(identifier))}[/cyan]) | Depth: {depth}"
    )


def node_label(relation: str, model: str, ids: list[Any]) -> str:
    id_list = escape(", ".join(str(i) for i in ids))
    return f"[green]{escape(relation)}[/green] ([yellow]{escape(model)}[/yellow]): \\[[cyan]{id_list}[/cyan]]"


def _add_branches(parent: Tree, tree: ResultTree) -> None:
    for relation, node in tree.items():
        branch = parent.add(node_label(relation, node.entity_type.__name__, node.ids))
        _add_branches(branch, node.nested)


def render_tree(tree: ResultTree, header: str) -> Tree:
    """Build a rich Tree with one branch per relation, nested as collected."""
    root = Tree(header)
    _add_branches(root, tree)
    return root
