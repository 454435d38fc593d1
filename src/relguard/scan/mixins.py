"""Model mixin exposing relation guard operations on instances.

Usage::

    class Author(HasRelationalDependencies, SQLModel, table=True):
        scan_relations: ClassVar[list[str]] = ["posts.comments", "profile"]
        ...

    author.can_be_safely_deleted()
    author.relation_structure(depth=2)
    author.force_cascade_delete()

The instance must be attached to a session; every call uses that session.
"""

from __future__ import annotations

from relguard.scan.models import ResultTree
from relguard.scan.ops import get_default_guard


class HasRelationalDependencies:
    """Adds dependency checks and cascade deletion to a mapped model."""

    def can_be_safely_deleted(self) -> bool:
        """Determine if the model can be deleted without leaving dependents behind."""
        return get_default_guard().is_safe_to_delete(None, self)

    def relation_structure(self, depth: int = 1) -> ResultTree:
        """Relation tree with the ids of all related records, ``depth`` levels down."""
        return get_default_guard().relation_tree(None, self, depth=depth)

    def force_cascade_delete(self) -> int:
        """Delete the model and all nested related models.

        Returns:
            Number of records deleted, this one included.
        """
        return get_default_guard().cascade_delete(None, self)
