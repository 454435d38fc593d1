"""Bottom-up deletion of a collected relation tree."""

from __future__ import annotations

from typing import Any

import structlog
from sqlmodel import Session

from relguard.scan.models import ResultTree
from relguard.store.ops import batch_delete, delete_instance

logger = structlog.get_logger()


class CascadeDeleteEngine:
    """Deletes a result tree deepest-first, then its root.

    Storage errors propagate immediately. Batches already issued stay
    deleted unless the caller rolls back the surrounding transaction.
    """

    def delete_tree(self, session: Session, tree: ResultTree) -> int:
        deleted = 0
        for name, node in tree.items():
            # Empty ids gate the branch: nested data under them is never deleted
            if not node.ids:
                continue
            deleted += self.delete_tree(session, node.nested)
            logger.debug("cascade_branch_delete", relation=name, model=node.entity_type.__name__)
            deleted += batch_delete(session, node.entity_type, node.ids)
        return deleted

    def delete(self, session: Session, instance: Any, tree: ResultTree) -> int:
        """Delete ``tree`` and then ``instance``; returns the total row count."""
        session.flush()
        deleted = self.delete_tree(session, tree)
        deleted += delete_instance(session, instance)
        return deleted
