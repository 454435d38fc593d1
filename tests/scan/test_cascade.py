"""Tests for bottom-up tree deletion."""

from sqlmodel import Session, select

from relguard.scan.cascade import CascadeDeleteEngine
from relguard.scan.models import ResultNode
from tests.models import Author, Comment, Post, Reply


class TestDeleteTree:
    """CascadeDeleteEngine.delete_tree() tests."""

    def test_given_empty_ids_when_deleted_then_nested_branch_skipped(self, blog: Session) -> None:
        """Nested ids under a node without ids are never deleted."""
        tree = {"posts": ResultNode(Post, [], {"comments": ResultNode(Comment, [101])})}

        assert CascadeDeleteEngine().delete_tree(blog, tree) == 0
        blog.commit()

        assert blog.get(Comment, 101) is not None

    def test_given_nested_ids_when_deleted_then_children_before_parents(self, blog: Session) -> None:
        tree = {
            "comments": ResultNode(
                Comment, [100, 102], {"replies": ResultNode(Reply, [1000, 1001])}
            )
        }

        assert CascadeDeleteEngine().delete_tree(blog, tree) == 4
        blog.commit()

        assert [c.id for c in blog.exec(select(Comment)).all()] == [101]

    def test_given_pending_changes_when_root_deleted_then_flushed_first(
        self, blog: Session, author: Author
    ) -> None:
        blog.add(Post(id=12, title="draft", author_id=2))

        tree = {"posts": ResultNode(Post, [12])}

        deleted = CascadeDeleteEngine().delete(blog, blog.get(Author, 2), tree)
        blog.commit()

        assert deleted == 2
        assert blog.get(Post, 12) is None
        assert [a.id for a in blog.exec(select(Author)).all()] == [author.id]
