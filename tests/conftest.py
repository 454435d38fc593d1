"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides a seeded in-memory store shared by the scan and CLI tests.
"""

import sys
from collections.abc import Generator
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local relguard package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from sqlmodel import Session  # noqa: E402

from relguard.store.engine import Store  # noqa: E402
from tests.models import Author, Comment, Post, Profile, Reply, Tag  # noqa: E402


def seed_blog(session: Session) -> None:
    """Author 1 with two posts, three comments, two replies and a profile.

    Author 1
    ├── posts: 10, 11
    │   └── comments: 100, 101 (post 10), 102 (post 11)
    │       └── replies: 1000 (comment 100), 1001 (comment 102)
    └── profile: 5
    Author 2 has nothing. Tag 9 has no relations.
    """
    session.add(Author(id=1, name="ada"))
    session.add(Author(id=2, name="grace"))
    session.add(Tag(id=9, label="misc"))
    session.add_all(
        [
            Post(id=10, title="first", author_id=1),
            Post(id=11, title="second", author_id=1),
            Profile(id=5, bio="hello", author_id=1),
        ]
    )
    session.add_all(
        [
            Comment(id=100, post_id=10),
            Comment(id=101, post_id=10),
            Comment(id=102, post_id=11),
        ]
    )
    session.add_all([Reply(id=1000, comment_id=100), Reply(id=1001, comment_id=102)])
    session.commit()


@pytest.fixture
def store() -> Generator[Store, None, None]:
    """Fresh in-memory SQLite store with all tables created."""
    store = Store("sqlite://")
    store.create_all()
    yield store
    store.dispose()


@pytest.fixture
def session(store: Store) -> Generator[Session, None, None]:
    with store.session() as session:
        yield session


@pytest.fixture
def blog(session: Session) -> Session:
    """Session over a seeded blog database."""
    seed_blog(session)
    session.expire_all()
    return session


@pytest.fixture
def author(blog: Session) -> Author:
    found = blog.get(Author, 1)
    assert found is not None
    return found
