"""Post Queries — listing, profile and detail read models.

Invariants:
    - Listings newest first with author names and likers
    - Unknown post → ResourceNotFoundError; unknown author → ResourceNotFoundError
"""

from uuid import uuid4

import pytest

from blogify.core.errors import ResourceNotFoundError
from blogify.services.post_queries import PostQueries


@pytest.fixture
def queries(test_db):
    return PostQueries(test_db)


async def test_list_posts_newest_first(queries, lifecycle, alice, bob, actor_for):
    await lifecycle.create_post(actor_for(alice), "older", "b")
    await lifecycle.create_post(actor_for(bob), "newer", "b")
    views = await queries.list_posts()
    assert [v.post.title for v in views] == ["newer", "older"]
    assert [v.author_name for v in views] == ["Bob Reader", "Alice Writer"]


async def test_list_empty(queries):
    assert await queries.list_posts() == []


async def test_list_by_owner_only_their_posts(queries, lifecycle, alice, bob, actor_for):
    await lifecycle.create_post(actor_for(alice), "a1", "b")
    await lifecycle.create_post(actor_for(bob), "b1", "b")
    author, views = await queries.list_by_owner(alice.id)
    assert author.id == alice.id
    assert [v.post.title for v in views] == ["a1"]


async def test_list_by_unknown_owner(queries):
    with pytest.raises(ResourceNotFoundError):
        await queries.list_by_owner(uuid4())


async def test_get_post_includes_likers(queries, lifecycle, alice, bob, actor_for):
    post = await lifecycle.create_post(actor_for(alice), "t", "b")
    await lifecycle.toggle_like(post.id, actor_for(bob))
    view = await queries.get_post(post.id)
    assert view.liker_ids == [bob.id]
    assert view.author_name == "Alice Writer"


async def test_get_missing_post(queries):
    with pytest.raises(ResourceNotFoundError):
        await queries.get_post(uuid4())
