"""Test comment threads: creation, replies, like state and cascading deletes."""

import pytest

from vidtube import settings
from vidtube.errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from vidtube.services.comments import CommentService
from vidtube.services.likes import LikeService, LikeTarget


@pytest.fixture
def comments(store) -> CommentService:
    return CommentService(store)


@pytest.fixture
def video(alice, make_video):
    return make_video(alice, "launch")


def test_comment_then_reply_inherits_root(comments, alice, bob, video):
    """B comments on A's video, A replies: the reply points at the comment and the video."""
    comment = comments.add_to_video(video["id"], bob["id"], "hi")
    assert comment["content"] == "hi"
    assert comment["parent_comment_id"] is None
    assert comment["video_id"] == video["id"]

    reply = comments.reply(comment["id"], alice["id"], "thanks")
    assert reply["parent_comment_id"] == comment["id"]
    assert reply["video_id"] == video["id"]
    assert reply["tweet_id"] is None


def test_reply_to_tweet_comment_inherits_tweet(store, comments, alice, bob):
    tweet = store.create("tweets", {"owner_id": alice["id"], "content": "hello world"})
    comment = comments.add_to_tweet(tweet["id"], bob["id"], "nice")
    reply = comments.reply(comment["id"], alice["id"], "ty")

    assert reply["tweet_id"] == tweet["id"]
    assert reply["video_id"] is None


def test_comment_needs_exactly_one_root(store, alice, bob, video):
    """A check-constraint failure is a storage error, never a duplicate."""
    tweet = store.create("tweets", {"owner_id": alice["id"], "content": "hello"})
    with pytest.raises(StoreError):
        store.create(
            "comments",
            {"owner_id": bob["id"], "content": "x", "video_id": video["id"], "tweet_id": tweet["id"]},
        )
    with pytest.raises(StoreError):
        store.create("comments", {"owner_id": bob["id"], "content": "x"})


def test_like_state_is_relative_to_caller(store, comments, alice, bob, carol, video):
    comment = comments.add_to_video(video["id"], bob["id"], "hi")
    LikeService(store).toggle(LikeTarget.COMMENT, comment["id"], bob["id"])

    seen_by_bob = comments.list_video_comments(video["id"], bob["id"]).items[0]
    seen_by_carol = comments.list_video_comments(video["id"], carol["id"]).items[0]
    seen_anonymously = comments.list_video_comments(video["id"], None).items[0]

    assert seen_by_bob["likes_count"] == 1
    assert seen_by_bob["is_liked"] is True
    assert seen_by_carol["likes_count"] == 1
    assert seen_by_carol["is_liked"] is False
    assert seen_anonymously["is_liked"] is False


def test_top_level_listing_excludes_replies(comments, alice, bob, video):
    first = comments.add_to_video(video["id"], bob["id"], "first")
    comments.reply(first["id"], alice["id"], "reply")
    second = comments.add_to_video(video["id"], alice["id"], "second")

    page = comments.list_video_comments(video["id"])

    assert page.total_items == 2
    assert [c["id"] for c in page.items] == [second["id"], first["id"]]
    assert page.items[1]["replies_count"] == 1
    assert page.items[1]["owner"]["username"] == "bob"
    assert "email" not in page.items[1]["owner"]


def test_replies_use_narrow_default_page(comments, alice, bob, video):
    parent = comments.add_to_video(video["id"], bob["id"], "question")
    for i in range(3):
        comments.reply(parent["id"], alice["id"], f"answer {i}")

    page = comments.list_replies(parent["id"])

    assert page.limit == settings.DEFAULT_REPLY_LIMIT
    assert len(page.items) == settings.DEFAULT_REPLY_LIMIT
    assert page.total_items == 3
    assert page.has_next is True


def test_replies_are_one_level(comments, alice, bob, video):
    parent = comments.add_to_video(video["id"], bob["id"], "a")
    child = comments.reply(parent["id"], alice["id"], "b")
    comments.reply(child["id"], bob["id"], "c")

    page = comments.list_replies(parent["id"], limit=10)
    assert [r["id"] for r in page.items] == [child["id"]]
    assert page.items[0]["replies_count"] == 1


def test_replies_of_missing_comment(comments):
    with pytest.raises(NotFoundError):
        comments.list_replies("0b0e7c3e-4a55-4bc6-9d0a-6a31b0bfa0a1")


@pytest.mark.parametrize("content", [None, "", "   "])
def test_blank_content_is_rejected(comments, bob, video, content):
    with pytest.raises(ValidationError):
        comments.add_to_video(video["id"], bob["id"], content)


def test_comment_on_missing_video(comments, bob):
    with pytest.raises(NotFoundError):
        comments.add_to_video("8c4b3d3e-0d7e-4d0a-9f59-9a7d9a1c2b3c", bob["id"], "hi")


def test_malformed_id_is_rejected(comments, bob):
    with pytest.raises(ValidationError):
        comments.add_to_video("not-an-id", bob["id"], "hi")


def test_anonymous_caller_cannot_comment(comments, video):
    with pytest.raises(AuthenticationError):
        comments.add_to_video(video["id"], None, "hi")


def test_only_owner_can_edit(comments, alice, bob, video):
    comment = comments.add_to_video(video["id"], bob["id"], "hi")

    with pytest.raises(AuthorizationError):
        comments.update(comment["id"], alice["id"], "hacked")

    updated = comments.update(comment["id"], bob["id"], "hello")
    assert updated["content"] == "hello"


def test_delete_removes_subtree_and_likes(store, comments, alice, bob, carol, video):
    root = comments.add_to_video(video["id"], bob["id"], "root")
    child = comments.reply(root["id"], alice["id"], "child")
    grandchild = comments.reply(child["id"], carol["id"], "grandchild")
    sibling = comments.add_to_video(video["id"], carol["id"], "sibling")
    likes = LikeService(store)
    likes.toggle(LikeTarget.COMMENT, grandchild["id"], alice["id"])
    likes.toggle(LikeTarget.COMMENT, sibling["id"], alice["id"])

    with pytest.raises(AuthorizationError):
        comments.delete(root["id"], alice["id"])

    result = comments.delete(root["id"], bob["id"])

    assert result["deleted_replies"] == 2
    assert store.count("comments") == 1
    assert store.find_by_id("comments", sibling["id"]) is not None
    assert store.count("likes") == 1


def test_delete_missing_comment(comments, bob):
    with pytest.raises(NotFoundError):
        comments.delete("0b0e7c3e-4a55-4bc6-9d0a-6a31b0bfa0a1", bob["id"])
