"""Test tweets and tweet feeds."""

import pytest

from vidtube.errors import NotFoundError, ValidationError
from vidtube.services.comments import CommentService
from vidtube.services.likes import LikeService, LikeTarget
from vidtube.services.tweets import TweetService


@pytest.fixture
def tweets(store) -> TweetService:
    return TweetService(store)


def test_create_and_get(tweets, alice, bob):
    tweet = tweets.create(alice["id"], "  hello  ")
    assert tweet["content"] == "hello"

    view = tweets.get(tweet["id"], bob["id"])
    assert view["owner"]["username"] == "alice"
    assert view["likes_count"] == 0
    assert view["is_liked"] is False
    assert view["comments_count"] == 0


def test_empty_tweet_is_rejected(tweets, alice):
    with pytest.raises(ValidationError):
        tweets.create(alice["id"], "")


def test_feed_like_state(store, tweets, alice, bob):
    liked = tweets.create(alice["id"], "liked")
    tweets.create(alice["id"], "ignored")
    LikeService(store).toggle(LikeTarget.TWEET, liked["id"], bob["id"])

    page = tweets.list_for_user(alice["id"], bob["id"])
    by_content = {t["content"]: t for t in page.items}

    assert page.total_items == 2
    assert by_content["liked"]["is_liked"] is True
    assert by_content["liked"]["likes_count"] == 1
    assert by_content["ignored"]["is_liked"] is False


def test_global_feed_is_newest_first(tweets, alice, bob):
    first = tweets.create(alice["id"], "first")
    second = tweets.create(bob["id"], "second")

    page = tweets.list_all()

    assert [t["id"] for t in page.items] == [second["id"], first["id"]]


def test_delete_cascades_comments_and_likes(store, tweets, alice, bob):
    tweet = tweets.create(alice["id"], "bye")
    comment = CommentService(store).add_to_tweet(tweet["id"], bob["id"], "noo")
    likes = LikeService(store)
    likes.toggle(LikeTarget.TWEET, tweet["id"], bob["id"])
    likes.toggle(LikeTarget.COMMENT, comment["id"], alice["id"])

    tweets.delete(tweet["id"], alice["id"])

    assert store.count("tweets") == 0
    assert store.count("comments") == 0
    assert store.count("likes") == 0
    with pytest.raises(NotFoundError):
        tweets.get(tweet["id"])
