"""Test idempotent edge toggling and its race handling."""

import pytest

from vidtube.errors import ConflictError, NotFoundError, StoreError, ValidationError
from vidtube.services.likes import LikeService, LikeTarget
from vidtube.services.subscriptions import SubscriptionService
from vidtube.services.toggles import EdgeToggleService


def test_like_toggle_oscillates(store, alice, bob, make_video):
    video = make_video(alice)
    likes = LikeService(store)

    states = [likes.toggle(LikeTarget.VIDEO, video["id"], bob["id"])["is_liked"] for _ in range(3)]

    assert states == [True, False, True]
    assert store.count("likes", {"video_id": video["id"]}) == 1


def test_like_targets_are_independent(store, alice, bob, make_video):
    """A like on a comment never counts as a like on the video it sits under."""
    video = make_video(alice)
    comment = store.create("comments", {"owner_id": alice["id"], "content": "c", "video_id": video["id"]})
    likes = LikeService(store)

    likes.toggle(LikeTarget.COMMENT, comment["id"], bob["id"])

    assert store.count("likes", {"video_id": video["id"]}) == 0
    assert likes.toggle(LikeTarget.VIDEO, video["id"], bob["id"]) == {"is_liked": True}


def test_toggle_unknown_target(store, bob):
    with pytest.raises(NotFoundError):
        LikeService(store).toggle(LikeTarget.TWEET, "5f0f4b8e-7e7a-4d55-8f5c-3f1d2f6a9b10", bob["id"])


def test_subscription_toggle_oscillates(store, alice, bob):
    subscriptions = SubscriptionService(store)

    assert subscriptions.toggle(alice["id"], bob["id"]) == {"subscribed": True}
    assert subscriptions.status(alice["id"], bob["id"]) == {"subscribed": True}
    assert subscriptions.toggle(alice["id"], bob["id"]) == {"subscribed": False}
    assert subscriptions.status(alice["id"], bob["id"]) == {"subscribed": False}


def test_self_subscription_is_rejected(store, alice):
    with pytest.raises(ValidationError):
        SubscriptionService(store).toggle(alice["id"], alice["id"])
    assert store.count("subscriptions") == 0


class RacingStore:
    """Store double whose edge lookups always lose the race."""

    def __init__(self, existing=None, create_error=None, delete_error=None):
        self.existing = existing or []
        self.create_error = create_error
        self.delete_error = delete_error
        self.created = []

    def find_many(self, collection, predicate=None, sort=(), skip=0, limit=None):
        return list(self.existing)

    def create(self, collection, doc):
        if self.create_error:
            raise self.create_error
        self.created.append(doc)
        return {"id": "new", **doc}

    def delete_by_id(self, collection, id):
        if self.delete_error:
            raise self.delete_error


def test_duplicate_insert_collapses_to_active():
    """Two concurrent 'like' toggles: the loser's insert conflicts but it still reports active."""
    toggles = EdgeToggleService(RacingStore(create_error=ConflictError()))
    assert toggles.toggle("likes", {"liked_by_id": "u", "video_id": "v"}).active is True


def test_concurrent_removal_reports_inactive():
    toggles = EdgeToggleService(RacingStore(existing=[{"id": "edge"}], delete_error=NotFoundError()))
    assert toggles.toggle("likes", {"liked_by_id": "u", "video_id": "v"}).active is False


def test_unique_constraint_backs_the_toggle(store, alice, bob, make_video):
    video = make_video(alice)
    store.create("likes", {"liked_by_id": bob["id"], "video_id": video["id"]})
    with pytest.raises(ConflictError):
        store.create("likes", {"liked_by_id": bob["id"], "video_id": video["id"]})


def test_check_violation_is_not_reported_active(store, alice):
    """An edge the schema rejects outright is an error, not a concurrent duplicate."""
    toggles = EdgeToggleService(store)

    with pytest.raises(StoreError):
        toggles.toggle("subscriptions", {"subscriber_id": alice["id"], "channel_id": alice["id"]})
    assert store.count("subscriptions") == 0
    assert toggles.is_active("subscriptions", {"subscriber_id": alice["id"], "channel_id": alice["id"]}) is False


def test_store_leaves_session_usable_after_integrity_failure(store, alice, bob):
    with pytest.raises(StoreError):
        store.create("subscriptions", {"subscriber_id": bob["id"], "channel_id": bob["id"]})

    store.create("subscriptions", {"subscriber_id": bob["id"], "channel_id": alice["id"]})
    assert store.count("subscriptions") == 1
