"""Test that every owner-only mutation is gated on the resource owner."""

import pytest

from vidtube.errors import AuthenticationError, AuthorizationError
from vidtube.services.comments import CommentService
from vidtube.services.ownership import authorize_mutation, is_owner
from vidtube.services.playlists import PlaylistService
from vidtube.services.tweets import TweetService
from vidtube.services.videos import VideoService


@pytest.fixture
def resources(store, alice, make_video):
    """One of each gated resource, all owned by alice."""
    video = make_video(alice, "mine")
    other_video = make_video(alice, "also-mine")
    tweet = store.create("tweets", {"owner_id": alice["id"], "content": "tweet"})
    comment = store.create("comments", {"owner_id": alice["id"], "content": "c", "video_id": video["id"]})
    playlist = store.create("playlists", {"owner_id": alice["id"], "name": "p", "description": "d"})
    return {
        "video": video,
        "other_video": other_video,
        "tweet": tweet,
        "comment": comment,
        "playlist": playlist,
    }


MUTATIONS = {
    "update video": lambda s, r, c: VideoService(s).update(r["video"]["id"], c, title="new"),
    "delete video": lambda s, r, c: VideoService(s).delete(r["video"]["id"], c),
    "toggle publish": lambda s, r, c: VideoService(s).toggle_publish(r["video"]["id"], c),
    "update tweet": lambda s, r, c: TweetService(s).update(r["tweet"]["id"], c, "new"),
    "delete tweet": lambda s, r, c: TweetService(s).delete(r["tweet"]["id"], c),
    "update comment": lambda s, r, c: CommentService(s).update(r["comment"]["id"], c, "new"),
    "delete comment": lambda s, r, c: CommentService(s).delete(r["comment"]["id"], c),
    "update playlist": lambda s, r, c: PlaylistService(s).update(r["playlist"]["id"], c, "new", None),
    "delete playlist": lambda s, r, c: PlaylistService(s).delete(r["playlist"]["id"], c),
    "add to playlist": lambda s, r, c: PlaylistService(s).add_video(r["playlist"]["id"], r["other_video"]["id"], c),
    "remove from playlist": lambda s, r, c: PlaylistService(s).remove_video(
        r["playlist"]["id"], r["other_video"]["id"], c
    ),
}


@pytest.mark.parametrize("name", sorted(MUTATIONS))
def test_non_owner_is_rejected(store, resources, bob, name):
    before = {key: store.find_by_id(_collection(key), value["id"]) for key, value in resources.items()}

    with pytest.raises(AuthorizationError):
        MUTATIONS[name](store, resources, bob["id"])

    after = {key: store.find_by_id(_collection(key), value["id"]) for key, value in resources.items()}
    assert after == before
    assert store.count("playlist_videos") == 0


@pytest.mark.parametrize("name", sorted(MUTATIONS))
def test_owner_is_allowed(store, resources, alice, name):
    MUTATIONS[name](store, resources, alice["id"])


@pytest.mark.parametrize("name", sorted(MUTATIONS))
def test_anonymous_is_unauthenticated(store, resources, name):
    with pytest.raises(AuthenticationError):
        MUTATIONS[name](store, resources, None)


def test_owner_comparison_uses_string_form(alice):
    resource = {"owner_id": alice["id"]}
    assert is_owner(resource, str(alice["id"]))
    authorize_mutation(resource, str(alice["id"]))


def test_gate_on_custom_owner_field(alice, bob):
    edge = {"subscriber_id": alice["id"]}
    with pytest.raises(AuthorizationError):
        authorize_mutation(edge, bob["id"], owner_field="subscriber_id")


def _collection(key: str) -> str:
    return {
        "video": "videos",
        "other_video": "videos",
        "tweet": "tweets",
        "comment": "comments",
        "playlist": "playlists",
    }[key]
