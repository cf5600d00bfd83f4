"""View specs for every denormalized read the API serves."""

from __future__ import annotations

from typing import Any, Mapping

from .derive import CALLER, Derived, contains, count, equals, first, pluck, total
from .pipeline import Join, Sort, ViewSpec

# Joined users never expose credentials or email
USER_SUMMARY = ("id", "username", "full_name", "avatar_url")

VIDEO_CARD = (
    "id",
    "owner_id",
    "title",
    "description",
    "video_file_url",
    "thumbnail_url",
    "duration",
    "views",
    "is_published",
    "created_at",
)

COMMENT_FIELDS = (
    "id",
    "owner_id",
    "content",
    "video_id",
    "tweet_id",
    "parent_comment_id",
    "created_at",
    "updated_at",
)

TWEET_FIELDS = ("id", "owner_id", "content", "created_at", "updated_at")

PLAYLIST_FIELDS = ("id", "owner_id", "name", "description", "created_at", "updated_at")


def _owner(local_field: str = "owner_id") -> Join:
    return Join("owner", "users", local_field, "id", project=USER_SUMMARY)


def _likes(target_field: str) -> Join:
    return Join("likes", "likes", "id", target_field, project=("liked_by_id",))


def _published(include_unpublished: bool) -> dict[str, Any]:
    return {} if include_unpublished else {"is_published": True}


# ============================================================================
# COMMENTS & TWEETS
# ============================================================================


def comment_thread(match: Mapping[str, Any]) -> ViewSpec:
    """Comments at one level of a thread, newest first, with like state."""
    return ViewSpec(
        source="comments",
        match=match,
        joins=(
            _owner(),
            _likes("comment_id"),
            Join("replies", "comments", "id", "parent_comment_id", project=("id",)),
        ),
        derive=(
            Derived("owner", first("owner")),
            Derived("likes_count", count("likes")),
            Derived("is_liked", contains("likes", "liked_by_id")),
            Derived("replies_count", count("replies")),
        ),
        sort=Sort("created_at", descending=True),
        project=COMMENT_FIELDS + (("owner", USER_SUMMARY), "likes_count", "is_liked", "replies_count"),
    )


def tweet_feed(match: Mapping[str, Any]) -> ViewSpec:
    return ViewSpec(
        source="tweets",
        match=match,
        joins=(
            _owner(),
            _likes("tweet_id"),
            Join("comments", "comments", "id", "tweet_id", project=("id",)),
        ),
        derive=(
            Derived("owner", first("owner")),
            Derived("likes_count", count("likes")),
            Derived("is_liked", contains("likes", "liked_by_id")),
            Derived("comments_count", count("comments")),
        ),
        sort=Sort("created_at", descending=True),
        project=TWEET_FIELDS + (("owner", USER_SUMMARY), "likes_count", "is_liked", "comments_count"),
    )


# ============================================================================
# VIDEOS & LIKES
# ============================================================================


def video_detail(video_id: Any) -> ViewSpec:
    """One video with its channel's subscriber state relative to the caller."""
    channel = Join(
        "owner",
        "users",
        "owner_id",
        "id",
        joins=(Join("subscribers", "subscriptions", "id", "channel_id", project=("subscriber_id",)),),
        derive=(
            Derived("subscribers_count", count("subscribers")),
            Derived("is_subscribed", contains("subscribers", "subscriber_id")),
        ),
        project=USER_SUMMARY + ("subscribers_count", "is_subscribed"),
    )
    return ViewSpec(
        source="videos",
        match={"id": video_id},
        joins=(channel, _likes("video_id")),
        derive=(
            Derived("owner", first("owner")),
            Derived("likes_count", count("likes")),
            Derived("is_liked", contains("likes", "liked_by_id")),
        ),
        project=VIDEO_CARD
        + (
            "updated_at",
            ("owner", USER_SUMMARY + ("subscribers_count", "is_subscribed")),
            "likes_count",
            "is_liked",
        ),
    )


def channel_videos(owner_id: Any, include_unpublished: bool) -> ViewSpec:
    return ViewSpec(
        source="videos",
        match={"owner_id": owner_id, **_published(include_unpublished)},
        joins=(_likes("video_id"),),
        derive=(Derived("likes_count", count("likes")),),
        sort=Sort("created_at", descending=True),
        project=VIDEO_CARD + ("likes_count",),
    )


def liked_videos(user_id: Any) -> ViewSpec:
    """Video likes of a user; likes on tweets or comments join nothing and drop out."""
    video = Join(
        "video",
        "videos",
        "video_id",
        "id",
        match={"is_published": True},
        joins=(_owner(),),
        derive=(Derived("owner", first("owner")),),
        project=VIDEO_CARD + (("owner", USER_SUMMARY),),
        required=True,
    )
    return ViewSpec(
        source="likes",
        match={"liked_by_id": user_id},
        joins=(video,),
        derive=(Derived("video", first("video")),),
        sort=Sort("created_at", descending=True),
        project=("id", "created_at", ("video", VIDEO_CARD + (("owner", USER_SUMMARY),))),
    )


# ============================================================================
# SUBSCRIPTIONS & CHANNELS
# ============================================================================


def channel_subscribers(channel_id: Any) -> ViewSpec:
    """Subscribers of a channel.

    ``subscribed_to_subscriber`` tells whether the channel subscribes back;
    ``is_subscribed`` whether the caller subscribes to that subscriber. The
    view context must carry ``channel_id`` as a parameter.
    """
    subscriber = Join(
        "subscriber",
        "users",
        "subscriber_id",
        "id",
        joins=(Join("subscribers", "subscriptions", "id", "channel_id", project=("subscriber_id",)),),
        derive=(
            Derived("subscribers_count", count("subscribers")),
            Derived("subscribed_to_subscriber", contains("subscribers", "subscriber_id", identity="channel_id")),
            Derived("is_subscribed", contains("subscribers", "subscriber_id", identity=CALLER)),
        ),
        project=USER_SUMMARY + ("subscribers_count", "subscribed_to_subscriber", "is_subscribed"),
        required=True,
    )
    return ViewSpec(
        source="subscriptions",
        match={"channel_id": channel_id},
        joins=(subscriber,),
        derive=(Derived("subscriber", first("subscriber")),),
        sort=Sort("created_at", descending=True),
        project=("id", "created_at", "subscriber"),
    )


def subscribed_channels(subscriber_id: Any) -> ViewSpec:
    """Channels a user subscribes to, each with its latest published video."""
    channel = Join(
        "channel",
        "users",
        "channel_id",
        "id",
        joins=(
            Join(
                "videos",
                "videos",
                "id",
                "owner_id",
                match={"is_published": True},
                sort=(("created_at", True), ("id", True)),
                project=VIDEO_CARD,
            ),
        ),
        derive=(Derived("latest_video", first("videos")),),
        project=USER_SUMMARY + ("latest_video",),
        required=True,
    )
    return ViewSpec(
        source="subscriptions",
        match={"subscriber_id": subscriber_id},
        joins=(channel,),
        derive=(Derived("channel", first("channel")),),
        sort=Sort("created_at", descending=True),
        project=("id", "created_at", "channel"),
    )


def channel_profile(username: str) -> ViewSpec:
    return ViewSpec(
        source="users",
        match={"username": username},
        joins=(
            Join("subscribers", "subscriptions", "id", "channel_id", project=("subscriber_id",)),
            Join("subscribed_to", "subscriptions", "id", "subscriber_id", project=("channel_id",)),
        ),
        derive=(
            Derived("subscribers_count", count("subscribers")),
            Derived("channels_subscribed_to_count", count("subscribed_to")),
            Derived("is_subscribed", contains("subscribers", "subscriber_id")),
            Derived("is_own_channel", equals("id")),
        ),
        project=USER_SUMMARY
        + (
            "cover_image_url",
            "created_at",
            "subscribers_count",
            "channels_subscribed_to_count",
            "is_subscribed",
            "is_own_channel",
        ),
    )


def channel_stats(channel_id: Any) -> ViewSpec:
    """Aggregate counters of a channel, recomputed on every read."""
    videos = Join(
        "videos",
        "videos",
        "id",
        "owner_id",
        joins=(Join("likes", "likes", "id", "video_id", project=("id",)),),
        derive=(Derived("likes_count", count("likes")),),
        project=("id", "views", "likes_count"),
    )
    return ViewSpec(
        source="users",
        match={"id": channel_id},
        joins=(videos, Join("subscribers", "subscriptions", "id", "channel_id", project=("id",))),
        derive=(
            Derived("total_videos", count("videos")),
            Derived("total_views", total("videos", "views")),
            Derived("total_likes", total("videos", "likes_count")),
            Derived("total_subscribers", count("subscribers")),
        ),
        project=("id", "username", "total_videos", "total_views", "total_likes", "total_subscribers"),
    )


# ============================================================================
# PLAYLISTS
# ============================================================================


def _playlist_entries(include_unpublished: bool) -> Join:
    video = Join(
        "video",
        "videos",
        "video_id",
        "id",
        match=_published(include_unpublished),
        project=VIDEO_CARD,
    )
    return Join(
        "entries",
        "playlist_videos",
        "id",
        "playlist_id",
        sort=(("position", False), ("created_at", False)),
        joins=(video,),
        derive=(Derived("video", first("video")),),
    )


# video_ids is the membership set; videos and totals only cover the videos the
# caller may see (drafts are listed for the playlist owner only).
_PLAYLIST_AGGREGATES = (
    Derived("video_ids", pluck("entries", "video_id")),
    Derived("videos", pluck("entries", "video")),
    Derived("total_videos", count("videos")),
    Derived("total_views", total("videos", "views")),
)


def playlist_detail(playlist_id: Any, include_unpublished: bool) -> ViewSpec:
    """A playlist with owner, ordered video ids, visible videos and totals."""
    return ViewSpec(
        source="playlists",
        match={"id": playlist_id},
        joins=(_owner(), _playlist_entries(include_unpublished)),
        derive=(Derived("owner", first("owner")),) + _PLAYLIST_AGGREGATES,
        project=PLAYLIST_FIELDS
        + (
            ("owner", USER_SUMMARY),
            "video_ids",
            "total_videos",
            "total_views",
            ("videos", VIDEO_CARD),
        ),
    )


def user_playlists(owner_id: Any, include_unpublished: bool) -> ViewSpec:
    return ViewSpec(
        source="playlists",
        match={"owner_id": owner_id},
        joins=(_playlist_entries(include_unpublished),),
        derive=_PLAYLIST_AGGREGATES,
        sort=Sort("created_at", descending=True),
        project=PLAYLIST_FIELDS + ("total_videos", "total_views"),
    )
