from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)

from .db import Base


def _utcnow() -> datetime:
    # Python-side timestamps keep microsecond precision on every backend,
    # which newest-first listings rely on.
    return datetime.now(timezone.utc)


# ============================================================================
# CORE ENTITIES
# ============================================================================


class User(Base):
    """Account and channel. Credentials are managed by the auth layer."""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    full_name = Column(String(200), nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Opaque references produced by the media storage collaborator
    avatar_url = Column(String(1000), nullable=False)
    cover_image_url = Column(String(1000), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=_utcnow)


class Video(Base):
    """Uploaded video owned by a channel."""

    __tablename__ = "videos"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    owner_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    video_file_url = Column(String(1000), nullable=False)
    thumbnail_url = Column(String(1000), nullable=False)
    duration = Column(Float, nullable=False, default=0.0)  # seconds

    views = Column(Integer, nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=_utcnow)

    __table_args__ = (
        CheckConstraint("views >= 0", name="ck_videos_views_non_negative"),
        Index("ix_videos_owner_created", owner_id, created_at.desc()),
    )


class Tweet(Base):
    """Short text post on a channel's community feed."""

    __tablename__ = "tweets"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    owner_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=_utcnow)

    __table_args__ = (
        CheckConstraint("content <> ''", name="ck_tweets_content_not_empty"),
        Index("ix_tweets_owner_created", owner_id, created_at.desc()),
    )


class Comment(Base):
    """Comment on a video or a tweet. Replies point at their parent comment."""

    __tablename__ = "comments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    owner_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)

    # Root target: exactly one of these is set, copied from the parent on replies
    video_id = Column(Uuid, ForeignKey("videos.id"), nullable=True)
    tweet_id = Column(Uuid, ForeignKey("tweets.id"), nullable=True)
    parent_comment_id = Column(Uuid, ForeignKey("comments.id"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=_utcnow)

    __table_args__ = (
        CheckConstraint(
            "(video_id IS NULL) <> (tweet_id IS NULL)",
            name="ck_comments_single_root_target",
        ),
        Index("ix_comments_video_parent", video_id, parent_comment_id),
        Index("ix_comments_tweet_parent", tweet_id, parent_comment_id),
    )


class Playlist(Base):
    """Named, ordered set of videos curated by a user."""

    __tablename__ = "playlists"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    owner_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=_utcnow)


class PlaylistVideo(Base):
    """Membership of a video in a playlist, ordered by insertion position."""

    __tablename__ = "playlist_videos"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    playlist_id = Column(Uuid, ForeignKey("playlists.id"), nullable=False, index=True)
    video_id = Column(Uuid, ForeignKey("videos.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        UniqueConstraint("playlist_id", "video_id", name="uq_playlist_videos_playlist_video"),
        Index("ix_playlist_videos_playlist_position", playlist_id, position),
    )


# ============================================================================
# RELATIONSHIP EDGES
# ============================================================================


class Like(Base):
    """Like from a user on exactly one video, tweet or comment."""

    __tablename__ = "likes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    liked_by_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    video_id = Column(Uuid, ForeignKey("videos.id"), nullable=True, index=True)
    tweet_id = Column(Uuid, ForeignKey("tweets.id"), nullable=True, index=True)
    comment_id = Column(Uuid, ForeignKey("comments.id"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    __table_args__ = (
        CheckConstraint(
            "(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END) = 1",
            name="ck_likes_single_target",
        ),
        # NULL targets never collide, so each constraint only binds its own target type
        UniqueConstraint("liked_by_id", "video_id", name="uq_likes_user_video"),
        UniqueConstraint("liked_by_id", "tweet_id", name="uq_likes_user_tweet"),
        UniqueConstraint("liked_by_id", "comment_id", name="uq_likes_user_comment"),
    )


class Subscription(Base):
    """Subscriber to channel edge (both ends are users)."""

    __tablename__ = "subscriptions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    subscriber_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    channel_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_subscriber_channel"),
        CheckConstraint("subscriber_id <> channel_id", name="ck_subscriptions_not_self"),
        Index("ix_subscriptions_channel_created", channel_id, created_at.desc()),
    )


# Collection name -> model, the namespace the data-access layer speaks in.
COLLECTIONS: dict[str, type[Base]] = {
    "users": User,
    "videos": Video,
    "tweets": Tweet,
    "comments": Comment,
    "playlists": Playlist,
    "playlist_videos": PlaylistVideo,
    "likes": Like,
    "subscriptions": Subscription,
}
