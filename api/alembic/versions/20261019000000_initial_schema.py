"""Initial schema: users, videos, tweets, comments, playlists, likes, subscriptions

Revision ID: 20261019000000
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "20261019000000"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(updated: bool = True) -> list[sa.Column]:
    columns = [sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)]
    if updated:
        columns.append(sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True))
    return columns


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("avatar_url", sa.String(1000), nullable=False),
        sa.Column("cover_image_url", sa.String(1000), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_full_name", "users", ["full_name"])
    op.create_index("ix_users_created_at", "users", ["created_at"])

    op.create_table(
        "videos",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("video_file_url", sa.String(1000), nullable=False),
        sa.Column("thumbnail_url", sa.String(1000), nullable=False),
        sa.Column("duration", sa.Float(), nullable=False),
        sa.Column("views", sa.Integer(), nullable=False),
        sa.Column("is_published", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("views >= 0", name="ck_videos_views_non_negative"),
    )
    op.create_index("ix_videos_id", "videos", ["id"])
    op.create_index("ix_videos_owner_id", "videos", ["owner_id"])
    op.create_index("ix_videos_is_published", "videos", ["is_published"])
    op.create_index("ix_videos_created_at", "videos", ["created_at"])
    op.create_index("ix_videos_owner_created", "videos", ["owner_id", sa.text("created_at DESC")])

    op.create_table(
        "tweets",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("content <> ''", name="ck_tweets_content_not_empty"),
    )
    op.create_index("ix_tweets_id", "tweets", ["id"])
    op.create_index("ix_tweets_owner_id", "tweets", ["owner_id"])
    op.create_index("ix_tweets_created_at", "tweets", ["created_at"])
    op.create_index("ix_tweets_owner_created", "tweets", ["owner_id", sa.text("created_at DESC")])

    op.create_table(
        "comments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("video_id", sa.Uuid(), sa.ForeignKey("videos.id"), nullable=True),
        sa.Column("tweet_id", sa.Uuid(), sa.ForeignKey("tweets.id"), nullable=True),
        sa.Column("parent_comment_id", sa.Uuid(), sa.ForeignKey("comments.id"), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "(video_id IS NULL) <> (tweet_id IS NULL)", name="ck_comments_single_root_target"
        ),
    )
    op.create_index("ix_comments_id", "comments", ["id"])
    op.create_index("ix_comments_owner_id", "comments", ["owner_id"])
    op.create_index("ix_comments_parent_comment_id", "comments", ["parent_comment_id"])
    op.create_index("ix_comments_created_at", "comments", ["created_at"])
    op.create_index("ix_comments_video_parent", "comments", ["video_id", "parent_comment_id"])
    op.create_index("ix_comments_tweet_parent", "comments", ["tweet_id", "parent_comment_id"])

    op.create_table(
        "playlists",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_playlists_id", "playlists", ["id"])
    op.create_index("ix_playlists_owner_id", "playlists", ["owner_id"])
    op.create_index("ix_playlists_created_at", "playlists", ["created_at"])

    op.create_table(
        "playlist_videos",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("playlist_id", sa.Uuid(), sa.ForeignKey("playlists.id"), nullable=False),
        sa.Column("video_id", sa.Uuid(), sa.ForeignKey("videos.id"), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        *_timestamps(updated=False),
        sa.UniqueConstraint("playlist_id", "video_id", name="uq_playlist_videos_playlist_video"),
    )
    op.create_index("ix_playlist_videos_playlist_id", "playlist_videos", ["playlist_id"])
    op.create_index("ix_playlist_videos_video_id", "playlist_videos", ["video_id"])
    op.create_index("ix_playlist_videos_playlist_position", "playlist_videos", ["playlist_id", "position"])

    op.create_table(
        "likes",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("liked_by_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("video_id", sa.Uuid(), sa.ForeignKey("videos.id"), nullable=True),
        sa.Column("tweet_id", sa.Uuid(), sa.ForeignKey("tweets.id"), nullable=True),
        sa.Column("comment_id", sa.Uuid(), sa.ForeignKey("comments.id"), nullable=True),
        *_timestamps(updated=False),
        sa.CheckConstraint(
            "(CASE WHEN video_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN tweet_id IS NULL THEN 0 ELSE 1 END"
            " + CASE WHEN comment_id IS NULL THEN 0 ELSE 1 END) = 1",
            name="ck_likes_single_target",
        ),
        sa.UniqueConstraint("liked_by_id", "video_id", name="uq_likes_user_video"),
        sa.UniqueConstraint("liked_by_id", "tweet_id", name="uq_likes_user_tweet"),
        sa.UniqueConstraint("liked_by_id", "comment_id", name="uq_likes_user_comment"),
    )
    op.create_index("ix_likes_liked_by_id", "likes", ["liked_by_id"])
    op.create_index("ix_likes_video_id", "likes", ["video_id"])
    op.create_index("ix_likes_tweet_id", "likes", ["tweet_id"])
    op.create_index("ix_likes_comment_id", "likes", ["comment_id"])
    op.create_index("ix_likes_created_at", "likes", ["created_at"])

    op.create_table(
        "subscriptions",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("subscriber_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("channel_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        *_timestamps(updated=False),
        sa.UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_subscriber_channel"),
        sa.CheckConstraint("subscriber_id <> channel_id", name="ck_subscriptions_not_self"),
    )
    op.create_index("ix_subscriptions_subscriber_id", "subscriptions", ["subscriber_id"])
    op.create_index("ix_subscriptions_channel_id", "subscriptions", ["channel_id"])
    op.create_index("ix_subscriptions_created_at", "subscriptions", ["created_at"])
    op.create_index(
        "ix_subscriptions_channel_created", "subscriptions", ["channel_id", sa.text("created_at DESC")]
    )


def downgrade() -> None:
    op.drop_table("subscriptions")
    op.drop_table("likes")
    op.drop_table("playlist_videos")
    op.drop_table("playlists")
    op.drop_table("comments")
    op.drop_table("tweets")
    op.drop_table("videos")
    op.drop_table("users")
