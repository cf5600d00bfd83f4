"""Comment threads on videos and tweets."""

from __future__ import annotations

import logging
from typing import Any

from ..schemas import Page
from ..store import DataStore, In, Record, get_or_404
from ..validation import parse_id, require_text
from ..views import RootTarget, ThreadResolver, ViewPipeline
from ..views.projection import project
from ..views.specs import COMMENT_FIELDS
from .ownership import authorize_mutation, require_caller, require_visible

logger = logging.getLogger(__name__)


class CommentService:
    def __init__(self, store: DataStore):
        self.store = store
        self.pipeline = ViewPipeline(store)
        self.threads = ThreadResolver(self.pipeline)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_video_comments(
        self, video_id: Any, caller_id: Any = None, page: int | None = None, limit: int | None = None
    ) -> Page:
        video_id = parse_id(video_id, "videoId")
        require_visible(get_or_404(self.store, "videos", video_id, "Video not found"), caller_id)
        return self.threads.top_level(RootTarget.video(video_id), caller_id, page, limit)

    def list_tweet_comments(
        self, tweet_id: Any, caller_id: Any = None, page: int | None = None, limit: int | None = None
    ) -> Page:
        tweet_id = parse_id(tweet_id, "tweetId")
        get_or_404(self.store, "tweets", tweet_id, "Tweet not found")
        return self.threads.top_level(RootTarget.tweet(tweet_id), caller_id, page, limit)

    def list_replies(
        self, comment_id: Any, caller_id: Any = None, page: int | None = None, limit: int | None = None
    ) -> Page:
        comment = self.visible_comment(comment_id, caller_id)
        return self.threads.replies(comment["id"], caller_id, page, limit)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_to_video(self, video_id: Any, caller_id: Any, content: str | None) -> Record:
        caller_id = require_caller(caller_id)
        content = require_text(content, "Content")
        video_id = parse_id(video_id, "videoId")
        require_visible(get_or_404(self.store, "videos", video_id, "Video not found"), caller_id)
        return self._create(caller_id, content, RootTarget.video(video_id), parent_id=None)

    def add_to_tweet(self, tweet_id: Any, caller_id: Any, content: str | None) -> Record:
        caller_id = require_caller(caller_id)
        content = require_text(content, "Content")
        tweet_id = parse_id(tweet_id, "tweetId")
        get_or_404(self.store, "tweets", tweet_id, "Tweet not found")
        return self._create(caller_id, content, RootTarget.tweet(tweet_id), parent_id=None)

    def reply(self, comment_id: Any, caller_id: Any, content: str | None) -> Record:
        """Reply to a comment. The reply copies its parent's root target."""
        caller_id = require_caller(caller_id)
        content = require_text(content, "Content")
        parent = self.visible_comment(comment_id, caller_id)
        return self._create(caller_id, content, RootTarget.of(parent), parent_id=parent["id"])

    def update(self, comment_id: Any, caller_id: Any, content: str | None) -> Record:
        caller_id = require_caller(caller_id)
        content = require_text(content, "Content")
        comment = get_or_404(self.store, "comments", parse_id(comment_id, "commentId"), "Comment not found")
        authorize_mutation(comment, caller_id, message="Only the comment owner can edit this comment")
        updated = self.store.update_by_id("comments", comment["id"], {"content": content})
        return project(updated, COMMENT_FIELDS)

    def delete(self, comment_id: Any, caller_id: Any) -> dict[str, Any]:
        """Delete a comment, its reply subtree and every like on them."""
        caller_id = require_caller(caller_id)
        comment = get_or_404(self.store, "comments", parse_id(comment_id, "commentId"), "Comment not found")
        authorize_mutation(comment, caller_id, message="Only the comment owner can delete this comment")

        ids = self.threads.subtree_ids(comment["id"])
        likes_deleted = self.store.delete_many("likes", {"comment_id": In(ids)})
        self.store.delete_many("comments", {"id": In(ids)})
        logger.info(
            f"Deleted comment {comment['id']} with {len(ids) - 1} replies and {likes_deleted} likes"
        )
        return {"comment_id": comment["id"], "deleted_replies": len(ids) - 1}

    def visible_comment(self, comment_id: Any, caller_id: Any) -> Record:
        """Load a comment, hiding comments on a draft video from everyone but its owner."""
        comment = get_or_404(self.store, "comments", parse_id(comment_id, "commentId"), "Comment not found")
        if comment["video_id"] is not None:
            video = self.store.find_by_id("videos", comment["video_id"])
            if video is not None:
                require_visible(video, caller_id, "Comment not found")
        return comment

    def delete_for_root(self, root: RootTarget) -> int:
        """Remove every comment (and its likes) under a video or tweet being deleted."""
        comments = self.store.find_many("comments", {root.field: root.id})
        if not comments:
            return 0
        ids = [comment["id"] for comment in comments]
        self.store.delete_many("likes", {"comment_id": In(ids)})
        return self.store.delete_many("comments", {"id": In(ids)})

    def _create(self, caller_id: Any, content: str, root: RootTarget, parent_id: Any) -> Record:
        comment = self.store.create(
            "comments",
            {
                "owner_id": caller_id,
                "content": content,
                "parent_comment_id": parent_id,
                **root.as_fields(),
            },
        )
        logger.info(f"User {caller_id} commented {comment['id']} on {root.field}={root.id}")
        return project(comment, COMMENT_FIELDS)
