"""Lazy, one-level-at-a-time resolution of comment threads.

Comments form a forest through ``parent_comment_id``. Nothing here builds a
tree in memory: each request resolves the children of a single node (or the
top level of a root target), paginated on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .. import settings
from ..errors import NotFoundError
from ..schemas import Page
from ..store import In
from .derive import ViewContext
from .pipeline import ViewPipeline
from .specs import comment_thread


@dataclass(frozen=True)
class RootTarget:
    """The video or tweet a thread hangs off."""

    field: str
    id: Any

    @classmethod
    def video(cls, video_id: Any) -> "RootTarget":
        return cls("video_id", video_id)

    @classmethod
    def tweet(cls, tweet_id: Any) -> "RootTarget":
        return cls("tweet_id", tweet_id)

    @classmethod
    def of(cls, comment: dict) -> "RootTarget":
        """Root target a comment belongs to (replies inherit it at creation)."""
        if comment.get("video_id") is not None:
            return cls.video(comment["video_id"])
        return cls.tweet(comment["tweet_id"])

    def as_fields(self) -> dict[str, Any]:
        fields = {"video_id": None, "tweet_id": None}
        fields[self.field] = self.id
        return fields


class ThreadResolver:
    def __init__(self, pipeline: ViewPipeline):
        self.pipeline = pipeline
        self.store = pipeline.store

    def top_level(
        self,
        root: RootTarget,
        caller_id: Any = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page:
        spec = comment_thread({root.field: root.id, "parent_comment_id": None})
        return self.pipeline.paginate(spec, ViewContext(caller_id), page, limit)

    def replies(
        self,
        comment_id: Any,
        caller_id: Any = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page:
        """Direct replies to ``comment_id``, newest first."""
        if self.store.find_by_id("comments", comment_id) is None:
            raise NotFoundError("Comment not found")
        spec = comment_thread({"parent_comment_id": comment_id})
        return self.pipeline.paginate(
            spec,
            ViewContext(caller_id),
            page,
            limit,
            default_limit=settings.DEFAULT_REPLY_LIMIT,
        )

    def subtree_ids(self, comment_id: Any) -> list[Any]:
        """Ids of a comment and all its descendants, walked level by level."""
        collected = [comment_id]
        seen = {comment_id}
        level = [comment_id]
        while level:
            children = self.store.find_many("comments", {"parent_comment_id": In(level)})
            level = [child["id"] for child in children if child["id"] not in seen]
            seen.update(level)
            collected.extend(level)
        return collected
