"""Likes on videos, tweets and comments."""

from __future__ import annotations

import enum
from typing import Any

from ..schemas import Page
from ..store import DataStore, get_or_404
from ..validation import parse_id
from ..views import ViewContext, ViewPipeline
from ..views.specs import liked_videos
from .comments import CommentService
from .ownership import require_caller, require_visible
from .toggles import EdgeToggleService


class LikeTarget(enum.Enum):
    """Likeable target types: (like field, target collection, display name)."""

    VIDEO = ("video_id", "videos", "Video")
    TWEET = ("tweet_id", "tweets", "Tweet")
    COMMENT = ("comment_id", "comments", "Comment")

    @property
    def field(self) -> str:
        return self.value[0]

    @property
    def collection(self) -> str:
        return self.value[1]

    @property
    def label(self) -> str:
        return self.value[2]


class LikeService:
    def __init__(self, store: DataStore):
        self.store = store
        self.toggles = EdgeToggleService(store)
        self.pipeline = ViewPipeline(store)

    def toggle(self, target: LikeTarget, target_id: Any, caller_id: Any) -> dict[str, bool]:
        """Like or unlike; the target type is fixed by the endpoint, never inferred."""
        caller_id = require_caller(caller_id)
        target_id = parse_id(target_id, f"{target.label.lower()}Id")
        if target is LikeTarget.COMMENT:
            CommentService(self.store).visible_comment(target_id, caller_id)
        else:
            found = get_or_404(self.store, target.collection, target_id, f"{target.label} not found")
            if target is LikeTarget.VIDEO:
                require_visible(found, caller_id)
        result = self.toggles.toggle("likes", {"liked_by_id": caller_id, target.field: target_id})
        return {"is_liked": result.active}

    def liked_videos(self, caller_id: Any, page: int | None = None, limit: int | None = None) -> Page:
        caller_id = require_caller(caller_id)
        return self.pipeline.paginate(liked_videos(caller_id), ViewContext(caller_id), page, limit)
