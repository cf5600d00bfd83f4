"""Video metadata.

Media files are uploaded by an external collaborator; this service only
stores the opaque references it produces.
"""

from __future__ import annotations

import logging
from typing import Any

from ..errors import NotFoundError, ValidationError
from ..schemas import Page
from ..store import DataStore, Record, get_or_404
from ..validation import parse_id, require_text
from ..views import RootTarget, ViewContext, ViewPipeline
from ..views.projection import project
from ..views.specs import VIDEO_CARD, channel_videos, video_detail
from .comments import CommentService
from .ownership import authorize_mutation, require_caller, require_visible

logger = logging.getLogger(__name__)


class VideoService:
    def __init__(self, store: DataStore):
        self.store = store
        self.pipeline = ViewPipeline(store)

    def create(
        self,
        caller_id: Any,
        title: str | None,
        description: str | None,
        video_file_url: str | None,
        thumbnail_url: str | None,
        duration: float = 0.0,
        is_published: bool = True,
    ) -> Record:
        caller_id = require_caller(caller_id)
        if duration < 0:
            raise ValidationError("Duration cannot be negative")
        video = self.store.create(
            "videos",
            {
                "owner_id": caller_id,
                "title": require_text(title, "Title"),
                "description": require_text(description, "Description"),
                "video_file_url": require_text(video_file_url, "Video file"),
                "thumbnail_url": require_text(thumbnail_url, "Thumbnail"),
                "duration": duration,
                "is_published": is_published,
            },
        )
        logger.info(f"User {caller_id} published video {video['id']}")
        return project(video, VIDEO_CARD)

    def get(self, video_id: Any, caller_id: Any = None) -> Record:
        """A video with like and channel-subscription state; drafts are visible to their owner only."""
        video = self.pipeline.run_one(video_detail(parse_id(video_id, "videoId")), ViewContext(caller_id))
        if video is None:
            raise NotFoundError("Video not found")
        return require_visible(video, caller_id)

    def list_for_channel(
        self, channel_id: Any, caller_id: Any = None, page: int | None = None, limit: int | None = None
    ) -> Page:
        channel_id = parse_id(channel_id, "userId")
        get_or_404(self.store, "users", channel_id, "Channel not found")
        own = caller_id is not None and str(caller_id) == str(channel_id)
        spec = channel_videos(channel_id, include_unpublished=own)
        return self.pipeline.paginate(spec, ViewContext(caller_id), page, limit)

    def update(
        self,
        video_id: Any,
        caller_id: Any,
        title: str | None = None,
        description: str | None = None,
        thumbnail_url: str | None = None,
    ) -> Record:
        caller_id = require_caller(caller_id)
        patch = {}
        if title is not None:
            patch["title"] = require_text(title, "Title")
        if description is not None:
            patch["description"] = require_text(description, "Description")
        if thumbnail_url is not None:
            patch["thumbnail_url"] = require_text(thumbnail_url, "Thumbnail")
        if not patch:
            raise ValidationError("Nothing to update")

        video = self._owned(video_id, caller_id, "Only the owner can edit this video")
        updated = self.store.update_by_id("videos", video["id"], patch)
        return project(updated, VIDEO_CARD)

    def toggle_publish(self, video_id: Any, caller_id: Any) -> dict[str, Any]:
        caller_id = require_caller(caller_id)
        video = self._owned(video_id, caller_id, "Only the owner can publish or unpublish this video")
        updated = self.store.update_by_id("videos", video["id"], {"is_published": not video["is_published"]})
        return {"video_id": updated["id"], "is_published": updated["is_published"]}

    def delete(self, video_id: Any, caller_id: Any) -> dict[str, Any]:
        """Delete a video, its comments, its likes and its playlist memberships."""
        caller_id = require_caller(caller_id)
        video = self._owned(video_id, caller_id, "Only the owner can delete this video")

        comments_deleted = CommentService(self.store).delete_for_root(RootTarget.video(video["id"]))
        self.store.delete_many("likes", {"video_id": video["id"]})
        self.store.delete_many("playlist_videos", {"video_id": video["id"]})
        self.store.delete_by_id("videos", video["id"])
        logger.info(f"Deleted video {video['id']} and {comments_deleted} comments")
        return {"video_id": video["id"]}

    def _owned(self, video_id: Any, caller_id: Any, message: str) -> Record:
        video = get_or_404(self.store, "videos", parse_id(video_id, "videoId"), "Video not found")
        authorize_mutation(video, caller_id, message=message)
        return video
