"""Playlist management.

A playlist's videos are an ordered set stored as ``playlist_videos`` rows:
insertion order is kept through ``position`` and the (playlist, video)
uniqueness constraint suppresses duplicates, so adding a video twice is a
no-op even when two requests race.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from ..errors import ConflictError, NotFoundError, ValidationError
from ..schemas import Page
from ..store import DataStore, Record, get_or_404
from ..validation import parse_id, require_text
from ..views import ViewContext, ViewPipeline
from ..views.specs import playlist_detail, user_playlists
from .ownership import authorize_mutation, is_owner, require_caller, require_visible

logger = logging.getLogger(__name__)


class PlaylistService:
    def __init__(self, store: DataStore):
        self.store = store
        self.pipeline = ViewPipeline(store)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, playlist_id: Any, caller_id: Any = None) -> Record:
        """
        Get a playlist with its videos and aggregate counters.

        Only the playlist id is validated. Unpublished videos are listed
        for the playlist owner only.
        """
        playlist = get_or_404(self.store, "playlists", parse_id(playlist_id, "playlistId"), "Playlist not found")
        spec = playlist_detail(playlist["id"], include_unpublished=is_owner(playlist, caller_id))
        view = self.pipeline.run_one(spec, ViewContext(caller_id))
        if view is None:
            # Deleted between the lookup and the view
            raise NotFoundError("Playlist not found")
        return view

    def list_for_user(
        self, user_id: Any, caller_id: Any = None, page: int | None = None, limit: int | None = None
    ) -> Page:
        user_id = parse_id(user_id, "userId")
        get_or_404(self.store, "users", user_id, "User not found")
        own = caller_id is not None and str(caller_id) == str(user_id)
        spec = user_playlists(user_id, include_unpublished=own)
        return self.pipeline.paginate(spec, ViewContext(caller_id), page, limit)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, caller_id: Any, name: str | None, description: str | None) -> Record:
        caller_id = require_caller(caller_id)
        name = require_text(name, "Name")
        description = require_text(description, "Description")
        playlist = self.store.create(
            "playlists", {"owner_id": caller_id, "name": name, "description": description}
        )
        logger.info(f"User {caller_id} created playlist {playlist['id']}")
        return self.get(playlist["id"], caller_id)

    def update(self, playlist_id: Any, caller_id: Any, name: str | None, description: str | None) -> Record:
        caller_id = require_caller(caller_id)
        if name is None and description is None:
            raise ValidationError("Name or description is required")
        patch = {}
        if name is not None:
            patch["name"] = require_text(name, "Name")
        if description is not None:
            patch["description"] = require_text(description, "Description")

        playlist = self._owned(playlist_id, caller_id, "Only the owner can edit this playlist")
        self.store.update_by_id("playlists", playlist["id"], patch)
        return self.get(playlist["id"], caller_id)

    def delete(self, playlist_id: Any, caller_id: Any) -> dict[str, Any]:
        caller_id = require_caller(caller_id)
        playlist = self._owned(playlist_id, caller_id, "Only the owner can delete this playlist")
        self.store.delete_many("playlist_videos", {"playlist_id": playlist["id"]})
        self.store.delete_by_id("playlists", playlist["id"])
        logger.info(f"Deleted playlist {playlist['id']}")
        return {"playlist_id": playlist["id"]}

    def add_video(self, playlist_id: Any, video_id: Any, caller_id: Any) -> Record:
        caller_id = require_caller(caller_id)
        video_id = parse_id(video_id, "videoId")
        playlist = self._owned(playlist_id, caller_id, "Only the owner can add videos to this playlist")
        require_visible(get_or_404(self.store, "videos", video_id, "Video not found"), caller_id)

        key = {"playlist_id": playlist["id"], "video_id": video_id}
        if self.store.count("playlist_videos", key) == 0:
            try:
                self.store.create("playlist_videos", {**key, "position": self._next_position(playlist["id"])})
                self._touch(playlist["id"])
            except ConflictError:
                logger.info(f"Video {video_id} already added to playlist {playlist['id']} concurrently")
        return self.get(playlist["id"], caller_id)

    def remove_video(self, playlist_id: Any, video_id: Any, caller_id: Any) -> Record:
        caller_id = require_caller(caller_id)
        video_id = parse_id(video_id, "videoId")
        playlist = self._owned(playlist_id, caller_id, "Only the owner can remove videos from this playlist")
        get_or_404(self.store, "videos", video_id, "Video not found")

        if self.store.delete_many("playlist_videos", {"playlist_id": playlist["id"], "video_id": video_id}):
            self._touch(playlist["id"])
        return self.get(playlist["id"], caller_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _owned(self, playlist_id: Any, caller_id: Any, message: str) -> Record:
        """Load a playlist and gate on its owner (never the video's)."""
        playlist = get_or_404(self.store, "playlists", parse_id(playlist_id, "playlistId"), "Playlist not found")
        authorize_mutation(playlist, caller_id, message=message)
        return playlist

    def _next_position(self, playlist_id: Any) -> int:
        last = self.store.find_many(
            "playlist_videos", {"playlist_id": playlist_id}, sort=[("position", True)], limit=1
        )
        return last[0]["position"] + 1 if last else 0

    def _touch(self, playlist_id: Any) -> None:
        # Membership lives in another collection; bump the playlist itself
        self.store.update_by_id("playlists", playlist_id, {"updated_at": datetime.now(timezone.utc)})
