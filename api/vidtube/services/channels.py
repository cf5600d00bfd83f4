"""Channel profile and statistics, computed from the current edges on every read."""

from __future__ import annotations

from typing import Any

from ..errors import NotFoundError, ValidationError
from ..store import DataStore, Record
from ..validation import parse_id
from ..views import ViewContext, ViewPipeline
from ..views.specs import channel_profile, channel_stats


class ChannelService:
    def __init__(self, store: DataStore):
        self.store = store
        self.pipeline = ViewPipeline(store)

    def profile(self, username: str | None, caller_id: Any = None) -> Record:
        if not username or not username.strip():
            raise ValidationError("Username is required")
        view = self.pipeline.run_one(channel_profile(username.strip().lower()), ViewContext(caller_id))
        if view is None:
            raise NotFoundError("Channel does not exist")
        return view

    def stats(self, channel_id: Any) -> Record:
        view = self.pipeline.run_one(channel_stats(parse_id(channel_id, "channelId")))
        if view is None:
            raise NotFoundError("Channel not found")
        return view
