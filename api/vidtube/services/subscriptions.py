"""Channel subscriptions."""

from __future__ import annotations

from typing import Any

from ..errors import ValidationError
from ..schemas import Page
from ..store import DataStore, get_or_404
from ..validation import parse_id
from ..views import ViewContext, ViewPipeline
from ..views.specs import channel_subscribers, subscribed_channels
from .ownership import require_caller
from .toggles import EdgeToggleService


class SubscriptionService:
    def __init__(self, store: DataStore):
        self.store = store
        self.toggles = EdgeToggleService(store)
        self.pipeline = ViewPipeline(store)

    def toggle(self, channel_id: Any, caller_id: Any) -> dict[str, bool]:
        caller_id = require_caller(caller_id)
        channel_id = parse_id(channel_id, "channelId")
        if channel_id == caller_id:
            raise ValidationError("You cannot subscribe to your own channel")
        get_or_404(self.store, "users", channel_id, "Channel not found")
        result = self.toggles.toggle("subscriptions", {"subscriber_id": caller_id, "channel_id": channel_id})
        return {"subscribed": result.active}

    def status(self, channel_id: Any, caller_id: Any) -> dict[str, bool]:
        caller_id = require_caller(caller_id)
        channel_id = parse_id(channel_id, "channelId")
        subscribed = self.toggles.is_active(
            "subscriptions", {"subscriber_id": caller_id, "channel_id": channel_id}
        )
        return {"subscribed": subscribed}

    def subscribers(
        self, channel_id: Any, caller_id: Any = None, page: int | None = None, limit: int | None = None
    ) -> Page:
        """Subscribers of a channel with reciprocal-subscription flags."""
        channel_id = parse_id(channel_id, "channelId")
        get_or_404(self.store, "users", channel_id, "Channel not found")
        ctx = ViewContext(caller_id, params={"channel_id": channel_id})
        return self.pipeline.paginate(channel_subscribers(channel_id), ctx, page, limit)

    def subscribed_channels(
        self, subscriber_id: Any, caller_id: Any = None, page: int | None = None, limit: int | None = None
    ) -> Page:
        subscriber_id = parse_id(subscriber_id, "subscriberId")
        get_or_404(self.store, "users", subscriber_id, "User not found")
        return self.pipeline.paginate(subscribed_channels(subscriber_id), ViewContext(caller_id), page, limit)
