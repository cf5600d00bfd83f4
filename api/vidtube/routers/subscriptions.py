"""Channel subscription endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from .. import schemas
from ..auth import get_current_user_id, get_current_user_id_optional
from ..deps import get_store
from ..services.subscriptions import SubscriptionService
from ..store import DataStore

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


def get_service(store: DataStore = Depends(get_store)) -> SubscriptionService:
    return SubscriptionService(store)


@router.post("/c/{channel_id}")
def toggle_subscription(
    channel_id: str,
    caller_id: UUID = Depends(get_current_user_id),
    service: SubscriptionService = Depends(get_service),
):
    result = service.toggle(channel_id, caller_id)
    message = "Subscribed successfully" if result["subscribed"] else "Unsubscribed successfully"
    return schemas.respond(status.HTTP_200_OK, result, message)


@router.get("/c/{channel_id}")
def list_channel_subscribers(
    channel_id: str,
    page: int | None = Query(None),
    limit: int | None = Query(None),
    caller_id: UUID | None = Depends(get_current_user_id_optional),
    service: SubscriptionService = Depends(get_service),
):
    """Subscribers of a channel, each flagged with whether the channel subscribes back."""
    result = service.subscribers(channel_id, caller_id, page, limit)
    return schemas.respond(status.HTTP_200_OK, result, "Subscribers fetched successfully")


@router.get("/u/{subscriber_id}")
def list_subscribed_channels(
    subscriber_id: str,
    page: int | None = Query(None),
    limit: int | None = Query(None),
    caller_id: UUID | None = Depends(get_current_user_id_optional),
    service: SubscriptionService = Depends(get_service),
):
    result = service.subscribed_channels(subscriber_id, caller_id, page, limit)
    return schemas.respond(status.HTTP_200_OK, result, "Subscribed channels fetched successfully")


@router.get("/status/{channel_id}")
def get_subscription_status(
    channel_id: str,
    caller_id: UUID = Depends(get_current_user_id),
    service: SubscriptionService = Depends(get_service),
):
    result = service.status(channel_id, caller_id)
    return schemas.respond(status.HTTP_200_OK, result, "Subscription status fetched successfully")
