"""Channel profile endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from .. import schemas
from ..auth import get_current_user_id, get_current_user_id_optional
from ..deps import get_store
from ..services.channels import ChannelService
from ..store import DataStore

router = APIRouter(tags=["Channels"])


def get_service(store: DataStore = Depends(get_store)) -> ChannelService:
    return ChannelService(store)


@router.get("/users/c/{username}")
def get_channel_profile(
    username: str,
    caller_id: UUID | None = Depends(get_current_user_id_optional),
    service: ChannelService = Depends(get_service),
):
    profile = service.profile(username, caller_id)
    return schemas.respond(status.HTTP_200_OK, profile, "Channel fetched successfully")


@router.get("/dashboard/stats")
def get_channel_stats(
    caller_id: UUID = Depends(get_current_user_id),
    service: ChannelService = Depends(get_service),
):
    """Totals for the caller's own channel."""
    stats = service.stats(caller_id)
    return schemas.respond(status.HTTP_200_OK, stats, "Channel stats fetched successfully")
