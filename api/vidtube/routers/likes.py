"""Like toggles.

Each target type has its own endpoint; the target is never inferred from
the id.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from .. import schemas
from ..auth import get_current_user_id
from ..deps import get_store
from ..services.likes import LikeService, LikeTarget
from ..store import DataStore

router = APIRouter(prefix="/likes", tags=["Likes"])


def get_service(store: DataStore = Depends(get_store)) -> LikeService:
    return LikeService(store)


def _toggled(result: dict, target: LikeTarget):
    verb = "liked" if result["is_liked"] else "unliked"
    return schemas.respond(status.HTTP_200_OK, result, f"{target.label} {verb} successfully")


@router.post("/toggle/v/{video_id}")
def toggle_video_like(
    video_id: str,
    caller_id: UUID = Depends(get_current_user_id),
    service: LikeService = Depends(get_service),
):
    return _toggled(service.toggle(LikeTarget.VIDEO, video_id, caller_id), LikeTarget.VIDEO)


@router.post("/toggle/t/{tweet_id}")
def toggle_tweet_like(
    tweet_id: str,
    caller_id: UUID = Depends(get_current_user_id),
    service: LikeService = Depends(get_service),
):
    return _toggled(service.toggle(LikeTarget.TWEET, tweet_id, caller_id), LikeTarget.TWEET)


@router.post("/toggle/c/{comment_id}")
def toggle_comment_like(
    comment_id: str,
    caller_id: UUID = Depends(get_current_user_id),
    service: LikeService = Depends(get_service),
):
    return _toggled(service.toggle(LikeTarget.COMMENT, comment_id, caller_id), LikeTarget.COMMENT)


@router.get("/videos")
def list_liked_videos(
    page: int | None = Query(None),
    limit: int | None = Query(None),
    caller_id: UUID = Depends(get_current_user_id),
    service: LikeService = Depends(get_service),
):
    """Published videos the caller has liked, most recent like first."""
    result = service.liked_videos(caller_id, page, limit)
    return schemas.respond(status.HTTP_200_OK, result, "Liked videos fetched successfully")
