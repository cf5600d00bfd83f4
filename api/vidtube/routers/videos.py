"""Video metadata endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from .. import schemas
from ..auth import get_current_user_id, get_current_user_id_optional
from ..deps import get_store
from ..services.videos import VideoService
from ..store import DataStore

router = APIRouter(prefix="/videos", tags=["Videos"])


def get_service(store: DataStore = Depends(get_store)) -> VideoService:
    return VideoService(store)


@router.post("")
def create_video(
    body: schemas.VideoCreate,
    caller_id: UUID = Depends(get_current_user_id),
    service: VideoService = Depends(get_service),
):
    """
    Register a video whose media has already been uploaded.

    The file and thumbnail references are stored as given.
    """
    video = service.create(
        caller_id,
        body.title,
        body.description,
        body.video_file_url,
        body.thumbnail_url,
        duration=body.duration,
        is_published=body.is_published,
    )
    return schemas.respond(status.HTTP_201_CREATED, video, "Video published successfully")


@router.get("/channel/{user_id}")
def list_channel_videos(
    user_id: str,
    page: int | None = Query(None),
    limit: int | None = Query(None),
    caller_id: UUID | None = Depends(get_current_user_id_optional),
    service: VideoService = Depends(get_service),
):
    result = service.list_for_channel(user_id, caller_id, page, limit)
    return schemas.respond(status.HTTP_200_OK, result, "Channel videos fetched successfully")


@router.patch("/toggle/publish/{video_id}")
def toggle_publish(
    video_id: str,
    caller_id: UUID = Depends(get_current_user_id),
    service: VideoService = Depends(get_service),
):
    result = service.toggle_publish(video_id, caller_id)
    return schemas.respond(status.HTTP_200_OK, result, "Publish status toggled successfully")


@router.get("/{video_id}")
def get_video(
    video_id: str,
    caller_id: UUID | None = Depends(get_current_user_id_optional),
    service: VideoService = Depends(get_service),
):
    video = service.get(video_id, caller_id)
    return schemas.respond(status.HTTP_200_OK, video, "Video fetched successfully")


@router.patch("/{video_id}")
def update_video(
    video_id: str,
    body: schemas.VideoUpdate,
    caller_id: UUID = Depends(get_current_user_id),
    service: VideoService = Depends(get_service),
):
    video = service.update(
        video_id,
        caller_id,
        title=body.title,
        description=body.description,
        thumbnail_url=body.thumbnail_url,
    )
    return schemas.respond(status.HTTP_200_OK, video, "Video updated successfully")


@router.delete("/{video_id}")
def delete_video(
    video_id: str,
    caller_id: UUID = Depends(get_current_user_id),
    service: VideoService = Depends(get_service),
):
    result = service.delete(video_id, caller_id)
    return schemas.respond(status.HTTP_200_OK, result, "Video deleted successfully")
