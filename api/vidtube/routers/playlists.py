"""Playlist management endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from .. import schemas
from ..auth import get_current_user_id, get_current_user_id_optional
from ..deps import get_store
from ..services.playlists import PlaylistService
from ..store import DataStore

router = APIRouter(prefix="/playlist", tags=["Playlists"])


def get_service(store: DataStore = Depends(get_store)) -> PlaylistService:
    return PlaylistService(store)


@router.post("")
def create_playlist(
    body: schemas.PlaylistBody,
    caller_id: UUID = Depends(get_current_user_id),
    service: PlaylistService = Depends(get_service),
):
    playlist = service.create(caller_id, body.name, body.description)
    return schemas.respond(status.HTTP_201_CREATED, playlist, "Playlist created successfully")


@router.get("/user/{user_id}")
def list_user_playlists(
    user_id: str,
    page: int | None = Query(None),
    limit: int | None = Query(None),
    caller_id: UUID | None = Depends(get_current_user_id_optional),
    service: PlaylistService = Depends(get_service),
):
    result = service.list_for_user(user_id, caller_id, page, limit)
    return schemas.respond(status.HTTP_200_OK, result, "User playlists fetched successfully")


@router.patch("/add/{video_id}/{playlist_id}")
def add_video_to_playlist(
    video_id: str,
    playlist_id: str,
    caller_id: UUID = Depends(get_current_user_id),
    service: PlaylistService = Depends(get_service),
):
    """Add a video; adding one already present leaves the playlist unchanged."""
    playlist = service.add_video(playlist_id, video_id, caller_id)
    return schemas.respond(status.HTTP_200_OK, playlist, "Video added to playlist successfully")


@router.patch("/remove/{video_id}/{playlist_id}")
def remove_video_from_playlist(
    video_id: str,
    playlist_id: str,
    caller_id: UUID = Depends(get_current_user_id),
    service: PlaylistService = Depends(get_service),
):
    playlist = service.remove_video(playlist_id, video_id, caller_id)
    return schemas.respond(status.HTTP_200_OK, playlist, "Video removed from playlist successfully")


@router.get("/{playlist_id}")
def get_playlist(
    playlist_id: str,
    caller_id: UUID | None = Depends(get_current_user_id_optional),
    service: PlaylistService = Depends(get_service),
):
    playlist = service.get(playlist_id, caller_id)
    return schemas.respond(status.HTTP_200_OK, playlist, "Playlist fetched successfully")


@router.patch("/{playlist_id}")
def update_playlist(
    playlist_id: str,
    body: schemas.PlaylistBody,
    caller_id: UUID = Depends(get_current_user_id),
    service: PlaylistService = Depends(get_service),
):
    playlist = service.update(playlist_id, caller_id, body.name, body.description)
    return schemas.respond(status.HTTP_200_OK, playlist, "Playlist updated successfully")


@router.delete("/{playlist_id}")
def delete_playlist(
    playlist_id: str,
    caller_id: UUID = Depends(get_current_user_id),
    service: PlaylistService = Depends(get_service),
):
    result = service.delete(playlist_id, caller_id)
    return schemas.respond(status.HTTP_200_OK, result, "Playlist deleted successfully")
