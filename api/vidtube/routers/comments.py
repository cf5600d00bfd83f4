"""Comment endpoints for videos and tweets."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from .. import schemas
from ..auth import get_current_user_id, get_current_user_id_optional
from ..deps import get_store
from ..services.comments import CommentService
from ..store import DataStore

router = APIRouter(prefix="/comments", tags=["Comments"])


def get_service(store: DataStore = Depends(get_store)) -> CommentService:
    return CommentService(store)


@router.get("/{video_id}")
def list_video_comments(
    video_id: str,
    page: int | None = Query(None),
    limit: int | None = Query(None),
    caller_id: UUID | None = Depends(get_current_user_id_optional),
    service: CommentService = Depends(get_service),
):
    """Top-level comments on a video, newest first."""
    result = service.list_video_comments(video_id, caller_id, page, limit)
    return schemas.respond(status.HTTP_200_OK, result, "Comments fetched successfully")


@router.post("/{video_id}")
def add_video_comment(
    video_id: str,
    body: schemas.CommentBody,
    caller_id: UUID = Depends(get_current_user_id),
    service: CommentService = Depends(get_service),
):
    comment = service.add_to_video(video_id, caller_id, body.content)
    return schemas.respond(status.HTTP_201_CREATED, comment, "Comment added successfully")


@router.get("/tweet/{tweet_id}")
def list_tweet_comments(
    tweet_id: str,
    page: int | None = Query(None),
    limit: int | None = Query(None),
    caller_id: UUID | None = Depends(get_current_user_id_optional),
    service: CommentService = Depends(get_service),
):
    result = service.list_tweet_comments(tweet_id, caller_id, page, limit)
    return schemas.respond(status.HTTP_200_OK, result, "Comments fetched successfully")


@router.post("/tweet/{tweet_id}")
def add_tweet_comment(
    tweet_id: str,
    body: schemas.CommentBody,
    caller_id: UUID = Depends(get_current_user_id),
    service: CommentService = Depends(get_service),
):
    comment = service.add_to_tweet(tweet_id, caller_id, body.content)
    return schemas.respond(status.HTTP_201_CREATED, comment, "Comment added successfully")


@router.post("/reply/{comment_id}")
def reply_to_comment(
    comment_id: str,
    body: schemas.CommentBody,
    caller_id: UUID = Depends(get_current_user_id),
    service: CommentService = Depends(get_service),
):
    """Reply to a comment; the reply inherits the parent's video or tweet."""
    reply = service.reply(comment_id, caller_id, body.content)
    return schemas.respond(status.HTTP_201_CREATED, reply, "Reply added successfully")


@router.get("/replies/{comment_id}")
def list_replies(
    comment_id: str,
    page: int | None = Query(None),
    limit: int | None = Query(None),
    caller_id: UUID | None = Depends(get_current_user_id_optional),
    service: CommentService = Depends(get_service),
):
    """Direct replies of a comment, one level deep."""
    result = service.list_replies(comment_id, caller_id, page, limit)
    return schemas.respond(status.HTTP_200_OK, result, "Replies fetched successfully")


@router.patch("/c/{comment_id}")
def update_comment(
    comment_id: str,
    body: schemas.CommentBody,
    caller_id: UUID = Depends(get_current_user_id),
    service: CommentService = Depends(get_service),
):
    comment = service.update(comment_id, caller_id, body.content)
    return schemas.respond(status.HTTP_200_OK, comment, "Comment updated successfully")


@router.delete("/c/{comment_id}")
def delete_comment(
    comment_id: str,
    caller_id: UUID = Depends(get_current_user_id),
    service: CommentService = Depends(get_service),
):
    """Delete a comment together with its replies and the likes on them."""
    result = service.delete(comment_id, caller_id)
    return schemas.respond(status.HTTP_200_OK, result, "Comment deleted successfully")
