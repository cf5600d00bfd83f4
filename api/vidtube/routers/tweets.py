"""Tweet endpoints."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from .. import schemas
from ..auth import get_current_user_id, get_current_user_id_optional
from ..deps import get_store
from ..services.tweets import TweetService
from ..store import DataStore

router = APIRouter(prefix="/tweets", tags=["Tweets"])


def get_service(store: DataStore = Depends(get_store)) -> TweetService:
    return TweetService(store)


@router.post("")
def create_tweet(
    body: schemas.TweetBody,
    caller_id: UUID = Depends(get_current_user_id),
    service: TweetService = Depends(get_service),
):
    tweet = service.create(caller_id, body.content)
    return schemas.respond(status.HTTP_201_CREATED, tweet, "Tweet created successfully")


@router.get("")
def list_tweets(
    page: int | None = Query(None),
    limit: int | None = Query(None),
    caller_id: UUID | None = Depends(get_current_user_id_optional),
    service: TweetService = Depends(get_service),
):
    """Global tweet feed, newest first."""
    result = service.list_all(caller_id, page, limit)
    return schemas.respond(status.HTTP_200_OK, result, "Tweets fetched successfully")


@router.get("/user/{user_id}")
def list_user_tweets(
    user_id: str,
    page: int | None = Query(None),
    limit: int | None = Query(None),
    caller_id: UUID | None = Depends(get_current_user_id_optional),
    service: TweetService = Depends(get_service),
):
    result = service.list_for_user(user_id, caller_id, page, limit)
    return schemas.respond(status.HTTP_200_OK, result, "User tweets fetched successfully")


@router.get("/{tweet_id}")
def get_tweet(
    tweet_id: str,
    caller_id: UUID | None = Depends(get_current_user_id_optional),
    service: TweetService = Depends(get_service),
):
    tweet = service.get(tweet_id, caller_id)
    return schemas.respond(status.HTTP_200_OK, tweet, "Tweet fetched successfully")


@router.patch("/{tweet_id}")
def update_tweet(
    tweet_id: str,
    body: schemas.TweetBody,
    caller_id: UUID = Depends(get_current_user_id),
    service: TweetService = Depends(get_service),
):
    tweet = service.update(tweet_id, caller_id, body.content)
    return schemas.respond(status.HTTP_200_OK, tweet, "Tweet updated successfully")


@router.delete("/{tweet_id}")
def delete_tweet(
    tweet_id: str,
    caller_id: UUID = Depends(get_current_user_id),
    service: TweetService = Depends(get_service),
):
    result = service.delete(tweet_id, caller_id)
    return schemas.respond(status.HTTP_200_OK, result, "Tweet deleted successfully")
