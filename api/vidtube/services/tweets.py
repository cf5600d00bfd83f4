"""Tweets (community posts) and their feeds."""

from __future__ import annotations

import logging
from typing import Any

from ..errors import NotFoundError
from ..schemas import Page
from ..store import DataStore, Record, get_or_404
from ..validation import parse_id, require_text
from ..views import RootTarget, ViewContext, ViewPipeline
from ..views.projection import project
from ..views.specs import TWEET_FIELDS, tweet_feed
from .comments import CommentService
from .ownership import authorize_mutation, require_caller

logger = logging.getLogger(__name__)


class TweetService:
    def __init__(self, store: DataStore):
        self.store = store
        self.pipeline = ViewPipeline(store)

    def create(self, caller_id: Any, content: str | None) -> Record:
        caller_id = require_caller(caller_id)
        content = require_text(content, "Content")
        tweet = self.store.create("tweets", {"owner_id": caller_id, "content": content})
        logger.info(f"User {caller_id} created tweet {tweet['id']}")
        return project(tweet, TWEET_FIELDS)

    def get(self, tweet_id: Any, caller_id: Any = None) -> Record:
        tweet_id = parse_id(tweet_id, "tweetId")
        tweet = self.pipeline.run_one(tweet_feed({"id": tweet_id}), ViewContext(caller_id))
        if tweet is None:
            raise NotFoundError("Tweet not found")
        return tweet

    def list_for_user(
        self, user_id: Any, caller_id: Any = None, page: int | None = None, limit: int | None = None
    ) -> Page:
        user_id = parse_id(user_id, "userId")
        get_or_404(self.store, "users", user_id, "User not found")
        return self.pipeline.paginate(tweet_feed({"owner_id": user_id}), ViewContext(caller_id), page, limit)

    def list_all(self, caller_id: Any = None, page: int | None = None, limit: int | None = None) -> Page:
        return self.pipeline.paginate(tweet_feed({}), ViewContext(caller_id), page, limit)

    def update(self, tweet_id: Any, caller_id: Any, content: str | None) -> Record:
        caller_id = require_caller(caller_id)
        content = require_text(content, "Content")
        tweet = get_or_404(self.store, "tweets", parse_id(tweet_id, "tweetId"), "Tweet not found")
        authorize_mutation(tweet, caller_id, message="Only the owner can edit this tweet")
        updated = self.store.update_by_id("tweets", tweet["id"], {"content": content})
        return project(updated, TWEET_FIELDS)

    def delete(self, tweet_id: Any, caller_id: Any) -> dict[str, Any]:
        """Delete a tweet together with its comments and likes."""
        caller_id = require_caller(caller_id)
        tweet = get_or_404(self.store, "tweets", parse_id(tweet_id, "tweetId"), "Tweet not found")
        authorize_mutation(tweet, caller_id, message="Only the owner can delete this tweet")

        comments_deleted = CommentService(self.store).delete_for_root(RootTarget.tweet(tweet["id"]))
        self.store.delete_many("likes", {"tweet_id": tweet["id"]})
        self.store.delete_by_id("tweets", tweet["id"])
        logger.info(f"Deleted tweet {tweet['id']} and {comments_deleted} comments")
        return {"tweet_id": tweet["id"]}
