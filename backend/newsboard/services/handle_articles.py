"""Article Handlers — CRUD and voting for /articles routes (7 methods).

Invariants:
    - GET /articles always succeeds and lists newest first
    - GET /articles/:id answers 400 for a non-numeric or zero id, 404 for an unknown one
    - DELETE /articles/:id answers 400 (not 404) for an unknown id
    - Vote routes answer 400 when either the article or the voter is unknown
"""

import logging

from newsboard.core import vote_engine
from newsboard.core.domain_types import Envelope, parse_id
from newsboard.core.entity_store import EntityStore
from newsboard.core.errors import ResourceNotFoundError
from newsboard.core.route_resolver import path_param
from newsboard.services.handler_helpers import (
    nested_object, request_body, returns_envelope,
)

logger = logging.getLogger(__name__)


class ArticleHandlers:
    """Handlers for /articles, /articles/:id and the article vote routes."""

    def __init__(self, store: EntityStore):
        self.store = store

    def get_articles(self, path: str, request: dict) -> Envelope:
        return Envelope(200, {
            "articles": [a.to_dict() for a in self.store.list_articles()],
        })

    @returns_envelope
    def create_article(self, path: str, request: dict) -> Envelope:
        fields = nested_object(request_body(request), "article") or {}
        article = self.store.create_article(
            fields.get("title"), fields.get("url"), fields.get("username"),
        )
        return Envelope(201, {"article": article.to_dict()})

    def get_article(self, path: str, request: dict) -> Envelope:
        article_id = parse_id(path_param(path))
        article = self.store.get_article(article_id)
        if article:
            return Envelope(200, {"article": self.store.article_with_comments(article)})
        return Envelope(404 if article_id else 400)

    @returns_envelope
    def update_article(self, path: str, request: dict) -> Envelope:
        article_id = parse_id(path_param(path))
        patch = nested_object(request_body(request), "article")
        if not article_id or patch is None:
            return Envelope(400)
        article = self.store.update_article(article_id, patch)
        return Envelope(200, {"article": article.to_dict()})

    def delete_article(self, path: str, request: dict) -> Envelope:
        try:
            self.store.delete_article(path_param(path))
        except ResourceNotFoundError as exc:
            # Unknown ids answer 400 here, unlike DELETE /comments/:id
            logger.info(exc.message, extra={"error_code": exc.code, "path": path})
            return Envelope(400)
        return Envelope(204)

    def upvote_article(self, path: str, request: dict) -> Envelope:
        return self._vote(path, request, vote_engine.upvote)

    def downvote_article(self, path: str, request: dict) -> Envelope:
        return self._vote(path, request, vote_engine.downvote)

    def _vote(self, path: str, request: dict, transition) -> Envelope:
        article = self.store.get_article(path_param(path))
        user = self.store.get_user(request_body(request).get("username"))
        if not article or not user:
            return Envelope(400)
        transition(article, user.username)
        return Envelope(200, {"article": article.to_dict()})
