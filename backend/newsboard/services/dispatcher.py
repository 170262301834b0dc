"""Dispatcher — explicit routing from (route template, method) to handler.

Invariants:
    - Every route->handler mapping is visible in one dict, built once per store
    - Unregistered (template, method) pairs answer 400 with no body (never raises)
    - Handlers receive (path, {"body": parsed_body_or_None}) and their envelope
      is returned verbatim
    - Every dispatch is logged with method, path, route and status

Design Decisions:
    - Keys are (RouteTemplate, HttpMethod) enum pairs: a resolved path that is
      not a RouteTemplate member can never reach a handler
    - Handlers are split per resource: max ~7 methods per class
"""

import logging
from typing import Any

from newsboard.core.domain_types import Envelope, HttpMethod, RouteTemplate
from newsboard.core.entity_store import EntityStore
from newsboard.core.errors import RouteMismatchError
from newsboard.core.route_resolver import resolve
from newsboard.services.handle_articles import ArticleHandlers
from newsboard.services.handle_comments import CommentHandlers
from newsboard.services.handle_users import UserHandlers
from newsboard.services.handler_helpers import Handler

logger = logging.getLogger(__name__)


class Dispatcher:
    """Routes (template, method) -> handler. Explicit registration, no auto-discovery."""

    def __init__(self, store: EntityStore):
        self.store = store
        users = UserHandlers(store)
        articles = ArticleHandlers(store)
        comments = CommentHandlers(store)

        # Adding a route requires editing this dict
        self._handlers: dict[tuple[RouteTemplate, HttpMethod], Handler] = {
            # Users
            (RouteTemplate.USERS, HttpMethod.POST): users.get_or_create_user,
            (RouteTemplate.USER, HttpMethod.GET): users.get_user,

            # Articles
            (RouteTemplate.ARTICLES, HttpMethod.GET): articles.get_articles,
            (RouteTemplate.ARTICLES, HttpMethod.POST): articles.create_article,
            (RouteTemplate.ARTICLE, HttpMethod.GET): articles.get_article,
            (RouteTemplate.ARTICLE, HttpMethod.PUT): articles.update_article,
            (RouteTemplate.ARTICLE, HttpMethod.DELETE): articles.delete_article,
            (RouteTemplate.ARTICLE_UPVOTE, HttpMethod.PUT): articles.upvote_article,
            (RouteTemplate.ARTICLE_DOWNVOTE, HttpMethod.PUT): articles.downvote_article,

            # Comments
            (RouteTemplate.COMMENTS, HttpMethod.POST): comments.create_comment,
            (RouteTemplate.COMMENT, HttpMethod.PUT): comments.update_comment,
            (RouteTemplate.COMMENT, HttpMethod.DELETE): comments.delete_comment,
            (RouteTemplate.COMMENT_UPVOTE, HttpMethod.PUT): comments.upvote_comment,
            (RouteTemplate.COMMENT_DOWNVOTE, HttpMethod.PUT): comments.downvote_comment,
        }

    @property
    def routes(self) -> frozenset[tuple[RouteTemplate, HttpMethod]]:
        return frozenset(self._handlers)

    def lookup(self, method: str, path: str) -> tuple[RouteTemplate, Handler]:
        """Resolve path and return (template, handler). Raises RouteMismatchError."""
        template = resolve(path)
        try:
            key = (RouteTemplate(template), HttpMethod(method))
        except ValueError:
            raise RouteMismatchError(method, template)
        handler = self._handlers.get(key)
        if handler is None:
            raise RouteMismatchError(method, template)
        return key[0], handler

    def dispatch(
        self, method: str, path: str, body: Any | None = None,
    ) -> Envelope:
        """Route one request to its handler and return the handler's envelope."""
        try:
            template, handler = self.lookup(method, path)
        except RouteMismatchError as exc:
            logger.info(
                exc.message,
                extra={
                    "method": method, "path": path,
                    "route": exc.template, "error_code": exc.code,
                    "status_code": exc.http_status,
                },
            )
            return Envelope(exc.http_status)

        envelope = handler(path, {"body": body})
        logger.info(
            f"{method} {path} -> {envelope.status}",
            extra={
                "method": method, "path": path,
                "route": template.value, "status_code": envelope.status,
            },
        )
        return envelope
