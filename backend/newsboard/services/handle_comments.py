"""Comment Handlers — create, update, delete and voting for /comments routes (5 methods).

Invariants:
    - A comment can only be created for an existing user on a live article
    - DELETE /comments/:id answers 404 for an unknown id
    - Vote routes answer 400 when either the comment or the voter is unknown
"""

from newsboard.core import vote_engine
from newsboard.core.domain_types import Envelope, parse_id
from newsboard.core.entity_store import EntityStore
from newsboard.core.route_resolver import path_param
from newsboard.services.handler_helpers import (
    nested_object, request_body, returns_envelope,
)


class CommentHandlers:
    """Handlers for /comments, /comments/:id and the comment vote routes."""

    def __init__(self, store: EntityStore):
        self.store = store

    @returns_envelope
    def create_comment(self, path: str, request: dict) -> Envelope:
        fields = nested_object(request_body(request), "comment") or {}
        comment = self.store.create_comment(
            fields.get("body"), fields.get("username"), fields.get("articleId"),
        )
        return Envelope(201, {"comment": comment.to_dict()})

    @returns_envelope
    def update_comment(self, path: str, request: dict) -> Envelope:
        comment_id = parse_id(path_param(path))
        patch = nested_object(request_body(request), "comment")
        if not comment_id or patch is None:
            return Envelope(400)
        comment = self.store.update_comment(comment_id, patch)
        return Envelope(200, {"comment": comment.to_dict()})

    @returns_envelope
    def delete_comment(self, path: str, request: dict) -> Envelope:
        self.store.delete_comment(path_param(path))
        return Envelope(204)

    def upvote_comment(self, path: str, request: dict) -> Envelope:
        return self._vote(path, request, vote_engine.upvote)

    def downvote_comment(self, path: str, request: dict) -> Envelope:
        return self._vote(path, request, vote_engine.downvote)

    def _vote(self, path: str, request: dict, transition) -> Envelope:
        comment = self.store.get_comment(path_param(path))
        user = self.store.get_user(request_body(request).get("username"))
        if not comment or not user:
            return Envelope(400)
        transition(comment, user.username)
        return Envelope(200, {"comment": comment.to_dict()})
