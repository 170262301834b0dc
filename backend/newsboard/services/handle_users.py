"""User Handlers — get-or-create and read for /users routes (2 methods).

Invariants:
    - POST /users is idempotent: 201 on first call, 200 with the same body after
    - GET /users/:username resolves the user's article and comment ids to records
"""

from newsboard.core.domain_types import Envelope
from newsboard.core.entity_store import EntityStore
from newsboard.core.route_resolver import path_param
from newsboard.services.handler_helpers import request_body, returns_envelope


class UserHandlers:
    """Handlers for /users and /users/:username."""

    def __init__(self, store: EntityStore):
        self.store = store

    @returns_envelope
    def get_or_create_user(self, path: str, request: dict) -> Envelope:
        user, created = self.store.create_user(request_body(request).get("username"))
        return Envelope(201 if created else 200, {"user": user.to_dict()})

    @returns_envelope
    def get_user(self, path: str, request: dict) -> Envelope:
        username = path_param(path)
        user = self.store.get_user(username)
        if not user:
            return Envelope(404 if username else 400)
        return Envelope(200, {
            "user": user.to_dict(),
            "userArticles": [a.to_dict() for a in self.store.user_articles(user)],
            "userComments": [c.to_dict() for c in self.store.user_comments(user)],
        })
