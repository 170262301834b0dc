"""Domain Types — identity wrappers, dispatch enums and the response envelope.

Invariants:
    - ArticleId and CommentId are positive ints handed out by the store counters
    - Every registered route is a RouteTemplate member — no raw string matching
    - Envelope.body is None when the response carries no content

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: RouteTemplate("/articles/:id") validates a resolved path in one call
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NewType


# ─── Identity Types ──────────────────────────────────────────────

Username = NewType("Username", str)
ArticleId = NewType("ArticleId", int)
CommentId = NewType("CommentId", int)


# ─── Enums ───────────────────────────────────────────────────────

class HttpMethod(str, Enum):
    """Methods the dispatcher knows how to route."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class RouteTemplate(str, Enum):
    """Canonical route templates produced by the route resolver."""
    USERS = "/users"
    USER = "/users/:username"
    ARTICLES = "/articles"
    ARTICLE = "/articles/:id"
    ARTICLE_UPVOTE = "/articles/:id/upvote"
    ARTICLE_DOWNVOTE = "/articles/:id/downvote"
    COMMENTS = "/comments"
    COMMENT = "/comments/:id"
    COMMENT_UPVOTE = "/comments/:id/upvote"
    COMMENT_DOWNVOTE = "/comments/:id/downvote"


# ─── Response ────────────────────────────────────────────────────

@dataclass(frozen=True)
class Envelope:
    """Handler result: HTTP status plus an optional JSON-safe body."""
    status: int
    body: dict[str, Any] | None = None


def parse_id(value: object) -> float | None:
    """Coerce a path segment or body field to a numeric id.

    Returns None only when the value is falsy as a number: missing, empty,
    non-numeric, NaN or zero. Any other number (negative, fractional,
    exponent form) is returned and simply matches no record unless it
    names a positive whole id.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if number != number or number == 0:
        return None
    return number


def id_key(value: object) -> int | None:
    """The dict key value names, or None when it cannot name a live record."""
    number = parse_id(value)
    if number is None or number < 0 or not number.is_integer():
        return None
    return int(number)
