"""Route Resolver — maps a raw URL path to a canonical route template.

Invariants:
    - Rules apply in order: one segment, vote suffix, users, fallback to :id
    - Resolution never fails; the result may match no registered route
    - Query strings and empty segments are ignored
"""

from urllib.parse import urlsplit

VOTE_ACTIONS = frozenset({"upvote", "downvote"})


def path_segments(path: str) -> list[str]:
    """Non-empty path segments, query string stripped."""
    return [segment for segment in urlsplit(path).path.split("/") if segment]


def resolve(path: str) -> str:
    """Return the route template for path, e.g. "/articles/:id/upvote"."""
    segments = path_segments(path)
    if not segments:
        return "/"
    if len(segments) == 1:
        return f"/{segments[0]}"
    if len(segments) > 2 and segments[2] in VOTE_ACTIONS:
        return f"/{segments[0]}/:id/{segments[2]}"
    if segments[0] == "users":
        return "/users/:username"
    return f"/{segments[0]}/:id"


def path_param(path: str) -> str | None:
    """The :id / :username segment of path, or None when absent."""
    segments = path_segments(path)
    return segments[1] if len(segments) > 1 else None
