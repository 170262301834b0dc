"""Vote Engine — pure upvote/downvote transitions over any votable entity.

Invariants:
    - A username is never in both upvoted_by and downvoted_by
    - Repeating the same vote is a no-op (no duplicate, no error)
    - No existence checks: callers validate the entity and the voter first
"""

from typing import Protocol, TypeVar

from newsboard.core.domain_types import Username


class Votable(Protocol):
    """Structural contract for entities carrying vote sets."""
    upvoted_by: list[Username]
    downvoted_by: list[Username]


V = TypeVar("V", bound=Votable)


def upvote(entity: V, username: Username) -> V:
    """Move username into upvoted_by. Returns the same entity."""
    if username in entity.downvoted_by:
        entity.downvoted_by.remove(username)
    if username not in entity.upvoted_by:
        entity.upvoted_by.append(username)
    return entity


def downvote(entity: V, username: Username) -> V:
    """Move username into downvoted_by. Returns the same entity."""
    if username in entity.upvoted_by:
        entity.upvoted_by.remove(username)
    if username not in entity.downvoted_by:
        entity.downvoted_by.append(username)
    return entity


def score(entity: Votable) -> int:
    return len(entity.upvoted_by) - len(entity.downvoted_by)
