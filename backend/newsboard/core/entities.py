"""Entities — the user, article and comment records owned by the entity store.

Invariants:
    - Records reference each other by id only (no embedded objects)
    - upvoted_by / downvoted_by hold each username at most once, never in both
    - to_dict() produces the camelCase wire shape the clients consume
"""

from dataclasses import dataclass, field

from newsboard.core.domain_types import ArticleId, CommentId, Username


@dataclass
class User:
    """Author account — created on first reference, never deleted."""

    username: Username
    article_ids: list[ArticleId] = field(default_factory=list)
    comment_ids: list[CommentId] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "username": self.username,
            "articleIds": list(self.article_ids),
            "commentIds": list(self.comment_ids),
        }


@dataclass
class Article:
    """Submitted link with its comment thread and vote sets."""

    id: ArticleId
    title: str
    url: str
    username: Username
    comment_ids: list[CommentId] = field(default_factory=list)
    upvoted_by: list[Username] = field(default_factory=list)
    downvoted_by: list[Username] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "username": self.username,
            "commentIds": list(self.comment_ids),
            "upvotedBy": list(self.upvoted_by),
            "downvotedBy": list(self.downvoted_by),
        }


@dataclass
class Comment:
    """Comment on an article."""

    id: CommentId
    body: str
    username: Username
    article_id: ArticleId
    upvoted_by: list[Username] = field(default_factory=list)
    downvoted_by: list[Username] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "body": self.body,
            "username": self.username,
            "articleId": self.article_id,
            "upvotedBy": list(self.upvoted_by),
            "downvotedBy": list(self.downvoted_by),
        }
