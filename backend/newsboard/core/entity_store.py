"""Entity Store — in-memory relational store for users, articles and comments.

Invariants:
    - Every id in User.article_ids refers to a live Article owned by that user
    - Every id in User.comment_ids / Article.comment_ids refers to a live Comment
      with a matching username / article_id
    - Article and comment ids come from monotonic counters and are never reused
    - Deleting an article deletes its comments and unlinks them from their authors
    - Deleted records are removed from the backing dicts (no null tombstones)

Design Decisions:
    - One explicitly constructed instance per application, injected into the
      dispatcher; tests build their own instances
    - Failures raise ValidationError / ResourceNotFoundError; the handler layer
      turns them into status codes
    - Patch semantics are falsy-preserving: an empty string means "no change",
      so a field cannot be cleared through an update
"""

import logging

from newsboard.core import vote_engine
from newsboard.core.domain_types import ArticleId, CommentId, Username, id_key
from newsboard.core.entities import Article, Comment, User
from newsboard.core.errors import ResourceNotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _require_text(value: object, field: str) -> str:
    """Return value if it is a non-empty string, else raise ValidationError."""
    if not value or not isinstance(value, str):
        raise ValidationError(f"'{field}' is required", field)
    return value


def _scored(record: Article | Comment) -> dict:
    return {**record.to_dict(), "score": vote_engine.score(record)}


class EntityStore:
    """Owns all entity records and id counters."""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Drop every record and restart both counters at 1."""
        self.users: dict[Username, User] = {}
        self.articles: dict[ArticleId, Article] = {}
        self.comments: dict[CommentId, Comment] = {}
        self.next_article_id: int = 1
        self.next_comment_id: int = 1

    # ─── Users ──────────────────────────────────────────────────

    def create_user(self, username: object) -> tuple[User, bool]:
        """Return (user, created). Existing users are returned untouched."""
        name = Username(_require_text(username, "username"))
        existing = self.users.get(name)
        if existing is not None:
            return existing, False
        user = User(username=name)
        self.users[name] = user
        logger.info(f"Created user '{name}'")
        return user, True

    def get_user(self, username: object) -> User | None:
        if not isinstance(username, str):
            return None
        return self.users.get(Username(username))

    def user_articles(self, user: User) -> list[Article]:
        return [self.articles[article_id] for article_id in user.article_ids]

    def user_comments(self, user: User) -> list[Comment]:
        return [self.comments[comment_id] for comment_id in user.comment_ids]

    # ─── Articles ───────────────────────────────────────────────

    def create_article(
        self, title: object, url: object, username: object,
    ) -> Article:
        title = _require_text(title, "title")
        url = _require_text(url, "url")
        name = _require_text(username, "username")
        user = self.get_user(name)
        if not user:
            raise ValidationError(f"Unknown user '{name}'", "username")

        article = Article(
            id=ArticleId(self.next_article_id),
            title=title,
            url=url,
            username=user.username,
        )
        self.next_article_id += 1
        self.articles[article.id] = article
        user.article_ids.append(article.id)
        logger.info(f"Created article {article.id} by '{user.username}'")
        return article

    def get_article(self, article_id: object) -> Article | None:
        key = id_key(article_id)
        if key is None:
            return None
        return self.articles.get(ArticleId(key))

    def require_article(self, article_id: object) -> Article:
        article = self.get_article(article_id)
        if not article:
            raise ResourceNotFoundError("Article", article_id)
        return article

    def list_articles(self) -> list[Article]:
        """All live articles, newest first."""
        return sorted(
            self.articles.values(), key=lambda article: article.id, reverse=True,
        )

    def article_with_comments(self, article: Article) -> dict:
        """Read view of an article with its comments resolved in thread order.

        The comments list and the read-only scores are assembled per read and
        never stored on the records.
        """
        view = _scored(article)
        view["comments"] = [
            _scored(self.comments[comment_id]) for comment_id in article.comment_ids
        ]
        return view

    def update_article(self, article_id: object, patch: dict) -> Article:
        article = self.require_article(article_id)
        article.title = patch.get("title") or article.title
        article.url = patch.get("url") or article.url
        return article

    def delete_article(self, article_id: object) -> None:
        """Delete an article, its comments and every id list entry pointing at them."""
        article = self.require_article(article_id)
        for comment_id in list(article.comment_ids):
            comment = self.comments.pop(comment_id)
            author = self.users[comment.username]
            author.comment_ids.remove(comment_id)
        del self.articles[article.id]
        self.users[article.username].article_ids.remove(article.id)
        logger.info(
            f"Deleted article {article.id} "
            f"with {len(article.comment_ids)} comment(s)",
        )

    # ─── Comments ───────────────────────────────────────────────

    def create_comment(
        self, body: object, username: object, article_id: object,
    ) -> Comment:
        body = _require_text(body, "body")
        name = _require_text(username, "username")
        user = self.get_user(name)
        if not user:
            raise ValidationError(f"Unknown user '{name}'", "username")
        article = self.get_article(article_id)
        if not article:
            raise ValidationError(f"Unknown article '{article_id}'", "articleId")

        comment = Comment(
            id=CommentId(self.next_comment_id),
            body=body,
            username=user.username,
            article_id=article.id,
        )
        self.next_comment_id += 1
        self.comments[comment.id] = comment
        user.comment_ids.append(comment.id)
        article.comment_ids.append(comment.id)
        logger.info(f"Created comment {comment.id} on article {article.id}")
        return comment

    def get_comment(self, comment_id: object) -> Comment | None:
        key = id_key(comment_id)
        if key is None:
            return None
        return self.comments.get(CommentId(key))

    def require_comment(self, comment_id: object) -> Comment:
        comment = self.get_comment(comment_id)
        if not comment:
            raise ResourceNotFoundError("Comment", comment_id)
        return comment

    def update_comment(self, comment_id: object, patch: dict) -> Comment:
        comment = self.require_comment(comment_id)
        comment.body = patch.get("body") or comment.body
        return comment

    def delete_comment(self, comment_id: object) -> None:
        comment = self.require_comment(comment_id)
        del self.comments[comment.id]
        self.users[comment.username].comment_ids.remove(comment.id)
        self.articles[comment.article_id].comment_ids.remove(comment.id)
        logger.info(f"Deleted comment {comment.id}")

    # ─── Introspection ──────────────────────────────────────────

    def counts(self) -> dict[str, int]:
        return {
            "users": len(self.users),
            "articles": len(self.articles),
            "comments": len(self.comments),
        }
