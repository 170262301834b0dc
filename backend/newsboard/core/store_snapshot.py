"""Store Snapshot — serialization / deserialization for EntityStore.

Invariants:
    - store_to_snapshot produces a YAML/JSON-safe dict (plain lists, ints, strs)
    - merge_snapshot only overwrites store fields that are present and truthy
      in the snapshot; everything else keeps the fresh store's value
    - A malformed record raises PersistenceError and leaves the store untouched
    - Null records (tombstones written by older servers) are skipped on load
    - After a merge, every id list resolves to live, consistent records and
      both counters are past every loaded id
"""

import logging

from newsboard.core.domain_types import ArticleId, CommentId, Username, id_key
from newsboard.core.entities import Article, Comment, User
from newsboard.core.entity_store import EntityStore
from newsboard.core.errors import PersistenceError

logger = logging.getLogger(__name__)

_MALFORMED = (KeyError, TypeError, ValueError, AttributeError)


def store_to_snapshot(store: EntityStore) -> dict:
    """Serialize the store to a plain dict. Pure, no IO."""
    return {
        "users": {
            username: user.to_dict() for username, user in store.users.items()
        },
        "articles": {
            article_id: article.to_dict()
            for article_id, article in store.articles.items()
        },
        "nextArticleId": store.next_article_id,
        "comments": {
            comment_id: comment.to_dict()
            for comment_id, comment in store.comments.items()
        },
        "nextCommentId": store.next_comment_id,
    }


def _required_id(value: object) -> int:
    key = id_key(value)
    if key is None:
        raise ValueError(f"invalid id {value!r}")
    return key


def _required_text(value: object) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {value!r}")
    return value


def _ids(values: list | None) -> list[int]:
    return [key for key in map(id_key, values or []) if key is not None]


def _votes(data: dict) -> tuple[list[Username], list[Username]]:
    """Deduplicated vote lists with no username in both."""
    up = list(dict.fromkeys(data.get("upvotedBy") or []))
    down = [name for name in dict.fromkeys(data.get("downvotedBy") or []) if name not in up]
    return up, down


def _user_from_dict(data: dict) -> User:
    return User(
        username=Username(_required_text(data["username"])),
        article_ids=[ArticleId(i) for i in _ids(data.get("articleIds"))],
        comment_ids=[CommentId(i) for i in _ids(data.get("commentIds"))],
    )


def _article_from_dict(data: dict) -> Article:
    up, down = _votes(data)
    return Article(
        id=ArticleId(_required_id(data["id"])),
        title=_required_text(data["title"]),
        url=_required_text(data["url"]),
        username=Username(_required_text(data["username"])),
        comment_ids=[CommentId(i) for i in _ids(data.get("commentIds"))],
        upvoted_by=up,
        downvoted_by=down,
    )


def _comment_from_dict(data: dict) -> Comment:
    up, down = _votes(data)
    return Comment(
        id=CommentId(_required_id(data["id"])),
        body=_required_text(data["body"]),
        username=Username(_required_text(data["username"])),
        article_id=ArticleId(_required_id(data["articleId"])),
        upvoted_by=up,
        downvoted_by=down,
    )


def _linked(existing: list[int], owned: list[int]) -> list[int]:
    """existing ids that are still owned, in order, then owned ids it missed."""
    owned_set = set(owned)
    kept = [i for i in dict.fromkeys(existing) if i in owned_set]
    return kept + sorted(owned_set.difference(kept))


def _repair_links(store: EntityStore) -> int:
    """Drop orphaned records and rebuild id lists from the records. Returns fixes made."""
    fixes = 0
    for article_id in [
        a.id for a in store.articles.values() if a.username not in store.users
    ]:
        del store.articles[article_id]
        fixes += 1
    for comment_id in [
        c.id for c in store.comments.values()
        if c.username not in store.users or c.article_id not in store.articles
    ]:
        del store.comments[comment_id]
        fixes += 1

    for user in store.users.values():
        article_ids = _linked(user.article_ids, [
            a.id for a in store.articles.values() if a.username == user.username
        ])
        comment_ids = _linked(user.comment_ids, [
            c.id for c in store.comments.values() if c.username == user.username
        ])
        fixes += (article_ids != user.article_ids) + (comment_ids != user.comment_ids)
        user.article_ids, user.comment_ids = article_ids, comment_ids
    for article in store.articles.values():
        comment_ids = _linked(article.comment_ids, [
            c.id for c in store.comments.values() if c.article_id == article.id
        ])
        fixes += comment_ids != article.comment_ids
        article.comment_ids = comment_ids
    return fixes


def merge_snapshot(store: EntityStore, data: dict | None) -> EntityStore:
    """Merge a loaded snapshot into store field by field. Pure, no IO.

    Missing or falsy snapshot fields leave the store's current value in place.
    Raises PersistenceError on a malformed snapshot, before touching store.
    """
    if not data:
        return store
    if not isinstance(data, dict):
        raise PersistenceError("snapshot root is not a mapping", "merge")

    try:
        users = store.users
        if data.get("users"):
            users = {}
            for record in data["users"].values():
                if record:
                    user = _user_from_dict(record)
                    users[user.username] = user
        articles = store.articles
        if data.get("articles"):
            loaded = [_article_from_dict(r) for r in data["articles"].values() if r]
            articles = {article.id: article for article in loaded}
        comments = store.comments
        if data.get("comments"):
            loaded = [_comment_from_dict(r) for r in data["comments"].values() if r]
            comments = {comment.id: comment for comment in loaded}
        next_article_id = int(data.get("nextArticleId") or store.next_article_id)
        next_comment_id = int(data.get("nextCommentId") or store.next_comment_id)
    except _MALFORMED as e:
        raise PersistenceError(f"malformed record ({e!r})", "merge")

    store.users, store.articles, store.comments = users, articles, comments
    # Counters stay ahead of every loaded id, including orphans dropped below
    store.next_article_id = max([next_article_id, *(i + 1 for i in articles)])
    store.next_comment_id = max([next_comment_id, *(i + 1 for i in comments)])

    fixes = _repair_links(store)
    if fixes:
        logger.warning(
            f"Repaired {fixes} dangling link(s) in loaded snapshot",
            extra={"operation": "merge"},
        )

    logger.info(
        "Merged snapshot into store",
        extra={"entity_counts": store.counts()},
    )
    return store
