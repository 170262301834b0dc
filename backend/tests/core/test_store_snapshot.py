"""Store Snapshot — tests for serialize and field-by-field merge.

Tests cover:
    - snapshot holds plain camelCase records and both counters
    - merge restores an equivalent store
    - missing / falsy snapshot fields keep the fresh store's values
    - null records from older snapshots are skipped
    - counters are pushed past loaded ids
    - malformed records raise PersistenceError and leave the store untouched
    - dangling links are dropped or rebuilt so every id list resolves
"""

import pytest

from newsboard.core.entity_store import EntityStore
from newsboard.core.errors import PersistenceError
from newsboard.core.store_snapshot import merge_snapshot, store_to_snapshot


def _seeded_store() -> EntityStore:
    store = EntityStore()
    store.create_user("alice")
    store.create_user("bob")
    store.create_article("T", "http://a", "alice")
    store.create_comment("c", "bob", 1)
    store.articles[1].upvoted_by.append("bob")
    return store


def test_snapshot_shape():
    snapshot = store_to_snapshot(_seeded_store())
    assert set(snapshot) == {
        "users", "articles", "nextArticleId", "comments", "nextCommentId",
    }
    assert snapshot["nextArticleId"] == 2
    assert snapshot["articles"][1]["upvotedBy"] == ["bob"]
    assert snapshot["comments"][1]["articleId"] == 1
    assert snapshot["users"]["bob"]["commentIds"] == [1]


def test_merge_restores_equivalent_store():
    original = _seeded_store()
    restored = merge_snapshot(EntityStore(), store_to_snapshot(original))
    assert store_to_snapshot(restored) == store_to_snapshot(original)


def test_merge_none_leaves_store_untouched():
    store = EntityStore()
    assert merge_snapshot(store, None) is store
    assert store.counts() == {"users": 0, "articles": 0, "comments": 0}


def test_merge_only_overwrites_truthy_fields():
    store = _seeded_store()
    merge_snapshot(store, {"users": {}, "nextArticleId": 0, "comments": None})
    assert set(store.users) == {"alice", "bob"}
    assert store.next_article_id == 2
    assert 1 in store.comments


def test_merge_skips_null_records_and_accepts_string_keys():
    data = {
        "users": {"alice": {"username": "alice", "articleIds": [2], "commentIds": []}},
        "articles": {
            "1": None,
            "2": {
                "id": 2, "title": "T", "url": "u", "username": "alice",
                "commentIds": [], "upvotedBy": [], "downvotedBy": [],
            },
        },
        "nextArticleId": 3,
    }
    store = merge_snapshot(EntityStore(), data)
    assert list(store.articles) == [2]
    assert store.next_article_id == 3


def test_merge_pushes_counters_past_loaded_ids():
    data = store_to_snapshot(_seeded_store())
    data["nextArticleId"] = 1
    data["nextCommentId"] = None
    store = merge_snapshot(EntityStore(), data)
    assert store.next_article_id == 2
    assert store.next_comment_id == 2


@pytest.mark.parametrize("mutate", [
    lambda data: data["articles"][1].pop("title"),
    lambda data: data["articles"][1].update(id="abc"),
    lambda data: data["comments"][1].update(articleId=None),
    lambda data: data["users"].update(carol={"articleIds": []}),
    lambda data: data.update(nextCommentId="many"),
])
def test_merge_malformed_record_raises_and_keeps_store(mutate):
    data = store_to_snapshot(_seeded_store())
    mutate(data)
    store = EntityStore()
    store.create_user("zoe")
    with pytest.raises(PersistenceError) as exc_info:
        merge_snapshot(store, data)
    assert exc_info.value.operation == "merge"
    assert list(store.users) == ["zoe"]
    assert store.counts() == {"users": 1, "articles": 0, "comments": 0}


def test_merge_non_mapping_root_raises():
    with pytest.raises(PersistenceError):
        merge_snapshot(EntityStore(), ["users"])


def test_merge_repairs_dangling_links():
    data = store_to_snapshot(_seeded_store())
    data["users"]["bob"]["commentIds"] = [7, 1]
    data["users"]["alice"]["articleIds"] = []
    data["articles"][1]["commentIds"] = [1, 1, 9]
    data["articles"][4] = {
        "id": 4, "title": "Orphan", "url": "u", "username": "ghost",
    }
    data["comments"][5] = {
        "id": 5, "body": "lost", "username": "bob", "articleId": 8,
    }

    store = merge_snapshot(EntityStore(), data)

    assert list(store.articles) == [1]
    assert list(store.comments) == [1]
    assert store.users["bob"].comment_ids == [1]
    assert store.users["alice"].article_ids == [1]
    assert store.articles[1].comment_ids == [1]
    assert store.user_comments(store.users["bob"])[0].body == "c"
    assert store.next_article_id == 5
    assert store.next_comment_id == 6


def test_merge_dedupes_conflicting_votes():
    data = store_to_snapshot(_seeded_store())
    data["articles"][1]["upvotedBy"] = ["bob", "bob"]
    data["articles"][1]["downvotedBy"] = ["bob", "alice"]
    store = merge_snapshot(EntityStore(), data)
    assert store.articles[1].upvoted_by == ["bob"]
    assert store.articles[1].downvoted_by == ["alice"]
