"""Comment Handlers — /comments routes through the dispatcher."""

import pytest


@pytest.fixture
def with_comment(seeded_dispatcher):
    seeded_dispatcher.dispatch("POST", "/comments", {
        "comment": {"body": "first", "username": "bob", "articleId": 1},
    })
    return seeded_dispatcher


def test_create_comment(seeded_dispatcher):
    envelope = seeded_dispatcher.dispatch("POST", "/comments", {
        "comment": {"body": "hi", "username": "bob", "articleId": 1},
    })
    assert envelope.status == 201
    assert envelope.body == {"comment": {
        "id": 1, "body": "hi", "username": "bob", "articleId": 1,
        "upvotedBy": [], "downvotedBy": [],
    }}
    article = seeded_dispatcher.dispatch("GET", "/articles/1").body["article"]
    assert article["commentIds"] == [1]


@pytest.mark.parametrize("comment", [
    {"body": "hi", "username": "bob"},
    {"body": "hi", "username": "bob", "articleId": 7},
    {"body": "hi", "username": "nobody", "articleId": 1},
    {"username": "bob", "articleId": 1},
])
def test_create_comment_invalid_is_400(seeded_dispatcher, comment):
    envelope = seeded_dispatcher.dispatch("POST", "/comments", {"comment": comment})
    assert envelope.status == 400


def test_update_comment(with_comment):
    envelope = with_comment.dispatch("PUT", "/comments/1", {"comment": {"body": "edited"}})
    assert envelope.status == 200
    assert envelope.body["comment"]["body"] == "edited"


def test_update_comment_empty_body_keeps_text(with_comment):
    envelope = with_comment.dispatch("PUT", "/comments/1", {"comment": {"body": ""}})
    assert envelope.body["comment"]["body"] == "first"


@pytest.mark.parametrize("path, body, status", [
    ("/comments/abc", {"comment": {"body": "x"}}, 400),
    ("/comments/1", {}, 400),
    ("/comments/9", {"comment": {"body": "x"}}, 404),
    ("/comments/-1", {"comment": {"body": "x"}}, 404),
])
def test_update_comment_errors(with_comment, path, body, status):
    assert with_comment.dispatch("PUT", path, body).status == status


def test_delete_comment(with_comment):
    assert with_comment.dispatch("DELETE", "/comments/1").status == 204
    article = with_comment.dispatch("GET", "/articles/1").body["article"]
    assert article["commentIds"] == []
    assert article["comments"] == []
    user = with_comment.dispatch("GET", "/users/bob").body["user"]
    assert user["commentIds"] == []


def test_delete_unknown_comment_is_404(with_comment):
    assert with_comment.dispatch("DELETE", "/comments/9").status == 404
    assert with_comment.dispatch("DELETE", "/comments/abc").status == 404


def test_comment_votes(with_comment):
    up = with_comment.dispatch("PUT", "/comments/1/upvote", {"username": "alice"})
    up_again = with_comment.dispatch("PUT", "/comments/1/upvote", {"username": "alice"})
    assert up.status == up_again.status == 200
    assert up_again.body["comment"]["upvotedBy"] == ["alice"]
    down = with_comment.dispatch("PUT", "/comments/1/downvote", {"username": "alice"})
    assert down.body["comment"]["upvotedBy"] == []
    assert down.body["comment"]["downvotedBy"] == ["alice"]


@pytest.mark.parametrize("path, body", [
    ("/comments/9/upvote", {"username": "alice"}),
    ("/comments/1/downvote", {"username": "nobody"}),
])
def test_comment_vote_errors_are_400(with_comment, path, body):
    assert with_comment.dispatch("PUT", path, body).status == 400
