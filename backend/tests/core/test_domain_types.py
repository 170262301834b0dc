"""Domain Types — verifies enums, envelope and id parsing.

Tests:
    - RouteTemplate covers exactly the ten served templates
    - HttpMethod values match wire method names
    - Envelope defaults to no body
    - parse_id rejects only missing, non-numeric and zero values
    - id_key narrows parsed ids to positive whole dict keys
"""

import pytest

from newsboard.core.domain_types import (
    ArticleId, Envelope, HttpMethod, RouteTemplate, Username, id_key, parse_id,
)


def test_identity_types_wrap_primitives():
    assert ArticleId(3) == 3
    assert Username("alice") == "alice"


def test_route_template_has_ten_templates():
    assert len(RouteTemplate) == 10
    assert RouteTemplate("/articles/:id/upvote") is RouteTemplate.ARTICLE_UPVOTE


def test_route_template_rejects_unknown():
    with pytest.raises(ValueError):
        RouteTemplate("/widgets")


def test_http_method_values():
    assert {m.value for m in HttpMethod} == {"GET", "POST", "PUT", "DELETE"}


def test_envelope_defaults_to_no_body():
    envelope = Envelope(204)
    assert envelope.status == 204
    assert envelope.body is None


@pytest.mark.parametrize("value, expected", [
    (1, 1),
    ("42", 42),
    (" 7 ", 7),
    (3.0, 3),
    ("1e0", 1),
    (-1, -1),
    ("-1", -1),
    ("1.5", 1.5),
    (2.5, 2.5),
    (0, None),
    ("0", None),
    ("abc", None),
    ("", None),
    ("nan", None),
    ("1_000", None),
    (None, None),
    (True, None),
    ([1], None),
])
def test_parse_id(value, expected):
    assert parse_id(value) == expected


@pytest.mark.parametrize("value, expected", [
    ("3", 3),
    ("1e0", 1),
    (4.0, 4),
    (-1, None),
    ("1.5", None),
    ("abc", None),
    (0, None),
])
def test_id_key(value, expected):
    assert id_key(value) == expected
