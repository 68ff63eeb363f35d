"""User document mapping — body decoding, presence checks, age coercion, ids."""

from datetime import datetime, timezone

import pytest
from bson import ObjectId

from users_api.core.errors import (
    InvalidIdentifierError, MalformedBodyError, MissingFieldsError,
)
from users_api.core.user_documents import (
    build_update_fields,
    build_update_filter,
    build_user_document,
    coerce_age,
    decode_body,
    find_missing_fields,
    is_present,
    parse_user_id,
    require_fields,
    serialize_user,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def body():
    return {
        "name": "Ada", "email": "ada@example.com", "password": "pw",
        "age": "36", "role": "admin",
    }


# --- decode_body ---------------------------------------------------------------

def test_decode_body_accepts_object():
    assert decode_body(b'{"name": "Ada"}') == {"name": "Ada"}


def test_decode_body_accepts_json_encoded_string():
    assert decode_body('"{\\"name\\": \\"Ada\\"}"') == {"name": "Ada"}


@pytest.mark.parametrize("raw", [b"", b"   ", ""])
def test_decode_body_empty_is_empty_object(raw):
    assert decode_body(raw) == {}


@pytest.mark.parametrize(
    "raw",
    [
        b"{", b"[1, 2]", b"42", b'"not json inside"',
        b'{"name": "\xff"}',
        b"[" * 100_000 + b"]" * 100_000,
    ],
)
def test_decode_body_rejects_malformed_or_non_objects(raw):
    with pytest.raises(MalformedBodyError) as exc_info:
        decode_body(raw)
    assert exc_info.value.http_status == 400


# --- presence ------------------------------------------------------------------

def test_find_missing_fields_none_missing(body):
    assert find_missing_fields(body) == []


def test_find_missing_fields_keeps_canonical_order(body):
    body.pop("role")
    body["name"] = ""
    body["age"] = 0
    assert find_missing_fields(body) == ["name", "age", "role"]


@pytest.mark.parametrize(
    "value, present",
    [
        ("", False), (0, False), (0.0, False), (float("nan"), False),
        (False, False), (None, False),
        ("0", True), (" ", True), (-1, True), (True, True),
        ([], True), ({}, True),
    ],
)
def test_is_present_follows_truthiness_of_json_values(value, present):
    assert is_present(value) is present


def test_find_missing_fields_counts_empty_containers_as_present(body):
    body["role"] = []
    body["name"] = {}
    assert find_missing_fields(body) == []


def test_require_fields_raises_with_field_list():
    with pytest.raises(MissingFieldsError) as exc_info:
        require_fields({"name": "Ada", "age": 3})
    assert exc_info.value.missing_fields == ["email", "password", "role"]


# --- age -----------------------------------------------------------------------

@pytest.mark.parametrize(
    "value, expected",
    [
        (36, 36),
        ("36", 36),
        (" 36 ", 36),
        ("36.5", 36.5),
        (36.0, 36),
        ("", 0),
        (True, 1),
        ("thirty", None),
        ("inf", None),
        (None, None),
        ([36], None),
    ],
)
def test_coerce_age(value, expected):
    result = coerce_age(value)
    assert result == expected
    assert type(result) is type(expected)


# --- documents -----------------------------------------------------------------

def test_build_user_document_keeps_five_fields_and_created_at(body):
    body["extra"] = "ignored"
    doc = build_user_document(body, NOW)
    assert doc == {
        "name": "Ada", "email": "ada@example.com", "password": "pw",
        "age": 36, "role": "admin", "createdAt": NOW,
    }


def test_build_update_fields_nulls_absent_fields():
    fields = build_update_fields({"name": "Ada"}, NOW)
    assert fields == {
        "name": "Ada", "email": None, "password": None,
        "age": None, "role": None, "updatedAt": NOW,
    }


def test_build_update_filter_excludes_timestamp(body):
    oid = ObjectId()
    fields = build_update_fields(body, NOW)
    query = build_update_filter(oid, fields)
    assert query["_id"] == oid
    compared = [next(iter(clause)) for clause in query["$or"]]
    assert compared == ["name", "email", "password", "age", "role"]
    assert {"age": {"$ne": 36}} in query["$or"]


# --- identifiers ---------------------------------------------------------------

def test_parse_user_id_valid():
    oid = ObjectId()
    assert parse_user_id(str(oid), "Error fetching user") == oid


@pytest.mark.parametrize("raw", ["abc", "", "zz" * 12])
def test_parse_user_id_malformed_is_server_fault(raw):
    with pytest.raises(InvalidIdentifierError) as exc_info:
        parse_user_id(raw, "Error deleting user")
    err = exc_info.value
    assert err.http_status == 500
    assert err.to_response()["error"] == "Error deleting user"
    assert err.details


# --- serialization -------------------------------------------------------------

def test_serialize_user_makes_document_json_safe():
    oid = ObjectId()
    doc = {"_id": oid, "createdAt": NOW, "tags": [oid], "age": 3}
    assert serialize_user(doc) == {
        "_id": str(oid),
        "createdAt": "2026-10-19T12:00:00+00:00",
        "tags": [str(oid)],
        "age": 3,
    }
