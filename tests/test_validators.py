"""
Unit tests for required-field validation and identifier parsing.
"""

import pytest
from bson import ObjectId

from mflix_api.core.errors import ValidationError
from mflix_api.core.ids import parse_object_id
from mflix_api.models.schemas import CommentSchema, MovieSchema
from mflix_api.services.validators import (
    ensure_valid,
    required_fields,
    validate_comment,
    validate_movie,
)


def test_required_field_sets():
    assert required_fields(MovieSchema) == ["title"]
    assert required_fields(CommentSchema) == ["name", "email", "text", "date", "movie_id"]


def test_movie_with_title_is_valid():
    result = validate_movie({"title": "Winsor McCay"})
    assert result.ok
    assert result.missing == []


@pytest.mark.parametrize("payload", [None, {}, {"title": ""}, {"title": None}, {"year": 1911}, ["title"]])
def test_movie_without_title(payload):
    result = validate_movie(payload)
    assert not result.ok
    assert result.missing == ["title"]


def test_comment_reports_every_missing_field():
    result = validate_comment({"name": "Ann", "email": " ", "movie_id": str(ObjectId())})
    assert result.missing == ["email", "text", "date"]


def test_comment_scenario_is_valid():
    result = validate_comment({
        "name": "Ann",
        "email": "a@x.com",
        "text": "Great film",
        "date": "2024-01-01T00:00:00Z",
        "movie_id": str(ObjectId()),
    })
    assert result.ok


def test_extra_fields_are_allowed():
    assert validate_movie({"title": "Gertie the Dinosaur", "studio": "Vitagraph"}).ok


def test_ensure_valid_raises_bad_request():
    with pytest.raises(ValidationError) as excinfo:
        ensure_valid(validate_comment({}))
    assert excinfo.value.status_code == 400
    assert excinfo.value.details == "Missing: name, email, text, date, movie_id"


def test_parse_object_id():
    oid = ObjectId()
    assert parse_object_id(str(oid)) == oid
    assert parse_object_id(oid) is oid


@pytest.mark.parametrize("value", ["", "abc", "zzzzzzzzzzzzzzzzzzzzzzzz", None, 42])
def test_parse_object_id_rejects_malformed(value):
    with pytest.raises(ValidationError) as excinfo:
        parse_object_id(value, "idMovie")
    assert excinfo.value.status_code == 400
    assert excinfo.value.error == "Bad Request. Invalid idMovie."
