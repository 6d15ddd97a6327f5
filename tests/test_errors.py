"""Unit tests for turning request-shape errors into client messages."""

from lyrics_api.api.errors import describe_validation_errors
from lyrics_api.telemetry import _parse_headers, normalise_path


def test_malformed_json_wins_over_everything():
    errors = [
        {"type": "missing", "loc": ("body", "title")},
        {"type": "json_invalid", "loc": ("body", 3)},
    ]

    assert describe_validation_errors(errors) == "Malformed JSON body"


def test_missing_fields_are_listed_once_in_order():
    errors = [
        {"type": "missing", "loc": ("body", "title")},
        {"type": "string_too_short", "loc": ("body", "lyrics"), "ctx": {"min_length": 1}},
        {"type": "missing", "loc": ("body", "title")},
    ]

    assert describe_validation_errors(errors) == "Missing required field(s): title, lyrics"


def test_null_required_string_counts_as_missing():
    errors = [{"type": "string_type", "loc": ("body", "name"), "input": None}]

    assert describe_validation_errors(errors) == "Missing required field(s): name"


def test_long_value_is_an_invalid_value_not_missing():
    errors = [
        {
            "type": "string_too_long",
            "loc": ("body", "title"),
            "msg": "String should have at most 300 characters",
            "ctx": {"max_length": 300},
        }
    ]

    assert describe_validation_errors(errors) == (
        "Invalid value for 'title': String should have at most 300 characters"
    )


def test_validator_messages_pass_through():
    errors = [
        {
            "type": "value_error",
            "loc": ("body", "email"),
            "msg": "Value error, Invalid email address",
            "ctx": {"error": ValueError("Invalid email address")},
        }
    ]

    assert describe_validation_errors(errors) == "Invalid email address"


def test_unknown_fields_are_named():
    errors = [
        {"type": "extra_forbidden", "loc": ("body", "views")},
        {"type": "extra_forbidden", "loc": ("body", "id")},
    ]

    assert describe_validation_errors(errors) == "Unknown field(s): views, id"


def test_metric_paths_collapse_ids_and_slugs():
    assert normalise_path("/api/song/mara-hlasak") == "/api/song/{slug}"
    assert normalise_path("/api/view/ka-lunglen") == "/api/view/{slug}"
    assert normalise_path("/api/admin/song/12") == "/api/admin/song/{id}"
    assert normalise_path("/api/songs") == "/api/songs"


def test_exporter_headers_parse_pairs_and_skip_junk():
    assert _parse_headers("authorization=Bearer a=b, x-team = lyrics,broken,") == {
        "authorization": "Bearer a=b",
        "x-team": "lyrics",
    }
    assert _parse_headers(None) == {}
