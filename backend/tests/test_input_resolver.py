"""
Tests for InputResolver
"""
import pytest
from pydantic import ValidationError

from svg_output.services.input_resolver import INT_MAX, INT_MIN, InputResolver, parse_int


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12", 12),
        ("12abc", 12),
        ("  7px", 7),
        ("abc", 0),
        ("", 0),
        (None, 0),
        ("-3", -3),
        ("+4", 4),
        (9, 9),
        ("\u0663", 0),
        ("7\u0663", 7),
        ("99999999999999999999", INT_MAX),
        ("-99999999999999999999", INT_MIN),
        ("000000000000000000000000042", 42),
    ],
)
def test_parse_int_is_lenient(raw, expected):
    assert parse_int(raw) == expected


def test_resolve_full_input():
    req = InputResolver().resolve({"style": "2", "language": "3", "svg": "icon-arrow", "d": "1700000000"})

    assert req.style_id == 2
    assert req.language_id == 3
    assert req.resource_name == "icon-arrow"
    assert req.client_modified_at == 1700000000


def test_resolve_empty_strings_default_to_zero():
    req = InputResolver().resolve({"style": "", "language": "", "svg": "icon-arrow", "d": ""})

    assert req.style_id == 0
    assert req.language_id == 0
    assert req.client_modified_at == 0


def test_resolve_malformed_and_negative_numbers():
    req = InputResolver().resolve({"style": "x1", "language": "-5", "svg": "logo", "d": "-100"})

    assert req.style_id == 0
    assert req.language_id == 0
    assert req.client_modified_at == 0


def test_resolve_missing_svg_is_empty_resource():
    """A request without svg never fails; it becomes a no-op"""
    req = InputResolver().resolve({})

    assert req.resource_name == ""
    assert req.is_empty
    assert (req.style_id, req.language_id, req.client_modified_at) == (0, 0, 0)


def test_resolved_request_is_immutable():
    req = InputResolver().resolve({"svg": "logo"})

    with pytest.raises(ValidationError):
        req.style_id = 5


def test_parse_int_saturates_very_long_numbers():
    assert parse_int("9" * 5000) == INT_MAX
    assert parse_int("-" + "9" * 5000) == INT_MIN
    assert parse_int("1" * 5000 + "px") == INT_MAX


def test_resolve_very_long_numbers_never_fails():
    req = InputResolver().resolve(
        {"style": "9" * 5000, "language": "1" * 5000, "d": "1" * 5000, "svg": "icon-arrow"}
    )

    assert req.style_id == INT_MAX
    assert req.language_id == INT_MAX
    assert req.client_modified_at == INT_MAX


def test_resolve_non_ascii_digits_are_not_numbers():
    req = InputResolver().resolve({"style": "٣", "language": "５", "svg": "x"})

    assert req.style_id == 0
    assert req.language_id == 0
