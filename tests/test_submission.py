import pytest

from watchconfig.errors import SubmissionError
from watchconfig.schema import collect_values, default_values, encode_app_message, load_schema


def test_submit_without_edits_yields_defaults(minimal_raw):
    schema = load_schema(minimal_raw)

    assert collect_values(schema) == {"HOURS_COLOR": "FFFFFF", "INVERT_COLORS": False}
    assert collect_values(schema, {}) == default_values(schema)


def test_defaults_follow_declaration_order(eclipse_raw):
    values = default_values(load_schema(eclipse_raw))

    assert list(values) == ["HOURS_COLOR", "INVERT_COLORS", "USE_SQUARE"]


def test_edits_are_normalized(minimal_raw):
    schema = load_schema(minimal_raw)

    assert collect_values(schema, {"HOURS_COLOR": "#8ee69e", "INVERT_COLORS": "on"}) == {
        "HOURS_COLOR": "8EE69E",
        "INVERT_COLORS": True,
    }
    assert collect_values(schema, {"HOURS_COLOR": "0x00ff00"})["HOURS_COLOR"] == "00FF00"
    assert collect_values(schema, {"HOURS_COLOR": 0xFF0000})["HOURS_COLOR"] == "FF0000"
    assert collect_values(schema, {"INVERT_COLORS": 0})["INVERT_COLORS"] is False


def test_unknown_key_rejected(minimal_raw):
    with pytest.raises(SubmissionError, match="unknown message key"):
        collect_values(load_schema(minimal_raw), {"HOUR_COLOR": "FFFFFF"})


@pytest.mark.parametrize("value", ["white", "FFFFFFF", True, -1, 0x1000000])
def test_bad_color_rejected(minimal_raw, value):
    with pytest.raises(SubmissionError, match="HOURS_COLOR"):
        collect_values(load_schema(minimal_raw), {"HOURS_COLOR": value})


@pytest.mark.parametrize("value", ["maybe", 2, None])
def test_bad_toggle_rejected(minimal_raw, value):
    with pytest.raises(SubmissionError, match="INVERT_COLORS"):
        collect_values(load_schema(minimal_raw), {"INVERT_COLORS": value})


def test_encode_app_message(minimal_raw):
    schema = load_schema(minimal_raw)
    values = collect_values(schema, {"HOURS_COLOR": "8EE69E", "INVERT_COLORS": True})

    assert encode_app_message(schema, values) == {"HOURS_COLOR": 0x8EE69E, "INVERT_COLORS": 1}


def test_encode_skips_missing_keys(minimal_raw):
    schema = load_schema(minimal_raw)

    assert encode_app_message(schema, {"INVERT_COLORS": False}) == {"INVERT_COLORS": 0}
