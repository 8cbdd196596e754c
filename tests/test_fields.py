import pytest
from pydantic import ValidationError

from watchconfig.schema import ColorField, SectionField, SubmitField, ToggleField, load_schema
from watchconfig.schema.fields import HeadingField


def test_descriptors_are_typed_by_tag(eclipse_raw):
    schema = load_schema(eclipse_raw)

    assert isinstance(schema[0], HeadingField)
    assert isinstance(schema[1], SectionField)
    assert isinstance(schema[2], SubmitField)

    heading, color, invert, square = schema[1].items
    assert isinstance(heading, HeadingField)
    assert isinstance(color, ColorField)
    assert color.message_key == "HOURS_COLOR"
    assert color.sunlight is True and color.allow_gray is True
    assert color.capabilities == ["COLOR"]
    assert isinstance(invert, ToggleField)
    assert invert.default_value is False
    assert square.capabilities == ["RECT"]


def test_iteration_helpers_keep_declaration_order(eclipse_raw):
    schema = load_schema(eclipse_raw)

    assert [f.type for f in schema.iter_fields()] == [
        "heading", "section", "heading", "color", "toggle", "toggle", "submit",
    ]
    assert schema.message_keys() == ("HOURS_COLOR", "INVERT_COLORS", "USE_SQUARE")
    assert schema.field_for_key("INVERT_COLORS").label == "Invert Colors"
    assert schema.field_for_key("MISSING") is None
    assert schema.submit.default_value == "Save Settings"


def test_schema_is_immutable(minimal_raw):
    schema = load_schema(minimal_raw)

    with pytest.raises(ValidationError):
        schema.root = ()
    with pytest.raises(ValidationError):
        schema[0].default_value = "Other"


def test_keyless_variants():
    assert not HeadingField(type="heading", defaultValue="x").is_keyed
    assert ColorField(type="color", messageKey="K", defaultValue="000000").is_keyed
    assert ToggleField(type="toggle", messageKey="T", defaultValue=True).is_keyed


def test_color_default_must_be_six_hex_digits():
    with pytest.raises(ValidationError):
        ColorField(type="color", messageKey="K", defaultValue="#FFFFFF")
    with pytest.raises(ValidationError):
        ColorField(type="color", messageKey="K", defaultValue="FFF")
    assert ColorField(type="color", messageKey="K", defaultValue="8ee69e").default_value == "8ee69e"


def test_toggle_rejects_color_only_attributes():
    with pytest.raises(ValidationError):
        ToggleField(type="toggle", messageKey="T", defaultValue=False, sunlight=True)


def test_heading_rejects_message_key():
    with pytest.raises(ValidationError):
        HeadingField(type="heading", defaultValue="x", messageKey="K")


def test_unknown_capability_tag_rejected():
    with pytest.raises(ValidationError):
        ToggleField(type="toggle", messageKey="T", defaultValue=False, capabilities=["HOLOGRAM"])
    f = ToggleField(type="toggle", messageKey="T", defaultValue=False, capabilities=["NOT_ROUND"])
    assert f.capabilities == ["NOT_ROUND"]


def test_section_cannot_nest_section_or_submit():
    with pytest.raises(ValidationError):
        SectionField(type="section", items=[{"type": "submit", "defaultValue": "Save"}])
    with pytest.raises(ValidationError):
        SectionField(
            type="section",
            items=[{"type": "section", "items": [{"type": "heading", "defaultValue": "x"}]}],
        )


def test_toggle_default_must_be_a_real_boolean():
    with pytest.raises(ValidationError):
        ToggleField(type="toggle", messageKey="T", defaultValue="yes")
    with pytest.raises(ValidationError):
        ToggleField(type="toggle", messageKey="T", defaultValue=1)


def test_color_flags_are_not_coerced():
    with pytest.raises(ValidationError):
        ColorField(type="color", messageKey="K", defaultValue="000000", sunlight="false")
    with pytest.raises(ValidationError):
        ColorField(type="color", messageKey="K", defaultValue="000000", allowGray=0)


def test_snake_case_attribute_names_rejected():
    with pytest.raises(ValidationError):
        ColorField(type="color", message_key="C", default_value="FFFFFF", allow_gray=True)
    with pytest.raises(ValidationError):
        ToggleField(type="toggle", message_key="T", default_value=True)


def test_capabilities_dump_after_other_attributes():
    f = ToggleField(type="toggle", messageKey="T", defaultValue=False, capabilities=["RECT"], label="Square")

    assert list(f.model_dump(by_alias=True, exclude_unset=True)) == [
        "type", "messageKey", "label", "defaultValue", "capabilities",
    ]
