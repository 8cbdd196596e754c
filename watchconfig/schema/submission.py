from __future__ import annotations

import logging
from typing import Any, Mapping

from ..errors import SubmissionError
from .fields import HEX_COLOR_RE, ColorField, SettingsSchema, ToggleField

log = logging.getLogger(__name__)

_TRUE_FLAGS = {"1", "true", "on", "yes", "y"}
_FALSE_FLAGS = {"0", "false", "off", "no", "n", ""}


def _toggle_value(key: str, v: Any) -> bool:
    """Normalize toggle values (bools and HTML form flags) into bool."""
    if isinstance(v, bool):
        return v
    if isinstance(v, int) and v in (0, 1):
        return bool(v)
    if isinstance(v, str):
        s = v.strip().lower()
        if s in _TRUE_FLAGS:
            return True
        if s in _FALSE_FLAGS:
            return False
    raise SubmissionError(f"{key}: expected a boolean, got {v!r}")


def _color_value(key: str, v: Any) -> str:
    """Normalize RRGGBB / #RRGGBB / 0xRRGGBB / int into upper-case RRGGBB."""
    if isinstance(v, bool):
        raise SubmissionError(f"{key}: expected a color, got {v!r}")
    if isinstance(v, int):
        if not 0 <= v <= 0xFFFFFF:
            raise SubmissionError(f"{key}: color out of range: {v}")
        return f"{v:06X}"
    if isinstance(v, str):
        s = v.strip()
        if s.startswith("#"):
            s = s[1:]
        elif s[:2].lower() == "0x":
            s = s[2:]
        if HEX_COLOR_RE.fullmatch(s):
            return s.upper()
    raise SubmissionError(f"{key}: expected a color in RRGGBB form, got {v!r}")


def default_values(schema: SettingsSchema) -> dict[str, str | bool]:
    """messageKey -> declared default, in declaration order."""
    return {f.message_key: f.default_value for f in schema.keyed_fields()}


def collect_values(schema: SettingsSchema, edits: Mapping[str, Any] | None = None) -> dict[str, str | bool]:
    """Mapping delivered on submit: defaults overlaid with the user's edits."""

    values = default_values(schema)
    if not edits:
        return values

    unknown = [k for k in edits if k not in values]
    if unknown:
        raise SubmissionError("unknown message key(s): " + ", ".join(str(k) for k in unknown))

    for key, raw in edits.items():
        f = schema.field_for_key(key)
        if isinstance(f, ColorField):
            values[key] = _color_value(key, raw)
        elif isinstance(f, ToggleField):
            values[key] = _toggle_value(key, raw)

    log.debug("Collected %d values (%d edited)", len(values), len(edits))
    return values


def encode_app_message(schema: SettingsSchema, values: Mapping[str, Any]) -> dict[str, int]:
    """Payload as the watch reads it: colors as 0xRRGGBB ints, toggles as 1/0."""

    out: dict[str, int] = {}
    for f in schema.keyed_fields():
        if f.message_key not in values:
            continue
        v = values[f.message_key]
        if isinstance(f, ColorField):
            out[f.message_key] = int(_color_value(f.message_key, v), 16)
        else:
            out[f.message_key] = 1 if _toggle_value(f.message_key, v) else 0
    return out
