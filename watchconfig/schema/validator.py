from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable


def _attr(f: Any, name: str, wire: str) -> Any:
    """Read an attribute from a typed descriptor or its decoded dict form."""
    if isinstance(f, dict):
        return f.get(wire)
    return getattr(f, name, None)


def find_schema_problems(fields: Iterable[Any]) -> list[str]:
    """Structural checks over top-level descriptors, typed or decoded.

    - messageKey unique across the flattened list (section items included)
    - sections are non-empty
    - exactly one submit, and it is the last top-level element

    Returns every problem found (empty list = ok). Field-level checks
    (types, color format, capability tags) are done by the models themselves.
    """

    fields = list(fields)
    problems: list[str] = []

    seen: dict[str, str] = {}
    dups: list[str] = []

    def _track_key(f: Any, where: str) -> None:
        key = _attr(f, "message_key", "messageKey")
        if not isinstance(key, str):
            return
        if key in seen:
            if key not in dups:
                dups.append(key)
                problems.append(f"duplicate messageKey '{key}' ({seen[key]} and {where})")
            return
        seen[key] = where

    types = [_attr(f, "type", "type") for f in fields]
    for i, f in enumerate(fields):
        where = f"field #{i}"
        if types[i] == "section":
            items = _attr(f, "items", "items")
            if not isinstance(items, (list, tuple)):
                items = ()
            if not items:
                problems.append(f"{where}: section has no items")
            for j, item in enumerate(items):
                _track_key(item, f"{where} item #{j}")
        else:
            _track_key(f, where)

    submits = [i for i, t in enumerate(types) if t == "submit"]
    if not submits:
        problems.append("schema has no submit field")
    elif len(submits) > 1:
        problems.append("schema has %d submit fields (expected exactly one)" % len(submits))
    elif submits[0] != len(fields) - 1:
        problems.append(f"submit field must be the last element (found at #{submits[0]} of {len(fields)})")

    return problems


@dataclass
class ValidateResult:
    ok: bool
    message: str
    details: str = ""
    hints: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"ok": self.ok, "message": self.message}
        if self.details:
            d["details"] = self.details
        if self.hints:
            d["hints"] = self.hints
        return d


def validate_schema_payload(payload: Any, *, skip_unknown: bool | None = None) -> ValidateResult:
    """Validate raw schema data (JSON text/bytes or decoded list) without raising."""

    from ..errors import SchemaValidationError
    from .export_import import load_schema

    try:
        schema = load_schema(payload, skip_unknown=skip_unknown)
    except SchemaValidationError as e:
        return ValidateResult(False, "Schema is invalid", details=str(e), hints=e.problems or None)

    keys = schema.message_keys()
    return ValidateResult(
        True,
        f"Schema is valid: {len(schema)} top-level fields, {len(keys)} message keys",
        hints=list(keys) or None,
    )
