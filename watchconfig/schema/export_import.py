from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..env_settings import get_env
from ..errors import SchemaValidationError
from .fields import FIELD_TYPES, SettingsSchema
from .validator import find_schema_problems

log = logging.getLogger(__name__)


def _skip_unknown_default() -> bool:
    return bool(get_env().skip_unknown_fields)


def _format_errors(e: ValidationError) -> list[str]:
    out: list[str] = []
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", ()) if x != "root")
        msg = str(err.get("msg") or "")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        out.append(f"{loc}: {msg}" if loc else msg)
    return out


def _drop_unknown(raw: list[Any], *, skip_unknown: bool, where: str = "field ") -> list[Any]:
    """Reject or drop descriptors whose `type` is not recognised.

    Section items are checked too. Anything that is not a dict is left for
    model validation to report.
    """

    out: list[Any] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            out.append(item)
            continue

        t = item.get("type")
        label = f"{where}#{i}"
        if not isinstance(t, str) or not t:
            # A missing tag is malformed, never merely unknown.
            raise SchemaValidationError(
                f"{label}: missing field type",
                problems=[f"{label}: missing field type"],
            )
        if t not in FIELD_TYPES:
            if not skip_unknown:
                raise SchemaValidationError(
                    f"{label}: unknown field type {t!r}",
                    problems=[f"{label}: unknown field type {t!r}"],
                )
            log.warning("Skipping %s with unknown field type %r", label, t)
            continue

        if t == "section" and isinstance(item.get("items"), list):
            item = {**item, "items": _drop_unknown(item["items"], skip_unknown=skip_unknown, where=f"{where}#{i} item ")}
        out.append(item)
    return out


def load_schema(payload: str | bytes | list[Any], *, skip_unknown: bool | None = None) -> SettingsSchema:
    """Parse + validate a settings page.

    Accepts JSON string/bytes or already decoded data. Raises
    SchemaValidationError on malformed JSON, wrong shapes or broken invariants.
    Structural problems are collected from the decoded data first, so they are
    reported alongside field-level errors.
    """

    if skip_unknown is None:
        skip_unknown = _skip_unknown_default()

    raw: Any = payload
    if isinstance(payload, (str, bytes)):
        try:
            if isinstance(payload, bytes):
                payload = payload.decode("utf-8", errors="replace")
            raw = json.loads(payload)
        except json.JSONDecodeError as e:
            raise SchemaValidationError(f"Invalid JSON: {e}")

    if not isinstance(raw, list):
        raise SchemaValidationError(f"Schema must be a list of field descriptors, got {type(raw).__name__}")

    raw = _drop_unknown(raw, skip_unknown=skip_unknown)
    structural = find_schema_problems(raw)

    try:
        schema = SettingsSchema.model_validate(raw)
    except ValidationError as e:
        # The model repeats the structural problems as one joined message.
        joined = "; ".join(structural)
        problems = [p for p in _format_errors(e) if p != joined]
        problems += [p for p in structural if p not in problems]
        raise SchemaValidationError("Invalid settings schema: " + "; ".join(problems), problems=problems)

    log.debug("Loaded settings schema: %d fields, keys=%s", len(schema), ",".join(schema.message_keys()))
    return schema


def load_schema_file(path: str | Path, *, skip_unknown: bool | None = None) -> SettingsSchema:
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as e:
        raise SchemaValidationError(f"{p}: cannot read schema file: {e}")

    try:
        return load_schema(data, skip_unknown=skip_unknown)
    except SchemaValidationError as e:
        raise SchemaValidationError(f"{p.name}: {e}", problems=e.problems)


def dump_schema(schema: SettingsSchema) -> list[dict[str, Any]]:
    """Canonical data form: only the attributes that were declared, wire names."""

    return schema.model_dump(mode="json", by_alias=True, exclude_unset=True)


def _encode(value: Any, indent: int, level: int) -> str:
    """Objects and arrays of objects one entry per line; scalar arrays inline."""

    pad = " " * (indent * (level + 1))
    end = " " * (indent * level)
    if isinstance(value, dict) and value:
        inner = ",\n".join(
            f"{pad}{json.dumps(k, ensure_ascii=False)}: {_encode(v, indent, level + 1)}" for k, v in value.items()
        )
        return "{\n" + inner + "\n" + end + "}"
    if isinstance(value, list) and any(isinstance(v, (dict, list)) for v in value):
        inner = ",\n".join(pad + _encode(v, indent, level + 1) for v in value)
        return "[\n" + inner + "\n" + end + "]"
    return json.dumps(value, ensure_ascii=False)


def dumps_schema(schema: SettingsSchema, *, indent: int | None = 2) -> str:
    """Canonical JSON text, laid out like the bundled pages (trailing newline)."""

    data = dump_schema(schema)
    if indent is None:
        return json.dumps(data, ensure_ascii=False)
    return _encode(data, indent, 0) + "\n"
