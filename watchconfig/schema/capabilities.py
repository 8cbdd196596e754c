from __future__ import annotations

import logging
from typing import Iterable

from ..errors import UnknownPlatformError
from .fields import NEGATION_PREFIX, SectionField, SettingsSchema, base_capability

log = logging.getLogger(__name__)

_COLOR_WATCH = {"COLOR", "MICROPHONE", "SMARTSTRAP", "SMARTSTRAP_POWER", "HEALTH"}

PLATFORM_CAPABILITIES: dict[str, frozenset[str]] = {
    "aplite": frozenset({"PLATFORM_APLITE", "BW", "RECT", "DISPLAY_144x168"}),
    "basalt": frozenset({"PLATFORM_BASALT", "RECT", "DISPLAY_144x168", *_COLOR_WATCH}),
    "chalk": frozenset({"PLATFORM_CHALK", "ROUND", "DISPLAY_180x180", *_COLOR_WATCH}),
    "diorite": frozenset({"PLATFORM_DIORITE", "BW", "RECT", "DISPLAY_144x168", "MICROPHONE", "SMARTSTRAP", "HEALTH"}),
    "emery": frozenset({"PLATFORM_EMERY", "RECT", "DISPLAY_200x228", *_COLOR_WATCH}),
}


def capabilities_for_platform(name: str) -> frozenset[str]:
    key = (name or "").strip().lower()
    try:
        return PLATFORM_CAPABILITIES[key]
    except KeyError:
        raise UnknownPlatformError(
            f"unknown platform {name!r} (known: {', '.join(sorted(PLATFORM_CAPABILITIES))})"
        ) from None


def parse_capabilities(text: str) -> frozenset[str]:
    """'RECT, COLOR' -> {'RECT', 'COLOR'}; empty parts ignored."""
    return frozenset(p.strip() for p in (text or "").split(",") if p.strip())


def includes_capabilities(required: Iterable[str] | None, available: Iterable[str]) -> bool:
    """True when every required tag is satisfied by the device.

    NOT_<TAG> is satisfied when <TAG> is absent. No requirements -> always True.
    """

    if not required:
        return True
    have = set(available)
    for tag in required:
        if tag.startswith(NEGATION_PREFIX):
            if base_capability(tag) in have:
                return False
        elif tag not in have:
            return False
    return True


def filter_for_device(schema: SettingsSchema, available: Iterable[str]) -> SettingsSchema:
    """Drop the fields the device cannot show; order is kept.

    A section whose items are all dropped is dropped as well.
    """

    have = frozenset(available)
    kept = []
    for f in schema:
        if not includes_capabilities(getattr(f, "capabilities", None), have):
            log.debug("Field %s omitted for capabilities %s", _describe(f), sorted(have))
            continue
        if isinstance(f, SectionField):
            items = []
            for item in f.items:
                if includes_capabilities(item.capabilities, have):
                    items.append(item)
                else:
                    log.debug("Field %s omitted for capabilities %s", _describe(item), sorted(have))
            if not items:
                continue
            if len(items) != len(f.items):
                f = f.model_copy(update={"items": tuple(items)})
        kept.append(f)

    return SettingsSchema(tuple(kept))


def _describe(f) -> str:
    key = getattr(f, "message_key", None)
    return f"{f.type}:{key}" if key else f.type
