import copy
import json

import pytest


ECLIPSE_PAGE = [
    {"type": "heading", "defaultValue": "Simple Eclipse Settings"},
    {
        "type": "section",
        "items": [
            {"type": "heading", "defaultValue": "Display Options"},
            {
                "type": "color",
                "messageKey": "HOURS_COLOR",
                "defaultValue": "FFFFFF",
                "label": "Hours Color",
                "sunlight": True,
                "allowGray": True,
                "capabilities": ["COLOR"],
            },
            {
                "type": "toggle",
                "messageKey": "INVERT_COLORS",
                "label": "Invert Colors",
                "description": "Switch between light and dark theme.",
                "defaultValue": False,
            },
            {
                "type": "toggle",
                "messageKey": "USE_SQUARE",
                "label": "Use Square design",
                "description": "Switch between square and round design.",
                "defaultValue": False,
                "capabilities": ["RECT"],
            },
        ],
    },
    {"type": "submit", "defaultValue": "Save Settings"},
]

MINIMAL_PAGE = [
    {"type": "heading", "defaultValue": "Settings"},
    {
        "type": "section",
        "items": [
            {"type": "color", "messageKey": "HOURS_COLOR", "defaultValue": "FFFFFF"},
            {"type": "toggle", "messageKey": "INVERT_COLORS", "defaultValue": False},
        ],
    },
    {"type": "submit", "defaultValue": "Save Settings"},
]


@pytest.fixture
def eclipse_raw():
    return copy.deepcopy(ECLIPSE_PAGE)


@pytest.fixture
def minimal_raw():
    return copy.deepcopy(MINIMAL_PAGE)


@pytest.fixture
def write_page(tmp_path):
    def _write(name, data):
        p = tmp_path / f"{name}.json"
        p.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
        return p

    return _write
