from __future__ import annotations

import re
from typing import Annotated, Iterator, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    RootModel,
    StrictBool,
    StrictStr,
    field_validator,
    model_validator,
)

from .validator import find_schema_problems

HEX_COLOR_RE = re.compile(r"[0-9A-Fa-f]{6}")

# Device capability tags understood by the settings renderer.
CAPABILITY_TAGS = frozenset(
    {
        "PLATFORM_APLITE",
        "PLATFORM_BASALT",
        "PLATFORM_CHALK",
        "PLATFORM_DIORITE",
        "PLATFORM_EMERY",
        "BW",
        "COLOR",
        "MICROPHONE",
        "SMARTSTRAP",
        "SMARTSTRAP_POWER",
        "HEALTH",
        "RECT",
        "ROUND",
        "DISPLAY_144x168",
        "DISPLAY_180x180",
        "DISPLAY_200x228",
    }
)
NEGATION_PREFIX = "NOT_"

FieldType = Literal["heading", "section", "color", "toggle", "submit"]
FIELD_TYPES: tuple[str, ...] = ("heading", "section", "color", "toggle", "submit")


def base_capability(tag: str) -> str:
    """NOT_COLOR -> COLOR; other tags unchanged."""
    if tag.startswith(NEGATION_PREFIX):
        return tag[len(NEGATION_PREFIX):]
    return tag


class _Descriptor(BaseModel):
    """Common base: immutable, wire names only, no unknown attributes.

    Attributes are declared in the order the pages write them, so a dump
    reproduces the page text.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def is_keyed(self) -> bool:
        return False


class _Gated(_Descriptor):
    """Variants that may declare `capabilities` (declared last on each)."""

    @field_validator("capabilities", check_fields=False)
    @classmethod
    def _known_capabilities(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        unknown = [t for t in v if base_capability(t) not in CAPABILITY_TAGS]
        if unknown:
            raise ValueError("unknown capability tag(s): " + ", ".join(unknown))
        return v


class HeadingField(_Gated):
    type: Literal["heading"]
    default_value: StrictStr = Field(alias="defaultValue")
    capabilities: list[StrictStr] | None = None


class ColorField(_Gated):
    type: Literal["color"]
    message_key: StrictStr = Field(alias="messageKey", min_length=1)
    default_value: StrictStr = Field(alias="defaultValue")
    label: StrictStr | None = None
    description: StrictStr | None = None
    sunlight: StrictBool | None = None
    allow_gray: StrictBool | None = Field(default=None, alias="allowGray")
    capabilities: list[StrictStr] | None = None

    @field_validator("default_value")
    @classmethod
    def _hex_rgb(cls, v: str) -> str:
        if not HEX_COLOR_RE.fullmatch(v or ""):
            raise ValueError(f"color defaultValue must be 6 hex digits (RRGGBB), got {v!r}")
        return v

    @property
    def is_keyed(self) -> bool:
        return True


class ToggleField(_Gated):
    type: Literal["toggle"]
    message_key: StrictStr = Field(alias="messageKey", min_length=1)
    label: StrictStr | None = None
    description: StrictStr | None = None
    default_value: StrictBool = Field(alias="defaultValue")
    capabilities: list[StrictStr] | None = None

    @property
    def is_keyed(self) -> bool:
        return True


SectionItem = Annotated[Union[HeadingField, ColorField, ToggleField], Field(discriminator="type")]


class SectionField(_Gated):
    type: Literal["section"]
    items: tuple[SectionItem, ...]
    capabilities: list[StrictStr] | None = None

    @field_validator("items")
    @classmethod
    def _non_empty(cls, v: tuple) -> tuple:
        if not v:
            raise ValueError("section must declare at least one item")
        return v


class SubmitField(_Descriptor):
    type: Literal["submit"]
    default_value: StrictStr = Field(alias="defaultValue")


FieldDescriptor = Annotated[
    Union[HeadingField, SectionField, ColorField, ToggleField, SubmitField],
    Field(discriminator="type"),
]
KeyedField = Union[ColorField, ToggleField]


class SettingsSchema(RootModel[tuple[FieldDescriptor, ...]]):
    """One settings page: the ordered top-level field descriptors.

    Built once, never mutated. Construction runs the structural checks from
    `validator.find_schema_problems`, so an instance is always well formed.
    """

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_structure(self):
        problems = find_schema_problems(self.root)
        if problems:
            raise ValueError("; ".join(problems))
        return self

    def __iter__(self) -> Iterator[FieldDescriptor]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> FieldDescriptor:
        return self.root[index]

    def iter_fields(self) -> Iterator[FieldDescriptor]:
        """All descriptors depth-first; section items follow their section."""
        for f in self.root:
            yield f
            if isinstance(f, SectionField):
                yield from f.items

    def keyed_fields(self) -> list[KeyedField]:
        return [f for f in self.iter_fields() if f.is_keyed]

    def message_keys(self) -> tuple[str, ...]:
        return tuple(f.message_key for f in self.keyed_fields())

    def field_for_key(self, message_key: str) -> KeyedField | None:
        for f in self.keyed_fields():
            if f.message_key == message_key:
                return f
        return None

    @property
    def submit(self) -> SubmitField:
        return self.root[-1]  # type: ignore[return-value]
