from __future__ import annotations

import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Iterable, Iterator

from ..errors import SchemaValidationError, UnknownSchemaError
from .export_import import load_schema, load_schema_file
from .fields import SettingsSchema

log = logging.getLogger(__name__)

BUNDLED_PACKAGE = "watchconfig"
BUNDLED_DIR = "pages"


def _load_bundled(skip_unknown: bool | None) -> dict[str, SettingsSchema]:
    out: dict[str, SettingsSchema] = {}
    root = resources.files(BUNDLED_PACKAGE).joinpath(BUNDLED_DIR)
    for entry in sorted(root.iterdir(), key=lambda e: e.name):
        if not entry.name.endswith(".json"):
            continue
        name = entry.name[: -len(".json")]
        try:
            out[name] = load_schema(entry.read_bytes(), skip_unknown=skip_unknown)
        except SchemaValidationError as e:
            raise SchemaValidationError(f"bundled page {entry.name}: {e}", problems=e.problems)
    return out


def _load_dir(path: Path, skip_unknown: bool | None) -> dict[str, SettingsSchema]:
    if not path.is_dir():
        raise SchemaValidationError(f"schema directory does not exist: {path}")
    out: dict[str, SettingsSchema] = {}
    for p in sorted(path.glob("*.json")):
        out[p.stem] = load_schema_file(p, skip_unknown=skip_unknown)
    return out


@dataclass(frozen=True)
class SchemaCatalog:
    """Named settings pages, loaded once and passed around explicitly."""

    schemas: dict[str, SettingsSchema] = field(default_factory=dict)

    @classmethod
    def load(
        cls,
        *,
        extra_dirs: Iterable[str | Path] = (),
        include_bundled: bool = True,
        skip_unknown: bool | None = None,
    ) -> "SchemaCatalog":
        """Bundled pages first; pages from extra_dirs override by name."""

        schemas: dict[str, SettingsSchema] = {}
        if include_bundled:
            schemas.update(_load_bundled(skip_unknown))

        for d in extra_dirs:
            found = _load_dir(Path(d), skip_unknown)
            for name in found:
                if name in schemas:
                    log.info("Settings page %r overridden from %s", name, d)
            schemas.update(found)

        log.info("Settings catalog loaded: %s", ", ".join(sorted(schemas)) or "(empty)")
        return cls(schemas=schemas)

    def names(self) -> list[str]:
        return sorted(self.schemas)

    def get(self, name: str) -> SettingsSchema:
        try:
            return self.schemas[name]
        except KeyError:
            raise UnknownSchemaError(f"unknown settings page {name!r}") from None

    def __contains__(self, name: object) -> bool:
        return name in self.schemas

    def __len__(self) -> int:
        return len(self.schemas)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())
