"""Settings page schema package.

Typed field descriptors (fields), structural checks (validator),
JSON load/dump (export_import), device gating (capabilities),
submitted values (submission) and the bundled pages (catalog).
"""

from .fields import (
    ColorField,
    FieldDescriptor,
    HeadingField,
    SectionField,
    SettingsSchema,
    SubmitField,
    ToggleField,
)
from .validator import ValidateResult, find_schema_problems, validate_schema_payload
from .export_import import dump_schema, dumps_schema, load_schema, load_schema_file
from .capabilities import (
    PLATFORM_CAPABILITIES,
    capabilities_for_platform,
    filter_for_device,
    includes_capabilities,
    parse_capabilities,
)
from .submission import collect_values, default_values, encode_app_message
from .catalog import SchemaCatalog

__all__ = [
    "ColorField",
    "FieldDescriptor",
    "HeadingField",
    "SectionField",
    "SettingsSchema",
    "SubmitField",
    "ToggleField",
    "ValidateResult",
    "find_schema_problems",
    "validate_schema_payload",
    "dump_schema",
    "dumps_schema",
    "load_schema",
    "load_schema_file",
    "PLATFORM_CAPABILITIES",
    "capabilities_for_platform",
    "filter_for_device",
    "includes_capabilities",
    "parse_capabilities",
    "collect_values",
    "default_values",
    "encode_app_message",
    "SchemaCatalog",
]
