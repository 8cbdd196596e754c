"""Settings pages for the simple-* watch faces.

Public API kept small:
    - SettingsSchema and the field descriptor variants
    - load_schema / dump_schema
    - SchemaCatalog
"""

from .errors import SchemaValidationError, SubmissionError, UnknownPlatformError, UnknownSchemaError
from .schema import SchemaCatalog, SettingsSchema, dump_schema, load_schema

__all__ = [
    "SchemaCatalog",
    "SettingsSchema",
    "dump_schema",
    "load_schema",
    "SchemaValidationError",
    "SubmissionError",
    "UnknownPlatformError",
    "UnknownSchemaError",
]
