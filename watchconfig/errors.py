from __future__ import annotations


class SchemaValidationError(ValueError):
    """Settings page is malformed and must not be shown to the user."""

    def __init__(self, message: str, problems: list[str] | None = None):
        super().__init__(message)
        self.problems: list[str] = list(problems or [])


class SubmissionError(ValueError):
    """Submitted values do not fit the settings page."""


class UnknownSchemaError(LookupError):
    pass


class UnknownPlatformError(LookupError):
    pass
