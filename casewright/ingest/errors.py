"""Ingestion-related exceptions."""

from ..errors import CasewrightError


class SheetLoadError(CasewrightError):
    """Raised when a sheet file cannot be read."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class SchemaError(CasewrightError):
    """Raised when a sheet fails header or row validation.

    ``errors`` holds one ``{"row", "column", "msg"}`` entry per problem found.
    """

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)
