"""Base exception shared by every fatal casewright error."""


class CasewrightError(Exception):
    """Base exception for fatal pipeline errors."""

    pass
