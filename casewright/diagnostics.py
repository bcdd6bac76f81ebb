"""Non-fatal diagnostics collected while ingesting sheets and conforming files."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Severity level of a diagnostic issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class Issue:
    """A single recorded diagnostic.

    ``row`` is the 1-based sheet row (header is row 1) for ingestion issues,
    ``path`` the generated file path for conformance issues.
    """

    code: str
    message: str
    severity: Severity
    row: int | None = None
    path: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def location(self) -> str:
        if self.path and self.row is not None:
            return f"{self.path}:{self.row}"
        if self.path:
            return self.path
        if self.row is not None:
            return f"row {self.row}"
        return ""

    def __str__(self) -> str:
        location = f" [{self.location}]" if self.location else ""
        return f"{self.severity.value.upper()}: {self.code}{location} - {self.message}"


@dataclass
class Diagnostics:
    """Ordered list of issues returned alongside every core result."""

    issues: list[Issue] = field(default_factory=list)

    @property
    def errors(self) -> list[Issue]:
        """Get all error-level issues."""
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Issue]:
        """Get all warning-level issues."""
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def is_clean(self) -> bool:
        """True when nothing at warning level or above was recorded."""
        return not self.has_errors and not self.has_warnings

    def codes(self) -> list[str]:
        """Issue codes in recording order."""
        return [i.code for i in self.issues]

    def add_issue(self, issue: Issue) -> None:
        self.issues.append(issue)

    def add_error(
        self,
        code: str,
        message: str,
        row: int | None = None,
        path: str | None = None,
        **details: Any,
    ) -> None:
        """Add an error issue."""
        self.issues.append(
            Issue(
                code=code,
                message=message,
                severity=Severity.ERROR,
                row=row,
                path=path,
                details=details,
            )
        )

    def add_warning(
        self,
        code: str,
        message: str,
        row: int | None = None,
        path: str | None = None,
        **details: Any,
    ) -> None:
        """Add a warning issue."""
        self.issues.append(
            Issue(
                code=code,
                message=message,
                severity=Severity.WARNING,
                row=row,
                path=path,
                details=details,
            )
        )

    def add_info(
        self,
        code: str,
        message: str,
        row: int | None = None,
        path: str | None = None,
        **details: Any,
    ) -> None:
        """Add an informational issue."""
        self.issues.append(
            Issue(
                code=code,
                message=message,
                severity=Severity.INFO,
                row=row,
                path=path,
                details=details,
            )
        )

    def merge(self, other: "Diagnostics") -> None:
        """Merge another set of diagnostics into this one."""
        self.issues.extend(other.issues)
