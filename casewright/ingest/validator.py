"""Header and row validation run before any grouping."""

import logging
from collections.abc import Sequence
from typing import Any

from ..diagnostics import Diagnostics
from .errors import SchemaError
from .models import PRIORITIES

logger = logging.getLogger(__name__)

SCENARIO_COLUMN = "Test Scenario"
CASE_ID_COLUMN = "Test Case ID"
DESCRIPTION_COLUMN = "Test Case Description"
STEPS_COLUMN = "Detail Steps"
DATA_COLUMN = "Test Data"
EXPECTED_COLUMN = "Expected Result"
PRIORITY_COLUMN = "Testcase Priority"

MANDATORY_COLUMNS = (
    SCENARIO_COLUMN,
    DESCRIPTION_COLUMN,
    STEPS_COLUMN,
    DATA_COLUMN,
    EXPECTED_COLUMN,
    PRIORITY_COLUMN,
)

# Header rows are 1-based and occupy row 1.
FIRST_DATA_ROW = 2


def cell_text(value: Any) -> str:
    """Coerce a raw sheet cell to trimmed text."""
    if value is None:
        return ""
    return str(value).strip()


def normalize_header(header: Sequence[Any]) -> list[str]:
    """Trim header cells; non-text cells become empty names."""
    return [h.strip() if isinstance(h, str) else "" for h in header]


class ColumnIndex:
    """Maps column names to positions in a trimmed header row."""

    def __init__(self, header: Sequence[Any]):
        self.names = normalize_header(header)

    def position(self, column: str) -> int | None:
        try:
            return self.names.index(column)
        except ValueError:
            return None

    def cell(self, row: Sequence[Any], column: str) -> str:
        """Get the trimmed text of ``column`` in ``row`` ("" if absent)."""
        position = self.position(column)
        if position is None or position >= len(row):
            return ""
        return cell_text(row[position])


def check_header(header: Sequence[Any]) -> None:
    """Check that every mandatory column is present.

    Raises:
        SchemaError: Naming every missing column.
    """
    names = normalize_header(header)
    missing = [column for column in MANDATORY_COLUMNS if column not in names]
    if missing:
        errors = [
            {"row": 1, "column": column, "msg": "mandatory column not found"}
            for column in missing
        ]
        quoted = ", ".join(f"'{c}'" for c in missing)
        raise SchemaError(
            f"Mandatory column(s) {quoted} not found in the header row",
            errors,
        )


def validate_sheet(
    header: Sequence[Any], rows: Sequence[Sequence[Any]]
) -> Diagnostics:
    """Validate a sheet's header and every data row.

    All rows are scanned before any error is raised, so the resulting
    ``SchemaError`` lists every invalid priority cell.

    Args:
        header: The header row.
        rows: Data rows aligned to the header.

    Returns:
        Diagnostics holding non-fatal warnings.

    Raises:
        SchemaError: If a mandatory column is missing or a priority is invalid.
    """
    check_header(header)

    columns = ColumnIndex(header)
    diagnostics = Diagnostics()
    priority_errors: list[dict] = []
    last_scenario: str | None = None

    for offset, row in enumerate(rows):
        row_number = offset + FIRST_DATA_ROW

        scenario = columns.cell(row, SCENARIO_COLUMN)
        if scenario:
            last_scenario = scenario
        elif last_scenario is None:
            diagnostics.add_warning(
                code="MISSING_SCENARIO",
                message=(
                    f"'{SCENARIO_COLUMN}' is empty and no preceding scenario "
                    "was found; the row cannot be grouped"
                ),
                row=row_number,
            )

        description = columns.cell(row, DESCRIPTION_COLUMN)
        steps = columns.cell(row, STEPS_COLUMN)
        expected = columns.cell(row, EXPECTED_COLUMN)
        if not description and not steps and not expected:
            diagnostics.add_warning(
                code="EMPTY_CASE_FIELDS",
                message=(
                    f"'{DESCRIPTION_COLUMN}', '{STEPS_COLUMN}' and "
                    f"'{EXPECTED_COLUMN}' are all empty"
                ),
                row=row_number,
            )

        priority = columns.cell(row, PRIORITY_COLUMN).upper()
        if priority and priority not in PRIORITIES:
            priority_errors.append(
                {
                    "row": row_number,
                    "column": PRIORITY_COLUMN,
                    "msg": f"invalid value '{priority}'; accepted values are P1, P2, P3",
                }
            )

    for issue in diagnostics.issues:
        logger.warning("Row %s: %s", issue.row, issue.message)

    if priority_errors:
        first = priority_errors[0]
        raise SchemaError(
            f"Row {first['row']}: '{PRIORITY_COLUMN}' contains an invalid value; "
            f"accepted values are P1, P2, or P3 "
            f"({len(priority_errors)} invalid row(s))",
            priority_errors,
        )

    logger.debug("Schema validation passed for %d data row(s)", len(rows))
    return diagnostics
