"""Write scenario groups back out as a sheet."""

import logging
from collections.abc import Iterable
from pathlib import Path

from openpyxl import Workbook

from .models import ScenarioGroup
from .validator import (
    CASE_ID_COLUMN,
    DATA_COLUMN,
    DESCRIPTION_COLUMN,
    EXPECTED_COLUMN,
    PRIORITY_COLUMN,
    SCENARIO_COLUMN,
    STEPS_COLUMN,
)

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    SCENARIO_COLUMN,
    CASE_ID_COLUMN,
    DESCRIPTION_COLUMN,
    STEPS_COLUMN,
    DATA_COLUMN,
    EXPECTED_COLUMN,
    PRIORITY_COLUMN,
]

SHEET_TITLE = "Test Cases"


def export_rows(groups: Iterable[ScenarioGroup]) -> list[list[str]]:
    """Flatten groups into a header row followed by one row per case."""
    rows = [list(EXPORT_COLUMNS)]
    for group in groups:
        for case in group.tests:
            rows.append(
                [
                    group.scenario_title,
                    case.id,
                    case.title,
                    "\n".join(case.steps),
                    case.data,
                    case.expected,
                    case.priority,
                ]
            )
    return rows


def write_workbook(groups: Iterable[ScenarioGroup], path: str | Path) -> Path:
    """Write groups to an ``.xlsx`` file readable by ``parse_sheet``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_TITLE
    rows = export_rows(groups)
    for row in rows:
        sheet.append(row)
    workbook.save(path)

    logger.debug("Wrote %d case row(s) to %s", len(rows) - 1, path)
    return path
