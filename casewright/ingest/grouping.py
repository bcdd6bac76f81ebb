"""Group validated sheet rows into scenario groups."""

import logging
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from ..diagnostics import Diagnostics
from .models import ScenarioCollection, TestCase
from .normalizer import to_short_feature_name
from .validator import (
    CASE_ID_COLUMN,
    DATA_COLUMN,
    DESCRIPTION_COLUMN,
    EXPECTED_COLUMN,
    FIRST_DATA_ROW,
    PRIORITY_COLUMN,
    SCENARIO_COLUMN,
    STEPS_COLUMN,
    ColumnIndex,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_TITLE = "Test for {scenario} - Case {number}"


def group_rows(
    header: Sequence[Any], rows: Sequence[Sequence[Any]]
) -> tuple[ScenarioCollection, Diagnostics]:
    """Group data rows by scenario title.

    A blank scenario cell inherits the last non-empty title above it, which
    is how merged cells come out of a spreadsheet. Rows that cannot be
    grouped are dropped with a diagnostic; nothing here raises.

    The header must already have passed ``validate_sheet``.

    Args:
        header: The header row.
        rows: Data rows aligned to the header.

    Returns:
        The grouped scenarios and the diagnostics recorded while grouping.
    """
    columns = ColumnIndex(header)
    collection = ScenarioCollection()
    diagnostics = Diagnostics()
    reported_collisions: set[str] = set()
    last_scenario: str | None = None

    for offset, row in enumerate(rows):
        row_number = offset + FIRST_DATA_ROW

        scenario = columns.cell(row, SCENARIO_COLUMN)
        if scenario:
            last_scenario = scenario
        elif last_scenario is not None:
            scenario = last_scenario
        else:
            diagnostics.add_warning(
                code="ROW_SKIPPED",
                message=(
                    f"'{SCENARIO_COLUMN}' is empty and no preceding scenario "
                    "was defined; row skipped"
                ),
                row=row_number,
            )
            logger.warning("Skipping row %d: no scenario to group under", row_number)
            continue

        short_name = to_short_feature_name(scenario)
        if not short_name:
            diagnostics.add_error(
                code="EMPTY_SHORT_NAME",
                message=f"No feature name could be derived from '{scenario}'; row skipped",
                row=row_number,
            )
            logger.error("Skipping row %d: empty feature name for %r", row_number, scenario)
            continue

        group = collection.get(short_name)

        description = columns.cell(row, DESCRIPTION_COLUMN)
        if not description:
            description = PLACEHOLDER_TITLE.format(
                scenario=scenario, number=(len(group.tests) if group else 0) + 1
            )

        try:
            case = TestCase(
                id=columns.cell(row, CASE_ID_COLUMN),
                title=description,
                description=description,
                steps=columns.cell(row, STEPS_COLUMN),
                data=columns.cell(row, DATA_COLUMN),
                expected=columns.cell(row, EXPECTED_COLUMN),
                priority=columns.cell(row, PRIORITY_COLUMN),
            )
        except ValidationError as e:
            reasons = "; ".join(
                f"{'.'.join(str(x) for x in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            diagnostics.add_error(
                code="INVALID_ROW",
                message=f"Row could not be read as a test case ({reasons}); row skipped",
                row=row_number,
            )
            logger.error("Skipping row %d: %s", row_number, reasons)
            continue

        if group is None:
            group = collection.create_group(scenario)
        elif group.scenario_title != scenario and scenario not in reported_collisions:
            reported_collisions.add(scenario)
            diagnostics.add_warning(
                code="SHORT_NAME_COLLISION",
                message=(
                    f"Scenario '{scenario}' reduces to feature name '{short_name}' "
                    f"already used by '{group.scenario_title}'; cases are merged"
                ),
                row=row_number,
                short_feature_name=short_name,
                existing_title=group.scenario_title,
            )
            logger.warning(
                "Feature name collision on %r: %r merged into %r",
                short_name,
                scenario,
                group.scenario_title,
            )

        group.tests.append(case)

    if len(collection) == 0:
        diagnostics.add_warning(
            code="NO_SCENARIOS",
            message=f"No rows could be grouped; check the '{SCENARIO_COLUMN}' column",
        )
    else:
        logger.debug(
            "Grouped %d case(s) into %d scenario(s)",
            collection.total_cases,
            len(collection),
        )

    return collection, diagnostics
