"""Sheet loading and the ingestion entry points."""

import csv
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from openpyxl import load_workbook
from pydantic import ValidationError

from ..diagnostics import Diagnostics
from .errors import SchemaError, SheetLoadError
from .grouping import group_rows
from .models import ScenarioCollection
from .validator import validate_sheet

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = (".xlsx", ".xlsm")
CSV_SUFFIXES = (".csv",)


@dataclass
class IngestionResult:
    """Grouped scenarios plus everything noticed on the way."""

    groups: ScenarioCollection = field(default_factory=ScenarioCollection)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def _is_blank(row: list[Any]) -> bool:
    return all(cell is None or str(cell).strip() == "" for cell in row)


def _trim_trailing_blank_rows(rows: list[list[Any]]) -> list[list[Any]]:
    while rows and _is_blank(rows[-1]):
        rows.pop()
    return rows


def load_sheet(path: str | Path) -> tuple[list[Any], list[list[Any]]]:
    """Read the first sheet of a workbook or a CSV file.

    Args:
        path: Path to an ``.xlsx``/``.xlsm`` or ``.csv`` file.

    Returns:
        The header row and the data rows. Both are empty for an empty sheet.

    Raises:
        SheetLoadError: If the file is missing, unsupported or unreadable.
    """
    path = Path(path)

    if not path.exists():
        raise SheetLoadError(f"File not found: {path}", str(path))

    if not path.is_file():
        raise SheetLoadError(f"Not a file: {path}", str(path))

    suffix = path.suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        rows = _read_workbook(path)
    elif suffix in CSV_SUFFIXES:
        rows = _read_csv(path)
    else:
        raise SheetLoadError(
            f"Unsupported sheet format '{path.suffix}'; expected .xlsx, .xlsm or .csv",
            str(path),
        )

    rows = _trim_trailing_blank_rows(rows)
    if not rows:
        return [], []
    return rows[0], rows[1:]


def _read_workbook(path: Path) -> list[list[Any]]:
    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except Exception as e:
        # openpyxl raises zipfile, KeyError and its own errors for bad files
        raise SheetLoadError(f"Cannot read workbook: {e}", str(path)) from e

    try:
        if not workbook.sheetnames:
            raise SheetLoadError("No sheets found in the workbook", str(path))
        sheet = workbook[workbook.sheetnames[0]]
        return [list(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()


def _read_csv(path: Path) -> list[list[Any]]:
    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            return [list(row) for row in csv.reader(f)]
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise SheetLoadError(f"Cannot read file: {e}", str(path)) from e


def parse_rows(header: list[Any], rows: list[list[Any]]) -> IngestionResult:
    """Validate rows completely, then group them.

    Raises:
        SchemaError: If the header or any row fails validation.
    """
    if not header or all(cell is None or str(cell).strip() == "" for cell in header):
        raise SchemaError("Header row is empty; the sheet must start with column names")

    diagnostics = validate_sheet(header, rows)
    groups, grouping_diagnostics = group_rows(header, rows)
    diagnostics.merge(grouping_diagnostics)
    return IngestionResult(groups=groups, diagnostics=diagnostics)


def parse_sheet(path: str | Path) -> IngestionResult:
    """Load a sheet file and parse it into scenario groups.

    Raises:
        SheetLoadError: If the file cannot be read.
        SchemaError: If the sheet fails validation.
    """
    header, rows = load_sheet(path)
    if not header and not rows:
        result = IngestionResult()
        result.diagnostics.add_warning(code="EMPTY_SHEET", message=f"Sheet {path} is empty")
        logger.warning("Sheet %s is empty", path)
        return result

    logger.debug("Loaded %d data row(s) from %s", len(rows), path)
    return parse_rows(header, rows)


def load_groups(path: str | Path) -> ScenarioCollection:
    """Load scenario groups previously written as JSON or YAML.

    Raises:
        SheetLoadError: If the file cannot be read or has the wrong shape.
        SchemaError: If a group fails model validation.
    """
    path = Path(path)
    if not path.is_file():
        raise SheetLoadError(f"File not found: {path}", str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise SheetLoadError(f"Invalid group file: {e}", str(path)) from e
    except OSError as e:
        raise SheetLoadError(f"Cannot read file: {e}", str(path)) from e

    if not isinstance(data, list):
        raise SheetLoadError(
            f"Expected a list of scenario groups, got {type(data).__name__}", str(path)
        )

    try:
        return ScenarioCollection.from_list(data)
    except ValidationError as e:
        errors = [
            {
                "row": None,
                "column": ".".join(str(x) for x in err["loc"]),
                "msg": err["msg"],
            }
            for err in e.errors()
        ]
        raise SchemaError(
            f"Group validation failed with {len(errors)} error(s)", errors
        ) from e
    except ValueError as e:
        raise SchemaError(str(e)) from e
