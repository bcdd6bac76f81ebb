"""Ingestion layer: sheet loading, validation and scenario grouping."""

from .errors import SchemaError, SheetLoadError
from .exporter import export_rows, write_workbook
from .grouping import group_rows
from .loader import IngestionResult, load_groups, load_sheet, parse_rows, parse_sheet
from .models import (
    Analysis,
    CaseAnalysis,
    ScenarioCollection,
    ScenarioGroup,
    TestCase,
)
from .normalizer import to_camel_case, to_pascal_case, to_short_feature_name
from .suggestions import merge_suggestions
from .validator import MANDATORY_COLUMNS, validate_sheet

__all__ = [
    "SchemaError",
    "SheetLoadError",
    "export_rows",
    "write_workbook",
    "group_rows",
    "IngestionResult",
    "load_groups",
    "load_sheet",
    "parse_rows",
    "parse_sheet",
    "Analysis",
    "CaseAnalysis",
    "ScenarioCollection",
    "ScenarioGroup",
    "TestCase",
    "to_camel_case",
    "to_pascal_case",
    "to_short_feature_name",
    "merge_suggestions",
    "MANDATORY_COLUMNS",
    "validate_sheet",
]
