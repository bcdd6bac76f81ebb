"""Command-line interface for Casewright."""

import json
import logging
import sys
from pathlib import Path

import click

from .conformance import ProducerContractError, conform_files
from .diagnostics import Diagnostics
from .ingest import (
    IngestionResult,
    SchemaError,
    SheetLoadError,
    load_groups,
    merge_suggestions,
    parse_sheet,
    write_workbook,
)
from .llm import DEFAULT_MODEL, CaseAnalyzer, CaseSuggester, CodeProducer, LLMError, enrich_groups
from .output import format_diagnostics, format_groups, write_file_set

logger = logging.getLogger(__name__)

api_key_option = click.option(
    "--api-key",
    envvar="ANTHROPIC_API_KEY",
    help="Anthropic API key (defaults to ANTHROPIC_API_KEY env var)",
)
model_option = click.option(
    "--model",
    "claude_model",
    envvar="CASEWRIGHT_MODEL",
    default=DEFAULT_MODEL,
    show_default=True,
    help="Claude model to use (defaults to CASEWRIGHT_MODEL env var)",
)


def _fail(message: str) -> None:
    click.echo(message, err=True)
    sys.exit(2)


def _report_schema_error(e: SchemaError) -> None:
    click.echo(f"Schema validation error: {e}", err=True)
    for err in e.errors:
        location = f"row {err['row']}" if err.get("row") is not None else "sheet"
        column = f" [{err['column']}]" if err.get("column") else ""
        click.echo(f"  - {location}{column}: {err['msg']}", err=True)
    sys.exit(2)


def _ingest(sheet: str) -> IngestionResult:
    """Parse a sheet, exiting with code 2 on load or schema errors."""
    try:
        return parse_sheet(sheet)
    except SheetLoadError as e:
        _fail(f"Error loading file: {e}")
    except SchemaError as e:
        _report_schema_error(e)


def _echo_issues(diagnostics: Diagnostics) -> None:
    for issue in diagnostics.issues:
        click.echo(str(issue), err=True)


@click.group()
@click.version_option(package_name="casewright")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging")
def main(verbose: bool):
    """Casewright: turn manual test-case sheets into Playwright projects."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("sheet", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors",
)
def validate(sheet: str, output_format: str, strict: bool):
    """Validate a test-case sheet.

    SHEET is the path to an .xlsx or .csv file.

    Exit codes:
      0 - Validation passed
      1 - Validation failed (errors found)
      2 - File or schema error
    """
    result = _ingest(sheet)
    diagnostics = result.diagnostics

    click.echo(format_diagnostics(diagnostics, output_format))  # type: ignore

    if diagnostics.has_errors:
        sys.exit(1)
    elif strict and diagnostics.has_warnings:
        sys.exit(1)
    else:
        sys.exit(0)


@main.command()
@click.argument("sheet", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help="Output format",
)
@click.option("--output", "output_file", type=click.Path(), help="Write groups to this file")
def parse(sheet: str, output_format: str, output_file: str | None):
    """Parse a sheet into scenario groups.

    Diagnostics go to stderr; the groups go to stdout or --output.
    """
    result = _ingest(sheet)
    _echo_issues(result.diagnostics)

    content = format_groups(result.groups, output_format)  # type: ignore
    if output_file:
        Path(output_file).write_text(content, encoding="utf-8")
        click.echo(
            f"Wrote {len(result.groups)} scenario(s), "
            f"{result.groups.total_cases} case(s) to {output_file}"
        )
    else:
        click.echo(content)

    sys.exit(1 if result.diagnostics.has_errors else 0)


@main.command()
@click.argument("sheet", type=click.Path(exists=True))
@click.argument("files_json", type=click.Path(exists=True))
@click.option("--output-dir", type=click.Path(), help="Write corrected files here")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Diagnostics format",
)
def conform(sheet: str, files_json: str, output_dir: str | None, output_format: str):
    """Repair a generated file set against its sheet.

    FILES_JSON holds a JSON object mapping relative paths to file contents.
    Without --output-dir the corrected mapping is printed as JSON.
    """
    result = _ingest(sheet)

    try:
        with open(files_json, "r", encoding="utf-8") as f:
            files = json.load(f)
    except json.JSONDecodeError as e:
        _fail(f"Invalid file set: {e}")

    try:
        conformed = conform_files(result.groups, files)
        diagnostics = result.diagnostics
        diagnostics.merge(conformed.diagnostics)

        if output_dir:
            written = write_file_set(conformed.files, output_dir)
            click.echo(format_diagnostics(diagnostics, output_format))  # type: ignore
            click.echo(f"\nWrote {len(written)} file(s), corrected {len(conformed.changed)}")
        else:
            click.echo(json.dumps(conformed.files, indent=2, ensure_ascii=False))
            click.echo(format_diagnostics(diagnostics, output_format), err=True)  # type: ignore
    except ProducerContractError as e:
        _fail(f"Invalid file set: {e}")

    sys.exit(1 if diagnostics.has_errors else 0)


@main.command()
@click.argument("sheet", type=click.Path(exists=True))
@click.option("--output-dir", required=True, type=click.Path(), help="Project directory to write")
@click.option("--project-name", default=None, help="Project name (defaults to the sheet name)")
@click.option(
    "--enrich/--no-enrich",
    default=True,
    help="Analyze each case with Claude before generating",
)
@api_key_option
@model_option
def generate(
    sheet: str,
    output_dir: str,
    project_name: str | None,
    enrich: bool,
    api_key: str | None,
    claude_model: str,
):
    """Generate a Playwright project from a sheet.

    Exit codes:
      0 - Success
      1 - The sheet has errors
      2 - File, schema, contract or API error
    """
    result = _ingest(sheet)
    diagnostics = result.diagnostics
    if diagnostics.has_errors:
        click.echo(format_diagnostics(diagnostics), err=True)
        sys.exit(1)
    if not len(result.groups):
        _fail("No scenarios to generate from")

    project_name = project_name or Path(sheet).stem

    try:
        actions: list[str] = []
        if enrich:
            analyzer = CaseAnalyzer(api_key=api_key, model=claude_model)
            actions = enrich_groups(result.groups, analyzer.analyze)

        producer = CodeProducer(api_key=api_key, model=claude_model)
        files = producer.generate(result.groups, project_name, actions=actions)
        conformed = conform_files(result.groups, files)
        written = write_file_set(conformed.files, output_dir)
    except LLMError as e:
        _fail(f"API error: {e}")
    except ProducerContractError as e:
        _fail(f"Generated output rejected: {e}")

    diagnostics.merge(conformed.diagnostics)
    _echo_issues(diagnostics)
    for file_path in written:
        click.echo(f"Generated: {file_path}")
    click.echo(
        f"\nGenerated {len(written)} file(s) for {result.groups.total_cases} case(s) "
        f"in {len(result.groups)} scenario(s)"
    )
    sys.exit(0)


@main.command()
@click.argument("sheet", type=click.Path(exists=True))
@click.option("--output", "output_file", required=True, type=click.Path(), help="Workbook to write")
@click.option("--scenario", "scenario_title", default=None, help="Only suggest for this scenario")
@click.option("--count", default=4, show_default=True, type=click.IntRange(min=1), help="Cases to ask for")
@click.option("--project-name", default=None, help="Project name (defaults to the sheet name)")
@api_key_option
@model_option
def suggest(
    sheet: str,
    output_file: str,
    scenario_title: str | None,
    count: int,
    project_name: str | None,
    api_key: str | None,
    claude_model: str,
):
    """Ask Claude for missing test cases and write the extended sheet."""
    result = _ingest(sheet)
    _echo_issues(result.diagnostics)
    if result.diagnostics.has_errors:
        sys.exit(1)

    try:
        suggester = CaseSuggester(api_key=api_key, model=claude_model)
        suggestions = suggester.suggest(
            result.groups, project_name or Path(sheet).stem, scenario_title, count
        )
    except LLMError as e:
        _fail(f"API error: {e}")

    added = merge_suggestions(result.groups, suggestions)
    write_workbook(result.groups, output_file)
    click.echo(f"Added {len(added)} suggested case(s); wrote {output_file}")
    sys.exit(0)


@main.command()
@click.argument("groups_file", type=click.Path(exists=True))
@click.argument("output_file", type=click.Path())
def export(groups_file: str, output_file: str):
    """Export scenario groups (JSON or YAML) back to an .xlsx sheet."""
    try:
        groups = load_groups(groups_file)
    except SheetLoadError as e:
        _fail(f"Error loading file: {e}")
    except SchemaError as e:
        _report_schema_error(e)

    write_workbook(groups, output_file)
    click.echo(f"Exported {groups.total_cases} case(s) to {output_file}")
    sys.exit(0)


if __name__ == "__main__":
    main()
