"""Shared fixtures for tests."""

import csv
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from openpyxl import Workbook

from casewright.ingest import ScenarioCollection, parse_rows

HEADER = [
    "Test Scenario",
    "Test Case ID",
    "Test Case Description",
    "Detail Steps",
    "Test Data",
    "Expected Result",
    "Testcase Priority",
]

LOGIN_TITLE = "Verify User Login Functionality with Valid Credentials"
CART_TITLE = "Add Product to Shopping Cart"


@pytest.fixture
def header() -> list[str]:
    return list(HEADER)


@pytest.fixture
def rows() -> list[list]:
    """Three cases in two scenarios; the second row inherits its scenario."""
    return [
        [
            LOGIN_TITLE,
            "TC_001",
            "Login with valid username and password",
            "Navigate to https://example.com/login\nEnter username\nClick login",
            "user: admin",
            "User is redirected to https://example.com/dashboard",
            "P1",
        ],
        [
            None,
            "TC_002",
            "Login with remember me enabled",
            "Open login page\nTick remember me",
            "",
            "Welcome message is displayed",
            "p2",
        ],
        [
            CART_TITLE,
            "TC_003",
            "Add a single product",
            "Open catalog\nAdd product",
            "product: Laptop",
            "Cart badge shows 1",
            "P3",
        ],
    ]


@pytest.fixture
def groups(header, rows) -> ScenarioCollection:
    """The sample rows, grouped."""
    return parse_rows(header, rows).groups


@pytest.fixture
def write_xlsx(tmp_path):
    """Return a function writing a header and rows to an .xlsx file."""

    def _write(header, rows, name="cases.xlsx") -> Path:
        path = tmp_path / name
        workbook = Workbook()
        sheet = workbook.active
        sheet.append(header)
        for row in rows:
            sheet.append(row)
        workbook.save(path)
        return path

    return _write


@pytest.fixture
def write_csv(tmp_path):
    """Return a function writing a header and rows to a UTF-8 (BOM) .csv file."""

    def _write(header, rows, name="cases.csv") -> Path:
        path = tmp_path / name
        with open(path, "w", encoding="utf-8-sig", newline="") as f:
            writer = csv.writer(f)
            if header:
                writer.writerow(header)
            for row in rows:
                writer.writerow(["" if cell is None else cell for cell in row])
        return path

    return _write


@pytest.fixture
def mock_anthropic():
    """Create a mock anthropic client."""
    with patch("anthropic.Anthropic") as mock:
        yield mock


@pytest.fixture
def reply(mock_anthropic):
    """Return a function queueing text replies; it returns the mock client."""

    def _reply(*texts):
        responses = []
        for text in texts:
            mock_text_block = MagicMock()
            mock_text_block.text = text
            mock_response = MagicMock()
            mock_response.content = [mock_text_block]
            responses.append(mock_response)
        mock_client = mock_anthropic.return_value
        mock_client.messages.create.side_effect = responses
        return mock_client

    return _reply
