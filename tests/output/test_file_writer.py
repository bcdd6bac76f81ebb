"""Tests for writing a file set to disk."""

import pytest

from casewright.conformance.errors import ProducerContractError
from casewright.output.files import write_file_set


class TestWriteFileSet:
    def test_writes_nested_paths(self, tmp_path):
        files = {
            "tests/login.spec.js": "test();\n",
            "pages/LoginPage.js": "export class LoginPage {}\n",
        }

        written = write_file_set(files, tmp_path / "project")

        assert written == [
            tmp_path / "project" / "tests" / "login.spec.js",
            tmp_path / "project" / "pages" / "LoginPage.js",
        ]
        assert (tmp_path / "project" / "tests" / "login.spec.js").read_text() == "test();\n"

    def test_backslash_paths(self, tmp_path):
        write_file_set({"tests\\cart.spec.js": "x"}, tmp_path)
        assert (tmp_path / "tests" / "cart.spec.js").read_text() == "x"

    @pytest.mark.parametrize("path", ["/etc/passwd", "../outside.js", "tests/../../x.js"])
    def test_rejects_escaping_paths(self, tmp_path, path):
        with pytest.raises(ProducerContractError):
            write_file_set({"tests/ok.js": "ok", path: "x"}, tmp_path / "project")

        assert not (tmp_path / "project").exists()

    def test_rejects_empty_set(self, tmp_path):
        with pytest.raises(ProducerContractError):
            write_file_set({}, tmp_path)
