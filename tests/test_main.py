"""Tests for the command line entry point."""

from pathlib import Path

import pytest

from main import main

API = """\
# class: Foo
* since: v1.0

## property: Foo.bar
* since: v1.0
- returns: <string>

## method: Foo.onlyJava
* since: v1.0
* langs: java
"""


def test_main_prints_summary(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Verify the summary line of a successful run."""
    (tmp_path / "api.md").write_text(API, encoding="utf-8")
    assert main([str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert "Parsed 1 classes and 2 members" in out


def test_main_filters_by_language(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Verify that --lang summarizes the language view."""
    (tmp_path / "api.md").write_text(API, encoding="utf-8")
    assert main([str(tmp_path), "--lang", "python"]) == 0
    assert "1 classes and 1 members for python" in capsys.readouterr().out


def test_main_reports_parse_errors(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Verify that fatal grammar errors exit with status 1."""
    (tmp_path / "api.md").write_text("# class: Foo\n", encoding="utf-8")
    assert main([str(tmp_path)]) == 1
    assert "Missing since" in caplog.text
