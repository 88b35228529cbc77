"""Tests for CLI help text."""

from __future__ import annotations

import pytest

from treeglob.cli import main


def _render_help(capsys: pytest.CaptureFixture[str]) -> str:
    """Run `treeglob --help` via CLI entrypoint and return captured stdout."""
    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0
    return capsys.readouterr().out


def test_help_includes_tagline(capsys: pytest.CaptureFixture[str]) -> None:
    out = _render_help(capsys)
    assert "treeglob: List the files in a directory tree matching include/exclude globs" in out


def test_help_includes_brief_common_usage(capsys: pytest.CaptureFixture[str]) -> None:
    out = _render_help(capsys)
    assert "Common usage:" in out
    assert "treeglob -i '**/*.py' ." in out
    assert "--check" in out


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--version"]) == 0
    out = capsys.readouterr().out.strip()
    assert out.startswith("v") or out == "unknown (package not installed)"
