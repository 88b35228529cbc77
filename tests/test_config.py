"""Tests for config file loading and merging."""

from __future__ import annotations

from pathlib import Path

import pytest

from treeglob.cli import Options
from treeglob.config import TreeglobConfig, find_config_file, load_config, merge_cli_with_config


def test_find_config_treeglob_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "treeglob.toml"
    config_file.write_text('include = ["**/*.py"]\n')
    assert find_config_file(tmp_path) == config_file


def test_find_config_dot_treeglob_toml_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / "treeglob.toml").write_text('include = ["**/*.py"]\n')
    dot_config = tmp_path / ".treeglob.toml"
    dot_config.write_text('include = ["**/*.md"]\n')
    assert find_config_file(tmp_path) == dot_config


def test_find_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text('[tool.treeglob]\ninclude = ["**/*.py"]\n')
    assert find_config_file(tmp_path) == config_file


def test_find_config_pyproject_without_section_skipped(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.ruff]\nline-length = 100\n")
    assert find_config_file(tmp_path) is None


def test_find_config_walks_up(tmp_path: Path) -> None:
    config_file = tmp_path / "treeglob.toml"
    config_file.write_text("include-dirs = true\n")
    subdir = tmp_path / "sub" / "deep"
    subdir.mkdir(parents=True)
    assert find_config_file(subdir) == config_file


def test_find_config_none_when_missing(tmp_path: Path) -> None:
    assert find_config_file(tmp_path) is None


def test_load_config_kebab_case(tmp_path: Path) -> None:
    config_file = tmp_path / "treeglob.toml"
    config_file.write_text(
        'include = ["src/**"]\n'
        'exclude = ["**/__pycache__"]\n'
        "include-dirs = true\n"
        "respect-gitignore = false\n"
    )
    config = load_config(config_file)
    assert config.include == ["src/**"]
    assert config.exclude == ["**/__pycache__"]
    assert config.include_dirs is True
    assert config.respect_gitignore is False


def test_load_config_sections_are_flattened(tmp_path: Path) -> None:
    config_file = tmp_path / "treeglob.toml"
    config_file.write_text('[patterns]\ninclude = ["*.md"]\n\n[walk]\ninclude-dirs = false\n')
    config = load_config(config_file)
    assert config.include == ["*.md"]
    assert config.include_dirs is False


def test_load_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text('[project]\nname = "x"\n\n[tool.treeglob]\nexclude = ["build/**"]\n')
    config = load_config(config_file)
    assert config.exclude == ["build/**"]
    assert config.include is None


def test_load_config_partial(tmp_path: Path) -> None:
    config_file = tmp_path / "treeglob.toml"
    config_file.write_text("include-dirs = true\n")
    config = load_config(config_file)
    assert config.include_dirs is True
    assert config.include is None
    assert config.exclude is None
    assert config.respect_gitignore is None


def test_load_config_malformed_toml(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Malformed TOML should give an empty config, not crash."""
    config_file = tmp_path / "treeglob.toml"
    config_file.write_text("this is not valid toml [[[")
    config = load_config(config_file)
    assert config == TreeglobConfig()
    assert "ignoring config file" in capsys.readouterr().err


def test_parse_config_warns_unknown_keys(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_file = tmp_path / "treeglob.toml"
    config_file.write_text("unknown_key = true\ninclude-dirs = true\n")
    config = load_config(config_file)
    assert config.include_dirs is True
    assert "unrecognized config key: unknown_key" in capsys.readouterr().err


def test_load_config_rejects_wrong_types(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A bare string is not a pattern list, so it must not reach the matcher."""
    config_file = tmp_path / "treeglob.toml"
    config_file.write_text(
        'include = "src/**"\n'
        'exclude = ["ok", 3]\n'
        'include-dirs = "yes"\n'
        "respect-gitignore = false\n"
    )
    config = load_config(config_file)
    assert config == TreeglobConfig(respect_gitignore=False)
    err = capsys.readouterr().err
    assert "ignoring config key include: expected a list of strings" in err
    assert "ignoring config key exclude: expected a list of strings" in err
    assert "ignoring config key include-dirs: expected true or false" in err


def _make_options(
    include: list[str] | None = None,
    exclude: list[str] | None = None,
    include_dirs: bool | None = None,
    respect_gitignore: bool | None = None,
) -> Options:
    """Create an Options with defaults for all required fields."""
    return Options(
        directory=".",
        include=include,
        exclude=exclude,
        include_dirs=include_dirs,
        respect_gitignore=respect_gitignore,
        check=[],
        verbose=False,
        version=False,
    )


def test_merge_no_config() -> None:
    opts = _make_options(include=["*.py"])
    result = merge_cli_with_config(opts, config=None, explicit_flags=set())
    assert result.include == ["*.py"]
    assert result.exclude is None


def test_merge_config_overrides_defaults() -> None:
    opts = _make_options()
    config = TreeglobConfig(include=["**/*.md"], include_dirs=True)
    result = merge_cli_with_config(opts, config=config, explicit_flags=set())
    assert result.include == ["**/*.md"]
    assert result.include_dirs is True


def test_merge_explicit_cli_overrides_config() -> None:
    opts = _make_options(include=["*.py"], respect_gitignore=False)
    config = TreeglobConfig(include=["**/*.md"], exclude=["vendor"], respect_gitignore=True)
    result = merge_cli_with_config(
        opts, config=config, explicit_flags={"include", "respect_gitignore"}
    )
    assert result.include == ["*.py"]
    assert result.respect_gitignore is False
    # Not given on the command line, so the config applies
    assert result.exclude == ["vendor"]
