"""Tests for the Typer CLI."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from ember_definitions.cli.app import app

runner = CliRunner()

POST_SOURCE = """import Model, { belongsTo } from '@ember-data/model';

export default Model.extend({
  author: belongsTo('user'),
});
"""


@pytest.fixture
def post_file(classic_project: Path) -> Path:
    path = classic_project / "app" / "models" / "post.js"
    path.write_text(POST_SOURCE)
    return path


@pytest.mark.parametrize(
    "args",
    [
        [],
        ["definition"],
        ["serve"],
        ["serve", "api"],
    ],
    ids=["root", "definition", "serve", "serve-api"],
)
def test_short_help_flag(args: list[str]) -> None:
    result = runner.invoke(app, [*args, "-h"])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_definition_lists_candidates(post_file: Path, classic_project: Path) -> None:
    result = runner.invoke(
        app,
        ["definition", str(post_file), "--line", "3", "--column", "22", "--root", str(classic_project)],
    )
    assert result.exit_code == 0, result.output
    assert "(2 candidates)" in result.output


def test_definition_existing_only(post_file: Path, classic_project: Path) -> None:
    result = runner.invoke(
        app,
        [
            "definition",
            str(post_file),
            "--line",
            "3",
            "--column",
            "22",
            "--root",
            str(classic_project),
            "--existing-only",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "(1 candidates)" in result.output


def test_definition_without_match(post_file: Path, classic_project: Path) -> None:
    result = runner.invoke(
        app,
        ["definition", str(post_file), "--line", "0", "--column", "2", "--root", str(classic_project)],
    )
    assert result.exit_code == 0
    assert "No definition found." in result.output


def test_definition_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(
        app,
        ["definition", str(tmp_path / "missing.js"), "--line", "0", "--column", "0"],
    )
    assert result.exit_code == 1
    assert "Error" in result.output


def test_definition_unsupported_extension(tmp_path: Path) -> None:
    template = tmp_path / "post.hbs"
    template.write_text("{{outlet}}")
    result = runner.invoke(app, ["definition", str(template), "--line", "0", "--column", "3"])
    assert result.exit_code == 1
    assert "Unsupported file extension" in result.output
