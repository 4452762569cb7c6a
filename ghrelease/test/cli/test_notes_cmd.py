from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from ghrelease.cli.app import app
from ghrelease.release.notes import RELEASE_NOTES_SEPARATOR, release_notes_template

runner = CliRunner()

NOTES = (
    "Next release\n"
    "============\n"
    "\n"
    "* [GDB-7](https://jira/browse/GDB-7): Better errors\n"
    "\n"
    "###################\n"
    "\n"
    "0.9.0\n"
    "=====\n"
)


def _notes(tmp_path: Path, text: str = NOTES) -> Path:
    path = tmp_path / "RELEASE-NOTES.md"
    path.write_text(text, encoding="utf-8")
    return path


def test_extract_prints_body(tmp_path: Path) -> None:
    path = _notes(tmp_path)

    result = runner.invoke(app, ["notes", "extract", str(path), "--tag", "1.0.0"])

    assert result.exit_code == 0, result.output
    assert result.output == (
        "1.0.0\n============\n\n* [GDB-7](https://jira/browse/GDB-7): Better errors\n\n"
    )


def test_extract_without_separator(tmp_path: Path) -> None:
    path = _notes(tmp_path, "Next release\n* a\n")

    result = runner.invoke(app, ["notes", "extract", str(path), "--tag", "1.0.0"])

    assert result.exit_code == 1
    assert "no separator line" in result.output


def test_extract_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["notes", "extract", str(tmp_path / "nope.md"), "--tag", "1"])

    assert result.exit_code == 5
    assert "failed to read" in result.output


def test_rotate_prints_without_writing(tmp_path: Path) -> None:
    path = _notes(tmp_path)

    result = runner.invoke(
        app, ["notes", "rotate", str(path), "--tag", "1.0.0", "--ticket-url", "https://t/"]
    )

    assert result.exit_code == 0, result.output
    assert result.output.startswith(release_notes_template("https://t/"))
    assert path.read_text(encoding="utf-8") == NOTES


def test_rotate_write(tmp_path: Path) -> None:
    path = _notes(tmp_path)

    result = runner.invoke(
        app,
        ["notes", "rotate", str(path), "--tag", "1.0.0", "--ticket-url", "https://t/", "--write"],
    )

    assert result.exit_code == 0, result.output
    assert "updated" in result.output
    content = path.read_text(encoding="utf-8")
    assert content == (
        release_notes_template("https://t/")
        + "\n\n"
        + RELEASE_NOTES_SEPARATOR
        + "\n\n"
        + NOTES.replace("Next release", "1.0.0")
    )
