"""Behavior tests for CLI argument dispatch and exit semantics."""

import csv
import io
import json
from pathlib import Path

import pytest

import turnsplit.__main__ as cli

TRANSCRIPT = "User: hi\nAssistant: hello there"


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> None:
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    monkeypatch.setattr(cli.sys, "argv", ["turnsplit", *argv])
    cli.main()


def _write_transcript(tmp_path: Path, text: str = TRANSCRIPT) -> Path:
    path = tmp_path / "chat.txt"
    path.write_text(text, encoding="utf-8")
    return path


def test_cli_exits_with_error_when_file_is_missing(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """The CLI should return exit code 1 when no transcript is provided."""
    with pytest.raises(SystemExit) as exc_info:
        _run(monkeypatch)

    assert exc_info.value.code == 1


def test_cli_exits_with_error_when_file_does_not_exist(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """A path that does not exist is reported and exits with code 1."""
    with pytest.raises(SystemExit) as exc_info:
        _run(monkeypatch, str(tmp_path / "missing.txt"))

    assert exc_info.value.code == 1
    assert "Transcript file not found" in caplog.text


def test_cli_rejects_oversized_input(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Input above TURNSPLIT_MAX_INPUT_BYTES exits with code 1."""
    monkeypatch.setenv("TURNSPLIT_MAX_INPUT_BYTES", "4")
    path = _write_transcript(tmp_path)

    with pytest.raises(SystemExit) as exc_info:
        _run(monkeypatch, str(path))

    assert exc_info.value.code == 1


def test_cli_json_output(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """JSON output carries source, title and every turn."""
    path = _write_transcript(tmp_path)

    _run(monkeypatch, str(path), "--format", "json")

    payload = json.loads(capsys.readouterr().out)
    assert payload["source"] == "Assistant"
    assert payload["title"] == "hi"
    assert payload["turns"] == [
        {"kind": "primary", "speaker": "User", "content": "hi", "label_prefix": "User: "},
        {
            "kind": "counterpart",
            "speaker": "Assistant",
            "content": "hello there",
            "label_prefix": "Assistant: ",
        },
    ]


def test_cli_json_output_to_file_from_stdin(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """`-` reads stdin and `--output` writes the JSON to disk."""
    monkeypatch.setattr(cli.sys, "stdin", io.StringIO("question?\n\nSure"))
    target = tmp_path / "turns.json"

    _run(monkeypatch, "-", "--format", "json", "--output", str(target))

    payload = json.loads(target.read_text(encoding="utf-8"))
    assert [turn["kind"] for turn in payload["turns"]] == ["primary", "counterpart"]


def test_cli_csv_output(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """CSV export lands in TURNSPLIT_OUTPUT_DIR named after the input file."""
    output_dir = tmp_path / "out"
    monkeypatch.setenv("TURNSPLIT_OUTPUT_DIR", str(output_dir))
    path = _write_transcript(tmp_path)

    _run(monkeypatch, str(path), "--format", "csv")

    with open(output_dir / "chat.csv", newline="", encoding="utf-8") as handle:
        rows = list(csv.reader(handle))
    assert rows == [
        ["Index", "Kind", "Speaker", "Content"],
        ["0", "primary", "User", "hi"],
        ["1", "counterpart", "Assistant", "hello there"],
    ]


def test_cli_text_output_with_explanation(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """`--explain` prints the score breakdown under each turn."""
    path = _write_transcript(tmp_path)

    _run(monkeypatch, str(path), "--explain")

    out = capsys.readouterr().out
    assert out.startswith("hi (Assistant)")
    assert "hello there" in out
    assert "TOTAL_COUNTERPART" in out
    assert "Cumulative User score" in out



def test_cli_explain_on_labelled_turns_includes_the_labels(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Label-parsed turns are scored with their label and marked as estimates."""
    path = _write_transcript(tmp_path)

    _run(monkeypatch, str(path), "--explain")

    out = capsys.readouterr().out
    assert "explicitUserMarker" in out
    assert "explicitAIMarker" in out
    assert out.count("[content-only estimate]") == 2
    assert "-> primary" in out
    assert "-> counterpart" in out


def test_cli_explain_replays_classifier_verdicts(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """When the classifier attributed the turns, its own verdicts are shown."""
    path = _write_transcript(tmp_path, "Please explain how decorators work?\n\nSure")

    _run(monkeypatch, str(path), "--explain")

    out = capsys.readouterr().out
    assert "-> counterpart (0.60) corrected by alternationPattern" in out
    assert "content-only estimate" not in out


def test_cli_explain_without_classifier_marks_estimates(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """With `--no-classifier` the breakdown is never presented as the verdict."""
    path = _write_transcript(tmp_path, "Please explain how decorators work?\n\nSure")

    _run(monkeypatch, str(path), "--explain", "--no-classifier")

    out = capsys.readouterr().out
    assert out.count("[content-only estimate]") == 2
    assert "alternationPattern" not in out


def test_cli_no_classifier_flag_alternates_blocks(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """`--no-classifier` attributes unlabelled blocks by position."""
    path = _write_transcript(
        tmp_path,
        "Sure, I'll help. Here is a short summary of the report, with the key "
        "numbers highlighted for you.\n\nCan you make it shorter?",
    )

    _run(monkeypatch, str(path), "--format", "json", "--no-classifier")

    payload = json.loads(capsys.readouterr().out)
    assert [turn["kind"] for turn in payload["turns"]] == ["primary", "counterpart"]


def test_cli_log_level_flag_overrides_environment_level(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """`--log-level` should override LOG_LEVEL for the command invocation."""
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    configured_levels: list[str | int | None] = []

    def _capture_log_level(level: str | int | None = None) -> int:
        configured_levels.append(level)
        return 0

    monkeypatch.setattr(cli, "configure_logging", _capture_log_level)
    path = _write_transcript(tmp_path)

    _run(monkeypatch, str(path), "--format", "json", "--log-level", "DEBUG")

    assert configured_levels[-1] == "DEBUG"
