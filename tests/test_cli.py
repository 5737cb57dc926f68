"""CLI parser and entrypoint behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from authortag.cli import _build_parser, main
from authortag.logging import configure_logging
from tests._fixtures.record_builder import RecordBuilder


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "annotate", "record.json"])
    assert args.verbose is True
    assert args.command == "annotate"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["annotate", "record.json", "--verbose"])
    assert args.verbose is True
    assert args.record == "record.json"


def test_cli_parses_annotate_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(
        ["annotate", "record.json", "--config", "team.yml", "--output", "out.json", "--workers", "4"]
    )
    assert args.config == "team.yml"
    assert args.output == "out.json"
    assert args.workers == 4


def test_cli_rejects_non_positive_workers() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["annotate", "record.json", "--workers", "0"])


def test_main_annotates_and_prints_totals(
    tmp_path: Path, record_builder: RecordBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    record = record_builder.write({"app.py": ["// @@author alice", "run()", "// @@author", "done()"]})
    output = tmp_path / "annotated.json"

    main(["annotate", str(record), "--output", str(output)])

    captured = capsys.readouterr()
    assert "Annotated 1 files" in captured.out
    assert "alice: 3 lines" in captured.out
    assert "blame-bot: 1 lines" in captured.out
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["files"][0]["contributions"] == {"alice": 3, "blame-bot": 1}


def test_main_exits_on_invalid_config(tmp_path: Path, record_builder: RecordBuilder) -> None:
    record = record_builder.write({"app.py": ["x"]})
    bad_config = tmp_path / "bad.yml"
    bad_config.write_text("authors: alice\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["annotate", str(record), "--config", str(bad_config)])

    assert excinfo.value.code == 1


def test_main_exits_on_missing_record(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["annotate", str(tmp_path / "missing.json")])

    assert excinfo.value.code == 1


def test_main_exits_on_missing_explicit_config(
    tmp_path: Path, record_builder: RecordBuilder
) -> None:
    record = record_builder.write({"app.py": ["# @@author ghost", "boo()"]})
    output = tmp_path / "out.json"

    with pytest.raises(SystemExit) as excinfo:
        main(["annotate", str(record), "--config", str(tmp_path / "tema.yml"), "--output", str(output)])

    assert excinfo.value.code == 1
    assert not output.exists()


def test_main_exits_on_non_utf8_record(tmp_path: Path) -> None:
    record = tmp_path / "record.json"
    record.write_bytes(b"\xff\xfe")

    with pytest.raises(SystemExit) as excinfo:
        main(["annotate", str(record)])

    assert excinfo.value.code == 1


def test_main_writes_log_file(tmp_path: Path, record_builder: RecordBuilder) -> None:
    record = record_builder.write({"app.py": ["# @@author alice", "run()"]})
    log_file = tmp_path / "authortag.log"

    main(["annotate", str(record), "--log-file", str(log_file)])
    configure_logging()

    contents = log_file.read_text(encoding="utf-8")
    assert "Starting annotation run" in contents
    assert "authortag.orchestrator" in contents
