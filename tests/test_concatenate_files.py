"""End-to-end tests for the concatenation use case."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from conftest import RecordingSink, ScriptedPrompt, deny_listing, make_files
from file_concatenator.application.concatenate_files import ConcatenateFilesUseCase
from file_concatenator.domain.entities import RunOptions, RunOutcome, canonicalize
from file_concatenator.domain.errors import EmptySelection, OutputConflict


def _run(sink: RecordingSink, answers=(), **options):
    use_case = ConcatenateFilesUseCase(prompt=ScriptedPrompt(answers), sink=sink)
    return use_case.execute(RunOptions(**options))


def _end(path: str) -> bytes:
    return f"--- END PATH: {canonicalize(path)} ---\n".encode()


def test_existing_output_conflicts_without_change(workdir: Path, sink: RecordingSink) -> None:
    make_files(workdir, {"a.txt": "a", "b.txt": "b", "out.o": "original"})

    with pytest.raises(OutputConflict):
        _run(sink, patterns=("*.txt",), output="out.o")

    assert (workdir / "out.o").read_text() == "original"


def test_no_matches_is_empty_selection(workdir: Path, sink: RecordingSink) -> None:
    with pytest.raises(EmptySelection):
        _run(sink, patterns=("*.md",), output="r.o")

    # Pre-flight already created the output; it is left empty
    assert (workdir / "r.o").read_bytes() == b""


def test_describe_mode_writes_sorted_blocks(workdir: Path, sink: RecordingSink) -> None:
    make_files(workdir, {"y.py": "y = 2\n", "x.py": "x = 1\n"})

    result = _run(sink, patterns=("*.py",), output="out.o", describe=True)

    expected = (
        b"--- START: x.py ---\nDescription: x.py (size: 6 bytes)\nx = 1\n\n"
        b"--- START: y.py ---\nDescription: y.py (size: 6 bytes)\ny = 2\n\n"
    ) + _end("out.o")
    assert (workdir / "out.o").read_bytes() == expected
    assert result.outcome is RunOutcome.COMPLETED
    assert result.processed_count == 2


def test_interactive_all_declined_is_successful_no_op(workdir: Path, sink: RecordingSink) -> None:
    make_files(workdir, {"a.txt": "a", "b.txt": "b"})

    result = _run(sink, answers=["n", "n"], patterns=("*.txt",), output="out.o", interactive=True)

    assert result.outcome is RunOutcome.ALL_DECLINED
    assert result.declined_count == 2
    assert (workdir / "out.o").read_bytes() == _end("out.o")
    assert sink.of("warning") == ["No files selected, nothing to concatenate."]


def test_interactive_prompts_for_pattern_then_files(workdir: Path, sink: RecordingSink) -> None:
    make_files(workdir, {"a.c": "int a;\n", "b.c": "int b;\n", "c.h": "h\n"})

    result = _run(sink, answers=["*.c", "y", "n"], output="out.o", interactive=True)

    assert result.report.written == ["a.c"]
    assert (workdir / "out.o").read_bytes() == b"--- START: a.c ---\nint a;\n\n" + _end("out.o")


def test_no_patterns_uses_all_files_and_skips_output(workdir: Path, sink: RecordingSink) -> None:
    make_files(workdir, {"a": "1\n", "b": "2\n"})

    result = _run(sink, output="out.o")

    assert result.report.written == ["a", "b"]
    assert b"START: out.o" not in (workdir / "out.o").read_bytes()


def test_output_matching_a_pattern_never_included(workdir: Path, sink: RecordingSink) -> None:
    make_files(workdir, {"a.txt": "a\n"})

    result = _run(sink, patterns=("*.txt",), output="z.txt")

    assert result.report.written == ["a.txt"]
    assert result.report.skipped_self == ["z.txt"]
    assert b"START: z.txt" not in (workdir / "z.txt").read_bytes()


def test_output_in_new_directory(workdir: Path, sink: RecordingSink) -> None:
    make_files(workdir, {"a.txt": "a\n"})
    output = os.path.join("dist", "bundle.o")

    _run(sink, patterns=("*.txt",), output=output)

    assert (workdir / "dist" / "bundle.o").read_bytes().startswith(b"--- START: a.txt ---\n")


def test_missing_pattern_directory_warns_and_continues(workdir: Path, sink: RecordingSink) -> None:
    make_files(workdir, {"a.txt": "a\n"})

    result = _run(sink, patterns=("missing/*.txt", "*.txt"), output="out.o")

    assert result.missing_directories == ["missing"]
    assert result.report.written == ["a.txt"]
    assert any("missing" in message for message in sink.of("warning"))


def test_duplicate_matches_written_once(workdir: Path, sink: RecordingSink) -> None:
    make_files(workdir, {"x.py": "x\n"})

    result = _run(sink, patterns=("*.py", "x.*", "./x.py"), output="out.o")

    content = (workdir / "out.o").read_bytes()
    assert result.report.written == [os.path.join(".", "x.py")]
    assert content.count(b"--- START:") == 1


def test_summary_reported(workdir: Path, sink: RecordingSink) -> None:
    make_files(workdir, {"a.txt": "abc"})

    _run(sink, patterns=("*.txt",), output="out.o")

    (summary,) = sink.of("success")
    assert summary.startswith("Processed 1 files (3 bytes) into out.o")


def test_unlistable_pattern_directory_warns_and_continues(
    workdir: Path, sink: RecordingSink, monkeypatch: pytest.MonkeyPatch
) -> None:
    make_files(workdir, {"a.txt": "a\n", "locked/b.txt": "b\n"})
    deny_listing(monkeypatch, "locked")

    result = _run(sink, patterns=("locked/*.txt", "*.txt"), output="out.o")

    assert result.unreadable_directories == ["locked"]
    assert result.report.written == ["a.txt"]
    assert any("Cannot list directory 'locked'" in message for message in sink.of("warning"))
