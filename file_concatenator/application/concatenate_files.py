"""
Application use case for concatenating files selected by name patterns.
Sequences pre-flight, matching, optional interactive selection and writing.
"""

import logging
import time
from typing import List, Optional, Tuple

from ..domain.entities import (
    ConcatenationResult,
    FileEntry,
    FileSet,
    OutputTarget,
    Pattern,
    RunOptions,
    RunOutcome,
)
from ..domain.errors import (
    PatternDirectoryMissing,
    PatternDirectoryUnreadable,
    ReadDenied,
)
from ..domain.ports import LinePrompt, MessageSink
from ..infrastructure.concat_writer import ConcatWriter
from ..infrastructure.file_discovery import (
    FileSetBuilder,
    PatternMatcher,
    list_all_files,
)
from .selection import SelectionFilter, ask_for_pattern

logger = logging.getLogger(__name__)


class ConcatenateFilesUseCase:
    """Runs one concatenation from already-resolved options."""

    def __init__(
        self,
        prompt: LinePrompt,
        sink: MessageSink,
        matcher: Optional[PatternMatcher] = None,
        builder: Optional[FileSetBuilder] = None,
        writer: Optional[ConcatWriter] = None,
    ):
        """Initialize with collaborators; the rest is injectable for testing."""
        self.prompt = prompt
        self.sink = sink
        self.matcher = matcher or PatternMatcher()
        self.builder = builder or FileSetBuilder()
        self.writer = writer or ConcatWriter(
            on_skip_self=self._notify_skip_self,
            on_read_denied=self._notify_read_denied,
            on_processing=self._notify_processing,
        )

    def execute(self, options: RunOptions) -> ConcatenationResult:
        """Execute the run; fatal conditions propagate as ConcatError."""
        start_time = time.time()

        # Resolved before anything exists on disk
        target = OutputTarget.from_path(options.output)
        self.writer.prepare(target)

        patterns = options.patterns
        if options.interactive and not patterns:
            self.sink.info("Interactive mode enabled.")
            patterns = ask_for_pattern(self.prompt)

        missing: List[str] = []
        unreadable: List[str] = []
        file_set = self._resolve(patterns, missing, unreadable)
        matched_count = len(file_set)

        declined = 0
        outcome = RunOutcome.COMPLETED
        if options.interactive:
            self.sink.info("You will be prompted for each file to include (y/n).")
            selection = SelectionFilter(self.prompt)
            file_set = selection.apply(file_set)
            declined = selection.declined
            if not file_set:
                outcome = RunOutcome.ALL_DECLINED
                self.sink.warning("No files selected, nothing to concatenate.")

        self.sink.info(f"Concatenating files into {target.path}...")
        report = self.writer.write(file_set, target, describe=options.describe)

        result = ConcatenationResult(
            output_file=target.path,
            outcome=outcome,
            matched_count=matched_count,
            declined_count=declined,
            missing_directories=missing,
            unreadable_directories=unreadable,
            report=report,
            execution_time_seconds=time.time() - start_time,
        )
        self.sink.success(result.get_summary())
        return result

    def _resolve(
        self,
        raw_patterns: Tuple[str, ...],
        missing: List[str],
        unreadable: List[str],
    ) -> FileSet:
        """Match every pattern, or list all files when there are none."""
        if not raw_patterns:
            return self.builder.build([list_all_files()])

        groups: List[List[FileEntry]] = []
        for raw in raw_patterns:
            try:
                groups.append(self.matcher.match(Pattern.parse(raw)))
            except PatternDirectoryMissing as e:
                self.sink.warning(e.message)
                missing.append(e.directory)
            except PatternDirectoryUnreadable as e:
                self.sink.warning(e.message)
                unreadable.append(e.directory)

        return self.builder.build(groups, patterns=raw_patterns)

    def _notify_processing(self, path: str) -> None:
        self.sink.info(f"Processing: {path}")

    def _notify_skip_self(self, path: str) -> None:
        self.sink.info(f"Skipping {path}: it is the output file")

    def _notify_read_denied(self, error: ReadDenied) -> None:
        self.sink.warning(f"Skipping unreadable file: {error.message}")
