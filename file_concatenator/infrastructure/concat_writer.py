"""
Output writing infrastructure.
Every filesystem mutation of a run happens here: the pre-flight creation of
the output file and its parent directories, then the write phase.
"""

import logging
import os
from typing import BinaryIO, Callable, Optional

from ..domain.entities import FileEntry, FileSet, OutputTarget, WriteReport, canonicalize
from ..domain.errors import (
    DirectoryCreateFailed,
    OutputConflict,
    OutputWriteFailed,
    ReadDenied,
)

logger = logging.getLogger(__name__)

COPY_BUFFER_SIZE = 64 * 1024


def start_marker(path: str) -> bytes:
    return b"--- START: " + os.fsencode(path) + b" ---\n"


def description_line(path: str, size: int) -> bytes:
    return (
        b"Description: " + os.fsencode(path) + f" (size: {size} bytes)\n".encode()
    )


def end_marker(target: OutputTarget) -> bytes:
    """End marker naming the canonical output path."""
    return b"--- END PATH: " + os.fsencode(target.canonical) + b" ---\n"


class ConcatWriter:
    """Creates the output file and streams the selected files into it."""

    def __init__(
        self,
        on_skip_self: Optional[Callable[[str], None]] = None,
        on_read_denied: Optional[Callable[[ReadDenied], None]] = None,
        on_processing: Optional[Callable[[str], None]] = None,
    ):
        """Initialize with optional per-entry notification hooks."""
        self.on_skip_self = on_skip_self
        self.on_read_denied = on_read_denied
        self.on_processing = on_processing

    def prepare(self, target: OutputTarget) -> None:
        """Pre-flight: refuse existing outputs, create parents and the file."""
        if os.path.lexists(target.path):
            raise OutputConflict(target.path)

        parent = target.parent
        if not os.path.isdir(parent):
            try:
                os.makedirs(parent, exist_ok=True)
            except OSError as e:
                raise DirectoryCreateFailed(parent, e.strerror or str(e)) from e
            logger.debug("Created directory %s", parent)

        try:
            # Exclusive create: losing a race to another writer is a conflict
            with open(target.path, "xb"):
                pass
        except FileExistsError as e:
            raise OutputConflict(target.path) from e
        except OSError as e:
            raise OutputWriteFailed(target.path, e.strerror or str(e)) from e

    def write(
        self, file_set: FileSet, target: OutputTarget, describe: bool = False
    ) -> WriteReport:
        """Truncate the output and write every readable entry, then the end marker."""
        report = WriteReport()

        try:
            with open(target.path, "wb") as output:
                for entry in file_set:
                    self._write_entry(output, entry, target, describe, report)
                output.write(end_marker(target))
        except OSError as e:
            raise OutputWriteFailed(target.path, e.strerror or str(e)) from e

        logger.debug(
            "Wrote %d files (%d bytes) to %s",
            len(report.written),
            report.bytes_written,
            target.path,
        )
        return report

    def _write_entry(
        self,
        output: BinaryIO,
        entry: FileEntry,
        target: OutputTarget,
        describe: bool,
        report: WriteReport,
    ) -> None:
        """Write one file section, or record why it was skipped."""
        # Re-resolve: the file may have become a link to the output since matching
        if canonicalize(entry.path) == target.canonical:
            logger.debug("Skipping %s: it is the output file", entry.path)
            report.skipped_self.append(entry.path)
            if self.on_skip_self:
                self.on_skip_self(entry.path)
            return

        try:
            source = open(entry.path, "rb")
        except OSError as e:
            self._read_denied(ReadDenied(entry.path, e.strerror or str(e)), report)
            return

        with source:
            if self.on_processing:
                self.on_processing(entry.path)
            output.write(start_marker(entry.path))
            if describe:
                size = os.fstat(source.fileno()).st_size
                output.write(description_line(entry.path, size))

            try:
                copied = _copy(source, output)
            except ReadDenied as e:
                self._read_denied(ReadDenied(entry.path, e.reason), report)
            else:
                report.written.append(entry.path)
                report.bytes_written += copied
            output.write(b"\n")

    def _read_denied(self, error: ReadDenied, report: WriteReport) -> None:
        logger.debug("Skipping %s: %s", error.path, error.reason)
        report.skipped_unreadable.append(error.path)
        if self.on_read_denied:
            self.on_read_denied(error)


def _copy(source: BinaryIO, output: BinaryIO) -> int:
    """Stream bytes verbatim; read errors surface as ReadDenied."""
    copied = 0
    while True:
        try:
            chunk = source.read(COPY_BUFFER_SIZE)
        except OSError as e:
            raise ReadDenied(source.name, e.strerror or str(e)) from e
        if not chunk:
            return copied
        output.write(chunk)
        copied += len(chunk)
