"""
Domain entities for the file concatenator.
Patterns, resolved files, the output target and run configuration.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_OUTPUT = "concat.o"


def canonicalize(path: str) -> str:
    """Absolute, symlink-resolved form of a path."""
    return os.path.realpath(os.path.abspath(path))


@dataclass(frozen=True)
class Pattern:
    """A directory component plus a name glob, split off the raw string."""

    raw: str
    directory: str = "."
    name_glob: str = "*"

    @classmethod
    def parse(cls, raw: str) -> "Pattern":
        """Split a raw pattern into its directory and name parts."""
        directory, name_glob = os.path.split(raw)
        return cls(
            raw=raw,
            directory=directory or ".",
            name_glob=name_glob or "*",
        )

    @property
    def has_directory(self) -> bool:
        """Whether the raw pattern named a directory explicitly."""
        return bool(os.path.dirname(self.raw))

    def path_for(self, name: str) -> str:
        """Build the raw path of a matched file name."""
        if not self.has_directory:
            return name
        return os.path.join(os.path.dirname(self.raw), name)


@dataclass(frozen=True)
class FileEntry:
    """A matched file, identified by its canonical path."""

    path: str
    canonical: str

    @classmethod
    def from_path(cls, path: str) -> "FileEntry":
        return cls(path=path, canonical=canonicalize(path))


@dataclass(frozen=True)
class FileSet:
    """Sorted, de-duplicated files selected for one run."""

    entries: Tuple[FileEntry, ...] = ()

    def __iter__(self) -> Iterator[FileEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def paths(self) -> List[str]:
        """Raw paths in order."""
        return [entry.path for entry in self.entries]


@dataclass(frozen=True)
class OutputTarget:
    """The destination file, resolved once before anything is written."""

    path: str
    canonical: str

    @classmethod
    def from_path(cls, path: str) -> "OutputTarget":
        return cls(path=path, canonical=canonicalize(path))

    @property
    def parent(self) -> str:
        """Directory that must exist before the output can be created."""
        return os.path.dirname(os.path.abspath(self.path))


class RunOptions(BaseModel):
    """Resolved options for one run, as handed over by the command line."""

    model_config = ConfigDict(frozen=True)

    patterns: Tuple[str, ...] = Field(default=(), description="Empty means all files")
    output: str = Field(default=DEFAULT_OUTPUT, min_length=1)
    interactive: bool = False
    describe: bool = False


class ConcatSettings(BaseModel):
    """User settings read from the optional YAML file."""

    model_config = ConfigDict(extra="forbid")

    default_output: str = Field(default=DEFAULT_OUTPUT)
    describe: bool = Field(default=False)
    color: bool = Field(default=True)
    log_level: str = Field(default="WARNING")


class RunOutcome(str, Enum):
    """How a run ended, when it did not fail."""

    COMPLETED = "completed"
    ALL_DECLINED = "all_declined"


class WriteReport(BaseModel):
    """What the writer did with each entry of the file set."""

    written: List[str] = Field(default_factory=list)
    skipped_self: List[str] = Field(default_factory=list)
    skipped_unreadable: List[str] = Field(default_factory=list)
    bytes_written: int = 0

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_self) + len(self.skipped_unreadable)


class ConcatenationResult(BaseModel):
    """Result of a concatenation run."""

    output_file: str
    outcome: RunOutcome = RunOutcome.COMPLETED
    matched_count: int = 0
    declined_count: int = 0
    missing_directories: List[str] = Field(default_factory=list)
    unreadable_directories: List[str] = Field(default_factory=list)
    report: WriteReport = Field(default_factory=WriteReport)
    execution_time_seconds: float = 0.0

    @property
    def processed_count(self) -> int:
        return len(self.report.written)

    def get_summary(self) -> str:
        """Get a human-readable summary of the results."""
        if self.outcome is RunOutcome.ALL_DECLINED:
            return (
                f"No files selected ({self.declined_count} declined), "
                f"{self.output_file} holds only the end marker"
            )
        summary = (
            f"Processed {self.processed_count} files "
            f"({self.report.bytes_written} bytes) into {self.output_file}"
        )
        if self.report.skipped_count:
            summary += f", skipped {self.report.skipped_count}"
        if self.declined_count:
            summary += f", declined {self.declined_count}"
        return summary + f" in {self.execution_time_seconds:.2f}s"
