"""
File discovery infrastructure.
Resolves name patterns to files, one directory level deep, and builds the
sorted, de-duplicated file set.
"""

import logging
import os
import re
from functools import lru_cache
from typing import Iterable, List, Set, Tuple

from ..domain.entities import FileEntry, FileSet, Pattern
from ..domain.errors import (
    DirectoryListFailed,
    EmptySelection,
    PatternDirectoryMissing,
    PatternDirectoryUnreadable,
)

logger = logging.getLogger(__name__)


@lru_cache(maxsize=128)
def glob_to_regex(name_glob: str) -> "re.Pattern[str]":
    """Compile a name glob where only '*' and '?' are special."""
    parts = []
    for char in name_glob:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


def _regular_file_names(directory: str) -> List[str]:
    """Names of the regular files directly inside a directory."""
    names = []
    with os.scandir(directory) as entries:
        for entry in entries:
            try:
                # Follows symlinks: a link to a regular file counts
                if entry.is_file():
                    names.append(entry.name)
            except OSError:
                continue
    return names


def list_all_files(directory: str = ".") -> List[FileEntry]:
    """List every regular file directly inside the working directory."""
    try:
        names = _regular_file_names(directory)
    except OSError as e:
        raise DirectoryListFailed(directory, e.strerror or str(e)) from e
    if directory in (".", ""):
        paths = names
    else:
        paths = [os.path.join(directory, name) for name in names]
    logger.debug("All-files listing of %s found %d files", directory, len(paths))
    return [FileEntry.from_path(path) for path in paths]


class PatternMatcher:
    """Matches one pattern against the direct children of its directory."""

    def match(self, pattern: Pattern) -> List[FileEntry]:
        """Return the regular files whose name matches the pattern's glob."""
        if not os.path.isdir(pattern.directory):
            raise PatternDirectoryMissing(pattern.raw, pattern.directory)

        regex = glob_to_regex(pattern.name_glob)
        try:
            names = _regular_file_names(pattern.directory)
        except (FileNotFoundError, NotADirectoryError) as e:
            # Directory vanished between the check and the listing
            raise PatternDirectoryMissing(pattern.raw, pattern.directory) from e
        except OSError as e:
            raise PatternDirectoryUnreadable(
                pattern.raw, pattern.directory, e.strerror or str(e)
            ) from e

        matches = [
            FileEntry.from_path(pattern.path_for(name))
            for name in names
            if regex.fullmatch(name)
        ]
        logger.debug("Pattern %r matched %d files", pattern.raw, len(matches))
        return matches

    def match_all(self, patterns: Iterable[Pattern]) -> List[List[FileEntry]]:
        """Match several patterns, one result group per pattern."""
        return [self.match(pattern) for pattern in patterns]


class FileSetBuilder:
    """Flattens match groups into a sorted file set without duplicates."""

    def build(
        self,
        groups: Iterable[Iterable[FileEntry]],
        patterns: Tuple[str, ...] = (),
    ) -> FileSet:
        """Sort by raw path and keep the first entry per canonical path."""
        flattened = [entry for group in groups for entry in group]
        flattened.sort(key=lambda entry: entry.path)

        seen: Set[str] = set()
        unique = []
        for entry in flattened:
            if entry.canonical in seen:
                logger.debug("Dropping duplicate %s", entry.path)
                continue
            seen.add(entry.canonical)
            unique.append(entry)

        if not unique:
            raise EmptySelection(patterns)

        return FileSet(tuple(unique))
