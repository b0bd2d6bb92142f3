"""
Interactive selection: the pattern prompt and the per-file confirmation pass.
"""

import logging
from typing import Tuple

from ..domain.entities import FileSet
from ..domain.ports import LinePrompt

logger = logging.getLogger(__name__)

ALL_SENTINEL = "all"
PATTERN_PROMPT = "Enter a file pattern (e.g., '*.c'), or type 'all' to select all files: "
AFFIRMATIVE_ANSWERS = frozenset({"y", "yes"})


def is_affirmative(answer: str) -> bool:
    """Only 'y' or 'yes', in any case, count as a yes."""
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS


def ask_for_pattern(prompt: LinePrompt) -> Tuple[str, ...]:
    """Ask once for a pattern; 'all' or a blank line selects every file."""
    answer = prompt(PATTERN_PROMPT).strip()
    if not answer or answer.lower() == ALL_SENTINEL:
        return ()
    return (answer,)


class SelectionFilter:
    """Narrows a file set by asking about each file in turn."""

    def __init__(self, prompt: LinePrompt):
        self.prompt = prompt
        self.declined = 0

    def apply(self, file_set: FileSet) -> FileSet:
        """Keep the entries the user confirms, in their existing order."""
        kept = []
        self.declined = 0
        for entry in file_set:
            if is_affirmative(self.prompt(f"Include {entry.path}? [y/n]: ")):
                kept.append(entry)
            else:
                logger.debug("Declined %s", entry.path)
                self.declined += 1
        return FileSet(tuple(kept))
