"""
Error taxonomy for the file concatenator.

Fatal errors abort the run with a non-zero exit status. Per-item errors are
raised inside the infrastructure layer and caught by their callers, which
count them and keep going.
"""


class ConcatError(Exception):
    """Base class for every error raised by the concatenation pipeline."""

    fatal = True

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OutputConflict(ConcatError):
    """Raised when the output path already exists as any filesystem entry."""

    def __init__(self, path: str):
        super().__init__(f"Output file '{path}' already exists")
        self.path = path


class DirectoryCreateFailed(ConcatError):
    """Raised when the output's parent directory cannot be created."""

    def __init__(self, directory: str, reason: str):
        super().__init__(f"Could not create directory '{directory}': {reason}")
        self.directory = directory
        self.reason = reason


class EmptySelection(ConcatError):
    """Raised when no pattern matched any file."""

    def __init__(self, patterns=()):
        if patterns:
            shown = ", ".join(f"'{p}'" for p in patterns)
            message = f"No files matched the given patterns: {shown}"
        else:
            message = "No files found in the working directory"
        super().__init__(message)
        self.patterns = tuple(patterns)


class OutputWriteFailed(ConcatError):
    """Raised when the output file cannot be opened or written."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to write output file {path}: {reason}")
        self.path = path
        self.reason = reason


class PatternDirectoryMissing(ConcatError):
    """The directory part of a pattern does not exist."""

    fatal = False

    def __init__(self, pattern: str, directory: str):
        super().__init__(
            f"Directory '{directory}' of pattern '{pattern}' does not exist"
        )
        self.pattern = pattern
        self.directory = directory


class ReadDenied(ConcatError):
    """A selected file could not be read at write time."""

    fatal = False

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot read '{path}': {reason}")
        self.path = path
        self.reason = reason


class PatternDirectoryUnreadable(ConcatError):
    """The directory part of a pattern exists but cannot be listed."""

    fatal = False

    def __init__(self, pattern: str, directory: str, reason: str):
        super().__init__(
            f"Cannot list directory '{directory}' of pattern '{pattern}': {reason}"
        )
        self.pattern = pattern
        self.directory = directory
        self.reason = reason


class DirectoryListFailed(ConcatError):
    """Raised when the working directory cannot be listed in all-files mode."""

    def __init__(self, directory: str, reason: str):
        super().__init__(f"Cannot list directory '{directory}': {reason}")
        self.directory = directory
        self.reason = reason
