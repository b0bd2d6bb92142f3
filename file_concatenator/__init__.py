"""
File Concatenator

Concatenates files selected by name patterns into a single output file,
with per-file markers, optional size descriptions and interactive selection.
"""

__version__ = "1.0.0"
__description__ = "Concatenate files selected by glob patterns into one output file"

# Public API exports
from .application.concatenate_files import ConcatenateFilesUseCase
from .domain.entities import (
    ConcatenationResult,
    ConcatSettings,
    FileEntry,
    FileSet,
    OutputTarget,
    Pattern,
    RunOptions,
)
from .domain.errors import (
    ConcatError,
    DirectoryCreateFailed,
    EmptySelection,
    OutputConflict,
)
from .infrastructure.config_loader import ConfigurationError, load_settings

__all__ = [
    "ConcatenateFilesUseCase",
    "RunOptions",
    "Pattern",
    "FileEntry",
    "FileSet",
    "OutputTarget",
    "ConcatenationResult",
    "ConcatSettings",
    "ConcatError",
    "OutputConflict",
    "DirectoryCreateFailed",
    "EmptySelection",
    "load_settings",
    "ConfigurationError",
]
