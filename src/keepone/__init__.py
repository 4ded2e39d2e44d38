"""
keepone — duplicate file finder driven by size and file name heuristics.

Core features:
- Groups files of equal size by identical name, then by copy-suffix patterns
  ("Photo (1).jpg", "Report - Copy.docx", "Data_1.xlsx", "Notes_copy.txt")
- Keeps the most recently modified file of each group
- Preview by default; permanent deletion only on request
- No file contents are read
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("keepone")
except Exception:
    import tomllib
    from pathlib import Path

    with open(Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Public API: only what users should import directly
from keepone.commands import DeduplicationCommand
from keepone.core import (
    FileDescriptor, DuplicateGroup, Resolution, DeduplicationParams,
    GroupBuilder, GroupResolver, build_groups, resolve,
    InvalidInputError, InvalidGroupError)
from keepone.services import DuplicateService, FileService, ReportService

__all__ = [
    "DeduplicationCommand",
    "DeduplicationParams",
    "FileDescriptor",
    "DuplicateGroup",
    "Resolution",
    "GroupBuilder",
    "GroupResolver",
    "build_groups",
    "resolve",
    "InvalidInputError",
    "InvalidGroupError",
    "DuplicateService",
    "FileService",
    "ReportService",
    "__version__",
]
