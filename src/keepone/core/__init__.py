"""
Core duplicate detection engine — walker, group builder and resolver.

This package contains the whole decision logic of keepone:
- FileScannerImpl: recursive directory traversal with size/extension filters
- GroupBuilder: size → exact name → copy-suffix name pattern grouping
- GroupResolver: keeps the newest file of each group, computes reclaimable space
- Models: FileDescriptor, DuplicateGroup, Resolution and configuration objects

Grouping and resolution never touch the file system — suitable for library usage.
"""

from .models import (
    FileDescriptor, DuplicateGroup, Resolution, DeduplicationParams, DeduplicationStats)
from .exceptions import InvalidInputError, InvalidGroupError
from .patterns import SuffixPattern, SUFFIX_PATTERNS, canonical_base
from .grouper import GroupBuilder, build_groups
from .resolver import GroupResolver, latest_modified, resolve
from .scanner import FileScannerImpl

__all__ = [
    "FileScannerImpl",
    "GroupBuilder",
    "GroupResolver",
    "build_groups",
    "resolve",
    "latest_modified",
    "FileDescriptor",
    "DuplicateGroup",
    "Resolution",
    "DeduplicationParams",
    "DeduplicationStats",
    "InvalidInputError",
    "InvalidGroupError",
    "SuffixPattern",
    "SUFFIX_PATTERNS",
    "canonical_base",
]
