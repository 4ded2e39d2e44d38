"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for name/size based duplicate detection.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple, Union
import os


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileDescriptor:
    """
    Immutable snapshot of a single file taken at scan time.
    The snapshot may go stale; callers re-verify before destructive actions.
    """
    path: str
    size: int  # in bytes
    mtime: float  # last-modified timestamp (seconds since epoch)
    name: Optional[str] = None
    extension: Optional[str] = None

    def __post_init__(self):
        """Derive basename and extension from path if not provided."""
        if self.name is None:
            object.__setattr__(self, "name", os.path.basename(self.path))

        if self.extension is None:
            _, ext = os.path.splitext(self.name)
            object.__setattr__(self, "extension", ext)  # case preserved: ".JPG" stays ".JPG"

    @property
    def stem(self) -> str:
        """File name without its extension."""
        if self.extension and self.name.endswith(self.extension):
            return self.name[:-len(self.extension)]
        return self.name

    def __repr__(self):
        return f"<FileDescriptor path={self.path}, size={self.size}>"


@dataclass
class DuplicateGroup:
    """
    A group of files believed to be duplicates of one another.
    All files in the group share the same size and extension.
    exact_name_match tells whether membership came from identical names
    or from copy-suffix pattern matching.
    """
    size: int
    files: List[FileDescriptor]
    exact_name_match: bool = False

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.files)

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def __repr__(self):
        kind = "exact" if self.exact_name_match else "fuzzy"
        return f"<DuplicateGroup size={self.size}, count={len(self.files)}, match={kind}>"


@dataclass(frozen=True)
class Resolution:
    """Keep/remove decision for one duplicate group."""
    kept: FileDescriptor
    removed: Tuple[FileDescriptor, ...]
    bytes_reclaimed: int

    @property
    def removed_paths(self) -> List[str]:
        return [f.path for f in self.removed]


class DeduplicationStats:
    """
    Statistics collected during a deduplication run.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.files_scanned: int = 0
        self.exact_groups: int = 0
        self.fuzzy_groups: int = 0
        self.files_in_groups: int = 0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}

    def update_stage(self, stage_name: str, files_processed: int, duration: float) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {"files": 0, "time": 0.0}
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

    def record_groups(self, groups: List[DuplicateGroup]) -> None:
        for group in groups:
            if group.exact_name_match:
                self.exact_groups += 1
            else:
                self.fuzzy_groups += 1
            self.files_in_groups += len(group.files)

    @property
    def total_groups(self) -> int:
        return self.exact_groups + self.fuzzy_groups

    def print_summary(self) -> str:
        lines = [
            "Deduplication Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s",
            f"Files scanned: {self.files_scanned}",
            f"Groups: {self.total_groups} ({self.exact_groups} exact name / {self.fuzzy_groups} name pattern)",
            f"Files in groups: {self.files_in_groups}",
            "",
            "Stage: FILES / TIME",
        ]
        for stage, data in self.stage_stats.items():
            lines.append(f"{stage}: {data['files']} / {data['time']:.3f}s")

        return "\n".join(lines)


"""
DTO for deduplication parameters with built-in validation.
Interface-agnostic — used by the CLI and library callers alike.
"""
from keepone.utils.formatting import parse_size

@dataclass
class DeduplicationParams:
    """Parameters for a scan + grouping run, validated on creation."""
    root_dir: str
    min_size_bytes: int = 0
    max_size_bytes: Optional[int] = None
    extensions: List[str] = field(default_factory=list)
    excluded_dirs: List[str] = field(default_factory=list)
    case_sensitive: Optional[bool] = None  # None = platform default

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.min_size_bytes < 0:
            raise ValueError("Minimum size cannot be negative")

        if self.max_size_bytes is not None and self.max_size_bytes < self.min_size_bytes:
            raise ValueError("Maximum size cannot be less than minimum size")

        # Normalize extensions: ensure they start with dot and are lowercase
        normalized = []
        for ext in self.extensions:
            ext = ext.strip().lower()
            if ext and not ext.startswith('.'):
                ext = f".{ext}"
            if ext:
                normalized.append(ext)
        self.extensions = normalized

    @staticmethod
    def from_human_readable(
            root_dir: str,
            min_size_str: str = "0",
            max_size_str: Optional[str] = None,
            extensions_str: str = "",
            excluded_dirs: Optional[List[str]] = None,
            case_sensitive: Optional[bool] = None,
    ) -> 'DeduplicationParams':
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing.
        """
        min_size = parse_size(min_size_str)
        max_size = parse_size(max_size_str) if max_size_str else None

        ext_list = [
            ext.strip() for ext in extensions_str.split(",") if ext.strip()
        ] if extensions_str else []

        return DeduplicationParams(
            root_dir=root_dir,
            min_size_bytes=min_size,
            max_size_bytes=max_size,
            extensions=ext_list,
            excluded_dirs=excluded_dirs or [],
            case_sensitive=case_sensitive,
        )
