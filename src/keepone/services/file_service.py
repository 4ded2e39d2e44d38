"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Deletion executor. Removes files permanently and tallies per-path outcomes.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from keepone.core.models import FileDescriptor, Resolution

logger = logging.getLogger(__name__)


@dataclass
class DeletionReport:
    """Outcome of a deletion batch."""
    deleted: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)  # (path, reason)
    bytes_freed: int = 0

    @property
    def attempted(self) -> int:
        return len(self.deleted) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed


class FileService:
    """
    File removal for confirmed duplicates.
    Deletion is permanent; there is no trash or undo.
    """

    @staticmethod
    def delete_file(file_path: str) -> None:
        """Deletes a single file."""
        path = Path(file_path)

        if not path.is_file():
            raise RuntimeError(f"File not found: {path}")

        try:
            path.unlink()
        except OSError as e:
            raise RuntimeError(f"Failed to delete file: {e}") from e

    @classmethod
    def delete_files(cls, file_paths: List[str]) -> DeletionReport:
        """Deletes multiple files, continuing past individual failures."""
        report = DeletionReport()
        for path in file_paths:
            try:
                size = Path(path).stat().st_size if Path(path).is_file() else 0
                cls.delete_file(path)
            except (RuntimeError, OSError) as e:
                logger.warning(f"Failed to delete {path}: {e}")
                report.failed.append((path, str(e)))
                continue
            report.deleted.append(path)
            report.bytes_freed += size
        return report

    @classmethod
    def delete_resolutions(cls, resolutions: List[Resolution]) -> DeletionReport:
        """
        Deletes every removed file of the given resolutions.
        Each file is re-checked against its scan snapshot first; files that
        vanished or changed size are reported as failures and left alone.
        """
        verified = []
        stale = []
        for resolution in resolutions:
            for descriptor in resolution.removed:
                reason = cls.check_unchanged(descriptor)
                if reason:
                    logger.warning(f"Skipping {descriptor.path}: {reason}")
                    stale.append((descriptor.path, reason))
                else:
                    verified.append(descriptor.path)

        report = cls.delete_files(verified)
        report.failed = stale + report.failed
        return report

    @staticmethod
    def check_unchanged(descriptor: FileDescriptor) -> str:
        """Returns an empty string if the file still matches its snapshot, else the reason."""
        path = Path(descriptor.path)
        try:
            if not path.is_file():
                return "file no longer exists"
            current_size = path.stat().st_size
        except OSError as e:
            return f"cannot read file: {e}"

        if current_size != descriptor.size:
            return f"size changed since scan ({descriptor.size} -> {current_size} bytes)"
        return ""
