"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the deduplication system.
These protocols enforce structural typing using Python's `typing.Protocol` to ensure
consistency across modules while maintaining flexibility and modularity.

Key Components:
---------------
- FileScanner: Interface for scanning directories and returning file descriptors.
- GroupResolverProtocol: Interface for picking the kept file of a duplicate group.
- KeepPolicy: Pairwise chooser deciding which of two descriptors survives.
"""

from typing import Protocol, List, Optional, Callable
from keepone.core.models import FileDescriptor, DuplicateGroup, Resolution


# ===== Interfaces =====

KeepPolicy = Callable[[FileDescriptor, FileDescriptor], FileDescriptor]


class FileScanner(Protocol):
    """
    Interface for scanning file systems and collecting file metadata.

    Methods:
        scan: Scans and returns a list of file descriptors.
    """
    def scan(
        self,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[FileDescriptor]:
        """
        Scan files from the configured directory.

        Args:
            stopped_flag: Function that returns True if operation should be canceled.
            progress_callback: Optional callback for reporting progress (stage, current, total).

        Returns:
            List of FileDescriptor for all scanned files matching filters.
        """
        ...


class GroupResolverProtocol(Protocol):
    """
    Interface for deciding which file of a group is kept.
    """
    def resolve(self, group: DuplicateGroup) -> Resolution:
        """Return the keep/remove decision for one group."""
        ...
