"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Turns a directory tree into FileDescriptor snapshots for the group builder.

Only regular, non-empty files that pass the size and extension filters are
reported. Symlinks, system trash, excluded directories and anything that
cannot be stat'ed are skipped with a debug message; the grouping core never
sees them.
"""

import os
import sys
import time
import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from keepone.core.models import FileDescriptor
from keepone.core.interfaces import FileScanner

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 5000  # files between two progress callbacks

# Path fragments of the OS recycle bin, per platform family
_TRASH_MARKERS = {
    "win32": ("$Recycle.Bin", "\\Recycler\\"),
    "darwin": ("/.Trash/",),
    "other": (".local/share/Trash", "/.trash/"),
}


class FileScannerImpl(FileScanner):
    """
    Recursive scanner with size, extension and excluded-directory filters.

    Args:
        root_dir: directory to walk
        min_size / max_size: inclusive byte bounds, None for no bound
        extensions: allowed extensions (".jpg"), compared lowercased; empty allows all
        excluded_dirs: directories whose subtrees are not entered
    """

    def __init__(
        self,
        root_dir: str,
        min_size: Optional[int] = None,
        max_size: Optional[int] = None,
        extensions: Optional[List[str]] = None,
        excluded_dirs: Optional[List[str]] = None
    ):
        self.root_dir = root_dir
        self.min_size = min_size
        self.max_size = max_size
        self.extensions = {ext.lower() for ext in extensions or []}
        self.excluded_dirs = [os.path.normpath(Path(d).resolve()) for d in excluded_dirs or []]

    def scan(self,
             stopped_flag: Optional[Callable[[], bool]] = None,
             progress_callback: Optional[Callable[[str, int, object], None]] = None) -> List[FileDescriptor]:
        """
        Walks the tree once and returns every accepted file.
        Returns an empty list when stopped_flag fires.

        Raises:
            RuntimeError: root_dir is missing or is not a directory.
        """
        stopped = stopped_flag or (lambda: False)
        if stopped():
            logger.debug("Scan cancelled before start")
            return []

        root = self._checked_root()
        logger.debug(f"Scanning {root} (size {self.min_size}..{self.max_size}, "
                     f"extensions {sorted(self.extensions) or 'any'})")

        started = time.time()
        accepted: List[FileDescriptor] = []
        seen = 0

        for folder, subdirs, filenames in os.walk(root, onerror=self._on_walk_error):
            if stopped():
                logger.debug("Scan interrupted")
                return []

            # Pruning subdirs in place keeps os.walk out of them
            subdirs[:] = [d for d in subdirs if self._should_enter(Path(folder, d))]

            for descriptor in self._describe_all(Path(folder), filenames):
                if descriptor is not None:
                    accepted.append(descriptor)
                seen += 1
                if progress_callback and seen % PROGRESS_EVERY == 0:
                    progress_callback("scanning", seen, None)

        if progress_callback and seen % PROGRESS_EVERY:
            progress_callback("scanning", seen, None)

        logger.debug(f"Scan finished in {time.time() - started:.2f}s: "
                     f"{len(accepted)} of {seen} files accepted")
        return accepted

    def _checked_root(self) -> Path:
        root = Path(self.root_dir).resolve()
        if not root.exists():
            problem = f"Directory does not exist: {self.root_dir}"
        elif not root.is_dir():
            problem = f"Not a directory: {self.root_dir}"
        else:
            return root
        logger.error(problem)
        raise RuntimeError(problem)

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.warning(f"Cannot read directory during scan: {error}")

    def _describe_all(self, folder: Path, filenames: Iterable[str]):
        for filename in filenames:
            yield self._describe(folder / filename)

    def _should_enter(self, path: Path) -> bool:
        if self._is_system_trash(path):
            logger.debug(f"Skipping system trash: {path}")
            return False
        if self._is_excluded(path):
            logger.debug(f"Skipping excluded directory: {path}")
            return False
        try:
            if path.is_symlink():
                logger.debug(f"Not following directory symlink: {path}")
                return False
            return os.access(path, os.R_OK | os.X_OK)
        except OSError as e:
            logger.debug(f"Skipping inaccessible directory {path}: {e}")
            return False

    @staticmethod
    def _is_system_trash(path: Path) -> bool:
        """True for locations inside the OS recycle bin; False when the path cannot be resolved."""
        try:
            resolved = str(path.resolve(strict=False))
        except (OSError, ValueError):
            return False

        family = sys.platform if sys.platform in ("win32", "darwin") else "other"
        if family == "darwin" and resolved.endswith("/.Trash"):
            return True
        return any(marker in resolved for marker in _TRASH_MARKERS[family])

    def _is_excluded(self, path: Path) -> bool:
        if not self.excluded_dirs:
            return False
        try:
            resolved = str(path.resolve(strict=False))
        except (OSError, ValueError):
            return False
        return any(resolved == d or resolved.startswith(d + os.sep) for d in self.excluded_dirs)

    def _describe(self, path: Path) -> Optional[FileDescriptor]:
        """Snapshot of one file, or None if it is filtered out or unreadable."""
        try:
            if path.is_symlink():
                logger.debug(f"Skipping symlink: {path}")
                return None
            info = path.stat()
        except OSError as e:
            logger.debug(f"Cannot stat {path}: {e}")
            return None

        reason = self._rejection(path, info.st_size)
        if reason:
            logger.debug(f"Skipping {path}: {reason}")
            return None

        return FileDescriptor(path=str(path), size=info.st_size, mtime=info.st_mtime)

    def _rejection(self, path: Path, size: int) -> str:
        """Why a file is filtered out, or an empty string if it is accepted."""
        if size == 0:
            return "empty file"
        if self.min_size is not None and size < self.min_size:
            return f"{size} bytes is below the minimum"
        if self.max_size is not None and size > self.max_size:
            return f"{size} bytes is above the maximum"
        if self.extensions and path.suffix.lower() not in self.extensions:
            return f"extension {path.suffix or '(none)'} not selected"
        return ""
