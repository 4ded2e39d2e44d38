"""
Shared fixtures for keepone tests.
Creates isolated temporary directories with controlled test files.
"""
import os
import pytest
import tempfile
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so 'keepone' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from keepone.core.models import FileDescriptor


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def write_file(path: Path, size: int, mtime: float = None) -> Path:
    """Write `size` bytes to path, optionally forcing its modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for name/size deduplication scenarios:
    - same name in two folders (exact-name duplicates, newer copy in backup/)
    - copy-suffixed photos (name-pattern duplicates)
    - same-size file with an unrelated name (not a duplicate)
    - same stem, different extension (not a duplicate)
    - empty file and .tmp file (filtered by scanner settings)
    """
    files = {}

    files["report"] = write_file(temp_dir / "Report.docx", 100, mtime=1_000_000)
    files["report_backup"] = write_file(temp_dir / "backup" / "Report.docx", 100, mtime=2_000_000)

    files["photo"] = write_file(temp_dir / "Photo.jpg", 50, mtime=1_000_000)
    files["photo_1"] = write_file(temp_dir / "Photo (1).jpg", 50, mtime=3_000_000)
    files["photo_2"] = write_file(temp_dir / "Photo(2).jpg", 50, mtime=2_000_000)

    files["unrelated"] = write_file(temp_dir / "Invoice.jpg", 50, mtime=1_000_000)
    files["other_ext"] = write_file(temp_dir / "Photo.png", 50, mtime=1_000_000)

    files["empty"] = temp_dir / "empty.txt"
    files["empty"].write_bytes(b"")

    files["filtered"] = write_file(temp_dir / "ignore.tmp", 100, mtime=1_000_000)

    return files


@pytest.fixture
def make_descriptor():
    """Factory for in-memory descriptors: make_descriptor("Photo (1).jpg", 50, mtime=2)."""
    def _make(name: str, size: int = 100, mtime: float = 0.0, folder: str = "/data") -> FileDescriptor:
        return FileDescriptor(path=f"{folder}/{name}", size=size, mtime=mtime)
    return _make
