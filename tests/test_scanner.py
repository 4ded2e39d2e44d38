"""
Unit tests for FileScannerImpl.
Verifies file discovery with size/extension filters, error handling, and edge cases.
"""
import os
import sys
import pytest
from pathlib import Path
from keepone.core.scanner import FileScannerImpl


class TestFileScannerImpl:
    """Test file scanning with filters and error handling."""

    def test_scans_all_non_empty_files(self, test_files, temp_dir):
        scanner = FileScannerImpl(root_dir=str(temp_dir))
        files = scanner.scan(stopped_flag=lambda: False)

        # 9 files created, empty.txt filtered out (0 bytes)
        assert len(files) == 8
        assert all(f.size > 0 for f in files)
        assert not any(f.name == "empty.txt" for f in files)

    def test_descriptors_carry_absolute_path_size_and_mtime(self, test_files, temp_dir):
        files = FileScannerImpl(root_dir=str(temp_dir)).scan()
        by_path = {f.path: f for f in files}

        report = by_path[str(test_files["report_backup"].resolve())]
        assert Path(report.path).is_absolute()
        assert report.name == "Report.docx"
        assert report.extension == ".docx"
        assert report.size == 100
        assert report.mtime == pytest.approx(2_000_000)

    def test_filters_by_min_size(self, test_files, temp_dir):
        files = FileScannerImpl(root_dir=str(temp_dir), min_size=51).scan()

        # Only the 100-byte files remain: 2x Report.docx + ignore.tmp
        assert len(files) == 3
        assert all(f.size >= 51 for f in files)

    def test_filters_by_max_size(self, test_files, temp_dir):
        files = FileScannerImpl(root_dir=str(temp_dir), max_size=50).scan()

        assert len(files) == 5
        assert all(f.size <= 50 for f in files)

    def test_filters_by_extension_case_insensitively(self, test_files, temp_dir):
        files = FileScannerImpl(root_dir=str(temp_dir), extensions=[".JPG"]).scan()

        assert len(files) == 4
        assert all(f.extension == ".jpg" for f in files)

    def test_scans_subdirectories_recursively(self, test_files, temp_dir):
        files = FileScannerImpl(root_dir=str(temp_dir)).scan()

        subdir_files = [f for f in files if "backup" in Path(f.path).parts]
        assert len(subdir_files) == 1

    def test_excluded_directories_are_skipped(self, test_files, temp_dir):
        scanner = FileScannerImpl(root_dir=str(temp_dir), excluded_dirs=[str(temp_dir / "backup")])
        files = scanner.scan()

        assert not any("backup" in Path(f.path).parts for f in files)
        assert len(files) == 7

    @pytest.mark.skipif(sys.platform == "win32", reason="Symlinks need privileges on Windows")
    def test_skips_symlinks(self, test_files, temp_dir):
        link = temp_dir / "link.docx"
        link.symlink_to(test_files["report"])

        files = FileScannerImpl(root_dir=str(temp_dir)).scan()

        assert not any(f.name == "link.docx" for f in files)

    def test_raises_for_missing_root(self, temp_dir):
        scanner = FileScannerImpl(root_dir=str(temp_dir / "missing"))
        with pytest.raises(RuntimeError, match="Directory does not exist"):
            scanner.scan()

    def test_raises_for_file_root(self, test_files):
        scanner = FileScannerImpl(root_dir=str(test_files["report"]))
        with pytest.raises(RuntimeError, match="Not a directory"):
            scanner.scan()

    def test_stopped_before_start_returns_empty(self, test_files, temp_dir):
        files = FileScannerImpl(root_dir=str(temp_dir)).scan(stopped_flag=lambda: True)
        assert files == []

    def test_progress_callback_reports_processed_files(self, test_files, temp_dir):
        events = []
        FileScannerImpl(root_dir=str(temp_dir)).scan(
            progress_callback=lambda stage, current, total: events.append((stage, current, total))
        )

        assert events
        assert events[-1] == ("scanning", 9, None)

    def test_unreadable_file_is_skipped(self, test_files, temp_dir, monkeypatch):
        original_stat = Path.stat

        def flaky_stat(self, *args, **kwargs):
            if self.name == "Invoice.jpg":
                raise PermissionError("denied")
            return original_stat(self, *args, **kwargs)

        monkeypatch.setattr(Path, "stat", flaky_stat)
        files = FileScannerImpl(root_dir=str(temp_dir)).scan()

        assert not any(f.name == "Invoice.jpg" for f in files)
        assert len(files) == 7


class TestSystemTrashDetection:

    @pytest.mark.skipif(not sys.platform.startswith("linux"), reason="freedesktop trash layout")
    def test_linux_trash_path(self, tmp_path):
        assert FileScannerImpl._is_system_trash(tmp_path / ".local" / "share" / "Trash" / "files")

    def test_regular_dir_is_not_trash(self, tmp_path):
        assert not FileScannerImpl._is_system_trash(tmp_path / "documents")
