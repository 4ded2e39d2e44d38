"""
Integration tests for DeduplicationCommand — the orchestration layer between CLI and core.
Verifies correct wiring of scanner → grouper with progress/cancellation support.
"""
import pytest
from pathlib import Path
from keepone import DeduplicationParams
from keepone import DeduplicationCommand


def names(group):
    return sorted(Path(f.path).name for f in group.files)


class TestDeduplicationCommand:
    """Test command orchestration logic (scanner + grouper integration)."""

    def test_execute_returns_groups_and_stats(self, test_files, temp_dir):
        """
        Command must orchestrate the full pipeline:
        scan → group by size and name → return results.
        """
        params = DeduplicationParams(root_dir=str(temp_dir))

        command = DeduplicationCommand()
        groups, stats = command.execute(params)

        # Report.docx in two folders + the three Photo variants
        assert len(groups) == 2
        by_kind = {g.exact_name_match: g for g in groups}
        assert names(by_kind[True]) == ["Report.docx", "Report.docx"]
        assert names(by_kind[False]) == ["Photo (1).jpg", "Photo(2).jpg", "Photo.jpg"]

        assert stats.files_scanned == 8
        assert stats.exact_groups == 1
        assert stats.fuzzy_groups == 1
        assert stats.files_in_groups == 5
        assert "scan" in stats.stage_stats
        assert "grouping" in stats.stage_stats

    def test_unrelated_and_other_extension_files_not_grouped(self, test_files, temp_dir):
        groups, _ = DeduplicationCommand().execute(DeduplicationParams(root_dir=str(temp_dir)))

        grouped = {Path(f.path).name for g in groups for f in g.files}
        assert "Invoice.jpg" not in grouped
        assert "Photo.png" not in grouped
        assert "ignore.tmp" not in grouped

    def test_filters_are_passed_to_scanner(self, test_files, temp_dir):
        params = DeduplicationParams(root_dir=str(temp_dir), extensions=[".docx"])

        groups, stats = DeduplicationCommand().execute(params)

        assert stats.files_scanned == 2
        assert len(groups) == 1
        assert groups[0].exact_name_match

    def test_excluded_dirs_break_up_groups(self, test_files, temp_dir):
        params = DeduplicationParams(
            root_dir=str(temp_dir),
            excluded_dirs=[str(temp_dir / "backup")]
        )

        groups, _ = DeduplicationCommand().execute(params)

        assert len(groups) == 1
        assert not groups[0].exact_name_match

    def test_execute_raises_error_on_empty_scan(self, temp_dir):
        """
        Command must raise RuntimeError when scanner finds zero files.
        """
        params = DeduplicationParams(root_dir=str(temp_dir), extensions=[".txt"])

        with pytest.raises(RuntimeError, match="No files found matching filters"):
            DeduplicationCommand().execute(params)

    def test_execute_invokes_progress_callback(self, test_files, temp_dir):
        events = []

        DeduplicationCommand().execute(
            DeduplicationParams(root_dir=str(temp_dir)),
            progress_callback=lambda stage, current, total: events.append((stage, current, total))
        )

        stages = [e[0] for e in events]
        assert "scanning" in stages
        assert events[-1] == ("grouping", 8, 8)

    def test_execute_respects_stopped_flag(self, test_files, temp_dir):
        """Cancellation before the scan yields an empty scan, which is reported as an error."""
        with pytest.raises(RuntimeError, match="No files found"):
            DeduplicationCommand().execute(
                DeduplicationParams(root_dir=str(temp_dir)),
                stopped_flag=lambda: True
            )

    def test_case_policy_is_forwarded(self, temp_dir):
        (temp_dir / "a").mkdir()
        (temp_dir / "b").mkdir()
        (temp_dir / "a" / "Notes.TXT").write_bytes(b"x" * 10)
        (temp_dir / "b" / "notes.txt").write_bytes(b"x" * 10)

        strict, _ = DeduplicationCommand().execute(
            DeduplicationParams(root_dir=str(temp_dir), case_sensitive=True)
        )
        relaxed, _ = DeduplicationCommand().execute(
            DeduplicationParams(root_dir=str(temp_dir), case_sensitive=False)
        )

        assert strict == []
        assert len(relaxed) == 1
        assert relaxed[0].exact_name_match
