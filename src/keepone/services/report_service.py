"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/report_service.py
Plain-text rendering of duplicate groups, keep/remove decisions and deletion results.
Shared by console output and the optional log file.
"""
import time
import logging
from pathlib import Path
from typing import List

from keepone.core.models import DuplicateGroup, Resolution
from keepone.services.duplicate_service import DuplicateService
from keepone.services.file_service import DeletionReport
from keepone.utils.formatting import format_size, format_timestamp

logger = logging.getLogger(__name__)


class ReportService:

    @staticmethod
    def render_groups(groups: List[DuplicateGroup]) -> List[str]:
        """Duplicate groups as found, no keep decision."""
        if not groups:
            return ["No duplicate groups found."]

        total_files = sum(g.duplicate_count for g in groups)
        lines = [f"Found {len(groups)} duplicate groups ({total_files} files)"]
        for idx, group in enumerate(groups, 1):
            match = "same name" if group.exact_name_match else "name pattern"
            lines.append("")
            lines.append(
                f"Group {idx} | Size: {format_size(group.size)} "
                f"| Files: {group.duplicate_count} | Match: {match}"
            )
            for file in group.files:
                lines.append(f"   {file.path}")
        return lines

    @staticmethod
    def render_resolutions(groups: List[DuplicateGroup], resolutions: List[Resolution]) -> List[str]:
        """Keep/remove preview for each group, followed by the summary."""
        lines = []
        for idx, (group, resolution) in enumerate(zip(groups, resolutions), 1):
            match = "same name" if group.exact_name_match else "name pattern"
            lines.append(
                f"Group {idx} | Size: {format_size(group.size)} "
                f"| Files: {group.duplicate_count} | Match: {match}"
            )
            lines.append("-" * 60)
            kept = resolution.kept
            lines.append(f"   [KEEP] {kept.path}")
            lines.append(f"          Modified: {format_timestamp(kept.mtime)} (newest)")
            for file in resolution.removed:
                lines.append(f"   [DEL]  {file.path}")
                lines.append(f"          Modified: {format_timestamp(file.mtime)}")
            lines.append("")

        lines.extend(ReportService.render_summary(resolutions))
        return lines

    @staticmethod
    def render_summary(resolutions: List[Resolution]) -> List[str]:
        to_remove = sum(len(r.removed) for r in resolutions)
        reclaimable = DuplicateService.total_bytes_reclaimed(resolutions)
        return [
            "=" * 60,
            f"Summary: Keep 1 file per group ({len(resolutions)} files preserved, {to_remove} files to delete)",
            f"Total space to reclaim: {format_size(reclaimable)}",
        ]

    @staticmethod
    def render_deletion(report: DeletionReport) -> List[str]:
        freed = format_size(report.bytes_freed)
        if report.ok:
            return [f"Successfully deleted {len(report.deleted)} files.", f"Total space freed: {freed}"]

        lines = [
            f"Partial success: {len(report.deleted)}/{report.attempted} files deleted.",
            f"Failed to delete {len(report.failed)} file(s):",
        ]
        for path, error in report.failed[:5]:
            lines.append(f"  • {Path(path).name}: {error.split(':')[-1].strip()}")
        if len(report.failed) > 5:
            lines.append(f"  ...and {len(report.failed) - 5} more files")
        lines.append(f"Total space freed: {freed}")
        return lines

    @staticmethod
    def write_log(log_path: str, lines: List[str]) -> None:
        """Writes report lines to a log file under a timestamped header (overwrites)."""
        path = Path(log_path)
        header = f"keepone report - {time.strftime('%Y-%m-%d %H:%M:%S')}"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as f:
                f.write(header + "\n")
                f.write("\n".join(lines) + "\n")
        except OSError as e:
            raise RuntimeError(f"Failed to write log file {path}: {e}") from e
        logger.debug(f"Report written to {path}")
