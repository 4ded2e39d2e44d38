"""
Unified command orchestrator for deduplication.
This is the SINGLE source of truth for the scan → group workflow — used by the CLI and library callers.
"""
import time
import logging
from typing import List, Optional, Callable, Tuple
from keepone.core.models import DuplicateGroup, DeduplicationStats, DeduplicationParams
from keepone.core.scanner import FileScannerImpl
from keepone.core.grouper import GroupBuilder

logger = logging.getLogger(__name__)


class DeduplicationCommand:
    """
    Orchestrates the detection workflow:
    1. Scan the root directory into FileDescriptor snapshots
    2. Build duplicate groups by size and name
    3. Collect statistics

    Usage:
        params = DeduplicationParams(root_dir="~/OneDrive")
        command = DeduplicationCommand()
        groups, stats = command.execute(
            params,
            progress_callback=cli_progress_printer,
            stopped_flag=signal_handler_check
        )
    """

    def execute(
            self,
            params: DeduplicationParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Execute detection with given parameters.

        Args:
            params: Validated deduplication parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None
            stopped_flag: () -> bool (returns True if operation should stop)

        Returns:
            Tuple of (duplicate_groups, statistics)

        Raises:
            RuntimeError: If scanning fails or finds no files
            InvalidInputError: If the scan produced an unusable descriptor
        """
        stats = DeduplicationStats()
        start_time = time.time()

        # Step 1: Scan files
        scanner = FileScannerImpl(
            root_dir=params.root_dir,
            min_size=params.min_size_bytes,
            max_size=params.max_size_bytes,
            extensions=params.extensions,
            excluded_dirs=params.excluded_dirs
        )

        stage_start = time.time()
        files = scanner.scan(
            stopped_flag=stopped_flag,
            progress_callback=progress_callback
        )
        stats.files_scanned = len(files)
        stats.update_stage("scan", len(files), time.time() - stage_start)

        if not files:
            raise RuntimeError("No files found matching filters")

        if stopped_flag and stopped_flag():
            logger.debug("Deduplication cancelled after scan")
            return [], stats

        # Step 2: Group by size and name
        stage_start = time.time()
        groups = GroupBuilder(case_sensitive=params.case_sensitive).build_groups(files)
        stats.update_stage("grouping", len(files), time.time() - stage_start)
        stats.record_groups(groups)

        if progress_callback:
            progress_callback("grouping", len(files), len(files))

        stats.total_time = time.time() - start_time
        return groups, stats
