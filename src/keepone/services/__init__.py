"""File deletion, duplicate resolution and report rendering services."""

from .duplicate_service import DuplicateService
from .file_service import FileService, DeletionReport
from .report_service import ReportService

__all__ = ["DuplicateService", "FileService", "DeletionReport", "ReportService"]
