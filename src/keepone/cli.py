#!/usr/bin/env python3
"""
keepone CLI — find likely duplicate files by size and name, keep the newest one.
Preview is the default; deletion is permanent and always preceded by a preview.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from pathlib import Path
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from keepone.core.models import DeduplicationParams, DuplicateGroup, Resolution
from keepone.commands import DeduplicationCommand
from keepone.utils.formatting import parse_size
from keepone.utils.paths import detect_onedrive_root
from keepone.services.file_service import FileService, DeletionReport
from keepone.services.duplicate_service import DuplicateService
from keepone.services.report_service import ReportService
from keepone.aliases import CASE_HELP_TEXT, MATCH_RULES_TEXT, MENU_TEXT, EPILOG_TEXT


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.report_lines: List[str] = []  # everything shown to the user, for --log-file

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="keepone",
            description="keepone — find duplicate files by size and name, keep the newest copy.\n\n"
                        + MATCH_RULES_TEXT,
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "--input", "-i",
            default=None,
            type=str,
            help="Directory to scan for duplicates. Default: your OneDrive folder"
        )

        # Filtering options
        parser.add_argument(
            "--min-size", "-m",
            default="0",
            type=str,
            metavar='',
            help="Minimum file size (e.g., 500KB, 1MB). Default: 0"
        )
        parser.add_argument(
            "--max-size", "-M",
            default=None,
            type=str,
            metavar='',
            help="Maximum file size (e.g., 10MB, 1GB). Default: no limit"
        )
        parser.add_argument(
            "--extensions", "-x",
            nargs="+",
            default=[],
            type=str,
            metavar='',
            help="File extensions (space separated) to include (e.g., .jpg .png)"
        )
        parser.add_argument(
            "--excluded-dirs", '-e',
            nargs="+",
            default=[],
            type=str,
            metavar='',
            dest="excluded_dirs",
            help="Excluded/ignored directories (space separated)"
        )

        # Matching options
        case_group = parser.add_mutually_exclusive_group()
        case_group.add_argument(
            "--case-sensitive",
            dest="case_sensitive",
            action="store_const",
            const=True,
            default=None,
            help=CASE_HELP_TEXT
        )
        case_group.add_argument(
            "--ignore-case",
            dest="case_sensitive",
            action="store_const",
            const=False,
            help="Compare names and extensions case-insensitively"
        )

        # Actions
        parser.add_argument(
            "--delete",
            action="store_true",
            help="Keep the newest file per duplicate group and permanently delete the rest.\n"
                 "Always shows preview before deletion for safety."
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Skip confirmation prompt when used with --delete (for automation/scripts)"
        )
        parser.add_argument(
            "--menu",
            action="store_true",
            help="Choose between preview and deletion from an interactive menu after scanning"
        )

        # Output options
        parser.add_argument(
            "--log-file", "-l",
            default=None,
            type=str,
            metavar='',
            dest="log_file",
            help="Write the full report to this file"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed statistics, progress and debug logging"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.force and not args.delete:
            self.error_exit("--force can only be used with --delete")

        if args.menu and args.delete:
            self.error_exit("--menu cannot be combined with --delete")

        # Prevent interactive prompts in non-TTY environments
        if (args.menu or (args.delete and not args.force)) and not self.is_interactive():
            self.error_exit(
                "Cannot request interactive confirmation in non-interactive session.\n"
                "Use --delete --force to proceed without confirmation when piping output or running in scripts."
            )

        if args.input is None:
            args.input = detect_onedrive_root()
            if args.input is None:
                self.error_exit("No OneDrive folder found. Use --input to choose a directory.")

        root_path = Path(args.input).expanduser().resolve()
        if not root_path.exists():
            self.error_exit(f"Directory not found: {args.input}")
        if not root_path.is_dir():
            self.error_exit(f"Path is not a directory: {args.input}")

        try:
            min_size = parse_size(args.min_size)
            max_size = parse_size(args.max_size) if args.max_size else None
            if max_size is not None and max_size < min_size:
                self.error_exit("Maximum size cannot be less than minimum size")
        except ValueError as e:
            self.error_exit(f"Invalid size format: {e}")

        for excl_dir in args.excluded_dirs:
            excl_path = Path(excl_dir).resolve()
            if not excl_path.exists():
                self.warning(f"Excluded directory not found: {excl_dir}")
            elif not excl_path.is_dir():
                self.warning(f"Excluded path is not a directory: {excl_dir}")

    def create_params(self, args: argparse.Namespace) -> DeduplicationParams:
        """Create DeduplicationParams from CLI arguments."""
        try:
            return DeduplicationParams.from_human_readable(
                root_dir=str(Path(args.input).expanduser().resolve()),
                min_size_str=args.min_size,
                max_size_str=args.max_size,
                extensions_str=",".join(args.extensions),
                excluded_dirs=[str(Path(item.strip()).resolve()) for item in args.excluded_dirs],
                case_sensitive=args.case_sensitive,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    @staticmethod
    def stopped_flag() -> bool:
        """Check if operation should stop (placeholder for signal handling)."""
        return False

    @staticmethod
    def is_interactive() -> bool:
        return sys.stdin.isatty() and sys.stdout.isatty()

    def emit(self, lines: List[str]) -> None:
        """Show report lines on the console and keep them for the log file."""
        self.report_lines.extend(lines)
        if not self.quiet:
            for line in lines:
                print(line)

    def run_deduplication(self, params: DeduplicationParams) -> List[DuplicateGroup]:
        """Execute scan and grouping."""
        command = DeduplicationCommand()
        try:
            groups, stats = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None,
                stopped_flag=self.stopped_flag
            )
        except (RuntimeError, ValueError) as e:
            self.error_exit(f"Deduplication failed: {e}")

        if self.verbose:
            sys.stderr.write("\n")
            print(stats.print_summary())
        return groups

    def output_results(self, groups: List[DuplicateGroup]) -> None:
        """Output duplicate groups as found."""
        self.emit(ReportService.render_groups(groups))

    def preview_deletion(self, groups: List[DuplicateGroup]) -> List[Resolution]:
        """Show which file of each group is kept and which are deleted."""
        resolutions = DuplicateService.resolve_groups(groups)
        self.emit([""] + ReportService.render_resolutions(groups, resolutions))
        return resolutions

    def execute_delete(self, groups: List[DuplicateGroup], force: bool = False) -> Optional[DeletionReport]:
        """Keep the newest file per group, delete the rest. Always shows preview before deletion."""
        if not groups:
            self.emit(["No duplicate groups found."])
            return None

        resolutions = self.preview_deletion(groups)
        files_to_delete = DuplicateService.files_to_remove(resolutions)

        if force:
            print("WARNING: --force flag skips confirmation. Proceeding with deletion...")
        else:
            if not self.is_interactive():
                self.error_exit(
                    "Lost interactive terminal during operation. "
                    "Use --force to proceed in non-interactive environments."
                )
            response = input(f"Are you sure you want to permanently delete {len(files_to_delete)} files? [y/N]: ")
            if response.strip().lower() not in ("y", "yes"):
                self.emit(["Deletion cancelled by user."])
                return None

        if not self.quiet:
            print(f"\nDeleting {len(files_to_delete)} files...")
        report = FileService.delete_resolutions(resolutions)

        if self.verbose:
            for path in report.deleted:
                print(f"  deleted {os.path.basename(path)}")
        self.emit(ReportService.render_deletion(report))
        return report

    def run_menu(self, groups: List[DuplicateGroup]) -> None:
        """Interactive loop: preview, delete or exit."""
        self.output_results(groups)
        while groups:
            print(MENU_TEXT)
            try:
                choice = input("Select an option [1-3]: ").strip()
            except EOFError:
                break

            if choice == "1":
                self.preview_deletion(groups)
            elif choice == "2":
                report = self.execute_delete(groups)
                if report is not None:
                    groups = DuplicateService.remove_files_from_groups(groups, report.deleted)
            elif choice == "3":
                break
            else:
                print(f"Unknown option: {choice!r}")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"Warning: {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        if self.verbose:
            logging.getLogger("keepone").setLevel(logging.DEBUG)

        self.validate_args(args)
        params = self.create_params(args)

        self.emit([f"Scanning directory: {params.root_dir}"])
        groups = self.run_deduplication(params)

        if args.menu:
            self.run_menu(groups)
        elif args.delete:
            self.execute_delete(groups, force=args.force)
        else:
            self.output_results(groups)
            if groups:
                self.preview_deletion(groups)

        if args.log_file:
            try:
                ReportService.write_log(args.log_file, self.report_lines)
            except RuntimeError as e:
                self.error_exit(str(e))

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\nCompleted in {elapsed:.2f} seconds")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"Error: Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
