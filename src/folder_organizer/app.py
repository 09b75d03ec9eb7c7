"""
Main application controller for the folder organizer.
Scans one directory and moves its loose entries into category folders.
"""

import os
import sys
import argparse
import logging
import traceback
from pathlib import Path
from typing import Optional, Union
from dataclasses import dataclass

from folder_organizer import __version__
from folder_organizer.exceptions import (
    ConfigurationError,
    DirectoryAccessError,
    InvalidDirectoryError,
)
from folder_organizer.utils.config_manager import ConfigManager
from folder_organizer.utils.logging_config import setup_logging
from folder_organizer.file_access.local_accessor import FileSystemAccessor
from folder_organizer.file_access.manipulator import FileManipulator
from folder_organizer.organization_logic.engine import OrganizationEngine

logger = logging.getLogger(__name__)

SEPARATOR = "-" * 41


@dataclass
class OrganizationSummary:
    """Counts for a single run."""

    target: str
    dry_run: bool
    files_processed: int = 0
    folders_processed: int = 0
    skipped: int = 0
    failed: int = 0
    report_written: bool = False


def _printable(path: Path) -> str:
    return os.fsencode(str(path)).decode("utf-8", "backslashreplace")


class FolderOrganizerApp:
    """Main application controller that orchestrates folder organization."""

    def __init__(
        self,
        config_file: Optional[str] = None,
        cli_args: Optional[argparse.Namespace] = None,
    ):
        """Initialize the application with configuration.

        Args:
            config_file: Path to configuration file
            cli_args: Parsed command line arguments overriding the config
        """
        self.config_file = config_file
        self.cli_args = cli_args
        self.config_manager = None
        self.engine = None
        self.manipulator = None
        self._is_initialized = False

    def initialize(self):
        """Load configuration and build the lookup tables."""
        if self._is_initialized:
            return

        self.config_manager = ConfigManager(
            config_file=Path(self.config_file) if self.config_file else None,
            cli_args=self.cli_args,
        )
        self.engine = OrganizationEngine()

        self._is_initialized = True

    def _setup_logging(self):
        """Configure logging based on application settings."""
        try:
            setup_logging(
                log_level=self.config_manager.get("logging.level"),
                log_file=self.config_manager.get("logging.file"),
                log_format=self.config_manager.get("logging.format"),
            )
        except OSError as e:
            raise ConfigurationError(f"Cannot open log file: {e}") from e

    def _check_dry_run_outputs(self, target_dir: Path):
        """Refuse output files that would land inside the target on a dry run.

        Raises:
            ConfigurationError: If the report or log file is under target_dir
        """
        root = target_dir.resolve()
        outputs = {
            "report file": self.config_manager.get("organization.report_file"),
            "log file": self.config_manager.get("logging.file"),
        }

        for label, output in outputs.items():
            if not output:
                continue
            if Path(output).resolve().is_relative_to(root):
                raise ConfigurationError(
                    f"The {label} {output} is inside the target directory; "
                    "a dry run must not write there"
                )

    def run(
        self,
        target: Union[str, Path, None] = None,
        dry_run_override: Optional[bool] = None,
    ) -> OrganizationSummary:
        """Organize the target directory.

        Args:
            target: Directory to organize (defaults to the current directory)
            dry_run_override: Override the configured dry-run mode

        Returns:
            OrganizationSummary with the run's counters

        Raises:
            InvalidDirectoryError: If the target is not an existing directory
            DirectoryAccessError: If the directory listing cannot be read
            ConfigurationError: If the log file cannot be opened, or an
                output file lies inside the target during a dry run
        """
        if not self._is_initialized:
            self.initialize()

        target_dir = Path(target) if target is not None else Path(".")
        if dry_run_override is not None:
            dry_run = dry_run_override
        else:
            dry_run = self.config_manager.get("organization.dry_run", False)

        accessor = FileSystemAccessor(target_dir)

        if dry_run:
            self._check_dry_run_outputs(target_dir)
        self._setup_logging()

        try:
            display_target = target_dir.resolve(strict=True)
        except OSError:
            display_target = target_dir

        print(f"Target: {_printable(display_target)}")
        if dry_run:
            print("Mode:   DRY RUN (No changes will be made)")
        print(SEPARATOR)

        entries = accessor.scan_directory()

        self.manipulator = FileManipulator(target_dir, dry_run=dry_run)
        summary = OrganizationSummary(target=str(display_target), dry_run=dry_run)

        for entry in entries:
            category = self.engine.determine_category(entry)
            if category is None:
                continue

            if not self.manipulator.relocate(entry, category):
                continue

            if entry.is_dir:
                summary.folders_processed += 1
            else:
                summary.files_processed += 1

        operations = self.manipulator.get_operation_summary()
        summary.skipped = operations["skipped"]
        summary.failed = operations["failed"]

        print(SEPARATOR)
        print(
            f"Done. {summary.files_processed} files and "
            f"{summary.folders_processed} folders processed."
        )

        report_file = self.config_manager.get("organization.report_file")
        if report_file:
            try:
                self.manipulator.export_operations_log(report_file)
                summary.report_written = True
            except OSError as e:
                print(f"Error writing report {report_file}: {e}", file=sys.stderr)
                logger.error(f"Failed to write report {report_file}: {e}")

        logger.info(
            f"Run finished: {summary.files_processed} files, "
            f"{summary.folders_processed} folders, {summary.skipped} skipped, "
            f"{summary.failed} failed"
        )
        return summary


def create_argument_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="folder-organizer",
        description=(
            "Automatically organize files into folders by type. Moves unknown "
            "files to 'Others', apps to 'APPS', and loose folders to 'Folders'."
        ),
    )

    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="The directory to organize (defaults to current directory)",
    )

    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Dry run: preview changes without moving files",
    )

    parser.add_argument("--config", help="Path to configuration file", default=None)

    parser.add_argument(
        "--report", help="Write a JSON log of all operations to this file", default=None
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
        default=None,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv=None):
    """Main entry point for the application."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    target = Path(args.path) if args.path else Path(".")
    if not target.is_dir():
        print(
            f"Error: '{_printable(target)}' is not a valid directory.", file=sys.stderr
        )
        sys.exit(1)

    app = FolderOrganizerApp(config_file=args.config, cli_args=args)

    try:
        app.initialize()
        app.run(target=target)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except InvalidDirectoryError as e:
        print(
            f"Error: '{_printable(target)}' is not a valid directory.", file=sys.stderr
        )
        logger.debug(f"Target rejected: {e}")
        sys.exit(1)
    except DirectoryAccessError as e:
        print(f"Error reading directory: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("Interrupted by user", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        print(f"Error: Application failed: {e}", file=sys.stderr)
        if args.verbose:
            traceback.print_exc()
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
