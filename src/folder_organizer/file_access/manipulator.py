"""
File manipulation service for relocating entries into category folders.
"""

import sys
import logging
import json
from pathlib import Path
from typing import List, Dict, Any, Optional, Union
from dataclasses import dataclass, asdict
from datetime import datetime

from folder_organizer.file_access.local_accessor import DirectoryEntry, EntryKind

logger = logging.getLogger(__name__)

MOVED = "moved"
PLANNED = "planned"
SKIPPED = "skipped"
FAILED = "failed"


@dataclass
class FileOperation:
    """Represents a single relocation attempt."""

    entry_kind: str  # 'file' or 'directory'
    source_path: str
    target_path: str
    category: str
    timestamp: str
    status: str  # 'moved', 'planned', 'skipped' or 'failed'
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status in (MOVED, PLANNED)


class FileManipulator:
    """Service for moving entries into named container folders.

    Files and directories go through the same procedure; only the console
    messages differ. An existing destination is never overwritten.
    """

    def __init__(self, base_directory: Union[str, Path], dry_run: bool = False):
        """Initialize file manipulator.

        Args:
            base_directory: Directory holding both the entries and the
                category folders
            dry_run: Whether to report operations without touching the
                filesystem
        """
        self.base_directory = Path(base_directory)
        self.dry_run = dry_run
        self.operations_log: List[FileOperation] = []

        logger.info(
            f"FileManipulator initialized: base_dir={base_directory}, dry_run={dry_run}"
        )

    def relocate(self, entry: DirectoryEntry, category: str) -> bool:
        """Move an entry into the category folder under the base directory.

        Args:
            entry: Entry to relocate
            category: Name of the destination folder

        Returns:
            True if the entry was moved (or would be, in dry-run mode),
            False if it was skipped or the move failed
        """
        is_dir = entry.kind is EntryKind.DIRECTORY
        destination_dir = self.base_directory / category

        if not self._create_directory(destination_dir, entry, category):
            return False

        destination_path = destination_dir / entry.name

        if destination_path.exists():
            if is_dir:
                print(
                    f"[SKIP DIR] {entry.display_name} (already exists in {category})"
                )
            else:
                print(f"[SKIP] {entry.display_name} (already exists in {category})")
            self._log_operation(entry, destination_path, category, SKIPPED)
            return False

        # A container cannot be moved into itself.
        if entry.path == destination_dir:
            return False

        if is_dir:
            print(f"[{category:<12}] (Directory) {entry.display_name}")
        else:
            print(f"[{category:<12}] {entry.display_name}")

        if self.dry_run:
            self._log_operation(entry, destination_path, category, PLANNED)
            return True

        return self._move_entry(entry, destination_path, category)

    def _move_entry(
        self, entry: DirectoryEntry, destination_path: Path, category: str
    ) -> bool:
        """Rename an entry into place.

        Args:
            entry: Entry to move
            destination_path: Full target path
            category: Destination folder name

        Returns:
            True if successful
        """
        try:
            entry.path.rename(destination_path)
        except OSError as e:
            if entry.is_dir:
                print(
                    f"Error moving directory {entry.display_name}: {e}",
                    file=sys.stderr,
                )
            else:
                print(f"Error moving {entry.display_name}: {e}", file=sys.stderr)
            logger.error(f"Failed to move {entry.path}: {e}")
            self._log_operation(entry, destination_path, category, FAILED, str(e))
            return False

        logger.info(f"Moved: {entry.path} -> {destination_path}")
        self._log_operation(entry, destination_path, category, MOVED)
        return True

    def _create_directory(
        self, directory: Path, entry: DirectoryEntry, category: str
    ) -> bool:
        """Create the destination folder if it doesn't exist.

        Nothing is created in dry-run mode.

        Args:
            directory: Destination folder
            entry: Entry about to be moved there
            category: Destination folder name

        Returns:
            True if the folder exists or does not need to
        """
        if self.dry_run or directory.exists():
            return True

        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            if entry.is_dir:
                print(f"Error creating container dir: {e}", file=sys.stderr)
            else:
                print(f"Error creating dir: {e}", file=sys.stderr)
            logger.error(f"Failed to create directory {directory}: {e}")
            self._log_operation(entry, directory / entry.name, category, FAILED, str(e))
            return False

        logger.debug(f"Created directory: {directory}")
        return True

    def _log_operation(
        self,
        entry: DirectoryEntry,
        target: Path,
        category: str,
        status: str,
        error: Optional[str] = None,
    ):
        """Record an operation in the in-memory log."""
        self.operations_log.append(
            FileOperation(
                entry_kind=entry.kind.value,
                source_path=str(entry.path),
                target_path=str(target),
                category=category,
                timestamp=datetime.now().isoformat(),
                status=status,
                error=error,
            )
        )

    def get_operation_summary(self) -> Dict[str, Any]:
        """Get summary of all operations.

        Returns:
            Summary dictionary
        """
        by_status = {status: 0 for status in (MOVED, PLANNED, SKIPPED, FAILED)}
        by_category: Dict[str, int] = {}

        for op in self.operations_log:
            by_status[op.status] += 1
            if op.success:
                by_category[op.category] = by_category.get(op.category, 0) + 1

        return {
            "total_operations": len(self.operations_log),
            "successful": by_status[MOVED] + by_status[PLANNED],
            "skipped": by_status[SKIPPED],
            "failed": by_status[FAILED],
            "operations_by_category": by_category,
            "dry_run": self.dry_run,
        }

    def export_operations_log(self, output_path: Union[str, Path]):
        """Export operations log to a JSON file.

        Args:
            output_path: Path for output file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        report = {
            "base_directory": str(self.base_directory),
            "generated": datetime.now().isoformat(),
            "summary": self.get_operation_summary(),
            "operations": [asdict(op) for op in self.operations_log],
        }

        with open(output_path, "w") as f:
            json.dump(report, f, indent=2)

        logger.info(f"Operations log written to {output_path}")
