import os
from collections import Counter
from enum import Enum
from pathlib import Path
from typing import Dict, List, Union
import logging
from dataclasses import dataclass, field

from folder_organizer.exceptions import DirectoryAccessError, InvalidDirectoryError


class EntryKind(Enum):
    """Kind of a directory entry, observed at scan time."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class DirectoryEntry:
    """Data class to hold a single top-level entry of the scanned directory."""

    path: Path
    kind: EntryKind
    name: str = field(init=False)
    extension: str = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "name", self.path.name)
        if self.kind is EntryKind.FILE:
            extension = self.path.suffix[1:].lower()
        else:
            extension = ""
        object.__setattr__(self, "extension", extension)

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def display_name(self) -> str:
        """Name safe to print: undecodable bytes are shown as \\xNN escapes."""
        return os.fsencode(self.name).decode("utf-8", "backslashreplace")


class FileSystemAccessor:
    """Handles local file system access and directory scanning."""

    def __init__(self, root_directory: Union[str, Path]):
        """Initialize the file system accessor.

        Args:
            root_directory: The directory whose immediate entries are scanned
        """
        self.root_directory = Path(root_directory)
        if not self.root_directory.exists():
            raise InvalidDirectoryError(f"Directory does not exist: {root_directory}")
        if not self.root_directory.is_dir():
            raise InvalidDirectoryError(f"Path is not a directory: {root_directory}")

        self.logger = logging.getLogger(__name__)

    def scan_directory(self) -> List[DirectoryEntry]:
        """List the immediate children of the root directory.

        The listing is read in one pass and returned as a list, so moves made
        while processing it do not feed back into the scan. Order follows the
        filesystem and is not stable.

        Returns:
            List of DirectoryEntry objects

        Raises:
            DirectoryAccessError: If the directory listing cannot be opened
        """
        self.logger.info(f"Scanning directory: {self.root_directory}")

        try:
            iterator = os.scandir(self.root_directory)
        except OSError as e:
            raise DirectoryAccessError(str(e)) from e

        entries = []
        with iterator:
            for dir_entry in iterator:
                try:
                    entries.append(self._create_entry_object(dir_entry))
                except OSError as e:
                    self.logger.debug(f"Skipping unreadable entry {dir_entry.path}: {e}")

        self.logger.info(f"Found {len(entries)} entries")
        return entries

    def _create_entry_object(self, dir_entry: os.DirEntry) -> DirectoryEntry:
        """Create a DirectoryEntry from an os.DirEntry.

        Symbolic links are classified by their target, like Path.is_dir().

        Args:
            dir_entry: Entry yielded by os.scandir

        Returns:
            DirectoryEntry object
        """
        if dir_entry.is_dir():
            kind = EntryKind.DIRECTORY
        else:
            kind = EntryKind.FILE

        return DirectoryEntry(path=self.root_directory / dir_entry.name, kind=kind)

    def get_directory_stats(self, engine) -> Dict[str, int]:
        """Get statistics about where each entry would be placed.

        Args:
            engine: OrganizationEngine used to classify the entries

        Returns:
            Dictionary with entry counts and per-category counts
        """
        entries = self.scan_directory()
        by_category = Counter()
        protected = 0

        for entry in entries:
            category = engine.determine_category(entry)
            if category is None:
                protected += 1
            else:
                by_category[category] += 1

        return {
            "total_entries": len(entries),
            "files": sum(1 for e in entries if not e.is_dir),
            "directories": sum(1 for e in entries if e.is_dir),
            "protected_directories": protected,
            "by_category": dict(by_category),
        }
