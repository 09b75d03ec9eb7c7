"""
Organization logic engine for deciding where each entry belongs.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from folder_organizer.file_access.local_accessor import DirectoryEntry
from folder_organizer.organization_logic.categories import (
    FOLDERS,
    CategoryTable,
    ProtectedNames,
)

logger = logging.getLogger(__name__)


class OrganizationEngine:
    """Engine for determining the destination category of directory entries."""

    def __init__(
        self,
        category_table: Optional[CategoryTable] = None,
        protected_names: Optional[ProtectedNames] = None,
    ):
        """Initialize organization engine.

        Args:
            category_table: Extension lookup table (defaults to the built-in one)
            protected_names: Folder names left in place (defaults to the
                built-in set)
        """
        self.category_table = (
            category_table if category_table is not None else CategoryTable()
        )
        self.protected_names = (
            protected_names if protected_names is not None else ProtectedNames()
        )

    def determine_category(self, entry: DirectoryEntry) -> Optional[str]:
        """Determine the destination category for an entry.

        Args:
            entry: Scanned directory entry

        Returns:
            Category folder name, or None when the entry is a protected
            directory that must stay where it is
        """
        if entry.is_dir:
            if self.protected_names.is_protected(entry.name):
                logger.debug(f"Leaving protected folder in place: {entry.name}")
                return None
            return FOLDERS

        return self.category_table.category_for(entry.extension)

    def plan(
        self, entries: Iterable[DirectoryEntry]
    ) -> List[Tuple[DirectoryEntry, str]]:
        """Pair every movable entry with its destination category.

        Protected directories are left out.
        """
        planned = []
        for entry in entries:
            category = self.determine_category(entry)
            if category is not None:
                planned.append((entry, category))
        return planned

    def get_category_summary(self) -> Dict[str, List[str]]:
        """Extensions grouped by category, sorted within each group."""
        summary: Dict[str, List[str]] = {}
        for extension, category in self.category_table.items():
            summary.setdefault(category, []).append(extension)
        return {category: sorted(exts) for category, exts in summary.items()}
