"""
Extension-to-category table and the set of protected folder names.
"""

import logging
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

OTHERS = "Others"
FOLDERS = "Folders"

DEFAULT_CATEGORY_GROUPS: List[Tuple[str, List[str]]] = [
    (
        "images",
        ["jpg", "jpeg", "png", "gif", "bmp", "svg", "webp", "ico", "tiff", "heic"],
    ),
    ("documents", ["pdf", "doc", "docx", "txt", "rtf", "odt", "md"]),
    ("spreadsheets", ["xls", "xlsx", "csv", "ods"]),
    ("presentations", ["ppt", "pptx", "odp", "key"]),
    ("archives", ["zip", "rar", "tar", "gz", "bz2", "7z", "iso"]),
    ("audio", ["mp3", "wav", "flac", "aac", "ogg", "m4a"]),
    ("video", ["mp4", "mkv", "avi", "mov", "wmv", "webm"]),
    (
        "code",
        [
            "rs",
            "py",
            "js",
            "ts",
            "java",
            "c",
            "cpp",
            "go",
            "rb",
            "php",
            "html",
            "css",
            "json",
        ],
    ),
    (
        "APPS",
        ["exe", "msi", "dmg", "app", "deb", "rpm", "apk", "appimage", "sh", "bat"],
    ),
]

DEFAULT_PROTECTED_NAMES = frozenset(
    [
        "images",
        "documents",
        "spreadsheets",
        "presentations",
        "archives",
        "audio",
        "video",
        "code",
        "APPS",
        OTHERS,
        FOLDERS,
    ]
)


class CategoryTable:
    """Read-only mapping from lowercase file extension to category name."""

    def __init__(
        self, groups: Iterable[Tuple[str, Iterable[str]]] = DEFAULT_CATEGORY_GROUPS
    ):
        """Build the table from (category, extensions) groups.

        Args:
            groups: Category groups; a later duplicate extension overwrites
                an earlier one
        """
        table = {}
        for category, extensions in groups:
            for extension in extensions:
                table[extension.lower()] = category

        self._table: Mapping[str, str] = MappingProxyType(table)
        logger.debug(f"Category table built with {len(table)} extensions")

    def lookup(self, extension: str) -> Optional[str]:
        """Return the category for an extension, or None if unmapped."""
        return self._table.get(extension.lower())

    def category_for(self, extension: str) -> str:
        """Return the category for an extension, falling back to Others."""
        return self.lookup(extension) or OTHERS

    @property
    def categories(self) -> List[str]:
        """Distinct category names in table order."""
        return list(dict.fromkeys(self._table.values()))

    def __contains__(self, extension: str) -> bool:
        return extension.lower() in self._table

    def __len__(self) -> int:
        return len(self._table)

    def items(self):
        return self._table.items()


class ProtectedNames:
    """Folder names that are category containers and never relocated.

    Matching is exact and case-sensitive: "APPS" is protected, "apps" is not.
    """

    def __init__(self, names: Iterable[str] = DEFAULT_PROTECTED_NAMES):
        self._names = frozenset(names)

    def is_protected(self, name: str) -> bool:
        return name in self._names

    def __contains__(self, name: str) -> bool:
        return self.is_protected(name)

    def __iter__(self):
        return iter(sorted(self._names))

    def __len__(self) -> int:
        return len(self._names)
