"""
File access module: directory scanning and entry relocation.
"""

from .local_accessor import DirectoryEntry, EntryKind, FileSystemAccessor
from .manipulator import FileManipulator, FileOperation

__all__ = [
    "DirectoryEntry",
    "EntryKind",
    "FileSystemAccessor",
    "FileManipulator",
    "FileOperation",
]
