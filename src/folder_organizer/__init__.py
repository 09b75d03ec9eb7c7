"""
Folder organizer: sort the loose entries of a directory into category folders.
"""

__version__ = "1.0.0"
