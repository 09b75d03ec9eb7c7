"""Custom exceptions for folder organizer."""


class FolderOrganizerError(Exception):
    """Base exception for folder organizer errors."""
    pass


class DirectoryAccessError(FolderOrganizerError):
    """Raised when the target directory listing cannot be opened."""
    pass


class ConfigurationError(FolderOrganizerError):
    """Raised when there's an error in configuration."""
    pass


class InvalidDirectoryError(FolderOrganizerError, ValueError):
    """Raised when the target path does not exist or is not a directory."""
    pass
