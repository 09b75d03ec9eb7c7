"""
Shared utilities: configuration and logging setup.
"""

from .config_manager import ConfigManager
from .logging_config import setup_logging

__all__ = ["ConfigManager", "setup_logging"]
