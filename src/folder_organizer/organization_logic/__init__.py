"""
Organization logic module for folder organization.
"""

from .categories import (
    FOLDERS,
    OTHERS,
    CategoryTable,
    ProtectedNames,
)
from .engine import OrganizationEngine

__all__ = [
    "FOLDERS",
    "OTHERS",
    "CategoryTable",
    "ProtectedNames",
    "OrganizationEngine",
]
