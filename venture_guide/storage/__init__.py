"""
Venture Guide Storage Module

This module provides project stores for:
- Requirement overrides (global defaults and per-project)
- Completion history (first completion timestamp is authoritative)
"""

from .project_store import (
    BaseProjectStore,
    InMemoryProjectStore,
    ProjectNotFoundError,
    ProjectStore,
)

__all__ = [
    "BaseProjectStore",
    "InMemoryProjectStore",
    "ProjectNotFoundError",
    "ProjectStore",
]
