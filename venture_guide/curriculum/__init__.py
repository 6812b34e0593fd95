"""
Curriculum module: the static definition of stages and assets.

This module provides:
- Frozen Pydantic models for stages, assets and checklists
- The built-in Co-Build framework curriculum
- Loading of alternative curricula from JSON
"""

from venture_guide.curriculum.schemas import (
    Asset,
    ChecklistItem,
    Curriculum,
    CurriculumError,
    Stage,
)
from venture_guide.curriculum.loader import (
    build_curriculum,
    get_default_curriculum,
    load_curriculum,
)

__all__ = [
    "Asset",
    "ChecklistItem",
    "Curriculum",
    "CurriculumError",
    "Stage",
    "build_curriculum",
    "get_default_curriculum",
    "load_curriculum",
]
