"""
Curriculum loading.

The curriculum is process-wide static data: it is loaded once and shared
read-only. Callers that need a different curriculum (tests, other programmes)
pass their own ``Curriculum`` instance explicitly instead of mutating this one.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Union

from venture_guide.config import settings as config
from venture_guide.curriculum.data import COBUILD_STAGES
from venture_guide.curriculum.schemas import Curriculum, CurriculumError

logger = logging.getLogger(__name__)


def build_curriculum(stages: List[Dict[str, Any]]) -> Curriculum:
    """Validate a list of stage dictionaries into a ``Curriculum``."""
    return Curriculum.model_validate({"stages": stages})


def load_curriculum(path: Union[str, Path]) -> Curriculum:
    """
    Load a curriculum from a JSON file.

    The file holds either a list of stages or an object with a ``stages`` key.

    Raises:
        CurriculumError: If the file is missing or is not valid JSON.
        ValueError: If the content fails model validation.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise CurriculumError(f"Curriculum file not found: {file_path}")

    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise CurriculumError(f"Curriculum file {file_path} is not valid JSON: {e}") from e

    if isinstance(data, list):
        data = {"stages": data}

    curriculum = Curriculum.model_validate(data)
    logger.info(
        f"Loaded curriculum from {file_path}: {len(curriculum.stages)} stages, "
        f"{len(curriculum.all_assets())} assets"
    )
    return curriculum


@lru_cache(maxsize=1)
def get_default_curriculum() -> Curriculum:
    """
    Get the process-wide curriculum.

    Uses ``CURRICULUM_PATH`` when configured, otherwise the built-in Co-Build
    framework. Loaded once per process.
    """
    if config.CURRICULUM_PATH:
        return load_curriculum(config.CURRICULUM_PATH)
    return build_curriculum(COBUILD_STAGES)
