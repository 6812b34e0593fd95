"""
Requirement resolution: which assets are mandatory for a given project.

Requirements are an ordered chain of override layers evaluated from lowest to
highest precedence over an implicit "everything is required" base. The result
is closed over the curriculum's asset set: every asset resolves to exactly one
boolean and nothing else appears in the map.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence
from pydantic import BaseModel, Field

from venture_guide.curriculum.schemas import Curriculum

logger = logging.getLogger(__name__)

DEFAULT_REQUIRED = True


class RequirementLayer(BaseModel):
    """One layer of required/optional flags keyed by asset number."""
    name: str
    values: Dict[int, bool] = Field(default_factory=dict)


def resolve_requirements(
    asset_ids: Iterable[int],
    layers: Sequence[RequirementLayer],
) -> Dict[int, bool]:
    """
    Resolve a requirement map from an ordered chain of layers.

    Args:
        asset_ids: Every asset number in the curriculum
        layers: Override layers, lowest precedence first

    Returns:
        Dict mapping every asset number to True (required) or False (optional)
    """
    requirements = {asset_id: DEFAULT_REQUIRED for asset_id in asset_ids}

    for layer in layers:
        for asset_id, is_required in layer.values.items():
            if asset_id not in requirements:
                logger.debug(f"Ignoring {layer.name} requirement for unknown asset #{asset_id}")
                continue
            requirements[asset_id] = bool(is_required)

    return requirements


def resolve_project_requirements(
    curriculum: Curriculum,
    global_defaults: Optional[Mapping[int, bool]] = None,
    project_overrides: Optional[Mapping[int, bool]] = None,
) -> Dict[int, bool]:
    """Resolve the standard chain: default-true, then global defaults, then project overrides."""
    layers: List[RequirementLayer] = [
        RequirementLayer(name="global", values=dict(global_defaults or {})),
        RequirementLayer(name="project", values=dict(project_overrides or {})),
    ]
    return resolve_requirements(curriculum.asset_ids(), layers)


def required_assets(requirements: Mapping[int, bool]) -> List[int]:
    """Asset numbers resolved as required."""
    return [asset_id for asset_id, is_required in requirements.items() if is_required]
