"""
Stage accessibility policy.

Work is restricted to a sliding two-stage window: the current stage and the
one immediately before it. Earlier and later stages are closed regardless of
completion state, which keeps the active working set small.
"""

from typing import List, Mapping, Set

from venture_guide.curriculum.schemas import Asset, Curriculum, Stage
from venture_guide.engine.schemas import AccessibilityResult

_INACCESSIBLE = AccessibilityResult(
    accessible=False, is_current_stage=False, is_previous_stage=False
)


def is_accessible(
    curriculum: Curriculum,
    asset_number: int,
    current_stage_id: str,
) -> AccessibilityResult:
    """
    Check whether an asset sits in the current or immediately preceding stage.

    Unknown assets and unknown stage ids are reported as inaccessible.
    """
    asset_stage = curriculum.stage_for_asset(asset_number)
    if asset_stage is None:
        return _INACCESSIBLE.model_copy()

    current_index = curriculum.stage_index(current_stage_id)
    asset_index = curriculum.stage_index(asset_stage.id)
    if current_index is None or asset_index is None:
        return _INACCESSIBLE.model_copy()

    is_current_stage = asset_index == current_index
    is_previous_stage = asset_index == current_index - 1
    return AccessibilityResult(
        accessible=is_current_stage or is_previous_stage,
        is_current_stage=is_current_stage,
        is_previous_stage=is_previous_stage,
    )


def stage_required_assets(stage: Stage, requirements: Mapping[int, bool]) -> List[Asset]:
    """Required assets of a stage, in declared order."""
    return [asset for asset in stage.assets if requirements.get(asset.number, True)]


def is_stage_complete(stage: Stage, completed: Set[int], requirements: Mapping[int, bool]) -> bool:
    """True when every required asset in the stage is complete."""
    return all(
        asset.number in completed
        for asset in stage_required_assets(stage, requirements)
    )


def determine_current_stage(
    curriculum: Curriculum,
    completed: Set[int],
    requirements: Mapping[int, bool],
) -> Stage:
    """
    The first stage whose required assets are not all complete.

    When every stage is complete the last stage is current.
    """
    for stage in curriculum.stages:
        if not is_stage_complete(stage, completed, requirements):
            return stage
    return curriculum.stages[-1]
