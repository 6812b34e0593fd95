"""
Next-step recommendation engine.

Considers, for every workable asset:
- Prerequisites declared through feeds-into annotations
- In-stage sequence (the previous required asset in the same stage)
- Stage boundaries (current stage + previous stage only)
- Required vs optional assets
- Downstream impact (how many open assets it unlocks)

and returns a ranked list of candidate next actions with explanations.
"""

import logging
from typing import List, Mapping, Optional, Sequence, Set

from venture_guide.curriculum.data import ASSET_DURATION_DAYS
from venture_guide.curriculum.schemas import Asset, Curriculum, Stage
from venture_guide.engine.accessibility import is_accessible, stage_required_assets
from venture_guide.engine.dependencies import DependencyGraph, get_dependency_graph
from venture_guide.engine.priority import PriorityContext, PriorityRule, evaluate_priority
from venture_guide.engine.schemas import PriorityLevel, Recommendation

logger = logging.getLogger(__name__)

DEFAULT_ASSET_DAYS = 5
DEFAULT_LIMIT = 5


def estimate_asset_days(
    asset_number: int,
    duration_table: Optional[Mapping[int, int]] = None,
    default_days: int = DEFAULT_ASSET_DAYS,
) -> int:
    """Fixed effort estimate for an asset; ``default_days`` when it is not in the table."""
    table = duration_table if duration_table is not None else ASSET_DURATION_DAYS
    return table.get(asset_number, default_days)


def _asset_label(curriculum: Curriculum, asset_number: int) -> str:
    asset = curriculum.get_asset(asset_number)
    return f"Asset #{asset_number} ({asset.title})" if asset else f"Asset #{asset_number}"


def identify_blockers(
    asset: Asset,
    curriculum: Curriculum,
    graph: DependencyGraph,
    completed: Set[int],
    requirements: Mapping[int, bool],
) -> List[str]:
    """
    Unmet prerequisites of an asset, as human-readable blocker lines.

    Two sources: required prerequisites named by the asset's own annotation,
    and the previous required asset in the same stage.
    """
    blockers = []
    blocking_assets = []

    for prereq in graph.prerequisites_of(asset.number):
        if prereq not in completed and requirements.get(prereq, True):
            blocking_assets.append(prereq)

    stage = curriculum.stage_for_asset(asset.number)
    if stage is not None:
        stage_assets = stage_required_assets(stage, requirements)
        index = next(
            (i for i, candidate in enumerate(stage_assets) if candidate.number == asset.number),
            -1,
        )
        if index > 0:
            previous = stage_assets[index - 1]
            if previous.number not in completed and previous.number not in blocking_assets:
                blocking_assets.append(previous.number)

    for asset_number in blocking_assets:
        blockers.append(f"Complete {_asset_label(curriculum, asset_number)} first")
    return blockers


def open_downstream(
    asset_number: int,
    graph: DependencyGraph,
    completed: Set[int],
    requirements: Mapping[int, bool],
) -> List[int]:
    """Required, incomplete assets that name this asset in their annotations."""
    return [
        downstream for downstream in graph.downstream_of(asset_number)
        if downstream not in completed and requirements.get(downstream, True)
    ]


def _remaining_required(stage: Stage, completed: Set[int], requirements: Mapping[int, bool]) -> int:
    return sum(
        1 for asset in stage_required_assets(stage, requirements)
        if asset.number not in completed
    )


def generate_why_this_matters(
    asset: Asset,
    curriculum: Curriculum,
    unlocks: Sequence[int],
    completed: Set[int],
    requirements: Mapping[int, bool],
) -> List[str]:
    """Contextual explanation lines for why an asset matters now."""
    explanations = []

    if len(unlocks) == 1:
        downstream_stage = curriculum.stage_for_asset(unlocks[0])
        suffix = f" ({downstream_stage.title})" if downstream_stage else ""
        explanations.append(f"Builds the evidence base for Asset #{unlocks[0]}{suffix}")
    elif len(unlocks) > 1:
        listed = ", ".join(f"#{number}" for number in unlocks[:3])
        more = "..." if len(unlocks) > 3 else ""
        explanations.append(f"Unlocks {len(unlocks)} downstream assets: {listed}{more}")

    if asset.purpose:
        explanations.append(asset.purpose)

    stage = curriculum.stage_for_asset(asset.number)
    if stage is not None and stage.gate_decision:
        remaining = _remaining_required(stage, completed, requirements)
        if 0 < remaining <= 2:
            next_stage = curriculum.next_stage(stage.id)
            target = next_stage.title if next_stage else "next stage"
            explanations.append(f"Required to advance to {target}")

    return explanations or ["Next step in your venture journey"]


def _compose_reason(blockers: List[str], unlocks: List[int], priority: PriorityLevel) -> str:
    if blockers:
        return f"Blocked: {blockers[0]}"
    if unlocks:
        plural = "s" if len(unlocks) > 1 else ""
        return f"Unlocks {len(unlocks)} downstream asset{plural}"
    if priority == PriorityLevel.CRITICAL:
        return "Foundation asset - must complete before proceeding"
    return "Next in sequence"


def ranking_key(recommendation: Recommendation):
    """Unblocked first, then priority, then most unlocks, then asset number."""
    return (
        recommendation.is_blocked,
        recommendation.priority.rank,
        -len(recommendation.unlocks),
        recommendation.asset_number,
    )


def recommend(
    curriculum: Curriculum,
    completed: Set[int],
    current_stage_id: str,
    requirements: Mapping[int, bool],
    limit: int = DEFAULT_LIMIT,
    graph: Optional[DependencyGraph] = None,
    rules: Optional[Sequence[PriorityRule]] = None,
    duration_table: Optional[Mapping[int, int]] = None,
    default_days: int = DEFAULT_ASSET_DAYS,
) -> List[Recommendation]:
    """
    Rank the workable assets of a project into next actions.

    Completed, optional and inaccessible assets never appear. Blocked assets
    are still returned (flagged ``is_blocked``) so callers can show what comes
    next. An empty list is a valid result when everything workable is done.

    Args:
        curriculum: Curriculum definition
        completed: Asset numbers the project has completed
        current_stage_id: Id of the project's current stage
        requirements: Resolved requirement map
        limit: Maximum number of recommendations returned
        graph: Dependency graph (defaults to the cached graph for the curriculum)
        rules: Priority rules (defaults to DEFAULT_PRIORITY_RULES)
        duration_table: Per-asset effort estimates in days
        default_days: Estimate for assets missing from the table

    Returns:
        Ranked list of Recommendation, at most ``limit`` long
    """
    if graph is None:
        graph = get_dependency_graph(curriculum)
    completed = {number for number in completed if curriculum.has_asset(number)}
    curriculum_size = len(curriculum.all_assets())

    candidates: List[Recommendation] = []
    for asset in sorted(curriculum.all_assets(), key=lambda a: a.number):
        if asset.number in completed or not requirements.get(asset.number, True):
            continue

        accessibility = is_accessible(curriculum, asset.number, current_stage_id)
        if not accessibility.accessible:
            continue

        stage = curriculum.stage_for_asset(asset.number)
        blockers = identify_blockers(asset, curriculum, graph, completed, requirements)
        unlocks = open_downstream(asset.number, graph, completed, requirements)

        context = PriorityContext(
            asset_number=asset.number,
            position=curriculum.position_of(asset.number),
            curriculum_size=curriculum_size,
            stage_remaining_required=_remaining_required(stage, completed, requirements),
            unlock_count=len(unlocks),
        )
        priority = evaluate_priority(context, rules)

        candidates.append(Recommendation(
            asset_number=asset.number,
            title=asset.title,
            purpose=asset.purpose,
            stage_id=stage.id,
            stage_number=stage.number,
            stage_name=stage.title,
            priority=priority,
            reason=_compose_reason(blockers, unlocks, priority),
            why_this_matters=generate_why_this_matters(
                asset, curriculum, unlocks, completed, requirements
            ),
            blockers=blockers,
            dependencies=list(graph.prerequisites_of(asset.number)),
            unlocks=unlocks,
            estimated_days=estimate_asset_days(asset.number, duration_table, default_days),
            is_blocked=bool(blockers),
            is_in_current_stage=accessibility.is_current_stage,
            is_in_previous_stage=accessibility.is_previous_stage,
        ))

    candidates.sort(key=ranking_key)
    logger.debug(
        f"Ranked {len(candidates)} candidates for stage {current_stage_id}, returning {min(limit, len(candidates))}"
    )
    return candidates[:max(limit, 0)]
