"""
Diagnosis aggregator.

Combines requirement resolution, current-stage detection, the per-stage
pathway, ranked next actions, velocity, forecast and external blocker rules
into a single DiagnosisResult. Pure: no I/O and no shared mutable state.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional, Sequence, Set

from venture_guide.curriculum.loader import get_default_curriculum
from venture_guide.curriculum.schemas import Curriculum, Stage
from venture_guide.engine.accessibility import determine_current_stage, stage_required_assets
from venture_guide.engine.dependencies import DependencyGraph
from venture_guide.engine.priority import PriorityRule
from venture_guide.engine.recommendations import DEFAULT_ASSET_DAYS, recommend
from venture_guide.engine.requirements import required_assets, resolve_project_requirements
from venture_guide.engine.schemas import (
    CompletionRecord,
    DiagnosisResult,
    ExternalBlocker,
    PathwayStage,
    ProjectSnapshot,
    Velocity,
)
from venture_guide.engine.velocity import (
    DEFAULT_MIN_ITEMS_PER_WEEK,
    compute_velocity,
    estimate_stage_days,
    forecast,
)

logger = logging.getLogger(__name__)

DEFAULT_ACTION_LIMIT = 3


@dataclass(frozen=True)
class ExternalBlockerRule:
    """Surface an out-of-band blocker once enough work is done but a key asset is still open."""

    asset_number: int
    min_completed: int
    description: str
    action: str

    def applies(self, completed_required: int, completed: Set[int], curriculum: Curriculum) -> bool:
        if not curriculum.has_asset(self.asset_number):
            return False
        return completed_required >= self.min_completed and self.asset_number not in completed


DEFAULT_BLOCKER_RULES: List[ExternalBlockerRule] = [
    ExternalBlockerRule(
        asset_number=26,
        min_completed=20,
        description="Legal setup required for spinout",
        action="Complete Spinout Legal Pack (Asset #26) - may require legal counsel",
    ),
    ExternalBlockerRule(
        asset_number=24,
        min_completed=18,
        description="Investment materials needed",
        action="Complete Investor Pack + Data Room (Asset #24)",
    ),
]


def first_completion_times(records: Sequence[CompletionRecord]) -> Dict[int, Optional[datetime]]:
    """Earliest known completion time per completed asset."""
    times: Dict[int, Optional[datetime]] = {}
    for record in records:
        if not record.is_complete:
            continue
        previous = times.get(record.asset_number)
        if previous is None or (record.completed_at is not None and record.completed_at < previous):
            times[record.asset_number] = record.completed_at
    return times


def build_pathway(
    curriculum: Curriculum,
    completed: Set[int],
    requirements: Mapping[int, bool],
    current_stage: Stage,
    velocity: Velocity,
) -> List[PathwayStage]:
    """One progress entry per stage, counting required assets only."""
    pathway = []
    for stage in curriculum.stages:
        stage_assets = stage_required_assets(stage, requirements)
        total = len(stage_assets)
        done = sum(1 for asset in stage_assets if asset.number in completed)
        is_complete = done == total

        pathway.append(PathwayStage(
            stage_id=stage.id,
            stage_number=stage.number,
            stage_name=stage.title,
            completed_assets=done,
            total_assets=total,
            progress=(done / total) * 100 if total > 0 else 100.0,
            is_complete=is_complete,
            is_current=stage.id == current_stage.id,
            estimated_days_remaining=estimate_stage_days(total - done, velocity),
        ))
    return pathway


def evaluate_blocker_rules(
    rules: Sequence[ExternalBlockerRule],
    completed_required: int,
    completed: Set[int],
    curriculum: Curriculum,
) -> List[ExternalBlocker]:
    return [
        ExternalBlocker(type="outwith", description=rule.description, action=rule.action)
        for rule in rules
        if rule.applies(completed_required, completed, curriculum)
    ]


def diagnose(
    snapshot: ProjectSnapshot,
    curriculum: Optional[Curriculum] = None,
    global_requirements: Optional[Mapping[int, bool]] = None,
    now: Optional[datetime] = None,
    limit: int = DEFAULT_ACTION_LIMIT,
    blocker_rules: Optional[Sequence[ExternalBlockerRule]] = None,
    graph: Optional[DependencyGraph] = None,
    priority_rules: Optional[Sequence[PriorityRule]] = None,
    min_items_per_week: float = DEFAULT_MIN_ITEMS_PER_WEEK,
    default_days: int = DEFAULT_ASSET_DAYS,
) -> DiagnosisResult:
    """
    Diagnose a project's position in the curriculum.

    Args:
        snapshot: Project id, name, requirement overrides and completion records
        curriculum: Curriculum definition (defaults to the process-wide curriculum)
        global_requirements: Global required/optional defaults by asset number
        now: Reference time for forecasting (defaults to the current UTC time)
        limit: Maximum number of critical actions
        blocker_rules: External blocker rules (defaults to DEFAULT_BLOCKER_RULES)
        graph: Dependency graph (defaults to the cached graph for the curriculum)
        priority_rules: Priority rules passed through to the recommendation engine
        min_items_per_week: Velocity floor
        default_days: Effort estimate for assets missing from the duration table

    Returns:
        DiagnosisResult
    """
    if curriculum is None:
        curriculum = get_default_curriculum()
    now = now or datetime.now(timezone.utc)
    rules = DEFAULT_BLOCKER_RULES if blocker_rules is None else blocker_rules

    requirements = resolve_project_requirements(
        curriculum, global_requirements, snapshot.requirement_overrides
    )

    completion_times = first_completion_times(snapshot.completions)
    unknown = sorted(number for number in completion_times if not curriculum.has_asset(number))
    if unknown:
        logger.warning(
            f"Project {snapshot.project_id} has completions for unknown assets {unknown}; ignoring them"
        )
    completed = {number for number in completion_times if curriculum.has_asset(number)}

    required = required_assets(requirements)
    completed_required = sum(1 for number in required if number in completed)
    total_required = len(required)

    current_stage = determine_current_stage(curriculum, completed, requirements)

    velocity = compute_velocity(
        [completion_times[number] for number in completed if requirements[number]],
        min_items_per_week=min_items_per_week,
    )

    pathway = build_pathway(curriculum, completed, requirements, current_stage, velocity)

    critical_actions = recommend(
        curriculum,
        completed,
        current_stage.id,
        requirements,
        limit=limit,
        graph=graph,
        rules=priority_rules,
        default_days=default_days,
    )

    remaining = forecast(completed_required, total_required, velocity, now)
    blockers = evaluate_blocker_rules(rules, completed_required, completed, curriculum)

    logger.info(
        f"Diagnosed project {snapshot.project_id}: stage {current_stage.id}, "
        f"{completed_required}/{total_required} required assets, {len(critical_actions)} actions"
    )

    return DiagnosisResult(
        project_id=snapshot.project_id,
        project_name=snapshot.name,
        current_stage=current_stage.id,
        overall_progress=(completed_required / total_required) * 100 if total_required > 0 else 100.0,
        completed_assets=completed_required,
        total_assets=total_required,
        critical_actions=critical_actions,
        pathway=pathway,
        velocity=velocity,
        estimated_days_to_completion=remaining.days,
        estimated_completion_date=remaining.date,
        blockers=blockers,
    )
