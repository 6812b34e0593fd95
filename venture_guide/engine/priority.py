"""
Priority rules for recommended next actions.

Priority is an ordered list of (predicate, level) rules evaluated top-down;
the first matching rule wins and ``medium`` is the fallback. Each rule can be
tested on its own, and callers can supply their own rule list.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from venture_guide.engine.schemas import PriorityLevel

FOUNDATION_ASSET_COUNT = 2
STAGE_GATE_REMAINING = 2
UNLOCKS_HIGH_THRESHOLD = 3


@dataclass(frozen=True)
class PriorityContext:
    """Facts about one candidate asset that priority rules may inspect."""

    asset_number: int
    position: int  # Zero-based position in curriculum order
    curriculum_size: int
    stage_remaining_required: int  # Incomplete required assets in its stage, this one included
    unlock_count: int


@dataclass(frozen=True)
class PriorityRule:
    """A named predicate mapped to a priority level."""

    name: str
    level: PriorityLevel
    predicate: Callable[[PriorityContext], bool]

    def matches(self, context: PriorityContext) -> bool:
        return self.predicate(context)


def is_foundation(context: PriorityContext) -> bool:
    """One of the first curriculum assets; everything else builds on them."""
    return context.position < FOUNDATION_ASSET_COUNT


def is_near_stage_gate(context: PriorityContext) -> bool:
    """Finishing this asset brings its stage to within reach of its gate."""
    return 0 < context.stage_remaining_required <= STAGE_GATE_REMAINING


def unlocks_many(context: PriorityContext) -> bool:
    return context.unlock_count >= UNLOCKS_HIGH_THRESHOLD


def is_late_stage(context: PriorityContext) -> bool:
    """In the final quarter of the curriculum (investment readiness)."""
    return context.position >= context.curriculum_size - context.curriculum_size // 4


DEFAULT_PRIORITY_RULES: List[PriorityRule] = [
    PriorityRule("foundation", PriorityLevel.CRITICAL, is_foundation),
    PriorityRule("near_stage_gate", PriorityLevel.HIGH, is_near_stage_gate),
    PriorityRule("unlocks_many", PriorityLevel.HIGH, unlocks_many),
    PriorityRule("late_stage", PriorityLevel.HIGH, is_late_stage),
]


def matching_rule(
    context: PriorityContext,
    rules: Optional[Sequence[PriorityRule]] = None,
) -> Optional[PriorityRule]:
    """First rule whose predicate holds, or None."""
    for rule in rules if rules is not None else DEFAULT_PRIORITY_RULES:
        if rule.matches(context):
            return rule
    return None


def evaluate_priority(
    context: PriorityContext,
    rules: Optional[Sequence[PriorityRule]] = None,
) -> PriorityLevel:
    """
    Evaluate priority rules top-down.

    Args:
        context: Facts about the candidate asset
        rules: Ordered rules (defaults to DEFAULT_PRIORITY_RULES)

    Returns:
        Level of the first matching rule, or MEDIUM if none match
    """
    rule = matching_rule(context, rules)
    return rule.level if rule is not None else PriorityLevel.MEDIUM
