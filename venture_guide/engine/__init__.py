"""
Diagnosis & next-step guidance engine.

A pure function of (curriculum, requirement layers, completion records) to a
DiagnosisResult:
- dependencies: feeds-into annotations -> explicit dependency graph
- requirements: layered required/optional resolution
- accessibility: two-stage working window and current-stage detection
- priority / recommendations: ranked next actions with justification
- velocity: throughput and completion forecasting
- diagnosis: aggregation into one result
"""

from venture_guide.engine.schemas import (
    AccessibilityResult,
    AssetDependency,
    CompletionRecord,
    DependencyEdge,
    DiagnosisResult,
    ExternalBlocker,
    Forecast,
    PathwayStage,
    PriorityLevel,
    ProjectSnapshot,
    Recommendation,
    Velocity,
)
from venture_guide.engine.dependencies import (
    DependencyGraph,
    build_dependency_graph,
    build_reverse_map,
    get_dependency_graph,
    parse_feeds_into,
)
from venture_guide.engine.requirements import (
    RequirementLayer,
    resolve_project_requirements,
    resolve_requirements,
)
from venture_guide.engine.accessibility import determine_current_stage, is_accessible
from venture_guide.engine.priority import DEFAULT_PRIORITY_RULES, PriorityRule, evaluate_priority
from venture_guide.engine.recommendations import recommend
from venture_guide.engine.velocity import compute_velocity, forecast
from venture_guide.engine.diagnosis import DEFAULT_BLOCKER_RULES, ExternalBlockerRule, diagnose

__all__ = [
    "AccessibilityResult",
    "AssetDependency",
    "CompletionRecord",
    "DependencyEdge",
    "DiagnosisResult",
    "ExternalBlocker",
    "Forecast",
    "PathwayStage",
    "PriorityLevel",
    "ProjectSnapshot",
    "Recommendation",
    "Velocity",
    "DependencyGraph",
    "build_dependency_graph",
    "build_reverse_map",
    "get_dependency_graph",
    "parse_feeds_into",
    "RequirementLayer",
    "resolve_project_requirements",
    "resolve_requirements",
    "determine_current_stage",
    "is_accessible",
    "DEFAULT_PRIORITY_RULES",
    "PriorityRule",
    "evaluate_priority",
    "recommend",
    "compute_velocity",
    "forecast",
    "DEFAULT_BLOCKER_RULES",
    "ExternalBlockerRule",
    "diagnose",
]
