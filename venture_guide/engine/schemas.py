"""
Pydantic models for diagnosis engine inputs and results.

Inputs (``CompletionRecord``, ``ProjectSnapshot``) are materialized by the
caller before the engine runs; results (``Recommendation``, ``DiagnosisResult``)
are computed fresh on every request and never persisted.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Set
from pydantic import BaseModel, ConfigDict, Field, field_validator


class PriorityLevel(str, Enum):
    """Priority levels for recommended next actions."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"

    @property
    def rank(self) -> int:
        """Sort rank: lower sorts first."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    PriorityLevel.CRITICAL: 0,
    PriorityLevel.HIGH: 1,
    PriorityLevel.MEDIUM: 2,
}


class AssetDependency(BaseModel):
    """One target extracted from a feeds-into annotation."""
    model_config = ConfigDict(frozen=True)

    asset_number: int
    description: str


class DependencyEdge(BaseModel):
    """Directed edge: ``source`` feeds into ``target``."""
    model_config = ConfigDict(frozen=True)

    source: int
    target: int
    description: str = ""


class AccessibilityResult(BaseModel):
    """Whether an asset falls inside the current two-stage working window."""
    accessible: bool
    is_current_stage: bool
    is_previous_stage: bool


class CompletionRecord(BaseModel):
    """Per-project completion state of one asset."""
    asset_number: int
    is_complete: bool = True
    completed_at: Optional[datetime] = None

    @field_validator("completed_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Naive timestamps are taken as UTC so histories stay comparable."""
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def merged_with(self, incoming: "CompletionRecord") -> "CompletionRecord":
        """
        Combine this record with a newer update for the same asset.

        The completion flag follows the update, but the first timestamp ever
        recorded is kept: re-completing an asset never rewrites its history.
        """
        completed_at = self.completed_at or incoming.completed_at
        return CompletionRecord(
            asset_number=self.asset_number,
            is_complete=incoming.is_complete,
            completed_at=completed_at,
        )


class ProjectSnapshot(BaseModel):
    """Everything the engine needs to know about one project."""
    project_id: str
    name: str = ""
    requirement_overrides: Dict[int, bool] = Field(default_factory=dict)
    completions: List[CompletionRecord] = Field(default_factory=list)

    def completed_set(self) -> Set[int]:
        """Asset numbers currently marked complete."""
        return {record.asset_number for record in self.completions if record.is_complete}


class Recommendation(BaseModel):
    """A candidate next action with its justification."""
    asset_number: int
    title: str
    purpose: str = ""
    stage_id: str
    stage_number: str
    stage_name: str
    priority: PriorityLevel
    reason: str
    why_this_matters: List[str] = Field(default_factory=list)
    blockers: List[str] = Field(default_factory=list)
    dependencies: List[int] = Field(default_factory=list)
    unlocks: List[int] = Field(default_factory=list)
    estimated_days: int
    is_blocked: bool = False
    is_in_current_stage: bool = False
    is_in_previous_stage: bool = False


class Velocity(BaseModel):
    """Historical throughput of completed assets."""
    items_per_week: float = 0.0
    last_completed_at: Optional[datetime] = None


class Forecast(BaseModel):
    """Projected remaining duration; both fields are None when velocity is zero."""
    days: Optional[int] = None
    date: Optional[datetime] = None


class PathwayStage(BaseModel):
    """Per-stage progress summary."""
    stage_id: str
    stage_number: str
    stage_name: str
    completed_assets: int
    total_assets: int
    progress: float
    is_complete: bool
    is_current: bool
    estimated_days_remaining: Optional[int] = None


class ExternalBlocker(BaseModel):
    """An out-of-band obstacle surfaced alongside the action list."""
    type: str = "outwith"
    description: str
    action: str


class DiagnosisResult(BaseModel):
    """Complete diagnosis of one project."""
    project_id: str
    project_name: str = ""
    current_stage: str
    overall_progress: float
    completed_assets: int
    total_assets: int
    critical_actions: List[Recommendation] = Field(default_factory=list)
    pathway: List[PathwayStage] = Field(default_factory=list)
    velocity: Velocity
    estimated_days_to_completion: Optional[int] = None
    estimated_completion_date: Optional[datetime] = None
    blockers: List[ExternalBlocker] = Field(default_factory=list)
