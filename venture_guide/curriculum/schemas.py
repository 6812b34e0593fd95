"""
Pydantic models for the curriculum: stages, assets and their checklists.

The curriculum is static for the lifetime of a process. Models are frozen so a
single instance can be shared by every diagnosis call without copying.
"""

import hashlib
from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator


class CurriculumError(ValueError):
    """Raised when a curriculum definition is internally inconsistent."""


class ChecklistItem(BaseModel):
    """Checklist entry shown by the completion UI. Not used by the engine."""
    model_config = ConfigDict(frozen=True)

    id: str
    text: str


class Asset(BaseModel):
    """Atomic unit of curriculum work."""
    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    purpose: str = ""
    feeds_into: Optional[str] = None  # Free-text prose, e.g. "Eval targets (#10) → ROI (#19/#21)"
    checklist: Tuple[ChecklistItem, ...] = ()


class Stage(BaseModel):
    """Ordered grouping of assets."""
    model_config = ConfigDict(frozen=True)

    id: str
    number: str  # Display number, e.g. "00"
    title: str
    subtitle: str = ""
    description: str = ""
    gate_decision: str = ""
    assets: Tuple[Asset, ...] = ()


class Curriculum(BaseModel):
    """
    Complete, ordered curriculum.

    Stage ordinal is the stage's position in ``stages``; asset order inside a
    stage is the declared order. Asset numbers are unique across all stages.
    """
    model_config = ConfigDict(frozen=True)

    stages: Tuple[Stage, ...] = Field(min_length=1)

    _assets: Tuple[Asset, ...] = PrivateAttr(default=())
    _asset_index: Dict[int, Asset] = PrivateAttr(default_factory=dict)
    _asset_stage: Dict[int, Stage] = PrivateAttr(default_factory=dict)
    _stage_positions: Dict[str, int] = PrivateAttr(default_factory=dict)
    _fingerprint: str = PrivateAttr(default="")

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "Curriculum":
        stage_ids = [stage.id for stage in self.stages]
        if len(stage_ids) != len(set(stage_ids)):
            raise CurriculumError(f"Duplicate stage ids in curriculum: {stage_ids}")

        seen = set()
        for stage in self.stages:
            for asset in stage.assets:
                if asset.number in seen:
                    raise CurriculumError(
                        f"Asset #{asset.number} is declared more than once (stage {stage.id})"
                    )
                seen.add(asset.number)
        return self

    def model_post_init(self, __context) -> None:
        assets = []
        for position, stage in enumerate(self.stages):
            self._stage_positions[stage.id] = position
            for asset in stage.assets:
                assets.append(asset)
                self._asset_index[asset.number] = asset
                self._asset_stage[asset.number] = stage
        self._assets = tuple(assets)
        self._fingerprint = hashlib.sha256(
            self.model_dump_json().encode("utf-8")
        ).hexdigest()

    @property
    def fingerprint(self) -> str:
        """Stable hash of the curriculum content; identifies a curriculum version."""
        return self._fingerprint

    def all_assets(self) -> Tuple[Asset, ...]:
        """All assets in stage order, then declared order."""
        return self._assets

    def asset_ids(self) -> List[int]:
        return [asset.number for asset in self._assets]

    def get_asset(self, asset_number: int) -> Optional[Asset]:
        return self._asset_index.get(asset_number)

    def has_asset(self, asset_number: int) -> bool:
        return asset_number in self._asset_index

    def position_of(self, asset_number: int) -> Optional[int]:
        """Zero-based position of an asset in curriculum order."""
        for position, asset in enumerate(self._assets):
            if asset.number == asset_number:
                return position
        return None

    def stage_for_asset(self, asset_number: int) -> Optional[Stage]:
        return self._asset_stage.get(asset_number)

    def get_stage(self, stage_id: str) -> Optional[Stage]:
        position = self._stage_positions.get(stage_id)
        return self.stages[position] if position is not None else None

    def stage_index(self, stage_id: str) -> Optional[int]:
        """Ordinal of a stage, or None if the id is unknown."""
        return self._stage_positions.get(stage_id)

    def next_stage(self, stage_id: str) -> Optional[Stage]:
        position = self._stage_positions.get(stage_id)
        if position is not None and position < len(self.stages) - 1:
            return self.stages[position + 1]
        return None

    def previous_stage(self, stage_id: str) -> Optional[Stage]:
        position = self._stage_positions.get(stage_id)
        if position is not None and position > 0:
            return self.stages[position - 1]
        return None
