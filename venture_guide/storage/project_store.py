"""
Project stores: where requirement overrides and completion history live.

The engine never touches a store; the guidance service loads a
ProjectSnapshot and global requirement defaults from one before diagnosing.
"""

import json
import logging
import re
import shutil
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from venture_guide.config import settings as config
from venture_guide.engine.schemas import CompletionRecord, ProjectSnapshot

logger = logging.getLogger(__name__)

_PROJECT_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")
GLOBAL_REQUIREMENTS_FILE = "_global_requirements.json"


class ProjectNotFoundError(LookupError):
    """Raised when a project (or its completion history) cannot be loaded."""

    def __init__(self, project_id: str):
        super().__init__(f"Project not found: {project_id}")
        self.project_id = project_id


class BaseProjectStore(ABC):
    """Abstract project store; concrete stores only implement raw load/save."""

    @abstractmethod
    def load_project(self, project_id: str) -> ProjectSnapshot:
        """Load a project snapshot or raise ProjectNotFoundError."""
        pass

    @abstractmethod
    def save_project(self, snapshot: ProjectSnapshot) -> None:
        pass

    @abstractmethod
    def list_projects(self) -> List[str]:
        pass

    @abstractmethod
    def load_global_requirements(self) -> Dict[int, bool]:
        pass

    @abstractmethod
    def save_global_requirements(self, requirements: Dict[int, bool]) -> None:
        pass

    def set_global_requirement(self, asset_number: int, is_required: bool) -> None:
        """Set the default required/optional flag for an asset across all projects."""
        requirements = self.load_global_requirements()
        requirements[asset_number] = is_required
        self.save_global_requirements(requirements)

    def clear_global_requirement(self, asset_number: int) -> None:
        requirements = self.load_global_requirements()
        requirements.pop(asset_number, None)
        self.save_global_requirements(requirements)

    def set_requirement_override(self, project_id: str, asset_number: int, is_required: bool) -> None:
        """Override the required/optional flag of an asset for one project."""
        snapshot = self.load_project(project_id)
        snapshot.requirement_overrides[asset_number] = is_required
        self.save_project(snapshot)

    def clear_requirement_override(self, project_id: str, asset_number: int) -> None:
        snapshot = self.load_project(project_id)
        snapshot.requirement_overrides.pop(asset_number, None)
        self.save_project(snapshot)

    def record_completion(
        self,
        project_id: str,
        asset_number: int,
        completed_at: Optional[datetime] = None,
    ) -> CompletionRecord:
        """
        Mark an asset complete for a project.

        The first completion timestamp is authoritative: completing an asset
        again (even after it was reopened) keeps its original timestamp.

        Returns:
            The stored CompletionRecord
        """
        snapshot = self.load_project(project_id)
        incoming = CompletionRecord(
            asset_number=asset_number,
            is_complete=True,
            completed_at=completed_at or datetime.now(timezone.utc),
        )
        record = self._upsert(snapshot, incoming)
        self.save_project(snapshot)
        return record

    def clear_completion(self, project_id: str, asset_number: int) -> None:
        """Reopen an asset. Its completion timestamp is kept as history."""
        snapshot = self.load_project(project_id)
        self._upsert(snapshot, CompletionRecord(asset_number=asset_number, is_complete=False))
        self.save_project(snapshot)

    @staticmethod
    def _upsert(snapshot: ProjectSnapshot, incoming: CompletionRecord) -> CompletionRecord:
        for index, existing in enumerate(snapshot.completions):
            if existing.asset_number == incoming.asset_number:
                merged = existing.merged_with(incoming)
                snapshot.completions[index] = merged
                return merged
        snapshot.completions.append(incoming)
        return incoming


class InMemoryProjectStore(BaseProjectStore):
    """Process-local store, mainly for tests and embedding."""

    def __init__(self):
        self._projects: Dict[str, ProjectSnapshot] = {}
        self._global_requirements: Dict[int, bool] = {}

    def load_project(self, project_id: str) -> ProjectSnapshot:
        snapshot = self._projects.get(project_id)
        if snapshot is None:
            raise ProjectNotFoundError(project_id)
        return snapshot.model_copy(deep=True)

    def save_project(self, snapshot: ProjectSnapshot) -> None:
        self._projects[snapshot.project_id] = snapshot.model_copy(deep=True)

    def list_projects(self) -> List[str]:
        return sorted(self._projects)

    def load_global_requirements(self) -> Dict[int, bool]:
        return dict(self._global_requirements)

    def save_global_requirements(self, requirements: Dict[int, bool]) -> None:
        self._global_requirements = dict(requirements)


class ProjectStore(BaseProjectStore):
    """JSON file store: one document per project plus a global requirements file."""
    __store_path: Path

    def __init__(self, store_path=config.PROJECT_STORE_PATH):
        self.__store_path = Path(store_path)
        self.__store_path.mkdir(parents=True, exist_ok=True)

    def _project_path(self, project_id: str) -> Path:
        if not _PROJECT_ID_PATTERN.match(project_id):
            raise ValueError(f"Invalid project id: {project_id!r}")
        return self.__store_path / f"{project_id}.json"

    def save_project(self, snapshot: ProjectSnapshot) -> None:
        file_path = self._project_path(snapshot.project_id)
        file_path.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")

    def load_project(self, project_id: str) -> ProjectSnapshot:
        file_path = self._project_path(project_id)
        if not file_path.exists():
            raise ProjectNotFoundError(project_id)
        return ProjectSnapshot.model_validate_json(file_path.read_text(encoding="utf-8"))

    def list_projects(self) -> List[str]:
        return sorted(
            path.stem for path in self.__store_path.glob("*.json")
            if path.name != GLOBAL_REQUIREMENTS_FILE
        )

    def load_global_requirements(self) -> Dict[int, bool]:
        file_path = self.__store_path / GLOBAL_REQUIREMENTS_FILE
        if not file_path.exists():
            return {}
        data = json.loads(file_path.read_text(encoding="utf-8"))
        return {int(asset_number): bool(value) for asset_number, value in data.items()}

    def save_global_requirements(self, requirements: Dict[int, bool]) -> None:
        file_path = self.__store_path / GLOBAL_REQUIREMENTS_FILE
        file_path.write_text(
            json.dumps({str(k): v for k, v in sorted(requirements.items())}, indent=2),
            encoding="utf-8",
        )

    def clear_store(self) -> None:
        if self.__store_path.exists():
            shutil.rmtree(self.__store_path)
        self.__store_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"Cleared project store at {self.__store_path}")
