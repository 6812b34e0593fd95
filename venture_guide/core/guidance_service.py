"""
Guidance service.

Connects a project store to the diagnosis engine: loads the project snapshot
and global requirement defaults, then runs the pure engine over them. This is
the only place that knows about both storage and the engine.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional
import logging

from venture_guide.config import settings as config
from venture_guide.curriculum.loader import get_default_curriculum
from venture_guide.curriculum.schemas import Curriculum
from venture_guide.engine.accessibility import determine_current_stage
from venture_guide.engine.diagnosis import diagnose
from venture_guide.engine.recommendations import recommend
from venture_guide.engine.requirements import resolve_project_requirements
from venture_guide.engine.schemas import DiagnosisResult, Recommendation
from venture_guide.storage.project_store import BaseProjectStore

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GuidanceService:
    """
    Diagnosis and next-step guidance for stored projects.

    A missing project propagates ``ProjectNotFoundError`` to the caller; no
    partial or zeroed result is ever returned.
    """

    def __init__(
        self,
        store: BaseProjectStore,
        curriculum: Optional[Curriculum] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the guidance service.

        Args:
            store: Project store holding requirement overrides and completions
            curriculum: Curriculum definition (defaults to the process-wide curriculum)
            clock: Callable returning "now" (injectable for testing)
        """
        self.store = store
        self.curriculum = curriculum if curriculum is not None else get_default_curriculum()
        self.clock = clock or _utc_now

    def diagnose(self, project_id: str, limit: Optional[int] = None) -> DiagnosisResult:
        """
        Diagnose a stored project.

        Raises:
            ProjectNotFoundError: If the project cannot be loaded
        """
        snapshot = self.store.load_project(project_id)
        global_requirements = self.store.load_global_requirements()

        return diagnose(
            snapshot,
            curriculum=self.curriculum,
            global_requirements=global_requirements,
            now=self.clock(),
            limit=limit if limit is not None else config.DIAGNOSIS_ACTION_LIMIT,
            min_items_per_week=config.MIN_ITEMS_PER_WEEK,
            default_days=config.DEFAULT_ASSET_DAYS,
        )

    def next_steps(self, project_id: str, limit: Optional[int] = None) -> Dict[str, Any]:
        """
        Ranked next steps for a stored project.

        Returns:
            Dict with ``current_stage`` (stage id) and ``recommendations``
            (list of Recommendation)

        Raises:
            ProjectNotFoundError: If the project cannot be loaded
        """
        snapshot = self.store.load_project(project_id)
        requirements = resolve_project_requirements(
            self.curriculum,
            self.store.load_global_requirements(),
            snapshot.requirement_overrides,
        )
        completed = {n for n in snapshot.completed_set() if self.curriculum.has_asset(n)}
        current_stage = determine_current_stage(self.curriculum, completed, requirements)

        recommendations: List[Recommendation] = recommend(
            self.curriculum,
            completed,
            current_stage.id,
            requirements,
            limit=limit if limit is not None else config.NEXT_STEP_LIMIT,
            default_days=config.DEFAULT_ASSET_DAYS,
        )
        logger.info(
            f"Next steps for project {project_id}: {len(recommendations)} recommendations "
            f"in stage {current_stage.id}"
        )
        return {
            "current_stage": current_stage.id,
            "recommendations": recommendations,
        }
