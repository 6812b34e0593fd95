"""
Tests for storage/project_store.py - in-memory and JSON file project stores
"""
from datetime import datetime, timedelta, timezone

import pytest

from venture_guide.engine.schemas import ProjectSnapshot
from venture_guide.storage.project_store import (
    GLOBAL_REQUIREMENTS_FILE,
    InMemoryProjectStore,
    ProjectNotFoundError,
    ProjectStore,
)


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    """Each store implementation, seeded with one project"""
    if request.param == "memory":
        project_store = InMemoryProjectStore()
    else:
        project_store = ProjectStore(store_path=tmp_path / "store")
    project_store.save_project(ProjectSnapshot(project_id="acme", name="Acme Robotics"))
    return project_store


class TestProjectStore:
    """Behaviour shared by every store"""

    def test_load_saved_project(self, store):
        """Test a saved project loads back"""
        snapshot = store.load_project("acme")

        assert snapshot.project_id == "acme"
        assert snapshot.name == "Acme Robotics"
        assert snapshot.completions == []

    def test_missing_project(self, store):
        """Test loading an unknown project raises"""
        with pytest.raises(ProjectNotFoundError) as exc_info:
            store.load_project("ghost")

        assert exc_info.value.project_id == "ghost"

    def test_list_projects(self, store):
        """Test listing stored projects"""
        store.save_project(ProjectSnapshot(project_id="beta"))

        assert store.list_projects() == ["acme", "beta"]

    def test_record_completion(self, store, now):
        """Test marking an asset complete"""
        record = store.record_completion("acme", 3, completed_at=now)

        assert record.is_complete is True
        assert record.completed_at == now
        assert store.load_project("acme").completed_set() == {3}

    def test_first_timestamp_is_kept(self, store, now):
        """Test completing again never rewrites the original timestamp"""
        store.record_completion("acme", 3, completed_at=now)
        store.clear_completion("acme", 3)
        record = store.record_completion("acme", 3, completed_at=now + timedelta(days=5))

        assert record.completed_at == now
        completions = store.load_project("acme").completions
        assert len(completions) == 1
        assert completions[0].is_complete is True

    def test_clear_completion(self, store, now):
        """Test reopening an asset"""
        store.record_completion("acme", 3, completed_at=now)
        store.clear_completion("acme", 3)

        assert store.load_project("acme").completed_set() == set()

    def test_record_completion_defaults_to_now(self, store):
        """Test a completion without an explicit time is timestamped"""
        record = store.record_completion("acme", 1)

        assert record.completed_at is not None
        assert record.completed_at.tzinfo is not None

    def test_naive_completion_time_stored_as_utc(self, store):
        """Test a naive completion time sits alongside stamped ones as UTC"""
        store.record_completion("acme", 1)
        record = store.record_completion("acme", 2, completed_at=datetime(2025, 1, 1))

        assert record.completed_at == datetime(2025, 1, 1, tzinfo=timezone.utc)
        stored = {r.asset_number: r.completed_at for r in store.load_project("acme").completions}
        assert all(ts.tzinfo is not None for ts in stored.values())

    def test_record_completion_unknown_project(self, store):
        """Test completions need an existing project"""
        with pytest.raises(ProjectNotFoundError):
            store.record_completion("ghost", 1)

    def test_requirement_overrides(self, store):
        """Test setting and clearing project overrides"""
        store.set_requirement_override("acme", 7, False)
        assert store.load_project("acme").requirement_overrides == {7: False}

        store.clear_requirement_override("acme", 7)
        assert store.load_project("acme").requirement_overrides == {}

    def test_global_requirements(self, store):
        """Test setting and clearing global defaults"""
        assert store.load_global_requirements() == {}

        store.set_global_requirement(12, False)
        store.set_global_requirement(13, True)
        assert store.load_global_requirements() == {12: False, 13: True}

        store.clear_global_requirement(12)
        assert store.load_global_requirements() == {13: True}

    def test_loaded_snapshot_is_a_copy(self, store):
        """Test mutating a loaded snapshot does not change the store"""
        snapshot = store.load_project("acme")
        snapshot.requirement_overrides[1] = False

        assert store.load_project("acme").requirement_overrides == {}


class TestFileProjectStore:
    """Behaviour specific to the JSON file store"""

    @pytest.fixture
    def file_store(self, tmp_path):
        """File store in a temporary directory"""
        return ProjectStore(store_path=tmp_path / "store")

    def test_persists_across_instances(self, file_store, tmp_path, now):
        """Test data survives a new store instance"""
        file_store.save_project(ProjectSnapshot(project_id="acme", requirement_overrides={7: False}))
        file_store.record_completion("acme", 1, completed_at=now)

        reopened = ProjectStore(store_path=tmp_path / "store")
        snapshot = reopened.load_project("acme")

        assert snapshot.requirement_overrides == {7: False}
        assert snapshot.completions[0].completed_at == now

    def test_global_file_not_listed(self, file_store, tmp_path):
        """Test the global requirements file is not a project"""
        file_store.set_global_requirement(1, False)

        assert (tmp_path / "store" / GLOBAL_REQUIREMENTS_FILE).exists()
        assert file_store.list_projects() == []

    @pytest.mark.parametrize("project_id", ["../escape", "", "with space", ".hidden"])
    def test_invalid_project_id(self, file_store, project_id):
        """Test ids that are not safe file names are rejected"""
        with pytest.raises(ValueError, match="Invalid project id"):
            file_store.load_project(project_id)

    def test_clear_store(self, file_store):
        """Test clearing removes every project"""
        file_store.save_project(ProjectSnapshot(project_id="acme"))
        file_store.clear_store()

        assert file_store.list_projects() == []
