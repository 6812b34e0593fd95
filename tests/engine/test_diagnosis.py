"""
Tests for engine/diagnosis.py - the aggregated diagnosis
"""
from datetime import datetime, timedelta, timezone

import pytest

from venture_guide.curriculum.loader import get_default_curriculum
from venture_guide.engine.diagnosis import (
    ExternalBlockerRule,
    diagnose,
    first_completion_times,
)
from venture_guide.engine.schemas import CompletionRecord, ProjectSnapshot


class TestDiagnose:
    """Test diagnose over a plain three-stage curriculum"""

    def test_fresh_project(self, small_curriculum, now):
        """Test a project with no completions"""
        result = diagnose(ProjectSnapshot(project_id="p1", name="Fresh"), small_curriculum, now=now)

        assert result.project_id == "p1"
        assert result.project_name == "Fresh"
        assert result.current_stage == "s1"
        assert result.overall_progress == 0.0
        assert result.completed_assets == 0
        assert result.total_assets == 9
        assert [a.asset_number for a in result.critical_actions] == [1, 2, 3]
        assert result.velocity.items_per_week == 0.0
        assert result.estimated_days_to_completion is None
        assert result.estimated_completion_date is None
        assert result.blockers == []

    def test_first_stage_complete(self, small_curriculum, now, make_completions):
        """Test progress, pathway and forecast after one stage"""
        snapshot = ProjectSnapshot(project_id="p1", completions=make_completions([1, 2, 3], spacing_days=7))

        result = diagnose(snapshot, small_curriculum, now=now)

        assert result.current_stage == "s2"
        assert result.completed_assets == 3
        assert result.overall_progress == pytest.approx(100 / 3)
        assert [a.asset_number for a in result.critical_actions] == [4, 5, 6]
        assert result.velocity.items_per_week == pytest.approx(1.5)
        assert result.velocity.last_completed_at == now
        assert result.estimated_days_to_completion == 28
        assert result.estimated_completion_date == now + timedelta(days=28)

    def test_pathway(self, small_curriculum, now, make_completions):
        """Test per-stage progress entries"""
        snapshot = ProjectSnapshot(project_id="p1", completions=make_completions([1, 2, 3, 4], spacing_days=7))

        pathway = diagnose(snapshot, small_curriculum, now=now).pathway

        assert [stage.stage_id for stage in pathway] == ["s1", "s2", "s3"]
        assert pathway[0].is_complete is True
        assert pathway[0].progress == 100.0
        assert pathway[0].estimated_days_remaining is None
        assert pathway[1].is_current is True
        assert pathway[1].completed_assets == 1
        assert pathway[1].total_assets == 3
        assert pathway[1].progress == pytest.approx(100 / 3)
        assert pathway[1].estimated_days_remaining is not None
        assert pathway[2].is_current is False
        assert pathway[2].stage_number == "03"

    def test_project_override_makes_asset_optional(self, small_curriculum, now, make_completions):
        """Test a project-optional asset is dropped from totals and actions"""
        snapshot = ProjectSnapshot(
            project_id="p1",
            requirement_overrides={7: False},
            completions=make_completions(range(1, 7)),
        )

        result = diagnose(snapshot, small_curriculum, global_requirements={7: True}, now=now)

        assert result.total_assets == 8
        assert result.completed_assets == 6
        assert result.current_stage == "s3"
        assert [a.asset_number for a in result.critical_actions] == [8, 9]
        assert result.critical_actions[0].is_blocked is False
        assert result.critical_actions[1].is_blocked is True

    def test_project_override_makes_asset_required(self, small_curriculum, now):
        """Test a project-required asset beats a global-optional default"""
        snapshot = ProjectSnapshot(project_id="p1", requirement_overrides={7: True})

        result = diagnose(snapshot, small_curriculum, global_requirements={7: False}, now=now)

        assert result.total_assets == 9

    def test_global_optional(self, small_curriculum, now):
        """Test global defaults reduce the total"""
        result = diagnose(
            ProjectSnapshot(project_id="p1"), small_curriculum, global_requirements={8: False, 9: False}, now=now
        )

        assert result.total_assets == 7

    def test_optional_completions_do_not_count(self, small_curriculum, now, make_completions):
        """Test completing an optional asset moves neither progress nor velocity"""
        snapshot = ProjectSnapshot(
            project_id="p1",
            requirement_overrides={3: False},
            completions=make_completions([3]),
        )

        result = diagnose(snapshot, small_curriculum, now=now)

        assert result.completed_assets == 0
        assert result.velocity.items_per_week == 0.0

    def test_unknown_completions_ignored(self, small_curriculum, now, make_completions):
        """Test completions for assets outside the curriculum are ignored"""
        snapshot = ProjectSnapshot(project_id="p1", completions=make_completions([1, 42]))

        result = diagnose(snapshot, small_curriculum, now=now)

        assert result.completed_assets == 1
        assert result.total_assets == 9

    def test_reopened_assets_are_open(self, small_curriculum, now):
        """Test records marked incomplete are not completions"""
        snapshot = ProjectSnapshot(project_id="p1", completions=[
            CompletionRecord(asset_number=1, is_complete=False, completed_at=now),
        ])

        result = diagnose(snapshot, small_curriculum, now=now)

        assert result.completed_assets == 0
        assert result.critical_actions[0].asset_number == 1

    def test_everything_complete(self, small_curriculum, now, make_completions):
        """Test a finished project"""
        snapshot = ProjectSnapshot(project_id="p1", completions=make_completions(range(1, 10)))

        result = diagnose(snapshot, small_curriculum, now=now)

        assert result.current_stage == "s3"
        assert result.overall_progress == 100.0
        assert result.critical_actions == []
        assert result.estimated_days_to_completion == 0
        assert result.estimated_completion_date == now
        assert all(stage.is_complete for stage in result.pathway)

    def test_nothing_required(self, small_curriculum, now):
        """Test a project where every asset is optional"""
        overrides = {number: False for number in range(1, 10)}

        result = diagnose(ProjectSnapshot(project_id="p1", requirement_overrides=overrides), small_curriculum, now=now)

        assert result.total_assets == 0
        assert result.overall_progress == 100.0
        assert result.current_stage == "s3"
        assert all(stage.progress == 100.0 for stage in result.pathway)

    def test_action_limit(self, small_curriculum, now):
        """Test the critical action list is truncated"""
        result = diagnose(ProjectSnapshot(project_id="p1"), small_curriculum, now=now, limit=1)

        assert [a.asset_number for a in result.critical_actions] == [1]

    def test_deterministic(self, small_curriculum, now, make_completions):
        """Test identical inputs give identical results"""
        snapshot = ProjectSnapshot(project_id="p1", completions=make_completions([1, 2]))

        assert diagnose(snapshot, small_curriculum, now=now) == diagnose(snapshot, small_curriculum, now=now)

    def test_naive_and_aware_timestamps_mix(self, small_curriculum, now):
        """Test naive completion times are read as UTC alongside aware ones"""
        snapshot = ProjectSnapshot(project_id="p1", completions=[
            CompletionRecord(asset_number=1, completed_at=datetime(2025, 1, 1)),
            CompletionRecord(asset_number=2, completed_at=datetime(2025, 1, 8, tzinfo=timezone.utc)),
        ])

        result = diagnose(snapshot, small_curriculum, now=now)

        assert result.completed_assets == 2
        assert result.velocity.items_per_week == pytest.approx(2.0)
        assert result.velocity.last_completed_at == datetime(2025, 1, 8, tzinfo=timezone.utc)


class TestExternalBlockers:
    """Test external blocker rules"""

    def test_custom_rule_applies(self, small_curriculum, now, make_completions):
        """Test a rule fires once enough is done and its asset is open"""
        rule = ExternalBlockerRule(
            asset_number=9, min_completed=2, description="Partner sign-off", action="Book the review"
        )
        snapshot = ProjectSnapshot(project_id="p1", completions=make_completions([1, 2]))

        result = diagnose(snapshot, small_curriculum, now=now, blocker_rules=[rule])

        assert len(result.blockers) == 1
        assert result.blockers[0].type == "outwith"
        assert result.blockers[0].description == "Partner sign-off"
        assert result.blockers[0].action == "Book the review"

    def test_rule_below_threshold(self, small_curriculum, now, make_completions):
        """Test a rule stays silent below its threshold"""
        rule = ExternalBlockerRule(asset_number=9, min_completed=3, description="d", action="a")
        snapshot = ProjectSnapshot(project_id="p1", completions=make_completions([1, 2]))

        assert diagnose(snapshot, small_curriculum, now=now, blocker_rules=[rule]).blockers == []

    def test_rule_for_unknown_asset(self, small_curriculum, now, make_completions):
        """Test default rules for assets missing from the curriculum never fire"""
        snapshot = ProjectSnapshot(project_id="p1", completions=make_completions(range(1, 10)))

        assert diagnose(snapshot, small_curriculum, now=now).blockers == []

    def test_default_rules_on_builtin_curriculum(self, now, make_completions):
        """Test legal and investor blockers late in the built-in framework"""
        curriculum = get_default_curriculum()
        done = [n for n in curriculum.asset_ids() if n not in (24, 26)][:20]
        snapshot = ProjectSnapshot(project_id="p1", completions=make_completions(done))

        result = diagnose(snapshot, curriculum, now=now)

        assert [b.description for b in result.blockers] == [
            "Legal setup required for spinout",
            "Investment materials needed",
        ]

    def test_completed_asset_clears_rule(self, now, make_completions):
        """Test a rule stops firing once its asset is complete"""
        curriculum = get_default_curriculum()
        done = [n for n in curriculum.asset_ids() if n < 20] + [26]
        snapshot = ProjectSnapshot(project_id="p1", completions=make_completions(done))

        result = diagnose(snapshot, curriculum, now=now)

        assert [b.description for b in result.blockers] == ["Investment materials needed"]


class TestFirstCompletionTimes:
    """Test first_completion_times"""

    def test_earliest_timestamp_wins(self, now):
        """Test duplicate records keep the first completion"""
        earlier = now - timedelta(days=3)
        records = [
            CompletionRecord(asset_number=1, completed_at=now),
            CompletionRecord(asset_number=1, completed_at=earlier),
        ]

        assert first_completion_times(records) == {1: earlier}

    def test_incomplete_records_skipped(self, now):
        """Test reopened records are not completions"""
        records = [CompletionRecord(asset_number=2, is_complete=False, completed_at=now)]

        assert first_completion_times(records) == {}

    def test_record_without_timestamp(self):
        """Test a completion with no timestamp is still a completion"""
        records = [CompletionRecord(asset_number=3)]

        assert first_completion_times(records) == {3: None}

    def test_naive_timestamp_read_as_utc(self):
        """Test a naive completion time is stored as UTC"""
        record = CompletionRecord(asset_number=1, completed_at=datetime(2025, 1, 1, 9, 30))

        assert record.completed_at == datetime(2025, 1, 1, 9, 30, tzinfo=timezone.utc)

    def test_aware_timestamp_kept(self):
        """Test an aware completion time keeps its offset"""
        plus_two = timezone(timedelta(hours=2))
        record = CompletionRecord(asset_number=1, completed_at=datetime(2025, 1, 1, 9, 30, tzinfo=plus_two))

        assert record.completed_at.tzinfo == plus_two
