"""
Pytest configuration and fixtures
"""
import pytest
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from venture_guide.curriculum.loader import build_curriculum
from venture_guide.engine.dependencies import clear_graph_cache
from venture_guide.engine.schemas import CompletionRecord


@pytest.fixture(autouse=True)
def fresh_graph_cache():
    """Start every test with an empty dependency graph cache"""
    clear_graph_cache()
    yield
    clear_graph_cache()


@pytest.fixture
def small_curriculum():
    """Three stages of three assets each (ids 1-9), no annotations"""
    return build_curriculum([
        {
            "id": "s1",
            "number": "01",
            "title": "Stage One",
            "gate_decision": "Finish stage one first.",
            "assets": [
                {"number": 1, "title": "One", "purpose": "First thing"},
                {"number": 2, "title": "Two", "purpose": "Second thing"},
                {"number": 3, "title": "Three", "purpose": "Third thing"},
            ],
        },
        {
            "id": "s2",
            "number": "02",
            "title": "Stage Two",
            "gate_decision": "Finish stage two first.",
            "assets": [
                {"number": 4, "title": "Four"},
                {"number": 5, "title": "Five"},
                {"number": 6, "title": "Six"},
            ],
        },
        {
            "id": "s3",
            "number": "03",
            "title": "Stage Three",
            "assets": [
                {"number": 7, "title": "Seven"},
                {"number": 8, "title": "Eight"},
                {"number": 9, "title": "Nine"},
            ],
        },
    ])


@pytest.fixture
def annotated_curriculum():
    """Three stages with feeds-into annotations, including a dangling reference"""
    return build_curriculum([
        {
            "id": "a",
            "number": "00",
            "title": "Foundations",
            "assets": [
                {"number": 1, "title": "Thesis"},
                {"number": 2, "title": "Category"},
            ],
        },
        {
            "id": "b",
            "number": "01",
            "title": "Discovery",
            "gate_decision": "Proceed once discovery is done.",
            "assets": [
                {"number": 3, "title": "Problem"},
                {"number": 4, "title": "Workflow", "feeds_into": "Problem framing (#3)"},
                {
                    "number": 5,
                    "title": "Interviews",
                    "feeds_into": "Targets (#3) → Pricing (#6/#7) → Typo (#99)",
                },
            ],
        },
        {
            "id": "c",
            "number": "02",
            "title": "Build",
            "assets": [
                {"number": 6, "title": "Pricing"},
                {"number": 7, "title": "Pilot"},
                {"number": 8, "title": "Launch", "feeds_into": "Pilot KPIs (#7)"},
            ],
        },
    ])


@pytest.fixture
def now():
    """Fixed reference time"""
    return datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_completions(now):
    """Build completion records, one day apart, ending at ``now``"""
    def _make(asset_numbers, spacing_days=1):
        asset_numbers = list(asset_numbers)
        start = now - timedelta(days=spacing_days * (len(asset_numbers) - 1))
        return [
            CompletionRecord(
                asset_number=number,
                is_complete=True,
                completed_at=start + timedelta(days=spacing_days * index),
            )
            for index, number in enumerate(asset_numbers)
        ]
    return _make
