"""
Dependency graph extraction from feeds-into annotations.

Annotations are human-written prose such as
``"Eval targets (#10) → ROI/pricing (#19/#21) → Pilot KPIs (#18)"``.
Every ``(#N)`` or ``(#N/#M)`` reference becomes an explicit edge. The graph is
built once per curriculum version, validated against the curriculum, and then
shared read-only.
"""

import logging
import re
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator

from venture_guide.curriculum.schemas import Curriculum
from venture_guide.engine.schemas import AssetDependency, DependencyEdge

logger = logging.getLogger(__name__)

# (#10), (#19/#21) and the legacy (#19/21) form
ASSET_REFERENCE_PATTERN = re.compile(r"\(#(\d+)(?:\s*/\s*#?(\d+))?\)")
ARROW_SEPARATORS = ("→", "->", "=>")


def _last_separator_end(text: str) -> int:
    """Index just past the last arrow separator in ``text``, or 0 if there is none."""
    best = -1
    end = 0
    for separator in ARROW_SEPARATORS:
        index = text.rfind(separator)
        if index > best:
            best = index
            end = index + len(separator)
    return end if best >= 0 else 0


def parse_feeds_into(feeds_into: Optional[str]) -> List[AssetDependency]:
    """
    Parse a feeds-into annotation into asset dependencies.

    A slash-paired reference yields two dependencies sharing one description.
    The description is the text between the previous arrow and the reference.
    Absent or unparseable annotations yield an empty list.

    Args:
        feeds_into: Annotation text (may be None)

    Returns:
        List of AssetDependency in order of appearance
    """
    if not feeds_into or not isinstance(feeds_into, str):
        return []

    dependencies = []
    for match in ASSET_REFERENCE_PATTERN.finditer(feeds_into):
        before = feeds_into[:match.start()]
        description = before[_last_separator_end(before):].strip()

        for group in match.groups():
            if group is None:
                continue
            asset_number = int(group)
            dependencies.append(AssetDependency(
                asset_number=asset_number,
                description=description or f"Asset #{asset_number}",
            ))

    return dependencies


class DependencyGraph(BaseModel):
    """
    Explicit adjacency for one curriculum version.

    ``forward`` maps an asset to the assets its annotation names; ``reverse``
    maps an asset to the assets whose annotations name it. Both are read-only
    once built.
    """
    model_config = ConfigDict(frozen=True)

    fingerprint: str
    edges: Tuple[DependencyEdge, ...] = ()
    dropped: Tuple[DependencyEdge, ...] = ()  # Dangling references, kept for diagnostics
    forward: Mapping[int, Tuple[int, ...]] = Field(default_factory=lambda: MappingProxyType({}))
    reverse: Mapping[int, Tuple[int, ...]] = Field(default_factory=lambda: MappingProxyType({}))

    @field_validator("forward", "reverse")
    @classmethod
    def _read_only(cls, value: Mapping[int, Tuple[int, ...]]) -> Mapping[int, Tuple[int, ...]]:
        return MappingProxyType(dict(value))

    def prerequisites_of(self, asset_number: int) -> Tuple[int, ...]:
        """Assets named in this asset's annotation; treated as its prerequisites."""
        return self.forward.get(asset_number, ())

    def downstream_of(self, asset_number: int) -> Tuple[int, ...]:
        """Assets whose annotations name this asset."""
        return self.reverse.get(asset_number, ())


def build_dependency_graph(curriculum: Curriculum) -> DependencyGraph:
    """
    Extract and validate every edge in the curriculum.

    References to asset numbers outside the curriculum (typos, retired assets)
    and self-references are dropped with a warning instead of failing.
    """
    edges: List[DependencyEdge] = []
    dropped: List[DependencyEdge] = []
    forward: Dict[int, List[int]] = {number: [] for number in curriculum.asset_ids()}

    for asset in curriculum.all_assets():
        for dependency in parse_feeds_into(asset.feeds_into):
            edge = DependencyEdge(
                source=asset.number,
                target=dependency.asset_number,
                description=dependency.description,
            )
            if edge.target == edge.source or not curriculum.has_asset(edge.target):
                logger.warning(
                    f"Dropping dangling reference #{edge.target} in annotation of asset #{asset.number}"
                )
                dropped.append(edge)
                continue
            edges.append(edge)
            if edge.target not in forward[asset.number]:
                forward[asset.number].append(edge.target)

    reverse = _invert(forward)

    logger.debug(
        f"Built dependency graph: {len(edges)} edges, {len(dropped)} dropped references"
    )
    return DependencyGraph(
        fingerprint=curriculum.fingerprint,
        edges=tuple(edges),
        dropped=tuple(dropped),
        forward={number: tuple(targets) for number, targets in forward.items() if targets},
        reverse={number: tuple(sources) for number, sources in reverse.items()},
    )


def _invert(forward: Dict[int, List[int]]) -> Dict[int, List[int]]:
    reverse: Dict[int, List[int]] = {}
    for source, targets in forward.items():
        for target in targets:
            sources = reverse.setdefault(target, [])
            if source not in sources:
                sources.append(source)
    return reverse


def build_reverse_map(curriculum: Curriculum) -> Dict[int, List[int]]:
    """Map each asset to the assets that name it in their annotations."""
    graph = get_dependency_graph(curriculum)
    return {number: list(sources) for number, sources in graph.reverse.items()}


# Derived graphs keyed by curriculum fingerprint, oldest evicted first
GRAPH_CACHE_SIZE = 8
_GRAPH_CACHE: Dict[str, DependencyGraph] = {}


def get_dependency_graph(curriculum: Curriculum) -> DependencyGraph:
    """Get the dependency graph for a curriculum, building it on first use."""
    graph = _GRAPH_CACHE.get(curriculum.fingerprint)
    if graph is None:
        graph = build_dependency_graph(curriculum)
        while len(_GRAPH_CACHE) >= GRAPH_CACHE_SIZE:
            _GRAPH_CACHE.pop(next(iter(_GRAPH_CACHE)))
        _GRAPH_CACHE[curriculum.fingerprint] = graph
        logger.info(f"Cached dependency graph for curriculum {curriculum.fingerprint[:12]}")
    return graph


def clear_graph_cache() -> None:
    """Drop all cached graphs (useful for testing)."""
    _GRAPH_CACHE.clear()
