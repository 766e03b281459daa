"""
Integrated Management System (IMS) Engine

Scores an organization's coverage across all active standards as one
integrated system instead of seven separate ones:
- Integration score: how many leaf clauses collapse into shared
  requirements once EQUIVALENT cross-references are merged
- Consolidated readiness: coverage counted once per shared requirement,
  with PARTIAL weighted at half
- Shared requirements: per High Level Structure group, each standard's
  rolled-up status and whether the standards disagree
- Gap cascades: uncovered clauses and the clauses in other standards
  that depend on the same evidence
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Hashable, Iterable, Optional

from sqlalchemy.engine import Engine

from config import Settings, load_settings
from cross_references import ClauseEdge, fetch_clause_edges, sort_by_mapping_type
from database import get_session
from gap_analyzer import (
    COVERAGE_STATUSES,
    COVERED,
    GAP,
    PARTIAL,
    GapAnalysisSummary,
    compute_gap_analysis,
    round_half_up,
)
from iso_clauses import COMMON_CLAUSE_TITLES

logger = logging.getLogger(__name__)


# ============================================================================
# Union-Find
# ============================================================================

class UnionFind:
    """
    Disjoint sets with path compression and union by rank.

    Elements keep their insertion order, so ``groups()`` is deterministic.
    """

    def __init__(self, items: Iterable[Hashable] = ()):
        self._parent = {}
        self._rank = {}
        for item in items:
            self.add(item)

    def add(self, item: Hashable):
        if item not in self._parent:
            self._parent[item] = item
            self._rank[item] = 0

    def find(self, item: Hashable) -> Hashable:
        self.add(item)
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        # Path compression
        while item != root:
            next_item = self._parent[item]
            self._parent[item] = root
            item = next_item
        return root

    def union(self, a: Hashable, b: Hashable):
        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return
        if self._rank[root_a] < self._rank[root_b]:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        if self._rank[root_a] == self._rank[root_b]:
            self._rank[root_a] += 1

    def connected(self, a: Hashable, b: Hashable) -> bool:
        return self.find(a) == self.find(b)

    def groups(self) -> dict:
        """root -> members, both in order of first insertion."""
        result = {}
        for item in list(self._parent):
            result.setdefault(self.find(item), []).append(item)
        return result

    def __len__(self) -> int:
        return len(self._parent)


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class LeafInfo:
    """Identity of a rendered leaf clause and its standard."""
    clause_number: str
    title: str
    standard_code: str
    standard_name: str


@dataclass
class EquivalenceSaving:
    """An equivalence class spanning more than one standard."""
    hls_group: str
    raw_count: int
    standards: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"hlsGroup": self.hls_group, "rawCount": self.raw_count, "standards": list(self.standards)}


@dataclass
class IntegrationScore:
    total_clauses: int = 0
    unique_requirements: int = 0
    efficiency_percent: int = 0
    savings: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalClauses": self.total_clauses,
            "uniqueRequirements": self.unique_requirements,
            "efficiencyPercent": self.efficiency_percent,
            "savings": [s.to_dict() for s in self.savings],
        }


@dataclass
class StandardBreakdown:
    standard_code: str
    standard_name: str
    raw_coverage: int
    deduplicated_coverage: int
    total_clauses: int
    covered: int
    partial: int
    gaps: int

    def to_dict(self) -> dict:
        return {
            "standardCode": self.standard_code,
            "standardName": self.standard_name,
            "rawCoverage": self.raw_coverage,
            "deduplicatedCoverage": self.deduplicated_coverage,
            "totalClauses": self.total_clauses,
            "covered": self.covered,
            "partial": self.partial,
            "gaps": self.gaps,
        }


@dataclass
class ConsolidatedReadiness:
    weighted_score: int = 0
    deduplicated_coverage: int = 0
    raw_coverage: int = 0
    standards: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "weightedScore": self.weighted_score,
            "deduplicatedCoverage": self.deduplicated_coverage,
            "rawCoverage": self.raw_coverage,
            "standards": [s.to_dict() for s in self.standards],
        }


@dataclass
class MatrixCell:
    standard_code: str
    status: str
    clause_id: str
    clause_number: str
    title: str

    def to_dict(self) -> dict:
        return {
            "standardCode": self.standard_code,
            "status": self.status,
            "clauseId": self.clause_id,
            "clauseNumber": self.clause_number,
            "title": self.title,
        }


@dataclass
class SharedRequirementsRow:
    hls_group: str
    hls_title: str
    cells: list = field(default_factory=list)
    has_inconsistency: bool = False

    def to_dict(self) -> dict:
        return {
            "hlsGroup": self.hls_group,
            "hlsTitle": self.hls_title,
            "cells": [c.to_dict() for c in self.cells],
            "hasInconsistency": self.has_inconsistency,
        }


@dataclass
class CascadeTarget:
    clause_id: str
    clause_number: str
    title: str
    standard_code: str
    standard_name: str
    status: str
    mapping_type: str

    def to_dict(self) -> dict:
        return {
            "clauseId": self.clause_id,
            "clauseNumber": self.clause_number,
            "title": self.title,
            "standardCode": self.standard_code,
            "standardName": self.standard_name,
            "status": self.status,
            "mappingType": self.mapping_type,
        }


@dataclass
class GapCascade:
    """An uncovered clause and the clauses in other standards linked to it."""
    source_clause_id: str
    source_clause_number: str
    source_title: str
    source_standard_code: str
    source_standard_name: str
    source_status: str
    targets: list = field(default_factory=list)
    # Distinct standards touched, the source's included
    impact_count: int = 0

    def to_dict(self) -> dict:
        return {
            "sourceClauseId": self.source_clause_id,
            "sourceClauseNumber": self.source_clause_number,
            "sourceTitle": self.source_title,
            "sourceStandardCode": self.source_standard_code,
            "sourceStandardName": self.source_standard_name,
            "sourceStatus": self.source_status,
            "targets": [t.to_dict() for t in self.targets],
            "impactCount": self.impact_count,
        }


@dataclass
class IMSSummary:
    active_standard_count: int = 0
    integration_score: IntegrationScore = field(default_factory=IntegrationScore)
    consolidated_readiness: ConsolidatedReadiness = field(default_factory=ConsolidatedReadiness)
    shared_requirements: list = field(default_factory=list)
    gap_cascades: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "activeStandardCount": self.active_standard_count,
            "integrationScore": self.integration_score.to_dict(),
            "consolidatedReadiness": self.consolidated_readiness.to_dict(),
            "sharedRequirements": [r.to_dict() for r in self.shared_requirements],
            "gapCascades": [c.to_dict() for c in self.gap_cascades],
        }


# ============================================================================
# Status Helpers
# ============================================================================

def best_status(statuses: Iterable[str]) -> str:
    """Strongest status present; GAP for an empty input."""
    return min(statuses, key=COVERAGE_STATUSES.index, default=GAP)


def group_status(child_statuses: list) -> str:
    """COVERED when every child is, PARTIAL when any child has evidence, otherwise GAP."""
    if not child_statuses:
        return GAP
    if all(s == COVERED for s in child_statuses):
        return COVERED
    if any(s in (PARTIAL, COVERED) for s in child_statuses):
        return PARTIAL
    return GAP


def leaf_info_map(summary: GapAnalysisSummary) -> dict[str, LeafInfo]:
    """clause id -> LeafInfo for every rendered leaf, in render order."""
    return {
        leaf.clause_id: LeafInfo(
            clause_number=leaf.clause_number,
            title=leaf.title,
            standard_code=standard.code,
            standard_name=standard.name,
        )
        for standard in summary.standards
        for leaf in standard.leaf_clauses()
    }


def equivalence_classes(leaf_ids: Iterable[str], edges: Iterable[ClauseEdge]) -> UnionFind:
    """
    Merge leaves joined by EQUIVALENT edges.

    Edges with an endpoint outside ``leaf_ids`` are ignored.
    """
    leaf_ids = list(leaf_ids)
    classes = UnionFind(leaf_ids)
    known = set(leaf_ids)
    for edge in edges:
        if edge.mapping_type != "EQUIVALENT":
            continue
        if edge.source.clause_id in known and edge.target.clause_id in known:
            classes.union(edge.source.clause_id, edge.target.clause_id)
    return classes


# ============================================================================
# Scoring
# ============================================================================

def compute_integration_score(groups: dict, info_by_clause: dict[str, LeafInfo]) -> IntegrationScore:
    """
    Args:
        groups: root -> member clause ids, from UnionFind.groups()
        info_by_clause: clause id -> LeafInfo

    Returns:
        IntegrationScore with savings sorted by raw count, largest first
    """
    total = len(info_by_clause)
    unique = len(groups)
    efficiency = round_half_up((1 - unique / total) * 100) if total > 0 else 0

    savings = []
    for members in groups.values():
        if len(members) <= 1:
            continue
        infos = [info_by_clause[m] for m in members if m in info_by_clause]
        standards = sorted({info.standard_code for info in infos})
        if len(standards) > 1:
            savings.append(EquivalenceSaving(
                hls_group=infos[0].clause_number.split(".")[0],
                raw_count=len(members),
                standards=standards,
            ))

    savings.sort(key=lambda s: s.raw_count, reverse=True)

    return IntegrationScore(
        total_clauses=total,
        unique_requirements=unique,
        efficiency_percent=efficiency,
        savings=savings,
    )


def compute_consolidated_readiness(
    summary: GapAnalysisSummary,
    groups: dict,
    status_by_clause: dict[str, str],
) -> ConsolidatedReadiness:
    """
    Score each equivalence class once, by its best member status.

    COVERED counts 1, PARTIAL 0.5 and GAP 0 towards the weighted score.
    """
    class_statuses = [best_status(status_by_clause.get(m, GAP) for m in members) for members in groups.values()]
    total = len(class_statuses)
    covered = class_statuses.count(COVERED)
    partial = class_statuses.count(PARTIAL)

    if total > 0:
        weighted = round_half_up((covered + partial * 0.5) / total * 100)
        deduplicated = round_half_up(covered / total * 100)
    else:
        weighted = deduplicated = 0

    breakdown = [
        StandardBreakdown(
            standard_code=std.code,
            standard_name=std.name,
            raw_coverage=std.coverage_percent,
            deduplicated_coverage=std.coverage_percent,
            total_clauses=std.total_sub_clauses,
            covered=std.covered,
            partial=std.partial,
            gaps=std.gaps,
        )
        for std in summary.standards
    ]

    return ConsolidatedReadiness(
        weighted_score=weighted,
        deduplicated_coverage=deduplicated,
        raw_coverage=summary.overall_coverage_percent,
        standards=breakdown,
    )


def compute_shared_requirements(summary: GapAnalysisSummary) -> list[SharedRequirementsRow]:
    """One row per HLS group 4-10 that at least two standards render."""
    rows = []

    for group_number, group_title in COMMON_CLAUSE_TITLES.items():
        cells = []
        for std in summary.standards:
            top = next(
                (c for c in std.clauses if c.clause_number in (group_number, f"{group_number}.")),
                None,
            )
            if top is None:
                continue
            cells.append(MatrixCell(
                standard_code=std.code,
                status=group_status([child.status for child in top.children]),
                clause_id=top.clause_id,
                clause_number=top.clause_number,
                title=top.title,
            ))

        if len(cells) >= 2:
            rows.append(SharedRequirementsRow(
                hls_group=group_number,
                hls_title=group_title,
                cells=cells,
                has_inconsistency=len({c.status for c in cells}) > 1,
            ))

    return rows


def compute_gap_cascades(
    status_by_clause: dict[str, str],
    info_by_clause: dict[str, LeafInfo],
    edges: list[ClauseEdge],
) -> list[GapCascade]:
    """
    For every GAP or PARTIAL leaf, the clauses in other standards it is linked to.

    Targets are ordered EQUIVALENT, RELATED, SUPPORTING and then by
    standard code; cascades by impact count (largest first) and then by
    source clause number. Unrendered targets count as GAP.
    """
    cascades = []

    for clause_id, status in status_by_clause.items():
        if status == COVERED:
            continue
        info = info_by_clause.get(clause_id)
        if info is None:
            continue

        targets = []
        for edge in edges:
            other = edge.other_end(clause_id)
            if other is None or other.standard_code == info.standard_code:
                continue
            targets.append(CascadeTarget(
                clause_id=other.clause_id,
                clause_number=other.clause_number,
                title=other.title,
                standard_code=other.standard_code,
                standard_name=other.standard_name,
                status=status_by_clause.get(other.clause_id, GAP),
                mapping_type=edge.mapping_type,
            ))

        if not targets:
            continue

        cascades.append(GapCascade(
            source_clause_id=clause_id,
            source_clause_number=info.clause_number,
            source_title=info.title,
            source_standard_code=info.standard_code,
            source_standard_name=info.standard_name,
            source_status=status,
            targets=sort_by_mapping_type(targets),
            impact_count=len({info.standard_code} | {t.standard_code for t in targets}),
        ))

    cascades.sort(key=lambda c: (-c.impact_count, c.source_clause_number))
    return cascades


def build_ims_summary(summary: GapAnalysisSummary, edges: list[ClauseEdge]) -> IMSSummary:
    """
    Pure aggregation over a gap analysis and the cross-reference graph.

    Args:
        summary: Gap analysis across the active standards
        edges: Every cross-reference with endpoints resolved

    Returns:
        IMSSummary
    """
    status_by_clause = summary.clause_status_map()
    info_by_clause = leaf_info_map(summary)
    groups = equivalence_classes(status_by_clause, edges).groups()

    return IMSSummary(
        active_standard_count=len(summary.standards),
        integration_score=compute_integration_score(groups, info_by_clause),
        consolidated_readiness=compute_consolidated_readiness(summary, groups, status_by_clause),
        shared_requirements=compute_shared_requirements(summary),
        gap_cascades=compute_gap_cascades(status_by_clause, info_by_clause, edges),
    )


# ============================================================================
# Main Function
# ============================================================================

def compute_ims_summary(
    org_id: str,
    project_id: Optional[str] = None,
    engine: Optional[Engine] = None,
    settings: Optional[Settings] = None,
) -> IMSSummary:
    """
    Integrated view of an organization's coverage across every active standard.

    The gap analysis and the edge read run concurrently; a failure in
    either propagates to the caller.

    Args:
        org_id: Organization whose evidence is analysed
        project_id: Only count evidence belonging to this project
        engine: Optional engine override
        settings: Optional settings override

    Returns:
        IMSSummary
    """
    settings = settings or load_settings()

    def _read_edges():
        with get_session(engine) as session:
            return fetch_clause_edges(session)

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="ims-read") as pool:
        gap_future = pool.submit(compute_gap_analysis, org_id, None, project_id, engine, settings)
        edges_future = pool.submit(_read_edges)

        summary = gap_future.result()
        edges = edges_future.result()

    result = build_ims_summary(summary, edges)

    logger.info(
        "IMS summary org=%s project=%s: %d clauses, %d unique requirements (%d%% efficiency), "
        "weighted readiness %d%%, %d cascades",
        org_id, project_id or "*",
        result.integration_score.total_clauses,
        result.integration_score.unique_requirements,
        result.integration_score.efficiency_percent,
        result.consolidated_readiness.weighted_score,
        len(result.gap_cascades),
    )
    return result
