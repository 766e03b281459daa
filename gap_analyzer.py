"""
ISO Gap Analyzer for the Compliance Gap Analysis core

Computes clause coverage for one organization from two evidence signals:
- verified document classifications
- compliant checklist assessments

Each leaf clause is COVERED (both signals), PARTIAL (one signal) or
GAP (none). Leaf statuses roll up to top-level clauses, standards and
an overall summary. Cross-reference counts from the shared clause
graph are attached to every leaf as an integration signal.
"""

import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy.engine import Engine

from clause_catalog import ClauseTree, StandardWithClauses, list_active_standards_with_clauses
from config import Settings, load_settings
from cross_references import EdgeRecord, count_cross_refs_by_clause, fetch_all_edges
from database import get_session
from evidence import (
    ChecklistTally,
    count_documents_by_clause,
    fetch_clause_checklist_items,
    fetch_verified_classifications,
    tally_checklist_by_clause,
)

logger = logging.getLogger(__name__)


# Coverage statuses
COVERED = "COVERED"
PARTIAL = "PARTIAL"
GAP = "GAP"

# Strongest first
COVERAGE_STATUSES = [COVERED, PARTIAL, GAP]

STATUS_ICONS = {COVERED: "✅", PARTIAL: "⚠️", GAP: "❌"}


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class ClauseGapData:
    """Coverage of one leaf clause."""
    clause_id: str
    clause_number: str
    title: str
    description: Optional[str]
    status: str
    doc_count: int = 0
    checklist_compliant_count: int = 0
    checklist_total_count: int = 0
    cross_ref_count: int = 0

    def to_dict(self) -> dict:
        return {
            "clauseId": self.clause_id,
            "clauseNumber": self.clause_number,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "docCount": self.doc_count,
            "checklistCompliantCount": self.checklist_compliant_count,
            "checklistTotalCount": self.checklist_total_count,
            "crossRefCount": self.cross_ref_count,
        }


@dataclass
class TopLevelClauseGap:
    """A top-level clause with its rolled-up status and ordered children."""
    clause_id: str
    clause_number: str
    title: str
    description: Optional[str]
    status: str
    children: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "clauseId": self.clause_id,
            "clauseNumber": self.clause_number,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "children": [c.to_dict() for c in self.children],
        }


@dataclass
class StandardGapAnalysis:
    standard_id: str
    code: str
    name: str
    coverage_percent: int = 0
    total_sub_clauses: int = 0
    covered: int = 0
    partial: int = 0
    gaps: int = 0
    clauses: list = field(default_factory=list)

    def leaf_clauses(self) -> list:
        """Every ClauseGapData rendered under this standard, in order."""
        return [child for group in self.clauses for child in group.children]

    def to_dict(self) -> dict:
        return {
            "standardId": self.standard_id,
            "code": self.code,
            "name": self.name,
            "coveragePercent": self.coverage_percent,
            "totalSubClauses": self.total_sub_clauses,
            "covered": self.covered,
            "partial": self.partial,
            "gaps": self.gaps,
            "clauses": [c.to_dict() for c in self.clauses],
        }


@dataclass
class GapAnalysisSummary:
    total_sub_clauses: int = 0
    covered: int = 0
    partial: int = 0
    gaps: int = 0
    overall_coverage_percent: int = 0
    standards: list = field(default_factory=list)

    def clause_status_map(self) -> dict[str, str]:
        """clause id -> status for every rendered leaf clause."""
        return {
            leaf.clause_id: leaf.status
            for standard in self.standards
            for leaf in standard.leaf_clauses()
        }

    def to_dict(self) -> dict:
        return {
            "totalSubClauses": self.total_sub_clauses,
            "covered": self.covered,
            "partial": self.partial,
            "gaps": self.gaps,
            "overallCoveragePercent": self.overall_coverage_percent,
            "standards": [s.to_dict() for s in self.standards],
        }


@dataclass
class EvidenceMaps:
    """Per-request lookup maps keyed by clause id."""
    doc_count_by_clause: dict = field(default_factory=dict)
    checklist_by_clause: dict = field(default_factory=dict)
    cross_ref_by_clause: dict = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        classification_clause_ids: Iterable[str],
        checklist_items: Iterable[tuple],
        edges: Iterable[EdgeRecord],
    ) -> "EvidenceMaps":
        return cls(
            doc_count_by_clause=count_documents_by_clause(classification_clause_ids),
            checklist_by_clause=tally_checklist_by_clause(checklist_items),
            cross_ref_by_clause=count_cross_refs_by_clause(edges),
        )

    def clause_gap(self, clause) -> ClauseGapData:
        """Score one clause record against the evidence."""
        doc_count = self.doc_count_by_clause.get(clause.id, 0)
        tally = self.checklist_by_clause.get(clause.id, ChecklistTally())

        return ClauseGapData(
            clause_id=clause.id,
            clause_number=clause.clause_number,
            title=clause.title,
            description=clause.description,
            status=classify_clause(doc_count, tally.compliant),
            doc_count=doc_count,
            checklist_compliant_count=tally.compliant,
            checklist_total_count=tally.total,
            cross_ref_count=self.cross_ref_by_clause.get(clause.id, 0),
        )


# ============================================================================
# Scoring Rules
# ============================================================================

def round_half_up(value: float) -> int:
    """Round .5 upwards, matching the JavaScript Math.round used by the dashboards."""
    return int(math.floor(value + 0.5))


def coverage_percent(covered: int, total: int) -> int:
    """Percentage of covered leaves, 0 when there are no leaves."""
    if total <= 0:
        return 0
    return round_half_up(covered / total * 100)


def classify_clause(doc_count: int, compliant_count: int) -> str:
    """
    Full coverage needs verified documentary evidence AND at least one
    compliant checklist assessment; either alone is PARTIAL.
    """
    has_doc = doc_count > 0
    has_compliant = compliant_count > 0

    if has_doc and has_compliant:
        return COVERED
    if has_doc or has_compliant:
        return PARTIAL
    return GAP


def roll_up_status(child_statuses: list) -> str:
    """COVERED if all children are, GAP if all children are, otherwise PARTIAL."""
    if not child_statuses:
        return GAP
    if all(s == COVERED for s in child_statuses):
        return COVERED
    if all(s == GAP for s in child_statuses):
        return GAP
    return PARTIAL


# ============================================================================
# Aggregation
# ============================================================================

def analyze_standard(standard: StandardWithClauses, evidence: EvidenceMaps) -> StandardGapAnalysis:
    """
    Score one standard.

    With sub-clauses, each top-level clause groups its children and
    childless top-level clauses are left out. Without sub-clauses every
    top-level clause is its own single leaf.
    """
    tree = ClauseTree(standard.clauses)
    groups = []

    if tree.has_sub_clauses:
        for parent in tree.top_level:
            children = [evidence.clause_gap(c) for c in tree.children_of(parent.id)]
            if not children:
                continue
            groups.append(TopLevelClauseGap(
                clause_id=parent.id,
                clause_number=parent.clause_number,
                title=parent.title,
                description=parent.description,
                status=roll_up_status([c.status for c in children]),
                children=children,
            ))
    else:
        for clause in tree.top_level:
            leaf = evidence.clause_gap(clause)
            groups.append(TopLevelClauseGap(
                clause_id=clause.id,
                clause_number=clause.clause_number,
                title=clause.title,
                description=clause.description,
                status=leaf.status,
                children=[leaf],
            ))

    # Totals come from the full leaf set, including sub-clauses without a rendered parent
    leaf_statuses = [evidence.clause_gap(c).status for c in tree.leaves]
    covered = leaf_statuses.count(COVERED)
    total = len(leaf_statuses)

    return StandardGapAnalysis(
        standard_id=standard.id,
        code=standard.code,
        name=standard.name,
        coverage_percent=coverage_percent(covered, total),
        total_sub_clauses=total,
        covered=covered,
        partial=leaf_statuses.count(PARTIAL),
        gaps=leaf_statuses.count(GAP),
        clauses=groups,
    )


def summarize(standard_results: list) -> GapAnalysisSummary:
    """Sum standard-level counts into the overall summary."""
    total = sum(s.total_sub_clauses for s in standard_results)
    covered = sum(s.covered for s in standard_results)

    return GapAnalysisSummary(
        total_sub_clauses=total,
        covered=covered,
        partial=sum(s.partial for s in standard_results),
        gaps=sum(s.gaps for s in standard_results),
        overall_coverage_percent=coverage_percent(covered, total),
        standards=list(standard_results),
    )


def build_gap_summary(
    standards: list,
    classification_clause_ids: Iterable[str],
    checklist_items: Iterable[tuple],
    edges: Iterable[EdgeRecord],
) -> GapAnalysisSummary:
    """
    Pure aggregation step: no I/O, deterministic for identical inputs.

    Args:
        standards: StandardWithClauses list (ordered)
        classification_clause_ids: One clause id per verified classification
        checklist_items: (clause id, is_compliant) pairs
        edges: Cross-reference edges

    Returns:
        GapAnalysisSummary
    """
    evidence = EvidenceMaps.build(classification_clause_ids, checklist_items, edges)
    return summarize([analyze_standard(std, evidence) for std in standards])


# ============================================================================
# Main Analysis Function
# ============================================================================

def fetch_gap_inputs(
    org_id: str,
    standard_code: Optional[str] = None,
    project_id: Optional[str] = None,
    engine: Optional[Engine] = None,
    settings: Optional[Settings] = None,
) -> tuple[list, list, list, list]:
    """
    Run the four independent reads concurrently, one session each.

    Any query failure propagates unchanged from ``Future.result()``.

    Returns:
        Tuple of (standards, classification clause ids, checklist items, edges)
    """
    settings = settings or load_settings()

    def _read(query, *args):
        with get_session(engine) as session:
            return query(session, *args)

    started = time.perf_counter()

    with ThreadPoolExecutor(max_workers=settings.query_workers, thread_name_prefix="gap-read") as pool:
        standards_future = pool.submit(
            _read, list_active_standards_with_clauses, standard_code, settings.natural_clause_order
        )
        classifications_future = pool.submit(
            _read, fetch_verified_classifications, org_id, project_id, settings.excluded_document_statuses
        )
        checklist_future = pool.submit(_read, fetch_clause_checklist_items, org_id, project_id)
        edges_future = pool.submit(_read, fetch_all_edges)

        standards = standards_future.result()
        classifications = classifications_future.result()
        checklist_items = checklist_future.result()
        edges = edges_future.result()

    logger.debug(
        "Gap inputs for org %s fetched in %.1fms: %d standards, %d classifications, "
        "%d checklist items, %d edges",
        org_id, (time.perf_counter() - started) * 1000,
        len(standards), len(classifications), len(checklist_items), len(edges),
    )

    return standards, classifications, checklist_items, edges


def compute_gap_analysis(
    org_id: str,
    standard_code: Optional[str] = None,
    project_id: Optional[str] = None,
    engine: Optional[Engine] = None,
    settings: Optional[Settings] = None,
) -> GapAnalysisSummary:
    """
    Compute clause coverage for an organization.

    The caller is responsible for having authenticated ``org_id``.
    Missing data yields zero counts and 0% coverage; storage errors
    propagate to the caller.

    Args:
        org_id: Organization whose evidence is analysed
        standard_code: Only analyse this standard (e.g. "ISO9001")
        project_id: Only count evidence belonging to this project
        engine: Optional engine override
        settings: Optional settings override

    Returns:
        GapAnalysisSummary
    """
    standards, classifications, checklist_items, edges = fetch_gap_inputs(
        org_id, standard_code, project_id, engine, settings
    )
    summary = build_gap_summary(standards, classifications, checklist_items, edges)

    logger.info(
        "Gap analysis org=%s standard=%s project=%s: %d/%d covered (%d%%)",
        org_id, standard_code or "*", project_id or "*",
        summary.covered, summary.total_sub_clauses, summary.overall_coverage_percent,
    )
    return summary


# ============================================================================
# Report Generation
# ============================================================================

def generate_gap_report(
    summary: GapAnalysisSummary,
    organization_name: Optional[str] = None,
    generated_at: Optional[datetime] = None,
) -> str:
    """
    Generate a markdown gap analysis report.

    Args:
        summary: GapAnalysisSummary object
        organization_name: Shown in the header when given
        generated_at: Report timestamp (defaults to now)

    Returns:
        Markdown formatted report string
    """
    now = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")

    report = "# Gap Analysis Report\n\n"
    if organization_name:
        report += f"**Organization:** {organization_name}\n"
    report += f"""**Analyzed:** {now}
**Standards:** {len(summary.standards)}

## Overall Coverage: {summary.overall_coverage_percent}%

- Covered: {summary.covered}
- Partial: {summary.partial}
- Gaps: {summary.gaps}
- Total clauses: {summary.total_sub_clauses}

"""

    if summary.standards:
        report += "| Standard | Coverage | Covered | Partial | Gaps | Total |\n"
        report += "|---|---|---|---|---|---|\n"
        for std in summary.standards:
            report += (
                f"| {std.name} | {std.coverage_percent}% | {std.covered} | "
                f"{std.partial} | {std.gaps} | {std.total_sub_clauses} |\n"
            )
        report += "\n"

    for std in summary.standards:
        report += f"### {std.name} ({std.code})\n\n"
        if not std.clauses:
            report += "_No clauses in catalog._\n\n"
            continue

        for group in std.clauses:
            report += f"- {STATUS_ICONS[group.status]} **{group.clause_number} {group.title}** ({group.status})\n"
            for child in group.children:
                if child.status == COVERED:
                    continue
                report += (
                    f"  - {STATUS_ICONS[child.status]} {child.clause_number} {child.title}: "
                    f"{child.doc_count} verified docs, "
                    f"{child.checklist_compliant_count}/{child.checklist_total_count} compliant checks"
                )
                if child.cross_ref_count:
                    report += f", {child.cross_ref_count} cross-references"
                report += "\n"
        report += "\n"

    if summary.total_sub_clauses == 0:
        report += "**Status:** No active standards to assess.\n"
    elif summary.gaps == 0 and summary.partial == 0:
        report += "**Status:** ✅ FULLY COVERED\n\nEvery clause has verified documents and compliant checks.\n"
    elif summary.gaps == 0:
        report += "**Status:** ⚠️ PARTIALLY COVERED\n\nNo open gaps, but some clauses lack one evidence type.\n"
    else:
        report += f"**Status:** ❌ {summary.gaps} GAPS\n\nClauses without any evidence must be addressed before audit.\n"

    return report
