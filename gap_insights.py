"""
Gap Insights built on top of the gap analysis engine

- Document gap insights: what a document covers and what remains open
- Dashboard gap summary: per-standard gap counts, worst first
- Equivalent gaps: status of clauses cross-referenced from a clause
- Cross-standard suggestions: EQUIVALENT clauses a document could also
  be classified against
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from config import Settings
from cross_references import fetch_neighbors, sort_by_mapping_type
from database import get_session
from gap_analyzer import GAP, compute_gap_analysis
from models import Document, DocumentClassification, Standard, StandardClause


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class GapInsight:
    standard_code: str
    standard_name: str
    coverage_percent: int
    covered: int
    partial: int
    gaps: int
    total_clauses: int
    covered_by_this_doc: list = field(default_factory=list)
    remaining_gaps: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "standardCode": self.standard_code,
            "standardName": self.standard_name,
            "coveragePercent": self.coverage_percent,
            "covered": self.covered,
            "partial": self.partial,
            "gaps": self.gaps,
            "totalClauses": self.total_clauses,
            "coveredByThisDoc": list(self.covered_by_this_doc),
            "remainingGaps": list(self.remaining_gaps),
        }


@dataclass
class DashboardGapSummary:
    overall_coverage_percent: int = 0
    total_gaps: int = 0
    total_clauses: int = 0
    standards: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "overallCoveragePercent": self.overall_coverage_percent,
            "totalGaps": self.total_gaps,
            "totalClauses": self.total_clauses,
            "standards": list(self.standards),
        }


@dataclass
class EquivalentGap:
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
class DocumentSuggestion:
    """An EQUIVALENT clause in another standard a document could be classified against."""
    source_clause_id: str
    source_clause_number: str
    source_standard_code: str
    source_confidence: float
    suggested_clause_id: str
    suggested_clause_number: str
    suggested_clause_title: str
    suggested_standard_code: str
    suggested_standard_name: str
    already_classified: bool

    def to_dict(self) -> dict:
        return {
            "sourceClauseId": self.source_clause_id,
            "sourceClauseNumber": self.source_clause_number,
            "sourceStandardCode": self.source_standard_code,
            "sourceConfidence": self.source_confidence,
            "suggestedClauseId": self.suggested_clause_id,
            "suggestedClauseNumber": self.suggested_clause_number,
            "suggestedClauseTitle": self.suggested_clause_title,
            "suggestedStandardCode": self.suggested_standard_code,
            "suggestedStandardName": self.suggested_standard_name,
            "alreadyClassified": self.already_classified,
        }


# ============================================================================
# Queries
# ============================================================================

def _document_classifications(session: Session, document_id: str, org_id: str) -> list[tuple]:
    """
    (clause id, confidence, clause number, standard code) for every
    classification of an organization's document, verified or not.
    """
    statement = (
        select(
            DocumentClassification.standard_clause_id,
            DocumentClassification.confidence,
            StandardClause.clause_number,
            Standard.code,
        )
        .join(Document, Document.id == DocumentClassification.document_id)
        .join(StandardClause, StandardClause.id == DocumentClassification.standard_clause_id)
        .join(Standard, Standard.id == StandardClause.standard_id)
        .where(DocumentClassification.document_id == document_id)
        .where(Document.organization_id == org_id)
        .order_by(Standard.code, StandardClause.clause_number)
    )
    return [tuple(row) for row in session.exec(statement).all()]


# ============================================================================
# Public Operations
# ============================================================================

def get_gap_insights_for_document(
    document_id: str,
    org_id: str,
    engine: Optional[Engine] = None,
    settings: Optional[Settings] = None,
) -> list[GapInsight]:
    """
    For every standard a document is classified against, report the
    standard's coverage, the leaf clauses this document addresses, and
    the clauses still in GAP.

    Returns:
        One GapInsight per standard, ordered by standard code; empty when
        the document has no classifications
    """
    with get_session(engine) as session:
        classifications = _document_classifications(session, document_id, org_id)

    if not classifications:
        return []

    doc_clauses_by_standard: dict[str, set] = {}
    for _, _, clause_number, code in classifications:
        doc_clauses_by_standard.setdefault(code, set()).add(clause_number)

    insights = []
    for code, doc_clauses in doc_clauses_by_standard.items():
        analysis = compute_gap_analysis(org_id, standard_code=code, engine=engine, settings=settings)
        if not analysis.standards:
            continue
        std = analysis.standards[0]
        leaves = std.leaf_clauses()

        insights.append(GapInsight(
            standard_code=std.code,
            standard_name=std.name,
            coverage_percent=std.coverage_percent,
            covered=std.covered,
            partial=std.partial,
            gaps=std.gaps,
            total_clauses=std.total_sub_clauses,
            covered_by_this_doc=[
                {"clauseNumber": c.clause_number, "title": c.title}
                for c in leaves if c.clause_number in doc_clauses
            ],
            remaining_gaps=[
                {"clauseNumber": c.clause_number, "title": c.title}
                for c in leaves if c.status == GAP
            ],
        ))

    return insights


def get_gap_summary_for_dashboard(
    org_id: str,
    engine: Optional[Engine] = None,
    settings: Optional[Settings] = None,
) -> DashboardGapSummary:
    """Overall coverage plus per-standard gap counts, most gaps first."""
    analysis = compute_gap_analysis(org_id, engine=engine, settings=settings)

    standards = [
        {
            "code": s.code,
            "name": s.name,
            "coveragePercent": s.coverage_percent,
            "gaps": s.gaps,
            "totalClauses": s.total_sub_clauses,
        }
        for s in analysis.standards
    ]
    standards.sort(key=lambda s: s["gaps"], reverse=True)

    return DashboardGapSummary(
        overall_coverage_percent=analysis.overall_coverage_percent,
        total_gaps=analysis.gaps,
        total_clauses=analysis.total_sub_clauses,
        standards=standards,
    )


def get_equivalent_gaps_for_clause(
    clause_id: str,
    org_id: str,
    engine: Optional[Engine] = None,
    settings: Optional[Settings] = None,
) -> list[EquivalentGap]:
    """
    Clauses cross-referenced from ``clause_id`` with their current coverage.

    Clauses missing from the analysis (inactive standards, unrendered
    clauses) are reported as GAP.
    """
    def _neighbors():
        with get_session(engine) as session:
            return fetch_neighbors(session, [clause_id])

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="equivalent-gaps") as pool:
        neighbors_future = pool.submit(_neighbors)
        analysis_future = pool.submit(compute_gap_analysis, org_id, None, None, engine, settings)
        neighbors = neighbors_future.result()
        status_by_clause = analysis_future.result().clause_status_map()

    results = [
        EquivalentGap(
            clause_id=item.clause_id,
            clause_number=item.clause_number,
            title=item.title,
            standard_code=item.standard_code,
            standard_name=item.standard_name,
            status=status_by_clause.get(item.clause_id, GAP),
            mapping_type=item.mapping_type,
        )
        for _, item in neighbors
    ]
    return sort_by_mapping_type(results)


def get_document_cross_standard_suggestions(
    document_id: str,
    org_id: str,
    engine: Optional[Engine] = None,
) -> list[DocumentSuggestion]:
    """
    EQUIVALENT clauses in other standards for each clause the document
    is classified against.

    Each (classified clause, suggested clause) pair appears once.
    Suggestions not yet classified come first, then by standard code.
    """
    with get_session(engine) as session:
        classifications = _document_classifications(session, document_id, org_id)
        if not classifications:
            return []

        by_clause = {row[0]: row for row in classifications}
        neighbors = fetch_neighbors(session, list(by_clause), mapping_type="EQUIVALENT")

    classified = set(by_clause)
    seen_pairs = set()
    suggestions = []

    for anchor_id, item in neighbors:
        pair = (anchor_id, item.clause_id)
        if pair in seen_pairs:
            continue
        seen_pairs.add(pair)

        _, confidence, clause_number, code = by_clause[anchor_id]
        if item.standard_code == code:
            continue

        suggestions.append(DocumentSuggestion(
            source_clause_id=anchor_id,
            source_clause_number=clause_number,
            source_standard_code=code,
            source_confidence=confidence,
            suggested_clause_id=item.clause_id,
            suggested_clause_number=item.clause_number,
            suggested_clause_title=item.title,
            suggested_standard_code=item.standard_code,
            suggested_standard_name=item.standard_name,
            already_classified=item.clause_id in classified,
        ))

    suggestions.sort(key=lambda s: (s.already_classified, s.suggested_standard_code))
    return suggestions
