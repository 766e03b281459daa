"""
Cross-Reference Graph and Browser for the ISO Compliance Gap Analysis core

The cross-reference graph is global reference data (never organization
scoped). Edges are stored directed but consumed undirected: every lookup
searches both source and target.

Read-models:
- count_cross_refs_by_clause: per-clause edge counts for gap analysis
- fetch_clause_edges: edges with both endpoints resolved, for integration scoring
- get_clause_cross_references: per-clause drill-down
- build_cross_reference_matrix: top-level clause x standard grid
- build_standard_overlap_counts: pairwise standard overlap matrix
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Optional

from sqlalchemy import func, or_
from sqlalchemy.engine import Engine
from sqlalchemy.orm import aliased
from sqlmodel import Session, col, select

from clause_catalog import list_active_standards, list_top_level_clauses
from config import Settings, load_settings
from database import get_session
from models import MAPPING_TYPE_ORDER, ClauseCrossReference, Standard, StandardClause

logger = logging.getLogger(__name__)


# ============================================================================
# Data Classes
# ============================================================================

@dataclass(frozen=True)
class EdgeRecord:
    source_clause_id: str
    target_clause_id: str
    mapping_type: str
    notes: Optional[str] = None


@dataclass(frozen=True)
class ClauseEndpoint:
    """One end of an edge: the clause and the standard it belongs to."""
    clause_id: str
    clause_number: str
    title: str
    standard_code: str
    standard_name: str


@dataclass(frozen=True)
class ClauseEdge:
    source: ClauseEndpoint
    target: ClauseEndpoint
    mapping_type: str
    notes: Optional[str] = None

    def other_end(self, clause_id: str) -> Optional[ClauseEndpoint]:
        """The endpoint opposite ``clause_id``, or None if the edge does not touch it."""
        if self.source.clause_id == clause_id:
            return self.target
        if self.target.clause_id == clause_id:
            return self.source
        return None


@dataclass
class CrossRefItem:
    """A cross-reference seen from one clause: the other clause's identity plus the edge type."""
    clause_id: str
    clause_number: str
    title: str
    standard_code: str
    standard_name: str
    mapping_type: str
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "clauseId": self.clause_id,
            "clauseNumber": self.clause_number,
            "title": self.title,
            "standardCode": self.standard_code,
            "standardName": self.standard_name,
            "mappingType": self.mapping_type,
            "notes": self.notes,
        }


@dataclass
class MatrixStandard:
    id: str
    code: str
    name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "code": self.code, "name": self.name}


@dataclass
class MatrixClause:
    id: str
    number: str
    title: str
    standard_id: str
    standard_code: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "number": self.number,
            "title": self.title,
            "standardId": self.standard_id,
            "standardCode": self.standard_code,
        }


@dataclass
class MatrixCrossRef:
    source_clause_id: str
    target_clause_id: str
    mapping_type: str
    source_standard_code: str
    target_standard_code: str
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "sourceClauseId": self.source_clause_id,
            "targetClauseId": self.target_clause_id,
            "mappingType": self.mapping_type,
            "sourceStandardCode": self.source_standard_code,
            "targetStandardCode": self.target_standard_code,
            "notes": self.notes,
        }


@dataclass
class CrossReferenceMatrixData:
    standards: list = field(default_factory=list)
    clauses: list = field(default_factory=list)
    cross_refs: list = field(default_factory=list)

    def mapping_types_at(self, clause_number: str, standard_code: str) -> list[str]:
        """
        Distinct mapping types on edges touching the (clause number, standard) cell,
        strongest first.
        """
        clause_ids = {
            c.id for c in self.clauses
            if c.number == clause_number and c.standard_code == standard_code
        }
        found = {
            ref.mapping_type for ref in self.cross_refs
            if ref.source_clause_id in clause_ids or ref.target_clause_id in clause_ids
        }
        return sorted(found, key=lambda t: MAPPING_TYPE_ORDER.get(t, len(MAPPING_TYPE_ORDER)))

    def to_dict(self) -> dict:
        return {
            "standards": [s.to_dict() for s in self.standards],
            "clauses": [c.to_dict() for c in self.clauses],
            "crossRefs": [r.to_dict() for r in self.cross_refs],
        }


@dataclass
class StandardOverlapData:
    standards: list = field(default_factory=list)
    # code -> code -> count; diagonal holds the standard's top-level clause count
    matrix: dict = field(default_factory=dict)
    # "A|B" (sorted codes) -> list of MatrixCrossRef
    details: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "standards": [s.to_dict() for s in self.standards],
            "matrix": {code: dict(row) for code, row in self.matrix.items()},
            "details": {key: [r.to_dict() for r in refs] for key, refs in self.details.items()},
        }


# ============================================================================
# Request-scoped Memo
# ============================================================================

class RequestMemo:
    """
    Explicit memo for one request's lifetime, keyed by function and arguments.

    Create one per request and drop it afterwards; nothing is shared
    between requests.
    """

    def __init__(self):
        self._results = {}

    def get_or_compute(self, fn, *args, **kwargs):
        key = (fn.__module__, fn.__qualname__, args, tuple(sorted(kwargs.items())))
        if key not in self._results:
            self._results[key] = fn(*args, **kwargs)
        else:
            logger.debug("Memo hit for %s", fn.__qualname__)
        return self._results[key]

    def clear(self):
        self._results.clear()

    def __len__(self) -> int:
        return len(self._results)


# ============================================================================
# Graph Queries
# ============================================================================

def fetch_all_edges(session: Session) -> list[EdgeRecord]:
    """Every cross-reference edge. Shared reference data, not organization scoped."""
    rows = session.exec(select(ClauseCrossReference).order_by(ClauseCrossReference.id)).all()
    return [
        EdgeRecord(
            source_clause_id=r.source_clause_id,
            target_clause_id=r.target_clause_id,
            mapping_type=r.mapping_type,
            notes=r.notes,
        )
        for r in rows
    ]


def count_cross_refs_by_clause(edges: Iterable[EdgeRecord]) -> dict[str, int]:
    """
    clause id -> number of edges touching it.

    Each edge adds one to its source and one to its target.
    """
    counts: dict[str, int] = defaultdict(int)
    for edge in edges:
        counts[edge.source_clause_id] += 1
        counts[edge.target_clause_id] += 1
    return dict(counts)


def fetch_neighbors(
    session: Session,
    clause_ids: list,
    mapping_type: Optional[str] = None,
) -> list[tuple[str, CrossRefItem]]:
    """
    Edges touching any of ``clause_ids`` in either direction.

    Returns:
        List of (anchor clause id, CrossRefItem describing the other clause);
        edges where the anchor is the source come first
    """
    if not clause_ids:
        return []

    other = aliased(StandardClause)
    other_standard = aliased(Standard)
    neighbors = []

    directions = (
        (ClauseCrossReference.source_clause_id, ClauseCrossReference.target_clause_id),
        (ClauseCrossReference.target_clause_id, ClauseCrossReference.source_clause_id),
    )

    for anchor_column, other_column in directions:
        statement = (
            select(ClauseCrossReference, other, other_standard)
            .join(other, other.id == other_column)
            .join(other_standard, other_standard.id == other.standard_id)
            .where(col(anchor_column).in_(clause_ids))
            .order_by(ClauseCrossReference.id)
        )
        if mapping_type:
            statement = statement.where(ClauseCrossReference.mapping_type == mapping_type)

        for edge, other_clause, standard in session.exec(statement).all():
            if other_clause.id == edge.source_clause_id:
                anchor_id = edge.target_clause_id
            else:
                anchor_id = edge.source_clause_id
            neighbors.append((anchor_id, CrossRefItem(
                clause_id=other_clause.id,
                clause_number=other_clause.clause_number,
                title=other_clause.title,
                standard_code=standard.code,
                standard_name=standard.name,
                mapping_type=edge.mapping_type,
                notes=edge.notes,
            )))

    return neighbors


def fetch_clause_edges(session: Session) -> list[ClauseEdge]:
    """Every edge with both endpoint clauses and their standards resolved."""
    source_clause = aliased(StandardClause)
    target_clause = aliased(StandardClause)
    source_standard = aliased(Standard)
    target_standard = aliased(Standard)

    statement = (
        select(ClauseCrossReference, source_clause, source_standard, target_clause, target_standard)
        .join(source_clause, source_clause.id == ClauseCrossReference.source_clause_id)
        .join(source_standard, source_standard.id == source_clause.standard_id)
        .join(target_clause, target_clause.id == ClauseCrossReference.target_clause_id)
        .join(target_standard, target_standard.id == target_clause.standard_id)
        .order_by(ClauseCrossReference.id)
    )

    def _endpoint(clause, standard) -> ClauseEndpoint:
        return ClauseEndpoint(
            clause_id=clause.id,
            clause_number=clause.clause_number,
            title=clause.title,
            standard_code=standard.code,
            standard_name=standard.name,
        )

    return [
        ClauseEdge(
            source=_endpoint(src, src_std),
            target=_endpoint(tgt, tgt_std),
            mapping_type=edge.mapping_type,
            notes=edge.notes,
        )
        for edge, src, src_std, tgt, tgt_std in session.exec(statement).all()
    ]


def sort_by_mapping_type(items: list, code_attr: str = "standard_code") -> list:
    """EQUIVALENT before RELATED before SUPPORTING, then by the other standard's code."""
    unknown_rank = len(MAPPING_TYPE_ORDER)
    return sorted(
        items,
        key=lambda item: (
            MAPPING_TYPE_ORDER.get(item.mapping_type, unknown_rank),
            getattr(item, code_attr),
        ),
    )


def _edges_with_standard_codes(session: Session, *conditions) -> list[MatrixCrossRef]:
    """Edges matching ``conditions`` together with both endpoint standard codes."""
    source_clause = aliased(StandardClause)
    target_clause = aliased(StandardClause)
    source_standard = aliased(Standard)
    target_standard = aliased(Standard)

    statement = (
        select(ClauseCrossReference, source_standard.code, target_standard.code)
        .join(source_clause, source_clause.id == ClauseCrossReference.source_clause_id)
        .join(source_standard, source_standard.id == source_clause.standard_id)
        .join(target_clause, target_clause.id == ClauseCrossReference.target_clause_id)
        .join(target_standard, target_standard.id == target_clause.standard_id)
        .order_by(ClauseCrossReference.id)
    )
    for condition in conditions:
        statement = statement.where(condition(source_clause, target_clause))

    return [
        MatrixCrossRef(
            source_clause_id=edge.source_clause_id,
            target_clause_id=edge.target_clause_id,
            mapping_type=edge.mapping_type,
            source_standard_code=source_code,
            target_standard_code=target_code,
            notes=edge.notes,
        )
        for edge, source_code, target_code in session.exec(statement).all()
    ]


# ============================================================================
# Public Operations
# ============================================================================

def get_clause_cross_references(clause_id: str, engine: Optional[Engine] = None) -> list[CrossRefItem]:
    """
    Every cross-reference touching a clause, seen from that clause.

    Args:
        clause_id: Clause to look up (matched as source or target)
        engine: Optional engine override

    Returns:
        CrossRefItems sorted EQUIVALENT, RELATED, SUPPORTING, then by standard code
    """
    with get_session(engine) as session:
        neighbors = fetch_neighbors(session, [clause_id])

    return sort_by_mapping_type([item for _, item in neighbors])


def _build_cross_reference_matrix(engine: Optional[Engine], natural_order: bool) -> CrossReferenceMatrixData:
    with get_session(engine) as session:
        standards = list_active_standards(session)
        top_level = list_top_level_clauses(session, [s.id for s in standards], natural_order)
        clause_ids = [clause.id for clause, _ in top_level]

        cross_refs = []
        if clause_ids:
            cross_refs = _edges_with_standard_codes(
                session,
                lambda source, target: or_(
                    col(ClauseCrossReference.source_clause_id).in_(clause_ids),
                    col(ClauseCrossReference.target_clause_id).in_(clause_ids),
                ),
            )

    logger.debug(
        "Cross-reference matrix: %d standards, %d clauses, %d edges",
        len(standards), len(top_level), len(cross_refs),
    )

    return CrossReferenceMatrixData(
        standards=[MatrixStandard(id=s.id, code=s.code, name=s.name) for s in standards],
        clauses=[
            MatrixClause(
                id=clause.id,
                number=clause.clause_number,
                title=clause.title,
                standard_id=clause.standard_id,
                standard_code=code,
            )
            for clause, code in top_level
        ],
        cross_refs=cross_refs,
    )


def build_cross_reference_matrix(
    engine: Optional[Engine] = None,
    memo: Optional[RequestMemo] = None,
    settings: Optional[Settings] = None,
) -> CrossReferenceMatrixData:
    """
    Active standards, their top-level clauses, and every edge touching
    one of those clauses (as source or target).

    Sub-clause granularity is intentionally ignored.
    """
    natural_order = (settings or load_settings()).natural_clause_order
    if memo is not None:
        return memo.get_or_compute(_build_cross_reference_matrix, engine, natural_order)
    return _build_cross_reference_matrix(engine, natural_order)


def _build_standard_overlap_counts(engine: Optional[Engine]) -> StandardOverlapData:
    with get_session(engine) as session:
        standards = list_active_standards(session)
        if not standards:
            return StandardOverlapData()

        standard_ids = [s.id for s in standards]
        matrix = {s.code: {other.code: 0 for other in standards} for s in standards}
        details: dict[str, list] = {}

        clause_counts = session.exec(
            select(StandardClause.standard_id, func.count())
            .where(col(StandardClause.standard_id).in_(standard_ids))
            .where(col(StandardClause.parent_id).is_(None))
            .group_by(StandardClause.standard_id)
        ).all()

        code_by_id = {s.id: s.code for s in standards}
        for standard_id, count in clause_counts:
            code = code_by_id[standard_id]
            matrix[code][code] = count

        cross_refs = _edges_with_standard_codes(
            session,
            lambda source, target: source.standard_id.in_(standard_ids),
            lambda source, target: target.standard_id.in_(standard_ids),
        )

    for ref in cross_refs:
        source_code = ref.source_standard_code
        target_code = ref.target_standard_code
        if source_code == target_code:
            continue

        matrix[source_code][target_code] += 1
        matrix[target_code][source_code] += 1

        key = "|".join(sorted([source_code, target_code]))
        details.setdefault(key, []).append(ref)

    return StandardOverlapData(
        standards=[MatrixStandard(id=s.id, code=s.code, name=s.name) for s in standards],
        matrix=matrix,
        details=details,
    )


def build_standard_overlap_counts(
    engine: Optional[Engine] = None,
    memo: Optional[RequestMemo] = None,
) -> StandardOverlapData:
    """
    N x N overlap matrix over active standards.

    Diagonal cells hold the standard's own top-level clause count.
    Off-diagonal (A, B) counts edges between clauses of A and B,
    incremented symmetrically; same-standard edges are excluded.
    ``details`` groups those edges under the sorted "A|B" key.
    """
    if memo is not None:
        return memo.get_or_compute(_build_standard_overlap_counts, engine)
    return _build_standard_overlap_counts(engine)
