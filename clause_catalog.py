"""
Clause Catalog access for the ISO Compliance Gap Analysis core

Read-only views over the shared reference data:
- Active standards with their ordered clause lists
- Explicit clause tree (arena of records + parent index) built once per request
- Clause-number ordering (string order by default, natural order opt-in)
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Optional

from sqlmodel import Session, col, select

from models import Standard, StandardClause


# ============================================================================
# Data Classes
# ============================================================================

@dataclass(frozen=True)
class ClauseRecord:
    """Detached, immutable copy of a StandardClause row."""
    id: str
    standard_id: str
    clause_number: str
    title: str
    description: Optional[str] = None
    parent_id: Optional[str] = None

    @classmethod
    def from_row(cls, row: StandardClause) -> "ClauseRecord":
        return cls(
            id=row.id,
            standard_id=row.standard_id,
            clause_number=row.clause_number,
            title=row.title,
            description=row.description,
            parent_id=row.parent_id,
        )


@dataclass
class StandardWithClauses:
    """An active standard with its full, ordered clause list."""
    id: str
    code: str
    name: str
    clauses: list = field(default_factory=list)


class ClauseTree:
    """
    Two-level clause hierarchy of one standard.

    Children keep the order of the clause list the tree was built from.
    """

    def __init__(self, clauses: list):
        self.by_id = {c.id: c for c in clauses}
        self.top_level = [c for c in clauses if c.parent_id is None]
        self.sub_clauses = [c for c in clauses if c.parent_id is not None]

        self._children = defaultdict(list)
        for clause in self.sub_clauses:
            self._children[clause.parent_id].append(clause)

    @property
    def has_sub_clauses(self) -> bool:
        return len(self.sub_clauses) > 0

    @property
    def leaves(self) -> list:
        """Sub-clauses when the standard has any, otherwise its top-level clauses."""
        return self.sub_clauses if self.has_sub_clauses else self.top_level

    def children_of(self, parent_id: str) -> list:
        return list(self._children.get(parent_id, []))


# ============================================================================
# Clause Ordering
# ============================================================================

def lexicographic_clause_key(clause_number: str) -> str:
    """Plain string order: "10" < "4" and "4.10" < "4.2"."""
    return clause_number


def natural_clause_key(clause_number: str) -> tuple:
    """
    Numeric dotted-segment order: "4.2" < "4.10" < "10".

    Non-numeric segments sort after numeric ones at the same depth.
    """
    return tuple(
        (0, int(part), "") if part.isdigit() else (1, 0, part)
        for part in clause_number.split(".")
    )


def clause_sort_key(natural_order: bool = False) -> Callable[[str], object]:
    return natural_clause_key if natural_order else lexicographic_clause_key


# ============================================================================
# Queries
# ============================================================================

def list_active_standards(session: Session, filter_by_code: Optional[str] = None) -> list[Standard]:
    """Active standards ordered by code, optionally restricted to one code."""
    statement = select(Standard).where(Standard.is_active == True)  # noqa: E712
    if filter_by_code:
        statement = statement.where(Standard.code == filter_by_code)
    return list(session.exec(statement.order_by(Standard.code)).all())


def list_active_standards_with_clauses(
    session: Session,
    filter_by_code: Optional[str] = None,
    natural_order: bool = False,
) -> list[StandardWithClauses]:
    """
    Fetch active standards, each carrying its full ordered clause list.

    Args:
        session: Open session
        filter_by_code: Only return the standard with this code
        natural_order: Sort clause numbers by numeric segments instead of string order

    Returns:
        List of StandardWithClauses ordered by standard code
    """
    standards = list_active_standards(session, filter_by_code)
    if not standards:
        return []

    rows = session.exec(
        select(StandardClause).where(col(StandardClause.standard_id).in_([s.id for s in standards]))
    ).all()

    by_standard = defaultdict(list)
    for row in rows:
        by_standard[row.standard_id].append(ClauseRecord.from_row(row))

    sort_key = clause_sort_key(natural_order)
    result = []
    for standard in standards:
        clauses = sorted(by_standard.get(standard.id, []), key=lambda c: sort_key(c.clause_number))
        result.append(StandardWithClauses(
            id=standard.id,
            code=standard.code,
            name=standard.name,
            clauses=clauses,
        ))

    return result


def list_top_level_clauses(
    session: Session,
    standard_ids: list,
    natural_order: bool = False,
) -> list[tuple[ClauseRecord, str]]:
    """
    Top-level clauses (parent_id null) of the given standards.

    Returns:
        List of (ClauseRecord, standard code) ordered by clause number,
        then standard code
    """
    if not standard_ids:
        return []

    rows = session.exec(
        select(StandardClause, Standard.code)
        .join(Standard, Standard.id == StandardClause.standard_id)
        .where(col(StandardClause.standard_id).in_(standard_ids))
        .where(col(StandardClause.parent_id).is_(None))
    ).all()

    sort_key = clause_sort_key(natural_order)
    records = [(ClauseRecord.from_row(clause), code) for clause, code in rows]
    return sorted(records, key=lambda pair: (sort_key(pair[0].clause_number), pair[1]))


def get_clause(session: Session, clause_id: str) -> Optional[ClauseRecord]:
    row = session.get(StandardClause, clause_id)
    return ClauseRecord.from_row(row) if row else None
