"""
Evidence Aggregators for the ISO Compliance Gap Analysis core

Two independent, tenant-scoped evidence signals per clause:
- A: verified document classifications (documents not archived/expired)
- B: checklist item compliance outcomes (items linked to a clause)

Queries are always filtered by organization (and optionally project)
before clause ids are used.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional

from sqlmodel import Session, col, select

from config import DEFAULT_EXCLUDED_DOCUMENT_STATUSES
from models import Checklist, ChecklistItem, Document, DocumentClassification


@dataclass
class ChecklistTally:
    """Checklist outcomes for one clause."""
    compliant: int = 0
    total: int = 0


# ============================================================================
# Queries
# ============================================================================

def fetch_verified_classifications(
    session: Session,
    org_id: str,
    project_id: Optional[str] = None,
    excluded_statuses: Iterable[str] = DEFAULT_EXCLUDED_DOCUMENT_STATUSES,
) -> list[str]:
    """
    Clause ids of verified classifications on the organization's live documents.

    One entry per classification, so a clause addressed by three
    documents appears three times.
    """
    statement = (
        select(DocumentClassification.standard_clause_id)
        .join(Document, Document.id == DocumentClassification.document_id)
        .where(Document.organization_id == org_id)
        .where(DocumentClassification.is_verified == True)  # noqa: E712
        .where(col(Document.status).not_in(list(excluded_statuses)))
    )
    if project_id:
        statement = statement.where(Document.project_id == project_id)

    return list(session.exec(statement).all())


def fetch_clause_checklist_items(
    session: Session,
    org_id: str,
    project_id: Optional[str] = None,
) -> list[tuple[str, Optional[bool]]]:
    """
    (clause id, is_compliant) for clause-linked items on the organization's checklists.
    """
    statement = (
        select(ChecklistItem.standard_clause_id, ChecklistItem.is_compliant)
        .join(Checklist, Checklist.id == ChecklistItem.checklist_id)
        .where(Checklist.organization_id == org_id)
        .where(col(ChecklistItem.standard_clause_id).is_not(None))
    )
    if project_id:
        statement = statement.where(Checklist.project_id == project_id)

    return [(clause_id, is_compliant) for clause_id, is_compliant in session.exec(statement).all()]


# ============================================================================
# Lookup Maps
# ============================================================================

def count_documents_by_clause(clause_ids: Iterable[str]) -> dict[str, int]:
    """clause id -> number of verified classifications."""
    return dict(Counter(clause_ids))


def tally_checklist_by_clause(items: Iterable[tuple[str, Optional[bool]]]) -> dict[str, ChecklistTally]:
    """
    clause id -> ChecklistTally.

    Every linked item counts toward ``total``; only ``is_compliant is True``
    counts toward ``compliant`` (unassessed and non-compliant do not).
    """
    tallies: dict[str, ChecklistTally] = {}

    for clause_id, is_compliant in items:
        if not clause_id:
            continue
        tally = tallies.setdefault(clause_id, ChecklistTally())
        tally.total += 1
        if is_compliant is True:
            tally.compliant += 1

    return tallies
