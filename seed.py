"""
Catalog Seeding for the ISO Compliance Gap Analysis core

Seeds the shared reference data:
1. Standards (upsert by code)
2. Top-level HLS clauses 4-10 for every standard
3. Sub-clauses from iso_clauses.SUB_CLAUSES
4. Cross-references: generated HLS EQUIVALENT edges + curated links

Every step is idempotent; re-running only adds what is missing.
"""

import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from database import create_tables, get_session, retry_with_backoff
from iso_clauses import (
    COMMON_CLAUSE_TITLES,
    STANDARDS,
    SUB_CLAUSES,
    all_catalog_cross_references,
)
from models import ClauseCrossReference, Standard, StandardClause

logger = logging.getLogger(__name__)


def seed_standards(session: Session, standards: list = None) -> dict[str, Standard]:
    """
    Insert or update standards by code.

    Returns:
        Mapping of standard code to Standard row
    """
    seeded = {}

    for data in standards or STANDARDS:
        standard = session.exec(select(Standard).where(Standard.code == data["code"])).first()
        if standard is None:
            standard = Standard(**data)
            session.add(standard)
        else:
            standard.name = data["name"]
            standard.description = data.get("description")
            standard.version = data.get("version")
        seeded[data["code"]] = standard

    session.flush()
    return seeded


def seed_clauses(session: Session, standard: Standard, sub_clauses: list = None) -> int:
    """
    Seed top-level HLS clauses and the standard's sub-clauses.

    Args:
        session: Open session
        standard: Standard row (already flushed)
        sub_clauses: (parent number, number, title, description) tuples; defaults to the catalog

    Returns:
        Number of clauses created
    """
    existing = {
        c.clause_number: c
        for c in session.exec(
            select(StandardClause).where(StandardClause.standard_id == standard.id)
        ).all()
    }
    created = 0

    for clause_number, title in COMMON_CLAUSE_TITLES.items():
        if clause_number not in existing:
            clause = StandardClause(standard_id=standard.id, clause_number=clause_number, title=title)
            session.add(clause)
            existing[clause_number] = clause
            created += 1

    session.flush()

    if sub_clauses is None:
        sub_clauses = SUB_CLAUSES.get(standard.code, [])

    for parent_number, clause_number, title, description in sub_clauses:
        if clause_number in existing:
            continue
        parent = existing.get(parent_number)
        if parent is None:
            logger.warning(
                "Skipping %s %s: parent clause %s not found",
                standard.code, clause_number, parent_number,
            )
            continue
        clause = StandardClause(
            standard_id=standard.id,
            clause_number=clause_number,
            title=title,
            description=description,
            parent_id=parent.id,
        )
        session.add(clause)
        existing[clause_number] = clause
        created += 1

    session.flush()
    return created


def seed_cross_references(session: Session, references: list = None) -> tuple[int, int]:
    """
    Seed cross-references identified by (standard code, clause number) pairs.

    References whose clauses are missing, or whose ordered
    (source, target) pair already exists, are skipped.

    Returns:
        Tuple of (created, skipped)
    """
    rows = session.exec(
        select(StandardClause.id, StandardClause.clause_number, Standard.code)
        .join(Standard, Standard.id == StandardClause.standard_id)
    ).all()
    clause_ids = {(code, number): clause_id for clause_id, number, code in rows}

    existing_pairs = {
        (source_id, target_id)
        for source_id, target_id in session.exec(
            select(ClauseCrossReference.source_clause_id, ClauseCrossReference.target_clause_id)
        ).all()
    }

    created = 0
    skipped = 0

    for source_code, source_number, target_code, target_number, mapping_type, notes in (
        references if references is not None else all_catalog_cross_references()
    ):
        source_id = clause_ids.get((source_code, source_number))
        target_id = clause_ids.get((target_code, target_number))

        if source_id is None or target_id is None:
            logger.warning(
                "Skipping cross-reference %s %s -> %s %s: clause not found",
                source_code, source_number, target_code, target_number,
            )
            skipped += 1
            continue

        if (source_id, target_id) in existing_pairs:
            skipped += 1
            continue

        session.add(ClauseCrossReference(
            source_clause_id=source_id,
            target_clause_id=target_id,
            mapping_type=mapping_type,
            notes=notes,
        ))
        existing_pairs.add((source_id, target_id))
        created += 1

    session.flush()
    return created, skipped


def seed_catalog(engine: Optional[Engine] = None) -> dict:
    """
    Seed standards, clauses and cross-references in one transaction.

    Returns:
        dict with keys standards, clauses_created, cross_refs_created, cross_refs_skipped
    """
    def _seed():
        with get_session(engine) as session:
            standards = seed_standards(session)

            clauses_created = 0
            for code, standard in standards.items():
                count = seed_clauses(session, standard)
                clauses_created += count
                logger.info("Seeded %s (%s): %d new clauses", standard.name, code, count)

            created, skipped = seed_cross_references(session)
            session.commit()

        logger.info("Seeded %d cross-references (%d skipped)", created, skipped)
        return {
            "standards": len(standards),
            "clauses_created": clauses_created,
            "cross_refs_created": created,
            "cross_refs_skipped": skipped,
        }

    return retry_with_backoff(_seed)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    create_tables()
    result = seed_catalog()
    logger.info("Seeding complete: %s", result)
