"""
Tests for catalog seeding and the static clause tables.
"""

import logging

from sqlalchemy import func
from sqlmodel import select

from iso_clauses import (
    COMMON_CLAUSE_TITLES,
    COMMON_HLS_SUB_CLAUSES,
    DOMAIN_CROSS_REFERENCES,
    STANDARDS,
    SUB_CLAUSES,
    generate_hls_cross_references,
)
from models import STANDARD_CODES, ClauseCrossReference, Standard, StandardClause
from seed import seed_catalog, seed_clauses, seed_cross_references, seed_standards


def test_catalog_tables_cover_every_standard():
    assert [s["code"] for s in STANDARDS] == STANDARD_CODES
    assert set(SUB_CLAUSES) == set(STANDARD_CODES)
    assert list(COMMON_CLAUSE_TITLES) == ["4", "5", "6", "7", "8", "9", "10"]


def test_common_sub_clauses_exist_in_every_standard():
    for code, rows in SUB_CLAUSES.items():
        numbers = {number for _, number, _, _ in rows}
        assert set(COMMON_HLS_SUB_CLAUSES) <= numbers, code


def test_sub_clause_parents_are_top_level_clauses():
    for rows in SUB_CLAUSES.values():
        for parent, number, _, _ in rows:
            assert parent in COMMON_CLAUSE_TITLES
            assert number.split(".")[0] == parent


def test_hls_generation_pairs_every_standard_once():
    refs = generate_hls_cross_references()

    assert len(refs) == 21 * len(COMMON_HLS_SUB_CLAUSES) == 441
    assert all(ref[4] == "EQUIVALENT" and ref[5] is None for ref in refs)
    assert refs[0] == ("ISO9001", "4.1", "ISO14001", "4.1", "EQUIVALENT", None)
    # Source is always the earlier standard in canonical order
    assert all(STANDARD_CODES.index(ref[0]) < STANDARD_CODES.index(ref[2]) for ref in refs)


def test_hls_generation_for_subset():
    refs = generate_hls_cross_references(["ISO9001", "ISO27001"])

    assert len(refs) == len(COMMON_HLS_SUB_CLAUSES)
    assert {(ref[0], ref[2]) for ref in refs} == {("ISO9001", "ISO27001")}


def test_seed_catalog_counts(engine, test_db, seeded_catalog):
    expected_clauses = sum(len(COMMON_CLAUSE_TITLES) + len(rows) for rows in SUB_CLAUSES.values())

    assert seeded_catalog["standards"] == 7
    assert seeded_catalog["clauses_created"] == expected_clauses
    # Three curated links duplicate generated HLS pairs
    assert seeded_catalog["cross_refs_created"] == 441 + len(DOMAIN_CROSS_REFERENCES) - 3
    assert seeded_catalog["cross_refs_skipped"] == 3

    assert test_db.exec(select(func.count()).select_from(StandardClause)).one() == expected_clauses
    assert test_db.exec(select(func.count()).select_from(ClauseCrossReference)).one() == 448


def test_seed_catalog_is_idempotent(engine, seeded_catalog):
    again = seed_catalog(engine)

    assert again["standards"] == 7
    assert again["clauses_created"] == 0
    assert again["cross_refs_created"] == 0
    assert again["cross_refs_skipped"] == 441 + len(DOMAIN_CROSS_REFERENCES)


def test_seeded_sub_clauses_point_at_top_level_parents(test_db, seeded_catalog):
    clauses = test_db.exec(select(StandardClause)).all()
    by_id = {c.id: c for c in clauses}

    for clause in clauses:
        if clause.parent_id is not None:
            parent = by_id[clause.parent_id]
            assert parent.is_top_level
            assert parent.standard_id == clause.standard_id


def test_seeded_sub_clauses_carry_descriptions(test_db, seeded_catalog):
    sub_clauses = test_db.exec(select(StandardClause).where(StandardClause.parent_id.is_not(None))).all()

    assert len(sub_clauses) == sum(len(rows) for rows in SUB_CLAUSES.values())
    missing = [c.clause_number for c in sub_clauses if not (c.description or "").strip()]
    assert missing == []


def test_seed_clauses_stores_description(test_db):
    standard = seed_standards(test_db, [{"code": "ISO9001", "name": "ISO 9001:2015"}])["ISO9001"]
    seed_clauses(test_db, standard, [("4", "4.1", "Context", "Determine external and internal issues.")])

    clause = test_db.exec(select(StandardClause).where(StandardClause.clause_number == "4.1")).one()
    assert clause.description == "Determine external and internal issues."


def test_seed_standards_updates_existing_rows(test_db):
    seed_standards(test_db, [{"code": "ISO9001", "name": "ISO 9001:2008", "version": "2008"}])
    seeded = seed_standards(test_db, [{"code": "ISO9001", "name": "ISO 9001:2015", "version": "2015"}])
    test_db.commit()

    rows = test_db.exec(select(Standard)).all()
    assert len(rows) == 1
    assert rows[0].name == "ISO 9001:2015"
    assert seeded["ISO9001"].id == rows[0].id


def test_seed_clauses_skips_orphans(test_db, caplog):
    standard = seed_standards(test_db, [{"code": "ISO9001", "name": "ISO 9001:2015"}])["ISO9001"]

    with caplog.at_level(logging.WARNING, logger="seed"):
        created = seed_clauses(test_db, standard, [("4", "4.1", "Context", None), ("11", "11.1", "Orphan", None)])

    assert created == len(COMMON_CLAUSE_TITLES) + 1
    assert "parent clause 11 not found" in caplog.text


def test_seed_cross_references_skips_missing_clauses(test_db, caplog):
    standards = seed_standards(test_db, [
        {"code": "ISO9001", "name": "ISO 9001:2015"},
        {"code": "ISO14001", "name": "ISO 14001:2015"},
    ])
    for standard in standards.values():
        seed_clauses(test_db, standard, [("4", "4.1", "Context", None)])

    with caplog.at_level(logging.WARNING, logger="seed"):
        created, skipped = seed_cross_references(test_db, [
            ("ISO9001", "4.1", "ISO14001", "4.1", "EQUIVALENT", None),
            ("ISO9001", "4.1", "ISO45001", "4.1", "EQUIVALENT", None),
            ("ISO9001", "4.1", "ISO14001", "4.1", "RELATED", "duplicate pair"),
        ])

    assert (created, skipped) == (1, 2)
    assert "ISO45001 4.1: clause not found" in caplog.text
