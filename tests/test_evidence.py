"""
Tests for the tenant-scoped evidence queries and lookup maps.
"""

from evidence import (
    ChecklistTally,
    count_documents_by_clause,
    fetch_clause_checklist_items,
    fetch_verified_classifications,
    tally_checklist_by_clause,
)


def test_count_documents_by_clause():
    assert count_documents_by_clause(["a", "b", "a"]) == {"a": 2, "b": 1}
    assert count_documents_by_clause([]) == {}


def test_tally_checklist_by_clause():
    tallies = tally_checklist_by_clause([
        ("a", True), ("a", False), ("a", None), ("b", True), (None, True),
    ])

    assert tallies == {"a": ChecklistTally(compliant=1, total=3), "b": ChecklistTally(compliant=1, total=1)}


def test_fetch_verified_classifications(
    test_db, organization, other_organization, make_project, make_standard, make_document
):
    site = make_project(organization)
    _, clauses = make_standard("ISO9001", ["4", "4.1", "4.2", "4.3"])
    make_document(organization, [clauses["4.1"], clauses["4.2"]])
    make_document(organization, [clauses["4.1"]], project=site)
    make_document(organization, [clauses["4.3"]], verified=False)
    make_document(organization, [clauses["4.3"]], status="EXPIRED")
    make_document(other_organization, [clauses["4.3"]])

    org_rows = fetch_verified_classifications(test_db, organization.id)
    site_rows = fetch_verified_classifications(test_db, organization.id, project_id=site.id)

    assert sorted(org_rows) == sorted([clauses["4.1"].id, clauses["4.1"].id, clauses["4.2"].id])
    assert site_rows == [clauses["4.1"].id]


def test_fetch_verified_classifications_with_custom_exclusions(test_db, organization, make_standard, make_document):
    _, clauses = make_standard("ISO9001", ["4", "4.1"])
    make_document(organization, [clauses["4.1"]], status="ARCHIVED")

    assert fetch_verified_classifications(test_db, organization.id) == []
    assert fetch_verified_classifications(test_db, organization.id, excluded_statuses=["EXPIRED"]) == [clauses["4.1"].id]


def test_fetch_clause_checklist_items(
    test_db, organization, other_organization, make_project, make_standard, make_checklist
):
    site = make_project(organization)
    _, clauses = make_standard("ISO9001", ["4", "4.1", "4.2"])
    make_checklist(organization, [(clauses["4.1"], True), (None, True)])
    make_checklist(organization, [(clauses["4.2"], False)], project=site)
    make_checklist(other_organization, [(clauses["4.1"], True)])

    org_items = fetch_clause_checklist_items(test_db, organization.id)
    site_items = fetch_clause_checklist_items(test_db, organization.id, project_id=site.id)

    assert sorted(org_items) == sorted([(clauses["4.1"].id, True), (clauses["4.2"].id, False)])
    assert site_items == [(clauses["4.2"].id, False)]
