"""
Tests for clause ordering, the clause tree and catalog queries.
"""

from clause_catalog import (
    ClauseRecord,
    ClauseTree,
    clause_sort_key,
    get_clause,
    list_active_standards_with_clauses,
    list_top_level_clauses,
    natural_clause_key,
)


def test_string_order_is_the_default():
    numbers = ["4.2", "10", "4.10", "4", "6.1.2", "6.1"]

    assert sorted(numbers, key=clause_sort_key()) == ["10", "4", "4.10", "4.2", "6.1", "6.1.2"]


def test_natural_order():
    numbers = ["4.2", "10", "4.10", "4", "6.1.2", "6.1"]

    assert sorted(numbers, key=clause_sort_key(natural_order=True)) == ["4", "4.2", "4.10", "6.1", "6.1.2", "10"]


def test_natural_order_places_text_segments_last():
    assert natural_clause_key("A.1") > natural_clause_key("9.1")
    assert natural_clause_key("8.a") > natural_clause_key("8.10")


def test_clause_tree_partitions_clauses():
    clauses = [
        ClauseRecord("t4", "s", "4", "Context"),
        ClauseRecord("c41", "s", "4.1", "Organization", parent_id="t4"),
        ClauseRecord("c42", "s", "4.2", "Parties", parent_id="t4"),
        ClauseRecord("t5", "s", "5", "Leadership"),
    ]

    tree = ClauseTree(clauses)

    assert [c.id for c in tree.top_level] == ["t4", "t5"]
    assert tree.has_sub_clauses
    assert [c.id for c in tree.leaves] == ["c41", "c42"]
    assert [c.id for c in tree.children_of("t4")] == ["c41", "c42"]
    assert tree.children_of("t5") == []
    assert tree.by_id["c42"].title == "Parties"


def test_clause_tree_without_sub_clauses_uses_top_level_leaves():
    tree = ClauseTree([ClauseRecord("t4", "s", "4", "Context"), ClauseRecord("t5", "s", "5", "Leadership")])

    assert not tree.has_sub_clauses
    assert [c.id for c in tree.leaves] == ["t4", "t5"]


def test_list_active_standards_with_clauses(test_db, make_standard):
    make_standard("ISO9001", ["4", "4.2", "4.10", "10"])
    make_standard("ISO14001", ["4"])
    make_standard("ISO39001", ["4"], is_active=False)

    standards = list_active_standards_with_clauses(test_db)
    filtered = list_active_standards_with_clauses(test_db, filter_by_code="ISO9001", natural_order=True)

    assert [s.code for s in standards] == ["ISO14001", "ISO9001"]
    assert [c.clause_number for c in standards[1].clauses] == ["10", "4", "4.10", "4.2"]
    assert [c.clause_number for c in filtered[0].clauses] == ["4", "4.2", "4.10", "10"]
    assert list_active_standards_with_clauses(test_db, filter_by_code="ISO39001") == []


def test_list_top_level_clauses_orders_by_number_then_code(test_db, make_standard):
    iso9001, _ = make_standard("ISO9001", ["4", "4.1", "5"])
    iso14001, _ = make_standard("ISO14001", ["5", "4"])

    rows = list_top_level_clauses(test_db, [iso9001.id, iso14001.id])

    assert [(clause.clause_number, code) for clause, code in rows] == [
        ("4", "ISO14001"), ("4", "ISO9001"), ("5", "ISO14001"), ("5", "ISO9001"),
    ]
    assert list_top_level_clauses(test_db, []) == []


def test_get_clause(test_db, make_standard):
    _, clauses = make_standard("ISO9001", ["4", "4.1"])

    record = get_clause(test_db, clauses["4.1"].id)

    assert record.clause_number == "4.1"
    assert record.parent_id == clauses["4"].id
    assert get_clause(test_db, "missing") is None
