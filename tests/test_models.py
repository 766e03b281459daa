"""
Tests for model-level validation: checklist field configuration union,
document status and classification constraints.
"""

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from models import (
    ChecklistItem,
    Document,
    DocumentClassification,
    NumberFieldConfig,
    RatingFieldConfig,
    SelectFieldConfig,
    StandardClause,
    parse_field_config,
)


# ============================================================================
# Field Configuration
# ============================================================================

def test_parse_field_config_selects_variant_by_kind():
    assert isinstance(parse_field_config({"kind": "NUMBER", "min": 0, "unit": "mg/L"}), NumberFieldConfig)
    assert isinstance(parse_field_config('{"kind": "RATING", "max": 10}'), RatingFieldConfig)
    assert parse_field_config({"kind": "SELECT", "options": ["Yes", "No"]}).options == ["Yes", "No"]


def test_rating_defaults_to_five():
    assert parse_field_config({"kind": "RATING"}).max == 5


@pytest.mark.parametrize("raw", [
    {"kind": "SLIDER"},
    {"kind": "RATING", "max": 11},
    {"kind": "SELECT", "options": []},
    {"kind": "SELECT"},
    {"min": 1},
])
def test_invalid_field_configs_are_rejected(raw):
    with pytest.raises(ValidationError):
        parse_field_config(raw)


def test_set_field_config_updates_field_type():
    item = ChecklistItem(checklist_id="c", question="Water temperature?")

    item.set_field_config({"kind": "NUMBER", "min": 0, "max": 100, "unit": "C"})

    assert item.field_type == "NUMBER"
    config = item.get_field_config()
    assert isinstance(config, NumberFieldConfig)
    assert config.unit == "C"


def test_get_field_config_defaults():
    assert ChecklistItem(checklist_id="c", question="q").get_field_config().kind == "BOOLEAN"
    assert ChecklistItem(checklist_id="c", question="q", field_type="RATING").get_field_config().max == 5
    assert ChecklistItem(checklist_id="c", question="q", field_type="SELECT").get_field_config() is None


def test_checklist_item_persists_typed_config(test_db, organization, make_checklist):
    checklist = make_checklist(organization, [])
    item = ChecklistItem(checklist_id=checklist.id, question="PPE worn?")
    item.set_field_config(SelectFieldConfig(options=["Always", "Sometimes", "Never"]))
    test_db.add(item)
    test_db.commit()
    test_db.refresh(item)

    assert item.field_type == "SELECT"
    assert item.get_field_config().options == ["Always", "Sometimes", "Never"]


def test_checklist_item_rejects_mismatched_config(test_db, organization, make_checklist):
    checklist = make_checklist(organization, [])
    item = ChecklistItem(
        checklist_id=checklist.id,
        question="Score the induction",
        field_type="BOOLEAN",
        field_config='{"kind": "RATING", "max": 5}',
    )
    test_db.add(item)

    with pytest.raises(ValueError, match="does not match"):
        test_db.commit()


def test_checklist_item_rejects_unknown_field_type(test_db, organization, make_checklist):
    checklist = make_checklist(organization, [])
    test_db.add(ChecklistItem(checklist_id=checklist.id, question="q", field_type="TEXT"))

    with pytest.raises(ValueError, match="Invalid field type"):
        test_db.commit()


# ============================================================================
# Documents and Classifications
# ============================================================================

def test_document_status_is_constrained(test_db, organization):
    test_db.add(Document(organization_id=organization.id, title="Policy", status="PUBLISHED"))

    with pytest.raises(ValueError, match="Invalid status: PUBLISHED"):
        test_db.commit()


def test_document_status_change_is_validated(test_db, organization):
    document = Document(organization_id=organization.id, title="Policy", status="DRAFT")
    test_db.add(document)
    test_db.commit()

    document.status = "APPROVED"
    test_db.add(document)
    test_db.commit()
    assert document.status == "APPROVED"

    document.status = "RETIRED"
    test_db.add(document)
    with pytest.raises(ValueError, match="Must be one of"):
        test_db.commit()


def test_one_classification_per_document_and_clause(test_db, organization, make_standard, make_document):
    _, clauses = make_standard("ISO9001", ["4", "4.1"])
    document = make_document(organization, [clauses["4.1"]])

    test_db.add(DocumentClassification(document_id=document.id, standard_clause_id=clauses["4.1"].id))

    with pytest.raises(IntegrityError):
        test_db.commit()


def test_classification_confidence_range(test_db, organization, make_standard, make_document):
    _, clauses = make_standard("ISO9001", ["4", "4.1"])
    document = make_document(organization, [])

    test_db.add(DocumentClassification(
        document_id=document.id, standard_clause_id=clauses["4.1"].id, confidence=1.5,
    ))

    with pytest.raises(IntegrityError):
        test_db.commit()


def test_clause_numbers_are_unique_per_standard(test_db, make_standard):
    standard, _ = make_standard("ISO9001", ["4"])

    test_db.add(StandardClause(standard_id=standard.id, clause_number="4", title="Duplicate"))

    with pytest.raises(IntegrityError):
        test_db.commit()


def test_clause_hierarchy(make_standard):
    _, clauses = make_standard("ISO9001", ["4", "4.1"])

    assert clauses["4"].is_top_level
    assert not clauses["4.1"].is_top_level
    assert clauses["4.1"].parent_id == clauses["4"].id
