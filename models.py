"""
SQLModel Models for the ISO Compliance Gap Analysis core

Reference data (shared by every organization):
- Standard, StandardClause (self-referencing parent pointer)
- ClauseCrossReference (typed edge between two clauses)

Tenant evidence:
- Organization, Project
- Document, DocumentClassification
- Checklist, ChecklistItem (with a typed field configuration)

Database-level CHECK and UNIQUE constraints back the invariants that
the read core relies on.
"""

import uuid
from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, TypeAdapter
from pydantic import Field as PydanticField
from sqlalchemy import CheckConstraint, Column, String, Text, UniqueConstraint, event
from sqlmodel import Field, Relationship, SQLModel


# Supported ISO management-system standards, in canonical order
STANDARD_CODES = [
    "ISO9001", "ISO14001", "ISO45001",
    "ISO22301", "ISO27001", "ISO37001", "ISO39001",
]

# Cross-reference mapping types, strongest first
VALID_MAPPING_TYPES = ["EQUIVALENT", "RELATED", "SUPPORTING"]
MAPPING_TYPE_ORDER = {name: rank for rank, name in enumerate(VALID_MAPPING_TYPES)}

VALID_DOCUMENT_STATUSES = ["DRAFT", "PENDING_REVIEW", "APPROVED", "ARCHIVED", "EXPIRED"]

VALID_FIELD_TYPES = ["BOOLEAN", "NUMBER", "RATING", "SELECT"]


def new_id() -> str:
    """Generate an opaque identifier."""
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Checklist Field Configuration (tagged union)
# ============================================================================

class BooleanFieldConfig(BaseModel):
    kind: Literal["BOOLEAN"] = "BOOLEAN"


class NumberFieldConfig(BaseModel):
    kind: Literal["NUMBER"] = "NUMBER"
    min: Optional[float] = None
    max: Optional[float] = None
    unit: Optional[str] = None


class RatingFieldConfig(BaseModel):
    kind: Literal["RATING"] = "RATING"
    max: int = PydanticField(5, ge=1, le=10)


class SelectFieldConfig(BaseModel):
    kind: Literal["SELECT"] = "SELECT"
    options: List[str] = PydanticField(min_length=1)


FieldConfig = Annotated[
    Union[BooleanFieldConfig, NumberFieldConfig, RatingFieldConfig, SelectFieldConfig],
    PydanticField(discriminator="kind"),
]

FIELD_CONFIG_ADAPTER = TypeAdapter(FieldConfig)


def parse_field_config(raw) -> FieldConfig:
    """
    Validate a raw field configuration (dict or JSON string) into its variant.

    Raises:
        pydantic.ValidationError: If the payload matches no variant
    """
    if isinstance(raw, str):
        return FIELD_CONFIG_ADAPTER.validate_json(raw)
    return FIELD_CONFIG_ADAPTER.validate_python(raw)


# ============================================================================
# Tenants
# ============================================================================

class Organization(SQLModel, table=True):
    """A tenant. Evidence rows are always scoped to one organization."""
    __tablename__ = "organization"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(sa_column=Column(String(255), nullable=False))
    industry: Optional[str] = Field(default=None, sa_column=Column(String(100)))
    country: str = Field(default="ZA", sa_column=Column(String(2), nullable=False))
    created_at: datetime = Field(default_factory=utc_now)


class Project(SQLModel, table=True):
    __tablename__ = "project"

    id: str = Field(default_factory=new_id, primary_key=True)
    organization_id: str = Field(foreign_key="organization.id", nullable=False, index=True)
    name: str = Field(sa_column=Column(String(255), nullable=False))


# ============================================================================
# Reference Data
# ============================================================================

class Standard(SQLModel, table=True):
    """
    An ISO management-system standard.
    Seeded once, toggled active/inactive, never deleted.
    """
    __tablename__ = "standard"

    id: str = Field(default_factory=new_id, primary_key=True)
    code: str = Field(sa_column=Column(String(20), unique=True, nullable=False, index=True))
    name: str = Field(sa_column=Column(String(100), nullable=False))
    description: Optional[str] = Field(default=None, sa_column=Column(Text))
    version: Optional[str] = Field(default=None, sa_column=Column(String(10)))
    is_active: bool = Field(default=True)

    clauses: List["StandardClause"] = Relationship(
        back_populates="standard",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )


class StandardClause(SQLModel, table=True):
    """
    A clause of a standard. ``parent_id`` null means top-level ("4"),
    otherwise a sub-clause ("4.1") of the referenced top-level clause.
    """
    __tablename__ = "standard_clause"
    __table_args__ = (
        UniqueConstraint("standard_id", "clause_number", name="uq_clause_number_per_standard"),
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    standard_id: str = Field(foreign_key="standard.id", nullable=False, index=True)
    clause_number: str = Field(sa_column=Column(String(20), nullable=False))
    title: str = Field(sa_column=Column(String(255), nullable=False))
    description: Optional[str] = Field(default=None, sa_column=Column(Text))
    parent_id: Optional[str] = Field(default=None, foreign_key="standard_clause.id", index=True)

    standard: Optional[Standard] = Relationship(back_populates="clauses")

    @property
    def is_top_level(self) -> bool:
        return self.parent_id is None


class ClauseCrossReference(SQLModel, table=True):
    """
    A typed edge between two clauses, usually of different standards.
    Stored directed, consumed undirected.
    """
    __tablename__ = "clause_cross_reference"
    __table_args__ = (
        UniqueConstraint("source_clause_id", "target_clause_id", name="uq_cross_reference_pair"),
        CheckConstraint(
            "mapping_type IN ('EQUIVALENT', 'RELATED', 'SUPPORTING')",
            name="valid_mapping_type"
        ),
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    source_clause_id: str = Field(foreign_key="standard_clause.id", nullable=False, index=True)
    target_clause_id: str = Field(foreign_key="standard_clause.id", nullable=False, index=True)
    mapping_type: str = Field(sa_column=Column(String(20), nullable=False))
    notes: Optional[str] = Field(default=None, sa_column=Column(Text))


# ============================================================================
# Tenant Evidence
# ============================================================================

class Document(SQLModel, table=True):
    __tablename__ = "document"
    __table_args__ = (
        CheckConstraint(
            "status IN ('DRAFT', 'PENDING_REVIEW', 'APPROVED', 'ARCHIVED', 'EXPIRED')",
            name="valid_document_status"
        ),
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    organization_id: str = Field(foreign_key="organization.id", nullable=False, index=True)
    project_id: Optional[str] = Field(default=None, foreign_key="project.id", index=True)
    title: str = Field(sa_column=Column(String(255), nullable=False))
    status: str = Field(default="DRAFT", sa_column=Column(String(20), nullable=False))
    created_at: datetime = Field(default_factory=utc_now)

    classifications: List["DocumentClassification"] = Relationship(
        back_populates="document",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )


class DocumentClassification(SQLModel, table=True):
    """
    Assertion that a document addresses a clause. Only verified rows
    count as gap-analysis evidence.
    """
    __tablename__ = "document_classification"
    __table_args__ = (
        UniqueConstraint("document_id", "standard_clause_id", name="uq_classification_per_clause"),
        CheckConstraint("confidence >= 0 AND confidence <= 1", name="confidence_range"),
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    document_id: str = Field(foreign_key="document.id", nullable=False, index=True)
    standard_clause_id: str = Field(foreign_key="standard_clause.id", nullable=False, index=True)
    is_verified: bool = Field(default=False)
    confidence: float = Field(default=0.0)

    document: Optional[Document] = Relationship(back_populates="classifications")


class Checklist(SQLModel, table=True):
    __tablename__ = "checklist"

    id: str = Field(default_factory=new_id, primary_key=True)
    organization_id: str = Field(foreign_key="organization.id", nullable=False, index=True)
    project_id: Optional[str] = Field(default=None, foreign_key="project.id", index=True)
    title: str = Field(sa_column=Column(String(255), nullable=False))
    created_at: datetime = Field(default_factory=utc_now)

    items: List["ChecklistItem"] = Relationship(
        back_populates="checklist",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )


class ChecklistItem(SQLModel, table=True):
    """
    A single assessable line of a checklist.
    ``is_compliant`` None means not yet assessed.
    """
    __tablename__ = "checklist_item"
    __table_args__ = (
        CheckConstraint(
            "field_type IN ('BOOLEAN', 'NUMBER', 'RATING', 'SELECT')",
            name="valid_field_type"
        ),
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    checklist_id: str = Field(foreign_key="checklist.id", nullable=False, index=True)
    standard_clause_id: Optional[str] = Field(default=None, foreign_key="standard_clause.id", index=True)
    question: str = Field(sa_column=Column(Text, nullable=False))
    is_compliant: Optional[bool] = Field(default=None)
    field_type: str = Field(default="BOOLEAN", sa_column=Column(String(20), nullable=False))

    # Stored as JSON string, always parsed through parse_field_config
    field_config: Optional[str] = Field(default=None, sa_column=Column(Text))

    checklist: Optional[Checklist] = Relationship(back_populates="items")

    def set_field_config(self, config: Union[FieldConfig, dict]):
        """Validate and store a field configuration; also sets ``field_type``."""
        if isinstance(config, dict):
            config = parse_field_config(config)
        self.field_type = config.kind
        self.field_config = config.model_dump_json()

    def get_field_config(self) -> Optional[FieldConfig]:
        """
        Return the typed field configuration.

        Without a stored config, the field type's default variant is
        returned; SELECT has no default since its options are mandatory.
        """
        if self.field_config:
            return parse_field_config(self.field_config)
        if self.field_type == "SELECT":
            return None
        return parse_field_config({"kind": self.field_type})


# ============================================================================
# Event listeners for boundary validation
# ============================================================================

@event.listens_for(ClauseCrossReference, "before_insert")
def cross_reference_before_insert(mapper, connection, target):
    """Reject self-loops and unknown mapping types."""
    if target.mapping_type not in VALID_MAPPING_TYPES:
        raise ValueError(f"Invalid mapping type: {target.mapping_type}. Must be one of {VALID_MAPPING_TYPES}")
    if target.source_clause_id == target.target_clause_id:
        raise ValueError("A cross-reference cannot link a clause to itself")


@event.listens_for(Document, "before_insert")
@event.listens_for(Document, "before_update")
def document_before_save(mapper, connection, target):
    """Reject unknown document lifecycle statuses."""
    if target.status not in VALID_DOCUMENT_STATUSES:
        raise ValueError(f"Invalid status: {target.status}. Must be one of {VALID_DOCUMENT_STATUSES}")


@event.listens_for(ChecklistItem, "before_insert")
@event.listens_for(ChecklistItem, "before_update")
def checklist_item_before_save(mapper, connection, target):
    """Validate field configuration against the declared field type."""
    if target.field_type not in VALID_FIELD_TYPES:
        raise ValueError(f"Invalid field type: {target.field_type}. Must be one of {VALID_FIELD_TYPES}")
    if target.field_config:
        config = parse_field_config(target.field_config)
        if config.kind != target.field_type:
            raise ValueError(
                f"Field config kind {config.kind} does not match field type {target.field_type}"
            )
