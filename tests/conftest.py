"""
Pytest Configuration and Fixtures for the Compliance Gap Analysis core

Features:
- File-backed SQLite database per test (shared by the parallel reads)
- Table setup/teardown and process-wide engine override
- Factory fixtures for standards, clauses, documents, checklists and edges
- Seeded ISO catalog fixture
"""

from typing import Generator

import pytest
from sqlalchemy.engine import Engine
from sqlmodel import Session

from config import Settings
from database import build_engine, create_tables, drop_tables, set_engine
from models import (
    Checklist,
    ChecklistItem,
    ClauseCrossReference,
    Document,
    DocumentClassification,
    Organization,
    Project,
    Standard,
    StandardClause,
)
from seed import seed_catalog


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of the developer's environment."""
    return Settings()


@pytest.fixture(scope="function")
def engine(tmp_path, settings: Settings) -> Generator[Engine, None, None]:
    """
    Provide a fresh SQLite database file for each test.
    Worker threads open their own sessions on the same file.
    """
    test_engine = build_engine(settings.merge(database_url=f"sqlite:///{tmp_path / 'compliance_test.db'}"))
    create_tables(test_engine)
    set_engine(test_engine)

    yield test_engine

    set_engine(None)
    drop_tables(test_engine)
    test_engine.dispose()


@pytest.fixture(scope="function")
def test_db(engine: Engine) -> Generator[Session, None, None]:
    """Session used to arrange test data. Changes are committed so other sessions see them."""
    session = Session(engine)
    yield session
    session.close()


@pytest.fixture
def seeded_catalog(engine: Engine) -> dict:
    """Seed the full ISO catalog and return the seeding stats."""
    return seed_catalog(engine)


# ============================================================================
# Tenant Fixtures
# ============================================================================

@pytest.fixture
def organization(test_db: Session) -> Organization:
    org = Organization(name="Acme Construction", industry="Construction")
    test_db.add(org)
    test_db.commit()
    test_db.refresh(org)
    return org


@pytest.fixture
def other_organization(test_db: Session) -> Organization:
    org = Organization(name="Beta Logistics", industry="Transport")
    test_db.add(org)
    test_db.commit()
    test_db.refresh(org)
    return org


@pytest.fixture
def make_project(test_db: Session):
    """Factory: create a project for an organization."""
    def _make(organization: Organization, name: str = "Site A") -> Project:
        project = Project(organization_id=organization.id, name=name)
        test_db.add(project)
        test_db.commit()
        test_db.refresh(project)
        return project

    return _make


# ============================================================================
# Reference Data Factories
# ============================================================================

@pytest.fixture
def make_standard(test_db: Session):
    """
    Factory: create a standard and its clauses.

    Clause numbers containing a dot become sub-clauses of the top-level
    clause named by their first segment, which must be listed earlier.

    Returns:
        Tuple of (Standard, {clause number: StandardClause})
    """
    def _make(code: str, clause_numbers: list, name: str = None, is_active: bool = True):
        standard = Standard(code=code, name=name or f"{code} Standard", is_active=is_active)
        test_db.add(standard)
        test_db.flush()

        clauses = {}
        for number in clause_numbers:
            parent = clauses[number.split(".")[0]] if "." in number else None
            clause = StandardClause(
                standard_id=standard.id,
                clause_number=number,
                title=f"Clause {number}",
                parent_id=parent.id if parent else None,
            )
            test_db.add(clause)
            test_db.flush()
            clauses[number] = clause

        test_db.commit()
        test_db.refresh(standard)
        return standard, clauses

    return _make


@pytest.fixture
def make_edge(test_db: Session):
    """Factory: create a cross-reference between two clauses."""
    def _make(source: StandardClause, target: StandardClause,
              mapping_type: str = "EQUIVALENT", notes: str = None) -> ClauseCrossReference:
        edge = ClauseCrossReference(
            source_clause_id=source.id,
            target_clause_id=target.id,
            mapping_type=mapping_type,
            notes=notes,
        )
        test_db.add(edge)
        test_db.commit()
        test_db.refresh(edge)
        return edge

    return _make


# ============================================================================
# Evidence Factories
# ============================================================================

@pytest.fixture
def make_document(test_db: Session):
    """
    Factory: create a document classified against the given clauses.

    All classifications share ``verified`` and ``confidence``.
    """
    def _make(organization: Organization, clauses: list = (), status: str = "APPROVED",
              verified: bool = True, project: Project = None, confidence: float = 0.9,
              title: str = "Quality Manual") -> Document:
        document = Document(
            organization_id=organization.id,
            project_id=project.id if project else None,
            title=title,
            status=status,
        )
        test_db.add(document)
        test_db.flush()

        for clause in clauses:
            test_db.add(DocumentClassification(
                document_id=document.id,
                standard_clause_id=clause.id,
                is_verified=verified,
                confidence=confidence,
            ))

        test_db.commit()
        test_db.refresh(document)
        return document

    return _make


@pytest.fixture
def make_checklist(test_db: Session):
    """
    Factory: create a checklist from (clause or None, is_compliant) pairs.
    """
    def _make(organization: Organization, items: list, project: Project = None,
              title: str = "Internal Audit Checklist") -> Checklist:
        checklist = Checklist(
            organization_id=organization.id,
            project_id=project.id if project else None,
            title=title,
        )
        test_db.add(checklist)
        test_db.flush()

        for index, (clause, is_compliant) in enumerate(items):
            test_db.add(ChecklistItem(
                checklist_id=checklist.id,
                standard_clause_id=clause.id if clause else None,
                question=f"Question {index + 1}",
                is_compliant=is_compliant,
            ))

        test_db.commit()
        test_db.refresh(checklist)
        return checklist

    return _make
