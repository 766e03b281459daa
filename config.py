"""
Configuration for the Compliance Gap Analysis core

Settings are resolved in this order:
1. Dataclass defaults
2. .env file / environment variables (python-dotenv)
3. Optional JSON settings file (Settings.from_json)

Overrides are merge-on-write: only keys explicitly provided replace
the current value.
"""

import json
import os
from dataclasses import dataclass, fields, replace, asdict
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()


# Document statuses that never count as evidence
DEFAULT_EXCLUDED_DOCUMENT_STATUSES = ("ARCHIVED", "EXPIRED")

SETTINGS_FILE = os.getenv("COMPLIANCE_SETTINGS_FILE", "compliance_settings.json")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


@dataclass(frozen=True)
class Settings:
    """Typed settings for database access and gap analysis behaviour."""
    database_url: str = "sqlite:///compliance.db"
    sql_echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    # Worker threads used for the independent gap-analysis reads
    query_workers: int = 4
    # False keeps string order ("4.10" < "4.2"); True compares dotted segments numerically
    natural_clause_order: bool = False
    excluded_document_statuses: tuple = DEFAULT_EXCLUDED_DOCUMENT_STATUSES
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        defaults = cls()
        excluded = os.getenv("EXCLUDED_DOCUMENT_STATUSES")
        return cls(
            database_url=os.getenv("DATABASE_URL", defaults.database_url),
            sql_echo=_env_bool("SQL_ECHO", defaults.sql_echo),
            pool_size=_env_int("DB_POOL_SIZE", defaults.pool_size),
            max_overflow=_env_int("DB_MAX_OVERFLOW", defaults.max_overflow),
            query_workers=_env_int("GAP_QUERY_WORKERS", defaults.query_workers),
            natural_clause_order=_env_bool("NATURAL_CLAUSE_ORDER", defaults.natural_clause_order),
            excluded_document_statuses=(
                tuple(s.strip().upper() for s in excluded.split(",") if s.strip())
                if excluded else defaults.excluded_document_statuses
            ),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level),
        )

    @classmethod
    def from_json(cls, json_path: str, base: Optional["Settings"] = None) -> "Settings":
        """
        Load settings from a JSON file on top of ``base`` (env settings by default).

        Keys absent from the file keep their current value.
        """
        with open(json_path, "r") as f:
            data = json.load(f)

        if "excluded_document_statuses" in data:
            data["excluded_document_statuses"] = tuple(data["excluded_document_statuses"])

        return (base or cls.from_env()).merge(**data)

    def to_json(self, json_path: str):
        """Save settings to a JSON file."""
        data = asdict(self)
        data["excluded_document_statuses"] = list(self.excluded_document_statuses)
        with open(json_path, "w") as f:
            json.dump(data, f, indent=2)

    def merge(self, **overrides) -> "Settings":
        """
        Return a copy with only the explicitly provided keys overwritten.

        None values are treated as "not provided".

        Raises:
            ValueError: If an unknown setting name is given
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown setting(s): {unknown}. Must be one of {sorted(known)}")

        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def load_settings() -> Settings:
    """Load settings from the environment and the settings file, if present."""
    settings = Settings.from_env()
    if Path(SETTINGS_FILE).exists():
        settings = Settings.from_json(SETTINGS_FILE, base=settings)
    return settings
