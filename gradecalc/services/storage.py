from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from gradecalc.domain.errors import GradeCalcError, StorageError
from gradecalc.domain.models.entities import Course, Term
from gradecalc.domain.record import AcademicRecord

logger = logging.getLogger(__name__)

STORAGE_KEY = "terms"


class CourseDocument(BaseModel):
    name: str = ""
    grade: str
    credits: float = Field(default=0, ge=0)

    @field_validator("credits", mode="before")
    @classmethod
    def _blank_credits(cls, value):
        # A cleared credits input is saved as null.
        return 0 if value is None else value


class TermDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    courses: List[CourseDocument] = Field(default_factory=list)
    total_credits: float = Field(default=0, alias="totalCredits")
    earned_credits: float = Field(default=0, alias="earnedCredits")


_terms_adapter = TypeAdapter(List[TermDocument])


def record_to_json(record: AcademicRecord) -> str:
    docs = [
        TermDocument(
            courses=[CourseDocument(name=c.name, grade=c.grade, credits=c.credits) for c in term.courses],
            total_credits=term.total_credits,
            earned_credits=term.earned_credits,
        )
        for term in record.terms
    ]
    return _terms_adapter.dump_json(docs, by_alias=True).decode("utf-8")


def record_from_json(raw: str) -> AcademicRecord:
    """Parse a stored document; cached totals are recomputed, not trusted."""
    try:
        docs = _terms_adapter.validate_json(raw)
        terms = [
            Term(courses=[Course(name=c.name, grade=c.grade, credits=c.credits) for c in doc.courses])
            for doc in docs
        ]
    except (ValidationError, GradeCalcError) as exc:
        raise StorageError(f"Stored record is malformed: {exc}") from exc
    return AcademicRecord(terms=terms)


class Storage:
    def __init__(self, db_path: str = "gradecalc.db") -> None:
        self.db_path = db_path
        self.conn: Optional[sqlite3.Connection] = None
        self.open_error: Optional[str] = None
        try:
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            self.conn = sqlite3.connect(db_path, check_same_thread=False)
            self.conn.row_factory = sqlite3.Row
            self._init_schema()
        except (OSError, sqlite3.Error) as exc:
            # Reads and writes report this until the process restarts.
            self.open_error = f"Cannot open storage at {db_path}: {exc}"
            logger.warning("%s", self.open_error)
            if self.conn is not None:
                self.conn.close()
                self.conn = None
            return
        logger.debug("Opened storage at %s", db_path)

    @property
    def available(self) -> bool:
        return self.conn is not None

    def _connection(self) -> sqlite3.Connection:
        if self.conn is None:
            raise StorageError(self.open_error or f"Storage at {self.db_path} is closed")
        return self.conn

    def _init_schema(self) -> None:
        self.conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS kv (
              key TEXT PRIMARY KEY,
              value TEXT NOT NULL,
              updated_at TEXT NOT NULL
            );
            """
        )
        self.conn.commit()

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
            self.conn = None

    def get(self, key: str) -> Optional[str]:
        conn = self._connection()
        try:
            cur = conn.execute("SELECT value FROM kv WHERE key=?", (key,))
            row = cur.fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot read {key!r}: {exc}") from exc
        return row["value"] if row else None

    def put(self, key: str, value: str) -> None:
        conn = self._connection()
        now = datetime.now(timezone.utc).isoformat()
        try:
            conn.execute(
                """INSERT INTO kv(key, value, updated_at) VALUES(?,?,?)
                   ON CONFLICT(key) DO UPDATE SET
                       value=excluded.value,
                       updated_at=excluded.updated_at""",
                (key, value, now),
            )
            conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot write {key!r}: {exc}") from exc

    def load(self) -> Optional[AcademicRecord]:
        raw = self.get(STORAGE_KEY)
        if raw is None:
            return None
        return record_from_json(raw)

    def save(self, record: AcademicRecord) -> None:
        self.put(STORAGE_KEY, record_to_json(record))
        logger.debug("Saved %d term(s) to %s", len(record.terms), self.db_path)
