from __future__ import annotations

import logging
from typing import Dict, List, Optional

from gradecalc.config.settings import settings
from gradecalc.domain.errors import StorageError
from gradecalc.domain.logic.gpa import format_gpa
from gradecalc.domain.record import AcademicRecord
from gradecalc.services.storage import Storage

logger = logging.getLogger(__name__)


class GradeCalculatorService:
    """Loads the record once, then saves after every completed edit.

    Callers are expected to issue one command at a time.
    """

    def __init__(self, storage: Storage) -> None:
        self.storage = storage
        self.record = AcademicRecord.default()

    @classmethod
    def from_settings(cls) -> "GradeCalculatorService":
        return cls(Storage(settings.db_path))

    def start(self) -> AcademicRecord:
        try:
            loaded = self.storage.load()
        except StorageError as exc:
            logger.warning("Could not load saved terms, starting fresh: %s", exc)
            loaded = None
        if loaded is None:
            self.record = AcademicRecord.default()
            logger.info("No saved terms, starting with %d blank term", len(self.record.terms))
        else:
            self.record = loaded
            logger.info("Loaded %d term(s)", len(self.record.terms))
        return self.record

    def set_course_field(self, term_index: int, course_index: int, field_name: str, value: object) -> None:
        self.record.set_course_field(term_index, course_index, field_name, value)
        logger.debug("Set %s on term %d course %d", field_name, term_index, course_index)
        self.storage.save(self.record)

    def remove_course(self, term_index: int, course_index: int) -> None:
        self.record.remove_course(term_index, course_index)
        logger.debug("Removed course %d from term %d", course_index, term_index)
        self.storage.save(self.record)

    def add_term(self) -> int:
        self.record.add_term()
        logger.debug("Added term %d", len(self.record.terms))
        self.storage.save(self.record)
        return len(self.record.terms) - 1

    def compute_overall_gpa(self) -> float:
        return self.record.compute_overall_gpa()

    def summary(self) -> Dict:
        terms: List[Dict] = []
        for index, term in enumerate(self.record.terms):
            gpa = self.record.compute_term_gpa(term)
            terms.append(
                {
                    "index": index,
                    "courses": [
                        {"name": c.name, "grade": c.grade, "credits": c.credits} for c in term.courses
                    ],
                    "gpa": gpa,
                    "gpa_display": format_gpa(gpa),
                    "total_credits": term.total_credits,
                    "earned_credits": term.earned_credits,
                }
            )
        overall: Optional[float] = self.record.overall_gpa
        return {
            "terms": terms,
            "overall_gpa": overall,
            "overall_gpa_display": format_gpa(overall),
        }
