from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

from gradecalc.domain.errors import IndexOutOfRange
from gradecalc.domain.logic.gpa import calc_overall_gpa, calc_term_gpa
from gradecalc.domain.models.entities import Course, Term, new_term


@dataclass
class AcademicRecord:
    """Ordered terms (term 1 first) and the last requested overall GPA.

    Every mutation goes through this class so each term's cached credit
    totals stay equal to a recomputation over its courses.
    """

    terms: list[Term] = field(default_factory=list)
    overall_gpa: Optional[float] = None

    @classmethod
    def default(cls) -> "AcademicRecord":
        return cls(terms=[new_term()])

    @classmethod
    def from_courses(cls, terms: Iterable[Iterable[Course]]) -> "AcademicRecord":
        return cls(terms=[Term(courses=list(courses)) for courses in terms])

    def term(self, term_index: int) -> Term:
        if isinstance(term_index, bool) or not 0 <= term_index < len(self.terms):
            raise IndexOutOfRange(f"Term {term_index} does not exist ({len(self.terms)} terms)")
        return self.terms[term_index]

    def course(self, term_index: int, course_index: int) -> Course:
        term = self.term(term_index)
        if isinstance(course_index, bool) or not 0 <= course_index < len(term.courses):
            raise IndexOutOfRange(
                f"Course {course_index} does not exist in term {term_index} ({len(term.courses)} courses)"
            )
        return term.courses[course_index]

    def compute_term_gpa(self, term: Union[Term, int]) -> float:
        if isinstance(term, int):
            term = self.term(term)
        return calc_term_gpa(term)

    def compute_overall_gpa(self) -> float:
        self.overall_gpa = calc_overall_gpa(self.terms)
        return self.overall_gpa

    def set_course_field(self, term_index: int, course_index: int, field_name: str, value: object) -> None:
        updated = self.course(term_index, course_index).with_field(field_name, value)
        term = self.terms[term_index]
        term.courses[course_index] = updated
        term.recompute_totals()

    def remove_course(self, term_index: int, course_index: int) -> None:
        self.course(term_index, course_index)
        term = self.terms[term_index]
        del term.courses[course_index]
        term.recompute_totals()

    def add_term(self) -> Term:
        term = new_term()
        self.terms.append(term)
        return term
