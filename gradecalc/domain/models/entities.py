from __future__ import annotations

import math
from dataclasses import dataclass, field, replace

from gradecalc.domain.errors import InvalidCredits, UnknownCourseField
from gradecalc.domain.logic.gpa import credit_totals
from gradecalc.domain.logic.grading import FAILED, validate_grade

DEFAULT_COURSES_PER_TERM = 10
COURSE_FIELDS = ("name", "grade", "credits")


def coerce_credits(value: object) -> float:
    if isinstance(value, bool):
        raise InvalidCredits(f"Credits must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(str(value).strip())
        except ValueError as exc:
            raise InvalidCredits(f"Credits must be a number, got {value!r}") from exc
    try:
        finite = math.isfinite(number)
    except OverflowError as exc:
        raise InvalidCredits(f"Credits are out of range, got {value!r}") from exc
    if not finite or number < 0:
        raise InvalidCredits(f"Credits must be a non-negative number, got {value!r}")
    return number


@dataclass(frozen=True)
class Course:
    name: str = ""
    grade: str = FAILED
    credits: float = 0

    def __post_init__(self) -> None:
        validate_grade(self.grade)
        object.__setattr__(self, "credits", coerce_credits(self.credits))
        if self.name is None:
            object.__setattr__(self, "name", "")
        elif not isinstance(self.name, str):
            object.__setattr__(self, "name", str(self.name))

    def with_field(self, name: str, value: object) -> "Course":
        if name not in COURSE_FIELDS:
            raise UnknownCourseField(name)
        return replace(self, **{name: value})


@dataclass
class Term:
    courses: list[Course] = field(default_factory=list)
    total_credits: float = 0
    earned_credits: float = 0

    def __post_init__(self) -> None:
        self.courses = list(self.courses)
        self.recompute_totals()

    def recompute_totals(self) -> None:
        self.total_credits, self.earned_credits = credit_totals(self.courses)


def blank_courses(count: int = DEFAULT_COURSES_PER_TERM) -> list[Course]:
    return [Course() for _ in range(count)]


def new_term(count: int = DEFAULT_COURSES_PER_TERM) -> Term:
    return Term(courses=blank_courses(count))
