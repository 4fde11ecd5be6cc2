from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from gradecalc.domain.logic.grading import counts_as_earned, is_gpa_eligible, weight_of

if TYPE_CHECKING:
    from gradecalc.domain.models.entities import Course, Term


def calc_gpa(courses: Iterable[Course]) -> float:
    """Credit-weighted mean of grade points over GPA-eligible courses.

    F, W and zero-credit courses are skipped. Returns 0.0 when nothing is
    eligible yet.
    """
    weighted = 0.0
    attempted = 0.0
    for c in courses:
        if not is_gpa_eligible(c.grade, c.credits):
            continue
        weighted += weight_of(c.grade) * c.credits
        attempted += c.credits
    if attempted == 0:
        return 0.0
    return weighted / attempted


def calc_term_gpa(term: Term) -> float:
    return calc_gpa(term.courses)


def calc_overall_gpa(terms: Iterable[Term]) -> float:
    return calc_gpa(c for term in terms for c in term.courses)


def credit_totals(courses: Iterable[Course]) -> tuple[float, float]:
    """Return (total_credits, earned_credits); F and W count toward total only."""
    total = 0
    earned = 0
    for c in courses:
        total += c.credits
        if counts_as_earned(c.grade):
            earned += c.credits
    return total, earned


def format_gpa(value: float | None) -> str:
    if value is None:
        return ""
    return f"{value:.2f}"
