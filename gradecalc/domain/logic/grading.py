from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from gradecalc.domain.errors import UnknownGradeSymbol

# Display order for grade pickers.
GRADE_SCALE: list[tuple[str, float]] = [
    ("A", 4.0),
    ("A-", 3.7),
    ("B+", 3.3),
    ("B", 3.0),
    ("B-", 2.7),
    ("C+", 2.3),
    ("C", 2.0),
    ("C-", 1.7),
    ("D+", 1.3),
    ("D", 1.0),
    ("D-", 0.7),
    ("F", 0.0),
    ("W", 0.0),
]

GRADE_POINTS: Mapping[str, float] = MappingProxyType(dict(GRADE_SCALE))
GRADE_SYMBOLS: tuple[str, ...] = tuple(symbol for symbol, _ in GRADE_SCALE)

FAILED = "F"
WITHDRAWN = "W"
NON_EARNING_GRADES = frozenset({FAILED, WITHDRAWN})


def weight_of(symbol: str) -> float:
    try:
        return GRADE_POINTS[symbol]
    except (KeyError, TypeError) as exc:
        raise UnknownGradeSymbol(symbol) from exc


def validate_grade(symbol: str) -> str:
    weight_of(symbol)
    return symbol


def counts_as_earned(grade: str) -> bool:
    return grade not in NON_EARNING_GRADES


def is_gpa_eligible(grade: str, credits: float) -> bool:
    return counts_as_earned(grade) and credits > 0
