from __future__ import annotations


class GradeCalcError(Exception):
    pass


class UnknownGradeSymbol(GradeCalcError, ValueError):
    def __init__(self, symbol: object) -> None:
        super().__init__(f"Unsupported letter grade: {symbol!r}")
        self.symbol = symbol


class IndexOutOfRange(GradeCalcError, IndexError):
    pass


class UnknownCourseField(GradeCalcError, ValueError):
    def __init__(self, field: object) -> None:
        super().__init__(f"Unsupported course field: {field!r}. Use name, grade, or credits.")
        self.field = field


class InvalidCredits(GradeCalcError, ValueError):
    pass


class StorageError(GradeCalcError):
    pass
