from functools import lru_cache
from typing import Any, Dict, List, NoReturn

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from gradecalc.config.settings import settings
from gradecalc.domain.errors import GradeCalcError, IndexOutOfRange, StorageError
from gradecalc.domain.logic.gpa import format_gpa
from gradecalc.domain.logic.grading import GRADE_SCALE
from gradecalc.services.calculator import GradeCalculatorService


app = FastAPI(title="Grade Calculator API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class CourseFieldPayload(BaseModel):
    field: str
    value: Any


@lru_cache(maxsize=1)
def get_service() -> GradeCalculatorService:
    service = GradeCalculatorService.from_settings()
    service.start()
    return service


def _raise_http(exc: GradeCalcError) -> NoReturn:
    if isinstance(exc, IndexOutOfRange):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    if isinstance(exc, StorageError):
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/grades")
def list_grades() -> List[Dict]:
    return [{"grade": symbol, "points": points} for symbol, points in GRADE_SCALE]


@app.get("/terms")
def list_terms(service: GradeCalculatorService = Depends(get_service)) -> Dict:
    return service.summary()


@app.post("/terms")
def add_term(service: GradeCalculatorService = Depends(get_service)) -> Dict[str, int]:
    try:
        return {"index": service.add_term()}
    except GradeCalcError as exc:
        _raise_http(exc)


@app.patch("/terms/{term_index}/courses/{course_index}")
def set_course_field(
    term_index: int,
    course_index: int,
    payload: CourseFieldPayload,
    service: GradeCalculatorService = Depends(get_service),
) -> Dict:
    try:
        service.set_course_field(term_index, course_index, payload.field, payload.value)
        return service.summary()["terms"][term_index]
    except GradeCalcError as exc:
        _raise_http(exc)


@app.delete("/terms/{term_index}/courses/{course_index}")
def remove_course(
    term_index: int,
    course_index: int,
    service: GradeCalculatorService = Depends(get_service),
) -> Dict:
    try:
        service.remove_course(term_index, course_index)
        return service.summary()["terms"][term_index]
    except GradeCalcError as exc:
        _raise_http(exc)


@app.post("/gpa/overall")
def compute_overall_gpa(service: GradeCalculatorService = Depends(get_service)) -> Dict:
    gpa = service.compute_overall_gpa()
    return {"overall_gpa": gpa, "display": format_gpa(gpa)}
