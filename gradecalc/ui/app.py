from __future__ import annotations

import flet as ft

from gradecalc.domain.errors import GradeCalcError
from gradecalc.domain.logic.gpa import format_gpa
from gradecalc.domain.logic.grading import GRADE_SYMBOLS
from gradecalc.domain.models.entities import Course
from gradecalc.services.calculator import GradeCalculatorService


class GradeCalculatorApp:
    def __init__(self, page: ft.Page, service: GradeCalculatorService) -> None:
        self.page = page
        self.page.title = "Grade and GPA Calculator"
        self.page.scroll = ft.ScrollMode.AUTO
        self.service = service
        self.error = ft.Text(color=ft.Colors.RED)
        self.terms_column = ft.Column(spacing=24)
        self.overall_text = ft.Text(size=22, weight=ft.FontWeight.BOLD, visible=False)

    def run(self) -> None:
        self.service.start()
        self.page.clean()
        self.page.add(
            ft.Column(
                [
                    ft.Text("Grade and GPA Calculator", size=30, weight=ft.FontWeight.BOLD),
                    self.terms_column,
                    ft.Row(
                        [
                            ft.ElevatedButton("Add New Term", on_click=self.handle_add_term),
                            ft.ElevatedButton("Calculate Overall GPA", on_click=self.handle_overall_gpa),
                        ],
                        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                    ),
                    self.error,
                    self.overall_text,
                ],
                width=760,
            )
        )
        self.refresh()

    def refresh(self) -> None:
        record = self.service.record
        self.terms_column.controls = [
            self.term_view(term_index, term) for term_index, term in enumerate(record.terms)
        ]
        if record.overall_gpa is not None:
            self.overall_text.value = f"Overall GPA: {format_gpa(record.overall_gpa)}"
            self.overall_text.visible = True
        self.page.update()

    def term_view(self, term_index: int, term) -> ft.Control:
        rows = [self.course_row(term_index, course_index, c) for course_index, c in enumerate(term.courses)]
        gpa = self.service.record.compute_term_gpa(term)
        return ft.Column(
            [
                ft.Text(f"Term {term_index + 1}", size=22, weight=ft.FontWeight.BOLD),
                *rows,
                ft.Text(f"Term GPA: {format_gpa(gpa)}"),
                ft.Text(f"Total Credits: {term.total_credits:g}"),
                ft.Text(f"Earned Credits: {term.earned_credits:g}"),
                ft.Divider(),
            ]
        )

    def course_row(self, term_index: int, course_index: int, course: Course) -> ft.Control:
        name = ft.TextField(
            hint_text=f"Course {course_index + 1}",
            value=course.name,
            expand=True,
            on_change=lambda e: self.apply(term_index, course_index, "name", e.control.value, rerender=False),
        )
        grade = ft.Dropdown(
            options=[ft.dropdown.Option(g) for g in GRADE_SYMBOLS],
            value=course.grade,
            width=100,
            on_change=lambda e: self.apply(term_index, course_index, "grade", e.control.value),
        )
        credits = ft.TextField(
            hint_text="Credits",
            value=f"{course.credits:g}",
            width=100,
            on_blur=lambda e: self.handle_credits(term_index, course_index, e.control.value),
        )
        return ft.Row(
            [
                name,
                grade,
                credits,
                ft.IconButton(
                    icon=ft.Icons.DELETE,
                    on_click=lambda _: self.handle_remove(term_index, course_index),
                ),
            ]
        )

    def apply(self, term_index: int, course_index: int, field: str, value: object, rerender: bool = True) -> None:
        try:
            self.service.set_course_field(term_index, course_index, field, value)
            self.error.value = ""
        except GradeCalcError as exc:
            self.error.value = str(exc)
        if rerender:
            self.refresh()
        else:
            self.page.update()

    def handle_credits(self, term_index: int, course_index: int, raw: str) -> None:
        try:
            credits = float(raw) if raw.strip() else 0.0
        except ValueError:
            self.error.value = f"Credits must be a number, got {raw!r}"
            self.refresh()
            return
        self.apply(term_index, course_index, "credits", credits)

    def handle_remove(self, term_index: int, course_index: int) -> None:
        try:
            self.service.remove_course(term_index, course_index)
        except GradeCalcError as exc:
            self.error.value = str(exc)
        self.refresh()

    def handle_add_term(self, _: ft.ControlEvent) -> None:
        try:
            self.service.add_term()
        except GradeCalcError as exc:
            self.error.value = str(exc)
        self.refresh()

    def handle_overall_gpa(self, _: ft.ControlEvent) -> None:
        self.service.compute_overall_gpa()
        self.refresh()


def main(page: ft.Page) -> None:
    GradeCalculatorApp(page, GradeCalculatorService.from_settings()).run()
