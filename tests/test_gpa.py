import unittest

from gradecalc.domain.logic.gpa import calc_gpa, calc_overall_gpa, calc_term_gpa, credit_totals, format_gpa
from gradecalc.domain.models.entities import Course, Term


def sample_courses():
    return [Course("Math", "A", 3), Course("History", "B+", 4), Course("Lab", "W", 1)]


class GPATests(unittest.TestCase):
    def test_term_gpa(self):
        term = Term(courses=sample_courses())
        self.assertAlmostEqual(calc_term_gpa(term), 25.2 / 7)
        self.assertEqual(format_gpa(calc_term_gpa(term)), "3.60")

    def test_overall_gpa(self):
        terms = [Term(courses=sample_courses()), Term(courses=sample_courses())]
        self.assertAlmostEqual(calc_overall_gpa(terms), 3.6, places=2)

    def test_overall_weights_by_credits_not_terms(self):
        sem1 = [Course("A1", "A", 1)]
        sem2 = [Course("C1", "C", 3)]
        self.assertAlmostEqual(calc_overall_gpa([Term(sem1), Term(sem2)]), (4.0 + 6.0) / 4)

    def test_nothing_eligible_is_zero(self):
        courses = [Course("X", "F", 3), Course("Y", "W", 2), Course("Z", "A", 0)]
        self.assertEqual(calc_gpa(courses), 0)
        self.assertEqual(calc_gpa([]), 0)

    def test_ineligible_courses_do_not_move_gpa(self):
        base = [Course("Math", "A-", 3), Course("Art", "C+", 2)]
        noise = [Course("Drop", "W", 4), Course("Fail", "F", 3), Course("Seminar", "B", 0)]
        self.assertAlmostEqual(calc_gpa(base), calc_gpa(base + noise))
        self.assertEqual(credit_totals(base)[1], credit_totals(base + noise)[1])

    def test_credit_totals(self):
        total, earned = credit_totals(sample_courses())
        self.assertEqual(total, 8)
        self.assertEqual(earned, 7)

    def test_format_gpa(self):
        self.assertEqual(format_gpa(None), "")
        self.assertEqual(format_gpa(0), "0.00")


if __name__ == "__main__":
    unittest.main()
