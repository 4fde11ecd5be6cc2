import json
import os
import tempfile
import unittest

from gradecalc.domain.errors import StorageError
from gradecalc.domain.models.entities import Course
from gradecalc.domain.record import AcademicRecord
from gradecalc.services.storage import STORAGE_KEY, Storage, record_from_json, record_to_json


class StorageTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.store = Storage(os.path.join(self.tmp.name, "nested", "gradecalc.db"))

    def tearDown(self):
        self.store.close()
        self.tmp.cleanup()

    def test_load_empty(self):
        self.assertIsNone(self.store.load())

    def test_save_and_load(self):
        record = AcademicRecord.from_courses([[Course("Math", "A", 3), Course("Lab", "W", 1)]])
        record.add_term()
        record.compute_overall_gpa()
        self.store.save(record)

        loaded = self.store.load()
        self.assertEqual(len(loaded.terms), 2)
        self.assertEqual(loaded.terms[0].courses, record.terms[0].courses)
        self.assertEqual(loaded.terms[0].total_credits, 4)
        self.assertEqual(loaded.terms[0].earned_credits, 3)
        self.assertEqual(len(loaded.terms[1].courses), 10)
        self.assertIsNone(loaded.overall_gpa)

    def test_save_overwrites(self):
        self.store.save(AcademicRecord.default())
        self.store.save(AcademicRecord.from_courses([[Course("Only", "B", 2)]]))
        loaded = self.store.load()
        self.assertEqual(loaded.terms[0].courses, [Course("Only", "B", 2)])

    def test_document_shape(self):
        self.store.save(AcademicRecord.from_courses([[Course("Math", "A", 3)]]))
        doc = json.loads(self.store.get(STORAGE_KEY))
        self.assertEqual(
            doc,
            [{"courses": [{"name": "Math", "grade": "A", "credits": 3.0}], "totalCredits": 3.0, "earnedCredits": 3.0}],
        )

    def test_cached_totals_are_recomputed(self):
        raw = json.dumps(
            [{"courses": [{"name": "Math", "grade": "B", "credits": 3}], "totalCredits": 99, "earnedCredits": 42}]
        )
        record = record_from_json(raw)
        self.assertEqual(record.terms[0].total_credits, 3)
        self.assertEqual(record.terms[0].earned_credits, 3)

    def test_null_credits_read_as_zero(self):
        raw = json.dumps([{"courses": [{"name": "", "grade": "F", "credits": None}]}])
        record = record_from_json(raw)
        self.assertEqual(record.terms[0].courses[0].credits, 0)

    def test_unopenable_path_reports_storage_error(self):
        blocker = os.path.join(self.tmp.name, "blocker")
        with open(blocker, "w") as fh:
            fh.write("x")
        store = Storage(os.path.join(blocker, "db.sqlite"))
        self.assertFalse(store.available)
        with self.assertRaises(StorageError):
            store.load()
        with self.assertRaises(StorageError):
            store.save(AcademicRecord.default())
        store.close()

    def test_malformed_documents(self):
        bad_docs = [
            "not json",
            json.dumps({"courses": []}),
            json.dumps([{"courses": [{"name": "X", "grade": "Q", "credits": 3}]}]),
            json.dumps([{"courses": [{"name": "X", "grade": "A", "credits": -2}]}]),
            json.dumps([{"courses": [{"name": "X", "credits": 1}]}]),
        ]
        for raw in bad_docs:
            with self.assertRaises(StorageError):
                record_from_json(raw)

    def test_round_trip_json(self):
        record = AcademicRecord.from_courses([[Course("A", "C-", 1.5)], []])
        again = record_from_json(record_to_json(record))
        self.assertEqual([t.courses for t in again.terms], [t.courses for t in record.terms])


if __name__ == "__main__":
    unittest.main()
