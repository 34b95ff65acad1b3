import sys
import tempfile
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_analyzer.core.record_store import InMemoryResumeStore, SQLiteResumeStore  # noqa: E402
from resume_analyzer.schemas.analysis import ActionableTip, AnalysisResult, KeywordBuckets  # noqa: E402
from resume_analyzer.schemas.resume import CompletedState, FailedState, ProcessingState  # noqa: E402

TEXT = "Backend engineer. Python, FastAPI, PostgreSQL and Redis. Seven years of experience."


def _analysis():
    return AnalysisResult(
        match_score=64,
        found_keywords=KeywordBuckets(hard_skills=["Python", "FastAPI"]),
        missing_keywords=KeywordBuckets(hard_skills=["Kubernetes"], certifications=["CKA"]),
        actionable_tips=[ActionableTip(category="impact", suggestion="Add numbers.", priority="high")],
        summary="Good backend fundamentals.",
    )


class _StoreContract:
    """Behaviour both stores share; subclasses provide ``make_store``."""

    def make_store(self):
        raise NotImplementedError

    def test_new_records_start_processing(self):
        store = self.make_store()
        record = store.create("owner-a", "cv.pdf", TEXT, None)
        self.assertIsInstance(record.state, ProcessingState)
        self.assertEqual(len(record.id), 32)
        self.assertEqual(store.find_by_id(record.id).status, "processing")

    def test_completed_state_survives_reload(self):
        store = self.make_store()
        record = store.create("owner-a", "cv.pdf", TEXT, "Python developer")
        store.update(record.complete(_analysis()))

        reloaded = store.find_by_id(record.id)
        self.assertIsInstance(reloaded.state, CompletedState)
        self.assertEqual(reloaded.analysis, _analysis())
        self.assertEqual(reloaded.job_description, "Python developer")

    def test_failed_state_survives_reload(self):
        store = self.make_store()
        record = store.create("owner-a", "cv.pdf", TEXT, None)
        store.update(record.fail(error_code="ai_quota_exceeded", error_message="quota"))

        reloaded = store.find_by_id(record.id)
        self.assertIsInstance(reloaded.state, FailedState)
        self.assertEqual(reloaded.state.error_code, "ai_quota_exceeded")
        self.assertIsNone(reloaded.analysis)

    def test_listing_is_newest_first_and_scoped_to_owner(self):
        store = self.make_store()
        first = store.create("owner-a", "one.pdf", TEXT, None)
        second = store.create("owner-a", "two.pdf", TEXT, None)
        store.create("owner-b", "other.pdf", TEXT, None)

        listed = store.list_by_owner("owner-a")
        self.assertEqual([r.id for r in listed], [second.id, first.id])
        self.assertEqual(store.find_latest_by_owner("owner-a").id, second.id)
        self.assertIsNone(store.find_latest_by_owner("owner-c"))

    def test_update_of_unknown_record_raises(self):
        store = self.make_store()
        record = store.create("owner-a", "cv.pdf", TEXT, None)
        store.delete(record.id)
        with self.assertRaises(KeyError):
            store.update(record.complete(_analysis()))

    def test_delete(self):
        store = self.make_store()
        record = store.create("owner-a", "cv.pdf", TEXT, None)
        self.assertTrue(store.delete(record.id))
        self.assertFalse(store.delete(record.id))
        self.assertIsNone(store.find_by_id(record.id))


class InMemoryResumeStoreTests(_StoreContract, unittest.TestCase):
    def make_store(self):
        return InMemoryResumeStore()


class SQLiteResumeStoreTests(_StoreContract, unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self._stores = []

    def tearDown(self):
        for store in self._stores:
            store.close()
        self._tmp.cleanup()

    def make_store(self):
        store = SQLiteResumeStore(str(Path(self._tmp.name) / "nested" / "resumes.db"))
        self._stores.append(store)
        return store

    def test_records_persist_across_connections(self):
        store = self.make_store()
        record = store.create("owner-a", "cv.pdf", TEXT, None)
        store.update(record.complete(_analysis()))
        store.close()

        reopened = self.make_store()
        self.assertEqual(reopened.find_by_id(record.id).analysis.match_score, 64)


if __name__ == "__main__":
    unittest.main()
