import importlib.util
import tempfile
import unittest
from pathlib import Path

from domain.entities import Query, RelevanceSet
from domain.interfaces import RetrievalError

TESTDATA = Path(__file__).resolve().parents[2] / "testdata"


@unittest.skipIf(
    importlib.util.find_spec("rank_bm25") is None or importlib.util.find_spec("snowballstemmer") is None,
    "rank_bm25 or snowballstemmer not installed",
)
class TestInMemorySession(unittest.TestCase):
    def _session(self, *names):
        from infrastructure.storage.in_memory_session import InMemorySession

        session = InMemorySession()
        if names:
            session.open("inmemory", [str(TESTDATA / name) for name in names])
        return session

    def test_paragraphs_become_documents_numbered_from_one(self):
        with self._session("apitest_simpledata.txt") as session:
            self.assertEqual([doc.id for doc in session.documents], [1, 2, 3, 4, 5, 6])

    def test_second_source_continues_numbering(self):
        with self._session("apitest_simpledata.txt") as session:
            session.open("inmemory", [str(TESTDATA / "apitest_simpledata2.txt")])
            self.assertEqual(session.documents[-1].id, 9)
            self.assertTrue(session.documents[-1].metadata["source"].endswith("apitest_simpledata2.txt"))

    def test_ties_are_broken_by_ascending_docid(self):
        with self._session("apitest_simpledata.txt") as session:
            session.bind(Query("word"))
            mset = session.execute(0, 10)
        self.assertEqual(mset.document_ids, [2, 4])
        self.assertEqual(mset.items[0].score, mset.items[1].score)
        self.assertEqual(mset.matches_estimated, 2)
        self.assertEqual(mset.max_score, mset.items[0].score)

    def test_stemmed_index(self):
        with self._session("apitest_simpledata.txt") as session:
            session.bind(Query("thi"))
            self.assertEqual(len(session.execute(0, 10).items), 6)
            session.bind(Query("this"))
            self.assertEqual(len(session.execute(0, 10).items), 6)

    def test_window_limits(self):
        with self._session("apitest_simpledata.txt") as session:
            session.bind(Query("thi"))
            full = session.execute(0, 100)
            self.assertEqual(len(full.items), 6)
            one = session.execute(0, 1)
            self.assertEqual(len(one.items), 1)
            self.assertEqual(one.matches_estimated, 6)
            self.assertEqual(one.max_score, full.max_score)
            tail = session.execute(4, 10)
            self.assertEqual(tail.document_ids, full.document_ids[4:])
            self.assertEqual(session.execute(0, 0).items, ())

    def test_scores_descend_and_ids_positive(self):
        with self._session("apitest_simpledata.txt", "apitest_simpledata2.txt") as session:
            session.bind(Query("this word"))
            mset = session.execute(0, 10)
        scores = [item.score for item in mset.items]
        self.assertEqual(scores, sorted(scores, reverse=True))
        self.assertTrue(all(item.document_id > 0 for item in mset.items))

    def test_no_match(self):
        with self._session("apitest_simpledata.txt") as session:
            session.bind(Query("zebra"))
            mset = session.execute(0, 10)
        self.assertEqual((mset.matches_estimated, mset.max_score, mset.items), (0, 0.0, ()))

    def test_rebinding_only_affects_later_executions(self):
        with self._session("apitest_simpledata.txt") as session:
            session.bind(Query("word"))
            first = session.execute(0, 10)
            session.bind(Query("thi"))
            second = session.execute(0, 10)
        self.assertEqual(first.document_ids, [2, 4])
        self.assertEqual(len(second.items), 6)

    def test_invalid_input_raises_retrieval_error(self):
        with self._session("apitest_simpledata.txt") as session:
            with self.assertRaises(RetrievalError):
                session.execute(0, 10)
            with self.assertRaises(RetrievalError):
                session.bind(Query())
            session.bind(Query("word"))
            with self.assertRaises(RetrievalError):
                session.execute(-1, 10)
            with self.assertRaises(RetrievalError):
                session.expand(1, RelevanceSet.of([42]))
            with self.assertRaises(RetrievalError):
                session.open("quartz", ["x"])
            with self.assertRaises(RetrievalError):
                session.open("inmemory", [])

    def test_missing_source(self):
        with tempfile.TemporaryDirectory() as tmp:
            session = self._session()
            with self.assertRaises(RetrievalError) as caught:
                session.open("inmemory", [str(Path(tmp) / "absent.txt")])
            self.assertIn("absent.txt", caught.exception.message)

    def test_closed_session_rejects_calls(self):
        session = self._session("apitest_onedoc.txt")
        session.close()
        session.close()
        with self.assertRaises(RetrievalError):
            session.bind(Query("word"))

    def test_expansion_limit_and_order(self):
        with self._session("apitest_simpledata.txt") as session:
            session.bind(Query("thi"))
            mset = session.execute(0, 10)
            relevant = RelevanceSet.of(mset.document_ids[:2])
            eset = session.expand(1, relevant)
            everything = session.expand(1000, relevant)
            empty = session.expand(5, RelevanceSet())
        self.assertEqual(len(eset.items), 1)
        self.assertEqual(eset.items[0], everything.items[0])
        weights = [item.weight for item in everything.items]
        self.assertEqual(weights, sorted(weights, reverse=True))
        self.assertEqual(empty.items, ())

    def test_windows_and_crlf_sources(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "crlf.txt"
            path.write_bytes(b"\xef\xbb\xbfFirst word here.\r\n\r\nSecond one.\r\n")
            with self._session() as session:
                session.open("inmemory", [str(path)])
                self.assertEqual([doc.content for doc in session.documents], ["First word here.", "Second one."])


if __name__ == "__main__":
    unittest.main()
