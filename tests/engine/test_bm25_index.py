import importlib.util
import unittest


@unittest.skipIf(importlib.util.find_spec("rank_bm25") is None, "rank_bm25 not installed")
class TestBM25Index(unittest.TestCase):
    def setUp(self) -> None:
        from application.services.bm25_index import BM25Index

        self.index = BM25Index()
        self.index.update_documents(
            [
                (1, ["alpha", "beta"]),
                (2, ["beta", "gamma", "gamma"]),
                (3, ["delta"]),
            ]
        )

    def test_only_documents_with_a_query_term_match(self):
        scores = self.index.scores(["gamma"])
        self.assertEqual(set(scores), {2})
        self.assertGreater(scores[2], 0.0)

    def test_unknown_terms(self):
        self.assertEqual(self.index.scores(["omega"]), {})
        self.assertEqual(self.index.scores([]), {})

    def test_rebuild_only_on_change(self):
        state = self.index._state
        self.index.update_documents([(1, ["alpha", "beta"]), (2, ["beta", "gamma", "gamma"]), (3, ["delta"])])
        self.assertIs(self.index._state, state)
        self.index.update_documents([(1, ["alpha"])])
        self.assertIsNot(self.index._state, state)
        self.assertEqual(self.index.size, 1)

    def test_empty_collection(self):
        from application.services.bm25_index import BM25Index

        index = BM25Index()
        index.update_documents([])
        self.assertEqual(index.scores(["alpha"]), {})
        self.assertEqual(index.expansion_weights([1]), {})

    def test_rarer_terms_weigh_more_in_expansion(self):
        weights = self.index.expansion_weights([2])
        self.assertEqual(set(weights), {"beta", "gamma"})
        self.assertGreater(weights["gamma"], weights["beta"])


if __name__ == "__main__":
    unittest.main()
