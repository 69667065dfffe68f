import unittest

from application.conformance.registry import ScenarioRegistry
from application.conformance.scenarios import always_fail, build_default_registry, trivial


class TestScenarioRegistry(unittest.TestCase):
    def test_keeps_registration_order(self):
        registry = ScenarioRegistry([("b", trivial), ("a", always_fail)])
        self.assertEqual(registry.names, ["b", "a"])
        self.assertEqual(registry[0].name, "b")
        self.assertIs(registry[1].body, always_fail)
        self.assertEqual(len(registry), 2)

    def test_duplicate_names_rejected(self):
        with self.assertRaises(ValueError):
            ScenarioRegistry([("trivial", trivial), ("trivial", always_fail)])

    def test_empty_name_rejected(self):
        with self.assertRaises(ValueError):
            ScenarioRegistry([("", trivial)])

    def test_lookup_by_name(self):
        registry = ScenarioRegistry([("trivial", trivial)])
        self.assertIn("trivial", registry)
        self.assertIsNotNone(registry.get("trivial"))
        self.assertIsNone(registry.get("alwaysfail"))

    def test_default_registry_order(self):
        registry = build_default_registry()
        self.assertEqual(
            registry.names,
            [
                "trivial",
                "zerodocid_inmemory",
                "simplequery1",
                "simplequery2",
                "simplequery3",
                "multidb1",
                "changequery1",
                "nullquery1",
                "msetmaxitems1",
                "expandmaxitems1",
            ],
        )
        self.assertNotIn("alwaysfail", registry)


if __name__ == "__main__":
    unittest.main()
