# python
"""
Registry module behavioral tests (registration, uniqueness, queries).

Scope
- Validate add_option() acceptance and rejection on short/long/cross name collisions.
- Validate is_opt_known() cross-matching and empty-name handling.
- Validate that queries only see options found by the last parse.

Conventions
- Test method names follow CamelCase per project convention.
- Found flags are set through Parser.parse() rather than by poking state.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from optscan import Option, Parser, Registry, exact


class TestRegistration(TestCase):
    """Behavioral tests for add_option() and is_opt_known()."""

    def testAddOptionAccepts(self):
        registry = Registry()
        self.assertTrue(registry.add_option(Option("v", "verbose")))
        self.assertEqual(len(registry), 1)

    def testFreshStateOnRegistration(self):
        registry = Registry()
        option = Option("o", "out", constraint=exact(1))
        registry.add_option(option)
        state = registry.state(option)
        self.assertEqual(state.values, [])
        self.assertFalse(state.found)

    def testShortNameCollisionRejected(self):
        registry = Registry(Option("v", "verbose"))
        self.assertFalse(registry.add_option(Option("v", "version")))
        self.assertEqual(list(registry), [Option("v", "verbose")])

    def testLongNameCollisionRejected(self):
        registry = Registry(Option("v", "verbose"))
        self.assertFalse(registry.add_option(Option("x", "verbose")))
        self.assertEqual(len(registry), 1)
        self.assertNotIn("x", registry)

    def testCrossFieldCollisionRejected(self):
        registry = Registry(Option("v", "verbose"))
        # long name equal to an existing short name
        self.assertFalse(registry.add_option(Option("x", "v")))
        # short name equal to an existing long name
        self.assertFalse(registry.add_option(Option("verbose")))
        self.assertEqual(len(registry), 1)

    def testEmptyNamesNeverCollide(self):
        registry = Registry()
        self.assertTrue(registry.add_option(Option(long="verbose")))
        self.assertTrue(registry.add_option(Option(long="out")))
        self.assertTrue(registry.add_option(Option("f")))
        self.assertTrue(registry.add_option(Option("g")))
        self.assertTrue(registry.add_option(Option()))
        self.assertTrue(registry.add_option(Option()))
        self.assertEqual(len(registry), 6)

    def testBulkConstructionSkipsCollisions(self):
        registry = Registry(Option("a"), Option("b"), Option("a", "again"))
        self.assertEqual([option.short for option in registry], ["a", "b"])
        self.assertNotIn("again", registry)

    def testAddOptionRejectsNonOptions(self):
        with self.assertRaises(TypeError):
            Registry().add_option("--verbose")

    def testIsOptKnownCrossMatches(self):
        registry = Registry(Option("v", "verbose"))
        self.assertTrue(registry.is_opt_known("v", "other"))
        self.assertTrue(registry.is_opt_known("x", "verbose"))
        self.assertTrue(registry.is_opt_known("verbose", "x"))
        self.assertTrue(registry.is_opt_known("x", "v"))
        self.assertFalse(registry.is_opt_known("x", "y"))
        self.assertFalse(registry.is_opt_known("", ""))

    def testContainsByNameAndByOption(self):
        option = Option("v", "verbose")
        registry = Registry(option)
        self.assertIn("v", registry)
        self.assertIn("verbose", registry)
        self.assertIn(option, registry)
        self.assertNotIn("", registry)
        self.assertIn(Option("v", "verbose"), registry)
        self.assertNotIn(Option("v"), registry)
        self.assertNotIn(Option("x", "verbose"), registry)
        self.assertNotIn(object(), registry)

    def testStateByEqualOption(self):
        option = Option("o", "out", constraint=exact(1))
        parser = Parser(option)
        parser.parse(["prog", "--out", "a.txt"])
        state = parser.state(Option("o", "out"))
        self.assertIs(state, parser.state(option))
        self.assertTrue(state.found)
        self.assertEqual(state.values, ["a.txt"])

    def testStateOfMismatchedNamePairRaises(self):
        registry = Registry(Option("v", "verbose"))
        with self.assertRaises(KeyError):
            registry.state(Option("v"))
        with self.assertRaises(KeyError):
            registry.state(Option(long="verbose"))

    def testUnnamedOptionsAreMatchedByIdentity(self):
        first, second = Option(), Option(descr="other")
        registry = Registry(first, second)
        self.assertIsNot(registry.state(first), registry.state(second))
        self.assertIn(first, registry)
        self.assertNotIn(Option(), registry)
        with self.assertRaises(KeyError):
            registry.state(Option())

    def testStateOfUnknownOptionRaises(self):
        with self.assertRaises(KeyError):
            Registry().state(Option("v"))


class TestQueries(TestCase):
    """Behavioral tests for find_option(), has_option() and values_from_option()."""

    def setUp(self):
        self.parser = Parser(
            Option("v", "verbose"),
            Option("o", "out", constraint=exact(1)),
        )

    def testRegisteredButNotFoundReadsAsMissing(self):
        self.parser.parse(["prog"])
        self.assertIsNone(self.parser.find_option("verbose"))
        self.assertFalse(self.parser.has_option("v"))
        self.assertEqual(self.parser.values_from_option("out"), [])

    def testUnknownNameReadsAsMissing(self):
        self.parser.parse(["prog", "-v"])
        self.assertIsNone(self.parser.find_option("nope"))
        self.assertFalse(self.parser.has_option("nope"))
        self.assertEqual(self.parser.values_from_option("nope"), [])

    def testFoundByEitherName(self):
        self.parser.parse(["prog", "-o", "a.txt"])
        option, state = self.parser.find_option("out")
        self.assertEqual(option, Option("o", "out"))
        self.assertTrue(state.found)
        self.assertTrue(self.parser.has_option("o"))
        self.assertEqual(self.parser.values_from_option("o"), ["a.txt"])
        self.assertEqual(self.parser.values_from_option("out"), ["a.txt"])

    def testValuesAreCopies(self):
        self.parser.parse(["prog", "--out", "a.txt"])
        values = self.parser.values_from_option("out")
        values.append("b.txt")
        self.assertEqual(self.parser.values_from_option("out"), ["a.txt"])


if __name__ == "__main__":
    unittest.main()
