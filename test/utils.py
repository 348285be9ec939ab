"""
Tests for the internal utilities.

This module verifies:
- Unset singleton identity, falsy semantics and finality.
- coalesce() only replacing the sentinel.
- rename() in both forms.
- mirror() handing out copies of container backing fields.
"""
import unittest
from unittest import TestCase

from optscan.utils import *


class UnsetTest(TestCase):

    def testSingleton(self) -> None:
        self.assertIs(Unset, UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testUnionWithTypes(self) -> None:
        self.assertIsInstance("x", str | Unset)
        self.assertIsInstance(Unset, str | Unset)
        self.assertNotIsInstance(1, str | Unset)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class CoalesceTest(TestCase):

    def testReplacesUnset(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testPreservesFalsyValues(self) -> None:
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)


class RenameTest(TestCase):

    def testFunctionForm(self) -> None:
        def f():
            pass

        self.assertIs(rename(f, "g"), f)
        self.assertEqual((f.__name__, f.__qualname__), ("g", "g"))

    def testDecoratorForm(self) -> None:
        @rename("g")
        def f():
            pass

        self.assertEqual(f.__name__, "g")

    def testRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename(1, "g")
        with self.assertRaises(TypeError):
            rename()


class MirrorTest(TestCase):

    def testReturnsCopies(self) -> None:
        class Holder:
            values = mirror("values")

            def __init__(self):
                self._values = ["a", "b"]

        holder = Holder()
        values = holder.values
        values.append("c")
        self.assertEqual(holder.values, ["a", "b"])

    def testReadOnly(self) -> None:
        class Holder:
            value = mirror("value")
            _value = 1

        with self.assertRaises(AttributeError):
            Holder().value = 2


if __name__ == '__main__':
    unittest.main()
