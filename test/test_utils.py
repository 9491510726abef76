"""
Tests for the internal helpers.

This module verifies:
- The Unset sentinel (singleton identity, falsiness, finality).
- coalesce() replacing only Unset.
- rename() in function and decorator form.
- sealed() closing classes against subclassing.
"""
import unittest
from unittest import TestCase

from cmdtree.utils import *


class UnsetTest(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(bool(Unset))

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testFinalClass(self):
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})

    def testUnion(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("text", str | Unset)


class CoalesceTest(TestCase):

    def testReplacesUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testPreservesFalsyValues(self):
        for value in (None, 0, "", []):
            with self.subTest(value=value):
                self.assertEqual(coalesce(value, "fallback"), value)


class RenameTest(TestCase):

    def testFunctionForm(self):
        def f():
            pass

        self.assertIs(rename(f, "g"), f)
        self.assertEqual(f.__name__, "g")
        self.assertEqual(f.__qualname__, "g")

    def testDecoratorForm(self):
        @rename("h")
        def f():
            pass

        self.assertEqual(f.__name__, "h")

    def testWrongArity(self):
        with self.assertRaises(TypeError):
            rename()


class SealedTest(TestCase):

    def testSubclassingRejected(self):
        @sealed
        class Leaf:
            pass

        with self.assertRaises(TypeError):
            type("Branch", (Leaf,), {})

    def testRejectsNonClass(self):
        with self.assertRaises(TypeError):
            sealed(lambda: None)


if __name__ == '__main__':
    unittest.main()
