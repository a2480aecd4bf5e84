"""
Tests for the Unset sentinel and the small helpers of flagline.utils.

- Singleton identity, falsy semantics and finality of UnsetType.
- coalesce() replaces only Unset.
- mirror() exposes copies of private state; rename() updates callable names.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from flagline.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def testSingleton(self) -> None:
        self.assertIs(Unset, UnsetType())

    def testFalsyButDistinct(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, "")

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyPreservesIdentity(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testUnionSupport(self) -> None:
        self.assertIsInstance("value", str | Unset)
        self.assertIsInstance(Unset, str | Unset)


class HelpersTest(TestCase):
    """
    Test suite for coalesce(), mirror() and rename().
    """

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertIsNone(coalesce(None, "fallback"))

    def testMirrorReturnsCopies(self) -> None:
        class Holder:
            names = mirror("names")
            items = mirror("items")

            def __init__(self):
                self._names = {"a", "b"}
                self._items = ["x", "y"]

        holder = Holder()
        self.assertEqual(holder.names, frozenset({"a", "b"}))
        self.assertIsInstance(holder.names, frozenset)
        self.assertEqual(holder.items, ("x", "y"))
        with self.assertRaises(AttributeError):
            holder.names = set()

    def testMirrorRejectsNonString(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)

    def testRename(self) -> None:
        def work():
            pass

        self.assertIs(rename(work, "job"), work)
        self.assertEqual((work.__name__, work.__qualname__), ("job", "job"))

        @rename("task")
        def other():
            pass

        self.assertEqual(other.__name__, "task")
        with self.assertRaises(TypeError):
            rename()


if __name__ == "__main__":
    unittest.main()
