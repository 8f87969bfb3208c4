"""
Tests for the internal helpers.

This module verifies:
- The Unset sentinel: singleton identity, falsy semantics, copying and pickling,
  finality.
- coalesce/rename/mirror building blocks.
- pmatch path globbing: wildcards never cross '/', character classes, escapes and
  malformed patterns.
"""
import copy
import pickle
import unittest
from threading import Thread, Lock
from unittest import TestCase

from optbox.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def setUp(self) -> None:
        self.unset: UnsetType = UnsetType()

    def testSingleton(self) -> None:
        """
        The constructor returns the exported instance on every call.
        """
        self.assertIs(self.unset, Unset)
        self.assertIs(UnsetType(), Unset)

    def testFalsely(self) -> None:
        self.assertFalse(bool(Unset))
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testUnionWithTypes(self) -> None:
        """
        `str | Unset` is usable in isinstance checks.
        """
        self.assertTrue(isinstance("x", str | Unset))
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertFalse(isinstance(1, str | Unset))

    def testUnionOrder(self) -> None:
        """
        Operands keep their written order in the resulting union.
        """
        self.assertEqual((str | Unset).__args__, (str, UnsetType))
        self.assertEqual((Unset | str).__args__, (UnsetType, str))

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testPickleRoundTrip(self) -> None:
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testThreadSafetySingleton(self) -> None:
        """
        Concurrent constructions return the same instance.
        """
        results: list[UnsetType] = []
        lock: Lock = Lock()

        def worker():
            instance = UnsetType()
            with lock:
                results.append(instance)

        threads: list[Thread] = [Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(results), 16)
        for instance in results:
            self.assertIs(instance, Unset)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class HelpersTest(TestCase):

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce("name", "fallback"), "name")
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertIsNone(coalesce(Unset))

    def testRenameDirect(self) -> None:
        def function():
            pass
        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testRenameDecorator(self) -> None:
        @rename("renamed")
        def function():
            pass
        self.assertEqual(function.__name__, "renamed")

    def testRenameRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename(1, "name")
        with self.assertRaises(TypeError):
            rename(1)
        with self.assertRaises(TypeError):
            rename()

    def testMirrorCopiesContainers(self) -> None:
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = ["a", ["b"]]

        holder = Holder()
        items = holder.items
        items[1].append("c")
        self.assertEqual(holder._items, ["a", ["b"]])
        with self.assertRaises(AttributeError):
            holder.items = []


class PathMatchTest(TestCase):

    def testLiteral(self) -> None:
        self.assertTrue(pmatch("file.txt", "file.txt"))
        self.assertFalse(pmatch("file.txt", "file.txt.bak"))

    def testStarStaysInSegment(self) -> None:
        self.assertTrue(pmatch("*.txt", "a.txt"))
        self.assertTrue(pmatch("*.txt", ".txt"))
        self.assertFalse(pmatch("*.txt", "dir/a.txt"))
        self.assertTrue(pmatch("*/*.txt", "dir/a.txt"))

    def testQuestionMark(self) -> None:
        self.assertTrue(pmatch("?.go", "a.go"))
        self.assertFalse(pmatch("?.go", "ab.go"))
        self.assertFalse(pmatch("a?b", "a/b"))

    def testCharacterClasses(self) -> None:
        self.assertTrue(pmatch("[abc].txt", "b.txt"))
        self.assertTrue(pmatch("[a-c].txt", "c.txt"))
        self.assertFalse(pmatch("[a-c].txt", "d.txt"))
        self.assertTrue(pmatch("[!a-c].txt", "d.txt"))
        self.assertTrue(pmatch("[^a-c].txt", "d.txt"))
        self.assertFalse(pmatch("a[!x]b", "a/b"))

    def testEscapes(self) -> None:
        self.assertTrue(pmatch(r"\*.txt", "*.txt"))
        self.assertFalse(pmatch(r"\*.txt", "a.txt"))
        self.assertTrue(pmatch(r"[\]]", "]"))

    def testMalformedPatterns(self) -> None:
        for pattern in ("[", "[]", "[a", "a\\", "[\\"):
            with self.subTest(pattern=pattern):
                with self.assertRaises(ValueError):
                    pmatch(pattern, "a")


if __name__ == '__main__':
    unittest.main()
