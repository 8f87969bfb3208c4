"""
Positional arguments behavioral tests.

Scope
- Argument: typed coercions, boolean spellings, typed comparison, POSIX path
  helpers, case shortcuts and glob matching.
- Arguments: never-raising index helpers, immutable append/unshift, glob filtering.

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from optbox import Argument, Arguments, new_arguments


class TestArgument(TestCase):
    """Single positional token."""

    def testIsString(self):
        argument = Argument("file.txt")
        self.assertIsInstance(argument, str)
        self.assertEqual(argument, "file.txt")
        self.assertEqual(argument.string(), "file.txt")
        self.assertIs(type(argument.string()), str)
        self.assertEqual(repr(argument), "Argument('file.txt')")

    def testCase(self):
        self.assertEqual(Argument("MiXeD").to_lower(), "mixed")
        self.assertEqual(Argument("MiXeD").to_upper(), "MIXED")
        self.assertIsInstance(Argument("x").to_upper(), Argument)

    def testInt(self):
        self.assertEqual(Argument("42").int(), 42)
        self.assertEqual(Argument("-42").int(), -42)
        self.assertEqual(Argument("+7").int(), 7)
        for value in ("", "4.2", " 4", "0x10", "1_000", "abc", "٣"):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    Argument(value).int()

    def testInt64Range(self):
        self.assertEqual(Argument("9223372036854775807").int64(), (1 << 63) - 1)
        self.assertEqual(Argument("-9223372036854775808").int64(), -(1 << 63))
        with self.assertRaises(ValueError):
            Argument("9223372036854775808").int64()
        with self.assertRaises(ValueError):
            Argument("-9223372036854775809").int()

    def testUint(self):
        self.assertEqual(Argument("18446744073709551615").uint(), (1 << 64) - 1)
        with self.assertRaises(ValueError):
            Argument("18446744073709551616").uint()
        with self.assertRaises(ValueError):
            Argument("-1").uint()

    def testFloat(self):
        self.assertEqual(Argument("1.5").float(), 1.5)
        self.assertEqual(Argument("1e3").float(), 1000.0)
        for value in ("", " 1.5", "1_0.5", "one"):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    Argument(value).float()

    def testBool(self):
        for value in ("true", "TRUE", "yes", "Y", "1"):
            with self.subTest(value=value):
                self.assertTrue(Argument(value).bool())
        for value in ("false", "No", "n", "0", ""):
            with self.subTest(value=value):
                self.assertFalse(Argument(value).bool())
        with self.assertRaises(ValueError) as context:
            Argument("maybe").bool()
        self.assertIn("Unsupported boolean value", str(context.exception))

    def testIs(self):
        self.assertTrue(Argument("abc").is_("abc"))
        self.assertTrue(Argument("10").is_(10))
        self.assertTrue(Argument("yes").is_(True))
        self.assertTrue(Argument("0").is_(False))
        self.assertTrue(Argument("2.5").is_(2.5))
        self.assertFalse(Argument("abc").is_(10))
        self.assertFalse(Argument("10").is_(11))
        self.assertFalse(Argument("10").is_([10]))

    def testBase(self):
        self.assertEqual(Argument("/tmp/file.txt").base(), "file.txt")
        self.assertEqual(Argument("dir/").base(), "dir")
        self.assertEqual(Argument("/").base(), "/")
        self.assertEqual(Argument("").base(), ".")

    def testClean(self):
        self.assertEqual(Argument("a//b/./c/..").clean(), "a/b")
        self.assertEqual(Argument("//a").clean(), "/a")
        self.assertEqual(Argument("a/../..").clean(), "..")
        self.assertEqual(Argument("").clean(), ".")

    def testDir(self):
        self.assertEqual(Argument("/tmp/file.txt").dir(), "/tmp")
        self.assertEqual(Argument("file.txt").dir(), ".")
        self.assertEqual(Argument("/file.txt").dir(), "/")
        self.assertEqual(Argument("a/b/").dir(), "a/b")

    def testExt(self):
        self.assertEqual(Argument("archive.tar.gz").ext(), ".gz")
        self.assertEqual(Argument("dir.d/file").ext(), "")
        self.assertEqual(Argument("file").ext(), "")

    def testIsAbs(self):
        self.assertTrue(Argument("/etc").is_abs())
        self.assertFalse(Argument("etc").is_abs())

    def testChaining(self):
        self.assertEqual(Argument("/tmp/Data.TXT").base().to_lower(), "data.txt")

    def testMatch(self):
        self.assertTrue(Argument("a.txt").match("*.txt"))
        self.assertFalse(Argument("dir/a.txt").match("*.txt"))
        with self.assertRaises(ValueError):
            Argument("a.txt").match("[")


class TestArguments(TestCase):
    """Positional arguments view."""

    def setUp(self):
        self.arguments = Arguments("A.txt", "b.png", "c.txt")

    def testItemsAreArguments(self):
        self.assertEqual(len(self.arguments), 3)
        for argument in self.arguments:
            self.assertIsInstance(argument, Argument)
        self.assertEqual(self.arguments.strings(), ["A.txt", "b.png", "c.txt"])
        self.assertEqual(repr(Arguments("a")), "Arguments('a')")

    def testHas(self):
        self.assertTrue(self.arguments.has(0))
        self.assertFalse(self.arguments.has(3))
        self.assertFalse(self.arguments.has(-1))
        self.assertFalse(Arguments("").has(0))

    def testGet(self):
        self.assertEqual(self.arguments.get(1), "b.png")
        self.assertEqual(self.arguments.get(9), "")
        self.assertEqual(self.arguments.get(-1), "")
        self.assertIsInstance(self.arguments.get(9), Argument)

    def testLast(self):
        self.assertEqual(self.arguments.last(), "c.txt")
        self.assertEqual(Arguments().last(), "")

    def testAppendAndUnshiftReturnNewViews(self):
        appended = self.arguments.append("d", "e")
        unshifted = self.arguments.unshift("z")
        self.assertEqual(appended.strings(), ["A.txt", "b.png", "c.txt", "d", "e"])
        self.assertEqual(unshifted.strings(), ["z", "A.txt", "b.png", "c.txt"])
        self.assertEqual(len(self.arguments), 3)
        self.assertIsInstance(appended, Arguments)
        self.assertIsInstance(self.arguments + ["x"], Arguments)

    def testFilter(self):
        self.assertEqual(self.arguments.filter("*.txt").strings(), ["A.txt", "c.txt"])
        self.assertEqual(self.arguments.filter("[a-z].*").strings(), ["b.png", "c.txt"])
        self.assertEqual(len(self.arguments.filter("*.doc")), 0)

    def testFilterMalformedPattern(self):
        filtered = self.arguments.filter("[")
        self.assertIsInstance(filtered, Arguments)
        self.assertEqual(len(filtered), 0)

    def testCopyAndPickle(self):
        self.assertEqual(copy.copy(self.arguments).strings(), self.arguments.strings())
        restored = pickle.loads(pickle.dumps(self.arguments))
        self.assertIsInstance(restored, Arguments)
        self.assertEqual(restored.strings(), self.arguments.strings())

    def testNewArguments(self):
        self.assertEqual(new_arguments("a", "b").strings(), ["a", "b"])
        self.assertEqual(len(new_arguments()), 0)


if __name__ == "__main__":
    unittest.main()
