# python
"""
Arguments module behavioral tests (Option validation, derived properties, decorator).

Scope
- Validate option names (short/long shapes, one of each kind at most).
- Validate argument rules (metavar requirements for types, delimiters, slots).
- Validate group bounds, descriptions and read-only attributes.
- Validate calling convention resolution and the option() decorator.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from optarbor import Action, Calling, DataType, Option, Slot, option, resolve_calling


class TestOptionNames(TestCase):
    """Behavioral tests for option names."""

    def testShortAndLong(self):
        o = Option("--verbose", "-v")
        self.assertEqual(o.short, "-v")
        self.assertEqual(o.long, "--verbose")
        self.assertEqual(o.names, ("-v", "--verbose"))

    def testSingleName(self):
        self.assertEqual(Option("-v").names, ("-v",))
        self.assertIsNone(Option("-v").long)
        self.assertIsNone(Option("--verbose").short)

    def testNamesRequired(self):
        with self.assertRaises(TypeError):
            Option()

    def testMalformedNamesRejected(self):
        for name in ("-", "--", "v", "-vv", "--a=b", "--a b", "- "):
            with self.subTest(name=name):
                with self.assertRaises(ValueError):
                    Option(name)

    def testNonStringNameRejected(self):
        with self.assertRaises(TypeError):
            Option(1)

    def testDuplicateKindsRejected(self):
        with self.assertRaises(ValueError):
            Option("-a", "-b")
        with self.assertRaises(ValueError):
            Option("--all", "--any")


class TestOptionArgument(TestCase):
    """Behavioral tests for argument-related validation."""

    def testRequiredAndOptional(self):
        required = Option("-o", metavar="FILE")
        optional = Option("-l", metavar="[N]")
        bare = Option("-a")
        self.assertTrue(required.required)
        self.assertFalse(required.optional)
        self.assertTrue(optional.optional)
        self.assertFalse(optional.required)
        self.assertFalse(bare.required or bare.optional)

    def testTypedOptionRequiresMetavar(self):
        with self.assertRaises(TypeError):
            Option("-n", type=DataType.INT)
        self.assertIs(Option("-n", metavar="N", type=DataType.INT).type, DataType.INT)

    def testTypeMustBeADataType(self):
        with self.assertRaises(TypeError):
            Option("-n", metavar="N", type=int)

    def testEmptyMetavarRejected(self):
        with self.assertRaises(ValueError):
            Option("-n", metavar="  ")

    def testDelimiterRules(self):
        with self.assertRaises(TypeError):
            Option("-l", delimiter=",")
        with self.assertRaises(ValueError):
            Option("-l", metavar="L", delimiter="")

    def testSlotRules(self):
        with self.assertRaises(TypeError):
            Option("-o", dest=Slot())
        with self.assertRaises(TypeError):
            Option("-o", metavar="FILE", dest=[])
        with self.assertRaises(TypeError):
            Option("-o", metavar="FILE", count=Slot())
        Option("-o", metavar="A,B", delimiter=",", dest=Slot(), count=Slot())

    def testActionAndCallingTypes(self):
        with self.assertRaises(TypeError):
            Option("-v", action="increment")
        with self.assertRaises(TypeError):
            Option("-v", calling="void")
        with self.assertRaises(TypeError):
            Option("-v", callback="print")


class TestOptionDisplay(TestCase):
    """Behavioral tests for groups, descriptions and read-only views."""

    def testGroupBounds(self):
        self.assertEqual(Option("-a", group=7).group, 7)
        for group in (-1, 8):
            with self.subTest(group=group):
                with self.assertRaises(ValueError):
                    Option("-a", group=group)
        for group in (True, 1.0, "1"):
            with self.subTest(group=group):
                with self.assertRaises(TypeError):
                    Option("-a", group=group)

    def testDescription(self):
        self.assertEqual(Option("-a", descr="  all  ").descr, "all")
        self.assertIsNone(Option("-a").descr)
        with self.assertRaises(ValueError):
            Option("-a", descr=" ")

    def testReadOnly(self):
        o = Option("-a", hidden=1)
        self.assertIs(o.hidden, True)
        with self.assertRaises(AttributeError):
            o.short = "-b"

    def testRepr(self):
        self.assertTrue(repr(Option("-v", "--verbose")).startswith("option(short='-v', long='--verbose', metavar=None"))
        self.assertEqual(repr(Slot(3)), "slot(3)")


class TestCalling(TestCase):
    """Behavioral tests for resolve_calling()."""

    def testAutomaticConventions(self):
        self.assertIs(resolve_calling(Option("-a")), Calling.VOID)
        self.assertIs(resolve_calling(Option("-a", metavar="X")), Calling.RAW)
        self.assertIs(resolve_calling(Option("-a", metavar="N", type=DataType.INT)), Calling.CONVERTED)

    def testExplicitConventionWins(self):
        self.assertIs(resolve_calling(Option("-a", metavar="N", type=DataType.INT, calling=Calling.RAW)), Calling.RAW)
        self.assertIs(resolve_calling(Option("-a", calling=Calling.CONVERTED)), Calling.CONVERTED)


class TestOptionDecorator(TestCase):
    """Behavioral tests for the option() decorator."""

    def testDocstringBecomesDescription(self):
        verbosity = Slot(0)

        @option("-v", "--verbose", flag=verbosity, action=Action.INCREMENT)
        def verbose():
            """print more details"""

        self.assertIsInstance(verbose, Option)
        self.assertEqual(verbose.descr, "print more details")
        self.assertEqual(verbose.callback.__name__, "verbose")
        self.assertIs(verbose.action, Action.INCREMENT)

    def testExplicitDescriptionWins(self):
        @option("-q", descr="be quiet")
        def quiet():
            """ignored"""

        self.assertEqual(quiet.descr, "be quiet")

    def testWithoutDocstring(self):
        @option("-q")
        def quiet():
            pass

        self.assertIsNone(quiet.descr)

    def testRejectsNonCallables(self):
        with self.assertRaises(TypeError):
            option("-q")("quiet")


if __name__ == "__main__":
    unittest.main()
