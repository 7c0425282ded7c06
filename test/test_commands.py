# python
"""
Commands module behavioral tests (tree construction, lookups, decorator).

Scope
- Validate command metadata (name shape, help strings, callback).
- Validate tree invariants: parent set at construction, single attachment,
  unique child and option names.
- Validate lookups (find_short/find_long/find_child) and tree properties
  (root/path/height).
- Validate the command() decorator in its invocation modes.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from optarbor import Command, Option, command


class TestCommandMetadata(TestCase):
    """Behavioral tests for Command construction."""

    def testDefaults(self):
        c = Command("app")
        self.assertEqual(c.name, "app")
        self.assertIsNone(c.about)
        self.assertIsNone(c.descr)
        self.assertIsNone(c.operands)
        self.assertIsNone(c.usage)
        self.assertIsNone(c.callback)
        self.assertIsNone(c.parent)
        self.assertEqual(c.options, ())
        self.assertEqual(c.children, ())

    def testNameMustBeAWord(self):
        with self.assertRaises(TypeError):
            Command(1)
        for name in ("", "two words", "tab\tname"):
            with self.subTest(name=name):
                with self.assertRaises(ValueError):
                    Command(name)

    def testHelpStrings(self):
        self.assertEqual(Command("app", about="  summary ").about, "summary")
        with self.assertRaises(ValueError):
            Command("app", descr="   ")
        with self.assertRaises(TypeError):
            Command("app", operands=["FILE"])

    def testCallbackMustBeCallable(self):
        with self.assertRaises(TypeError):
            Command("app", callback="main")

    def testOptionsMustBeOptions(self):
        with self.assertRaises(TypeError):
            Command("app", options=["-a"])
        with self.assertRaises(TypeError):
            Command("app", options=1)

    def testDuplicateOptionNames(self):
        with self.assertRaises(ValueError):
            Command("app", options=[Option("-a", "--all"), Option("-b", "--all")])
        with self.assertRaises(ValueError):
            Command("app", options=[Option("-a"), Option("-a", "--any")])

    def testRepr(self):
        self.assertTrue(repr(Command("app", about="x")).startswith("command(name='app', about='x'"))


class TestCommandTree(TestCase):
    """Behavioral tests for tree shape and lookups."""

    def setUp(self):
        self.add = Command("add")
        self.remote = Command("remote", children=[self.add])
        self.root = Command("app", children=[self.remote, Command("status")])

    def testParentIsSetAtConstruction(self):
        self.assertIs(self.add.parent, self.remote)
        self.assertIs(self.remote.parent, self.root)
        self.assertIsNone(self.root.parent)

    def testRootPathHeight(self):
        self.assertIs(self.add.root, self.root)
        self.assertEqual([step.name for step in self.add.path], ["app", "remote", "add"])
        self.assertEqual(self.root.height, 2)
        self.assertEqual(self.remote.height, 1)
        self.assertEqual(self.add.height, 0)

    def testChildCannotBeAttachedTwice(self):
        with self.assertRaises(ValueError):
            Command("other", children=[self.add])

    def testDuplicateChildNames(self):
        with self.assertRaises(ValueError):
            Command("app", children=[Command("x"), Command("x")])

    def testChildrenMustBeCommands(self):
        with self.assertRaises(TypeError):
            Command("app", children=["add"])

    def testFindChild(self):
        self.assertIs(self.root.find_child("remote"), self.remote)
        self.assertIsNone(self.root.find_child("add"))
        self.assertIsNone(self.root.find_child("Remote"))

    def testFindOptions(self):
        verbose = Option("-v", "--verbose")
        quiet = Option("--quiet")
        c = Command("app", options=[verbose, quiet])
        self.assertIs(c.find_short("v"), verbose)
        self.assertIs(c.find_long("verbose"), verbose)
        self.assertIs(c.find_long("quiet"), quiet)
        self.assertIsNone(c.find_short("q"))
        self.assertIsNone(c.find_long("verb"))

    def testTreeIsReadOnly(self):
        with self.assertRaises(AttributeError):
            self.root.name = "other"
        with self.assertRaises(AttributeError):
            self.root.children.append(Command("x"))


class TestCommandDecorator(TestCase):
    """Behavioral tests for the command() decorator."""

    def testBareDecorator(self):
        @command
        def deploy(operands):
            """Deploy the current build."""

        self.assertIsInstance(deploy, Command)
        self.assertEqual(deploy.name, "deploy")
        self.assertEqual(deploy.descr, "Deploy the current build.")
        self.assertEqual(deploy.callback.__name__, "deploy")

    def testDecoratorWithMetadata(self):
        @command(name="rm", about="remove files", operands="FILE...", options=[Option("-f")])
        def remove(operands):
            pass

        self.assertEqual(remove.name, "rm")
        self.assertEqual(remove.about, "remove files")
        self.assertEqual(remove.operands, "FILE...")
        self.assertIsNone(remove.descr)
        self.assertIsNotNone(remove.find_short("f"))

    def testDirectCall(self):
        def build(operands):
            pass

        c = command(build, descr="build it")
        self.assertEqual(c.name, "build")
        self.assertEqual(c.descr, "build it")

    def testRejectsNonCallables(self):
        with self.assertRaises(TypeError):
            command("build")


if __name__ == "__main__":
    unittest.main()
