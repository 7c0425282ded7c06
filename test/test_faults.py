# python
"""
Faults module behavioral tests (triggering, rendering, code normalization).

Scope
- Validate trigger(): raising mode, shell mode (stderr + exit status 1) and
  the helper hook run before exiting.
- Validate the rendered layout: header, message and optional hint.
- Validate host hooks from __main__ (__codes__, __prog__).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from contextlib import redirect_stderr
from unittest import TestCase

from rich.console import Console

from optarbor import (
    Command,
    CommandException,
    FaultCode,
    UnknownOptionError,
    trigger,
)


def render(fault):
    buffer = io.StringIO()
    Console(file=buffer, width=120, highlight=False, soft_wrap=True).print(fault)
    return buffer.getvalue()


class TestTrigger(TestCase):
    """Behavioral tests for trigger()."""

    def testRaisesWhenShellIsDisabled(self):
        fault = UnknownOptionError("boom", title="unknown option", code=FaultCode.UNKNOWN_OPTION)
        with self.assertRaises(UnknownOptionError) as context:
            trigger(fault, shell=False, hint="try again")
        self.assertEqual(str(context.exception), "boom")
        self.assertEqual(context.exception.options["hint"], "try again")
        self.assertIsNone(context.exception.__cause__)

    def testShellModeExits(self):
        calls = []
        fault = UnknownOptionError("boom", title="unknown option", code=FaultCode.UNKNOWN_OPTION)
        buffer = io.StringIO()
        with redirect_stderr(buffer), self.assertRaises(SystemExit) as context:
            trigger(fault, tool=Command("app"), helper=lambda: calls.append("help"))
        self.assertEqual(context.exception.code, 1)
        self.assertEqual(calls, ["help"])
        self.assertIn("boom", buffer.getvalue())

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(object())
        with self.assertRaises(TypeError):
            trigger(ValueError("boom"))

    def testReplaceKeepsTypeAndMessage(self):
        fault = UnknownOptionError("boom", title="unknown option")
        replaced = fault.__replace__(hint="try again")
        self.assertIsInstance(replaced, UnknownOptionError)
        self.assertEqual(replaced.message, "boom")
        self.assertEqual(dict(replaced.options), {"title": "unknown option", "hint": "try again"})
        self.assertNotIn("hint", fault.options)

    def testOptionsAreReadOnly(self):
        fault = CommandException("boom", title="x")
        with self.assertRaises(TypeError):
            fault.options["title"] = "y"


class TestRendering(TestCase):
    """Behavioral tests for the rich rendering of faults."""

    def testHeaderMessageAndHint(self):
        fault = UnknownOptionError(
            "boom",
            tool=Command("app", children=[Command("sub")]).find_child("sub"),
            title="unknown option",
            code=FaultCode.UNKNOWN_OPTION,
            hint="try again",
        )
        self.assertEqual(render(fault), "[ app — 11111 | Unknown Option ]\nboom\n → try again\n")

    def testWithoutHint(self):
        fault = UnknownOptionError("boom", tool=Command("app"), title="unknown option", code=FaultCode.UNKNOWN_OPTION)
        self.assertEqual(render(fault), "[ app — 11111 | Unknown Option ]\nboom\n")

    def testDefaultProgramName(self):
        fault = UnknownOptionError("boom", title="unknown option", code=FaultCode.UNKNOWN_OPTION)
        self.assertTrue(render(fault).startswith("[ optarbor — 11111 |"))

    def testHostOverrides(self):
        main = __import__("__main__")
        main.__codes__ = {FaultCode.UNKNOWN_OPTION: "E-OPT"}
        main.__prog__ = "tool"
        try:
            fault = UnknownOptionError("boom", tool=Command("app"), title="unknown option", code=FaultCode.UNKNOWN_OPTION)
            self.assertTrue(render(fault).startswith("[ tool — E-OPT | Unknown Option ]"))
            self.assertEqual(FaultCode.UNKNOWN_COMMAND.normalize(), "11101")
        finally:
            del main.__codes__
            del main.__prog__

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.ARGUMENT_OUT_OF_RANGE.normalize(), "11122")


if __name__ == "__main__":
    unittest.main()
