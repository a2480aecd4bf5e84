"""
Faults module behavioral tests (messages, options, rendering, triggering).

Scope
- Validate message/option handling of the fault kinds.
- Validate trigger() in raising, shell and deferred modes.
- Validate host hooks in __main__ (__codes__, __docs__, __prog__).
"""
import copy
import io
import sys
import unittest
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console

from flagline import ArgumentParser, FaultCode, trigger, getdoc
from flagline import ArgumentException, IllegalArgumentDefinitionError, IllegalArgumentError, UsageError


def _render(fault, **options):
    buffer = io.StringIO()
    Console(file=buffer, width=120, color_system=None).print(copy.replace(fault, **options))
    return buffer.getvalue()


class TestFaults(TestCase):
    """Behavioral tests for fault construction and rendering."""

    def setUp(self):
        self.fault = IllegalArgumentError(
            "--foo not defined",
            title="undefined argument",
            code=FaultCode.UNDEFINED_ARGUMENT,
            hint="did you mean '--force'?",
            prog="tool",
        )

    def testHierarchy(self):
        for kind in (IllegalArgumentDefinitionError, IllegalArgumentError, UsageError):
            with self.subTest(kind=kind):
                self.assertTrue(issubclass(kind, ArgumentException))
                self.assertTrue(issubclass(kind, Exception))

    def testMessage(self):
        self.assertEqual(self.fault.message, "--foo not defined")
        self.assertEqual(str(self.fault), "--foo not defined")
        self.assertEqual(self.fault.args, ("--foo not defined",))

    def testOptionsDefaultsAndReadOnly(self):
        self.assertFalse(self.fault.options["shell"])
        self.assertTrue(self.fault.options["colorful"])
        with self.assertRaises(TypeError):
            self.fault.options["shell"] = True  # type: ignore[index]

    def testReplaceKeepsKindAndMergesOptions(self):
        replaced = copy.replace(self.fault, hint="other")
        self.assertIsInstance(replaced, IllegalArgumentError)
        self.assertEqual(replaced.options["hint"], "other")
        self.assertIs(replaced.options["code"], FaultCode.UNDEFINED_ARGUMENT)

    def testPlainRendering(self):
        output = _render(self.fault, colorful=False)
        self.assertIn("[ tool — 22101 | Undefined Argument ]", output)
        self.assertIn("--foo not defined", output)
        self.assertIn("did you mean '--force'?", output)

    def testFancyRendering(self):
        output = _render(self.fault, colorful=False, fancy=True)
        self.assertIn("Undefined Argument", output)
        self.assertIn("--foo not defined", output)

    def testRenderingWithoutOptionalParts(self):
        output = _render(UsageError("not yet"), colorful=False)
        self.assertIn("Usageerror", output)
        self.assertIn("not yet", output)


class TestTrigger(TestCase):
    """Behavioral tests for trigger()."""

    def setUp(self):
        self.fault = UsageError("Command line arguments hasn't been parsed.", code=FaultCode.NOT_PARSED)

    def testRaisesOutsideShell(self):
        with self.assertRaises(UsageError) as context:
            trigger(self.fault, hint="call parse() first")
        self.assertEqual(context.exception.options["hint"], "call parse() first")

    def testShellPrintsAndExits(self):
        buffer = io.StringIO()
        with patch("flagline.faults.console", Console(file=buffer, width=120, color_system=None)):
            with self.assertRaises(SystemExit) as context:
                trigger(self.fault, shell=True, colorful=False)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("hasn't been parsed", buffer.getvalue())

    def testDeferredShellReturns(self):
        buffer = io.StringIO()
        with patch("flagline.faults.console", Console(file=buffer, width=120, color_system=None)):
            self.assertIsNone(trigger(self.fault, shell=True, deferred=True, colorful=False))
        self.assertIn("23101", buffer.getvalue())

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))

    def testParserFaultsAreTriggerable(self):
        parser = ArgumentParser(("-v,--verbose,false",))
        try:
            parser.parse(["prog", "--foo"])
        except ArgumentException as exception:
            with self.assertRaises(IllegalArgumentError):
                trigger(exception)
        else:
            self.fail("parse() accepted an undefined argument")


class TestHostHooks(TestCase):
    """Behavioral tests for the __main__ customization hooks."""

    def testCodeNormalizeDefault(self):
        self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "22102")

    def testCodeNormalizeMapping(self):
        with patch.object(sys.modules["__main__"], "__codes__", {FaultCode.MISSING_VALUE: "E-VALUE"}, create=True):
            self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "E-VALUE")
            self.assertEqual(FaultCode.NOT_PARSED.normalize(), "23101")

    def testGetdoc(self):
        self.assertIsNone(getdoc(FaultCode.INVALID_CHOICE))
        with patch.object(sys.modules["__main__"], "__docs__", {FaultCode.INVALID_CHOICE: "  pick a listed value\n"}, create=True):
            self.assertEqual(getdoc(FaultCode.INVALID_CHOICE), "pick a listed value")
        with self.assertRaises(TypeError):
            getdoc(22203)

    def testProgOverride(self):
        fault = IllegalArgumentError("boom", title="oops", code=FaultCode.UNDEFINED_KEY, prog="tool")
        with patch.object(sys.modules["__main__"], "__prog__", "hosted", create=True):
            output = _render(fault, colorful=False)
        self.assertIn("[ hosted — 22104 | Oops ]", output)


if __name__ == "__main__":
    unittest.main()
