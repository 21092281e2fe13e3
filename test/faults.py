"""
Faults module behavioral tests.

Scope
- Validate the priority enumeration (ordinals are part of the contract).
- Validate prioritize(): strict greater-than replacement, ties keep the first.
- Validate ParseError construction, options, replacement and rich rendering.
"""
import io
import unittest
from unittest import TestCase

from rich.console import Console

from pennant.faults import *


def _render(renderable):
    console = Console(file=io.StringIO(), width=100, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


class TestParseErrorKind(TestCase):

    def testOrdinals(self):
        self.assertEqual([kind.value for kind in ParseErrorKind], [1, 2, 3, 4, 5, 6, 7])
        self.assertEqual(
            [kind.name for kind in sorted(ParseErrorKind)],
            [
                "MISSING_REQUIRED",
                "NOT_A_NUMBER",
                "NOT_ONE_OF",
                "NOT_INVERTABLE",
                "UNEXPECTED_ARG",
                "MISSING_ARG",
                "UNRECOGNIZED_FLAG",
            ],
        )

    def testNormalizeDefaultsToOrdinal(self):
        self.assertEqual(ParseErrorKind.MISSING_ARG.normalize(), "6")

    def testSubclassKinds(self):
        pairs = (
            (MissingRequiredError, ParseErrorKind.MISSING_REQUIRED),
            (NotANumberError, ParseErrorKind.NOT_A_NUMBER),
            (NotOneOfError, ParseErrorKind.NOT_ONE_OF),
            (NotInvertableError, ParseErrorKind.NOT_INVERTABLE),
            (UnexpectedArgError, ParseErrorKind.UNEXPECTED_ARG),
            (MissingArgError, ParseErrorKind.MISSING_ARG),
            (UnrecognizedFlagError, ParseErrorKind.UNRECOGNIZED_FLAG),
        )
        for cls, kind in pairs:
            self.assertIs(cls("message").kind, kind)


class TestPrioritize(TestCase):

    def testNoneAndNone(self):
        self.assertIsNone(prioritize(None, None))

    def testNewBecomesCurrent(self):
        error = NotANumberError("bad number")
        self.assertIs(prioritize(None, error), error)

    def testNoNewKeepsCurrent(self):
        error = NotANumberError("bad number")
        self.assertIs(prioritize(error, None), error)

    def testHigherReplaces(self):
        low = MissingRequiredError("missing")
        high = UnrecognizedFlagError("unknown")
        self.assertIs(prioritize(low, high), high)

    def testLowerDoesNotReplace(self):
        low = MissingRequiredError("missing")
        high = UnrecognizedFlagError("unknown")
        self.assertIs(prioritize(high, low), high)

    def testTieKeepsFirst(self):
        first = MissingArgError("first")
        second = MissingArgError("second")
        self.assertIs(prioritize(first, second), first)


class TestParseError(TestCase):

    def testBaseNotInstantiable(self):
        with self.assertRaises(TypeError):
            ParseError("message")

    def testMessageMustBeString(self):
        with self.assertRaises(TypeError):
            MissingArgError(1)

    def testIsAnException(self):
        error = MissingArgError("flag `x` requires an argument")
        self.assertIsInstance(error, Exception)
        self.assertEqual(str(error), "flag `x` requires an argument")

    def testOptionsAreReadOnly(self):
        error = MissingArgError("message", token="x")
        self.assertEqual(error.options["token"], "x")
        with self.assertRaises(TypeError):
            error.options["token"] = "y"

    def testReplaceMergesOptions(self):
        error = MissingArgError("message", token="x")
        other = error.__replace__(hint="try again")
        self.assertIsInstance(other, MissingArgError)
        self.assertEqual(other.message, "message")
        self.assertEqual(dict(other.options), {"token": "x", "hint": "try again"})

    def testRepr(self):
        self.assertEqual(repr(MissingArgError("oops")), "MissingArgError('oops', kind=MISSING_ARG)")

    def testRichRendering(self):
        error = UnrecognizedFlagError("unrecognized flag - `x`", prog="tool", hint="try '--help'", colorful=False)
        output = _render(error)
        self.assertIn("[ tool - 7 | unrecognized flag ]", output)
        self.assertIn("unrecognized flag - `x`", output)
        self.assertIn("→ try '--help'", output)

    def testRichRenderingWithoutHint(self):
        output = _render(NotOneOfError("bad choice", prog="tool", colorful=False))
        self.assertEqual(output.splitlines(), ["[ tool - 3 | invalid choice ]", "bad choice"])


if __name__ == "__main__":
    unittest.main()
