"""
Flags module behavioral tests.

Scope
- Validate descriptor construction and metadata normalization (boolean, string, number).
- Validate construction-time rejections (names, shorts, defaults, one_of).
- Validate read-only metadata, the mutable current slot and representations.

Conventions
- Test method names follow CamelCase per project convention.
- Descriptors are built through the public factories unless a class is under test.
"""
import unittest
from unittest import TestCase

from pennant import Flag, BooleanFlag, StringFlag, NumberFlag, boolean, string, number, Unset


class TestBooleanFlag(TestCase):
    """Behavioral tests for boolean descriptors."""

    def testFactoryBuildsBooleanFlag(self):
        f = boolean("verbose", "Print more.", short="v", invertable=True)
        self.assertIsInstance(f, BooleanFlag)
        self.assertEqual(f.type, "boolean")
        self.assertEqual(f.long, "verbose")
        self.assertEqual(f.short, "v")
        self.assertTrue(f.invertable)
        self.assertFalse(f.urgent)
        self.assertFalse(f.takes_value)

    def testCurrentStartsUnset(self):
        f = boolean("verbose", "Print more.")
        self.assertIs(f.current, Unset)
        self.assertFalse(f.current)

    def testShortDefaultsToUnset(self):
        self.assertIs(boolean("verbose", "Print more.").short, Unset)

    def testUrgentMustBeBoolean(self):
        with self.assertRaises(TypeError):
            boolean("help", "Print help.", urgent="yes")

    def testUnknownOptionRejected(self):
        with self.assertRaises(TypeError):
            boolean("help", "Print help.", default=True)


class TestSharedMetadata(TestCase):
    """Validation shared by every descriptor kind."""

    def testLongMustBeString(self):
        with self.assertRaises(TypeError):
            boolean(3, "Print more.")

    def testLongRejectsLeadingDashes(self):
        with self.assertRaises(ValueError):
            boolean("--verbose", "Print more.")

    def testLongRejectsUnderscore(self):
        with self.assertRaises(ValueError):
            string("last_name", "Last name.")

    def testLongAcceptsKebabCaseAndDigits(self):
        self.assertEqual(string("last-name2", "Last name.").long, "last-name2")

    def testLongAllowsI18N(self):
        self.assertEqual(string("名-前", "Name.").long, "名-前")

    def testDescriptionIsTrimmed(self):
        self.assertEqual(boolean("verbose", "  Print more.  ").description, "Print more.")

    def testDescriptionEmptyRejected(self):
        with self.assertRaises(ValueError):
            boolean("verbose", "   ")

    def testShortMustBeSingleCharacter(self):
        with self.assertRaises(ValueError):
            boolean("verbose", "Print more.", short="vv")

    def testShortRejectsDash(self):
        with self.assertRaises(ValueError):
            boolean("verbose", "Print more.", short="-")

    def testShortMustBeString(self):
        with self.assertRaises(TypeError):
            boolean("verbose", "Print more.", short=1)

    def testInvertableMustBeBoolean(self):
        with self.assertRaises(TypeError):
            number("count", "Count.", invertable=1)

    def testBaseFlagNotInstantiable(self):
        with self.assertRaises(TypeError):
            Flag({})


class TestStringFlag(TestCase):
    """Behavioral tests for string descriptors."""

    def testFactoryBuildsStringFlag(self):
        f = string("color", "Use colors.", default="auto", arg_optional="always", arg_name="when")
        self.assertIsInstance(f, StringFlag)
        self.assertEqual(f.type, "string")
        self.assertEqual(f.default, "auto")
        self.assertEqual(f.arg_optional, "always")
        self.assertEqual(f.arg_name, "when")
        self.assertFalse(f.required)
        self.assertTrue(f.takes_value)

    def testArgNameDefaultsToLong(self):
        self.assertEqual(string("last-name", "Last name.").arg_name, "last-name")

    def testArgNameEmptyRejected(self):
        with self.assertRaises(ValueError):
            string("last-name", "Last name.", arg_name=" ")

    def testOneOfKeepsDeclaredOrder(self):
        f = string("color", "Use colors.", one_of=("always", "never", "auto"))
        self.assertEqual(f.one_of, ["always", "never", "auto"])

    def testOneOfIsReadOnlyCopy(self):
        f = string("color", "Use colors.", one_of=["always", "never"])
        f.one_of.append("auto")
        self.assertEqual(f.one_of, ["always", "never"])

    def testOneOfDuplicatesRejected(self):
        with self.assertRaises(ValueError):
            string("mode", "Mode.", one_of=["fast", "safe", "fast"])

    def testOneOfEmptyRejected(self):
        with self.assertRaises(ValueError):
            string("mode", "Mode.", one_of=[])

    def testOneOfPlainStringRejected(self):
        with self.assertRaises(TypeError):
            string("mode", "Mode.", one_of="fast")

    def testOneOfNonStringMembersRejected(self):
        with self.assertRaises(TypeError):
            string("mode", "Mode.", one_of=["fast", 1])

    def testDefaultMustBeString(self):
        with self.assertRaises(TypeError):
            string("name", "Name.", default=3)

    def testRequiredWithDefaultRejected(self):
        with self.assertRaises(TypeError):
            string("name", "Name.", required=True, default="x")

    def testMetadataIsReadOnly(self):
        f = string("name", "Name.")
        with self.assertRaises(AttributeError):
            f.long = "other"

    def testCurrentIsWritable(self):
        f = string("name", "Name.")
        f.current = "value"
        self.assertEqual(f.current, "value")


class TestNumberFlag(TestCase):
    """Behavioral tests for number descriptors."""

    def testFactoryBuildsNumberFlag(self):
        f = number("count", "Count.", short="c", default=1, arg_name="amount")
        self.assertIsInstance(f, NumberFlag)
        self.assertEqual(f.type, "number")
        self.assertEqual(f.default, 1)
        self.assertIs(f.arg_optional, Unset)

    def testFloatDefaultAccepted(self):
        self.assertEqual(number("ratio", "Ratio.", default=0.5).default, 0.5)

    def testBooleanDefaultRejected(self):
        with self.assertRaises(TypeError):
            number("count", "Count.", default=True)

    def testStringDefaultRejected(self):
        with self.assertRaises(TypeError):
            number("count", "Count.", default="1")

    def testRequiredWithDefaultRejected(self):
        with self.assertRaises(TypeError):
            number("age", "Age.", required=True, default=1)

    def testNoOneOfOption(self):
        with self.assertRaises(TypeError):
            number("count", "Count.", one_of=["1"])


class TestRepresentation(TestCase):
    """Typename and repr behavior."""

    def testTypename(self):
        self.assertEqual(BooleanFlag.__typename__, "boolean-flag")
        self.assertEqual(StringFlag.__typename__, "string-flag")
        self.assertEqual(NumberFlag.__typename__, "number-flag")

    def testReprShowsMetadataAndCurrent(self):
        f = number("count", "Count.", default=1)
        text = repr(f)
        self.assertTrue(text.startswith("number-flag(long='count'"))
        self.assertIn("default=1", text)
        self.assertIn("current=Unset", text)

    def testRichReprPairs(self):
        f = boolean("help", "Print help.", urgent=True)
        pairs = dict(f.__rich_repr__())
        self.assertEqual(pairs["long"], "help")
        self.assertTrue(pairs["urgent"])
        self.assertIs(pairs["current"], Unset)


if __name__ == "__main__":
    unittest.main()
