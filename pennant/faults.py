"""
Pennant parse faults and rendering.

Scope
- ParseErrorKind: the totally ordered priority of every parse-time error. The
  numeric value is the merge key: a higher value is more severe.
- ParseError and one subclass per kind: carry the message plus read-only options
  and know how to render themselves with rich.
- prioritize(): the fold used by the parser to keep a single representative error.

Contract
- Parse errors are data. The parser returns them (or their message) and never
  raises them; the host decides how to report and how to exit.
- Exactly one error surfaces per parse pass: the highest kind seen, ties keep the
  earliest one.

Integration
- The host may expose __codes__ (kind -> label), __prog__ (program name) and
  __styles__ (palette overrides) in __main__; rendering honors them.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

from .utils import Unset


class ParseErrorKind(IntEnum):
    """
    priority of parse errors (higher wins when several occur in one pass).

    ordering
    - MISSING_REQUIRED < NOT_A_NUMBER < NOT_ONE_OF < NOT_INVERTABLE
      < UNEXPECTED_ARG < MISSING_ARG < UNRECOGNIZED_FLAG

    the ordinals are part of the contract: message selection depends on them.
    """
    MISSING_REQUIRED  = 1
    NOT_A_NUMBER      = 2
    NOT_ONE_OF        = 3
    NOT_INVERTABLE    = 4
    UNEXPECTED_ARG    = 5
    MISSING_ARG       = 6
    UNRECOGNIZED_FLAG = 7

    def normalize(self):
        """
        return a host-normalized label for this kind.

        the host can provide a __codes__ mapping in __main__ to replace the
        numeric ordinals with friendlier labels; otherwise the ordinal is used.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseError(Exception):
    kind = None
    title = "parse error"

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError("%s message must be a string" % type(self).__name__)
        if self.kind is None:
            raise TypeError("type %r cannot be instantiated directly" % type(self).__name__)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __repr__(self):
        return "%s(%r, kind=%s)" % (type(self).__name__, self.message, self.kind.name)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        prog = self.options.get("prog", getattr(main, "__prog__", Unset))

        header = Text.assemble(
            "[ ",
            *((text(prog, "prog-name"), " - ") if prog else ()),
            text(self.kind.normalize(), "code"),
            " | ",
            text(self.title, "error-title"),
            " ]",
        )
        message = text(self.message, "error-message")

        if hint := self.options.get("hint"):
            return Group(header, message, Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))
        return Group(header, message)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingRequiredError(ParseError):
    kind = ParseErrorKind.MISSING_REQUIRED
    title = "missing required flag"

class NotANumberError(ParseError):
    kind = ParseErrorKind.NOT_A_NUMBER
    title = "not a number"

class NotOneOfError(ParseError):
    kind = ParseErrorKind.NOT_ONE_OF
    title = "invalid choice"

class NotInvertableError(ParseError):
    kind = ParseErrorKind.NOT_INVERTABLE
    title = "flag cannot be inverted"

class UnexpectedArgError(ParseError):
    kind = ParseErrorKind.UNEXPECTED_ARG
    title = "unexpected argument"

class MissingArgError(ParseError):
    kind = ParseErrorKind.MISSING_ARG
    title = "missing argument"

class UnrecognizedFlagError(ParseError):
    kind = ParseErrorKind.UNRECOGNIZED_FLAG
    title = "unrecognized flag"


def prioritize(error, new, /):
    """
    merge a newly produced error into the currently retained one.

    rules
    - no new error: keep the current one (which may be None).
    - no current error: the new one becomes current.
    - otherwise the new error replaces the current one only when its kind is
      strictly higher; ties keep the earliest error.
    """
    if new is None:
        return error
    if error is None:
        return new
    return new if new.kind > error.kind else error


__all__ = (
    "ParseErrorKind",
    "ParseError",
    "MissingRequiredError",
    "NotANumberError",
    "NotOneOfError",
    "NotInvertableError",
    "UnexpectedArgError",
    "MissingArgError",
    "UnrecognizedFlagError",
    "prioritize",
)
