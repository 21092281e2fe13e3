"""
Pennant parsing layer: classify tokens, bind values, and drive a parse pass.

What this module provides
- classify(token, force_end): label a raw token (long flag, short bundle,
  positional, or the "--" end marker).
- bind(flag, raw, display): convert/validate a raw value and store it on a flag.
- evaluate(argv, flags): run one parse pass and return the retained ParseError
  (or None).
- parse(argv, flags): same pass, returning the error message (or None).

Core ideas
- The registry is the only state: parsing writes each descriptor's `current`
  slot and rewrites `argv` in place so it only holds the positionals.
- Errors are data. Every error found during the pass is folded with
  prioritize(); the most severe one surfaces, ties keep the first.
- Urgent boolean flags (help/version) that end up true win over everything:
  the pass then succeeds regardless of any error recorded.

Token rules
- "--" stops flag processing; every later token is positional.
- "--name=value" and "--name value" bind long flags; "--no-name" inverts an
  invertable flag.
- "-abc" is a bundle of short flags; a value-bearing short flag consumes the
  rest of the bundle as its value ("-cvalue") and never the next token.

Quick start
    from pennant import boolean, number, parse

    verbose = boolean("verbose", "Print more.", short="v")
    count = number("count", "How many times.", default=1)

    argv = ["pos1", "--count", "3", "-v", "pos2"]
    error = parse(argv, [verbose, count])
    # error is None, count.current == 3, verbose.current is True
    # argv == ["pos1", "pos2"]
"""
import logging
import math
import re
from enum import IntEnum

from .faults import *
from .flags import BooleanFlag, StringFlag, NumberFlag, Flag
from .utils import Unset, stringify

logger = logging.getLogger(__name__)

# optional sign, digits with an optional fraction (or a bare fraction), optional exponent
_NUMBER = re.compile(r"[+-]?(?:\d+(?P<fraction>\.\d*)?|(?P<bare>\.\d+))(?P<exponent>[eE][+-]?\d+)?", re.ASCII)


class TokenType(IntEnum):
    LONG = 0
    SHORT = 1
    POSITIONAL = 2
    END_MARKER = 3


def classify(token, force_end=False, /):
    """
    label one raw token.

    rules (checked in order)
    - force_end is true        → POSITIONAL
    - token is exactly "--"    → END_MARKER
    - token starts with "--"   → LONG
    - token starts with "-"    → SHORT
    - anything else            → POSITIONAL
    """
    if force_end:
        return TokenType.POSITIONAL
    if token == "--":
        return TokenType.END_MARKER
    if token.startswith("--"):
        return TokenType.LONG
    if token.startswith("-"):
        return TokenType.SHORT
    return TokenType.POSITIONAL


def _tonumber(raw, /):
    """
    convert a raw string with the fixed decimal grammar.

    surrounding whitespace is tolerated; empty or blank strings are rejected.
    integral forms (no fraction, no exponent) give an int, the rest a float.
    returns nan when the string does not match.
    """
    match = _NUMBER.fullmatch(raw.strip())
    if not match:
        return math.nan
    if match["fraction"] is None and match["bare"] is None and match["exponent"] is None:
        try:
            return int(match[0])
        except ValueError:
            # past the interpreter limit on integer string conversion
            return float(match[0])
    return float(match[0])


def bind(flag, raw, display, /):
    """
    convert and store a raw value on a flag.

    parameters
    - flag: the descriptor receiving the value.
    - raw: the raw string taken from the command line.
    - display: the name cited in error messages (long name or short character).

    returns
    - None on success, otherwise a single ParseError.

    behavior
    - number: the converted value is always stored, even when invalid (nan), and
      NotANumberError is returned in that case.
    - string: stored verbatim; NotOneOfError when one_of is set and lacks it.
    - boolean: never accepts a value (UnexpectedArgError), nothing is stored.
    """
    match flag:
        case NumberFlag():
            flag.current = number = _tonumber(raw)
            if math.isnan(number):
                return NotANumberError(
                    "the `%s` flag expects a numerical value" % display,
                    flag=flag,
                    value=raw,
                    hint="pass a decimal number (for example: --%s=3)" % flag.long,
                )
        case StringFlag():
            if flag.one_of is not Unset and raw not in flag.one_of:
                return NotOneOfError(
                    "the `%s` flag expects one of: %s" % (display, stringify(flag.one_of)),
                    flag=flag,
                    value=raw,
                    hint="pick one of the listed values",
                )
            flag.current = raw
        case BooleanFlag():
            return UnexpectedArgError(
                "the `%s` flag does not expect an argument" % display,
                flag=flag,
                value=raw,
                hint="remove everything from '=' (for example: --%s)" % flag.long,
            )
        case _:
            raise TypeError("bind() argument must be a flag descriptor")
    return None


def _inverts(long, name, /):
    """
    tell whether `name` is the inverted spelling of a flag called `long`.

    both directions count: "no-verbose" inverts "verbose", and "cache" inverts a
    flag declared as "no-cache".
    """
    return (
        (long.startswith("no-") and name == long[3:]) or
        (name.startswith("no-") and long == name[3:])
    )


def _lookup(flags, **criteria):
    """return the first registered flag matching every criterion, or None."""
    for flag in flags:
        if all(getattr(flag, key) == value for key, value in criteria.items()):
            return flag
    return None


def _reset(flag, /):
    """apply the falsy value of an inverted flag."""
    match flag.type:
        case "boolean":
            flag.current = False
        case "string":
            flag.current = ""
        case "number":
            flag.current = 0


def _parse_short(bundle, flags, /):
    """
    parse one short-flag bundle (the token without its leading "-").

    each character is resolved in turn:
    - unknown characters record UnrecognizedFlagError and scanning goes on.
    - boolean flags become true.
    - a value-bearing flag takes the rest of the bundle as its value and ends
      the token; with nothing left it falls back to arg_optional or records
      MissingArgError and ends the token. the next token is never consumed.
    """
    error = None

    for index, character in enumerate(bundle):
        tail = bundle[index + 1:]
        flag = _lookup(flags, short=character)

        if flag is None:
            error = prioritize(error, UnrecognizedFlagError(
                "unrecognized flag - `%s`" % character,
                token=character,
                hint="try '--help' to see all available flags",
            ))
        elif not flag.takes_value:
            flag.current = True
        elif tail:
            logger.debug("binding %r to -%s", tail, character)
            return prioritize(error, bind(flag, tail, character))
        elif flag.arg_optional is not Unset:
            flag.current = flag.arg_optional
        else:
            return prioritize(error, MissingArgError(
                "flag `%s` requires an argument" % bundle,
                flag=flag,
                token=bundle,
                hint="attach the value to the flag (for example: -%s<value>)" % character,
            ))

    return error


def _parse_long(index, argv, flags, /):
    """
    parse the long flag at argv[index].

    returns
    - (error, index): the error found (or None) and the index of the last token
      consumed, so the caller can skip a spaced value.
    """
    name = argv[index][2:]

    key, separator, value = name.partition("=")
    if separator:
        flag = _lookup(flags, long=key)
        if flag is None:
            return UnrecognizedFlagError(
                "unrecognized flag - `%s`" % key,
                token=key,
                hint="try '--help' to see all available flags",
            ), index
        if not value:
            return MissingArgError(
                "flag `%s` requires an argument" % key,
                flag=flag,
                token=key,
                hint="add a value after '=' (for example: --%s=<value>)" % key,
            ), index
        logger.debug("binding %r to --%s", value, key)
        return bind(flag, value, key), index

    inverted = False
    for flag in flags:
        if _inverts(flag.long, name):
            inverted = True
            break
        if flag.long == name:
            break
    else:
        return UnrecognizedFlagError(
            "unrecognized flag - `%s`" % name,
            token=name,
            hint="try '--help' to see all available flags",
        ), index

    if inverted:
        if not flag.invertable:
            return NotInvertableError(
                "flag `%s` cannot be inverted" % flag.long,
                flag=flag,
                token=name,
                hint="remove the 'no-' prefix",
            ), index
        _reset(flag)
        return None, index

    if not flag.takes_value:
        flag.current = True
        return None, index

    if index + 1 >= len(argv) or classify(argv[index + 1]) is not TokenType.POSITIONAL:
        if flag.arg_optional is not Unset:
            flag.current = flag.arg_optional
            return None, index
        return MissingArgError(
            "flag `%s` requires an argument" % name,
            flag=flag,
            token=name,
            hint="pass a value after the flag (for example: --%s <value>)" % name,
        ), index

    logger.debug("binding %r to --%s", argv[index + 1], name)
    return bind(flag, argv[index + 1], name), index + 1


def _finalize(flags, error, /):
    """
    post-scan processing in registration order.

    - a true urgent flag short-circuits: the pass succeeds (returns None).
    - unset value flags: required ones record MissingRequiredError, the others
      receive their default when one is configured.
    """
    for flag in flags:
        if flag.type == "boolean" and flag.urgent and flag.current:
            logger.debug("urgent flag --%s is set, discarding %r", flag.long, error)
            return None

        if flag.current is Unset and flag.takes_value:
            if flag.required:
                error = prioritize(error, MissingRequiredError(
                    "missing required flag - `%s`" % flag.long,
                    flag=flag,
                    hint="pass --%s <%s>" % (flag.long, flag.arg_name),
                ))
            elif flag.default is not Unset:
                flag.current = flag.default

    return error


def evaluate(argv, flags, /):
    """
    run one parse pass and return the retained error.

    parameters
    - argv: mutable list of raw tokens (program name already stripped). it is
      rewritten in place to hold only the positional arguments, in order.
    - flags: the registry, an ordered mix of descriptors and header strings.

    returns
    - None on success, otherwise the most severe ParseError of the pass.

    raises
    - TypeError: when a registry entry is neither a flag nor a header string.

    invariants
    - each descriptor's `current` reflects the last value given for it.
    - only a strictly more severe error replaces the retained one.
    """
    flags = list(flags)
    if not all(isinstance(flag, Flag | str) for flag in flags):
        raise TypeError("registry entries must be flags or header strings")
    flags = [flag for flag in flags if isinstance(flag, Flag)]

    error = None
    force_end = False
    positionals = []

    index = 0
    while index < len(argv):
        token = argv[index]
        kind = classify(token, force_end)
        logger.debug("token %r at %d classified as %s", token, index, kind.name)

        match kind:
            case TokenType.END_MARKER:
                force_end = True
            case TokenType.POSITIONAL:
                positionals.append(token)
            case TokenType.SHORT:
                error = prioritize(error, _parse_short(token[1:], flags))
            case TokenType.LONG:
                new, index = _parse_long(index, argv, flags)
                error = prioritize(error, new)

        index += 1

    error = _finalize(flags, error)
    argv[:] = positionals

    if error is not None:
        logger.debug("parse failed: %r", error)
    return error


def parse(argv, flags, /):
    """
    run one parse pass and return the surfaced error message, or None.

    see evaluate() for the parameters and side effects.
    """
    error = evaluate(argv, flags)
    if error is None:
        return None
    return error.message


__all__ = (
    "TokenType",
    "classify",
    "bind",
    "evaluate",
    "parse",
)
