"""
Pennant usage rendering: aligned help text for a flag registry.

- info(flags, prefix=...) returns plain text.
- render(flags, prefix=..., colorful=...) returns the same text as a rich Text,
  styled with a palette the host can override through __styles__ in __main__.

Layout
- Section headers (plain strings in the registry) are emitted on their own
  line, preceded by a blank line.
- Each flag gets "-s, --long <name>" padded to column 26, then its description.
  Names reaching column 25 push the description to the next line, indented to
  the same column.
- String flags with a fixed set of values get an extra "Modes: ..." line
  ("Optional modes: ..." when the argument may be omitted).
- Value flags append " (Default: X)" when they have a truthy default or an
  optional-argument value (the latter wins).
- The prefix indents every flag line and continuation line; headers are
  never indented.
"""
from collections import defaultdict

from rich.text import Text

from .flags import Flag
from .utils import Unset, stringify

INFO_FLAG_WIDTH = 26


def _resolve_prefix(prefix, /):
    if prefix is None or prefix is Unset:
        return ""
    if isinstance(prefix, bool) or not isinstance(prefix, int | str):
        raise TypeError("prefix must be a string or a number of spaces")
    if isinstance(prefix, int):
        return " " * prefix
    return prefix


def _segments(flags, prefix, /):
    """
    yield (fragment, style) pairs making up the usage text.

    concatenating every fragment gives the plain text; styles name palette
    entries and are only meaningful to render().
    """
    indent = "\n" + prefix + " " * INFO_FLAG_WIDTH

    for flag in flags:
        if isinstance(flag, str):
            yield "\n", ""
            yield flag, "group-label"
            yield "\n", ""
            continue

        if not isinstance(flag, Flag):
            raise TypeError("registry entries must be flags or header strings")

        yield prefix, ""

        width = 0
        if flag.short is not Unset:
            yield "-" + flag.short, "flag-name"
            yield ", ", ""
            width += len(flag.short) + 3
        yield "--" + flag.long, "flag-name"
        width += len(flag.long) + 2

        optional = flag.takes_value and flag.arg_optional is not Unset
        if flag.takes_value:
            name = "<%s>" % flag.arg_name
            if optional:
                yield "[=", ""
                yield name, "metavar"
                yield "]", ""
                width += len(name) + 3
            else:
                yield " ", ""
                yield name, "metavar"
                width += len(name) + 1

        if width >= INFO_FLAG_WIDTH - 1:
            yield indent, ""
        else:
            yield " " * (INFO_FLAG_WIDTH - width), ""

        yield flag.description, "argument-description"

        if flag.type == "string" and flag.one_of is not Unset:
            yield indent, ""
            yield "Optional modes: " if optional else "Modes: ", "modes-label"
            yield stringify(flag.one_of), "choice"
            yield ".", ""

        if flag.takes_value and (flag.default or optional):
            yield " (Default: ", "default-label"
            yield str(flag.arg_optional if optional else flag.default), "default"
            yield ")", "default-label"

        yield "\n", ""


def info(flags, /, *, prefix=""):
    """
    render the usage text of a registry as a plain string.

    parameters
    - flags: ordered mix of descriptors and header strings.
    - prefix: string, or number of spaces, put before every flag line.
    """
    return "".join(fragment for fragment, _ in _segments(flags, _resolve_prefix(prefix)))


def render(flags, /, *, prefix="", colorful=True):
    """
    render the usage text of a registry as a styled rich Text.

    the text is identical to info(); when colorful is False no style is applied.

    palette keys
    - group-label, flag-name, metavar, argument-description
    - modes-label, choice, default-label, default
    """
    styles = defaultdict(str, {
        "group-label": "bold #FFFFFF",
        "flag-name": "bold #22C55E",
        "metavar": "bold #FFD600",
        "argument-description": "#9CA3AF",
        "modes-label": "italic #9CA3AF",
        "choice": "bold #FF4D94",
        "default-label": "#737373",
        "default": "#D1D5DB",
    } | getattr(__import__("__main__"), "__styles__", {}))

    return Text.assemble(*(
        (fragment, styles[style] if colorful and style else "")
        for fragment, style in _segments(flags, _resolve_prefix(prefix))
    ))


__all__ = (
    "INFO_FLAG_WIDTH",
    "info",
    "render",
)
