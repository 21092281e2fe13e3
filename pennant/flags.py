r"""
Pennant flag descriptors and factories.

Overview
- Descriptors
  • BooleanFlag: presence-only switch (e.g., --verbose / -v). May be urgent.
  • StringFlag: value-bearing flag with an optional set of allowed values.
  • NumberFlag: value-bearing flag whose value is parsed as a decimal number.
  Every descriptor carries a mutable `current` slot (the only state touched by
  parsing) that starts as Unset.

- Factories
  • boolean(long, description, ...)
  • string(long, description, ...)
  • number(long, description, ...)
  Each returns the descriptor itself; read `current` after parsing.

- Registry
  • A plain list mixing descriptors and section-header strings. Headers only
    matter for help output; the parser skips them.

Metadata (sanitized on construction)
- Shared
  • long: kebab-case identifier without leading dashes (e.g., "last-name").
  • description: non-empty help text (trimmed).
  • short: Unset | single non-dash, non-space character.
  • invertable: bool, allows the --no-<long> form.
- Boolean only
  • urgent: bool; a true urgent flag makes the parse succeed regardless of
    any other error (help/version flags).
- Value-bearing (string/number)
  • default: value applied after parsing when the flag was never given.
  • arg_optional: value applied when the flag is given without an argument.
  • arg_name: label used in help output (defaults to the long name).
  • required: bool; cannot be combined with a default.
- String only
  • one_of: ordered, duplicate-free collection of allowed strings.

Validation highlights
- Long names must match r"[^\W\d_](-?[^\W_]+)*".
- Uniqueness across a registry is NOT validated: the first registered match wins.

Quick example:
    >>> from pennant import boolean, string, number
    >>> help = boolean("help", "Print this help information and exit.", short="h", urgent=True)
    >>> count = number("count", "The amount of times to greet.", short="c", default=1)
    >>> color = string("color", "Use colors.", arg_optional="always", one_of=["always", "never", "auto"])
"""
import re
from collections.abc import Iterable

from .utils import *


class FlagType(type):
    """
    Metaclass giving descriptors a stable typename and read-only metadata.

    Responsibilities
    - __typename__ is derived from the class name (camel-case split with
      hyphens) and used in messages and representations.
    - Every name listed in __introspectable__ becomes a read-only property
      backed by the private "_<name>" attribute (see mirror()).
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        return super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate metadata shared by every descriptor kind.

    Raises
    - TypeError: when a field has the wrong type.
    - ValueError: when a string field is empty or malformed.
    """
    if not isinstance(long := metadata["long"], str):
        raise TypeError(f"{cls.__typename__} 'long' must be a string")
    elif not re.fullmatch(r"[^\W\d_](-?[^\W_]+)*", long):
        raise ValueError(f"{cls.__typename__} 'long' must be a kebab-case name without leading dashes")

    if not isinstance(description := metadata["description"], str):
        raise TypeError(f"{cls.__typename__} 'description' must be a string")
    elif not (description := description.strip()):
        raise ValueError(f"{cls.__typename__} 'description' cannot be empty")
    metadata["description"] = description

    if not isinstance(short := metadata["short"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'short' must be a string")
    elif isinstance(short, str) and (len(short) != 1 or short == "-" or short.isspace()):
        raise ValueError(f"{cls.__typename__} 'short' must be a single non-dash character")

    if not isinstance(metadata["invertable"], bool):
        raise TypeError(f"{cls.__typename__} 'invertable' must be a boolean")


def _sanitize_parametric_metadata(cls, metadata, /, *, types):
    """
    Internal: validate metadata for value-bearing descriptors.

    Parameters
    - types: accepted types for 'default' and 'arg_optional'.

    Responsibilities
    - arg_name: Unset or non-empty string; defaults to the long name.
    - required: bool; mutually exclusive with 'default'.
    - default / arg_optional: Unset or an instance of `types` (bool excluded).
    """
    if not isinstance(arg_name := metadata["arg_name"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'arg_name' must be a string")
    elif isinstance(arg_name, str) and not (arg_name := arg_name.strip()):
        raise ValueError(f"{cls.__typename__} 'arg_name' cannot be empty")
    metadata["arg_name"] = coalesce(arg_name, metadata["long"])

    if not isinstance(metadata["required"], bool):
        raise TypeError(f"{cls.__typename__} 'required' must be a boolean")

    for name in ("default", "arg_optional"):
        object = metadata[name]
        if object is Unset:
            continue
        if isinstance(object, bool) or not isinstance(object, types):
            raise TypeError(f"{cls.__typename__} {name!r} must be of type {' or '.join(t.__name__ for t in types)}")

    if metadata["required"] and metadata["default"] is not Unset:
        raise TypeError(f"{cls.__typename__} cannot be both required and have a default")


def _sanitize_choices(cls, metadata, /):
    """
    Internal: validate the 'one_of' collection of a string descriptor.

    The collection must be a non-empty iterable of strings without duplicates;
    it is normalized to a tuple, keeping the declared order.
    """
    if (one_of := metadata["one_of"]) is Unset:
        return
    if isinstance(one_of, str) or not isinstance(one_of, Iterable):
        raise TypeError(f"{cls.__typename__} 'one_of' must be an iterable of strings")

    one_of = tuple(one_of)
    if not one_of:
        raise ValueError(f"{cls.__typename__} 'one_of' cannot be empty")
    if not all(isinstance(choice, str) for choice in one_of):
        raise TypeError(f"{cls.__typename__} 'one_of' must only contain strings")
    if len(set(one_of)) != len(one_of):
        raise ValueError(f"{cls.__typename__} 'one_of' cannot contain duplicates")

    metadata["one_of"] = one_of


class Flag(metaclass=FlagType):
    """
    Base of every flag descriptor (not instantiable on its own).

    `type` is the kind tag ("boolean", "string" or "number"); `current` is the
    mutable value slot written by the parser.
    """
    __introspectable__ = ("long", "description", "short", "invertable")

    type = None

    def __init__(self, metadata, /):
        if type(self).type is None:
            raise TypeError(f"type {type(self).__name__!r} cannot be instantiated directly")
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self.current = Unset

    @property
    def takes_value(self):
        return self.type != "boolean"

    def __repr__(self):
        return "%s(%s)" % (
            type(self).__typename__,
            ", ".join("%s=%r" % pair for pair in self.__rich_repr__()),
        )

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)
        yield "current", self.current


class BooleanFlag(Flag):
    __introspectable__ = Flag.__introspectable__ + ("urgent",)

    type = "boolean"

    def __init__(self, long, description, /, *, short=Unset, urgent=False, invertable=False):
        metadata = dict(long=long, description=description, short=short, urgent=urgent, invertable=invertable)
        _sanitize_metadata(type(self), metadata)
        if not isinstance(urgent, bool):
            raise TypeError(f"{type(self).__typename__} 'urgent' must be a boolean")
        super().__init__(metadata)


class StringFlag(Flag):
    __introspectable__ = Flag.__introspectable__ + ("default", "arg_optional", "arg_name", "one_of", "required")

    type = "string"

    def __init__(
            self,
            long,
            description,
            /,
            *,
            short=Unset,
            default=Unset,
            arg_optional=Unset,
            arg_name=Unset,
            one_of=Unset,
            required=False,
            invertable=False,
    ):
        metadata = dict(
            long=long,
            description=description,
            short=short,
            default=default,
            arg_optional=arg_optional,
            arg_name=arg_name,
            one_of=one_of,
            required=required,
            invertable=invertable,
        )
        _sanitize_metadata(type(self), metadata)
        _sanitize_parametric_metadata(type(self), metadata, types=(str,))
        _sanitize_choices(type(self), metadata)
        super().__init__(metadata)


class NumberFlag(Flag):
    __introspectable__ = Flag.__introspectable__ + ("default", "arg_optional", "arg_name", "required")

    type = "number"

    def __init__(
            self,
            long,
            description,
            /,
            *,
            short=Unset,
            default=Unset,
            arg_optional=Unset,
            arg_name=Unset,
            required=False,
            invertable=False,
    ):
        metadata = dict(
            long=long,
            description=description,
            short=short,
            default=default,
            arg_optional=arg_optional,
            arg_name=arg_name,
            required=required,
            invertable=invertable,
        )
        _sanitize_metadata(type(self), metadata)
        _sanitize_parametric_metadata(type(self), metadata, types=(int, float))
        super().__init__(metadata)


def boolean(long, description, /, **options):
    """
    Build a BooleanFlag.

    Options: short, urgent, invertable.
    """
    return BooleanFlag(long, description, **options)


def string(long, description, /, **options):
    """
    Build a StringFlag.

    Options: short, default, arg_optional, arg_name, one_of, required, invertable.
    """
    return StringFlag(long, description, **options)


def number(long, description, /, **options):
    """
    Build a NumberFlag.

    Options: short, default, arg_optional, arg_name, required, invertable.
    """
    return NumberFlag(long, description, **options)


__all__ = (
    "Flag",
    "BooleanFlag",
    "StringFlag",
    "NumberFlag",
    "boolean",
    "string",
    "number",
)
