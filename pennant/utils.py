"""
Pennant utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the flags, parsing and usage layers.

Overview
- UnsetType / Unset
  • Singleton sentinel meaning “no value yet” for a flag’s current slot, kept
    distinct from None and from legitimate falsey values such as 0 or "".
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/"".

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated accessors for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr), copying
    containers so the public view cannot mutate the descriptor.

- stringify(value)
  • Render any flag value for humans: "N/A" for missing values, comma-joined
    sequences, and quoted strings when they contain whitespace.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> stringify(["always", "never", "auto"])
    'always, never, auto'
    >>> stringify("Hello there")
    '"Hello there"'
"""
import builtins
import functools
import re
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    A flag’s current slot starts as Unset and stays there until the parser binds,
    inverts or defaults it. None is never used for that purpose, so the state is
    never confused with a user-supplied value.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when Unset appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        """
        Ensure a single instance for this sentinel type.
        """
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __init_subclass__(cls, **options):
        """
        Disallow subclassing to preserve sentinel semantics.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or [] are preserved as-is; only Unset is
    replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(0, "fallback")      -> 0
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable
    - rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    """
    Recursively copy container values.

    - Sequence (non-string): a new list with each element processed.
    - Mapping: a new dict with processed values.
    - Set: a new set with each element processed.
    - Anything else: returned as-is.
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The property reads "_{name}" on the instance and hands out copies of
    containers, so callers cannot alter a descriptor through its public API.

    Example
    - Given self._one_of, declare one_of = mirror("one_of").
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


def stringify(value, /):
    """
    Render a flag value (or a collection of them) as human-readable text.

    Rules
    - None or Unset -> "N/A"
    - list/tuple -> each element stringified, joined with ", "
    - bool -> "true" / "false"
    - other non-string scalars -> str(value)
    - strings containing whitespace -> wrapped in double quotes
    - any other string -> returned verbatim

    Never raises.
    """
    if value is None or value is Unset:
        return "N/A"

    if isinstance(value, (list, tuple)):
        return ", ".join(map(stringify, value))

    if isinstance(value, bool):
        return "true" if value else "false"

    if not isinstance(value, str):
        return str(value)
    if re.search(r"\s", value):
        return '"%s"' % value
    return value


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
    "stringify",
)
