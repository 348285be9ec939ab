r"""
optscan option descriptors and value arity constraints.

Overview
- Arity
  • (kind, count) pair describing how many value tokens an option consumes.
  • ArityKind: NONE, EXACT, UP_TO, UNLIMITED.
  • NONE / UNLIMITED constants and exact(n) / up_to(n) factories.

- Option
  • Immutable identity of one command-line option: short name, long name,
    description, arity constraint and mandatory flag.
  • Names are stored bare (without the "-"/"--" marker): "v", "verbose".
  • Either name may be empty; an option with no name at all is accepted here
    and reported by the parser as OPTION_HAS_NO_NAMES.
  • Equality and hashing follow the (short, long) name pair.

- Introspection & representation
  • OptionType metaclass exposes the fields listed in __introspectable__ as
    read-only properties and provides stable __repr__/__rich_repr__.

Quick example:
    >>> from optscan.options import Option, exact, UNLIMITED
    >>> Option("o", "out", "where to write", exact(1), mandatory=True)
    option(short='o', long='out', descr='where to write', constraint=exact(1), mandatory=True)
    >>> Option("f", constraint=UNLIMITED).is_name_known("f")
    True
"""
import functools
import operator
import re
from collections import namedtuple
from enum import IntEnum

from rich.text import Text

from .utils import *


class ArityKind(IntEnum):
    """
    Value arity tags understood by the parser.

    - NONE: the option is presence-only and never consumes values.
    - EXACT: exactly `count` values must follow the option.
    - UP_TO: between 1 and `count` values must follow the option.
    - UNLIMITED: at least one value; every following token up to the next
      option marker is consumed.
    """
    NONE = 0
    EXACT = 1
    UP_TO = 2
    UNLIMITED = 3


class Arity(namedtuple("Arity", ("kind", "count"))):
    """
    Value arity constraint: a (kind, count) pair.

    Validation
    - kind must be an ArityKind value (ValueError otherwise).
    - EXACT/UP_TO require an integer count >= 1 (TypeError/ValueError).
    - NONE/UNLIMITED take no count; it is always stored as 0.

    Prefer the module helpers NONE, UNLIMITED, exact(n) and up_to(n) over
    calling this constructor directly.
    """
    __slots__ = ()

    def __new__(cls, kind, count=0, /):
        kind = ArityKind(kind)
        if kind in (ArityKind.EXACT, ArityKind.UP_TO):
            if not isinstance(count, int) or isinstance(count, bool):
                raise TypeError(f"{kind.name.lower()} arity count must be an integer")
            if count < 1:
                raise ValueError(f"{kind.name.lower()} arity count must be a positive integer")
        elif count:
            raise ValueError(f"{kind.name.lower()} arity does not take a count")
        return super().__new__(cls, kind, count)

    def __repr__(self):
        match self.kind:
            case ArityKind.EXACT:
                return f"exact({self.count})"
            case ArityKind.UP_TO:
                return f"up_to({self.count})"
            case ArityKind.NONE | ArityKind.UNLIMITED:
                return self.kind.name
        return f"Arity(kind={self.kind!r}, count={self.count!r})"


NONE = Arity(ArityKind.NONE)
UNLIMITED = Arity(ArityKind.UNLIMITED)


def exact(count, /):
    """
    Build an EXACT(count) constraint: the option takes exactly `count` values.
    """
    return Arity(ArityKind.EXACT, count)


def up_to(count, /):
    """
    Build an UP_TO(count) constraint: the option takes 1..`count` values.
    """
    return Arity(ArityKind.UP_TO, count)


class OptionType(type):
    """
    Metaclass that turns descriptor classes into introspectable, read-only specs.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with every introspectable field.

            Example
            - option(short='v', long='verbose', descr='', constraint=NONE, mandatory=False)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class Option(metaclass=OptionType):
    """
    Immutable descriptor of one command-line option.

    Fields (read-only)
    - short: str, bare short name (e.g., "v"); may be empty.
    - long: str, bare long name (e.g., "verbose"); may be empty.
    - descr: str, human description used by help output; defaults to "".
    - constraint: Arity, how many values the option consumes.
    - mandatory: bool, whether the option must appear on the command line.

    Notes
    - Only types are validated here. Names are trimmed; an option with both
      names empty is legal and surfaces as a fault during parsing.
    - Two options are equal when their (short, long) pairs are equal.
    """

    __introspectable__ = (
        "short",
        "long",
        "descr",
        "constraint",
        "mandatory",
    )

    def __init__(self, short="", long="", descr=Unset, constraint=NONE, *, mandatory=False):
        for label, name in (("short", short), ("long", long)):
            if not isinstance(name, str):
                raise TypeError(f"{type(self).__typename__} {label!r} name must be a string")

        if not isinstance(descr, str | Text | Unset):
            raise TypeError(f"{type(self).__typename__} 'descr' must be a string")

        if not isinstance(constraint, Arity):
            raise TypeError(f"{type(self).__typename__} 'constraint' must be an arity")

        self._short = short.strip()
        self._long = long.strip()
        self._descr = coalesce(descr, "")
        self._constraint = constraint
        self._mandatory = bool(mandatory)

    @property
    def names(self):
        """
        Marker-prefixed names as typed on a command line, short first.

        Example
        - Option("o", "out").names -> ("-o", "--out")
        """
        names = []
        if self._short:
            names.append("-" + self._short)
        if self._long:
            names.append("--" + self._long)
        return tuple(names)

    def is_name_known(self, name, /):
        """
        Return True when `name` equals this option's short or long name.

        Empty strings never match, so unnamed fields are never confused with
        each other.
        """
        return bool(name) and name in (self._short, self._long)

    def __eq__(self, other):
        if not isinstance(other, Option):
            return NotImplemented
        return (self._short, self._long) == (other._short, other._long)

    def __hash__(self):
        return hash((self._short, self._long))

    def __str__(self):
        return " / ".join(self.names) or "(unnamed option)"


__all__ = (
    "ArityKind",
    "Arity",
    "NONE",
    "UNLIMITED",
    "exact",
    "up_to",
    "Option",
)
