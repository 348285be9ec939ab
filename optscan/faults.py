"""
optscan faults (collected parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every issue the parser
  can report. Codes are grouped by domain to keep logs/searches predictable.
- Fault: one collected record, the offending option plus its code. Faults are
  never raised by the parser; they are accumulated into a Result.
- Result: the ordered fault list returned by Parser.parse(), which knows how
  to render itself with rich and how to turn into an exit or an exception.
- ParseFault / ParseExit: exception forms for callers that prefer raising.

UX goals
- Option-first messages: every message names the option as typed on the
  command line ("-o / --out").
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- parse() returns a Result; callers inspect result.faults, call
  result.exit() to print and terminate, or result.throw() to raise ParseExit.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .options import ArityKind

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes reported by the parser (stable identifiers).

    grouping (by high-level domain)
    - declarations (2110x)
      • OPTION_HAS_NO_NAMES
    - values (2111x)
      • NOT_ENOUGH_VALUES, INVALID_VALUE_CONSTRAINT
    - requirements (2112x)
      • OPTION_NOT_FOUND

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- declaration errors (2110x) ---
    OPTION_HAS_NO_NAMES         = 21101

    # --- value errors (2111x) ---
    NOT_ENOUGH_VALUES           = 21111
    INVALID_VALUE_CONSTRAINT    = 21112

    # --- requirement errors (2112x) ---
    OPTION_NOT_FOUND            = 21121

    @property
    def title(self):
        """
        lowercased, human-friendly title (e.g., "not enough values").
        """
        return self.name.replace("_", " ").lower()

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _describe(constraint):
    match constraint.kind:
        case ArityKind.EXACT:
            return f"exactly {constraint.count} value(s)"
        case ArityKind.UP_TO:
            return f"between 1 and {constraint.count} values"
        case ArityKind.UNLIMITED:
            return "at least one value"
    return "no value"


class Fault:
    """
    one collected parse error: the offending option and its fault code.

    identity
    - two faults are equal when they name the same option with the same code;
      rendering options (prog, colorful, received, ...) do not take part.

    options
    - prog: program name shown in the header (argv[0] basename by default).
    - received: number of values actually read (NOT_ENOUGH_VALUES only).
    - colorful: style the output (default True).
    - fancy: wrap the output in a panel (default False).
    """

    def __init__(self, option, code, /, **options):
        if not isinstance(code, FaultCode):
            raise TypeError("fault code must be a fault-code")
        self.option = option
        self.code = code
        self.options = MappingProxyType(options)

    @property
    def message(self):
        """
        one-sentence, lowercased description of what went wrong.
        """
        match self.code:
            case FaultCode.OPTION_HAS_NO_NAMES:
                return "an option was declared without a short or a long name"
            case FaultCode.NOT_ENOUGH_VALUES:
                received = self.options.get("received")
                expected = _describe(self.option.constraint)
                if received is None:
                    return f"{self.option} expects {expected}"
                return f"{self.option} expects {expected} but received {received}"
            case FaultCode.INVALID_VALUE_CONSTRAINT:
                return f"{self.option} carries an unknown value constraint {self.option.constraint!r}"
            case FaultCode.OPTION_NOT_FOUND:
                return f"{self.option} is mandatory but was not given"
        raise RuntimeError("unexpected fault code")

    @property
    def hint(self):
        """
        a single actionable suggestion for the user.
        """
        match self.code:
            case FaultCode.OPTION_HAS_NO_NAMES:
                return "give every option at least a short or a long name"
            case FaultCode.NOT_ENOUGH_VALUES:
                return f"put {_describe(self.option.constraint)} right after {self.option}"
            case FaultCode.INVALID_VALUE_CONSTRAINT:
                return "declare the option with NONE, exact(n), up_to(n) or UNLIMITED"
            case FaultCode.OPTION_NOT_FOUND:
                return f"add {self.option} to the command line"
        raise RuntimeError("unexpected fault code")

    def __eq__(self, other):
        if not isinstance(other, Fault):
            return NotImplemented
        return (self.option, self.code) == (other.option, other.code)

    def __hash__(self):
        return hash((self.option, self.code))

    def __repr__(self):
        return f"fault(option={self.option!r}, code={self.code.name})"

    def __str__(self):
        return f"{self.code.normalize()} | {self.code.title}: {self.message}"

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        prog = text(getattr(main, "__prog__", self.options.get("prog", "optscan")), "prog-name")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize(), "code"),
            " | ",
            text(self.code.title.title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")
        hint = Text.assemble(text(" → ", "hint-arrow"), text(self.hint, "hint"))

        if self.options.get("fancy", False):
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.option, self.code, **{**self.options, **overrides})


class ParseFault(Exception):
    """
    exception form of a single Fault (see Result.throw()).
    """

    def __init__(self, fault, /):
        if not isinstance(fault, Fault):
            raise TypeError("parse-fault argument must be a fault")
        super().__init__(str(fault))
        self.fault = fault


class ParseExit(ExceptionGroup[ParseFault]):
    """
    every fault of a failed parse, bundled as an exception group.
    """

    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad parse", exceptions)

    def __init__(self, exceptions, **options):
        super().__init__("bad parse", tuple(exceptions))
        self.options = MappingProxyType(options)


class Result:
    """
    outcome of a parse: the ordered list of collected faults.

    contract
    - faults keep the order they were found in: value/declaration faults in
      registration order first, then missing mandatory options.
    - there is no success flag; an empty fault list means success (see ok).
    - found flags and values are queried on the parser, not here.
    """

    def __init__(self, faults=(), /, **options):
        faults = tuple(faults)
        for fault in faults:
            if not isinstance(fault, Fault):
                raise TypeError("result faults must be faults")
        self._faults = faults
        self.options = MappingProxyType(options)

    @property
    def faults(self):
        """
        the collected faults, in order (read-only tuple).
        """
        return self._faults

    @property
    def ok(self):
        return not self._faults

    def codes(self):
        """
        the fault codes, in order (handy for assertions and exit statuses).
        """
        return [fault.code for fault in self._faults]

    def __iter__(self):
        return iter(self._faults)

    def __eq__(self, other):
        if not isinstance(other, Result):
            return NotImplemented
        return self._faults == other._faults

    __hash__ = None

    def __repr__(self):
        return f"result(faults={list(self._faults)!r})"

    def __rich__(self):
        renders = [copy.replace(fault, **self.options) for fault in self._faults]
        if self.options.get("fancy", False):
            title = Text(f" [ {len(renders)} fault(s) ] ", "bold #FF4DA6" if self.options.get("colorful", True) else "")
            return Panel(Group(*renders), title=title, title_align="left")
        return Group(*renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self._faults, **{**self.options, **overrides})

    def report(self, console=None):
        """
        print every fault to the given rich console (the module stderr console when None).
        """
        if not self._faults:
            return
        if console is None:
            console = globals()["console"]
        console.print(self)

    def exit(self, code=1, console=None):
        """
        print the faults and terminate the process when the parse failed.

        returns normally (None) when there is nothing to report.
        """
        if not self._faults:
            return
        self.report(console)
        sys.exit(code)

    def throw(self):
        """
        raise ParseExit bundling one ParseFault per collected fault.

        no-op when the parse succeeded.
        """
        if not self._faults:
            return
        raise ParseExit([ParseFault(fault) for fault in self._faults], **self.options)


__all__ = (
    "FaultCode",
    "Fault",
    "ParseFault",
    "ParseExit",
    "Result",
)
