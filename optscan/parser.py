"""
optscan parser: evaluate an argument vector against the registered options.

What this module provides
- is_option(token): classify a token as an option marker ("--" → 2, "-" → 1)
  or a value (0).
- Parser: a Registry that knows how to parse an argument vector and render
  help for its options.

Parsing algorithm (two phases)
1. evaluate_values: for every registered option, in registration order,
   scan argv[1:] for the first marker token naming the option.
   • the option is marked found.
   • NONE arity: nothing else happens (no value is consumed).
   • otherwise up to n values (EXACT/UP_TO) or every remaining token
     (UNLIMITED) are read; reading stops early at the first option marker.
   • EXACT(n) faults unless exactly n values were read; UP_TO/UNLIMITED
     fault when no value was read; unknown arity kinds fault as invalid.
   • an option without any name always faults, found or not.
2. mandatory check: every mandatory option that was not found faults.

Policies
- first match only: repeated occurrences of an option ("-v -v -v") are not
  aggregated; only the value run after the first occurrence is collected.
- partial runs: when a marker interrupts a value run, the values read so far
  are kept and validated as they are.
- any token starting with "-" is a marker, including "-" alone and negative
  numbers; such tokens are never collected as values.
- every parse starts from fresh runtime state, so parsing the same argv
  twice yields the same faults and values.

Quick start
    from optscan import Parser, Option, NONE, UNLIMITED, exact

    parser = Parser(
        Option("v", "verbose", "chatty output"),
        Option("o", "out", "where to write", exact(1), mandatory=True),
        Option("i", "input", "files to read", UNLIMITED),
    )
    result = parser.parse(["prog", "--out", "a.txt", "-i", "x", "y"])
    result.exit()  # prints faults and exits non-zero on failure
    parser.values_from_option("input")  # ['x', 'y']
"""
import os.path
import shlex
import sys
from collections import defaultdict
from collections.abc import Iterable

from rich.console import Console, Group
from rich.table import Table
from rich.text import Text

from .faults import Fault, FaultCode, Result
from .options import ArityKind
from .registry import Registry
from .utils import *

console = Console()


def is_option(token, /):
    """
    return the length of the option marker prefix of `token`.

    - "--name" → 2
    - "-n"     → 1
    - "value"  → 0 (not a marker)

    the double dash is tested first because it also starts with a single dash.
    """
    if token.startswith("--"):
        return 2
    if token.startswith("-"):
        return 1
    return 0


def _sanitize(argv):
    """
    normalize a parse() input into a list of strings.

    - Unset: the current process arguments (sys.argv).
    - str: shell-like string split with shlex.split (first word is the program).
    - Iterable[str]: used as-is; every item must be a string.
    """
    if argv is Unset:
        return list(sys.argv)
    if isinstance(argv, str):
        return shlex.split(argv)
    if isinstance(argv, Iterable):
        tokens = list(argv)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


class Parser(Registry):
    """
    option registry plus the evaluation engine.

    usage
    - build with Parser(*options) or add_option() one by one.
    - call parse(argv) once per invocation; read found flags and values back
      through has_option()/values_from_option().
    - faults are collected, never raised: inspect the returned Result.
    """

    def parse(self, argv=Unset, /):
        """
        evaluate `argv` (program name first) against the registered options.

        parameters
        - argv: Unset | str | Iterable[str]
          • Unset: read sys.argv.
          • str: shell-like command line, split with shlex.split.
          • Iterable[str]: pre-tokenized argument vector.

        returns
        - Result holding the value faults (registration order) followed by
          the missing mandatory options.

        raises
        - TypeError: when argv is not a string or an iterable of strings.
        """
        argv = _sanitize(argv)
        self._reset()

        context = {"prog": os.path.basename(argv[0])} if argv and argv[0] else {}

        faults = self.evaluate_values(argv, **context)

        for option, state in self._entries:
            if option.mandatory and not state.found:
                faults.append(Fault(option, FaultCode.OPTION_NOT_FOUND, **context))

        return Result(faults, **context)

    def evaluate_values(self, argv, /, **context):
        """
        phase one of parse(): mark found options, collect and check their values.

        argv[0] is the program name and is never inspected. state is not reset
        here; parse() takes care of that.

        returns
        - list[Fault] in registration order.
        """
        faults = []

        for option, state in self._entries:
            if not option.short and not option.long:
                faults.append(Fault(option, FaultCode.OPTION_HAS_NO_NAMES, **context))

            for index in range(1, len(argv)):
                token = argv[index]
                if not (start := is_option(token)) or not option.is_name_known(token[start:]):
                    continue

                state.found = True

                kind = option.constraint.kind
                match kind:
                    case ArityKind.NONE:
                        break
                    case ArityKind.UNLIMITED:
                        # every token after the option itself
                        count = len(argv) - index - 1
                    case ArityKind.EXACT | ArityKind.UP_TO:
                        count = option.constraint.count
                    case _:
                        # unknown kinds never consume values
                        faults.append(Fault(option, FaultCode.INVALID_VALUE_CONSTRAINT, **context))
                        break

                received = self._read(argv, index, count, state.values)

                if kind == ArityKind.EXACT:
                    if received != count:
                        faults.append(Fault(option, FaultCode.NOT_ENOUGH_VALUES, received=received, **context))
                elif not received:
                    faults.append(Fault(option, FaultCode.NOT_ENOUGH_VALUES, received=received, **context))

                # first occurrence only
                break

        return faults

    @staticmethod
    def _read(argv, index, count, values, /):
        """
        append up to `count` values following argv[index] to `values`.

        stops at the first option marker or at the end of argv and returns
        the number of values actually read.
        """
        received = 0
        for token in argv[index + 1:index + 1 + count]:
            if is_option(token):
                break
            values.append(token)
            received += 1
        return received

    def print_help(self, console=None, newline=False, *, colorful=True):
        """
        render the registered options as an "Options" section.

        layout (one entry per option, registration order)
            Options
            -o / --out    where to write
                          (1 value(s) expected)

        parameters
        - console: rich Console to print to; None means the module stdout console.
        - newline: add a blank line after every entry.
        - colorful: apply the palette; when False the output is plain text.

        customization
        - define a mapping named __styles__ in __main__ to override any of the
          palette entries: group-label, option-name, argument-description,
          constraint.
        """
        if not self._entries:
            return

        styles = defaultdict(str, {
            "group-label": "bold #FFFFFF",  # Pure white header
            "option-name": "bold #00E6FF",  # CYAN for option names
            "argument-description": "#9CA3AF",  # Muted gray
            "constraint": "italic #FFD600",  # AMBER arity note
        } | getattr(__import__("__main__"), "__styles__", {}))

        def text(fragment, style):
            return Text(str(fragment), styles[style] if colorful else "")

        table = Table.grid(padding=(0, 3))
        table.add_column(no_wrap=True)
        table.add_column()

        for option in self:
            lines = []
            if option.descr:
                lines.append(text(option.descr, "argument-description"))
            match option.constraint.kind:
                case ArityKind.EXACT:
                    lines.append(text(f"({option.constraint.count} value(s) expected)", "constraint"))
                case ArityKind.UP_TO:
                    lines.append(text(f"(between 1 and {option.constraint.count} values)", "constraint"))
                case ArityKind.UNLIMITED:
                    lines.append(text("(unlimited number of values)", "constraint"))
                case ArityKind.NONE:
                    lines.append(text("(no value expected)", "constraint"))

            table.add_row(text(" / ".join(option.names), "option-name"), Text("\n").join(lines))
            if newline:
                table.add_row("", "")

        if console is None:
            console = globals()["console"]
        console.print(Group(text("Options", "group-label"), table))


__all__ = (
    "is_option",
    "Parser",
)
