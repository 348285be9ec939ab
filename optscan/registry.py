"""
optscan option registry: registration, uniqueness and result queries.

What this module provides
- OptionState: mutable runtime state of one registered option (collected
  values in command-line order, found flag).
- Entry: (option, state) record; the parser mutates entry.state directly so
  the value-reading loop never needs a lookup.
- Registry: ordered collection of entries with a name index.

Uniqueness
- A name (short or long) can belong to at most one registered option. The
  check is cross-field: adding an option whose long name equals an existing
  short name is a collision too.
- Empty names never collide; any number of options may leave their short (or
  long) name empty.
- Lookups by option (state(), `in`) compare the (short, long) name pair, so
  an equal option built elsewhere matches; unnamed options match by identity.

Queries
- find_option/has_option/values_from_option only see options that were
  found by the last parse; a registered-but-absent option reads as missing.
"""
from collections import namedtuple

from .options import Option


class OptionState:
    """
    runtime state of one registered option.

    - values: list[str], values collected for the option, in command-line order.
    - found: bool, whether the option appeared on the command line.

    state is created empty at registration and reset before every parse.
    """
    __slots__ = ("values", "found")

    def __init__(self):
        self.values = []
        self.found = False

    def reset(self):
        self.values = []
        self.found = False

    def __rich_repr__(self):
        yield "values", self.values
        yield "found", self.found

    def __repr__(self):
        return f"option-state(values={self.values!r}, found={self.found!r})"


Entry = namedtuple("Entry", ("option", "state"))


class Registry:
    """
    ordered registry of options and their runtime state.

    construction
    - Registry(*options) registers every option in order; options whose names
      collide with an earlier one are skipped (same rule as add_option()).

    iteration
    - iterating yields the registered options in registration order; that
      order drives the order of collected faults.
    """

    def __init__(self, *options):
        self._entries = []
        self._names = {}
        for option in options:
            self.add_option(option)

    def add_option(self, option, /):
        """
        register an option with fresh, empty runtime state.

        returns
        - True when the option was registered.
        - False when its short or long name is already taken by a registered
          option (the registry is left untouched).

        raises
        - TypeError: when the argument is not an Option.
        """
        if not isinstance(option, Option):
            raise TypeError("add_option() argument must be an option")

        if self.is_opt_known(option.short, option.long):
            return False

        entry = Entry(option, OptionState())
        self._entries.append(entry)
        for name in (option.short, option.long):
            if name:
                self._names[name] = entry
        return True

    def is_opt_known(self, short_name, long_name, /):
        """
        return True when either name is already used by a registered option.

        both candidates are tested against both the short and the long names
        of every registered option; empty candidates are ignored.
        """
        return any(name and name in self._names for name in (short_name, long_name))

    def find_option(self, name, /):
        """
        return the (option, state) entry named `name` that was found by the
        last parse, or None.

        None is returned both for unknown names and for registered options
        that did not appear on the command line.
        """
        entry = self._names.get(name)
        if entry is None or not entry.state.found:
            return None
        return entry

    def has_option(self, name, /):
        """
        return True when the option named `name` was found by the last parse.
        """
        return self.find_option(name) is not None

    def values_from_option(self, name, /):
        """
        return a copy of the values collected for `name` (command-line order).

        an empty list is returned when the option was not found.
        """
        entry = self.find_option(name)
        if entry is None:
            return []
        return list(entry.state.values)

    def state(self, option, /):
        """
        return the runtime state of the registered option equal to `option`.

        options compare by their (short, long) name pair, so an equal option
        built elsewhere finds the same state. unnamed options are matched by
        identity since they all share the empty name pair.

        raises
        - KeyError: when no such option is registered.
        """
        entry = self._lookup(option)
        if entry is None:
            raise KeyError(option)
        return entry.state

    def _lookup(self, option):
        for name in (option.short, option.long):
            if name:
                entry = self._names.get(name)
                return entry if entry is not None and entry.option == option else None
        return next((entry for entry in self._entries if entry.option is option), None)

    def _reset(self):
        for entry in self._entries:
            entry.state.reset()

    def __iter__(self):
        return (entry.option for entry in self._entries)

    def __len__(self):
        return len(self._entries)

    def __contains__(self, item):
        if isinstance(item, str):
            return bool(item) and item in self._names
        if isinstance(item, Option):
            return self._lookup(item) is not None
        return False

    def __rich_repr__(self):
        yield "options", [entry.option for entry in self._entries]

    def __repr__(self):
        return f"{type(self).__name__.lower()}(options={[entry.option for entry in self._entries]!r})"


__all__ = (
    "OptionState",
    "Entry",
    "Registry",
)
