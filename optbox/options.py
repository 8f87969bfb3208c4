"""
Optbox options registry: register, parse, validate and read command-line options.

What this module provides
- Options: one registry of option descriptors (V) addressed by long and short
  names, with the parse loop, the post-parse validator and the typed readers.
- Process-wide singleton: add/add_map/parse/get_s/... forward to one lazily
  created registry, for the common "one parser per program" case.
- MERGE_SYMBOL: the process-wide separator joining mergeable string values.

Quick start
    from optbox import Options, V, INT, BOOL, report

    options = Options()
    arguments, errors = options.parse(["-c", "4", "--verbose", "file.txt"], {
        "c:count": V(INT, 1, min=1, max=16),
        "v:verbose": V(BOOL),
    })
    report(errors, exit=True)

    options.get_i("count")       # 4
    options.has("verbose")       # True
    arguments.get(0)             # Argument('file.txt')

Token grammar
- "-" / "--" (and any all-dash token) → positional.
- "--name" / "--name=value" → long option; the value must not be empty.
- "-s" / "-s=value" → short option, resolved to its long name.
- "-abc" with no registered short name "abc" → positional (no clustering).
- anything else → positional, or the value of a pending option.

Faults are accumulated, never raised, by parse(); see optbox.faults.
"""
import shlex
import sys
import warnings
from collections.abc import Iterable, Mapping

from .arguments import Arguments
from .faults import *
from .names import parse_name, parse_names
from .utils import *
from .values import OptionType, V, read_s, read_i, read_b, read_f

MERGE_SYMBOL = " "
"""
Separator joining repeated values of mergeable string options (and splitting them back).

Read at call time, so programs may change it before parsing, e.g. to "\\x00".
A registry built with Options(merge_symbol=...) uses its own symbol instead.
"""

# Marks a short-form token kept as a positional argument.
_POSITIONAL = object()


class Options:
    """
    Registry of option descriptors.

    Tables
    - _full: long name → descriptor (aliases add more long names for one descriptor).
    - _short: short name → long name (always a key of _full).
    - _primary: declared long name → descriptor, in registration order; the
      validator walks this table so each descriptor is checked once.

    Lifecycle
    - register with add()/add_map() (or maps passed to parse()),
    - parse() once,
    - read with get_s/get_i/get_b/get_f/split/has/is_.
    """

    def __init__(self, *, merge_symbol=Unset):
        if not isinstance(merge_symbol, str | UnsetType):
            raise TypeError("Options() 'merge_symbol' must be a string")
        self._full = {}
        self._short = {}
        self._primary = {}
        self._merge_symbol = merge_symbol

    @property
    def merge_symbol(self):
        return coalesce(self._merge_symbol, MERGE_SYMBOL)

    def __contains__(self, key):
        return isinstance(key, str) and parse_name(key).long in self._full

    def __rich_repr__(self):
        for name, option in self._primary.items():
            yield name, option

    def __repr__(self):
        return "Options(%s)" % ", ".join(map(repr, self._primary))

    def add(self, key, option, /):
        """
        register an option under a declaration key ("long" or "short:long").

        steps
        - parse the key; an empty long name fails with EmptyNameError.
        - a missing descriptor fails with OPTION_IS_NIL.
        - a taken long/short name fails with DUPLICATE_LONGNAME/DUPLICATE_SHORTNAME.
        - the alias list is expanded; every alias long (and short) name resolves
          to the same descriptor. A bad alias shape fails with
          UNSUPPORTED_ALIAS_LIST_FORMAT and nothing is registered.

        raises
        - OptionsFault subclasses for the failures above.
        - TypeError when key is not a string or option is not a V.
        """
        if not isinstance(key, str):
            raise TypeError("add() first argument must be a string")

        name = parse_name(key)

        if not name.long:
            raise EmptyNameError()
        if option is None:
            raise OptionError("--" + name.long, "", ErrorCode.OPTION_IS_NIL)
        if not isinstance(option, V):
            raise TypeError("add() second argument must be an option descriptor (V)")
        if name.long in self._full:
            raise OptionError("--" + name.long, "", ErrorCode.DUPLICATE_LONGNAME)
        if name.short and name.short in self._short:
            raise OptionError("-" + name.short, "", ErrorCode.DUPLICATE_SHORTNAME)

        aliases = []
        if option.alias is not None:
            try:
                aliases = parse_names(option.alias)
            except TypeError:
                raise OptionError(name.long, "", ErrorCode.UNSUPPORTED_ALIAS_LIST_FORMAT) from None

        self._full[name.long] = option
        self._primary[name.long] = option

        if name.short:
            self._short[name.short] = name.long

        for alias in aliases:
            self._bind_alias(name, alias, option)

    def _bind_alias(self, name, alias, option):
        if alias.long:
            if self._full.get(alias.long, option) is not option:
                warnings.warn(ShadowedAliasWarning(
                    "Alias --%s of option %s shadows another option" % (alias.long, name)
                ), stacklevel=3)
            self._full[alias.long] = option
        if alias.short:
            if self._short.get(alias.short, name.long) != name.long:
                warnings.warn(ShadowedAliasWarning(
                    "Alias -%s of option %s shadows another option" % (alias.short, name)
                ), stacklevel=3)
            self._short[alias.short] = name.long

    def add_map(self, mapping, /):
        """
        register every entry of a mapping {key: V}, collecting all faults.

        returns
        - list of faults (empty when everything was registered).
        - [NilMapError()] when mapping is None.
        """
        if mapping is None:
            return [NilMapError()]
        if not isinstance(mapping, Mapping):
            raise TypeError("add_map() argument must be a mapping")

        errors = []
        for key, option in mapping.items():
            try:
                self.add(key, option)
            except OptionsFault as error:
                errors.append(error)
        return errors

    def parse(self, tokens=Unset, /, *maps):
        """
        parse raw tokens into option values and positional arguments.

        parameters
        - tokens:
          • Unset: sys.argv[1:].
          • str: shell-like string, split with shlex.split.
          • Iterable[str]: the tokens as given.
        - maps: optional {key: V} mappings registered before parsing. If any
          registration fails, parsing is skipped and (Arguments(), faults) is returned.

        returns
        - (Arguments, list of faults). The list holds every parse and validation
          fault; parse() itself never raises them.
        """
        errors = []
        for mapping in maps:
            errors.extend(self.add_map(mapping))

        if errors:
            return Arguments(), errors

        return self._parse(_tokenize(tokens))

    # The parse loop keeps a single piece of state: the long name of the option
    # waiting for its value (pending), and whether that option is MIXED.
    def _parse(self, tokens):
        for option in self._primary.values():
            option.prepare()

        if not tokens:
            return Arguments(), self.validate()

        arguments = []
        errors = []
        pending = ""
        mixed = False

        for token in tokens:
            if pending and not mixed:
                self._assign(pending, token, errors)
                pending = ""
                continue

            if not token.rstrip("-"):
                arguments.append(token)
                continue

            try:
                if len(token) > 2 and token.startswith("--"):
                    resolved = self._resolve_long(token[2:])
                elif len(token) > 1 and token.startswith("-"):
                    resolved = self._resolve_short(token[1:])
                else:
                    resolved = None
            except OptionError as error:
                errors.append(error)
                continue

            if resolved is _POSITIONAL:
                arguments.append(token)
                continue

            if resolved is None:
                if mixed:
                    self._assign(pending, token, errors)
                    pending, mixed = "", False
                else:
                    arguments.append(token)
                continue

            name, value = resolved

            if mixed:
                self._full[pending].assign_flag()
                pending, mixed = "", False

            option = self._full[name]

            if value is not None:
                self._assign(name, value, errors)
            elif option.effective_type is OptionType.BOOL:
                self._assign(name, "", errors)
            elif option.effective_type is OptionType.MIXED:
                pending, mixed = name, True
            else:
                pending = name

        if pending:
            if mixed:
                self._full[pending].assign_flag()
            else:
                errors.append(OptionError("--" + pending, "", ErrorCode.EMPTY_VALUE))

        errors.extend(self.validate())

        return Arguments(*arguments), errors

    def _resolve_long(self, body):
        """
        "--name" / "--name=value" → (long, value | None).
        """
        name, equals, value = body.partition("=")
        if equals and not value:
            raise OptionError("--" + name, "", ErrorCode.WRONG_FORMAT)
        if name not in self._full:
            raise OptionError("--" + name, "", ErrorCode.UNSUPPORTED)
        return name, value if equals else None

    def _resolve_short(self, body):
        """
        "-s" / "-s=value" → (long, value | None); _POSITIONAL when the token is a positional.
        """
        name, equals, value = body.partition("=")
        if equals and not value:
            raise OptionError("-" + name, "", ErrorCode.WRONG_FORMAT)
        if name not in self._short:
            # a long unregistered run like "-abc" is not a cluster of flags
            if not equals and len(name) > 1:
                return _POSITIONAL
            raise OptionError("-" + name, "", ErrorCode.UNSUPPORTED)
        return self._short[name], value if equals else None

    def _assign(self, name, value, errors):
        try:
            self._full[name].assign(name, value, self.merge_symbol)
        except OptionError as error:
            errors.append(error)

    def validate(self):
        """
        check every registered descriptor once, after parsing.

        - UNSUPPORTED_VALUE: the value is not None/str/bool/int/float, or does not
          match the declared type.
        - REQUIRED_NOT_SET: a required option still has no value.
        - CONFLICT: this option and one of its conflicts are both set.
        - BOUND_NOT_SET: this option is set but one of its bound options is not.
        - UNSUPPORTED_CONFLICT_LIST_FORMAT / UNSUPPORTED_BOUND_LIST_FORMAT: the
          constraint list is neither a string nor an iterable of strings.
        """
        errors = []

        for name, option in self._primary.items():
            if not option.supported():
                errors.append(OptionError(name, "", ErrorCode.UNSUPPORTED_VALUE))

            if option.required and option.value is None:
                errors.append(OptionError(name, "", ErrorCode.REQUIRED_NOT_SET))

            if option.conflicts is not None:
                try:
                    conflicts = parse_names(option.conflicts)
                except TypeError:
                    errors.append(OptionError(name, "", ErrorCode.UNSUPPORTED_CONFLICT_LIST_FORMAT))
                else:
                    for conflict in conflicts:
                        if self.has(name) and self._is_set(conflict):
                            errors.append(OptionError(name, conflict.long, ErrorCode.CONFLICT))

            if option.bound is not None:
                try:
                    bound = parse_names(option.bound)
                except TypeError:
                    errors.append(OptionError(name, "", ErrorCode.UNSUPPORTED_BOUND_LIST_FORMAT))
                else:
                    for peer in bound:
                        if self.has(name) and not self._is_set(peer):
                            errors.append(OptionError(name, peer.long, ErrorCode.BOUND_NOT_SET))

        return errors

    def _lookup(self, key):
        if not isinstance(key, str):
            raise TypeError("option name must be a string")
        return self._full.get(parse_name(key).long)

    def _is_set(self, name):
        option = self._full.get(name.long)
        return option is not None and option.is_set

    def _value(self, key):
        option = self._lookup(key)
        return None if option is None else option.value

    def get_s(self, key, /):
        """
        value as a string: numbers in canonical form, booleans as "true"/"false", "" when unknown.
        """
        return read_s(self._value(key))

    def get_i(self, key, /):
        """
        value as an int: strings parsed (0 on failure), floats truncated, booleans 1/0.
        """
        return read_i(self._value(key))

    def get_b(self, key, /):
        """
        value as a bool: non-empty strings and positive numbers are True.
        """
        return read_b(self._value(key))

    def get_f(self, key, /):
        """
        value as a float: strings parsed (0.0 on failure), ints widened, booleans 1.0/0.0.
        """
        return read_f(self._value(key))

    def split(self, key, /):
        """
        string value split by the merge symbol; [] when the value is empty.
        """
        value = self.get_s(key)
        if not value:
            return []
        return value.split(self.merge_symbol)

    def has(self, key, /):
        """
        True if the option exists and a command-line token assigned it.
        """
        option = self._lookup(key)
        return option is not None and option.is_set

    def is_(self, key, value, /):
        """
        True if the option is set and equals value, read with the matching reader.

        str → get_s, bool → get_b, int → get_i, float → get_f; other types never match.
        """
        if not self.has(key):
            return False
        if isinstance(value, str):
            return self.get_s(key) == value
        if isinstance(value, bool):
            return self.get_b(key) == value
        if isinstance(value, int):
            return self.get_i(key) == value
        if isinstance(value, float):
            return self.get_f(key) == value
        return False

    def delete(self, key, /):
        """
        remove a long name from the registry (e.g. to scrub a secret after reading it).

        returns True when something was removed. Short names bound to the removed
        long name are dropped with it; other aliases keep the descriptor alive.
        """
        if self._lookup(key) is None:
            return False
        long = parse_name(key).long
        option = self._full.pop(long)
        if self._primary.get(long) is option:
            del self._primary[long]
        for short in [short for short, target in self._short.items() if target == long]:
            del self._short[short]
        return True


def _tokenize(tokens):
    """
    normalize the tokens argument of parse() into a list of strings.
    """
    if tokens is Unset:
        return sys.argv[1:]
    if isinstance(tokens, str):
        return shlex.split(tokens)
    if isinstance(tokens, Iterable):
        tokens = list(tokens)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() tokens must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() tokens must be a string or an iterable of strings")


# Process-wide registry; created on first registration or parse.
_global = None


def new_options(*, merge_symbol=Unset):
    return Options(merge_symbol=merge_symbol)


def use(options, /):
    """
    install a registry as the process-wide singleton and return it.
    """
    global _global
    if options is None:
        raise NilOptionsError()
    if not isinstance(options, Options):
        raise TypeError("use() argument must be an Options registry")
    _global = options
    return options


def reset():
    """
    drop the process-wide singleton; the next add/add_map/parse creates a fresh one.
    """
    global _global
    _global = None


def current():
    """
    the process-wide singleton, or None before first use.
    """
    return _global


def _ensure():
    global _global
    if _global is None:
        _global = Options()
    return _global


def add(key, option, /):
    _ensure().add(key, option)


def add_map(mapping, /):
    return _ensure().add_map(mapping)


def parse(*maps, tokens=Unset):
    """
    parse sys.argv[1:] (or tokens) with the process-wide registry.
    """
    return _ensure().parse(tokens, *maps)


def get_s(key, /):
    return "" if _global is None else _global.get_s(key)


def get_i(key, /):
    return 0 if _global is None else _global.get_i(key)


def get_b(key, /):
    return False if _global is None else _global.get_b(key)


def get_f(key, /):
    return 0.0 if _global is None else _global.get_f(key)


def split(key, /):
    return [] if _global is None else _global.split(key)


def has(key, /):
    return False if _global is None else _global.has(key)


def is_(key, value, /):
    return False if _global is None else _global.is_(key, value)


def delete(key, /):
    return False if _global is None else _global.delete(key)


__all__ = (
    "Options",
    "new_options",
    "use",
    "reset",
    "current",
    "add",
    "add_map",
    "parse",
    "get_s",
    "get_i",
    "get_b",
    "get_f",
    "split",
    "has",
    "is_",
    "delete",
)
