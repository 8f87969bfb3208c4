"""
Optbox utilities (internal helpers, carefully exposed)

Scope
- Core building blocks used across the package for consistent semantics.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support the options/arguments layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated wrappers for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr) with
    copies for containers to discourage accidental mutation of public state.

- pmatch(pattern, name)
  • Shell-style path matching where wildcards never cross a '/' separator.
  • Pattern features: '*', '?', character classes [...]/[!...]/[^...] and '\\' escapes.

Internal helpers
- _immortalize(object): recursively materializes container copies (used by mirror()).
- _resolve_segment/_compile_pattern: translate path patterns into regexes.
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

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations and isinstance checks (e.g., str | Unset).
        """
        try:
            return type(self) | other
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

    def __init_subclass__(cls, **options):
        """
        Disallow subclassing to preserve sentinel semantics.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve an internal Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or [] are preserved as-is; only Unset is replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable
    - @rename(name)
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
    Recursively copy container values, processing nested items.

    - Sequence (non-string): new list.
    - Mapping: new dict with processed values (keys preserved).
    - Set: new set.
    - Anything else: returned as-is.
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    else:
        return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" from the instance and hands back
    a copy for container types, so callers cannot mutate the backing state.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def _resolve_segment(segment):
    """
    translate a single path pattern segment into a regex snippet (slashes are not matched).
    supported in-segment metacharacters:
      *       → zero or more non-slash chars
      ?       → exactly one non-slash char
      [...]   → character class (one non-slash char)
      [!...]  → negated character class (also [^...])
      \\x      → escape x literally

    raises ValueError on a malformed pattern (dangling escape, unterminated or empty class).
    """
    length = len(segment)
    index = 0
    parts = []
    while index < length:
        char = segment[index]
        next = index + 1
        if char == '\\':
            if next >= length:
                raise ValueError("syntax error in pattern: dangling escape")
            parts.append(re.escape(segment[next]))
            index += 2
            continue
        if char == '*':
            parts.append(r'[^/]*')
        elif char == '?':
            parts.append(r'[^/]')
        elif char == '[':
            start = index + 1
            negated = ''
            if start < length and segment[start] in ('!', '^'):
                negated = '^'
                start += 1

            pivot = start
            members = []
            while pivot < length and segment[pivot] != ']':
                if segment[pivot] == '\\':
                    if pivot + 1 >= length:
                        raise ValueError("syntax error in pattern: dangling escape")
                    members.append(re.escape(segment[pivot + 1]))
                    pivot += 2
                elif segment[pivot] == '-' and members and pivot + 1 < length and segment[pivot + 1] != ']':
                    members.append('-')
                    pivot += 1
                else:
                    members.append(re.escape(segment[pivot]))
                    pivot += 1

            if pivot >= length or not members:
                raise ValueError("syntax error in pattern: bad character class")
            # a class never matches the separator, negated or not
            parts.append(f'(?!/)[{negated}{"".join(members)}]')
            index = pivot
        else:
            parts.append(re.escape(char))
        index += 1
    return ''.join(parts)


@functools.cache
def _compile_pattern(pattern):
    """
    compile a full path pattern into a regex.
    - segments are split by '/', each translated by _resolve_segment()
    - separators must match literally
    """
    try:
        return re.compile('/'.join(map(_resolve_segment, pattern.split('/'))), re.DOTALL)
    except re.error as error:
        raise ValueError(f"syntax error in pattern: {error}") from None


def pmatch(pattern, name, /):
    """
    report whether name matches the shell path pattern.

    rules
    - the whole name must match (anchored on both ends).
    - wildcards never match the '/' separator.
    - matches are case-sensitive.

    raises
    - TypeError when pattern or name is not a string.
    - ValueError when the pattern is malformed.

    examples
    - pmatch("*.txt", "a.txt")      → True
    - pmatch("*.txt", "dir/a.txt")  → False
    - pmatch("[a-c]?.go", "b1.go")  → True
    """
    if not isinstance(pattern, str) or not isinstance(name, str):
        raise TypeError("pmatch() arguments must be strings")
    return _compile_pattern(pattern).fullmatch(name) is not None


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "pmatch",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
