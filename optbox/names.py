"""
Optbox declaration keys.

A declaration key names an option as "long", ":long" or "short:long". The
short half is optional; the long half is mandatory for registration.

- OptionName: the (long, short) pair parsed from a key.
- parse_name(key): split a key on its first ':'.
- parse_names(keys): expand an alias/conflict/bound list (a space-separated
  string or an iterable of keys) into OptionName pairs.
- format_option_name(key): diagnostic form ("--long" or "-s/--long").
- q(*keys): join keys into one space-separated list.
"""
from collections.abc import Iterable
from typing import NamedTuple


class OptionName(NamedTuple):
    long: str
    short: str

    def __str__(self):
        if not self.long:
            return ""
        if not self.short:
            return "--" + self.long
        return "-%s/--%s" % (self.short, self.long)


def parse_name(key, /):
    """
    split a declaration key into its long and short names.

    examples
    - "test"    → OptionName(long="test", short="")
    - ":test"   → OptionName(long="test", short="")
    - "t:test"  → OptionName(long="test", short="t")
    - "t:"      → OptionName(long="", short="t")
    """
    short, colon, long = key.partition(":")
    if not colon:
        return OptionName(key, "")
    return OptionName(long, short)


def parse_names(keys, /):
    """
    expand a list of declaration keys.

    accepted shapes
    - str: keys separated by whitespace ("a b:bee").
    - Iterable[str]: one key per item.

    raises
    - TypeError: for any other shape (including iterables holding non-strings).
    """
    if isinstance(keys, str):
        return [parse_name(key) for key in keys.split()]
    if not isinstance(keys, Iterable) or isinstance(keys, bytes | bytearray):
        raise TypeError("declaration keys must be a string or an iterable of strings")
    names = []
    for key in keys:
        if not isinstance(key, str):
            raise TypeError("declaration keys must be a string or an iterable of strings")
        names.append(parse_name(key))
    return names


def parse_option_name(key, /):
    """
    return (long, short) for a declaration key.
    """
    return tuple(parse_name(key))


def format_option_name(key, /):
    """
    render a declaration key for diagnostics: "", "--long" or "-s/--long".
    """
    return str(parse_name(key))


def q(*keys):
    """
    merge several declaration keys into one list string.

    examples
    - q()                    → ""
    - q("test1", "t:test2")  → "test1 t:test2"
    """
    return " ".join(keys)


__all__ = (
    "OptionName",
    "parse_name",
    "parse_names",
    "parse_option_name",
    "format_option_name",
    "q",
)
