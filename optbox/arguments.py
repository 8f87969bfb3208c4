r"""
Optbox positional arguments.

Overview
- Argument: one positional token. A str subclass with typed coercions, POSIX
  path shorthands, case shortcuts and a typed comparison.
- Arguments: the ordered, immutable sequence of positional tokens returned by
  Options.parse(). Index helpers never raise; glob filtering drops tokens that
  do not match (or cannot be matched).

Coercions
- int()/int64()/uint(): strict base-10 integers ([+-]?digits) within the
  signed (int, int64) or unsigned (uint) 64-bit range.
- float(): strict float (no surrounding whitespace, no digit separators).
- bool(): true|yes|y|1 → True, false|no|n|0|"" → False (case-insensitive).
All failures raise ValueError.

Quick example:
    >>> arguments = Arguments("A.txt", "b.png", "c.txt")
    >>> arguments.filter("*.txt").strings()
    ['A.txt', 'c.txt']
    >>> arguments.get(9)
    ''
    >>> Argument("yes").bool()
    True
"""
import builtins
import posixpath
import re

from .utils import pmatch
from .values import parse_float, parse_int

_UNSIGNED = re.compile(r"\+?\d+", re.ASCII)

_UINT64_MAX = (1 << 64) - 1

_TRUE = frozenset({"true", "yes", "y", "1"})
_FALSE = frozenset({"false", "no", "n", "0", ""})


class Argument(str):
    """
    Positional token with typed accessors.

    Methods returning text return Argument again, so calls chain:
        Argument("/tmp/Data.TXT").base().to_lower()  # 'data.txt'
    """

    __slots__ = ()

    def __repr__(self):
        return f"Argument({str.__repr__(self)})"

    def string(self):
        return builtins.str(self)

    def to_lower(self):
        return Argument(builtins.str.lower(self))

    def to_upper(self):
        return Argument(builtins.str.upper(self))

    def int(self):
        return parse_int(builtins.str(self))

    def int64(self):
        return parse_int(builtins.str(self))

    def uint(self):
        if not _UNSIGNED.fullmatch(self):
            raise ValueError("invalid unsigned integer value %r" % builtins.str(self))
        number = builtins.int(self)
        if number > _UINT64_MAX:
            raise ValueError("unsigned integer value %r out of range" % builtins.str(self))
        return number

    def float(self):
        return parse_float(builtins.str(self))

    def bool(self):
        lowered = builtins.str.lower(self)
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError("Unsupported boolean value %r" % builtins.str(self))

    def is_(self, value, /):
        """
        compare after coercing the argument to the type of `value`.

        - str → plain comparison; bool → bool(); int → int(); float → float().
        - a failed coercion, or any other type, compares unequal.
        """
        try:
            if isinstance(value, builtins.str):
                return builtins.str(self) == value
            if isinstance(value, builtins.bool):
                return self.bool() == value
            if isinstance(value, builtins.int):
                return self.int() == value
            if isinstance(value, builtins.float):
                return self.float() == value
        except ValueError:
            return False
        return False

    def base(self):
        """
        last element of the path (POSIX rules: "" → ".", trailing slashes dropped).
        """
        path = builtins.str(self)
        if not path:
            return Argument(".")
        path = path.rstrip("/")
        if not path:
            return Argument("/")
        return Argument(posixpath.basename(path))

    def clean(self):
        """
        shortest equivalent path ("" → ".").
        """
        path = builtins.str(self)
        if not path:
            return Argument(".")
        cleaned = posixpath.normpath(path)
        # normpath keeps a leading "//"; lexical cleaning collapses it
        if cleaned.startswith("//"):
            cleaned = "/" + cleaned.lstrip("/")
        return Argument(cleaned)

    def dir(self):
        """
        all but the last element of the path, cleaned.
        """
        head, _ = posixpath.split(builtins.str(self))
        return Argument(head).clean()

    def ext(self):
        """
        file name extension of the last element, dot included ("" when absent).
        """
        path = builtins.str(self)
        for index in range(len(path) - 1, -1, -1):
            if path[index] == "/":
                break
            if path[index] == ".":
                return Argument(path[index:])
        return Argument("")

    def is_abs(self):
        return self.startswith("/")

    def match(self, pattern, /):
        """
        shell-glob match of the whole argument; raises ValueError on a malformed pattern.
        """
        return pmatch(pattern, builtins.str(self))


class Arguments(tuple):
    """
    Immutable ordered view over positional arguments.

    Items are converted to Argument on construction; `append`/`unshift`
    return new views instead of mutating this one.
    """

    __slots__ = ()

    def __new__(cls, *items):
        return super().__new__(cls, (Argument(item) for item in items))

    def __getnewargs__(self):
        return tuple(self)

    def __repr__(self):
        return f"Arguments({', '.join(map(repr, map(str, self)))})"

    def __add__(self, other):
        return Arguments(*self, *other)

    def has(self, index, /):
        """
        True if an argument exists at the index and is not empty.
        """
        return 0 <= index < len(self) and self[index] != ""

    def get(self, index, /):
        """
        argument at the index, or an empty Argument when out of range.
        """
        if not 0 <= index < len(self):
            return Argument("")
        return self[index]

    def last(self):
        if not self:
            return Argument("")
        return self[-1]

    def append(self, *items):
        return Arguments(*self, *items)

    def unshift(self, *items):
        return Arguments(*items, *self)

    def strings(self):
        return [str(argument) for argument in self]

    def filter(self, pattern, /):
        """
        arguments matching the glob pattern, in order.

        tokens are dropped when they do not match or when the pattern is malformed.
        """
        try:
            return Arguments(*(argument for argument in self if argument.match(pattern)))
        except ValueError:
            return Arguments()


def new_arguments(*items):
    return Arguments(*items)


__all__ = (
    "Argument",
    "Arguments",
    "new_arguments",
)
