r"""
Optbox option descriptors and typed values.

Overview
- OptionType: the type tag of an option (STRING, INT, BOOL, FLOAT, MIXED).
- V: the descriptor registered against one or more option names. It holds the
  declared metadata (type, bounds, aliases, constraints, flags) and the current
  value, plus a private `set` latch flipped only by command-line tokens.

Metadata (sanitized on construction)
- type: Unset | OptionType. Unset means "infer from the default value" (or STRING
  when there is none); inference happens when parsing starts.
- value: the default. Not validated here; the validator reports defaults of an
  unsupported type after parsing.
- min/max: numeric clamp bounds (int or float, never bool); active iff min != max.
- alias/conflicts/bound: None, a space-separated string of declaration keys, or an
  iterable of them. Their shape is checked where they are used (registration and
  validation), so a bad shape surfaces as a regular fault.
- mergeable/required: bool.

Assignment (see assign())
- STRING/MIXED: replace, or join with the merge symbol when set and mergeable.
- BOOL: any occurrence stores True.
- INT/FLOAT: strict parsing; merge sums; the stored value is clamped to [min, max].
- MIXED without value: stores True.

Readers (see read_s/read_i/read_b/read_f)
- Total over the stored value: any value can be read as any type.
"""
import builtins
import decimal
import math
import re
from enum import IntEnum

from .faults import ErrorCode, OptionError
from .utils import *


class OptionType(IntEnum):
    """
    option type tags.

    the numeric values are stable and follow the historical ordering.
    """
    STRING = 0
    INT    = 1
    BOOL   = 2
    FLOAT  = 3
    MIXED  = 4


STRING = OptionType.STRING
INT = OptionType.INT
BOOL = OptionType.BOOL
FLOAT = OptionType.FLOAT
MIXED = OptionType.MIXED

_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


class DescriptorType(type):
    """
    Metaclass that gives descriptors stable, readable representations.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private backing field ("_" + name).
    - Provide __repr__/__rich_repr__ built from those properties.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return "%s(%s)" % (type(self).__name__, ", ".join("%s=%r" % pair for pair in self.__rich_repr__()))
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _is_number(object):
    return isinstance(object, int | float) and not isinstance(object, bool)


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize descriptor metadata in place.

    Raises
    - TypeError: when type is not Unset/OptionType-compatible, bounds are not
      numbers, or flags are not booleans.
    - ValueError: when type is an integer outside the known tags, or a bound is
      infinite or NaN.
    """
    type = metadata["type"]
    if type is not Unset:
        if not isinstance(type, int) or isinstance(type, bool):
            raise TypeError(f"{cls.__name__} 'type' must be an OptionType")
        try:
            metadata["type"] = OptionType(type)
        except ValueError:
            raise ValueError(f"{cls.__name__} 'type' {type!r} is not supported") from None

    for name in ("min", "max"):
        if not _is_number(metadata[name]):
            raise TypeError(f"{cls.__name__} {name!r} must be a number")
        if isinstance(metadata[name], float) and not math.isfinite(metadata[name]):
            raise ValueError(f"{cls.__name__} {name!r} must be a finite number")

    for name in ("mergeable", "required"):
        if not isinstance(metadata[name], bool):
            raise TypeError(f"{cls.__name__} {name!r} must be a boolean")


class V(metaclass=DescriptorType):
    """
    Option descriptor: declared metadata plus the current value.

    A descriptor is registered once (possibly under several names through its
    aliases), mutated only while parsing, and read through the typed readers of
    the registry that owns it. Defaults never flip the `set` latch.
    """

    __introspectable__ = (
        "type",
        "value",
        "min",
        "max",
        "alias",
        "conflicts",
        "bound",
        "mergeable",
        "required",
    )

    def __init__(
            self,
            type=Unset,
            value=None,
            *,
            min=0,
            max=0,
            alias=None,
            conflicts=None,
            bound=None,
            mergeable=False,
            required=False
    ):
        metadata = {
            "type": type,
            "value": value,
            "min": min,
            "max": max,
            "alias": alias,
            "conflicts": conflicts,
            "bound": bound,
            "mergeable": mergeable,
            "required": required,
        }
        _sanitize_metadata(builtins.type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

        self._set = False

    @property
    def is_set(self):
        """
        True once a command-line token assigned the value.
        """
        return self._set

    def prepare(self):
        """
        Resolve the effective type before parsing starts.

        - Unset type with a default → inferred from the default.
        - Unset type without a default → STRING.
        - FLOAT with an int default → the default is widened to float.
        """
        if self._type is Unset:
            self._type = guess_type(self._value)
        if self._type is FLOAT and _is_number(self._value):
            self._value = float(self._value)
        return self._type

    @property
    def effective_type(self):
        return coalesce(self._type, guess_type(self._value))

    def supported(self):
        """
        Report whether the stored value is of a supported type matching the declared one.
        """
        value = self._value
        if value is None:
            return True
        if not isinstance(value, str | bool | int | float):
            return False
        match self.effective_type:
            case OptionType.STRING:
                return isinstance(value, str)
            case OptionType.MIXED:
                return isinstance(value, str) or value is True
            case OptionType.BOOL:
                return isinstance(value, bool)
            case OptionType.INT:
                return isinstance(value, int) and not isinstance(value, bool)
            case OptionType.FLOAT:
                return isinstance(value, float)
        return False

    def assign(self, name, value, symbol, /):
        """
        Store a raw command-line value.

        Parameters
        - name: long name used to cite the option in faults.
        - value: raw token text ("" for a bare boolean flag).
        - symbol: merge symbol joining mergeable string values.

        Raises
        - OptionError(WRONG_FORMAT) when a numeric value does not parse.
        """
        match self.effective_type:
            case OptionType.STRING | OptionType.MIXED:
                if self._set and self._mergeable and isinstance(self._value, str):
                    self._value = self._value + symbol + value
                else:
                    self._value = value
            case OptionType.BOOL:
                self._value = True
            case OptionType.INT:
                try:
                    number = parse_int(value)
                except ValueError:
                    raise OptionError("--" + name, "", ErrorCode.WRONG_FORMAT) from None
                self._value = self._merge(number, int(self._min), int(self._max))
            case OptionType.FLOAT:
                try:
                    number = parse_float(value)
                except ValueError:
                    raise OptionError("--" + name, "", ErrorCode.WRONG_FORMAT) from None
                self._value = self._merge(number, float(self._min), float(self._max))
        self._set = True

    def assign_flag(self):
        """
        Resolve a MIXED option given without a value: it becomes True.
        """
        self._value = True
        self._set = True

    def _merge(self, number, min, max):
        if self._set and self._mergeable and _is_number(self._value):
            number = self._value + number
        if min != max:
            number = between(number, min, max)
        return number


def guess_type(value, /):
    """
    Infer an OptionType from a default value (bool is checked before int).
    """
    if isinstance(value, bool):
        return OptionType.BOOL
    if isinstance(value, int):
        return OptionType.INT
    if isinstance(value, float):
        return OptionType.FLOAT
    return OptionType.STRING


def between(value, min, max, /):
    if value < min:
        return min
    if value > max:
        return max
    return value


def parse_int(text, /):
    """
    Parse a base-10 integer strictly: ASCII digits with an optional sign, within the signed 64-bit range.
    """
    if not _INTEGER.fullmatch(text):
        raise ValueError("invalid literal for int() with base 10: %r" % text)
    number = int(text)
    if not INT64_MIN <= number <= INT64_MAX:
        raise ValueError("integer value %r out of range" % text)
    return number


def parse_float(text, /):
    """
    Parse a float strictly: no surrounding whitespace, no digit separators.
    """
    if not text or text != text.strip() or "_" in text:
        raise ValueError("could not convert string to float: %r" % text)
    return float(text)


def format_float(value, /):
    """
    Shortest round-trip decimal form without exponent ("100.5", "0", "100000000000000000000").
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(decimal.Decimal(repr(value)).normalize(), "f")


def read_s(value, /):
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_float(value)
    if isinstance(value, str):
        return value
    return ""


def read_i(value, /):
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        try:
            return parse_int(value)
        except ValueError:
            return 0
    return 0


def read_b(value, /):
    if isinstance(value, bool):
        return value
    if isinstance(value, int | float):
        return value > 0
    if isinstance(value, str):
        return value != ""
    return False


def read_f(value, /):
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return parse_float(value)
        except ValueError:
            return 0.0
    return 0.0


__all__ = (
    "OptionType",
    "STRING",
    "INT",
    "BOOL",
    "FLOAT",
    "MIXED",
    "V",
    "guess_type",
)

# Remove the internal metaclass from the module namespace; not part of the public API.
del DescriptorType
