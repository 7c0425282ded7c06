"""
String to scalar conversion with range checking.

Scope
- DataType: the closed set of scalar kinds an option argument can be converted
  to (character variants, C integer widths, floating-point variants, boolean,
  fixed-width integers). Widths and bounds follow an LP64 platform.
- Outcome: three-way result of a conversion (success, inconvertible, out of range).
- convert(): the standalone conversion utility, also used by the option executor.

Numeric grammar
- integers follow strtol(..., 0): optional leading whitespace, an optional
  sign, then "0x"/"0X" hexadecimal, leading-zero octal or decimal digits.
  The whole string must be consumed.
- floats follow strtod: decimal with optional exponent, hexadecimal
  ("0x1.8p3"), "inf"/"infinity" and "nan", all with optional leading whitespace.

Quirk
- an OUT_OF_RANGE conversion still carries the value a C cast would have
  produced (two's-complement wrap for integers, the first character for
  character kinds). Callers decide whether to use it; the option executor
  never stores a failed conversion.
"""
import logging
import math
import re
import struct
from enum import IntEnum
from typing import Any, NamedTuple

logger = logging.getLogger(__name__)

# Largest finite single-precision value.
FLT_MAX = 3.4028234663852886e38


class DataType(IntEnum):
    STR = 0
    CHAR = 1
    SCHAR = 2
    UCHAR = 3
    SHRT = 4
    USHRT = 5
    INT = 6
    UINT = 7
    LONG = 8
    ULONG = 9
    LLONG = 10
    ULLONG = 11
    FLT = 12
    DBL = 13
    LDBL = 14
    BOOL = 15
    INT8 = 16
    UINT8 = 17
    INT16 = 18
    UINT16 = 19
    INT32 = 20
    UINT32 = 21
    INT64 = 22
    UINT64 = 23

    @property
    def width(self):
        """storage width in bytes (0 for STR)."""
        return _WIDTHS[self]

    @property
    def signed(self):
        return self in _SIGNED

    @property
    def bounds(self):
        """
        inclusive (minimum, maximum) of an integer or character kind.

        raises TypeError for STR, BOOL and floating-point kinds.
        """
        if self not in _INTEGERS and self not in (DataType.SCHAR, DataType.UCHAR):
            raise TypeError(f"data type {self.name} has no integer bounds")
        bits = self.width * 8
        if self.signed:
            return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        return 0, (1 << bits) - 1


_WIDTHS = {
    DataType.STR: 0,
    DataType.CHAR: 1,
    DataType.SCHAR: 1,
    DataType.UCHAR: 1,
    DataType.SHRT: 2,
    DataType.USHRT: 2,
    DataType.INT: 4,
    DataType.UINT: 4,
    DataType.LONG: 8,
    DataType.ULONG: 8,
    DataType.LLONG: 8,
    DataType.ULLONG: 8,
    DataType.FLT: 4,
    DataType.DBL: 8,
    DataType.LDBL: 16,
    DataType.BOOL: 1,
    DataType.INT8: 1,
    DataType.UINT8: 1,
    DataType.INT16: 2,
    DataType.UINT16: 2,
    DataType.INT32: 4,
    DataType.UINT32: 4,
    DataType.INT64: 8,
    DataType.UINT64: 8,
}

_SIGNED = frozenset({
    DataType.SCHAR,
    DataType.SHRT,
    DataType.INT,
    DataType.LONG,
    DataType.LLONG,
    DataType.INT8,
    DataType.INT16,
    DataType.INT32,
    DataType.INT64,
})

_INTEGERS = frozenset({
    DataType.SHRT,
    DataType.USHRT,
    DataType.INT,
    DataType.UINT,
    DataType.LONG,
    DataType.ULONG,
    DataType.LLONG,
    DataType.ULLONG,
    DataType.INT8,
    DataType.UINT8,
    DataType.INT16,
    DataType.UINT16,
    DataType.INT32,
    DataType.UINT32,
    DataType.INT64,
    DataType.UINT64,
})

_FLOATS = frozenset({DataType.FLT, DataType.DBL, DataType.LDBL})

_BOOLEANS = {
    "true": True,
    "false": False,
    "yes": True,
    "no": False,
    "on": True,
    "off": False,
    "enabled": True,
    "disabled": False,
}

_INTEGER = re.compile(r"[ \t\n\v\f\r]*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_FLOAT = re.compile(
    r"[ \t\n\v\f\r]*[+-]?(?:"
    r"(?P<hex>0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?[0-9]+)?)"
    r"|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|(?P<special>inf(?:inity)?|nan)"
    r")",
    re.IGNORECASE,
)


class Outcome(IntEnum):
    SUCCESS = 0
    INCONVERTIBLE = 1
    OUT_OF_RANGE = -1


class Conversion(NamedTuple):
    outcome: Outcome
    value: Any = None

    def __bool__(self):
        return self.outcome is Outcome.SUCCESS


def _wrap(value, type, /):
    bits = type.width * 8
    value &= (1 << bits) - 1
    if type.signed and value >> (bits - 1):
        value -= 1 << bits
    return value


def _integer(string, type, /):
    if not (match := _INTEGER.fullmatch(string)):
        return Conversion(Outcome.INCONVERTIBLE)

    sign, digits = match.groups()
    if digits[:2] in ("0x", "0X"):
        value = int(digits[2:], 16)
    elif digits.startswith("0") and len(digits) > 1:
        value = int(digits[1:], 8)
    else:
        value = int(digits, 10)
    if sign == "-":
        value = -value

    minimum, maximum = type.bounds
    if not minimum <= value <= maximum:
        return Conversion(Outcome.OUT_OF_RANGE, _wrap(value, type))
    return Conversion(Outcome.SUCCESS, value)


def _float(string, type, /):
    if not (match := _FLOAT.fullmatch(string)):
        return Conversion(Outcome.INCONVERTIBLE)

    literal = string.strip(" \t\n\v\f\r")
    if match["hex"]:
        sign = -1.0 if literal.startswith("-") else 1.0
        try:
            value = sign * float.fromhex(literal.lstrip("+-"))
        except OverflowError:
            value = sign * math.inf
    else:
        value = float(literal)

    if math.isinf(value) and not match["special"]:
        return Conversion(Outcome.OUT_OF_RANGE, value)
    if type is DataType.FLT:
        if math.isfinite(value) and abs(value) > FLT_MAX:
            return Conversion(Outcome.OUT_OF_RANGE, math.copysign(math.inf, value))
        value = struct.unpack("f", struct.pack("f", value))[0]
    return Conversion(Outcome.SUCCESS, value)


def _boolean(string, /):
    try:
        return Conversion(Outcome.SUCCESS, _BOOLEANS[string.lower()])
    except KeyError:
        pass
    outcome, value = _integer(string, DataType.INT)
    if outcome is Outcome.INCONVERTIBLE:
        return Conversion(outcome)
    return Conversion(outcome, bool(value))


def _character(string, type, /):
    if not string:
        return Conversion(Outcome.INCONVERTIBLE)

    outcome = Outcome.OUT_OF_RANGE if len(string) > 1 else Outcome.SUCCESS
    if type is DataType.CHAR:
        return Conversion(outcome, string[0])

    value = ord(string[0])
    minimum, maximum = type.bounds
    if not minimum <= value <= maximum:
        return Conversion(Outcome.OUT_OF_RANGE, _wrap(value, type))
    return Conversion(outcome, value)


def convert(string, type=DataType.STR, /):
    """
    convert a command-line string to the scalar kind named by `type`.

    returns
    - Conversion(SUCCESS, value) on success.
    - Conversion(INCONVERTIBLE, None) when the string is None, empty (except
      for STR), or has trailing content that is not part of the number.
    - Conversion(OUT_OF_RANGE, value) when the number does not fit the kind;
      `value` is what a C cast to that kind would have produced.

    boolean kind
    - case-insensitive true/false, yes/no, on/off, enabled/disabled.
    - anything else goes through integer conversion; nonzero means True.
    """
    if not isinstance(type, DataType):
        raise TypeError("convert() second argument must be a data-type")
    if string is None:
        return Conversion(Outcome.INCONVERTIBLE)
    if not isinstance(string, str):
        raise TypeError("convert() first argument must be a string")

    if type is DataType.STR:
        result = Conversion(Outcome.SUCCESS, string)
    elif type in _INTEGERS:
        result = _integer(string, type)
    elif type in _FLOATS:
        result = _float(string, type)
    elif type is DataType.BOOL:
        result = _boolean(string)
    else:
        result = _character(string, type)

    logger.debug("convert %r to %s: %s", string, type.name, result.outcome.name)
    return result


__all__ = (
    "DataType",
    "Outcome",
    "Conversion",
    "convert",
    "FLT_MAX",
)
