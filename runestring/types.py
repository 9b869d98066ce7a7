from enum import Enum, unique
from typing import NewType

Codepoint = NewType("Codepoint", int)

MAX_CODEPOINT = 0x10FFFF
SURROGATES = range(0xD800, 0xE000)
HIGH_SURROGATES = range(0xD800, 0xDC00)
LOW_SURROGATES = range(0xDC00, 0xE000)

NORMAL_FORM = "NFC"


class RuneError(Exception):
    ...


class OutOfRange(RuneError, IndexError):
    ...


class InvalidSequence(RuneError, ValueError):
    ...


class InvalidMultipleBase(RuneError, ValueError):
    ...


class NullArgument(RuneError, TypeError):
    ...


@unique
class ErrorPolicy(Enum):
    replace = "replace"
    throw = "throw"
    omit = "omit"


DEFAULT_POLICY = ErrorPolicy.replace


def codepoint(value: int) -> Codepoint:
    if value is None:
        raise NullArgument("value")
    elif not isinstance(value, int):
        raise TypeError(value)
    elif not 0 <= value <= MAX_CODEPOINT:
        raise OutOfRange(f"{value:#x} is not a Unicode code point")
    elif value in SURROGATES:
        raise InvalidSequence(f"U+{value:04X} is a surrogate, not a scalar value")
    else:
        return Codepoint(value)
