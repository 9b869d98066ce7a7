from typing import MutableSequence, Sequence

import pytest

from runestring.decoder import decode, is_joiner, is_modifier, try_read
from runestring.types import (
    ErrorPolicy,
    InvalidSequence,
    NullArgument,
    OutOfRange,
    codepoint,
)


def _read_all(text: str, policy: ErrorPolicy) -> Sequence[int]:
    position = 0
    acc: MutableSequence[int] = []
    while read := try_read(text, position, policy):
        cp, position = read
        acc.append(cp)
    return acc


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", []),
        ("a", [0x61]),
        ("abcd", [0x61, 0x62, 0x63, 0x64]),
        ("\ud83d\udc7d", [0x1F47D]),
        ("\U0001F47D", [0x1F47D]),
        ("a\ud83d\udc7db", [0x61, 0x1F47D, 0x62]),
        ("a\u0303\u0306", [0x61, 0x0303, 0x0306]),
        ("a\u0306\u0303", [0x61, 0x0306, 0x0303]),
    ],
)
def test_read_valid(text: str, expected: Sequence[int]) -> None:
    for policy in ErrorPolicy:
        assert _read_all(text, policy) == expected


def test_advances_by_units_consumed() -> None:
    assert try_read("\ud83d\udc7dx", 0) == (0x1F47D, 2)
    assert try_read("\U0001F47Dx", 0) == (0x1F47D, 1)
    assert try_read("ab", 1) == (0x62, 2)


def test_end_of_input() -> None:
    assert try_read("ab", 2) is None
    assert try_read("", 0) is None


@pytest.mark.parametrize("position", [-1, 3])
def test_out_of_range(position: int) -> None:
    with pytest.raises(OutOfRange):
        try_read("ab", position)


def test_null_text() -> None:
    with pytest.raises(NullArgument):
        try_read(None, 0)  # type: ignore


def test_unpaired_replace() -> None:
    assert _read_all("\ud83d", ErrorPolicy.replace) == [0xFFFD]
    assert _read_all("a\ud83db", ErrorPolicy.replace) == [0x61, 0xFFFD, 0x62]
    assert _read_all("\udc7d\ud83d", ErrorPolicy.replace) == [0xFFFD, 0xFFFD]


def test_unpaired_throw() -> None:
    with pytest.raises(InvalidSequence):
        try_read("\ud83d", 0, ErrorPolicy.throw)
    assert try_read("a\ud83db", 0, ErrorPolicy.throw) == (0x61, 1)
    with pytest.raises(InvalidSequence):
        try_read("a\ud83db", 1, ErrorPolicy.throw)


def test_unpaired_omit() -> None:
    assert _read_all("\ud83d", ErrorPolicy.omit) == []
    assert _read_all("\ud83d\ud83d\ud83d", ErrorPolicy.omit) == []
    assert _read_all("a\ud83db", ErrorPolicy.omit) == [0x61, 0x62]
    assert try_read("\U0001F400\udc00x", 1, ErrorPolicy.omit) == (0x78, 3)


def test_decode_is_lazy_under_throw() -> None:
    it = decode("a\ud83d", policy=ErrorPolicy.throw)
    assert next(it) == 0x61
    with pytest.raises(InvalidSequence):
        next(it)


def test_default_policy_replaces() -> None:
    assert list(decode("x\udfff")) == [0x78, 0xFFFD]


@pytest.mark.parametrize(
    "cp, expected",
    [
        (0x0301, True),  # Mn
        (0x0903, True),  # Mc
        (0x20DD, True),  # Me
        (0xFF9E, True),  # Lm, halfwidth voiced sound mark
        (0x1F3FD, True),  # Sk, skin tone
        (0x02B0, False),  # Lm, spacing
        (0x30FC, False),  # Lm, prolonged sound mark
        (0x3005, False),  # Lm, iteration mark
        (0x5E, False),  # Sk
        (0x60, False),  # Sk
        (0x61, False),
        (0x200D, False),
        (0x1F469, False),
    ],
)
def test_is_modifier(cp: int, expected: bool) -> None:
    assert is_modifier(cp) is expected


def test_is_joiner() -> None:
    assert all(map(is_joiner, (0x200C, 0x200D, 0x034F)))
    assert not is_joiner(0x61)


def test_codepoint_validation() -> None:
    assert codepoint(0x10FFFF) == 0x10FFFF
    with pytest.raises(OutOfRange):
        codepoint(0x110000)
    with pytest.raises(OutOfRange):
        codepoint(-1)
    with pytest.raises(InvalidSequence):
        codepoint(0xD800)
    with pytest.raises(NullArgument):
        codepoint(None)  # type: ignore
