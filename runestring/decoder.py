from typing import AbstractSet, Iterator, Optional, Tuple
from unicodedata import category

from regex import compile as re_compile

from .logging import log
from .types import (
    DEFAULT_POLICY,
    HIGH_SURROGATES,
    LOW_SURROGATES,
    SURROGATES,
    Codepoint,
    ErrorPolicy,
    InvalidSequence,
    NullArgument,
    OutOfRange,
)

REPLACEMENT_CHARACTER = Codepoint(0xFFFD)

ZERO_WIDTH_NON_JOINER = Codepoint(0x200C)
ZERO_WIDTH_JOINER = Codepoint(0x200D)
COMBINING_GRAPHEME_JOINER = Codepoint(0x034F)

JOINERS: AbstractSet[Codepoint] = frozenset(
    (ZERO_WIDTH_NON_JOINER, ZERO_WIDTH_JOINER, COMBINING_GRAPHEME_JOINER)
)

# Lm / Sk only modify when they extend the preceding cluster
# (halfwidth kana voicing marks, emoji skin tones), not U+30FC, U+3005 or `^`
_LETTER_MODIFIERS = frozenset(("Lm", "Sk"))
_EXTENDING = re_compile(
    r"[\p{Grapheme_Cluster_Break=Extend}\p{Grapheme_Cluster_Break=SpacingMark}]"
)


def unicode_category(cp: int) -> str:
    return category(chr(cp))


def is_modifier(cp: int) -> bool:
    cat = unicode_category(cp)
    if cat.startswith("M"):
        return True
    elif cat in _LETTER_MODIFIERS:
        return bool(_EXTENDING.match(chr(cp)))
    else:
        return False


def is_joiner(cp: int) -> bool:
    return cp in JOINERS


def is_whitespace(cp: int) -> bool:
    return chr(cp).isspace()


def _read_unit(text: str, position: int) -> Optional[Tuple[Codepoint, int]]:
    unit = ord(text[position])
    if unit not in SURROGATES:
        return Codepoint(unit), 1
    elif unit in HIGH_SURROGATES and position + 1 < len(text):
        low = ord(text[position + 1])
        if low in LOW_SURROGATES:
            cp = 0x10000 + ((unit - 0xD800) << 10) + (low - 0xDC00)
            return Codepoint(cp), 2
        else:
            return None
    else:
        return None


def try_read(
    text: str, position: int, policy: ErrorPolicy = DEFAULT_POLICY
) -> Optional[Tuple[Codepoint, int]]:
    """
    Read the codepoint starting at `position`.

    Returns `(codepoint, new_position)`, or `None` once `position` reaches the end of `text`.
    A high surrogate followed by a low surrogate is read as one codepoint.
    Unpaired surrogates are handled according to `policy`.
    """

    if text is None:
        raise NullArgument("text")
    elif not 0 <= position <= len(text):
        raise OutOfRange(f"position {position} outside of [0, {len(text)}]")

    while position < len(text):
        if read := _read_unit(text, position=position):
            cp, consumed = read
            return cp, position + consumed
        elif policy is ErrorPolicy.replace:
            log.debug("replacing unpaired surrogate at %d", position)
            return REPLACEMENT_CHARACTER, position + 1
        elif policy is ErrorPolicy.omit:
            log.debug("omitting unpaired surrogate at %d", position)
            position += 1
        elif policy is ErrorPolicy.throw:
            raise InvalidSequence(
                f"unpaired surrogate U+{ord(text[position]):04X} at {position}"
            )
        else:
            assert False, policy

    return None


def decode(text: str, policy: ErrorPolicy = DEFAULT_POLICY) -> Iterator[Codepoint]:
    position = 0
    while read := try_read(text, position=position, policy=policy):
        cp, position = read
        yield cp
