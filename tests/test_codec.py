import pytest
from msgpack import ExtType, packb, unpackb

from runestring.codec import CODEPOINT_STRING_CODE, GRAPHEME_STRING_CODE, pack, unpack
from runestring.codepoints import CodepointString
from runestring.grapheme import GraphemeString
from runestring.types import InvalidSequence


def _ext(data: bytes) -> ExtType:
    ext = unpackb(data)
    assert isinstance(ext, ExtType)
    return ext


def test_codepoint_string() -> None:
    cps = CodepointString.from_text("a\U0001F47Db")
    data = pack(cps)
    assert _ext(data).code == CODEPOINT_STRING_CODE
    assert unpack(data) == cps


def test_grapheme_string_keeps_clusters() -> None:
    # two regional indicators packed apart must not merge into one flag
    us = GraphemeString.from_text("\U0001F1FA") + GraphemeString.from_text("\U0001F1F8")
    assert len(us) == 2
    data = pack(us)
    assert _ext(data).code == GRAPHEME_STRING_CODE
    again = unpack(data)
    assert isinstance(again, GraphemeString)
    assert again == us
    assert len(GraphemeString.from_text(str(us))) == 1


def test_nested() -> None:
    cps = CodepointString.from_text("x")
    graphemes = GraphemeString.from_text("ye\u0301")
    assert unpack(pack({"a": [cps, graphemes], "b": 1})) == {
        "a": (cps, graphemes),
        "b": 1,
    }


def test_unknown_ext() -> None:
    with pytest.raises(InvalidSequence):
        unpack(packb(ExtType(0x7F, b"")))


@pytest.mark.parametrize("payload", [1, "ab", (1, 2), ("a", None)])
def test_malformed_grapheme_payload(payload: object) -> None:
    with pytest.raises(InvalidSequence):
        unpack(packb(ExtType(GRAPHEME_STRING_CODE, packb(payload))))


def test_unpackable() -> None:
    with pytest.raises(TypeError):
        pack(object())
