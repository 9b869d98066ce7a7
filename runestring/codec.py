from typing import Any, Callable, Mapping

from msgpack import ExtType, packb, unpackb

from .codepoints import CodepointString
from .grapheme import GraphemeCluster, GraphemeString
from .logging import log
from .types import InvalidSequence

CODEPOINT_STRING_CODE = 0x10
GRAPHEME_STRING_CODE = 0x11

# scalar values only, so fixed width little endian is lossless
_UTF32 = "UTF-32-LE"


def _unpack_codepoints(data: bytes) -> CodepointString:
    return CodepointString.from_text(data.decode(_UTF32))


def _unpack_graphemes(data: bytes) -> GraphemeString:
    clusters = unpackb(data, use_list=False, raw=False)
    if not isinstance(clusters, tuple) or not all(isinstance(c, str) for c in clusters):
        raise InvalidSequence(f"expected an array of cluster texts - {clusters!r}")
    else:
        return GraphemeString(map(GraphemeCluster.from_text, clusters))


_EXT_HOOKS: Mapping[int, Callable[[bytes], Any]] = {
    CODEPOINT_STRING_CODE: _unpack_codepoints,
    GRAPHEME_STRING_CODE: _unpack_graphemes,
}


def _pack(val: Any) -> ExtType:
    if isinstance(val, CodepointString):
        return ExtType(CODEPOINT_STRING_CODE, val.encode(_UTF32))
    elif isinstance(val, GraphemeString):
        clusters = tuple(map(str, val))
        return ExtType(GRAPHEME_STRING_CODE, packb(clusters))
    else:
        raise TypeError(val)


def _ext_hook(code: int, data: bytes) -> Any:
    if hook := _EXT_HOOKS.get(code):
        return hook(data)
    else:
        log.warning("%s", f"Unexpected ext type - {code}")
        raise InvalidSequence((code, data))


def pack(val: Any) -> bytes:
    return packb(val, default=_pack)


def unpack(data: bytes) -> Any:
    return unpackb(data, ext_hook=_ext_hook, use_list=False, raw=False)
