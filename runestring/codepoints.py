from __future__ import annotations

from typing import Any, Iterable, Literal, Sequence

from .decoder import decode, is_whitespace
from .seq import ImmutableSequence
from .types import DEFAULT_POLICY, Codepoint, ErrorPolicy, NullArgument, codepoint

Encoding = Literal["UTF-8", "UTF-16-LE", "UTF-16-BE", "UTF-32-LE", "UTF-32-BE"]


def _utf8_length(cp: int) -> int:
    if cp < 0x80:
        return 1
    elif cp < 0x800:
        return 2
    elif cp < 0x10000:
        return 3
    else:
        return 4


class CodepointString(ImmutableSequence[Codepoint]):
    @classmethod
    def _check(cls, item: Any) -> Codepoint:
        return codepoint(item)

    @classmethod
    def from_text(
        cls, text: str, policy: ErrorPolicy = DEFAULT_POLICY
    ) -> CodepointString:
        if text is None:
            raise NullArgument("text")
        buf = tuple(decode(text, policy=policy))
        return cls._view(buf, 0, len(buf))

    def __str__(self) -> str:
        return "".join(map(chr, self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}.from_text({str(self)!r})"

    @property
    def utf8_length(self) -> int:
        return sum(map(_utf8_length, self))

    @property
    def utf16_length(self) -> int:
        return sum(2 if cp > 0xFFFF else 1 for cp in self)

    @property
    def utf32_length(self) -> int:
        return len(self)

    def encode(self, encoding: Encoding = "UTF-8") -> bytes:
        # never holds surrogates, strict encoding cannot fail
        return str(self).encode(encoding)

    def utf16_units(self) -> Sequence[int]:
        def cont() -> Iterable[int]:
            for cp in self:
                if cp > 0xFFFF:
                    offset = cp - 0x10000
                    yield 0xD800 + (offset >> 10)
                    yield 0xDC00 + (offset & 0x3FF)
                else:
                    yield cp

        return tuple(cont())

    def utf32_units(self) -> Sequence[int]:
        return tuple(self)

    def trim_start(self) -> CodepointString:
        for idx, cp in enumerate(self):
            if not is_whitespace(cp):
                return self.substring(idx)
        else:
            return self.empty()

    def trim_end(self) -> CodepointString:
        for idx, cp in zip(reversed(range(len(self))), reversed(self)):
            if not is_whitespace(cp):
                return self.substring(0, idx + 1)
        else:
            return self.empty()

    def trim(self) -> CodepointString:
        return self.trim_start().trim_end()
