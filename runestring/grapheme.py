from __future__ import annotations

from typing import Any, Iterator, MutableSequence, Optional, Sequence, Tuple
from unicodedata import normalize

from regex import compile as re_compile

from .codepoints import CodepointString
from .decoder import (
    decode,
    is_joiner,
    is_modifier,
    is_whitespace,
    try_read,
    unicode_category,
)
from .seq import ImmutableSequence
from .types import (
    DEFAULT_POLICY,
    NORMAL_FORM,
    Codepoint,
    ErrorPolicy,
    InvalidMultipleBase,
    InvalidSequence,
    NullArgument,
    OutOfRange,
)

# UAX #29 extended grapheme cluster
_TEXT_ELEMENT = re_compile(r"\X")

# scalars decoded ahead of each boundary search, doubled while one cluster fills it
_WINDOW = 32


def next_text_element(text: str, position: int) -> str:
    if match := _TEXT_ELEMENT.match(text, position):
        return match.group()
    else:
        return ""


def _scalars(text: str, position: int, limit: int) -> Tuple[str, Sequence[int]]:
    """
    Decode up to `limit` scalars from `position`, with the host offset after each one.
    """

    chars: MutableSequence[str] = []
    ends: MutableSequence[int] = []
    while len(chars) < limit and (read := try_read(text, position=position)):
        cp, position = read
        chars.append(chr(cp))
        ends.append(position)
    return "".join(chars), ends


def _codepoints(seq: Any) -> Any:
    return seq.codepoints if isinstance(seq, GraphemeCluster) else seq


class GraphemeCluster(ImmutableSequence[Codepoint]):
    """
    One user perceived character: a base codepoint followed by zero or more modifiers.

    Codepoints are kept in NFC. A partial slice of a cluster is a `CodepointString`, since
    it need not start with a base. The full window is the cluster itself.
    """

    def __init__(self, text: str) -> None:
        cluster = self.from_text(text)
        self._buf, self._start, self._stop = cluster._buf, cluster._start, cluster._stop

    @classmethod
    def parse(cls, text: str, position: int) -> Optional[Tuple[GraphemeCluster, int]]:
        if text is None:
            raise NullArgument("text")
        elif not 0 <= position <= len(text):
            raise OutOfRange(f"position {position} outside of [0, {len(text)}]")

        size = _WINDOW
        while True:
            window, ends = _scalars(text, position, size)
            element = next_text_element(window, 0)
            if ends and len(element) == len(window) and ends[-1] < len(text):
                size *= 2
            else:
                break

        if not element:
            return None
        else:
            buf = tuple(decode(normalize(NORMAL_FORM, element)))
            if is_modifier(buf[0]):
                raise InvalidSequence(
                    f"text element at {position} begins with modifier U+{buf[0]:04X}"
                )
            else:
                return cls._view(buf, 0, len(buf)), ends[len(element) - 1]

    @classmethod
    def from_text(cls, text: str) -> GraphemeCluster:
        if not (parsed := cls.parse(text, 0)):
            raise InvalidSequence("a grapheme cluster holds at least one codepoint")
        else:
            cluster, position = parsed
            if position != len(text):
                raise InvalidMultipleBase(f"{text!r} holds more than one base character")
            else:
                return cluster

    @classmethod
    def empty(cls) -> GraphemeCluster:
        raise InvalidSequence("a grapheme cluster holds at least one codepoint")

    @classmethod
    def concat(cls, *seqs: Any) -> Any:
        if any(seq is None for seq in seqs):
            raise NullArgument("seqs")
        return CodepointString.concat(*map(_codepoints, seqs))

    @classmethod
    def join(cls, delimiter: Any, *seqs: Any) -> Any:
        if delimiter is None or any(seq is None for seq in seqs):
            raise NullArgument("delimiter")
        else:
            return CodepointString.join(_codepoints(delimiter), *map(_codepoints, seqs))

    def _slice(self, buf: Tuple[Any, ...], start: int, stop: int) -> Any:
        if buf is self._buf and start == self._start and stop == self._stop:
            return self
        else:
            return CodepointString._view(buf, start, stop)

    def _component(self, start: int, stop: int) -> GraphemeCluster:
        if start == self._start and stop == self._stop:
            return self
        else:
            return self._view(self._buf, start, stop)

    def __str__(self) -> str:
        return "".join(map(chr, self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    def __add__(self, other: Any) -> Any:
        if other is None:
            return self
        elif isinstance(other, GraphemeCluster):
            return GraphemeString((self, other))
        else:
            return NotImplemented

    @property
    def codepoints(self) -> CodepointString:
        return CodepointString._view(self._buf, self._start, self._stop)

    @property
    def base(self) -> Codepoint:
        return self._buf[self._start]

    @property
    def modifiers(self) -> CodepointString:
        return CodepointString._view(self._buf, self._start + 1, self._stop)

    @property
    def category(self) -> str:
        return unicode_category(self.base)

    @property
    def is_whitespace(self) -> bool:
        return is_whitespace(self.base)

    @property
    def is_compound(self) -> bool:
        return any(map(is_joiner, self))

    def components(self) -> Sequence[GraphemeCluster]:
        """
        Split after every joiner, the joiner stays at the end of the preceding component.

        A joiner followed by a modifier (e.g. CGJ between two combining marks) does not
        separate two bases, so no split happens there.
        """

        buf = self._buf

        def cont() -> Iterator[GraphemeCluster]:
            lo = self._start
            for idx in range(self._start, self._stop - 1):
                if is_joiner(buf[idx]) and not is_modifier(buf[idx + 1]):
                    yield self._component(lo, idx + 1)
                    lo = idx + 1
            yield self._component(lo, self._stop)

        return tuple(cont())

    def append_modifiers(self, modifiers: str) -> GraphemeCluster:
        if modifiers is None:
            raise NullArgument("modifiers")
        elif not modifiers:
            return self
        else:
            cps = CodepointString.from_text(modifiers, policy=ErrorPolicy.throw)
            if not all(map(is_modifier, cps)):
                raise InvalidSequence(f"{modifiers!r} holds non modifier codepoints")
            else:
                text = normalize(NORMAL_FORM, str(self) + str(cps))
                return self.from_text(text)


class GraphemeString(ImmutableSequence[GraphemeCluster]):
    @classmethod
    def _check(cls, item: Any) -> GraphemeCluster:
        if item is None:
            raise NullArgument("item")
        elif not isinstance(item, GraphemeCluster):
            raise TypeError(item)
        else:
            return item

    @classmethod
    def from_text(
        cls, text: str, policy: ErrorPolicy = DEFAULT_POLICY
    ) -> GraphemeString:
        source = str(CodepointString.from_text(text, policy=policy))

        def cont() -> Iterator[GraphemeCluster]:
            position = 0
            while parsed := GraphemeCluster.parse(source, position):
                cluster, position = parsed
                yield cluster

        buf = tuple(cont())
        return cls._view(buf, 0, len(buf))

    @classmethod
    def from_codepoints(cls, codepoints: CodepointString) -> GraphemeString:
        if codepoints is None:
            raise NullArgument("codepoints")
        return cls.from_text(str(codepoints))

    def codepoints(self) -> CodepointString:
        return CodepointString.concat(*(cluster.codepoints for cluster in self))

    def __str__(self) -> str:
        return "".join(map(str, self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}.from_text({str(self)!r})"

    def __add__(self, other: Any) -> Any:
        if isinstance(other, GraphemeCluster):
            return self.concat(self, self._view((other,), 0, 1))
        else:
            return super().__add__(other)

    def __radd__(self, other: Any) -> Any:
        if isinstance(other, GraphemeCluster):
            return self.concat(self._view((other,), 0, 1), self)
        else:
            return super().__radd__(other)
