from __future__ import annotations

from functools import cached_property
from itertools import chain
from operator import index as as_index
from typing import (
    Any,
    Iterable,
    Iterator,
    MutableSequence,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
    Union,
    overload,
)

from .types import NullArgument, OutOfRange

_T = TypeVar("_T")
_S = TypeVar("_S", bound="ImmutableSequence[Any]")


def _cmp(lhs: Any, rhs: Any) -> int:
    if lhs < rhs:
        return -1
    elif rhs < lhs:
        return 1
    else:
        return 0


def compare(
    lhs: Optional[ImmutableSequence[Any]], rhs: Optional[ImmutableSequence[Any]]
) -> int:
    """
    Three way comparison, `None` sorts before everything else.
    """

    if lhs is None:
        return 0 if rhs is None else -1
    elif rhs is None:
        return 1
    else:
        return lhs.compare_to(rhs)


class ImmutableSequence(Sequence[_T]):
    """
    A `[start, stop)` window over a shared, never mutated buffer.

    Slices are views over the same buffer. Concatenation copies each operand once into a
    new buffer, operands are left untouched.
    """

    _buf: Tuple[Any, ...]
    _start: int
    _stop: int

    def __init__(self, items: Iterable[_T] = ()) -> None:
        if items is None:
            raise NullArgument("items")
        buf = tuple(map(self._check, items))
        self._buf, self._start, self._stop = buf, 0, len(buf)

    @classmethod
    def _check(cls, item: Any) -> Any:
        return item

    @classmethod
    def _view(cls: Type[_S], buf: Tuple[Any, ...], start: int, stop: int) -> _S:
        assert 0 <= start <= stop <= len(buf)
        seq = cls.__new__(cls)
        seq._buf, seq._start, seq._stop = buf, start, stop
        return seq

    def _slice(self, buf: Tuple[Any, ...], start: int, stop: int) -> Any:
        if buf is self._buf and start == self._start and stop == self._stop:
            return self
        else:
            return self._view(buf, start, stop)

    def _window(self, start: int, length: Optional[int]) -> range:
        size = len(self) - start if length is None else length
        if not 0 <= start <= len(self):
            raise OutOfRange(f"start {start} outside of [0, {len(self)}]")
        elif not 0 <= size <= len(self) - start:
            raise OutOfRange(f"length {size} overruns sequence from {start}")
        else:
            return range(start, start + size)

    @classmethod
    def empty(cls: Type[_S]) -> _S:
        return cls._view((), 0, 0)

    def __len__(self) -> int:
        return self._stop - self._start

    def __iter__(self) -> Iterator[_T]:
        buf = self._buf
        return (buf[idx] for idx in range(self._start, self._stop))

    def __reversed__(self) -> Iterator[_T]:
        buf = self._buf
        return (buf[idx] for idx in reversed(range(self._start, self._stop)))

    def __contains__(self, item: Any) -> bool:
        return self.index_of(item) != -1

    @overload
    def __getitem__(self, index: int) -> _T:
        ...

    @overload
    def __getitem__(self, index: slice) -> ImmutableSequence[_T]:
        ...

    def __getitem__(self, index: Union[int, slice]) -> Any:
        if isinstance(index, slice):
            start, stop, step = index.indices(len(self))
            if step == 1:
                stop = max(start, stop)
                return self._slice(self._buf, self._start + start, self._start + stop)
            else:
                buf = tuple(self._buf[self._start + idx] for idx in range(start, stop, step))
                return self._slice(buf, 0, len(buf))
        else:
            idx = as_index(index)
            pos = idx + len(self) if idx < 0 else idx
            if not 0 <= pos < len(self):
                raise OutOfRange(f"index {idx} outside of sequence of length {len(self)}")
            else:
                return self._buf[self._start + pos]

    def substring(self, start: int, length: Optional[int] = None) -> Any:
        window = self._window(start, length)
        return self._slice(
            self._buf, self._start + window.start, self._start + window.stop
        )

    def __eq__(self, other: Any) -> bool:
        if self is other:
            return True
        elif type(other) is type(self):
            return len(self) == len(other) and all(
                lhs == rhs for lhs, rhs in zip(self, other)
            )
        else:
            return False

    @cached_property
    def _hash(self) -> int:
        return hash(tuple(self))

    def __hash__(self) -> int:
        return self._hash

    def compare_to(self, other: Optional[ImmutableSequence[Any]]) -> int:
        if other is None:
            return 1
        elif self is other:
            return 0
        else:
            for lhs, rhs in zip(self, other):
                if order := _cmp(lhs, rhs):
                    return order
            # common prefix, the shorter one sorts first
            return _cmp(len(self), len(other))

    def _order(self, other: Any) -> Optional[int]:
        if other is None:
            return 1
        elif type(other) is type(self):
            return self.compare_to(other)
        else:
            return None

    def __lt__(self, other: Any) -> bool:
        order = self._order(other)
        return NotImplemented if order is None else order < 0

    def __le__(self, other: Any) -> bool:
        order = self._order(other)
        return NotImplemented if order is None else order <= 0

    def __gt__(self, other: Any) -> bool:
        order = self._order(other)
        return NotImplemented if order is None else order > 0

    def __ge__(self, other: Any) -> bool:
        order = self._order(other)
        return NotImplemented if order is None else order >= 0

    def __add__(self, other: Any) -> Any:
        if other is None:
            return self
        elif isinstance(other, type(self)):
            return type(self).concat(self, other)
        else:
            return NotImplemented

    def __radd__(self, other: Any) -> Any:
        if other is None:
            return self
        else:
            return NotImplemented

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r})"

    @classmethod
    def _elements(cls, seq: Iterable[Any]) -> Iterable[Any]:
        return seq if isinstance(seq, cls) else map(cls._check, seq)

    @classmethod
    def concat(cls: Type[_S], *seqs: Iterable[Any]) -> _S:
        if any(seq is None for seq in seqs):
            raise NullArgument("seqs")
        elif not seqs:
            return cls.empty()
        elif len(seqs) == 1 and isinstance(seqs[0], cls):
            return seqs[0]
        else:
            buf = tuple(chain.from_iterable(map(cls._elements, seqs)))
            return cls._view(buf, 0, len(buf))

    @classmethod
    def join(cls: Type[_S], delimiter: Any, *seqs: Iterable[Any]) -> _S:
        """
        `delimiter` is either a single element or an instance of `cls`.
        """

        if delimiter is None or any(seq is None for seq in seqs):
            raise NullArgument("delimiter")
        elif not seqs:
            return cls.empty()
        elif len(seqs) == 1 and isinstance(seqs[0], cls):
            return seqs[0]
        else:
            sep = (
                tuple(delimiter)
                if isinstance(delimiter, cls)
                else (cls._check(delimiter),)
            )

            def cont() -> Iterator[Any]:
                for idx, seq in enumerate(seqs):
                    if idx:
                        yield from sep
                    yield from cls._elements(seq)

            buf = tuple(cont())
            return cls._view(buf, 0, len(buf))

    def count(self, item: Any) -> int:
        return sum(1 for x in self if x == item)

    def index_of(self, item: Any, start: int = 0, length: Optional[int] = None) -> int:
        buf, offset = self._buf, self._start
        for idx in self._window(start, length):
            if buf[offset + idx] == item:
                return idx
        else:
            return -1

    def index_of_any(
        self, items: Iterable[Any], start: int = 0, length: Optional[int] = None
    ) -> int:
        if items is None:
            raise NullArgument("items")
        candidates = frozenset(items)
        buf, offset = self._buf, self._start
        for idx in self._window(start, length):
            if buf[offset + idx] in candidates:
                return idx
        else:
            return -1

    def last_index_of(self, item: Any) -> int:
        for idx, x in zip(reversed(range(len(self))), reversed(self)):
            if x == item:
                return idx
        else:
            return -1

    def find(
        self, sub: Iterable[Any], start: int = 0, length: Optional[int] = None
    ) -> int:
        if sub is None:
            raise NullArgument("sub")
        window = self._window(start, length)
        needle = tuple(sub)
        buf, offset = self._buf, self._start
        for idx in range(window.start, window.stop - len(needle) + 1):
            if all(
                buf[offset + idx + off] == x for off, x in enumerate(needle)
            ):
                return idx
        else:
            return -1

    def starts_with(self, prefix: Iterable[Any]) -> bool:
        needle = tuple(prefix)
        return len(needle) <= len(self) and self.find(needle, 0, len(needle)) == 0

    def ends_with(self, suffix: Iterable[Any]) -> bool:
        needle = tuple(suffix)
        start = len(self) - len(needle)
        return start >= 0 and self.find(needle, start) == start

    def split(self, delimiter: Any) -> Sequence[Any]:
        parts: MutableSequence[Any] = []
        lo = 0
        while (hi := self.index_of(delimiter, lo)) != -1:
            parts.append(self._slice(self._buf, self._start + lo, self._start + hi))
            lo = hi + 1
        parts.append(self._slice(self._buf, self._start + lo, self._stop))
        return tuple(parts)
