from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, NamedTuple

from typing_extensions import override

from gapfill.interval import Span, SpanOut


class Kind(Enum):
    INCLUDED = "included"
    EXCLUDED = "excluded"


class Piece(NamedTuple):
    kind: Kind
    span: Span


class GapFillError(AssertionError):
    """Raised when the source breaks the sorted, disjoint, in-bounds contract.

    Subclasses AssertionError: a violation means the upstream producer is
    broken, not that the caller should retry. Raised explicitly so it is not
    stripped under ``python -O``.
    """

    reason: str = "invalid range"
    hint: str = ""

    def __init__(self, span: Span, cursor: int, end: int):
        self.span: Span = span
        self.cursor: int = cursor
        self.end: int = end
        message = f"{self.reason}: {span} (cursor={cursor}, end={end})"
        if self.hint:
            message = f"{message}\n{self.hint}"
        super().__init__(message)


class RangeBeforeCursorError(GapFillError):
    reason = "range starts before current position"
    hint = (
        "Hint: ranges must be sorted by start and must not overlap.\n"
        "      Sort the source and merge overlaps before filling gaps."
    )


class RangeExceedsEndError(GapFillError):
    reason = "range exceeds domain end"
    hint = (
        "Hint: every range must lie within [0, end).\n"
        "      Pass an end at least as large as the last range's end."
    )


class MalformedRangeError(GapFillError):
    reason = "range start exceeds range end"
    hint = "Hint: ranges are half-open [start, end) with start <= end."


def _coerce_span(item: Any) -> Span:
    """Convert a source item to a Span.

    Accepts:
    - Span (or subclass): passed through unchanged
    - range with step 1: converted to Span(start=r.start, end=r.stop)
    - (start, end) pair of ints

    Raises:
        TypeError: If the item is none of the above
    """
    if isinstance(item, Span):
        return item
    if isinstance(item, range):
        if item.step != 1:
            raise TypeError(
                f"Source ranges must have step 1, got {item!r}.\n"
                f"Hint: use range(start, end) for a half-open span."
            )
        return Span(start=item.start, end=item.stop)
    if (
        isinstance(item, tuple)
        and len(item) == 2
        and all(isinstance(bound, int) for bound in item)
    ):
        return Span(start=item[0], end=item[1])
    raise TypeError(
        f"Source items must be Span, range, or (start, end) tuples.\n"
        f"Got {type(item).__name__!r}: {item!r}\n"
        f"Examples:\n"
        f"  Span(start=2, end=5)\n"
        f"  range(2, 5)\n"
        f"  (2, 5)"
    )


def _check_end(end: Any) -> int:
    if not isinstance(end, int):
        raise TypeError(
            f"Domain end must be an int, got {type(end).__name__!r}: {end!r}\n"
            f"Hint: fill_gaps(spans, len(text)) partitions [0, len(text))."
        )
    if end < 0:
        raise ValueError(
            f"Domain end must be non-negative, got {end}.\n"
            f"The partitioned domain is [0, end)."
        )
    return end


@dataclass(frozen=True)
class FillResult:
    """Result of one production step in checked mode.

    Attributes:
        success: True if a piece was produced, False on a contract violation
        piece: The produced piece if successful, None if failed
        error: The violation that stopped production, None if successful
    """

    success: bool
    piece: Piece | None
    error: GapFillError | None


class GapFiller(Iterator[Piece], Generic[SpanOut]):
    """Lazily partition ``[0, end)`` into source ranges and the gaps between them.

    Each source range is yielded as ``Piece(Kind.INCLUDED, span)``, unchanged.
    Uncovered stretches are yielded as ``Piece(Kind.EXCLUDED, Span(...))``.
    The source is pulled one range at a time and validated as it arrives.

    Example:
        >>> list(GapFiller([range(2, 4)], 6))
        [Piece(kind=<Kind.EXCLUDED: 'excluded'>, span=Span(start=0, end=2)),
         Piece(kind=<Kind.INCLUDED: 'included'>, span=Span(start=2, end=4)),
         Piece(kind=<Kind.EXCLUDED: 'excluded'>, span=Span(start=4, end=6))]
    """

    def __init__(
        self, source: Iterable[SpanOut | range | tuple[int, int]], end: int
    ):
        self._source: Iterator[Any] | None = iter(source)
        self._end: int = _check_end(end)
        self._cursor: int = 0
        self._pending: Span | None = None
        self._exhausted: bool = False

    @property
    def cursor(self) -> int:
        """Position immediately after the last emitted piece."""
        return self._cursor

    @property
    def end(self) -> int:
        return self._end

    @property
    def pending(self) -> Span | None:
        """Source range held back while the gap before it is emitted."""
        return self._pending

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    @override
    def __next__(self) -> Piece:
        if self._exhausted:
            raise StopIteration

        if self._pending is not None:
            span, self._pending = self._pending, None
            self._cursor = span.end
            return Piece(Kind.INCLUDED, span)

        if self._source is not None:
            try:
                item = next(self._source)
            except StopIteration:
                self._source = None
            else:
                return self._step(item)

        if self._cursor < self._end:
            start, self._cursor = self._cursor, self._end
            return Piece(Kind.EXCLUDED, Span(start=start, end=self._end))

        self._exhausted = True
        raise StopIteration

    def _step(self, item: Any) -> Piece:
        try:
            span = _coerce_span(item)
            self._validate(span)
        except (GapFillError, TypeError):
            self._exhausted = True
            self._source = None
            raise

        if self._cursor < span.start:
            start, self._cursor = self._cursor, span.start
            self._pending = span
            return Piece(Kind.EXCLUDED, Span(start=start, end=span.start))

        self._cursor = span.end
        return Piece(Kind.INCLUDED, span)

    def _validate(self, span: Span) -> None:
        if span.start < self._cursor:
            raise RangeBeforeCursorError(span, self._cursor, self._end)
        if span.end > self._end:
            raise RangeExceedsEndError(span, self._cursor, self._end)
        if span.start > span.end:
            raise MalformedRangeError(span, self._cursor, self._end)

    def checked(self) -> Iterator[FillResult]:
        """Yield FillResult records instead of raising on contract violations.

        Production stops after the first failed record.
        """
        while True:
            try:
                piece = next(self)
            except StopIteration:
                return
            except GapFillError as error:
                yield FillResult(success=False, piece=None, error=error)
                return
            yield FillResult(success=True, piece=piece, error=None)

    @override
    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(cursor={self._cursor}, end={self._end}, "
            f"pending={self._pending!r}, exhausted={self._exhausted})"
        )


class Ranges(Iterable[SpanOut], Generic[SpanOut]):
    """Wrap a range iterable so gap filling can be chained onto it."""

    def __init__(self, source: Iterable[SpanOut | range | tuple[int, int]]):
        self.source: Iterable[Any] = source

    @override
    def __iter__(self) -> Iterator[Any]:
        return iter(self.source)

    def fill_gaps(self, end: int) -> GapFiller[SpanOut]:
        return GapFiller(self.source, end)


def ranges(source: Iterable[SpanOut | range | tuple[int, int]]) -> Ranges[SpanOut]:
    """Adapt any range iterable for chained use.

    Example:
        >>> pieces = list(ranges(spans).fill_gaps(len(text)))
    """
    return Ranges(source)


def fill_gaps(
    source: Iterable[SpanOut | range | tuple[int, int]], end: int
) -> GapFiller[SpanOut]:
    """Return a GapFiller over ``source`` partitioning ``[0, end)``."""
    return GapFiller(source, end)


def checked(
    source: Iterable[SpanOut | range | tuple[int, int]], end: int
) -> Iterator[FillResult]:
    """Non-raising variant of ``fill_gaps``; see ``GapFiller.checked``."""
    return GapFiller(source, end).checked()
