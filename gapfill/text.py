"""Helpers for splitting character sequences into kept and dropped runs.

Typical use pairs a character predicate with gap filling:

    >>> [(kind.name, part) for kind, part in segments("ab12c", char_spans("ab12c", str.isalpha))]
    [('INCLUDED', 'a'), ('INCLUDED', 'b'), ('EXCLUDED', '12'), ('INCLUDED', 'c')]
"""

from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import TypeVar

from gapfill.core import GapFiller, Kind
from gapfill.interval import Span

Seq = TypeVar("Seq", bound=Sequence)


def char_spans(text: str, predicate: Callable[[str], bool]) -> Iterator[Span]:
    """Yield a one-character span for each character matching ``predicate``."""
    for index, char in enumerate(text):
        if predicate(char):
            yield Span(start=index, end=index + 1)


def segments(
    text: Seq, spans: Iterable[Span | range | tuple[int, int]]
) -> Iterator[tuple[Kind, Seq]]:
    """Partition ``text`` by ``spans`` and yield ``(kind, slice)`` pairs.

    Spans must be sorted, disjoint, and within ``len(text)``; violations
    raise the same errors as ``GapFiller``.
    """
    for kind, span in GapFiller(spans, len(text)):
        yield kind, text[span.as_slice()]
