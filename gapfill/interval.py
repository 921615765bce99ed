from dataclasses import dataclass
from typing import TypeVar


@dataclass(frozen=True, kw_only=True)
class Span:
    start: int
    end: int

    def __len__(self) -> int:
        return max(self.end - self.start, 0)

    def __str__(self) -> str:
        """Human-friendly string showing range and length."""
        return f"Span({self.start}→{self.end}, {len(self)})"

    def as_range(self) -> range:
        return range(self.start, self.end)

    def as_slice(self) -> slice:
        return slice(self.start, self.end)


SpanOut = TypeVar("SpanOut", bound="Span", covariant=True)
