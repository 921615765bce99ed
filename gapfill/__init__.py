from importlib.resources import files

from .core import (
    FillResult,
    GapFiller,
    GapFillError,
    Kind,
    MalformedRangeError,
    Piece,
    RangeBeforeCursorError,
    RangeExceedsEndError,
    Ranges,
    checked,
    fill_gaps,
    ranges,
)
from .interval import Span
from .text import char_spans, segments

# Load documentation files for programmatic access by agents and code-aware tools
_docs_path = files(__package__) / "docs"
docs = {
    "readme": (_docs_path / "README.md").read_text(),
    "api": (_docs_path / "API.md").read_text(),
}

__all__ = [
    "Span",
    "Kind",
    "Piece",
    "GapFiller",
    "Ranges",
    "ranges",
    "fill_gaps",
    "checked",
    "FillResult",
    "GapFillError",
    "RangeBeforeCursorError",
    "RangeExceedsEndError",
    "MalformedRangeError",
    "char_spans",
    "segments",
    "docs",
]
