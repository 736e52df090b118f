"""Splitting a document's text into printed pages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

Page = List[str]

# Characters removed from the end of the text before it is laid out.
_TRAILING_SPACE = " \t\n\v\f\r"

# Points per millimetre, used to place the running header above the text.
_POINTS_PER_MM = 72 / 25.4
_HEADER_OFFSET_MM = 10


def lines_per_page(page_height: float, text_height: float) -> int:
    """Return how many text lines of ``text_height`` fit on a page."""
    if text_height <= 0:
        raise ValueError(f"text height must be positive, got {text_height}")
    count = int(page_height / text_height)
    if count < 1:
        raise ValueError(
            f"a page {page_height} high cannot hold a line {text_height} high"
        )
    return count


def page_count(line_count: int, lines_per_page: int) -> int:
    """Return the number of pages needed for ``line_count`` lines.

    There is always at least one page, even for no lines.
    """
    if lines_per_page < 1:
        raise ValueError(f"lines per page must be at least 1, got {lines_per_page}")
    if line_count < 0:
        raise ValueError(f"line count cannot be negative, got {line_count}")
    if line_count == 0:
        return 1
    return (line_count - 1) // lines_per_page + 1


def page_header(title: Optional[str], page_nr: int, n_pages: int) -> Tuple[str, str]:
    """Return the left and right header of a page numbered from 0.

    The left part is the title; the right part reads ``"<n> / <total>"``.
    """
    if n_pages < 1:
        raise ValueError(f"there must be at least one page, got {n_pages}")
    if not 0 <= page_nr < n_pages:
        raise ValueError(f"page {page_nr} is outside 0..{n_pages - 1}")
    return (title or "", f"{page_nr + 1} / {n_pages}")


def _layout_lines(text: str) -> List[str]:
    return text.rstrip(_TRAILING_SPACE).split("\n")


def paginate(text: str, lines_per_page: int) -> List[Page]:
    """Split ``text`` into pages of at most ``lines_per_page`` lines.

    Trailing white space is dropped first; the result always has a page.
    """
    if lines_per_page < 1:
        raise ValueError(f"lines per page must be at least 1, got {lines_per_page}")
    lines = _layout_lines(text)
    return [
        lines[first:first + lines_per_page]
        for first in range(0, len(lines), lines_per_page)
    ]


@dataclass(frozen=True)
class PageLayout:
    """Geometry of a printed page, in points, with margins in millimetres."""

    page_width: float
    page_height: float
    text_height: float
    top_margin_mm: float = 25.0
    bottom_margin_mm: float = 20.0
    left_margin_mm: float = 20.0
    right_margin_mm: float = 20.0

    @property
    def lines_per_page(self) -> int:
        """How many text lines fit on one page."""
        return lines_per_page(self.page_height, self.text_height)

    @property
    def header_y(self) -> float:
        """Vertical position of the running header, above the text area."""
        return -_POINTS_PER_MM * _HEADER_OFFSET_MM

    def line_y(self, index: int) -> float:
        """Vertical position of the ``index``-th line on a page."""
        if index < 0:
            raise ValueError(f"line index cannot be negative, got {index}")
        return self.text_height * (index + 1)

    def page_count(self, text: str) -> int:
        """Return the number of pages ``text`` takes."""
        return page_count(len(_layout_lines(text)), self.lines_per_page)

    def pages(self, text: str) -> List[Page]:
        """Split ``text`` into the pages of this layout."""
        return paginate(text, self.lines_per_page)

    def headers(self, title: Optional[str], text: str) -> List[Tuple[str, str]]:
        """Return the header of every page ``text`` takes."""
        total = self.page_count(text)
        return [page_header(title, nr, total) for nr in range(total)]