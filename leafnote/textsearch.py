"""Line-oriented text search with optional case-insensitive matching.

Positions are character offsets into the searched text. Lines end with
``"\\n"``. A search returns ``(match_start, match_end)`` or ``None``.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import IntFlag
from typing import List, Optional, Tuple

Match = Tuple[int, int]

_UNKNOWN_CHAR = "\ufffc"


class SearchFlags(IntFlag):
    """Options that change how a search matches."""

    VISIBLE_ONLY = 1 << 0
    TEXT_ONLY = 1 << 1
    CASE_INSENSITIVE = 1 << 2


def _fold(text: str) -> str:
    return unicodedata.normalize("NFKD", text.casefold())


def _offset_skipping_decomp(text: str, offset: int) -> int:
    """Map an offset in the folded form of ``text`` back to ``text``."""
    index = 0
    while offset > 0 and index < len(text):
        offset -= len(_fold(text[index]))
        index += 1
    return index


@dataclass(frozen=True)
class _Searcher:
    text: str
    flags: SearchFlags

    @property
    def caseless(self) -> bool:
        return bool(self.flags & SearchFlags.CASE_INSENSITIVE)

    @property
    def text_only(self) -> bool:
        return bool(self.flags & SearchFlags.TEXT_ONLY)

    # Line navigation -------------------------------------------------

    def line_start(self, pos: int) -> int:
        return self.text.rfind("\n", 0, pos) + 1

    def forward_line(self, pos: int) -> Tuple[int, bool]:
        newline = self.text.find("\n", pos)
        if newline < 0:
            return len(self.text), False
        nxt = newline + 1
        return nxt, nxt < len(self.text)

    def backward_line(self, pos: int) -> Tuple[int, bool]:
        start = self.line_start(pos)
        if start == 0:
            return 0, False
        return self.line_start(start - 1), True

    # Text access -----------------------------------------------------

    def line_text(self, start: int, end: int) -> str:
        chunk = self.text[start:end]
        if self.text_only:
            chunk = chunk.replace(_UNKNOWN_CHAR, "")
        return chunk

    def advance(self, pos: int, count: int, skip_decomp: bool) -> int:
        remaining = count
        while remaining > 0:
            if pos >= len(self.text):
                return pos
            char = self.text[pos]
            ignored = self.text_only and char == _UNKNOWN_CHAR
            if not ignored and skip_decomp:
                remaining -= len(unicodedata.normalize("NFKD", char)) - 1
            pos += 1
            if not ignored:
                remaining -= 1
        return pos

    # Matching --------------------------------------------------------

    def break_lines(self, needle: str) -> List[str]:
        parts = needle.split("\n")
        pieces = [part + "\n" for part in parts[:-1]]
        if parts[-1]:
            pieces.append(parts[-1])
        if self.caseless:
            pieces = [_fold(piece) for piece in pieces]
        return pieces

    def find_in(self, haystack: str, piece: str, reverse: bool) -> Optional[int]:
        if not self.caseless:
            index = haystack.rfind(piece) if reverse else haystack.find(piece)
            return index if index >= 0 else None
        folded = _fold(haystack)
        if not piece:
            return 0
        if len(folded) < len(piece):
            return None
        index = folded.rfind(piece) if reverse else folded.find(piece)
        if index < 0:
            return None
        return _offset_skipping_decomp(haystack, index)

    def starts_with(self, line: str, piece: str) -> bool:
        if not line:
            return False
        if self.caseless:
            return _fold(line).startswith(_fold(piece))
        return line.startswith(piece)

    def match_rest(self, pos: int, pieces: List[str]) -> Optional[int]:
        """Match the remaining pieces, each from the start of its line."""
        for piece in pieces:
            nxt, _ = self.forward_line(pos)
            if nxt == pos:
                return None
            if not self.starts_with(self.line_text(pos, nxt), piece):
                return None
            pos = self.advance(pos, len(piece), self.caseless)
        return pos

    def finish(self, line_begin: int, found: int, pieces: List[str]) -> Optional[Match]:
        match_start = self.advance(line_begin, found, False)
        end = self.advance(match_start, len(pieces[0]), self.caseless)
        end = self.match_rest(end, pieces[1:])
        if end is None:
            return None
        return match_start, end

    def lines_match(self, pos: int, pieces: List[str]) -> Optional[Match]:
        if not pieces:
            return pos, pos
        nxt, _ = self.forward_line(pos)
        if nxt == pos:
            return None
        found = self.find_in(self.line_text(pos, nxt), pieces[0], reverse=False)
        if found is None:
            return None
        return self.finish(pos, found, pieces)

    def backward_lines_match(self, pos: int, pieces: List[str]) -> Optional[Match]:
        if not pieces:
            return pos, pos
        begin = self.line_start(pos)
        if begin == pos:
            begin, moved = self.backward_line(pos)
            if not moved:
                return None
        found = self.find_in(self.line_text(begin, pos), pieces[0], reverse=True)
        if found is None:
            return None
        return self.finish(begin, found, pieces)


def _check_position(text: str, name: str, value: int) -> None:
    if not 0 <= value <= len(text):
        raise ValueError(f"{name} {value} is outside the text (0..{len(text)})")


def forward_search(
    text: str,
    start: int,
    needle: str,
    flags: SearchFlags = SearchFlags(0),
    limit: Optional[int] = None,
) -> Optional[Match]:
    """Find the first match of ``needle`` at or after ``start``.

    ``limit`` bounds the search; ``None`` searches to the end of the text.
    """
    _check_position(text, "start", start)
    if limit is not None:
        _check_position(text, "limit", limit)
    searcher = _Searcher(text, SearchFlags(flags))

    if limit is not None and start >= limit:
        return None

    if not needle:
        if start >= len(text):
            return None
        pos = start + 1
        if limit is not None and pos == limit:
            return None
        return pos, pos

    pieces = searcher.break_lines(needle)
    search = start
    while True:
        if limit is not None and search >= limit:
            return None
        found = searcher.lines_match(search, pieces)
        if found is not None:
            end = found[1]
            if limit is None:
                return found
            within = end < limit if searcher.caseless else end <= limit
            return found if within else None
        search, moved = searcher.forward_line(search)
        if not moved:
            return None


def backward_search(
    text: str,
    start: int,
    needle: str,
    flags: SearchFlags = SearchFlags(0),
    limit: Optional[int] = None,
) -> Optional[Match]:
    """Find the last match of ``needle`` that begins before ``start``.

    ``limit`` bounds the search; ``None`` searches to the start of the text.
    """
    _check_position(text, "start", start)
    if limit is not None:
        _check_position(text, "limit", limit)
    searcher = _Searcher(text, SearchFlags(flags))

    if limit is not None and start <= limit:
        return None

    if not needle:
        if start <= 0:
            return None
        pos = start - 1
        if limit is not None and pos == limit:
            return None
        return pos, pos

    pieces = searcher.break_lines(needle)
    search = start
    while True:
        if limit is not None and search <= limit:
            return None
        found = searcher.backward_lines_match(search, pieces)
        if found is not None:
            if limit is None:
                return found
            match_start, end = found
            within = end > limit if searcher.caseless else match_start >= limit
            return found if within else None
        line_begin = searcher.line_start(search)
        if line_begin == search:
            search, moved = searcher.backward_line(search)
            if not moved:
                return None
        else:
            search = line_begin