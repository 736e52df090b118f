"""An editable text document bound to a file on disk."""

from __future__ import annotations

from typing import List, Optional, Tuple, Union

from .fileio import (
    FileInfo,
    get_file_basename,
    parse_uri_list,
    read_file,
    write_file,
)
from .textsearch import Match, SearchFlags, backward_search, forward_search


class Document:
    """Text with a selection, a file behind it and search highlighting.

    The selection is kept as an anchor and a cursor; ``selection`` gives it
    as an ordered ``(start, end)`` pair of character offsets.
    """

    def __init__(self) -> None:
        self.text: str = ""
        self.fi: FileInfo = FileInfo()
        self.modified: bool = False
        self.highlighting: bool = False
        self.highlights: List[Match] = []
        self._anchor: int = 0
        self._cursor: int = 0

    # Selection -------------------------------------------------------

    @property
    def cursor(self) -> int:
        """Offset of the insertion point."""
        return self._cursor

    @property
    def selection(self) -> Tuple[int, int]:
        """The selected range as ``(start, end)``; empty when start == end."""
        return min(self._anchor, self._cursor), max(self._anchor, self._cursor)

    def _place(self, anchor: int, cursor: int) -> None:
        self._anchor = anchor
        self._cursor = cursor

    def select_all(self) -> Tuple[int, int]:
        """Select the whole text, with the cursor at its end."""
        self._place(0, len(self.text))
        return self.selection

    def selected_text(self) -> str:
        """Return the text inside the selection."""
        start, end = self.selection
        return self.text[start:end]

    # Editing ---------------------------------------------------------

    def _changed(self) -> None:
        # Any change to the text drops search highlighting.
        if self.highlighting:
            self.highlights.clear()
            self.highlighting = False

    def set_text(self, text: str) -> None:
        """Replace the whole text and put the cursor at its start."""
        self.text = text
        self._place(0, 0)
        self.modified = True
        self._changed()

    def delete_selection(self) -> bool:
        """Delete the selected text; return whether anything was removed."""
        start, end = self.selection
        if start == end:
            return False
        self.text = self.text[:start] + self.text[end:]
        self._place(start, start)
        self.modified = True
        self._changed()
        return True

    # Files -----------------------------------------------------------

    def _load(self, fi: FileInfo) -> None:
        text = read_file(fi)
        self.fi = fi
        self.text = text
        self._place(0, 0)
        self.modified = False
        self.highlights.clear()
        self.highlighting = False

    def open(self, filename: str, charset: Optional[str] = None) -> None:
        """Load ``filename``; a file that does not exist opens empty.

        Raises :class:`~leafnote.fileio.FileAccessError` when the file
        exists but cannot be read; the document is then left unchanged.
        """
        fi = FileInfo(
            filename=filename,
            charset=charset,
            charset_flag=charset is not None,
        )
        self._load(fi)

    def save(self) -> None:
        """Write the text back to the document's file."""
        if self.fi.filename is None:
            raise ValueError("document has no file name; use save_as")
        write_file(self.text, self.fi)
        self.modified = False

    def save_as(self, filename: str, charset: Optional[str] = None) -> None:
        """Write the text to ``filename`` and make it the document's file."""
        fi = FileInfo(
            filename=filename,
            charset=charset if charset is not None else self.fi.charset,
            charset_flag=charset is not None or self.fi.charset_flag,
            lineend=self.fi.lineend,
        )
        write_file(self.text, fi)
        self.fi = fi
        self.modified = False

    def close(self) -> None:
        """Empty the document and forget its file."""
        self.text = ""
        self._place(0, 0)
        self.fi = FileInfo()
        self.modified = False
        self.highlights.clear()
        self.highlighting = False

    def drop_uris(self, data: Union[str, bytes], cwd: Optional[str] = None) -> List[str]:
        """Open the first dropped file here and return the other file names."""
        names = parse_uri_list(data, cwd)
        if not names:
            return []
        first, rest = names[0], names[1:]
        charset = self.fi.charset if self.fi.charset_flag else None
        self.open(first, charset)
        return rest

    # Search ----------------------------------------------------------

    def find(
        self,
        needle: str,
        flags: SearchFlags = SearchFlags(0),
        backward: bool = False,
    ) -> Optional[Match]:
        """Search from the selection and select the match, if any."""
        start, end = self.selection
        if backward:
            found = backward_search(self.text, start, needle, flags)
        else:
            found = forward_search(self.text, end, needle, flags)
        if found is not None:
            self._place(*found)
            if self.highlighting:
                self.highlights.append(found)
        return found

    def toggle_highlight(self) -> bool:
        """Switch search highlighting on or off and return the new state."""
        self.highlighting = not self.highlighting
        if not self.highlighting:
            self.highlights.clear()
        return self.highlighting

    # Presentation ----------------------------------------------------

    def title(self) -> str:
        """Return the name to show for the document, starred when modified."""
        name = get_file_basename(self.fi.filename, True)
        return f"*{name}" if self.modified else name