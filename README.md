# leafnote

The engine of a small plain-text editor, with no user interface. It reads
files in the legacy encoding they were saved in, remembers their line
endings, searches text with optional case-insensitive matching, and splits
text into printed pages. It uses only the standard library.

## Install

```
pip install leafnote
```

To run the tests:

```
pip install "leafnote[test]"
pytest
```

## Modules

### `leafnote.encoding`

- `get_encoding_code(environ=None)` picks a region code from `LC_ALL`, or
  from `LANG` when `LC_ALL` is unset (0, Western European, when nothing
  matches).
- `get_encoding_items(code)` returns an `EncodingItems` with the region's
  `iana`, `openi18n` and `codepage` charset names (any may be `None`); an
  unknown code raises `ValueError`.
- `get_default_charset()` returns the locale's charset.
- `detect_charset(data, code=None, default_charset=None)` guesses the charset
  of raw bytes. Valid UTF-8 is reported as `"UTF-8"`, as an ISO-2022 variant
  when it holds the matching escape sequences, or as the default charset when
  it is plain ASCII. Anything else is judged by region: Cyrillic, Chinese,
  Japanese and Korean have their own heuristics; other regions fall back to
  the region's charsets.
- `LineEnding` (`LF`, `CR`, `CRLF`), `detect_line_ending(text)`,
  `convert_line_ending_to_lf(text)` and `convert_line_ending(text, lineend)`
  work on both `str` and `bytes`.

### `leafnote.fileio`

- `FileInfo` holds `filename`, `charset`, `charset_flag` (true when the
  charset was asked for explicitly) and `lineend`.
- `read_file(fi)` returns the text of the file. A missing file reads as
  empty. It sets `fi.lineend` and `fi.charset` to what it found, and reads
  contents that do not decode as ISO-8859-1.
- `write_file(text, fi)` writes the text in `fi.charset` (the locale's when
  unset) with `fi.lineend`.
- Failures to read an existing file, to encode or to write raise
  `FileAccessError`.
- `get_file_basename(filename=None, bracket=False)` gives a display name:
  `"Untitled"` for no file, and with `bracket` `(name)` for a missing file and
  `<name>` for a read-only one.
- `check_file_writable(filename)`, `parse_file_uri(uri, cwd=None)` and
  `parse_uri_list(data, cwd=None)` turn `file:` URIs or paths into absolute
  file names. A list is read up to its first empty line.

### `leafnote.textsearch`

`forward_search(text, start, needle, flags=SearchFlags(0), limit=None)` and
`backward_search(...)` return `(match_start, match_end)` character offsets, or
`None`. Needles may span lines. `SearchFlags.CASE_INSENSITIVE` matches on
case-folded, compatibility-decomposed text. `SearchFlags.TEXT_ONLY` skips
object-replacement characters (U+FFFC). Positions outside the text raise
`ValueError`.

### `leafnote.document`

`Document` keeps `text`, a `FileInfo` in `fi`, a `modified` flag, a
`cursor` and a `selection`, and search highlights:

- `open(filename, charset=None)`, `save()`, `save_as(filename, charset=None)`
  and `close()`. `save()` without a file name raises `ValueError`.
- `set_text`, `select_all`, `selected_text` and `delete_selection`.
- `find(needle, flags=SearchFlags(0), backward=False)` searches from the
  selection and selects the match.
- `toggle_highlight()` switches highlighting on or off. While it is on, each
  match is recorded in `highlights`; any edit clears them.
- `drop_uris(data, cwd=None)` opens the first file of a dropped URI list and
  returns the remaining file names.
- `title()` gives the display name, prefixed with `*` when modified.

### `leafnote.paging`

- `lines_per_page(page_height, text_height)` and
  `page_count(line_count, lines_per_page)`. There is always at least one
  page.
- `page_header(title, page_nr, n_pages)` returns the left part (the title)
  and the right part (`"n / total"`) of a page's header.
- `paginate(text, lines_per_page)` drops trailing white space, then splits
  the text into pages of lines.
- `PageLayout` holds a page's geometry. It has `lines_per_page`, `header_y`,
  `line_y(index)`, `page_count(text)`, `pages(text)` and
  `headers(title, text)`.

## Example

```python
from leafnote.document import Document
from leafnote.textsearch import SearchFlags

doc = Document()
doc.open("notes.txt")              # charset and line ending are detected
print(doc.title())
if doc.find("todo", SearchFlags.CASE_INSENSITIVE):
    print(doc.selected_text())
doc.save()                         # written back with the same charset and line ending
```

```python
from leafnote.paging import PageLayout

layout = PageLayout(page_width=480.0, page_height=700.0, text_height=10.0)
text = "first line\nsecond line\n"
for header, page in zip(layout.headers("notes.txt", text), layout.pages(text)):
    print(header, page)
```

## What it does not do

There is no editor window, no command to run and no undo history.
Clipboard and key bindings are not provided. `paging` only computes page
breaks and headers; it does not draw or send anything to a printer.
`Document.drop_uris` opens only the first dropped file and hands the other
names back to the caller.