"""Reading and writing text files with charset and line-ending handling."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union
from urllib.parse import unquote, urlsplit

from .encoding import (
    LineEnding,
    convert_line_ending,
    convert_line_ending_to_lf,
    detect_charset,
    detect_line_ending,
    get_default_charset,
)


@dataclass
class FileInfo:
    """What is known about the file behind a document.

    ``charset_flag`` is true when the charset was asked for explicitly.
    """

    filename: Optional[str] = None
    charset: Optional[str] = None
    charset_flag: bool = False
    lineend: LineEnding = LineEnding.LF


class FileAccessError(Exception):
    """A file could not be read, converted or written."""


def check_file_writable(filename: str) -> bool:
    """Return whether the file can be opened for appending."""
    try:
        with open(filename, "a"):
            return True
    except OSError:
        return False


def _path_basename(filename: str) -> str:
    if not filename:
        return "."
    stripped = filename.rstrip(os.sep)
    if not stripped:
        return os.sep
    return os.path.basename(stripped)


def get_file_basename(filename: Optional[str] = None, bracket: bool = False) -> str:
    """Return the name to show for a file.

    With ``bracket`` a missing file is shown as ``(name)`` and a read-only
    one as ``<name>``.
    """
    if filename is not None:
        name = _path_basename(filename)
        exists = os.path.exists(filename)
    else:
        name = "Untitled"
        exists = False
    if bracket:
        if not exists:
            return f"({name})"
        if not check_file_writable(filename):
            return f"<{name}>"
    return name


def _filename_from_uri(uri: str) -> str:
    parts = urlsplit(uri)
    if parts.scheme.lower() != "file" or "#" in uri or not parts.path.startswith("/"):
        raise ValueError(f"invalid file URI: {uri!r}")
    path = parts.path
    if parts.query:
        path = f"{path}?{parts.query}"
    return unquote(path)


def parse_file_uri(uri: str, cwd: Optional[str] = None) -> str:
    """Turn a ``file:`` URI or a path into an absolute file name."""
    if uri.startswith("file:"):
        return _filename_from_uri(uri)
    if os.path.isabs(uri):
        return uri
    return os.path.join(cwd if cwd is not None else os.getcwd(), uri)


def parse_uri_list(data: Union[str, bytes], cwd: Optional[str] = None) -> List[str]:
    """Return the file names of a dropped URI list, up to its first empty line."""
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8", "replace")
    names = []
    for entry in data.split("\n"):
        if not entry:
            break
        names.append(parse_file_uri(entry, cwd).strip())
    return names


def _decode(contents: bytes, charset: str) -> Tuple[str, str]:
    payload = contents.split(b"\0", 1)[0]
    try:
        return payload.decode(charset), charset
    except (UnicodeDecodeError, LookupError):
        return payload.decode("iso-8859-1"), "ISO-8859-1"


def read_file(fi: FileInfo) -> str:
    """Read the file named by ``fi`` and return its text.

    A missing file reads as empty. ``fi.lineend`` and ``fi.charset`` are set
    to what was found; contents that do not decode are read as ISO-8859-1.
    """
    if fi.filename is None:
        raise ValueError("no file name to read")
    try:
        with open(fi.filename, "rb") as fh:
            contents = fh.read()
    except OSError as exc:
        if os.path.exists(fi.filename):
            raise FileAccessError(str(exc)) from exc
        contents = b""

    fi.lineend = detect_line_ending(contents)
    if fi.lineend != LineEnding.LF:
        converted = convert_line_ending_to_lf(contents)
    else:
        converted = contents

    charset = fi.charset or detect_charset(converted) or get_default_charset()
    if contents:
        text, charset = _decode(converted, charset)
    else:
        text = ""

    if charset != fi.charset:
        fi.charset = charset
        fi.charset_flag = False
    return text


def write_file(text: str, fi: FileInfo) -> None:
    """Write ``text`` to the file named by ``fi`` in its charset and line ending."""
    if fi.lineend != LineEnding.LF:
        text = convert_line_ending(text, fi.lineend)
    if fi.charset is None:
        fi.charset = get_default_charset()
    try:
        data = text.encode(fi.charset)
    except UnicodeEncodeError as exc:
        raise FileAccessError(f"Can't convert codeset to '{fi.charset}'") from exc
    except LookupError as exc:
        raise FileAccessError(str(exc)) from exc

    if fi.filename is None:
        raise FileAccessError("Can't open file to write")
    try:
        fh = open(fi.filename, "wb")
    except OSError as exc:
        raise FileAccessError("Can't open file to write") from exc
    with fh:
        try:
            fh.write(data)
        except OSError as exc:
            raise FileAccessError("Can't write file") from exc