"""Character-set and line-ending detection for text files."""

from __future__ import annotations

import codecs
import locale
import os
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Mapping, Optional, Tuple, TypeVar, Union

TextLike = TypeVar("TextLike", str, bytes)


class LineEnding(IntEnum):
    """Line terminator styles; CRLF carries the sum of its two codes."""

    LF = 0x0A
    CR = 0x0D
    CRLF = 0x0A + 0x0D


@dataclass(frozen=True)
class EncodingItems:
    """Candidate charsets for a region: IANA, OpenI18N and code page names."""

    iana: Optional[str]
    openi18n: Optional[str]
    codepage: Optional[str]


class _Region(IntEnum):
    LATIN1 = 0
    LATIN2 = 1
    LATIN3 = 2
    LATIN4 = 3
    LATINC = 4
    LATINC_UA = 5
    LATINC_TJ = 6
    LATINA = 7
    LATING = 8
    LATINH = 9
    LATIN5 = 10
    CHINESE_CN = 11
    CHINESE_TW = 12
    CHINESE_HK = 13
    JAPANESE = 14
    KOREAN = 15
    VIETNAMESE = 16
    THAI = 17
    GEORGIAN = 18


_COUNTRY_TABLE: Tuple[Tuple[str, ...], ...] = (
    (),
    ("cs", "hr", "hu", "pl", "ro", "sk", "sl", "sq", "sr", "uz"),
    ("eo", "mt"),
    ("et", "lt", "lv", "mi"),
    ("be", "bg", "ky", "mk", "mn", "ru", "tt"),
    ("uk",),
    ("tg",),
    ("ar", "fa", "ur"),
    ("el",),
    ("he", "yi"),
    ("az", "tr"),
    ("zh_CN",),
    ("zh_TW",),
    ("zh_HK",),
    ("ja",),
    ("ko",),
    ("vi",),
    ("th",),
    ("ka",),
)

_ENCODING_TABLE: Tuple[EncodingItems, ...] = (
    EncodingItems("ISO-8859-1", "ISO-8859-15", "CP1252"),
    EncodingItems("ISO-8859-2", "ISO-8859-16", "CP1250"),
    EncodingItems("ISO-8859-3", None, None),
    EncodingItems("ISO-8859-4", "ISO-8859-13", "CP1257"),
    EncodingItems("ISO-8859-5", "KOI8-R", "CP1251"),
    EncodingItems("ISO-8859-5", "KOI8-U", "CP1251"),
    EncodingItems("ISO-8859-5", "KOI8-T", "CP1251"),
    EncodingItems("ISO-8859-6", None, "CP1256"),
    EncodingItems("ISO-8859-7", None, "CP1253"),
    EncodingItems("ISO-8859-8", None, "CP1255"),
    EncodingItems("ISO-8859-9", None, "CP1254"),
    EncodingItems("GB2312", "GB18030", "CP936"),
    EncodingItems("BIG5", "EUC-TW", "CP950"),
    EncodingItems("BIG5", "BIG5-HKSCS", "CP950"),
    EncodingItems("ISO-2022-JP", "EUC-JP", "CP932"),
    EncodingItems("ISO-2022-KR", "EUC-KR", "CP949"),
    EncodingItems(None, "VISCII", "CP1258"),
    EncodingItems(None, "TIS-620", "CP874"),
    EncodingItems(None, "GEORGIAN-PS", None),
)


def get_encoding_code(environ: Optional[Mapping[str, str]] = None) -> int:
    """Return the region code chosen from LC_ALL, or LANG when LC_ALL is unset."""
    env = os.environ if environ is None else environ
    value = env.get("LC_ALL")
    if value is None:
        value = env.get("LANG")
    if value and len(value) >= 2:
        for code, countries in enumerate(_COUNTRY_TABLE[1:], start=1):
            if any(value.startswith(country) for country in countries):
                return code
    return int(_Region.LATIN1)


def get_encoding_items(code: int) -> EncodingItems:
    """Return the candidate charsets for a region code."""
    if not 0 <= code < len(_ENCODING_TABLE):
        raise ValueError(f"unknown encoding region code: {code}")
    return _ENCODING_TABLE[code]


def get_default_charset() -> str:
    """Return the charset of the current locale."""
    name = locale.getpreferredencoding(False) or "UTF-8"
    if _is_utf8(name):
        return "UTF-8"
    return name


def _is_utf8(name: str) -> bool:
    try:
        return codecs.lookup(name).name == "utf-8"
    except LookupError:
        return False


def _literal(text: TextLike, value: str) -> TextLike:
    if isinstance(text, (bytes, bytearray)):
        return value.encode("ascii")
    return value


def detect_line_ending(text: Union[str, bytes]) -> LineEnding:
    """Return the line ending used by the first line break of the text."""
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("latin-1")
    text = text.split("\0", 1)[0]
    # The scan starts at the second character; the first one is never looked at.
    rest = text[1:]
    for index, char in enumerate(rest):
        if char == "\n":
            return LineEnding.LF
        if char == "\r":
            if rest[index + 1:index + 2] == "\n":
                return LineEnding.CRLF
            return LineEnding.CR
    return LineEnding.LF


def convert_line_ending_to_lf(text: TextLike) -> TextLike:
    """Turn every CR LF pair and every lone CR into LF."""
    lf = _literal(text, "\n")
    return text.replace(_literal(text, "\r\n"), lf).replace(_literal(text, "\r"), lf)


def convert_line_ending(text: TextLike, lineend: LineEnding) -> TextLike:
    """Turn LF line endings into the requested style."""
    lf = _literal(text, "\n")
    if lineend == LineEnding.CR:
        return text.replace(lf, _literal(text, "\r"))
    if lineend == LineEnding.CRLF:
        return text.replace(lf, _literal(text, "\r\n"))
    return text


def _scan_ascii(data: bytes) -> Optional[str]:
    charset: Optional[str] = None
    it: Iterator[int] = iter(data)
    for c in it:
        if c > 0x7F:
            return "UTF-8"
        if c != 0x1B:
            continue
        c = next(it, 0)
        if c != ord("$"):
            continue
        c = next(it, 0)
        if c in (ord("B"), ord("@")):
            charset = "ISO-2022-JP"
            continue
        if c == ord("A"):
            return "ISO-2022-JP-2"
        if c == ord("("):
            if next(it, 0) in (ord("C"), ord("D")):
                return "ISO-2022-JP-2"
        elif c == ord(")"):
            if next(it, 0) == ord("C"):
                return "ISO-2022-KR"
        return charset
    return charset


def _detect_cyrillic(data: bytes, fallback: Optional[str]) -> Optional[str]:
    noniso = False
    xc = xd = xef = 0
    for c in data:
        if 0x80 <= c <= 0x9F:
            noniso = True
        elif 0xC0 <= c <= 0xCF:
            xc += 1
        elif 0xD0 <= c <= 0xDF:
            xd += 1
        elif c >= 0xE0:
            xef += 1
    if not noniso and (xc + xef) < xd:
        return "ISO-8859-5"
    if (xc + xd) < xef:
        return "CP1251"
    return fallback


def _gb18030_trail(c: int) -> bool:
    return 0x30 <= c <= 0x39 or 0x80 <= c <= 0xA0


def _detect_chinese(data: bytes, fallback: Optional[str]) -> Optional[str]:
    charset = fallback
    it: Iterator[int] = iter(data)
    for c in it:
        if 0x81 <= c <= 0x87:
            return "GB18030"
        if 0x88 <= c <= 0xA0:
            if _gb18030_trail(next(it, 0)):
                return "GB18030"
        elif 0xA1 <= c <= 0xC6 or 0xC9 <= c <= 0xF9:
            c = next(it, 0)
            if 0x40 <= c <= 0x7E:
                charset = "BIG5"
            elif _gb18030_trail(c):
                return "GB18030"
        elif c >= 0xC7:
            if _gb18030_trail(next(it, 0)):
                return "GB18030"
    return charset


def _detect_japanese(data: bytes) -> str:
    it: Iterator[int] = iter(data)
    for c in it:
        if 0x81 <= c <= 0x9F:
            if c == 0x8E:
                c = next(it, 0)
                if 0x40 <= c <= 0xA0 or 0xE0 <= c <= 0xFC:
                    return "CP932"
            elif c == 0x8F:
                c = next(it, 0)
                if 0x40 <= c <= 0xA0:
                    return "CP932"
                if c >= 0xFD:
                    break
            else:
                return "CP932"
        elif 0xA1 <= c <= 0xDF:
            c = next(it, 0)
            if c <= 0x9F:
                return "CP932"
            if c >= 0xFD:
                break
        elif 0xE0 <= c <= 0xEF:
            c = next(it, 0)
            if 0x40 <= c <= 0xA0:
                return "CP932"
            if c >= 0xFD:
                break
        elif c >= 0xF0:
            break
    return "EUC-JP"


def _johab_trail(c: int) -> bool:
    return 0x5A < c < 0x61 or 0x7A < c < 0x81


def _uhc_low_trail(c: int) -> bool:
    return c in (0x52, 0x72, 0x92) or 0x9D < c < 0xA1


def _uhc_high_trail(c: int) -> bool:
    return (c in (0xB2, 0xD2, 0xF2, 0xFE) or 0xBD < c < 0xC1
            or 0xDD < c < 0xE1)


def _detect_korean(data: bytes) -> str:
    noneuc = False
    nonjohab = False
    charset: Optional[str] = None
    it: Iterator[int] = iter(data)
    for c in it:
        if 0x81 <= c < 0x84:
            charset = "CP949"
        elif 0x84 <= c < 0xA1:
            noneuc = True
            c = next(it, 0)
            if _johab_trail(c):
                charset = "CP1361"
            elif _uhc_low_trail(c) or _uhc_high_trail(c):
                charset = "CP949"
        elif 0xA1 <= c <= 0xC6:
            c = next(it, 0)
            if c < 0xA1:
                noneuc = True
                if _johab_trail(c):
                    charset = "CP1361"
                elif _uhc_low_trail(c):
                    charset = "CP949"
                elif _uhc_high_trail(c):
                    nonjohab = True
        elif 0xC6 < c <= 0xD3:
            if next(it, 0) < 0xA1:
                charset = "CP1361"
        elif 0xD3 < c < 0xD8:
            nonjohab = True
            next(it, 0)
        elif c >= 0xD8:
            if next(it, 0) < 0xA1:
                charset = "CP1361"
        if noneuc and nonjohab:
            charset = "CP949"
        if charset is not None:
            return charset
    return "CP949" if noneuc else "EUC-KR"


def detect_charset(
    data: bytes,
    code: Optional[int] = None,
    default_charset: Optional[str] = None,
) -> Optional[str]:
    """Guess the charset of raw file contents.

    ``code`` is the region code (from the environment when omitted) and
    ``default_charset`` the locale charset (from the locale when omitted).
    """
    data = bytes(data).split(b"\0", 1)[0]
    if code is None:
        code = get_encoding_code()
    if default_charset is None:
        default_charset = get_default_charset()

    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        pass
    else:
        return _scan_ascii(data) or default_charset

    items = get_encoding_items(code)
    if code in (_Region.LATINC, _Region.LATINC_UA, _Region.LATINC_TJ):
        return _detect_cyrillic(data, items.openi18n)
    if code in (_Region.CHINESE_CN, _Region.CHINESE_TW, _Region.CHINESE_HK):
        return _detect_chinese(data, items.iana)
    if code == _Region.JAPANESE:
        return _detect_japanese(data)
    if code == _Region.KOREAN:
        return _detect_korean(data)
    if code in (_Region.VIETNAMESE, _Region.THAI, _Region.GEORGIAN):
        return items.openi18n

    if not _is_utf8(default_charset):
        charset: Optional[str] = default_charset
    elif any(0x80 <= c <= 0x9F for c in data):
        charset = items.codepage
    else:
        charset = items.openi18n
    return charset or items.iana