import pytest

from leafnote.paging import (
    PageLayout,
    lines_per_page,
    page_count,
    page_header,
    paginate,
)


@pytest.mark.parametrize(
    "page_height, text_height",
    [(100, 10), (101, 10), (99, 10), (700.5, 12), (12, 12)],
)
def test_lines_per_page_fills_page(page_height, text_height):
    count = lines_per_page(page_height, text_height)
    assert count * text_height <= page_height
    assert (count + 1) * text_height > page_height


@pytest.mark.parametrize("page_height, text_height", [(5, 10), (100, 0), (100, -3)])
def test_lines_per_page_rejects_impossible_geometry(page_height, text_height):
    with pytest.raises(ValueError):
        lines_per_page(page_height, text_height)


@pytest.mark.parametrize("line_count", [1, 2, 9, 10, 11, 57, 100])
@pytest.mark.parametrize("per_page", [1, 3, 10])
def test_page_count_covers_lines(line_count, per_page):
    count = page_count(line_count, per_page)
    assert (count - 1) * per_page < line_count <= count * per_page


def test_page_count_has_a_page_for_no_lines():
    assert page_count(0, 5) == 1


def test_page_count_errors():
    with pytest.raises(ValueError):
        page_count(3, 0)
    with pytest.raises(ValueError):
        page_count(-1, 4)


def test_page_header_numbers_from_one():
    assert page_header("notes.txt", 0, 3) == ("notes.txt", "1 / 3")


def test_page_header_last_page_shows_total():
    left, right = page_header("notes.txt", 6, 7)
    assert left == "notes.txt"
    assert right.split(" / ") == ["7", "7"]


def test_page_header_without_title():
    left, _ = page_header(None, 0, 1)
    assert left == ""


@pytest.mark.parametrize("page_nr, n_pages", [(-1, 3), (3, 3), (0, 0)])
def test_page_header_rejects_bad_page(page_nr, n_pages):
    with pytest.raises(ValueError):
        page_header("t", page_nr, n_pages)


@pytest.mark.parametrize("per_page", [1, 2, 4, 50])
def test_paginate_keeps_lines_in_order(per_page):
    text = "\n".join(f"line {n}" for n in range(23)) + "\n"
    pages = paginate(text, per_page)
    flat = [line for page in pages for line in page]
    assert flat == text.rstrip().split("\n")
    assert all(len(page) == per_page for page in pages[:-1])
    assert 1 <= len(pages[-1]) <= per_page
    assert len(pages) == page_count(len(flat), per_page)


def test_paginate_drops_trailing_whitespace():
    assert paginate("a\nb\n\n \t\r\n", 5) == [["a", "b"]]


def test_paginate_keeps_leading_and_inner_blank_lines():
    assert paginate("\nx\n\ny", 10) == [["", "x", "", "y"]]


def test_paginate_empty_text_gives_one_empty_page():
    assert paginate("", 3) == [[""]]


def test_paginate_rejects_zero_lines_per_page():
    with pytest.raises(ValueError):
        paginate("abc", 0)


def test_layout_pages_match_paginate():
    layout = PageLayout(page_width=500, page_height=95, text_height=10)
    text = "\n".join(str(n) for n in range(40))
    assert layout.pages(text) == paginate(text, layout.lines_per_page)
    assert layout.page_count(text) == len(layout.pages(text))


def test_layout_lines_stack_below_header():
    layout = PageLayout(page_width=500, page_height=200, text_height=12)
    assert layout.line_y(0) == layout.text_height
    assert layout.line_y(3) - layout.line_y(2) == layout.text_height
    assert layout.header_y < 0 < layout.line_y(0)
    with pytest.raises(ValueError):
        layout.line_y(-1)


def test_layout_headers_one_per_page():
    layout = PageLayout(page_width=500, page_height=30, text_height=10)
    text = "\n".join("x" for _ in range(7))
    headers = layout.headers("doc", text)
    assert len(headers) == layout.page_count(text)
    assert [left for left, _ in headers] == ["doc"] * len(headers)
    assert headers[-1] == page_header("doc", len(headers) - 1, len(headers))


def test_layout_too_small_page_raises():
    layout = PageLayout(page_width=500, page_height=4, text_height=10)
    with pytest.raises(ValueError):
        layout.pages("text")