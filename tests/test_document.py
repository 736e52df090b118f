import pytest

from leafnote.document import Document
from leafnote.encoding import LineEnding
from leafnote.textsearch import SearchFlags


@pytest.fixture
def sample(tmp_path):
    path = tmp_path / "note.txt"
    path.write_bytes(b"hello world\nWorld again\n")
    return path


def test_new_document_title_is_untitled_in_parentheses():
    doc = Document()
    assert doc.title() == "(Untitled)"
    assert doc.text == ""


def test_open_reads_text_and_resets_state(sample):
    doc = Document()
    doc.set_text("junk")
    doc.open(str(sample), "UTF-8")
    assert doc.text == "hello world\nWorld again\n"
    assert doc.modified is False
    assert doc.cursor == 0
    assert doc.fi.charset == "UTF-8"
    assert doc.fi.charset_flag is True
    assert doc.title() == "note.txt"


def test_open_missing_file_gives_empty_text(tmp_path):
    doc = Document()
    missing = tmp_path / "absent.txt"
    doc.open(str(missing), "UTF-8")
    assert doc.text == ""
    assert doc.title() == "(absent.txt)"


def test_set_text_marks_modified_in_title(sample):
    doc = Document()
    doc.open(str(sample), "UTF-8")
    doc.set_text("changed")
    assert doc.modified is True
    assert doc.title() == "*note.txt"


def test_save_round_trip(sample):
    doc = Document()
    doc.open(str(sample), "UTF-8")
    doc.set_text("new contents\n")
    doc.save()
    assert doc.modified is False
    assert sample.read_bytes() == b"new contents\n"


def test_save_without_filename_raises():
    doc = Document()
    doc.set_text("text")
    with pytest.raises(ValueError):
        doc.save()


def test_save_as_adopts_new_file(tmp_path):
    doc = Document()
    doc.set_text("caf\u00e9")
    target = tmp_path / "out.txt"
    doc.save_as(str(target), "UTF-8")
    assert doc.fi.filename == str(target)
    assert doc.modified is False
    assert target.read_bytes() == "caf\u00e9".encode("utf-8")


def test_crlf_line_endings_survive_open_and_save(tmp_path):
    path = tmp_path / "dos.txt"
    path.write_bytes(b"a\r\nb\r\n")
    doc = Document()
    doc.open(str(path), "UTF-8")
    assert doc.text == "a\nb\n"
    assert doc.fi.lineend == LineEnding.CRLF
    doc.set_text(doc.text + "c\n")
    doc.save()
    assert path.read_bytes() == b"a\r\nb\r\nc\r\n"


def test_close_forgets_file(sample):
    doc = Document()
    doc.open(str(sample), "UTF-8")
    doc.close()
    assert doc.text == ""
    assert doc.fi.filename is None
    assert doc.fi.charset is None
    assert doc.fi.lineend == LineEnding.LF
    assert doc.modified is False


def test_select_all_and_selected_text():
    doc = Document()
    doc.set_text("abc def")
    assert doc.select_all() == (0, len("abc def"))
    assert doc.cursor == len("abc def")
    assert doc.selected_text() == "abc def"


def test_delete_selection_removes_text():
    doc = Document()
    doc.set_text("abc def")
    doc.find("def")
    assert doc.delete_selection() is True
    assert doc.text == "abc "
    assert doc.selection == (4, 4)
    assert doc.delete_selection() is False


def test_find_forward_moves_through_matches():
    doc = Document()
    doc.set_text("hello world\nWorld again\n")
    first = doc.find("world", SearchFlags.CASE_INSENSITIVE)
    assert doc.text[first[0]:first[1]] == "world"
    second = doc.find("world", SearchFlags.CASE_INSENSITIVE)
    assert doc.text[second[0]:second[1]] == "World"
    assert second[0] > first[0]
    assert doc.selected_text() == "World"
    assert doc.find("world", SearchFlags.CASE_INSENSITIVE) is None


def test_find_case_sensitive_skips_other_case():
    doc = Document()
    doc.set_text("World world")
    found = doc.find("world")
    assert found == (6, 11)


def test_find_backward_from_selection():
    doc = Document()
    doc.set_text("ab ab ab")
    doc.select_all()
    doc._place(len(doc.text), len(doc.text))
    last = doc.find("ab", backward=True)
    assert last == (6, 8)
    previous = doc.find("ab", backward=True)
    assert previous == (3, 5)


def test_highlight_toggle_and_clear_on_change():
    doc = Document()
    doc.set_text("one two one")
    assert doc.toggle_highlight() is True
    match = doc.find("one")
    assert doc.highlights == [match]
    doc.set_text("other")
    assert doc.highlighting is False
    assert doc.highlights == []


def test_highlight_toggle_off_clears():
    doc = Document()
    doc.set_text("xx")
    doc.toggle_highlight()
    doc.find("x")
    assert doc.toggle_highlight() is False
    assert doc.highlights == []


def test_drop_uris_opens_first_and_returns_rest(tmp_path):
    first = tmp_path / "first.txt"
    first.write_bytes(b"dropped\n")
    second = tmp_path / "second.txt"
    data = f"{first.as_uri()}\n{second}\n"
    doc = Document()
    rest = doc.drop_uris(data)
    assert doc.text == "dropped\n"
    assert doc.fi.filename == str(first)
    assert rest == [str(second)]


def test_drop_uris_empty_list_leaves_document():
    doc = Document()
    doc.set_text("keep")
    assert doc.drop_uris("") == []
    assert doc.text == "keep"