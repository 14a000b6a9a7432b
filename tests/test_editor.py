import io

import pytest

from filesys.editor import MAX_EDIT_LINES, Editor, join_lines, split_lines
from filesys.fsstate import FileSystem


def run_editor(content, script):
    fs = FileSystem()
    record = fs.create_entry("/notes.txt")
    if content:
        fs.set_content_by_name("notes.txt", content)
    out = io.StringIO()
    editor = Editor(fs, record, io.StringIO(script), out)
    editor.run()
    return record, editor, out.getvalue()


def test_split_lines_skips_empty_lines():
    assert split_lines("a\n\nb\n") == ["a", "b"]


def test_split_lines_of_empty_content():
    assert split_lines("") == []
    assert split_lines(None) == []


def test_split_lines_too_many_lines():
    with pytest.raises(ValueError):
        split_lines("x\n" * (MAX_EDIT_LINES + 1))


def test_join_then_split_round_trip():
    lines = ["first", "second line", "third"]
    joined = join_lines(lines)
    assert joined.endswith("\n")
    assert joined.count("\n") == len(lines)
    assert split_lines(joined) == lines


def test_join_empty():
    assert join_lines([]) == ""


def test_insert_and_write_quit_saves():
    record, editor, out = run_editor("", ":i\nhello\nworld\n.\n:wq\n")
    assert split_lines(record.content) == ["hello", "world"]
    assert record.size == len(record.content)
    assert "Saved 'notes.txt'" in out


def test_delete_line():
    record, _, out = run_editor("a\nb\nc\n", ":d 2\n:wq\n")
    assert split_lines(record.content) == ["a", "c"]
    assert "Deleted line 2." in out


def test_replace_line():
    record, _, _ = run_editor("a\nb\n", ":r 1\nz\n:wq\n")
    assert split_lines(record.content) == ["z", "b"]


def test_insert_before_line():
    record, _, _ = run_editor("a\nb\n", ":i 1\nstart\n.\n:wq\n")
    assert split_lines(record.content) == ["start", "a", "b"]


def test_append_after_line():
    record, _, _ = run_editor("a\nb\n", ":a 1\nmid\n.\n:wq\n")
    assert split_lines(record.content) == ["a", "mid", "b"]


def test_invalid_line_number_leaves_content():
    record, editor, out = run_editor("a\n", ":d 5\n:q\n")
    assert "Invalid line number. Valid range: 1 to 1" in out
    assert editor.lines == ["a"]
    assert split_lines(record.content) == ["a"]


def test_quit_with_changes_warns_and_keeps_content():
    record, _, out = run_editor("a\n", ":d 1\n:q\n:q\n")
    assert "Unsaved changes." in out
    assert "Edit cancelled." in out
    assert split_lines(record.content) == ["a"]


def test_quit_without_changes():
    _, _, out = run_editor("a\n", ":q\n")
    assert "Exited editor without saving." in out
    assert "Edit cancelled." not in out


def test_write_then_quit():
    record, _, out = run_editor("", ":a\nline\n.\n:w\n:q\n")
    assert split_lines(record.content) == ["line"]
    assert "Exited editor without saving." in out


def test_unknown_command():
    _, _, out = run_editor("", ":zz\n:q\n")
    assert "Unknown editor command. Type :help for options." in out


def test_print_lines_numbered():
    _, _, out = run_editor("a\n", ":p\n:q\n")
    assert "   1  a" in out


def test_empty_file_shown():
    _, _, out = run_editor("", ":q\n")
    assert "[empty file]" in out


def test_insert_ends_on_eof():
    _, editor, out = run_editor("", ":i\nx\n")
    assert "Insert ended." in out
    assert editor.lines == ["x"]