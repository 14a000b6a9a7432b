import io

from filesys.commands import Shell
from filesys.editor import split_lines
from filesys.fsstate import FileSystem
from filesys.openfiles import FIRST_FD, OpenFileTable, OpenMode


def make_shell(stdin_text="", capacity=32):
    fs = FileSystem()
    table = OpenFileTable(capacity=capacity)
    out = io.StringIO()
    shell = Shell(fs, table, io.StringIO(stdin_text), out)
    return fs, table, shell, out


def test_create_file_then_search():
    fs, _, shell, out = make_shell()
    shell.create("", "report.txt")
    record = fs.find_by_name("report.txt")
    assert record is not None and not record.is_directory
    assert f"created file '{record.path}'" in out.getvalue()
    shell.search("", "REPORT.TXT")
    assert out.getvalue().endswith(f"file: {record.path}\n")


def test_create_usage():
    _, _, shell, out = make_shell()
    shell.create("", "")
    assert out.getvalue().startswith("usage: createF <file>")


def test_create_duplicate():
    fs, _, shell, out = make_shell()
    shell.create("", "a.txt")
    shell.create("", "a.txt")
    assert "File exists" in out.getvalue()
    assert len(fs) == 1


def test_create_directory_like_name_refused():
    fs, _, shell, out = make_shell()
    shell.create("", "docs")
    assert "looks like a directory path" in out.getvalue()
    assert len(fs) == 0


def test_mkdir_with_extension_refused():
    fs, _, shell, out = make_shell()
    shell.create("-mkdir", "a.txt")
    assert "final path component must not be a file" in out.getvalue()
    assert len(fs) == 0


def test_mkdir_creates_directory():
    fs, _, shell, out = make_shell()
    shell.create("-mkDir", "\\docs\\projects")
    record = fs.find_by_name("projects")
    assert record is not None and record.is_directory
    assert f"created directory '{record.path}'" in out.getvalue()


def test_open_default_mode_is_read():
    fs, table, shell, out = make_shell()
    shell.create("", "a.txt")
    shell.open("", "a.txt")
    handles = table.handles()
    assert len(handles) == 1
    assert handles[0].mode is OpenMode.READ
    assert handles[0].fd == FIRST_FD


def test_open_invalid_option():
    fs, table, shell, out = make_shell()
    shell.create("", "a.txt")
    shell.open("-x", "a.txt")
    assert "openF: invalid option '-x'" in out.getvalue()
    assert table.handles() == []


def test_open_missing_and_directory():
    fs, table, shell, out = make_shell()
    shell.create("-mkdir", "dir")
    shell.open("", "missing.txt")
    shell.open("-rw", "dir")
    text = out.getvalue()
    assert "cannot open 'missing.txt': No such file" in text
    assert "cannot open 'dir': No such file" in text
    assert table.handles() == []


def test_open_too_many():
    fs, table, shell, out = make_shell(capacity=1)
    shell.create("", "a.txt")
    shell.open("-r", "a.txt")
    shell.open("-w", "a.txt")
    assert out.getvalue().endswith("openF: too many open files\n")
    assert len(table.handles()) == 1


def test_close_and_close_list():
    fs, table, shell, out = make_shell()
    shell.create("", "a.txt")
    shell.open("-w", "a.txt")
    fd = table.handles()[0].fd
    shell.close("-list", "")
    assert f"  fd {fd}  a.txt  (w)" in out.getvalue()
    shell.close("", str(fd))
    assert f"closed fd {fd}" in out.getvalue()
    assert table.handles() == []
    shell.close("-list", "")
    assert out.getvalue().endswith("  (none)\n")


def test_close_invalid_descriptor():
    _, _, shell, out = make_shell()
    shell.close("", "abc")
    assert "closeF: invalid file descriptor 'abc'" in out.getvalue()
    shell.close("", "")
    assert out.getvalue().endswith("usage: closeF <fd>\n")


def test_search_empty_and_not_found():
    _, _, shell, out = make_shell()
    shell.search("-dirl", "")
    shell.search("", "nothing.txt")
    lines = out.getvalue().splitlines()
    assert lines == ["(empty)", "searchF: 'nothing.txt' not found"]


def test_help_text():
    _, _, shell, out = make_shell()
    shell.help("", "")
    text = out.getvalue()
    assert text.startswith("FILESYS(1)")
    assert "createF -mkdir \\docs\\projects" in text


def test_show_content_prints_body():
    fs, _, shell, out = make_shell()
    shell.create("", "a.txt")
    fs.set_content_by_name("a.txt", "hello")
    shell.open("-content", "a.txt")
    assert "hello\n----------------\n" in out.getvalue()


def test_show_content_needs_read_permission():
    fs, _, shell, out = make_shell()
    shell.create("", "a.txt")
    shell.open("-w", "a.txt")
    shell.open("-content", "a.txt")
    assert "file is currently open without read permission" in out.getvalue()


def test_edit_needs_write_permission():
    fs, _, shell, out = make_shell(":i\nx\n.\n:wq\n")
    shell.create("", "a.txt")
    shell.open("-r", "a.txt")
    shell.open("-edit", "a.txt")
    assert "file is currently open without write permission" in out.getvalue()
    assert fs.find_by_name("a.txt").content == ""


def test_edit_through_shell_saves():
    fs, _, shell, out = make_shell(":i\nalpha\n.\n:wq\n")
    shell.create("", "a.txt")
    shell.open("-edit", "a.txt")
    assert split_lines(fs.find_by_name("a.txt").content) == ["alpha"]


def test_list_closed_excludes_open_files():
    fs, _, shell, out = make_shell()
    shell.create("", "a.txt")
    shell.create("", "b.txt")
    shell.open("", "a.txt")
    shell.open("-list", "")
    text = out.getvalue()
    listed = text.split("Closed files available to open:\n", 1)[1].splitlines()
    assert listed == ["  " + fs.find_by_name("b.txt").path]