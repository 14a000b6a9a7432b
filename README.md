# filesys

A small interactive shell over a simulated file system. Files and
directories exist only in memory, so nothing on your real disk is touched.
You can create entries, open them with read and write modes, edit their
contents in a line editor like vi, and search the index.

## Installation

```
pip install .
```

## Running the shell

```
filesys
```

The prompt is `{'e' to Exit} > `. The up and down arrows move through the
last ten commands, backspace deletes a character, Ctrl+L clears the screen,
`clear` clears it too, and `e` (or end of input) quits. An input line holds
at most 99 characters.

## Commands

```
createF <file>                 create a file
createF -mkdir <path>          create a directory (-mkDir also works)
openF [-r | -w | -rw] <file>   open a file and get a descriptor (-r if no option)
openF -list                    list files that have no open descriptor
openF -content <file>          print a file's contents
openF -edit <file>             edit a file in the line editor
closeF <fd>                    close a descriptor
closeF -list                   list open descriptors
searchF <file>                 print the full path of a file or directory
searchF -dirL                  list every entry (-dirl also works)
help                           show the manual page
```

Paths may use `/` or `\` as the separator; repeated separators collapse and
a path without a leading separator is rooted at `/`. The last part of a path
counts as a file if it holds a dot after its first character (`report.txt`),
and as a directory otherwise (`docs`, `.profile`). `createF` refuses a
directory-looking path without `-mkdir`, and a file-looking path with it.
Parent directories are not required to exist.

`openF` and `searchF` look a path up first; if nothing is there and the
argument has no separator, they look for an entry by name, ignoring case.

Descriptors start at 3 and keep counting up; at most 32 can be open at once.
A file that is open, but only with `-w`, cannot be shown with `-content`. A
file that is open, but only with `-r`, cannot be edited with `-edit`.

### Editor commands

```
:p           print the buffer with line numbers
:i [line]    insert text before a line (at the end if no line is given)
:a [line]    append text after a line (at the end if no line is given)
:d <line>    delete a line
:r <line>    replace a line
:w           save
:wq          save and quit
:q           quit; refused while there are unsaved changes
:help        list the editor commands
```

In insert or append mode, a line holding only `.` ends text entry. To leave
with unsaved changes, save with `:w` or `:wq` first. End of input leaves the
editor without saving. Empty lines are dropped when a file is loaded, and a
file holds at most 4095 characters.

## Using it from Python

```python
from filesys.fsstate import FileSystem
from filesys.openfiles import OpenFileTable
from filesys.commands import Shell
from filesys.parser import parse_instruct

fs = FileSystem()
shell = Shell(fs, OpenFileTable())
parse_instruct(shell, "createF -mkdir \\docs")
parse_instruct(shell, "createF \\docs\\report.txt")
parse_instruct(shell, "openF -rw report.txt")
parse_instruct(shell, "searchF -dirL")
```

`Shell` takes optional `stdin` and `stdout` streams, which the commands and
the editor use instead of the process's own.

`FileSystem` holds the entries, each a `FileRecord` with `name`, `path`,
`inode`, `is_directory`, `content` and `size`. It can be used on its own:
`create_entry`, `insert_file`, `find_by_path`, `find_by_name` (which ignores
case), `entries`, and `set_content_by_name`. Invalid paths and failed
changes raise `FileSystemError`. The module also has the path helpers
`normalize_path`, `extract_file_name` and `is_directory_path`.

`OpenFileTable` in `filesys.openfiles` hands out `OpenFile` handles with
`open(name, mode)`, where the mode is an `OpenMode` or `"r"`, `"w"`, `"rw"`;
`close(fd)` raises `KeyError` for an unknown descriptor, and a full table
raises `TooManyOpenFiles`.

`filesys.editor` has `split_lines`, `join_lines` and the `Editor` class
behind `openF -edit`; `filesys.cli` has `read_line` and `run_shell`, which
take a function returning one character at a time and a function that
writes text.

## What it does not do

Everything lives in memory for one session: nothing is saved to or loaded
from disk. Entries cannot be deleted, renamed or moved, and directories are
only names in the index, with no listing of their own contents.