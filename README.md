# dmenu

A dynamic menu for the terminal. `dmenu` reads newline-separated items
from standard input, lets you narrow them down by typing, and prints the
chosen item to standard output. The menu itself is drawn with curses on
the controlling terminal (`/dev/tty`), so it works inside a pipeline.

The package also ships `stest`, a filter that prints the files which pass
a set of tests; it is handy for building the item list.

## Installation

```sh
pip install .
```

## dmenu

```sh
printf 'firefox\nfoot\nthunar\n' | dmenu -p 'run:'
```

Typed text is split on spaces into tokens; an item is shown only if it
contains every token. Items equal to the whole input come first, then
items that start with the first token, then the remaining matches; each
group keeps the input order. Matching is case-insensitive unless `-s` is
given. Matched parts of the shown items are highlighted.

The exit status is 0 when something was printed and the menu closed, 1
when it was left with Escape or on an error.

Options:

| Option        | Meaning                                                        |
|---------------|----------------------------------------------------------------|
| `-v`          | print `dmenu-5.2` and exit                                     |
| `-b`          | place the menu at the bottom of the terminal                   |
| `-c`          | center the menu; its width is at least 500 cells or the terminal width |
| `-s`          | case-sensitive matching                                        |
| `-ix`         | print the index of the selected item (or `-1`), not its text   |
| `-l lines`    | show items in a vertical list of that many lines, with the date and time under it |
| `-p prompt`   | prompt shown to the left of the input field                    |
| `-nb` `-nf` `-sb` `-sf` `color` | normal/selected background and foreground, as `#rgb` or `#rrggbb` |
| `-f`, `-m`, `-fn`, `-w`, `-bw` | accepted for compatibility; they change nothing in the terminal |

Any other option, or an option missing its value, prints the usage text
and exits with status 1.

Colours are mapped to the nearest of the terminal's colours. Defaults for
`dmenu.background`, `dmenu.foreground`, `dmenu.selbackground`,
`dmenu.selforeground`, `dmenu.highlight` and `dmenu.selhighlight` are
read from `~/.Xresources` if it exists; command-line colours win.

Keys:

- `Return` (or `Ctrl+J`, `Ctrl+M`) prints the selected item, or the typed
  text when nothing matches, and exits with status 0.
- `Escape`, `Ctrl+C`, `Ctrl+G` exit with status 1 without printing.
- `Tab` (`Ctrl+I`) completes the input to the selected item.
- `Up`/`Down` (`Ctrl+P`/`Ctrl+N`, `Alt+H`/`Alt+L`) move the selection;
  `Page Up`/`Page Down` (`Alt+K`/`Alt+J`) move by a page;
  `Home`/`End` (`Alt+G`/`Alt+Shift+G`) go to the first/last item, or move
  the cursor to the start/end of the input first.
- `Left`/`Right` (`Ctrl+B`/`Ctrl+F`) move the cursor, or the selection in
  a horizontal menu; `Ctrl+A`/`Ctrl+E` act as `Home`/`End`;
  `Alt+B`/`Alt+F` move by a word.
- `Backspace`/`Ctrl+H` and `Delete`/`Ctrl+D` delete a character, `Ctrl+W`
  a word, `Ctrl+U` to the start of the line, `Ctrl+K` to the end.

## stest

```sh
stest -flx /usr/bin /usr/local/bin | sort -u | dmenu
```

With no file arguments, `stest` reads paths from standard input. It
prints every path that passes all the given tests and exits with 0 if any
path matched, 1 if none did, and 2 on a usage error. Flags may be
clustered (`-flx`).

| Flag      | Test                                            |
|-----------|-------------------------------------------------|
| `-a`      | include hidden files                            |
| `-b`      | block special                                   |
| `-c`      | character special                               |
| `-d`      | directory                                       |
| `-e`      | exists                                          |
| `-f`      | regular file                                    |
| `-g`      | set-group-id                                    |
| `-h`      | symbolic link                                   |
| `-l`      | test the entries of each directory argument, `.` and `..` included |
| `-n file` | newer than `file`                               |
| `-o file` | older than `file`                               |
| `-p`      | named pipe                                      |
| `-q`      | quiet: exit 0 at the first match, print nothing |
| `-r`      | readable                                        |
| `-s`      | not empty                                       |
| `-u`      | set-user-id                                     |
| `-v`      | invert the result                               |
| `-w`      | writable                                        |
| `-x`      | executable                                      |

If the file given to `-n` or `-o` cannot be read, an error is printed and
that test is left out.

## Using it as a library

- `dmenu.matching.match_items(items, text, case_sensitive=False)` orders
  strings (or objects with a `text` attribute) as the menu does;
  `highlight_spans` gives the ranges that would be highlighted.
- `dmenu.menu.Menu` holds items, input, cursor, selection and paging
  without any display; `Menu.handle_key(key, text, ctrl, alt, shift)`
  applies a key press and returns an `Outcome` telling what to print,
  whether to exit, or which selection to paste. `Menu.paste(s)` inserts
  text up to its first newline.
- `dmenu.stest.Filter(flags, newer_than, older_than).matches(path, name)`
  runs the file tests in-process.

## Limits

- The menu runs in a terminal only; there is no graphical window, so
  fonts, monitor choice, embedding into another window and window
  borders are not supported.
- Pasting with `Ctrl+Y` is not carried out by the terminal front end, and
  `Shift+Return` and `Ctrl+Return` cannot be told apart from `Return` in a
  terminal. `Menu` itself supports all three.

## Development

```sh
pip install -e '.[test]'
pytest
```