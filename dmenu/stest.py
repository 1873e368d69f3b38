"""Filter a list of files by properties, like test(1) applied to many files."""

from __future__ import annotations

import os
import stat
import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from dmenu.args import UsageError, parse_flags

OPERATORS = "abcdefghlpqrsuvwx"
USAGE = "usage: stest [-abcdefghlpqrsuvwx] [-n file] [-o file] [file...]"


@dataclass(frozen=True)
class Filter:
    """A set of test flags plus optional modification-time bounds."""

    flags: frozenset[str] = frozenset()
    newer_than: int | None = None
    older_than: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "flags", frozenset(self.flags))

    def _passes(self, path: str, name: str) -> bool:
        try:
            st = os.stat(path)
        except OSError:
            return False
        flags = self.flags
        mode = st.st_mode
        mtime = int(st.st_mtime)
        checks = (
            ("a" in flags or not name.startswith(".")),
            ("b" not in flags or stat.S_ISBLK(mode)),
            ("c" not in flags or stat.S_ISCHR(mode)),
            ("d" not in flags or stat.S_ISDIR(mode)),
            ("e" not in flags or os.access(path, os.F_OK)),
            ("f" not in flags or stat.S_ISREG(mode)),
            ("g" not in flags or bool(mode & stat.S_ISGID)),
            ("h" not in flags or _is_symlink(path)),
            (self.newer_than is None or mtime > self.newer_than),
            (self.older_than is None or mtime < self.older_than),
            ("p" not in flags or stat.S_ISFIFO(mode)),
            ("r" not in flags or os.access(path, os.R_OK)),
            ("s" not in flags or st.st_size > 0),
            ("u" not in flags or bool(mode & stat.S_ISUID)),
            ("w" not in flags or os.access(path, os.W_OK)),
            ("x" not in flags or os.access(path, os.X_OK)),
        )
        return all(checks)

    def matches(self, path: str, name: str | None = None) -> bool:
        """Tell whether ``path`` passes every test; ``-v`` inverts the result."""
        return self._passes(path, path if name is None else name) != ("v" in self.flags)


def _is_symlink(path: str) -> bool:
    try:
        return stat.S_ISLNK(os.lstat(path).st_mode)
    except OSError:
        return False


def iter_candidates(
    paths: Iterable[str], list_dirs: bool, lines: Iterable[str]
) -> Iterator[tuple[str, str]]:
    """Yield ``(path, name)`` pairs to test.

    Without paths, each line of ``lines`` is a candidate. With ``list_dirs``,
    a directory stands for its entries, ``.`` and ``..`` included.
    """
    paths = list(paths)
    if not paths:
        for line in lines:
            name = line[:-1] if line.endswith("\n") else line
            yield name, name
        return
    for path in paths:
        if list_dirs:
            try:
                entries = os.listdir(path)
            except OSError:
                pass
            else:
                for entry in [".", "..", *entries]:
                    yield f"{path}/{entry}", entry
                continue
        yield path, path


def _usage() -> int:
    print(USAGE, file=sys.stderr)
    return 2


def main(argv: list[str] | None = None) -> int:
    """Run the file tester; returns 0 if anything matched, 1 if not, 2 on misuse."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        flags, operands = parse_flags(args, {"n", "o"})
    except UsageError:
        return _usage()

    letters: set[str] = set()
    times: dict[str, int] = {}
    for letter, value in flags:
        if value is not None:
            try:
                times[letter] = int(os.stat(value).st_mtime)
            except OSError as exc:
                times.pop(letter, None)
                print(f"{value}: {exc.strerror}", file=sys.stderr)
        elif letter in OPERATORS:
            letters.add(letter)
        else:
            return _usage()

    test = Filter(frozenset(letters), times.get("n"), times.get("o"))
    matched = False
    for path, name in iter_candidates(operands, "l" in letters, sys.stdin):
        if test.matches(path, name):
            if "q" in letters:
                return 0
            matched = True
            print(name)
    return 0 if matched else 1


if __name__ == "__main__":
    sys.exit(main())