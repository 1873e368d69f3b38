"""Terminal front end: reads items from stdin, lets the user pick one."""

from __future__ import annotations

import curses
import io
import locale
import os
import re
import sys
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import IO, TextIO

from dmenu.args import UsageError
from dmenu.config import Config, Scheme, parse_xresources
from dmenu.matching import highlight_spans
from dmenu.menu import Item, Key, Menu
from dmenu.textwidth import TextMeasurer
from dmenu.util import FatalError, die

VERSION = "5.2"
USAGE = (
    "usage: dmenu [-bfiv] [-l lines] [-p prompt] [-fn font] [-m monitor]\n"
    "             [-nb color] [-nf color] [-sb color] [-sf color] [-w windowid]"
)
DATE_FORMAT = "%H:%M %A %d %B %Y"

#: Left plus right padding around text, in cells.
LRPAD = 2

_COLOR_OPTIONS = {
    "-nb": (Scheme.NORM, "bg"),
    "-nf": (Scheme.NORM, "fg"),
    "-sb": (Scheme.SEL, "bg"),
    "-sf": (Scheme.SEL, "fg"),
}

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _atoi(value: str) -> int:
    found = _INT_PREFIX.match(value)
    return int(found.group(1)) if found else 0


@dataclass
class _Options:
    config: Config = field(default_factory=Config)
    version: bool = False
    fast: bool = False
    case_sensitive: bool = False
    print_index: bool = False
    monitor: int = -1
    embed: str | None = None
    font: str | None = None
    colors: dict[tuple[Scheme, str], str] = field(default_factory=dict)

    def apply_overrides(self) -> None:
        """Apply font and colour options on top of the configuration."""
        if self.font is not None:
            if self.config.fonts:
                self.config.fonts[0] = self.font
            else:
                self.config.fonts.append(self.font)
        for (scheme, part), value in self.colors.items():
            self.config.colors[scheme] = self.config.colors[scheme]._replace(**{part: value})


def parse_args(argv: Iterable[str]) -> _Options:
    """Parse the command line; raises :class:`UsageError` on misuse.

    ``-v`` stops parsing at once and sets ``version``.
    """
    options = _Options()
    config = options.config
    args = iter(argv)
    for arg in args:
        if arg == "-v":
            options.version = True
            return options
        if arg == "-b":
            config.topbar = False
        elif arg == "-f":
            options.fast = True
        elif arg == "-c":
            config.centered = True
        elif arg == "-s":
            options.case_sensitive = True
        elif arg == "-ix":
            options.print_index = True
        else:
            value = next(args, None)
            if value is None:
                raise UsageError(USAGE)
            if arg == "-l":
                config.lines = _atoi(value)
            elif arg == "-m":
                options.monitor = _atoi(value)
            elif arg == "-p":
                config.prompt = value
            elif arg == "-fn":
                options.font = value
            elif arg in _COLOR_OPTIONS:
                options.colors[_COLOR_OPTIONS[arg]] = value
            elif arg == "-w":
                options.embed = value
            elif arg == "-bw":
                config.border_width = _atoi(value)
            else:
                raise UsageError(USAGE)
    return options


def read_items(stream: Iterable[str]) -> list[Item]:
    """Turn each line of ``stream`` into an item, dropping the trailing newline."""
    return [
        Item(line[:-1] if line.endswith("\n") else line, index)
        for index, line in enumerate(stream)
    ]


def format_date(now: datetime | None = None) -> str:
    """Format the clock shown under a vertical list."""
    return (now or datetime.now()).strftime(DATE_FORMAT)


# Colours

_BASIC_COLORS = (
    (curses.COLOR_BLACK, (0, 0, 0)),
    (curses.COLOR_RED, (205, 0, 0)),
    (curses.COLOR_GREEN, (0, 205, 0)),
    (curses.COLOR_YELLOW, (205, 205, 0)),
    (curses.COLOR_BLUE, (0, 0, 238)),
    (curses.COLOR_MAGENTA, (205, 0, 205)),
    (curses.COLOR_CYAN, (0, 205, 205)),
    (curses.COLOR_WHITE, (229, 229, 229)),
)
_CUBE_LEVELS = (0, 95, 135, 175, 215, 255)


def _parse_hex(color: str) -> tuple[int, int, int] | None:
    digits = color.lstrip("#")
    if not color.startswith("#") or len(digits) not in (3, 6):
        return None
    try:
        if len(digits) == 3:
            return tuple(int(d * 2, 16) for d in digits)  # type: ignore[return-value]
        return tuple(int(digits[i : i + 2], 16) for i in (0, 2, 4))  # type: ignore[return-value]
    except ValueError:
        return None


def _color_number(color: str, available: int) -> int:
    rgb = _parse_hex(color)
    if rgb is None:
        return -1
    if available >= 256:
        r, g, b = (
            min(range(6), key=lambda i, c=c: abs(_CUBE_LEVELS[i] - c)) for c in rgb
        )
        return 16 + 36 * r + 6 * g + b
    return min(
        _BASIC_COLORS,
        key=lambda entry: sum((a - b) ** 2 for a, b in zip(entry[1], rgb)),
    )[0]


def _scheme_attrs(config: Config) -> dict[Scheme, int]:
    if not curses.has_colors():
        return {
            Scheme.NORM: curses.A_NORMAL,
            Scheme.SEL: curses.A_REVERSE,
            Scheme.OUT: curses.A_UNDERLINE,
            Scheme.NORM_HIGHLIGHT: curses.A_BOLD,
            Scheme.SEL_HIGHLIGHT: curses.A_REVERSE | curses.A_BOLD,
        }
    try:
        curses.use_default_colors()
    except curses.error:
        pass
    numbers = {
        scheme: (
            _color_number(pair.fg, curses.COLORS),
            _color_number(pair.bg, curses.COLORS),
        )
        for scheme, pair in config.colors.items()
    }
    attrs: dict[Scheme, int] = {}
    for number, scheme in enumerate(Scheme, start=1):
        fg, bg = numbers[scheme]
        try:
            curses.init_pair(number, fg, bg)
            attr = curses.color_pair(number)
        except curses.error:
            attr = curses.A_NORMAL
        if scheme in (Scheme.NORM_HIGHLIGHT, Scheme.SEL_HIGHLIGHT):
            attr |= curses.A_BOLD
        attrs[scheme] = attr
    if numbers[Scheme.SEL] == numbers[Scheme.NORM]:
        attrs[Scheme.SEL] |= curses.A_REVERSE
        attrs[Scheme.SEL_HIGHLIGHT] |= curses.A_REVERSE
    return attrs


# Drawing


class _View:
    """Draws a menu into a curses window."""

    def __init__(self, window, menu: Menu, prompt: str | None, attrs: dict[Scheme, int]):
        self.window = window
        self.menu = menu
        self.prompt = prompt
        self.attrs = attrs
        self.width = menu.width

    def _textw(self, text: str) -> int:
        return self.menu.measurer.width(text) + self.menu.lrpad

    def _textw_clamp(self, text: str, limit: int) -> int:
        return min(self.menu.measurer.width_clamp(text, limit) + self.menu.lrpad, limit)

    def _addstr(self, y: int, x: int, text: str, attr: int) -> None:
        try:
            self.window.addstr(y, x, text, attr)
        except curses.error:
            pass  # writing the last cell of a window moves the cursor off it

    def put(self, x: int, y: int, w: int, text: str, scheme: Scheme, lpad: int = 0) -> int:
        if w <= 0:
            return x
        attr = self.attrs[scheme]
        visible = min(w, self.width - x)
        if visible > 0 and x >= 0:
            self._addstr(y, x, " " * visible, attr)
            shown = self.menu.measurer.fit(text, min(w, self.width - x) - lpad)
            if shown:
                self._addstr(y, x + lpad, shown, attr)
        return x + w

    def _draw_item(self, item: Item, x: int, y: int, w: int) -> int:
        menu = self.menu
        if item is menu.selected:
            scheme = Scheme.SEL
        elif item.out:
            scheme = Scheme.OUT
        else:
            scheme = Scheme.NORM
        result = self.put(x, y, w, item.text, scheme, menu.lrpad // 2)
        highlight = Scheme.SEL_HIGHLIGHT if item is menu.selected else Scheme.NORM_HIGHLIGHT
        for start, end in highlight_spans(item.text, menu.text, menu.case_sensitive):
            indent = self._textw(item.text[:start])
            if indent - menu.lrpad // 2 < w:
                part = item.text[start:end]
                self.put(
                    x + indent - menu.lrpad // 2,
                    y,
                    min(w - indent, self._textw(part) - menu.lrpad),
                    part,
                    highlight,
                )
        return result

    def draw(self) -> None:
        menu = self.menu
        pad = menu.lrpad // 2
        self.window.erase()
        self.window.bkgd(" ", self.attrs[Scheme.NORM])
        x = 0
        if self.prompt:
            x = self.put(0, 0, menu.prompt_width, self.prompt, Scheme.SEL, pad)
        w = self.width - x if (menu.lines > 0 or not menu.matches) else menu.input_width
        assert w is not None
        self.put(x, 0, w, menu.text, Scheme.NORM, pad)
        cursor_x = x + menu.measurer.width(menu.text[: menu.cursor]) + pad
        show_cursor = cursor_x - x < w and cursor_x < self.width

        if menu.lines > 0:
            for y, item in enumerate(menu.visible(), start=1):
                self._draw_item(item, x, y, self.width - x)
            self.put(
                x - menu.prompt_width,
                menu.lines + 1,
                w + menu.prompt_width,
                format_date(),
                Scheme.SEL,
                pad,
            )
        elif menu.matches:
            assert menu.input_width is not None
            x += menu.input_width
            w = self._textw("<")
            if menu.curr:
                self.put(x, 0, w, "<", Scheme.NORM, pad)
            x += w
            for item in menu.visible():
                x = self._draw_item(
                    item, x, 0, self._textw_clamp(item.text, self.width - x - self._textw(">"))
                )
            if menu.next is not None:
                w = self._textw(">")
                self.put(self.width - w, 0, w, ">", Scheme.NORM, pad)

        try:
            curses.curs_set(1 if show_cursor else 0)
        except curses.error:
            pass
        if show_cursor:
            try:
                self.window.move(0, cursor_x)
            except curses.error:
                pass
        self.window.refresh()


# Keyboard

_CURSES_KEYS = {
    curses.KEY_HOME: Key.HOME,
    curses.KEY_END: Key.END,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_NPAGE: Key.PAGE_DOWN,
    curses.KEY_PPAGE: Key.PAGE_UP,
    curses.KEY_BACKSPACE: Key.BACKSPACE,
    curses.KEY_DC: Key.DELETE,
    curses.KEY_ENTER: Key.RETURN,
}

_Event = tuple[Key | str | None, str, bool, bool]

_REFRESH_MS = 1000


def _translate(window, ch: int | str) -> _Event | None:
    if isinstance(ch, int):
        key = _CURSES_KEYS.get(ch)
        return None if key is None else (key, "", False, False)
    if ch == "\x1b":
        window.nodelay(True)
        try:
            following = window.get_wch()
        except curses.error:
            following = None
        finally:
            window.timeout(_REFRESH_MS)
        if isinstance(following, str) and following.isprintable():
            return following, following, False, True
        return Key.ESCAPE, "", False, False
    if ch == "\x7f":
        return Key.BACKSPACE, "", False, False
    code = ord(ch)
    if 0 < code < 27:
        return chr(code + 96), ch, True, False
    if code == 0:
        return None
    return ch, ch, False, False


# Running


def _stdin_lines() -> Iterator[str]:
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        yield from sys.stdin
        return
    yield from io.TextIOWrapper(buffer, encoding="utf-8", errors="replace", newline="\n")


def _load_resources() -> dict[str, str]:
    try:
        path = Path.home() / ".Xresources"
        return parse_xresources(path.read_text(encoding="utf-8", errors="replace"))
    except (OSError, RuntimeError):
        return {}


@contextmanager
def _terminal() -> Iterator[TextIO]:
    """Attach stdin and stdout to the controlling terminal.

    Yields a stream that writes to the original standard output.
    """
    sys.stdout.flush()
    try:
        tty = os.open("/dev/tty", os.O_RDWR)
    except OSError:
        die("cannot open terminal:")
    saved_in, saved_out = os.dup(0), os.dup(1)
    out: IO[str] = os.fdopen(os.dup(saved_out), "w", encoding="utf-8", errors="replace")
    try:
        os.dup2(tty, 0)
        os.dup2(tty, 1)
        yield out  # type: ignore[misc]
    finally:
        out.close()
        os.dup2(saved_in, 0)
        os.dup2(saved_out, 1)
        for fd in (tty, saved_in, saved_out):
            os.close(fd)


def _session(stdscr, options: _Options, items: list[Item], out: TextIO) -> int:
    config = options.config
    curses.raw()
    measurer = TextMeasurer()
    rows, cols = stdscr.getmaxyx()

    lines = len(items) if config.lines < 0 else min(config.lines, len(items))
    lines = min(lines, max(rows - 2, 0))
    height = min(lines + 2 if lines > 0 else 1, rows)
    prompt = config.prompt or None
    prompt_width = measurer.width(prompt) + LRPAD - LRPAD // 4 if prompt else 0

    if config.centered:
        widest = max((measurer.width(item.text) + LRPAD for item in items), default=0)
        width = min(max(widest + prompt_width, config.min_width), cols)
        x0, y0 = (cols - width) // 2, (rows - height) // 2
    else:
        width = cols
        x0, y0 = 0, 0 if config.topbar else rows - height

    menu = Menu(
        items=items,
        lines=lines,
        width=width,
        prompt_width=prompt_width,
        bar_height=1,
        lrpad=LRPAD,
        case_sensitive=options.case_sensitive,
        print_index=options.print_index,
        word_delimiters=config.word_delimiters,
        measurer=measurer,
    )
    window = curses.newwin(height, width, y0, x0)
    window.keypad(True)
    window.timeout(_REFRESH_MS)
    view = _View(window, menu, prompt, _scheme_attrs(config))

    while True:
        view.draw()
        try:
            ch = window.get_wch()
        except curses.error:
            continue
        event = _translate(window, ch)
        if event is None:
            continue
        outcome = menu.handle_key(*event)
        if outcome.output is not None:
            out.write(outcome.output + "\n")
            out.flush()
        if outcome.exit_code is not None:
            return outcome.exit_code


def _run(options: _Options, items: list[Item]) -> int:
    with _terminal() as out:
        os.environ.setdefault("ESCDELAY", "25")
        try:
            return curses.wrapper(_session, options, items, out)
        except curses.error:
            die("cannot initialise terminal:")
    return 1


def main(argv: list[str] | None = None) -> int:
    """Run the menu; returns 0 when an entry was chosen, 1 otherwise."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        options = parse_args(args)
    except UsageError as exc:
        print(exc, file=sys.stderr)
        return 1
    if options.version:
        print(f"dmenu-{VERSION}")
        return 0

    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        print("warning: no locale support", file=sys.stderr)

    options.config.apply_resources(_load_resources())
    options.apply_overrides()
    try:
        items = read_items(_stdin_lines())
        return _run(options, items)
    except FatalError as exc:
        print(exc, file=sys.stderr)
        return exc.exit_status


if __name__ == "__main__":
    sys.exit(main())