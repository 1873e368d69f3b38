"""State of the menu: input line, matched items, paging and key handling."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field

from dmenu.matching import match_items
from dmenu.textwidth import TextMeasurer

#: Largest input, in UTF-8 bytes, the menu accepts.
MAX_TEXT_BYTES = 8191


class Key(enum.Enum):
    """Special keys understood by the menu."""

    HOME = "home"
    END = "end"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    BACKSPACE = "backspace"
    DELETE = "delete"
    RETURN = "return"
    ESCAPE = "escape"
    TAB = "tab"


_CTRL_KEYS = {
    "a": Key.HOME,
    "b": Key.LEFT,
    "c": Key.ESCAPE,
    "d": Key.DELETE,
    "e": Key.END,
    "f": Key.RIGHT,
    "g": Key.ESCAPE,
    "h": Key.BACKSPACE,
    "i": Key.TAB,
    "n": Key.DOWN,
    "p": Key.UP,
}

_ALT_KEYS = {
    "g": Key.HOME,
    "G": Key.END,
    "h": Key.UP,
    "j": Key.PAGE_DOWN,
    "k": Key.PAGE_UP,
    "l": Key.DOWN,
}


@dataclass(eq=False)
class Item:
    """One line of input offered as a choice."""

    text: str
    index: int
    out: bool = False


@dataclass(frozen=True)
class Outcome:
    """What a key press asks of the program around the menu."""

    output: str | None = None
    exit_code: int | None = None
    paste_selection: str | None = None
    redraw: bool = True


_IGNORED = Outcome(redraw=False)


def _is_control(text: str) -> bool:
    return not text or ord(text[0]) < 32 or ord(text[0]) == 127


def _truncate_utf8(text: str, limit: int) -> str:
    return text.encode("utf-8")[:limit].decode("utf-8", "ignore")


@dataclass(eq=False)
class Menu:
    """The menu's items, input and selection, independent of any display."""

    items: list[Item] = field(default_factory=list)
    lines: int = 0
    width: int = 80
    prompt_width: int = 0
    input_width: int | None = None
    bar_height: int = 1
    lrpad: int = 2
    case_sensitive: bool = False
    print_index: bool = False
    word_delimiters: str = " "
    measurer: TextMeasurer = field(default_factory=TextMeasurer)
    text: str = ""
    cursor: int = 0
    matches: list[Item] = field(init=False, default_factory=list)
    curr: int | None = field(init=False, default=None)
    sel: int | None = field(init=False, default=None)
    prev: int | None = field(init=False, default=None)
    next: int | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        if self.lines < 0:
            self.lines = len(self.items)
        self.lines = min(self.lines, len(self.items))
        if self.input_width is None:
            self.input_width = self.width // 6
        self.cursor = min(self.cursor, len(self.text))
        self.match()

    @property
    def selected(self) -> Item | None:
        """The selected item, if any."""
        return None if self.sel is None else self.matches[self.sel]

    def _textw(self, text: str) -> int:
        return self.measurer.width(text) + self.lrpad

    def _textw_clamp(self, text: str, limit: int) -> int:
        return min(self.measurer.width_clamp(text, limit) + self.lrpad, limit)

    def match(self) -> None:
        """Recompute the matches for the current input and select the first."""
        self.matches = match_items(self.items, self.text, self.case_sensitive)
        self.curr = self.sel = 0 if self.matches else None
        self.calc_offsets()

    def calc_offsets(self) -> None:
        """Find where the next and previous pages start relative to ``curr``."""
        cost: Callable[[Item], int]
        if self.lines > 0:
            limit = self.lines * self.bar_height
            cost = lambda item: self.bar_height  # noqa: E731
        else:
            assert self.input_width is not None
            limit = self.width - (
                self.prompt_width + self.input_width + self._textw("<") + self._textw(">")
            )
            cost = lambda item: self._textw_clamp(item.text, limit)  # noqa: E731
        self.next = None
        self.prev = self.curr
        if self.curr is None:
            return
        used = 0
        for index in range(self.curr, len(self.matches)):
            used += cost(self.matches[index])
            if used > limit:
                self.next = index
                break
        used = 0
        for index in range(self.curr - 1, -1, -1):
            used += cost(self.matches[index])
            if used > limit:
                break
            self.prev = index

    def insert(self, s: str) -> None:
        """Insert ``s`` at the cursor, unless the input would grow too long."""
        if len(self.text.encode("utf-8")) + len(s.encode("utf-8")) > MAX_TEXT_BYTES:
            return
        self.text = self.text[: self.cursor] + s + self.text[self.cursor :]
        self.cursor += len(s)
        self.match()

    def delete(self, count: int) -> None:
        """Delete ``count`` characters before the cursor."""
        count = max(0, min(count, self.cursor))
        self.text = self.text[: self.cursor - count] + self.text[self.cursor :]
        self.cursor -= count
        self.match()

    def next_rune(self, inc: int) -> int:
        """Return the cursor position one character in direction ``inc``."""
        return self.cursor + inc

    def move_word_edge(self, direction: int) -> None:
        """Move the cursor to the start (negative) or end of a word."""
        delims = self.word_delimiters
        if direction < 0:
            while self.cursor > 0 and self.text[self.cursor - 1] in delims:
                self.cursor -= 1
            while self.cursor > 0 and self.text[self.cursor - 1] not in delims:
                self.cursor -= 1
        else:
            while self.cursor < len(self.text) and self.text[self.cursor] in delims:
                self.cursor += 1
            while self.cursor < len(self.text) and self.text[self.cursor] not in delims:
                self.cursor += 1

    def paste(self, s: str) -> None:
        """Insert pasted text up to its first newline."""
        self.insert(s.split("\n", 1)[0])

    def visible(self) -> list[Item]:
        """Return the items on the current page."""
        if self.curr is None:
            return []
        end = len(self.matches) if self.next is None else self.next
        return self.matches[self.curr : end]

    def _delete_word(self) -> None:
        delims = self.word_delimiters
        while self.cursor > 0 and self.text[self.cursor - 1] in delims:
            self.delete(1)
        while self.cursor > 0 and self.text[self.cursor - 1] not in delims:
            self.delete(1)

    def _type(self, text: str) -> Outcome:
        if not _is_control(text):
            self.insert(text)
        return Outcome()

    def handle_key(
        self,
        key: Key | str | None,
        text: str | None = None,
        ctrl: bool = False,
        alt: bool = False,
        shift: bool = False,
    ) -> Outcome:
        """Apply a key press.

        ``key`` is a :class:`Key`, a character, or ``None`` for text composed
        by an input method; ``text`` is what the key types and defaults to the
        character itself.
        """
        if text is None:
            text = key if isinstance(key, str) else ""
        if key is None:
            return self._type(text)

        if ctrl:
            if key in ("j", "J", "m", "M"):
                key, ctrl = Key.RETURN, False
            elif isinstance(key, str) and key in _CTRL_KEYS:
                key = _CTRL_KEYS[key]
            elif key == "k":
                self.text = self.text[: self.cursor]
                self.match()
                return Outcome()
            elif key == "u":
                self.delete(self.cursor)
                return Outcome()
            elif key == "w":
                self._delete_word()
                return Outcome()
            elif key in ("y", "Y"):
                return Outcome(
                    paste_selection="clipboard" if shift else "primary", redraw=False
                )
            elif key is Key.LEFT:
                self.move_word_edge(-1)
                return Outcome()
            elif key is Key.RIGHT:
                self.move_word_edge(+1)
                return Outcome()
            elif key == "[":
                return Outcome(exit_code=1, redraw=False)
            elif key is not Key.RETURN:
                return _IGNORED
        elif alt:
            if key == "b":
                self.move_word_edge(-1)
                return Outcome()
            if key == "f":
                self.move_word_edge(+1)
                return Outcome()
            if isinstance(key, str) and key in _ALT_KEYS:
                key = _ALT_KEYS[key]
            else:
                return _IGNORED

        if not isinstance(key, Key):
            return self._type(text)
        return self._special(key, ctrl, shift)

    def _special(self, key: Key, ctrl: bool, shift: bool) -> Outcome:
        if key is Key.DELETE:
            if self.cursor >= len(self.text):
                return _IGNORED
            self.cursor = self.next_rune(+1)
            key = Key.BACKSPACE
        if key is Key.BACKSPACE:
            if self.cursor == 0:
                return _IGNORED
            self.delete(1)
        elif key is Key.END:
            if self.cursor < len(self.text):
                self.cursor = len(self.text)
                return Outcome()
            if self.next is not None:
                self.curr = len(self.matches) - 1
                self.calc_offsets()
                self.curr = self.prev
                self.calc_offsets()
                while self.next is not None:
                    self.curr += 1
                    self.calc_offsets()
            self.sel = len(self.matches) - 1 if self.matches else None
        elif key is Key.ESCAPE:
            return Outcome(exit_code=1, redraw=False)
        elif key is Key.HOME:
            first = 0 if self.matches else None
            if self.sel == first:
                self.cursor = 0
            else:
                self.sel = self.curr = first
                self.calc_offsets()
        elif key in (Key.LEFT, Key.UP):
            if key is Key.LEFT:
                if self.cursor > 0 and (not self.sel or self.lines > 0):
                    self.cursor = self.next_rune(-1)
                    return Outcome()
                if self.lines > 0:
                    return _IGNORED
            if self.sel:
                self.sel -= 1
                if self.sel + 1 == self.curr:
                    self.curr = self.prev
                    self.calc_offsets()
        elif key is Key.PAGE_DOWN:
            if self.next is None:
                return _IGNORED
            self.sel = self.curr = self.next
            self.calc_offsets()
        elif key is Key.PAGE_UP:
            if self.prev is None:
                return _IGNORED
            self.sel = self.curr = self.prev
            self.calc_offsets()
        elif key is Key.RETURN:
            chosen = None if shift else self.selected
            if self.print_index:
                output = str(chosen.index if chosen else -1)
            else:
                output = chosen.text if chosen else self.text
            if not ctrl:
                return Outcome(output=output, exit_code=0, redraw=False)
            if self.selected is not None:
                self.selected.out = True
            return Outcome(output=output)
        elif key in (Key.RIGHT, Key.DOWN):
            if key is Key.RIGHT:
                if self.cursor < len(self.text):
                    self.cursor = self.next_rune(+1)
                    return Outcome()
                if self.lines > 0:
                    return _IGNORED
            if self.sel is not None and self.sel + 1 < len(self.matches):
                self.sel += 1
                if self.sel == self.next:
                    self.curr = self.next
                    self.calc_offsets()
        elif key is Key.TAB:
            if self.selected is None:
                return _IGNORED
            self.text = _truncate_utf8(self.selected.text, MAX_TEXT_BYTES)
            self.cursor = len(self.text)
            self.match()
        return Outcome()