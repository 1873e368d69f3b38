"""Default appearance and behaviour settings, and X resource overrides."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import NamedTuple


class Scheme(enum.Enum):
    """Colour schemes used when drawing the menu."""

    NORM = 0
    SEL = 1
    OUT = 2
    NORM_HIGHLIGHT = 3
    SEL_HIGHLIGHT = 4


class ColorPair(NamedTuple):
    fg: str
    bg: str


def _default_colors() -> dict[Scheme, ColorPair]:
    return {
        Scheme.NORM: ColorPair("#bbbbbb", "#222222"),
        Scheme.SEL: ColorPair("#eeeeee", "#005577"),
        Scheme.SEL_HIGHLIGHT: ColorPair("#ffc978", "#005577"),
        Scheme.NORM_HIGHLIGHT: ColorPair("#ffc978", "#222222"),
        Scheme.OUT: ColorPair("#000000", "#00ffff"),
    }


def _default_fonts() -> list[str]:
    return ["Liberation Mono:size=8", "SymbolsNerdFont:size=10"]


def parse_xresources(text: str) -> dict[str, str]:
    """Parse resource database text of ``name: value`` lines."""
    resources: dict[str, str] = {}
    logical: list[str] = []
    pending = ""
    for raw in text.splitlines():
        if raw.endswith("\\"):
            pending += raw[:-1]
            continue
        logical.append(pending + raw)
        pending = ""
    if pending:
        logical.append(pending)
    for line in logical:
        stripped = line.strip()
        if not stripped or stripped[0] in "!#":
            continue
        name, sep, value = stripped.partition(":")
        if not sep or not name.strip():
            continue
        resources[name.strip()] = value.strip()
    return resources


def _lookup(resources: Mapping[str, str], name: str) -> str | None:
    for key in (f"dmenu.{name}", f"dmenu*{name}", f"*{name}", f"*.{name}"):
        if key in resources:
            return resources[key]
    return None


@dataclass
class Config:
    """Settings of the menu; command-line options override them."""

    topbar: bool = True
    centered: bool = False
    min_width: int = 500
    fonts: list[str] = field(default_factory=_default_fonts)
    prompt: str | None = None
    colors: dict[Scheme, ColorPair] = field(default_factory=_default_colors)
    lines: int = 0
    word_delimiters: str = " "
    border_width: int = 0

    def _set_color(self, scheme: Scheme, part: str, value: str | None) -> None:
        if value is not None:
            self.colors[scheme] = self.colors[scheme]._replace(**{part: value})

    def apply_resources(self, resources: Mapping[str, str]) -> None:
        """Override fonts and colours from X resources of the ``dmenu`` program."""
        font = _lookup(resources, "font")
        if font is not None:
            if self.fonts:
                self.fonts[0] = font
            else:
                self.fonts.append(font)
        self._set_color(Scheme.NORM, "bg", _lookup(resources, "background"))
        self._set_color(Scheme.NORM, "fg", _lookup(resources, "foreground"))
        self._set_color(Scheme.SEL, "bg", _lookup(resources, "selbackground"))
        self._set_color(Scheme.SEL, "fg", _lookup(resources, "selforeground"))
        self._set_color(Scheme.NORM_HIGHLIGHT, "fg", _lookup(resources, "highlight"))
        self._set_color(Scheme.SEL_HIGHLIGHT, "fg", _lookup(resources, "selhighlight"))
        self._set_color(Scheme.SEL_HIGHLIGHT, "bg", self.colors[Scheme.SEL].bg)
        self._set_color(Scheme.NORM_HIGHLIGHT, "bg", self.colors[Scheme.NORM].bg)