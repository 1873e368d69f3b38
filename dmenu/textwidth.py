"""Measuring and truncating text in terminal cells."""

from __future__ import annotations

from dataclasses import dataclass

from wcwidth import wcwidth

ELLIPSIS = "..."


@dataclass(frozen=True)
class TextMeasurer:
    """Measures text as a number of columns times ``cell_width``."""

    cell_width: int = 1

    def _char_width(self, char: str) -> int:
        return max(wcwidth(char), 0) * self.cell_width

    def width(self, text: str) -> int:
        """Return the width of ``text``."""
        return sum(self._char_width(char) for char in text)

    def width_clamp(self, text: str, limit: int) -> int:
        """Return the width of ``text``, but never more than ``limit``."""
        if limit <= 0:
            return 0
        used = 0
        for char in text:
            used += self._char_width(char)
            if used > limit:
                return limit
        return used

    def fit(self, text: str, width: int) -> str:
        """Return what of ``text`` is shown in ``width``.

        Text that does not fit is cut where an ellipsis still fits after it;
        if not even the ellipsis fits, nothing is shown.
        """
        if width <= 0:
            return ""
        ellipsis_width = self.width(ELLIPSIS)
        used = 0
        keep = 0
        for position, char in enumerate(text):
            if used + ellipsis_width <= width:
                keep = position
            char_width = self._char_width(char)
            if used + char_width > width:
                if ellipsis_width > width:
                    return ""
                return text[:keep] + ELLIPSIS
            used += char_width
        return text