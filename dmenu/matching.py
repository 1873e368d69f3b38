"""Token matching of menu items against the typed input."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, TypeVar

T = TypeVar("T")


def _text_of(item: Any) -> str:
    return item if isinstance(item, str) else item.text


def _chars_equal(a: str, b: str, case_sensitive: bool) -> bool:
    if case_sensitive:
        return a == b
    return a.lower() == b.lower()


def _same(a: str, b: str, case_sensitive: bool) -> bool:
    return len(a) == len(b) and all(
        _chars_equal(x, y, case_sensitive) for x, y in zip(a, b)
    )


def _starts_with(text: str, prefix: str, case_sensitive: bool) -> bool:
    return _same(text[: len(prefix)], prefix, case_sensitive)


def cistrstr(haystack: str, needle: str) -> int | None:
    """Return the index of the first case-insensitive occurrence of ``needle``.

    An empty needle matches at 0; no occurrence gives ``None``.
    """
    if not needle:
        return 0
    size = len(needle)
    for start in range(len(haystack) - size + 1):
        if _same(haystack[start : start + size], needle, False):
            return start
    return None


def find(haystack: str, needle: str, case_sensitive: bool = False) -> int | None:
    """Return the index of ``needle`` in ``haystack`` or ``None``."""
    if not case_sensitive:
        return cistrstr(haystack, needle)
    index = haystack.find(needle)
    return None if index < 0 else index


def tokenize(text: str) -> list[str]:
    """Split the input into space-separated tokens, dropping empty ones."""
    return [token for token in text.split(" ") if token]


def match_items(items: Iterable[T], text: str, case_sensitive: bool = False) -> list[T]:
    """Return the items that contain every token of ``text``.

    Items equal to the whole input come first, then items starting with the
    first token, then the others; each group keeps the original order. Items
    may be strings or objects with a ``text`` attribute.
    """
    tokens = tokenize(text)
    exact: list[T] = []
    prefix: list[T] = []
    substring: list[T] = []
    for item in items:
        item_text = _text_of(item)
        if not all(find(item_text, token, case_sensitive) is not None for token in tokens):
            continue
        if not tokens or _same(item_text, text, case_sensitive):
            exact.append(item)
        elif _starts_with(item_text, tokens[0], case_sensitive):
            prefix.append(item)
        else:
            substring.append(item)
    return exact + prefix + substring


def highlight_spans(
    item_text: str, text: str, case_sensitive: bool = False
) -> list[tuple[int, int]]:
    """Return ``(start, end)`` ranges of ``item_text`` matching input tokens.

    Tokens are processed in order; repeated occurrences of a token are found
    one after another without overlap, stopping once the rest of the item is
    shorter than twice the token.
    """
    spans: list[tuple[int, int]] = []
    for token in tokenize(text):
        size = len(token)
        position = find(item_text, token, case_sensitive)
        while position is not None:
            spans.append((position, position + size))
            if len(item_text) - position - size < size:
                break
            found = find(item_text[position + size :], token, case_sensitive)
            position = None if found is None else position + size + found
    return spans