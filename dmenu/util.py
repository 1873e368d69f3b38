"""Fatal error reporting shared by the menu and the file tester."""

from __future__ import annotations

import sys


class FatalError(Exception):
    """An unrecoverable error; the program should stop with exit status 1."""

    exit_status = 1


def format_die_message(message: str, error: BaseException | None = None) -> str:
    """Build the text of a fatal error message.

    A message ending in a colon is followed by a description of ``error``,
    the way a system error is appended to such messages.
    """
    if message.endswith(":") and error is not None:
        detail = None
        if isinstance(error, OSError):
            detail = error.strerror
        return f"{message} {detail or error}"
    return message


def die(message: str) -> None:
    """Raise :class:`FatalError` for ``message``.

    When called while an exception is being handled, that exception describes
    the cause for messages that end in a colon.
    """
    cause = sys.exc_info()[1]
    raise FatalError(format_die_message(message, cause)) from cause