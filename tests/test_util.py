import pytest

from dmenu.util import FatalError, die, format_die_message


def test_message_without_colon_ignores_error():
    error = OSError(2, "No such file or directory")
    assert format_die_message("cannot open display", error) == "cannot open display"


def test_message_with_colon_appends_strerror():
    error = OSError(12, "Cannot allocate memory")
    assert format_die_message("calloc:", error) == "calloc: Cannot allocate memory"


def test_message_with_colon_and_no_error_is_unchanged():
    assert format_die_message("strdup:", None) == "strdup:"


def test_message_with_colon_and_plain_exception():
    assert format_die_message("pledge:", ValueError("bad")) == "pledge: bad"


def test_die_raises_fatal_error():
    with pytest.raises(FatalError, match="cannot grab focus") as info:
        die("cannot grab focus")
    assert info.value.exit_status == 1


def test_die_inside_handler_uses_cause():
    try:
        raise OSError(12, "Cannot allocate memory")
    except OSError:
        with pytest.raises(FatalError) as info:
            die("calloc:")
    raised = info.value
    assert str(raised) == "calloc: Cannot allocate memory"
    assert raised.exit_status == 1
    assert isinstance(raised.__cause__, OSError)
    assert raised.__cause__.strerror == "Cannot allocate memory"