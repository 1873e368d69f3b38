import io
from datetime import datetime

import pytest

from dmenu.args import UsageError
from dmenu.config import Scheme
from dmenu.tui import format_date, main, parse_args, read_items


def test_parse_args_defaults():
    options = parse_args([])
    assert options.config.topbar is True
    assert options.config.lines == 0
    assert options.config.prompt is None
    assert options.fast is False
    assert options.version is False
    assert options.monitor == -1


def test_parse_args_boolean_flags():
    options = parse_args(["-b", "-f", "-c", "-s", "-ix"])
    assert options.config.topbar is False
    assert options.fast is True
    assert options.config.centered is True
    assert options.case_sensitive is True
    assert options.print_index is True


def test_parse_args_valued_options():
    options = parse_args(
        ["-l", "5", "-p", "run:", "-m", "1", "-w", "0x1", "-bw", "2", "-fn", "Mono"]
    )
    assert options.config.lines == 5
    assert options.config.prompt == "run:"
    assert options.monitor == 1
    assert options.embed == "0x1"
    assert options.config.border_width == 2
    assert options.font == "Mono"


@pytest.mark.parametrize(
    "value, expected",
    [("7rows", 7), ("none", 0), (" -3", -3), ("+4", 4)],
)
def test_parse_args_numbers_read_leading_digits(value, expected):
    assert parse_args(["-l", value]).config.lines == expected


def test_parse_args_missing_value_is_usage_error():
    with pytest.raises(UsageError):
        parse_args(["-p"])


def test_parse_args_unknown_option_is_usage_error():
    with pytest.raises(UsageError):
        parse_args(["-z", "x"])


def test_parse_args_version_stops_parsing():
    options = parse_args(["-v", "-z"])
    assert options.version is True


def test_color_overrides_apply_to_config():
    options = parse_args(["-nb", "#000000", "-sf", "#ffffff"])
    options.apply_overrides()
    colors = options.config.colors
    assert colors[Scheme.NORM].bg == "#000000"
    assert colors[Scheme.SEL].fg == "#ffffff"
    assert colors[Scheme.NORM].fg == "#bbbbbb"
    assert colors[Scheme.SEL].bg == "#005577"


def test_font_override_replaces_first_font_only():
    options = parse_args(["-fn", "Mono"])
    options.apply_overrides()
    assert options.config.fonts[0] == "Mono"
    assert options.config.fonts[1] == "SymbolsNerdFont:size=10"


def test_read_items_strips_newlines_and_numbers_items():
    items = read_items(io.StringIO("a\nb\nc"))
    assert [item.text for item in items] == ["a", "b", "c"]
    assert [item.index for item in items] == [0, 1, 2]
    assert not any(item.out for item in items)


def test_read_items_keeps_blank_lines():
    items = read_items(io.StringIO("\n\n"))
    assert [item.text for item in items] == ["", ""]


def test_read_items_only_strips_line_feed():
    items = read_items(["x\r\n"])
    assert [item.text for item in items] == ["x\r"]


def test_read_items_empty():
    assert read_items(io.StringIO("")) == []


def test_format_date_worked_example():
    assert format_date(datetime(2024, 1, 2, 3, 4)) == "03:04 Tuesday 02 January 2024"


def test_format_date_ends_with_year():
    now = datetime(1999, 12, 31, 23, 59)
    result = format_date(now)
    assert result.startswith("23:59 ")
    assert result.endswith(" 1999")


def test_main_prints_version(capsys):
    assert main(["-v"]) == 0
    assert capsys.readouterr().out.strip() == "dmenu-5.2"


def test_main_usage_on_unknown_option(capsys):
    assert main(["-x"]) == 1
    assert capsys.readouterr().err.startswith("usage: dmenu")


def test_main_usage_on_missing_value(capsys):
    assert main(["-l"]) == 1
    assert "usage: dmenu" in capsys.readouterr().err