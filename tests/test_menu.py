import pytest

from dmenu.menu import MAX_TEXT_BYTES, Item, Key, Menu


def make_menu(texts, **kwargs):
    return Menu(items=[Item(text, index) for index, text in enumerate(texts)], **kwargs)


def type_text(menu, text):
    for char in text:
        menu.handle_key(char)


def test_typing_filters_and_selects_first_match():
    menu = make_menu(["alpha", "beta", "gamma"])
    type_text(menu, "be")
    assert menu.text == "be"
    assert menu.cursor == 2
    assert [item.text for item in menu.matches] == ["beta"]
    assert menu.selected.text == "beta"


def test_return_prints_selection_and_exits():
    menu = make_menu(["alpha", "beta"])
    outcome = menu.handle_key(Key.RETURN)
    assert outcome.output == "alpha"
    assert outcome.exit_code == 0


def test_shift_return_prints_input():
    menu = make_menu(["alpha", "beta"])
    type_text(menu, "al")
    outcome = menu.handle_key(Key.RETURN, shift=True)
    assert outcome.output == "al"
    assert outcome.exit_code == 0


def test_print_index():
    menu = make_menu(["alpha", "beta"], print_index=True)
    menu.handle_key(Key.DOWN)
    assert menu.handle_key(Key.RETURN).output == "1"
    assert menu.handle_key(Key.RETURN, shift=True).output == "-1"


def test_ctrl_return_marks_out_without_exit():
    menu = make_menu(["alpha", "beta"])
    outcome = menu.handle_key(Key.RETURN, ctrl=True)
    assert outcome.exit_code is None
    assert outcome.output == "alpha"
    assert menu.items[0].out is True
    assert menu.items[1].out is False


def test_ctrl_j_exits_like_return():
    menu = make_menu(["alpha"])
    outcome = menu.handle_key("j", ctrl=True)
    assert outcome.exit_code == 0
    assert outcome.output == "alpha"


@pytest.mark.parametrize("args", [(Key.ESCAPE, {}), ("c", {"ctrl": True}), ("[", {"ctrl": True})])
def test_escape_exits_with_failure(args):
    key, kwargs = args
    menu = make_menu(["alpha"])
    assert menu.handle_key(key, **kwargs).exit_code == 1


def test_control_characters_are_not_inserted():
    menu = make_menu([])
    menu.handle_key(None, text="\x01")
    assert menu.text == ""
    menu.handle_key(None, text="x")
    assert menu.text == "x"


def test_backspace_and_delete():
    menu = make_menu([])
    type_text(menu, "abc")
    menu.handle_key(Key.LEFT)
    assert menu.cursor == 2
    menu.handle_key(Key.BACKSPACE)
    assert (menu.text, menu.cursor) == ("ac", 1)
    menu.handle_key(Key.DELETE)
    assert (menu.text, menu.cursor) == ("a", 1)
    assert menu.handle_key(Key.DELETE).redraw is False


def test_ctrl_u_and_ctrl_k():
    menu = make_menu([])
    type_text(menu, "hello world")
    menu.cursor = 5
    menu.handle_key("k", ctrl=True)
    assert menu.text == "hello"
    menu.handle_key("u", ctrl=True)
    assert (menu.text, menu.cursor) == ("", 0)


def test_ctrl_w_deletes_previous_word():
    menu = make_menu([])
    type_text(menu, "foo bar  ")
    menu.handle_key("w", ctrl=True)
    assert menu.text == "foo "
    assert menu.cursor == len(menu.text)


def test_word_movement():
    menu = make_menu([])
    type_text(menu, "one two")
    menu.handle_key("b", alt=True)
    assert menu.cursor == len("one ")
    menu.handle_key(Key.LEFT, ctrl=True)
    assert menu.cursor == 0
    menu.handle_key("f", alt=True)
    assert menu.cursor == len("one")


def test_home_moves_cursor_when_first_selected():
    menu = make_menu(["ab", "abc"])
    type_text(menu, "ab")
    menu.handle_key(Key.DOWN)
    menu.handle_key("a", ctrl=True)
    assert menu.sel == 0
    assert menu.cursor == 2
    menu.handle_key(Key.HOME)
    assert menu.cursor == 0


def test_tab_completes_selection():
    menu = make_menu(["alpha", "beta"])
    type_text(menu, "al")
    menu.handle_key(Key.TAB)
    assert menu.text == "alpha"
    assert menu.cursor == len("alpha")


def test_paste_stops_at_newline():
    menu = make_menu([])
    menu.paste("xy\nz")
    assert menu.text == "xy"


def test_ctrl_y_requests_selection():
    menu = make_menu([])
    assert menu.handle_key("y", ctrl=True).paste_selection == "primary"
    assert menu.handle_key("Y", ctrl=True, shift=True).paste_selection == "clipboard"


def test_insert_respects_size_limit():
    menu = make_menu([])
    menu.insert("a" * MAX_TEXT_BYTES)
    menu.insert("b")
    assert len(menu.text) == MAX_TEXT_BYTES
    assert "b" not in menu.text


def test_lines_limited_to_item_count():
    assert make_menu(["a", "b"], lines=5).lines == 2


def test_vertical_page_size():
    menu = make_menu([f"item{n}" for n in range(10)], lines=3)
    assert len(menu.visible()) == 3
    for _ in range(3):
        menu.handle_key(Key.DOWN)
    assert menu.selected is menu.visible()[0]
    assert menu.selected.text == "item3"
    menu.handle_key(Key.UP)
    assert menu.selected.text == "item2"
    assert menu.selected in menu.visible()


def test_end_shows_last_page():
    menu = make_menu([f"item{n}" for n in range(10)], lines=3)
    menu.handle_key(Key.END)
    assert menu.selected is menu.matches[-1]
    assert menu.visible()[-1] is menu.matches[-1]
    assert len(menu.visible()) == 3


def test_horizontal_paging():
    menu = make_menu([f"item{n:02d}" for n in range(30)])
    first_page = menu.visible()
    boundary = menu.next
    assert boundary is not None
    assert len(first_page) == boundary
    menu.handle_key(Key.PAGE_DOWN)
    assert menu.curr == boundary
    assert menu.sel == boundary
    assert not set(map(id, menu.visible())) & set(map(id, first_page))
    menu.handle_key(Key.PAGE_UP)
    assert menu.curr == 0


def test_left_moves_selection_in_horizontal_mode():
    menu = make_menu(["aa", "ab"])
    type_text(menu, "a")
    menu.handle_key(Key.RIGHT)
    assert menu.sel == 1
    menu.handle_key(Key.LEFT)
    assert menu.sel == 0
    assert menu.cursor == 1


def test_no_matches_returns_input():
    menu = make_menu(["alpha"])
    type_text(menu, "zz")
    assert menu.matches == []
    assert menu.visible() == []
    assert menu.handle_key(Key.RETURN).output == "zz"