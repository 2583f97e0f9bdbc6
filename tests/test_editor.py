import pytest

from hobbyos.editor import MIN_HEIGHT, MIN_WIDTH, MODIFIER_CTRL, Editor, Key

KEY_A = 0x04
KEY_ENTER = 0x28
KEY_BACKSPACE = 0x2A
KEY_TAB = 0x2B


def type_text(editor, text):
    for ch in text:
        editor.key(KEY_A, ch, 0)


def test_size_is_clamped_to_dialog_minimum():
    editor = Editor([[]], 1, 1, 8)
    assert (editor.width, editor.height) == (MIN_WIDTH, MIN_HEIGHT)


def test_non_positive_size_raises():
    with pytest.raises(ValueError):
        Editor([[]], 0, 20, 8)
    with pytest.raises(ValueError):
        Editor([[]], 80, 20, 0)


def test_empty_document_has_one_line():
    assert Editor([], 80, 20, 8).lines == [[]]


def test_typing_inserts_characters():
    editor = Editor([[]], 80, 20, 8)
    type_text(editor, "abc")
    assert editor.lines == [[ord("a"), ord("b"), ord("c")]]
    assert editor.cursor_x == 3
    assert editor.edited


def test_tab_moves_cursor_to_tab_stop():
    editor = Editor([[]], 80, 20, 8)
    editor.key(KEY_TAB, "\t", 0)
    assert editor.lines == [[9]]
    assert editor.cursor_x == 8


def test_enter_splits_line():
    editor = Editor(["ab"], 80, 20, 8)
    editor.key(Key.RIGHT)
    editor.key(KEY_ENTER, "\n", 0)
    assert editor.lines == [[ord("a")], [ord("b")]]
    assert (editor.cursor_x, editor.cursor_y) == (0, 1)


def test_backspace_at_line_start_joins_lines():
    editor = Editor(["a", "b"], 80, 20, 8)
    editor.key(Key.DOWN)
    editor.key(KEY_BACKSPACE, "\b", 0)
    assert editor.lines == [[ord("a"), ord("b")]]
    assert (editor.cursor_x, editor.cursor_y) == (1, 0)


def test_backspace_removes_previous_character():
    editor = Editor(["xy"], 80, 20, 8)
    editor.key(Key.END)
    editor.key(KEY_BACKSPACE, "\b", 0)
    assert editor.lines == [[ord("x")]]
    assert editor.cursor_x == 1


def test_delete_at_line_end_joins_next_line():
    editor = Editor(["a", "b"], 80, 20, 8)
    editor.key(Key.END)
    editor.key(Key.DELETE)
    assert editor.lines == [[ord("a"), ord("b")]]
    assert (editor.cursor_x, editor.cursor_y) == (1, 0)


def test_delete_removes_character_under_cursor():
    editor = Editor(["ab"], 80, 20, 8)
    editor.key(Key.DELETE)
    assert editor.lines == [[ord("b")]]


def test_ctrl_s_requests_save_without_editing():
    editor = Editor(["ab"], 80, 20, 8)
    assert editor.key(Key.S, "s", MODIFIER_CTRL) is True
    assert editor.lines == [[ord("a"), ord("b")]]
    assert not editor.edited


def test_escape_is_not_inserted():
    editor = Editor([[]], 80, 20, 8)
    assert editor.key(Key.ESC, "\x1b", 0) is False
    assert editor.lines == [[]]


def test_right_at_line_end_moves_to_next_line():
    editor = Editor(["a", "b"], 80, 20, 8)
    editor.key(Key.RIGHT)
    assert (editor.cursor_x, editor.cursor_y) == (1, 0)
    editor.key(Key.RIGHT)
    assert (editor.cursor_x, editor.cursor_y) == (0, 1)


def test_left_at_line_start_moves_to_previous_line_end():
    editor = Editor(["a", "b"], 80, 20, 8)
    editor.key(Key.DOWN)
    editor.key(Key.LEFT)
    assert (editor.cursor_x, editor.cursor_y) == (1, 0)


def test_ctrl_end_and_ctrl_home():
    editor = Editor(["a", "bc"], 80, 20, 8)
    editor.key(Key.END, 0, MODIFIER_CTRL)
    assert (editor.cursor_x, editor.cursor_y) == (2, 1)
    editor.key(Key.HOME, 0, MODIFIER_CTRL)
    assert (editor.cursor_x, editor.cursor_y) == (0, 0)


def test_cursor_stays_visible_when_moving_down():
    editor = Editor(["a"] * 10, 80, MIN_HEIGHT, 8)
    for _ in range(6):
        editor.key(Key.DOWN)
    assert editor.cursor_y == 6
    assert editor.scroll_y <= editor.cursor_y < editor.scroll_y + editor.height


def test_page_down_stops_at_last_line():
    editor = Editor(["a"] * 10, 80, MIN_HEIGHT, 8)
    for _ in range(10):
        editor.key(Key.PGDN)
    assert editor.cursor_y == len(editor.lines) - 1
    assert editor.scroll_y <= editor.cursor_y < editor.scroll_y + editor.height


def test_click_below_text_selects_last_line():
    editor = Editor(["ab", "c"], 80, 20, 8)
    editor.click(0, 4)
    assert (editor.cursor_x, editor.cursor_y) == (0, 1)
    editor.click(editor.width, 0)
    assert (editor.cursor_x, editor.cursor_y) == (0, 1)


def test_char_range_outside_document():
    editor = Editor(["ab"], 80, 20, 8)
    assert editor.char_range(5, 0) == (0, 0)
    assert editor.char_range(0, 1) == (1, 1)


def test_screen_rows_follow_scroll():
    editor = Editor([[i] for i in range(65, 75)], 80, MIN_HEIGHT, 8)
    assert len(editor.screen_rows()) == editor.height
    editor.key(Key.END, 0, MODIFIER_CTRL)
    rows = editor.screen_rows()
    assert rows[-1] == editor.lines[-1]