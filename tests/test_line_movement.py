"""Test Up/Down movement between logical lines."""

from pixelinput.model import TextModel


def make_model(text, cursor, multiline=True):
    allowed = "abcdef" + ("\n" if multiline else "")
    model = TextModel(max_length=100, allowed_characters=allowed)
    model.buffer.content = text
    model.selection.collapse(cursor)
    return model


def test_down_keeps_column_then_clamps_to_short_line():
    model = make_model("ab\ncde\nf", 1)
    model.seek_line(down=True)
    assert model.cursor_pos == 4
    model.seek_line(down=True)
    assert model.cursor_pos == 8


def test_up_keeps_column():
    model = make_model("ab\ncde\nf", 5)
    model.seek_line(down=False)
    assert model.cursor_pos == 2


def test_up_clamps_column_to_line_length():
    model = make_model("ab\ncde", 6)
    model.seek_line(down=False)
    assert model.cursor_pos == 2


def test_up_on_first_line_stays_put():
    model = make_model("abc\nd", 2)
    model.seek_line(down=False)
    assert model.cursor_pos == 2


def test_down_on_last_line_goes_to_end():
    model = make_model("ab\ncde", 4)
    model.seek_line(down=True)
    assert model.cursor_pos == 6


def test_down_from_end_of_line_onto_empty_line():
    model = make_model("ab\n\ncd", 2)
    model.seek_line(down=True)
    assert model.cursor_pos == 3


def test_shift_down_extends_selection():
    model = make_model("ab\ncd", 1)
    model.seek_line(down=True, extend=True)
    assert model.cursor_pos == 4
    assert model.anchor_pos == 1
    assert model.get_selected_text() == "b\nc"


def test_no_line_seek_without_line_breaks():
    model = make_model("abc", 1, multiline=False)
    assert model.seek_line(down=True) is False
    assert model.cursor_pos == 1
