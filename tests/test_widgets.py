from textvision.core import command_set
from textvision.core.command import CM_OK, CM_USER
from textvision.core.event import (
    Event, EventType, KB_BACKSPACE, KB_DEL, KB_END, KB_HOME, KB_INS,
    KB_LEFT, KB_SPACE,
)
from textvision.core.geometry import Point, Rect
from textvision.core.palette import CP_GRAY_DIALOG
from textvision.core.state import SF_ACTIVE
from textvision.ui.widgets.button import Button
from textvision.ui.widgets.frame import Frame
from textvision.ui.widgets.input_line import InputLine
from textvision.ui.widgets.static_text import CENTER_MARK, Label, StaticText, wrap_text
from textvision.ui.widgets.window import Window


def type_text(view, text):
    for ch in text:
        view.handle_event(Event.key_char(ch))


def press(view, key_code):
    event = Event.keyboard(key_code)
    view.handle_event(event)
    return event


# ─────────────────────────────────────────────────────────────────────────────
# InputLine
# ─────────────────────────────────────────────────────────────────────────────

def test_input_line_editing():
    field = InputLine(Rect.from_size(0, 0, 20, 1), 30)
    type_text(field, "helo")
    press(field, KB_LEFT)
    type_text(field, "l")
    assert field.value == "hello"

    press(field, KB_HOME)
    press(field, KB_DEL)
    assert field.value == "ello"

    press(field, KB_END)
    press(field, KB_BACKSPACE)
    assert field.value == "ell"
    assert field.cur_pos == 3


def test_input_line_accepts_wide_characters():
    field = InputLine(Rect.from_size(0, 0, 20, 1), 30)
    type_text(field, "中文 ok")
    assert field.value == "中文 ok"
    assert field.cur_pos == 5


def test_input_line_limit_and_overwrite():
    field = InputLine(Rect.from_size(0, 0, 20, 1), 3)
    type_text(field, "abcd")
    assert field.value == "abc"

    press(field, KB_INS)
    assert not field.insert_mode
    press(field, KB_HOME)
    type_text(field, "X")
    assert field.value == "Xbc"


def test_input_line_scrolls_to_the_caret():
    field = InputLine(Rect.from_size(0, 0, 6, 1), 20)
    type_text(field, "abcdef")
    assert field.first_pos == 3
    assert field.cursor == Point(4, 0)

    press(field, KB_HOME)
    assert field.first_pos == 0
    assert field.cursor == Point(1, 0)


def test_input_line_draws_scroll_arrows(terminal, backend):
    field = InputLine(Rect.from_size(0, 0, 6, 1), 20, "abcdef")
    field.draw(terminal)
    terminal.flush()
    assert backend.text_at(0, 0, 6) == "◄def  "

    press(field, KB_HOME)
    field.draw(terminal)
    terminal.flush()
    assert backend.text_at(0, 0, 6) == " abcd►"


def test_input_line_click_moves_caret():
    field = InputLine(Rect.from_size(5, 0, 10, 1), 20, "abc")
    event = Event.mouse_event(EventType.MOUSE_DOWN, Point(7, 0))
    field.handle_event(event)
    assert event.is_nothing
    assert field.cur_pos == 1


def test_input_line_leaves_other_keys_alone():
    field = InputLine(Rect.from_size(0, 0, 10, 1), 20)
    event = Event.command_event(CM_OK)
    field.handle_event(event)
    assert event.what is EventType.COMMAND


# ─────────────────────────────────────────────────────────────────────────────
# Button
# ─────────────────────────────────────────────────────────────────────────────

def test_button_draws_title_and_shadow(terminal, backend):
    button = Button(Rect.from_size(0, 0, 10, 2), "~O~K", CM_OK)
    button.set_container_palette(CP_GRAY_DIALOG)
    button.draw(terminal)
    terminal.flush()

    assert backend.text_at(0, 0, 10) == "   OK    ▄"
    assert backend.text_at(0, 1, 10) == " " + "▀" * 9
    assert terminal.read_cell(3, 0).attr.to_byte() == 0x2E
    assert terminal.read_cell(4, 0).attr.to_byte() == 0x20
    assert terminal.read_cell(9, 0).attr.to_byte() == 0x70


def test_button_press_by_key_and_click():
    button = Button(Rect.from_size(0, 0, 10, 2), "~O~K", CM_OK)
    assert button.shortcut() == "o"

    event = press(button, KB_SPACE)
    assert event.what is EventType.COMMAND and event.command == CM_OK

    event = Event.mouse_event(EventType.MOUSE_DOWN, Point(2, 0))
    button.handle_event(event)
    assert event.command == CM_OK

    # The shadow column does not react
    event = Event.mouse_event(EventType.MOUSE_DOWN, Point(9, 0))
    button.handle_event(event)
    assert event.what is EventType.MOUSE_DOWN


def test_broadcast_button():
    button = Button(Rect.from_size(0, 0, 10, 2), "Apply", CM_USER, broadcast=True)
    event = press(button, KB_SPACE)
    assert event.what is EventType.BROADCAST
    assert event.command == CM_USER


def test_disabled_button_ignores_input():
    command_set.disable_command(CM_USER)
    button = Button(Rect.from_size(0, 0, 10, 2), "Go", CM_USER)
    assert not button.can_focus()
    event = press(button, KB_SPACE)
    assert event.is_keyboard


# ─────────────────────────────────────────────────────────────────────────────
# Static text and labels
# ─────────────────────────────────────────────────────────────────────────────

def test_wrap_text():
    assert wrap_text("hello world foo", 5) == ["hello", "world", "foo"]
    assert wrap_text("one\n\ntwo", 10) == ["one", "", "two"]
    assert wrap_text(CENTER_MARK + "ab cd", 3) == [CENTER_MARK + "ab", CENTER_MARK + "cd"]
    assert wrap_text("text", 0) == []


def test_static_text_centers_marked_lines(terminal, backend):
    text = StaticText(Rect.from_size(0, 0, 10, 2), CENTER_MARK + "hi\nleft")
    text.draw(terminal)
    terminal.flush()
    assert backend.text_at(0, 0, 10) == "    hi    "
    assert backend.text_at(0, 1, 10) == "left      "


def test_label_draws_after_a_margin(terminal, backend):
    field = InputLine(Rect.from_size(10, 0, 10, 1), 20)
    label = Label(Rect.from_size(0, 0, 8, 1), "~N~ame", field)
    label.draw(terminal)
    terminal.flush()
    assert backend.text_at(0, 0, 8) == " Name   "
    assert label.shortcut() == "n"
    assert label.focus_link() is field


# ─────────────────────────────────────────────────────────────────────────────
# Frame
# ─────────────────────────────────────────────────────────────────────────────

def test_active_frame_shows_icons(terminal, backend):
    window = Window(Rect.from_size(0, 0, 20, 6), "Hi")
    window.set_focus(True)
    assert window.frame.get_state(SF_ACTIVE)
    window.draw(terminal)
    terminal.flush()
    assert backend.text_at(0, 0, 20) == "╔═[■]═══ Hi ═══[↑]═╗"
    assert backend.text_at(19, 5, 1) == "◢"


def test_passive_frame_is_single_lined(terminal, backend):
    window = Window(Rect.from_size(0, 0, 20, 6), "Hi")
    window.draw(terminal)
    terminal.flush()
    assert backend.text_at(0, 0, 20) == "┌─────── Hi ───────┐"
    assert backend.text_at(0, 5, 1) == "└"


def test_frame_icons_become_commands():
    frame = Frame(Rect.from_size(0, 0, 20, 6), "Hi")

    down = Event.mouse_event(EventType.MOUSE_DOWN, Point(3, 0))
    frame.handle_event(down)
    assert down.is_nothing

    up = Event.mouse_event(EventType.MOUSE_UP, Point(3, 0))
    frame.handle_event(up)
    assert up.what is EventType.COMMAND

    up = Event.mouse_event(EventType.MOUSE_UP, Point(16, 0))
    frame.handle_event(up)
    assert up.what is EventType.COMMAND


def test_frame_double_click_zooms_and_press_starts_drag():
    frame = Frame(Rect.from_size(0, 0, 20, 6), "Hi")

    event = Event.mouse_event(EventType.MOUSE_DOWN, Point(8, 0), double_click=True)
    frame.handle_event(event)
    assert event.what is EventType.COMMAND

    frame.handle_event(Event.mouse_event(EventType.MOUSE_DOWN, Point(8, 0)))
    assert frame.drag_mode == "move"

    frame.drag_mode = None
    frame.handle_event(Event.mouse_event(EventType.MOUSE_DOWN, Point(19, 5)))
    assert frame.drag_mode == "grow"
