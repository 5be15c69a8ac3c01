from textvision.core import command_set
from textvision.core.command import CM_COMMAND_SET_CHANGED, CM_OK, CM_USER
from textvision.core.draw import Cell
from textvision.core.event import (
    Event, EventType, KB_ENTER, KB_SHIFT_TAB, KB_TAB, alt_code,
)
from textvision.core.geometry import Point, Rect
from textvision.core.palette import Attr
from textvision.core.state import OF_CENTERED, OF_SELECTABLE, SF_DISABLED, SF_VISIBLE
from textvision.ui.widgets.base import View
from textvision.ui.widgets.button import Button
from textvision.ui.widgets.group import Group
from textvision.ui.widgets.input_line import InputLine
from textvision.ui.widgets.static_text import Label, StaticText


class Recorder(View):
    """Selectable view that records what it receives."""

    def __init__(self, bounds, selectable=True):
        super().__init__(bounds)
        if selectable:
            self.options |= OF_SELECTABLE
        self.seen = []

    def handle_event(self, event):
        self.seen.append(event.what)


class Swallower(Recorder):
    def handle_event(self, event):
        super().handle_event(event)
        event.clear()


def make_group(*views):
    group = Group(Rect.from_coords(0, 0, 40, 12))
    for view in views:
        group.add(view)
    group.set_focus(True)
    return group


def focused(group):
    return [child for child in group.children if child.focused]


def test_add_converts_to_absolute_bounds():
    group = Group(Rect.from_coords(5, 3, 25, 13))
    child = group.add(View(Rect.from_coords(1, 1, 5, 2)))
    assert child.bounds == Rect.from_coords(6, 4, 10, 5)

    centered = View(Rect.from_size(0, 0, 10, 4))
    centered.options |= OF_CENTERED
    group.add(centered)
    assert centered.bounds == Rect.from_size(10, 6, 10, 4)


def test_first_selectable_child_is_focused():
    text = StaticText(Rect.from_size(0, 0, 10, 1), "caption")
    a = Recorder(Rect.from_size(0, 1, 10, 1))
    b = Recorder(Rect.from_size(0, 2, 10, 1))
    group = make_group(text, a, b)
    assert group.current is a
    assert focused(group) == [a]


def test_focus_flag_follows_the_index_in_an_unfocused_group():
    a = Recorder(Rect.from_size(0, 0, 10, 1))
    b = Recorder(Rect.from_size(0, 1, 10, 1))
    group = Group(Rect.from_coords(0, 0, 40, 12))
    group.add(a)
    group.add(b)
    assert group.current is a
    assert focused(group) == [a]

    group.focus_child(b)
    assert focused(group) == [b]
    group.set_focus(True)
    group.set_focus(False)
    assert focused(group) == [b]
    assert group.current is b


def test_click_then_type_in_a_group_that_was_never_focused():
    a = Recorder(Rect.from_size(0, 0, 10, 1))
    field = InputLine(Rect.from_size(0, 2, 20, 1), 30)
    group = Group(Rect.from_coords(0, 0, 40, 12))
    group.add(a)
    group.add(field)

    group.handle_event(Event.mouse_event(EventType.MOUSE_DOWN, Point(3, 2)))
    assert group.current is field
    assert field.focused
    assert focused(group) == [field]

    group.handle_event(Event.key_char("x"))
    assert field.value == "x"
    assert a.seen == []


def test_tab_keeps_exactly_one_focused_child():
    views = [Recorder(Rect.from_size(0, y, 10, 1)) for y in range(3)]
    group = make_group(*views)
    for step in range(1, 7):
        group.handle_event(Event.keyboard(KB_TAB))
        assert focused(group) == [views[step % 3]]


def test_tab_skips_unfocusable_children_and_wraps():
    a = Recorder(Rect.from_size(0, 0, 10, 1))
    text = StaticText(Rect.from_size(0, 1, 10, 1), "caption")
    b = Recorder(Rect.from_size(0, 2, 10, 1))
    c = Recorder(Rect.from_size(0, 3, 10, 1))
    c.set_state(SF_DISABLED, True)
    group = make_group(a, text, b, c)

    event = Event.keyboard(KB_TAB)
    group.handle_event(event)
    assert event.is_nothing
    assert group.current is b

    group.handle_event(Event.keyboard(KB_TAB))
    assert group.current is a

    group.handle_event(Event.keyboard(KB_SHIFT_TAB))
    assert group.current is b


def test_keyboard_goes_only_to_the_focused_child():
    command_set.disable_command(CM_USER)
    button = Button(Rect.from_size(0, 0, 10, 2), "~S~ave", CM_USER)
    field = InputLine(Rect.from_size(0, 3, 20, 1), 30)
    other = Recorder(Rect.from_size(0, 5, 10, 1))
    group = make_group(button, field, other)
    assert button.get_state(SF_DISABLED)
    assert group.current is field

    for ch in "hi":
        group.handle_event(Event.key_char(ch))
    assert field.value == "hi"
    assert other.seen == []

    event = Event.keyboard(KB_ENTER)
    group.handle_event(event)
    assert event.is_keyboard
    assert other.seen == []


def test_click_focuses_and_delivers():
    a = Recorder(Rect.from_size(0, 0, 10, 1))
    b = Recorder(Rect.from_size(0, 2, 10, 1))
    group = make_group(a, b)

    group.handle_event(Event.mouse_event(EventType.MOUSE_DOWN, Point(3, 2)))
    assert focused(group) == [b]
    assert b.seen == [EventType.MOUSE_DOWN]
    assert a.seen == []


def test_click_on_unfocusable_child_keeps_focus():
    a = Recorder(Rect.from_size(0, 0, 10, 1))
    text = StaticText(Rect.from_size(0, 2, 10, 1), "caption")
    group = make_group(a, text)
    group.handle_event(Event.mouse_event(EventType.MOUSE_DOWN, Point(3, 2)))
    assert group.current is a


def test_hit_test_prefers_the_front_child():
    back = Recorder(Rect.from_size(0, 0, 10, 5))
    front = Recorder(Rect.from_size(5, 2, 10, 5))
    group = make_group(back, front)
    assert group.child_at(Point(6, 3)) is front
    assert group.child_at(Point(1, 1)) is back
    assert group.child_at(Point(30, 10)) is None

    front.set_state(SF_VISIBLE, False)
    assert group.child_at(Point(6, 3)) is back


def test_click_on_overlap_goes_to_the_front_child_only():
    back = Recorder(Rect.from_size(0, 0, 10, 5))
    front = Recorder(Rect.from_size(5, 2, 10, 5))
    group = make_group(back, front)

    group.handle_event(Event.mouse_event(EventType.MOUSE_DOWN, Point(6, 3)))
    assert front.seen == [EventType.MOUSE_DOWN]
    assert back.seen == []
    assert group.current is front


def test_broadcast_reaches_every_child():
    a = Recorder(Rect.from_size(0, 0, 10, 1))
    b = Recorder(Rect.from_size(0, 1, 10, 1), selectable=False)
    c = Recorder(Rect.from_size(0, 2, 10, 1))
    c.set_state(SF_DISABLED, True)
    group = make_group(a, b, c)

    event = Event.broadcast(CM_USER)
    group.handle_event(event)
    for view in (a, b, c):
        assert view.seen == [EventType.BROADCAST]
    assert event.what is EventType.BROADCAST


def test_broadcast_stops_when_a_child_consumes_it():
    a = Swallower(Rect.from_size(0, 0, 10, 1))
    b = Recorder(Rect.from_size(0, 1, 10, 1))
    group = make_group(a, b)
    group.broadcast(Event.broadcast(CM_USER))
    assert a.seen == [EventType.BROADCAST]
    assert b.seen == []


def test_alt_shortcut_focuses_label_link():
    button = Button(Rect.from_size(0, 0, 10, 2), "~O~K", CM_OK)
    field = InputLine(Rect.from_size(10, 3, 20, 1), 30)
    label = Label(Rect.from_size(0, 3, 8, 1), "~N~ame", field)
    group = make_group(button, label, field)
    assert group.current is button

    event = Event.keyboard(alt_code("n"))
    group.handle_event(event)
    assert event.is_nothing
    assert focused(group) == [field]

    event = Event.keyboard(alt_code("o"))
    group.handle_event(event)
    assert event.what is EventType.COMMAND
    assert event.command == CM_OK
    assert focused(group) == [button]


def test_click_on_label_focuses_its_link():
    field = InputLine(Rect.from_size(10, 3, 20, 1), 30)
    label = Label(Rect.from_size(0, 3, 8, 1), "~N~ame", field)
    other = Recorder(Rect.from_size(0, 0, 10, 1))
    group = make_group(other, label, field)

    event = Event.mouse_event(EventType.MOUSE_DOWN, Point(2, 3))
    group.handle_event(event)
    assert group.current is field
    assert event.is_nothing


def test_disabled_focused_button_loses_focus_after_broadcast():
    button = Button(Rect.from_size(0, 0, 10, 2), "~S~ave", CM_USER)
    field = InputLine(Rect.from_size(0, 3, 20, 1), 30)
    group = make_group(button, field)
    assert group.current is button

    command_set.disable_command(CM_USER)
    group.handle_event(Event.broadcast(CM_COMMAND_SET_CHANGED))
    assert button.get_state(SF_DISABLED)
    assert focused(group) == [field]


def test_disabled_current_child_gives_up_keys_at_once():
    a = Recorder(Rect.from_size(0, 0, 10, 1))
    b = Recorder(Rect.from_size(0, 1, 10, 1))
    group = make_group(a, b)
    assert group.current is a

    a.set_state(SF_DISABLED, True)
    group.handle_event(Event.key_char("x"))
    assert a.seen == []
    assert b.seen == [EventType.KEYBOARD]
    assert group.current is b
    assert focused(group) == [b]


def test_hidden_current_child_gives_up_keys_at_once():
    a = Recorder(Rect.from_size(0, 0, 10, 1))
    b = Recorder(Rect.from_size(0, 1, 10, 1))
    group = make_group(a, b)

    a.hide()
    group.handle_event(Event.key_char("x"))
    assert a.seen == []
    assert b.seen == [EventType.KEYBOARD]
    assert focused(group) == [b]


def test_draw_drops_focus_from_the_last_focusable_child(terminal):
    a = Recorder(Rect.from_size(0, 0, 10, 1))
    group = make_group(a)

    a.set_state(SF_DISABLED, True)
    group.draw(terminal)
    assert group.current is None
    assert focused(group) == []


def test_removing_current_child_refocuses():
    a = Recorder(Rect.from_size(0, 0, 10, 1))
    b = Recorder(Rect.from_size(0, 1, 10, 1))
    c = Recorder(Rect.from_size(0, 2, 10, 1))
    group = make_group(a, b, c)
    group.focus_child(b)

    assert group.remove(b)
    assert focused(group) == [c]
    assert not group.remove(b)


def test_children_are_clipped_to_the_group(terminal, backend):
    class Flood(View):
        def draw(self, terminal):
            terminal.fill_rect(terminal.screen_rect, Cell("X", Attr.from_byte(0x1F)))

    group = Group(Rect.from_coords(2, 2, 10, 6))
    group.add(Flood(Rect.from_size(0, 0, 4, 2)))
    group.draw(terminal)
    terminal.flush()

    for y in range(12):
        for x in range(40):
            inside = 2 <= x < 10 and 2 <= y < 6
            assert (backend.screen[y][x].ch == "X") == inside


def test_caret_outside_the_group_stays_hidden(terminal, backend):
    group = Group(Rect.from_coords(0, 0, 10, 5))
    field = group.add(InputLine(Rect.from_size(30, 2, 20, 1), 30))
    group.set_focus(True)
    for ch in "sixteen chars!!!":
        field.handle_event(Event.key_char(ch))
    assert field.focused

    group.update_cursor(terminal)
    terminal.flush()
    assert backend.cursor is None


def test_caret_inside_the_group_is_shown(terminal, backend):
    group = Group(Rect.from_coords(0, 0, 30, 5))
    field = group.add(InputLine(Rect.from_size(2, 1, 20, 1), 30))
    group.set_focus(True)
    for ch in "ab":
        field.handle_event(Event.key_char(ch))

    group.update_cursor(terminal)
    terminal.flush()
    assert backend.cursor == Point(5, 1)
