import pytest

from textvision.core import command_set
from textvision.core.command import CM_CLOSE, CM_NEXT, CM_PREV, CM_ZOOM
from textvision.core.event import Event, EventType
from textvision.core.geometry import Point, Rect
from textvision.core.state import SF_ACTIVE, SF_CLOSED, SF_DRAGGING, SHADOW_ATTR
from textvision.ui.widgets.desktop import Desktop
from textvision.ui.widgets.dialog import Dialog
from textvision.ui.widgets.window import Window


@pytest.fixture
def desktop():
    command_set.init_command_set()
    desktop = Desktop(Rect.from_coords(0, 0, 40, 11))
    desktop.set_focus(True)
    return desktop


def test_added_window_is_focused_and_on_top(desktop):
    one = desktop.add(Window(Rect.from_size(0, 0, 20, 8), "One"))
    two = desktop.add(Window(Rect.from_size(10, 2, 20, 8), "Two"))

    assert desktop.top_window is two
    assert desktop.current is two
    assert two.focused and two.get_state(SF_ACTIVE)
    assert not one.focused and not one.get_state(SF_ACTIVE)
    assert one.limits == desktop.bounds


def test_window_commands_follow_the_focused_window(desktop):
    assert not command_set.command_enabled(CM_CLOSE)

    window = desktop.add(Window(Rect.from_size(0, 0, 20, 8), "One"))
    for command in (CM_CLOSE, CM_ZOOM, CM_NEXT, CM_PREV):
        assert command_set.command_enabled(command)

    window.handle_event(Event.command_event(CM_CLOSE))
    assert desktop.remove_closed_windows() == 1
    assert not command_set.command_enabled(CM_CLOSE)


def test_dialog_does_not_enable_zoom(desktop):
    desktop.add(Dialog(Rect.from_size(0, 0, 20, 8), "Dialog"))
    assert command_set.command_enabled(CM_CLOSE)
    assert not command_set.command_enabled(CM_ZOOM)


def test_click_raises_window(desktop):
    one = desktop.add(Window(Rect.from_size(0, 0, 20, 8), "One"))
    desktop.add(Window(Rect.from_size(10, 2, 20, 8), "Two"))

    desktop.handle_event(Event.mouse_event(EventType.MOUSE_DOWN, Point(1, 1)))
    assert desktop.top_window is one
    assert desktop.current is one


def test_next_and_previous_window(desktop):
    one = desktop.add(Window(Rect.from_size(0, 0, 20, 8), "One"))
    two = desktop.add(Window(Rect.from_size(10, 2, 20, 8), "Two"))

    event = Event.command_event(CM_NEXT)
    desktop.handle_event(event)
    assert event.is_nothing
    assert desktop.top_window is one
    assert desktop.windows == [two, one]

    desktop.handle_event(Event.command_event(CM_PREV))
    assert desktop.top_window is two


def test_closed_windows_are_removed_and_focus_moves(desktop):
    one = desktop.add(Window(Rect.from_size(0, 0, 20, 8), "One"))
    two = desktop.add(Window(Rect.from_size(10, 2, 20, 8), "Two"))

    desktop.handle_event(Event.command_event(CM_CLOSE))
    assert two.get_state(SF_CLOSED)
    assert desktop.remove_closed_windows() == 1
    assert desktop.windows == [one]
    assert one.focused


def test_close_icon_click(desktop):
    window = desktop.add(Window(Rect.from_size(4, 2, 20, 8), "One"))
    desktop.handle_event(Event.mouse_event(EventType.MOUSE_UP, Point(7, 2)))
    assert window.get_state(SF_CLOSED)


def test_drag_title_bar_moves_window(desktop):
    window = desktop.add(Window(Rect.from_size(2, 2, 20, 6), "One"))

    desktop.handle_event(Event.mouse_event(EventType.MOUSE_DOWN, Point(8, 2)))
    assert window.get_state(SF_DRAGGING)
    desktop.handle_event(Event.mouse_event(EventType.MOUSE_MOVE, Point(12, 4)))
    assert window.bounds == Rect.from_size(6, 4, 20, 6)
    assert window.frame.bounds == window.bounds

    # Moves are kept inside the desktop
    desktop.handle_event(Event.mouse_event(EventType.MOUSE_MOVE, Point(39, 10)))
    assert window.bounds == Rect.from_size(20, 5, 20, 6)

    desktop.handle_event(Event.mouse_event(EventType.MOUSE_UP, Point(39, 10)))
    assert not window.get_state(SF_DRAGGING)


def test_zoom_toggles(desktop):
    window = desktop.add(Window(Rect.from_size(2, 2, 20, 6), "One"))
    desktop.handle_event(Event.command_event(CM_ZOOM))
    assert window.bounds == desktop.bounds
    assert window.frame.zoomed
    desktop.handle_event(Event.command_event(CM_ZOOM))
    assert window.bounds == Rect.from_size(2, 2, 20, 6)


def test_tile_and_cascade(desktop):
    one = desktop.add(Window(Rect.from_size(0, 0, 20, 8), "One"))
    two = desktop.add(Window(Rect.from_size(10, 2, 20, 8), "Two"))
    dialog = desktop.add(Dialog(Rect.from_size(5, 5, 20, 5), "Fixed"))

    desktop.tile()
    assert one.bounds == Rect.from_coords(0, 0, 20, 11)
    assert two.bounds == Rect.from_coords(20, 0, 40, 11)
    assert dialog.bounds == Rect.from_size(5, 5, 20, 5)

    desktop.cascade()
    assert one.bounds == Rect.from_coords(0, 0, 40, 11)
    assert two.bounds == Rect.from_coords(1, 1, 40, 11)


def test_window_children_move_with_it(desktop):
    window = Window(Rect.from_size(2, 2, 20, 6), "One")
    inner = window.add(Window(Rect.from_size(1, 1, 16, 4)))
    desktop.add(window)
    assert inner.bounds.a == Point(3, 3)

    window.move_to(10, 4)
    assert inner.bounds.a == Point(11, 5)


def test_shadow_is_drawn_next_to_the_window(desktop, terminal):
    desktop.add(Window(Rect.from_size(2, 2, 20, 6), "One"))
    desktop.draw(terminal)

    assert terminal.read_cell(22, 3).attr == SHADOW_ATTR
    assert terminal.read_cell(22, 3).ch == "░"
    assert terminal.read_cell(10, 8).attr == SHADOW_ATTR
    assert terminal.read_cell(22, 2).attr != SHADOW_ATTR
