from textvision.core.command import CM_OK
from textvision.core.event import (
    EV_MESSAGE, EV_MOUSE, Event, EventType, KB_ALT_X, KB_ENTER, KB_LEFT, KM_ALT,
    MB_LEFT, alt_code, alt_letter, ctrl_code,
)
from textvision.core.geometry import Point


def test_constructors_set_kind():
    assert Event.nothing().is_nothing
    assert Event.keyboard(KB_ENTER).is_keyboard
    assert Event.command_event(CM_OK).what is EventType.COMMAND
    assert Event.broadcast(CM_OK).what is EventType.BROADCAST

    click = Event.mouse_event(EventType.MOUSE_DOWN, Point(3, 4))
    assert click.is_mouse
    assert click.mouse.pos == Point(3, 4)
    assert click.mouse.buttons == MB_LEFT
    assert not click.mouse.double_click


def test_masks():
    assert EventType.MOUSE_UP.matches(EV_MOUSE)
    assert EventType.MOUSE_WHEEL_DOWN.matches(EV_MOUSE)
    assert not EventType.KEYBOARD.matches(EV_MOUSE)
    assert EventType.COMMAND.matches(EV_MESSAGE)
    assert EventType.BROADCAST.matches(EV_MESSAGE)
    assert Event.command_event(CM_OK).is_message


def test_mutation_in_place():
    event = Event.keyboard(KB_ENTER)
    event.to_command(CM_OK)
    assert event.what is EventType.COMMAND
    assert event.command == CM_OK

    event.to_broadcast(CM_OK)
    assert event.what is EventType.BROADCAST

    event.clear()
    assert event.is_nothing


def test_char_only_for_printable_keys():
    assert Event.key_char("a").char == "a"
    assert Event.key_char(" ").char == " "
    assert Event.keyboard(KB_ENTER).char == ""
    assert Event.keyboard(KB_ALT_X, KM_ALT).char == ""
    assert Event.command_event(ord("a")).char == ""


def test_wide_characters_travel_as_text():
    event = Event.key_char("中")
    assert event.is_keyboard
    assert event.char == "中"
    assert event.key_code == 0

    assert Event.key_char("é").key_code == 0xE9
    assert Event.key_char("é").char == "é"

    # Code points that match scan codes do not turn into keys
    arrow_like = Event.key_char(chr(KB_LEFT))
    assert arrow_like.key_code != KB_LEFT
    assert arrow_like.char == chr(KB_LEFT)
    assert alt_letter(Event.key_char(chr(KB_ALT_X)).key_code) is None


def test_key_helpers():
    assert ctrl_code("a") == 1
    assert ctrl_code("Z") == 26
    assert alt_code("x") == KB_ALT_X
    assert alt_code("1") == 0
    assert alt_letter(KB_ALT_X) == "x"
    assert alt_letter(KB_ENTER) is None
