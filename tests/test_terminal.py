import pytest

from textvision.core.draw import Cell, DrawBuffer, cstr_len, shortcut_char
from textvision.core.event import Event, KB_F12, KB_SHIFT_F12, KB_TAB
from textvision.core.geometry import Point, Rect
from textvision.core.palette import Attr


ATTR = Attr.from_byte(0x1F)


def test_first_flush_paints_everything(terminal, backend):
    emitted = terminal.flush()
    assert emitted == 40 * 12
    assert backend.flush_count == 1


def test_second_flush_emits_nothing(terminal, backend):
    terminal.write_line(2, 3, [Cell(ch, ATTR) for ch in "hello"])
    terminal.flush()
    backend.reset_writes()

    assert terminal.flush() == 0
    assert backend.writes == []
    assert backend.text_at(2, 3, 5) == "hello"


def test_flush_sends_only_changed_runs(terminal, backend):
    terminal.flush()
    backend.reset_writes()

    terminal.write_cell(5, 5, Cell("x", ATTR))
    terminal.write_cell(6, 5, Cell("y", ATTR))
    terminal.write_cell(20, 7, Cell("z", Attr.from_byte(0x70)))
    assert terminal.flush() == 3
    assert [(x, y, len(cells)) for x, y, cells in backend.writes] == [(5, 5, 2), (20, 7, 1)]


def test_writes_outside_the_clip_are_dropped(terminal, backend):
    terminal.push_clip(Rect.from_coords(5, 2, 15, 6))
    terminal.push_clip(Rect.from_coords(10, 0, 30, 4))
    assert terminal.clip_rect == Rect.from_coords(10, 2, 15, 4)

    terminal.fill_rect(terminal.screen_rect, Cell("#", ATTR))
    terminal.write_line(0, 3, [Cell("@", ATTR)] * 40)
    terminal.pop_clip()
    terminal.pop_clip()
    assert terminal.clip_depth == 0
    terminal.flush()

    for y in range(12):
        for x in range(40):
            inside = 10 <= x < 15 and 2 <= y < 4
            assert (backend.screen[y][x].ch != " ") == inside


def test_empty_clip_draws_nothing(terminal, backend):
    terminal.push_clip(Rect.from_coords(5, 5, 5, 5))
    terminal.fill_rect(terminal.screen_rect, Cell("#", ATTR))
    terminal.pop_clip()
    terminal.flush()
    assert all(cell.ch == " " for row in backend.screen for cell in row)


def test_unbalanced_pop_raises(terminal):
    with pytest.raises(IndexError):
        terminal.pop_clip()


def test_cursor_is_sent_only_when_changed(terminal, backend):
    terminal.set_cursor(3, 4)
    terminal.show_cursor()
    terminal.flush()
    assert backend.cursor == Point(3, 4)

    terminal.hide_cursor()
    terminal.flush()
    assert backend.cursor is None


def test_off_screen_cursor_is_sent_as_hidden(terminal, backend):
    terminal.set_cursor(50, 2)
    terminal.show_cursor()
    terminal.flush()
    assert backend.cursor is None

    terminal.set_cursor(39, 11)
    terminal.flush()
    assert backend.cursor == Point(39, 11)


def test_pending_events_come_first(terminal, backend):
    backend.inject(Event.keyboard(KB_TAB))
    queued = Event.key_char("q")
    terminal.put_event(queued)
    assert terminal.poll_event(0) is queued
    assert terminal.poll_event(0).key_code == KB_TAB
    assert terminal.poll_event(0) is None


def test_f12_dumps_the_screen_and_is_swallowed(terminal, backend, config):
    terminal.write_line(0, 0, [Cell(ch, ATTR) for ch in "dump me"])
    backend.inject(Event.keyboard(KB_F12))

    assert terminal.poll_event(0) is None
    text = config.screen_dump_path.read_text(encoding="utf-8")
    assert "dump me" in text
    assert text.count("\n") == 12
    # The flash restores the buffer
    assert terminal.read_cell(0, 0) == Cell("d", ATTR)


def test_shift_f12_dumps_the_active_view(terminal, backend, config):
    terminal.write_line(0, 1, [Cell(ch, ATTR) for ch in "outside inside"])
    terminal.set_active_view_bounds(Rect.from_coords(8, 1, 14, 2))
    backend.inject(Event.keyboard(KB_SHIFT_F12))

    assert terminal.poll_event(0) is None
    text = config.view_dump_path.read_text(encoding="utf-8")
    assert "inside" in text
    assert "outside" not in text
    assert text.count("\n") == 1


def test_failed_dump_is_reported_not_raised(terminal, tmp_path):
    missing = tmp_path / "no" / "such" / "dir" / "dump.ans"
    assert terminal.dump_screen(missing) is False


def test_draw_buffer_shortcut_markers():
    normal = Attr.from_byte(0x20)
    hot = Attr.from_byte(0x2E)
    buf = DrawBuffer(8)
    written = buf.move_str_with_shortcut(1, "~O~k", normal, hot)
    assert written == 2
    assert buf.data[1] == Cell("O", hot)
    assert buf.data[2] == Cell("k", normal)
    assert cstr_len("~O~k") == 2
    assert shortcut_char("Can~c~el") == "c"
    assert shortcut_char("plain") == ""


def test_draw_buffer_clips_to_its_width():
    buf = DrawBuffer(3)
    assert buf.move_str(1, "abcdef", ATTR) == 2
    buf.move_char(-2, "x", ATTR, 3)
    assert [cell.ch for cell in buf] == ["x", "a", "b"]
