from textvision.core.palette import (
    CP_APP_COLOR, CP_APP_MONOCHROME, CP_BACKGROUND, CP_BLUE_WINDOW, CP_BUTTON,
    CP_FRAME, CP_GRAY_DIALOG, CP_INPUT_LINE, CP_LABEL, CP_STATUS_LINE,
    FALLBACK_ATTR, VGA_RGB, Attr, Color, Palette, app_palette, resolve,
    set_app_palette,
)
from textvision.ui.colors import get_theme, rgb


def _bytes(view, container, indices):
    return [resolve(i, view, container).to_byte() for i in indices]


def test_attr_byte_round_trip():
    attr = Attr.from_byte(0x1F)
    assert attr.fg is Color.WHITE
    assert attr.bg is Color.BLUE
    assert attr.to_byte() == 0x1F
    assert attr.swapped() == Attr(Color.BLUE, Color.WHITE)


def test_palette_lookup_out_of_range_is_unmapped():
    palette = Palette([5, 6])
    assert palette[1] == 5
    assert palette[2] == 6
    assert palette[0] == 0
    assert palette[3] == 0
    assert palette[-1] == 0


def test_button_in_dialog():
    assert _bytes(CP_BUTTON, CP_GRAY_DIALOG, range(1, 9)) == [
        0x20, 0x2B, 0x2F, 0x78, 0x2E, 0x2E, 0x2E, 0x70,
    ]


def test_dialog_own_colors():
    assert _bytes(CP_GRAY_DIALOG, None, range(1, 10)) == [
        0x70, 0x7F, 0x7A, 0x13, 0x13, 0x70, 0x70, 0x7F, 0x7E,
    ]


def test_input_line_and_label_in_dialog():
    assert _bytes(CP_INPUT_LINE, CP_GRAY_DIALOG, range(1, 5)) == [0x1F, 0x1F, 0x2F, 0x1A]
    assert _bytes(CP_LABEL, CP_GRAY_DIALOG, range(1, 4)) == [0x70, 0x7F, 0x7E]


def test_frame_in_dialog_and_blue_window():
    assert _bytes(CP_FRAME, CP_GRAY_DIALOG, range(1, 6)) == [0x70, 0x70, 0x7F, 0x7F, 0x7A]
    assert _bytes(CP_FRAME, CP_BLUE_WINDOW, [1, 3, 5]) == [0x17, 0x1F, 0x1A]


def test_top_level_views_resolve_through_application():
    assert _bytes(CP_BACKGROUND, None, [1]) == [0x71]
    assert _bytes(CP_STATUS_LINE, None, range(1, 7)) == [0x70, 0x78, 0x74, 0x20, 0x28, 0x24]


def test_unmapped_view_index_passes_through():
    # Index 6 is past the end of the frame palette, so it reaches the
    # window tier unchanged: blue window entry 6 is application entry 13
    assert resolve(6, CP_FRAME, CP_BLUE_WINDOW) == Attr.from_byte(CP_APP_COLOR[13])


def test_out_of_range_resolves_to_fallback():
    assert resolve(0, None, None) == FALLBACK_ATTR
    assert resolve(64, None, None) == FALLBACK_ATTR
    assert resolve(1000, CP_BUTTON, CP_GRAY_DIALOG) == FALLBACK_ATTR
    assert FALLBACK_ATTR.to_byte() == 0x00


def test_resolution_is_total():
    tiers = [None, CP_BUTTON, CP_FRAME, CP_GRAY_DIALOG, CP_BLUE_WINDOW, Palette([99, 0, 7])]
    for view in tiers:
        for container in tiers:
            for index in range(0, 80):
                attr = resolve(index, view, container)
                assert isinstance(attr, Attr)
                assert 0 <= attr.to_byte() <= 0xFF


def test_application_palette_can_be_switched():
    set_app_palette(CP_APP_MONOCHROME)
    assert app_palette() is CP_APP_MONOCHROME
    assert resolve(1, CP_BACKGROUND, None).to_byte() == 0x70
    # An explicit application tier overrides the current one
    assert resolve(1, CP_BACKGROUND, None, CP_APP_COLOR).to_byte() == 0x71


def test_window_themes():
    assert get_theme("vga") == VGA_RGB
    assert get_theme("no-such-theme") == VGA_RGB
    amber = get_theme("amber")
    assert len(amber) == 16
    assert amber[int(Color.BLACK)] == (0, 0, 0)
    assert rgb(Color.WHITE) == VGA_RGB[15]
