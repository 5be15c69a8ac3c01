"""
Input manager.

Translates pygame keyboard and mouse events into engine Events, using
the classic scan-code key layout and character-cell mouse coordinates.
"""

import pygame
from typing import Optional, Tuple

from ..config import Config
from ..core.command import CM_QUIT
from ..core.event import (
    Event, EventType, KM_ALT, KM_CTRL, KM_SHIFT, MB_LEFT, MB_MIDDLE, MB_RIGHT,
    KB_BACKSPACE, KB_DEL, KB_DOWN, KB_END, KB_ENTER, KB_ESC, KB_F1, KB_F2,
    KB_F3, KB_F4, KB_F5, KB_F6, KB_F7, KB_F8, KB_F9, KB_F10, KB_F11, KB_F12,
    KB_HOME, KB_INS, KB_LEFT, KB_PGDN, KB_PGUP, KB_RIGHT, KB_SHIFT_F12,
    KB_SHIFT_TAB, KB_TAB, KB_UP, alt_code, ctrl_code,
)
from ..core.geometry import Point


class InputManager:
    """
    Maps pygame events to Events.

    Keys with a fixed code go through KEY_MAP; letters combined with Ctrl or
    Alt get their control / Alt scan codes; everything else that produces
    text is reported as a plain character.
    """

    KEY_MAP = {
        pygame.K_ESCAPE: KB_ESC,
        pygame.K_RETURN: KB_ENTER,
        pygame.K_KP_ENTER: KB_ENTER,
        pygame.K_BACKSPACE: KB_BACKSPACE,
        pygame.K_TAB: KB_TAB,
        pygame.K_UP: KB_UP,
        pygame.K_DOWN: KB_DOWN,
        pygame.K_LEFT: KB_LEFT,
        pygame.K_RIGHT: KB_RIGHT,
        pygame.K_HOME: KB_HOME,
        pygame.K_END: KB_END,
        pygame.K_PAGEUP: KB_PGUP,
        pygame.K_PAGEDOWN: KB_PGDN,
        pygame.K_INSERT: KB_INS,
        pygame.K_DELETE: KB_DEL,
        pygame.K_F1: KB_F1,
        pygame.K_F2: KB_F2,
        pygame.K_F3: KB_F3,
        pygame.K_F4: KB_F4,
        pygame.K_F5: KB_F5,
        pygame.K_F6: KB_F6,
        pygame.K_F7: KB_F7,
        pygame.K_F8: KB_F8,
        pygame.K_F9: KB_F9,
        pygame.K_F10: KB_F10,
        pygame.K_F11: KB_F11,
        pygame.K_F12: KB_F12,
    }

    # Keys whose shifted variant has its own code
    SHIFT_MAP = {
        pygame.K_TAB: KB_SHIFT_TAB,
        pygame.K_F12: KB_SHIFT_F12,
    }

    BUTTON_MAP = {
        1: MB_LEFT,
        2: MB_MIDDLE,
        3: MB_RIGHT,
    }

    def __init__(self, config: Config, cell_size: Tuple[int, int]):
        """
        Initialize the input manager.

        Args:
            config: Application configuration
            cell_size: Pixel size of one character cell (width, height)
        """
        self.config = config
        self.cell_size = cell_size
        self._buttons = 0
        self._last_click: Optional[Tuple[int, Point]] = None

        pygame.key.set_repeat(
            config.key_repeat_delay,
            config.key_repeat_interval
        )

    def process_event(self, event: pygame.event.Event) -> Optional[Event]:
        """
        Process a pygame event and return an engine event.

        Args:
            event: Pygame event to process

        Returns:
            Event if the pygame event was recognized, None otherwise
        """
        if event.type == pygame.QUIT:
            return Event.command_event(CM_QUIT)
        if event.type == pygame.KEYDOWN:
            return self._handle_keydown(event)
        if event.type == pygame.MOUSEBUTTONDOWN:
            return self._handle_button(event, pressed=True)
        if event.type == pygame.MOUSEBUTTONUP:
            return self._handle_button(event, pressed=False)
        if event.type == pygame.MOUSEMOTION:
            return Event.mouse_event(EventType.MOUSE_MOVE, self._to_cell(event.pos), self._buttons)
        if event.type == pygame.MOUSEWHEEL:
            what = EventType.MOUSE_WHEEL_UP if event.y > 0 else EventType.MOUSE_WHEEL_DOWN
            pos = self._to_cell(pygame.mouse.get_pos())
            return Event.mouse_event(what, pos, self._buttons)
        return None

    def _handle_keydown(self, event: pygame.event.Event) -> Optional[Event]:
        """
        Handle keyboard input.

        Args:
            event: Pygame KEYDOWN event

        Returns:
            Keyboard Event or None for bare modifier keys
        """
        modifiers = 0
        if event.mod & pygame.KMOD_SHIFT:
            modifiers |= KM_SHIFT
        if event.mod & pygame.KMOD_CTRL:
            modifiers |= KM_CTRL
        if event.mod & pygame.KMOD_ALT:
            modifiers |= KM_ALT

        if modifiers & KM_SHIFT and event.key in self.SHIFT_MAP:
            return Event.keyboard(self.SHIFT_MAP[event.key], modifiers)
        if event.key in self.KEY_MAP:
            return Event.keyboard(self.KEY_MAP[event.key], modifiers)

        name = pygame.key.name(event.key)
        if len(name) == 1 and name.isalpha():
            if modifiers & KM_ALT:
                return Event.keyboard(alt_code(name), modifiers)
            if modifiers & KM_CTRL:
                return Event.keyboard(ctrl_code(name), modifiers)

        if event.unicode and event.unicode.isprintable():
            return Event.key_char(event.unicode, modifiers)
        return None

    def _handle_button(self, event: pygame.event.Event, pressed: bool) -> Optional[Event]:
        """Handle mouse button press/release (buttons 4/5 are the legacy wheel)."""
        if event.button in (4, 5):
            if not pressed:
                return None
            what = EventType.MOUSE_WHEEL_UP if event.button == 4 else EventType.MOUSE_WHEEL_DOWN
            return Event.mouse_event(what, self._to_cell(event.pos), self._buttons)

        bit = self.BUTTON_MAP.get(event.button)
        if bit is None:
            return None
        pos = self._to_cell(event.pos)

        if not pressed:
            self._buttons &= ~bit
            return Event.mouse_event(EventType.MOUSE_UP, pos, bit)

        self._buttons |= bit
        now = pygame.time.get_ticks()
        double = (
            self._last_click is not None
            and self._last_click[1] == pos
            and now - self._last_click[0] <= self.config.double_click_ms
        )
        self._last_click = None if double else (now, pos)
        return Event.mouse_event(EventType.MOUSE_DOWN, pos, self._buttons, double)

    def _to_cell(self, pixel: Tuple[int, int]) -> Point:
        """Convert a pixel position to a cell position."""
        cell_w, cell_h = self.cell_size
        return Point(pixel[0] // cell_w, pixel[1] // cell_h)
