"""
Event model.

One mutable Event value carries keyboard, mouse, command and broadcast
messages through the view tree. Views report results by rewriting the
event in place: clearing it marks it consumed, turning it into a Command
makes it bubble back up to the owners.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .geometry import Point

# ─────────────────────────────────────────────────────────────────────────────
# Event Masks
# ─────────────────────────────────────────────────────────────────────────────

EV_NOTHING = 0x0000
EV_MOUSE_DOWN = 0x0001
EV_MOUSE_UP = 0x0002
EV_MOUSE_MOVE = 0x0004
EV_MOUSE_AUTO = 0x0008
EV_MOUSE_WHEEL_UP = 0x0010
EV_MOUSE_WHEEL_DOWN = 0x0020
EV_MOUSE = 0x003F
EV_KEYBOARD = 0x0040
EV_COMMAND = 0x0100
EV_BROADCAST = 0x0200
EV_MESSAGE = 0xFF00

# Mouse buttons
MB_LEFT = 0x01
MB_MIDDLE = 0x02
MB_RIGHT = 0x04

# Keyboard modifiers
KM_SHIFT = 0x01
KM_CTRL = 0x04
KM_ALT = 0x08

# ─────────────────────────────────────────────────────────────────────────────
# Key Codes (scan code in the high byte, character in the low byte)
# ─────────────────────────────────────────────────────────────────────────────

KB_ESC = 0x011B
KB_ESC_ESC = 0x011C
KB_ENTER = 0x1C0D
KB_BACKSPACE = 0x0E08
KB_TAB = 0x0F09
KB_SHIFT_TAB = 0x0F00
KB_SPACE = 0x0020

KB_UP = 0x4800
KB_DOWN = 0x5000
KB_LEFT = 0x4B00
KB_RIGHT = 0x4D00
KB_HOME = 0x4700
KB_END = 0x4F00
KB_PGUP = 0x4900
KB_PGDN = 0x5100
KB_INS = 0x5200
KB_DEL = 0x5300

KB_F1 = 0x3B00
KB_F2 = 0x3C00
KB_F3 = 0x3D00
KB_F4 = 0x3E00
KB_F5 = 0x3F00
KB_F6 = 0x4000
KB_F7 = 0x4100
KB_F8 = 0x4200
KB_F9 = 0x4300
KB_F10 = 0x4400
KB_F11 = 0x8500
KB_F12 = 0x8600
KB_SHIFT_F12 = 0x8601

KB_ALT_X = 0x2D00
KB_ALT_F3 = 0x6A00

# Alt+letter scan codes
_ALT_SCAN = {
    "q": 0x10, "w": 0x11, "e": 0x12, "r": 0x13, "t": 0x14, "y": 0x15,
    "u": 0x16, "i": 0x17, "o": 0x18, "p": 0x19, "a": 0x1E, "s": 0x1F,
    "d": 0x20, "f": 0x21, "g": 0x22, "h": 0x23, "j": 0x24, "k": 0x25,
    "l": 0x26, "z": 0x2C, "x": 0x2D, "c": 0x2E, "v": 0x2F, "b": 0x30,
    "n": 0x31, "m": 0x32,
}
_ALT_LETTER = {scan << 8: letter for letter, scan in _ALT_SCAN.items()}


def ctrl_code(letter: str) -> int:
    """Get the key code of Ctrl+letter (Ctrl+A = 1 .. Ctrl+Z = 26)."""
    return ord(letter.lower()) - ord("a") + 1


def alt_code(letter: str) -> int:
    """Get the key code of Alt+letter, or 0 for non-letters."""
    scan = _ALT_SCAN.get(letter.lower())
    return scan << 8 if scan else 0


def alt_letter(code: int) -> Optional[str]:
    """Get the letter of an Alt+letter key code, if it is one."""
    return _ALT_LETTER.get(code)


class EventType(Enum):
    """Event kinds; values are the classic event masks."""
    NOTHING = EV_NOTHING
    MOUSE_DOWN = EV_MOUSE_DOWN
    MOUSE_UP = EV_MOUSE_UP
    MOUSE_MOVE = EV_MOUSE_MOVE
    MOUSE_AUTO = EV_MOUSE_AUTO
    MOUSE_WHEEL_UP = EV_MOUSE_WHEEL_UP
    MOUSE_WHEEL_DOWN = EV_MOUSE_WHEEL_DOWN
    KEYBOARD = EV_KEYBOARD
    COMMAND = EV_COMMAND
    BROADCAST = EV_BROADCAST

    def matches(self, mask: int) -> bool:
        """Check if this kind is selected by an event mask."""
        return bool(self.value & mask)


@dataclass
class MouseEvent:
    """Mouse state carried by mouse events."""
    pos: Point = field(default_factory=Point)
    buttons: int = 0
    double_click: bool = False


@dataclass
class Event:
    """
    A routed event.

    Attributes:
        what: Event kind
        key_code: Key code for keyboard events
        key_modifiers: KM_* bits for keyboard events
        mouse: Pointer state for mouse events
        command: Command id for command and broadcast events
        text: Typed character for keyboard events, '' for special keys
    """
    what: EventType = EventType.NOTHING
    key_code: int = 0
    key_modifiers: int = 0
    mouse: MouseEvent = field(default_factory=MouseEvent)
    command: int = 0
    text: str = ""

    # ─────────────────────────────────────────────────────────────────────────
    # Constructors
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def nothing(cls) -> "Event":
        return cls()

    @classmethod
    def keyboard(cls, key_code: int, modifiers: int = 0) -> "Event":
        return cls(EventType.KEYBOARD, key_code=key_code, key_modifiers=modifiers)

    @classmethod
    def key_char(cls, char: str, modifiers: int = 0) -> "Event":
        """
        Create a keyboard event for a typed character.

        The character travels in ``text``. Only Latin-1 characters also get
        a key code; anything above would alias the scan-code keys.
        """
        code = ord(char) if ord(char) < 0x100 else 0
        return cls(EventType.KEYBOARD, key_code=code, key_modifiers=modifiers, text=char)

    @classmethod
    def command_event(cls, command: int) -> "Event":
        return cls(EventType.COMMAND, command=command)

    @classmethod
    def broadcast(cls, command: int) -> "Event":
        return cls(EventType.BROADCAST, command=command)

    @classmethod
    def mouse_event(
        cls,
        what: EventType,
        pos: Point,
        buttons: int = MB_LEFT,
        double_click: bool = False
    ) -> "Event":
        return cls(what, mouse=MouseEvent(pos, buttons, double_click))

    # ─────────────────────────────────────────────────────────────────────────
    # In-place mutation
    # ─────────────────────────────────────────────────────────────────────────

    def clear(self) -> None:
        """Mark the event as consumed."""
        self.what = EventType.NOTHING

    def to_command(self, command: int) -> None:
        """Rewrite the event into a Command so it bubbles up to the owners."""
        self.what = EventType.COMMAND
        self.command = command

    def to_broadcast(self, command: int) -> None:
        """Rewrite the event into a Broadcast."""
        self.what = EventType.BROADCAST
        self.command = command

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def is_nothing(self) -> bool:
        return self.what is EventType.NOTHING

    @property
    def is_mouse(self) -> bool:
        return self.what.matches(EV_MOUSE)

    @property
    def is_keyboard(self) -> bool:
        return self.what is EventType.KEYBOARD

    @property
    def is_message(self) -> bool:
        """Check for Command or Broadcast."""
        return self.what.matches(EV_MESSAGE)

    @property
    def char(self) -> str:
        """Get the printable character of a keyboard event, or ''."""
        if self.what is not EventType.KEYBOARD:
            return ""
        if self.text:
            return self.text if self.text.isprintable() else ""
        if 0x20 <= self.key_code < 0x100 and self.key_code != 0x7F:
            return chr(self.key_code)
        return ""
