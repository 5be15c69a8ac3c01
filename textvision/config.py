"""
Application configuration.

All configuration values are centralized here for easy management
and environment-specific overrides.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple


@dataclass
class Config:
    """Main application configuration."""

    # ─────────────────────────────────────────────────────────────────────────
    # Display Settings
    # ─────────────────────────────────────────────────────────────────────────

    # Screen size in character cells
    columns: int = 80
    rows: int = 25

    # Display backend: "pygame" (window) or "ansi" (current terminal)
    backend: str = "pygame"

    # Font for the pygame window (None = first system monospace font)
    font_file: Optional[str] = None
    font_size: int = 16

    # RGB theme used by the pygame window ("vga", "amber", "green")
    theme: str = "vga"

    # Fullscreen mode (pygame only)
    fullscreen: bool = False

    # ─────────────────────────────────────────────────────────────────────────
    # Timing
    # ─────────────────────────────────────────────────────────────────────────

    # Input poll timeout in seconds; idle work runs when it expires
    poll_timeout: float = 0.02

    # Maximum delay between two clicks of a double click (ms)
    double_click_ms: int = 300

    # Duration of the attribute inversion shown after a screen dump
    flash_duration: float = 0.05

    # ─────────────────────────────────────────────────────────────────────────
    # Debug Surface
    # ─────────────────────────────────────────────────────────────────────────

    # Development mode (debug logging)
    dev_mode: bool = False

    # F12 / Shift+F12 dump shortcuts
    dump_shortcuts: bool = True

    # Directory and file names for ANSI dumps
    dump_dir: str = "."
    screen_dump_name: str = "screen-dump.ans"
    view_dump_name: str = "active-view-dump.ans"

    # ─────────────────────────────────────────────────────────────────────────
    # Input Settings
    # ─────────────────────────────────────────────────────────────────────────

    # Key repeat delay (ms) for held keys in the pygame window
    key_repeat_delay: int = 400
    key_repeat_interval: int = 50

    # Lone ESC is reported after this many seconds without a follow-up byte
    escape_timeout: float = 0.05

    # ─────────────────────────────────────────────────────────────────────────
    # Computed Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def screen_size(self) -> Tuple[int, int]:
        """Get screen size in cells as tuple."""
        return (self.columns, self.rows)

    @property
    def screen_dump_path(self) -> Path:
        """Get the file written by the whole-screen dump."""
        return Path(self.dump_dir) / self.screen_dump_name

    @property
    def view_dump_path(self) -> Path:
        """Get the file written by the active-view dump."""
        return Path(self.dump_dir) / self.view_dump_name

    def __post_init__(self):
        """Clamp the screen to a usable minimum."""
        self.columns = max(self.columns, 20)
        self.rows = max(self.rows, 6)


# Default configuration instances
DEFAULT_CONFIG = Config()
DEV_CONFIG = Config(dev_mode=True)
