"""
Application entry point.

Usage:
    python -m textvision [options]

Options:
    --dev           Enable development mode (debug logging)
    --backend NAME  Display backend: pygame (window) or ansi (this terminal)
    --columns N     Screen width in cells [default: 80]
    --rows N        Screen height in cells [default: 25]
    --font-size N   Font size for the pygame window [default: 16]
    --theme NAME    Color theme for the pygame window: vga, amber, green

Examples:
    python -m textvision --dev
    python -m textvision --backend ansi
"""

import argparse
import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from .config import Config
from .core.app import Application
from .core.command import CM_CLOSE, CM_NEXT, CM_OK, CM_QUIT, CM_TILE, CM_USER, CM_ZOOM
from .core.event import (
    Event, EventType, KB_ALT_F3, KB_ALT_X, KB_F2, KB_F3, KB_F4, KB_F5,
    KB_F6, KB_F7,
)
from .core.geometry import Rect
from .core.palette import CP_BLUE_WINDOW, CP_CYAN_WINDOW
from .io.ports import Backend, BackendError
from .ui.msgbox import MF_INFORMATION, MF_OK_BUTTON, input_box, message_box
from .ui.widgets.static_text import StaticText
from .ui.widgets.status_line import StatusItem, StatusLine
from .ui.widgets.window import Window

CM_NEW_WINDOW = CM_USER
CM_ABOUT = CM_USER + 1
CM_ASK_NAME = CM_USER + 2

LOG_FILE = "textvision.log"


def setup_logging(dev_mode: bool = False, log_to_file: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        dev_mode: Log at debug level
        log_to_file: Log to a rotating file instead of the console (the
            ANSI backend owns the console)
    """
    level = logging.DEBUG if dev_mode else logging.INFO

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )

    if log_to_file:
        handler = RotatingFileHandler(
            LOG_FILE,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5
        )
    else:
        handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)

    # Root logger
    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)

    logging.info("Logging initialized")


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="textvision - text-mode windowing demo"
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Enable development mode"
    )
    parser.add_argument(
        "--backend",
        choices=["pygame", "ansi"],
        default="pygame",
        help="Display backend: pygame window or the current terminal"
    )
    parser.add_argument(
        "--columns",
        type=int,
        default=80,
        help="Screen width in cells"
    )
    parser.add_argument(
        "--rows",
        type=int,
        default=25,
        help="Screen height in cells"
    )
    parser.add_argument(
        "--font-size",
        type=int,
        default=16,
        help="Font size for the pygame window"
    )
    parser.add_argument(
        "--theme",
        choices=["vga", "amber", "green"],
        default="vga",
        help="Color theme for the pygame window"
    )

    return parser.parse_args()


class DemoApplication(Application):
    """Desktop with a few windows, a message box and an input box."""

    def __init__(self, config: Config, backend: Optional[Backend] = None):
        super().__init__(config, backend)
        self._window_count = 0

    def init_status_line(self, bounds: Rect) -> StatusLine:
        return StatusLine(bounds, [
            StatusItem("~Alt-X~ Exit", KB_ALT_X, CM_QUIT),
            StatusItem("~F2~ New", KB_F2, CM_NEW_WINDOW),
            StatusItem("~F3~ About", KB_F3, CM_ABOUT),
            StatusItem("~F4~ Name", KB_F4, CM_ASK_NAME),
            StatusItem("~F5~ Zoom", KB_F5, CM_ZOOM),
            StatusItem("~F6~ Next", KB_F6, CM_NEXT),
            StatusItem("~Alt-F3~ Close", KB_ALT_F3, CM_CLOSE),
            StatusItem("", KB_F7, CM_TILE),
        ])

    def new_window(self) -> None:
        self._window_count += 1
        offset = (self._window_count - 1) % 8
        palette = CP_BLUE_WINDOW if self._window_count % 2 else CP_CYAN_WINDOW
        window = Window(Rect.from_size(2 + offset * 3, 1 + offset, 40, 12), f"Window {self._window_count}", palette)
        window.add(StaticText(
            Rect.from_coords(2, 2, 38, 10),
            "\x03Press F12 to dump the screen, Shift+F12 to dump this window.\n\n"
            "Drag the title bar to move, the corner to resize."
        ))
        self.insert_window(window)

    def handle_event(self, event: Event) -> None:
        super().handle_event(event)
        if event.what is not EventType.COMMAND:
            return
        if event.command == CM_NEW_WINDOW:
            self.new_window()
            event.clear()
        elif event.command == CM_ABOUT:
            message_box(self, "\x03textvision\n\x03A text-mode windowing engine", MF_INFORMATION | MF_OK_BUTTON)
            event.clear()
        elif event.command == CM_ASK_NAME:
            result, name = input_box(self, "Your name", "~N~ame", "", 40)
            if result == CM_OK and name:
                message_box(self, f"\x03Hello, {name}!", MF_INFORMATION | MF_OK_BUTTON)
            event.clear()


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Setup logging first
    setup_logging(dev_mode=args.dev, log_to_file=args.backend == "ansi")

    logger = logging.getLogger(__name__)
    logger.info("textvision demo starting...")

    # Build configuration from arguments
    config = Config(
        dev_mode=args.dev,
        backend=args.backend,
        columns=args.columns,
        rows=args.rows,
        font_size=args.font_size,
        theme=args.theme
    )

    logger.info(f"Config: backend={config.backend}, size={config.columns}x{config.rows}, dev={config.dev_mode}")

    try:
        app = DemoApplication(config)
    except BackendError as e:
        logger.error(f"Cannot open display: {e}")
        return 1

    try:
        app.new_window()
        app.run()
    except KeyboardInterrupt:
        logger.info("Shutdown requested...")
    finally:
        app.shutdown()

    return 0


if __name__ == "__main__":
    sys.exit(main())
