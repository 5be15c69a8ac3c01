#!/usr/bin/env python3
"""
Headless Dialog Example

Runs a desktop with one window and a modal input box on the mock
backend, feeding it scripted keys, and prints the resulting screen.
Nothing is opened on the real display.

Run with: python examples/dialog_demo.py  (after pip install -e .)
"""

from textvision import Application, Config
from textvision.core.command import CM_OK
from textvision.core.event import Event, KB_ENTER
from textvision.core.geometry import Rect
from textvision.io import MockBackend
from textvision.ui.msgbox import input_box
from textvision.ui.widgets.static_text import StaticText
from textvision.ui.widgets.window import Window


def print_screen(backend: MockBackend) -> None:
    for y in range(backend.rows):
        print("    " + backend.row_text(y))


def main():
    """Drive a dialog with scripted input."""

    print("=" * 60)
    print("  Headless Dialog Demo")
    print("=" * 60)
    print()

    # ─────────────────────────────────────────────────────────────────────
    # Step 1: Create the application on a mock screen
    # ─────────────────────────────────────────────────────────────────────
    print("[1] Creating application on a 60x16 mock screen...")
    backend = MockBackend(60, 16)
    app = Application(Config(backend="mock", poll_timeout=0.0), backend)

    # ─────────────────────────────────────────────────────────────────────
    # Step 2: Open a window
    # ─────────────────────────────────────────────────────────────────────
    print("[2] Opening a window...")
    window = Window(Rect.from_size(2, 1, 40, 8), "Notes")
    window.add(StaticText(Rect.from_coords(2, 2, 38, 6), "\x03A window on the desktop"))
    app.insert_window(window)
    app.draw()
    print_screen(backend)
    print()

    # ─────────────────────────────────────────────────────────────────────
    # Step 3: Script the keys and run the input box modally
    # ─────────────────────────────────────────────────────────────────────
    print("[3] Typing 'Ada' into an input box and pressing Enter...")
    backend.inject_many([Event.key_char(ch) for ch in "Ada"] + [Event.keyboard(KB_ENTER)])
    result, name = input_box(app, "Your name", "~N~ame", limit=20, bounds=Rect.from_size(4, 4, 50, 8))
    print(f"    Result: {'OK' if result == CM_OK else 'Cancel'}, text: {name!r}")
    print()

    # ─────────────────────────────────────────────────────────────────────
    # Step 4: The screen under the dialog is restored
    # ─────────────────────────────────────────────────────────────────────
    print("[4] Screen after the dialog closed:")
    app.draw()
    print_screen(backend)

    app.shutdown()


if __name__ == "__main__":
    main()
