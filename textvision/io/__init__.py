"""
IO Package - display backends.

This package isolates the engine from physical displays, enabling
different implementations for desktop use, terminals, and testing.

Key components:
- ports: Abstract Backend interface and BackendError
- pygame_io: Character grid in a pygame window
- ansi_io: Raw ANSI terminal
- mock_io: Scripted testing backend
- factory: Backend selection from the configuration
"""

from .ports import Backend, BackendCapabilities, BackendError
from .mock_io import MockBackend, ScriptExhausted
from .ansi_io import AnsiBackend
from .pygame_io import PygameBackend
from .factory import create_backend

__all__ = [
    "Backend",
    "BackendCapabilities",
    "BackendError",
    "MockBackend",
    "ScriptExhausted",
    "AnsiBackend",
    "PygameBackend",
    "create_backend",
]
