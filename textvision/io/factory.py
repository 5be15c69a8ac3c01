"""
Backend factory.

Creates the display backend selected in the configuration.
"""

import logging

from ..config import Config
from .ansi_io import AnsiBackend
from .mock_io import MockBackend
from .ports import Backend
from .pygame_io import PygameBackend

logger = logging.getLogger(__name__)

BACKENDS = {
    "pygame": PygameBackend,
    "ansi": AnsiBackend,
}


def create_backend(config: Config) -> Backend:
    """
    Create a backend for the configuration.

    Args:
        config: Application configuration; ``config.backend`` selects
            "pygame", "ansi" or "mock"

    Returns:
        An unopened backend

    Raises:
        ValueError: If the backend name is unknown
    """
    if config.backend == "mock":
        return MockBackend(config.columns, config.rows, max_idle_polls=None)

    backend_class = BACKENDS.get(config.backend)
    if backend_class is None:
        raise ValueError(f"Unknown backend: {config.backend!r} (expected one of {sorted(BACKENDS)})")
    logger.info(f"Creating {config.backend} backend")
    return backend_class(config)
