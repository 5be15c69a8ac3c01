"""
Command enable set.

A bitset over the 16-bit command space decides whether command-bound
controls are interactive. The application owns one global set per thread;
mutating it sets a dirty flag that the idle tick turns into a
CM_COMMAND_SET_CHANGED broadcast.
"""

import logging
import threading
from typing import Iterable

from .command import WINDOW_COMMANDS

logger = logging.getLogger(__name__)

MAX_COMMAND = 0xFFFF
_ALL_BITS = (1 << (MAX_COMMAND + 1)) - 1


class CommandSet:
    """Set of enabled command ids (0..65535)."""

    __slots__ = ("_bits",)

    def __init__(self, bits: int = 0):
        self._bits = bits & _ALL_BITS

    @classmethod
    def all_enabled(cls) -> "CommandSet":
        return cls(_ALL_BITS)

    def has(self, command: int) -> bool:
        """Check if a command is enabled. Ids outside the range are not."""
        if not 0 <= command <= MAX_COMMAND:
            return False
        return bool((self._bits >> command) & 1)

    def __contains__(self, command: int) -> bool:
        return self.has(command)

    def enable(self, command: int) -> None:
        if 0 <= command <= MAX_COMMAND:
            self._bits |= 1 << command

    def disable(self, command: int) -> None:
        if 0 <= command <= MAX_COMMAND:
            self._bits &= ~(1 << command)

    def enable_range(self, first: int, last: int) -> None:
        """Enable every command in first..last (inclusive)."""
        self._bits |= self._range_mask(first, last)

    def disable_range(self, first: int, last: int) -> None:
        """Disable every command in first..last (inclusive)."""
        self._bits &= ~self._range_mask(first, last)

    def enable_all(self) -> None:
        self._bits = _ALL_BITS

    def disable_all(self) -> None:
        self._bits = 0

    def is_empty(self) -> bool:
        return self._bits == 0

    def copy(self) -> "CommandSet":
        return CommandSet(self._bits)

    def __or__(self, other: "CommandSet") -> "CommandSet":
        return CommandSet(self._bits | other._bits)

    def __and__(self, other: "CommandSet") -> "CommandSet":
        return CommandSet(self._bits & other._bits)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CommandSet):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self) -> int:
        return hash(self._bits)

    @staticmethod
    def _range_mask(first: int, last: int) -> int:
        first = max(first, 0)
        last = min(last, MAX_COMMAND)
        if last < first:
            return 0
        return ((1 << (last - first + 1)) - 1) << first


# ─────────────────────────────────────────────────────────────────────────────
# Global command set (one per thread)
# ─────────────────────────────────────────────────────────────────────────────

_local = threading.local()


def _current() -> CommandSet:
    commands = getattr(_local, "commands", None)
    if commands is None:
        commands = CommandSet.all_enabled()
        _local.commands = commands
        _local.changed = False
    return commands


def _set_bit(command: int, enabled: bool) -> None:
    commands = _current()
    if commands.has(command) == enabled:
        return
    if enabled:
        commands.enable(command)
    else:
        commands.disable(command)
    _local.changed = True


def command_enabled(command: int) -> bool:
    """Check if a command is enabled in the global set."""
    return _current().has(command)


def enable_command(command: int) -> None:
    """Enable a command; marks the set changed only if the bit flips."""
    _set_bit(command, True)


def disable_command(command: int) -> None:
    """Disable a command; marks the set changed only if the bit flips."""
    _set_bit(command, False)


def enable_commands(commands: Iterable[int]) -> None:
    for command in commands:
        _set_bit(command, True)


def disable_commands(commands: Iterable[int]) -> None:
    for command in commands:
        _set_bit(command, False)


def get_commands() -> CommandSet:
    """Get a copy of the global set."""
    return _current().copy()


def set_commands(commands: CommandSet) -> None:
    """Replace the global set; marks it changed if any bit differs."""
    current = _current()
    if current != commands:
        _local.commands = commands.copy()
        _local.changed = True


def command_set_changed() -> bool:
    """Check the dirty flag."""
    _current()
    return _local.changed


def clear_command_set_changed() -> None:
    _current()
    _local.changed = False


def init_command_set() -> None:
    """
    Reset the global set for a new application.

    Everything is enabled except the window commands, which the focused
    window enables. The dirty flag starts clear.
    """
    commands = CommandSet.all_enabled()
    for command in WINDOW_COMMANDS:
        commands.disable(command)
    _local.commands = commands
    _local.changed = False
    logger.debug("Command set initialized")
