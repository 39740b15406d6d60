"""Fixed key bindings from key tokens to navigation commands."""

from __future__ import annotations

from .. import commands
from ..commands import Command
from .reader import EOF_TOKEN

KEY_BINDINGS: dict[str, Command] = {
    "j": commands.NEXT_PAGE,
    "DOWN": commands.NEXT_PAGE,
    "SPACE": commands.NEXT_PAGE,
    "PAGE_DOWN": commands.NEXT_PAGE,
    "k": commands.PREVIOUS_PAGE,
    "UP": commands.PREVIOUS_PAGE,
    "PAGE_UP": commands.PREVIOUS_PAGE,
    "l": commands.NEXT_DOCUMENT,
    "RIGHT": commands.NEXT_DOCUMENT,
    "h": commands.PREVIOUS_DOCUMENT,
    "LEFT": commands.PREVIOUS_DOCUMENT,
    "g": commands.FIRST_PAGE,
    "G": commands.LAST_PAGE,
    "r": commands.REFRESH,
    "CTRL_R": commands.REFRESH,
    "o": commands.OPEN,
    "q": commands.QUIT,
    "CTRL_C": commands.QUIT,
    EOF_TOKEN: commands.QUIT,
}


def command_for_key(key: str) -> Command:
    """Map a key token to its command; unmapped keys become a no-op command."""
    return KEY_BINDINGS.get(key, commands.NO_OP)
