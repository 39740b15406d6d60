"""Input-layer public API: key decoding and key-to-command mapping."""

from .keys import KEY_BINDINGS, command_for_key
from .reader import EOF_TOKEN, ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "read_key",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "EOF_TOKEN",
    "KEY_BINDINGS",
    "command_for_key",
]
