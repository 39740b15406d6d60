"""Background keyboard producer.

Reads key tokens from the terminal and queues the matching commands. The
thread is a daemon and is abandoned at process exit rather than joined.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from queue import Queue

from .. import commands
from ..commands import Command
from ..input import EOF_TOKEN, command_for_key, read_key

logger = logging.getLogger(__name__)


class InputSource:
    """Translate every keystroke into exactly one queued command."""

    def __init__(
        self,
        stdin_fd: int,
        command_queue: Queue[Command],
        read_key_fn: Callable[[int], str] = read_key,
    ) -> None:
        self.stdin_fd = stdin_fd
        self.command_queue = command_queue
        self._read_key = read_key_fn
        self._thread: threading.Thread | None = None

    def run(self) -> None:
        """Read until EOF; a closed or broken stdin queues ``QUIT``."""
        while True:
            try:
                key = self._read_key(self.stdin_fd)
            except OSError as exc:
                logger.warning("keyboard input failed: %s", exc)
                self.command_queue.put(commands.QUIT)
                return
            if key == "":
                continue
            command = command_for_key(key)
            logger.debug("key %r -> %s", key, command.kind.name)
            self.command_queue.put(command)
            if key == EOF_TOKEN:
                return

    def start(self) -> threading.Thread:
        thread = threading.Thread(target=self.run, name="lazypdf-input", daemon=True)
        thread.start()
        self._thread = thread
        return thread
