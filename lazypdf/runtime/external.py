"""External viewer launch for the current document."""

from __future__ import annotations

import shlex
import subprocess
from pathlib import Path

from ..errors import ExternalProcessError


def launch_viewer(command: str, target: Path) -> subprocess.Popen:
    """Start ``command target`` detached from the terminal and return at once."""
    cmd = shlex.split(command)
    if not cmd:
        raise ExternalProcessError("Cannot open: viewer command is empty.")
    try:
        return subprocess.Popen(
            [*cmd, str(target)],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as exc:
        raise ExternalProcessError(f"Failed to launch {cmd[0]}: {exc}") from exc
