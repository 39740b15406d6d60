"""Terminal control helpers for the viewer session.

Owns raw-mode lifecycle and alternate-screen switching.
Also wraps the iTerm2 and kitty inline image protocols used to show pages.
"""

from __future__ import annotations

import base64
import contextlib
import os
import termios
import tty

from ..errors import TerminalUnavailableError

IMAGE_PROTOCOLS = ("iterm", "kitty")
KITTY_CHUNK_SIZE = 4096
FALLBACK_TERMINAL_SIZE = (80, 24)


def open_ui_output(stdin_fd: int, stdout_fd: int) -> tuple[int, bool]:
    """Return ``(fd, owned)`` for screen output.

    ``stdout_fd`` is used when it is a terminal. Otherwise stdout is being
    piped and the terminal behind ``stdin_fd`` is opened for writing; the
    caller must close it when ``owned`` is true.
    """
    if os.isatty(stdout_fd):
        return stdout_fd, False
    try:
        fd = os.open(os.ttyname(stdin_fd), os.O_WRONLY | os.O_NOCTTY)
    except OSError as exc:
        raise TerminalUnavailableError(f"cannot open terminal for output: {exc}") from exc
    return fd, True


def supports_kitty_graphics(environ=None) -> bool:
    """Return whether environment appears to support kitty graphics protocol."""
    env = os.environ if environ is None else environ
    if env.get("TERM", "") == "xterm-kitty":
        return True
    return bool(env.get("KITTY_WINDOW_ID"))


def resolve_image_protocol(name: str, environ=None) -> str:
    """Resolve ``auto`` to a concrete protocol name."""
    if name in IMAGE_PROTOCOLS:
        return name
    return "kitty" if supports_kitty_graphics(environ) else "iterm"


def iterm_image_sequence(data: bytes, width_cells: int | None, height_cells: int | None) -> bytes:
    """Build one OSC 1337 inline-image sequence sized by width or height."""
    size_field = f"width={width_cells}" if width_cells is not None else f"height={height_cells}"
    header = f"\x1b]1337;File=inline=1;preserveAspectRatio=1;size={len(data)};{size_field}:"
    return header.encode("ascii") + base64.standard_b64encode(data) + b"\x07"


def kitty_image_sequence(data: bytes, width_cells: int | None, height_cells: int | None) -> bytes:
    """Build chunked kitty graphics commands that transmit and place a PNG."""
    size_field = f"c={width_cells}" if width_cells is not None else f"r={height_cells}"
    payload = base64.standard_b64encode(data)
    out: list[bytes] = []
    first = True
    while True:
        chunk, payload = payload[:KITTY_CHUNK_SIZE], payload[KITTY_CHUNK_SIZE:]
        more = 1 if payload else 0
        if first:
            control = f"a=T,f=100,q=2,{size_field},m={more}"
            first = False
        else:
            control = f"m={more}"
        out.append(b"\x1b_G" + control.encode("ascii") + b";" + chunk + b"\x1b\\")
        if not payload:
            break
    return b"".join(out)


class TerminalController:
    """Manage terminal mode transitions and inline image output."""

    def __init__(self, stdin_fd: int, stdout_fd: int, protocol: str = "iterm") -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        if protocol not in IMAGE_PROTOCOLS:
            raise ValueError(f"unknown image protocol: {protocol!r}")
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.protocol = protocol
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def _write(self, data: bytes) -> None:
        view = memoryview(data)
        while view:
            written = os.write(self.stdout_fd, view)
            view = view[written:]

    def size(self) -> os.terminal_size:
        """Columns and rows of the output terminal, 80x24 when unknown."""
        try:
            term = os.get_terminal_size(self.stdout_fd)
        except OSError:
            return os.terminal_size(FALLBACK_TERMINAL_SIZE)
        if term.columns <= 0 or term.lines <= 0:
            return os.terminal_size(FALLBACK_TERMINAL_SIZE)
        return term

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        self._write(b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Restore cursor, main screen buffer, and saved tty attributes."""
        if self.protocol == "kitty":
            self.clear_images()
        self._write(b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def clear_images(self) -> None:
        """Delete all kitty images and placements from the screen."""
        self._write(b"\x1b_Ga=d,d=A,q=2;\x1b\\")

    def clear_screen(self) -> None:
        if self.protocol == "kitty":
            self.clear_images()
        self._write(b"\x1b[2J\x1b[H")

    def emit_image(
        self,
        data: bytes,
        width_cells: int | None = None,
        height_cells: int | None = None,
    ) -> None:
        """Draw ``data`` at the top-left corner, sized by exactly one dimension."""
        if (width_cells is None) == (height_cells is None):
            raise ValueError("exactly one of width_cells and height_cells is required")
        if self.protocol == "kitty":
            sequence = kitty_image_sequence(data, width_cells, height_cells)
        else:
            sequence = iterm_image_sequence(data, width_cells, height_cells)
        self._write(b"\x1b[1;1H" + sequence)

    def draw_status(self, row: int, columns: int, text: str) -> None:
        """Write ``text`` on ``row`` in reverse video, clipped to the width."""
        clipped = text[: max(0, columns - 1)]
        payload = f"\x1b[{max(1, row)};1H\x1b[2K\x1b[7m{clipped}\x1b[0m"
        self._write(payload.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
