"""Runtime bootstrap for the interactive viewer.

Builds the document list and first session, starts the keyboard and file
watch producers, and hands the command queue to the coordinator. Watch
re-arming on document switches is wired here, not in the coordinator.
"""

from __future__ import annotations

import logging
import os
import sys
from functools import partial
from pathlib import Path
from queue import Queue

from ..commands import Command
from ..document import DocumentList, DocumentSession
from ..document.rasterizer import PdfRasterizer
from ..errors import TerminalUnavailableError
from .config import Settings
from .coordinator import Coordinator, CoordinatorCallbacks
from .display import display_page
from .external import launch_viewer
from .input_source import InputSource
from .terminal import TerminalController, open_ui_output, resolve_image_protocol
from .watch_source import WatchSource

logger = logging.getLogger(__name__)


def run_viewer(
    paths: list[Path],
    settings: Settings,
    start_page: int | None = None,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> Path:
    """Browse ``paths`` until the user quits; return the last-viewed path.

    Screen output goes to ``stdout_fd`` only when it is a terminal, so a piped
    stdout stays clean for the path the CLI prints. Setup errors (rasterizer
    unavailable, first document unreadable or empty, no output terminal)
    propagate before the terminal is touched.
    """
    rasterizer = PdfRasterizer()
    documents = DocumentList(paths)

    def open_session(path: Path, page: int | None) -> DocumentSession:
        return DocumentSession.open(path, rasterizer, start_page=page, target_height=settings.render_height)

    session = open_session(documents.current(), start_page)

    if stdin_fd is None:
        stdin_fd = sys.stdin.fileno()
    if stdout_fd is None:
        stdout_fd = sys.stdout.fileno()
    try:
        ui_fd, owns_ui_fd = open_ui_output(stdin_fd, stdout_fd)
    except TerminalUnavailableError:
        session.close()
        raise

    command_queue: Queue[Command] = Queue()
    terminal = TerminalController(stdin_fd, ui_fd, protocol=resolve_image_protocol(settings.image_protocol))
    watch = WatchSource(command_queue, debounce_seconds=settings.debounce_seconds)
    watch.arm(session.path)

    coordinator = Coordinator(
        documents,
        session,
        command_queue,
        CoordinatorCallbacks(
            show_page=partial(display_page, terminal),
            open_session=open_session,
            launch_viewer=partial(launch_viewer, settings.viewer_command),
            document_changed=watch.arm,
        ),
    )
    try:
        with terminal.raw_mode():
            InputSource(stdin_fd, command_queue).start()
            last_path = coordinator.run()
    finally:
        watch.stop()
        coordinator.session.close()
        if owns_ui_fd:
            os.close(ui_fd)
    logger.debug("quit on %s", last_path)
    return last_path
