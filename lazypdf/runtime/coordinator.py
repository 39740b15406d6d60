"""Single-consumer navigation loop.

The coordinator is the only reader of the command queue and the only writer
of navigation state. Renders and displays run synchronously inside command
handling, so one command's output is on screen before the next is read.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from queue import Queue

from ..commands import Command, CommandKind
from ..document import DocumentList, DocumentSession, RenderedPage
from ..errors import ExternalProcessError, OpenError, RenderError

logger = logging.getLogger(__name__)


def _noop_document_changed(_path: Path) -> None:
    return None


@dataclass(frozen=True)
class CoordinatorCallbacks:
    """Injected side effects used by ``Coordinator``.

    Keeping terminal output, document opening and process launch behind
    callbacks lets tests drive the state machine without a terminal.
    """

    show_page: Callable[[RenderedPage, str], None]
    open_session: Callable[[Path, int | None], DocumentSession]
    launch_viewer: Callable[[Path], object]
    document_changed: Callable[[Path], object] = _noop_document_changed


def _same_path(left: Path, right: Path) -> bool:
    try:
        return left.resolve() == right.resolve()
    except OSError:
        return left.absolute() == right.absolute()


class Coordinator:
    """Apply queued commands to the document list and the open session."""

    def __init__(
        self,
        documents: DocumentList,
        session: DocumentSession,
        command_queue: Queue[Command],
        callbacks: CoordinatorCallbacks,
    ) -> None:
        self.documents = documents
        self.session = session
        self.command_queue = command_queue
        self.callbacks = callbacks
        self.first_page_armed = False
        self.terminated = False
        self.status_message = ""
        self._handlers: dict[CommandKind, Callable[[Command], None]] = {
            CommandKind.NEXT_PAGE: self._next_page,
            CommandKind.PREVIOUS_PAGE: self._previous_page,
            CommandKind.FIRST_PAGE: self._first_page,
            CommandKind.LAST_PAGE: self._last_page,
            CommandKind.NEXT_DOCUMENT: self._next_document,
            CommandKind.PREVIOUS_DOCUMENT: self._previous_document,
            CommandKind.REFRESH: self._refresh,
            CommandKind.OPEN: self._open_external,
            CommandKind.QUIT: self._quit,
            CommandKind.NONE: self._ignore,
        }

    def run(self) -> Path:
        """Show the current page, then process commands until ``QUIT``.

        Returns the path of the document on screen when the loop ended.
        """
        self.redraw()
        while not self.terminated:
            self.handle(self.command_queue.get())
        return self.session.path

    def handle(self, command: Command) -> None:
        logger.debug("command %s at page %d", command.kind.name, self.session.current_page + 1)
        if command.kind is not CommandKind.FIRST_PAGE:
            self.first_page_armed = False
        self.status_message = ""
        self._handlers[command.kind](command)

    def status_line(self) -> str:
        session = self.session
        parts = [session.path.name, f"{session.current_page + 1}/{session.page_count}"]
        if len(self.documents) > 1:
            parts.append(f"[{self.documents.position}/{len(self.documents)}]")
        if self.status_message:
            parts.append(self.status_message)
        return "  ".join(parts)

    def redraw(self) -> None:
        self.callbacks.show_page(self.session.page, self.status_line())

    def _report(self, message: str) -> None:
        self.status_message = message
        self.redraw()

    def _go_to_page(self, index: int) -> None:
        if index == self.session.current_page:
            return
        try:
            self.session.render_page(index)
        except RenderError as exc:
            logger.warning("%s", exc)
            self._report(str(exc))
            return
        self.redraw()

    def _next_page(self, _command: Command) -> None:
        if not self.session.is_last_page:
            self._go_to_page(self.session.current_page + 1)

    def _previous_page(self, _command: Command) -> None:
        if not self.session.is_first_page:
            self._go_to_page(self.session.current_page - 1)

    def _first_page(self, _command: Command) -> None:
        if not self.first_page_armed:
            self.first_page_armed = True
            return
        self.first_page_armed = False
        self._go_to_page(0)

    def _last_page(self, _command: Command) -> None:
        self._go_to_page(self.session.page_count - 1)

    def _replace_session(self, session: DocumentSession) -> None:
        previous, self.session = self.session, session
        previous.close()
        self.redraw()

    def _switch_document(self, move: Callable[[], bool], undo: Callable[[], bool]) -> None:
        if not move():
            return
        target = self.documents.current()
        try:
            session = self.callbacks.open_session(target, None)
        except (OpenError, RenderError) as exc:
            undo()
            logger.warning("%s", exc)
            self._report(str(exc))
            return
        self._replace_session(session)
        self.callbacks.document_changed(target)

    def _next_document(self, _command: Command) -> None:
        self._switch_document(self.documents.advance, self.documents.retreat)

    def _previous_document(self, _command: Command) -> None:
        self._switch_document(self.documents.retreat, self.documents.advance)

    def _refresh(self, command: Command) -> None:
        if command.path is not None and not _same_path(command.path, self.session.path):
            logger.debug("ignoring stale refresh for %s", command.path)
            return
        try:
            session = self.callbacks.open_session(self.session.path, self.session.current_page)
        except (OpenError, RenderError) as exc:
            logger.warning("reload failed, keeping previous view: %s", exc)
            self._report(f"reload failed: {exc}")
            return
        self._replace_session(session)

    def _open_external(self, _command: Command) -> None:
        try:
            self.callbacks.launch_viewer(self.session.path)
        except ExternalProcessError as exc:
            logger.warning("%s", exc)
            self._report(str(exc))

    def _quit(self, _command: Command) -> None:
        self.terminated = True

    def _ignore(self, _command: Command) -> None:
        return None
