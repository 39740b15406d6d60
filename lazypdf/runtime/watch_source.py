"""Debounced filesystem watch on the current document.

The parent directory is observed (non-recursively) so that editors which save
by writing a temp file and renaming it over the original are still seen. Each
relevant event restarts the debounce timer; when it fires, one refresh is
queued if the file's stat signature actually changed.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable
from pathlib import Path
from queue import Queue

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from ..commands import Command
from ..errors import WatchSetupError
from ..watch import FileSignature, file_signature
from .config import DEFAULT_DEBOUNCE_SECONDS

logger = logging.getLogger(__name__)

IGNORED_EVENT_TYPES = frozenset({"opened", "closed_no_write"})


def _event_paths(event: FileSystemEvent) -> list[Path]:
    raw_paths = [event.src_path, getattr(event, "dest_path", "")]
    return [Path(os.fsdecode(raw)) for raw in raw_paths if raw]


def _resolve(path: Path) -> Path:
    try:
        return path.resolve()
    except OSError:
        return path.absolute()


class _DocumentEventHandler(FileSystemEventHandler):
    """Forward file events in the watched directory to the owning source."""

    def __init__(self, source: WatchSource) -> None:
        super().__init__()
        self._source = source

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type in IGNORED_EVENT_TYPES:
            return
        for path in _event_paths(event):
            self._source.notify_change(path)


class WatchSource:
    """Queue one ``REFRESH(path)`` per settled burst of changes to ``path``."""

    def __init__(
        self,
        command_queue: Queue[Command],
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        observer_factory: Callable[[], object] = Observer,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ) -> None:
        self.command_queue = command_queue
        self.debounce_seconds = debounce_seconds
        self._observer_factory = observer_factory
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._observer = None
        self._watch = None
        self._path: Path | None = None
        self._signature: FileSignature | None = None
        self._timer: threading.Timer | None = None
        self._timer_generation = 0

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def armed(self) -> bool:
        return self._watch is not None

    def _ensure_observer(self):
        if self._observer is not None:
            return self._observer
        try:
            observer = self._observer_factory()
            observer.daemon = True
            observer.start()
        except (OSError, RuntimeError) as exc:
            raise WatchSetupError(f"file watcher could not start: {exc}") from exc
        self._observer = observer
        return observer

    def _schedule(self, path: Path) -> None:
        directory = path.parent
        if not directory.is_dir():
            raise WatchSetupError(f"directory not found: {directory}")
        observer = self._ensure_observer()
        try:
            self._watch = observer.schedule(_DocumentEventHandler(self), str(directory), recursive=False)
        except OSError as exc:
            raise WatchSetupError(f"cannot watch {directory}: {exc}") from exc

    def arm(self, path: Path) -> bool:
        """Watch ``path`` instead of the previous document.

        Returns ``False`` when the watch could not be set up; the viewer then
        runs without auto-refresh for this document.
        """
        target = _resolve(Path(path))
        self._cancel_timer()
        self._unschedule()
        with self._lock:
            self._path = target
            self._signature = file_signature(target)
        try:
            self._schedule(target)
        except WatchSetupError as exc:
            logger.warning("auto-refresh disabled for %s: %s", target, exc)
            return False
        logger.debug("watching %s", target)
        return True

    def notify_change(self, changed: Path) -> None:
        """Restart the debounce timer when ``changed`` is the watched file."""
        with self._lock:
            if self._path is None or _resolve(changed) != self._path:
                return
            if self._timer is not None:
                self._timer.cancel()
            self._timer_generation += 1
            timer = self._timer_factory(
                self.debounce_seconds, self._fire, args=(self._path, self._timer_generation)
            )
            timer.daemon = True
            self._timer = timer
        timer.start()

    def _fire(self, path: Path, generation: int) -> None:
        with self._lock:
            if generation != self._timer_generation or path != self._path:
                return
            self._timer = None
            signature = file_signature(path)
            if signature == self._signature:
                return
            self._signature = signature
        logger.debug("change settled for %s", path)
        self.command_queue.put(Command.refresh(path))

    def _cancel_timer(self) -> None:
        with self._lock:
            self._timer_generation += 1
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    def _unschedule(self) -> None:
        watch, self._watch = self._watch, None
        if watch is None or self._observer is None:
            return
        try:
            self._observer.unschedule(watch)
        except (KeyError, OSError) as exc:
            logger.debug("unschedule failed: %s", exc)

    def stop(self) -> None:
        self._cancel_timer()
        self._unschedule()
        observer, self._observer = self._observer, None
        if observer is not None:
            observer.stop()
