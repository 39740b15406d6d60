"""Error taxonomy shared by the document model and the runtime.

Startup code lets these propagate to the CLI; the interactive loop contains
them and keeps the last good state on screen.
"""

from __future__ import annotations

from pathlib import Path


class LazyPdfError(Exception):
    """Base class for all lazypdf errors."""


class OpenError(LazyPdfError):
    """Document could not be opened or parsed."""

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        message = f"Couldn't load {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class EmptyDocumentError(OpenError):
    """Document opened fine but has no pages."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "document has no pages")


class RenderError(LazyPdfError):
    """One page failed to rasterize."""

    def __init__(self, path: Path, page: int, reason: str = "") -> None:
        self.path = path
        self.page = page
        self.reason = reason
        message = f"Couldn't render page {page + 1} of {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class WatchSetupError(LazyPdfError):
    """Filesystem watch could not be armed."""


class ExternalProcessError(LazyPdfError):
    """External viewer could not be launched."""


class TerminalUnavailableError(LazyPdfError):
    """No terminal is available to draw the viewer on."""
