"""Open document sessions and the pages they render.

A session owns one rasterizer handle. Reloading or switching documents builds
a new session instead of mutating the old one, because the page count and the
handle both have to be derived from the file again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..errors import EmptyDocumentError, OpenError, RenderError

logger = logging.getLogger(__name__)

DEFAULT_RENDER_HEIGHT = 1920


@dataclass(frozen=True)
class RenderedPage:
    """Encoded image bytes plus pixel size for one page."""

    data: bytes
    width: int
    height: int


def clamp_page(index: int | None, page_count: int) -> int:
    """Clamp a requested start page into ``[0, page_count - 1]``."""
    if index is None:
        return 0
    return max(0, min(index, page_count - 1))


class DocumentSession:
    """One open document, its page count, and the page currently rendered."""

    def __init__(
        self,
        path: Path,
        rasterizer,
        handle: object,
        page_count: int,
        current_page: int,
        page: RenderedPage,
        target_height: int = DEFAULT_RENDER_HEIGHT,
    ) -> None:
        self.path = path
        self.rasterizer = rasterizer
        self.handle = handle
        self.page_count = page_count
        self.current_page = current_page
        self.page = page
        self.target_height = target_height

    @classmethod
    def open(
        cls,
        path: Path,
        rasterizer,
        start_page: int | None = None,
        target_height: int = DEFAULT_RENDER_HEIGHT,
    ) -> DocumentSession:
        """Open ``path`` and render its start page synchronously.

        ``start_page`` is clamped into the document's page range and defaults
        to the first page. Raises ``OpenError`` when the file can't be parsed,
        ``EmptyDocumentError`` when it has no pages, and ``RenderError`` when
        the start page fails to rasterize. The handle is closed on failure.
        """
        path = Path(path)
        handle = rasterizer.open(path)
        try:
            try:
                page_count = int(rasterizer.page_count(handle))
            except Exception as exc:
                raise OpenError(path, str(exc)) from exc
            if page_count <= 0:
                raise EmptyDocumentError(path)
            current_page = clamp_page(start_page, page_count)
            page = _render(rasterizer, handle, path, current_page, target_height)
        except Exception:
            rasterizer.close(handle)
            raise
        logger.debug("opened %s (%d pages) at page %d", path, page_count, current_page)
        return cls(
            path=path,
            rasterizer=rasterizer,
            handle=handle,
            page_count=page_count,
            current_page=current_page,
            page=page,
            target_height=target_height,
        )

    @property
    def is_first_page(self) -> bool:
        return self.current_page <= 0

    @property
    def is_last_page(self) -> bool:
        return self.current_page >= self.page_count - 1

    def render_page(self, index: int) -> RenderedPage:
        """Render ``index`` and make it current.

        The caller keeps ``index`` in range. On ``RenderError`` neither
        ``current_page`` nor ``page`` changes.
        """
        page = _render(self.rasterizer, self.handle, self.path, index, self.target_height)
        self.page = page
        self.current_page = index
        return page

    def close(self) -> None:
        if self.handle is None:
            return
        try:
            self.rasterizer.close(self.handle)
        finally:
            self.handle = None

    def __enter__(self) -> DocumentSession:
        return self

    def __exit__(self, *_exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"DocumentSession(path={str(self.path)!r}, "
            f"current_page={self.current_page}, page_count={self.page_count})"
        )


def _render(rasterizer, handle: object, path: Path, index: int, target_height: int) -> RenderedPage:
    try:
        data, width, height = rasterizer.render(handle, index, target_height)
    except RenderError:
        raise
    except Exception as exc:
        raise RenderError(path, index, str(exc)) from exc
    return RenderedPage(data=bytes(data), width=int(width), height=int(height))
