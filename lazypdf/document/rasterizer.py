"""PyMuPDF-backed rasterizer.

``fitz`` is imported lazily so that ``import lazypdf`` stays cheap and a
missing PyMuPDF install surfaces as a setup error instead of an import crash.
"""

from __future__ import annotations

from pathlib import Path

from ..errors import LazyPdfError, OpenError


class RasterizerUnavailableError(LazyPdfError):
    """PyMuPDF could not be imported."""


_FITZ = None


def _ensure_fitz_loaded():
    global _FITZ
    if _FITZ is not None:
        return _FITZ
    try:
        import fitz
    except ImportError as exc:
        raise RasterizerUnavailableError(f"PyMuPDF is not available: {exc}") from exc
    _FITZ = fitz
    return fitz


class PdfRasterizer:
    """Open PDFs and render single pages to PNG at a fixed height."""

    def __init__(self) -> None:
        self._fitz = _ensure_fitz_loaded()

    def open(self, path: Path):
        if not path.is_file():
            raise OpenError(path, "no such file")
        try:
            return self._fitz.open(str(path), filetype="pdf")
        except Exception as exc:
            raise OpenError(path, str(exc) or type(exc).__name__) from exc

    def page_count(self, handle) -> int:
        return handle.page_count

    def render(self, handle, page_index: int, target_height: int) -> tuple[bytes, int, int]:
        """Rasterize one page, scaled so its height is ``target_height`` pixels."""
        page = handle.load_page(page_index)
        page_height = page.rect.height or 1.0
        zoom = target_height / page_height
        pix = page.get_pixmap(matrix=self._fitz.Matrix(zoom, zoom), alpha=False)
        return pix.tobytes("png"), pix.width, pix.height

    def close(self, handle) -> None:
        handle.close()
