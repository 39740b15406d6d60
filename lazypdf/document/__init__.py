"""Document model: open sessions, rendered pages, and the document list."""

from .listing import DocumentList
from .session import DEFAULT_RENDER_HEIGHT, DocumentSession, RenderedPage

__all__ = [
    "DEFAULT_RENDER_HEIGHT",
    "DocumentList",
    "DocumentSession",
    "RenderedPage",
]
