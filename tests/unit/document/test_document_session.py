"""Tests for opening, clamping, and rendering document sessions.

A fake rasterizer stands in for PyMuPDF so failures can be injected per page.
"""

from __future__ import annotations

from pathlib import Path
import unittest

from lazypdf.document import DocumentSession, RenderedPage
from lazypdf.errors import EmptyDocumentError, OpenError, RenderError


class _FakeRasterizer:
    def __init__(self, page_counts: dict[str, int]) -> None:
        self.page_counts = dict(page_counts)
        self.failing_pages: set[tuple[str, int]] = set()
        self.render_calls: list[tuple[str, int, int]] = []
        self.closed: list[str] = []

    def open(self, path: Path):
        if path.name not in self.page_counts:
            raise OpenError(path, "not a pdf")
        return {"name": path.name, "count": self.page_counts[path.name]}

    def page_count(self, handle) -> int:
        return handle["count"]

    def render(self, handle, page_index: int, target_height: int):
        self.render_calls.append((handle["name"], page_index, target_height))
        if (handle["name"], page_index) in self.failing_pages:
            raise RuntimeError("broken page")
        return f"{handle['name']}:{page_index}".encode(), 100, 200

    def close(self, handle) -> None:
        self.closed.append(handle["name"])


class DocumentSessionOpenTests(unittest.TestCase):
    def test_open_defaults_to_first_page_and_renders_it(self) -> None:
        rasterizer = _FakeRasterizer({"a.pdf": 5})

        session = DocumentSession.open(Path("a.pdf"), rasterizer)

        self.assertEqual(session.current_page, 0)
        self.assertEqual(session.page_count, 5)
        self.assertEqual(session.page, RenderedPage(data=b"a.pdf:0", width=100, height=200))
        self.assertEqual(rasterizer.render_calls, [("a.pdf", 0, 1920)])

    def test_open_clamps_start_page_into_range(self) -> None:
        rasterizer = _FakeRasterizer({"a.pdf": 3})

        self.assertEqual(DocumentSession.open(Path("a.pdf"), rasterizer, start_page=10).current_page, 2)
        self.assertEqual(DocumentSession.open(Path("a.pdf"), rasterizer, start_page=-4).current_page, 0)
        self.assertEqual(DocumentSession.open(Path("a.pdf"), rasterizer, start_page=1).current_page, 1)

    def test_open_passes_custom_target_height(self) -> None:
        rasterizer = _FakeRasterizer({"a.pdf": 1})

        DocumentSession.open(Path("a.pdf"), rasterizer, target_height=800)

        self.assertEqual(rasterizer.render_calls, [("a.pdf", 0, 800)])

    def test_open_unreadable_document_raises_open_error(self) -> None:
        with self.assertRaises(OpenError):
            DocumentSession.open(Path("missing.pdf"), _FakeRasterizer({}))

    def test_open_empty_document_raises_and_closes_handle(self) -> None:
        rasterizer = _FakeRasterizer({"empty.pdf": 0})

        with self.assertRaises(EmptyDocumentError):
            DocumentSession.open(Path("empty.pdf"), rasterizer)

        self.assertEqual(rasterizer.closed, ["empty.pdf"])
        self.assertEqual(rasterizer.render_calls, [])

    def test_open_wraps_start_page_failure_in_render_error(self) -> None:
        rasterizer = _FakeRasterizer({"a.pdf": 2})
        rasterizer.failing_pages.add(("a.pdf", 0))

        with self.assertRaises(RenderError) as ctx:
            DocumentSession.open(Path("a.pdf"), rasterizer)

        self.assertEqual(ctx.exception.page, 0)
        self.assertEqual(rasterizer.closed, ["a.pdf"])


class DocumentSessionRenderTests(unittest.TestCase):
    def test_render_page_updates_current_page_and_image(self) -> None:
        rasterizer = _FakeRasterizer({"a.pdf": 4})
        session = DocumentSession.open(Path("a.pdf"), rasterizer)

        page = session.render_page(3)

        self.assertEqual(session.current_page, 3)
        self.assertIs(session.page, page)
        self.assertEqual(page.data, b"a.pdf:3")
        self.assertTrue(session.is_last_page)
        self.assertFalse(session.is_first_page)

    def test_failed_render_leaves_session_untouched(self) -> None:
        rasterizer = _FakeRasterizer({"a.pdf": 4})
        rasterizer.failing_pages.add(("a.pdf", 2))
        session = DocumentSession.open(Path("a.pdf"), rasterizer, start_page=1)
        before = session.page

        with self.assertRaises(RenderError):
            session.render_page(2)

        self.assertEqual(session.current_page, 1)
        self.assertIs(session.page, before)

    def test_close_is_idempotent_and_context_manager_closes(self) -> None:
        rasterizer = _FakeRasterizer({"a.pdf": 1})

        with DocumentSession.open(Path("a.pdf"), rasterizer) as session:
            pass
        session.close()

        self.assertEqual(rasterizer.closed, ["a.pdf"])


if __name__ == "__main__":
    unittest.main()
