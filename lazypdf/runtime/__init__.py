"""Public runtime orchestration entry points.

This package groups the interactive viewer bootstrap (`run_viewer`) and the
coordinator contracts used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .coordinator import Coordinator, CoordinatorCallbacks


def run_viewer(*args, **kwargs):
    """Lazily import viewer entrypoint to avoid loading PyMuPDF and watchdog on import."""
    from .app import run_viewer as _run_viewer

    return _run_viewer(*args, **kwargs)


def __getattr__(name: str):
    if name in {"Coordinator", "CoordinatorCallbacks"}:
        from . import coordinator as _coordinator

        return getattr(_coordinator, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "run_viewer",
    "Coordinator",
    "CoordinatorCallbacks",
]
