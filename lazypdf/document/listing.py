"""Ordered document paths with a bounded cursor."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


class DocumentList:
    """Paths browsed in order; the cursor never wraps around.

    Moving past either end is a silent no-op rather than an error.
    """

    def __init__(self, paths: Iterable[Path], current_index: int = 0) -> None:
        self.paths: list[Path] = [Path(path) for path in paths]
        if not self.paths:
            raise ValueError("DocumentList needs at least one path")
        self.current_index = max(0, min(current_index, len(self.paths) - 1))

    def __len__(self) -> int:
        return len(self.paths)

    @property
    def position(self) -> int:
        """1-based cursor position for status display."""
        return self.current_index + 1

    def current(self) -> Path:
        return self.paths[self.current_index]

    def advance(self) -> bool:
        """Move to the next path; return ``False`` when already at the last one."""
        if self.current_index >= len(self.paths) - 1:
            return False
        self.current_index += 1
        return True

    def retreat(self) -> bool:
        """Move to the previous path; return ``False`` when already at the first one."""
        if self.current_index <= 0:
            return False
        self.current_index -= 1
        return True
