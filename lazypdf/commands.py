"""Navigation commands exchanged between producers and the coordinator.

Commands only live on the command queue; nothing stores them.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


class CommandKind(enum.Enum):
    NEXT_PAGE = "next_page"
    PREVIOUS_PAGE = "previous_page"
    FIRST_PAGE = "first_page"
    LAST_PAGE = "last_page"
    NEXT_DOCUMENT = "next_document"
    PREVIOUS_DOCUMENT = "previous_document"
    REFRESH = "refresh"
    OPEN = "open"
    QUIT = "quit"
    NONE = "none"


@dataclass(frozen=True)
class Command:
    """One navigation intent.

    ``path`` is only set on refreshes issued by the file watcher and names the
    file that changed. A keyboard refresh leaves it ``None`` and always targets
    the current document.
    """

    kind: CommandKind
    path: Path | None = None

    @classmethod
    def refresh(cls, path: Path | None = None) -> Command:
        return cls(CommandKind.REFRESH, path)


NEXT_PAGE = Command(CommandKind.NEXT_PAGE)
PREVIOUS_PAGE = Command(CommandKind.PREVIOUS_PAGE)
FIRST_PAGE = Command(CommandKind.FIRST_PAGE)
LAST_PAGE = Command(CommandKind.LAST_PAGE)
NEXT_DOCUMENT = Command(CommandKind.NEXT_DOCUMENT)
PREVIOUS_DOCUMENT = Command(CommandKind.PREVIOUS_DOCUMENT)
REFRESH = Command(CommandKind.REFRESH)
OPEN = Command(CommandKind.OPEN)
QUIT = Command(CommandKind.QUIT)
NO_OP = Command(CommandKind.NONE)
