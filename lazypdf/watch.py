"""Stat signatures for watched documents.

The watcher compares signatures before issuing a refresh so that events which
leave the file untouched (reads, attribute churn) never trigger a reload.
"""

from __future__ import annotations

from pathlib import Path

FileSignature = tuple[str, int, int]


def file_signature(path: Path) -> FileSignature:
    """Return a ``(state, mtime_ns, size)`` tuple describing ``path``."""
    try:
        st = path.stat()
    except FileNotFoundError:
        return ("missing", 0, 0)
    except OSError:
        return ("error", 0, 0)
    return ("ok", st.st_mtime_ns, st.st_size)
