"""
Atomic file-write utilities.

Prevents corrupted output when a process is interrupted mid-write by
writing to a temporary file in the same directory and then performing an
atomic ``os.replace()`` (POSIX rename guarantee).
"""

from __future__ import annotations

import json
import os
import tempfile
from typing import Any


def _atomic_write(path: str | os.PathLike, mode: str, payload: Any) -> None:
    path = str(path)
    dir_path = os.path.dirname(path) or "."
    tmp_path: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode=mode, dir=dir_path, suffix=".tmp", delete=False
        ) as tmp:
            tmp_path = tmp.name
            tmp.write(payload)
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up the temp file on any failure
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def atomic_write_bytes(path: str | os.PathLike, content: bytes) -> None:
    """Write *content* as bytes atomically via temp-file + rename.

    Readers of *path* see either the previous file or the complete new
    one, never a partially written snapshot.

    Parameters
    ----------
    path:
        Destination file path.
    content:
        Raw bytes to write.
    """
    _atomic_write(path, "wb", content)


def atomic_write_json(path: str | os.PathLike, data: Any, *, indent: int = 2) -> None:
    """Write *data* as JSON atomically via temp-file + rename.

    Parameters
    ----------
    path:
        Destination file path.
    data:
        JSON-serializable object.
    indent:
        JSON indentation (default 2).
    """
    _atomic_write(path, "w", json.dumps(data, indent=indent))
