"""Utility modules for log-space arithmetic and file output."""

from idiomcooc.utils.fileio import (
    atomic_write_bytes,
    atomic_write_json,
)
from idiomcooc.utils.logmath import (
    safe_log,
    log_ratio,
)

__all__ = [
    # Atomic file-write utilities
    'atomic_write_bytes',
    'atomic_write_json',
    # Log-space helpers
    'safe_log',
    'log_ratio',
]
