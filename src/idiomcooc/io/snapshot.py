"""
Persistence of accumulator state as one atomic snapshot.

The snapshot is the pickled :meth:`ElementCooccurrence.to_state` dict, so
marginals, joint cells and running totals are always written and read
together. Element values must be picklable.

Only load snapshots you wrote yourself: unpickling runs arbitrary code.
"""

from __future__ import annotations

import logging
import pickle
from pathlib import Path

from idiomcooc.core.cooccurrence import ElementCooccurrence
from idiomcooc.stats.mining import MiningSummary
from idiomcooc.utils.fileio import atomic_write_bytes, atomic_write_json

logger = logging.getLogger(__name__)

__all__ = ['save_cooccurrence', 'load_cooccurrence', 'save_summary']


def save_cooccurrence(cooc: ElementCooccurrence, path: Path) -> None:
    """
    Write the accumulator state to ``path`` atomically.

    Args:
        cooc: Accumulator to persist
        path: Destination file; its directory must exist
    """
    payload = pickle.dumps(cooc.to_state(), protocol=pickle.HIGHEST_PROTOCOL)
    atomic_write_bytes(path, payload)
    logger.info(f"Saved co-occurrence snapshot ({cooc.n_joint_cells} joint cells) to {path}")


def load_cooccurrence(path: Path) -> ElementCooccurrence:
    """
    Restore an accumulator saved with :func:`save_cooccurrence`.

    Raises:
        FileNotFoundError: If ``path`` does not exist
        ValueError: If the file is not a valid snapshot
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot not found: {path}")

    with open(path, 'rb') as f:
        try:
            state = pickle.load(f)
        except (pickle.UnpicklingError, EOFError) as e:
            raise ValueError(f"Corrupt co-occurrence snapshot {path}: {e}") from e

    if not isinstance(state, dict):
        raise ValueError(f"Snapshot {path} does not contain a state mapping")

    cooc = ElementCooccurrence.from_state(state)
    logger.info(f"Loaded co-occurrence snapshot ({cooc.n_joint_cells} joint cells) from {path}")
    return cooc


def save_summary(summary: MiningSummary, path: Path) -> None:
    """
    Write a run summary as JSON next to its snapshot.

    Written atomically so a summary on disk never describes a half-written
    run.
    """
    atomic_write_json(path, summary.to_dict())
    logger.info(f"Saved mining summary to {path}")
