"""
Batch accumulation of observations with periodic pruning.

Drives an :class:`~idiomcooc.core.cooccurrence.ElementCooccurrence` over a
stream of ``(rows, columns)`` observations produced by an extractor. The
joint table grows without bound unless pruned; ``MiningConfig.prune_every``
bounds it by pruning low-support pairs at a fixed cadence.

Pruning mid-stream is lossy: a pair pruned early restarts from zero if it
shows up again, while its marginals keep counting.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Hashable, Iterable, Optional, Tuple

from idiomcooc.config import MiningConfig
from idiomcooc.core.cooccurrence import ElementCooccurrence

logger = logging.getLogger(__name__)

__all__ = ['MiningSummary', 'accumulate_observations']


@dataclass(frozen=True)
class MiningSummary:
    """
    Bookkeeping for one accumulation run.

    Attributes:
        n_observations: Observations ingested during this run
        n_prune_passes: Prune calls made during this run
        n_joint_cells: Joint cells held after the run
        total_joint_observations: Running joint total after the run
    """

    n_observations: int
    n_prune_passes: int
    n_joint_cells: int
    total_joint_observations: int

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


def accumulate_observations(
    observations: Iterable[Tuple[Iterable[Hashable], Iterable[Hashable]]],
    config: Optional[MiningConfig] = None,
    cooc: Optional[ElementCooccurrence] = None,
) -> Tuple[ElementCooccurrence, MiningSummary]:
    """
    Ingest a stream of observations, pruning as configured.

    Args:
        observations: Iterable of ``(rows, columns)`` element collections
        config: Pruning and logging settings (default: ``MiningConfig()``)
        cooc: Accumulator to extend; a new one is created if omitted

    Returns:
        Tuple of (accumulator, summary).

    Example:
        >>> observations = [({"for", "if"}, {"i"}), ({"for"}, {"i", "n"})] * 3
        >>> config = MiningConfig(prune_every=2, prune_threshold=1)
        >>> cooc, summary = accumulate_observations(observations, config)
        >>> summary.n_observations, summary.n_prune_passes
        (6, 3)
    """
    if config is None:
        config = MiningConfig()
    if cooc is None:
        cooc = ElementCooccurrence()

    n_observations = 0
    n_prune_passes = 0
    for rows, columns in observations:
        cooc.ingest(rows, columns)
        n_observations += 1

        if config.prune_every and n_observations % config.prune_every == 0:
            cooc.prune(config.prune_threshold)
            n_prune_passes += 1

        if config.log_every and n_observations % config.log_every == 0:
            logger.info(
                f"Ingested {n_observations} observations: "
                f"{len(cooc.row_values)} rows, {len(cooc.column_values)} columns, "
                f"{cooc.n_joint_cells} joint cells"
            )

    if config.final_prune:
        cooc.prune(config.prune_threshold)
        n_prune_passes += 1

    summary = MiningSummary(
        n_observations=n_observations,
        n_prune_passes=n_prune_passes,
        n_joint_cells=cooc.n_joint_cells,
        total_joint_observations=cooc.total_joint_observations,
    )
    logger.info(
        f"Accumulation done: {summary.n_observations} observations, "
        f"{summary.n_prune_passes} prune passes, {summary.n_joint_cells} joint cells"
    )
    return cooc, summary
