"""
Corpus-wide association ranking and tabular export.

The accumulator answers anchored questions ("which columns go with this
row?"). This module answers the global one, which pairs across the whole
joint table are most strongly associated, and converts result records into
pandas / scipy structures for downstream reporting.

Functions:
    top_associations: Lift records for every joint cell, ranked
    lifts_to_frame: Lift records as a DataFrame
    mutual_information_to_frame: ElementMutualInformation records as a DataFrame
    joint_matrix: Joint counts as a labelled scipy CSR matrix
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd
from scipy import sparse

from idiomcooc.config import MiningConfig
from idiomcooc.core.cooccurrence import ElementCooccurrence
from idiomcooc.core.records import ElementMutualInformation, Lift, LIFT_ORDER

logger = logging.getLogger(__name__)

__all__ = [
    'top_associations',
    'lifts_to_frame',
    'mutual_information_to_frame',
    'joint_matrix',
]

LIFT_COLUMNS = ["row", "column", "lift", "count"]
MI_COLUMNS = ["element", "log_prob"]


def top_associations(
    cooc: ElementCooccurrence,
    min_count: int = 1,
    top_k: Optional[int] = None,
    config: Optional[MiningConfig] = None,
) -> List[Lift]:
    """
    Rank every (row, column) pair in the joint table by log-lift.

    Args:
        cooc: Accumulator to rank
        min_count: Skip pairs with joint count below this (default: 1)
        top_k: Return only the first K records (default: all)
        config: If given, its ``min_count`` and ``top_k`` replace the
            arguments above

    Returns:
        Lift records ordered highest lift first, ties broken as in
        :func:`~idiomcooc.core.records.compare_lifts`.

    Example:
        >>> from idiomcooc.core.cooccurrence import ElementCooccurrence
        >>> cooc = ElementCooccurrence()
        >>> cooc.ingest({1, 2, 3}, {10})
        >>> cooc.ingest({1}, {11})
        >>> cooc.ingest({1}, {11})
        >>> [str(lift) for lift in top_associations(cooc, min_count=1, top_k=2)]
        ['2,10:1.10', '3,10:1.10']
    """
    if config is not None:
        min_count, top_k = config.min_count, config.top_k
    if top_k is not None and top_k <= 0:
        raise ValueError(f"top_k must be positive, got {top_k}")

    lifts = [
        Lift(row=row, column=column, lift=cooc.log_lift(row, column), count=count)
        for (row, column), count in cooc.joint_cells()
        if count >= min_count
    ]
    lifts.sort(key=LIFT_ORDER)
    logger.debug(f"Ranked {len(lifts)} pairs with joint count >= {min_count}")
    return lifts if top_k is None else lifts[:top_k]


def lifts_to_frame(lifts: Iterable[Lift]) -> pd.DataFrame:
    """
    Tabulate Lift records, keeping their order.

    Returns:
        DataFrame with columns ``row, column, lift, count``.
    """
    records = [lift.to_dict() for lift in lifts]
    return pd.DataFrame.from_records(records, columns=LIFT_COLUMNS)


def mutual_information_to_frame(
    records: Iterable[ElementMutualInformation],
) -> pd.DataFrame:
    """
    Tabulate mutual-information records, keeping their order.

    Returns:
        DataFrame with columns ``element, log_prob``.
    """
    rows = [record.to_dict() for record in records]
    return pd.DataFrame.from_records(rows, columns=MI_COLUMNS)


def joint_matrix(
    cooc: ElementCooccurrence,
) -> Tuple[sparse.csr_matrix, list, list]:
    """
    Export the joint table as a sparse count matrix.

    Rows and columns of the matrix follow the first-seen order of the
    marginal counts, so elements whose joint cells were all pruned still
    get an (empty) row or column.

    Returns:
        Tuple of (matrix, row_labels, column_labels) where ``matrix`` has
        shape ``(len(row_labels), len(column_labels))`` and int64 counts.
    """
    row_labels = list(cooc.row_values)
    column_labels = list(cooc.column_values)
    row_index = {row: i for i, row in enumerate(row_labels)}
    column_index = {column: j for j, column in enumerate(column_labels)}

    n_cells = cooc.n_joint_cells
    data = np.empty(n_cells, dtype=np.int64)
    indices_i = np.empty(n_cells, dtype=np.int64)
    indices_j = np.empty(n_cells, dtype=np.int64)
    for k, ((row, column), count) in enumerate(cooc.joint_cells()):
        data[k] = count
        indices_i[k] = row_index[row]
        indices_j[k] = column_index[column]

    matrix = sparse.coo_matrix(
        (data, (indices_i, indices_j)),
        shape=(len(row_labels), len(column_labels)),
    ).tocsr()
    return matrix, row_labels, column_labels
