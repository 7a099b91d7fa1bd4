"""
Sparse co-occurrence accounting between two element domains.

An upstream extractor hands the accumulator one pair of element sets per
observation (for example the node types and the identifiers found in one
code idiom). The accumulator keeps:

    - marginal counts per row element and per column element
    - a sparse joint table (row, column) -> number of observations in which
      both were present
    - the running total of joint observations, sum of |rows| * |columns|

and derives pointwise mutual information ("log-lift") from them:

    log P(r, c) - log P(r) - log P(c)

    P(r, c) = joint[r, c] / total_joint_observations
    P(r)    = row_counts[r] / total_row_observations
    P(c)    = column_counts[c] / total_column_observations

Zero probabilities give ``-inf`` terms. They are legitimate results (the
pair never co-occurred) and are propagated, not raised.

Joint Table Layout:
    The joint counts are held twice, as a row-major index
    ``row -> {column: count}`` and a column-major index
    ``column -> {row: count}``. Both are updated together on ingestion and
    pruning so row-anchored and column-anchored queries only touch the
    cells of their anchor.

Thread Safety:
    None. Ingestion and pruning mutate plain dicts in place; callers that
    share an accumulator across threads must serialize access themselves.
    Views returned by ``row_counts``, ``column_counts``, ``row_values`` and
    ``column_values`` are live and change with the accumulator.

Examples:
    >>> cooc = ElementCooccurrence()
    >>> cooc.ingest({"A", "B"}, {"X"})
    >>> cooc.ingest({"A"}, {"X", "Y"})
    >>> cooc.joint_count("A", "X")
    2
    >>> round(cooc.log_lift("A", "X"), 3)
    0.118
    >>> cooc.prune(1)
    >>> cooc.n_joint_cells
    1
"""

from __future__ import annotations

import logging
import numbers
from collections import Counter
from types import MappingProxyType
from typing import (
    Any,
    Dict,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    KeysView,
    List,
    Mapping,
    Optional,
    Tuple,
    TypeVar,
)

from idiomcooc.core.records import ElementMutualInformation, Lift, LIFT_ORDER
from idiomcooc.utils.logmath import log_ratio, safe_log

logger = logging.getLogger(__name__)

__all__ = ['ElementCooccurrence', 'STATE_VERSION']

R = TypeVar('R', bound=Hashable)
C = TypeVar('C', bound=Hashable)

STATE_VERSION = 1
"""Format version written by :meth:`ElementCooccurrence.to_state`."""


class ElementCooccurrence(Generic[R, C]):
    """
    Accumulator of marginal and joint counts for row/column element pairs.

    Attributes:
        total_joint_observations: Sum over all ingestions of
            ``|rows| * |columns|``. Pruning never decreases it.
        total_row_observations: Sum of all row marginal counts
        total_column_observations: Sum of all column marginal counts
    """

    def __init__(self) -> None:
        self._row_counts: Counter = Counter()
        self._column_counts: Counter = Counter()
        self._by_row: Dict[R, Dict[C, int]] = {}
        self._by_column: Dict[C, Dict[R, int]] = {}
        self._total_rows = 0
        self._total_columns = 0
        self._total_joint = 0

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(rows={len(self._row_counts)}, "
            f"columns={len(self._column_counts)}, "
            f"joint_cells={self.n_joint_cells}, "
            f"total_joint_observations={self._total_joint})"
        )

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def ingest(self, rows: Iterable[R], columns: Iterable[C]) -> None:
        """
        Record one observation of co-occurring row and column elements.

        Each distinct element counts once per call; duplicates within
        ``rows`` or ``columns`` are collapsed. Either side may be empty, in
        which case only the other side's marginals change.

        Args:
            rows: Row elements present in this observation
            columns: Column elements present in this observation
        """
        row_set = set(rows)
        column_set = set(columns)

        self._row_counts.update(row_set)
        self._column_counts.update(column_set)
        self._total_rows += len(row_set)
        self._total_columns += len(column_set)

        for row in row_set:
            row_cells = self._by_row.setdefault(row, {})
            for column in column_set:
                count = row_cells.get(column, 0) + 1
                row_cells[column] = count
                self._by_column.setdefault(column, {})[row] = count

        self._total_joint += len(row_set) * len(column_set)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def row_counts(self) -> Mapping[R, int]:
        """Live read-only view of row element -> marginal count."""
        return MappingProxyType(self._row_counts)

    @property
    def column_counts(self) -> Mapping[C, int]:
        """Live read-only view of column element -> marginal count."""
        return MappingProxyType(self._column_counts)

    @property
    def row_values(self) -> KeysView:
        """All row elements ever ingested (live view)."""
        return self._row_counts.keys()

    @property
    def column_values(self) -> KeysView:
        """All column elements ever ingested (live view)."""
        return self._column_counts.keys()

    @property
    def total_row_observations(self) -> int:
        return self._total_rows

    @property
    def total_column_observations(self) -> int:
        return self._total_columns

    @property
    def total_joint_observations(self) -> int:
        return self._total_joint

    @property
    def n_joint_cells(self) -> int:
        """Number of (row, column) pairs currently held in the joint table."""
        return sum(len(cells) for cells in self._by_row.values())

    def joint_count(self, row: R, column: C) -> int:
        """Joint count of a pair, 0 if absent or pruned."""
        return self._by_row.get(row, {}).get(column, 0)

    def joint_cells(self) -> Iterator[Tuple[Tuple[R, C], int]]:
        """Iterate ``((row, column), count)`` over the joint table, row-major."""
        for row, cells in self._by_row.items():
            for column, count in cells.items():
                yield (row, column), count

    def most_popular_rows(self, n: Optional[int] = None) -> Counter:
        """
        Snapshot of row counts, highest count first.

        Ties keep first-ingested order.

        Args:
            n: Keep only the ``n`` most frequent rows (default: all)

        Returns:
            New Counter whose iteration order is descending count.
        """
        return Counter(dict(self._row_counts.most_common(n)))

    def most_popular_columns(self, n: Optional[int] = None) -> Counter:
        """Snapshot of column counts, highest count first. See :meth:`most_popular_rows`."""
        return Counter(dict(self._column_counts.most_common(n)))

    # ------------------------------------------------------------------
    # Association scores
    # ------------------------------------------------------------------

    def _row_log_prob(self, row: Any) -> float:
        return log_ratio(self._row_counts[row], self._total_rows)

    def _column_log_prob(self, column: Any) -> float:
        return log_ratio(self._column_counts[column], self._total_columns)

    def _joint_log_prob(self, count: int) -> float:
        return log_ratio(count, self._total_joint)

    def log_lift(self, row: R, column: C) -> float:
        """
        Pointwise log-lift of a (row, column) pair.

        Defined for any pair, including elements never ingested. A pair
        without a joint cell (never seen together, or pruned) has
        ``P(row, column) = 0`` and scores ``-inf``, even when a marginal is
        zero too and the term-by-term difference would be ``-inf + inf``.

        Returns:
            ``log P(row, column) - log P(column) - log P(row)``
        """
        count = self.joint_count(row, column)
        if count == 0:
            return float('-inf')
        return (
            self._joint_log_prob(count)
            - self._column_log_prob(column)
            - self._row_log_prob(row)
        )

    def column_mutual_information(self, row: R) -> List[ElementMutualInformation[C]]:
        """
        Mutual information of every column jointly observed with ``row``.

        Columns missing from the result have zero joint probability with
        ``row``. Order follows the joint table, not the score.

        Raises:
            ValueError: If ``row`` was never ingested.
        """
        if self._row_counts[row] == 0:
            raise ValueError(f"Row element {row!r} has no observations")

        row_log_prob = self._row_log_prob(row)
        cells = self._by_row.get(row)
        if not cells:
            return []

        log_n_joint = safe_log(self._total_joint)
        return [
            ElementMutualInformation(
                column,
                safe_log(count) - log_n_joint - row_log_prob
                - self._column_log_prob(column),
            )
            for column, count in cells.items()
        ]

    def row_mutual_information(self, column: C) -> List[ElementMutualInformation[R]]:
        """
        Mutual information of every row jointly observed with ``column``.

        Unlike :meth:`column_mutual_information`, the row term is not taken
        per partner: it is ``log(row_counts[column] / total_row_observations)``,
        the anchor column looked up among the *row* counts, and is the same
        for every entry. When the two domains are disjoint that term is
        ``-inf`` and every score is ``+inf``.

        Raises:
            ValueError: If ``column`` was never ingested.
        """
        if self._column_counts[column] == 0:
            raise ValueError(f"Column element {column!r} has no observations")

        column_log_prob = self._column_log_prob(column)
        cells = self._by_column.get(column)
        if not cells:
            return []

        log_n_joint = safe_log(self._total_joint)
        # Constant across partners, see docstring
        row_log_prob = log_ratio(self._row_counts[column], self._total_rows)
        return [
            ElementMutualInformation(
                row,
                safe_log(count) - log_n_joint - column_log_prob - row_log_prob,
            )
            for row, count in cells.items()
        ]

    def lifts_for_column(self, column: C) -> List[Lift[R, C]]:
        """
        Rows co-occurring with ``column``, ranked by log-lift.

        Returns:
            Lift records sorted by :data:`~idiomcooc.core.records.LIFT_ORDER`
            (highest lift first); empty if ``column`` has no joint cells.
        """
        cells = self._by_column.get(column)
        if not cells:
            return []

        column_log_prob = self._column_log_prob(column)
        lifts = {
            Lift(
                row=row,
                column=column,
                lift=self._joint_log_prob(count) - self._row_log_prob(row) - column_log_prob,
                count=count,
            ): None
            for row, count in cells.items()
        }
        return sorted(lifts, key=LIFT_ORDER)

    def lifts_for_row(self, row: R) -> List[Lift[R, C]]:
        """
        Columns co-occurring with ``row``, ranked by log-lift.

        Returns:
            Lift records with ``Lift.row == row``, highest lift first; empty
            if ``row`` has no joint cells.
        """
        cells = self._by_row.get(row)
        if not cells:
            return []

        row_log_prob = self._row_log_prob(row)
        lifts = {
            Lift(
                row=row,
                column=column,
                lift=self._joint_log_prob(count) - self._column_log_prob(column) - row_log_prob,
                count=count,
            ): None
            for column, count in cells.items()
        }
        return sorted(lifts, key=LIFT_ORDER)

    # ------------------------------------------------------------------
    # Pruning
    # ------------------------------------------------------------------

    def prune(self, threshold: int) -> None:
        """
        Drop every joint cell with count <= ``threshold``.

        Marginal counts and ``total_joint_observations`` are left as they
        are, so pruned pairs afterwards score as if never observed together.

        Args:
            threshold: Non-negative support threshold; any integral type
                (``int``, numpy integers) except ``bool``

        Raises:
            ValueError: If ``threshold`` is negative or not an integer.
        """
        if isinstance(threshold, bool) or not isinstance(threshold, numbers.Integral):
            raise ValueError(f"threshold must be an integer, got {threshold!r}")
        threshold = int(threshold)
        if threshold < 0:
            raise ValueError(f"threshold must be non-negative, got {threshold}")

        to_remove = [
            (row, column)
            for (row, column), count in self.joint_cells()
            if count <= threshold
        ]
        for row, column in to_remove:
            row_cells = self._by_row[row]
            del row_cells[column]
            if not row_cells:
                del self._by_row[row]
            column_cells = self._by_column[column]
            del column_cells[row]
            if not column_cells:
                del self._by_column[column]

        logger.debug(
            f"Pruned {len(to_remove)} joint cells with count <= {threshold}; "
            f"{self.n_joint_cells} remain"
        )

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def to_state(self) -> Dict[str, Any]:
        """
        Capture the full accumulator state as one plain dict.

        Marginals, joint cells and all running totals are copied together
        so a restored accumulator satisfies the same invariants.
        """
        return {
            "version": STATE_VERSION,
            "row_counts": dict(self._row_counts),
            "column_counts": dict(self._column_counts),
            "joint": [(row, column, count) for (row, column), count in self.joint_cells()],
            "total_row_observations": self._total_rows,
            "total_column_observations": self._total_columns,
            "total_joint_observations": self._total_joint,
        }

    @classmethod
    def from_state(cls, state: Mapping[str, Any]) -> ElementCooccurrence:
        """
        Rebuild an accumulator from :meth:`to_state` output.

        Raises:
            ValueError: If the version is unknown, a key is missing, or a
                joint cell exceeds the marginal count of its row or column.
        """
        version = state.get("version")
        if version != STATE_VERSION:
            raise ValueError(
                f"Unsupported co-occurrence state version {version!r} "
                f"(expected {STATE_VERSION})"
            )
        try:
            row_counts = Counter(state["row_counts"])
            column_counts = Counter(state["column_counts"])
            joint = state["joint"]
            totals = (
                int(state["total_row_observations"]),
                int(state["total_column_observations"]),
                int(state["total_joint_observations"]),
            )
        except KeyError as e:
            raise ValueError(f"Co-occurrence state is missing key {e}") from e

        cooc = cls()
        cooc._row_counts = row_counts
        cooc._column_counts = column_counts
        cooc._total_rows, cooc._total_columns, cooc._total_joint = totals
        for row, column, count in joint:
            if count > min(row_counts[row], column_counts[column]):
                raise ValueError(
                    f"Joint count {count} for ({row!r}, {column!r}) exceeds "
                    f"its marginal counts"
                )
            cooc._by_row.setdefault(row, {})[column] = count
            cooc._by_column.setdefault(column, {})[row] = count
        return cooc
