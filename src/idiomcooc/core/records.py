"""
Immutable result records produced by the co-occurrence accumulator.

Two record types carry association scores out of
:class:`~idiomcooc.core.cooccurrence.ElementCooccurrence`:

1. ElementMutualInformation: one element and its pointwise log-probability
   ratio against a fixed partner.
2. Lift: a (row, column) pair with its log-lift and raw joint count.
   Lift records have a total order (highest lift first) so ranked lists
   can be produced with a plain ``sorted()``.

Both are frozen dataclasses with value-based equality, safe to share and
to use as dict keys.

Examples:
    >>> from idiomcooc.core.records import Lift, LIFT_ORDER
    >>> a = Lift(row=1, column="x", lift=0.4, count=3)
    >>> b = Lift(row=2, column="x", lift=1.2, count=1)
    >>> [str(r) for r in sorted([a, b])]
    ['2,x:1.20', '1,x:0.40']
"""

from __future__ import annotations

import functools
import math
from dataclasses import dataclass
from typing import Generic, Hashable, TypeVar

__all__ = [
    'ElementMutualInformation',
    'Lift',
    'compare_lifts',
    'LIFT_ORDER',
]

T = TypeVar('T', bound=Hashable)
R = TypeVar('R', bound=Hashable)
C = TypeVar('C', bound=Hashable)


@dataclass(frozen=True)
class ElementMutualInformation(Generic[T]):
    """
    Pointwise mutual information of one element against a fixed partner.

    Attributes:
        element: The row or column element this score belongs to
        log_prob: ``log P(a, b) - log P(a) - log P(b)``; may be +/-inf but
            never nan

    Raises:
        ValueError: If ``log_prob`` is nan.
    """

    element: T
    log_prob: float

    def __post_init__(self):
        if math.isnan(self.log_prob):
            raise ValueError(
                f"log_prob for element {self.element!r} is nan"
            )

    def to_dict(self) -> dict[str, object]:
        """Flatten record for DataFrame construction."""
        return {"element": self.element, "log_prob": self.log_prob}


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_lifts(first: Lift, second: Lift) -> int:
    """
    Three-way comparison defining the ranking order of Lift records.

    Keys, in order:
        1. lift, descending
        2. ``hash(row)``, ascending
        3. ``hash(first.column)`` against ``hash(first.row)``

    The third key only matters when two distinct rows collide on hash.
    It compares fields of ``first`` with each other, so it is not
    antisymmetric in that degenerate case.

    Note:
        Python salts ``str`` and ``bytes`` hashes per process unless
        ``PYTHONHASHSEED`` is fixed, so tie order between equal lifts is
        only reproducible across runs for elements with stable hashes
        (ints, tuples of ints, enums with int values...).

    Returns:
        Negative if ``first`` ranks before ``second``, positive if after,
        0 if the keys tie.
    """
    result = _cmp(second.lift, first.lift)
    if result:
        return result
    result = _cmp(hash(first.row), hash(second.row))
    if result:
        return result
    return _cmp(hash(first.column), hash(first.row))


LIFT_ORDER = functools.cmp_to_key(compare_lifts)
"""Sort key implementing :func:`compare_lifts`, for ``sorted(..., key=LIFT_ORDER)``."""


@dataclass(frozen=True, eq=False)
class Lift(Generic[R, C]):
    """
    Log-lift of a (row, column) pair.

    Equality and hashing use ``(lift, row, column)``; ``count`` is carried
    along but does not take part. Ordering follows :func:`compare_lifts`.

    Attributes:
        row: Row element
        column: Column element
        lift: ``log P(row, column) - log P(row) - log P(column)``
        count: Raw joint count of the pair when the record was built
    """

    row: R
    column: C
    lift: float
    count: int

    def __eq__(self, other):
        if other is self:
            return True
        if not isinstance(other, Lift):
            return NotImplemented
        return (
            self.lift == other.lift
            and self.row == other.row
            and self.column == other.column
        )

    def __hash__(self):
        return hash((self.row, self.column, self.lift))

    def __lt__(self, other: Lift) -> bool:
        if not isinstance(other, Lift):
            return NotImplemented
        return compare_lifts(self, other) < 0

    def __str__(self) -> str:
        return f"{self.row},{self.column}:{self.lift:.2f}"

    def to_dict(self) -> dict[str, object]:
        """Flatten record for DataFrame construction."""
        return {
            "row": self.row,
            "column": self.column,
            "lift": self.lift,
            "count": self.count,
        }
