"""
Core co-occurrence accounting for association mining.

This module provides the foundational types the rest of the package builds on:

1. ElementCooccurrence: Accumulator of marginal and joint counts between two
   element domains, with log-lift / mutual-information queries and pruning
2. ElementMutualInformation: (element, log-probability ratio) record
3. Lift: (row, column, log-lift, count) record with a ranking order

Examples:
    >>> from idiomcooc.core import ElementCooccurrence
    >>>
    >>> cooc = ElementCooccurrence()
    >>> cooc.ingest({"for", "if"}, {"i"})
    >>> cooc.ingest({"for"}, {"i", "n"})
    >>> cooc.ingest({"while"}, {"n"})
    >>> [str(lift) for lift in cooc.lifts_for_column("n")]
    ['while,n:0.47', 'for,n:-0.22']
"""

from idiomcooc.core.cooccurrence import ElementCooccurrence, STATE_VERSION
from idiomcooc.core.records import (
    ElementMutualInformation,
    Lift,
    LIFT_ORDER,
    compare_lifts,
)

__all__ = [
    'ElementCooccurrence',
    'STATE_VERSION',
    'ElementMutualInformation',
    'Lift',
    'LIFT_ORDER',
    'compare_lifts',
]
