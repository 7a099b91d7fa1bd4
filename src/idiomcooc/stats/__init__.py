"""
Association ranking and batch accumulation built on the core accumulator.
"""

from idiomcooc.stats.association import (
    top_associations,
    lifts_to_frame,
    mutual_information_to_frame,
    joint_matrix,
)
from idiomcooc.stats.mining import MiningSummary, accumulate_observations

__all__ = [
    # Ranking / export
    'top_associations',
    'lifts_to_frame',
    'mutual_information_to_frame',
    'joint_matrix',
    # Batch accumulation
    'MiningSummary',
    'accumulate_observations',
]
