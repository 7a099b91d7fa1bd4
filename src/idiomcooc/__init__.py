"""
idiomcooc - Co-occurrence statistics for idiom and association mining

Accumulates marginal and joint counts of two kinds of discrete elements
observed together and ranks their associations by pointwise mutual
information (log-lift).
"""

__version__ = "0.1.0"

from idiomcooc.core.cooccurrence import ElementCooccurrence
from idiomcooc.core.records import ElementMutualInformation, Lift
from idiomcooc.config import MiningConfig

__all__ = [
    "ElementCooccurrence",
    "ElementMutualInformation",
    "Lift",
    "MiningConfig",
]
