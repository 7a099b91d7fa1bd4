"""Snapshot persistence for co-occurrence accumulators."""

from idiomcooc.io.snapshot import save_cooccurrence, load_cooccurrence, save_summary

__all__ = [
    'save_cooccurrence',
    'load_cooccurrence',
    'save_summary',
]
