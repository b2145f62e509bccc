"""
Data Generation Module
"""
from .generators import Snapshot, SnapshotGenerator

__all__ = [
    "Snapshot",
    "SnapshotGenerator",
]
