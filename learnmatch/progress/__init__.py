"""Progress module: completion tracking and percentage derivation."""

from .tracker import LearnerProgress, ProgressSnapshot, ProgressTracker, compute_progress

__all__ = [
    "LearnerProgress",
    "ProgressSnapshot",
    "ProgressTracker",
    "compute_progress",
]
