"""Execution engine for ollamabench."""

from ollamabench.engine.harness import Harness, NoModelsError
from ollamabench.engine.reporters import NullReporter, ProgressReporter, RichProgressReporter

__all__ = [
    "Harness",
    "NoModelsError",
    "NullReporter",
    "ProgressReporter",
    "RichProgressReporter",
]
