"""Storage and persistence for ollamabench reports."""

from ollamabench.storage.results import load_report, save_report

__all__ = [
    "load_report",
    "save_report",
]
