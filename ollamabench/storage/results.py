"""Benchmark report persistence."""

from pathlib import Path
from typing import Any

import orjson

from ollamabench.models import BenchmarkReport


def save_report(report: BenchmarkReport, path: Path) -> Path:
    """Write the flat model -> summary mapping as indented JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.write(orjson.dumps(report.to_dict(), option=orjson.OPT_INDENT_2))
    return path


def load_report(path: Path) -> dict[str, dict[str, Any] | None]:
    """Load a saved report.

    Returns the flat mapping in file order; models without data map to None.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Report not found: {path}")

    with open(path, "rb") as f:
        data = orjson.loads(f.read())

    if not isinstance(data, dict):
        raise ValueError(f"Report must contain a mapping: {path}")
    for model_name, stats in data.items():
        if stats is not None and not isinstance(stats, dict):
            raise ValueError(f"Entry for {model_name} must be a mapping or null: {path}")
    return data
