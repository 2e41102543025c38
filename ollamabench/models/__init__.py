"""Pydantic models for ollamabench.

All data models are defined here. Import from this package for all serialization.
"""

from ollamabench.models.config import (
    BenchmarkConfig,
    ServerConfig,
    load_config,
)
from ollamabench.models.metrics import (
    DerivedMetrics,
    ModelSummary,
    Rate,
    nanosec_to_sec,
)
from ollamabench.models.report import BenchmarkReport, ModelResult, ModelStatus
from ollamabench.models.sample import TimingSample

__all__ = [
    # config.py
    "BenchmarkConfig",
    "ServerConfig",
    "load_config",
    # metrics.py
    "DerivedMetrics",
    "ModelSummary",
    "Rate",
    "nanosec_to_sec",
    # report.py
    "BenchmarkReport",
    "ModelResult",
    "ModelStatus",
    # sample.py
    "TimingSample",
]
