"""ollamabench - Token throughput benchmarks for local Ollama models.

For the harness, import from ollamabench.engine:
    from ollamabench.engine import Harness

For the statistics, import from ollamabench.stats:
    from ollamabench.stats import aggregate, compute_metrics
"""

__version__ = "0.1.0"

# Re-export commonly used models for convenience (these are lightweight)
from ollamabench.models import (
    BenchmarkConfig,
    BenchmarkReport,
    DerivedMetrics,
    ModelResult,
    ModelStatus,
    ModelSummary,
    Rate,
    ServerConfig,
    TimingSample,
    load_config,
)

__all__ = [
    # Models
    "BenchmarkConfig",
    "BenchmarkReport",
    "DerivedMetrics",
    "ModelResult",
    "ModelStatus",
    "ModelSummary",
    "Rate",
    "ServerConfig",
    "TimingSample",
    "load_config",
]
