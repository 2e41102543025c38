"""Report models for ollamabench."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from ollamabench.models.metrics import ModelSummary


class ModelStatus(str, Enum):
    """Outcome of evaluating a single model."""

    COMPLETED = "completed"
    NO_DATA = "no_data"
    SKIPPED = "skipped"


class ModelResult(BaseModel):
    model: str
    status: ModelStatus
    summary: ModelSummary | None = None
    samples: int = 0
    errors: int = 0


class BenchmarkReport(BaseModel):
    """Per-model results in evaluation order."""

    created_at: datetime = Field(default_factory=datetime.now)
    results: dict[str, ModelResult] = Field(default_factory=dict)

    def add(self, result: ModelResult) -> None:
        self.results[result.model] = result

    @property
    def evaluated(self) -> list[ModelResult]:
        return [r for r in self.results.values() if r.status != ModelStatus.SKIPPED]

    @property
    def skipped(self) -> list[str]:
        return [r.model for r in self.results.values() if r.status == ModelStatus.SKIPPED]

    def to_dict(self) -> dict[str, dict[str, Any] | None]:
        """Flat mapping persisted to disk.

        Models without data map to None; skipped models are left out.
        """
        flat: dict[str, dict[str, Any] | None] = {}
        for result in self.evaluated:
            flat[result.model] = result.summary.to_display() if result.summary else None
        return flat
