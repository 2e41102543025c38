"""Metrics models for ollamabench."""

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel

NANOSECONDS_PER_SECOND = 1_000_000_000

_TWO_PLACES = Decimal("0.01")


def nanosec_to_sec(nanosec: int) -> float:
    return nanosec / NANOSECONDS_PER_SECOND


class Rate(BaseModel):
    """Tokens per second for one phase, or undefined when no time elapsed."""

    value: float | None = None

    @classmethod
    def of(cls, count: int, duration_ns: int) -> "Rate":
        if duration_ns == 0:
            return cls.undefined()
        return cls(value=count / nanosec_to_sec(duration_ns))

    @classmethod
    def undefined(cls) -> "Rate":
        return cls(value=None)

    @property
    def defined(self) -> bool:
        return self.value is not None


class DerivedMetrics(BaseModel):
    """Rates computed from a single timing sample."""

    prompt_tokens_per_second: Rate
    response_tokens_per_second: Rate
    total_tokens_per_second: Rate
    total_tokens: int
    total_duration_seconds: float


def format_two_places(value: float | None) -> str | None:
    """Format with two decimals, rounding half away from zero."""
    if value is None:
        return None
    return str(Decimal(repr(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


class ModelSummary(BaseModel):
    """Averaged metrics over all successful samples of one model.

    Rate averages are None when the rate was undefined for every sample.
    """

    prompt_tokens_per_second: float | None
    response_tokens_per_second: float | None
    total_tokens_per_second: float | None
    total_tokens: float
    total_duration_seconds: float
    sample_count: int

    def to_display(self) -> dict[str, str | None]:
        """Persisted shape: two-decimal strings under the report's field names."""
        return {
            "promptTokensPerSecond": format_two_places(self.prompt_tokens_per_second),
            "responseTokensPerSecond": format_two_places(self.response_tokens_per_second),
            "totalTokensPerSecond": format_two_places(self.total_tokens_per_second),
            "totalTokens": format_two_places(self.total_tokens),
            "totalDuration": format_two_places(self.total_duration_seconds),
        }
