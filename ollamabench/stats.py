"""Per-sample metrics and per-model aggregation."""

from collections.abc import Iterable, Sequence

from ollamabench.models import DerivedMetrics, ModelSummary, Rate, TimingSample, nanosec_to_sec


def compute_metrics(sample: TimingSample) -> DerivedMetrics:
    """Derive token rates from one sample's duration counters.

    A phase that took zero nanoseconds yields an undefined Rate rather than
    an infinite or NaN value.
    """
    total_tokens = sample.prompt_eval_count + sample.eval_count
    return DerivedMetrics(
        prompt_tokens_per_second=Rate.of(sample.prompt_eval_count, sample.prompt_eval_duration),
        response_tokens_per_second=Rate.of(sample.eval_count, sample.eval_duration),
        total_tokens_per_second=Rate.of(
            total_tokens, sample.prompt_eval_duration + sample.eval_duration
        ),
        total_tokens=total_tokens,
        total_duration_seconds=nanosec_to_sec(sample.total_duration),
    )


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def _mean_rate(rates: Iterable[Rate]) -> float | None:
    defined = [r.value for r in rates if r.value is not None]
    if not defined:
        return None
    return _mean(defined)


def aggregate(samples: Sequence[TimingSample]) -> ModelSummary | None:
    """Average the derived metrics of a model's samples.

    Returns None when there are no samples, so "no data" is never confused
    with a summary whose metrics are all zero. Every sample weighs the same
    regardless of its token count.
    """
    if not samples:
        return None

    stats = [compute_metrics(s) for s in samples]
    return ModelSummary(
        prompt_tokens_per_second=_mean_rate(s.prompt_tokens_per_second for s in stats),
        response_tokens_per_second=_mean_rate(s.response_tokens_per_second for s in stats),
        total_tokens_per_second=_mean_rate(s.total_tokens_per_second for s in stats),
        total_tokens=_mean([s.total_tokens for s in stats]),
        total_duration_seconds=_mean([s.total_duration_seconds for s in stats]),
        sample_count=len(stats),
    )
