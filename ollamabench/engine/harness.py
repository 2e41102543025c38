"""Benchmark harness driving requests against the server."""

import logging

from ollamabench.client import OllamaClient, OllamaError
from ollamabench.engine.reporters import NullReporter, ProgressReporter
from ollamabench.models import (
    BenchmarkConfig,
    BenchmarkReport,
    ModelResult,
    ModelStatus,
    TimingSample,
)
from ollamabench.stats import aggregate

logger = logging.getLogger(__name__)


class NoModelsError(RuntimeError):
    """Raised when there is nothing left to benchmark."""


class Harness:
    """Runs every prompt against every model, one request at a time."""

    def __init__(
        self,
        config: BenchmarkConfig,
        client: OllamaClient,
        reporter: ProgressReporter | None = None,
    ):
        self.config = config
        self.client = client
        self.reporter = reporter or NullReporter()

    async def available_models(self) -> list[str]:
        """All models on the server, or [] when the server cannot be reached."""
        try:
            return await self.client.list_models()
        except OllamaError as e:
            logger.error(f"Error fetching models: {e}")
            return []

    def filter_models(self, models: list[str]) -> tuple[list[str], list[str]]:
        """Split models into (to evaluate, skipped), preserving server order."""
        skip = set(self.config.skip_models)
        selected = [m for m in models if m not in skip]
        skipped = [m for m in models if m in skip]
        return selected, skipped

    async def run(self) -> BenchmarkReport:
        """Run the benchmark and return the per-model report."""
        available = await self.available_models()
        models, skipped = self.filter_models(available)
        if not models:
            raise NoModelsError("No models available for benchmarking.")
        logger.info(f"Evaluating models: {', '.join(models)}")
        if skipped:
            logger.info(f"Skipping models: {', '.join(skipped)}")

        report = BenchmarkReport()
        self.reporter.start(models, self.config.prompts)
        try:
            for model in models:
                report.add(await self._run_model(model))
        finally:
            self.reporter.stop()

        for model in skipped:
            report.add(ModelResult(model=model, status=ModelStatus.SKIPPED))

        return report

    async def _run_model(self, model: str) -> ModelResult:
        samples: list[TimingSample] = []
        errors = 0
        for prompt in self.config.prompts:
            sample = await self.client.generate(model, prompt)
            self.reporter.sample(model, prompt, sample, verbose=self.config.verbose)
            if sample is None:
                errors += 1
            else:
                samples.append(sample)

        summary = aggregate(samples)
        if summary is None:
            logger.warning(f"No valid responses for {model}")
            result = ModelResult(model=model, status=ModelStatus.NO_DATA, errors=errors)
        else:
            result = ModelResult(
                model=model,
                status=ModelStatus.COMPLETED,
                summary=summary,
                samples=len(samples),
                errors=errors,
            )

        self.reporter.model_done(result)
        return result
