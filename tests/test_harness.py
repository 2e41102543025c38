import asyncio

import httpx
import pytest

from ollamabench.client import OllamaClient
from ollamabench.engine import Harness, NoModelsError
from ollamabench.models import BenchmarkConfig, ModelStatus
from tests.conftest import SECOND, generate_payload, ollama_transport


class RecordingReporter:
    def __init__(self):
        self.events = []

    def start(self, models, prompts):
        self.events.append(("start", tuple(models), tuple(prompts)))

    def sample(self, model, prompt, sample, verbose=False):
        self.events.append(("sample", model, prompt, sample is not None))

    def model_done(self, result):
        self.events.append(("done", result.model, result.status))

    def stop(self):
        self.events.append(("stop",))


def _run_harness(config, transport, reporter=None):
    async def main():
        async with OllamaClient(config.server, transport=transport) as client:
            return await Harness(config, client, reporter=reporter).run()

    return asyncio.run(main())


def test_runs_every_prompt_against_every_model():
    config = BenchmarkConfig(prompts=["one", "two"])
    reporter = RecordingReporter()
    report = _run_harness(config, ollama_transport(["a", "b"]), reporter)

    assert list(report.results) == ["a", "b"]
    assert all(r.status == ModelStatus.COMPLETED for r in report.results.values())
    assert report.results["a"].samples == 2
    samples = [e[1:3] for e in reporter.events if e[0] == "sample"]
    assert samples == [("a", "one"), ("a", "two"), ("b", "one"), ("b", "two")]
    assert reporter.events[-1] == ("stop",)


def test_failing_model_reports_no_data_and_others_continue():
    config = BenchmarkConfig(prompts=["one"])
    report = _run_harness(config, ollama_transport(["a", "broken", "c"], failing={"broken"}))

    assert report.results["broken"].status == ModelStatus.NO_DATA
    assert report.results["broken"].errors == 1
    assert report.results["c"].status == ModelStatus.COMPLETED
    assert report.to_dict()["broken"] is None


def test_skip_list_is_recorded_separately():
    config = BenchmarkConfig(skip_models=["big:70b"])
    report = _run_harness(config, ollama_transport(["big:70b", "small"]))

    assert report.results["big:70b"].status == ModelStatus.SKIPPED
    assert report.skipped == ["big:70b"]
    assert list(report.to_dict()) == ["small"]


def test_summary_values_flow_through():
    responses = {"a": generate_payload("a", prompt_eval_count=10, prompt_eval_duration=2 * SECOND)}
    report = _run_harness(BenchmarkConfig(), ollama_transport(["a"], responses=responses))
    assert report.to_dict()["a"]["promptTokensPerSecond"] == "5.00"
    assert report.to_dict()["a"]["totalTokens"] == "110.00"


def test_no_models_raises():
    with pytest.raises(NoModelsError):
        _run_harness(BenchmarkConfig(), ollama_transport([]))


def test_all_models_skipped_raises():
    with pytest.raises(NoModelsError):
        _run_harness(BenchmarkConfig(skip_models=["a"]), ollama_transport(["a"]))


@pytest.mark.parametrize("body", [[], {"models": None}])
def test_invalid_model_list_raises_no_models(body):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=body))
    with pytest.raises(NoModelsError):
        _run_harness(BenchmarkConfig(), transport)
