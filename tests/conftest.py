import json

import httpx
import pytest

from ollamabench.models import TimingSample

SECOND = 1_000_000_000


def generate_payload(model: str = "llama3:8b", **overrides) -> dict:
    """A /api/generate response body as Ollama returns it."""
    payload = {
        "model": model,
        "created_at": "2024-05-01T12:00:00.123456Z",
        "response": "Rayleigh scattering.",
        "done": True,
        "total_duration": 13 * SECOND,
        "load_duration": 1 * SECOND,
        "prompt_eval_count": 10,
        "prompt_eval_duration": 2 * SECOND,
        "eval_count": 100,
        "eval_duration": 10 * SECOND,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_sample():
    def _make(prompt: str = "Why is the sky blue?", **overrides) -> TimingSample:
        return TimingSample.from_response(generate_payload(**overrides), prompt)

    return _make


def ollama_transport(
    models: list[str],
    failing: set[str] | None = None,
    responses: dict[str, dict] | None = None,
) -> httpx.MockTransport:
    """Fake Ollama server: lists models, answers generations, fails some models."""
    failing = failing or set()
    responses = responses or {}

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/tags":
            return httpx.Response(200, json={"models": [{"name": m} for m in models]})
        if request.url.path == "/api/generate":
            body = json.loads(request.content)
            model = body["model"]
            if model in failing:
                return httpx.Response(500, json={"error": "model crashed"})
            return httpx.Response(200, json=responses.get(model, generate_payload(model)))
        return httpx.Response(404)

    return httpx.MockTransport(handler)
