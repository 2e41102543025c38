import asyncio
import logging

import httpx
import pytest

from ollamabench.client import OllamaClient, OllamaError
from ollamabench.models import ServerConfig
from tests.conftest import generate_payload, ollama_transport


def _run(coro_fn, transport):
    async def main():
        async with OllamaClient(ServerConfig(), transport=transport) as client:
            return await coro_fn(client)

    return asyncio.run(main())


def test_list_models():
    transport = ollama_transport(["llama3:8b", "phi3:mini"])
    assert _run(lambda c: c.list_models(), transport) == ["llama3:8b", "phi3:mini"]


def test_list_models_http_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    with pytest.raises(OllamaError):
        _run(lambda c: c.list_models(), transport)


def test_list_models_connection_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(OllamaError):
        _run(lambda c: c.list_models(), httpx.MockTransport(handler))


def test_generate_sends_non_streaming_request():
    seen = {}

    def handler(request):
        seen["body"] = request.content
        seen["path"] = request.url.path
        return httpx.Response(200, json=generate_payload("phi3"))

    sample = _run(lambda c: c.generate("phi3", "Hi"), httpx.MockTransport(handler))
    assert seen["path"] == "/api/generate"
    assert b'"stream":false' in seen["body"].replace(b" ", b"")
    assert sample.model == "phi3"
    assert sample.prompt == "Hi"


def test_generate_http_error_returns_none(caplog):
    transport = ollama_transport(["bad"], failing={"bad"})
    with caplog.at_level(logging.ERROR):
        assert _run(lambda c: c.generate("bad", "Hi"), transport) is None
    assert "Error benchmarking bad" in caplog.text


def test_generate_invalid_json_returns_none():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"not json"))
    assert _run(lambda c: c.generate("phi3", "Hi"), transport) is None


def test_generate_malformed_payload_returns_none():
    payload = generate_payload()
    del payload["eval_duration"]
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=payload))
    assert _run(lambda c: c.generate("phi3", "Hi"), transport) is None


def test_generate_incomplete_response_returns_none():
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json=generate_payload(done=False))
    )
    assert _run(lambda c: c.generate("phi3", "Hi"), transport) is None


@pytest.mark.parametrize("body", [[], {"models": None}, {"models": ["llama3:8b"]}])
def test_list_models_invalid_payload(body):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=body))
    with pytest.raises(OllamaError):
        _run(lambda c: c.list_models(), transport)
