"""HTTP client for a local Ollama server."""

import logging

import httpx
from pydantic import ValidationError

from ollamabench.models import ServerConfig, TimingSample

logger = logging.getLogger(__name__)


class OllamaError(RuntimeError):
    """Raised when the server cannot be queried."""


class OllamaClient:
    """Thin async wrapper over the Ollama REST API.

    Use as an async context manager so the underlying connection pool is closed.
    """

    def __init__(self, config: ServerConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "OllamaClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_models(self) -> list[str]:
        """Names of the models installed on the server."""
        try:
            response = await self._client.get("/api/tags")
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise OllamaError(f"Failed to list models from {self.config.base_url}: {e}") from e
        except ValueError as e:
            raise OllamaError(f"Invalid model list from {self.config.base_url}: {e}") from e

        models = data.get("models") if isinstance(data, dict) else None
        if not isinstance(models, list) or not all(isinstance(m, dict) for m in models):
            raise OllamaError(f"Invalid model list from {self.config.base_url}: {data!r}")

        return [m["name"] for m in models if "name" in m]

    async def generate(self, model: str, prompt: str) -> TimingSample | None:
        """Run one non-streaming generation.

        Returns None on any failure; the failure is logged, never raised.
        """
        try:
            response = await self._client.post(
                "/api/generate",
                json={"model": model, "prompt": prompt, "stream": False},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Error benchmarking {model}: HTTP {e.response.status_code}")
            return None
        except httpx.HTTPError as e:
            logger.error(f"Error benchmarking {model}: {e}")
            return None
        except ValueError as e:
            logger.error(f"Error benchmarking {model}: invalid JSON response ({e})")
            return None

        if not isinstance(data, dict):
            logger.error(f"Error benchmarking {model}: unexpected response payload")
            return None

        try:
            sample = TimingSample.from_response(data, prompt)
        except ValidationError as e:
            logger.error(f"Error benchmarking {model}: malformed response ({e.error_count()} errors)")
            logger.debug("Malformed response for %s: %s", model, e)
            return None

        if not sample.done:
            logger.error(f"Error benchmarking {model}: incomplete response")
            return None

        return sample
