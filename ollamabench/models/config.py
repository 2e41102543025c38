"""Configuration models for ollamabench."""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BASE_URL = "http://localhost:11434"
DEFAULT_PROMPTS = ["Why is the sky blue?"]
DEFAULT_OUTPUT = "benchmark_results.json"


class ServerConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    base_url: str = Field(default=DEFAULT_BASE_URL, alias="baseUrl")
    # None waits for as long as the server takes to answer
    timeout_seconds: float | None = Field(default=None, alias="timeoutSeconds")


class BenchmarkConfig(BaseModel):
    """Settings for one benchmark run.

    Config files may use snake_case or camelCase keys.
    """

    model_config = ConfigDict(populate_by_name=True)

    verbose: bool = False
    skip_models: list[str] = Field(default_factory=list, alias="skipModels")
    prompts: list[str] = Field(default_factory=lambda: list(DEFAULT_PROMPTS))
    output: str = DEFAULT_OUTPUT
    server: ServerConfig = Field(default_factory=ServerConfig)

    def with_overrides(
        self,
        verbose: bool | None = None,
        skip_models: list[str] | None = None,
        prompts: list[str] | None = None,
        output: str | None = None,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
    ) -> "BenchmarkConfig":
        """Return a copy where non-empty command-line values win."""
        cfg = self.model_copy(deep=True)
        if verbose:
            cfg.verbose = True
        if skip_models:
            cfg.skip_models = list(skip_models)
        if prompts:
            cfg.prompts = list(prompts)
        if output:
            cfg.output = output
        if base_url:
            cfg.server.base_url = base_url
        if timeout_seconds is not None:
            cfg.server.timeout_seconds = timeout_seconds
        return cfg


def load_config(path: str | Path) -> BenchmarkConfig:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        return BenchmarkConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")

    return BenchmarkConfig.model_validate(data)
