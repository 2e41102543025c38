"""ollamabench CLI."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ollamabench.client import OllamaClient, OllamaError
from ollamabench.engine import Harness, NoModelsError, RichProgressReporter
from ollamabench.models import BenchmarkConfig, ServerConfig, load_config
from ollamabench.models.config import DEFAULT_BASE_URL
from ollamabench.storage import load_report, save_report

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
)

console = Console()

_REPORT_COLUMNS = [
    ("Prompt t/s", "promptTokensPerSecond"),
    ("Resp t/s", "responseTokensPerSecond"),
    ("Total t/s", "totalTokensPerSecond"),
    ("Tokens", "totalTokens"),
    ("Duration", "totalDuration"),
]


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _load_config_or_default(config_path: Path | None) -> BenchmarkConfig:
    """Load the config file, falling back to defaults on any load failure."""
    if config_path is None:
        return BenchmarkConfig()
    try:
        return load_config(config_path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        # pydantic.ValidationError is a ValueError
        console.print(
            f"[yellow]Failed to load config file: {escape(str(e))}. "
            "Using command line options.[/yellow]"
        )
        return BenchmarkConfig()


@app.command()
def run(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Increase output verbosity"),
    ] = False,
    skip_models: Annotated[
        list[str] | None,
        typer.Option("--skip-models", "-s", help="Model name to skip (repeatable)"),
    ] = None,
    prompts: Annotated[
        list[str] | None,
        typer.Option("--prompts", "-p", help="Prompt to benchmark with (repeatable)"),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to optional configuration file"),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Path to save benchmark results"),
    ] = None,
    host: Annotated[
        str | None,
        typer.Option("--host", envvar="OLLAMA_HOST", help="Ollama server URL"),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", help="Per-request timeout in seconds (default: none)"),
    ] = None,
):
    """
    Benchmark every installed model against the given prompts.

    Command-line options take precedence over the configuration file.
    """
    base_cfg = _load_config_or_default(config)
    cfg = base_cfg.with_overrides(
        verbose=verbose,
        skip_models=skip_models,
        prompts=prompts,
        output=output,
        base_url=_normalize_host(host),
        timeout_seconds=timeout,
    )
    _setup_logging(cfg.verbose)

    console.print()
    console.print(f"Verbose: {cfg.verbose}")
    console.print(f"Skip models: {', '.join(cfg.skip_models)}", markup=False)
    console.print(f"Prompts: {', '.join(cfg.prompts)}", markup=False)
    console.print()

    try:
        report = asyncio.run(_execute_run(cfg))
    except NoModelsError as exc:
        console.print(f"[red]{exc} Exiting.[/red]")
        raise typer.Exit(code=1) from None

    path = save_report(report, Path(cfg.output))
    console.print(f"\nBenchmark results saved to {path}")


async def _execute_run(cfg: BenchmarkConfig):
    async with OllamaClient(cfg.server) as client:
        harness = Harness(
            config=cfg,
            client=client,
            reporter=RichProgressReporter(console),
        )
        return await harness.run()


@app.command()
def models(
    skip_models: Annotated[
        list[str] | None,
        typer.Option("--skip-models", "-s", help="Model name to leave out (repeatable)"),
    ] = None,
    host: Annotated[
        str | None,
        typer.Option("--host", envvar="OLLAMA_HOST", help="Ollama server URL"),
    ] = None,
):
    """
    List the models the server would benchmark.
    """
    _setup_logging(False)
    server = ServerConfig(base_url=_normalize_host(host) or DEFAULT_BASE_URL)

    try:
        names = asyncio.run(_list_models(server))
    except OllamaError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from None

    skip = set(skip_models or [])
    names = [n for n in names if n not in skip]
    if not names:
        console.print("No models found.")
        raise typer.Exit(0)
    for name in names:
        console.print(name, markup=False)


async def _list_models(server: ServerConfig) -> list[str]:
    async with OllamaClient(server) as client:
        return await client.list_models()


@app.command()
def show(
    report_path: Annotated[
        Path,
        typer.Argument(help="Saved benchmark results file"),
    ] = Path("benchmark_results.json"),
):
    """
    Render saved benchmark results as a table.
    """
    try:
        data = load_report(report_path)
    except FileNotFoundError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from None
    except ValueError as exc:
        console.print(f"[red]Invalid report {report_path}: {escape(str(exc))}[/red]")
        raise typer.Exit(1) from None

    if not data:
        console.print("[dim]No results.[/dim]")
        raise typer.Exit(0)

    console.print()
    table = Table(box=None, padding=(0, 1))
    table.add_column("Model", style="bold")
    for title, _ in _REPORT_COLUMNS:
        table.add_column(title, justify="right", no_wrap=True)

    for model_name, stats in data.items():
        if stats is None:
            table.add_row(model_name, "[dim]no data[/dim]", *[""] * (len(_REPORT_COLUMNS) - 1))
            continue
        table.add_row(model_name, *[stats.get(key) or "-" for _, key in _REPORT_COLUMNS])

    console.print(table)
    console.print()


def _normalize_host(host: str | None) -> str | None:
    """Accept OLLAMA_HOST style values such as "127.0.0.1:11434"."""
    if not host:
        return None
    if "://" not in host:
        host = f"http://{host}"
    return host.rstrip("/")


def cli_main():
    app()


if __name__ == "__main__":
    cli_main()
