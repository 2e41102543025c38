from typing import Protocol

from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn

from ollamabench.models import ModelResult, ModelStatus, TimingSample


class ProgressReporter(Protocol):
    """Protocol for reporting benchmark progress."""

    def start(self, models: list[str], prompts: list[str]) -> None:
        """Start the reporter (e.g. initialize live display)."""
        ...

    def sample(
        self, model: str, prompt: str, sample: TimingSample | None, verbose: bool = False
    ) -> None:
        """Record one finished request; sample is None when it failed."""
        ...

    def model_done(self, result: ModelResult) -> None:
        """Show the outcome for one model."""
        ...

    def stop(self) -> None:
        """Stop the reporter (e.g. clean up display)."""
        ...


class NullReporter:
    """Reporter that outputs nothing."""

    def start(self, models: list[str], prompts: list[str]) -> None:
        pass

    def sample(
        self, model: str, prompt: str, sample: TimingSample | None, verbose: bool = False
    ) -> None:
        pass

    def model_done(self, result: ModelResult) -> None:
        pass

    def stop(self) -> None:
        pass


def render_summary(result: ModelResult) -> Panel | str:
    """Average Stats block for one model, or a no-data notice."""
    if result.status != ModelStatus.COMPLETED or result.summary is None:
        return f"[yellow]No valid responses for {result.model}[/yellow]"

    d = result.summary.to_display()
    body = "\n".join(
        [
            f"Prompt Tokens/s:   {d['promptTokensPerSecond'] or 'n/a'}",
            f"Response Tokens/s: {d['responseTokensPerSecond'] or 'n/a'}",
            f"Total Tokens/s:    {d['totalTokensPerSecond'] or 'n/a'}",
            f"Avg Total Tokens:  {d['totalTokens']}",
            f"Avg Total Duration: {d['totalDuration']}s",
        ]
    )
    subtitle = f"{result.summary.sample_count} samples"
    if result.errors:
        subtitle += f", {result.errors} failed"
    return Panel(
        body,
        title=f"[bold cyan]{result.model}[/bold cyan] Average Stats",
        subtitle=subtitle,
        expand=False,
    )


class RichProgressReporter:
    """Reporter that uses a Rich progress bar for CLI output."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self.progress: Progress | None = None
        self._task_id = None

    def start(self, models: list[str], prompts: list[str]) -> None:
        self.progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
        self._task_id = self.progress.add_task("Benchmarking", total=len(models) * len(prompts))
        self.progress.start()

    def sample(
        self, model: str, prompt: str, sample: TimingSample | None, verbose: bool = False
    ) -> None:
        if verbose and sample is not None:
            self.console.print(f"Model: {model}, Prompt: {prompt!r}", markup=False)
            self.console.print(f"Response: {sample.response}\n", markup=False)
        if self.progress is not None:
            self.progress.update(self._task_id, advance=1, description=model)

    def model_done(self, result: ModelResult) -> None:
        self.console.print()
        self.console.print(render_summary(result))

    def stop(self) -> None:
        if self.progress is not None:
            self.progress.stop()
            self.progress = None
