"""
Console progress reporting.

The fetch command prints a dot per unit of progress, a check mark per
finished sub-step and a line break when a top-level step is complete.
The tickers translate raw process output into those progress units.
"""

from typing import Optional, Protocol

from rich.console import Console
from rich.text import Text

MEGABYTE = 1024 * 1024


class ProgressReporter(Protocol):
    """What the orchestrator needs from a progress sink."""

    def step(self, title: str) -> None: ...

    def tick(self) -> None: ...

    def ok(self) -> None: ...

    def done(self) -> None: ...

    def error(self, message: str, hint: Optional[str] = None) -> None: ...


class ConsoleProgress:
    """Progress markers rendered on a Rich console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def step(self, title: str) -> None:
        self.console.print(Text(title, style="bold"))

    def tick(self) -> None:
        self.console.print(".", end="")

    def ok(self) -> None:
        self.console.print(Text("✓", style="green"), end="")

    def done(self) -> None:
        self.console.print()

    def error(self, message: str, hint: Optional[str] = None) -> None:
        self.console.print()
        self.console.print(Text(f"✗ {message}", style="bold red"))
        if hint:
            self.console.print(Text(f"  Hint: {hint}", style="dim"))


class MegabyteTicker:
    """
    Output callback emitting one tick per full megabyte observed.

    The byte counter starts over after each tick, so a single large chunk
    yields one tick, not several.
    """

    def __init__(self, progress: ProgressReporter, threshold: int = MEGABYTE):
        self.progress = progress
        self.threshold = threshold
        self.bytes_seen = 0
        self.total_bytes = 0

    def __call__(self, stream: str, chunk: bytes) -> None:
        self.bytes_seen += len(chunk)
        self.total_bytes += len(chunk)
        if self.bytes_seen >= self.threshold:
            self.progress.tick()
            self.bytes_seen = 0


class ChunkTicker:
    """Output callback emitting one tick per received chunk."""

    def __init__(self, progress: ProgressReporter):
        self.progress = progress

    def __call__(self, stream: str, chunk: bytes) -> None:
        self.progress.tick()
