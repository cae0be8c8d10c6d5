"""Rich progress display and user interaction for the CLI."""

from __future__ import annotations

import asyncio
import logging
import sys

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.prompt import Prompt

console = Console()


class AdvisorProgress:
    """Spinner shown while waiting on the advisor."""

    def __init__(self, label: str = "Consulting the stack advisor") -> None:
        self._label = label
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        )

    def __enter__(self) -> "AdvisorProgress":
        self._progress.__enter__()
        self._progress.add_task(f"[cyan]{self._label}[/]", total=None)
        return self

    def __exit__(self, *args: object) -> None:
        self._progress.__exit__(*args)


async def ask_user(question: str, *, default: str = "") -> str:
    """Prompt the user for input without blocking the event loop.

    Returns ``default`` when stdin is not a terminal or is closed, so scripted
    runs end instead of hanging.
    """
    if not sys.stdin.isatty():
        return default

    # Keep httpx / client chatter from interleaving with the prompt
    root_logger = logging.getLogger()
    prev_level = root_logger.level
    root_logger.setLevel(logging.CRITICAL)

    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, lambda: Prompt.ask(question, default=default, show_default=False))
    except EOFError:
        return default
    finally:
        root_logger.setLevel(prev_level)
