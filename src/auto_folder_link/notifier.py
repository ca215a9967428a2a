"""User-facing notifiers."""

from typing import List, Optional

from rich.console import Console

from .storage.base import Notifier


class RichNotifier(Notifier):
    """Print notices to the terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show(self, message: str) -> None:
        self.console.print(f"[cyan]{message}[/cyan]")


class RecordingNotifier(Notifier):
    """Keep notices in memory instead of displaying them."""

    def __init__(self):
        self.messages: List[str] = []

    def show(self, message: str) -> None:
        self.messages.append(message)
