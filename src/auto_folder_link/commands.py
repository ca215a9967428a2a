"""Command registry for user-invocable actions."""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from .exceptions import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Command:
    """A named action the user can invoke."""
    id: str
    name: str
    callback: Callable[[], Any]


class CommandRegistry:
    """Holds commands by id and runs them on request."""

    def __init__(self) -> None:
        self._commands: Dict[str, Command] = {}

    def add_command(self, command: Command) -> None:
        """Register a command.

        Raises:
            CommandError: If a command with the same id is registered.
        """
        if command.id in self._commands:
            raise CommandError(f"Command already registered: {command.id}")
        self._commands[command.id] = command

    def remove_command(self, command_id: str) -> None:
        self._commands.pop(command_id, None)

    def get(self, command_id: str) -> Command:
        try:
            return self._commands[command_id]
        except KeyError:
            raise CommandError(f"Unknown command: {command_id}")

    def list(self) -> List[Command]:
        return list(self._commands.values())

    async def execute(self, command_id: str) -> Any:
        """Run a command, awaiting it when the callback is a coroutine."""
        command = self.get(command_id)
        logger.debug(f"Executing command {command.id}")
        result = command.callback()
        if inspect.isawaitable(result):
            result = await result
        return result
