"""Command line interface for auto folder link."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .exceptions import AutoFolderLinkError
from .models.config import Config, SettingsStore
from .notifier import RichNotifier
from .plugin import MOVE_CURRENT_COMMAND_ID, AutoFolderLinkPlugin
from .storage.filesystem import FilesystemNoteStorage
from .watcher import VaultWatcher

console = Console()


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def build_plugin(vault: Path) -> AutoFolderLinkPlugin:
    config = Config(vault_directory=vault)
    storage = FilesystemNoteStorage(config.vault_directory, note_extension=config.note_extension)
    return AutoFolderLinkPlugin(
        storage=storage,
        notifier=RichNotifier(console),
        settings_store=SettingsStore(config.settings_path),
        note_extension=config.note_extension,
    )


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', is_flag=True, help='Verbose output')
def cli(verbose: bool):
    """Move new notes into the folder of the note that links to them."""
    setup_logging(verbose)


@cli.command()
@click.argument('vault', type=click.Path(exists=True, file_okay=False, path_type=Path))
def watch(vault: Path):
    """Watch VAULT and move newly created notes as they appear."""
    try:
        asyncio.run(_watch(vault))
    except KeyboardInterrupt:
        console.print("[yellow]Stopped[/yellow]")
    except AutoFolderLinkError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


async def _watch(vault: Path) -> None:
    plugin = build_plugin(vault)
    await plugin.on_load()
    if not plugin.settings.auto_move:
        console.print("[yellow]Auto move is disabled; new notes will be left in place[/yellow]")

    watcher = VaultWatcher(vault, plugin.event_bus, asyncio.get_running_loop(),
                           note_extension=plugin.note_extension)
    watcher.start()
    console.print(f"[bold cyan]Watching {vault}[/bold cyan] (Ctrl+C to stop)")
    try:
        await asyncio.Event().wait()
    finally:
        watcher.stop()
        await plugin.on_unload()
        plugin.storage.close()


@cli.command()
@click.argument('vault', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument('note', required=False)
def move(vault: Path, note: Optional[str]):
    """Move NOTE (a path inside VAULT) to its referencing folder."""
    try:
        result = asyncio.run(_move(vault, note))
    except AutoFolderLinkError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if result is None:
        return
    if result.is_failure():
        console.print(f"[red]{result.error()}[/red]")
        sys.exit(1)

    relocation = result.value()
    if not relocation.moved:
        console.print(f"[yellow]{relocation.note_path} left in place ({relocation.reason.value})[/yellow]")


async def _move(vault: Path, note: Optional[str]):
    plugin = build_plugin(vault)
    await plugin.on_load()
    plugin.set_active_note(note)
    try:
        return await plugin.commands.execute(MOVE_CURRENT_COMMAND_ID)
    finally:
        await plugin.on_unload()
        plugin.storage.close()


@cli.command()
@click.argument('vault', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option('--auto-move/--no-auto-move', default=None,
              help='Move newly created notes automatically')
def config(vault: Path, auto_move: Optional[bool]):
    """Show or change the settings stored in VAULT."""
    store = SettingsStore.for_vault(vault)
    try:
        settings = store.load()
        if auto_move is not None:
            settings.auto_move = auto_move
            store.save(settings)
    except AutoFolderLinkError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Auto move new linked notes", "on" if settings.auto_move else "off")
    console.print(table)


def main():
    cli()


if __name__ == "__main__":
    main()
