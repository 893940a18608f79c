"""Main CLI entry point."""

import asyncio
import logging

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..bot import IssueBot
from ..config import BotConfig, load_config
from ..errors import FatalError
from ..utils.log_setup import setup_logging

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="jira-issue-bot",
    help="Post new Jira issues and a P0/P1 digest to Slack",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()
logger = logging.getLogger(__name__)


def _load_config_or_exit() -> BotConfig:
    try:
        return load_config()
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(code=1)


async def _run_bot(config: BotConfig) -> None:
    async with IssueBot(config) as bot:
        await bot.run()


@app.command()
def run() -> None:
    """Run the bot until an unrecoverable error occurs."""
    config = _load_config_or_exit()
    setup_logging(config.log_level, config.sdk_log_level)

    try:
        asyncio.run(_run_bot(config))
    except FatalError:
        # Logged by the scheduler
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")


@app.command()
def show_config() -> None:
    """Show the configuration loaded from the environment (secrets masked)."""
    config = _load_config_or_exit()

    table = Table(title="Jira Issue Bot Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    for key, value in config.summary().items():
        table.add_row(key, value)

    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from jira_issue_bot import __version__

    console.print(f"Jira Issue Bot v{__version__}")


if __name__ == "__main__":
    app()
