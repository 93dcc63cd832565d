"""Command-line interface for code360stats."""

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from code360stats import ProfileFetcher, ScraperConfig, format_response, __version__
from code360stats.config import LogFormat
from code360stats.exceptions import FetchError, InvalidInputError
from code360stats.logging import configure_logging
from code360stats.models import PublicProfileResponse

app = typer.Typer(
    name="code360stats",
    help="Code360 profile statistics scraper",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"code360stats version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """code360stats - Code360 profile statistics scraper."""
    pass


@app.command()
def fetch(
    username: str = typer.Argument(..., help="Code360 username"),
    as_json: bool = typer.Option(
        False, "--json", "-j", help="Print the API response JSON"
    ),
    headless: bool = typer.Option(
        True, "--headless/--no-headless", help="Run browser in headless mode"
    ),
):
    """Scrape one Code360 profile."""
    config = ScraperConfig(
        headless=headless,
        log_format=LogFormat.JSON if as_json else LogFormat.CONSOLE,
    )
    configure_logging(config)

    async def run() -> PublicProfileResponse:
        stats = await ProfileFetcher(config).fetch(username)
        return format_response(stats, username)

    try:
        response = asyncio.run(run())
    except (FetchError, InvalidInputError) as e:
        console.print(f"[red]Failed to fetch profile {username}: {e}[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(response.model_dump_json(by_alias=True))
    else:
        _print_profile_table(response)


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port"),
):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("code360stats.api:app", host=host, port=port)


def _print_profile_table(response: PublicProfileResponse):
    """Print profile statistics as a table."""
    table = Table(title=response.username, show_header=False)
    table.add_column("Field", style="dim")
    table.add_column("Value")

    table.add_row("Joined", response.joined_date or "-")
    table.add_row("Badge", response.badge or "-")
    table.add_row("Total solved", f"{response.total_solved:,}")
    table.add_row("Easy", f"{response.easy_solved:,}")
    table.add_row("Moderate", f"{response.medium_solved:,}")
    table.add_row("Hard", f"{response.hard_solved:,}")
    table.add_row("Ninja", f"{response.ninja_solved:,}")
    table.add_row("Current streak", str(response.current_streak))
    table.add_row("Longest streak", str(response.longest_streak))
    table.add_row("Streak freezes left", str(response.streak_freeze_left))
    table.add_row("XP", f"{response.expcount:,}")

    console.print(table)


if __name__ == "__main__":
    app()
