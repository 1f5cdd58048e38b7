"""Command line interface for WeatherBot"""

from pathlib import Path

import typer
from dotenv import load_dotenv

from weatherbot import __version__
from weatherbot.cli.commands import chat, server

app = typer.Typer(
    name="weatherbot",
    help="Weather bot for the Bot Framework: LUIS intents, OpenWeatherMap forecasts",
    add_completion=False,
)
app.add_typer(server.app, name="server", help="Serve /api/messages over HTTP")
app.add_typer(chat.app, name="chat", help="Talk to the bot from this terminal")


def _print_version(value: bool) -> None:
    if not value:
        return
    typer.echo(f"WeatherBot version {__version__}")
    raise typer.Exit()


@app.callback()
def main(
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        "-e",
        exists=True,
        dir_okay=False,
        help="Load LUIS and OpenWeatherMap keys from this .env file",
    ),
    version: bool = typer.Option(
        False, "--version", "-v", callback=_print_version, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Run the weather bot as an HTTP endpoint or an interactive chat."""
    if env_file is not None:
        # Values already in the environment win
        load_dotenv(env_file, override=False)


def cli() -> None:
    app()


if __name__ == "__main__":
    cli()
