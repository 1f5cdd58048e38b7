"""``weatherbot server``: the Bot Framework messaging endpoint."""

import os
from pathlib import Path

import typer
import uvicorn

from weatherbot.config.loader import ConfigLoader
from weatherbot.core.errors import ConfigError
from weatherbot.server.api import CONFIG_PATH_ENV

app = typer.Typer(help="Serve /api/messages over HTTP")

# Bot Framework Emulator default
DEFAULT_PORT = 3978


@app.callback(invoke_without_command=True)
def start_server(
    config: Path = typer.Option(
        ..., "--config", "-c", exists=True, help="weatherbot.yaml, or the directory holding it"
    ),
    host: str = typer.Option("0.0.0.0", "--host", "-h"),
    port: int = typer.Option(DEFAULT_PORT, "--port", "-p"),
    reload: bool = typer.Option(False, "--reload", help="Restart on source changes"),
) -> None:
    """Check the config, then run uvicorn with it."""
    try:
        bot_config = ConfigLoader.load(config)
    except ConfigError as e:
        typer.echo(f"Invalid config: {e}", err=True)
        raise typer.Exit(1) from e

    # uvicorn imports the app by path, so the config travels through the environment
    os.environ[CONFIG_PATH_ENV] = str(config.absolute())

    typer.echo(f"WeatherBot for {bot_config.weather.city_name}")
    typer.echo(f"  endpoint: http://{host}:{port}/api/messages")
    typer.echo(f"  config:   {config}")

    uvicorn.run("weatherbot.server.api:app", host=host, port=port, reload=reload, log_level="info")
