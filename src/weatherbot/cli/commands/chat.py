"""``weatherbot chat``: the bot on a local console channel."""

import asyncio
from pathlib import Path

import typer

app = typer.Typer(help="Talk to the bot from this terminal")


@app.callback(invoke_without_command=True)
def run_chat(
    ctx: typer.Context,
    config: Path = typer.Option(
        "weatherbot.yaml", "--config", "-c", help="weatherbot.yaml, or the directory holding it"
    ),
    user_id: str | None = typer.Option(
        None, "--user", "-u", help="User id to keep profile state across sessions"
    ),
    debug: bool = typer.Option(False, "--debug", help="Log LUIS and weather calls to stderr"),
) -> None:
    """Open a console conversation; it starts with the bot's welcome."""
    if ctx.invoked_subcommand:
        return

    from weatherbot.cli.chat_runner import ChatConfig, run_chat_session

    session = ChatConfig(config_path=config, user_id=user_id, debug=debug)
    try:
        asyncio.run(run_chat_session(session))
    except KeyboardInterrupt:
        typer.echo("")
    except Exception as e:
        typer.echo(f"Chat session failed: {e}", err=True)
        raise typer.Exit(1) from e
