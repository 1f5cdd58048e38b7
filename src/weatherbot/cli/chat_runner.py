"""Interactive chat runner for WeatherBot CLI."""

import uuid
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt

from weatherbot.config.loader import ConfigLoader
from weatherbot.core.activity import (
    Activity,
    ActivityTypes,
    ChannelAccount,
    ConversationAccount,
)
from weatherbot.core.activity_sink import ActivitySink
from weatherbot.core.errors import ConfigError
from weatherbot.observability.logging import setup_logging
from weatherbot.runtime.loop import RuntimeLoop

CONSOLE_CHANNEL = "console"
BOT_ACCOUNT = ChannelAccount(id="weatherbot", name="WeatherBot", role="bot")
EXIT_COMMANDS = frozenset({"quit", "exit", "q", "bye"})


class ConsoleActivitySink(ActivitySink):
    """Sink that prints replies to a rich console."""

    def __init__(self, console: Console):
        self.console = console

    async def send(self, activity: Activity) -> None:
        if activity.type != ActivityTypes.MESSAGE:
            return
        if activity.text:
            self.console.print(f"[bold blue]Bot > [/]{activity.text}")
        for attachment in activity.attachments or []:
            self.console.print(
                f"[bold blue]Bot > [/][dim]\\[{attachment.name or attachment.content_type}] "
                f"{attachment.content_url}[/]"
            )


@dataclass
class ChatConfig:
    """Configuration for chat runner."""

    config_path: Path
    user_id: str | None = None
    debug: bool = False


class ChatRunner:
    """Interactive chat session runner.

    Drives the same runtime as the server, on a local ``console`` channel.
    The session opens with a conversation update so the bot loads weather
    data and sends its welcome.
    """

    def __init__(self, config: ChatConfig, console: Console | None = None):
        self.config = config
        self.console = console or Console()
        self.runtime: RuntimeLoop | None = None
        self.user = ChannelAccount(id=config.user_id or f"cli_{uuid.uuid4().hex[:6]}", name="You")
        self.conversation = ConversationAccount(id=f"console_{uuid.uuid4().hex[:8]}")
        self.sink = ConsoleActivitySink(self.console)
        self._running = False

    async def setup(self) -> None:
        """Load config and start the runtime.

        Raises:
            ConfigError: If config is invalid
        """
        from dotenv import load_dotenv

        load_dotenv()

        try:
            bot_config = ConfigLoader.load(self.config.config_path)
        except ConfigError as e:
            self.console.print(f"[red]Invalid config: {e}[/]")
            raise

        setup_logging("DEBUG" if self.config.debug else "WARNING", bot_config.logging.file)

        self.runtime = RuntimeLoop(bot_config)
        await self.runtime.__aenter__()

    def make_activity(self, activity_type: str, text: str | None = None) -> Activity:
        activity = Activity(
            type=activity_type,
            id=uuid.uuid4().hex,
            channel_id=CONSOLE_CHANNEL,
            from_property=self.user,
            recipient=BOT_ACCOUNT,
            conversation=self.conversation,
            text=text,
        )
        if activity_type == ActivityTypes.CONVERSATION_UPDATE:
            activity.members_added = [self.user]
        return activity

    async def send(self, activity: Activity) -> None:
        if self.runtime is not None:
            await self.runtime.process_activity(activity, sink=self.sink)

    async def start(self) -> None:
        """Greet, then relay lines until the user leaves."""
        if not self.runtime:
            await self.setup()

        self.console.rule(f"[bold blue]WeatherBot[/] [dim]{self.conversation.id}[/]")
        self.console.print("[dim]Say 'quit' to leave.[/]\n")

        # A member joining is what makes the bot fetch weather and say hello
        with self.console.status("[bold blue]Joining conversation...[/]"):
            await self.send(self.make_activity(ActivityTypes.CONVERSATION_UPDATE.value))

        self._running = True
        try:
            while self._running:
                line = Prompt.ask(f"[bold green]{self.user.name}[/]", console=self.console)
                if self._is_exit_command(line):
                    break
                if not line.strip():
                    continue
                with self.console.status("[bold blue]Asking the bot...[/]"):
                    await self.send(self.make_activity(ActivityTypes.MESSAGE.value, line))
        except KeyboardInterrupt:
            # Ctrl-C leaves like "quit"
            pass
        self.console.print("\n[yellow]Bye, stay dry![/]")

    def _is_exit_command(self, user_input: str) -> bool:
        return user_input.strip().lower().lstrip("/") in EXIT_COMMANDS

    async def cleanup(self) -> None:
        """Close the runtime's storage and HTTP clients."""
        self._running = False
        if self.runtime is not None:
            await self.runtime.__aexit__(None, None, None)
            self.runtime = None

    async def __aenter__(self) -> "ChatRunner":
        await self.setup()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.cleanup()


async def run_chat_session(config: ChatConfig) -> None:
    """Run an interactive chat session."""
    async with ChatRunner(config) as runner:
        await runner.start()
