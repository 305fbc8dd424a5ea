"""
Interactive terminal chat for MindMate.

Features:
- Welcome panel while the conversation is empty
- Chat bubbles for user and agent entries with HH:MM timestamps
- Typing indicator while a reply is pending; input is not read meanwhile
- prompt_toolkit input with in-memory history

Commands:
  /help        Show help
  /transcript  Show the conversation so far
  /clear       Clear the screen
  /exit        Exit

Run:
  python -m mindmate
  or
  mindmate
"""

from __future__ import annotations

import asyncio
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout

from rich.console import Console
from rich.panel import Panel
from rich.box import ROUNDED

from mindmate.config import Config
from mindmate.api.di.composition import build_controller
from mindmate.application.conversation_controller import ConversationController
from .console import make_console
from .handlers import handle_clear, render_entry, render_transcript, show_help, show_welcome

logger = logging.getLogger(__name__)

COMMANDS = ["/help", "/transcript", "/clear", "/exit"]


class TranscriptPrinter:
    """Controller listener that prints entries as they are appended."""

    def __init__(self, console: Console) -> None:
        self.console = console
        self.rendered = 0

    def __call__(self, controller: ConversationController) -> None:
        entries = controller.transcript.entries
        for entry in entries[self.rendered:]:
            render_entry(self.console, entry)
        self.rendered = len(entries)


async def chat_loop(console: Console, controller: ConversationController, session: PromptSession) -> None:
    """Read user input until exit, submitting each message to the controller."""
    controller.subscribe(TranscriptPrinter(console))
    show_welcome(console)
    show_help(console)

    completer = WordCompleter(COMMANDS, ignore_case=True)

    while True:
        try:
            with patch_stdout():
                user_input = await session.prompt_async(
                    "> ",
                    completer=completer,
                    placeholder="Share your thoughts...",
                )
        except (KeyboardInterrupt, EOFError):
            console.print("\nTake care. Exiting...", style="muted")
            break

        cmd = user_input.strip()
        if not cmd:
            continue

        if cmd == "/help":
            show_help(console)
            continue
        if cmd == "/transcript":
            render_transcript(console, controller.transcript)
            continue
        if cmd == "/clear":
            handle_clear(console)
            continue
        if cmd == "/exit":
            console.print("Take care. Exiting...", style="muted")
            break

        controller.input_text = user_input
        try:
            with console.status("[agent]MindMate is typing...[/agent]", spinner="dots"):
                await controller.submit()
        except Exception as e:
            logger.error(f"Chat turn failed: {e!r}")
            console.print(Panel(f"Error: {e}", title="Error", box=ROUNDED))


def run() -> None:
    """Console entry point."""
    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    console = make_console(Config.THEME)
    try:
        Config.validate_api_keys()
    except ValueError as e:
        console.print(Panel(str(e), title="Configuration", box=ROUNDED))
        return

    controller = build_controller()
    session = PromptSession(history=InMemoryHistory())
    try:
        console.clear()
    except Exception:
        pass
    asyncio.run(chat_loop(console, controller, session))


if __name__ == "__main__":
    run()
