"""
Rendering and command handlers for the chat CLI.
"""
from __future__ import annotations

from datetime import datetime
from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.box import ROUNDED

from mindmate.domain.entities.transcript_entry import TranscriptEntry

BUBBLE_WIDTH = 60


def format_timestamp(ts: datetime) -> str:
    return ts.strftime("%H:%M")


def render_entry(console: Console, entry: TranscriptEntry) -> None:
    """Print one transcript entry as a chat bubble."""
    if entry.is_user:
        bubble = Panel(
            Text(entry.text, style="user"),
            title="You",
            title_align="right",
            subtitle=format_timestamp(entry.timestamp),
            subtitle_align="right",
            box=ROUNDED,
            border_style="muted",
            width=BUBBLE_WIDTH,
        )
        console.print(Align.right(bubble))
    else:
        bubble = Panel(
            Text(entry.text, style="agent"),
            title="MindMate",
            title_align="left",
            subtitle=format_timestamp(entry.timestamp),
            subtitle_align="left",
            box=ROUNDED,
            border_style="accent",
            width=BUBBLE_WIDTH,
        )
        console.print(Align.left(bubble))


def render_transcript(console: Console, entries: Iterable[TranscriptEntry]) -> None:
    shown = False
    for entry in entries:
        render_entry(console, entry)
        shown = True
    if not shown:
        show_welcome(console)


def show_welcome(console: Console) -> None:
    """Empty-transcript welcome panel."""
    console.print(
        Panel(
            "This is a calm, judgment-free space for you to share your thoughts and feelings.\n"
            "I am here to listen and support you.",
            title="[box_title]Welcome to MindMate[/box_title]",
            box=ROUNDED,
        )
    )


def show_help(console: Console) -> None:
    """Print help panel."""
    console.print(
        Panel(
            "Commands\n"
            "/help        Show help\n"
            "/transcript  Show the conversation so far\n"
            "/clear       Clear the screen\n"
            "/exit        Exit\n\n"
            "Anything else is sent to MindMate.",
            title="Help",
            box=ROUNDED,
        )
    )


def handle_clear(console: Console) -> None:
    """Clear the console screen."""
    console.clear()


__all__ = [
    "format_timestamp",
    "render_entry",
    "render_transcript",
    "show_welcome",
    "show_help",
    "handle_clear",
]
