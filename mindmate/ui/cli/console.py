"""
Console utilities for the chat CLI.
"""

from typing import Optional
from rich.console import Console
from rich.theme import Theme
import os
import sys


def _build_theme(theme_name: str) -> Theme:
    if theme_name == "light":
        return Theme(
            {
                "primary": "black",
                "accent": "medium_purple4",
                "user": "grey23",
                "agent": "purple4",
                "warning": "dark_orange",
                "error": "red",
                "muted": "grey42",
                "box_title": "bold medium_purple4",
            }
        )
    else:
        # dark
        return Theme(
            {
                "primary": "white",
                "accent": "plum2",
                "user": "grey85",
                "agent": "thistle1",
                "warning": "yellow",
                "error": "bold red",
                "muted": "grey70",
                "box_title": "bold plum2",
            }
        )


def _should_enable_color(enable: Optional[bool]):
    """
    Compute effective color enablement, force_terminal, and color_system.

    Rules:
    - Respect NO_COLOR unless MINDMATE_FORCE_COLOR is set
    - When enable is None: auto-detect via isatty
    - If enable is False: disable and force_terminal=False
    """
    force_color = (os.getenv("MINDMATE_FORCE_COLOR") or "").lower() in ("1", "true", "yes", "on")
    no_color_env = os.getenv("NO_COLOR") is not None
    tty = bool(getattr(sys.stdout, "isatty", lambda: False)())

    desired_raw = tty if enable is None else bool(enable)
    desired = desired_raw and (not no_color_env or force_color)

    if enable is False:
        force_terminal = False
    elif force_color:
        force_terminal = True
    else:
        force_terminal = bool(desired and tty and not no_color_env)

    color_system = "auto" if desired else None
    return desired, force_terminal, color_system


def make_console(theme_name: str, use_color: Optional[bool] = None) -> Console:
    """Create a Rich console with the selected theme and color policy."""
    theme = _build_theme("light" if theme_name in ("light", "white") else "dark")
    desired, force_terminal, color_system = _should_enable_color(use_color)

    return Console(
        theme=theme,
        no_color=not desired,
        color_system=color_system,
        force_terminal=force_terminal,
        markup=True,
        emoji=True,
        highlight=False,
    )


__all__ = ["make_console"]
