"""Simple scripted conversation against the configured agent endpoint."""

import asyncio
import os
import sys
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from mindmate.api.di.composition import build_controller


def print_turn(user_text: str, reply: str):
    """Print one user/agent exchange."""
    print(f"\n{'='*80}")
    print(f"YOU:      {user_text}")
    print(f"MINDMATE: {reply}")
    print(f"{'='*80}\n")


async def main():
    """Run a short demonstration."""
    controller = build_controller()
    for text in ("I feel anxious today", "Work has been a lot lately"):
        entry = await controller.submit(text)
        print_turn(text, entry.text if entry else "(no reply)")

    print("Make sure your .env file has MINDMATE_API_KEY if the endpoint requires it.")


if __name__ == "__main__":
    asyncio.run(main())
