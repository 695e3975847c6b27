#!/usr/bin/env python3
"""
Picture Storyteller - Terminal chat

Talk to the storyteller about a picture without starting the web server.
"""

from storyteller.config import load_settings
from storyteller.narrator.storyteller import Storyteller
from storyteller.state.conversation import Turn
from storyteller.ui.terminal_ui import TerminalUI

QUIT_WORDS = {"quit", "exit"}


class ChatSession:
    """Keeps the history for one terminal conversation and drives the UI."""

    def __init__(self, storyteller: Storyteller, scene_description: str, ui: TerminalUI | None = None):
        self.storyteller = storyteller
        self.scene_description = scene_description
        self.ui = ui or TerminalUI()
        self.history: list[Turn] = []

    def storyteller_turn(self) -> bool:
        """Ask for and show the next reply. Returns False if generation failed."""
        try:
            reply = self.storyteller.respond(self.history, self.scene_description)
        except Exception as e:
            self.ui.show_error(f"Failed to generate response from AI: {e!r}")
            return False
        self.history.append(Turn(role="assistant", content=reply.content))
        self.ui.show_reply(reply)
        return True

    def child_turn(self, text: str) -> None:
        self.history.append(Turn(role="user", content=text.strip()))

    def run(self) -> None:
        """Main chat loop."""
        self.ui.show_title(self.scene_description, self.storyteller.mode)

        if not self.storyteller_turn():
            return

        while True:
            try:
                text = self.ui.get_child_input()
            except EOFError:
                break
            if text.strip().lower() in QUIT_WORDS:
                break
            self.child_turn(text)
            if not self.storyteller_turn():
                break

        self.ui.show_message("\nBye bye! Thanks for the story!", "cyan")


def main():
    """Entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Picture Storyteller - terminal chat")
    parser.add_argument(
        "--scene",
        default="kids playing",
        help="Description of the illustration to talk about"
    )

    args = parser.parse_args()

    try:
        storyteller = Storyteller.from_settings(load_settings())
        ChatSession(storyteller, args.scene).run()
    except KeyboardInterrupt:
        print("\n\nChat interrupted. Goodbye!")


if __name__ == "__main__":
    main()
