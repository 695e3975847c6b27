"""Terminal-based UI for chatting with the storyteller using Rich."""

from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.box import ROUNDED, DOUBLE
from rich.markup import escape

from ..state.conversation import Reply

STICKER_ICONS = {"star": "⭐", "unicorn": "🦄", "trophy": "🏆"}


class TerminalUI:
    """Rich console front end for a storyteller conversation."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self.background: str | None = None

    def show_title(self, scene_description: str, mode: str) -> None:
        """Display the title and the picture being talked about."""
        self.console.print(Panel(
            Text("Picture Storyteller", justify="center", style="bold yellow"),
            box=DOUBLE,
            border_style="yellow"
        ))
        self.console.print(Panel(
            scene_description or "[dim]No picture description[/dim]",
            title="[bold]The Picture[/bold]",
            box=ROUNDED,
            border_style="blue"
        ))
        self.console.print(f"[dim]Reply mode: {mode}. Type 'quit' to stop.[/dim]")
        self.console.print()

    def show_reply(self, reply: Reply) -> None:
        """Display the storyteller's line and any UI action it asked for."""
        border = self.background or "white"
        self.console.print(Panel(
            reply.content,
            title="[bold white]📖 Storyteller[/bold white]",
            box=ROUNDED,
            border_style=border,
            padding=(0, 2)
        ))

        tool_call = reply.tool_call
        if tool_call is None:
            return
        if tool_call.name == "changeBackgroundColor":
            self.background = tool_call.arguments["color"]
            self.console.print(f"[dim]🎨 Background changed to {self.background}[/dim]")
        elif tool_call.name == "showRewardSticker":
            sticker = tool_call.arguments["sticker"]
            icon = STICKER_ICONS.get(sticker, "✨")
            self.console.print(f"[bold green]{icon} You earned a {sticker} sticker! {icon}[/bold green]")

    def show_error(self, message: str) -> None:
        self.console.print(f"[bold red]{escape(message)}[/bold red]")

    def get_child_input(self) -> str:
        """Prompt for the child's next line."""
        return self.console.input("[bold cyan]You > [/bold cyan]")

    def show_message(self, message: str, style: str = "white") -> None:
        self.console.print(f"[{style}]{message}[/{style}]")
