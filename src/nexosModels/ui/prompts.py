"""Terminal implementation of the PromptProvider protocol using Rich."""

from typing import Callable, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt
from rich.table import Table

from nexosModels.interfaces.base import Choice, PromptProvider


class RichPrompts(PromptProvider):
    """Numbered-table prompts rendered with Rich.

    ``search`` asks for a filter term, lists the matching choices and lets
    the user pick one by number. Entering anything that is not a valid number
    is used as the next filter term.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(stderr=True)

    def _print_choices(self, choices: List[Choice], title: str, show_checked: bool = False) -> None:
        table = Table(title=title, box=box.SIMPLE)
        table.add_column("#", style="yellow", no_wrap=True)
        if show_checked:
            table.add_column(" ", style="green", no_wrap=True)
        table.add_column("Name", style="cyan")
        for i, choice in enumerate(choices, 1):
            row = [str(i)]
            if show_checked:
                row.append("x" if choice.get("checked") else "")
            row.append(escape(choice["name"]))
            table.add_row(*row)
        self.console.print(table)

    def search(
        self,
        message: str,
        source: Callable[[str], List[Choice]],
        default: Optional[str] = None,
    ) -> Optional[str]:
        self.console.print(message)
        term = Prompt.ask("Filter (empty for all)", default="", console=self.console)
        while True:
            choices = source(term)
            if not choices:
                self.console.print(f"[yellow]No matches for '{escape(term)}'.[/yellow]")
                term = Prompt.ask("Filter (empty for all)", default="", console=self.console)
                continue

            self._print_choices(choices, title="Matches")
            default_number = ""
            for i, choice in enumerate(choices, 1):
                if choice["value"] == default:
                    default_number = str(i)
                    break

            answer = Prompt.ask(
                "Enter a number, or text to filter again",
                default=default_number,
                console=self.console,
            ).strip()
            if answer.isdigit() and 1 <= int(answer) <= len(choices):
                return choices[int(answer) - 1]["value"]
            term = answer

    def checkbox(self, message: str, choices: List[Choice]) -> List[str]:
        self.console.print(message)
        self._print_choices(choices, title="Choices", show_checked=True)
        checked = [str(i) for i, c in enumerate(choices, 1) if c.get("checked")]
        self.console.print("Enter numbers (comma-separated), 'all', or 'none'")
        selection = Prompt.ask("Your selection", default=",".join(checked) or "none", console=self.console)

        selection = selection.strip().lower()
        if selection == "all":
            return [c["value"] for c in choices]
        if selection in ("", "none", "0"):
            return []

        selected: List[str] = []
        for part in selection.split(","):
            part = part.strip()
            if part.isdigit() and 1 <= int(part) <= len(choices):
                value = choices[int(part) - 1]["value"]
                if value not in selected:
                    selected.append(value)
            elif part:
                self.console.print(f"[yellow]Ignoring invalid selection '{escape(part)}'.[/yellow]")
        return selected

    def text(self, message: str, default: str = "") -> str:
        return Prompt.ask(message, default=default, console=self.console)

    def confirm(self, message: str, default: bool = False) -> bool:
        return Confirm.ask(message, default=default, console=self.console)
