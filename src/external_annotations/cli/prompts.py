from pathlib import Path

from rich.console import Console
from rich.prompt import Confirm, Prompt

from external_annotations.core.ports.project import OrderEntry


class ConsolePrompter:
    """Ask on the terminal; answer ``None`` when the console is not interactive."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def choose_directory(self, entry: OrderEntry) -> Path | None:
        if not self.console.is_interactive:
            return None
        self.console.print(f"No annotations document found. Choose an annotation root for {entry.presentable_name}.")
        answer = Prompt.ask("Annotation root directory (empty to cancel)", console=self.console, default="")
        if not answer.strip():
            return None
        root = Path(answer).expanduser().resolve()
        if not root.is_dir():
            self.console.print(f"[red]{root} is not a directory.[/red]")
            return None
        return root

    def confirm_usage(self) -> bool | None:
        if not self.console.is_interactive:
            return None
        return Confirm.ask(
            "This project has no annotation roots. Use external annotations anyway?",
            console=self.console,
            default=True,
        )
