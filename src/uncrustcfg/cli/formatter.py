# src/uncrustcfg/cli/formatter.py
import difflib
from typing import List

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from uncrustcfg.core.models import Value
from uncrustcfg.view.choices import value_choices
from uncrustcfg.view.comments import render_comments

# Initialize the Rich console for high-quality terminal output
console = Console()


class ConfigFormatter:
    """
    ConfigFormatter: the visual side of the CLI.
    Renders option tables, tag lists and diffs.
    """

    def __init__(self, console: Console = console):
        self.console = console

    def display_diff(self, original_text: str, new_text: str, file_name: str):
        """
        Renders a colorized unified diff between the file on disk and
        the edited document.
        """
        diff_list = list(difflib.unified_diff(
            original_text.splitlines(),
            new_text.splitlines(),
            fromfile=f"Original: {file_name}",
            tofile="Edited Version",
            lineterm=""
        ))

        if not diff_list:
            self.console.print(f"[dim]ℹ No changes for {file_name}.[/dim]")
            return

        syntax = Syntax("\n".join(diff_list), "diff", theme="monokai", line_numbers=True)
        self.console.print(Panel(syntax, title=f"Proposed Changes: {file_name}", border_style="green"))

    def print_values(self, values: List[Value], title: str, show_comments: bool = False,
                     include_sentinel: bool = False):
        table = Table(title=title, show_header=True, header_style="bold magenta")
        table.add_column("Name", style="cyan")
        table.add_column("Value", style="bold")
        table.add_column("Choices", style="dim")
        table.add_column("Edited", justify="center")
        if show_comments:
            table.add_column("Description")

        for v in values:
            row = [
                v.name,
                v.value,
                " / ".join(value_choices(v)) or (v.hint or ""),
                "✏️" if v.edited else "",
            ]
            if show_comments:
                row.append(render_comments(v.comments, include_sentinel=include_sentinel))
            table.add_row(*row)

        self.console.print(table)

    def print_example(self, value: Value):
        if value.example:
            self.console.print(Panel(
                Syntax(value.example, "c", theme="monokai"),
                title=f"Example: {value.name}",
                border_style="dim"
            ))

    def print_tags(self, tags: List[str]):
        table = Table(title="Available Tags", header_style="bold magenta")
        table.add_column("Tag", style="cyan")
        for tag in tags:
            table.add_row(tag)
        self.console.print(table)
