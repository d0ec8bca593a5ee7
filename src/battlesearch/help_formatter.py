from __future__ import annotations

import argparse
import shutil

from rich.console import Console
from rich.table import Table
from rich.text import Text

EXAMPLES: list[tuple[str, str]] = [
    ("Every battle a user played in two days of logs", "battlesearch Annika logs/2021-03-14 logs/2021-03-15"),
    ("Only battles the user won", "battlesearch --wins-only Annika logs/*"),
    ("Forfeits only, scanned by eight threads", "battlesearch -f -j 8 Annika logs/*"),
]

ENVIRONMENT_VARIABLES: list[tuple[str, str]] = [
    ("BATTLESEARCH_CONFIG", "YAML file with a 'search:' section of defaults"),
    ("BATTLESEARCH_WORKERS", "Default number of worker threads"),
    ("BATTLESEARCH_WINS_ONLY", "Default for --wins-only (true/false)"),
    ("BATTLESEARCH_FORFEITS_ONLY", "Default for --forfeits-only (true/false)"),
    ("BATTLESEARCH_LOG_LEVEL", "Diagnostic log level (DEBUG, INFO, WARNING, ...)"),
]


class RichHelpFormatter(argparse.HelpFormatter):
    """
    Argparse help formatter that renders section titles, examples and
    environment variables with Rich when writing to a terminal.

    Output that is not a TTY gets argparse's plain formatting.
    """

    def __init__(
        self,
        prog: str,
        indent_increment: int = 2,
        max_help_position: int = 28,
        width: int | None = None,
        console: Console | None = None,
    ) -> None:
        if width is None:
            width = min(shutil.get_terminal_size().columns, 120)
        super().__init__(
            prog=prog,
            indent_increment=indent_increment,
            max_help_position=max_help_position,
            width=width,
        )
        self.console = console or Console()

    def format_help(self) -> str:
        standard_help = super().format_help()
        if not self.console.is_terminal:
            return standard_help

        parts: list[str] = []
        current_section = None
        section_lines: list[str] = []
        for line in standard_help.split("\n"):
            # Section headers are unindented and end with ':'
            if line and not line[0].isspace() and line.endswith(":"):
                if current_section:
                    self._render_section(current_section, "\n".join(section_lines), parts)
                else:
                    # usage and description precede the first titled section
                    parts.append("\n".join(section_lines))
                current_section = line[:-1]
                section_lines = []
            else:
                section_lines.append(line)
        if current_section:
            self._render_section(current_section, "\n".join(section_lines), parts)
        else:
            parts.append("\n".join(section_lines))

        parts.append(self._render_examples())
        parts.append(self._render_env_vars())
        return "\n".join(parts)

    def _render_section(self, title: str, content: str, output: list[str]) -> None:
        with self.console.capture() as capture:
            self.console.print(Text(title, style="bold bright_cyan"))
        output.append(capture.get())
        if content.strip():
            output.append(content)
        output.append("")

    def _render_examples(self) -> str:
        with self.console.capture() as capture:
            self.console.print(Text("Examples:", style="bold bright_cyan"))
            for index, (description, command) in enumerate(EXAMPLES, 1):
                line = Text()
                line.append(f"  {index}. ", style="dim cyan")
                line.append(description, style="bright_white")
                self.console.print(line)
                self.console.print(f"     $ {command}", style="bright_yellow", markup=False, highlight=False)
        return capture.get()

    def _render_env_vars(self) -> str:
        with self.console.capture() as capture:
            self.console.print(Text("Environment Variables:", style="bold bright_cyan"))
            table = Table(show_header=False, box=None, padding=(0, 2))
            table.add_column("Variable", style="bright_green bold", no_wrap=True)
            table.add_column("Description", style="bright_white")
            for name, description in ENVIRONMENT_VARIABLES:
                table.add_row(name, description)
            self.console.print(table)
        return capture.get()
