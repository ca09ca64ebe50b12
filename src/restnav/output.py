"""Terminal output for the restnav CLI.

Resource data goes to stdout and nothing else does: status lines, warnings,
errors and the ``--verbose`` request trace all go to stderr, so
``restnav list ... | cut -f1`` only ever sees records.

Three renderings exist for data (:class:`OutputFormat`). ``AUTO`` picks a
Rich table or highlighted JSON on an interactive terminal and tab-separated
text otherwise; ``NO_COLOR``, ``TERM=dumb`` and ``--no-color`` force the
plain path.

The engine itself reports through :func:`debug` only. That call is a no-op
until the CLI installs a verbose manager, so importing restnav as a library
never writes to the terminal.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


# level -> (plain prefix, rich template, hidden by --quiet)
_LEVELS: dict[str, tuple[str, str, bool]] = {
    "info": ("", "{}", True),
    "success": ("", "[green]{}[/green]", True),
    "warning": ("Warning: ", "[yellow]Warning:[/yellow] {}", False),
    "error": ("Error: ", "[bold red]Error:[/bold red] {}", False),
    "debug": ("[debug] ", "[dim]\\[debug] {}[/dim]", False),
}


class OutputManager:
    """Renders records and diagnostics for one CLI invocation.

    Args:
        format: Data rendering. ``AUTO`` becomes ``RICH`` on a colour TTY
            and ``PLAIN`` otherwise.
        no_color: Never emit colour or markup.
        quiet: Hide info and success lines. Warnings, errors and data stay.
        verbose: Show :meth:`debug` lines (the request trace).
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        if format == OutputFormat.AUTO:
            format = OutputFormat.RICH if _is_tty() and not self._no_color else OutputFormat.PLAIN
        self._format = format
        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=format == OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # ------------------------------------------------------------------ #
    # stdout
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    def format_response(self, data: Any) -> None:
        """Render a single payload, typically the fields of one resource."""
        if self._format == OutputFormat.JSON:
            self.print_data(_dumps(data))
        elif self._format == OutputFormat.RICH:
            self._stdout.print(Syntax(_dumps(data), "json", theme="monokai", word_wrap=True))
        elif isinstance(data, Mapping):
            for key, value in data.items():
                self.print_data(f"{key}\t{_cell(value)}")
        elif isinstance(data, (list, tuple)):
            for item in data:
                self.print_data(_cell(item))
        else:
            self.print_data(str(data))

    def print_records(
        self,
        records: Sequence[Mapping[str, Any]],
        columns: Optional[Sequence[str]] = None,
        title: Optional[str] = None,
    ) -> None:
        """Render a listing of resources.

        JSON mode prints the full records as one array and ignores
        *columns*. Plain mode prints a header line and one tab-separated
        line per record. Rich mode prints a table titled *title*.

        Args:
            records: Field mappings, one per resource.
            columns: Fields to show. Defaults to the first record's keys.
            title: Table title, Rich mode only.
        """
        if self._format == OutputFormat.JSON:
            self.print_data(_dumps(list(records)))
            return

        cols = list(columns or (records[0].keys() if records else ()))
        rows = [[_cell(record.get(col)) for col in cols] for record in records]

        if self._format == OutputFormat.RICH:
            table = Table(*cols, title=title, header_style="bold cyan")
            for row in rows:
                table.add_row(*(escape(cell) for cell in row))
            self._stdout.print(table)
            return

        for line in ([cols] if cols else []) + rows:
            self.print_data("\t".join(line))

    # ------------------------------------------------------------------ #
    # stderr
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        self._emit("info", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def debug(self, message: str) -> None:
        if self._verbose:
            self._emit("debug", message)

    def _emit(self, level: str, message: str) -> None:
        prefix, template, quietable = _LEVELS[level]
        if quietable and self._quiet:
            return
        if self._no_color:
            print(prefix + message, file=sys.stderr, flush=True)
        else:
            self._stderr.print(template.format(escape(message)), highlight=False)


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _cell(value: Any) -> str:
    """One table or TSV cell: ``None`` is blank, containers stay JSON."""
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """``NO_COLOR`` set to anything, or ``TERM=dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Process-wide manager, installed by the CLI callback
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager; the next call builds a default one."""
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_records(
    records: Sequence[Mapping[str, Any]],
    columns: Optional[Sequence[str]] = None,
    title: Optional[str] = None,
) -> None:
    get_output().print_records(records, columns, title)


def print_data(text: str) -> None:
    get_output().print_data(text)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
