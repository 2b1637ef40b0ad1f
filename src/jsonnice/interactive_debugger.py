"""Jsonnice Interactive Debugger

Provides a command-line interface for inspecting jsonnet programs.
"""

import cmd
import logging
from typing import List, Optional, TextIO

from rich.console import Console
from rich.json import JSON
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .evaluator import EvaluationError, evaluate_expression, evaluate_snippet


logger = logging.getLogger(__name__)


class ReplDebugger(cmd.Cmd):
    """Interactive debugger for a single jsonnet program."""

    prompt = "(jsonnice) "

    def __init__(self, filename: str, source: str, jpath: List[str],
                 console: Optional[Console] = None,
                 stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        super().__init__(stdin=stdin, stdout=stdout)
        if stdin is not None:
            self.use_rawinput = False
        self.filename = filename
        self.source = source
        self.jpath = jpath
        self.console = console or Console()
        self.last_result: Optional[str] = None
        self.last_error: Optional[str] = None
        self.last_list_line = 1

    def preloop(self):
        """Setup before command loop."""
        self.console.print("[bold blue]Jsonnet Interactive Debugger[/bold blue]")
        self.console.print(f"Debugging [cyan]{escape(self.filename)}[/cyan]. "
                           "Type 'help' for commands.\n")

    def emptyline(self) -> bool:
        return False

    def default(self, line: str) -> None:
        self.console.print(f"[red]Unknown command: {escape(line.split()[0])}[/red]")

    # Evaluation

    def do_run(self, arg: str) -> None:
        """Evaluate the program: run"""
        try:
            output = evaluate_snippet(self.filename, self.source, self.jpath)
        except EvaluationError as e:
            self._record_error(str(e))
            return

        self.last_result = output
        self.last_error = None
        self._show_json(output)

    def do_print(self, arg: str) -> None:
        """Evaluate an expression, with the program bound to `top`: print <expr>"""
        if not arg.strip():
            self.console.print("[red]Error: Please specify an expression[/red]")
            return

        try:
            output = evaluate_expression(self.filename, self.source, arg, self.jpath)
        except EvaluationError as e:
            self._record_error(str(e))
            return

        self._show_json(output)

    do_p = do_print

    # Information display

    def do_list(self, arg: str) -> None:
        """Show source lines: list [start] [count]"""
        start = self.last_list_line
        count = 10

        parts = arg.split()
        try:
            if len(parts) >= 1:
                start = int(parts[0])
            if len(parts) >= 2:
                count = int(parts[1])
        except ValueError:
            self.console.print("[red]Invalid line number or count[/red]")
            return

        lines = self.source.splitlines()
        start = max(1, start)
        if start > len(lines):
            self.console.print("[yellow]No more source lines[/yellow]")
            return

        table = Table(title=escape(self.filename))
        table.add_column("Line", style="cyan", justify="right")
        table.add_column("Source", style="green")

        end = min(start + count, len(lines) + 1)
        for lineno in range(start, end):
            table.add_row(str(lineno), Text(lines[lineno - 1]))

        self.console.print(table)
        self.last_list_line = end

    def do_jpath(self, arg: str) -> None:
        """List library search paths, or append one: jpath [dir]"""
        directory = arg.strip()
        if directory:
            self.jpath.append(directory)
            self.console.print(f"[green]Added search path: {escape(directory)}[/green]")
            return

        if not self.jpath:
            self.console.print("[yellow]No search paths[/yellow]")
            return

        table = Table(title="Search Paths")
        table.add_column("#", style="cyan")
        table.add_column("Directory", style="green")
        for i, path in enumerate(self.jpath):
            table.add_row(str(i), Text(path))

        self.console.print(table)

    def do_status(self, arg: str) -> None:
        """Show session status: status"""
        if self.last_error is not None:
            last = "[red]error[/red]"
        elif self.last_result is not None:
            last = "[green]ok[/green]"
        else:
            last = "not evaluated"

        status_text = f"""[bold]File:[/bold] {escape(self.filename)}
[bold]Lines:[/bold] {len(self.source.splitlines())}
[bold]Search paths:[/bold] {len(self.jpath)}
[bold]Last run:[/bold] {last}"""

        self.console.print(Panel(status_text, title="Status", border_style="green"))

    # Utility commands

    def do_quit(self, arg: str) -> bool:
        """Quit the debugger: quit"""
        self.console.print("[blue]Goodbye![/blue]")
        return True

    def do_exit(self, arg: str) -> bool:
        """Exit the debugger: exit"""
        return self.do_quit(arg)

    do_EOF = do_exit

    def do_help(self, arg: str) -> None:
        """Show help: help [command]"""
        if arg:
            super().do_help(arg)
            return

        self.console.print(Panel(
            "[bold]Jsonnice Debugger Commands[/bold]\n\n"
            "[green]Evaluation:[/green]\n"
            "  run              - Evaluate the program\n"
            "  print <expr>     - Evaluate expression (program is `top`)\n\n"
            "[green]Information:[/green]\n"
            "  list [start] [n] - Show source lines\n"
            "  jpath [dir]      - Show or add library search paths\n"
            "  status           - Show session status\n\n"
            "[green]Other:[/green]\n"
            "  help [cmd]       - Show help\n"
            "  quit/exit        - Exit debugger",
            title="Help",
            border_style="blue"
        ))

    # Helper methods

    def _show_json(self, output: str) -> None:
        try:
            self.console.print(JSON(output))
        except ValueError:
            self.console.print(output.rstrip("\n"), markup=False, highlight=False)

    def _record_error(self, message: str) -> None:
        self.last_error = message
        logger.debug("evaluation failed: %s", message)
        self.console.print(Text(message, style="red"))

    def run(self) -> None:
        """Run the command loop until the user quits."""
        try:
            self.cmdloop()
        except KeyboardInterrupt:
            self.console.print("\nGoodbye!")
