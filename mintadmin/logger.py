"""
Logging system for mint-admin
Provides real-time logging to files with clean console output
"""

import re
from pathlib import Path
from datetime import datetime
from typing import Optional, TextIO

from rich.console import Console
from rich.markup import escape

from mintadmin.constants import DEFAULT_LOG_DIR, LOG_DATE_FORMAT, LOG_TIME_FORMAT

console = Console()

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


class DeployLogger:
    """
    Manages logging for stack operations
    - Writes all output to log files in real-time
    - Shows clean progress UI in console (unless verbose)
    - Captures errors with context
    """

    def __init__(
        self,
        stack_name: str,
        operation: str,
        verbose: bool = False,
        log_dir: Optional[Path] = None,
        output_console: Optional[Console] = None,
    ):
        """
        Initialize logger

        Args:
            stack_name: Name of the stack being operated on
            operation: Operation name (e.g., 'deploy', 'status')
            verbose: If True, show all output in console
            log_dir: Root logs directory (defaults to ~/.mint-admin/logs)
            output_console: Rich console to print to (defaults to the module console)
        """
        self.stack_name = stack_name
        self.operation = operation
        self.verbose = verbose
        self.console = output_console or console
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.current_step = ""
        self.has_errors = False

        root = Path(log_dir or DEFAULT_LOG_DIR).expanduser()

        # Structure: logs/{stack}/{date}/{time}_{operation}.log
        now = datetime.now()
        stack_logs_dir = root / stack_name / now.strftime(LOG_DATE_FORMAT)
        stack_logs_dir.mkdir(parents=True, exist_ok=True)

        self.log_path = stack_logs_dir / f"{now.strftime(LOG_TIME_FORMAT)}_{operation}.log"

        # Line buffered so the file is readable while polling
        self.log_file = open(self.log_path, "w", buffering=1)

        self._write_log_header()

    def _write_log_header(self):
        """Write log file header"""
        header = f"""
{"=" * 80}
mint-admin Log
{"=" * 80}
Stack: {self.stack_name}
Operation: {self.operation}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)
        self.log_file.flush()

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and optionally console

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
        """
        timestamp = datetime.now().strftime("%H:%M:%S")
        log_line = f"[{timestamp}] [{level}] {message}\n"

        if self.log_file:
            self.log_file.write(log_line)
            self.log_file.flush()

        if self.verbose:
            if level == "ERROR":
                self.console.print(f"[red]{escape(message)}[/red]")
            elif level == "WARNING":
                self.console.print(f"[yellow]{escape(message)}[/yellow]")
            elif level == "DEBUG":
                self.console.print(f"[dim]{escape(message)}[/dim]")
            else:
                self.console.print(escape(message))

    def log_output(self, output: str, stream: str = "events"):
        """
        Log raw output lines (stack events, API responses)

        Always written to the log file; echoed to the console only when
        verbose.

        Args:
            output: Single line or multiline output
            stream: Stream label written in front of each line
        """
        if not output:
            return

        clean_output = ANSI_ESCAPE.sub("", output)

        if self.log_file:
            for line in clean_output.splitlines():
                self.log_file.write(f"  [{stream}] {line}\n")
            self.log_file.flush()

        if self.verbose:
            self.console.print(escape(output.rstrip("\n")))

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context

        Args:
            error: Error message
            context: Additional context (e.g., operation that failed)
        """
        self.has_errors = True

        error_block = f"""
{"!" * 80}
ERROR OCCURRED
{"!" * 80}
{error}
"""
        if context:
            error_block += f"\nContext: {context}\n"

        error_block += f"{'!' * 80}\n\n"

        if self.log_file:
            self.log_file.write(error_block)
            self.log_file.flush()

        if not self.verbose:
            self.console.print()

        self.console.print(f"[bold red]✗ {escape(error)}[/bold red]")
        if context:
            self.console.print(f"  [color(208)]{escape(context)}[/color(208)]")

    def step(self, step_name: str):
        """
        Start a new step

        Args:
            step_name: Name of the step
        """
        if self.current_step and not self.verbose:
            self.console.print()

        self.current_step = step_name
        self.log(f"Step: {step_name}", "INFO")

        if not self.verbose:
            self.console.print(
                f"[color(214)]▶[/color(214)] [white]{escape(step_name)}[/white]"
            )

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "INFO")

        if not self.verbose:
            self.console.print(f"  [dim]✓ {escape(message)}[/dim]")

    def warning(self, message: str):
        """Log a warning message"""
        self.log(message, "WARNING")

        if not self.verbose:
            self.console.print(f"  [yellow]⚠[/yellow] [dim]{escape(message)}[/dim]")

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        """Context manager exit"""
        if exc_type is not None and exc_type not in (SystemExit, KeyboardInterrupt):
            self.log_error(
                str(exc_val) if exc_val else "Operation failed",
                context=f"{exc_type.__name__}",
            )
        self.close()
        return False  # Don't suppress exceptions


class EventSinkWriter:
    """
    Progress sink that routes stack event lines into a DeployLogger.

    Every line lands in the log file; the console shows it dimmed unless
    the logger is verbose (in which case log_output already echoes it).
    """

    def __init__(self, logger: DeployLogger):
        self.logger = logger

    def write(self, text: str) -> int:
        for line in text.splitlines():
            if not line.strip():
                continue
            self.logger.log_output(line, "events")
            if not self.logger.verbose:
                if line.startswith("warning:"):
                    self.logger.console.print(f"  [yellow]⚠[/yellow] [dim]{escape(line)}[/dim]")
                else:
                    self.logger.console.print(f"  [dim]{escape(line)}[/dim]")
        return len(text)

    def flush(self) -> None:
        pass
