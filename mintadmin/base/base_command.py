"""
Base Command Class

Abstract base for all mint-admin CLI commands.
Provides common functionality and structure.
"""

from abc import ABC, abstractmethod
from typing import Optional, Any, Dict
import json

from rich.console import Console
from rich.markup import escape

from mintadmin.constants import EXIT_CANCELLED
from mintadmin.exceptions import DeploymentCancelledError, MintAdminError
from mintadmin.logger import DeployLogger
from mintadmin.ui_components import show_header


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Logger initialization
    - Header display
    - Error handling and exit codes
    - JSON output support
    """

    def __init__(
        self,
        verbose: bool = False,
        json_output: bool = False,
        console: Optional[Console] = None,
    ):
        self.verbose = verbose
        self.json_output = json_output
        self.console = console or Console()
        self.logger: Optional[DeployLogger] = None

    def init_logger(
        self, stack_name: str, command_name: str, log_dir=None
    ) -> Optional[DeployLogger]:
        """
        Initialize command logger (skip in JSON mode).

        Args:
            stack_name: Stack the command operates on
            command_name: Command name
            log_dir: Root logs directory

        Returns:
            DeployLogger instance or None if JSON mode
        """
        if self.json_output:
            return None
        self.logger = DeployLogger(
            stack_name,
            command_name,
            verbose=self.verbose,
            log_dir=log_dir,
            output_console=self.console,
        )
        return self.logger

    def output_json(self, data: Dict[str, Any], exit_code: int = 0) -> None:
        """
        Output data as JSON and exit on error.

        Args:
            data: Data to output as JSON
            exit_code: Exit code (0 for success, non-zero for error)
        """
        print(json.dumps(data, indent=2))
        if exit_code != 0:
            raise SystemExit(exit_code)

    def output_json_error(
        self, error: str, details: Optional[Dict[str, Any]] = None, exit_code: int = 1
    ) -> None:
        """
        Output error as JSON and exit.

        Args:
            error: Error message
            details: Optional error details
            exit_code: Exit code
        """
        error_data: Dict[str, Any] = {"error": error}
        if details:
            error_data["details"] = details
        self.output_json(error_data, exit_code=exit_code)

    def show_header(
        self,
        title: str,
        subtitle: Optional[str] = None,
        stack: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in JSON or verbose mode)."""
        if not self.verbose and not self.json_output:
            show_header(
                title=title,
                subtitle=subtitle,
                stack=stack,
                details=details,
                console=self.console,
            )

    def print_success(self, message: str) -> None:
        """Print success message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[green]✓ {escape(message)}[/green]")

    def print_error(self, message: str) -> None:
        """Print error message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[red]✗ {escape(message)}[/red]")

    def print_dim(self, message: str) -> None:
        """Print dim message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def handle_error(self, message: str, context: Optional[str] = None) -> None:
        """
        Handle error with consistent formatting.

        Args:
            message: Error message
            context: Optional context message
        """
        if self.json_output:
            return
        if self.logger:
            self.logger.log_error(message, context=context)
        else:
            self.print_error(message)
            if context:
                self.print_dim(f"Context: {context}")

    def _show_log_path(self) -> None:
        if self.logger and self.logger.log_path:
            self.console.print(f"\n[dim]Logs saved to:[/dim] {self.logger.log_path}\n")

    def _close_logger(self) -> None:
        if self.logger:
            self.logger.close()

    @abstractmethod
    def execute(self, **kwargs) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self, **kwargs) -> None:
        """
        Run command with error handling.

        Args:
            **kwargs: Command arguments
        """
        try:
            self.execute(**kwargs)
        except SystemExit:
            raise
        except (KeyboardInterrupt, DeploymentCancelledError) as e:
            reason = str(e) if isinstance(e, DeploymentCancelledError) else "Operation cancelled by user"
            if self.json_output:
                self.output_json_error(reason, exit_code=EXIT_CANCELLED)
            if self.logger:
                self.logger.warning(reason)
            self.console.print(f"\n[yellow]⚠️  {escape(reason)}[/yellow]")
            self._show_log_path()
            raise SystemExit(EXIT_CANCELLED)
        except MintAdminError as e:
            if self.json_output:
                details = {"context": e.context} if e.context else None
                self.output_json_error(e.message, details=details)
            self.handle_error(e.message, context=e.context)
            self._show_log_path()
            raise SystemExit(1)
        except Exception as e:
            error_type = type(e).__name__
            if self.json_output:
                self.output_json_error(f"{error_type}: {e}")
            self.console.print(f"\n[bold red]✗ {error_type}:[/bold red] {escape(str(e))}\n")
            if self.logger:
                self.logger.log_error(f"{error_type}: {e}")
            self._show_log_path()
            raise SystemExit(1)
        finally:
            self._close_logger()
