#!/usr/bin/env python3
"""mint-admin CLI - Main entry point"""

import functools
import os
import sys

from rich.console import Console

# Rich-Click: CLI help with colors
import rich_click as click

from mintadmin import __version__
from mintadmin.commands.attach_policy import attach_policy
from mintadmin.commands.deploy import deploy
from mintadmin.commands.setup import setup
from mintadmin.commands.status import status
from mintadmin.constants import EXIT_CANCELLED

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = False
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.MAX_WIDTH = 100

# COMMANDS / OPTIONS
click.rich_click.STYLE_COMMAND = "bold cyan"
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_ARGUMENT = "bold yellow"

# HEADERS
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_USAGE_COMMAND = "bold cyan"

# HELP TEXT
click.rich_click.STYLE_HELPTEXT_FIRST_LINE = "bold white"
click.rich_click.STYLE_HELPTEXT = ""
click.rich_click.STYLE_OPTION_HELP = ""
click.rich_click.STYLE_OPTION_DEFAULT = "dim cyan"

# PANEL BORDERS
click.rich_click.STYLE_OPTIONS_PANEL_BORDER = "cyan"
click.rich_click.STYLE_COMMANDS_PANEL_BORDER = "cyan"
click.rich_click.ERRORS_EPILOGUE = ""

console = Console()


def handle_cli_errors(func):
    """Decorator to handle CLI errors gracefully."""
    from click.exceptions import ClickException

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ClickException as e:
            e.show()
            sys.exit(e.exit_code)
        except KeyboardInterrupt:
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(EXIT_CANCELLED)
        except Exception as e:
            console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {e}\n")
            console.print("[dim]If this persists, please report this issue.[/dim]\n")

            # Show traceback when DEBUG env var is set
            if os.environ.get("DEBUG"):
                import traceback

                console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(1)

    return wrapper


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """
    mint-admin - Manage the shared mint admin CloudFormation stack.

    \b
    Quick Start:
      mint-admin admin:deploy                  # Create or update the stack
      mint-admin admin:deploy --json           # Machine-readable outputs
      mint-admin admin:status                  # Show stack status and outputs
      mint-admin admin:attach-policy           # Attach pass-role policy to a permission set
      mint-admin admin:setup                   # Deploy, then attach-policy

    \b
    Configuration (lowest to highest precedence):
      ~/.config/mint-admin/config.yml  or  $MINT_ADMIN_CONFIG
      MINT_ADMIN_* / AWS_REGION / AWS_PROFILE environment variables
      command line flags
    """
    if ctx.invoked_subcommand is None:
        console.print("[yellow]Run 'mint-admin --help' for usage[/yellow]\n")


cli.add_command(deploy)
cli.add_command(status)
cli.add_command(attach_policy)
cli.add_command(setup)


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    cli()


if __name__ == "__main__":
    main()
