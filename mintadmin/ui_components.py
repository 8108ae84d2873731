"""
mint-admin - UI Components
Standardized headers and result tables
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mintadmin.models.results import AttachResult, DeployResult

PREFIX = "[bold color(214)]mint-admin[/bold color(214)] [dim]›[/dim]"


def show_header(
    title: str,
    subtitle: Optional[str] = None,
    stack: Optional[str] = None,
    details: Optional[dict] = None,
    console: Optional[Console] = None,
):
    """
    Display a standardized mint-admin command header.

    Args:
        title: Main title (e.g., "Deploy Admin Stack")
        subtitle: Optional subtitle line
        stack: Stack name (if applicable)
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)
    """
    if console is None:
        console = Console()

    console.print(f" {PREFIX} [bold white]{escape(title)}[/bold white]")

    if subtitle:
        console.print(f" {PREFIX} [dim]{escape(subtitle)}[/dim]")

    if stack:
        console.print(f" {PREFIX} Stack: [cyan]{escape(stack)}[/cyan]")

    if details:
        for key, value in details.items():
            console.print(f" {PREFIX} {key}: [cyan]{escape(str(value))}[/cyan]")

    console.print()


def deploy_result_table(result: DeployResult, title: Optional[str] = None) -> Table:
    """Build the outputs table shown after a deploy or status call."""
    table = Table(
        title=title or f"{result.stack_name} - Stack Outputs",
        title_justify="left",
        padding=(0, 1),
    )
    table.add_column("Output", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("EFS File System ID", result.efs_file_system_id or "-")
    table.add_row("EFS Security Group", result.efs_security_group_id or "-")
    table.add_row("Instance Profile ARN", result.instance_profile_arn or "-")
    table.add_row("Pass-Role Policy ARN", result.pass_role_policy_arn or "-")
    return table


def attach_result_table(result: AttachResult, policy_name: str, permission_set: str) -> Table:
    """Build the table shown after a policy attachment."""
    table = Table(title=f"{policy_name} → {permission_set}", title_justify="left", padding=(0, 1))
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("Permission Set ARN", result.permission_set_arn or "-")
    table.add_row("Provisioning Status", result.provisioning_status or "-")
    return table
