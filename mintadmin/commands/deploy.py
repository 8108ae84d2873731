"""Admin stack deployment command."""

import click

from mintadmin.base import StackCommand
from mintadmin.constants import CLI_DEFAULT_STACK_NAME, SUCCESS_STACK_DEPLOYED
from mintadmin.core.cancellation import CancellationToken
from mintadmin.logger import EventSinkWriter
from mintadmin.models.results import DeployResult
from mintadmin.models.stack import DeploymentRequest
from mintadmin.ui_components import deploy_result_table


class DeployCommand(StackCommand):
    """Create or update the admin stack and print its outputs."""

    def execute(self) -> None:
        """Execute deploy command."""
        config = self.load_config()

        self.show_header(
            title="Deploy Admin Stack",
            subtitle="Shared EFS, security group, instance profile and pass-role policy",
            stack=config.stack_name,
            details={"Region": self.ensure_clients().region or "default"},
        )

        logger = self.init_logger(config.stack_name, "deploy", log_dir=config.log_path)
        if logger:
            logger.log(f"Config: {config.to_dict()}", "DEBUG")

        result = self.deploy_stack()

        if self.json_output:
            self.output_json(result.to_dict())
            return

        self.console.print()
        self.print_success(SUCCESS_STACK_DEPLOYED)
        self.console.print(deploy_result_table(result))
        if logger:
            self.console.print(f"\n[dim]Logs saved to:[/dim] {logger.log_path}\n")

    def deploy_stack(self) -> DeployResult:
        """Run the deployment with event lines routed through the logger."""
        config = self.load_config()
        request = DeploymentRequest(
            stack_name=config.stack_name,
            event_sink=EventSinkWriter(self.logger) if self.logger else None,
        )
        cancellation = CancellationToken.with_timeout(config.timeout)
        return self.build_deployer().deploy(request, cancellation)


@click.command(name="admin:deploy")
@click.option(
    "--stack-name",
    default=None,
    help=f"CloudFormation stack name (default: {CLI_DEFAULT_STACK_NAME})",
)
@click.option("--region", default=None, help="AWS region (default: from AWS config)")
@click.option("--profile", default=None, help="AWS profile (default: from AWS config)")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to mint-admin config file",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Give up after this many seconds (default: wait until the stack settles)",
)
@click.option(
    "--poll-interval",
    type=float,
    default=None,
    help="Seconds between stack status polls",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show all output (default: clean UI with logs)",
)
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def deploy(stack_name, region, profile, config_path, timeout, poll_interval, verbose, json_output):
    """Deploy the admin CloudFormation stack (create or update)"""
    overrides = {
        "stack_name": stack_name,
        "region": region,
        "profile": profile,
        "timeout": timeout,
        "poll_interval": poll_interval,
    }
    cmd = DeployCommand(
        config_path=config_path,
        overrides=overrides,
        verbose=verbose,
        json_output=json_output,
    )
    cmd.run()
