"""Admin stack status command."""

import click
from rich.markup import escape

from mintadmin.base import StackCommand
from mintadmin.constants import CLI_DEFAULT_STACK_NAME
from mintadmin.models.results import DeployResult
from mintadmin.models.stack import StackStatus
from mintadmin.ui_components import deploy_result_table


class StatusCommand(StackCommand):
    """Show the admin stack status and outputs."""

    def execute(self) -> None:
        """Execute status command."""
        config = self.load_config()
        deployer = self.build_deployer()

        state = deployer.describe_stack(config.stack_name)

        if state is None or state.status == StackStatus.DELETE_COMPLETE.value:
            if self.json_output:
                self.output_json(
                    {"StackName": config.stack_name, "StackStatus": "NOT_DEPLOYED"}
                )
                return
            self.show_header(title="Admin Stack Status", stack=config.stack_name)
            self.console.print(
                f"[yellow]Stack '{escape(config.stack_name)}' is not deployed[/yellow]"
            )
            self.print_dim("Run: mint-admin admin:deploy")
            return

        result = DeployResult.from_outputs(config.stack_name, state.outputs)

        if self.json_output:
            data = {"StackStatus": state.status}
            data.update(result.to_dict())
            self.output_json(data)
            return

        self.show_header(title="Admin Stack Status", stack=config.stack_name)

        color = "green"
        if state.is_failure:
            color = "red"
        elif not state.is_terminal:
            color = "yellow"
        self.console.print(f"Status: [{color}]{state.status}[/{color}]\n")
        self.console.print(deploy_result_table(result))


@click.command(name="admin:status")
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
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def status(stack_name, region, profile, config_path, json_output):
    """Show admin stack status and outputs"""
    cmd = StatusCommand(
        config_path=config_path,
        overrides={"stack_name": stack_name, "region": region, "profile": profile},
        json_output=json_output,
    )
    cmd.run()
