"""Full admin setup: deploy the stack, then attach the pass-role policy."""

import click

from mintadmin.commands.attach_policy import AttachPolicyCommand
from mintadmin.commands.deploy import DeployCommand
from mintadmin.constants import (
    CLI_DEFAULT_STACK_NAME,
    DEFAULT_PASS_ROLE_POLICY_NAME,
    DEFAULT_PERMISSION_SET,
    SUCCESS_POLICY_ATTACHED,
    SUCCESS_STACK_DEPLOYED,
)
from mintadmin.ui_components import attach_result_table, deploy_result_table


class SetupCommand(DeployCommand, AttachPolicyCommand):
    """Run admin:deploy and admin:attach-policy in sequence."""

    def execute(self) -> None:
        config = self.load_config()

        self.show_header(
            title="Admin Setup",
            subtitle="Deploy the admin stack and attach the pass-role policy",
            stack=config.stack_name,
            details={
                "Region": self.ensure_clients().region or "default",
                "Permission set": self.permission_set,
            },
        )

        logger = self.init_logger(config.stack_name, "setup", log_dir=config.log_path)
        if logger:
            logger.log(f"Config: {config.to_dict()}", "DEBUG")

        deployed = self.deploy_stack()
        attached = self.attach_policy()

        if self.json_output:
            data = {"deploy": deployed.to_dict()}
            if attached is not None:
                data["attach_policy"] = attached.to_dict()
            self.output_json(data)
            return

        self.console.print()
        self.print_success(SUCCESS_STACK_DEPLOYED)
        self.console.print(deploy_result_table(deployed))
        if attached is not None:
            self.print_success(SUCCESS_POLICY_ATTACHED)
            self.console.print(attach_result_table(attached, self.policy_name, self.permission_set))
        if logger:
            self.console.print(f"\n[dim]Logs saved to:[/dim] {logger.log_path}\n")


@click.command(name="admin:setup")
@click.option(
    "--stack-name",
    default=None,
    help=f"CloudFormation stack name (default: {CLI_DEFAULT_STACK_NAME})",
)
@click.option(
    "--permission-set",
    default=DEFAULT_PERMISSION_SET,
    show_default=True,
    help="IAM Identity Center permission set name",
)
@click.option(
    "--policy",
    "policy_name",
    default=DEFAULT_PASS_ROLE_POLICY_NAME,
    show_default=True,
    help="Customer managed policy name to attach",
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
@click.option("--timeout", type=float, default=None, help="Give up on the stack after this many seconds")
@click.option("--poll-interval", type=float, default=None, help="Seconds between stack status polls")
@click.option("--verbose", "-v", is_flag=True, help="Show all output")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def setup(
    stack_name,
    permission_set,
    policy_name,
    region,
    profile,
    config_path,
    timeout,
    poll_interval,
    verbose,
    json_output,
):
    """Deploy the admin stack, then attach its pass-role policy to a permission set"""
    overrides = {
        "stack_name": stack_name,
        "region": region,
        "profile": profile,
        "timeout": timeout,
        "poll_interval": poll_interval,
    }
    cmd = SetupCommand(
        permission_set=permission_set,
        policy_name=policy_name,
        config_path=config_path,
        overrides=overrides,
        verbose=verbose,
        json_output=json_output,
    )
    cmd.run()
