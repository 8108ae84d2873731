"""Permission set policy attachment command."""

from typing import Optional

import click

from mintadmin.base import StackCommand
from mintadmin.constants import (
    DEFAULT_PASS_ROLE_POLICY_NAME,
    DEFAULT_PERMISSION_SET,
    SUCCESS_POLICY_ATTACHED,
)
from mintadmin.exceptions import NoSSOInstanceError
from mintadmin.models.results import AttachResult
from mintadmin.ui_components import attach_result_table


class AttachPolicyCommand(StackCommand):
    """Attach the pass-role policy to an IAM Identity Center permission set."""

    def __init__(
        self,
        permission_set: str = DEFAULT_PERMISSION_SET,
        policy_name: str = DEFAULT_PASS_ROLE_POLICY_NAME,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.permission_set = permission_set
        self.policy_name = policy_name

    def execute(self) -> None:
        """Execute attach-policy command."""
        config = self.load_config()

        self.show_header(
            title="Attach Pass-Role Policy",
            subtitle=f"{self.policy_name} → {self.permission_set}",
            details={"Region": self.ensure_clients().region or "default"},
        )

        logger = self.init_logger(config.stack_name, "attach-policy", log_dir=config.log_path)

        result = self.attach_policy()
        if result is None:
            if self.json_output:
                self.output_json({"skipped": True, "reason": NoSSOInstanceError().message})
            return

        if self.json_output:
            self.output_json(result.to_dict())
            return

        self.print_success(SUCCESS_POLICY_ATTACHED)
        self.console.print(attach_result_table(result, self.policy_name, self.permission_set))
        if logger:
            self.console.print(f"\n[dim]Logs saved to:[/dim] {logger.log_path}\n")

    def attach_policy(self) -> Optional[AttachResult]:
        """
        Attach the policy, or return None when the account has no
        IAM Identity Center instance.
        """
        if self.logger:
            self.logger.step(f"Attaching {self.policy_name} to {self.permission_set}")

        try:
            result = self.build_attacher().attach(self.permission_set, self.policy_name)
        except NoSSOInstanceError:
            if self.logger:
                self.logger.warning(
                    "IAM Identity Center not configured for this account, skipping policy attachment"
                )
            return None

        if self.logger:
            self.logger.success(f"Provisioning status: {result.provisioning_status or 'unknown'}")
        return result


@click.command(name="admin:attach-policy")
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
@click.option("--verbose", "-v", is_flag=True, help="Show all output")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def attach_policy(permission_set, policy_name, region, profile, config_path, verbose, json_output):
    """Attach the pass-role policy to an IAM Identity Center permission set"""
    cmd = AttachPolicyCommand(
        permission_set=permission_set,
        policy_name=policy_name,
        config_path=config_path,
        overrides={"region": region, "profile": profile},
        verbose=verbose,
        json_output=json_output,
    )
    cmd.run()
