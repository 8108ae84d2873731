"""
Result Models

Dataclass models for deployment and policy attachment results.
"""

from dataclasses import dataclass
from typing import Dict

from mintadmin.constants import (
    OUTPUT_EFS_FILE_SYSTEM_ID,
    OUTPUT_EFS_SECURITY_GROUP_ID,
    OUTPUT_INSTANCE_PROFILE_ARN,
    OUTPUT_PASS_ROLE_POLICY_ARN,
)


@dataclass(frozen=True)
class DeployResult:
    """Outputs of a successfully deployed admin stack."""

    stack_name: str
    efs_file_system_id: str = ""
    efs_security_group_id: str = ""
    instance_profile_arn: str = ""
    pass_role_policy_arn: str = ""

    @classmethod
    def from_outputs(cls, stack_name: str, outputs: Dict[str, str]) -> "DeployResult":
        """Map known output keys; anything else is ignored."""
        return cls(
            stack_name=stack_name,
            efs_file_system_id=outputs.get(OUTPUT_EFS_FILE_SYSTEM_ID, ""),
            efs_security_group_id=outputs.get(OUTPUT_EFS_SECURITY_GROUP_ID, ""),
            instance_profile_arn=outputs.get(OUTPUT_INSTANCE_PROFILE_ARN, ""),
            pass_role_policy_arn=outputs.get(OUTPUT_PASS_ROLE_POLICY_ARN, ""),
        )

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary for JSON output."""
        return {
            "StackName": self.stack_name,
            OUTPUT_EFS_FILE_SYSTEM_ID: self.efs_file_system_id,
            OUTPUT_EFS_SECURITY_GROUP_ID: self.efs_security_group_id,
            OUTPUT_INSTANCE_PROFILE_ARN: self.instance_profile_arn,
            OUTPUT_PASS_ROLE_POLICY_ARN: self.pass_role_policy_arn,
        }

    def __repr__(self) -> str:
        return f"DeployResult(stack={self.stack_name}, efs={self.efs_file_system_id})"


@dataclass(frozen=True)
class AttachResult:
    """Outcome of attaching the pass-role policy to a permission set."""

    permission_set_arn: str
    provisioning_status: str = ""

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary for JSON output."""
        return {
            "PermissionSetArn": self.permission_set_arn,
            "ProvisioningStatus": self.provisioning_status,
        }
