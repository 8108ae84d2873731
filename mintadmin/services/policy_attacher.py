"""
Permission Set Policy Attacher

Attaches the admin stack's pass-role policy to an IAM Identity Center
permission set and reprovisions it.
"""

from typing import Optional

from mintadmin.aws.clients import (
    AWSClients,
    AttachCustomerManagedPolicyAPI,
    DescribePermissionSetAPI,
    ListInstancesAPI,
    ListPermissionSetsAPI,
    ProvisionPermissionSetAPI,
)
from mintadmin.aws.errors import is_already_attached_error
from mintadmin.constants import (
    DEFAULT_PASS_ROLE_POLICY_NAME,
    DEFAULT_PERMISSION_SET,
    POLICY_PATH,
    PROVISION_TARGET_ALL_ACCOUNTS,
)
from mintadmin.exceptions import (
    AWSOperationError,
    NoSSOInstanceError,
    PermissionSetNotFoundError,
)
from mintadmin.logger import DeployLogger
from mintadmin.models.results import AttachResult


class PolicyAttacher:
    """
    Attaches a customer-managed policy to a permission set.

    Responsibilities:
    - Locate the account's IAM Identity Center instance
    - Find the permission set by name (paginated)
    - Attach the policy reference (already attached counts as success)
    - Reprovision the permission set on every assigned account
    """

    def __init__(
        self,
        sso_instances: ListInstancesAPI,
        sso_permission_sets: ListPermissionSetsAPI,
        sso_describe: DescribePermissionSetAPI,
        sso_attach: AttachCustomerManagedPolicyAPI,
        sso_provision: ProvisionPermissionSetAPI,
        logger: Optional[DeployLogger] = None,
    ):
        self.sso_instances = sso_instances
        self.sso_permission_sets = sso_permission_sets
        self.sso_describe = sso_describe
        self.sso_attach = sso_attach
        self.sso_provision = sso_provision
        self.logger = logger

    @classmethod
    def from_clients(cls, clients: AWSClients, **kwargs) -> "PolicyAttacher":
        """Build an attacher backed by a real boto3 SSO Admin client."""
        sso = clients.sso_admin
        return cls(
            sso_instances=sso,
            sso_permission_sets=sso,
            sso_describe=sso,
            sso_attach=sso,
            sso_provision=sso,
            **kwargs,
        )

    def attach(
        self,
        permission_set_name: str = DEFAULT_PERMISSION_SET,
        policy_name: str = DEFAULT_PASS_ROLE_POLICY_NAME,
    ) -> AttachResult:
        """
        Attach policy_name to permission_set_name and reprovision.

        Empty names fall back to the defaults.

        Returns:
            AttachResult

        Raises:
            NoSSOInstanceError: If the account has no IAM Identity Center
            PermissionSetNotFoundError: If no permission set has that name
            AWSOperationError: If an SSO Admin call fails
        """
        permission_set_name = permission_set_name or DEFAULT_PERMISSION_SET
        policy_name = policy_name or DEFAULT_PASS_ROLE_POLICY_NAME

        instance_arn = self.find_instance()
        permission_set_arn = self.find_permission_set(instance_arn, permission_set_name)

        if self.logger:
            self.logger.log(f"Permission set {permission_set_name}: {permission_set_arn}")

        self.attach_policy_reference(instance_arn, permission_set_arn, policy_name)
        status = self.reprovision(instance_arn, permission_set_arn)

        return AttachResult(
            permission_set_arn=permission_set_arn,
            provisioning_status=status,
        )

    def find_instance(self) -> str:
        """Return the first IAM Identity Center instance ARN."""
        try:
            response = self.sso_instances.list_instances()
        except Exception as e:
            raise AWSOperationError("list SSO instances", e)

        instances = response.get("Instances") or []
        if not instances:
            raise NoSSOInstanceError()
        return instances[0].get("InstanceArn", "")

    def find_permission_set(self, instance_arn: str, name: str) -> str:
        """Page through the instance's permission sets until one is named name."""
        request = {"InstanceArn": instance_arn}

        while True:
            try:
                response = self.sso_permission_sets.list_permission_sets(**request)
            except Exception as e:
                raise AWSOperationError("list permission sets", e)

            for arn in response.get("PermissionSets") or []:
                try:
                    described = self.sso_describe.describe_permission_set(
                        InstanceArn=instance_arn, PermissionSetArn=arn
                    )
                except Exception as e:
                    raise AWSOperationError(f"describe permission set {arn}", e)

                if (described.get("PermissionSet") or {}).get("Name") == name:
                    return arn

            next_token = response.get("NextToken")
            if not next_token:
                break
            request["NextToken"] = next_token

        raise PermissionSetNotFoundError(name, instance_arn)

    def attach_policy_reference(
        self, instance_arn: str, permission_set_arn: str, policy_name: str
    ) -> bool:
        """
        Attach the customer-managed policy reference.

        Returns:
            True if attached now, False if it was already attached
        """
        try:
            self.sso_attach.attach_customer_managed_policy_reference_to_permission_set(
                InstanceArn=instance_arn,
                PermissionSetArn=permission_set_arn,
                CustomerManagedPolicyReference={"Name": policy_name, "Path": POLICY_PATH},
            )
        except Exception as e:
            if is_already_attached_error(e):
                if self.logger:
                    self.logger.log(f"{policy_name} already attached", "DEBUG")
                return False
            raise AWSOperationError(
                f"attach policy {policy_name} to permission set {permission_set_arn}", e
            )
        return True

    def reprovision(self, instance_arn: str, permission_set_arn: str) -> str:
        """Provision the permission set to all accounts; returns the provisioning status."""
        try:
            response = self.sso_provision.provision_permission_set(
                InstanceArn=instance_arn,
                PermissionSetArn=permission_set_arn,
                TargetType=PROVISION_TARGET_ALL_ACCOUNTS,
            )
        except Exception as e:
            raise AWSOperationError(f"provision permission set {permission_set_arn}", e)

        status = response.get("PermissionSetProvisioningStatus") or {}
        return status.get("Status", "")
