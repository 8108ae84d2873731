"""
AWS Client Interfaces

Narrow capability interfaces for the AWS calls mint-admin makes.
Each interface wraps exactly one boto3 client method, so a real
CloudFormation, EC2 or SSO Admin client satisfies it and tests can inject a
small fake per operation.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import boto3


class CreateStackAPI(Protocol):
    def create_stack(self, **kwargs: Any) -> Dict[str, Any]: ...


class UpdateStackAPI(Protocol):
    def update_stack(self, **kwargs: Any) -> Dict[str, Any]: ...


class DescribeStacksAPI(Protocol):
    def describe_stacks(self, **kwargs: Any) -> Dict[str, Any]: ...


class DescribeStackEventsAPI(Protocol):
    def describe_stack_events(self, **kwargs: Any) -> Dict[str, Any]: ...


class DescribeVpcsAPI(Protocol):
    def describe_vpcs(self, **kwargs: Any) -> Dict[str, Any]: ...


class DescribeSubnetsAPI(Protocol):
    def describe_subnets(self, **kwargs: Any) -> Dict[str, Any]: ...


class ListInstancesAPI(Protocol):
    def list_instances(self, **kwargs: Any) -> Dict[str, Any]: ...


class ListPermissionSetsAPI(Protocol):
    def list_permission_sets(self, **kwargs: Any) -> Dict[str, Any]: ...


class DescribePermissionSetAPI(Protocol):
    def describe_permission_set(self, **kwargs: Any) -> Dict[str, Any]: ...


class AttachCustomerManagedPolicyAPI(Protocol):
    def attach_customer_managed_policy_reference_to_permission_set(
        self, **kwargs: Any
    ) -> Dict[str, Any]: ...


class ProvisionPermissionSetAPI(Protocol):
    def provision_permission_set(self, **kwargs: Any) -> Dict[str, Any]: ...


@dataclass
class AWSClients:
    """CloudFormation, EC2 and SSO Admin clients sharing one boto3 session."""

    cloudformation: Any
    ec2: Any
    region: Optional[str] = None
    sso_admin: Any = None

    @classmethod
    def from_session(
        cls, region: Optional[str] = None, profile: Optional[str] = None
    ) -> "AWSClients":
        """
        Build clients from a boto3 session.

        Args:
            region: AWS region (None lets boto3 resolve it)
            profile: Named AWS profile (None uses the default chain)

        Returns:
            AWSClients instance
        """
        session = boto3.Session(region_name=region, profile_name=profile)
        return cls(
            cloudformation=session.client("cloudformation"),
            ec2=session.client("ec2"),
            region=session.region_name,
            sso_admin=session.client("sso-admin"),
        )
