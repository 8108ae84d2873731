"""AWS client interfaces and error classification"""

from .clients import (
    AWSClients,
    CreateStackAPI,
    UpdateStackAPI,
    DescribeStacksAPI,
    DescribeStackEventsAPI,
    DescribeVpcsAPI,
    DescribeSubnetsAPI,
    ListInstancesAPI,
    ListPermissionSetsAPI,
    DescribePermissionSetAPI,
    AttachCustomerManagedPolicyAPI,
    ProvisionPermissionSetAPI,
)
from .errors import (
    is_stack_not_found_error,
    is_no_updates_error,
    is_already_attached_error,
)

__all__ = [
    "AWSClients",
    "CreateStackAPI",
    "UpdateStackAPI",
    "DescribeStacksAPI",
    "DescribeStackEventsAPI",
    "DescribeVpcsAPI",
    "DescribeSubnetsAPI",
    "ListInstancesAPI",
    "ListPermissionSetsAPI",
    "DescribePermissionSetAPI",
    "AttachCustomerManagedPolicyAPI",
    "ProvisionPermissionSetAPI",
    "is_stack_not_found_error",
    "is_no_updates_error",
    "is_already_attached_error",
]
