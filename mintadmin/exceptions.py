"""
mint-admin Exception Hierarchy

Clean exception hierarchy for consistent error handling across the deployer
and the CLI.
"""

from typing import Optional


class MintAdminError(Exception):
    """Base exception for all mint-admin errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(MintAdminError):
    """Raised when configuration or the stack template is invalid or missing."""

    pass


class PreconditionError(MintAdminError):
    """Raised when the account or region is not ready for a deployment."""

    pass


class NoDefaultVPCError(PreconditionError):
    """Raised when the region has no default VPC."""

    def __init__(self):
        message = "no default VPC found in this region"
        context = "create one with: aws ec2 create-default-vpc"
        super().__init__(message, context)


class AWSOperationError(MintAdminError):
    """Raised when an AWS API call fails for a reason we do not classify."""

    def __init__(
        self,
        operation: str,
        cause: Exception,
        stack_name: Optional[str] = None,
    ):
        self.operation = operation
        self.cause = cause
        self.stack_name = stack_name
        if stack_name:
            message = f"{operation} '{stack_name}' failed"
        else:
            message = f"{operation} failed"
        super().__init__(message, context=str(cause))


class DeploymentError(MintAdminError):
    """Raised when a stack lifecycle operation fails."""

    pass


class StackDisappearedError(DeploymentError):
    """Raised when a stack vanishes while we are waiting for it to converge."""

    def __init__(self, stack_name: str):
        self.stack_name = stack_name
        message = f"Stack '{stack_name}' disappeared during polling"
        context = "The stack was removed outside of this deployment"
        super().__init__(message, context)


class StackNotFoundError(DeploymentError):
    """Raised when a stack cannot be found where one is required."""

    def __init__(self, stack_name: str, phase: str = "collecting outputs"):
        self.stack_name = stack_name
        self.phase = phase
        message = f"Stack '{stack_name}' not found when {phase}"
        if phase == "collecting outputs":
            context = "The stack was removed after it converged; check for concurrent deletes"
        else:
            context = "Run: mint-admin admin:deploy"
        super().__init__(message, context)


class StackFailedError(DeploymentError):
    """Raised when a stack converges to a failure or rollback status."""

    def __init__(self, stack_name: str, status: str):
        self.stack_name = stack_name
        self.status = status
        message = f"Stack '{stack_name}' reached failed status: {status}"
        context = f"Inspect events with: aws cloudformation describe-stack-events --stack-name {stack_name}"
        super().__init__(message, context)


class DeploymentCancelledError(MintAdminError):
    """Raised when the caller cancels a deployment or its deadline passes."""

    def __init__(self, reason: str = "cancelled", stack_name: Optional[str] = None):
        self.reason = reason
        self.stack_name = stack_name
        message = f"Deployment {reason}"
        if stack_name:
            message = f"Deployment of '{stack_name}' {reason}"
        super().__init__(message)


class NoSSOInstanceError(PreconditionError):
    """Raised when the account has no IAM Identity Center instance."""

    def __init__(self):
        message = "no IAM Identity Center instance found"
        context = "IAM Identity Center is not configured for this account"
        super().__init__(message, context)


class PermissionSetNotFoundError(PreconditionError):
    """Raised when the named permission set does not exist in the SSO instance."""

    def __init__(self, permission_set_name: str, instance_arn: str):
        self.permission_set_name = permission_set_name
        self.instance_arn = instance_arn
        message = f"Permission set '{permission_set_name}' not found in SSO instance {instance_arn}"
        context = "Create the permission set before running admin:attach-policy"
        super().__init__(message, context)
