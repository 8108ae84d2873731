"""
mint-admin Constants

Centralized constants for magic values, defaults, and configuration.
"""

# Stack defaults
DEFAULT_STACK_NAME = "mint-admin"
CLI_DEFAULT_STACK_NAME = "mint-admin-setup"
TEMPLATE_FILENAME = "admin-setup.yaml"

# Polling
DEFAULT_POLL_INTERVAL = 5  # seconds

# CloudFormation request configuration
STACK_CAPABILITIES = ["CAPABILITY_NAMED_IAM"]

# Parameter schema
VPC_PARAMETER = "VpcId"
SUBNET_PARAMETER_FORMAT = "Subnet{index}"
MAX_SUBNET_SLOTS = 6

# IAM Identity Center policy attachment
DEFAULT_PERMISSION_SET = "PowerUserAccess"
DEFAULT_PASS_ROLE_POLICY_NAME = "mint-pass-instance-role"
POLICY_PATH = "/"
PROVISION_TARGET_ALL_ACCOUNTS = "ALL_PROVISIONED_ACCOUNTS"

# Stack outputs consumed by the deployer
OUTPUT_EFS_FILE_SYSTEM_ID = "EfsFileSystemId"
OUTPUT_EFS_SECURITY_GROUP_ID = "EfsSecurityGroupId"
OUTPUT_INSTANCE_PROFILE_ARN = "InstanceProfileArn"
OUTPUT_PASS_ROLE_POLICY_ARN = "PassRolePolicyArn"

# Error codes and phrases returned by AWS (CloudFormation has no distinct codes)
VALIDATION_ERROR_CODE = "ValidationError"
STACK_NOT_FOUND_PHRASES = ["does not exist", "Stack with id"]
NO_UPDATES_PHRASE = "No updates are to be performed"
CONFLICT_ERROR_CODE = "ConflictException"
ALREADY_ATTACHED_PHRASE = "already attached"

# Event line layout
EVENT_LOGICAL_ID_WIDTH = 40
EVENT_STATUS_WIDTH = 30

# Configuration
CONFIG_ENV_VAR = "MINT_ADMIN_CONFIG"
DEFAULT_CONFIG_PATH = "~/.config/mint-admin/config.yml"
DEFAULT_LOG_DIR = "~/.mint-admin/logs"

# Environment variable -> config key
ENV_OVERRIDES = {
    "MINT_ADMIN_STACK_NAME": "stack_name",
    "MINT_ADMIN_POLL_INTERVAL": "poll_interval",
    "MINT_ADMIN_TIMEOUT": "timeout",
    "MINT_ADMIN_LOG_DIR": "log_dir",
    "AWS_DEFAULT_REGION": "region",
    "AWS_REGION": "region",
    "AWS_PROFILE": "profile",
}

# Log Configuration
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"

# Success Messages
SUCCESS_STACK_DEPLOYED = "Stack deployed successfully"
SUCCESS_POLICY_ATTACHED = "Policy attached successfully"

# Exit codes
EXIT_CANCELLED = 130
