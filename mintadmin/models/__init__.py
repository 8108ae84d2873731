"""
mint-admin Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .results import AttachResult, DeployResult
from .stack import (
    StackStatus,
    StackOperation,
    StackState,
    StackEvent,
    NetworkContext,
    DeploymentRequest,
    EventSink,
    is_terminal_status,
    is_failed_status,
)

__all__ = [
    # Results
    "AttachResult",
    "DeployResult",
    # Stack
    "StackStatus",
    "StackOperation",
    "StackState",
    "StackEvent",
    "NetworkContext",
    "DeploymentRequest",
    "EventSink",
    "is_terminal_status",
    "is_failed_status",
]
