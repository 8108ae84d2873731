"""
Stack Models

Dataclass models for CloudFormation stack state, events and the networking
context a deployment is built from.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any, Protocol, Tuple

from mintadmin.constants import (
    DEFAULT_STACK_NAME,
    EVENT_LOGICAL_ID_WIDTH,
    EVENT_STATUS_WIDTH,
)


class StackStatus(str, Enum):
    """CloudFormation stack status."""

    CREATE_IN_PROGRESS = "CREATE_IN_PROGRESS"
    CREATE_FAILED = "CREATE_FAILED"
    CREATE_COMPLETE = "CREATE_COMPLETE"
    ROLLBACK_IN_PROGRESS = "ROLLBACK_IN_PROGRESS"
    ROLLBACK_FAILED = "ROLLBACK_FAILED"
    ROLLBACK_COMPLETE = "ROLLBACK_COMPLETE"
    DELETE_IN_PROGRESS = "DELETE_IN_PROGRESS"
    DELETE_FAILED = "DELETE_FAILED"
    DELETE_COMPLETE = "DELETE_COMPLETE"
    UPDATE_IN_PROGRESS = "UPDATE_IN_PROGRESS"
    UPDATE_COMPLETE_CLEANUP_IN_PROGRESS = "UPDATE_COMPLETE_CLEANUP_IN_PROGRESS"
    UPDATE_COMPLETE = "UPDATE_COMPLETE"
    UPDATE_FAILED = "UPDATE_FAILED"
    UPDATE_ROLLBACK_IN_PROGRESS = "UPDATE_ROLLBACK_IN_PROGRESS"
    UPDATE_ROLLBACK_FAILED = "UPDATE_ROLLBACK_FAILED"
    UPDATE_ROLLBACK_COMPLETE_CLEANUP_IN_PROGRESS = (
        "UPDATE_ROLLBACK_COMPLETE_CLEANUP_IN_PROGRESS"
    )
    UPDATE_ROLLBACK_COMPLETE = "UPDATE_ROLLBACK_COMPLETE"
    REVIEW_IN_PROGRESS = "REVIEW_IN_PROGRESS"
    IMPORT_IN_PROGRESS = "IMPORT_IN_PROGRESS"
    IMPORT_COMPLETE = "IMPORT_COMPLETE"
    IMPORT_ROLLBACK_IN_PROGRESS = "IMPORT_ROLLBACK_IN_PROGRESS"
    IMPORT_ROLLBACK_FAILED = "IMPORT_ROLLBACK_FAILED"
    IMPORT_ROLLBACK_COMPLETE = "IMPORT_ROLLBACK_COMPLETE"

    @property
    def is_terminal(self) -> bool:
        """Check if no further automatic transition follows this status."""
        return self in TERMINAL_STATUSES

    @property
    def is_failure(self) -> bool:
        """Check if this terminal status means the requested change did not take effect."""
        return self in FAILED_STATUSES


TERMINAL_STATUSES = frozenset(
    [
        StackStatus.CREATE_COMPLETE,
        StackStatus.CREATE_FAILED,
        StackStatus.UPDATE_COMPLETE,
        StackStatus.UPDATE_FAILED,
        StackStatus.UPDATE_ROLLBACK_COMPLETE,
        StackStatus.UPDATE_ROLLBACK_FAILED,
        StackStatus.ROLLBACK_COMPLETE,
        StackStatus.ROLLBACK_FAILED,
        StackStatus.DELETE_COMPLETE,
        StackStatus.DELETE_FAILED,
    ]
)

# Rollback-complete states are failures: the stack converged, but not to
# the requested template.
FAILED_STATUSES = frozenset(
    [
        StackStatus.CREATE_FAILED,
        StackStatus.UPDATE_FAILED,
        StackStatus.UPDATE_ROLLBACK_FAILED,
        StackStatus.ROLLBACK_FAILED,
        StackStatus.DELETE_FAILED,
        StackStatus.ROLLBACK_COMPLETE,
        StackStatus.UPDATE_ROLLBACK_COMPLETE,
    ]
)


def _parse_status(status: str) -> Optional[StackStatus]:
    try:
        return StackStatus(status)
    except ValueError:
        return None


def is_terminal_status(status: str) -> bool:
    """
    Check if a raw status string is terminal.

    Statuses outside the closed terminal set (including ones this module
    does not know) are treated as in progress.
    """
    parsed = _parse_status(status)
    return parsed is not None and parsed.is_terminal


def is_failed_status(status: str) -> bool:
    """Check if a raw status string is a terminal failure."""
    parsed = _parse_status(status)
    return parsed is not None and parsed.is_failure


class StackOperation(Enum):
    """Lifecycle request issued for a deployment."""

    CREATE = "create"
    UPDATE = "update"
    NO_OP = "no-op"


@dataclass(frozen=True)
class NetworkContext:
    """Default VPC and its subnets, in discovery order."""

    vpc_id: str
    subnet_ids: Tuple[str, ...] = ()

    def __repr__(self) -> str:
        return f"NetworkContext(vpc={self.vpc_id}, subnets={len(self.subnet_ids)})"


class EventSink(Protocol):
    """Destination for progress lines; only write() is ever called."""

    def write(self, text: str) -> Any: ...


@dataclass(frozen=True)
class DeploymentRequest:
    """What to deploy and where progress lines go."""

    stack_name: str = DEFAULT_STACK_NAME
    event_sink: Optional[EventSink] = field(default=None, compare=False)

    def __post_init__(self):
        if not self.stack_name:
            object.__setattr__(self, "stack_name", DEFAULT_STACK_NAME)


@dataclass(frozen=True)
class StackState:
    """Snapshot of a stack as returned by a single describe call."""

    stack_name: str
    status: str
    outputs: Dict[str, str] = field(default_factory=dict)

    @property
    def is_terminal(self) -> bool:
        return is_terminal_status(self.status)

    @property
    def is_failure(self) -> bool:
        return is_failed_status(self.status)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StackState":
        """Create from a describe_stacks entry."""
        outputs = {}
        for output in data.get("Outputs") or []:
            key = output.get("OutputKey")
            if key:
                outputs[key] = output.get("OutputValue", "")
        return cls(
            stack_name=data.get("StackName", ""),
            status=data.get("StackStatus", ""),
            outputs=outputs,
        )

    def __repr__(self) -> str:
        return f"StackState(name={self.stack_name}, status={self.status})"


@dataclass(frozen=True)
class StackEvent:
    """A single stack event. Identity is the event id."""

    event_id: str
    logical_resource_id: str = ""
    resource_status: str = ""
    status_reason: Optional[str] = None
    timestamp: Optional[datetime] = None

    def occurred_before(self, moment: datetime) -> bool:
        """Check if the event is strictly older than moment."""
        return self.timestamp is not None and self.timestamp < moment

    def format_line(self) -> str:
        """Render the event as one progress line (without newline)."""
        return (
            f"{self.event_id}  "
            f"{self.logical_resource_id:<{EVENT_LOGICAL_ID_WIDTH}}  "
            f"{self.resource_status:<{EVENT_STATUS_WIDTH}}  "
            f"{self.status_reason or ''}"
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StackEvent":
        """Create from a describe_stack_events entry."""
        return cls(
            event_id=data.get("EventId", ""),
            logical_resource_id=data.get("LogicalResourceId", ""),
            resource_status=data.get("ResourceStatus", ""),
            status_reason=data.get("ResourceStatusReason"),
            timestamp=data.get("Timestamp"),
        )
