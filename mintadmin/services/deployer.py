"""
Admin Stack Deployment Service

Create-or-update lifecycle for the admin CloudFormation stack, with
convergence polling and event streaming.
"""

from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from mintadmin.aws.clients import (
    AWSClients,
    CreateStackAPI,
    UpdateStackAPI,
    DescribeStacksAPI,
    DescribeStackEventsAPI,
    DescribeVpcsAPI,
    DescribeSubnetsAPI,
)
from mintadmin.aws.errors import is_no_updates_error, is_stack_not_found_error
from mintadmin.constants import (
    DEFAULT_POLL_INTERVAL,
    MAX_SUBNET_SLOTS,
    STACK_CAPABILITIES,
)
from mintadmin.core.cancellation import CancellationToken
from mintadmin.core.template import StackTemplate
from mintadmin.exceptions import (
    AWSOperationError,
    StackDisappearedError,
    StackFailedError,
    StackNotFoundError,
)
from mintadmin.logger import DeployLogger
from mintadmin.models.results import DeployResult
from mintadmin.models.stack import (
    DeploymentRequest,
    EventSink,
    StackOperation,
    StackState,
    StackStatus,
)
from .event_streamer import EventStreamer
from .network_service import NetworkDiscoverer
from .parameters import build_parameters, to_cfn_parameters


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StackDeployer:
    """
    Deploys the admin stack.

    Responsibilities:
    - Default VPC discovery and parameter building
    - Existence check and create/update routing
    - Polling until the stack reaches a terminal status
    - Streaming new stack events to a progress sink
    - Mapping stack outputs to a DeployResult

    Every AWS operation is injected as its own narrow interface.
    """

    def __init__(
        self,
        cfn_create: CreateStackAPI,
        cfn_update: UpdateStackAPI,
        cfn_describe: DescribeStacksAPI,
        cfn_events: DescribeStackEventsAPI,
        ec2_vpcs: DescribeVpcsAPI,
        ec2_subnets: DescribeSubnetsAPI,
        template: StackTemplate,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        clock: Callable[[], datetime] = _utcnow,
        logger: Optional[DeployLogger] = None,
    ):
        """
        Initialize deployer.

        Args:
            cfn_create: CloudFormation create_stack
            cfn_update: CloudFormation update_stack
            cfn_describe: CloudFormation describe_stacks
            cfn_events: CloudFormation describe_stack_events
            ec2_vpcs: EC2 describe_vpcs
            ec2_subnets: EC2 describe_subnets
            template: Admin stack template sent with every create/update
            poll_interval: Seconds between status polls
            clock: Returns the current time (timezone aware)
            logger: Optional DeployLogger for step output
        """
        self.cfn_create = cfn_create
        self.cfn_update = cfn_update
        self.cfn_describe = cfn_describe
        self.cfn_events = cfn_events
        self.network = NetworkDiscoverer(ec2_vpcs, ec2_subnets)
        self.template = template
        self.poll_interval = poll_interval
        self.clock = clock
        self.logger = logger

    @classmethod
    def from_clients(
        cls, clients: AWSClients, template: StackTemplate, **kwargs
    ) -> "StackDeployer":
        """Build a deployer backed by real boto3 clients."""
        cfn = clients.cloudformation
        return cls(
            cfn_create=cfn,
            cfn_update=cfn,
            cfn_describe=cfn,
            cfn_events=cfn,
            ec2_vpcs=clients.ec2,
            ec2_subnets=clients.ec2,
            template=template,
            **kwargs,
        )

    def deploy(
        self,
        request: DeploymentRequest,
        cancellation: Optional[CancellationToken] = None,
    ) -> DeployResult:
        """
        Run the full create-or-update lifecycle.

        1. Discover the default VPC and its subnets
        2. Build stack parameters
        3. Create or update the stack
        4. Poll until terminal, streaming events to request.event_sink
        5. Return the stack outputs

        Args:
            request: Stack name and progress sink
            cancellation: Cancellation token (None never cancels)

        Returns:
            DeployResult

        Raises:
            NoDefaultVPCError: If the region has no default VPC
            AWSOperationError: If an AWS call fails
            StackFailedError: If the stack converges to a failure status
            StackDisappearedError: If the stack vanishes while polling
            DeploymentCancelledError: If cancelled
        """
        cancellation = cancellation or CancellationToken()
        stack_name = request.stack_name

        if self.logger:
            self.logger.step("[1/4] Discovering default VPC")

        cancellation.raise_if_cancelled(stack_name)
        network = self.network.discover()
        cancellation.raise_if_cancelled(stack_name)

        if self.logger:
            self.logger.success(
                f"VPC {network.vpc_id} with {len(network.subnet_ids)} subnet(s)"
            )
            if len(network.subnet_ids) > MAX_SUBNET_SLOTS:
                dropped = ", ".join(network.subnet_ids[MAX_SUBNET_SLOTS:])
                self.logger.warning(
                    f"Template supports {MAX_SUBNET_SLOTS} subnets; ignoring {dropped}"
                )

        parameters = build_parameters(network.vpc_id, network.subnet_ids)

        if self.logger:
            self.logger.step("[2/4] Submitting stack")

        exists = self.stack_exists(stack_name)
        cancellation.raise_if_cancelled(stack_name)

        # Events older than this belong to earlier operations on the stack
        started_at = self.clock()

        operation = self.route(stack_name, parameters, exists=exists)

        if self.logger:
            if operation == StackOperation.CREATE:
                self.logger.success(f"Create requested for {stack_name}")
            elif operation == StackOperation.UPDATE:
                self.logger.success(f"Update requested for {stack_name}")
            else:
                self.logger.success(f"{stack_name} is already up to date")
            self.logger.step("[3/4] Waiting for stack to converge")

        final_state = self.wait_for_stack(
            stack_name, started_at, request.event_sink, cancellation
        )

        if self.logger:
            self.logger.success(f"{stack_name}: {final_state.status}")
            self.logger.step("[4/4] Collecting outputs")

        cancellation.raise_if_cancelled(stack_name)
        result = self.collect_outputs(stack_name)

        if self.logger:
            self.logger.success("Outputs collected")

        return result

    # ------------------------------------------------------------------
    # Existence and routing
    # ------------------------------------------------------------------

    def describe_stack(self, stack_name: str) -> Optional[StackState]:
        """
        Describe a stack.

        Returns:
            StackState, or None if the stack does not exist

        Raises:
            AWSOperationError: For any failure other than "does not exist"
        """
        try:
            response = self.cfn_describe.describe_stacks(StackName=stack_name)
        except Exception as e:
            if is_stack_not_found_error(e):
                return None
            raise AWSOperationError("describe stack", e, stack_name)

        stacks = response.get("Stacks") or []
        if not stacks:
            return None
        return StackState.from_dict(stacks[0])

    def stack_exists(self, stack_name: str) -> bool:
        """
        Check whether the stack exists.

        A stack in DELETE_COMPLETE counts as absent.
        """
        state = self.describe_stack(stack_name)
        if state is None:
            return False
        return state.status != StackStatus.DELETE_COMPLETE.value

    def route(
        self,
        stack_name: str,
        parameters: Dict[str, str],
        exists: Optional[bool] = None,
    ) -> StackOperation:
        """
        Issue exactly one create or update request.

        Args:
            stack_name: Stack name
            parameters: Parameter set from build_parameters()
            exists: Result of a prior stack_exists() call (looked up if None)

        Returns:
            StackOperation.CREATE, UPDATE, or NO_OP when the update had
            nothing to change

        Raises:
            AWSOperationError: If the request is rejected
        """
        if exists is None:
            exists = self.stack_exists(stack_name)

        if exists:
            return self._update_stack(stack_name, parameters)
        return self._create_stack(stack_name, parameters)

    def _stack_request(self, stack_name: str, parameters: Dict[str, str]) -> dict:
        return {
            "StackName": stack_name,
            "TemplateBody": self.template.body,
            "Parameters": to_cfn_parameters(parameters),
            "Capabilities": list(STACK_CAPABILITIES),
        }

    def _create_stack(
        self, stack_name: str, parameters: Dict[str, str]
    ) -> StackOperation:
        try:
            self.cfn_create.create_stack(**self._stack_request(stack_name, parameters))
        except Exception as e:
            raise AWSOperationError("create stack", e, stack_name)
        return StackOperation.CREATE

    def _update_stack(
        self, stack_name: str, parameters: Dict[str, str]
    ) -> StackOperation:
        try:
            self.cfn_update.update_stack(**self._stack_request(stack_name, parameters))
        except Exception as e:
            if is_no_updates_error(e):
                return StackOperation.NO_OP
            raise AWSOperationError("update stack", e, stack_name)
        return StackOperation.UPDATE

    # ------------------------------------------------------------------
    # Convergence polling
    # ------------------------------------------------------------------

    def wait_for_stack(
        self,
        stack_name: str,
        started_at: datetime,
        sink: Optional[EventSink] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> StackState:
        """
        Poll until the stack reaches a terminal status.

        New events are written to sink on every iteration. Failing to fetch
        events only produces a warning line; polling continues.

        Args:
            stack_name: Stack name
            started_at: Deployment start time, filters stale events
            sink: Progress sink (None skips event streaming)
            cancellation: Cancellation token

        Returns:
            The terminal StackState (a success status)

        Raises:
            StackFailedError: On a failure or rollback terminal status
            StackDisappearedError: If the stack is gone mid-poll
            AWSOperationError: If the status call fails
            DeploymentCancelledError: If cancelled
        """
        cancellation = cancellation or CancellationToken()
        streamer = EventStreamer(self.cfn_events)

        while True:
            cancellation.raise_if_cancelled(stack_name)

            try:
                response = self.cfn_describe.describe_stacks(StackName=stack_name)
            except Exception as e:
                if is_stack_not_found_error(e):
                    raise StackDisappearedError(stack_name)
                raise AWSOperationError("poll stack status", e, stack_name)

            cancellation.raise_if_cancelled(stack_name)

            stacks = response.get("Stacks") or []
            if not stacks:
                raise StackDisappearedError(stack_name)

            state = StackState.from_dict(stacks[0])

            if sink is not None:
                try:
                    streamer.stream_new(stack_name, started_at, sink)
                except Exception as e:
                    sink.write(f"warning: could not fetch stack events: {e}\n")

            if state.is_terminal:
                if state.is_failure:
                    raise StackFailedError(stack_name, state.status)
                return state

            if self.logger:
                self.logger.log(f"{stack_name}: {state.status}", "DEBUG")

            cancellation.sleep(self.poll_interval, stack_name)

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------

    def collect_outputs(self, stack_name: str) -> DeployResult:
        """
        Read the stack outputs into a DeployResult.

        Raises:
            StackNotFoundError: If the stack does not exist
            AWSOperationError: If the describe call fails
        """
        try:
            response = self.cfn_describe.describe_stacks(StackName=stack_name)
        except Exception as e:
            if is_stack_not_found_error(e):
                raise StackNotFoundError(stack_name)
            raise AWSOperationError("describe stack outputs", e, stack_name)

        stacks = response.get("Stacks") or []
        if not stacks:
            raise StackNotFoundError(stack_name)

        state = StackState.from_dict(stacks[0])
        return DeployResult.from_outputs(stack_name, state.outputs)
