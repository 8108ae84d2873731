import pytest

from mintadmin.core.cancellation import CancellationToken
from mintadmin.exceptions import (
    AWSOperationError,
    DeploymentCancelledError,
    NoDefaultVPCError,
    StackDisappearedError,
    StackFailedError,
    StackNotFoundError,
)
from mintadmin.models.stack import DeploymentRequest, StackOperation
from mintadmin.services.parameters import build_parameters
from tests.fakes import (
    FOUR_OUTPUTS,
    START,
    FakeDescribeStackEvents,
    FakeDescribeStacks,
    FakeDescribeSubnets,
    FakeDescribeVpcs,
    FakeUpdateStack,
    client_error,
    event,
    no_updates_error,
    not_found_error,
    stacks,
)


class TestStackExists:
    def test_not_found_error_means_absent(self, backend):
        backend.describe = FakeDescribeStacks([not_found_error()])

        assert backend.deployer().stack_exists("mint-admin") is False

    def test_delete_complete_means_absent(self, backend):
        backend.describe = FakeDescribeStacks([stacks("DELETE_COMPLETE")])

        assert backend.deployer().stack_exists("mint-admin") is False

    def test_empty_result_means_absent(self, backend):
        backend.describe = FakeDescribeStacks([{"Stacks": []}])

        assert backend.deployer().stack_exists("mint-admin") is False

    @pytest.mark.parametrize("status", ["CREATE_COMPLETE", "ROLLBACK_COMPLETE", "UPDATE_IN_PROGRESS"])
    def test_existing_stack(self, backend, status):
        backend.describe = FakeDescribeStacks([stacks(status)])

        assert backend.deployer().stack_exists("mint-admin") is True

    def test_other_errors_propagate(self, backend):
        backend.describe = FakeDescribeStacks([client_error("Rate exceeded", code="Throttling")])

        with pytest.raises(AWSOperationError) as exc:
            backend.deployer().stack_exists("mint-admin")

        assert exc.value.operation == "describe stack"
        assert exc.value.stack_name == "mint-admin"


class TestRoute:
    def test_creates_when_absent(self, backend):
        params = build_parameters("vpc-1", ["subnet-a"])

        operation = backend.deployer().route("mint-admin", params, exists=False)

        assert operation == StackOperation.CREATE
        assert len(backend.create.calls) == 1
        assert not backend.update.called

        request = backend.create.calls[0]
        assert request["StackName"] == "mint-admin"
        assert request["Capabilities"] == ["CAPABILITY_NAMED_IAM"]
        assert request["TemplateBody"].startswith("AWSTemplateFormatVersion")
        assert len(request["Parameters"]) == 7

    def test_updates_when_present(self, backend):
        operation = backend.deployer().route("mint-admin", build_parameters("vpc-1", []), exists=True)

        assert operation == StackOperation.UPDATE
        assert len(backend.update.calls) == 1
        assert backend.update.calls[0]["Capabilities"] == ["CAPABILITY_NAMED_IAM"]
        assert not backend.create.called

    def test_looks_up_existence_when_not_given(self, backend):
        backend.describe = FakeDescribeStacks([stacks("CREATE_COMPLETE")])

        operation = backend.deployer().route("mint-admin", build_parameters("vpc-1", []))

        assert operation == StackOperation.UPDATE

    def test_no_updates_is_a_no_op(self, backend):
        backend.update = FakeUpdateStack(error=no_updates_error())

        operation = backend.deployer().route("mint-admin", build_parameters("vpc-1", []), exists=True)

        assert operation == StackOperation.NO_OP

    def test_update_failure_is_wrapped(self, backend):
        backend.update = FakeUpdateStack(error=client_error("Template format error"))

        with pytest.raises(AWSOperationError) as exc:
            backend.deployer().route("mint-admin", build_parameters("vpc-1", []), exists=True)

        assert exc.value.operation == "update stack"

    def test_create_failure_is_not_retried(self, backend):
        backend.create.error = client_error("Limit exceeded", code="LimitExceededException")

        with pytest.raises(AWSOperationError):
            backend.deployer().route("mint-admin", build_parameters("vpc-1", []), exists=False)

        assert len(backend.create.calls) == 1


class TestWaitForStack:
    def test_event_fetch_failure_is_a_warning(self, backend, sink):
        backend.describe = FakeDescribeStacks(
            [stacks("CREATE_IN_PROGRESS"), stacks("CREATE_COMPLETE")]
        )
        backend.events = FakeDescribeStackEvents(
            [client_error("Rate exceeded", code="Throttling"), {"StackEvents": [event("e1", 1)]}]
        )

        state = backend.deployer().wait_for_stack("mint-admin", START, sink)

        assert state.status == "CREATE_COMPLETE"
        output = sink.getvalue()
        assert output.startswith("warning: could not fetch stack events:")
        assert "e1  EfsFileSystem" in output

    def test_stack_disappearing_is_fatal(self, backend):
        backend.describe = FakeDescribeStacks([stacks("CREATE_IN_PROGRESS"), {"Stacks": []}])

        with pytest.raises(StackDisappearedError):
            backend.deployer().wait_for_stack("mint-admin", START)

        assert backend.describe.calls == 2

    def test_poll_error_is_wrapped(self, backend):
        backend.describe = FakeDescribeStacks([client_error("Internal failure", code="InternalFailure")])

        with pytest.raises(AWSOperationError) as exc:
            backend.deployer().wait_for_stack("mint-admin", START)

        assert exc.value.operation == "poll stack status"

    @pytest.mark.parametrize("status", ["ROLLBACK_COMPLETE", "UPDATE_ROLLBACK_COMPLETE", "UPDATE_FAILED"])
    def test_failure_statuses_raise(self, backend, status):
        backend.describe = FakeDescribeStacks([stacks(status)])

        with pytest.raises(StackFailedError) as exc:
            backend.deployer().wait_for_stack("mint-admin", START)

        assert exc.value.status == status

    def test_cancelled_before_polling(self, backend):
        token = CancellationToken()
        token.cancel()

        with pytest.raises(DeploymentCancelledError) as exc:
            backend.deployer().wait_for_stack("mint-admin", START, cancellation=token)

        assert exc.value.reason == "cancelled"
        assert backend.describe.calls == 0

    def test_cancel_interrupts_poll_interval(self, backend, sink):
        token = CancellationToken()

        class CancellingEvents(FakeDescribeStackEvents):
            def describe_stack_events(self, **kwargs):
                token.cancel()
                return super().describe_stack_events(**kwargs)

        backend.describe = FakeDescribeStacks([stacks("CREATE_IN_PROGRESS")])
        backend.events = CancellingEvents([{"StackEvents": []}])

        with pytest.raises(DeploymentCancelledError):
            backend.deployer(poll_interval=3600).wait_for_stack(
                "mint-admin", START, sink, cancellation=token
            )

        assert backend.describe.calls == 1

    def test_cancel_during_status_call_wins_over_success(self, backend, sink):
        token = CancellationToken()

        class CancellingDescribe(FakeDescribeStacks):
            def describe_stacks(self, **kwargs):
                token.cancel()
                return super().describe_stacks(**kwargs)

        backend.describe = CancellingDescribe([stacks("CREATE_COMPLETE", FOUR_OUTPUTS)])

        with pytest.raises(DeploymentCancelledError):
            backend.deployer().wait_for_stack("mint-admin", START, sink, cancellation=token)

        assert backend.events.calls == 0

    def test_stack_deleted_mid_poll_is_disappeared(self, backend):
        backend.describe = FakeDescribeStacks([stacks("UPDATE_IN_PROGRESS"), not_found_error()])

        with pytest.raises(StackDisappearedError) as exc:
            backend.deployer().wait_for_stack("mint-admin", START)

        assert exc.value.stack_name == "mint-admin"

    def test_deadline_stops_polling(self, backend):
        ticks = iter([0.0, 0.0, 10.0])
        token = CancellationToken(deadline=5.0, clock=lambda: next(ticks, 10.0))
        backend.describe = FakeDescribeStacks([stacks("CREATE_IN_PROGRESS")])

        with pytest.raises(DeploymentCancelledError) as exc:
            backend.deployer(poll_interval=3600).wait_for_stack(
                "mint-admin", START, cancellation=token
            )

        assert exc.value.reason == "deadline exceeded"
        assert backend.describe.calls == 1


class TestCollectOutputs:
    def test_maps_known_keys_and_ignores_unknown(self, backend):
        outputs = dict(FOUR_OUTPUTS, SomethingNew="ignored")
        backend.describe = FakeDescribeStacks([stacks("CREATE_COMPLETE", outputs)])

        result = backend.deployer().collect_outputs("mint-admin")

        assert result.stack_name == "mint-admin"
        assert result.efs_file_system_id == "fs-0123"
        assert result.efs_security_group_id == "sg-0456"
        assert result.instance_profile_arn.endswith("instance-profile/mint")
        assert result.pass_role_policy_arn.endswith("policy/mint-pass-role")
        assert "SomethingNew" not in result.to_dict()

    def test_missing_outputs_default_to_empty(self, backend):
        backend.describe = FakeDescribeStacks([stacks("CREATE_COMPLETE", {"EfsFileSystemId": "fs-1"})])

        result = backend.deployer().collect_outputs("mint-admin")

        assert result.efs_file_system_id == "fs-1"
        assert result.instance_profile_arn == ""

    def test_missing_stack(self, backend):
        backend.describe = FakeDescribeStacks([{"Stacks": []}])

        with pytest.raises(StackNotFoundError):
            backend.deployer().collect_outputs("mint-admin")


class TestDeploy:
    def test_create_flow(self, backend, sink):
        """No stack yet: create, one in-progress poll, then CREATE_COMPLETE."""
        backend.vpcs = FakeDescribeVpcs(["net-1"])
        backend.subnets = FakeDescribeSubnets(["sub-1", "sub-2"])
        backend.describe = FakeDescribeStacks(
            [
                not_found_error(),
                stacks("CREATE_IN_PROGRESS"),
                stacks("CREATE_COMPLETE", FOUR_OUTPUTS),
            ]
        )
        backend.events = FakeDescribeStackEvents(
            [
                {"StackEvents": [event("e1", 1, logical_id="mint-admin")]},
                {
                    "StackEvents": [
                        event("e3", 3, status="CREATE_COMPLETE", logical_id="mint-admin"),
                        event("e2", 2, status="CREATE_COMPLETE"),
                        event("e1", 1, logical_id="mint-admin"),
                    ]
                },
            ]
        )

        result = backend.deployer().deploy(DeploymentRequest("mint-admin", sink))

        assert result.efs_file_system_id == "fs-0123"
        assert result.efs_security_group_id == "sg-0456"
        assert result.instance_profile_arn == FOUR_OUTPUTS["InstanceProfileArn"]
        assert result.pass_role_policy_arn == FOUR_OUTPUTS["PassRolePolicyArn"]
        assert len(backend.create.calls) == 1
        assert not backend.update.called

        params = {p["ParameterKey"]: p["ParameterValue"] for p in backend.create.calls[0]["Parameters"]}
        assert params["VpcId"] == "net-1"
        assert params["Subnet1"] == "sub-1"
        assert params["Subnet2"] == "sub-2"
        assert params["Subnet3"] == ""
        assert backend.subnets.filters == [{"Name": "vpc-id", "Values": ["net-1"]}]

        lines = sink.getvalue().splitlines()
        assert [line.split()[0] for line in lines] == ["e1", "e2", "e3"]

    def test_update_with_no_changes(self, backend, sink):
        backend.describe = FakeDescribeStacks(
            [stacks("UPDATE_COMPLETE"), stacks("UPDATE_COMPLETE", FOUR_OUTPUTS)]
        )
        backend.update = FakeUpdateStack(error=client_error("No updates are to be performed."))

        result = backend.deployer().deploy(DeploymentRequest("mint-admin", sink))

        assert result.efs_file_system_id == "fs-0123"
        assert len(backend.update.calls) == 1
        assert not backend.create.called

    def test_no_default_vpc(self, backend):
        backend.vpcs = FakeDescribeVpcs([])

        with pytest.raises(NoDefaultVPCError) as exc:
            backend.deployer().deploy(DeploymentRequest("mint-admin"))

        assert "no default VPC" in str(exc.value)
        assert backend.describe.calls == 0
        assert not backend.create.called
        assert not backend.update.called

    def test_create_failed(self, backend, sink):
        backend.describe = FakeDescribeStacks(
            [not_found_error(), stacks("CREATE_IN_PROGRESS"), stacks("CREATE_FAILED")]
        )

        with pytest.raises(StackFailedError) as exc:
            backend.deployer().deploy(DeploymentRequest("mint-admin", sink))

        assert "mint-admin" in str(exc.value)
        assert "CREATE_FAILED" in str(exc.value)

    def test_describe_vpcs_failure(self, backend):
        backend.vpcs = FakeDescribeVpcs(error=client_error("Unauthorized", code="UnauthorizedOperation"))

        with pytest.raises(AWSOperationError) as exc:
            backend.deployer().deploy(DeploymentRequest("mint-admin"))

        assert exc.value.operation == "describe VPCs"

    def test_default_stack_name(self, backend):
        backend.describe = FakeDescribeStacks(
            [not_found_error(), stacks("CREATE_COMPLETE", FOUR_OUTPUTS)]
        )

        result = backend.deployer().deploy(DeploymentRequest(""))

        assert result.stack_name == "mint-admin"
        assert backend.create.calls[0]["StackName"] == "mint-admin"

    def test_stale_events_filtered_by_start_time(self, backend, sink):
        backend.describe = FakeDescribeStacks(
            [stacks("UPDATE_COMPLETE"), stacks("UPDATE_COMPLETE", FOUR_OUTPUTS)]
        )
        backend.events = FakeDescribeStackEvents(
            [{"StackEvents": [event("now", 1, status="UPDATE_COMPLETE"), event("last-week", -604800)]}]
        )

        backend.deployer().deploy(DeploymentRequest("mint-admin", sink))

        assert "now" in sink.getvalue()
        assert "last-week" not in sink.getvalue()

    def test_cancel_on_final_poll_skips_outputs(self, backend):
        token = CancellationToken()

        class CancelOnConverge(FakeDescribeStacks):
            def describe_stacks(self, **kwargs):
                if self.calls == 1:
                    token.cancel()
                return super().describe_stacks(**kwargs)

        backend.describe = CancelOnConverge(
            [not_found_error(), stacks("CREATE_COMPLETE", FOUR_OUTPUTS)]
        )

        with pytest.raises(DeploymentCancelledError):
            backend.deployer().deploy(DeploymentRequest("mint-admin"), token)

        assert backend.describe.calls == 2

    def test_cancelled_before_start(self, backend):
        token = CancellationToken()
        token.cancel()

        with pytest.raises(DeploymentCancelledError):
            backend.deployer().deploy(DeploymentRequest("mint-admin"), token)

        assert backend.vpcs.calls == 0
