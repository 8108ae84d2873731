import io

import pytest

from mintadmin.core.template import StackTemplate
from mintadmin.services.deployer import StackDeployer
from tests.fakes import (
    START,
    FakeCreateStack,
    FakeDescribeStackEvents,
    FakeDescribeStacks,
    FakeDescribeSubnets,
    FakeDescribeVpcs,
    FakeUpdateStack,
)

TEST_TEMPLATE = StackTemplate(body="AWSTemplateFormatVersion: '2010-09-09'\n", source="test")


class Backend:
    """Holds one fake per AWS operation for a single test."""

    def __init__(self):
        self.create = FakeCreateStack()
        self.update = FakeUpdateStack()
        self.describe = FakeDescribeStacks([{"Stacks": []}])
        self.events = FakeDescribeStackEvents([{"StackEvents": []}])
        self.vpcs = FakeDescribeVpcs(["vpc-1"])
        self.subnets = FakeDescribeSubnets([])

    def deployer(self, **kwargs) -> StackDeployer:
        kwargs.setdefault("poll_interval", 0)
        kwargs.setdefault("clock", lambda: START)
        return StackDeployer(
            cfn_create=self.create,
            cfn_update=self.update,
            cfn_describe=self.describe,
            cfn_events=self.events,
            ec2_vpcs=self.vpcs,
            ec2_subnets=self.subnets,
            template=TEST_TEMPLATE,
            **kwargs,
        )


@pytest.fixture
def backend():
    return Backend()


@pytest.fixture
def sink():
    return io.StringIO()
