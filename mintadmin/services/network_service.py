"""
Network Discovery Service

Finds the region's default VPC and its subnets.
"""

from mintadmin.aws.clients import DescribeVpcsAPI, DescribeSubnetsAPI
from mintadmin.exceptions import AWSOperationError, NoDefaultVPCError
from mintadmin.models.stack import NetworkContext


class NetworkDiscoverer:
    """
    Default VPC discovery.

    Responsibilities:
    - Locate the default VPC
    - List its subnets in the order EC2 returns them
    """

    def __init__(self, ec2_vpcs: DescribeVpcsAPI, ec2_subnets: DescribeSubnetsAPI):
        self.ec2_vpcs = ec2_vpcs
        self.ec2_subnets = ec2_subnets

    def discover(self) -> NetworkContext:
        """
        Discover the default VPC and its subnets.

        Returns:
            NetworkContext

        Raises:
            NoDefaultVPCError: If the region has no default VPC
            AWSOperationError: If an EC2 call fails
        """
        try:
            response = self.ec2_vpcs.describe_vpcs(
                Filters=[{"Name": "isDefault", "Values": ["true"]}]
            )
        except Exception as e:
            raise AWSOperationError("describe VPCs", e)

        vpcs = response.get("Vpcs") or []
        if not vpcs:
            raise NoDefaultVPCError()

        vpc_id = vpcs[0].get("VpcId", "")

        try:
            response = self.ec2_subnets.describe_subnets(
                Filters=[{"Name": "vpc-id", "Values": [vpc_id]}]
            )
        except Exception as e:
            raise AWSOperationError(f"describe subnets for VPC {vpc_id}", e)

        subnet_ids = tuple(
            subnet.get("SubnetId", "") for subnet in response.get("Subnets") or []
        )
        return NetworkContext(vpc_id=vpc_id, subnet_ids=subnet_ids)
