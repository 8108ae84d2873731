"""
Stack Parameter Builder

Maps the discovered VPC and subnets onto the admin template's fixed
parameter schema: VpcId plus Subnet1..Subnet6.
"""

from typing import Dict, List, Sequence

from mintadmin.constants import (
    MAX_SUBNET_SLOTS,
    SUBNET_PARAMETER_FORMAT,
    VPC_PARAMETER,
)


def build_parameters(vpc_id: str, subnet_ids: Sequence[str]) -> Dict[str, str]:
    """
    Build the stack parameter set.

    The template declares all six subnet parameters, so every slot is
    present; slots without a subnet get an empty string. Subnets beyond the
    sixth are dropped. Subnet order is kept as given.

    Args:
        vpc_id: Default VPC id
        subnet_ids: Subnet ids in discovery order

    Returns:
        Ordered mapping of parameter name to value (always 7 entries)
    """
    parameters = {VPC_PARAMETER: vpc_id}

    for index in range(1, MAX_SUBNET_SLOTS + 1):
        key = SUBNET_PARAMETER_FORMAT.format(index=index)
        if index <= len(subnet_ids):
            parameters[key] = subnet_ids[index - 1]
        else:
            parameters[key] = ""

    return parameters


def to_cfn_parameters(parameters: Dict[str, str]) -> List[Dict[str, str]]:
    """Convert a parameter mapping to CloudFormation's Parameters list."""
    return [
        {"ParameterKey": key, "ParameterValue": value}
        for key, value in parameters.items()
    ]
