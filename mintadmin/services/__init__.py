"""
mint-admin Services Layer

Network discovery, parameter building, event streaming, the stack
deployer and permission set policy attachment.
"""

from .deployer import StackDeployer
from .event_streamer import EventStreamer
from .network_service import NetworkDiscoverer
from .parameters import build_parameters, to_cfn_parameters
from .policy_attacher import PolicyAttacher

__all__ = [
    "StackDeployer",
    "EventStreamer",
    "NetworkDiscoverer",
    "PolicyAttacher",
    "build_parameters",
    "to_cfn_parameters",
]
