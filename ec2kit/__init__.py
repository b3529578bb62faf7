"""ec2kit: validated, thin wrapper over the AWS EC2 instance API.

Import :func:`connect` to get a ready service with a single call::

    from ec2kit import connect

    ec2 = connect("eu-west-1")
    running = ec2.get_instances_by_state("running")
"""

from .base import (
    ComputeBlueprint,
    StateTransition,
    ERRORS,
    EC2KitError,
    NotInitializedError,
    InvalidArgumentError,
    EmptyValueError,
    InvalidRegionError,
    InvalidIpAddressError,
    InvalidStateError,
    VALID_REGIONS,
    VALID_STATES,
    check_initialized,
    check_not_empty,
    check_valid_region,
    check_valid_ip_address,
    check_valid_state,
)
from .aws import Compute, Connection
from .factory import connect

__all__ = [
    "ComputeBlueprint",
    "StateTransition",
    "ERRORS",
    "EC2KitError",
    "NotInitializedError",
    "InvalidArgumentError",
    "EmptyValueError",
    "InvalidRegionError",
    "InvalidIpAddressError",
    "InvalidStateError",
    "VALID_REGIONS",
    "VALID_STATES",
    "check_initialized",
    "check_not_empty",
    "check_valid_region",
    "check_valid_ip_address",
    "check_valid_state",
    "Compute",
    "Connection",
    "connect",
]
