"""Operation blueprint, validation and core utilities.

Import from here to type-hint your own code or to reuse the validators.
"""

from .compute import ComputeBlueprint, StateTransition
from .exceptions import (
    ERRORS,
    EC2KitError,
    NotInitializedError,
    InvalidArgumentError,
    EmptyValueError,
    InvalidRegionError,
    InvalidIpAddressError,
    InvalidStateError,
)
from .supported_regions import Region, InstanceState, VALID_REGIONS, VALID_STATES
from .validate import (
    check_initialized,
    check_not_empty,
    check_valid_region,
    check_valid_ip_address,
    check_valid_state,
)


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
    "Region",
    "InstanceState",
    "VALID_REGIONS",
    "VALID_STATES",
    "check_initialized",
    "check_not_empty",
    "check_valid_region",
    "check_valid_ip_address",
    "check_valid_state",
]
