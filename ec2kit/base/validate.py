"""Argument guards run before any request reaches EC2.

Every check is a pure function that returns ``None`` on success and raises
a subclass of :class:`~ec2kit.base.exceptions.EC2KitError` on failure, so
they can be chained freely::

    check_initialized(conn.handle)
    check_valid_ip_address(ip)
"""

from __future__ import annotations

import ipaddress
from collections.abc import Sized
from typing import Any

from ec2kit.base.exceptions import (
    EmptyValueError,
    InvalidIpAddressError,
    InvalidRegionError,
    InvalidStateError,
    NotInitializedError,
)
from ec2kit.base.supported_regions import VALID_REGIONS, VALID_STATES


def check_initialized(conn: Any) -> None:
    """Raise :class:`NotInitializedError` if the connection handle is ``None``."""
    if conn is None:
        raise NotInitializedError()


def check_not_empty(value: Any) -> None:
    """Raise :class:`EmptyValueError` for ``None`` or any zero-length value.

    Strings, lists, tuples and mappings all count as empty at length 0.
    Values without a length (``0``, ``False``) are accepted.
    """
    if value is None or (isinstance(value, Sized) and len(value) == 0):
        raise EmptyValueError()


def check_valid_region(region: Any) -> None:
    """Check that *region* is one of :data:`VALID_REGIONS`."""
    check_not_empty(region)

    if region not in VALID_REGIONS:
        raise InvalidRegionError()


def check_valid_ip_address(ip_address: Any) -> None:
    """Check that *ip_address* is an IPv4 dotted-quad string."""
    check_not_empty(ip_address)

    # IPv4Address also accepts ints and packed bytes
    if not isinstance(ip_address, str):
        raise InvalidIpAddressError()
    try:
        ipaddress.IPv4Address(ip_address)
    except ipaddress.AddressValueError as e:
        raise InvalidIpAddressError() from e


def check_valid_state(state: Any) -> None:
    """Check that *state* is one of :data:`VALID_STATES`."""
    check_not_empty(state)

    if state not in VALID_STATES:
        raise InvalidStateError()


__all__ = [
    "check_initialized",
    "check_not_empty",
    "check_valid_region",
    "check_valid_ip_address",
    "check_valid_state",
]
