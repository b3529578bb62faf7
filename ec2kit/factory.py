"""Compute factory.

Provides :func:`connect`, the single entry-point for getting a ready
:class:`~ec2kit.aws.compute.Compute` bound to a region.
"""

from typing import Any

from ec2kit.aws.compute import Compute
from ec2kit.aws.connection import Connection
from ec2kit.base.supported_regions import Region


def connect(region: Region, config: dict[str, Any] | None = None) -> Compute:
    """
    Initialize a new connection for *region* and wrap it in a Compute service.
    Args:
        region: The AWS region (e.g. 'eu-west-1').
        config: Optional client options passed to :meth:`Connection.init`.
    Returns:
        A :class:`Compute` whose ``connection`` is ready.
    Raises:
        EmptyValueError: If the region is empty.
        InvalidRegionError: If the region is not supported.
    """
    connection = Connection()
    connection.init(region, config)
    return Compute(connection)
