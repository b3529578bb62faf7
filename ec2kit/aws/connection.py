"""EC2 connection manager.

A :class:`Connection` owns at most one boto3 EC2 client.  It starts
uninitialized, becomes ready after :meth:`Connection.init` with a valid
region, and returns to uninitialized on :meth:`Connection.close`.

The object is shared mutable state: calling ``init`` or ``close`` while
operations are in flight on another thread gives undefined results.  No
locking is done here.
"""

from __future__ import annotations

from typing import Any

import boto3

from ec2kit.base.config import validate_config
from ec2kit.base.logger import ec2_logger
from ec2kit.base.validate import check_initialized, check_valid_region


class Connection:
    """Holder for a single region-bound EC2 client.

    Attributes:
        handle: The live boto3 EC2 client, or ``None`` when uninitialized.
    """

    def __init__(self) -> None:
        self.handle: Any = None

    def init(self, region: str, config: dict[str, Any] | None = None) -> None:
        """Bind the connection to *region*, replacing any existing client.

        The new client is installed before the previous one is closed, so an
        error from that close leaves the connection ready on *region*.

        Args:
            region: One of :data:`~ec2kit.base.supported_regions.VALID_REGIONS`.
            config: Optional client options (``aws_access_key_id``,
                ``aws_secret_access_key``, ``aws_session_token``,
                ``endpoint_url``, ``api_version``).

        Raises:
            EmptyValueError: If *region* is empty.
            InvalidRegionError: If *region* is not a known EC2 region.
            pydantic.ValidationError: If *config* is invalid.
        """
        check_valid_region(region)
        cfg = validate_config(region, config)

        client = boto3.client("ec2", **cfg.client_kwargs())
        previous, self.handle = self.handle, client
        ec2_logger.info("EC2 connection initialized", region=region, operation="init")
        if previous is not None:
            previous.close()

    def close(self) -> None:
        """Release the client and return to the uninitialized state.

        The handle is dropped even if closing the client raises.
        """
        if self.handle is None:
            return
        handle, self.handle = self.handle, None
        try:
            handle.close()
        finally:
            ec2_logger.debug(
                "EC2 connection closed",
                region=handle.meta.region_name,
                operation="close",
            )

    @property
    def is_initialized(self) -> bool:
        return self.handle is not None

    @property
    def client(self) -> Any:
        """The live EC2 client.

        Raises:
            NotInitializedError: If :meth:`init` has not been called.
        """
        check_initialized(self.handle)
        return self.handle

    def get_region(self) -> str:
        """Return the region the client was built for.

        Raises:
            NotInitializedError: If the connection is not initialized.
        """
        check_initialized(self.handle)
        return self.handle.meta.region_name  # type: ignore[no-any-return]

    def __repr__(self) -> str:
        if self.handle is None:
            return "Connection(uninitialized)"
        return f"Connection(region={self.handle.meta.region_name!r})"
