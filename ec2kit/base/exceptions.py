"""
ec2kit exception hierarchy.

Local validation failures raise one of the classes below, each tagged with
a ``code`` and carrying the fixed message from :data:`ERRORS`.  Errors from
the EC2 API itself (``botocore.exceptions.ClientError``) are never wrapped:
they reach the caller with the provider's error code intact.
"""


ERRORS: dict[str, str] = {
    "NOT_INITIALIZED": "EC2 not initialized. Please call Connection.init() with a valid region.",
    "EMPTY_VALUE": "You provided an empty argument. Please try again with the correct arguments.",
    "INVALID_REGION": "Region is invalid. Please try again with a valid region.",
    "INVALID_IP": "IP address is invalid. Please try again with a valid IPv4 address.",
    "INVALID_STATE": "Status is invalid. Please try again with a valid status.",
}
ERRORS["INVALID_STATUS"] = ERRORS["INVALID_STATE"]


# ── Base ──────────────────────────────────────────────────────────────
class EC2KitError(Exception):
    """Root exception for all ec2kit errors."""

    code: str = ""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or ERRORS.get(self.code, ""))


# ── Connection ────────────────────────────────────────────────────────
class NotInitializedError(EC2KitError):
    """An operation was attempted before ``Connection.init``."""

    code = "NOT_INITIALIZED"


# ── Arguments ─────────────────────────────────────────────────────────
class InvalidArgumentError(EC2KitError, ValueError):
    """Base exception for rejected operation arguments."""


class EmptyValueError(InvalidArgumentError):
    """Argument is None or an empty string / sequence / mapping."""

    code = "EMPTY_VALUE"


class InvalidRegionError(InvalidArgumentError):
    """Region is not one of the supported EC2 regions."""

    code = "INVALID_REGION"


class InvalidIpAddressError(InvalidArgumentError):
    """Value is not an IPv4 dotted-quad address."""

    code = "INVALID_IP"


class InvalidStateError(InvalidArgumentError):
    """Value is not a known instance state name."""

    code = "INVALID_STATE"
