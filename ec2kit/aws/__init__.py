"""AWS EC2 implementations."""

from .compute import Compute
from .connection import Connection

__all__ = [
    "Compute",
    "Connection",
]
