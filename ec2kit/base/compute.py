"""Compute (EC2 instance) operation blueprint."""

from abc import ABC, abstractmethod
from typing import Any, TypedDict


class StateTransition(TypedDict):
    """State change reported by stop / start / terminate."""

    previous_state: str
    current_state: str


class ComputeBlueprint(ABC):
    """Abstract interface for instance queries and lifecycle calls.

    Every method checks that the connection is initialized before it looks
    at its arguments, and validates arguments before making any request.
    Instance records are returned exactly as the provider sends them.
    """

    @abstractmethod
    def get_region(self) -> str:
        """Return the region the underlying connection is bound to."""

    @abstractmethod
    def get_all_instances(self) -> list[dict[str, Any]]:
        """Return every instance in the region, flattened across reservations."""

    @abstractmethod
    def get_instances_by_state(self, state: str) -> list[dict[str, Any]]:
        """Return the instances whose state name equals *state*.

        Args:
            state: One of ``pending``, ``running``, ``shutting-down``,
                ``terminated``, ``stopping``, ``stopped``.
        """

    @abstractmethod
    def get_instance_by_id(self, instance_id: str) -> dict[str, Any]:
        """Return the instance with *instance_id*, or ``{}`` if nothing matched."""

    @abstractmethod
    def get_instance_by_ip_address(self, ip_address: str) -> dict[str, Any]:
        """Return the instance with public IPv4 *ip_address*, or ``{}``."""

    @abstractmethod
    def get_instance_ip_address(self, instance_id: str) -> str | None:
        """Return the public IPv4 address of an instance, if it has one."""

    @abstractmethod
    def get_instance_status(self, instance_id: str) -> str | None:
        """Return the state name of an instance, or ``None`` if nothing matched."""

    @abstractmethod
    def launch_instance(
        self,
        image_id: str,
        instance_type: str,
        key_name: str,
        security_group_id: str,
        tag_name: str,
    ) -> str:
        """Launch one instance, tag it with ``Name=<tag_name>`` and return its ID.

        Args:
            image_id: AMI ID.
            instance_type: Instance type (e.g. ``t2.micro``).
            key_name: Key pair name for SSH access.
            security_group_id: Security group the instance joins.
            tag_name: Value for the ``Name`` tag.

        Returns:
            Instance ID.
        """

    @abstractmethod
    def stop_instance(self, instance_id: str) -> StateTransition:
        """Stop a running instance (keep disk)."""

    @abstractmethod
    def start_instance(self, instance_id: str) -> StateTransition:
        """Start a stopped instance."""

    @abstractmethod
    def terminate_instance(self, instance_id: str) -> StateTransition:
        """Terminate (destroy) an instance."""
