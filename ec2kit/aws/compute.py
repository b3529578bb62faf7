"""AWS EC2 implementation of the Compute blueprint."""

from __future__ import annotations

from typing import Any

from botocore.exceptions import ClientError

from ec2kit.aws.connection import Connection
from ec2kit.base.async_support import AsyncMixin
from ec2kit.base.compute import ComputeBlueprint, StateTransition
from ec2kit.base.logger import ec2_logger
from ec2kit.base.validate import (
    check_not_empty,
    check_valid_ip_address,
    check_valid_state,
)


def _flatten(resp: dict[str, Any]) -> list[dict[str, Any]]:
    """Collapse ``describe_instances`` reservations into one list of instances."""
    return [
        inst
        for reservation in resp.get("Reservations", [])
        for inst in reservation.get("Instances", [])
    ]


def _first_instance(resp: dict[str, Any]) -> dict[str, Any]:
    reservations = resp.get("Reservations", [])
    if not reservations or not reservations[0].get("Instances"):
        return {}
    return reservations[0]["Instances"][0]  # type: ignore[no-any-return]


def _transition(entries: list[dict[str, Any]]) -> StateTransition:
    entry = entries[0]
    return {
        "previous_state": entry["PreviousState"]["Name"],
        "current_state": entry["CurrentState"]["Name"],
    }


class Compute(ComputeBlueprint, AsyncMixin):
    """AWS EC2 instance operations over a :class:`Connection`.

    Client errors are logged and re-raised untouched, so
    ``e.response["Error"]["Code"]`` still holds the EC2 error code.

    Attributes:
        connection: The connection every call goes through.
    """

    def __init__(self, connection: Connection) -> None:
        self.connection = connection

    def _bind(self) -> tuple[Any, str]:
        """Return the live client and its region, read once before the request."""
        client = self.connection.client
        return client, client.meta.region_name

    def get_region(self) -> str:
        return self.connection.get_region()

    def get_all_instances(self) -> list[dict[str, Any]]:
        """List every instance in the region.

        Returns:
            Raw EC2 instance dicts in provider order.

        Raises:
            NotInitializedError: If the connection is not initialized.
            botocore.exceptions.ClientError: On EC2 API failure.
        """
        client, region = self._bind()
        try:
            resp = client.describe_instances(DryRun=False)
        except ClientError as e:
            ec2_logger.log_client_error(e, operation="get_all_instances", region=region)
            raise
        instances = _flatten(resp)
        ec2_logger.info(
            f"Found {len(instances)} instances",
            region=region,
            operation="get_all_instances",
        )
        return instances

    def get_instances_by_state(self, state: str) -> list[dict[str, Any]]:
        """List instances in a given state, filtered server-side.

        Raises:
            NotInitializedError: If the connection is not initialized.
            EmptyValueError: If *state* is empty.
            InvalidStateError: If *state* is not a known state name.
            botocore.exceptions.ClientError: On EC2 API failure.
        """
        client, region = self._bind()
        check_valid_state(state)
        try:
            resp = client.describe_instances(
                Filters=[{"Name": "instance-state-name", "Values": [state]}],
            )
        except ClientError as e:
            ec2_logger.log_client_error(e, operation="get_instances_by_state", region=region)
            raise
        instances = _flatten(resp)
        ec2_logger.info(
            f"Found {len(instances)} {state} instances",
            region=region,
            operation="get_instances_by_state",
        )
        return instances

    get_instances_by_status = get_instances_by_state

    def get_instance_by_id(self, instance_id: str) -> dict[str, Any]:
        """Get a single instance by ID.

        Returns:
            The raw instance dict, or ``{}`` if EC2 returned no reservation.

        Raises:
            NotInitializedError: If the connection is not initialized.
            EmptyValueError: If *instance_id* is empty.
            botocore.exceptions.ClientError: e.g. ``InvalidInstanceID.Malformed``.
        """
        client, region = self._bind()
        check_not_empty(instance_id)
        try:
            resp = client.describe_instances(InstanceIds=[instance_id])
        except ClientError as e:
            ec2_logger.log_client_error(
                e, operation="get_instance_by_id", region=region, instance_id=instance_id
            )
            raise
        return _first_instance(resp)

    def get_instance_by_ip_address(self, ip_address: str) -> dict[str, Any]:
        """Get the instance that owns a public IPv4 address.

        Returns:
            The raw instance dict, or ``{}`` if no instance has that address.

        Raises:
            NotInitializedError: If the connection is not initialized.
            EmptyValueError: If *ip_address* is empty.
            InvalidIpAddressError: If *ip_address* is not IPv4.
            botocore.exceptions.ClientError: On EC2 API failure.
        """
        client, region = self._bind()
        check_valid_ip_address(ip_address)
        try:
            resp = client.describe_instances(
                Filters=[{"Name": "ip-address", "Values": [ip_address]}],
            )
        except ClientError as e:
            ec2_logger.log_client_error(e, operation="get_instance_by_ip_address", region=region)
            raise
        return _first_instance(resp)

    def get_instance_ip_address(self, instance_id: str) -> str | None:
        """Return the instance's ``PublicIpAddress``, or ``None`` if it has none."""
        return self.get_instance_by_id(instance_id).get("PublicIpAddress")

    def get_instance_status(self, instance_id: str) -> str | None:
        """Return the state name of an instance.

        Stopped instances are included (``IncludeAllInstances``).

        Returns:
            State name such as ``running``, or ``None`` if EC2 reported no status.

        Raises:
            NotInitializedError: If the connection is not initialized.
            EmptyValueError: If *instance_id* is empty.
            botocore.exceptions.ClientError: On EC2 API failure.
        """
        client, region = self._bind()
        check_not_empty(instance_id)
        try:
            resp = client.describe_instance_status(
                InstanceIds=[instance_id],
                IncludeAllInstances=True,
            )
        except ClientError as e:
            ec2_logger.log_client_error(
                e, operation="get_instance_status", region=region, instance_id=instance_id
            )
            raise
        statuses = resp.get("InstanceStatuses", [])
        if not statuses:
            return None
        return statuses[0]["InstanceState"]["Name"]  # type: ignore[no-any-return]

    def launch_instance(
        self,
        image_id: str,
        instance_type: str,
        key_name: str,
        security_group_id: str,
        tag_name: str,
    ) -> str:
        """Launch one EC2 instance and tag it with ``Name``.

        Two requests are made: ``run_instances`` then ``create_tags``.  If
        tagging fails the instance is left running and the error is raised.

        Returns:
            Instance ID.

        Raises:
            NotInitializedError: If the connection is not initialized.
            EmptyValueError: If any argument is empty.
            botocore.exceptions.ClientError: e.g. ``InvalidAMIID.Malformed``.
        """
        client, region = self._bind()
        for value in (image_id, instance_type, key_name, security_group_id, tag_name):
            check_not_empty(value)

        try:
            resp = client.run_instances(
                ImageId=image_id,
                InstanceType=instance_type,
                KeyName=key_name,
                SecurityGroupIds=[security_group_id],
                MinCount=1,
                MaxCount=1,
            )
        except ClientError as e:
            ec2_logger.log_client_error(e, operation="launch_instance", region=region)
            raise
        instance_id: str = resp["Instances"][0]["InstanceId"]

        try:
            client.create_tags(
                Resources=[instance_id],
                Tags=[{"Key": "Name", "Value": tag_name}],
            )
        except ClientError as e:
            ec2_logger.log_client_error(
                e, operation="launch_instance", region=region, instance_id=instance_id
            )
            raise
        ec2_logger.info(
            f"Launched instance {tag_name!r}",
            region=region,
            operation="launch_instance",
            instance_id=instance_id,
        )
        return instance_id

    def stop_instance(self, instance_id: str) -> StateTransition:
        """Stop a running EC2 instance (preserves EBS volumes).

        Raises:
            NotInitializedError: If the connection is not initialized.
            EmptyValueError: If *instance_id* is empty.
            botocore.exceptions.ClientError: On EC2 API failure.
        """
        client, region = self._bind()
        check_not_empty(instance_id)
        try:
            resp = client.stop_instances(InstanceIds=[instance_id])
        except ClientError as e:
            ec2_logger.log_client_error(
                e, operation="stop_instance", region=region, instance_id=instance_id
            )
            raise
        return _transition(resp["StoppingInstances"])

    def start_instance(self, instance_id: str) -> StateTransition:
        """Start a stopped EC2 instance.

        Raises:
            NotInitializedError: If the connection is not initialized.
            EmptyValueError: If *instance_id* is empty.
            botocore.exceptions.ClientError: On EC2 API failure.
        """
        client, region = self._bind()
        check_not_empty(instance_id)
        try:
            resp = client.start_instances(InstanceIds=[instance_id])
        except ClientError as e:
            ec2_logger.log_client_error(
                e, operation="start_instance", region=region, instance_id=instance_id
            )
            raise
        return _transition(resp["StartingInstances"])

    def terminate_instance(self, instance_id: str) -> StateTransition:
        """Terminate an EC2 instance permanently.

        Raises:
            NotInitializedError: If the connection is not initialized.
            EmptyValueError: If *instance_id* is empty.
            botocore.exceptions.ClientError: On EC2 API failure.
        """
        client, region = self._bind()
        check_not_empty(instance_id)
        try:
            resp = client.terminate_instances(InstanceIds=[instance_id])
        except ClientError as e:
            ec2_logger.log_client_error(
                e, operation="terminate_instance", region=region, instance_id=instance_id
            )
            raise
        return _transition(resp["TerminatingInstances"])
