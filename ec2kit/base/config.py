"""
Pydantic configuration model for the EC2 client.

Validates client options when a connection is initialized instead of
silently passing bad values to boto3.
"""

from __future__ import annotations

import os
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, model_validator

# EC2 API version the wrapper is written against.
LATEST_API_VERSION = "2016-11-15"


class EC2Config(BaseModel):
    """Configuration for an EC2 connection.

    Credentials are resolved in order:
    1. Explicit values passed in the config dict.
    2. Environment variables (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY,
       AWS_SESSION_TOKEN), read as one set and only when the config dict
       carries no ``aws_access_key_id``.
    3. If neither is set, fields are left as None so boto3 can fall back to its
       own credential chain (instance metadata, ~/.aws/credentials, etc.).

    ``endpoint_url`` falls back to AWS_ENDPOINT_URL_EC2 independently.
    ``region_name`` is not read from the environment: the region is always
    the one passed to :meth:`~ec2kit.aws.connection.Connection.init`.
    """

    model_config = ConfigDict(extra="forbid")

    region_name: str = Field(description="AWS region (e.g. 'eu-west-1')")
    aws_access_key_id: str | None = Field(default=None, description="AWS access key ID")
    aws_secret_access_key: str | None = Field(default=None, description="AWS secret access key")
    aws_session_token: str | None = Field(default=None, description="STS session token")
    endpoint_url: str | None = Field(default=None, description="Override for the EC2 endpoint")
    api_version: str = Field(default=LATEST_API_VERSION, description="EC2 API version")

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to environment variables for missing credentials."""
        # Explicit keys never pick up a secret or token from another session.
        if not values.get("aws_access_key_id"):
            env_map = {
                "aws_access_key_id": "AWS_ACCESS_KEY_ID",
                "aws_secret_access_key": "AWS_SECRET_ACCESS_KEY",
                "aws_session_token": "AWS_SESSION_TOKEN",
            }
            for field, env_var in env_map.items():
                if not values.get(field):
                    values[field] = os.environ.get(env_var)
        if not values.get("endpoint_url"):
            values["endpoint_url"] = os.environ.get("AWS_ENDPOINT_URL_EC2")
        return values

    def client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``boto3.client("ec2", ...)``."""
        return self.model_dump()


def validate_config(region: str, config: dict | None = None) -> EC2Config:
    """Validate and return a typed config model for *region*.

    Args:
        region: Region the client is bound to (already validated).
        config: Optional raw configuration dictionary.

    Returns:
        A validated :class:`EC2Config`.

    Raises:
        pydantic.ValidationError: If the config is invalid.
    """
    return EC2Config(**{**(config or {}), "region_name": region})


__all__ = [
    "EC2Config",
    "LATEST_API_VERSION",
    "validate_config",
]
