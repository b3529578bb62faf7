"""ec2kit CLI: quick EC2 instance operations from the command line.

Usage examples::

    ec2kit --region eu-west-1 get-all-instances
    ec2kit --region eu-west-1 get-instances-by-state running
    ec2kit -r us-east-1 stop-instance i-0abc1234
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ec2kit.base.supported_regions import VALID_REGIONS

OPERATIONS = [
    "get-region",
    "get-all-instances",
    "get-instances-by-state",
    "get-instance-by-id",
    "get-instance-by-ip-address",
    "get-instance-ip-address",
    "get-instance-status",
    "launch-instance",
    "stop-instance",
    "start-instance",
    "terminate-instance",
]


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``ec2kit`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="ec2kit",
        description="Validated EC2 instance operations",
    )
    parser.add_argument(
        "--region", "-r",
        required=True,
        choices=VALID_REGIONS,
        help="AWS region",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default="{}",
        help='JSON client config (e.g. \'{"endpoint_url":"http://localhost:4566"}\')',
    )
    parser.add_argument(
        "operation",
        choices=OPERATIONS,
        help="Operation to perform",
    )
    parser.add_argument(
        "args",
        nargs="*",
        help="Positional arguments for the operation",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parses arguments, connects to the region and invokes the requested
    operation.  Results are printed as JSON (dicts/lists) or plain text.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
    """
    parser = _build_parser()
    ns = parser.parse_args(argv)

    try:
        config: dict[str, Any] = json.loads(ns.config)
    except json.JSONDecodeError as e:
        print(f"Invalid --config JSON: {e}", file=sys.stderr)
        sys.exit(1)

    # Lazy-import so --help works without boto3 configured
    from ec2kit.factory import connect

    try:
        svc = connect(ns.region, config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    method = getattr(svc, ns.operation.replace("-", "_"))
    try:
        result = method(*ns.args)
    except Exception as e:
        print(f"Operation failed: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        svc.connection.close()

    if result is None:
        print("None")
    elif isinstance(result, (dict, list)):
        print(json.dumps(result, indent=2, default=str))
    else:
        print(result)


if __name__ == "__main__":
    main()
