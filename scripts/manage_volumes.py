#!/usr/bin/env python3
"""
Manage Volumes Script

This script provides a command-line interface for managing the EBS volumes of
the EC2 instance it runs on: creating, attaching, detaching and deleting
volumes, and creating and deleting snapshots.
"""

import argparse
import sys
import os
import json
from typing import Any, Dict

# Add the parent directory to the path so we can import the ebsutil package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ebsutil.config import ManagerConfig
from ebsutil.exceptions import EBSUtilError
from ebsutil.storage.ebs import EBSVolumeManager
from ebsutil.utils.logging_config import setup_logging

def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Manage the EBS volumes of this EC2 instance"
    )
    parser.add_argument("--json", action="store_true", help="Output in JSON format")
    parser.add_argument("--log-level", help="Logging level (default: EBSUTIL_LOG_LEVEL or INFO)")
    parser.add_argument("--log-file", help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser("identity", help="Show this instance's ID, region and zone")

    create_parser = subparsers.add_parser("create", help="Create a volume")
    create_parser.add_argument("size", type=int, help="Size in bytes (rounded up to GiB)")
    create_parser.add_argument("--snapshot", default="", help="Snapshot to restore from")
    create_parser.add_argument("--type", dest="volume_type", default="", help="Volume type (gp2, gp3, io1, ...)")

    delete_parser = subparsers.add_parser("delete", help="Delete a volume")
    delete_parser.add_argument("volume_id", help="Volume to delete")

    describe_parser = subparsers.add_parser("describe", help="Describe a volume")
    describe_parser.add_argument("volume_id", help="Volume to describe")

    attach_parser = subparsers.add_parser("attach", help="Attach a volume to this instance")
    attach_parser.add_argument("volume_id", help="Volume to attach")
    attach_parser.add_argument("size", type=int, help="Size of the volume in bytes")

    detach_parser = subparsers.add_parser("detach", help="Detach a volume from this instance")
    detach_parser.add_argument("volume_id", help="Volume to detach")

    snapshot_parser = subparsers.add_parser("snapshot", help="Snapshot a volume")
    snapshot_parser.add_argument("volume_id", help="Volume to snapshot")
    snapshot_parser.add_argument("--description", default="", help="Snapshot description")

    delete_snapshot_parser = subparsers.add_parser("delete-snapshot", help="Delete a snapshot")
    delete_snapshot_parser.add_argument("snapshot_id", help="Snapshot to delete")

    subparsers.add_parser("free-device", help="Show a device name free for attaching")

    return parser.parse_args(argv)

def display(result: Dict[str, Any], json_output: bool = False):
    """Display a command result."""
    if json_output:
        print(json.dumps(result, indent=2, default=str))
        return

    for key, value in result.items():
        print(f"{key}: {value}")

def run_command(manager: EBSVolumeManager, args) -> Dict[str, Any]:
    """Run the selected command and return what to display."""
    if args.command == "identity":
        return manager.identity._asdict()

    if args.command == "create":
        volume_id = manager.create_volume(args.size, args.snapshot, args.volume_type)
        return {"volume_id": volume_id}

    if args.command == "delete":
        manager.delete_volume(args.volume_id)
        return {"deleted": args.volume_id}

    if args.command == "describe":
        return manager.describe_volume(args.volume_id)

    if args.command == "attach":
        device = manager.attach_volume(args.volume_id, args.size)
        return {"volume_id": args.volume_id, "device": device}

    if args.command == "detach":
        manager.detach_volume(args.volume_id)
        return {"detached": args.volume_id}

    if args.command == "snapshot":
        snapshot_id = manager.create_snapshot(args.volume_id, args.description)
        return {"snapshot_id": snapshot_id}

    if args.command == "delete-snapshot":
        manager.delete_snapshot(args.snapshot_id)
        return {"deleted": args.snapshot_id}

    if args.command == "free-device":
        return {"device": manager.find_free_device()}

    raise ValueError(f"Unknown command: {args.command}")

def main(argv=None):
    """Main function."""
    args = parse_args(argv)

    if not args.command:
        print("Please specify a command. Use --help for more information.")
        sys.exit(1)

    try:
        config = ManagerConfig.from_env()
        logger = setup_logging(args.log_level or config.log_level, args.log_file)
        manager = EBSVolumeManager.from_config(config, logger=logger)
        result = run_command(manager, args)
    except (EBSUtilError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    display(result, args.json)

if __name__ == "__main__":
    main()
