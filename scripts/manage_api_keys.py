#!/usr/bin/env python3
"""
CLI for API key management.

Keys are configured through the API_KEYS setting (a JSON list of key
records). This tool generates new records and checks keys against them.
"""

import argparse
import sys
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from src.auth.api_key import generate_api_key, hash_api_key
from src.auth.validators import ApiKeyValidator
from src.config import settings
from src.models.api_key import ApiKey


def cmd_generate(user_id: str, description: Optional[str]) -> ApiKey:
    """
    Generate a new API key and print its record.

    Args:
        user_id: Identity the key authenticates as
        description: Human-readable description for the key

    Returns:
        The new key record (hash only)
    """
    plain_key = generate_api_key()
    api_key = ApiKey(
        key_id=str(uuid.uuid4()),
        key_hash=hash_api_key(plain_key),
        user_id=user_id,
        status="active",
        created_at=datetime.now(timezone.utc).isoformat(),
        description=description,
    )

    print("✓ API Key created successfully")
    print(f"\nKey ID: {api_key.key_id}")
    print(f"API Key: {plain_key}")
    print("\n⚠️  IMPORTANT: Save this API key now!")
    print("   It will not be shown again.")
    print("\nAdd this record to API_KEYS:")
    print(api_key.model_dump_json())
    return api_key


def cmd_list() -> None:
    """List the configured API keys."""
    keys = [ApiKey(**record) for record in settings.api_keys]
    if not keys:
        print("No API keys configured.")
        return

    print(f"\n{'Key ID':<38} {'User':<20} {'Status':<10} {'Description':<30}")
    print("-" * 100)
    for api_key in keys:
        desc = api_key.description or ""
        if len(desc) > 27:
            desc = desc[:27] + "..."
        print(
            f"{api_key.key_id:<38} {api_key.user_id:<20}"
            f" {api_key.status:<10} {desc:<30}"
        )
    print(f"\nTotal: {len(keys)} API keys")


def cmd_check(plain_key: str) -> bool:
    """
    Report which configured key, if any, matches ``plain_key``.

    Returns:
        True if an active key matches
    """
    validator = ApiKeyValidator.from_settings()
    found = validator.find_key(plain_key)
    if found is None:
        print("✗ No configured key matches")
        return False

    print(f"Key ID: {found.key_id}")
    print(f"User: {found.user_id}")
    print(f"Status: {found.status}")
    return found.status == "active"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage GraphQL API keys")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate a new API key")
    generate.add_argument("--user-id", required=True, help="User the key belongs to")
    generate.add_argument("--description", help="Key description")

    subparsers.add_parser("list", help="List configured API keys")

    check = subparsers.add_parser("check", help="Check a key against API_KEYS")
    check.add_argument("api_key", help="Plain text API key")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "generate":
        cmd_generate(args.user_id, args.description)
    elif args.command == "list":
        cmd_list()
    elif args.command == "check":
        return 0 if cmd_check(args.api_key) else 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
