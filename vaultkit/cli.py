#!/usr/bin/env python3
"""Command line checks for Vault secret mappings."""

import argparse
import asyncio
import json
import sys

import aiohttp

from .config.settings import VaultSettings
from .utils.logging import setup_logging
from .utils.masking import mask_string
from .vault.client import VaultClient
from .vault.errors import BatchLoadError, VaultError

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_BATCH_FAILED = 2


def read_mapping(path: str) -> dict[str, str]:
    """Read a JSON object of name -> "path[:key]"."""
    with open(path, encoding="utf-8") as f:
        mapping = json.load(f)

    if not isinstance(mapping, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in mapping.items()
    ):
        raise ValueError("Mapping file must contain a JSON object of string values")
    return mapping


async def check_mapping(client: VaultClient, mapping: dict[str, str]) -> int:
    """Load every secret in the mapping and report the outcome."""
    try:
        values = await client.load_secrets(mapping)
    except BatchLoadError as e:
        print(f"❌ {len(e.errors)} of {len(mapping)} secrets failed to load:")
        for error in e.errors:
            print(f"  - {error}")
        return EXIT_BATCH_FAILED

    for name, value in values.items():
        print(f"  {name} = {mask_string(str(value))}")
    print(f"✅ Loaded {len(values)} of {len(mapping)} secrets")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="vaultkit", description="Vault secret loading tools")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Verify that every secret in a mapping loads")
    check.add_argument("mapping", help="JSON file mapping names to 'path' or 'path:key'")
    check.add_argument("--env-file", default=".env", help="Environment file with VAULT_* settings")

    args = parser.parse_args(argv)

    try:
        config = VaultSettings(_env_file=args.env_file)
        setup_logging(config.log_level, config.structured_logging)
        mapping = read_mapping(args.mapping)
        print(f"🔍 Checking {len(mapping)} secrets from {args.mapping}")
        client = VaultClient.from_settings(config)
        return asyncio.run(check_mapping(client, mapping))
    except (VaultError, aiohttp.ClientError, OSError, ValueError) as e:
        print(f"❌ {e}")
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
