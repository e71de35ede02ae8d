#!/usr/bin/env python3
"""Dump everything pyvehicles can fetch from a catalog server.

This script logs in (unless a stored credential is reused), loads the
profile and the brand, segment and vehicle collections, and prints them.

Usage
-----
Set environment variables and run::

    export VEHICLES_BASE_URL="http://localhost:8000"
    export VEHICLES_USERNAME="admin"
    export VEHICLES_PASSWORD="your-password"
    python scripts/catalog_dump.py

Options::

    --json               Output as machine-readable JSON
    --output FILE        Write JSON output to FILE instead of stdout
    --reuse-token        Skip login and use the stored credential
    --verbose            Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyvehicles import CatalogClient, CatalogConfig, CatalogKind, Rejected  # noqa: E402
from pyvehicles.messages import collection_message  # noqa: E402


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _rows(items: tuple[Any, ...]) -> list[dict[str, Any]]:
    return [item.model_dump(mode="json") for item in items]


async def main() -> int:
    parser = argparse.ArgumentParser(
        description="Dump the catalog for debugging / development.",
    )
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write JSON output to FILE instead of stdout")
    parser.add_argument("--reuse-token", action="store_true", help="Use the stored credential instead of logging in")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = CatalogConfig.from_env(api_trace_enabled=args.verbose)
    result: dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(),
        "base_url": config.base_url,
    }

    async with CatalogClient(config) as client:
        if not args.reuse_token:
            username = os.environ.get("VEHICLES_USERNAME", "")
            password = os.environ.get("VEHICLES_PASSWORD", "")
            login = await client.auth.login(username, password)
            if isinstance(login, Rejected):
                print(f"Login failed: {login.error}", file=sys.stderr)
                return 1

        profile = await client.auth.fetch_profile()
        if isinstance(profile, Rejected):
            print(f"Profile fetch failed: {profile.error}", file=sys.stderr)
            return 1
        result["profile"] = client.auth.profile.model_dump(mode="json")

        await asyncio.gather(*(client.catalog.fetch_all(kind) for kind in CatalogKind))
        state = client.catalog.state
        for kind in CatalogKind:
            collection = state.collection(kind)
            result[f"{kind.value}s"] = _rows(collection.items)
            message = collection_message(kind, collection)
            if message:
                result.setdefault("errors", {})[kind.value] = message

    if args.json_mode or args.output:
        payload = json.dumps(result, indent=2, default=str, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(payload, encoding="utf-8")
            print(f"JSON written to {args.output}", file=sys.stderr)
        else:
            print(payload)
        return 0

    out: list[str] = [_section("pyvehicles catalog_dump")]
    out.append(f"  time      : {result['timestamp']}")
    out.append(f"  server    : {result['base_url']}")
    out.append(f"  user      : {result['profile']['username']} (id {result['profile']['id']})")
    for kind in CatalogKind:
        out.append(_section(f"{kind.value.upper()}S"))
        for row in result[f"{kind.value}s"]:
            out.append("  " + ", ".join(f"{k}={v}" for k, v in row.items()))
        error = result.get("errors", {}).get(kind.value)
        if error:
            out.append(f"  !! {error}")
    print("\n".join(out))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
