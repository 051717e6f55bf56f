#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from laakhay.consul import ConsulClient, HealthState


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Show Consul health checks in a given state")
    p.add_argument(
        "state",
        nargs="?",
        default=HealthState.ANY.value,
        choices=[s.value for s in HealthState],
    )
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    async with ConsulClient.from_env() as client:
        checks, meta = await client.health().checks_in_state(args.state)
        print(f"{len(checks)} check(s) in state '{args.state}' (index={meta.last_index}):")
        print(f"{'Node':20} | {'Check ID':35} | {'Status':9} | Service")
        print("-" * 90)
        for c in checks:
            print(f"{c.node:20} | {c.check_id:35} | {c.status:9} | {c.service_name or '-'}")


if __name__ == "__main__":
    asyncio.run(main())
