#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
from datetime import timedelta

from laakhay.consul import ConsulClient, ConsulError, QueryOptions


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Watch a Consul service for membership changes")
    p.add_argument("service", nargs="?", default="consul")
    p.add_argument("--wait", type=int, default=30, help="Blocking wait in seconds")
    p.add_argument("--updates", type=int, default=0, help="Stop after N updates (0 = forever)")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    options = QueryOptions(
        blocking_timeout=timedelta(seconds=args.wait),
        timeout=timedelta(seconds=args.wait + 10),
    )
    async with ConsulClient.from_env() as client:
        watch = client.catalog().watch_service_nodes(args.service, options)
        count = 0
        try:
            async for nodes, meta in watch:
                count += 1
                ids = ", ".join(sorted(n.service_id for n in nodes)) or "-"
                print(f"[index={meta.last_index}] {args.service}: {ids}")
                if args.updates and count >= args.updates:
                    break
        except ConsulError as e:
            print(f"Watch stopped: {e!r}")
        finally:
            await watch.aclose()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
