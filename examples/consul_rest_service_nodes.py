#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from laakhay.consul import Consistency, ConsulClient, QueryOptions


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List the nodes running a Consul service")
    p.add_argument("service", nargs="?", default="consul")
    p.add_argument("--tag", default=None)
    p.add_argument("--stale", action="store_true", help="Allow any server to answer")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    options = QueryOptions(
        tag=args.tag,
        consistency=Consistency.STALE if args.stale else None,
    )
    async with ConsulClient.from_env() as client:
        nodes, meta = await client.catalog().get_service_nodes(args.service, options)
        print(
            f"{args.service}: {len(nodes)} instance(s), index={meta.last_index}, "
            f"known_leader={meta.known_leader}"
        )
        print(f"{'Node':20} | {'Service ID':30} | {'Address':21} | Tags")
        print("-" * 90)
        for n in nodes:
            addr = f"{n.effective_address}:{n.service_port}"
            tags = ",".join(n.service_tags or [])
            print(f"{n.node:20} | {n.service_id:30} | {addr:21} | {tags}")


if __name__ == "__main__":
    asyncio.run(main())
