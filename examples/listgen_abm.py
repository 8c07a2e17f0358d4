#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from versium.reach import ListgenOutputType, ListgenTool, ReachClient


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Stream an account-based contact list")
    p.add_argument("domains", nargs="*", default=["versium.com"])
    p.add_argument(
        "--output",
        default=ListgenOutputType.ABM_EMAIL.value,
        choices=[o.value for o in ListgenOutputType],
    )
    p.add_argument("--limit", type=int, default=20, help="Records to print")
    return p.parse_args()


async def main() -> None:
    args = parse_args()

    async with ReachClient(logging_function=print) as client:
        response = await client.listgen(ListgenTool.ABM, {"domain": args.domains}, [args.output])
        if not response.success:
            print(f"Listgen failed: HTTP {response.http_status}")
            return

        count = 0
        async for record in response.get_records():
            count += 1
            if count <= args.limit:
                print(record.get("contact_fields", record))
        print("=" * 65)
        print(f"Records    : {count}")
        print("=" * 65)


if __name__ == "__main__":
    asyncio.run(main())
