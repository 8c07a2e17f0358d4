#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from versium.reach import AppendTool, ReachClient


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Append contact data to a list of emails")
    p.add_argument("emails", nargs="*", default=["doejohn@hotmail.com"])
    p.add_argument("--output", action="append", default=None, help="Output type, e.g. phone")
    p.add_argument("--qps", type=int, default=20, help="Queries per second")
    p.add_argument("--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    inputs = [{"email": e} for e in args.emails]

    async with ReachClient(
        queries_per_second=args.qps, verbose=args.verbose, logging_function=print
    ) as client:
        print("=" * 65)
        async for chunk in client.append(AppendTool.CONTACT, inputs, args.output or ["address", "phone"]):
            for response in chunk:
                status = "match" if response.match_found else "no match"
                print(f"{response.inputs['email']:35} | {response.http_status:>4} | {status}")
                for result in response.results:
                    print(f"    {result}")
        print("=" * 65)


if __name__ == "__main__":
    asyncio.run(main())
