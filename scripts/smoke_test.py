#!/usr/bin/env python3
"""Smoke test for versium-reach against the live API.

Runs a batch against every append tool and streams one ABM list, checking
that every input got a 200 response and every list record carries contact
fields.

Usage:
    # Everything (requires REACH_API_KEY and network)
    python scripts/smoke_test.py

    # Append tools only
    python scripts/smoke_test.py --append-only

    # Save the report
    python scripts/smoke_test.py --output report.json
"""

import argparse
import asyncio
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from versium.reach import AppendTool, ConfigurationError, ReachClient

APPEND_CASES: list[tuple[AppendTool, list[str] | None, dict[str, str], int]] = [
    (AppendTool.C2B, None, {"first": "John", "last": "Doe", "email": "doejohn@hotmail.com"}, 135),
    (AppendTool.IP_TO_DOMAIN, None, {"ip": "152.44.212.248"}, 97),
    (AppendTool.CONTACT, ["address", "phone"], {"email": "doejohn@hotmail.com"}, 111),
    (AppendTool.DEMOGRAPHIC, ["lifestyle", "political"], {"email": "doejohn@hotmail.com"}, 88),
    (AppendTool.B2C_ONLINE_AUDIENCE, None, {"first": "John", "last": "Doe", "email": "jdoe@versium.com"}, 95),
    (AppendTool.B2B_ONLINE_AUDIENCE, None, {"first": "John", "last": "Doe", "email": "jdoe@versium.com"}, 147),
    (AppendTool.FIRMOGRAPHIC, None, {"email": "jdoe@versium.com"}, 5),
    (AppendTool.HEM_TO_BUSINESS_DOMAIN, None, {"email": "ba593b9e33bae27a032c79ac24ab38e4"}, 7),
]


class SmokeResult:
    """Result of a single smoke check."""

    def __init__(self, name: str):
        self.name = name
        self.success = False
        self.error: str | None = None
        self.duration_ms: float = 0.0
        self.count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "success": self.success,
            "error": self.error,
            "duration_ms": self.duration_ms,
            "count": self.count,
        }


class SmokeTester:
    """Runs the smoke checks with one shared client."""

    def __init__(self, client: ReachClient, verbose: bool = True):
        self.client = client
        self.verbose = verbose
        self.results: list[SmokeResult] = []

    def log(self, message: str):
        if self.verbose:
            print(f"[SMOKE] {message}")

    async def check_append(
        self,
        tool: AppendTool,
        output_types: list[str] | None,
        record: dict[str, str],
        count: int,
    ) -> SmokeResult:
        result = SmokeResult(f"append_{tool}")
        inputs = [dict(record) for _ in range(count)]
        start = datetime.now()

        try:
            responses = await self.client.append_all(tool, inputs, output_types)
            if len(responses) != len(inputs):
                raise ValueError(f"Expected {len(inputs)} responses, got {len(responses)}")
            if responses[0].inputs != inputs[0]:
                raise ValueError("First response is not aligned with first input")
            bad = [r.http_status for r in responses if r.http_status != 200]
            if bad:
                raise ValueError(f"{len(bad)} non-200 responses, e.g. {bad[0]}")
            result.success = True
            result.count = len(responses)
        except Exception as e:
            result.error = str(e)
        finally:
            result.duration_ms = (datetime.now() - start).total_seconds() * 1000

        self.log(f"{result.name}: {'ok' if result.success else result.error} ({result.duration_ms:.0f}ms)")
        self.results.append(result)
        # Wait between tools to stay under the account rate limit.
        await asyncio.sleep(1)
        return result

    async def check_listgen(self) -> SmokeResult:
        result = SmokeResult("listgen_abm")
        start = datetime.now()

        try:
            response = await self.client.listgen("abm", {"domain": ["versium.com"]}, ["abm_email"])
            if not response.success:
                raise ValueError(f"Response not 200 ok ({response.http_status})")
            async for record in response.get_records():
                if not record or "contact_fields" not in record:
                    raise ValueError(f"Unexpected record: {record!r}")
                result.count += 1
            result.success = True
        except Exception as e:
            result.error = str(e)
        finally:
            result.duration_ms = (datetime.now() - start).total_seconds() * 1000

        self.log(f"{result.name}: {result.count} records ({result.duration_ms:.0f}ms)")
        self.results.append(result)
        return result

    def print_report(self):
        failed = [r for r in self.results if not r.success]
        print("=" * 60)
        print("SMOKE TEST REPORT")
        print("=" * 60)
        print(f"Total Checks: {len(self.results)}")
        print(f"Successful: {len(self.results) - len(failed)}")
        print(f"Failed: {len(failed)}")
        for result in failed:
            print(f"  FAILED {result.name}: {result.error}")
        print("=" * 60)


async def main() -> int:
    parser = argparse.ArgumentParser(description="Smoke test versium-reach")
    parser.add_argument("--append-only", action="store_true", help="Skip the listgen check")
    parser.add_argument("--listgen-only", action="store_true", help="Skip the append checks")
    parser.add_argument("--output", type=str, help="Save report to JSON file")
    parser.add_argument("--quiet", action="store_true", help="Reduce output verbosity")
    args = parser.parse_args()

    try:
        client = ReachClient(logging_function=lambda *msgs: print("CLIENT LOG:", *msgs))
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 2

    async with client:
        tester = SmokeTester(client, verbose=not args.quiet)
        if not args.listgen_only:
            for tool, output_types, record, count in APPEND_CASES:
                await tester.check_append(tool, output_types, record, count)
        if not args.append_only:
            await tester.check_listgen()
        tester.print_report()

    if args.output:
        Path(args.output).write_text(json.dumps([r.to_dict() for r in tester.results], indent=2))
        print(f"\nReport saved to {args.output}")

    return 0 if all(r.success for r in tester.results) else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
