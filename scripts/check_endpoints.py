#!/usr/bin/env python3
"""Probe the event server endpoints the stamp tour page depends on.

Fetches the stamp catalog and the classroom list, optionally the details of
one stamp, and prints what the page would render.

Usage
-----
::

    export STAMPTOUR_BASE_URL="http://localhost:8080"
    python scripts/check_endpoints.py

Options::

    --base-url URL      Server origin (default: STAMPTOUR_BASE_URL)
    --stamp ID          Also fetch /api/stamp/<ID>.json
    --json              Output as machine-readable JSON
    --verbose, -v       Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

import aiohttp  # noqa: E402

from stamptour import HttpGateway, StampTourConfig, StampTourTransportError  # noqa: E402
from stamptour._api.classrooms import fetch_class_list  # noqa: E402
from stamptour._api.stamps import fetch_stamp_info, fetch_stamp_list  # noqa: E402


async def _probe(config: StampTourConfig, stamp_id: str | None) -> dict[str, Any]:
    report: dict[str, Any] = {"base_url": config.base_url}
    async with aiohttp.ClientSession() as session:
        gateway = HttpGateway(config, session)
        try:
            stamps = await fetch_stamp_list(gateway)
            report["stamps"] = [stamp.model_dump() for stamp in stamps]
        except StampTourTransportError as exc:
            report["stamps_error"] = {"status": exc.status_code, "message": str(exc)}

        try:
            classrooms = await fetch_class_list(gateway)
            report["classrooms"] = [classroom.class_id for classroom in classrooms]
        except StampTourTransportError as exc:
            report["classrooms_error"] = {"status": exc.status_code, "message": str(exc)}

        if stamp_id:
            try:
                report["stamp"] = (await fetch_stamp_info(gateway, stamp_id)).model_dump()
            except StampTourTransportError as exc:
                report["stamp_error"] = {"status": exc.status_code, "message": str(exc)}
    return report


def _print_text(report: dict[str, Any]) -> None:
    print(f"Server: {report['base_url']}")
    if "stamps_error" in report:
        print(f"  stamp list: FAILED {report['stamps_error']}")
    else:
        print(f"  stamp list: {len(report['stamps'])} stamps")
        for stamp in report["stamps"]:
            print(f"    {stamp['stamp_id']:<12} {stamp['stamp_name']} @ {stamp['stamp_location']}")
    if "classrooms_error" in report:
        print(f"  class list: FAILED {report['classrooms_error']}")
    else:
        print(f"  class list: {', '.join(report['classrooms']) or '(none)'}")
    if "stamp" in report:
        print(f"  stamp: {report['stamp']}")
    if "stamp_error" in report:
        print(f"  stamp: FAILED {report['stamp_error']}")


async def main() -> int:
    parser = argparse.ArgumentParser(description="Probe the stamp tour server endpoints.")
    parser.add_argument("--base-url", help="Server origin (default: STAMPTOUR_BASE_URL)")
    parser.add_argument("--stamp", help="Also fetch the details of this stamp id")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url.rstrip("/")
    config = StampTourConfig.from_env(**overrides)

    report = await _probe(config, args.stamp)
    if args.json_mode:
        print(json.dumps(report, indent=2, ensure_ascii=False))
    else:
        _print_text(report)
    return 1 if any(key.endswith("_error") for key in report) else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
