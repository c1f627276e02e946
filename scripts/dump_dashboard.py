#!/usr/bin/env python3
"""Dump the dashboard views built from the live stock sheet.

Fetches the sheet once (no auto-refresh), then prints the overview KPIs,
map markers and the first inventory page so that parsing and aggregation
can be checked against the spreadsheet by eye.

Usage
-----
::

    python scripts/dump_dashboard.py
    MOTOSTOCK_SHEET_URL=https://... python scripts/dump_dashboard.py --json

Options::

    --region NAME        Only include this region (default: All)
    --search TEXT        Only include cities containing TEXT
    --per-page N         Inventory rows to print (default: 10)
    --insights           Also call the insight webhook
    --json               Output as machine-readable JSON
    --output FILE        Write output to FILE instead of stdout
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from motostock import MemoryStore, MotostockConfig, MotostockDashboard


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


async def main() -> None:
    parser = argparse.ArgumentParser(description="Dump motostock dashboard views for debugging.")
    parser.add_argument("--region", default="All", help="Region filter (default: All)")
    parser.add_argument("--search", default="", help="City search text")
    parser.add_argument("--per-page", type=int, default=10, help="Inventory rows to print")
    parser.add_argument("--insights", action="store_true", help="Also fetch the insight report")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write output to FILE instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = MotostockConfig.from_env(auto_refresh=False)
    result: dict[str, Any] = {"timestamp": datetime.now(UTC).isoformat(), "sheet_url": config.sheet_url}

    # A fresh in-memory store forces a foreground fetch.
    async with MotostockDashboard(config, kv_store=MemoryStore()) as dashboard:
        await dashboard.start()
        dashboard.set_region(args.region)
        dashboard.set_search(args.search)

        overview = dashboard.overview()
        markers = dashboard.map_markers()
        inventory = dashboard.inventory(per_page=args.per_page)
        result["records"] = len(dashboard.store.records)
        result["overview"] = overview.model_dump(mode="json")
        result["markers"] = [m.model_dump(mode="json", exclude={"details"}) for m in markers]
        result["inventory"] = inventory.model_dump(mode="json")

        if args.insights:
            report = await dashboard.refresh_insights()
            result["insights"] = report.model_dump(mode="json") if report is not None else None

    if args.json_mode:
        payload = json.dumps(result, indent=2, default=str, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(payload, encoding="utf-8")
            print(f"JSON written to {args.output}", file=sys.stderr)
        else:
            print(payload)
        return

    out: list[str] = []
    out.append(_section("motostock dump_dashboard"))
    out.append(f"  time      : {result['timestamp']}")
    out.append(f"  records   : {result['records']}")
    out.append(f"  region    : {args.region}  search: {args.search!r}")

    out.append(_section("OVERVIEW"))
    out.append(f"  total stock      : {overview.total_stock}")
    out.append(f"  low stock items  : {overview.low_stock_count}")
    out.append(f"  high demand items: {overview.high_demand_count}")
    for category in overview.stock_by_category:
        out.append(f"    {category.label:<10} {category.value}")
    for region in overview.stock_by_region:
        out.append(f"    {region.name:<18} {region.value}")
    out.append("  top critical:")
    for record in overview.top_critical_items:
        out.append(f"    - {record.city} / {record.item}: {record.stock}")

    out.append(_section("MAP"))
    for marker in markers:
        flag = "!" if marker.is_critical else " "
        out.append(f"  {flag} {marker.name:<20} ({marker.lat:.4f}, {marker.lng:.4f}) total={marker.total_stock}")

    out.append(_section(f"INVENTORY page {inventory.page}/{inventory.total_pages}"))
    for row in inventory.rows:
        out.append(f"  {row.record.city:<18} {row.record.item:<28} {row.record.stock:>5}  {row.status.value}")

    if "insights" in result:
        out.append(_section("INSIGHTS"))
        out.append(json.dumps(result["insights"], indent=2, ensure_ascii=False))

    text = "\n".join(out)
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        print(f"Output written to {args.output}")
    else:
        print(text)


if __name__ == "__main__":
    asyncio.run(main())
