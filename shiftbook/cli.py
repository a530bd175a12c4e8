#!/usr/bin/env python3
"""Shiftbook CLI.

Usage:
    shiftbook list
    shiftbook summary --period week --date 2024-05-08
    shiftbook series --period month
    shiftbook delete <shift-id>
"""
import argparse
import asyncio
import logging
import os
import sys
from datetime import datetime
from typing import Optional

from .aggregation import period_report
from .calculations import compute_net, distance_km
from .charts import build_series, period_headline
from .config import ServiceConfig, reload_config
from .formatting import format_date, format_money
from .models import Period, parse_timestamp
from .storage import JSONGateway, create_backend
from .store import ShiftStore


def _parse_date(value: str) -> datetime:
    try:
        return parse_timestamp(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date: {value!r} (expected YYYY-MM-DD)")


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='shiftbook',
        description='Shift earnings ledger',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  shiftbook list
  shiftbook summary --period week --date 2024-05-08
  shiftbook series --period day --length 14
  shiftbook delete 3f2b9c0d
"""
    )
    parser.add_argument('--config', help='Path to YAML config file')

    sub = parser.add_subparsers(dest='command', required=True)

    sub.add_parser('list', help='List shifts, newest first')

    summary = sub.add_parser('summary', help='Totals for one period')
    summary.add_argument('--period', type=Period, choices=list(Period), default=Period.DAY, metavar='{day,week,month}')
    summary.add_argument('--date', type=_parse_date, help='Reference date (YYYY-MM-DD), default today')

    series = sub.add_parser('series', help='Net earnings per trailing period')
    series.add_argument('--period', type=Period, choices=list(Period), default=Period.DAY, metavar='{day,week,month}')
    series.add_argument('--today', type=_parse_date, help='Anchor date (YYYY-MM-DD), default today')
    series.add_argument('--length', type=_positive_int, help='Number of buckets')

    delete = sub.add_parser('delete', help='Delete a shift by id')
    delete.add_argument('shift_id')

    return parser


async def _open_store(config: ServiceConfig) -> ShiftStore:
    store = ShiftStore(JSONGateway(create_backend(config.storage)), key=config.storage.key)
    await store.load()
    return store


def _print_list(store: ShiftStore):
    shifts = store.sorted_by_date()
    if not shifts:
        print('📭 No shifts recorded')
        return
    for shift in shifts:
        print(
            f"{format_date(shift.date)}  {distance_km(shift):>7.0f} km  "
            f"{format_money(compute_net(shift)):>14}  {shift.id}"
        )


def _print_summary(store: ShiftStore, period: Period, date: datetime):
    report = period_report(store.current(), period, date)
    s = report.summary
    print(f"📊 {report.title}: {report.header}")
    print(f"   Net:         {format_money(s.net)}")
    print(f"   Gross:       {format_money(s.gross)}")
    print(f"   Distance:    {s.km:.0f} km")
    print(f"   Range used:  {s.range_change:.0f} km")
    print(f"   Fuel:        {format_money(s.fuel_cost)}")
    print(f"   Commissions: {format_money(s.commissions)}")
    print(f"   Fines:       {format_money(s.fines)}")
    print(f"   Tax:         {format_money(s.tax)}")
    print(f"   Shifts:      {len(report.shifts)}")


def _print_series(store: ShiftStore, period: Period, today: datetime, length: int):
    headline = period_headline(store.current(), period, today)
    print(f"📈 {headline.caption}: {format_money(headline.net)}")
    for bucket in build_series(store.current(), period, today, length):
        print(f"   {bucket.label:>8}  {format_money(bucket.net):>14}")


async def run(args: argparse.Namespace, config: ServiceConfig) -> int:
    store = await _open_store(config)

    if args.command == 'list':
        _print_list(store)

    elif args.command == 'summary':
        _print_summary(store, args.period, args.date or datetime.now())

    elif args.command == 'series':
        length = args.length if args.length is not None else config.charts.length_for(args.period)
        _print_series(store, args.period, args.today or datetime.now(), length)

    elif args.command == 'delete':
        if not await store.delete(args.shift_id):
            print(f"❌ Shift {args.shift_id} not found", file=sys.stderr)
            return 1
        print(f"🗑️  Deleted shift {args.shift_id}")

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = reload_config(args.config)
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", config.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(run(args, config))


if __name__ == '__main__':
    sys.exit(main())
