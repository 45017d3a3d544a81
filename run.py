#!/usr/bin/env python3
"""
PhishPicks - Entry Point

Usage:
    python run.py parse "Set 1: Sand > Fuego, Free, Encore: Tweezer Reprise"
    python run.py insights                       # recent tour, falls back to all-time
    python run.py insights --catalog             # all-time catalog stats
    python run.py insights --date 2025-07-04     # ten years before the show
    python run.py setlist 2024-12-31             # structured setlist for a show
    python run.py score picks.json --date 2024-12-31
    python run.py --refresh insights             # clear cached API responses first
"""

import argparse
import json
import sys

from phishpicks.api import clear_cache
from phishpicks.data_loader import ShowHistoryLoader
from phishpicks.schema import is_iso_date, picks_from_dict
from phishpicks.scoring import leaderboard
from phishpicks.setlist_parser import parse_setlist
from phishpicks.stats import insights_to_dataframe, search_insights, top_insights

RUBRIC_LABELS = [
    ('opener', 'Opener'),
    ('set1_closer', 'Set 1 Closer'),
    ('set2_opener', 'Set 2 Opener'),
    ('set2_closer', 'Set 2 Closer'),
    ('encore', 'Encore'),
    ('rock_n_jock', 'Rock n Jock'),
]


def print_header(text: str):
    """Print a formatted header."""
    print("\n" + "=" * 50)
    print(f"  {text}")
    print("=" * 50)


def print_setlist(setlist):
    print(f"  Set 1:  {', '.join(setlist.set1) or '-'}")
    print(f"  Set 2:  {', '.join(setlist.set2) or '-'}")
    print(f"  Encore: {', '.join(setlist.encore) or '-'}")


def cmd_parse(args):
    print_header("PARSED SETLIST")
    print_setlist(parse_setlist(args.text))


def cmd_insights(args):
    if args.date and not is_iso_date(args.date):
        print(f"Date must be YYYY-MM-DD, got {args.date!r}")
        sys.exit(2)

    loader = ShowHistoryLoader()
    if args.catalog:
        insights = loader.catalog_insights()
    elif args.date:
        insights = loader.tour_insights(args.date)
    else:
        insights = loader.guidance_insights()

    if args.search:
        insights = search_insights(insights, args.search, limit=args.top)
    else:
        insights = top_insights(insights, args.top)

    print_header("SONG INSIGHTS")
    if not insights:
        print("  No insights available")
        return
    print(insights_to_dataframe(insights).to_string(index=False))


def cmd_setlist(args):
    loader = ShowHistoryLoader()
    details = loader.show_details(args.date)
    print_header(f"{args.date}  {details or ''}")
    setlist = loader.live_setlist(args.date)
    if setlist is None:
        print("  No setlist yet")
        return
    print_setlist(setlist)


def entries_from_json(raw):
    """Player picks from a picks file: either {"name": {...picks}} or a
    single picks object. None if the file holds anything else."""
    if not isinstance(raw, dict):
        return None
    if 'opener' in raw or 'rockNJock' in raw:
        raw = {'Player': raw}
    return {name: picks_from_dict(p) for name, p in raw.items()}


def cmd_score(args):
    with open(args.picks) as f:
        raw = json.load(f)

    entries = entries_from_json(raw)
    if entries is None:
        print(f"{args.picks} must hold a picks object or a {{name: picks}} object")
        sys.exit(2)

    loader = ShowHistoryLoader()
    setlist = loader.live_setlist(args.date)
    if setlist is None:
        print(f"No setlist available for {args.date}")
        sys.exit(1)

    print_header(f"RESULTS {args.date}")
    print_setlist(setlist)

    for place, (name, score, breakdown) in enumerate(leaderboard(entries, setlist), 1):
        print(f"\n  {place}. {name}: {score} pts")
        for field, label in RUBRIC_LABELS:
            print(f"     {'✅' if getattr(breakdown, field) else '❌'} {label}")
        for i, hit in enumerate(breakdown.wildcards, 1):
            print(f"     {'✅' if hit else '❌'} Wildcard {i}")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Phish setlist picks')
    parser.add_argument('--refresh', action='store_true',
                        help='Clear cached API responses before running')
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('parse', help='Parse a free-text setlist')
    p.add_argument('text', type=str)
    p.set_defaults(func=cmd_parse)

    p = sub.add_parser('insights', help='Ranked song insights for picks')
    p.add_argument('--catalog', action='store_true', help='Use all-time catalog stats')
    p.add_argument('--date', type=str, default=None,
                   help='Target show date (YYYY-MM-DD) for ten-year stats')
    p.add_argument('--search', type=str, default=None, help='Filter songs by name')
    p.add_argument('--top', type=int, default=20, help='Number of songs to show')
    p.set_defaults(func=cmd_insights)

    p = sub.add_parser('setlist', help='Show the setlist for a date')
    p.add_argument('date', type=str)
    p.set_defaults(func=cmd_setlist)

    p = sub.add_parser('score', help='Score picks against a show')
    p.add_argument('picks', type=str, help='JSON file of picks')
    p.add_argument('--date', type=str, required=True)
    p.set_defaults(func=cmd_score)

    args = parser.parse_args(argv)
    if args.refresh:
        clear_cache()
    args.func(args)


if __name__ == "__main__":
    main()
