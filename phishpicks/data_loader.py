"""
Show History Loader

Fetches show history from Phish.net, validates it, and feeds the parser,
stats and scoring modules. Any fetch failure becomes an empty input here;
the core never sees a network error.
"""

from datetime import date, datetime
from typing import Callable, List, Optional, Tuple

import pandas as pd
import requests
from tqdm import tqdm

from . import config
from .api import PhishNetAPI
from .cache import InsightCache
from .models import CatalogRecord, Setlist, ShowRecord, SongInsight
from .schema import catalog_record_from_api, is_iso_date, is_phish, setlist_from_entries, show_record_from_api
from .setlist_parser import parse_setlist
from .stats import accumulate, catalog_insights, merge_accumulators

RECENT_TOUR_CACHE_KEY = "recent_tour_stats"


def months_before(day: date, months: int) -> date:
    """Calendar date `months` months before `day` (clamped to month end)."""
    return (pd.Timestamp(day) - pd.DateOffset(months=months)).date()


def parsed_shows(records: List[ShowRecord], start_date: str = '',
                 end_date: Optional[str] = None) -> List[Tuple[str, Setlist]]:
    """(date, setlist) pairs for shows in [start_date, end_date].

    Shows with no setlist text, or text that yields no songs, are left
    out entirely so they don't count toward the show total.
    """
    shows = []
    for record in records:
        if record.show_date < start_date:
            continue
        if end_date is not None and record.show_date > end_date:
            continue
        if not record.setlist_text:
            continue
        setlist = parse_setlist(record.setlist_text)
        if setlist.is_empty:
            continue
        shows.append((record.show_date, setlist))
    return shows


def format_location(show: ShowRecord) -> str:
    """'Venue, City, State' (country added when not USA)."""
    if show.location:
        location = show.location
    else:
        parts = [p for p in (show.city, show.state) if p]
        if show.country and show.country != 'USA':
            parts.append(show.country)
        location = ', '.join(parts)
    return f"{show.venue}, {location}"


class ShowHistoryLoader:
    """Load show history and turn it into setlists and insights."""

    def __init__(self, api: Optional[PhishNetAPI] = None, cache: Optional[InsightCache] = None,
                 clock: Callable[[], datetime] = datetime.now):
        self.api = api or PhishNetAPI()
        self.clock = clock
        self.cache = cache or InsightCache(config.CACHE_DIR, config.INSIGHT_CACHE_HOURS, clock=clock)

    def _fetch(self, label: str, fetch, *args) -> list:
        """Run a client call, turning failures into an empty list."""
        try:
            return fetch(*args)
        except (requests.RequestException, ValueError) as e:
            print(f"  Warning: could not fetch {label}: {e}")
            return []

    # ==================== Raw Inputs ====================

    def load_catalog(self) -> List[CatalogRecord]:
        """All catalog songs with lifetime play counts."""
        raw = self._fetch("song catalog", self.api.get_all_songs)
        records = [r for r in (catalog_record_from_api(s) for s in raw) if r is not None]
        print(f"Loaded {len(records)} songs from Phish.net")
        return records

    def load_shows(self, year: int) -> List[ShowRecord]:
        """Validated show records for one year."""
        raw = self._fetch(f"{year} shows", self.api.get_shows_by_year, year)
        return [r for r in (show_record_from_api(s) for s in raw) if r is not None]

    # ==================== Insights ====================

    def catalog_insights(self, estimated_total_shows: Optional[int] = None) -> List[SongInsight]:
        """All-time insights from catalog play counts."""
        total = estimated_total_shows or config.ESTIMATED_TOTAL_SHOWS
        return catalog_insights(self.load_catalog(), total)

    def window_insights(self, years: List[int], start_date: str = '', end_date: Optional[str] = None,
                        opener_threshold: int = config.TOUR_OPENER_THRESHOLD,
                        closer_threshold: int = config.TOUR_CLOSER_THRESHOLD) -> List[SongInsight]:
        """Insights over shows from `years` within [start_date, end_date].

        Each year is accumulated on its own and the shards are merged.
        """
        shards = []
        for year in tqdm(years, desc="Accumulating shows"):
            shard = accumulate(parsed_shows(self.load_shows(year), start_date, end_date))
            print(f"  {year}: {shard.show_count} shows with setlists")
            shards.append(shard)

        merged = merge_accumulators(shards)
        print(f"Analyzed {merged.show_count} shows, {len(merged.tallies)} unique songs")
        return merged.insights(opener_threshold, closer_threshold)

    def recent_tour_insights(self, months: Optional[int] = None,
                             opener_threshold: int = config.RECENT_OPENER_THRESHOLD,
                             closer_threshold: int = config.RECENT_CLOSER_THRESHOLD,
                             use_cache: bool = True) -> List[SongInsight]:
        """Insights from the last few months of touring (cached per window and thresholds)."""
        months = months or config.RECENT_WINDOW_MONTHS
        cache_key = f"{RECENT_TOUR_CACHE_KEY}_{months}_{opener_threshold}_{closer_threshold}"
        if use_cache:
            cached = self.cache.get(cache_key)
            if cached is not None:
                print("Using cached recent tour stats")
                return cached

        today = self.clock().date()
        start = months_before(today, months)
        years = sorted({start.year, today.year})

        print(f"Fetching recent tour stats since {start.isoformat()}...")
        insights = self.window_insights(years, start_date=start.isoformat(),
                                        opener_threshold=opener_threshold,
                                        closer_threshold=closer_threshold)
        if insights:
            self.cache.put(cache_key, insights)
        return insights

    def tour_insights(self, target_date: str, years: Optional[int] = None,
                      opener_threshold: int = config.TOUR_OPENER_THRESHOLD,
                      closer_threshold: int = config.TOUR_CLOSER_THRESHOLD) -> List[SongInsight]:
        """Insights from the N full years before the target show's year."""
        if not is_iso_date(target_date):
            print(f"  Warning: target date must be YYYY-MM-DD, got {target_date!r}")
            return []

        target_year = int(target_date[:4])
        span = years or config.TOUR_WINDOW_YEARS
        start_year = target_year - span

        print(f"Fetching tour stats from {start_year}-{target_year - 1} for {target_date} show")
        return self.window_insights(list(range(start_year, target_year)),
                                    opener_threshold=opener_threshold,
                                    closer_threshold=closer_threshold)

    def guidance_insights(self) -> List[SongInsight]:
        """Recent tour insights, falling back to all-time catalog stats."""
        recent = self.recent_tour_insights()
        if recent:
            return recent
        print("No recent shows found, using all-time stats")
        return self.catalog_insights()

    # ==================== Show Lookups ====================

    def live_setlist(self, show_date: str) -> Optional[Setlist]:
        """The structured setlist for a show, or None if there isn't one yet."""
        entries = self._fetch(f"setlist for {show_date}", self.api.get_setlist_by_date, show_date)
        entries = [e for e in entries if is_phish(e)]
        if not entries:
            print(f"No setlist found for {show_date}")
            return None

        setlist = setlist_from_entries(entries)
        print(f"Set 1: {len(setlist.set1)} songs, Set 2: {len(setlist.set2)} songs, "
              f"Encore: {len(setlist.encore)} songs")
        return setlist

    def show_details(self, show_date: str) -> Optional[str]:
        """Venue and location line for a show."""
        raw = self._fetch(f"show details for {show_date}", self.api.get_show_by_date, show_date)
        records = [r for r in (show_record_from_api(s) for s in raw) if r is not None]
        if not records:
            return None
        return format_location(records[0])
