"""
Song Insight Statistics

Reduces catalog play counts, or a window of parsed setlists, into ranked
per-song insights (play probability, recency, opener/closer flags).

Window accumulation is a sum over counts and a max over dates, so shards
(e.g. one per fetched year) can be accumulated independently and merged
in any order.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

import pandas as pd

from .models import CatalogRecord, Setlist, SongInsight


def percent(numerator: int, denominator: int) -> int:
    """Round numerator/denominator * 100 half-up, clamped to 0-100."""
    if denominator <= 0:
        return 0
    value = (numerator * 200 + denominator) // (2 * denominator)
    return max(0, min(value, 100))


def rank(insights: Iterable[SongInsight]) -> List[SongInsight]:
    """Sort by probability, highest first. Ties keep input order."""
    return sorted(insights, key=lambda x: x.probability, reverse=True)


# ==================== Catalog Mode ====================

def catalog_insights(records: Iterable[CatalogRecord],
                     estimated_total_shows: int) -> List[SongInsight]:
    """All-time insights from catalog play counts.

    No positional data exists at this level, so the opener/closer flags
    are always False.
    """
    insights = [
        SongInsight(
            song=record.song,
            probability=percent(record.times_played, estimated_total_shows),
            times_played=record.times_played,
            last_played=record.last_played,
        )
        for record in records
    ]
    return rank(insights)


# ==================== Window Mode ====================

@dataclass
class SongTally:
    """Running per-song counts over a window of shows."""
    count: int = 0
    last_played: str = ''
    opener_count: int = 0
    set1_closer_count: int = 0
    set2_opener_count: int = 0
    set2_closer_count: int = 0
    encore_count: int = 0

    def merge(self, other: 'SongTally'):
        self.count += other.count
        self.last_played = max(self.last_played, other.last_played)
        self.opener_count += other.opener_count
        self.set1_closer_count += other.set1_closer_count
        self.set2_opener_count += other.set2_opener_count
        self.set2_closer_count += other.set2_closer_count
        self.encore_count += other.encore_count

    @property
    def closer_count(self) -> int:
        return self.set1_closer_count + self.set2_closer_count


class WindowAccumulator:
    """Accumulates song tallies over a set of shows."""

    def __init__(self):
        self.show_count = 0
        self.tallies: Dict[str, SongTally] = {}

    def _tally(self, song: str) -> SongTally:
        if song not in self.tallies:
            self.tallies[song] = SongTally()
        return self.tallies[song]

    def add_show(self, show_date: str, setlist: Setlist) -> 'WindowAccumulator':
        """Count one show. Every song occurrence counts toward its total;
        positional counts are at most one per show."""
        self.show_count += 1

        for song in setlist.all_songs:
            tally = self._tally(song)
            tally.count += 1
            tally.last_played = max(tally.last_played, show_date)

        if setlist.set1:
            self._tally(setlist.set1[0]).opener_count += 1
            self._tally(setlist.set1[-1]).set1_closer_count += 1
        if setlist.set2:
            self._tally(setlist.set2[0]).set2_opener_count += 1
            self._tally(setlist.set2[-1]).set2_closer_count += 1
        for song in set(setlist.encore):
            self._tally(song).encore_count += 1

        return self

    def merge(self, other: 'WindowAccumulator') -> 'WindowAccumulator':
        self.show_count += other.show_count
        for song, tally in other.tallies.items():
            self._tally(song).merge(tally)
        return self

    def insights(self, opener_threshold: int,
                 closer_threshold: int) -> List[SongInsight]:
        """Final insights, ranked by probability."""
        if self.show_count == 0:
            return []

        insights = [
            SongInsight(
                song=song,
                probability=percent(tally.count, self.show_count),
                times_played=tally.count,
                last_played=tally.last_played,
                is_frequent_opener=tally.opener_count >= opener_threshold,
                is_frequent_closer=tally.closer_count >= closer_threshold,
            )
            for song, tally in self.tallies.items()
        ]
        return rank(insights)


def accumulate(shows: Iterable[Tuple[str, Setlist]]) -> WindowAccumulator:
    """Accumulate (date, setlist) pairs into one shard."""
    acc = WindowAccumulator()
    for show_date, setlist in shows:
        acc.add_show(show_date, setlist)
    return acc


def merge_accumulators(shards: Iterable[WindowAccumulator]) -> WindowAccumulator:
    """Reduce independently computed shards into one."""
    merged = WindowAccumulator()
    for shard in shards:
        merged.merge(shard)
    return merged


def window_insights(shows: Iterable[Tuple[str, Setlist]],
                    opener_threshold: int,
                    closer_threshold: int) -> List[SongInsight]:
    """Insights over a window of (date, setlist) pairs.

    The caller picks the window and thresholds; a short recent window
    usually wants lower thresholds than a ten-year one.
    """
    return accumulate(shows).insights(opener_threshold, closer_threshold)


# ==================== Lookup Helpers ====================

def search_insights(insights: List[SongInsight], term: str,
                    limit: int = 50) -> List[SongInsight]:
    """Autocomplete: case-insensitive substring match in rank order."""
    term = term.strip().lower()
    if not term:
        return []
    return [i for i in insights if term in i.song.lower()][:limit]


def top_insights(insights: List[SongInsight], n: int = 5) -> List[SongInsight]:
    return rank(insights)[:n]


def insights_to_dataframe(insights: List[SongInsight]) -> pd.DataFrame:
    """Convert insights to a DataFrame for reporting."""
    data = []
    for i in insights:
        data.append({
            'song': i.song,
            'probability': i.probability,
            'times_played': i.times_played,
            'last_played': i.last_played,
            'frequent_opener': i.is_frequent_opener,
            'frequent_closer': i.is_frequent_closer,
        })
    return pd.DataFrame(data, columns=['song', 'probability', 'times_played', 'last_played',
                                       'frequent_opener', 'frequent_closer'])
