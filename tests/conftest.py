"""
Shared pytest fixtures.

Tests never touch the network: the Phish.net client is replaced with a
fake that serves canned payloads.
"""

from datetime import datetime

import pytest
import requests

from phishpicks.cache import InsightCache
from phishpicks.data_loader import ShowHistoryLoader
from phishpicks.models import Setlist


class FakePhishNetAPI:
    """Serves canned Phish.net payloads; years listed in `failing_years` raise."""

    def __init__(self, shows_by_year=None, songs=None, setlists=None, show_details=None,
                 failing_years=()):
        self.shows_by_year = shows_by_year or {}
        self.songs = songs or []
        self.setlists = setlists or {}
        self.show_details = show_details or {}
        self.failing_years = set(failing_years)
        self.requested_years = []

    def get_shows_by_year(self, year):
        self.requested_years.append(year)
        if year in self.failing_years:
            raise requests.ConnectionError(f"boom {year}")
        return self.shows_by_year.get(year, [])

    def get_all_songs(self):
        return self.songs

    def get_setlist_by_date(self, date, use_cache=False):
        return self.setlists.get(date, [])

    def get_show_by_date(self, date):
        return self.show_details.get(date, [])


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FixedClock(datetime(2025, 8, 1, 12, 0, 0))


@pytest.fixture
def insight_cache(tmp_path, clock):
    return InsightCache(str(tmp_path / "cache"), ttl_hours=24, clock=clock)


@pytest.fixture
def fake_api():
    return FakePhishNetAPI(
        shows_by_year={
            2024: [
                {'showdate': '2024-12-31', 'artistid': 1, 'venue': 'Madison Square Garden',
                 'setlistdata': 'Set 1: Sand, Free, Set 2: Tweezer, Set 3: Auld Lang Syne, Encore: Tweezer Reprise'},
                {'showdate': '2024-04-18', 'artistid': 1, 'venue': 'Sphere',
                 'setlistdata': 'Set 1: Buried Alive > Sand, Set 2: Tweezer, Harry Hood, Encore: Slave to the Traffic Light'},
            ],
            2025: [
                {'showdate': '2025-07-04', 'artistid': 1, 'venue': 'Sphere',
                 'setlistdata': 'Set 1: Sand, Reba, Set 2: Ghost, Harry Hood, Encore: Loving Cup'},
                {'showdate': '2025-06-20', 'artistid': 1, 'venue': 'SPAC', 'setlistdata': ''},
                {'showdate': '2025-06-21', 'artistid': 2, 'venue': 'Side Project',
                 'setlistdata': 'Set 1: Not Phish'},
                {'showdate': 'not-a-date', 'artistid': 1, 'setlistdata': 'Set 1: Bogus'},
            ],
        },
        songs=[
            {'song': 'You Enjoy Myself', 'times_played': 620, 'last_played': '2025-07-04'},
            {'song': 'Chalk Dust Torture', 'times_played': '540', 'debut': '1991-02-01'},
            {'song': 'Fee', 'times_played': None},
            {'song': '', 'times_played': 100},
            'garbage',
        ],
        setlists={
            '2025-07-04': [
                {'song': 'Harry Hood', 'set': '2', 'position': 4, 'artistid': 1},
                {'song': 'Sand', 'set': '1', 'position': 1, 'artistid': 1},
                {'song': 'Loving Cup', 'set': 'e', 'position': 5, 'artistid': 1},
                {'song': 'Reba', 'set': '1', 'position': 2, 'artistid': 1},
                {'song': 'Ghost', 'set': '2', 'position': 3, 'artistid': 1},
            ],
        },
        show_details={
            '2025-07-04': [
                {'showdate': '2025-07-04', 'artistid': 1, 'venue': 'Sphere',
                 'city': 'Las Vegas', 'state': 'NV', 'country': 'USA'},
            ],
        },
    )


@pytest.fixture
def loader(fake_api, insight_cache, clock):
    return ShowHistoryLoader(api=fake_api, cache=insight_cache, clock=clock)


@pytest.fixture
def sample_setlist():
    return Setlist(
        set1=('Sand', 'Free'),
        set2=('Tweezer', 'Harry Hood'),
        encore=('Squirming Coil',),
    )
