"""
Insight Cache

Keeps computed insights on disk for a fixed time. The clock is injected
so expiry can be tested without waiting.
"""

import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, List, Optional

from .models import SongInsight


class InsightCache:
    """File-backed TTL cache of SongInsight lists."""

    def __init__(self, cache_dir: str, ttl_hours: int = 24,
                 clock: Callable[[], datetime] = datetime.now):
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.ttl = timedelta(hours=ttl_hours)
        self.clock = clock

    def _path(self, key: str) -> Path:
        return self.cache_dir / f"insights_{key}.json"

    def get(self, key: str) -> Optional[List[SongInsight]]:
        """Cached insights, or None if missing, expired or unreadable."""
        path = self._path(key)
        if not path.exists():
            return None

        try:
            with open(path, 'r') as f:
                cached = json.load(f)
            cached_time = datetime.fromisoformat(cached['_cached_at'])
            rows = cached['data']
        except (OSError, ValueError, KeyError, TypeError):
            return None

        if self.clock() - cached_time > self.ttl:
            return None

        try:
            return [
                SongInsight(
                    song=row['song'],
                    probability=int(row['probability']),
                    times_played=int(row['timesPlayed']),
                    last_played=row['lastPlayed'],
                    is_frequent_opener=bool(row['isFrequentOpener']),
                    is_frequent_closer=bool(row['isFrequentCloser']),
                )
                for row in rows
            ]
        except (KeyError, TypeError, ValueError):
            return None

    def put(self, key: str, insights: List[SongInsight]):
        cached = {
            '_cached_at': self.clock().isoformat(),
            'data': [i.to_dict() for i in insights],
        }
        with open(self._path(key), 'w') as f:
            json.dump(cached, f)

    def clear(self, key: str):
        path = self._path(key)
        if path.exists():
            path.unlink()
