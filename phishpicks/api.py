"""
Phish.net API Client with Local Caching

Handles the Phish.net requests the picks game needs, with file caching
so repeated lookups don't hit the API.
"""

import json
import hashlib
import requests
from pathlib import Path
from datetime import datetime, timedelta
from typing import Optional, Dict, List

from . import config


class PhishNetAPI:
    """Client for Phish.net API v5 with local file caching."""

    def __init__(self, api_key: Optional[str] = None, cache_dir: Optional[str] = None,
                 base_url: Optional[str] = None, timeout: Optional[int] = None):
        self.api_key = api_key or config.PHISHNET_API_KEY
        if not self.api_key:
            raise ValueError("API key required. Set PHISHNET_API_KEY env var or pass api_key parameter.")

        self.base_url = base_url or config.PHISHNET_BASE_URL
        self.timeout = timeout or config.REQUEST_TIMEOUT
        self.cache_dir = Path(cache_dir or config.CACHE_DIR)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.cache_expiry_hours = config.API_CACHE_HOURS

    def _cache_key(self, endpoint: str, params: Dict) -> str:
        """Generate a unique cache key for this request (API key excluded)."""
        param_str = json.dumps(params, sort_keys=True)
        key_str = f"{endpoint}:{param_str}"
        return hashlib.md5(key_str.encode()).hexdigest()

    def _get_cached(self, cache_key: str) -> Optional[Dict]:
        """Get cached response if valid. Unreadable cache files are a miss."""
        cache_file = self.cache_dir / f"{cache_key}.json"
        if not cache_file.exists():
            return None

        try:
            with open(cache_file, 'r') as f:
                cached = json.load(f)
            cached_time = datetime.fromisoformat(cached['_cached_at'])
            data = cached['data']
        except (OSError, ValueError, KeyError, TypeError):
            return None

        if datetime.now() - cached_time > timedelta(hours=self.cache_expiry_hours):
            return None
        if not isinstance(data, dict):
            return None

        return data

    def _save_cache(self, cache_key: str, data: Dict):
        """Save response to cache."""
        cache_file = self.cache_dir / f"{cache_key}.json"
        cached = {
            '_cached_at': datetime.now().isoformat(),
            'data': data
        }
        with open(cache_file, 'w') as f:
            json.dump(cached, f)

    def _request(self, endpoint: str, params: Optional[Dict] = None, use_cache: bool = True) -> Dict:
        """Make API request with optional caching."""
        params = dict(params or {})
        cache_key = self._cache_key(endpoint, params)

        if use_cache:
            cached = self._get_cached(cache_key)
            if cached is not None:
                return cached

        url = f"{self.base_url}/{endpoint}"
        response = requests.get(url, params={**params, 'apikey': self.api_key}, timeout=self.timeout)
        response.raise_for_status()
        data = response.json()

        if not isinstance(data, dict):
            raise ValueError(f"Unexpected response shape from {endpoint}")

        if use_cache:
            self._save_cache(cache_key, data)

        return data

    @staticmethod
    def _data(result: Dict) -> List[Dict]:
        data = result.get('data')
        return data if isinstance(data, list) else []

    # ==================== Show Endpoints ====================

    def get_shows_by_year(self, year: int) -> List[Dict]:
        """Get all shows for a specific year (with setlistdata text)."""
        result = self._request(f"shows/showyear/{year}.json", {'order_by': 'showdate'})
        return self._data(result)

    def get_show_by_date(self, date: str) -> List[Dict]:
        """Get show details for a specific date (YYYY-MM-DD)."""
        result = self._request(f"shows/showdate/{date}.json")
        return self._data(result)

    # ==================== Setlist Endpoints ====================

    def get_setlist_by_date(self, date: str, use_cache: bool = False) -> List[Dict]:
        """Get per-song setlist entries for a show date.

        Uncached by default: a show in progress keeps changing.
        """
        result = self._request(f"setlists/showdate/{date}.json", use_cache=use_cache)
        return self._data(result)

    # ==================== Song Endpoints ====================

    def get_all_songs(self) -> List[Dict]:
        """Get list of all songs in the database."""
        result = self._request("songs.json")
        return self._data(result)


def clear_cache(cache_dir: Optional[str] = None):
    """Clear all cached data."""
    cache_path = Path(cache_dir or config.CACHE_DIR)
    if cache_path.exists():
        for f in cache_path.glob("*.json"):
            f.unlink()
        print(f"Cleared cache at {cache_path}")
