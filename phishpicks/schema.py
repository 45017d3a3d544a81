"""
Input Validation

Converts loosely-typed JSON payloads (Phish.net responses, web request
bodies) into model objects. Bad fields are defaulted; records that can't
be used at all come back as None.
"""

import re
from typing import Any, Dict, Iterable, List, Optional

from .models import CatalogRecord, RockNJock, Setlist, ShowRecord, SongPicks

DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')

ENCORE_SETS = ('E', 'E2')


def safe_int(value, default=0):
    """Safely convert a value to int, returning default if not possible."""
    if value is None:
        return default
    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def safe_str(value, default=''):
    """Strip a string field, defaulting anything that isn't a string."""
    if isinstance(value, str):
        return value.strip()
    return default


def is_iso_date(value) -> bool:
    return isinstance(value, str) and bool(DATE_RE.match(value))


def is_phish(raw: Dict[str, Any]) -> bool:
    """Phish.net also lists side projects; Phish itself is artist 1."""
    return isinstance(raw, dict) and safe_int(raw.get('artistid'), 1) == 1


# ==================== Phish.net Payloads ====================

def show_record_from_api(raw: Dict[str, Any]) -> Optional[ShowRecord]:
    """Validate a `shows/...` entry. Rejects entries without a usable date."""
    if not is_phish(raw) or not is_iso_date(raw.get('showdate')):
        return None

    text = raw.get('setlistdata')
    return ShowRecord(
        show_date=raw['showdate'],
        setlist_text=text if isinstance(text, str) and text.strip() else None,
        venue=safe_str(raw.get('venue')),
        city=safe_str(raw.get('city')),
        state=safe_str(raw.get('state')),
        country=safe_str(raw.get('country')),
        location=safe_str(raw.get('location')),
    )


def catalog_record_from_api(raw: Dict[str, Any]) -> Optional[CatalogRecord]:
    """Validate a `songs.json` entry. Rejects entries without a song name."""
    if not isinstance(raw, dict):
        return None
    song = safe_str(raw.get('song'))
    if not song:
        return None

    return CatalogRecord(
        song=song,
        times_played=max(safe_int(raw.get('times_played')), 0),
        last_played=safe_str(raw.get('last_played')) or safe_str(raw.get('debut')),
    )


def setlist_from_entries(entries: Iterable[Dict[str, Any]]) -> Setlist:
    """Build a setlist from per-song `setlists/...` entries.

    Groups by set code and sorts each group by position. Set 3 follows
    set 2; unknown set codes (soundcheck etc.) are dropped.
    """
    groups: Dict[str, List] = {'1': [], '2': [], '3': [], 'E': []}

    for entry in entries:
        if not isinstance(entry, dict):
            continue
        song = safe_str(entry.get('song'))
        if not song:
            continue
        set_code = str(entry.get('set') or '').strip().upper()
        if set_code in ENCORE_SETS:
            set_code = 'E'
        if set_code in groups:
            groups[set_code].append((safe_int(entry.get('position')), song))

    def ordered(key):
        return [song for _, song in sorted(groups[key], key=lambda x: x[0])]

    return Setlist(
        set1=tuple(ordered('1')),
        set2=tuple(ordered('2') + ordered('3')),
        encore=tuple(ordered('E')),
    )


# ==================== Request Bodies ====================

def _song_list(value) -> tuple:
    if not isinstance(value, list):
        return ()
    return tuple(s.strip() for s in value if isinstance(s, str) and s.strip())


def setlist_from_dict(raw: Dict[str, Any]) -> Setlist:
    """Validate a `{set1, set2, encore}` body."""
    if not isinstance(raw, dict):
        return Setlist()
    return Setlist(
        set1=_song_list(raw.get('set1')),
        set2=_song_list(raw.get('set2')),
        encore=_song_list(raw.get('encore')),
    )


def picks_from_dict(raw: Dict[str, Any]) -> SongPicks:
    """Validate a picks body. Anything missing or malformed is left unset."""
    if not isinstance(raw, dict):
        return SongPicks()

    wildcards = raw.get('wildcards')
    wildcards = [safe_str(w) for w in wildcards] if isinstance(wildcards, list) else []
    wildcards = (wildcards + ['', ''])[:2]

    rnj = raw.get('rockNJock')
    rnj = rnj if isinstance(rnj, dict) else {}
    rnj_set = str(rnj.get('set') or '').strip()

    return SongPicks(
        opener=safe_str(raw.get('opener')),
        set1_closer=safe_str(raw.get('set1Closer')),
        set2_opener=safe_str(raw.get('set2Opener')),
        set2_closer=safe_str(raw.get('set2Closer')),
        encore=safe_str(raw.get('encore')),
        wildcards=(wildcards[0], wildcards[1]),
        rock_n_jock=RockNJock(
            song=safe_str(rnj.get('song')),
            set=rnj_set if rnj_set in ('1', '2') else '',
            position=max(safe_int(rnj.get('position')), 0),
        ),
    )
