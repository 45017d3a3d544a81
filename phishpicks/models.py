"""
Data Models for Phish Setlist Picks

Immutable value objects shared by the parser, the stats aggregator and
the scoring engine.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Setlist:
    """Songs actually performed at a show, in performance order.

    Set 3 (NYE and other specialty shows) is folded into set2.
    """
    set1: Tuple[str, ...] = ()
    set2: Tuple[str, ...] = ()
    encore: Tuple[str, ...] = ()

    @property
    def all_songs(self) -> Tuple[str, ...]:
        return self.set1 + self.set2 + self.encore

    @property
    def is_empty(self) -> bool:
        return not (self.set1 or self.set2 or self.encore)

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            'set1': list(self.set1),
            'set2': list(self.set2),
            'encore': list(self.encore),
        }


@dataclass(frozen=True)
class RockNJock:
    """Exact song + set + position pick. Empty/zero means unset."""
    song: str = ''
    set: str = ''  # "1", "2" or ""
    position: int = 0  # 1-indexed, 0 = unset

    @property
    def is_complete(self) -> bool:
        return bool(self.song) and self.set in ('1', '2') and self.position >= 1


@dataclass(frozen=True)
class SongPicks:
    """One participant's predictions for a show."""
    opener: str = ''
    set1_closer: str = ''
    set2_opener: str = ''
    set2_closer: str = ''
    encore: str = ''
    wildcards: Tuple[str, str] = ('', '')
    rock_n_jock: RockNJock = field(default_factory=RockNJock)

    def to_dict(self) -> Dict:
        return {
            'opener': self.opener,
            'set1Closer': self.set1_closer,
            'set2Opener': self.set2_opener,
            'set2Closer': self.set2_closer,
            'encore': self.encore,
            'wildcards': list(self.wildcards),
            'rockNJock': {
                'song': self.rock_n_jock.song,
                'set': self.rock_n_jock.set,
                'position': self.rock_n_jock.position,
            },
        }


@dataclass(frozen=True)
class ScoreBreakdown:
    """Which rubric items matched."""
    opener: bool = False
    set1_closer: bool = False
    set2_opener: bool = False
    set2_closer: bool = False
    encore: bool = False
    wildcards: Tuple[bool, bool] = (False, False)
    rock_n_jock: bool = False

    def to_dict(self) -> Dict:
        return {
            'opener': self.opener,
            'set1Closer': self.set1_closer,
            'set2Opener': self.set2_opener,
            'set2Closer': self.set2_closer,
            'encore': self.encore,
            'wildcards': list(self.wildcards),
            'rockNJock': self.rock_n_jock,
        }


@dataclass(frozen=True)
class SongInsight:
    """Per-song statistic used to guide predictions."""
    song: str
    probability: int  # 0-100
    times_played: int = 0
    last_played: str = ''
    is_frequent_opener: bool = False
    is_frequent_closer: bool = False

    def to_dict(self) -> Dict:
        return {
            'song': self.song,
            'probability': self.probability,
            'timesPlayed': self.times_played,
            'lastPlayed': self.last_played,
            'isFrequentOpener': self.is_frequent_opener,
            'isFrequentCloser': self.is_frequent_closer,
        }


@dataclass(frozen=True)
class ShowRecord:
    """A show from the history feed; setlist text may be absent."""
    show_date: str  # YYYY-MM-DD
    setlist_text: Optional[str] = None
    venue: str = ''
    city: str = ''
    state: str = ''
    country: str = ''
    location: str = ''


@dataclass(frozen=True)
class CatalogRecord:
    """A song in the Phish catalog with its lifetime play count."""
    song: str
    times_played: int = 0
    last_played: str = ''  # last played, or debut date if never repeated
