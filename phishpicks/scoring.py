"""
Pick Scoring

Compares a player's picks against the actual setlist.

Rubric (each item independent, no partial credit):
    opener, set 1 closer, set 2 opener, set 2 closer   2 pts each
    encore (any encore song)                           2 pts
    wildcard x2 (anywhere in the show, encore too)     1 pt each
    Rock n Jock (exact song + set + position)          5 pts

Rock n Jock can only target set 1 or set 2, never the encore.
"""

from typing import List, Mapping, Sequence, Tuple

from .models import ScoreBreakdown, Setlist, SongPicks
from .setlist_parser import normalize_song

POINTS = {
    'opener': 2,
    'set1_closer': 2,
    'set2_opener': 2,
    'set2_closer': 2,
    'encore': 2,
    'wildcard': 1,
    'rock_n_jock': 5,
}


def _matches(pick: str, actual: str) -> bool:
    pick = normalize_song(pick)
    return bool(pick) and pick == normalize_song(actual)


def _first_matches(pick: str, songs: Sequence[str]) -> bool:
    return bool(songs) and _matches(pick, songs[0])


def _last_matches(pick: str, songs: Sequence[str]) -> bool:
    return bool(songs) and _matches(pick, songs[-1])


def _contains(pick: str, songs: Sequence[str]) -> bool:
    pick = normalize_song(pick)
    return bool(pick) and pick in {normalize_song(s) for s in songs}


def _rock_n_jock_matches(picks: SongPicks, actual: Setlist) -> bool:
    rnj = picks.rock_n_jock
    if not rnj.is_complete:
        return False

    target = actual.set1 if rnj.set == '1' else actual.set2
    index = rnj.position - 1
    if index >= len(target):
        return False
    return _matches(rnj.song, target[index])


def score_picks(picks: SongPicks, actual: Setlist) -> Tuple[int, ScoreBreakdown]:
    """Score one player's picks. Never raises; bad picks just miss."""
    wildcards = tuple(picks.wildcards[:2]) + ('',) * (2 - len(picks.wildcards[:2]))

    breakdown = ScoreBreakdown(
        opener=_first_matches(picks.opener, actual.set1),
        set1_closer=_last_matches(picks.set1_closer, actual.set1),
        set2_opener=_first_matches(picks.set2_opener, actual.set2),
        set2_closer=_last_matches(picks.set2_closer, actual.set2),
        encore=_contains(picks.encore, actual.encore),
        wildcards=(
            _contains(wildcards[0], actual.all_songs),
            _contains(wildcards[1], actual.all_songs),
        ),
        rock_n_jock=_rock_n_jock_matches(picks, actual),
    )

    score = (
        POINTS['opener'] * breakdown.opener
        + POINTS['set1_closer'] * breakdown.set1_closer
        + POINTS['set2_opener'] * breakdown.set2_opener
        + POINTS['set2_closer'] * breakdown.set2_closer
        + POINTS['encore'] * breakdown.encore
        + POINTS['wildcard'] * sum(breakdown.wildcards)
        + POINTS['rock_n_jock'] * breakdown.rock_n_jock
    )
    return score, breakdown


def leaderboard(entries: Mapping[str, SongPicks],
                actual: Setlist) -> List[Tuple[str, int, ScoreBreakdown]]:
    """Score every player, highest first. Ties keep entry order."""
    results = []
    for name, picks in entries.items():
        score, breakdown = score_picks(picks, actual)
        results.append((name, score, breakdown))
    return sorted(results, key=lambda x: x[1], reverse=True)
