"""
Setlist Parser

Turns Phish.net free-text setlist descriptions into structured setlists.

Format: "Set 1: Song1, Song2 > Song3, Set 2: Song4, Encore: Song5"
- labels are case-insensitive and may come in any order
- ">" (and "->") chains segued songs; each link is its own entry
- "[1]" style footnote markers are stripped
- Set 3 (NYE and other specialty shows) is appended to Set 2
"""

import re
from typing import Dict, List

from .models import Setlist

LABEL_RE = re.compile(r'\b(?:set\s*([123])|(encore)(?:\s*\d+)?)\s*:', re.IGNORECASE)
SEGUE_RE = re.compile(r'-?>')
FOOTNOTE_RE = re.compile(r'\[.*?\]')
WHITESPACE_RE = re.compile(r'\s+')


def normalize_song(song: str) -> str:
    """Comparison key for song names (case-insensitive, trimmed)."""
    return song.lower().strip()


def clean_song(song: str) -> str:
    """Strip footnote markers and collapse whitespace."""
    song = FOOTNOTE_RE.sub('', song)
    return WHITESPACE_RE.sub(' ', song).strip()


def parse_song_list(text: str) -> List[str]:
    """Split a segment into songs, flattening segue chains."""
    songs = []
    for item in text.split(','):
        for link in SEGUE_RE.split(item):
            song = clean_song(link)
            if song:
                songs.append(song)
    return songs


def split_segments(raw_text: str) -> Dict[str, List[str]]:
    """Map each set key ("1", "2", "3", "e") to its songs.

    A segment runs from its label to the next label or the end of the text.
    Text before the first label is ignored.
    """
    segments: Dict[str, List[str]] = {'1': [], '2': [], '3': [], 'e': []}
    labels = list(LABEL_RE.finditer(raw_text))

    for i, label in enumerate(labels):
        key = label.group(1) or 'e'
        end = labels[i + 1].start() if i + 1 < len(labels) else len(raw_text)
        segments[key].extend(parse_song_list(raw_text[label.end():end]))

    return segments


def parse_setlist(raw_text: str) -> Setlist:
    """Parse one free-text setlist. Never raises; missing sets are empty."""
    if not raw_text:
        return Setlist()

    segments = split_segments(raw_text)
    return Setlist(
        set1=tuple(segments['1']),
        set2=tuple(segments['2'] + segments['3']),
        encore=tuple(segments['e']),
    )
