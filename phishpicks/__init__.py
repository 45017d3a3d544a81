"""
PhishPicks - setlist prediction and scoring for Phish shows.
"""

from .models import (
    Setlist, SongPicks, RockNJock, ScoreBreakdown, SongInsight,
    ShowRecord, CatalogRecord
)
from .setlist_parser import parse_setlist, normalize_song
from .stats import catalog_insights, window_insights
from .scoring import score_picks
