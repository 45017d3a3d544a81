"""Tests for payload validation at the ingestion boundary."""

from phishpicks.models import RockNJock, Setlist, SongPicks
from phishpicks.schema import (
    catalog_record_from_api, picks_from_dict, safe_int, setlist_from_dict,
    setlist_from_entries, show_record_from_api
)


def test_safe_int():
    assert safe_int('42') == 42
    assert safe_int(None, 7) == 7
    assert safe_int('abc') == 0


def test_show_record_validation():
    record = show_record_from_api({'showdate': '2024-12-31', 'setlistdata': 'Set 1: Sand',
                                   'venue': ' MSG ', 'city': None})
    assert record.show_date == '2024-12-31'
    assert record.setlist_text == 'Set 1: Sand'
    assert record.venue == 'MSG'
    assert record.city == ''

    assert show_record_from_api({'showdate': '2024-12-31', 'setlistdata': '  '}).setlist_text is None
    assert show_record_from_api({'showdate': '12/31/2024'}) is None
    assert show_record_from_api({'showdate': '2024-12-31', 'artistid': '2'}) is None
    assert show_record_from_api(['not', 'a', 'dict']) is None


def test_catalog_record_validation():
    record = catalog_record_from_api({'song': 'Fee', 'times_played': '-3', 'debut': '1989-01-01'})
    assert record.times_played == 0
    assert record.last_played == '1989-01-01'
    assert catalog_record_from_api({'song': '  '}) is None
    assert catalog_record_from_api({'song': 42}) is None


def test_setlist_from_entries_groups_and_orders():
    setlist = setlist_from_entries([
        {'song': 'Auld Lang Syne', 'set': '3', 'position': 9},
        {'song': 'Tweezer', 'set': '2', 'position': 5},
        {'song': 'Sand', 'set': '1', 'position': 1},
        {'song': 'Tweezer Reprise', 'set': 'E', 'position': 11},
        {'song': 'Loving Cup', 'set': 'e2', 'position': 12},
        {'song': 'Free', 'set': 1, 'position': '2'},
        {'song': 'Soundcheck Jam', 'set': 'S', 'position': 0},
        {'song': '', 'set': '1', 'position': 3},
    ])
    assert setlist == Setlist(
        set1=('Sand', 'Free'),
        set2=('Tweezer', 'Auld Lang Syne'),
        encore=('Tweezer Reprise', 'Loving Cup'),
    )


def test_setlist_from_dict():
    setlist = setlist_from_dict({'set1': [' Sand ', '', 3], 'set2': 'Tweezer'})
    assert setlist == Setlist(set1=('Sand',))
    assert setlist_from_dict(None) == Setlist()


def test_picks_from_dict():
    picks = picks_from_dict({
        'opener': 'Sand',
        'set1Closer': None,
        'wildcards': ['Ghost'],
        'rockNJock': {'song': 'Harry Hood', 'set': 2, 'position': '2'},
    })
    assert picks == SongPicks(
        opener='Sand',
        wildcards=('Ghost', ''),
        rock_n_jock=RockNJock(song='Harry Hood', set='2', position=2),
    )


def test_picks_from_dict_rejects_bad_rock_n_jock():
    picks = picks_from_dict({'rockNJock': {'song': 'Cup', 'set': 'E', 'position': -4},
                             'wildcards': 'Ghost'})
    assert picks.rock_n_jock == RockNJock(song='Cup')
    assert picks.wildcards == ('', '')
    assert picks_from_dict('junk') == SongPicks()


def test_picks_round_trip_shape():
    raw = SongPicks(opener='Sand', rock_n_jock=RockNJock('Free', '1', 2)).to_dict()
    assert picks_from_dict(raw) == SongPicks(opener='Sand', rock_n_jock=RockNJock('Free', '1', 2))
