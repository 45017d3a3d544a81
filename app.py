#!/usr/bin/env python3
"""
PhishPicks Web App
==================

Flask JSON API in front of the parser, insights and scoring.
"""

from flask import Flask, request, jsonify
from flask_cors import CORS

from phishpicks.data_loader import ShowHistoryLoader
from phishpicks.schema import is_iso_date, picks_from_dict, setlist_from_dict
from phishpicks.scoring import leaderboard, score_picks
from phishpicks.setlist_parser import parse_setlist
from phishpicks.stats import search_insights

app = Flask(__name__)
CORS(app)

# Created on first use so the app can start without an API key
loader = None


def get_loader() -> ShowHistoryLoader:
    """Get or create the show history loader."""
    global loader
    if loader is None:
        loader = ShowHistoryLoader()
    return loader


def _actual_setlist(data):
    """Setlist from the body, or fetched by date. None if unavailable."""
    if 'setlist' in data:
        return setlist_from_dict(data['setlist'])
    if is_iso_date(data.get('date')):
        return get_loader().live_setlist(data['date'])
    return None


@app.route('/api/parse', methods=['POST'])
def parse():
    """Parse free-text setlist data."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    text = data.get('text')
    if not isinstance(text, str):
        return jsonify({'error': 'No setlist text provided'}), 400

    return jsonify({'setlist': parse_setlist(text).to_dict()})


@app.route('/api/score', methods=['POST'])
def score():
    """Score one set of picks."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    if not isinstance(data.get('picks'), dict):
        return jsonify({'error': 'No picks provided'}), 400
    if 'setlist' not in data and 'date' not in data:
        return jsonify({'error': 'Provide a setlist or a show date'}), 400

    setlist = _actual_setlist(data)
    if setlist is None:
        return jsonify({'error': 'Setlist not available'}), 502

    points, breakdown = score_picks(picks_from_dict(data['picks']), setlist)
    return jsonify({
        'score': points,
        'breakdown': breakdown.to_dict(),
        'setlist': setlist.to_dict()
    })


@app.route('/api/leaderboard', methods=['POST'])
def rank_players():
    """Score every player's picks, highest first."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    players = data.get('players')
    if not isinstance(players, dict) or not players:
        return jsonify({'error': 'No players provided'}), 400
    if 'setlist' not in data and 'date' not in data:
        return jsonify({'error': 'Provide a setlist or a show date'}), 400

    setlist = _actual_setlist(data)
    if setlist is None:
        return jsonify({'error': 'Setlist not available'}), 502

    entries = {name: picks_from_dict(p) for name, p in players.items()}
    return jsonify({
        'results': [
            {'name': name, 'score': points, 'breakdown': breakdown.to_dict()}
            for name, points, breakdown in leaderboard(entries, setlist)
        ],
        'setlist': setlist.to_dict()
    })


@app.route('/api/insights', methods=['GET'])
def insights():
    """Ranked song insights: recent (default), catalog, or tour (needs date)."""
    mode = request.args.get('mode', 'recent')
    limit = request.args.get('limit', 50, type=int)
    term = request.args.get('q', '')

    if mode == 'catalog':
        results = get_loader().catalog_insights()
    elif mode == 'tour':
        date = request.args.get('date')
        if not is_iso_date(date):
            return jsonify({'error': 'Tour insights need a YYYY-MM-DD date'}), 400
        results = get_loader().tour_insights(date)
    elif mode == 'recent':
        results = get_loader().guidance_insights()
    else:
        return jsonify({'error': f'Unknown mode: {mode}'}), 400

    results = search_insights(results, term, limit) if term else results[:limit]
    return jsonify({'insights': [i.to_dict() for i in results]})


@app.route('/api/setlist/<date>', methods=['GET'])
def setlist(date):
    """Structured setlist for a show date."""
    if not is_iso_date(date):
        return jsonify({'error': 'Date must be YYYY-MM-DD'}), 400

    result = get_loader().live_setlist(date)
    if result is None:
        return jsonify({'error': 'No setlist found for this date'}), 404
    return jsonify({'setlist': result.to_dict()})


@app.route('/api/show/<date>', methods=['GET'])
def show(date):
    """Venue line for a show date."""
    if not is_iso_date(date):
        return jsonify({'error': 'Date must be YYYY-MM-DD'}), 400

    details = get_loader().show_details(date)
    if details is None:
        return jsonify({'error': 'No show found for this date'}), 404
    return jsonify({'date': date, 'venue': details})


if __name__ == '__main__':
    print("\n" + "=" * 50)
    print("PhishPicks is running!")
    print("API at http://localhost:5050/api")
    print("=" * 50 + "\n")
    app.run(debug=True, port=5050)
