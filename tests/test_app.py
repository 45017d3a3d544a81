"""Tests for the Flask JSON API."""

import pytest

import app as web


@pytest.fixture
def client(loader, monkeypatch):
    monkeypatch.setattr(web, 'loader', loader)
    web.app.config['TESTING'] = True
    return web.app.test_client()


def test_parse(client):
    response = client.post('/api/parse', json={'text': 'Set 1: Sand > Fuego, Encore: Cavern'})
    assert response.status_code == 200
    assert response.get_json()['setlist'] == {'set1': ['Sand', 'Fuego'], 'set2': [], 'encore': ['Cavern']}


def test_parse_requires_text(client):
    assert client.post('/api/parse', json={}).status_code == 400


def test_score_with_setlist(client):
    response = client.post('/api/score', json={
        'picks': {'opener': 'sand', 'wildcards': ['Tweezer', ''],
                  'rockNJock': {'song': 'Harry Hood', 'set': '2', 'position': 2}},
        'setlist': {'set1': ['Sand', 'Free'], 'set2': ['Tweezer', 'Harry Hood'], 'encore': []},
    })
    body = response.get_json()
    assert response.status_code == 200
    assert body['score'] == 8
    assert body['breakdown']['rockNJock'] is True
    assert body['breakdown']['wildcards'] == [True, False]


def test_score_by_date(client):
    response = client.post('/api/score', json={'picks': {'encore': 'Loving Cup'}, 'date': '2025-07-04'})
    assert response.get_json()['score'] == 2


def test_score_missing_setlist(client):
    assert client.post('/api/score', json={'picks': {}}).status_code == 400
    response = client.post('/api/score', json={'picks': {}, 'date': '1999-12-31'})
    assert response.status_code == 502


def test_leaderboard(client):
    response = client.post('/api/leaderboard', json={
        'players': {'Mike': {}, 'Page': {'opener': 'Sand'}},
        'date': '2025-07-04',
    })
    results = response.get_json()['results']
    assert [(r['name'], r['score']) for r in results] == [('Page', 2), ('Mike', 0)]


def test_insights_modes(client):
    catalog = client.get('/api/insights?mode=catalog').get_json()['insights']
    assert catalog[0]['song'] == 'You Enjoy Myself'

    recent = client.get('/api/insights?q=hood').get_json()['insights']
    assert [i['song'] for i in recent] == ['Harry Hood']

    tour = client.get('/api/insights?mode=tour&date=2025-07-04&limit=1').get_json()['insights']
    assert len(tour) == 1

    assert client.get('/api/insights?mode=tour').status_code == 400
    assert client.get('/api/insights?mode=bogus').status_code == 400


def test_setlist_and_show(client):
    assert client.get('/api/setlist/2025-07-04').get_json()['setlist']['encore'] == ['Loving Cup']
    assert client.get('/api/setlist/1999-12-31').status_code == 404
    assert client.get('/api/setlist/yesterday').status_code == 400
    assert client.get('/api/show/2025-07-04').get_json()['venue'] == 'Sphere, Las Vegas, NV'


@pytest.mark.parametrize("route", ['/api/parse', '/api/score', '/api/leaderboard'])
@pytest.mark.parametrize("body", [[1, 2], 'text', 42])
def test_non_object_body_is_rejected(client, route, body):
    response = client.post(route, json=body)
    assert response.status_code == 400
    assert 'error' in response.get_json()
