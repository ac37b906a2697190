from unittest.mock import Mock

import pytest

from conftest import ist, make_quote
from web_app import create_app, handle_request


@pytest.fixture
def telegram():
    notifier = Mock()
    notifier.deliver.return_value = {'delivered': True, 'detail': {'ok': True, 'result': {'message_id': 1}}}
    return notifier


@pytest.fixture
def app_client(make_scanner, cache, telegram):
    app = create_app(scanner=make_scanner(telegram=telegram), cache=cache)
    app.config['TESTING'] = True
    return app.test_client()


def test_get_returns_empty_cache_before_any_scan(app_client, mock_client):
    response = app_client.get('/get')

    assert response.status_code == 200
    assert response.content_type == 'application/json'
    assert response.get_json() == {'ok': True, 'dips': []}
    assert mock_client.fetch_quote.call_count == 0


def test_fresh_scan_returns_dips_and_telegram_results(app_client, mock_client):
    mock_client.quotes = {'A': make_quote('A', 95, 100), 'B': make_quote('B', 99, 100)}

    response = app_client.get('/')
    body = response.get_json()

    assert response.status_code == 200
    assert body['ok'] is True
    assert [dip['symbol'] for dip in body['dips']] == ['A', 'B']
    assert all('telegram' not in dip for dip in body['dips'])
    assert body['telegram'] == [{'delivered': True, 'detail': {'ok': True, 'result': {'message_id': 1}}}] * 2


def test_get_after_scan_returns_cached_dips_without_delivery(app_client, mock_client, telegram):
    mock_client.quotes = {'A': make_quote('A', 95, 100), 'B': make_quote('B', 99, 100)}
    telegram.deliver.return_value = {'delivered': False, 'detail': 'Forbidden'}
    app_client.post('/scan')
    calls_after_scan = mock_client.fetch_quote.call_count

    first = app_client.get('/get').get_json()
    second = app_client.get('/get').get_json()

    assert [dip['symbol'] for dip in first['dips']] == ['A', 'B']
    assert all('telegram' not in dip for dip in first['dips'])
    assert first == second
    assert mock_client.fetch_quote.call_count == calls_after_scan


def test_post_to_get_path_runs_a_scan(app_client, mock_client):
    app_client.post('/get')
    assert mock_client.fetch_quote.call_count == 3


def test_telegram_field_omitted_when_no_deliveries(make_scanner, cache, mock_client):
    mock_client.quotes = {'A': make_quote('A', 95, 100)}
    app = create_app(scanner=make_scanner(), cache=cache)

    body = app.test_client().get('/run').get_json()

    assert len(body['dips']) == 1
    assert 'telegram' not in body


def test_closed_window_reports_not_ok(make_scanner, cache):
    scanner = make_scanner(now=ist(2025, 1, 5, 12, 0))

    body = handle_request('GET', '/', scanner, cache)

    assert body == {'ok': False, 'dips': []}


def test_handle_request_get_does_not_scan(cache):
    scanner = Mock()
    cache.set_last([{'symbol': 'A', 'change': -1.0, 'telegram': {'delivered': True}}])

    body = handle_request('GET', '/get', scanner, cache)

    assert body == {'ok': True, 'dips': [{'symbol': 'A', 'change': -1.0}]}
    scanner.scan.assert_not_called()


def test_get_with_query_string_runs_a_scan(app_client, mock_client):
    mock_client.quotes = {'A': make_quote('A', 95, 100)}

    body = app_client.get('/get?refresh=1').get_json()

    assert mock_client.fetch_quote.call_count == 3
    assert [dip['symbol'] for dip in body['dips']] == ['A']


def test_get_with_bare_question_mark_reads_cache(app_client, mock_client):
    app_client.get('/get?')
    assert mock_client.fetch_quote.call_count == 0


def test_dips_use_prev_close_camel_case_key(app_client, mock_client):
    mock_client.quotes = {'A': make_quote('A', 95, 100)}
    app_client.post('/')

    dip = app_client.get('/get').get_json()['dips'][0]

    assert dip['prevClose'] == 100
    assert 'prev_close' not in dip
