from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_conversion_service, get_provider
from api.main import app
from application.services.conversion_service import ConversionService
from application.services.history_service import ConversionHistory
from domain.exceptions.currency import UpstreamError
from domain.models.currency import ApiQuota
from infrastructure.cache.rate_cache import RateCache


@pytest.fixture
def service(rate_source, fake_clock):
    return ConversionService(RateCache(rate_source, clock=fake_clock), ConversionHistory())


@pytest.fixture
def mock_provider():
    provider = AsyncMock()
    provider.check_connection.return_value = True
    provider.fetch_quota.return_value = ApiQuota(plan_quota=1500, requests_remaining=1320, refresh_day_of_month=17)
    return provider


@pytest.fixture
def client(service, mock_provider):
    # Override the real dependencies with test doubles
    app.dependency_overrides[get_conversion_service] = lambda: service
    app.dependency_overrides[get_provider] = lambda: mock_provider
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def test_convert_path_success(client, service):
    response = client.get('/api/convert/usd/eur/100')

    assert response.status_code == 200
    data = response.json()
    assert data['from_currency'] == 'USD'
    assert data['to_currency'] == 'EUR'
    assert data['amount'] == 100.0
    assert data['converted_amount'] == 85.0
    assert data['exchange_rate'] == 0.85
    assert data['percentage_difference'] == pytest.approx(-15.0)
    assert 'timestamp' in data
    assert len(service.history) == 1


def test_convert_body_cross_rate(client):
    response = client.post(
        '/api/convert', json={'from_currency': 'EUR', 'to_currency': 'USD', 'amount': 100}
    )

    assert response.status_code == 200
    assert response.json()['exchange_rate'] == pytest.approx(1 / 0.85)


def test_convert_unsupported_currency_is_400(client):
    response = client.get('/api/convert/XYZ/EUR/10')

    assert response.status_code == 400
    assert response.json()['code'] == 'XYZ'


def test_convert_negative_amount_is_400(client):
    response = client.get('/api/convert/USD/EUR/-10')

    assert response.status_code == 400


def test_convert_without_rates_is_503(failing_source, fake_clock):
    service = ConversionService(RateCache(failing_source, clock=fake_clock), ConversionHistory())
    app.dependency_overrides[get_conversion_service] = lambda: service
    try:
        response = TestClient(app).get('/api/convert/USD/EUR/10')
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503
    assert response.json()['detail'] == 'Exchange rate service unavailable'


def test_list_currencies(client):
    response = client.get('/api/currencies')

    assert response.status_code == 200
    currencies = response.json()['currencies']
    assert currencies[0] == {'code': 'USD', 'name': 'US Dollar'}
    assert len(currencies) == 10


def test_rates_and_cache_endpoints(client):
    assert client.get('/api/cache').json()['description'] == 'empty'

    rates = client.get('/api/rates').json()
    assert rates['base'] == 'USD'
    assert rates['stale'] is False
    assert rates['rates']['EUR'] == 0.85
    assert 'NGN' not in rates['rates']

    status = client.get('/api/cache').json()
    assert status['currency_count'] == 10
    assert status['seconds_remaining'] == 300

    assert client.delete('/api/cache').status_code == 204
    assert client.get('/api/cache').json()['is_empty'] is True


def test_history_endpoints(client):
    for amount in (1, 2, 3):
        client.get(f'/api/convert/USD/EUR/{amount}')

    history = client.get('/api/history', params={'limit': 2}).json()
    assert history['total'] == 3
    assert [c['amount'] for c in history['conversions']] == [3.0, 2.0]

    assert client.delete('/api/history').status_code == 204
    assert client.get('/api/history').json() == {'total': 0, 'conversions': []}


def test_health_reports_upstream(client, mock_provider):
    response = client.get('/health')

    assert response.status_code == 200
    assert response.json()['status'] == 'healthy'
    assert response.json()['quota'] == {
        'plan_quota': 1500, 'requests_remaining': 1320, 'refresh_day_of_month': 17
    }
    mock_provider.check_connection.assert_awaited_once()


def test_health_degraded_when_upstream_down(client, mock_provider):
    mock_provider.check_connection.return_value = False

    assert client.get('/health').json()['status'] == 'degraded'
    mock_provider.fetch_quota.assert_not_awaited()


def test_health_without_quota_when_quota_read_fails(client, mock_provider):
    mock_provider.fetch_quota.side_effect = UpstreamError('ExchangeRate-API error: invalid-key')

    data = client.get('/health').json()

    assert data['status'] == 'healthy'
    assert data['quota'] is None
