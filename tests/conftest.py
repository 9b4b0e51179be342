import pytest
import requests

from clearsky import create_app
from clearsky.config import TestConfig


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload=None, status_code=200, json_error=False):
        self._payload = payload
        self.status_code = status_code
        self._json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f'{self.status_code} Error')

    def json(self):
        if self._json_error:
            raise ValueError('Expecting value: line 1 column 1 (char 0)')
        return self._payload


def waqi_payload(aqi=42, city='Berlin', dominentpol='pm25', time_iso='2024-01-01T12:00:00+00:00', **extra):
    data = {
        'aqi': aqi,
        'city': {'name': city},
        'dominentpol': dominentpol,
        'iaqi': {
            'pm25': {'v': 42},
            'pm10': {'v': 18},
            'no2': {'v': 7.5},
            'o3': {'v': 21}
        },
        'time': {'s': '2024-01-01 12:00:00', 'tz': '+00:00', 'iso': time_iso}
    }
    data.update(extra)
    return {'status': 'ok', 'data': data}


@pytest.fixture()
def app():
    return create_app(TestConfig)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def app_context(app):
    with app.app_context():
        yield


@pytest.fixture()
def fake_http(monkeypatch):
    """Patch requests.get; responses are picked by URL prefix.

    Usage: ``fake_http.respond('https://waqi.test/', FakeResponse(...))``.
    A callable may be registered instead of a response to raise errors.
    """

    class FakeHttp:
        def __init__(self):
            self.routes = []
            self.calls = []

        def respond(self, prefix, response):
            self.routes.insert(0, (prefix, response))

        def __call__(self, url, params=None, headers=None, timeout=None):
            self.calls.append({'url': url, 'params': params, 'headers': headers, 'timeout': timeout})
            for prefix, response in self.routes:
                if url.startswith(prefix):
                    if callable(response):
                        return response()
                    return response
            raise AssertionError(f'Unexpected request to {url}')

    fake = FakeHttp()
    monkeypatch.setattr(requests, 'get', fake)
    return fake
