"""
Tests for the WAQI provider client and the Nominatim geocoder.

All HTTP calls go through the fake_http fixture; nothing touches the network.
"""

import pytest
import requests

from conftest import FakeResponse, waqi_payload
from clearsky.errors import UpstreamFailure
from clearsky.services.geocode import search_locations
from clearsky.services.realtime import fetch_current_aqi, parse_waqi_payload


class TestParseWaqiPayload:

    def test_normalises_feed(self):
        reading = parse_waqi_payload(waqi_payload(aqi=120, city='Delhi', dominentpol='pm10'))
        assert reading['city'] == 'Delhi'
        assert reading['aqi'] == 120
        assert reading['dominantPollutant'] == 'pm10'
        assert reading['pollutants'] == {'pm25': 42, 'pm10': 18, 'no2': 7.5, 'so2': None, 'o3': 21}
        assert reading['time'] == '2024-01-01T12:00:00+00:00'
        assert reading['level']['label'] == 'Unhealthy for Sensitive'
        assert reading['level']['max'] == 150

    def test_defaults_for_missing_metadata(self):
        payload = {'status': 'ok', 'data': {'aqi': 30}}
        reading = parse_waqi_payload(payload)
        assert reading['city'] == 'Unknown'
        assert reading['dominantPollutant'] is None
        assert set(reading['pollutants'].values()) == {None}
        assert reading['time'].endswith('+00:00')

    def test_local_time_with_offset_converted_to_utc(self):
        payload = waqi_payload(time={'s': '2024-01-02 03:00:00', 'tz': '+08:00'})
        assert parse_waqi_payload(payload)['time'] == '2024-01-01T19:00:00+00:00'

    def test_float_aqi_is_rounded(self):
        assert parse_waqi_payload(waqi_payload(aqi=49.6))['aqi'] == 50

    def test_half_aqi_rounds_up(self):
        assert parse_waqi_payload(waqi_payload(aqi=50.5))['aqi'] == 51
        assert parse_waqi_payload(waqi_payload(aqi='100.5'))['aqi'] == 101
        assert parse_waqi_payload(waqi_payload(aqi=50.5))['level']['label'] == 'Moderate'

    @pytest.mark.parametrize('payload', [
        {'status': 'error', 'data': 'Unknown station'},
        {'status': 'ok', 'data': None},
        {'status': 'ok'},
        waqi_payload(aqi='-'),
        waqi_payload(aqi=None),
        waqi_payload(aqi=-3),
        waqi_payload(aqi=True),
        waqi_payload(aqi='inf'),
        waqi_payload(aqi='-Infinity'),
        waqi_payload(aqi=float('inf')),
        waqi_payload(aqi='nan'),
        'not json object',
    ])
    def test_invalid_payloads(self, payload):
        with pytest.raises(UpstreamFailure) as exc:
            parse_waqi_payload(payload)
        assert exc.value.status_code == 502
        assert exc.value.message == 'Invalid response from AQI service'
        assert exc.value.detail == payload


class TestFetchCurrentAqi:

    def test_builds_geo_feed_request(self, app_context, fake_http):
        fake_http.respond('https://waqi.test/', FakeResponse(waqi_payload()))

        reading = fetch_current_aqi(52.52, 13.405)

        assert reading['aqi'] == 42
        call = fake_http.calls[0]
        assert call['url'] == 'https://waqi.test/feed/geo:52.52;13.405/'
        assert call['params'] == {'token': 'test-token'}
        assert call['timeout'] == 6

    def test_http_error_is_upstream_failure(self, app_context, fake_http):
        fake_http.respond('https://waqi.test/', FakeResponse({'status': 'error'}, status_code=503))
        with pytest.raises(UpstreamFailure) as exc:
            fetch_current_aqi(1.0, 2.0)
        assert exc.value.status_code == 500
        assert exc.value.message == 'Failed to fetch AQI data'

    def test_timeout_is_upstream_failure(self, app_context, fake_http):
        def timeout():
            raise requests.exceptions.Timeout('read timed out')

        fake_http.respond('https://waqi.test/', timeout)
        with pytest.raises(UpstreamFailure) as exc:
            fetch_current_aqi(1.0, 2.0)
        assert exc.value.detail == 'Request timed out'

    def test_non_json_body_is_upstream_failure(self, app_context, fake_http):
        fake_http.respond('https://waqi.test/', FakeResponse(json_error=True))
        with pytest.raises(UpstreamFailure) as exc:
            fetch_current_aqi(1.0, 2.0)
        assert exc.value.status_code == 500


class TestSearchLocations:

    def test_short_query_skips_network(self, app_context, fake_http):
        assert search_locations(' a ') == []
        assert search_locations(None) == []
        assert fake_http.calls == []

    def test_maps_results(self, app_context, fake_http):
        fake_http.respond('https://nominatim.test/', FakeResponse([
            {'display_name': 'Berlin, Germany', 'lat': '52.5170365', 'lon': '13.3888599', 'place_id': 1},
            {'display_name': 'Broken'},
        ]))

        results = search_locations('  Berlin ')

        assert results == [{'displayName': 'Berlin, Germany', 'lat': 52.5170365,
                            'lng': 13.3888599, 'placeId': 1}]
        call = fake_http.calls[0]
        assert call['params'] == {'q': 'Berlin', 'format': 'json', 'limit': 8}
        assert call['headers'] == {'User-Agent': 'ClearSky-AirQuality/1.0'}

    def test_non_list_body_gives_no_results(self, app_context, fake_http):
        fake_http.respond('https://nominatim.test/', FakeResponse({'error': 'oops'}))
        assert search_locations('Berlin') == []

    def test_failure_raises(self, app_context, fake_http):
        def boom():
            raise requests.exceptions.ConnectionError('refused')

        fake_http.respond('https://nominatim.test/', boom)
        with pytest.raises(UpstreamFailure) as exc:
            search_locations('Berlin')
        assert exc.value.message == 'Geocoding failed'
