"""
Real-time Data Service

Integration with the WAQI (World Air Quality Index) geo feed.
"""

import logging
import math
from datetime import datetime

import requests
from flask import current_app

from clearsky.errors import UpstreamFailure
from clearsky.services.aqi import classify
from clearsky.services.history import round_half_up, utc_timestamp

logger = logging.getLogger(__name__)

POLLUTANTS = ('pm25', 'pm10', 'no2', 'so2', 'o3')


def _parse_aqi(value):
    """Return a non-negative int AQI, or None if the feed value is unusable."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        # WAQI reports "-" for stations without a current index
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return round_half_up(number)


def _parse_time(time_info):
    """Normalise the feed's time block to a UTC store timestamp."""
    if not isinstance(time_info, dict):
        return utc_timestamp()

    candidates = []
    if time_info.get('iso'):
        candidates.append(str(time_info['iso']))
    if time_info.get('s'):
        local = str(time_info['s']).replace(' ', 'T')
        if time_info.get('tz'):
            candidates.append(local + str(time_info['tz']))
        candidates.append(local)

    for candidate in candidates:
        try:
            parsed = datetime.fromisoformat(candidate)
        except ValueError:
            logger.debug('Unparseable WAQI time value %r', candidate)
            continue
        return utc_timestamp(parsed)

    return utc_timestamp()


def _pollutant_value(iaqi, name):
    entry = iaqi.get(name) if isinstance(iaqi, dict) else None
    if isinstance(entry, dict):
        return entry.get('v')
    return None


def parse_waqi_payload(payload):
    """Validate a WAQI feed response and normalise it.

    Raises:
        UpstreamFailure: status is not "ok", ``data`` is missing or the AQI
            is not a non-negative number.
    """
    if not isinstance(payload, dict) or payload.get('status') != 'ok' or not isinstance(payload.get('data'), dict):
        raise UpstreamFailure('Invalid response from AQI service', detail=payload, status_code=502)

    data = payload['data']
    aqi = _parse_aqi(data.get('aqi'))
    if aqi is None:
        raise UpstreamFailure('Invalid response from AQI service', detail=payload, status_code=502)

    city = data.get('city') if isinstance(data.get('city'), dict) else {}
    iaqi = data.get('iaqi') or {}

    return {
        'city': city.get('name') or 'Unknown',
        'aqi': aqi,
        'dominantPollutant': data.get('dominentpol') or None,
        'pollutants': {name: _pollutant_value(iaqi, name) for name in POLLUTANTS},
        'time': _parse_time(data.get('time')),
        'level': classify(aqi).to_dict()
    }


def fetch_current_aqi(lat, lng):
    """Fetch and classify the current AQI nearest to the given coordinates.

    Returns:
        dict with city, aqi, dominantPollutant, pollutants, time and level.

    Raises:
        UpstreamFailure: transport errors (500) or an invalid payload (502).
    """
    config = current_app.config
    url = f"{config['WAQI_BASE_URL']}geo:{lat};{lng}/"

    try:
        resp = requests.get(url, params={'token': config['WAQI_TOKEN']}, timeout=config['REQUEST_TIMEOUT'])
        resp.raise_for_status()
        payload = resp.json()
    except requests.exceptions.Timeout as e:
        logger.warning('WAQI request timed out for %s,%s', lat, lng)
        raise UpstreamFailure('Failed to fetch AQI data', detail='Request timed out', status_code=500) from e
    except requests.exceptions.RequestException as e:
        logger.warning('WAQI request failed for %s,%s: %s', lat, lng, e)
        raise UpstreamFailure('Failed to fetch AQI data', detail=str(e), status_code=500) from e
    except ValueError as e:
        logger.warning('WAQI returned a non-JSON body for %s,%s', lat, lng)
        raise UpstreamFailure('Failed to fetch AQI data', detail=str(e), status_code=500) from e

    try:
        return parse_waqi_payload(payload)
    except UpstreamFailure:
        logger.warning('WAQI returned an unusable payload for %s,%s (status=%s)',
                       lat, lng, payload.get('status') if isinstance(payload, dict) else None)
        raise
