"""
Geocoding Service

Free-text place search against Nominatim (OpenStreetMap).
"""

import logging

import requests
from flask import current_app

from clearsky.errors import UpstreamFailure

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


def search_locations(query):
    """Search places matching ``query``.

    Queries shorter than two characters return an empty list without
    calling Nominatim.

    Returns:
        list of {displayName, lat, lng, placeId}
    """
    q = (query or '').strip()
    if len(q) < MIN_QUERY_LENGTH:
        return []

    config = current_app.config
    params = {
        'q': q,
        'format': 'json',
        'limit': config['GEOCODE_LIMIT']
    }
    headers = {'User-Agent': config['GEOCODE_USER_AGENT']}

    try:
        resp = requests.get(config['NOMINATIM_URL'], params=params, headers=headers,
                            timeout=config['REQUEST_TIMEOUT'])
        resp.raise_for_status()
        data = resp.json()
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.warning('Geocoding failed for %r: %s', q, e)
        raise UpstreamFailure('Geocoding failed', status_code=500) from e

    results = []
    for item in data if isinstance(data, list) else []:
        try:
            results.append({
                'displayName': item['display_name'],
                'lat': float(item['lat']),
                'lng': float(item['lon']),
                'placeId': item.get('place_id')
            })
        except (KeyError, TypeError, ValueError):
            logger.debug('Skipping malformed geocoding result %r', item)

    return results
