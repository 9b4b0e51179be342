"""
AQI API Routes

Current readings, recommendations, history, safety tips and place search.
"""

import logging
import math

from flask import current_app, jsonify, request

from clearsky.api import api_bp
from clearsky.errors import InvalidInput, UpstreamFailure
from clearsky.extensions import get_history_store
from clearsky.services import (
    SAFETY_TIPS,
    Observation,
    aggregate_by_day,
    classify,
    fetch_current_aqi,
    legend,
    search_locations,
    since_days_ago
)

logger = logging.getLogger(__name__)


def _parse_coordinate(raw, limit):
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or math.isinf(value) or abs(value) > limit:
        return None
    return value


def _parse_int(raw):
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return None


@api_bp.route('/current')
def current():
    """Fetch the live AQI for lat/lng, classify it and record it in history."""
    lat_raw = request.args.get('lat')
    lng_raw = request.args.get('lng')

    if not lat_raw or not lng_raw:
        raise InvalidInput('lat and lng query parameters are required')

    lat = _parse_coordinate(lat_raw, 90)
    lng = _parse_coordinate(lng_raw, 180)
    if lat is None or lng is None:
        raise InvalidInput('lat and lng must be valid numbers')

    reading = fetch_current_aqi(lat, lng)
    logger.info('AQI %s (%s) for %s at %s,%s', reading['aqi'], reading['level']['label'],
                reading['city'], lat, lng)

    get_history_store().record(Observation(
        city=reading['city'],
        aqi=reading['aqi'],
        latitude=lat,
        longitude=lng,
        timestamp=reading['time'],
        dominant_pollutant=reading['dominantPollutant']
    ))

    return jsonify(reading)


@api_bp.route('/recommendation')
def recommendation():
    """Severity band and advice for an AQI value, plus the full legend."""
    aqi = _parse_int(request.args.get('aqi', ''))
    if aqi is None:
        raise InvalidInput('aqi query parameter is required')
    if aqi < 0:
        raise InvalidInput('aqi must be a non-negative integer')

    level = classify(aqi)
    return jsonify({
        'aqi': aqi,
        'level': level.label,
        'color': level.color,
        'recommendation': level.recommendation,
        'allLevels': legend()
    })


@api_bp.route('/history', defaults={'days': None})
@api_bp.route('/history/<days>')
def history(days):
    """Daily AQI averages over the trailing ``days`` days."""
    max_days = current_app.config['HISTORY_MAX_DAYS']
    if days is None:
        days = current_app.config['HISTORY_DEFAULT_DAYS']
    else:
        days = _parse_int(days)

    if days is None or days < 1 or days > max_days:
        raise InvalidInput(f'days must be a number between 1 and {max_days}')

    observations = get_history_store().query(since_days_ago(days))
    buckets = aggregate_by_day(observations)

    return jsonify({
        'days': days,
        'history': [bucket.to_dict() for bucket in buckets]
    })


@api_bp.route('/tips')
def tips():
    return jsonify({'tips': list(SAFETY_TIPS)})


@api_bp.route('/geocode')
def geocode():
    """Place search; the client expects a results list even on failure."""
    try:
        results = search_locations(request.args.get('q'))
    except UpstreamFailure as e:
        return jsonify({'error': e.message, 'results': []}), e.status_code
    return jsonify({'results': results})
