"""
Services Package

Exports all services for easy importing.
"""

from clearsky.services.aqi import AQI_LEVELS, SAFETY_TIPS, SeverityLevel, classify, legend
from clearsky.services.history import (
    DailyBucket,
    HistoryStore,
    Observation,
    aggregate_by_day,
    since_days_ago,
    utc_timestamp
)
from clearsky.services.realtime import fetch_current_aqi, parse_waqi_payload
from clearsky.services.geocode import search_locations

__all__ = [
    'AQI_LEVELS',
    'SAFETY_TIPS',
    'SeverityLevel',
    'classify',
    'legend',
    'DailyBucket',
    'HistoryStore',
    'Observation',
    'aggregate_by_day',
    'since_days_ago',
    'utc_timestamp',
    'fetch_current_aqi',
    'parse_waqi_payload',
    'search_locations'
]
