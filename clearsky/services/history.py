"""
Observation History Service

Bounded in-memory history of AQI observations and the per-day aggregation
used by the history endpoint. Nothing here survives a process restart.
"""

import logging
import math
import threading
from collections import OrderedDict, deque
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Deque, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Observation:
    """A single recorded AQI reading.

    ``timestamp`` is an ISO-8601 string in UTC
    (``YYYY-MM-DDTHH:MM:SS+00:00``) so plain string comparison orders it.
    """
    city: str
    aqi: int
    latitude: float
    longitude: float
    timestamp: str
    dominant_pollutant: Optional[str] = None

    @property
    def date(self) -> str:
        return self.timestamp[:10]

    def to_dict(self) -> dict:
        data = {
            'city': self.city,
            'aqi': self.aqi,
            'lat': self.latitude,
            'lng': self.longitude,
            'time': self.timestamp
        }
        if self.dominant_pollutant is not None:
            data['dominantPollutant'] = self.dominant_pollutant
        return data


@dataclass
class DailyBucket:
    """Observations that share a calendar date, with their rounded mean AQI."""
    date: str
    readings: List[Observation] = field(default_factory=list)
    avg_aqi: int = 0

    def to_dict(self) -> dict:
        return {
            'date': self.date,
            'avgAqi': self.avg_aqi,
            'readings': [r.to_dict() for r in self.readings]
        }


class HistoryStore:
    """Append-only history holding at most ``capacity`` observations.

    Once full, every new observation evicts the oldest one. ``record`` and
    ``query`` run under a lock so append-then-trim is atomic when Flask
    serves requests on several threads.
    """

    def __init__(self, capacity: int = 500):
        if capacity < 1:
            raise ValueError('capacity must be >= 1')
        self.capacity = capacity
        self._observations: Deque[Observation] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._observations)

    def record(self, observation: Observation) -> None:
        with self._lock:
            if len(self._observations) == self.capacity:
                evicted = self._observations[0]
                logger.debug('History full, evicting %s reading from %s', evicted.city, evicted.timestamp)
            # maxlen drops the oldest entry on append
            self._observations.append(observation)
        logger.debug('Recorded AQI %s for %s at %s', observation.aqi, observation.city, observation.timestamp)

    def query(self, since: str) -> List[Observation]:
        """Observations with ``timestamp >= since``, in insertion order."""
        with self._lock:
            return [o for o in self._observations if o.timestamp >= since]

    def snapshot(self) -> List[Observation]:
        with self._lock:
            return list(self._observations)


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a datetime as the UTC ISO string the store compares on."""
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).replace(microsecond=0).isoformat()


def since_days_ago(days: int, now: Optional[datetime] = None) -> str:
    """Start of a trailing window of ``days`` days, as a store timestamp."""
    if now is None:
        now = datetime.now(timezone.utc)
    return utc_timestamp(now - timedelta(days=days))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def aggregate_by_day(observations) -> List[DailyBucket]:
    """Group observations by date and average their AQI.

    Buckets come back sorted by date; zero-padded ISO dates sort correctly as
    strings.
    """
    buckets = OrderedDict()
    for obs in observations:
        bucket = buckets.get(obs.date)
        if bucket is None:
            bucket = buckets[obs.date] = DailyBucket(date=obs.date)
        bucket.readings.append(obs)

    for bucket in buckets.values():
        total = sum(r.aqi for r in bucket.readings)
        bucket.avg_aqi = round_half_up(total / len(bucket.readings))

    return sorted(buckets.values(), key=lambda b: b.date)
