"""
Forecast synthesizer.

Drives the wave physics engine across an ordered sequence of samples:
- live mode: reporting-office text fragments, normalized then assessed
- synthetic mode: a procedurally generated 48 hour sequence

Nothing here reads the clock or a global random state. Callers pass a
numpy Generator (and, for live mode, a tide model) so every run is
reproducible.
"""

import itertools
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta

import numpy as np
import pandas as pd

from . import quality
from ..data_sources import parsing

logger = logging.getLogger(__name__)

# Feed carries no period; live slots draw one from this range
LIVE_PERIOD_RANGE = (8.0, 11.0)

SYNTHETIC_HOURS = 48
SYNTHETIC_STEP_HOURS = 2


@dataclass(frozen=True)
class RawSample:
    wave_height_m: float
    period_s: float
    wind_direction_deg: float
    wind_speed_ms: float
    tide_offset_m: float = 0.0
    weather: str = None
    wind_label: str = ''


@dataclass(frozen=True)
class ForecastSlot:
    timestamp: datetime
    sample: RawSample
    assessment: quality.SurfAssessment

    def to_dict(self):
        return {
            'timestamp': self.timestamp.isoformat(),
            'wave_height_m': self.sample.wave_height_m,
            'period_s': self.sample.period_s,
            'wind_speed_ms': self.sample.wind_speed_ms,
            'wind_direction_deg': self.sample.wind_direction_deg,
            'wind_label': self.sample.wind_label,
            'tide_offset_m': self.sample.tide_offset_m,
            'tide_trend': quality.tide_trend(self.sample.tide_offset_m),
            'weather': self.sample.weather,
            **self.assessment.to_dict(),
        }


def default_tide_model(timestamp):
    """
    Simple tide offset (m) from a slot timestamp.

    0.5 m amplitude sine over hours since the epoch; a function of the slot,
    not of when the forecast happens to run.
    """
    hours = timestamp.timestamp() / 3600.0
    return float(0.5 * np.sin(hours))


def assess_sample(timestamp, sample, spot):
    assessment = quality.assess(
        sample.wave_height_m,
        sample.period_s,
        sample.wind_speed_ms,
        sample.wind_direction_deg,
        spot,
        sample.tide_offset_m,
    )
    return ForecastSlot(timestamp=timestamp, sample=sample, assessment=assessment)


def live_forecast(entries, spot, rng, tide_model=default_tide_model):
    """
    Assess live feed entries for a spot.

    Parameters:
    -----------
    entries : sequence of FeedEntry
        Time-ordered text fragments from the forecast feed
    spot : SpotProfile
    rng : numpy.random.Generator
        Source for the per-slot wave period estimate
    tide_model : callable
        datetime -> tide offset (m)

    Returns:
    --------
    list of ForecastSlot, in entry order
    """
    slots = []
    for entry in entries:
        sample = RawSample(
            wave_height_m=parsing.parse_height(entry.wave_text),
            period_s=float(rng.uniform(*LIVE_PERIOD_RANGE)),
            wind_direction_deg=parsing.parse_bearing(entry.wind_text),
            wind_speed_ms=parsing.parse_speed(entry.wind_text),
            tide_offset_m=float(tide_model(entry.timestamp)),
            weather=entry.weather_text,
            wind_label=entry.wind_text or '',
        )
        slots.append(assess_sample(entry.timestamp, sample, spot))

    logger.info(f"Assessed {len(slots)} live slots for {spot.id}")
    return slots


def synthesize_samples(start, rng, hours=SYNTHETIC_HOURS, step_hours=SYNTHETIC_STEP_HOURS):
    """
    Generate a fixed-cadence sequence of plausible samples.

    - wave height: 0.8-1.4 m plus a diurnal +/-0.3 m swing
    - period: 8-12 s
    - wind: 3-8 m/s from NE through SE
    - tide: semi-diurnal sine, 0.8 m amplitude

    Parameters:
    -----------
    start : datetime
        Time of the first slot
    rng : numpy.random.Generator
    hours : int
        Span to cover
    step_hours : int
        Slot spacing

    Returns:
    --------
    list of (datetime, RawSample)
    """
    samples = []
    for i in range(0, hours, step_hours):
        timestamp = start + timedelta(hours=i)
        hour = timestamp.hour
        diurnal = np.sin(hour / 24.0 * np.pi * 2) * 0.3

        wave_height = 0.8 + rng.uniform(0.0, 0.6) + diurnal
        period = 8.0 + rng.uniform(0.0, 4.0)
        wind_speed = 3.0 + rng.uniform(0.0, 5.0)
        wind_dir = 45.0 + rng.uniform(0.0, 90.0)
        tide = np.sin((hour + i / 2.0) / 6.0 * np.pi) * 0.8

        samples.append((timestamp, RawSample(
            wave_height_m=round(float(wave_height), 2),
            period_s=round(float(period), 1),
            wind_direction_deg=float(round(wind_dir)),
            wind_speed_ms=round(float(wind_speed), 1),
            tide_offset_m=round(float(tide), 2),
            wind_label=parsing.bearing_label(wind_dir),
        )))
    return samples


def synthetic_forecast(spot, start, rng, hours=SYNTHETIC_HOURS, step_hours=SYNTHETIC_STEP_HOURS):
    """
    Generate and assess a synthetic forecast for a spot.

    Returns:
    --------
    list of ForecastSlot, time-ordered
    """
    slots = [
        assess_sample(timestamp, sample, spot)
        for timestamp, sample in synthesize_samples(start, rng, hours, step_hours)
    ]
    logger.debug(f"Synthesized {len(slots)} slots for {spot.id} from {start.isoformat()}")
    return slots


def group_by_date(slots):
    """Slots keyed by calendar date, dates and slots in time order."""
    grouped = {}
    for slot in slots:
        grouped.setdefault(slot.timestamp.date(), []).append(slot)
    return grouped


def day_window(slots, day):
    """Slots falling on the given calendar date."""
    return [slot for slot in slots if slot.timestamp.date() == day]


def daily_summary(slots):
    """
    Per-date statistics for a forecast.

    Returns:
    --------
    pandas.DataFrame indexed by date with columns:
        slots, max_size_index, max_size_label, best_quality,
        mean_ride_time_s, max_ride_time_s
    """
    columns = ['slots', 'max_size_index', 'max_size_label', 'best_quality',
               'mean_ride_time_s', 'max_ride_time_s']
    if not slots:
        return pd.DataFrame(columns=columns)

    frame = pd.DataFrame([
        {
            'date': slot.timestamp.date(),
            'size_index': slot.assessment.size_index,
            'quality_score': slot.assessment.quality_score,
            'ride_time_s': slot.assessment.estimated_ride_time_s,
        }
        for slot in slots
    ])
    summary = frame.groupby('date', sort=False).agg(
        slots=('size_index', 'size'),
        max_size_index=('size_index', 'max'),
        best_quality=('quality_score', 'max'),
        mean_ride_time_s=('ride_time_s', 'mean'),
        max_ride_time_s=('ride_time_s', 'max'),
    )
    summary['max_size_label'] = [quality.SIZE_LEVELS[idx] for idx in summary['max_size_index']]
    return summary[columns]


class ForecastRefresher:
    """
    Keeps the latest live forecast, ignoring superseded refreshes.

    Each refresh takes a request token from a monotonically increasing
    counter. A result is committed only if no newer refresh has been started
    in the meantime, so a slow response for an old spot cannot overwrite the
    forecast for the spot selected after it.
    """

    def __init__(self, fetch_entries, rng_factory=np.random.default_rng,
                 tide_model=default_tide_model):
        self._fetch_entries = fetch_entries
        self._rng_factory = rng_factory
        self._tide_model = tide_model
        self._tokens = itertools.count(1)
        self._lock = threading.Lock()
        self._latest_token = 0
        self.spot = None
        self.slots = []

    def next_token(self):
        with self._lock:
            self._latest_token = next(self._tokens)
            return self._latest_token

    def is_current(self, token):
        with self._lock:
            return token == self._latest_token

    def refresh(self, spot, seed=None):
        """
        Fetch and assess a live forecast for a spot.

        Returns:
        --------
        (slots, committed) : (list of ForecastSlot, bool)
            committed is False if a newer refresh started meanwhile
        """
        token = self.next_token()
        entries = self._fetch_entries()
        slots = live_forecast(entries, spot, self._rng_factory(seed), self._tide_model)

        with self._lock:
            if token != self._latest_token:
                logger.info(f"Discarding stale forecast for {spot.id} (request {token}, latest {self._latest_token})")
                return slots, False
            self.spot = spot
            self.slots = slots
        return slots, True
