"""
Forecast feed fetching module.

Fetches the reporting-office area forecast (waves, winds, weather text per
time slot) for the Kanagawa coast.

Data Source: Japan Meteorological Agency forecast JSON, relayed by a proxy
- Envelope: {"success": bool, "data": [...]}
- data[0].timeSeries[0] holds "timeDefines" and "areas"; each area has a
  name and "waves" / "winds" / "weathers" arrays parallel to timeDefines
- Citation: Japan Meteorological Agency. https://www.jma.go.jp/

Unlike the buoy/wind fallbacks, a failed fetch is never papered over with
fake data: callers get a FeedError and produce no assessment.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime

import requests

from config import production

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = (429, 500, 502, 503, 504)


class FeedError(Exception):
    """Base class for forecast feed failures."""
    kind = 'feed_error'


class FeedUnavailableError(FeedError):
    """Network failure or non-success HTTP status."""
    kind = 'feed_unavailable'


class FeedFormatError(FeedError):
    """The response did not have the expected envelope or layout."""
    kind = 'unexpected_data_shape'


@dataclass(frozen=True)
class FeedEntry:
    timestamp: datetime
    wave_text: str = None
    wind_text: str = None
    weather_text: str = None


def fetch_feed(url=None, timeout=None, retries=None, retry_wait=1.0):
    """
    Fetch the raw forecast envelope.

    Makes one attempt plus at most `retries` more on connection errors,
    timeouts and retryable HTTP statuses.

    Parameters:
    -----------
    url : str
        Feed endpoint, default production.FEED_URL
    timeout : float
        Per-request timeout (s), default production.FEED_TIMEOUT
    retries : int
        Extra attempts after the first, default production.FEED_RETRIES
    retry_wait : float
        Pause between attempts (s)

    Returns:
    --------
    payload : dict
        Validated envelope with 'success' and 'data'

    Raises:
    -------
    FeedUnavailableError
        Network failure or non-success status after all attempts
    FeedFormatError
        Response is not a {success, data} envelope
    """
    url = url or production.FEED_URL
    timeout = production.FEED_TIMEOUT if timeout is None else timeout
    retries = production.FEED_RETRIES if retries is None else retries

    attempts = max(retries, 0) + 1
    for attempt in range(attempts):
        last_attempt = attempt == attempts - 1
        try:
            response = requests.get(url, timeout=timeout)
        except (requests.ConnectionError, requests.Timeout) as e:
            if last_attempt:
                raise FeedUnavailableError(f"Failed to reach forecast feed: {e}") from e
            logger.warning(f"Forecast feed request failed ({e}), retrying (attempt {attempt + 1}/{attempts})")
            time.sleep(retry_wait)
            continue
        except requests.RequestException as e:
            raise FeedUnavailableError(f"Failed to reach forecast feed: {e}") from e

        if response.status_code in RETRYABLE_STATUS and not last_attempt:
            logger.warning(f"HTTP {response.status_code} from forecast feed, retrying (attempt {attempt + 1}/{attempts})")
            time.sleep(retry_wait)
            continue

        if not response.ok:
            raise FeedUnavailableError(f"HTTP {response.status_code}: {response.reason}")

        try:
            payload = response.json()
        except ValueError as e:
            raise FeedFormatError(f"Forecast feed did not return JSON: {e}") from e

        validate_envelope(payload)
        logger.info(f"Successfully fetched forecast feed from {url}")
        return payload


def validate_envelope(payload):
    """Raise FeedFormatError unless payload is a successful {success, data} envelope."""
    if not isinstance(payload, dict) or not payload.get('success') or not payload.get('data'):
        raise FeedFormatError("Unexpected data shape: missing 'success' or 'data'")


def _time_series(payload):
    try:
        series = payload['data'][0]['timeSeries'][0]
        areas = series['areas']
        times = series['timeDefines']
    except (KeyError, IndexError, TypeError) as e:
        raise FeedFormatError(f"Unexpected data shape: {e}") from e
    if not isinstance(times, list) or not isinstance(areas, list):
        raise FeedFormatError("Unexpected data shape: 'timeDefines' and 'areas' must be lists")
    if not areas:
        raise FeedFormatError("Unexpected data shape: no areas in forecast")
    for area in areas:
        if not isinstance(area, dict) or not isinstance(area.get('area', {}), dict):
            raise FeedFormatError(f"Unexpected data shape: bad area record {area!r}")
        for key in ('waves', 'winds', 'weathers'):
            if not isinstance(area.get(key) or [], list):
                raise FeedFormatError(f"Unexpected data shape: '{key}' must be a list")
    return series, areas, times


def _area_name(area):
    return (area.get('area') or {}).get('name', '')


def select_area(areas, area_keyword):
    """First area whose name contains the keyword, else the first area."""
    for area in areas:
        if area_keyword and area_keyword in _area_name(area):
            return area
    return areas[0]


def _at(values, idx):
    return values[idx] if idx < len(values) else None


def extract_area_series(payload, area_keyword=None):
    """
    Pull the time-ordered text fragments for one area out of the envelope.

    Parameters:
    -----------
    payload : dict
        Envelope returned by fetch_feed
    area_keyword : str
        Substring of the preferred area name, default production.FEED_AREA_KEYWORD

    Returns:
    --------
    list of FeedEntry
        One per timeDefines entry; fragments missing at an index are None
    """
    area_keyword = production.FEED_AREA_KEYWORD if area_keyword is None else area_keyword
    _, areas, times = _time_series(payload)
    area = select_area(areas, area_keyword)

    waves = area.get('waves') or []
    winds = area.get('winds') or []
    weathers = area.get('weathers') or []

    entries = []
    for idx, time_str in enumerate(times):
        try:
            timestamp = datetime.fromisoformat(time_str)
        except (TypeError, ValueError) as e:
            raise FeedFormatError(f"Unexpected timestamp {time_str!r}: {e}") from e
        entries.append(FeedEntry(
            timestamp=timestamp,
            wave_text=_at(waves, idx),
            wind_text=_at(winds, idx),
            weather_text=_at(weathers, idx),
        ))

    logger.info(f"Extracted {len(entries)} forecast slots for area '{_area_name(area)}'")
    return entries


def describe_feed(payload, area_keyword=None):
    """
    Summarize a fetched envelope for a connectivity check.

    Returns:
    --------
    dict with keys:
        publishing_office : str
        report_datetime : str
        area_name : str
        sample : dict
            First three times, weathers, winds and waves
    """
    area_keyword = production.FEED_AREA_KEYWORD if area_keyword is None else area_keyword
    series, areas, times = _time_series(payload)
    area = select_area(areas, area_keyword)
    report = payload['data'][0]

    return {
        'publishing_office': report.get('publishingOffice', ''),
        'report_datetime': report.get('reportDatetime', ''),
        'area_name': _area_name(area),
        'sample': {
            'times': times[:3],
            'weathers': (area.get('weathers') or [])[:3],
            'winds': (area.get('winds') or [])[:3],
            'waves': (area.get('waves') or [])[:3],
        },
    }
