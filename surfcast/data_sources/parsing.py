"""
Signal normalizer for reporting-office forecast text.

The forecast feed describes each slot in free text, for example:
- waves:  '１．５メートル　後　１メートル'
- winds:  '北東の風　やや強く'

English phrasing ('1.5m', 'northeast wind, moderately strong') is accepted
too. Every parser is total: missing or unparseable text falls back to a
documented default instead of raising.
"""

import re
import unicodedata

from ..waves.stats import COMPASS_SECTORS, bearing_to_sector

DEFAULT_HEIGHT_M = 0.5
DEFAULT_BEARING_DEG = 45.0  # NE, the prevailing direction in the reports
SPEED_NO_TEXT_MS = 3.0
SPEED_UNMATCHED_MS = 5.0
SPEED_MODERATE_STRONG_MS = 8.0
SPEED_STRONG_MS = 12.0

_SECTOR_BEARINGS = dict(COMPASS_SECTORS)

SECTOR_LABELS_JA = {
    'N': '北', 'NE': '北東', 'E': '東', 'SE': '南東',
    'S': '南', 'SW': '南西', 'W': '西', 'NW': '北西',
}

# Every spelling of a sector maps straight to its canonical name
DIRECTION_TOKENS = {
    '北': 'N', '北東': 'NE', '東': 'E', '南東': 'SE',
    '南': 'S', '南西': 'SW', '西': 'W', '北西': 'NW',
    'north': 'N', 'northeast': 'NE', 'east': 'E', 'southeast': 'SE',
    'south': 'S', 'southwest': 'SW', 'west': 'W', 'northwest': 'NW',
}

_NUMBER_RE = re.compile(r'\d+(?:\.\d+)?|\.\d+')
# "north east" and "north-east" are one compound direction
_COMPOUND_RE = re.compile(r'\b(north|south)[\s-]+(east|west)\b')
# A Japanese direction is a run of compass kanji; an English one is a word
_DIRECTION_RE = re.compile(r'[北南東西]+|[a-z]+')
_STRONG_RE = re.compile(r'(やや|moderately\s+)?(?:強く|strong)')


def _normalize(text):
    """NFKC-fold full-width glyphs to ASCII and lowercase."""
    return unicodedata.normalize('NFKC', text).lower()


def parse_height(text):
    """
    Extract the first wave height (meters) from a report fragment.

    Parameters:
    -----------
    text : str or None
        e.g. '1.5m', '１．２ｍ', '１メートル　後　０．５メートル'

    Returns:
    --------
    height : float
        Height in meters, DEFAULT_HEIGHT_M if no number is present
    """
    if not text:
        return DEFAULT_HEIGHT_M

    match = _NUMBER_RE.search(_normalize(text))
    if match is None:
        return DEFAULT_HEIGHT_M
    return float(match.group(0))


def parse_bearing(text):
    """
    Map the first compass direction in a report fragment to a bearing.

    The first direction token is looked up whole, so 'northeast' and '北東'
    resolve to NE and never to their single-direction parts.

    Returns:
    --------
    bearing : float
        Canonical sector bearing (N=0, NE=45, ...), DEFAULT_BEARING_DEG
        if no direction is found
    """
    if not text:
        return DEFAULT_BEARING_DEG

    normalized = _COMPOUND_RE.sub(r'\1\2', _normalize(text))
    for token in _DIRECTION_RE.findall(normalized):
        sector = DIRECTION_TOKENS.get(token)
        if sector is not None:
            return _SECTOR_BEARINGS[sector]
    return DEFAULT_BEARING_DEG


def parse_speed(text):
    """
    Qualitative wind strength to an approximate speed (m/s).

    - 'やや強く' / 'moderately strong' -> 8
    - '強く' / 'strong' -> 12
    - any other text -> 5
    - no text -> 3
    """
    if not text:
        return SPEED_NO_TEXT_MS

    match = _STRONG_RE.search(_normalize(text))
    if match is None:
        return SPEED_UNMATCHED_MS
    if match.group(1):
        return SPEED_MODERATE_STRONG_MS
    return SPEED_STRONG_MS


def bearing_label(bearing):
    """Japanese label of the nearest compass sector, e.g. 45 -> '北東'."""
    return SECTOR_LABELS_JA[bearing_to_sector(bearing)]
