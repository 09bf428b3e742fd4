"""
Wave physics engine.

Turns one wave/wind sample at one spot into a surf assessment: size
category, surface condition, wave character, where the wave breaks,
estimated ride time and a short explanation.

Uses a handful of hand-tuned multiplicative factors per spot rather than a
refraction or bathymetry model. Every function here is pure; the same
inputs always give the same assessment.
"""

import math
from dataclasses import asdict, dataclass

import numpy as np

from . import spots
from ..waves.stats import angle_between, in_arc

# Size categories, smallest first; index is the size ordinal
SIZE_LEVELS = (
    'no-surf',
    'shin-to-knee',
    'knee-to-thigh',
    'thigh-to-waist',
    'waist-to-chest',
    'chest-to-shoulder',
    'shoulder-to-head',
    'head-high',
    'overhead',
)
# Exclusive upper bound of every category but the last
SIZE_THRESHOLDS = (0.3, 1.2, 2.2, 3.5, 4.5, 6.0, 8.0, 11.0)

# Wave characters; index is the character ordinal used by board ratings
MUSHY = 'mushy'
HOLLOW = 'hollow'
FAST = 'fast'
WINDSWELL = 'windswell'
WAVE_CHARACTERS = (MUSHY, HOLLOW, FAST, WINDSWELL)

CLEAN = 'clean'
ORGANIZED = 'organized'
CHOPPY = 'choppy'

OFFSHORE = 'offshore'
ONSHORE = 'onshore'
CROSS = 'cross'

SHOREBREAK = 'shorebreak'
OUTSIDE_GRADUAL = 'outside, gradual break'
MID_BREAK = 'mid break'
UNBROKEN = 'unbroken / outside'

# Breaker index (gamma_b)
GAMMA_B = 0.78

MIN_RIDE_TIME_S = 2.0
MAX_RIDE_TIME_S = 20.0

CHARACTER_RIDE_FACTORS = {
    HOLLOW: 1.3,
    FAST: 1.1,
    WINDSWELL: 0.6,
    MUSHY: 0.7,
}


@dataclass(frozen=True)
class SurfAssessment:
    quality_score: int
    size_label: str
    size_index: int
    final_size: float
    set_size_label: str
    set_interval_s: int
    surface_condition: str
    wave_character: str
    character_index: int
    breaking_distance: str
    estimated_ride_time_s: float
    tide_evaluation: str
    wind_type: str
    wind_factor: float
    wind_effect: str
    explanation: str
    wave_height_m: float
    period_s: float
    wind_speed_ms: float
    wind_direction_deg: float
    tide_offset_m: float

    def to_dict(self):
        return asdict(self)


def round_half_up(value):
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def classify_wind_type(wind_dir, spot):
    """
    Classify wind as offshore, onshore or cross-shore for a spot.

    Offshore is checked first against the spot's arc (which may wrap through
    north); onshore is anything within 45° of due south.

    Parameters:
    -----------
    wind_dir : float
        Wind direction (degrees, coming-FROM)
    spot : SpotProfile

    Returns:
    --------
    wind_type : str
        'offshore', 'onshore' or 'cross'
    """
    if in_arc(wind_dir, spot.offshore_min, spot.offshore_max):
        return OFFSHORE
    if angle_between(wind_dir, 180.0) < 45.0:
        return ONSHORE
    return CROSS


def wind_response(wind_type, U):
    """
    Wind factor, raw quality score and effect text for a wind regime.

    Parameters:
    -----------
    wind_type : str
        'offshore', 'onshore' or 'cross'
    U : float
        Wind speed (m/s)

    Returns:
    --------
    (wind_factor, quality_score, wind_effect) : (float, int, str)
    """
    if wind_type == OFFSHORE:
        if U > 8.0:
            return 0.85, 4, 'strong offshore, face held'
        elif U > 3.0:
            return 0.95, 5, 'clean offshore face'
        else:
            return 1.0, 4, 'light offshore'
    elif wind_type == ONSHORE:
        quality_score = max(1, 3 - int(math.floor(U / 3.0)))
        return 1.0 + 0.08 * U, quality_score, 'onshore, choppy'
    else:
        return 1.0 + 0.03 * U, 2, 'cross-shore, textured'


def size_index(size):
    """Ordinal of the size category containing a computed size value."""
    for idx, threshold in enumerate(SIZE_THRESHOLDS):
        if size < threshold:
            return idx
    return len(SIZE_THRESHOLDS)


def size_label(size):
    return SIZE_LEVELS[size_index(size)]


def surface_condition(quality_score):
    if quality_score >= 4:
        return CLEAN
    elif quality_score == 3:
        return ORGANIZED
    return CHOPPY


def wave_character(terrain, final_size, period, quality_score):
    """
    Classify the wave character, first match wins:
    steep terrain with real size -> hollow, short period -> fast,
    poor wind -> windswell, otherwise mushy.
    """
    if terrain == spots.STEEP and final_size > 3.0:
        return HOLLOW
    elif period < 8.0:
        return FAST
    elif quality_score <= 2:
        return WINDSWELL
    return MUSHY


def breaking_distance(wave_height, wind_factor, terrain, effective_depth):
    """
    Where the wave breaks, from depth-limited breaking.

    The wave breaks once the wind-adjusted height exceeds GAMMA_B times the
    effective depth; where it breaks then depends only on terrain.

    Parameters:
    -----------
    wave_height : float
        Raw wave height (m)
    wind_factor : float
        Wind amplification/damping factor
    terrain : str
        Spot terrain category
    effective_depth : float
        Mean depth plus tide offset (m)

    Returns:
    --------
    str
    """
    critical_height = GAMMA_B * effective_depth
    if wave_height * wind_factor > critical_height:
        if terrain == spots.STEEP:
            return SHOREBREAK
        elif terrain == spots.VERY_SHALLOW:
            return OUTSIDE_GRADUAL
        return MID_BREAK
    return UNBROKEN


def tide_stability_factor(tide_offset):
    dist_from_mean = abs(tide_offset)
    if dist_from_mean < 0.3:
        return 1.1
    elif dist_from_mean > 0.7:
        return 0.85
    return 1.0


def size_ride_factor(size_idx):
    if size_idx >= 5:
        return 1.2
    elif size_idx >= 3:
        return 1.0
    return 0.8


def estimate_ride_time(period, character, size_idx, tide_offset, quality_score):
    """
    Estimated ride time (s), clamped to [2, 20].

        T_ride = 0.8 * T * F_character * F_size * F_tide * (quality / 5)
    """
    estimate = (
        period * 0.8
        * CHARACTER_RIDE_FACTORS[character]
        * size_ride_factor(size_idx)
        * tide_stability_factor(tide_offset)
        * (quality_score / 5.0)
    )
    return float(np.clip(estimate, MIN_RIDE_TIME_S, MAX_RIDE_TIME_S))


def tide_trend(tide_offset):
    return 'rising' if tide_offset > 0 else 'falling'


def evaluate_tide(tide_offset):
    """Tide trend plus stability, e.g. 'rising, favorable'."""
    trend = tide_trend(tide_offset)
    dist_from_mean = abs(tide_offset)
    if dist_from_mean < 0.2:
        return f'slack ({trend})'
    elif dist_from_mean < 0.5:
        return f'{trend}, favorable'
    return f'{trend}, strong/unstable'


def compose_explanation(wind_effect, breaking, spot, tide_offset, tide_eval,
                        ride_time, set_label, set_interval):
    terrain_note = 'powerful' if spot.terrain == spots.STEEP else 'mellow'
    return (
        f"{wind_effect}. "
        f"Breaking {breaking} (depth {spot.mean_depth}m, tide {tide_offset:+.1f}m). "
        f"The terrain makes for {terrain_note} waves. "
        f"Tide {tide_eval}. "
        f"Estimated ride time about {round_half_up(ride_time)}s. "
        f"Sets {set_label}, roughly every {set_interval}s."
    )


def assess(wave_height, period, wind_speed, wind_dir, spot, tide_offset=0.0):
    """
    Assess surf conditions for one sample at one spot.

    A tide_offset of 0 gives the mean-sea-level assessment.

    Parameters:
    -----------
    wave_height : float
        Wave height (m, >= 0)
    period : float
        Wave period (s)
    wind_speed : float
        Wind speed (m/s, >= 0)
    wind_dir : float
        Wind direction (degrees, coming-FROM, [0, 360))
    spot : SpotProfile
    tide_offset : float
        Tide level relative to mean sea level (m)

    Returns:
    --------
    SurfAssessment
    """
    base_energy = wave_height * period * 0.5

    wind_type = classify_wind_type(wind_dir, spot)
    wind_factor, quality_score, wind_effect = wind_response(wind_type, wind_speed)

    final_size = base_energy * wind_factor * spot.terrain_factor
    size_idx = size_index(final_size)

    character = wave_character(spot.terrain, final_size, period, quality_score)

    effective_depth = spot.mean_depth + tide_offset
    breaking = breaking_distance(wave_height, wind_factor, spot.terrain, effective_depth)

    set_label = size_label(final_size * 1.3)
    set_interval = round_half_up(period * 1.2)

    ride_time = estimate_ride_time(period, character, size_idx, tide_offset, quality_score)
    tide_eval = evaluate_tide(tide_offset)

    explanation = compose_explanation(
        wind_effect, breaking, spot, tide_offset, tide_eval,
        ride_time, set_label, set_interval
    )

    return SurfAssessment(
        quality_score=quality_score,
        size_label=SIZE_LEVELS[size_idx],
        size_index=size_idx,
        final_size=float(final_size),
        set_size_label=set_label,
        set_interval_s=set_interval,
        surface_condition=surface_condition(quality_score),
        wave_character=character,
        character_index=WAVE_CHARACTERS.index(character),
        breaking_distance=breaking,
        estimated_ride_time_s=ride_time,
        tide_evaluation=tide_eval,
        wind_type=wind_type,
        wind_factor=float(wind_factor),
        wind_effect=wind_effect,
        explanation=explanation,
        wave_height_m=float(wave_height),
        period_s=float(period),
        wind_speed_ms=float(wind_speed),
        wind_direction_deg=float(wind_dir),
        tide_offset_m=float(tide_offset),
    )
