"""
Best-session selection tests.
"""

from datetime import datetime

import pytest

from surfcast.surf_model import recommendations
from surfcast.surf_model.board_recommendations import EquipmentProfile
from surfcast.surf_model.forecast import RawSample, assess_sample


def _slot(spot, hour, wind_dir, wind_speed=5.0, period=10.0):
    sample = RawSample(
        wave_height_m=1.0,
        period_s=period,
        wind_direction_deg=wind_dir,
        wind_speed_ms=wind_speed,
        tide_offset_m=0.0,
    )
    return assess_sample(datetime(2026, 10, 19, hour), sample, spot)


def test_session_score(reef_spot):
    slot = _slot(reef_spot, 8, 20.0)
    expected = 5 * 20 + slot.assessment.estimated_ride_time_s * 2
    assert recommendations.session_score(slot.assessment) == pytest.approx(expected)


def test_best_session_prefers_clean_offshore(reef_spot):
    slots = [
        _slot(reef_spot, 6, 180.0),   # onshore
        _slot(reef_spot, 10, 20.0),   # clean offshore
        _slot(reef_spot, 14, 270.0),  # cross-shore
    ]
    best = recommendations.best_session(slots)

    assert best['time'] == '10:00'
    assert best['quality'] == 5
    assert best['board'] == 'none'
    assert best['size'] == 'chest-to-shoulder'
    assert best['ride_time_s'] == 7
    assert best['explanation'] == slots[1].assessment.explanation


def test_best_session_ties_keep_earliest(reef_spot):
    slots = [_slot(reef_spot, 8, 20.0), _slot(reef_spot, 12, 20.0)]
    assert recommendations.best_session(slots)['time'] == '08:00'


def test_best_session_ignores_night(reef_spot):
    slots = [
        _slot(reef_spot, 2, 20.0),
        _slot(reef_spot, 22, 20.0),
        _slot(reef_spot, 18, 270.0),
    ]
    assert recommendations.best_session(slots)['time'] == '18:00'
    assert recommendations.best_session(slots[:2]) is None
    assert recommendations.best_session([]) is None


def test_best_session_skips_past_hours_today(reef_spot):
    slots = [_slot(reef_spot, 8, 20.0), _slot(reef_spot, 16, 270.0)]
    now = datetime(2026, 10, 19, 12, 30)
    assert recommendations.best_session(slots, now=now)['time'] == '16:00'
    # a different day applies the normal daylight window
    assert recommendations.best_session(slots, now=datetime(2026, 10, 18, 12))['time'] == '08:00'


def test_best_session_recommends_board(reef_spot):
    catalog = [
        EquipmentProfile('Shortboard', (0, 0, 0, 0, 0, 5, 0, 0, 0), (0, 0, 0, 0)),
        EquipmentProfile('Longboard', (0, 0, 0, 0, 0, 1, 0, 0, 0), (1, 0, 0, 0)),
    ]
    best = recommendations.best_session([_slot(reef_spot, 9, 20.0)], catalog)
    assert best['board'] == 'Shortboard'
