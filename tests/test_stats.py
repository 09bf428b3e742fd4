"""
Angular helper tests.
"""

import pytest

from surfcast.waves.stats import angle_between, bearing_to_sector, in_arc, normalize_angle


def test_normalize_angle():
    assert normalize_angle(190.0) == pytest.approx(-170.0)
    assert normalize_angle(-190.0) == pytest.approx(170.0)
    assert normalize_angle(360.0) == pytest.approx(0.0)


def test_angle_between_is_shortest_way_round():
    assert angle_between(350.0, 10.0) == pytest.approx(20.0)
    assert angle_between(10.0, 350.0) == pytest.approx(20.0)
    assert angle_between(0.0, 180.0) == pytest.approx(180.0)


def test_in_arc_plain():
    assert in_arc(0.0, 0.0, 45.0)
    assert in_arc(20.0, 0.0, 45.0)
    assert in_arc(45.0, 0.0, 45.0)
    assert not in_arc(46.0, 0.0, 45.0)
    assert not in_arc(359.0, 0.0, 45.0)


def test_in_arc_wraps_through_north():
    assert in_arc(350.0, 315.0, 45.0)
    assert in_arc(10.0, 315.0, 45.0)
    assert in_arc(315.0, 315.0, 45.0)
    assert not in_arc(180.0, 315.0, 45.0)
    assert not in_arc(300.0, 315.0, 45.0)


def test_bearing_to_sector():
    assert bearing_to_sector(0.0) == 'N'
    assert bearing_to_sector(22.0) == 'N'
    assert bearing_to_sector(23.0) == 'NE'
    assert bearing_to_sector(337.6) == 'N'
    assert bearing_to_sector(225.0) == 'SW'
