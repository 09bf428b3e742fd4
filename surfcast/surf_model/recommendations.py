"""
Session recommendations.

Provides:
- Session score for a forecast slot
- Best daylight session of a day
"""

from .board_recommendations import recommend_equipment
from .quality import round_half_up

DAYLIGHT_START_HOUR = 6
DAYLIGHT_END_HOUR = 18


def session_score(assessment):
    """
    Rank a slot for surfing: quality dominates, ride time breaks near-ties.

        score = 20 * quality + 2 * ride_time
    """
    return assessment.quality_score * 20 + assessment.estimated_ride_time_s * 2


def daylight_slots(slots, now=None):
    """
    Slots worth paddling out for: 06:00-18:00, or from the current hour on
    when `now` falls on the same day as the slots.
    """
    daylight = []
    for slot in slots:
        if now is not None and slot.timestamp.date() == now.date():
            start_hour = now.hour
        else:
            start_hour = DAYLIGHT_START_HOUR
        if start_hour <= slot.timestamp.hour <= DAYLIGHT_END_HOUR:
            daylight.append(slot)
    return daylight


def best_session(slots, catalog=(), now=None):
    """
    Pick the best daylight session from a day's slots.

    Parameters:
    -----------
    slots : list of ForecastSlot
        One day's slots, time-ordered
    catalog : sequence of EquipmentProfile
        Boards to recommend from
    now : datetime, optional
        Current time; earlier hours of today are skipped

    Returns:
    --------
    dict or None
        None if no slot falls in daylight. Otherwise keys:
        time, size, quality, board, ride_time_s, explanation
    """
    candidates = daylight_slots(slots, now)
    if not candidates:
        return None

    best = candidates[0]
    best_score = 0
    # First strictly better slot wins, so earlier slots take ties
    for slot in candidates:
        score = session_score(slot.assessment)
        if score > best_score:
            best_score = score
            best = slot

    assessment = best.assessment
    return {
        'time': best.timestamp.strftime('%H:%M'),
        'timestamp': best.timestamp.isoformat(),
        'size': assessment.size_label,
        'quality': assessment.quality_score,
        'board': recommend_equipment(assessment, catalog),
        'ride_time_s': round_half_up(assessment.estimated_ride_time_s),
        'explanation': assessment.explanation,
    }
