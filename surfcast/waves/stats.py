"""
Angular helper functions for wind and swell directions.

All directions are compass bearings in degrees, clockwise from north.
"""


# Eight compass sectors, canonical bearing of each (coming-FROM)
COMPASS_SECTORS = (
    ('N', 0.0),
    ('NE', 45.0),
    ('E', 90.0),
    ('SE', 135.0),
    ('S', 180.0),
    ('SW', 225.0),
    ('W', 270.0),
    ('NW', 315.0),
)


def normalize_angle(angle):
    """
    Normalize angle to the [-180, 180] range.

    Parameters:
    -----------
    angle : float
        Angle in degrees

    Returns:
    --------
    normalized : float
        Normalized angle
    """
    normalized = angle % 360.0
    if normalized > 180.0:
        normalized -= 360.0

    return normalized


def angle_between(dir1, dir2):
    """
    Compute smallest angle between two directions.

    Parameters:
    -----------
    dir1 : float
        First direction (degrees)
    dir2 : float
        Second direction (degrees)

    Returns:
    --------
    angle : float
        Smallest angle between directions, in [0, 180]
    """
    diff = normalize_angle(dir2 - dir1)
    return abs(diff)


def in_arc(bearing, arc_min, arc_max):
    """
    Test whether a bearing lies inside the arc from arc_min to arc_max.

    Both ends are inclusive, so a sector keyword that lands exactly on an
    edge (NE = 45°) still counts. An arc with arc_min > arc_max wraps
    through 0°, e.g. (315, 45) covers NW through N to NE.

    Parameters:
    -----------
    bearing : float
        Direction to test (degrees)
    arc_min : float
        Arc start
    arc_max : float
        Arc end

    Returns:
    --------
    bool
    """
    bearing = bearing % 360.0
    if arc_min <= arc_max:
        return arc_min <= bearing <= arc_max
    # Wrapping arc
    return bearing >= arc_min or bearing <= arc_max


def bearing_to_sector(bearing):
    """Name of the nearest of the eight compass sectors ('N', 'NE', ...)."""
    idx = int((bearing % 360.0) / 45.0 + 0.5) % 8
    return COMPASS_SECTORS[idx][0]
