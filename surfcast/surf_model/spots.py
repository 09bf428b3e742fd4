"""
Spot registry for the Shonan / Yugawara coast.

Each spot carries the few hand-tuned numbers the wave model needs:
- offshore wind arc from offshore_min to offshore_max in degrees (coming-FROM);
  offshore_min > offshore_max means the arc wraps through north
- terrain category and terrain energy factor (amplifies or damps wave size)
- mean water depth at the break (meters)

Depths and factors are site calibrations, not survey data.
"""

from dataclasses import dataclass


# Terrain categories
BAY_SHALLOW = 'bay_shallow'
REEF = 'reef'
VERY_SHALLOW = 'very_shallow'
SHALLOW = 'shallow'
STEEP = 'steep'

TERRAINS = (BAY_SHALLOW, REEF, VERY_SHALLOW, SHALLOW, STEEP)

# Reporting-office forecast area covering Kanagawa
JMA_AREA_CODE = '315'


@dataclass(frozen=True)
class SpotProfile:
    id: str
    name: str
    lat: float
    lon: float
    offshore_min: float
    offshore_max: float
    terrain: str
    terrain_factor: float
    mean_depth: float
    jma_code: str = JMA_AREA_CODE


SPOTS = (
    SpotProfile(
        id='yuigahama',
        name='Yuigahama',
        lat=35.3105,
        lon=139.5468,
        offshore_min=0.0,
        offshore_max=45.0,
        terrain=BAY_SHALLOW,
        terrain_factor=0.6,  # sheltered bay soaks up energy
        mean_depth=2.8,
    ),
    SpotProfile(
        id='koyurugi',
        name='Koyurugi (Ipponmatsu)',
        lat=35.3056,
        lon=139.5028,
        offshore_min=0.0,
        offshore_max=45.0,
        terrain=REEF,
        terrain_factor=1.0,
        mean_depth=4.2,
    ),
    SpotProfile(
        id='kugenuma',
        name='Kugenuma',
        lat=35.3135,
        lon=139.4623,
        offshore_min=0.0,
        offshore_max=45.0,
        terrain=VERY_SHALLOW,
        terrain_factor=0.5,
        mean_depth=3.1,
    ),
    SpotProfile(
        id='tsujido',
        name='Tsujido',
        lat=35.3197,
        lon=139.4449,
        offshore_min=0.0,
        offshore_max=45.0,
        terrain=SHALLOW,
        terrain_factor=0.7,
        mean_depth=5.4,
    ),
    SpotProfile(
        id='yoshihama',
        name='Yugawara Yoshihama',
        lat=35.1450,
        lon=139.1250,
        offshore_min=315.0,  # NW through N to NE
        offshore_max=45.0,
        terrain=STEEP,
        terrain_factor=1.4,  # steep shelf focuses energy
        mean_depth=8.2,
    ),
)

SPOTS_BY_ID = {spot.id: spot for spot in SPOTS}

DEFAULT_SPOT_ID = SPOTS[0].id


def get_spot(spot_id):
    """
    Look up a spot by id.

    Raises:
    -------
    KeyError
        If the id is not in the registry
    """
    try:
        return SPOTS_BY_ID[spot_id]
    except KeyError:
        raise KeyError(f"Unknown spot: {spot_id}") from None
