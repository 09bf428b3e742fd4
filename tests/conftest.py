"""
Pytest configuration.

Shared fixtures for the surf model, feed and API tests.
"""

import sys
from pathlib import Path

import pytest

# Project root on the path so `config` and `surfcast` import without installing
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from surfcast.surf_model import spots  # noqa: E402


@pytest.fixture
def reef_spot():
    """Koyurugi: offshore arc 0-45, terrain factor 1.0, depth 4.2 m."""
    return spots.get_spot('koyurugi')


@pytest.fixture
def steep_spot():
    """Yoshihama: offshore arc wraps 315-45, steep terrain."""
    return spots.get_spot('yoshihama')


@pytest.fixture
def feed_payload():
    """A trimmed reporting-office envelope with two areas."""
    return {
        'success': True,
        'data': [
            {
                'publishingOffice': '横浜地方気象台',
                'reportDatetime': '2026-10-19T05:00:00+09:00',
                'timeSeries': [
                    {
                        'timeDefines': [
                            '2026-10-19T05:00:00+09:00',
                            '2026-10-20T00:00:00+09:00',
                            '2026-10-21T00:00:00+09:00',
                        ],
                        'areas': [
                            {
                                'area': {'name': '西部', 'code': '140020'},
                                'waves': ['３メートル', '２メートル', '１メートル'],
                                'winds': ['南の風', '南の風', '南の風'],
                                'weathers': ['雨', '雨', '雨'],
                            },
                            {
                                'area': {'name': '東部', 'code': '140010'},
                                'waves': ['１．５メートル', '１メートル'],
                                'winds': ['北東の風　やや強く', '北の風', '南西の風　強く'],
                                'weathers': ['晴れ', 'くもり', '晴れ'],
                            },
                        ],
                    }
                ],
            }
        ],
    }
