"""
Equipment recommender tests.
"""

import json

import pytest

from surfcast.surf_model import board_recommendations as boards
from surfcast.surf_model import quality
from surfcast.surf_model.board_recommendations import EquipmentProfile


@pytest.fixture
def assessment(reef_spot):
    # chest-to-shoulder (size 5), mushy (character 0)
    return quality.assess(1.0, 10.0, 5.0, 20.0, reef_spot)


def test_empty_catalog_returns_sentinel(assessment):
    assert boards.recommend_equipment(assessment, []) == boards.NO_RECOMMENDATION
    assert boards.NO_RECOMMENDATION == 'none'


def test_single_entry_wins_regardless_of_score(assessment):
    catalog = [EquipmentProfile('Rock board', (-5,) * 9, (-5,) * 4)]
    assert boards.recommend_equipment(assessment, catalog) == 'Rock board'


def test_score_uses_size_and_character_ordinals(assessment):
    profile = EquipmentProfile('Log', (0, 0, 0, 0, 0, 3, 0, 0, 0), (2, 0, 0, 0))
    assert boards.score_equipment(profile, assessment) == 5


def test_missing_ratings_count_as_zero(assessment):
    profile = EquipmentProfile('Short list', (1, 1), ())
    assert boards.score_equipment(profile, assessment) == 0


def test_highest_score_wins(assessment):
    catalog = [
        EquipmentProfile('Fish', (0, 0, 0, 0, 0, 2, 0, 0, 0), (1, 0, 0, 0)),
        EquipmentProfile('Mid', (0, 0, 0, 0, 0, 4, 0, 0, 0), (3, 0, 0, 0)),
        EquipmentProfile('Gun', (0, 0, 0, 0, 0, 1, 5, 5, 5), (0, 5, 0, 0)),
    ]
    assert boards.recommend_equipment(assessment, catalog) == 'Mid'


def test_ties_go_to_catalog_order(assessment):
    catalog = [
        EquipmentProfile('First', (0, 0, 0, 0, 0, 3, 0, 0, 0), (1, 0, 0, 0)),
        EquipmentProfile('Second', (0, 0, 0, 0, 0, 2, 0, 0, 0), (2, 0, 0, 0)),
    ]
    assert boards.recommend_equipment(assessment, catalog) == 'First'
    assert boards.recommend_equipment(assessment, list(reversed(catalog))) == 'Second'


def test_load_catalog(tmp_path):
    path = tmp_path / 'boards.json'
    path.write_text(json.dumps([
        {'name': 'Soft top', 'size_ratings': [1, 5], 'character_ratings': [5]},
        {'name': 'Bare'},
    ]), encoding='utf-8')

    catalog = boards.load_catalog(str(path))

    assert [p.name for p in catalog] == ['Soft top', 'Bare']
    assert catalog[0].size_ratings == (1.0, 5.0)
    assert catalog[1].character_ratings == ()


def test_load_catalog_missing_file_is_empty(tmp_path):
    assert boards.load_catalog(str(tmp_path / 'nope.json')) == []


def test_load_catalog_rejects_non_list(tmp_path):
    path = tmp_path / 'boards.json'
    path.write_text('{"name": "x"}', encoding='utf-8')
    with pytest.raises(ValueError):
        boards.load_catalog(str(path))


def test_load_catalog_rejects_entry_without_name(tmp_path):
    path = tmp_path / 'boards.json'
    path.write_text('[{"size_ratings": [1]}]', encoding='utf-8')
    with pytest.raises(ValueError):
        boards.load_catalog(str(path))


def test_shipped_catalog_loads():
    from config import production
    catalog = boards.load_catalog(production.EQUIPMENT_CATALOG_PATH)
    assert len(catalog) == 4
    assert all(len(p.size_ratings) == len(quality.SIZE_LEVELS) for p in catalog)
    assert all(len(p.character_ratings) == len(quality.WAVE_CHARACTERS) for p in catalog)
