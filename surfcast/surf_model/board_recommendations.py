"""
Board recommendation system based on a computed surf assessment.

Boards come from an externally owned catalog. Each board rates itself
per size category and per wave character:

    score = size_ratings[size_index] + character_ratings[character_index]

Missing ratings count as 0. The highest score wins; equal scores keep
catalog order, so the earlier board is recommended.
"""

import json
import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

NO_RECOMMENDATION = 'none'


@dataclass(frozen=True)
class EquipmentProfile:
    name: str
    size_ratings: tuple = field(default_factory=tuple)
    character_ratings: tuple = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data):
        return cls(
            name=str(data['name']),
            size_ratings=tuple(float(r) for r in data.get('size_ratings', [])),
            character_ratings=tuple(float(r) for r in data.get('character_ratings', [])),
        )


def _rating(ratings, idx):
    return ratings[idx] if 0 <= idx < len(ratings) else 0


def score_equipment(profile, assessment):
    """
    Score one board against an assessment.

    Parameters:
    -----------
    profile : EquipmentProfile
    assessment : SurfAssessment

    Returns:
    --------
    score : float
    """
    return (
        _rating(profile.size_ratings, assessment.size_index)
        + _rating(profile.character_ratings, assessment.character_index)
    )


def recommend_equipment(assessment, catalog):
    """
    Pick the best-scoring board for the conditions.

    Parameters:
    -----------
    assessment : SurfAssessment
    catalog : sequence of EquipmentProfile

    Returns:
    --------
    name : str
        Name of the best board, NO_RECOMMENDATION for an empty catalog
    """
    best_profile = None
    best_score = None

    for profile in catalog:
        score = score_equipment(profile, assessment)
        # Strictly greater: ties go to the earlier catalog entry
        if best_score is None or score > best_score:
            best_score = score
            best_profile = profile

    if best_profile is None:
        return NO_RECOMMENDATION
    return best_profile.name


def load_catalog(path):
    """
    Load an equipment catalog from a JSON list of board records.

    A missing file is an empty catalog; a malformed one raises ValueError.

    Parameters:
    -----------
    path : str
        Path to the catalog JSON file

    Returns:
    --------
    list of EquipmentProfile
    """
    if not os.path.exists(path):
        logger.info(f"No equipment catalog at {path}; recommendations disabled")
        return []

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"Equipment catalog {path} must be a JSON list")

    try:
        catalog = [EquipmentProfile.from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed equipment catalog {path}: {e}") from e

    logger.info(f"Loaded {len(catalog)} boards from {path}")
    return catalog
