"""Skill EDID <-> wire index lookups.

Lookups never raise. Anything that is not a known skill maps to None and
the bulk helpers drop it.
"""

import logging
from typing import Mapping, TypeVar

from sky_planner.models.constants import SKILL_ID_TO_INDEX, SKILL_IDS


logger = logging.getLogger(__name__)

T = TypeVar("T")


def skill_id_to_index(skill_id: str) -> int | None:
    if not isinstance(skill_id, str):
        return None
    return SKILL_ID_TO_INDEX.get(skill_id)


def index_to_skill_id(index: int) -> str | None:
    if isinstance(index, bool) or not isinstance(index, int):
        return None
    if not is_valid_skill_index(index):
        return None
    return SKILL_IDS[index]


def _parse_index_key(key: int | str) -> int | None:
    """JSON object keys arrive as strings; accept "7" as well as 7."""
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, str):
        try:
            return int(key, 10)
        except ValueError:
            return None
    return None


def skill_ids_to_indexes(skill_ids: list[str]) -> list[int]:
    indexes: list[int] = []
    for skill_id in skill_ids:
        index = skill_id_to_index(skill_id)
        if index is None:
            logger.debug("Dropping unknown skill id %r", skill_id)
            continue
        indexes.append(index)
    return indexes


def indexes_to_skill_ids(indexes: list[int]) -> list[str]:
    skill_ids: list[str] = []
    for index in indexes:
        skill_id = index_to_skill_id(index)
        if skill_id is None:
            logger.debug("Dropping unknown skill index %r", index)
            continue
        skill_ids.append(skill_id)
    return skill_ids


def skill_map_to_index_map(values: Mapping[str, T]) -> dict[int, T]:
    result: dict[int, T] = {}
    for skill_id, value in values.items():
        index = skill_id_to_index(skill_id)
        if index is None:
            logger.debug("Dropping unknown skill id %r", skill_id)
            continue
        result[index] = value
    return result


def index_map_to_skill_map(values: Mapping[int | str, T]) -> dict[str, T]:
    result: dict[str, T] = {}
    for key, value in values.items():
        index = _parse_index_key(key)
        skill_id = index_to_skill_id(index) if index is not None else None
        if skill_id is None:
            logger.debug("Dropping unknown skill index %r", key)
            continue
        result[skill_id] = value
    return result


def skills_to_indexes(major: list[str], minor: list[str]) -> tuple[list[int], list[int]]:
    return skill_ids_to_indexes(major), skill_ids_to_indexes(minor)


def skills_from_indexes(major: list[int], minor: list[int]) -> tuple[list[str], list[str]]:
    return indexes_to_skill_ids(major), indexes_to_skill_ids(minor)


def skill_levels_to_indexes(skill_levels: Mapping[str, int]) -> dict[int, int]:
    return skill_map_to_index_map(skill_levels)


def skill_levels_from_indexes(skill_levels: Mapping[int | str, int]) -> dict[str, int]:
    return index_map_to_skill_map(skill_levels)


def is_valid_skill_index(index: int) -> bool:
    return 0 <= index < len(SKILL_IDS)


def get_skill_count() -> int:
    return len(SKILL_IDS)


def get_all_skill_ids() -> list[str]:
    return list(SKILL_IDS)


def get_all_skill_indexes() -> list[int]:
    return list(range(len(SKILL_IDS)))
