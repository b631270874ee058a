"""Compact perk encoding.

Turns ``{"AVSmithing": ["REQ_Smithing_Craftsmanship", ...]}`` into
``{"SMG": [0, ...]}`` using each tree's fixed catalog, and back. Entries
that are not in the catalogs are dropped with a warning; nothing here
raises on bad data.

Ranks do not survive the trip: every decoded perk comes back at rank 1.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from sky_planner.codec.skill_index import index_map_to_skill_map, skill_id_to_index
from sky_planner.codec.token import to_json
from sky_planner.models.build import AnyBuild, CompactBuild, LegacyBuild, PerkSelection, V2Build
from sky_planner.models.constants import SKILL_TREE_CODES, SKILL_TREE_CODES_REVERSE
from sky_planner.models.perk_catalogs import PERK_CATALOG_INDEX, PERK_CATALOGS


logger = logging.getLogger(__name__)

DEFAULT_DECODED_RANK = 1


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def encode_perks(perks: PerkSelection | None) -> dict[str, list[int]]:
    """Encode selected perks as sorted catalog indexes keyed by tree code.

    Trees that end up with no known perks are left out.
    """
    if perks is None or not perks.selected:
        return {}

    compact: dict[str, list[int]] = {}
    for skill_id, perk_ids in perks.selected.items():
        code = SKILL_TREE_CODES.get(skill_id)
        if code is None:
            logger.warning("Unknown skill tree id: %s", skill_id)
            continue
        catalog_index = PERK_CATALOG_INDEX[code]

        indexes: set[int] = set()
        for perk_id in perk_ids:
            index = catalog_index.get(perk_id) if isinstance(perk_id, str) else None
            if index is None:
                logger.warning("Perk %s not found in catalog for %s", perk_id, code)
                continue
            indexes.add(index)

        if indexes:
            compact[code] = sorted(indexes)
    return compact


def decode_perks(compact: Mapping[str, list[int]] | None) -> PerkSelection:
    """Decode a tree-code keyed index map back to perk EDIDs.

    Perks come back in catalog order, each at rank 1.
    """
    selection = PerkSelection()
    if not compact:
        return selection

    for code, indexes in compact.items():
        skill_id = SKILL_TREE_CODES_REVERSE.get(code)
        if skill_id is None:
            logger.warning("Unknown skill tree code: %s", code)
            continue
        catalog = PERK_CATALOGS[code]

        valid: set[int] = set()
        for index in indexes:
            if _is_index(index) and 0 <= index < len(catalog):
                valid.add(index)
            else:
                logger.warning("Invalid perk index %r for %s", index, code)

        if not valid:
            continue
        perk_ids = [catalog[i] for i in sorted(valid)]
        selection.selected[skill_id] = perk_ids
        for perk_id in perk_ids:
            selection.ranks[perk_id] = DEFAULT_DECODED_RANK
    return selection


def compact_perks_to_indexes(compact: Mapping[str, list[int]]) -> dict[int, list[int]]:
    """Re-key a compact perk map from tree code to skill index."""
    indexed: dict[int, list[int]] = {}
    for code, indexes in compact.items():
        skill_id = SKILL_TREE_CODES_REVERSE.get(code)
        skill_index = skill_id_to_index(skill_id) if skill_id is not None else None
        if skill_index is None:
            logger.warning("Unknown skill tree code: %s", code)
            continue
        indexed[skill_index] = sorted(set(indexes))
    return indexed


def compact_perks_from_indexes(indexed: Mapping[int | str, list[int]]) -> dict[str, list[int]]:
    """Re-key a skill-index perk map to tree codes."""
    compact: dict[str, list[int]] = {}
    for skill_id, indexes in index_map_to_skill_map(indexed).items():
        compact[SKILL_TREE_CODES[skill_id]] = sorted(set(indexes))
    if len(compact) < len(indexed):
        logger.warning(
            "Dropped %d perk tree(s) with unknown skill index",
            len(indexed) - len(compact),
        )
    return compact


def is_compact_format(payload: Mapping[str, Any]) -> bool:
    """True when a raw payload stores perks under ``p`` rather than ``perks``."""
    return "p" in payload and "perks" not in payload


def get_perk_data(build: AnyBuild) -> PerkSelection:
    """Selected perks of any variant, as perk EDIDs."""
    if isinstance(build, LegacyBuild):
        return build.perks
    if isinstance(build, CompactBuild):
        return decode_perks(build.perks)
    return decode_perks(compact_perks_from_indexes(build.perks))


def update_perk_data(build: AnyBuild, perks: PerkSelection) -> AnyBuild:
    """Return a copy of ``build`` carrying ``perks`` in the build's own format."""
    if isinstance(build, LegacyBuild):
        encoded = perks
    elif isinstance(build, CompactBuild):
        encoded = encode_perks(perks)
    elif isinstance(build, V2Build):
        encoded = compact_perks_to_indexes(encode_perks(perks))
    else:
        raise TypeError(f"Not a build: {type(build).__name__}")
    clone = copy.deepcopy(build)
    clone.perks = encoded
    return clone


@dataclass(frozen=True, slots=True)
class SizeReduction:
    legacy_size: int
    compact_size: int
    reduction: int
    reduction_percentage: float


def calculate_size_reduction(perks: PerkSelection, compact: Mapping[str, list[int]]) -> SizeReduction:
    legacy_size = len(to_json({"selected": perks.selected, "ranks": perks.ranks}))
    compact_size = len(to_json(dict(compact)))
    reduction = legacy_size - compact_size
    percentage = (reduction / legacy_size) * 100 if legacy_size else 0.0
    return SizeReduction(
        legacy_size=legacy_size,
        compact_size=compact_size,
        reduction=reduction,
        reduction_percentage=percentage,
    )
