"""Rebuild a well-typed build from untrusted decoded data.

Share links can be hand-edited, truncated, or produced by older versions
of the planner, so everything read from a token goes through here first.
``validate_build`` never raises: each field is checked on its own and
falls back to its default when it is missing or malformed, and maps are
checked entry by entry so one bad entry does not cost its siblings.
"""

import logging
import math
from typing import Any, Mapping

from sky_planner.codec.perk_codec import is_compact_format
from sky_planner.codec.schema import (
    VERBOSE_GROUPS,
    UnknownBuildFormatError,
    detect_variant,
    is_supported_version,
)
from sky_planner.models.build import (
    DEFAULT_BONUS_TRAITS,
    DEFAULT_REGULAR_TRAITS,
    SCHEMA_VERSION,
    AnyBuild,
    AttributeAssignments,
    BuildVariant,
    CompactBuild,
    IndexedSkills,
    LegacyBuild,
    PerkSelection,
    Skills,
    TraitLimits,
    Traits,
    UserProgress,
    V2Build,
    default_build,
)
from sky_planner.models.constants import ATTRIBUTE_NAMES


logger = logging.getLogger(__name__)

# Keys that only ever appear in V2 payloads ("p" is shared with Compact).
V2_ONLY_KEYS = frozenset({"n", "o", "r", "s", "g", "f", "t", "l", "k", "sl", "e", "d", "a"})


# -- field sanitizers -------------------------------------------------------

def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _string(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _string_or_none(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and item.strip()]


def _checked_number(value: Any, minimum: int | None = None) -> int | None:
    """Integral, finite, and at least ``minimum``; otherwise None.

    Floats with an integral value (``3.0``) are accepted as ints.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value) or not value.is_integer():
            return None
        value = int(value)
    if not isinstance(value, int):
        return None
    if minimum is not None and value < minimum:
        return None
    return value


def _number(value: Any, fallback: int, minimum: int | None = None) -> int:
    checked = _checked_number(value, minimum)
    return fallback if checked is None else checked


def _int_key(key: Any) -> int | None:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, str):
        try:
            return int(key.strip(), 10)
        except ValueError:
            return None
    return None


def _index_list(value: Any) -> list[int]:
    if not isinstance(value, list):
        return []
    return [
        item for item in value
        if isinstance(item, int) and not isinstance(item, bool) and item >= 0
    ]


def _perk_index_list(value: Any) -> list[int]:
    """Perk indexes sorted ascending without duplicates."""
    return sorted(set(_index_list(value)))


def _string_list_map(value: Any) -> dict[str, list[str]]:
    result: dict[str, list[str]] = {}
    for key, items in _mapping(value).items():
        if isinstance(key, str) and key.strip() and isinstance(items, list):
            result[key] = _string_list(items)
        else:
            logger.debug("Dropping malformed entry %r", key)
    return result


def _number_map(value: Any, minimum: int | None = None) -> dict[str, int]:
    result: dict[str, int] = {}
    for key, number in _mapping(value).items():
        checked = _checked_number(number, minimum)
        if not isinstance(key, str) or not key.strip() or checked is None:
            logger.debug("Dropping malformed entry %r=%r", key, number)
            continue
        result[key] = checked
    return result


def _index_number_map(value: Any) -> dict[int, int]:
    result: dict[int, int] = {}
    for key, number in _mapping(value).items():
        index = _int_key(key)
        checked = _checked_number(number, minimum=0)
        if index is None or index < 0 or checked is None:
            logger.debug("Dropping malformed entry %r=%r", key, number)
            continue
        result[index] = checked
    return result


def _assignments(value: Any) -> dict[int, str]:
    result: dict[int, str] = {}
    for key, attribute in _mapping(value).items():
        level = _int_key(key)
        if level is None or level < 1 or attribute not in ATTRIBUTE_NAMES:
            logger.debug("Dropping malformed level assignment %r=%r", key, attribute)
            continue
        result[level] = attribute
    return result


def _compact_perks(value: Any) -> dict[str, list[int]]:
    result: dict[str, list[int]] = {}
    for code, indexes in _mapping(value).items():
        if not isinstance(code, str):
            continue
        checked = _perk_index_list(indexes)
        if checked:
            result[code] = checked
    return result


def _indexed_perks(value: Any) -> dict[int, list[int]]:
    result: dict[int, list[int]] = {}
    for key, indexes in _mapping(value).items():
        index = _int_key(key)
        checked = _perk_index_list(indexes)
        if index is None or index < 0 or not checked:
            continue
        result[index] = checked
    return result


def _trait_limits(value: Any) -> TraitLimits:
    limits = _mapping(value)
    return TraitLimits(
        regular=_number(limits.get("regular"), DEFAULT_REGULAR_TRAITS, minimum=0),
        bonus=_number(limits.get("bonus"), DEFAULT_BONUS_TRAITS, minimum=0),
    )


def _trait_limit_pair(value: Any) -> TraitLimits:
    if not isinstance(value, list) or len(value) != 2:
        return TraitLimits()
    return TraitLimits(
        regular=_number(value[0], DEFAULT_REGULAR_TRAITS, minimum=0),
        bonus=_number(value[1], DEFAULT_BONUS_TRAITS, minimum=0),
    )


def _version(value: Any) -> int:
    return value if is_supported_version(value) else SCHEMA_VERSION


def _verbose_attributes(value: Any) -> AttributeAssignments:
    attributes = _mapping(value)
    return AttributeAssignments(
        health=_number(attributes.get("health"), 0, minimum=0),
        stamina=_number(attributes.get("stamina"), 0, minimum=0),
        magicka=_number(attributes.get("magicka"), 0, minimum=0),
        level=_number(attributes.get("level"), 1, minimum=1),
        assignments=_assignments(attributes.get("assignments")),
    )


def _verbose_fields(payload: Mapping[str, Any]) -> dict[str, Any]:
    traits = _mapping(payload.get("traits"))
    skills = _mapping(payload.get("skills"))
    return {
        "v": _version(payload.get("v")),
        "name": _string(payload.get("name")),
        "notes": _string(payload.get("notes")),
        "race": _string_or_none(payload.get("race")),
        "stone": _string_or_none(payload.get("stone")),
        "religion": _string_or_none(payload.get("religion")),
        "favorite_blessing": _string_or_none(payload.get("favoriteBlessing")),
        "traits": Traits(
            regular=_string_list(traits.get("regular")),
            bonus=_string_list(traits.get("bonus")),
        ),
        "trait_limits": _trait_limits(payload.get("traitLimits")),
        "skills": Skills(
            major=_string_list(skills.get("major")),
            minor=_string_list(skills.get("minor")),
        ),
        "skill_levels": _number_map(payload.get("skillLevels"), minimum=0),
        "equipment": _string_list(payload.get("equipment")),
        "user_progress": UserProgress(
            unlocks=_string_list(_mapping(payload.get("userProgress")).get("unlocks")),
        ),
        "destiny_path": _string_list(payload.get("destinyPath")),
        "attribute_assignments": _verbose_attributes(payload.get("attributeAssignments")),
    }


# -- per-variant sanitizers -------------------------------------------------

def sanitize_legacy(payload: Mapping[str, Any]) -> LegacyBuild:
    perks = _mapping(payload.get("perks"))
    return LegacyBuild(
        **_verbose_fields(payload),
        perks=PerkSelection(
            selected=_string_list_map(perks.get("selected")),
            ranks=_number_map(perks.get("ranks"), minimum=0),
        ),
    )


def sanitize_compact(payload: Mapping[str, Any]) -> CompactBuild:
    return CompactBuild(**_verbose_fields(payload), perks=_compact_perks(payload.get("p")))


def sanitize_v2(payload: Mapping[str, Any]) -> V2Build:
    traits = _mapping(payload.get("t"))
    skills = _mapping(payload.get("k"))
    attributes = _mapping(payload.get("a"))
    return V2Build(
        v=_version(payload.get("v")),
        name=_string(payload.get("n")),
        notes=_string(payload.get("o")),
        race=_string_or_none(payload.get("r")),
        stone=_string_or_none(payload.get("s")),
        religion=_string_or_none(payload.get("g")),
        favorite_blessing=_string_or_none(payload.get("f")),
        traits=Traits(
            regular=_string_list(traits.get("r")),
            bonus=_string_list(traits.get("b")),
        ),
        trait_limits=_trait_limit_pair(payload.get("l")),
        skills=IndexedSkills(
            major=_index_list(skills.get("ma")),
            minor=_index_list(skills.get("mi")),
        ),
        skill_levels=_index_number_map(payload.get("sl")),
        equipment=_string_list(payload.get("e")),
        destiny_path=_string_list(payload.get("d")),
        attribute_assignments=AttributeAssignments(
            health=_number(attributes.get("h"), 0, minimum=0),
            stamina=_number(attributes.get("st"), 0, minimum=0),
            magicka=_number(attributes.get("m"), 0, minimum=0),
            level=_number(attributes.get("l"), 1, minimum=1),
            assignments=_assignments(attributes.get("as")),
        ),
        perks=_indexed_perks(payload.get("p")),
    )


_SANITIZERS = {
    BuildVariant.LEGACY: sanitize_legacy,
    BuildVariant.COMPACT: sanitize_compact,
    BuildVariant.V2: sanitize_v2,
}


def _guess_variant(payload: Mapping[str, Any]) -> BuildVariant:
    """Detect strictly, then fall back to looser markers for damaged payloads."""
    try:
        return detect_variant(payload)
    except UnknownBuildFormatError as exc:
        logger.debug("Strict detection failed (%s); guessing from keys", exc)

    keys = set(payload.keys())
    if keys & V2_ONLY_KEYS and not keys & VERBOSE_GROUPS:
        return BuildVariant.V2
    if is_compact_format(payload):
        return BuildVariant.COMPACT
    return BuildVariant.LEGACY


def sanitize_as(payload: Any, variant: BuildVariant) -> AnyBuild:
    return _SANITIZERS[variant](_mapping(payload))


def validate_build(candidate: Any) -> AnyBuild:
    """Return a complete, well-typed build for any input.

    The result keeps the variant the payload was written in; anything that
    is not an object at all becomes the default Legacy build.
    """
    if not isinstance(candidate, Mapping):
        if candidate is not None:
            logger.warning("Build payload is a %s, using defaults", type(candidate).__name__)
        return default_build()
    return sanitize_as(candidate, _guess_variant(candidate))


def is_valid_build(candidate: Any) -> bool:
    """True when ``candidate`` is recognisably one of the build variants."""
    try:
        detect_variant(candidate)
    except UnknownBuildFormatError:
        return False
    return True
