"""Wire shapes of a build and variant detection.

All three variants share the ``v`` version field, and Compact and V2 both
use a ``p`` key, so a single key never identifies a variant. Detection
checks a full marker set per variant in a fixed order: V2, Compact,
Legacy.
"""

from typing import Any, Mapping

from sky_planner.models.build import (
    SUPPORTED_SCHEMA_VERSIONS,
    AnyBuild,
    AttributeAssignments,
    BuildVariant,
    CompactBuild,
    LegacyBuild,
    V2Build,
)


# Short-named nested groups that only V2 payloads carry.
V2_MARKERS = frozenset({"t", "k", "a"})
VERBOSE_GROUPS = frozenset({"skills", "traits", "attributeAssignments"})
COMPACT_MARKERS = VERBOSE_GROUPS | {"p"}
LEGACY_MARKERS = VERBOSE_GROUPS | {"perks"}


class UnknownBuildFormatError(ValueError):
    """Payload matches none of the supported build variants."""


def is_supported_version(version: Any) -> bool:
    return (
        isinstance(version, int)
        and not isinstance(version, bool)
        and version in SUPPORTED_SCHEMA_VERSIONS
    )


def detect_variant(payload: Any) -> BuildVariant:
    """Classify a decoded payload, or raise UnknownBuildFormatError."""
    if not isinstance(payload, Mapping):
        raise UnknownBuildFormatError(
            f"Build payload must be an object, got {type(payload).__name__}"
        )
    version = payload.get("v")
    if not is_supported_version(version):
        raise UnknownBuildFormatError(
            f"Unsupported build schema version {version!r} "
            f"(supported: {', '.join(str(v) for v in SUPPORTED_SCHEMA_VERSIONS)})"
        )

    keys = set(payload.keys())
    if V2_MARKERS <= keys and not VERBOSE_GROUPS & keys:
        return BuildVariant.V2
    if COMPACT_MARKERS <= keys:
        return BuildVariant.COMPACT
    if LEGACY_MARKERS <= keys:
        return BuildVariant.LEGACY
    raise UnknownBuildFormatError(
        f"Unknown build format with keys: {', '.join(sorted(str(k) for k in keys))}"
    )


def _assignments_payload(assignments: dict[int, str]) -> dict[str, str]:
    return {str(level): attribute for level, attribute in sorted(assignments.items())}


def _attributes_payload(attributes: AttributeAssignments) -> dict[str, Any]:
    return {
        "health": attributes.health,
        "stamina": attributes.stamina,
        "magicka": attributes.magicka,
        "level": attributes.level,
        "assignments": _assignments_payload(attributes.assignments),
    }


def _verbose_payload(build: LegacyBuild | CompactBuild) -> dict[str, Any]:
    return {
        "v": build.v,
        "name": build.name,
        "notes": build.notes,
        "race": build.race,
        "stone": build.stone,
        "religion": build.religion,
        "favoriteBlessing": build.favorite_blessing,
        "traits": {
            "regular": list(build.traits.regular),
            "bonus": list(build.traits.bonus),
        },
        "traitLimits": {
            "regular": build.trait_limits.regular,
            "bonus": build.trait_limits.bonus,
        },
        "skills": {
            "major": list(build.skills.major),
            "minor": list(build.skills.minor),
        },
        "skillLevels": dict(build.skill_levels),
        "equipment": list(build.equipment),
        "userProgress": {"unlocks": list(build.user_progress.unlocks)},
        "destinyPath": list(build.destiny_path),
        "attributeAssignments": _attributes_payload(build.attribute_assignments),
    }


def legacy_payload(build: LegacyBuild) -> dict[str, Any]:
    payload = _verbose_payload(build)
    payload["perks"] = {
        "selected": {skill: list(perks) for skill, perks in build.perks.selected.items()},
        "ranks": dict(build.perks.ranks),
    }
    return payload


def compact_payload(build: CompactBuild) -> dict[str, Any]:
    payload = _verbose_payload(build)
    payload["p"] = {code: list(indexes) for code, indexes in build.perks.items()}
    return payload


def v2_payload(build: V2Build) -> dict[str, Any]:
    """Short-key payload; ``l`` only appears for non-default trait limits."""
    attributes = build.attribute_assignments
    payload: dict[str, Any] = {
        "v": build.v,
        "n": build.name,
        "o": build.notes,
        "r": build.race,
        "s": build.stone,
        "g": build.religion,
        "f": build.favorite_blessing,
        "t": {"r": list(build.traits.regular), "b": list(build.traits.bonus)},
    }
    if not build.trait_limits.is_default():
        payload["l"] = build.trait_limits.as_pair()
    payload.update({
        "k": {"ma": list(build.skills.major), "mi": list(build.skills.minor)},
        "sl": {str(index): level for index, level in sorted(build.skill_levels.items())},
        "e": list(build.equipment),
        "d": list(build.destiny_path),
        "a": {
            "h": attributes.health,
            "st": attributes.stamina,
            "m": attributes.magicka,
            "l": attributes.level,
            "as": _assignments_payload(attributes.assignments),
        },
        "p": {str(index): list(perks) for index, perks in sorted(build.perks.items())},
    })
    return payload


def to_payload(build: AnyBuild) -> dict[str, Any]:
    """JSON-ready dict in the build's own wire shape."""
    if isinstance(build, LegacyBuild):
        return legacy_payload(build)
    if isinstance(build, CompactBuild):
        return compact_payload(build)
    if isinstance(build, V2Build):
        return v2_payload(build)
    raise TypeError(f"Not a build: {type(build).__name__}")
