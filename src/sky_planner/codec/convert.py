"""Conversions between the Legacy, Compact and V2 build variants.

Pairwise converters take and return typed builds. The universal entry
points (``to_legacy``, ``to_compact``, ``to_v2``) also accept a raw decoded
payload, which is detected and sanitized first.

Two things never cross a variant boundary: ``user_progress.unlocks``
(always empty after a conversion) and perk ranks (reset to 1 whenever
perks pass through catalog indexes).
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from sky_planner.codec.perk_codec import (
    compact_perks_from_indexes,
    compact_perks_to_indexes,
    decode_perks,
    encode_perks,
)
from sky_planner.codec.schema import UnknownBuildFormatError, detect_variant, to_payload
from sky_planner.codec.skill_index import (
    skill_levels_from_indexes,
    skill_levels_to_indexes,
    skills_from_indexes,
    skills_to_indexes,
)
from sky_planner.codec.token import to_json
from sky_planner.codec.validate import sanitize_as
from sky_planner.models.build import (
    SCHEMA_VERSION,
    AnyBuild,
    AttributeAssignments,
    BuildBase,
    BuildVariant,
    CompactBuild,
    IndexedSkills,
    LegacyBuild,
    Skills,
    Traits,
    V2Build,
)


def _common_fields(build: BuildBase) -> dict[str, Any]:
    attributes = build.attribute_assignments
    return {
        "v": SCHEMA_VERSION,
        "name": build.name,
        "notes": build.notes,
        "race": build.race,
        "stone": build.stone,
        "religion": build.religion,
        "favorite_blessing": build.favorite_blessing,
        "traits": Traits(regular=list(build.traits.regular), bonus=list(build.traits.bonus)),
        "trait_limits": build.trait_limits,
        "equipment": list(build.equipment),
        "destiny_path": list(build.destiny_path),
        "attribute_assignments": AttributeAssignments(
            health=attributes.health,
            stamina=attributes.stamina,
            magicka=attributes.magicka,
            level=attributes.level,
            assignments=dict(attributes.assignments),
        ),
    }


def _copy_skills(skills: Skills) -> Skills:
    return Skills(major=list(skills.major), minor=list(skills.minor))


def legacy_to_compact(legacy: LegacyBuild) -> CompactBuild:
    return CompactBuild(
        **_common_fields(legacy),
        skills=_copy_skills(legacy.skills),
        skill_levels=dict(legacy.skill_levels),
        perks=encode_perks(legacy.perks),
    )


def legacy_to_v2(legacy: LegacyBuild) -> V2Build:
    major, minor = skills_to_indexes(legacy.skills.major, legacy.skills.minor)
    return V2Build(
        **_common_fields(legacy),
        skills=IndexedSkills(major=major, minor=minor),
        skill_levels=skill_levels_to_indexes(legacy.skill_levels),
        perks=compact_perks_to_indexes(encode_perks(legacy.perks)),
    )


def compact_to_legacy(compact: CompactBuild) -> LegacyBuild:
    return LegacyBuild(
        **_common_fields(compact),
        skills=_copy_skills(compact.skills),
        skill_levels=dict(compact.skill_levels),
        perks=decode_perks(compact.perks),
    )


def compact_to_v2(compact: CompactBuild) -> V2Build:
    major, minor = skills_to_indexes(compact.skills.major, compact.skills.minor)
    return V2Build(
        **_common_fields(compact),
        skills=IndexedSkills(major=major, minor=minor),
        skill_levels=skill_levels_to_indexes(compact.skill_levels),
        perks=compact_perks_to_indexes(compact.perks),
    )


def v2_to_legacy(v2: V2Build) -> LegacyBuild:
    major, minor = skills_from_indexes(v2.skills.major, v2.skills.minor)
    return LegacyBuild(
        **_common_fields(v2),
        skills=Skills(major=major, minor=minor),
        skill_levels=skill_levels_from_indexes(v2.skill_levels),
        perks=decode_perks(compact_perks_from_indexes(v2.perks)),
    )


def v2_to_compact(v2: V2Build) -> CompactBuild:
    major, minor = skills_from_indexes(v2.skills.major, v2.skills.minor)
    return CompactBuild(
        **_common_fields(v2),
        skills=Skills(major=major, minor=minor),
        skill_levels=skill_levels_from_indexes(v2.skill_levels),
        perks=compact_perks_from_indexes(v2.perks),
    )


_CONVERTERS: dict[tuple[BuildVariant, BuildVariant], Callable[[Any], AnyBuild]] = {
    (BuildVariant.LEGACY, BuildVariant.COMPACT): legacy_to_compact,
    (BuildVariant.LEGACY, BuildVariant.V2): legacy_to_v2,
    (BuildVariant.COMPACT, BuildVariant.LEGACY): compact_to_legacy,
    (BuildVariant.COMPACT, BuildVariant.V2): compact_to_v2,
    (BuildVariant.V2, BuildVariant.LEGACY): v2_to_legacy,
    (BuildVariant.V2, BuildVariant.COMPACT): v2_to_compact,
}


def _as_build(build: AnyBuild | Mapping[str, Any]) -> AnyBuild:
    if isinstance(build, (LegacyBuild, CompactBuild, V2Build)):
        return build
    if isinstance(build, Mapping):
        return sanitize_as(build, detect_variant(build))
    raise UnknownBuildFormatError(f"Cannot convert {type(build).__name__} to a build")


def convert(build: AnyBuild | Mapping[str, Any], target: BuildVariant) -> AnyBuild:
    """Convert any build or raw payload to ``target``.

    A typed build already in ``target`` form is returned as-is. Raw payloads
    that match no variant raise UnknownBuildFormatError.
    """
    source = _as_build(build)
    if source.variant is target:
        return source
    return _CONVERTERS[(source.variant, target)](source)


def to_legacy(build: AnyBuild | Mapping[str, Any]) -> LegacyBuild:
    return convert(build, BuildVariant.LEGACY)


def to_compact(build: AnyBuild | Mapping[str, Any]) -> CompactBuild:
    return convert(build, BuildVariant.COMPACT)


def to_v2(build: AnyBuild | Mapping[str, Any]) -> V2Build:
    return convert(build, BuildVariant.V2)


@dataclass(frozen=True, slots=True)
class CompressionStats:
    original_size: int
    compressed_size: int
    ratio: float
    savings: int
    savings_percentage: float


def calculate_compression_ratio(build: AnyBuild | Mapping[str, Any]) -> CompressionStats:
    """Compare the JSON size of ``build`` as given with its V2 form."""
    source = _as_build(build)
    original_size = len(to_json(to_payload(source)))
    compressed_size = len(to_json(to_payload(to_v2(source))))
    savings = original_size - compressed_size
    return CompressionStats(
        original_size=original_size,
        compressed_size=compressed_size,
        ratio=compressed_size / original_size,
        savings=savings,
        savings_percentage=(savings / original_size) * 100,
    )
