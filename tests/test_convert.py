"""Tests for conversions between build variants.

All data is synthetic; the catalogs are the only fixed tables involved.
"""

import pytest

from sky_planner.codec.convert import (
    calculate_compression_ratio,
    compact_to_legacy,
    convert,
    legacy_to_compact,
    legacy_to_v2,
    to_compact,
    to_legacy,
    to_v2,
    v2_to_compact,
    v2_to_legacy,
)
from sky_planner.codec.schema import UnknownBuildFormatError, to_payload
from sky_planner.models.build import (
    SCHEMA_VERSION,
    AttributeAssignments,
    BuildVariant,
    CompactBuild,
    LegacyBuild,
    PerkSelection,
    Skills,
    TraitLimits,
    Traits,
    UserProgress,
    V2Build,
)


def _legacy() -> LegacyBuild:
    return LegacyBuild(
        name="Battlemage",
        notes="Heavy armor and fire.",
        race="NordRace",
        stone="REQ_StandingStone_Warrior",
        religion="Talos",
        favorite_blessing="Akatosh",
        traits=Traits(regular=["Trait_Strong"], bonus=["Trait_Nimble"]),
        skills=Skills(
            major=["AVSmithing", "AVDestruction"],
            minor=["AVEnchanting", "AVRestoration"],
        ),
        skill_levels={"AVSmithing": 40, "AVDestruction": 35},
        equipment=["Iron Sword"],
        destiny_path=["Destiny_Root", "Destiny_Mage"],
        attribute_assignments=AttributeAssignments(
            health=10, magicka=20, level=4, assignments={2: "health", 3: "magicka", 4: "magicka"},
        ),
        perks=PerkSelection(
            selected={
                "AVSmithing": ["REQ_Smithing_Craftsmanship", "REQ_Smithing_DwarvenSmithing"],
                "AVDestruction": ["REQ_Destruction_Mastery_000_NoviceDestruction"],
            },
            ranks={
                "REQ_Smithing_Craftsmanship": 1,
                "REQ_Smithing_DwarvenSmithing": 1,
                "REQ_Destruction_Mastery_000_NoviceDestruction": 1,
            },
        ),
        user_progress=UserProgress(unlocks=["unlock_a"]),
    )


def _without_unlocks(build: LegacyBuild) -> dict:
    payload = to_payload(build)
    payload["userProgress"] = {"unlocks": []}
    return payload


# ---------------------------------------------------------------------------
# Pairwise converters
# ---------------------------------------------------------------------------

def test_legacy_to_v2_maps_skills_to_indexes():
    v2 = legacy_to_v2(_legacy())
    assert v2.skills.major == [0, 1]
    assert v2.skills.minor == [2, 3]
    assert v2.skill_levels == {0: 40, 1: 35}
    assert v2.perks == {0: [0, 3], 1: [0]}

    payload = to_payload(v2)
    assert payload["k"] == {"ma": [0, 1], "mi": [2, 3]}


def test_legacy_to_compact_encodes_perks():
    compact = legacy_to_compact(_legacy())
    assert compact.perks == {"SMG": [0, 3], "DST": [0]}
    assert compact.skills.major == ["AVSmithing", "AVDestruction"]


def test_conversions_never_carry_unlocks():
    legacy = _legacy()
    assert legacy_to_compact(legacy).user_progress.unlocks == []
    assert compact_to_legacy(legacy_to_compact(legacy)).user_progress.unlocks == []
    assert v2_to_legacy(legacy_to_v2(legacy)).user_progress.unlocks == []
    assert v2_to_compact(legacy_to_v2(legacy)).user_progress.unlocks == []


def test_converted_builds_use_current_schema_version():
    legacy = _legacy()
    legacy.v = 1
    assert legacy_to_v2(legacy).v == SCHEMA_VERSION
    assert legacy_to_compact(legacy).v == SCHEMA_VERSION


def test_converters_do_not_share_lists_with_their_input():
    legacy = _legacy()
    compact = legacy_to_compact(legacy)
    compact.traits.regular.append("Trait_Extra")
    compact.equipment.append("Steel Shield")
    assert legacy.traits.regular == ["Trait_Strong"]
    assert legacy.equipment == ["Iron Sword"]


# ---------------------------------------------------------------------------
# Round trips
# ---------------------------------------------------------------------------

def test_legacy_compact_round_trip_preserves_everything_but_unlocks():
    legacy = _legacy()
    assert to_payload(to_legacy(to_compact(legacy))) == _without_unlocks(legacy)


def test_legacy_v2_round_trip_preserves_perk_identity():
    legacy = _legacy()
    assert to_payload(to_legacy(to_v2(legacy))) == _without_unlocks(legacy)


def test_round_trip_resets_ranks():
    legacy = _legacy()
    legacy.perks.ranks["REQ_Smithing_Craftsmanship"] = 3
    restored = to_legacy(to_v2(legacy))
    assert restored.perks.ranks["REQ_Smithing_Craftsmanship"] == 1


def test_trait_limits_survive_every_variant():
    legacy = _legacy()
    legacy.trait_limits = TraitLimits(regular=3, bonus=2)
    v2 = to_v2(legacy)
    assert to_payload(v2)["l"] == [3, 2]
    assert to_legacy(to_payload(v2)).trait_limits == TraitLimits(regular=3, bonus=2)


def test_missing_trait_limits_read_as_default():
    payload = to_payload(to_v2(_legacy()))
    assert "l" not in payload
    assert to_legacy(payload).trait_limits == TraitLimits()


# ---------------------------------------------------------------------------
# Universal entry points
# ---------------------------------------------------------------------------

def test_converting_to_own_variant_returns_same_object():
    legacy = _legacy()
    compact = to_compact(legacy)
    v2 = to_v2(legacy)
    assert to_legacy(legacy) is legacy
    assert to_compact(compact) is compact
    assert to_v2(v2) is v2
    assert convert(v2, BuildVariant.V2) is v2


def test_entry_points_accept_raw_payloads_of_every_variant():
    legacy = _legacy()
    for wire in (to_payload(legacy), to_payload(to_compact(legacy)), to_payload(to_v2(legacy))):
        assert isinstance(to_legacy(wire), LegacyBuild)
        assert isinstance(to_compact(wire), CompactBuild)
        assert isinstance(to_v2(wire), V2Build)
        assert to_legacy(wire).perks.selected == legacy.perks.selected


def test_unrecognised_payload_raises():
    with pytest.raises(UnknownBuildFormatError):
        to_v2({"v": 2, "foo": 1})
    with pytest.raises(UnknownBuildFormatError):
        to_legacy("not a build")


def test_compression_ratio_reports_v2_savings():
    stats = calculate_compression_ratio(_legacy())
    assert stats.compressed_size < stats.original_size
    assert stats.savings == stats.original_size - stats.compressed_size
    assert stats.ratio == pytest.approx(stats.compressed_size / stats.original_size)
    assert 0 < stats.savings_percentage < 100


def test_v2_to_compact_sorts_perk_indexes():
    compact = to_compact({"v": 2, "t": {}, "k": {}, "a": {}, "p": {"0": [3, 0, 3]}})
    assert compact.perks == {"SMG": [0, 3]}
