import pytest

from sky_planner.codec.schema import (
    UnknownBuildFormatError,
    detect_variant,
    is_supported_version,
    to_payload,
)
from sky_planner.models.build import (
    AttributeAssignments,
    BuildVariant,
    CompactBuild,
    IndexedSkills,
    LegacyBuild,
    TraitLimits,
    V2Build,
)


def _verbose(**extra):
    payload = {
        "v": 2,
        "skills": {"major": [], "minor": []},
        "traits": {"regular": [], "bonus": []},
        "attributeAssignments": {},
    }
    payload.update(extra)
    return payload


def test_detects_each_variant_from_its_marker_set():
    assert detect_variant({"v": 2, "t": {}, "k": {}, "a": {}, "p": {}}) is BuildVariant.V2
    assert detect_variant(_verbose(p={})) is BuildVariant.COMPACT
    assert detect_variant(_verbose(perks={})) is BuildVariant.LEGACY


def test_verbose_groups_rule_out_v2_even_with_short_keys():
    payload = _verbose(p={}, t={}, k={}, a={})
    assert detect_variant(payload) is BuildVariant.COMPACT


def test_compact_wins_over_legacy_when_both_perk_keys_present():
    assert detect_variant(_verbose(p={}, perks={})) is BuildVariant.COMPACT


def test_detects_payloads_written_by_every_variant():
    for build in (LegacyBuild(), CompactBuild(), V2Build()):
        assert detect_variant(to_payload(build)) is build.variant


@pytest.mark.parametrize(
    "payload",
    [
        {"v": 2},
        {"v": 2, "p": {}},
        {"v": 2, "t": {}, "k": {}},
        {"v": 2, "skills": {}, "traits": {}, "perks": {}},
    ],
)
def test_unknown_shapes_raise(payload):
    with pytest.raises(UnknownBuildFormatError, match="Unknown build format"):
        detect_variant(payload)


@pytest.mark.parametrize("version", [None, 0, 3, "2", True, 2.0])
def test_unsupported_versions_raise(version):
    payload = _verbose(perks={})
    payload["v"] = version
    with pytest.raises(UnknownBuildFormatError, match="schema version"):
        detect_variant(payload)


def test_non_objects_raise():
    with pytest.raises(UnknownBuildFormatError, match="must be an object"):
        detect_variant(["v", 2])


def test_is_supported_version():
    assert is_supported_version(1)
    assert is_supported_version(2)
    assert not is_supported_version(True)
    assert not is_supported_version(3)


def test_v2_payload_uses_short_keys_and_string_map_keys():
    build = V2Build(
        name="Spellsword",
        skills=IndexedSkills(major=[0, 1], minor=[2]),
        skill_levels={4: 30, 1: 25},
        perks={0: [0, 3]},
        attribute_assignments=AttributeAssignments(health=10, level=3, assignments={2: "health"}),
    )
    payload = to_payload(build)
    assert payload["n"] == "Spellsword"
    assert payload["k"] == {"ma": [0, 1], "mi": [2]}
    assert payload["sl"] == {"1": 25, "4": 30}
    assert payload["p"] == {"0": [0, 3]}
    assert payload["a"] == {"h": 10, "st": 0, "m": 0, "l": 3, "as": {"2": "health"}}
    assert "l" not in payload


def test_v2_payload_writes_trait_limits_only_when_changed():
    payload = to_payload(V2Build(trait_limits=TraitLimits(regular=3, bonus=1)))
    assert payload["l"] == [3, 1]


def test_legacy_payload_uses_verbose_keys():
    payload = to_payload(LegacyBuild(favorite_blessing="BlessingOfAkatosh"))
    assert payload["favoriteBlessing"] == "BlessingOfAkatosh"
    assert payload["perks"] == {"selected": {}, "ranks": {}}
    assert payload["traitLimits"] == {"regular": 2, "bonus": 1}
    assert payload["userProgress"] == {"unlocks": []}
    assert "p" not in payload


def test_to_payload_rejects_non_builds():
    with pytest.raises(TypeError, match="Not a build"):
        to_payload({"v": 2})
