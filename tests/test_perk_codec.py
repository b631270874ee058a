"""Tests for compact perk encoding."""

import logging

from sky_planner.codec.perk_codec import (
    DEFAULT_DECODED_RANK,
    calculate_size_reduction,
    compact_perks_from_indexes,
    compact_perks_to_indexes,
    decode_perks,
    encode_perks,
    get_perk_data,
    is_compact_format,
    update_perk_data,
)
from sky_planner.codec.convert import to_compact, to_v2
from sky_planner.models.build import CompactBuild, LegacyBuild, PerkSelection, V2Build
from sky_planner.models.perk_catalogs import PERK_CATALOG_INDEX, PERK_CATALOGS


def _smithing_selection() -> PerkSelection:
    return PerkSelection(
        selected={
            "AVSmithing": ["REQ_Smithing_DwarvenSmithing", "REQ_Smithing_Craftsmanship"],
        },
        ranks={"REQ_Smithing_Craftsmanship": 1, "REQ_Smithing_DwarvenSmithing": 1},
    )


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------

def test_catalogs_have_unique_perks_per_tree():
    for code, catalog in PERK_CATALOGS.items():
        assert len(set(catalog)) == len(catalog), code
        assert len(PERK_CATALOG_INDEX[code]) == len(catalog)


def test_catalog_positions_are_stable():
    assert PERK_CATALOG_INDEX["SMG"]["REQ_Smithing_Craftsmanship"] == 0
    assert PERK_CATALOG_INDEX["SMG"]["REQ_Smithing_DwarvenSmithing"] == 3
    assert PERK_CATALOG_INDEX["SPC"]["Feat_Perk_Skill_Speechcraft_Commander1"] == 3
    assert PERK_CATALOG_INDEX["OHD"]["REQ_OneHanded_PenetratingStrikes"] == 2


# ---------------------------------------------------------------------------
# encode / decode
# ---------------------------------------------------------------------------

def test_encode_sorts_indexes_by_catalog_position():
    assert encode_perks(_smithing_selection()) == {"SMG": [0, 3]}


def test_decode_restores_catalog_order_at_rank_one():
    decoded = decode_perks({"SMG": [3, 0]})
    assert decoded.selected == {
        "AVSmithing": ["REQ_Smithing_Craftsmanship", "REQ_Smithing_DwarvenSmithing"],
    }
    assert decoded.ranks == {
        "REQ_Smithing_Craftsmanship": DEFAULT_DECODED_RANK,
        "REQ_Smithing_DwarvenSmithing": DEFAULT_DECODED_RANK,
    }


def test_encode_is_deterministic_and_deduplicates():
    selection = PerkSelection(
        selected={"AVSmithing": [
            "REQ_Smithing_OrcishSmithing",
            "REQ_Smithing_Craftsmanship",
            "REQ_Smithing_OrcishSmithing",
        ]},
    )
    assert encode_perks(selection) == {"SMG": [0, 4]}
    assert encode_perks(selection) == encode_perks(selection)


def test_encode_drops_unknown_entries_with_warning(caplog):
    selection = PerkSelection(
        selected={
            "AVSmithing": ["REQ_Smithing_Craftsmanship", "REQ_Smithing_Nonexistent"],
            "AVUnderwaterBasketWeaving": ["REQ_Basket_Weave"],
        },
    )
    with caplog.at_level(logging.WARNING, logger="sky_planner.codec.perk_codec"):
        encoded = encode_perks(selection)
    assert encoded == {"SMG": [0]}
    assert "REQ_Smithing_Nonexistent" in caplog.text
    assert "AVUnderwaterBasketWeaving" in caplog.text


def test_encode_omits_trees_without_known_perks():
    selection = PerkSelection(selected={"AVSmithing": [], "AVAlchemy": ["nope"]})
    assert encode_perks(selection) == {}
    assert encode_perks(None) == {}
    assert encode_perks(PerkSelection()) == {}


def test_decode_drops_bad_codes_and_indexes(caplog):
    with caplog.at_level(logging.WARNING, logger="sky_planner.codec.perk_codec"):
        decoded = decode_perks({"SMG": [0, 99, -1, True], "XXX": [0], "ALC": [500]})
    assert decoded.selected == {"AVSmithing": ["REQ_Smithing_Craftsmanship"]}
    assert "XXX" in caplog.text
    assert decode_perks(None).is_empty()


def test_ranks_reset_on_round_trip():
    selection = PerkSelection(
        selected={"AVOneHanded": ["REQ_OneHanded_WeaponMastery1"]},
        ranks={"REQ_OneHanded_WeaponMastery1": 3},
    )
    decoded = decode_perks(encode_perks(selection))
    assert decoded.selected == selection.selected
    assert decoded.ranks == {"REQ_OneHanded_WeaponMastery1": 1}


# ---------------------------------------------------------------------------
# Re-keying and helpers
# ---------------------------------------------------------------------------

def test_compact_perks_rekey_between_tree_codes_and_skill_indexes():
    indexed = compact_perks_to_indexes({"SMG": [0, 3], "OHD": [2]})
    assert indexed == {0: [0, 3], 17: [2]}
    assert compact_perks_from_indexes(indexed) == {"SMG": [0, 3], "OHD": [2]}
    assert compact_perks_from_indexes({"0": [1], "77": [0]}) == {"SMG": [1]}
    assert compact_perks_to_indexes({"ZZZ": [1]}) == {}


def test_is_compact_format():
    assert is_compact_format({"v": 2, "p": {}})
    assert not is_compact_format({"v": 2, "perks": {}})
    assert not is_compact_format({"v": 2, "p": {}, "perks": {}})


def test_get_and_update_perk_data_for_every_variant():
    legacy = LegacyBuild(perks=_smithing_selection())
    compact = to_compact(legacy)
    v2 = to_v2(legacy)

    expected = ["REQ_Smithing_Craftsmanship", "REQ_Smithing_DwarvenSmithing"]
    for build in (legacy, compact, v2):
        assert get_perk_data(build).selected["AVSmithing"] == expected

    new_perks = PerkSelection(selected={"AVHeavyArmor": ["REQ_HeavyArmor_Conditioning"]})
    updated_compact = update_perk_data(compact, new_perks)
    updated_v2 = update_perk_data(v2, new_perks)
    updated_legacy = update_perk_data(legacy, new_perks)

    assert isinstance(updated_compact, CompactBuild)
    assert updated_compact.perks == {"HAR": [1]}
    assert isinstance(updated_v2, V2Build)
    assert updated_v2.perks == {13: [1]}
    assert updated_legacy.perks is new_perks
    # The original build is left alone.
    assert compact.perks == {"SMG": [0, 3]}


def test_calculate_size_reduction_reports_savings():
    selection = _smithing_selection()
    stats = calculate_size_reduction(selection, encode_perks(selection))
    assert stats.compact_size < stats.legacy_size
    assert stats.reduction == stats.legacy_size - stats.compact_size
    assert 0 < stats.reduction_percentage < 100


def test_rekeying_sorts_and_deduplicates_indexes():
    assert compact_perks_to_indexes({"SMG": [3, 0, 3]}) == {0: [0, 3]}
    assert compact_perks_from_indexes({"0": [3, 0, 3]}) == {"SMG": [0, 3]}
