"""Skill indices, skill-tree codes, and attribute names.

Skill indices and tree codes are baked into every share link ever issued.
Entries may be appended; never reorder or remove one.
"""

from enum import IntEnum
from types import MappingProxyType


class Skill(IntEnum):
    """Wire index of each skill tree.

    Names follow the in-game labels; a few trees were renamed by the
    overhaul mod but keep their vanilla EDIDs.
    """
    SMITHING = 0
    DESTRUCTION = 1
    ENCHANTING = 2
    RESTORATION = 3
    MYSTICISM = 4       # "Illusion" in vanilla
    CONJURATION = 5
    ALTERATION = 6
    SPEECHCRAFT = 7
    ALCHEMY = 8
    SNEAK = 9
    LOCKPICKING = 10    # "Wayfarer"
    PICKPOCKET = 11     # "Finesse"
    LIGHT_ARMOR = 12    # "Evasion"
    HEAVY_ARMOR = 13
    BLOCK = 14
    MARKSMAN = 15       # "Archery"
    TWO_HANDED = 16
    ONE_HANDED = 17


# Skill EDIDs in index order.
SKILL_IDS: tuple[str, ...] = (
    "AVSmithing",
    "AVDestruction",
    "AVEnchanting",
    "AVRestoration",
    "AVMysticism",
    "AVConjuration",
    "AVAlteration",
    "AVSpeechcraft",
    "AVAlchemy",
    "AVSneak",
    "AVLockpicking",
    "AVPickpocket",
    "AVLightArmor",
    "AVHeavyArmor",
    "AVBlock",
    "AVMarksman",
    "AVTwoHanded",
    "AVOneHanded",
)

SKILL_ID_TO_INDEX = MappingProxyType(
    {skill_id: index for index, skill_id in enumerate(SKILL_IDS)}
)

# Three-letter tree codes used as keys in compact perk maps.
SKILL_TREE_CODES = MappingProxyType({
    "AVSmithing": "SMG",
    "AVDestruction": "DST",
    "AVEnchanting": "ENC",
    "AVRestoration": "RES",
    "AVMysticism": "MYS",
    "AVConjuration": "CNJ",
    "AVAlteration": "ALT",
    "AVSpeechcraft": "SPC",
    "AVAlchemy": "ALC",
    "AVSneak": "SNK",
    "AVLockpicking": "LCK",
    "AVPickpocket": "PKP",
    "AVLightArmor": "LAR",
    "AVHeavyArmor": "HAR",
    "AVBlock": "BLK",
    "AVMarksman": "MRK",
    "AVTwoHanded": "TWH",
    "AVOneHanded": "OHD",
})

SKILL_TREE_CODES_REVERSE = MappingProxyType(
    {code: skill_id for skill_id, code in SKILL_TREE_CODES.items()}
)

# Attributes that can be raised on level-up.
ATTRIBUTE_NAMES: tuple[str, ...] = ("health", "stamina", "magicka")
