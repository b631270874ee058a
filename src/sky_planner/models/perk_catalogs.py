"""Ordered perk catalogs, one per skill tree.

A perk's position in its tree's tuple is the index written into compact
perk maps. Same contract as the skill index: append only.
"""

from types import MappingProxyType

from sky_planner.models.constants import SKILL_TREE_CODES


_SMITHING = (
    "REQ_Smithing_Craftsmanship",
    "REQ_Smithing_AdvancedBlacksmithing",
    "REQ_Smithing_Finesse",
    "REQ_Smithing_DwarvenSmithing",
    "REQ_Smithing_OrcishSmithing",
    "REQ_Smithing_ElvenSmithing",
    "REQ_Smithing_AdvancedLightArmors",
    "REQ_Smithing_AdvancedHeavyArmors",
    "REQ_Smithing_GlassSmithing",
    "REQ_Smithing_EbonySmithing",
    "REQ_Smithing_DaedricSmithing",
    "REQ_Smithing_DragonArmor",
    "REQ_Smithing_MagicalSmithing",
    "REQ_Smithing_MasteryOfSmithing",
)

_DESTRUCTION = (
    "REQ_Destruction_Mastery_000_NoviceDestruction",
    "REQ_Destruction_Mastery_025_ApprenticeDestruction",
    "REQ_Destruction_Mastery_050_AdeptDestruction",
    "REQ_Destruction_Mastery_075_ExpertDestruction",
    "REQ_Destruction_Mastery_100_MasterDestruction",
    "REQ_Destruction_Arcane_025_ArcaneFocus1",
    "REQ_Destruction_Arcane_050_ArcaneFocus2",
    "REQ_Destruction_Arcane_075_ArcaneDisruption",
    "REQ_Destruction_Fire_030_Combustion",
    "REQ_Destruction_Fire_060_IntenseFlames",
    "REQ_Destruction_Frost_030_DeepFreeze",
    "REQ_Destruction_Frost_060_Shatter",
    "REQ_Destruction_Shock_030_Overload",
    "REQ_Destruction_Shock_060_Disintegrate",
    "REQ_Destruction_Rune_040_RuneMastery",
    "REQ_Destruction_100_ImpactfulDestruction",
)

_ENCHANTING = (
    "REQ_Enchanting_EnchantersInsight",
    "REQ_Enchanting_SoulSiphon",
    "REQ_Enchanting_FireEnchanter",
    "REQ_Enchanting_FrostEnchanter",
    "REQ_Enchanting_StormEnchanter",
    "REQ_Enchanting_InsightfulEnchanter",
    "REQ_Enchanting_CorpusEnchanter",
    "REQ_Enchanting_ExtraEffect",
    "REQ_Enchanting_ArtificerForge",
    "REQ_Enchanting_StaffCrafting",
    "REQ_Enchanting_MasterEnchanter",
)

_RESTORATION = (
    "REQ_Restoration_Mastery_000_NoviceRestoration",
    "REQ_Restoration_Mastery_025_ApprenticeRestoration",
    "REQ_Restoration_Mastery_050_AdeptRestoration",
    "REQ_Restoration_Mastery_075_ExpertRestoration",
    "REQ_Restoration_Mastery_100_MasterRestoration",
    "REQ_Restoration_Respite",
    "REQ_Restoration_Regeneration",
    "REQ_Restoration_Wards",
    "REQ_Restoration_WardMastery",
    "REQ_Restoration_Necromage",
    "REQ_Restoration_AvoidDeath",
    "REQ_Restoration_Purity",
)

_MYSTICISM = (
    "REQ_Mysticism_Mastery_000_NoviceMysticism",
    "REQ_Mysticism_Mastery_025_ApprenticeMysticism",
    "REQ_Mysticism_Mastery_050_AdeptMysticism",
    "REQ_Mysticism_Mastery_075_ExpertMysticism",
    "REQ_Mysticism_Mastery_100_MasterMysticism",
    "REQ_Mysticism_Quietcasting",
    "REQ_Mysticism_Hypnosis",
    "REQ_Mysticism_AnimageFocus",
    "REQ_Mysticism_KindredMage",
    "REQ_Mysticism_DeepSight",
    "REQ_Mysticism_MasterOfTheMind",
    "REQ_Mysticism_Telekinesis",
)

_CONJURATION = (
    "REQ_Conjuration_Mastery_000_NoviceConjuration",
    "REQ_Conjuration_Mastery_025_ApprenticeConjuration",
    "REQ_Conjuration_Mastery_050_AdeptConjuration",
    "REQ_Conjuration_Mastery_075_ExpertConjuration",
    "REQ_Conjuration_Mastery_100_MasterConjuration",
    "REQ_Conjuration_MysticBinding",
    "REQ_Conjuration_SoulStealer",
    "REQ_Conjuration_Necromancy",
    "REQ_Conjuration_DarkSouls",
    "REQ_Conjuration_SummonerFocus",
    "REQ_Conjuration_AtromancyElemental",
    "REQ_Conjuration_TwinSouls",
)

_ALTERATION = (
    "REQ_Alteration_Mastery_000_NoviceAlteration",
    "REQ_Alteration_Mastery_025_ApprenticeAlteration",
    "REQ_Alteration_Mastery_050_AdeptAlteration",
    "REQ_Alteration_Mastery_075_ExpertAlteration",
    "REQ_Alteration_Mastery_100_MasterAlteration",
    "REQ_Alteration_MageArmor",
    "REQ_Alteration_MagicResistance",
    "REQ_Alteration_Stability",
    "REQ_Alteration_Transmutation",
    "REQ_Alteration_Atronach",
    "REQ_Alteration_ArcaneShield",
)

_SPEECHCRAFT = (
    "REQ_Speech_Haggling",
    "REQ_Speech_Merchant",
    "REQ_Speech_SilverTongue",
    "Feat_Perk_Skill_Speechcraft_Commander1",
    "REQ_Speech_Investor",
    "REQ_Speech_Fence",
    "REQ_Speech_MasterTrader",
    "REQ_Speech_Bribery",
    "REQ_Speech_Persuasion",
    "REQ_Speech_Intimidation",
    "REQ_Speech_Allure",
    "REQ_Speech_Leadership",
)

_ALCHEMY = (
    "REQ_Alchemy_AlchemicalLore",
    "REQ_Alchemy_Physician",
    "REQ_Alchemy_Benefactor",
    "REQ_Alchemy_Poisoner",
    "REQ_Alchemy_Concentrated",
    "REQ_Alchemy_GreenThumb",
    "REQ_Alchemy_Experimenter",
    "REQ_Alchemy_Snakeblood",
    "REQ_Alchemy_Purity",
    "REQ_Alchemy_AlchemicalIntellect",
    "REQ_Alchemy_ImprovedElixirs",
)

_SNEAK = (
    "REQ_Sneak_Stealth",
    "REQ_Sneak_Muffled",
    "REQ_Sneak_LightFoot",
    "REQ_Sneak_SilentRoll",
    "REQ_Sneak_Backstab",
    "REQ_Sneak_DeadlyAim",
    "REQ_Sneak_AssassinsBlade",
    "REQ_Sneak_ThiefOfShadows",
    "REQ_Sneak_Vanish",
    "REQ_Sneak_ShadowWarrior",
)

_LOCKPICKING = (
    "REQ_Wayfarer_Pathfinder",
    "REQ_Wayfarer_Packmule",
    "REQ_Wayfarer_Forager",
    "REQ_Wayfarer_Survivalist",
    "REQ_Wayfarer_Tracker",
    "REQ_Wayfarer_HuntersDiscipline",
    "REQ_Wayfarer_Trailblazer",
    "REQ_Wayfarer_Wanderlust",
    "REQ_Wayfarer_Cartographer",
)

_PICKPOCKET = (
    "REQ_Finesse_LightFingers",
    "REQ_Finesse_NightThief",
    "REQ_Finesse_Poisoned",
    "REQ_Finesse_CutPurse",
    "REQ_Finesse_ExtraPockets",
    "REQ_Finesse_Keymaster",
    "REQ_Finesse_Misdirection",
    "REQ_Finesse_PerfectTouch",
    "REQ_Finesse_Lockpicking_Novice",
    "REQ_Finesse_Lockpicking_Master",
)

_LIGHT_ARMOR = (
    "REQ_Evasion_AgileDefender",
    "REQ_Evasion_CustomFit",
    "REQ_Evasion_Unhindered",
    "REQ_Evasion_Dodge",
    "REQ_Evasion_Acrobatics",
    "REQ_Evasion_WindWalker",
    "REQ_Evasion_MatchingSet",
    "REQ_Evasion_DeftMovement",
    "REQ_Evasion_LightArmorMastery",
)

_HEAVY_ARMOR = (
    "REQ_HeavyArmor_Juggernaut",
    "REQ_HeavyArmor_Conditioning",
    "REQ_HeavyArmor_WellFitted",
    "REQ_HeavyArmor_TowerOfStrength",
    "REQ_HeavyArmor_CushionedImpact",
    "REQ_HeavyArmor_FistsOfSteel",
    "REQ_HeavyArmor_MatchingSet",
    "REQ_HeavyArmor_Reflect",
    "REQ_HeavyArmor_Combat_Training",
    "REQ_HeavyArmor_Relentless",
)

_BLOCK = (
    "REQ_Block_ShieldWall",
    "REQ_Block_DeflectArrows",
    "REQ_Block_PowerBash",
    "REQ_Block_QuickReflexes",
    "REQ_Block_ElementalProtection",
    "REQ_Block_DeadlyBash",
    "REQ_Block_BlockRunner",
    "REQ_Block_DisarmingBash",
    "REQ_Block_ShieldCharge",
    "REQ_Block_Counterstrike",
)

_MARKSMAN = (
    "REQ_Marksman_Overdraw",
    "REQ_Marksman_EagleEye",
    "REQ_Marksman_SteadyHand",
    "REQ_Marksman_CriticalShot",
    "REQ_Marksman_HuntersDiscipline",
    "REQ_Marksman_Ranger",
    "REQ_Marksman_QuickShot",
    "REQ_Marksman_PowerShot",
    "REQ_Marksman_CrossbowTechnician",
    "REQ_Marksman_Bullseye",
    "REQ_Marksman_RapidReload",
)

_TWO_HANDED = (
    "REQ_TwoHanded_WeaponMastery1",
    "REQ_TwoHanded_WeaponMastery2",
    "REQ_TwoHanded_Barbarian",
    "REQ_TwoHanded_ChampionsStance",
    "REQ_TwoHanded_DeepWounds",
    "REQ_TwoHanded_Limbsplitter",
    "REQ_TwoHanded_Skullcrusher",
    "REQ_TwoHanded_DevastatingBlow",
    "REQ_TwoHanded_GreatCritical",
    "REQ_TwoHanded_Sweep",
    "REQ_TwoHanded_Warmaster",
)

_ONE_HANDED = (
    "REQ_OneHanded_WeaponMastery1",
    "REQ_OneHanded_WeaponMastery2",
    "REQ_OneHanded_PenetratingStrikes",
    "REQ_OneHanded_FightingStance",
    "REQ_OneHanded_Bladesman",
    "REQ_OneHanded_BoneBreaker",
    "REQ_OneHanded_HackAndSlash",
    "REQ_OneHanded_DualFlurry",
    "REQ_OneHanded_DualSavagery",
    "REQ_OneHanded_CriticalCharge",
    "REQ_OneHanded_Paralyzing_Strike",
    "REQ_OneHanded_SavageStrike",
)

# Tree code -> ordered perk EDIDs.
PERK_CATALOGS = MappingProxyType({
    SKILL_TREE_CODES["AVSmithing"]: _SMITHING,
    SKILL_TREE_CODES["AVDestruction"]: _DESTRUCTION,
    SKILL_TREE_CODES["AVEnchanting"]: _ENCHANTING,
    SKILL_TREE_CODES["AVRestoration"]: _RESTORATION,
    SKILL_TREE_CODES["AVMysticism"]: _MYSTICISM,
    SKILL_TREE_CODES["AVConjuration"]: _CONJURATION,
    SKILL_TREE_CODES["AVAlteration"]: _ALTERATION,
    SKILL_TREE_CODES["AVSpeechcraft"]: _SPEECHCRAFT,
    SKILL_TREE_CODES["AVAlchemy"]: _ALCHEMY,
    SKILL_TREE_CODES["AVSneak"]: _SNEAK,
    SKILL_TREE_CODES["AVLockpicking"]: _LOCKPICKING,
    SKILL_TREE_CODES["AVPickpocket"]: _PICKPOCKET,
    SKILL_TREE_CODES["AVLightArmor"]: _LIGHT_ARMOR,
    SKILL_TREE_CODES["AVHeavyArmor"]: _HEAVY_ARMOR,
    SKILL_TREE_CODES["AVBlock"]: _BLOCK,
    SKILL_TREE_CODES["AVMarksman"]: _MARKSMAN,
    SKILL_TREE_CODES["AVTwoHanded"]: _TWO_HANDED,
    SKILL_TREE_CODES["AVOneHanded"]: _ONE_HANDED,
})

# Tree code -> {perk EDID: catalog index}, precomputed for encoding.
PERK_CATALOG_INDEX = MappingProxyType({
    code: MappingProxyType({edid: i for i, edid in enumerate(catalog)})
    for code, catalog in PERK_CATALOGS.items()
})
