"""Character build data model.

One logical build, three wire shapes:

- ``LegacyBuild``: verbose field names, skill EDIDs, full perk EDIDs.
- ``CompactBuild``: verbose field names, skill EDIDs, perks as catalog
  indexes keyed by three-letter tree code.
- ``V2Build``: short field names on the wire, skills as indexes, perks as
  catalog indexes keyed by skill index.

Builds are treated as snapshots: code that changes a build returns a new
one rather than editing the one it was handed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar


SCHEMA_VERSION = 2
SUPPORTED_SCHEMA_VERSIONS = (1, 2)

DEFAULT_REGULAR_TRAITS = 2
DEFAULT_BONUS_TRAITS = 1


class BuildVariant(str, Enum):
    LEGACY = "legacy"
    COMPACT = "compact"
    V2 = "v2"


@dataclass(slots=True)
class Traits:
    regular: list[str] = field(default_factory=list)
    bonus: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class TraitLimits:
    """How many regular and bonus traits the build may take."""

    regular: int = DEFAULT_REGULAR_TRAITS
    bonus: int = DEFAULT_BONUS_TRAITS

    def is_default(self) -> bool:
        return self.regular == DEFAULT_REGULAR_TRAITS and self.bonus == DEFAULT_BONUS_TRAITS

    def as_pair(self) -> list[int]:
        return [self.regular, self.bonus]

    @classmethod
    def from_pair(cls, pair: list[int] | tuple[int, int] | None) -> "TraitLimits":
        """Read the ``[regular, bonus]`` tuple form; absent means default."""
        if pair is None:
            return cls()
        return cls(regular=int(pair[0]), bonus=int(pair[1]))


@dataclass(slots=True)
class Skills:
    """Major and minor skills by EDID.

    Keeping the two lists disjoint is the editor's job; the shape allows
    overlap.
    """
    major: list[str] = field(default_factory=list)
    minor: list[str] = field(default_factory=list)


@dataclass(slots=True)
class IndexedSkills:
    major: list[int] = field(default_factory=list)
    minor: list[int] = field(default_factory=list)


@dataclass(slots=True)
class PerkSelection:
    """Selected perks per skill tree plus the rank taken in each perk."""

    selected: dict[str, list[str]] = field(default_factory=dict)  # skill EDID -> perk EDIDs
    ranks: dict[str, int] = field(default_factory=dict)           # perk EDID -> rank

    def is_empty(self) -> bool:
        return not any(self.selected.values())


@dataclass(slots=True)
class AttributeAssignments:
    """Attribute points bought on level-up.

    ``assignments`` records which attribute was raised at each level.
    """
    health: int = 0
    stamina: int = 0
    magicka: int = 0
    level: int = 1
    assignments: dict[int, str] = field(default_factory=dict)

    def is_default(self) -> bool:
        return (
            self.health == 0
            and self.stamina == 0
            and self.magicka == 0
            and self.level == 1
            and not self.assignments
        )


@dataclass(slots=True)
class UserProgress:
    unlocks: list[str] = field(default_factory=list)


@dataclass(slots=True)
class BuildBase:
    """Fields every variant stores the same way."""

    v: int = SCHEMA_VERSION
    name: str = ""
    notes: str = ""

    # Selections, EDID or None when unselected
    race: str | None = None
    stone: str | None = None
    religion: str | None = None
    favorite_blessing: str | None = None

    traits: Traits = field(default_factory=Traits)
    trait_limits: TraitLimits = field(default_factory=TraitLimits)
    equipment: list[str] = field(default_factory=list)

    # Destiny nodes from root to leaf; order is the progression
    destiny_path: list[str] = field(default_factory=list)

    attribute_assignments: AttributeAssignments = field(default_factory=AttributeAssignments)


@dataclass(slots=True)
class LegacyBuild(BuildBase):
    variant: ClassVar[BuildVariant] = BuildVariant.LEGACY

    skills: Skills = field(default_factory=Skills)
    skill_levels: dict[str, int] = field(default_factory=dict)
    perks: PerkSelection = field(default_factory=PerkSelection)
    user_progress: UserProgress = field(default_factory=UserProgress)


@dataclass(slots=True)
class CompactBuild(BuildBase):
    variant: ClassVar[BuildVariant] = BuildVariant.COMPACT

    skills: Skills = field(default_factory=Skills)
    skill_levels: dict[str, int] = field(default_factory=dict)
    perks: dict[str, list[int]] = field(default_factory=dict)  # tree code -> perk indexes
    user_progress: UserProgress = field(default_factory=UserProgress)


@dataclass(slots=True)
class V2Build(BuildBase):
    """Most compact variant. Carries no user progress."""

    variant: ClassVar[BuildVariant] = BuildVariant.V2

    skills: IndexedSkills = field(default_factory=IndexedSkills)
    skill_levels: dict[int, int] = field(default_factory=dict)
    perks: dict[int, list[int]] = field(default_factory=dict)  # skill index -> perk indexes


AnyBuild = LegacyBuild | CompactBuild | V2Build


def default_build() -> LegacyBuild:
    return LegacyBuild()
