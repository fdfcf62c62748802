"""Battle domain models."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Tuple

from autobattle.core.types import EffectType, Side
from autobattle.domain.classes import Category, HeroClass, category_of
from autobattle.domain.defs import SkillSetDef
from autobattle.domain.entities import CombatStats

FRONT_ROW_SLOTS = 2
BACK_ROW_SLOTS = 4
# Effects that never expire in practice; they tick down like any other.
PERMANENT_DURATION = 99
LOG_LIMIT = 50


@dataclass(frozen=True, slots=True)
class StatusEffect:
    """A timed effect carried by a battle unit."""

    id: str
    effect_type: EffectType
    value: float
    duration: int
    applier_id: str


@dataclass(slots=True)
class BattleUnit:
    """Represents an individual participant in battle."""

    instance_id: str
    name: str
    hero_class: HeroClass
    level: int
    stats: CombatStats
    skills: SkillSetDef
    side: Side
    position: int
    current_hp: int
    max_hp: int
    skill_upgrades: Dict[str, int] = field(default_factory=dict)
    cooldowns: Dict[str, int] = field(default_factory=dict)
    effects: List[StatusEffect] = field(default_factory=list)
    accumulated_dmg_bonus: float = 0.0
    damage_factor: float = 1.0
    source_id: str | None = None  # hero template id

    @property
    def category(self) -> Category:
        return category_of(self.hero_class)

    @property
    def is_alive(self) -> bool:
        return self.current_hp > 0

    @property
    def is_front_row(self) -> bool:
        return self.position < FRONT_ROW_SLOTS

    @property
    def is_stunned(self) -> bool:
        return any(effect.effect_type == "stun" for effect in self.effects)

    def upgrade_points(self, category: str) -> int:
        return self.skill_upgrades.get(category, 0)

    def copy(self) -> "BattleUnit":
        """Return a copy whose mutable containers are independent of this unit."""
        return replace(
            self,
            skill_upgrades=dict(self.skill_upgrades),
            cooldowns=dict(self.cooldowns),
            effects=list(self.effects),
        )


def clone_roster(units: List[BattleUnit]) -> List[BattleUnit]:
    return [unit.copy() for unit in units]


@dataclass(frozen=True, slots=True)
class BattleLogEntry:
    """One observable line of the battle log."""

    turn: int
    attacker_name: str
    skill_name: str
    target_name: str
    damage: int
    is_crit: bool
    target_hp_left: int
    is_dot: bool = False
    is_block: bool = False
    is_chained: bool = False


@dataclass(frozen=True, slots=True)
class Formation:
    """Deployment slots: two front-row and four back-row hero ids."""

    front: Tuple[str | None, ...] = (None,) * FRONT_ROW_SLOTS
    back: Tuple[str | None, ...] = (None,) * BACK_ROW_SLOTS

    def __post_init__(self) -> None:
        if len(self.front) != FRONT_ROW_SLOTS or len(self.back) != BACK_ROW_SLOTS:
            raise ValueError(
                f"Formation requires {FRONT_ROW_SLOTS} front and {BACK_ROW_SLOTS} back slots."
            )

    def placements(self) -> List[Tuple[str, int]]:
        """Return (hero_id, position) pairs for every filled slot."""
        placed = [(hero_id, index) for index, hero_id in enumerate(self.front) if hero_id]
        placed.extend(
            (hero_id, index + FRONT_ROW_SLOTS) for index, hero_id in enumerate(self.back) if hero_id
        )
        return placed

    def retain(self, hero_ids: Iterable[str]) -> "Formation":
        """Return a copy with every slot outside ``hero_ids`` emptied."""
        keep = set(hero_ids)
        return Formation(
            front=tuple(hero_id if hero_id in keep else None for hero_id in self.front),
            back=tuple(hero_id if hero_id in keep else None for hero_id in self.back),
        )


@dataclass(frozen=True, slots=True)
class CombatSession:
    """Snapshot of an ongoing battle.

    Sessions are never mutated by the engine; every step returns a new one.
    ``turn_order`` holds unit ids in acting order for the current round and
    ``action_index`` points at the next entry to act.
    """

    battle_id: str
    units: Tuple[BattleUnit, ...]
    round: int = 1
    turn_order: Tuple[str, ...] = ()
    action_index: int = 0
    log: Tuple[BattleLogEntry, ...] = ()
    winner: Side | None = None

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    def living(self, side: Side) -> List[BattleUnit]:
        return [unit for unit in self.units if unit.side == side and unit.is_alive]
