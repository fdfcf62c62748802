"""Resolution of a single unit action, including the reactions it triggers."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Literal, Sequence

from autobattle.core.rng import RNG
from autobattle.domain.battle_models import (
    PERMANENT_DURATION,
    BattleLogEntry,
    BattleUnit,
    clone_roster,
)
from autobattle.domain.class_behaviors import ClassBehavior, behavior_of
from autobattle.domain.damage import DamageOptions, compute_damage, round_half_up
from autobattle.domain.effects import apply_effect_replacing, make_effect
from autobattle.domain.skill_profile import (
    BasicSkillProfile,
    bonus_attack_chance,
    counter_chance,
    derive_basic_profile,
)

logger = logging.getLogger(__name__)

ChainKind = Literal["counter", "follow_up"]

CHAIN_SKILL_NAMES = {"counter": "Counter", "follow_up": "Follow-up"}


@dataclass(slots=True)
class ActionOutcome:
    """Roster snapshot after an action plus the log lines it produced, oldest first."""

    units: List[BattleUnit]
    log_entries: List[BattleLogEntry]


class ActionResolver:
    """Resolves basic skills and ultimates against a roster snapshot.

    The roster passed to ``resolve`` is never modified. It is cloned once and
    the action, every counterattack and the follow-up attack all work on that
    clone, so their log lines come out in the order things happened.
    """

    def __init__(self, rng: RNG) -> None:
        self._rng = rng

    def resolve(
        self,
        units: Sequence[BattleUnit],
        attacker_id: str,
        *,
        is_basic: bool,
        round_number: int,
        chained: bool = False,
    ) -> ActionOutcome:
        working = clone_roster(list(units))
        log: List[BattleLogEntry] = []
        self._act(
            working,
            attacker_id,
            is_basic=is_basic,
            chain="follow_up" if chained else None,
            round_number=round_number,
            log=log,
        )
        return ActionOutcome(units=working, log_entries=log)

    # -----------------------
    # Action
    # -----------------------
    def _act(
        self,
        working: List[BattleUnit],
        attacker_id: str,
        *,
        is_basic: bool,
        chain: ChainKind | None,
        round_number: int,
        log: List[BattleLogEntry],
    ) -> None:
        attacker = _find_unit(working, attacker_id)
        if attacker is None or not attacker.is_alive:
            return

        behavior = behavior_of(attacker.hero_class)
        profile: BasicSkillProfile | None = None
        if is_basic:
            profile = derive_basic_profile(
                attacker.hero_class, attacker.level, attacker.skill_upgrades, attacker.skills
            )
            coefficient = profile.coefficient
            options = DamageOptions(
                ignore_def_val=profile.ignore_def_val,
                ignore_def_ratio=profile.ignore_def_ratio,
                is_normal_skill=True,
                skill_type="normal",
            )
        else:
            coefficient = attacker.skills.ultimate.coefficient_for(attacker.level)
            options = DamageOptions(skill_type="ultimate")

        enemies = [unit for unit in working if unit.side != attacker.side and unit.is_alive]
        if not enemies:
            return

        targets = self._select_targets(behavior, enemies, profile)
        skill_name = self._skill_name(attacker, is_basic, chain)
        logger.debug(
            f"Round {round_number}: {attacker.name} uses {skill_name} on "
            f"{', '.join(target.name for target in targets)}"
        )

        for target in targets:
            if not attacker.is_alive:
                break
            if not target.is_alive:
                continue

            result = compute_damage(attacker, target, coefficient, options, rng=self._rng)
            target.current_hp = max(0, target.current_hp - result.damage)
            if is_basic:
                self._apply_duration_upgrade(attacker, target, behavior, coefficient)
            else:
                self._apply_ultimate_hit(attacker, target, behavior, coefficient, result.damage)

            log.append(
                BattleLogEntry(
                    turn=round_number,
                    attacker_name=attacker.name,
                    skill_name=skill_name,
                    target_name=target.name,
                    damage=result.damage,
                    is_crit=result.is_crit,
                    target_hp_left=target.current_hp,
                    is_block=result.is_block,
                    is_chained=chain is not None,
                )
            )

            if is_basic and chain is None and target.is_alive:
                chance = counter_chance(target.hero_class, target.skill_upgrades, target.skills)
                if chance > 0 and self._rng.roll_percent(chance):
                    logger.debug(f"{target.name} counters {attacker.name}")
                    self._act(
                        working,
                        target.instance_id,
                        is_basic=True,
                        chain="counter",
                        round_number=round_number,
                        log=log,
                    )

        if is_basic and chain is None and attacker.is_alive:
            chance = bonus_attack_chance(attacker.hero_class, attacker.level, attacker.skills)
            if chance > 0 and self._rng.roll_percent(chance):
                logger.debug(f"{attacker.name} follows up with another {attacker.skills.basic.name}")
                self._act(
                    working,
                    attacker.instance_id,
                    is_basic=True,
                    chain="follow_up",
                    round_number=round_number,
                    log=log,
                )

    # -----------------------
    # Targeting
    # -----------------------
    def _select_targets(
        self,
        behavior: ClassBehavior,
        enemies: List[BattleUnit],
        profile: BasicSkillProfile | None,
    ) -> List[BattleUnit]:
        if profile is None:
            if behavior.ultimate_targeting == "all":
                return list(enemies)
            if behavior.ultimate_targeting == "front_and_back":
                return self._pick_front_and_back(enemies)
            return self._pick_default(enemies, float(behavior.ultimate_targets), back_row_chance=0.0)
        return self._pick_default(enemies, profile.target_count, back_row_chance=profile.back_row_chance)

    def _pick_default(
        self, enemies: List[BattleUnit], target_count: float, *, back_row_chance: float
    ) -> List[BattleUnit]:
        """Fill each slot with a random front-row enemy unless a back-row roll succeeds.

        Falls back to the first remaining enemy when the preferred row is empty.
        """
        whole = math.floor(target_count)
        fraction = target_count - whole
        count = whole + (1 if fraction > 0 and self._rng.roll(fraction) else 0)

        targets: List[BattleUnit] = []
        for _ in range(count):
            remaining = [enemy for enemy in enemies if enemy not in targets]
            if not remaining:
                break
            if back_row_chance > 0 and self._rng.roll(back_row_chance):
                row = [enemy for enemy in remaining if not enemy.is_front_row]
            else:
                row = [enemy for enemy in remaining if enemy.is_front_row]
            targets.append(self._rng.choice(row) if row else remaining[0])
        return targets

    def _pick_front_and_back(self, enemies: List[BattleUnit]) -> List[BattleUnit]:
        targets: List[BattleUnit] = []
        front = [enemy for enemy in enemies if enemy.is_front_row]
        back = [enemy for enemy in enemies if not enemy.is_front_row]
        if front:
            targets.append(self._rng.choice(front))
        if back:
            targets.append(self._rng.choice(back))
        return targets

    # -----------------------
    # On-hit effects
    # -----------------------
    @staticmethod
    def _apply_ultimate_hit(
        attacker: BattleUnit,
        target: BattleUnit,
        behavior: ClassBehavior,
        coefficient: float,
        damage: int,
    ) -> None:
        special = attacker.skills.ultimate.special_for(attacker.level)
        if behavior.ultimate_on_hit == "heal":
            healed = attacker.current_hp + round_half_up(damage * special)
            attacker.current_hp = min(attacker.max_hp, healed)
        elif behavior.ultimate_on_hit == "def_down":
            apply_effect_replacing(
                target.effects,
                make_effect(
                    "def_down",
                    value=special,
                    duration=PERMANENT_DURATION,
                    applier_id=attacker.instance_id,
                ),
            )
        elif behavior.ultimate_on_hit == "charge":
            target.effects.append(
                make_effect(
                    "charge",
                    value=special * coefficient,
                    duration=PERMANENT_DURATION,
                    applier_id=attacker.instance_id,
                )
            )

    @staticmethod
    def _apply_duration_upgrade(
        attacker: BattleUnit,
        target: BattleUnit,
        behavior: ClassBehavior,
        coefficient: float,
    ) -> None:
        upgrade = behavior.duration_effect
        points = attacker.upgrade_points("duration")
        if upgrade is None or points <= 0:
            return
        strength = points * attacker.skills.basic.upgrade_value("duration")
        target.effects.append(
            make_effect(
                upgrade.effect_type,
                value=strength * coefficient if upgrade.scales_with_coefficient else strength,
                duration=upgrade.duration,
                applier_id=attacker.instance_id,
            )
        )

    @staticmethod
    def _skill_name(attacker: BattleUnit, is_basic: bool, chain: ChainKind | None) -> str:
        if chain is not None:
            return CHAIN_SKILL_NAMES[chain]
        return attacker.skills.basic.name if is_basic else attacker.skills.ultimate.name


def _find_unit(units: Sequence[BattleUnit], instance_id: str) -> BattleUnit | None:
    for unit in units:
        if unit.instance_id == instance_id:
            return unit
    return None
