"""Battle service stepping automatic combat one action at a time."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, List, Sequence, Tuple

from autobattle.core.rng import RNG
from autobattle.core.types import Side
from autobattle.domain.battle_models import (
    LOG_LIMIT,
    BattleLogEntry,
    BattleUnit,
    CombatSession,
    clone_roster,
)
from autobattle.domain.class_behaviors import behavior_of
from autobattle.domain.classes import ULTIMATE_UNLOCK_LEVEL
from autobattle.domain.damage import DamageOptions, compute_damage
from autobattle.domain.effects import dot_effects, tick_effects
from autobattle.services.action_resolver import ActionResolver
from autobattle.services.errors import BattleSetupError
from autobattle.services.factories import make_instance_id

logger = logging.getLogger(__name__)

DOT_ATTACKER_NAME = "DOT"
DOT_SKILL_NAMES = {"burn": "Burn", "charge": "Charge", "dot": "Shock"}


@dataclass(frozen=True, slots=True)
class StepResult:
    """Outcome of a single step: the new session and what happened, oldest first."""

    session: CombatSession
    log_entries: Tuple[BattleLogEntry, ...]
    winner: Side | None


class BattleService:
    """Deterministic-by-seed battle orchestrator.

    Units act in speed order each round. Every call returns a new
    ``CombatSession``; sessions handed in are never modified.
    """

    def __init__(self, rng: RNG, *, log_limit: int = LOG_LIMIT) -> None:
        self._rng = rng
        self._resolver = ActionResolver(rng)
        self._log_limit = log_limit

    # -----------------------
    # Battle Lifecycle
    # -----------------------
    def initialize_session(
        self,
        player_units: Sequence[BattleUnit],
        enemy_units: Sequence[BattleUnit],
        battle_id: str | None = None,
    ) -> CombatSession:
        """Create round 1 of a battle between the two sides."""
        if not player_units:
            raise BattleSetupError("Cannot start a battle without player units.")
        if not enemy_units:
            raise BattleSetupError("Cannot start a battle without enemy units.")
        for unit in player_units:
            if unit.side != "player":
                raise BattleSetupError(f"Unit '{unit.instance_id}' is not on the player side.")
        for unit in enemy_units:
            if unit.side != "enemy":
                raise BattleSetupError(f"Unit '{unit.instance_id}' is not on the enemy side.")

        units = clone_roster([*player_units, *enemy_units])
        ids = [unit.instance_id for unit in units]
        if len(set(ids)) != len(ids):
            raise BattleSetupError("Battle units must have unique instance ids.")

        session = CombatSession(
            battle_id=battle_id or make_instance_id("battle", self._rng),
            units=tuple(units),
        )
        logger.info(
            f"Battle {session.battle_id} started: {len(player_units)} player units "
            f"vs {len(enemy_units)} enemy units"
        )
        session, _ = self._start_round(session, round_number=1)
        return session

    def step(self, session: CombatSession) -> StepResult:
        """Advance the battle by one entry of the turn order."""
        if session.is_over:
            return StepResult(session=session, log_entries=(), winner=session.winner)

        if session.action_index >= len(session.turn_order):
            session, entries = self._start_round(session, round_number=session.round + 1)
            return StepResult(session=session, log_entries=entries, winner=session.winner)

        actor_id = session.turn_order[session.action_index]
        actor = self._get_unit(session.units, actor_id)
        next_index = session.action_index + 1
        if not actor.is_alive or actor.is_stunned:
            logger.debug(f"Round {session.round}: {actor.name} cannot act and is skipped")
            return StepResult(
                session=replace(session, action_index=next_index),
                log_entries=(),
                winner=None,
            )

        ultimate = actor.skills.ultimate
        use_ultimate = actor.level >= ULTIMATE_UNLOCK_LEVEL and actor.cooldowns.get(ultimate.name, 0) <= 0
        outcome = self._resolver.resolve(
            session.units,
            actor_id,
            is_basic=not use_ultimate,
            round_number=session.round,
        )
        units = outcome.units
        self._update_cooldowns(self._get_unit(units, actor_id), used_ultimate=use_ultimate)

        entries = tuple(outcome.log_entries)
        winner = self._check_winner(units)
        session = replace(
            session,
            units=tuple(units),
            action_index=next_index,
            log=self._prepend_log(session.log, entries),
            winner=winner,
        )
        if winner is not None:
            self._log_battle_end(session)
        return StepResult(session=session, log_entries=entries, winner=winner)

    def run_to_completion(self, session: CombatSession) -> CombatSession:
        """Step until one side has won."""
        while not session.is_over:
            session = self.step(session).session
        return session

    # -----------------------
    # Round handling
    # -----------------------
    def _start_round(
        self, session: CombatSession, *, round_number: int
    ) -> tuple[CombatSession, Tuple[BattleLogEntry, ...]]:
        units = clone_roster(list(session.units))
        living = [unit for unit in units if unit.is_alive]
        turn_order = tuple(
            unit.instance_id for unit in sorted(living, key=lambda unit: unit.stats.speed, reverse=True)
        )
        logger.debug(f"Round {round_number} begins; order: {', '.join(turn_order)}")

        entries: List[BattleLogEntry] = []
        for unit in living:
            for effect in dot_effects(unit.effects):
                applier = self._find_unit(units, effect.applier_id)
                if applier is None:
                    logger.warning(
                        f"Skipping {effect.effect_type} tick on {unit.name}: "
                        f"applier '{effect.applier_id}' is not in the battle"
                    )
                    continue
                result = compute_damage(
                    applier, unit, effect.value, DamageOptions(skill_type="dot"), rng=self._rng
                )
                unit.current_hp = max(0, unit.current_hp - result.damage)
                logger.debug(f"{effect.effect_type} deals {result.damage} to {unit.name}")
                entries.append(
                    BattleLogEntry(
                        turn=round_number,
                        attacker_name=DOT_ATTACKER_NAME,
                        skill_name=DOT_SKILL_NAMES[effect.effect_type],
                        target_name=unit.name,
                        damage=result.damage,
                        is_crit=result.is_crit,
                        target_hp_left=unit.current_hp,
                        is_dot=True,
                        is_block=result.is_block,
                    )
                )

            if behavior_of(unit.hero_class).passive == "damage_growth":
                growth = unit.skills.passive.value_for(unit.level)
                if growth is not None:
                    unit.accumulated_dmg_bonus += growth

            unit.effects = tick_effects(unit.effects)

        recorded = tuple(entries)
        winner = self._check_winner(units)
        new_session = replace(
            session,
            units=tuple(units),
            round=round_number,
            turn_order=turn_order,
            action_index=0,
            log=self._prepend_log(session.log, recorded),
            winner=winner,
        )
        if winner is not None:
            self._log_battle_end(new_session)
        return new_session, recorded

    @staticmethod
    def _update_cooldowns(actor: BattleUnit, *, used_ultimate: bool) -> None:
        ultimate = actor.skills.ultimate
        for skill_name, remaining in list(actor.cooldowns.items()):
            if remaining > 0:
                actor.cooldowns[skill_name] = remaining - 1
        if used_ultimate:
            actor.cooldowns[ultimate.name] = ultimate.cooldown

    @staticmethod
    def _check_winner(units: Iterable[BattleUnit]) -> Side | None:
        """Enemy wins when the player side is wiped out, including a double knockout."""
        units = list(units)
        if not any(unit.side == "player" and unit.is_alive for unit in units):
            return "enemy"
        if not any(unit.side == "enemy" and unit.is_alive for unit in units):
            return "player"
        return None

    def _prepend_log(
        self, log: Tuple[BattleLogEntry, ...], entries: Tuple[BattleLogEntry, ...]
    ) -> Tuple[BattleLogEntry, ...]:
        return (tuple(reversed(entries)) + log)[: self._log_limit]

    @staticmethod
    def _log_battle_end(session: CombatSession) -> None:
        logger.info(f"Battle {session.battle_id} ended in round {session.round}: {session.winner} wins")

    # -----------------------
    # Lookups
    # -----------------------
    @staticmethod
    def _find_unit(units: Iterable[BattleUnit], instance_id: str) -> BattleUnit | None:
        for unit in units:
            if unit.instance_id == instance_id:
                return unit
        return None

    def _get_unit(self, units: Iterable[BattleUnit], instance_id: str) -> BattleUnit:
        unit = self._find_unit(units, instance_id)
        if unit is None:
            raise ValueError(f"Unit '{instance_id}' not found in battle.")
        return unit
