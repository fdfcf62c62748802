"""Status effect helpers."""
from __future__ import annotations

from typing import List, Sequence
from uuid import uuid4

from autobattle.core.types import EffectType
from autobattle.domain.battle_models import StatusEffect

DOT_EFFECT_TYPES: tuple[EffectType, ...] = ("dot", "burn", "charge")


def make_effect(effect_type: EffectType, *, value: float, duration: int, applier_id: str) -> StatusEffect:
    return StatusEffect(
        id=f"effect_{uuid4().hex[:12]}",
        effect_type=effect_type,
        value=value,
        duration=duration,
        applier_id=applier_id,
    )


def find_effect(effects: Sequence[StatusEffect], effect_type: EffectType) -> StatusEffect | None:
    """Return the first active effect of ``effect_type``."""
    for effect in effects:
        if effect.effect_type == effect_type:
            return effect
    return None


def apply_effect_replacing(effects: List[StatusEffect], effect: StatusEffect) -> None:
    """Drop every effect of the same type, then append ``effect``."""
    effects[:] = [existing for existing in effects if existing.effect_type != effect.effect_type]
    effects.append(effect)


def dot_effects(effects: Sequence[StatusEffect]) -> List[StatusEffect]:
    return [effect for effect in effects if effect.effect_type in DOT_EFFECT_TYPES]


def tick_effects(effects: Sequence[StatusEffect]) -> List[StatusEffect]:
    """Return the effects with one round elapsed; expired effects are removed."""
    ticked: List[StatusEffect] = []
    for effect in effects:
        remaining = effect.duration - 1
        if remaining > 0:
            ticked.append(
                StatusEffect(
                    id=effect.id,
                    effect_type=effect.effect_type,
                    value=effect.value,
                    duration=remaining,
                    applier_id=effect.applier_id,
                )
            )
    return ticked
