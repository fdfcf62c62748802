"""Player-facing skill descriptions rendered from the catalog templates."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Protocol

from autobattle.domain.class_behaviors import behavior_of
from autobattle.domain.classes import (
    PASSIVE_UNLOCK_LEVEL,
    PASSIVE_UPGRADE_LEVEL,
    ULTIMATE_UNLOCK_LEVEL,
    HeroClass,
)
from autobattle.domain.damage import round_half_up
from autobattle.domain.defs import PassiveSkillDef, SkillSetDef, UltimateSkillDef
from autobattle.domain.skill_profile import derive_basic_profile


class SkillOwner(Protocol):
    hero_class: HeroClass
    level: int
    skill_upgrades: Mapping[str, int]


@dataclass(frozen=True, slots=True)
class SkillDescriptions:
    basic: str
    ultimate: str
    passive: str
    ultimate_unlocked: bool
    passive_unlocked: bool


def describe_skills(owner: SkillOwner, skills: SkillSetDef) -> SkillDescriptions:
    """Describe the three skills of a hero or battle unit at its current level and upgrades."""
    return SkillDescriptions(
        basic=describe_basic(owner, skills),
        ultimate=describe_ultimate(owner.hero_class, skills.ultimate, owner.level),
        passive=describe_passive(skills.passive, owner.level),
        ultimate_unlocked=owner.level >= ULTIMATE_UNLOCK_LEVEL,
        passive_unlocked=owner.level >= PASSIVE_UNLOCK_LEVEL,
    )


def describe_basic(owner: SkillOwner, skills: SkillSetDef) -> str:
    basic = skills.basic
    # Passive target bonuses are shown on the passive, not here.
    profile = derive_basic_profile(owner.hero_class, 1, owner.skill_upgrades, skills)
    text = basic.description.format(
        coefficient=_percent(profile.coefficient),
        ignore_defense=_percent(basic.ignore_defense),
        extra_chance=_percent(basic.extra_chance),
        back_row_chance=_percent(profile.back_row_chance),
    )

    behavior = behavior_of(owner.hero_class)
    addons: List[str] = []
    if profile.target_count > 1:
        addons.append(f"Targets +{profile.target_count - 1:.2f}")
    if profile.ignore_def_val > 0:
        addons.append(f"Defense break +{_number(profile.ignore_def_val)}")
    if profile.crit_bonus > 0:
        addons.append(f"Basic crit +{_number(profile.crit_bonus)}%")

    agility = owner.skill_upgrades.get("agility", 0)
    if agility > 0 and behavior.agility is not None:
        chance = round_half_up(agility * basic.upgrade_value("agility"))
        addons.append(f"{chance}% {behavior.agility}")

    duration = owner.skill_upgrades.get("duration", 0)
    upgrade = behavior.duration_effect
    if duration > 0 and upgrade is not None:
        strength = duration * basic.upgrade_value("duration")
        if upgrade.scales_with_coefficient:
            shown = _percent(strength * profile.coefficient)
        else:
            shown = round_half_up(strength)
        label = upgrade.effect_type.replace("_", " ").capitalize()
        addons.append(f"{label} +{shown}%")

    return f"{text} [{', '.join(addons)}]" if addons else text


def describe_ultimate(hero_class: HeroClass, ultimate: UltimateSkillDef, level: int) -> str:
    special = ultimate.special_for(level)
    # def_down specials are already percentages; every other special is a ratio.
    if behavior_of(hero_class).ultimate_on_hit == "def_down":
        shown_special: object = _number(special)
    else:
        shown_special = _percent(special)
    text = ultimate.description.format(
        coefficient=_percent(ultimate.coefficient_for(level)),
        special=shown_special,
    )
    return f"{text} (Cooldown: {ultimate.cooldown} turns)"


def describe_passive(passive: PassiveSkillDef, level: int) -> str:
    upgraded = level >= PASSIVE_UPGRADE_LEVEL
    value = passive.upgraded_value if upgraded else passive.value
    secondary = passive.secondary_value
    if upgraded and passive.upgraded_secondary_value is not None:
        secondary = passive.upgraded_secondary_value
    return passive.description.format(
        value=_number(value),
        secondary_value=_number(secondary) if secondary is not None else "",
    )


def _percent(ratio: float) -> int:
    return round_half_up(ratio * 100)


def _number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"
