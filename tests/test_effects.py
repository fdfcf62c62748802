from __future__ import annotations

from autobattle.domain.effects import (
    apply_effect_replacing,
    dot_effects,
    find_effect,
    make_effect,
    tick_effects,
)


def test_make_effect_assigns_unique_ids() -> None:
    first = make_effect("burn", value=0.4, duration=2, applier_id="fire")
    second = make_effect("burn", value=0.4, duration=2, applier_id="fire")

    assert first.id != second.id
    assert first.id.startswith("effect_")


def test_apply_effect_replacing_keeps_other_types_and_order() -> None:
    burn = make_effect("burn", value=0.4, duration=2, applier_id="fire")
    old = make_effect("def_down", value=10, duration=5, applier_id="axe")
    effects = [old, burn]
    new = make_effect("def_down", value=50, duration=99, applier_id="axe")

    apply_effect_replacing(effects, new)

    assert effects == [burn, new]


def test_tick_effects_decrements_and_drops_expired() -> None:
    expiring = make_effect("vulnerability", value=10, duration=1, applier_id="wind")
    lasting = make_effect("charge", value=0.2, duration=3, applier_id="bolt")

    ticked = tick_effects([expiring, lasting])

    assert [effect.id for effect in ticked] == [lasting.id]
    assert ticked[0].duration == 2
    assert lasting.duration == 3


def test_dot_effects_and_find_effect() -> None:
    effects = [
        make_effect("vulnerability", value=10, duration=2, applier_id="wind"),
        make_effect("burn", value=0.4, duration=2, applier_id="fire"),
        make_effect("charge", value=0.2, duration=99, applier_id="bolt"),
    ]

    assert [effect.effect_type for effect in dot_effects(effects)] == ["burn", "charge"]
    assert find_effect(effects, "vulnerability") is effects[0]
    assert find_effect(effects, "stun") is None
