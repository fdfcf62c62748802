"""UI-agnostic battle controller that separates state progression from pacing."""
from __future__ import annotations

import time
from typing import Callable

from autobattle.domain.battle_models import CombatSession
from autobattle.services.battle_service import BattleService, StepResult

StepCallback = Callable[[StepResult], None]


class BattleController:
    """
    Drives a session to completion on top of BattleService.

    Responsibilities:
    - Step the session until a winner exists
    - Hand every StepResult to an optional observer
    - Wait between steps when a presentation layer wants pacing

    Non-responsibilities (handled by presentation layer):
    - Rendering units, logs or results
    - Deciding the playback speed

    The delay only affects wall-clock time; the sequence of sessions is
    identical for any delay.
    """

    def __init__(
        self,
        battle_service: BattleService,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._service = battle_service
        self._sleep = sleep

    def step(self, session: CombatSession) -> StepResult:
        return self._service.step(session)

    def run(
        self,
        session: CombatSession,
        *,
        delay: float = 0.0,
        on_step: StepCallback | None = None,
    ) -> CombatSession:
        """Step ``session`` until it is over and return the final snapshot."""
        if delay < 0:
            raise ValueError("Delay must not be negative.")
        while not session.is_over:
            result = self._service.step(session)
            session = result.session
            if on_step is not None:
                on_step(result)
            if delay and not session.is_over:
                self._sleep(delay)
        return session
