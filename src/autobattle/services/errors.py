"""Service-layer exceptions."""


class FactoryError(Exception):
    """Raised when a hero or battle unit cannot be created."""


class BattleSetupError(Exception):
    """Raised when a battle is started with an unusable roster."""


class StageLockedError(Exception):
    """Raised when an encounter is requested for a stage that is not unlocked yet."""
