def test_import_autobattle_package() -> None:
    import importlib

    module = importlib.import_module("autobattle")
    assert module is not None


def test_import_services_without_side_effects() -> None:
    from autobattle.services import BattleService
    from autobattle.services.controllers import BattleController
    from autobattle.core.rng import RNG

    controller = BattleController(BattleService(RNG(42)))
    assert controller is not None
