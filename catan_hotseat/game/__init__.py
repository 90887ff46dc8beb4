"""Game rules, state and the command engine."""

from .actions import (
    ACTION_CLOCK_TICK,
    ACTION_END_TURN,
    ACTION_PLACE_ROAD,
    ACTION_PLACE_SETTLEMENT,
    ACTION_ROLL_DICE,
    ACTION_UPGRADE_TO_CITY,
    GameAction,
    clock_tick,
    end_turn,
    place_road,
    place_settlement,
    roll_dice,
    upgrade_to_city,
)
from .config import GameConfig
from .engine import GameEngine, new_game
from .errors import CommandResult, GameRuleError, RuleErrorKind
from .rules import (
    CITY_COST,
    ROAD_COST,
    SETTLEMENT_COST,
    apply_action,
    list_legal_actions,
    production_for_roll,
)
from .state import (
    BuildingKind,
    GameState,
    IntersectionView,
    Occupant,
    PlayerState,
    PlayerView,
    ResourceHand,
    RoadView,
    SetupStage,
    initialize_game_state,
)
from .timer import Scheduler, TurnTimer

__all__ = [
    "ACTION_CLOCK_TICK",
    "ACTION_END_TURN",
    "ACTION_PLACE_ROAD",
    "ACTION_PLACE_SETTLEMENT",
    "ACTION_ROLL_DICE",
    "ACTION_UPGRADE_TO_CITY",
    "BuildingKind",
    "CITY_COST",
    "CommandResult",
    "GameAction",
    "GameConfig",
    "GameEngine",
    "GameRuleError",
    "GameState",
    "IntersectionView",
    "Occupant",
    "PlayerState",
    "PlayerView",
    "ROAD_COST",
    "ResourceHand",
    "RoadView",
    "RuleErrorKind",
    "SETTLEMENT_COST",
    "Scheduler",
    "SetupStage",
    "TurnTimer",
    "apply_action",
    "clock_tick",
    "end_turn",
    "initialize_game_state",
    "list_legal_actions",
    "new_game",
    "place_road",
    "place_settlement",
    "production_for_roll",
    "roll_dice",
    "upgrade_to_city",
]
