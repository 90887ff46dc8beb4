from __future__ import annotations

from catan_hotseat.domain.board import Resource

from .actions import (
    ACTION_CLOCK_TICK,
    ACTION_END_TURN,
    ACTION_PLACE_ROAD,
    ACTION_PLACE_SETTLEMENT,
    ACTION_ROLL_DICE,
    ACTION_UPGRADE_TO_CITY,
    GameAction,
    end_turn,
    place_road,
    place_settlement,
    roll_dice,
    upgrade_to_city,
)
from .errors import GameRuleError, RuleErrorKind
from .state import (
    BuildingKind,
    GameState,
    Occupant,
    PlayerState,
    SetupStage,
    setup_complete,
)

ROAD_COST = {
    Resource.WOOD: 1,
    Resource.BRICK: 1,
}
SETTLEMENT_COST = {
    Resource.WOOD: 1,
    Resource.BRICK: 1,
    Resource.WHEAT: 1,
    Resource.SHEEP: 1,
}
CITY_COST = {
    Resource.WHEAT: 2,
    Resource.ORE: 3,
}
ROBBER_ROLL = 7


def _out_of_range(message: str) -> GameRuleError:
    return GameRuleError(RuleErrorKind.OUT_OF_RANGE, message)


def _illegal_state(message: str) -> GameRuleError:
    return GameRuleError(RuleErrorKind.ILLEGAL_STATE, message)


def _rule_violation(message: str) -> GameRuleError:
    return GameRuleError(RuleErrorKind.RULE_VIOLATION, message)


def _insufficient(message: str) -> GameRuleError:
    return GameRuleError(RuleErrorKind.INSUFFICIENT_RESOURCES, message)


def _require_affordable(player: PlayerState, cost: dict[Resource, int], what: str) -> None:
    if not player.hand.can_afford(cost):
        raise _insufficient(f"Not enough resources to {what}.")


def _check_settlement_site(state: GameState, intersection_id: int) -> None:
    if not state.board.has_intersection(intersection_id):
        raise _out_of_range(f"Intersection {intersection_id} does not exist.")
    if state.occupants[intersection_id] is not None:
        raise _rule_violation("That spot is already taken.")
    for neighbor_id in state.board.neighbors(intersection_id):
        if state.occupants[neighbor_id] is not None:
            raise _rule_violation("You must respect the distance rule (no adjacent settlements).")


def _road_touches_player_buildings(state: GameState, player_index: int, road_id: int) -> bool:
    endpoints = state.board.roads[road_id].endpoints
    return any(state.owns_structure_at(player_index, endpoint) for endpoint in endpoints)


def _road_touches_player_network(state: GameState, player_index: int, road_id: int) -> bool:
    if _road_touches_player_buildings(state, player_index, road_id):
        return True
    endpoints = state.board.roads[road_id].endpoints
    return any(state.owns_road_at(player_index, endpoint) for endpoint in endpoints)


def production_for_roll(state: GameState, roll_value: int) -> dict[int, dict[Resource, int]]:
    """Return what each player collects for a roll, keyed by player index."""
    entitlements: dict[int, dict[Resource, int]] = {player.index: {} for player in state.players}
    if roll_value == ROBBER_ROLL:
        return entitlements
    for tile in state.board.tiles_with_number(roll_value):
        if tile.is_desert:
            continue
        for intersection_id in tile.corner_ids:
            occupant = state.occupants[intersection_id]
            if occupant is None:
                continue
            owed = entitlements[occupant.owner]
            owed[tile.resource] = owed.get(tile.resource, 0) + occupant.yield_multiplier
    return entitlements


def is_legal_settlement(state: GameState, intersection_id: int) -> bool:
    try:
        _validate_settlement(state, intersection_id)
    except GameRuleError:
        return False
    return True


def is_legal_road(state: GameState, road_id: int) -> bool:
    try:
        _validate_road(state, road_id)
    except GameRuleError:
        return False
    return True


def is_legal_city(state: GameState, intersection_id: int) -> bool:
    try:
        _validate_city(state, intersection_id)
    except GameRuleError:
        return False
    return True


def list_legal_actions(state: GameState) -> list[GameAction]:
    actions: list[GameAction] = []
    if not state.setup_phase:
        actions.append(roll_dice())
    for intersection in state.board.intersections:
        if is_legal_settlement(state, intersection.id):
            actions.append(place_settlement(intersection.id))
        elif is_legal_city(state, intersection.id):
            actions.append(upgrade_to_city(intersection.id))
    for road in state.board.roads:
        if is_legal_road(state, road.id):
            actions.append(place_road(road.id))
    if not state.setup_phase or state.current_stage is SetupStage.TURN_DONE:
        actions.append(end_turn())
    return actions


def _validate_settlement(state: GameState, intersection_id: int) -> None:
    _check_settlement_site(state, intersection_id)
    player = state.current_player
    if state.setup_phase:
        stage = state.current_stage
        if stage is SetupStage.AWAIT_ROAD:
            raise _illegal_state("Place your road before another settlement.")
        if stage is SetupStage.TURN_DONE:
            raise _illegal_state("You have already placed this turn's settlement and road.")
        return
    _require_affordable(player, SETTLEMENT_COST, "build a settlement")
    if not state.owns_road_at(player.index, intersection_id):
        raise _rule_violation("Settlement must connect to your road.")


def _validate_city(state: GameState, intersection_id: int) -> Occupant:
    if not state.board.has_intersection(intersection_id):
        raise _out_of_range(f"Intersection {intersection_id} does not exist.")
    occupant = state.occupants[intersection_id]
    if occupant is None:
        raise _rule_violation("No settlement exists here to upgrade.")
    if occupant.is_city:
        raise _rule_violation("This settlement is already a city.")
    player = state.current_player
    if occupant.owner != player.index:
        raise _rule_violation("Only the owner of this settlement can upgrade it.")
    _require_affordable(player, CITY_COST, "upgrade to a city")
    return occupant


def _validate_road(state: GameState, road_id: int) -> None:
    if not state.board.has_road(road_id):
        raise _out_of_range(f"Road {road_id} does not exist.")
    if state.road_owners[road_id] is not None:
        raise _rule_violation("That road has already been built.")
    player = state.current_player
    if state.setup_phase:
        if state.current_stage is not SetupStage.AWAIT_ROAD:
            raise _illegal_state("Place a settlement first.")
        if not _road_touches_player_network(state, player.index, road_id):
            raise _rule_violation("Initial road must connect to your settlement or road.")
        return
    # A player with no roads at all may start a network anywhere.
    has_no_roads = not state.owned_road_ids(player.index)
    if not has_no_roads and not _road_touches_player_network(state, player.index, road_id):
        raise _rule_violation("Road must connect to your existing road or settlement.")
    _require_affordable(player, ROAD_COST, "build a road")


def _apply_roll(state: GameState, data: dict) -> None:
    if state.setup_phase:
        raise _illegal_state("Finish initial placements before rolling the dice.")
    value = data.get("value")
    if value is None:
        roll_value = int(state.roll_die() + state.roll_die())
    else:
        roll_value = int(value)
        if roll_value < 2 or roll_value > 12:
            raise _out_of_range("Dice roll must be in [2, 12].")
    player = state.current_player
    state.dice_result = roll_value
    if roll_value == ROBBER_ROLL:
        state.last_message = f"{player.name} rolled a 7. The robber is not handled; no production this turn."
        state.record_event(state.last_message)
        return

    for player_index, owed in production_for_roll(state, roll_value).items():
        if not owed:
            continue
        receiver = state.players[player_index]
        for resource, amount in owed.items():
            receiver.hand.add(resource, amount)
        gains = ", ".join(f"{amount} {resource.value}" for resource, amount in owed.items())
        state.record_event(f"{receiver.name} collected {gains}.")
    state.last_message = f"{player.name} rolled a {roll_value}."
    state.record_event(state.last_message)


def _apply_settlement(state: GameState, data: dict) -> None:
    intersection_id = int(data["intersection_id"])
    _validate_settlement(state, intersection_id)
    player = state.current_player
    if not state.setup_phase:
        player.hand.spend(SETTLEMENT_COST)
    state.occupants[intersection_id] = Occupant(kind=BuildingKind.SETTLEMENT, owner=player.index)
    player.settlements += 1
    player.victory_points += 1
    if state.setup_phase:
        state.setup_stages[player.index] = SetupStage.AWAIT_ROAD
        verb = "placed an initial"
    else:
        verb = "built a"
    state.last_message = f"{player.name} {verb} settlement."
    state.record_event(f"{player.name} {verb} settlement at I{intersection_id}.")


def _apply_city(state: GameState, data: dict) -> None:
    intersection_id = int(data["intersection_id"])
    _validate_city(state, intersection_id)
    player = state.current_player
    player.hand.spend(CITY_COST)
    state.occupants[intersection_id] = Occupant(kind=BuildingKind.CITY, owner=player.index)
    player.cities += 1
    # The settlement point is already counted; a city adds one more.
    player.victory_points += 1
    state.last_message = f"{player.name} upgraded to a city."
    state.record_event(f"{player.name} upgraded I{intersection_id} to a city.")


def _apply_road(state: GameState, data: dict) -> None:
    road_id = int(data["road_id"])
    _validate_road(state, road_id)
    player = state.current_player
    if not state.setup_phase:
        player.hand.spend(ROAD_COST)
    state.road_owners[road_id] = player.index
    player.roads += 1
    if state.setup_phase:
        state.setup_pairs_built[player.index] += 1
        state.setup_stages[player.index] = SetupStage.TURN_DONE
        verb = "placed an initial"
    else:
        verb = "built a"
    state.last_message = f"{player.name} {verb} road."
    first, second = state.board.roads[road_id].endpoints
    state.record_event(f"{player.name} {verb} road R{road_id} ({first}-{second}).")


def _advance_player(state: GameState, message: str | None = None) -> None:
    if state.setup_phase and setup_complete(state.setup_pairs_built):
        state.setup_phase = False
        state.record_event("Setup complete.")
    state.current_player_index = (state.current_player_index + 1) % state.player_count
    state.setup_stages[state.current_player_index] = (
        SetupStage.AWAIT_SETTLEMENT if state.setup_phase else SetupStage.TURN_DONE
    )
    state.time_remaining = state.turn_seconds
    state.turn_number += 1
    next_player = state.current_player
    state.last_message = message or f"{next_player.name}'s turn."
    state.record_event(f"Turn {state.turn_number} start ({next_player.name}).")


def _apply_end_turn(state: GameState, data: dict) -> None:
    if state.setup_phase and state.current_stage is not SetupStage.TURN_DONE:
        raise _illegal_state("Place a settlement and road before ending your turn.")
    _advance_player(state)


def _apply_clock_tick(state: GameState, data: dict) -> None:
    if state.time_remaining > 0:
        state.time_remaining -= 1
    if state.time_remaining > 0:
        return
    expired = state.current_player
    _advance_player(state, f"Time's up for {expired.name}.")


_HANDLERS = {
    ACTION_ROLL_DICE: _apply_roll,
    ACTION_PLACE_SETTLEMENT: _apply_settlement,
    ACTION_UPGRADE_TO_CITY: _apply_city,
    ACTION_PLACE_ROAD: _apply_road,
    ACTION_END_TURN: _apply_end_turn,
    ACTION_CLOCK_TICK: _apply_clock_tick,
}


def apply_action(state: GameState, action: GameAction) -> GameState:
    """Apply one command to a copy of ``state`` and return the copy.

    Raises GameRuleError when the command is refused; ``state`` itself is
    never modified, so a refused command leaves nothing half-applied.
    """
    handler = _HANDLERS.get(action.kind)
    if handler is None:
        raise ValueError(f"Unsupported action kind: {action.kind}")
    next_state = state.clone()
    handler(next_state, action.data)
    return next_state
