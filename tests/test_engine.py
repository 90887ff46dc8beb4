import unittest

from catan_hotseat.domain.projection import BoardBounds
from catan_hotseat.game import GameConfig, RuleErrorKind, TurnTimer, new_game


class ManualScheduler:
    """Collects callbacks and fires them only when the test asks."""

    def __init__(self) -> None:
        self.pending: dict[int, object] = {}
        self.delays: list[float] = []
        self._next_handle = 0

    def schedule(self, delay_s, callback):
        self._next_handle += 1
        self.pending[self._next_handle] = callback
        self.delays.append(delay_s)
        return self._next_handle

    def cancel(self, handle) -> None:
        self.pending.pop(handle, None)

    def fire_next(self) -> None:
        handle = min(self.pending)
        callback = self.pending.pop(handle)
        callback()


class TurnTimerTests(unittest.TestCase):
    def test_restart_keeps_one_pending_tick(self) -> None:
        scheduler = ManualScheduler()
        ticks: list[int] = []
        timer = TurnTimer(scheduler, lambda: ticks.append(1), interval_s=1.0)
        timer.restart()
        timer.restart()
        self.assertEqual(len(scheduler.pending), 1)

        scheduler.fire_next()
        self.assertEqual(ticks, [1])
        self.assertEqual(len(scheduler.pending), 1)
        self.assertEqual(scheduler.delays[-1], 1.0)

    def test_restart_inside_tick_is_not_doubled(self) -> None:
        scheduler = ManualScheduler()
        timer = TurnTimer(scheduler, lambda: timer.restart(), interval_s=1.0)
        timer.restart()
        scheduler.fire_next()
        self.assertEqual(len(scheduler.pending), 1)

    def test_cancel_stops_ticks(self) -> None:
        scheduler = ManualScheduler()
        timer = TurnTimer(scheduler, lambda: None)
        timer.restart()
        timer.cancel()
        self.assertFalse(timer.is_pending)
        self.assertFalse(timer.is_running)
        self.assertEqual(scheduler.pending, {})


class GameEngineTests(unittest.TestCase):
    def _engine(self, *, turn_seconds: int = 100, scheduler=None, on_tick=None):
        config = GameConfig(player_count=2, turn_seconds=turn_seconds, seed=17)
        return new_game(config=config, scheduler=scheduler, on_tick=on_tick)

    def test_new_game_reads_back_consistent_snapshots(self) -> None:
        engine = self._engine()
        self.assertEqual(len(engine.tiles), 19)
        self.assertEqual(len(engine.intersections), 54)
        self.assertEqual(len(engine.roads), 72)
        self.assertEqual([player.name for player in engine.players], ["Red", "Blue"])
        self.assertTrue(engine.setup_phase)
        self.assertEqual(engine.time_remaining, 100)
        self.assertFalse(engine.clock_pending)

    def test_same_seed_gives_same_game(self) -> None:
        first = self._engine()
        second = self._engine()
        self.assertEqual(first.current_player_index, second.current_player_index)
        self.assertEqual(
            [(tile.resource, tile.number) for tile in first.tiles],
            [(tile.resource, tile.number) for tile in second.tiles],
        )

    def test_refused_command_reports_and_keeps_state(self) -> None:
        engine = self._engine()
        state_before = engine.state
        result = engine.roll_dice()
        self.assertFalse(result.ok)
        self.assertEqual(result.error, RuleErrorKind.ILLEGAL_STATE)
        self.assertIs(engine.state, state_before)
        self.assertEqual(engine.last_message, "Finish initial placements before rolling the dice.")
        self.assertTrue(engine.event_log[-1].startswith("Refused roll_dice"))

    def test_successful_commands_update_views(self) -> None:
        engine = self._engine()
        player_index = engine.current_player_index
        result = engine.place_settlement(0)
        self.assertTrue(result.ok)
        self.assertEqual(engine.intersections[0].occupant.owner, player_index)
        road_id = engine.state.board.roads_at(0)[0]
        self.assertTrue(engine.place_road(road_id).ok)
        self.assertEqual(engine.roads[road_id].owner, player_index)
        self.assertEqual(engine.players[player_index].roads, 1)
        self.assertTrue(engine.end_turn().ok)
        self.assertEqual(engine.current_player_index, 1 - player_index)

    def test_clock_counts_down_and_expires(self) -> None:
        scheduler = ManualScheduler()
        results = []
        engine = self._engine(turn_seconds=3, scheduler=scheduler, on_tick=results.append)
        self.assertTrue(engine.clock_pending)
        expired = engine.players[engine.current_player_index]

        scheduler.fire_next()
        scheduler.fire_next()
        self.assertEqual(engine.time_remaining, 1)
        scheduler.fire_next()

        self.assertEqual(engine.last_message, f"Time's up for {expired.name}.")
        self.assertNotEqual(engine.current_player_index, expired.index)
        self.assertEqual(engine.time_remaining, 3)
        self.assertEqual(len(results), 3)
        self.assertEqual(len(scheduler.pending), 1)

    def test_end_turn_restarts_clock(self) -> None:
        scheduler = ManualScheduler()
        engine = self._engine(turn_seconds=5, scheduler=scheduler)
        scheduler.fire_next()
        engine.place_settlement(0)
        engine.place_road(engine.state.board.roads_at(0)[0])
        engine.end_turn()
        self.assertEqual(engine.time_remaining, 5)
        self.assertEqual(len(scheduler.pending), 1)

    def test_close_cancels_clock(self) -> None:
        scheduler = ManualScheduler()
        engine = self._engine(scheduler=scheduler)
        engine.close()
        self.assertFalse(engine.clock_pending)
        self.assertEqual(scheduler.pending, {})

    def test_projection_services_center_board(self) -> None:
        engine = self._engine()
        bounds = BoardBounds.for_board(engine.state.board)
        x, y = engine.project(bounds.center, (640.0, 480.0))
        self.assertAlmostEqual(x, 320.0)
        self.assertAlmostEqual(y, 240.0)
        self.assertGreater(engine.scale((640.0, 480.0)), 0.0)


if __name__ == "__main__":
    unittest.main()
