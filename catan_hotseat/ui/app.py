from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Any, Sequence

from catan_hotseat.game.config import GameConfig
from catan_hotseat.game.engine import GameEngine, new_game
from catan_hotseat.game.errors import CommandResult
from catan_hotseat.game.timer import TickCallback
from catan_hotseat.ui.board_canvas import BoardCanvas
from catan_hotseat.ui.panels import PlayersPanel, TurnControls
from catan_hotseat.ui.themes import UiTheme, get_theme


class TkScheduler:
    """Runs turn-clock ticks through the Tk event loop, on the UI thread."""

    def __init__(self, widget: tk.Misc) -> None:
        self._widget = widget

    def schedule(self, delay_s: float, callback: TickCallback) -> Any:
        return self._widget.after(max(1, int(delay_s * 1000)), callback)

    def cancel(self, handle: Any) -> None:
        self._widget.after_cancel(handle)


class HotseatApp(tk.Tk):
    def __init__(
        self,
        config: GameConfig,
        *,
        player_names: Sequence[str] | None = None,
        theme_key: str = "light",
    ) -> None:
        super().__init__()
        self.title("Catan Hotseat")
        self.geometry("1100x860")
        self.minsize(900, 720)
        self._theme: UiTheme = get_theme(theme_key)
        self.configure(bg=self._theme.window_bg)

        self.engine: GameEngine = new_game(
            config.player_count,
            player_names,
            config=config,
            scheduler=TkScheduler(self),
            on_tick=self._handle_tick,
        )

        self._build_layout(config)
        self.board_canvas.set_board(self.engine.state.board)
        self.refresh()
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def _build_layout(self, config: GameConfig) -> None:
        container = ttk.Frame(self, padding=10)
        container.pack(fill="both", expand=True)

        self.players_panel = PlayersPanel(container, theme_key=self._theme.key)
        self.players_panel.pack(fill="x")

        self.board_canvas = BoardCanvas(
            container,
            on_intersection_clicked=self._handle_intersection_click,
            on_road_clicked=self._handle_road_click,
            margin_fraction=config.margin_fraction,
        )
        self.board_canvas.set_visual_theme(self._theme.key)
        self.board_canvas.pack(fill="both", expand=True, pady=8)

        self.turn_controls = TurnControls(
            container,
            on_roll=lambda: self._run(self.engine.roll_dice()),
            on_end_turn=lambda: self._run(self.engine.end_turn()),
            theme_key=self._theme.key,
        )
        self.turn_controls.pack(fill="x")

    def refresh(self) -> None:
        engine = self.engine
        players = engine.players
        self.players_panel.update_players(players, engine.current_player_index)
        self.board_canvas.set_snapshot(
            intersections=engine.intersections,
            roads=engine.roads,
            players=players,
        )
        self.turn_controls.update_turn(
            player_name=players[engine.current_player_index].name,
            setup_phase=engine.setup_phase,
            stage=engine.setup_stage,
            dice_result=engine.dice_result,
            time_remaining=engine.time_remaining,
            message=engine.last_message,
        )

    def _run(self, _result: CommandResult) -> None:
        self.refresh()

    def _handle_tick(self, _result: CommandResult) -> None:
        self.refresh()

    def _handle_intersection_click(self, intersection_id: int) -> None:
        occupant = self.engine.intersections[intersection_id].occupant
        if (
            occupant is not None
            and occupant.owner == self.engine.current_player_index
            and not occupant.is_city
        ):
            self._run(self.engine.upgrade_to_city(intersection_id))
            return
        self._run(self.engine.place_settlement(intersection_id))

    def _handle_road_click(self, road_id: int) -> None:
        self._run(self.engine.place_road(road_id))

    def _on_close(self) -> None:
        self.engine.close()
        self.destroy()


def run_app(config: GameConfig, *, player_names: Sequence[str] | None = None, theme_key: str = "light") -> None:
    app = HotseatApp(config, player_names=player_names, theme_key=theme_key)
    app.mainloop()
