from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Sequence

from catan_hotseat.domain.board import PRODUCING_RESOURCES
from catan_hotseat.game.state import PlayerView, SetupStage
from catan_hotseat.ui.themes import UiTheme, get_theme, player_color

_STAGE_HINTS = {
    SetupStage.AWAIT_SETTLEMENT: "Place a free settlement.",
    SetupStage.AWAIT_ROAD: "Place a free road next to it.",
    SetupStage.TURN_DONE: "End your turn.",
}


class PlayerCard(tk.Frame):
    def __init__(self, master: tk.Widget, *, theme: UiTheme) -> None:
        super().__init__(master, bd=1, relief="solid", padx=6, pady=4)
        self._theme = theme
        self.name_var = tk.StringVar(value="")
        self.resources_var = tk.StringVar(value="")
        self.buildings_var = tk.StringVar(value="")
        self.points_var = tk.StringVar(value="")

        self.swatch = tk.Canvas(self, width=12, height=12, highlightthickness=0)
        self.swatch.grid(row=0, column=0, sticky="w")
        self._swatch_item = self.swatch.create_oval(1, 1, 11, 11, fill="#7A7A7A", outline="")
        self._labels = [
            tk.Label(self, textvariable=self.name_var, font=theme.font_heading, anchor="w"),
            tk.Label(self, textvariable=self.resources_var, font=theme.font_small, anchor="w", justify="left"),
            tk.Label(self, textvariable=self.buildings_var, font=theme.font_small, anchor="w"),
            tk.Label(self, textvariable=self.points_var, font=theme.font_small, anchor="w"),
        ]
        self._labels[0].grid(row=0, column=1, sticky="w", padx=(4, 0))
        for row, label in enumerate(self._labels[1:], start=1):
            label.grid(row=row, column=0, columnspan=2, sticky="w")

    def update_player(self, player: PlayerView, *, is_current: bool) -> None:
        self.name_var.set(player.name)
        self.resources_var.set(
            "\n".join(
                f"{resource.display_name}: {player.resource_count(resource)}"
                for resource in PRODUCING_RESOURCES
            )
        )
        self.buildings_var.set(
            f"Settlements: {player.settlements}  Cities: {player.cities}  Roads: {player.roads}"
        )
        self.points_var.set(f"Victory Points: {player.victory_points}")
        self.swatch.itemconfigure(self._swatch_item, fill=player_color(player.color_key, self._theme.key))
        background = self._theme.current_card_bg if is_current else self._theme.card_bg
        border = self._theme.current_card_border if is_current else self._theme.card_border
        self.configure(bg=background, highlightbackground=border, highlightthickness=2 if is_current else 1)
        self.swatch.configure(bg=background)
        for label in self._labels:
            label.configure(bg=background, fg=self._theme.panel_fg)


class PlayersPanel(ttk.LabelFrame):
    def __init__(self, master: tk.Widget, *, theme_key: str = "light") -> None:
        super().__init__(master, text="Players", padding=8)
        self._theme = get_theme(theme_key)
        self._cards: list[PlayerCard] = []

    def update_players(self, players: Sequence[PlayerView], current_index: int) -> None:
        while len(self._cards) < len(players):
            card = PlayerCard(self, theme=self._theme)
            card.pack(side="left", padx=4, fill="y")
            self._cards.append(card)
        for card, player in zip(self._cards, players):
            card.update_player(player, is_current=player.index == current_index)


class TurnControls(ttk.LabelFrame):
    def __init__(
        self,
        master: tk.Widget,
        *,
        on_roll: Callable[[], None],
        on_end_turn: Callable[[], None],
        theme_key: str = "light",
    ) -> None:
        super().__init__(master, text="Turn", padding=8)
        self._theme = get_theme(theme_key)
        self.turn_var = tk.StringVar(value="")
        self.dice_var = tk.StringVar(value="Roll Dice")
        self.clock_var = tk.StringVar(value="")
        self.hint_var = tk.StringVar(value="")
        self.message_var = tk.StringVar(value="")

        ttk.Label(self, textvariable=self.turn_var, font=self._theme.font_heading).grid(
            row=0, column=0, columnspan=3, sticky="w"
        )
        ttk.Button(self, textvariable=self.dice_var, command=on_roll).grid(row=1, column=0, sticky="ew", pady=(6, 0))
        ttk.Button(self, text="End Turn", command=on_end_turn).grid(
            row=1, column=1, sticky="ew", padx=(8, 0), pady=(6, 0)
        )
        ttk.Label(self, textvariable=self.clock_var).grid(row=1, column=2, sticky="e", padx=(12, 0), pady=(6, 0))
        ttk.Label(self, textvariable=self.hint_var, foreground=self._theme.muted_fg).grid(
            row=2, column=0, columnspan=3, sticky="w", pady=(6, 0)
        )
        ttk.Label(self, textvariable=self.message_var, wraplength=520).grid(
            row=3, column=0, columnspan=3, sticky="w", pady=(4, 0)
        )
        self.columnconfigure(2, weight=1)

    def update_turn(
        self,
        *,
        player_name: str,
        setup_phase: bool,
        stage: SetupStage,
        dice_result: int | None,
        time_remaining: int,
        message: str,
    ) -> None:
        phase = "Setup" if setup_phase else "Main phase"
        self.turn_var.set(f"{player_name} to play ({phase})")
        self.dice_var.set("Roll Dice" if dice_result is None else f"Roll Dice (last: {dice_result})")
        self.clock_var.set(f"Time left: {time_remaining}s")
        if setup_phase:
            self.hint_var.set(_STAGE_HINTS[stage])
        else:
            self.hint_var.set("Roll, build, then end your turn. Tap your settlement to upgrade it.")
        self.message_var.set(message)
