from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from catan_hotseat.domain.projection import DEFAULT_MARGIN_FRACTION

MIN_PLAYERS = 2
MAX_PLAYERS = 4
DEFAULT_TURN_SECONDS = 100


@dataclass(frozen=True)
class GameConfig:
    player_count: int = 4
    turn_seconds: int = DEFAULT_TURN_SECONDS
    tick_interval_s: float = 1.0
    margin_fraction: float = DEFAULT_MARGIN_FRACTION
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.player_count < MIN_PLAYERS or self.player_count > MAX_PLAYERS:
            raise ValueError(f"player_count must be between {MIN_PLAYERS} and {MAX_PLAYERS}.")
        if self.turn_seconds < 1:
            raise ValueError("turn_seconds must be positive.")
        if self.tick_interval_s <= 0:
            raise ValueError("tick_interval_s must be positive.")
        if not 0.0 <= self.margin_fraction < 1.0:
            raise ValueError("margin_fraction must be in [0, 1).")
