from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UiTheme:
    key: str
    window_bg: str
    panel_bg: str
    panel_fg: str
    muted_fg: str
    border: str
    current_card_bg: str
    current_card_border: str
    card_bg: str
    card_border: str
    button_bg: str
    button_fg: str
    primary_button_bg: str
    primary_button_fg: str
    warning_fg: str
    font_heading: tuple[str, int, str]
    font_label: tuple[str, int, str]
    font_small: tuple[str, int, str]


_THEMES: dict[str, UiTheme] = {
    "light": UiTheme(
        key="light",
        window_bg="#F4F7FB",
        panel_bg="#FFFFFF",
        panel_fg="#132337",
        muted_fg="#445468",
        border="#C9D5E2",
        current_card_bg="#FFF4C2",
        current_card_border="#E69F00",
        card_bg="#FFFFFF",
        card_border="#C9D5E2",
        button_bg="#E8EFF8",
        button_fg="#11243A",
        primary_button_bg="#2F7CCB",
        primary_button_fg="#FFFFFF",
        warning_fg="#C62828",
        font_heading=("Segoe UI", 12, "bold"),
        font_label=("Segoe UI", 10, "normal"),
        font_small=("Segoe UI", 9, "normal"),
    ),
    "dark": UiTheme(
        key="dark",
        window_bg="#0F1722",
        panel_bg="#162231",
        panel_fg="#E6EEF7",
        muted_fg="#A5B6C9",
        border="#2D4E6A",
        current_card_bg="#3A3216",
        current_card_border="#FFD166",
        card_bg="#1E2B3A",
        card_border="#2D4E6A",
        button_bg="#22364B",
        button_fg="#E6EEF7",
        primary_button_bg="#3D8BD9",
        primary_button_fg="#FFFFFF",
        warning_fg="#FF8D8D",
        font_heading=("Segoe UI", 12, "bold"),
        font_label=("Segoe UI", 10, "normal"),
        font_small=("Segoe UI", 9, "normal"),
    ),
}

PLAYER_COLORS: dict[str, dict[str, str]] = {
    "light": {"red": "#D32F2F", "blue": "#1565C0", "green": "#2E7D32", "orange": "#EF6C00"},
    "dark": {"red": "#FF6B6B", "blue": "#6DC8FF", "green": "#70DDB7", "orange": "#FFA94D"},
}


def get_theme(theme_key: str) -> UiTheme:
    normalized = str(theme_key).strip().lower()
    return _THEMES.get(normalized, _THEMES["light"])


def available_themes() -> list[str]:
    return list(_THEMES.keys())


def player_color(color_key: str, theme_key: str = "light") -> str:
    palette = PLAYER_COLORS.get(get_theme(theme_key).key, PLAYER_COLORS["light"])
    return palette.get(color_key, "#7A7A7A")
