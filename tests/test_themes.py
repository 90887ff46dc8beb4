import unittest

from catan_hotseat.ui.themes import available_themes, get_theme, player_color


class ThemeTests(unittest.TestCase):
    def test_expected_themes_are_available(self) -> None:
        self.assertEqual(set(available_themes()), {"light", "dark"})

    def test_unknown_theme_falls_back_to_light(self) -> None:
        theme = get_theme("unknown_theme_key")
        self.assertEqual(theme.key, "light")

    def test_player_colors_follow_theme(self) -> None:
        self.assertNotEqual(player_color("red", "light"), player_color("red", "dark"))
        self.assertEqual(player_color("purple"), "#7A7A7A")


if __name__ == "__main__":
    unittest.main()
