import dataclasses
import os
import random
import unittest
from unittest.mock import patch

from scratch_game.exceptions import InvalidArgumentException, InvalidConfigException
from scratch_game.models import CellWeights
from scratch_game.utils.game_config import load_game_config
from scratch_game.utils.round_handler import play_round
from scratch_game.tests.factories import (
    extra_bonus, linear, make_config, multiply_bonus, same_symbols, standard, uniform_weights
)

TEST_DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'test_data')


class TestPlayRound(unittest.TestCase):

    def setUp(self):
        # Every cell can only be A, so each of the three rows matches
        self.all_a_config = make_config(
            symbols=(standard("A", 1), standard("B", 2)),
            weights={"A": 1},
            win_combinations=(linear("horizontal", 1, group="horizontally_linear_symbols"),),
        )

    def test_uniform_grid_pays_every_row(self):
        result = play_round(self.all_a_config, 10, seed=1)
        self.assertEqual(result.grid, (("A", "A", "A"),) * 3)
        self.assertEqual(dict(result.applied_combinations), {"A": ("horizontal", "horizontal", "horizontal")})
        self.assertEqual(result.reward, 10 * 1 * 1 * 3)
        self.assertIsNone(result.bonus_symbol)
        self.assertEqual(result.wager, 10)
        self.assertIsNotNone(result.round_id)

    def test_extra_bonus_applies_on_winning_round(self):
        config = dataclasses.replace(
            self.all_a_config,
            symbols=(standard("A", 1), standard("B", 2), extra_bonus("+5", 5)),
            bonus_symbols={"+5": 0},
        )
        result = play_round(config, 10, seed=3)
        self.assertEqual(result.reward, 35.0)
        self.assertEqual(result.bonus_symbol, "+5")

    def test_losing_round_has_no_bonus(self):
        config = make_config(
            symbols=(standard("A", 1), standard("B", 2), multiply_bonus("10x", 10)),
            standard_symbols=[
                CellWeights(row=r, column=c, symbols={"A": 1} if (r + c) % 2 == 0 else {"B": 1})
                for r in range(3) for c in range(3)
            ],
            win_combinations=(linear("horizontal", 1, group="horizontally_linear_symbols"),),
        )
        result = play_round(config, 10, seed=3)
        self.assertEqual(result.reward, 0)
        self.assertIsNone(result.bonus_symbol)
        self.assertEqual(dict(result.applied_combinations), {})

    def test_reward_scales_linearly_with_wager(self):
        config = make_config(
            symbols=(standard("A", 1), standard("B", 2)),
            weights={"A": 1, "B": 1},
            win_combinations=(
                linear("horizontal", 1, group="horizontally_linear_symbols"),
                linear("vertical", 3, group="vertically_linear_symbols"),
            ),
        )
        for seed in range(10):
            single = play_round(config, 5, seed=seed)
            double = play_round(config, 10, seed=seed)
            self.assertEqual(single.grid, double.grid)
            self.assertAlmostEqual(double.reward, 2 * single.reward)

    def test_same_seed_reproduces_round(self):
        config = load_game_config(os.path.join(TEST_DATA_DIR, 'config.json'))
        first = play_round(config, 100, seed=2024)
        second = play_round(config, 100, seed=2024)
        self.assertEqual(first.grid, second.grid)
        self.assertEqual(first.reward, second.reward)
        self.assertEqual(dict(first.applied_combinations), dict(second.applied_combinations))
        self.assertNotEqual(first.round_id, second.round_id)

    def test_injected_rng_is_used(self):
        config = load_game_config(os.path.join(TEST_DATA_DIR, 'config.json'))
        first = play_round(config, 100, rng=random.Random(8))
        second = play_round(config, 100, seed=8)
        self.assertEqual(first.grid, second.grid)

    def test_full_config_populates_every_cell(self):
        config = load_game_config(os.path.join(TEST_DATA_DIR, 'config.json'))
        symbol_names = {symbol.name for symbol in config.symbols}
        for seed in range(30):
            result = play_round(config, 100, seed=seed)
            cells = [symbol for row in result.grid for symbol in row]
            self.assertEqual(len(cells), 9)
            self.assertTrue(all(symbol in symbol_names for symbol in cells))
            self.assertGreaterEqual(result.reward, 0)

    @patch('scratch_game.utils.round_handler.secrets.SystemRandom')
    def test_system_random_is_default(self, mock_system_random):
        mock_system_random.return_value = random.Random(0)
        play_round(self.all_a_config, 1)
        mock_system_random.assert_called_once_with()

    @patch('scratch_game.utils.round_handler.generate_matrix')
    def test_invalid_wagers_are_rejected_before_generation(self, mock_generate_matrix):
        for wager in (0, -5, -0.01, float('nan'), float('inf'), True, "100", None):
            with self.assertRaises(InvalidArgumentException):
                play_round(self.all_a_config, wager, seed=1)
        mock_generate_matrix.assert_not_called()

    @patch('scratch_game.utils.round_handler.generate_matrix')
    def test_invalid_config_is_rejected_before_generation(self, mock_generate_matrix):
        config = dataclasses.replace(self.all_a_config, standard_symbols=uniform_weights(3, 3, {"Z": 1}))
        with self.assertRaises(InvalidConfigException) as context:
            play_round(config, 10, seed=1)
        self.assertEqual(context.exception.details["symbol"], "Z")
        mock_generate_matrix.assert_not_called()

    @patch('scratch_game.utils.round_handler.generate_matrix')
    def test_negative_symbol_multiplier_is_rejected_before_generation(self, mock_generate_matrix):
        config = dataclasses.replace(self.all_a_config, symbols=(standard("A", -1), standard("B", 2)))
        with self.assertRaises(InvalidConfigException):
            play_round(config, 10, seed=1)
        mock_generate_matrix.assert_not_called()

    def test_extra_bonus_without_amount_is_rejected(self):
        config = dataclasses.replace(
            self.all_a_config,
            symbols=(standard("A", 1), standard("B", 2), extra_bonus("+5", None)),
            bonus_symbols={"+5": 0},
        )
        with self.assertRaises(InvalidConfigException):
            play_round(config, 10, seed=1)

    def test_malformed_covered_area_is_rejected(self):
        config = dataclasses.replace(
            self.all_a_config, win_combinations=(linear("bent", 1, covered_areas=[[(0, 0, 1)]]),)
        )
        with self.assertRaises(InvalidConfigException) as context:
            play_round(config, 10, seed=1)
        self.assertEqual(context.exception.details["combination"], "bent")

    def test_same_symbols_row_group_pays_every_row(self):
        config = dataclasses.replace(
            self.all_a_config,
            win_combinations=(same_symbols("horizontal", 1, 3, group="horizontally_linear_symbols"),),
        )
        result = play_round(config, 10, seed=1)
        self.assertEqual(dict(result.applied_combinations), {"A": ("horizontal", "horizontal", "horizontal")})
        self.assertEqual(result.reward, 30.0)

    def test_result_is_immutable(self):
        result = play_round(self.all_a_config, 10, seed=1)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            result.reward = 0
        with self.assertRaises(TypeError):
            result.applied_combinations["B"] = ("horizontal",)

    def test_to_dict(self):
        result = play_round(self.all_a_config, 10, seed=1)
        self.assertEqual(result.to_dict(), {
            "matrix": [["A", "A", "A"], ["A", "A", "A"], ["A", "A", "A"]],
            "reward": 30.0,
            "applied_winning_combinations": {"A": ["horizontal", "horizontal", "horizontal"]},
            "applied_bonus_symbol": None,
        })


if __name__ == '__main__':
    unittest.main()
