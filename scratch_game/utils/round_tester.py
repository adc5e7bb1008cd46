import logging
import random

from scratch_game.utils.game_config import validate_game_config
from scratch_game.utils.round_handler import play_round, validate_wager

logger = logging.getLogger(__name__)


class RoundTester:
    """Plays many rounds against one configuration and collects payout statistics."""

    def __init__(self, game_config, num_rounds, wager, seed=None):
        self.game_config = game_config
        self.num_rounds = num_rounds
        self.wager = wager
        self.seed = seed

        # Statistics to be collected
        self.total_wagered = 0.0
        self.total_returned = 0.0
        self.hit_count = 0
        self.bonus_count = 0
        self.max_win = 0.0
        self.combination_hits = {}
        self.wins_by_multiplier = {}

        # Derived statistics
        self.rtp = 0.0
        self.hit_frequency = 0.0
        self.bonus_frequency = 0.0

    def run(self):
        validate_wager(self.wager)
        if not isinstance(self.num_rounds, int) or self.num_rounds <= 0:
            raise ValueError("num_rounds must be a positive integer.")
        validate_game_config(self.game_config)

        rng = random.Random(self.seed)
        logger.info(f"Simulating {self.num_rounds} rounds at wager {self.wager} (seed={self.seed})")

        for _ in range(self.num_rounds):
            result = play_round(self.game_config, self.wager, rng=rng)
            self._record(result)

        self.calculate_statistics()
        return self

    def _record(self, result):
        self.total_wagered += self.wager
        self.total_returned += result.reward

        if result.reward > 0:
            self.hit_count += 1
        if result.bonus_symbol is not None:
            self.bonus_count += 1
        if result.reward > self.max_win:
            self.max_win = result.reward

        for combinations in result.applied_combinations.values():
            for combination in combinations:
                self.combination_hits[combination] = self.combination_hits.get(combination, 0) + 1

        bucket = self._multiplier_bucket(result.reward / self.wager)
        self.wins_by_multiplier[bucket] = self.wins_by_multiplier.get(bucket, 0) + 1

    @staticmethod
    def _multiplier_bucket(multiplier):
        if multiplier == 0:
            return "0x"
        elif multiplier < 2:
            return "0-2x"
        elif multiplier < 5:
            return "2-5x"
        elif multiplier < 10:
            return "5-10x"
        elif multiplier < 50:
            return "10-50x"
        elif multiplier < 100:
            return "50-100x"
        return "100x+"

    def calculate_statistics(self):
        self.rtp = self.total_returned / self.total_wagered if self.total_wagered > 0 else 0.0
        self.hit_frequency = self.hit_count / self.num_rounds if self.num_rounds > 0 else 0.0
        self.bonus_frequency = self.bonus_count / self.num_rounds if self.num_rounds > 0 else 0.0

    def to_dict(self):
        return {
            "rounds": self.num_rounds,
            "wager": self.wager,
            "seed": self.seed,
            "total_wagered": round(self.total_wagered, 2),
            "total_returned": round(self.total_returned, 2),
            "rtp": round(self.rtp, 4),
            "hit_frequency": round(self.hit_frequency, 4),
            "bonus_frequency": round(self.bonus_frequency, 4),
            "max_win": round(self.max_win, 2),
            "combination_hits": dict(sorted(self.combination_hits.items())),
            "distribution": {k: round(v / self.num_rounds, 4) for k, v in sorted(self.wins_by_multiplier.items())},
        }
