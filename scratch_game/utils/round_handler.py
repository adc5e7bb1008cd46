import logging
import math
import numbers
import random
import secrets
import uuid

from scratch_game.exceptions import InvalidArgumentException
from scratch_game.models import RoundResult
from scratch_game.utils.bonus_resolver import apply_bonus_symbol
from scratch_game.utils.combination_evaluator import check_winning_combinations
from scratch_game.utils.game_config import validate_game_config
from scratch_game.utils.matrix_generator import generate_matrix
from scratch_game.utils.reward_calculator import calculate_reward

logger = logging.getLogger(__name__)


def validate_wager(wager):
    """Rejects anything but a finite, positive number."""
    if isinstance(wager, bool) or not isinstance(wager, numbers.Real):
        raise InvalidArgumentException("Invalid wager. Must be a positive number.", details={'wager': repr(wager)})
    if not math.isfinite(wager) or wager <= 0:
        raise InvalidArgumentException("Invalid wager. Must be a positive number.", details={'wager': wager})


def play_round(config, wager, rng=None, seed=None):
    """
    Plays a single scratch card round.

    Args:
        config (GameConfig): Read-only game configuration, shared safely across rounds.
        wager (int | float): Amount staked on this round.
        rng (random.Random, optional): Random source for this round.
        seed (int, optional): Seed for a fresh random.Random when no rng is given.
                              With neither, a secrets.SystemRandom is used.

    Returns:
        RoundResult: The grid, reward, applied combinations and applied bonus symbol.

    Raises:
        InvalidArgumentException: If the wager is not a positive number.
        InvalidConfigException: If the configuration breaks a structural invariant.
    """
    # --- Pre-Round Validation ---
    validate_wager(wager)
    validate_game_config(config)

    if rng is None:
        rng = random.Random(seed) if seed is not None else secrets.SystemRandom()

    round_id = uuid.uuid4().hex
    log_extra = {'round_id': round_id}

    # --- Generate Grid ---
    grid = generate_matrix(config.rows, config.columns, config.standard_symbols, config.bonus_symbols, rng)

    # --- Evaluate Wins ---
    applied_combinations = check_winning_combinations(grid, config)
    reward = calculate_reward(wager, applied_combinations, config)
    reward, bonus_symbol = apply_bonus_symbol(reward, config)

    logger.info(
        f"Round finished: wager={wager} reward={reward} bonus={bonus_symbol} "
        f"combinations={sum(len(v) for v in applied_combinations.values())}",
        extra=log_extra
    )

    return RoundResult.build(
        grid=grid,
        reward=reward,
        applied_combinations=applied_combinations,
        bonus_symbol=bonus_symbol,
        round_id=round_id,
        wager=wager,
    )
