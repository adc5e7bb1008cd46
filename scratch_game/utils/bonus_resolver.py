import logging

from scratch_game.models import BonusImpact

logger = logging.getLogger(__name__)


def apply_bonus_symbol(reward, config):
    """
    Resolves at most one bonus symbol for a round.

    A losing round never gets a bonus. Otherwise the first bonus symbol in
    declaration order with an effect is applied: `extra_bonus` adds its flat
    amount, `multiply_reward` is only reported and leaves the reward as is.
    Whether the symbol actually landed on the grid is not checked.

    Returns:
        tuple[float, str | None]: (reward, applied bonus symbol).
    """
    if reward == 0:
        return reward, None

    for symbol in config.bonus_symbols_in_order():
        if symbol.impact == BonusImpact.MULTIPLY_REWARD:
            logger.debug(f"Bonus symbol '{symbol.name}' applied (multiply_reward, reward unchanged)")
            return reward, symbol.name
        if symbol.impact == BonusImpact.EXTRA_BONUS:
            logger.debug(f"Bonus symbol '{symbol.name}' applied (+{symbol.extra})")
            return reward + symbol.extra, symbol.name

    return reward, None
