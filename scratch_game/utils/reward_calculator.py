import logging

from scratch_game.exceptions import InvalidConfigException

logger = logging.getLogger(__name__)


def calculate_reward(wager, applied_combinations, config):
    """
    Sums wager x symbol multiplier x combination multiplier over every applied
    (symbol, combination) entry. Rewards are plain floats in wager units.

    Raises:
        InvalidConfigException: If an applied symbol or combination is not declared.
    """
    symbol_map = config.symbol_map
    combination_map = config.combination_map
    reward = 0.0

    for symbol_name, combination_names in applied_combinations.items():
        symbol = symbol_map.get(symbol_name)
        if symbol is None:
            raise InvalidConfigException(
                f"Applied combinations reference unknown symbol '{symbol_name}'.",
                details={'symbol': symbol_name}
            )
        for combination_name in combination_names:
            combination = combination_map.get(combination_name)
            if combination is None:
                raise InvalidConfigException(
                    f"Applied combinations reference unknown win combination '{combination_name}'.",
                    details={'symbol': symbol_name, 'combination': combination_name}
                )
            reward += wager * symbol.reward_multiplier * combination.reward_multiplier

    logger.debug(f"Reward for wager {wager}: {reward}")
    return reward
