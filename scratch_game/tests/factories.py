from scratch_game.models import (
    BonusImpact, CellWeights, CombinationType, GameConfig, Symbol, SymbolType, WinCombination
)


def uniform_weights(rows, columns, weights):
    """Same weight table on every cell."""
    return tuple(CellWeights(row=r, column=c, symbols=dict(weights)) for r in range(rows) for c in range(columns))


def standard(name, multiplier):
    return Symbol(name=name, reward_multiplier=multiplier, type=SymbolType.STANDARD)


def extra_bonus(name, extra):
    return Symbol(name=name, type=SymbolType.BONUS, impact=BonusImpact.EXTRA_BONUS, extra=extra)


def multiply_bonus(name, multiplier):
    return Symbol(name=name, reward_multiplier=multiplier, type=SymbolType.BONUS, impact=BonusImpact.MULTIPLY_REWARD)


def miss_bonus(name="MISS"):
    return Symbol(name=name, type=SymbolType.BONUS, impact=BonusImpact.MISS)


def linear(name, multiplier, group=None, covered_areas=()):
    return WinCombination(
        name=name,
        reward_multiplier=multiplier,
        when=CombinationType.LINEAR_SYMBOLS,
        group=group,
        covered_areas=tuple(tuple(area) for area in covered_areas),
    )


def same_symbols(name, multiplier, count, group="same_symbols"):
    return WinCombination(
        name=name, reward_multiplier=multiplier, when=CombinationType.SAME_SYMBOLS, count=count, group=group
    )


HORIZONTAL = linear("same_symbols_horizontally", 2, group="horizontally_linear_symbols")
VERTICAL = linear("same_symbols_vertically", 2, group="vertically_linear_symbols")
LTR_DIAGONAL = linear("same_symbols_diagonally_left_to_right", 5, group="ltr_diagonally_linear_symbols")
RTL_DIAGONAL = linear("same_symbols_diagonally_right_to_left", 5, group="rtl_diagonally_linear_symbols")


def make_config(rows=3, columns=3, symbols=None, weights=None, standard_symbols=None,
                bonus_symbols=None, win_combinations=None):
    symbols = symbols if symbols is not None else (standard("A", 1), standard("B", 2))
    if standard_symbols is None:
        standard_symbols = uniform_weights(rows, columns, weights if weights is not None else {"A": 1, "B": 1})
    return GameConfig(
        rows=rows,
        columns=columns,
        symbols=tuple(symbols),
        standard_symbols=tuple(standard_symbols),
        bonus_symbols=dict(bonus_symbols or {}),
        win_combinations=tuple(win_combinations if win_combinations is not None else
                               (HORIZONTAL, VERTICAL, LTR_DIAGONAL, RTL_DIAGONAL)),
    )
