"""
Win combination evaluation.

Lines are checked in a fixed order so the applied combinations of a grid are
always reported the same way: full rows top to bottom, full columns left to
right, the two diagonals, then every other declared path. Row, column and
diagonal groups apply to `same_symbols` combinations too. Each of those keeps
declaration order among combinations of the same kind. "N of a kind"
combinations are checked last.
"""

import logging
from collections import Counter

from scratch_game.models import CombinationType, SymbolType
from scratch_game.utils.game_config import is_line_combination, resolve_covered_areas

logger = logging.getLogger(__name__)

ROW_LINE = 0
COLUMN_LINE = 1
DIAGONAL_LINE = 2
OTHER_LINE = 3


def check_winning_combinations(grid, config):
    """
    Determines which win combinations the grid satisfies, grouped by symbol.

    Args:
        grid (list[list[str]]): The generated grid.
        config (GameConfig): Read-only game configuration.

    Returns:
        dict[str, list[str]]: symbol -> combination ids, in evaluation order. A symbol
                              filling several rows is recorded once per row.
    """
    applied_combinations = {}

    for combination, cells in _ordered_lines(config):
        symbol = _uniform_symbol(grid, cells)
        if symbol is not None:
            _add_winning_combination(symbol, combination.name, applied_combinations)

    count_combinations = [
        c for c in config.win_combinations
        if c.when == CombinationType.SAME_SYMBOLS and not is_line_combination(c)
    ]
    if count_combinations:
        symbol_counts = _count_standard_symbols(grid, config)
        for combination in count_combinations:
            for symbol, count in symbol_counts.items():
                if count >= combination.count:
                    _add_winning_combination(symbol, combination.name, applied_combinations)

    if applied_combinations:
        logger.debug(f"Applied combinations: {applied_combinations}")
    return applied_combinations


def _ordered_lines(config):
    rows, columns = config.rows, config.columns
    row_lines = {tuple((r, c) for c in range(columns)): r for r in range(rows)}
    column_lines = {tuple((r, c) for r in range(rows)): c for c in range(columns)}
    size = min(rows, columns)
    diagonals = {
        tuple((i, i) for i in range(size)),
        tuple((i, columns - 1 - i) for i in range(size)),
    }

    keyed_lines = []
    line_combinations = [c for c in config.win_combinations if is_line_combination(c)]
    for c_idx, combination in enumerate(line_combinations):
        for a_idx, area in enumerate(resolve_covered_areas(combination, rows, columns)):
            cells = tuple(area)
            ordered = tuple(sorted(cells))
            if ordered in row_lines:
                key = (ROW_LINE, row_lines[ordered], c_idx, a_idx)
            elif ordered in column_lines:
                key = (COLUMN_LINE, column_lines[ordered], c_idx, a_idx)
            elif ordered in diagonals:
                key = (DIAGONAL_LINE, c_idx, a_idx, 0)
            else:
                key = (OTHER_LINE, c_idx, a_idx, 0)
            keyed_lines.append((key, combination, cells))

    keyed_lines.sort(key=lambda entry: entry[0])
    return [(combination, cells) for _, combination, cells in keyed_lines]


def _uniform_symbol(grid, cells):
    """Returns the symbol filling every cell, or None if any cell differs or is empty."""
    first_row, first_column = cells[0]
    symbol = grid[first_row][first_column]
    if symbol is None:
        return None
    for row, column in cells[1:]:
        if grid[row][column] != symbol:
            return None
    return symbol


def _count_standard_symbols(grid, config):
    symbol_map = config.symbol_map
    counts = Counter()
    for row in grid:
        for symbol in row:
            if symbol is None:
                continue
            symbol_config = symbol_map.get(symbol)
            if symbol_config is not None and symbol_config.type == SymbolType.STANDARD:
                counts[symbol] += 1
    return counts


def _add_winning_combination(symbol, combination_name, applied_combinations):
    applied_combinations.setdefault(symbol, []).append(combination_name)
