import logging

from scratch_game.exceptions import InvalidConfigException

logger = logging.getLogger(__name__)


def generate_matrix(rows, columns, standard_symbols, bonus_symbols, rng):
    """
    Generates the symbol grid for a round.

    Every cell first receives one standard symbol drawn from that cell's
    weights. Each bonus symbol is then dropped `count` times onto uniformly
    random cells, overwriting whatever is there; later drops may replace
    earlier ones.

    Args:
        rows (int): Grid height.
        columns (int): Grid width.
        standard_symbols (iterable[CellWeights]): Per-cell standard symbol weights.
        bonus_symbols (Mapping[str, int]): Bonus symbol -> number of placements.
        rng (random.Random): Random source; pass a seeded instance for reproducible grids.

    Returns:
        list[list[str]]: A fully populated rows x columns grid.

    Raises:
        InvalidConfigException: If a weight entry lies outside the grid, a cell has
                                no usable weights, or a cell is left without weights.
    """
    weights_by_cell = {}
    for cell in standard_symbols:
        if not (0 <= cell.row < rows and 0 <= cell.column < columns):
            raise InvalidConfigException(
                f"Standard symbol weights reference cell {cell.row}:{cell.column} outside a {rows}x{columns} grid.",
                details={'cell': f"{cell.row}:{cell.column}"}
            )
        weights_by_cell[(cell.row, cell.column)] = cell.symbols

    for r_idx in range(rows):
        for c_idx in range(columns):
            if (r_idx, c_idx) not in weights_by_cell:
                raise InvalidConfigException(
                    f"No standard symbol weights for cell {r_idx}:{c_idx}.",
                    details={'cell': f"{r_idx}:{c_idx}"}
                )

    grid = [[None for _ in range(columns)] for _ in range(rows)]
    for r_idx in range(rows):
        for c_idx in range(columns):
            grid[r_idx][c_idx] = _draw_weighted_symbol(weights_by_cell[(r_idx, c_idx)], rng, r_idx, c_idx)

    for bonus_symbol, count in bonus_symbols.items():
        for _ in range(count):
            r_idx = rng.randrange(rows)
            c_idx = rng.randrange(columns)
            grid[r_idx][c_idx] = bonus_symbol

    logger.debug(f"Generated {rows}x{columns} grid: {grid}")
    return grid


def _draw_weighted_symbol(cell_weights, rng, row, column):
    symbols_for_choice = []
    weights = []
    for symbol, weight in cell_weights.items():
        if weight > 0:
            symbols_for_choice.append(symbol)
            weights.append(weight)

    if not symbols_for_choice:
        raise InvalidConfigException(
            f"Cell {row}:{column} has no symbol with a positive weight.",
            details={'cell': f"{row}:{column}"}
        )
    return rng.choices(symbols_for_choice, weights=weights, k=1)[0]
