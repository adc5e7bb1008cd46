import json
import logging
import math
import numbers
import os

from marshmallow import ValidationError

from scratch_game.exceptions import InvalidConfigException
from scratch_game.models import BonusImpact, CombinationType, SymbolType
from scratch_game.schemas import GameConfigSchema

logger = logging.getLogger(__name__)

# Groups whose geometry can be derived from the grid size when covered_areas is omitted
HORIZONTAL_GROUP = 'horizontally_linear_symbols'
VERTICAL_GROUP = 'vertically_linear_symbols'
LTR_DIAGONAL_GROUP = 'ltr_diagonally_linear_symbols'
RTL_DIAGONAL_GROUP = 'rtl_diagonally_linear_symbols'
LINE_GROUPS = (HORIZONTAL_GROUP, VERTICAL_GROUP, LTR_DIAGONAL_GROUP, RTL_DIAGONAL_GROUP)


def load_game_config(file_path):
    """
    Loads a game configuration JSON file and validates its structure.

    Args:
        file_path (str): Path to the configuration document.

    Returns:
        GameConfig: The deserialized and validated configuration.

    Raises:
        FileNotFoundError: If the file does not exist.
        InvalidConfigException: If the JSON is malformed, violates the schema,
                                or breaks a structural invariant.
    """
    if not os.path.exists(file_path):
        logger.error(f"Game configuration file not found at '{file_path}'")
        raise FileNotFoundError(f"Configuration file not found at {file_path}")

    try:
        with open(file_path, 'r') as f:
            raw_config = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"JSON decode error for {file_path}: {e.msg} at line {e.lineno} col {e.colno}")
        raise InvalidConfigException(
            f"Invalid JSON in {file_path}: {e.msg} (line {e.lineno}, col {e.colno})",
            details={'file': file_path}
        )

    try:
        config = GameConfigSchema().load(raw_config)
    except ValidationError as e:
        logger.error(f"Schema validation failed for {file_path}: {e.messages}")
        raise InvalidConfigException(f"Game configuration {file_path} failed schema validation", details=e.messages)

    validate_game_config(config)
    logger.info(f"Loaded game config from {file_path} ({config.rows}x{config.columns}, "
                f"{len(config.symbols)} symbols, {len(config.win_combinations)} win combinations)")
    return config


def resolve_covered_areas(combination, rows, columns):
    """
    Returns the cell paths a line combination is checked against.

    Explicit covered_areas win. Otherwise the areas are derived from a
    well-known group name; an unknown group yields no areas.
    """
    if combination.covered_areas:
        return combination.covered_areas

    if combination.group == HORIZONTAL_GROUP:
        return tuple(tuple((r, c) for c in range(columns)) for r in range(rows))
    if combination.group == VERTICAL_GROUP:
        return tuple(tuple((r, c) for r in range(rows)) for c in range(columns))

    size = min(rows, columns)
    if combination.group == LTR_DIAGONAL_GROUP:
        return (tuple((i, i) for i in range(size)),)
    if combination.group == RTL_DIAGONAL_GROUP:
        return (tuple((i, columns - 1 - i) for i in range(size)),)
    return ()


def is_line_combination(combination):
    """True for combinations checked cell by cell along paths rather than counted anywhere."""
    if combination.when == CombinationType.LINEAR_SYMBOLS:
        return True
    return combination.when == CombinationType.SAME_SYMBOLS and combination.group in LINE_GROUPS


def _fail(message, **details):
    logger.error(f"Invalid game config: {message}")
    raise InvalidConfigException(message, details=details)


def _is_number(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def _is_cell(cell):
    return (
        isinstance(cell, (tuple, list)) and len(cell) == 2
        and all(isinstance(v, int) and not isinstance(v, bool) for v in cell)
    )


def validate_game_config(config):
    """
    Re-checks the structural invariants of an in-memory GameConfig.

    Every failure raises InvalidConfigException naming the offending symbol,
    cell or combination, before anything is generated.
    """
    rows, columns = config.rows, config.columns
    if not isinstance(rows, int) or rows <= 0:
        _fail("rows must be a positive integer.", rows=rows)
    if not isinstance(columns, int) or columns <= 0:
        _fail("columns must be a positive integer.", columns=columns)

    symbol_map = {}
    for symbol in config.symbols:
        if symbol.name in symbol_map:
            _fail(f"Symbol '{symbol.name}' is declared more than once.", symbol=symbol.name)
        symbol_map[symbol.name] = symbol

        if not _is_number(symbol.reward_multiplier) or symbol.reward_multiplier < 0:
            _fail(f"Symbol '{symbol.name}' needs a non-negative reward_multiplier.",
                  symbol=symbol.name, reward_multiplier=symbol.reward_multiplier)
        if symbol.type == SymbolType.STANDARD:
            if symbol.impact != BonusImpact.NONE:
                _fail(f"Standard symbol '{symbol.name}' cannot have impact '{symbol.impact}'.",
                      symbol=symbol.name, impact=symbol.impact)
        elif symbol.type == SymbolType.BONUS:
            if symbol.impact == BonusImpact.EXTRA_BONUS and (not _is_number(symbol.extra) or symbol.extra < 0):
                _fail(f"Bonus symbol '{symbol.name}' needs a non-negative extra amount.",
                      symbol=symbol.name, extra=symbol.extra)
        else:
            _fail(f"Symbol '{symbol.name}' has unknown type '{symbol.type}'.", symbol=symbol.name)
    if not symbol_map:
        _fail("At least one symbol must be declared.")

    # Standard cell weights: one entry per cell, every cell covered
    seen_cells = set()
    for cell in config.standard_symbols:
        coordinate = (cell.row, cell.column)
        if not (0 <= cell.row < rows and 0 <= cell.column < columns):
            _fail(f"Standard symbol weights reference cell {cell.row}:{cell.column} outside a {rows}x{columns} grid.",
                  cell=f"{cell.row}:{cell.column}")
        if coordinate in seen_cells:
            _fail(f"Cell {cell.row}:{cell.column} has more than one weight entry.", cell=f"{cell.row}:{cell.column}")
        seen_cells.add(coordinate)

        has_positive_weight = False
        for symbol_name, weight in cell.symbols.items():
            symbol = symbol_map.get(symbol_name)
            if symbol is None:
                _fail(f"Cell {cell.row}:{cell.column} references unknown symbol '{symbol_name}'.",
                      cell=f"{cell.row}:{cell.column}", symbol=symbol_name)
            if symbol.type != SymbolType.STANDARD:
                _fail(f"Cell {cell.row}:{cell.column} weights non-standard symbol '{symbol_name}'.",
                      cell=f"{cell.row}:{cell.column}", symbol=symbol_name)
            if not isinstance(weight, int) or isinstance(weight, bool) or weight < 0:
                _fail(f"Weight for '{symbol_name}' at cell {cell.row}:{cell.column} must be a non-negative integer.",
                      cell=f"{cell.row}:{cell.column}", symbol=symbol_name, weight=weight)
            if weight > 0:
                has_positive_weight = True
        if not has_positive_weight:
            _fail(f"Cell {cell.row}:{cell.column} has no positive symbol weight.", cell=f"{cell.row}:{cell.column}")

    missing_cells = [f"{r}:{c}" for r in range(rows) for c in range(columns) if (r, c) not in seen_cells]
    if missing_cells:
        _fail(f"No standard symbol weights for cells: {', '.join(missing_cells)}.", cells=missing_cells)

    for symbol_name, count in config.bonus_symbols.items():
        symbol = symbol_map.get(symbol_name)
        if symbol is None:
            _fail(f"Bonus weights reference unknown symbol '{symbol_name}'.", symbol=symbol_name)
        if symbol.type != SymbolType.BONUS:
            _fail(f"Bonus weights reference standard symbol '{symbol_name}'.", symbol=symbol_name)
        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            _fail(f"Bonus count for '{symbol_name}' must be a non-negative integer.", symbol=symbol_name, count=count)

    combination_names = set()
    for combination in config.win_combinations:
        if combination.name in combination_names:
            _fail(f"Win combination '{combination.name}' is declared more than once.", combination=combination.name)
        combination_names.add(combination.name)

        if not _is_number(combination.reward_multiplier) or combination.reward_multiplier < 0:
            _fail(f"Win combination '{combination.name}' needs a non-negative reward_multiplier.",
                  combination=combination.name)

        if combination.when == CombinationType.SAME_SYMBOLS:
            if not isinstance(combination.count, int) or combination.count < 1:
                _fail(f"Win combination '{combination.name}' needs a positive count.", combination=combination.name)
        elif combination.when != CombinationType.LINEAR_SYMBOLS:
            _fail(f"Win combination '{combination.name}' has unknown type '{combination.when}'.",
                  combination=combination.name)

        if is_line_combination(combination):
            _validate_covered_areas(combination, rows, columns)


def _validate_covered_areas(combination, rows, columns):
    areas = resolve_covered_areas(combination, rows, columns)
    if not areas:
        _fail(f"Win combination '{combination.name}' has no covered_areas and group "
              f"'{combination.group}' does not describe one.", combination=combination.name)
    for area in areas:
        if not isinstance(area, (tuple, list)) or not area:
            _fail(f"Win combination '{combination.name}' has an empty or malformed covered area.",
                  combination=combination.name)
        for cell in area:
            if not _is_cell(cell):
                _fail(f"Win combination '{combination.name}' has a malformed cell {cell!r}; expected (row, column).",
                      combination=combination.name, cell=repr(cell))
            row, column = cell
            if not (0 <= row < rows and 0 <= column < columns):
                _fail(f"Win combination '{combination.name}' covers cell {row}:{column} "
                      f"outside a {rows}x{columns} grid.",
                      combination=combination.name, cell=f"{row}:{column}")
