"""
Scratch game data model.

Configuration objects are frozen once built and shared read-only by every stage
of a round. Symbols and win combinations keep their declaration order, which
the bonus resolver and the combination evaluator rely on.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple


class SymbolType(str, Enum):
    STANDARD = "standard"
    BONUS = "bonus"


class BonusImpact(str, Enum):
    NONE = "none"
    MISS = "miss"
    MULTIPLY_REWARD = "multiply_reward"
    EXTRA_BONUS = "extra_bonus"


class CombinationType(str, Enum):
    SAME_SYMBOLS = "same_symbols"
    LINEAR_SYMBOLS = "linear_symbols"


Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class Symbol:
    name: str
    reward_multiplier: float = 0.0
    type: SymbolType = SymbolType.STANDARD
    impact: BonusImpact = BonusImpact.NONE
    extra: float = 0.0

    @property
    def is_bonus(self) -> bool:
        return self.type == SymbolType.BONUS


@dataclass(frozen=True)
class CellWeights:
    """Relative weights of the standard symbols that may land on one cell."""
    row: int
    column: int
    symbols: Mapping[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class WinCombination:
    name: str
    reward_multiplier: float
    when: CombinationType
    count: Optional[int] = None
    group: Optional[str] = None
    covered_areas: Tuple[Tuple[Coordinate, ...], ...] = ()


@dataclass(frozen=True)
class GameConfig:
    rows: int
    columns: int
    symbols: Tuple[Symbol, ...]
    standard_symbols: Tuple[CellWeights, ...]
    bonus_symbols: Mapping[str, int]
    win_combinations: Tuple[WinCombination, ...]

    @property
    def symbol_map(self) -> Dict[str, Symbol]:
        return {symbol.name: symbol for symbol in self.symbols}

    @property
    def combination_map(self) -> Dict[str, WinCombination]:
        return {combination.name: combination for combination in self.win_combinations}

    def bonus_symbols_in_order(self):
        return [symbol for symbol in self.symbols if symbol.is_bonus]


@dataclass(frozen=True)
class RoundResult:
    """Outcome of one round, handed to whatever presents it."""
    grid: Tuple[Tuple[str, ...], ...]
    reward: float
    applied_combinations: Mapping[str, Tuple[str, ...]]
    bonus_symbol: Optional[str] = None
    round_id: Optional[str] = None
    wager: float = 0.0

    @classmethod
    def build(cls, grid, reward, applied_combinations, bonus_symbol=None, round_id=None, wager=0.0):
        return cls(
            grid=tuple(tuple(row) for row in grid),
            reward=reward,
            applied_combinations=MappingProxyType(
                {symbol: tuple(combinations) for symbol, combinations in applied_combinations.items()}
            ),
            bonus_symbol=bonus_symbol,
            round_id=round_id,
            wager=wager,
        )

    def to_dict(self) -> dict:
        return {
            "matrix": [list(row) for row in self.grid],
            "reward": self.reward,
            "applied_winning_combinations": {
                symbol: list(combinations) for symbol, combinations in self.applied_combinations.items()
            },
            "applied_bonus_symbol": self.bonus_symbol,
        }
