"""
Scratch card outcome engine.
"""

from .exceptions import AppException, InvalidArgumentException, InvalidConfigException
from .models import (
    BonusImpact, CellWeights, CombinationType, GameConfig, RoundResult, Symbol, SymbolType, WinCombination
)
from .utils.game_config import load_game_config, validate_game_config
from .utils.round_handler import play_round

__version__ = "0.1.0"
