"""
Runtime settings validation.

Settings come from environment variables (optionally a .env file). Invalid
values fail fast before any round is played; questionable ones are reported
as warnings.
"""

import logging
import os
import sys
import warnings
from typing import List, Optional

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
LOG_FORMATS = ('json', 'text')
DEFAULT_SIMULATION_ROUNDS = 10000


class ConfigValidationError(Exception):
    """Raised when runtime settings are missing or invalid."""
    pass


class ConfigValidator:
    """Validates runtime settings taken from the environment."""

    def __init__(self, environ=None):
        self.environ = environ if environ is not None else os.environ
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def validate_log_level(self) -> str:
        level = self.environ.get('SCRATCH_LOG_LEVEL', 'INFO').strip().upper()
        if level not in LOG_LEVELS:
            self.errors.append(f"SCRATCH_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)} (got '{level}')")
            return 'INFO'
        return level

    def validate_log_format(self) -> str:
        log_format = self.environ.get('SCRATCH_LOG_FORMAT', 'json').strip().lower()
        if log_format not in LOG_FORMATS:
            self.errors.append(f"SCRATCH_LOG_FORMAT must be one of {', '.join(LOG_FORMATS)} (got '{log_format}')")
            return 'json'
        return log_format

    def validate_rng_seed(self) -> Optional[int]:
        raw_seed = self.environ.get('SCRATCH_RNG_SEED')
        if raw_seed is None or not raw_seed.strip():
            return None
        try:
            seed = int(raw_seed)
        except ValueError:
            self.errors.append(f"SCRATCH_RNG_SEED must be an integer (got '{raw_seed}')")
            return None
        self.warnings.append(
            "SCRATCH_RNG_SEED is set - every round is deterministic. Unset it outside of testing."
        )
        return seed

    def validate_simulation_rounds(self) -> int:
        raw_rounds = self.environ.get('SCRATCH_SIMULATION_ROUNDS')
        if raw_rounds is None or not raw_rounds.strip():
            return DEFAULT_SIMULATION_ROUNDS
        try:
            rounds = int(raw_rounds)
        except ValueError:
            self.errors.append(f"SCRATCH_SIMULATION_ROUNDS must be an integer (got '{raw_rounds}')")
            return DEFAULT_SIMULATION_ROUNDS
        if rounds <= 0:
            self.errors.append("SCRATCH_SIMULATION_ROUNDS must be positive")
            return DEFAULT_SIMULATION_ROUNDS
        return rounds

    def validate_game_config_path(self) -> Optional[str]:
        path = self.environ.get('SCRATCH_GAME_CONFIG')
        if not path:
            return None
        if not os.path.isfile(path):
            self.warnings.append(f"SCRATCH_GAME_CONFIG points to a missing file: {path}")
        return path

    def validate_all(self) -> dict:
        """
        Validate all runtime settings.

        Returns:
            Dictionary containing validated configuration values

        Raises:
            ConfigValidationError: If any setting is invalid
        """
        config = {
            'LOG_LEVEL': self.validate_log_level(),
            'LOG_FORMAT': self.validate_log_format(),
            'RNG_SEED': self.validate_rng_seed(),
            'SIMULATION_ROUNDS': self.validate_simulation_rounds(),
            'GAME_CONFIG_PATH': self.validate_game_config_path(),
        }

        if self.errors:
            error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {error}" for error in self.errors)
            if self.warnings:
                error_msg += "\n\nWarnings:\n" + "\n".join(f"  - {warning}" for warning in self.warnings)
            raise ConfigValidationError(error_msg)

        for warning in self.warnings:
            warnings.warn(warning, UserWarning)

        return config


def validate_runtime_config() -> dict:
    """
    Validate runtime settings with fail-fast behavior.

    Raises:
        SystemExit: If validation fails
    """
    try:
        return ConfigValidator().validate_all()
    except ConfigValidationError as e:
        logging.getLogger(__name__).critical(str(e))
        print(f"\n{e}\n", file=sys.stderr)
        print("Fix the SCRATCH_* environment variables (or your .env file) and retry.", file=sys.stderr)
        sys.exit(1)
