"""
Runtime configuration, validated once at import time.
"""
from scratch_game.config_validator import validate_runtime_config


class Config:
    """Settings taken from the SCRATCH_* environment variables."""

    _validated_config = validate_runtime_config()

    TESTING = False

    # Logging
    LOG_LEVEL = _validated_config['LOG_LEVEL']
    LOG_FORMAT = _validated_config['LOG_FORMAT']

    # Randomness - None means a secrets.SystemRandom per round
    RNG_SEED = _validated_config['RNG_SEED']

    # Simulation defaults
    SIMULATION_ROUNDS = _validated_config['SIMULATION_ROUNDS']

    # Default game configuration document
    GAME_CONFIG_PATH = _validated_config['GAME_CONFIG_PATH']


class TestingConfig(Config):
    TESTING = True
    LOG_LEVEL = 'DEBUG'
    LOG_FORMAT = 'text'
    RNG_SEED = 42
    SIMULATION_ROUNDS = 200
