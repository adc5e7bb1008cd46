"""
Scratch Game CLI

Plays single rounds or simulates many of them against a game configuration.

Usage:
    scratch-game --help
    scratch-game play 100 --config config.json
    scratch-game play 100 --config config.json --seed 7
    scratch-game simulate 1 --config config.json --rounds 50000
"""

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

import json

import click

from scratch_game.config import Config
from scratch_game.exceptions import AppException
from scratch_game.logging_config import configure_logging
from scratch_game.utils.game_config import load_game_config
from scratch_game.utils.round_handler import play_round
from scratch_game.utils.round_tester import RoundTester


def _load_config_or_exit(ctx, config_path):
    if not config_path:
        click.echo("Error: no game configuration given. Use --config or set SCRATCH_GAME_CONFIG.", err=True)
        ctx.exit(2)
    try:
        return load_game_config(config_path)
    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    except AppException as e:
        _report_app_exception(ctx, e)


def _report_app_exception(ctx, error):
    click.echo(f"Error [{error.error_code}]: {error.status_message}", err=True)
    if error.details:
        click.echo(json.dumps(error.details, indent=2, default=str), err=True)
    ctx.exit(error.exit_code)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, verbose):
    """Scratch Game - single-round scratch card engine."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose

    configure_logging(Config, level='DEBUG' if verbose else None)


@cli.command()
@click.argument('bet', type=float)
@click.option('--config', '-c', 'config_path', default=lambda: Config.GAME_CONFIG_PATH,
              type=click.Path(dir_okay=False), help='Game configuration JSON file')
@click.option('--seed', type=int, default=lambda: Config.RNG_SEED, help='Seed for a reproducible round')
@click.pass_context
def play(ctx, bet, config_path, seed):
    """Play one round and print the result as JSON."""
    game_config = _load_config_or_exit(ctx, config_path)
    try:
        result = play_round(game_config, bet, seed=seed)
    except AppException as e:
        _report_app_exception(ctx, e)
        return

    click.echo(json.dumps(result.to_dict(), indent=2))


@cli.command()
@click.argument('bet', type=float)
@click.option('--config', '-c', 'config_path', default=lambda: Config.GAME_CONFIG_PATH,
              type=click.Path(dir_okay=False), help='Game configuration JSON file')
@click.option('--rounds', '-n', type=int, default=lambda: Config.SIMULATION_ROUNDS, help='Number of rounds to play')
@click.option('--seed', type=int, default=lambda: Config.RNG_SEED, help='Seed for a reproducible simulation')
@click.pass_context
def simulate(ctx, bet, config_path, rounds, seed):
    """Play many rounds and print payout statistics as JSON."""
    game_config = _load_config_or_exit(ctx, config_path)
    try:
        tester = RoundTester(game_config, rounds, bet, seed=seed).run()
    except AppException as e:
        _report_app_exception(ctx, e)
        return
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(2)
        return

    click.echo(json.dumps(tester.to_dict(), indent=2))


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
