"""Let the computer play against itself and report who won. Handy to eyeball the rules and the AI ladder."""

import argparse
import os
import sys
from random import Random
from typing import Optional

from loguru import logger

from src.core.shared_types import GameMode, TurnPhase
from src.db.database import SessionLocal
from src.db.repository import StatisticsRepository
from src.db.sql_repository import SQLStatisticsRepository
from src.services.ur_service import create_summary
from src.ur.ai import AIPlayer
from src.ur.game import Game
from src.ur.game_log import GameLog
from src.ur.scheduler import ManualScheduler
from src.ur.statistics import GameStatistics

# a game where both sides keep getting blocked could in theory go on forever
MAX_COMMANDS = 10_000


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate AI vs AI games of Ur")
    parser.add_argument(
        "--games",
        type=int,
        default=int(os.getenv("UR_SIMULATED_GAMES", 1)),
        help="Number of games to play",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the dice (game i uses seed + i)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print the narration of every move",
    )
    return parser.parse_args(argv)


def play_out(game: Game, scheduler: ManualScheduler) -> Optional[int]:
    """Drive a started game with one AIPlayer per seat until somebody wins. Returns the winner."""
    ais = {player.player_id: AIPlayer(player.player_id, game.board) for player in game.players}
    for _ in range(MAX_COMMANDS):
        if game.is_over:
            return game.winner
        if game.auto_pass_pending:
            scheduler.run_pending()
        elif game.phase == TurnPhase.AWAITING_ROLL:
            game.roll()
        else:
            move = ais[game.current_player].choose_move(game.legal_moves())
            if move is None:
                logger.warning(f"No move chosen for player {game.current_player + 1}")
                return None
            game.select_piece(move.piece.player_id, move.piece.piece_id)
            game.confirm_pending_move()
    logger.warning(f"Gave up after {MAX_COMMANDS} commands")
    return None


def simulate(games: int, seed: Optional[int], repository: StatisticsRepository) -> dict[int, int]:
    """Play `games` AI vs AI games, store a summary of each finished one, and return the win count per player."""
    wins = {0: 0, 1: 0}
    for index in range(games):
        scheduler = ManualScheduler()
        rng = Random(None if seed is None else seed + index)
        game = Game.new_game(ai_players=(0, 1), rng=rng, scheduler=scheduler)
        log = GameLog()
        statistics = GameStatistics(game.players)
        game.events.subscribe(log.handle)
        game.events.subscribe(statistics.handle)

        game.start_new_game()
        winner = play_out(game, scheduler)
        label = "nobody"
        if winner is not None:
            wins[winner] += 1
            label = f"Player {winner + 1}"
            repository.add_summary(create_summary(game, GameMode.AI, statistics))
        print(
            f"Game {index + 1}: won by {label}, "
            f"{statistics.round} rounds, {statistics.moves_played} moves"
        )
    return wins


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    logger.remove()
    logger.add(sys.stderr, level="INFO" if args.verbose else "WARNING")

    with SessionLocal() as db:
        repository = SQLStatisticsRepository(db)
        wins = simulate(args.games, args.seed, repository)
        stored = len(repository.list_summaries())

    for player_id, count in wins.items():
        print(f"Player {player_id + 1}: {count} win(s)")
    print(f"Stored {stored} game summaries")


if __name__ == "__main__":
    main()
