"""Orchestration of communication from API models to the game domain and the statistics store (and the reverse direction)."""

import threading
from dataclasses import dataclass
from functools import wraps
from random import Random
from typing import Callable, Optional
from uuid import UUID, uuid4

from loguru import logger

from src.api.models import (
    AdvanceClockRequest,
    GameRequest,
    GameStateResponse,
    MoveView,
    NewGameRequest,
    PieceView,
    PlayerStatisticsView,
    SelectPieceRequest,
    StatisticsResponse,
)
from src.core import config
from src.core.exceptions import GameNotFoundError
from src.core.models import GameSummaryModel, PlayerSummary
from src.core.shared_types import GameMode, TurnPhase
from src.db.repository import StatisticsRepository
from src.ur.ai import AIPlayer
from src.ur.game import Game
from src.ur.game_log import GameLog
from src.ur.moves import Move, current_square
from src.ur.scheduler import Callback, ManualScheduler, Scheduler, TimerScheduler
from src.ur.statistics import GameStatistics

# In AI mode the computer always takes the second seat
AI_SEAT = 1
LOG_TAIL = 20


@dataclass
class GameSession:
    """A live game plus the collaborators listening to it. Lives in memory only."""

    game: Game
    mode: GameMode
    scheduler: Scheduler
    log: GameLog
    statistics: GameStatistics
    ai: dict[int, AIPlayer]
    recorded: bool = False


def create_summary(game: Game, mode: GameMode, stats: GameStatistics) -> GameSummaryModel:
    """Convert a finished Game and its tallies into the record kept by the statistics store."""
    return GameSummaryModel(
        mode=mode,
        winner=game.winner,
        rounds=stats.round,
        moves_played=stats.moves_played,
        players=[
            PlayerSummary(
                name=player.name,
                is_ai=player.is_ai,
                roll_counts=list(stats.data[player.player_id].counts),
                captures=stats.data[player.player_id].captures,
                bonuses=stats.data[player.player_id].bonuses,
                finished_pieces=player.pieces_finished(),
            )
            for player in game.players
        ],
    )


class UrService:
    """
    Orchestration of layers for the game of Ur.

    NOTE: single writer. Every command (and every timer callback when running on the wall clock) holds the same lock,
    so an auto-pass can never interleave with a roll or a confirmation.
    """

    def __init__(
        self,
        repository: StatisticsRepository,
        wall_clock: bool = False,
        auto_pass_delay: float = config.AUTO_PASS_DELAY,
    ) -> None:
        self.repo = repository
        self.wall_clock = wall_clock
        self.auto_pass_delay = auto_pass_delay
        self._sessions: dict[UUID, GameSession] = {}
        self._lock = threading.RLock()

    # -- Commands --
    def create_new_game(self, request: NewGameRequest) -> GameStateResponse:
        """Set up a game and start it straight away."""
        with self._lock:
            ai_players = (AI_SEAT,) if request.mode == GameMode.AI else ()
            scheduler = self._make_scheduler()
            game = Game.new_game(
                player_names=request.player_names,
                ai_players=ai_players,
                rng=Random(request.seed),
                scheduler=scheduler,
                auto_pass_delay=self.auto_pass_delay,
            )
            session = GameSession(
                game=game,
                mode=request.mode,
                scheduler=scheduler,
                log=GameLog(),
                statistics=GameStatistics(game.players),
                ai={seat: AIPlayer(seat, game.board) for seat in ai_players},
            )
            game.events.subscribe(session.log.handle)
            game.events.subscribe(session.statistics.handle)

            game_id = uuid4()
            self._sessions[game_id] = session
            logger.info(f"Created {request.mode} game {game_id}")
            game.start_new_game()
            return self._create_state_response(game_id, session)

    def start_new_game(self, request: GameRequest) -> GameStateResponse:
        """Restart an existing game from scratch (same players, same mode)."""
        with self._lock:
            session = self._fetch_session(request.game_id)
            session.game.start_new_game()
            session.recorded = False
            return self._create_state_response(request.game_id, session)

    def roll(self, request: GameRequest) -> GameStateResponse:
        return self._run(request.game_id, lambda game: game.roll())

    def select_piece(self, request: SelectPieceRequest) -> GameStateResponse:
        return self._run(
            request.game_id,
            lambda game: game.select_piece(request.player_id, request.piece_id),
        )

    def confirm_pending_move(self, request: GameRequest) -> GameStateResponse:
        return self._run(request.game_id, lambda game: game.confirm_pending_move())

    def cancel_pending_move(self, request: GameRequest) -> GameStateResponse:
        return self._run(request.game_id, lambda game: game.cancel_pending_move())

    def play_ai_turn(self, request: GameRequest) -> GameStateResponse:
        """
        Let the computer play while it is the player to move.
        ----

        roll -> choose -> select -> confirm, again after every bonus roll.
        Stops when the turn goes to a human, the game ends, or a roll has to be passed (the pass is left to the clock).
        """
        with self._lock:
            session = self._fetch_session(request.game_id)
            game = session.game
            while (
                not game.is_over
                and game.current_player in session.ai
                and not game.auto_pass_pending
            ):
                if game.phase == TurnPhase.AWAITING_ROLL:
                    game.roll()
                    continue

                ai = session.ai[game.current_player]
                move = ai.choose_move(game.legal_moves())
                if move is None:
                    break
                game.select_piece(move.piece.player_id, move.piece.piece_id)
                game.confirm_pending_move()

            self._record_if_finished(request.game_id, session)
            return self._create_state_response(request.game_id, session)

    def advance_clock(self, request: AdvanceClockRequest) -> GameStateResponse:
        """Move the virtual clock of a game (no effect on wall-clock games, their timers run by themselves)."""
        with self._lock:
            session = self._fetch_session(request.game_id)
            if isinstance(session.scheduler, ManualScheduler):
                session.scheduler.advance(request.seconds)
            return self._create_state_response(request.game_id, session)

    def delete_game(self, request: GameRequest) -> None:
        """Forget a live game."""
        with self._lock:
            session = self._fetch_session(request.game_id)
            session.game.abandon()
            session.game.events.unsubscribe(session.log.handle)
            session.game.events.unsubscribe(session.statistics.handle)
            del self._sessions[request.game_id]

    # -- Queries --
    def get_game_state(self, request: GameRequest) -> GameStateResponse:
        """
        Retrieve current game state.
        ----
        Polled by a frontend to redraw the board and to know whose turn it is.
        """
        with self._lock:
            session = self._fetch_session(request.game_id)
            return self._create_state_response(request.game_id, session)

    def get_statistics(self, request: GameRequest) -> StatisticsResponse:
        with self._lock:
            session = self._fetch_session(request.game_id)
            stats = session.statistics
            return StatisticsResponse(
                game_id=request.game_id,
                round=stats.round,
                starting_player=stats.starting_player,
                players={
                    player_id: PlayerStatisticsView(
                        header=stats.header(player_id),
                        roll_counts=list(entry.counts),
                        roll_percentages=[
                            entry.percentage(successes)
                            for successes in range(len(entry.counts))
                        ],
                        total_rolls=entry.total,
                        captures=entry.captures,
                        bonuses=entry.bonuses,
                        waiting=entry.waiting,
                        home=entry.home,
                        lines=stats.render_lines(player_id),
                    )
                    for player_id, entry in stats.data.items()
                },
            )

    def list_finished_games(self) -> list[GameSummaryModel]:
        return self.repo.list_summaries()

    # -- Internal helpers --
    def _run(self, game_id: UUID, command: Callable[[Game], object]) -> GameStateResponse:
        """Apply one domain command under the lock, then report the new state."""
        with self._lock:
            session = self._fetch_session(game_id)
            command(session.game)
            self._record_if_finished(game_id, session)
            return self._create_state_response(game_id, session)

    def _make_scheduler(self) -> Scheduler:
        if self.wall_clock:
            return TimerScheduler(wrap=self._serialized)
        return ManualScheduler()

    def _serialized(self, callback: Callback) -> Callback:
        @wraps(callback)
        def locked() -> None:
            with self._lock:
                callback()

        return locked

    def _fetch_session(self, game_id: UUID) -> GameSession:
        """Attempt to find the live game and raise error if it fails."""
        session = self._sessions.get(game_id)
        if session is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return session

    def _record_if_finished(self, game_id: UUID, session: GameSession) -> None:
        """Store a summary the first time a game is seen over."""
        if not session.game.is_over or session.recorded:
            return
        summary = create_summary(session.game, session.mode, session.statistics)
        _, summary_id = self.repo.add_summary(summary)
        session.recorded = True
        logger.info(f"Game {game_id} won by player {session.game.winner}, summary {summary_id}")

    def _create_state_response(self, game_id: UUID, session: GameSession) -> GameStateResponse:
        """Convert the live Game into a GameStateResponse."""
        game = session.game
        return GameStateResponse(
            game_id=game_id,
            mode=session.mode,
            players={player.player_id: player.name for player in game.players},
            ai_players=sorted(session.ai),
            phase=game.phase,
            current_player=game.current_player,
            last_roll=game.last_roll,
            last_dice=list(game.last_dice),
            pending_move=self._move_view(game.pending_move),
            pieces=[
                PieceView(
                    player_id=piece.player_id,
                    piece_id=piece.piece_id,
                    location=piece.location,
                    position_index=piece.position_index,
                    square_id=square.id if (square := current_square(piece, game.board)) else None,
                )
                for piece in game.all_pieces()
            ],
            selectable_piece_ids=game.selectable_piece_ids(),
            auto_pass_pending=game.auto_pass_pending,
            winner=game.winner,
            log=session.log.tail(LOG_TAIL),
        )

    def _move_view(self, move: Optional[Move]) -> Optional[MoveView]:
        if move is None:
            return None
        return MoveView(
            player_id=move.piece.player_id,
            piece_id=move.piece.piece_id,
            target_index=move.target_index,
            target_square_id=move.target_square.id if move.target_square else None,
            captures_piece_id=move.captures.piece_id if move.captures else None,
            finishes=move.finishes,
            grants_bonus=move.lands_on_rosetta,
        )
