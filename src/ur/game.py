"""
The Game class is the entrypoint into the domain layer for the service layer.
It is the turn state machine: it orchestrates roll -> select -> confirm/cancel -> bonus roll / next turn / game over,
and it is the only place where pieces get moved.

Every mutation goes through one of the public commands (plus the scheduled auto-pass).
Commands issued at the wrong moment are no-ops: they return None / False and leave the state untouched.
"""

from dataclasses import dataclass, field
from random import Random
from typing import Optional, Self, Sequence

from loguru import logger

from src.core import config
from src.core.shared_types import TurnPhase
from src.ur.board import PLAYER_IDS, Board
from src.ur.dice import Dice, DiceRoll
from src.ur.events import (
    DiceRolled,
    EventBus,
    GameStarted,
    GameWon,
    MoveConfirmed,
    TurnPassed,
    TurnStarted,
)
from src.ur.moves import Move, evaluate_move, has_any_legal_move, legal_moves
from src.ur.pieces import Piece, Player
from src.ur.scheduler import ManualScheduler, ScheduledAction, Scheduler

NO_SUCCESSES_MESSAGE = "No moves available, passing turn"
NO_VALID_MOVES_MESSAGE = "No valid moves, passing turn"


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    players: list[Player]
    dice: Dice
    scheduler: Scheduler
    events: EventBus = field(default_factory=EventBus)
    auto_pass_delay: float = config.AUTO_PASS_DELAY

    phase: TurnPhase = TurnPhase.NOT_STARTED
    current_player: int = 0
    last_roll: Optional[int] = None
    last_dice: tuple[int, ...] = ()
    pending_move: Optional[Move] = None
    winner: Optional[int] = None
    # bumped by every state change; a scheduled auto-pass only fires if the generation it saw is still current
    generation: int = 0
    _scheduled_pass: Optional[ScheduledAction] = field(default=None, init=False, repr=False)

    @classmethod
    def new_game(
        cls,
        player_names: Sequence[str] = (),
        ai_players: Sequence[int] = (),
        rng: Optional[Random] = None,
        scheduler: Optional[Scheduler] = None,
        auto_pass_delay: float = config.AUTO_PASS_DELAY,
        board: Optional[Board] = None,
    ) -> Self:
        """A game on the standard board, not started yet. Call `start_new_game` to begin."""
        names = list(player_names)
        players = [
            Player(
                player_id=player_id,
                name=names[player_id] if player_id < len(names) else "",
                is_ai=player_id in ai_players,
            )
            for player_id in PLAYER_IDS
        ]
        return cls(
            board=board or Board.standard(),
            players=players,
            dice=Dice(rng),
            scheduler=scheduler or ManualScheduler(),
            auto_pass_delay=auto_pass_delay,
        )

    # --- QUERIES ---
    @property
    def active_player(self) -> Player:
        return self.players[self.current_player]

    @property
    def is_over(self) -> bool:
        return self.phase == TurnPhase.GAME_OVER

    @property
    def auto_pass_pending(self) -> bool:
        return self._scheduled_pass is not None and not self._scheduled_pass.cancelled

    def all_pieces(self) -> list[Piece]:
        return [piece for player in self.players for piece in player.pieces]

    def player(self, player_id: int) -> Optional[Player]:
        return next((p for p in self.players if p.player_id == player_id), None)

    def evaluate(self, piece: Piece, steps: int) -> Optional[Move]:
        """Speculative: what would moving this piece by `steps` do? Never changes anything."""
        return evaluate_move(piece, steps, self.board, self.all_pieces())

    def legal_moves(self) -> list[Move]:
        """Legal moves of the player to move for the current roll (empty when no roll is pending)."""
        if self.last_roll is None or self.phase not in (
            TurnPhase.AWAITING_SELECTION,
            TurnPhase.AWAITING_CONFIRMATION,
        ):
            return []
        return legal_moves(self.active_player, self.last_roll, self.board, self.all_pieces())

    def selectable_piece_ids(self) -> list[int]:
        """Pieces worth highlighting: the ones that can legally move right now."""
        if self.phase != TurnPhase.AWAITING_SELECTION or self.auto_pass_pending:
            return []
        return [move.piece.piece_id for move in self.legal_moves()]

    # --- COMMANDS ---
    def start_new_game(self) -> None:
        """Reset everything. Any auto-pass still waiting from an earlier game is discarded."""
        self._cancel_scheduled_pass()
        for player in self.players:
            player.reset()
        self.current_player = 0
        self.pending_move = None
        self.last_roll = None
        self.last_dice = ()
        self.winner = None
        self._change_phase(TurnPhase.AWAITING_ROLL)
        self.events.publish(GameStarted(starting_player=self.current_player))
        self.events.publish(TurnStarted(player_id=self.current_player))

    def roll(self) -> Optional[DiceRoll]:
        """
        Roll the four dice for the player to move.
        ----

        1. only allowed while waiting for a roll
        2. record the number of successes as the step count for this turn
        3. nothing to move (0 successes, or every piece blocked) --> schedule the auto-pass
        4. otherwise wait for the player to pick a piece
        """
        if self.phase != TurnPhase.AWAITING_ROLL:
            logger.debug(f"Ignoring roll during {self.phase}")
            return None

        result = self.dice.roll()
        self.last_roll = result.successes
        self.last_dice = result.rolls
        self.pending_move = None
        self._change_phase(TurnPhase.AWAITING_SELECTION)
        self.events.publish(
            DiceRolled(
                player_id=self.current_player,
                rolls=result.rolls,
                successes=result.successes,
            )
        )

        if result.successes == 0:
            self._schedule_auto_pass(NO_SUCCESSES_MESSAGE)
        elif not self._has_any_legal_move():
            self._schedule_auto_pass(NO_VALID_MOVES_MESSAGE)
        return result

    def select_piece(self, player_id: int, piece_id: int) -> Optional[Move]:
        """
        The player to move designates a piece.
        Returns the pending move awaiting confirmation, or None when the piece cannot move with this roll.
        """
        if self.phase != TurnPhase.AWAITING_SELECTION or self.auto_pass_pending:
            return None
        if player_id != self.current_player or self.last_roll is None:
            return None

        piece = self.active_player.piece(piece_id)
        if piece is None:
            return None

        move = self.evaluate(piece, self.last_roll)
        if move is None:
            logger.debug(f"{piece} cannot move {self.last_roll}")
            if not self._has_any_legal_move():
                self._schedule_auto_pass(NO_VALID_MOVES_MESSAGE)
            return None

        self.pending_move = move
        self._change_phase(TurnPhase.AWAITING_CONFIRMATION)
        return move

    def cancel_pending_move(self) -> bool:
        """Drop the pending move. The roll is kept, so another piece can be picked."""
        if self.phase != TurnPhase.AWAITING_CONFIRMATION:
            return False
        self.pending_move = None
        self._change_phase(TurnPhase.AWAITING_SELECTION)
        return True

    def confirm_pending_move(self) -> Optional[Move]:
        """
        Apply the pending move
        -----

        1. a captured piece goes back to its owner's hand
        2. the moving piece either finishes or advances to its target index
        3. all pieces finished --> game over
        4. landed on a rosetta --> bonus roll for the same player
        5. otherwise --> the other player's turn
        """
        if self.phase != TurnPhase.AWAITING_CONFIRMATION or self.pending_move is None:
            return None

        move = self.pending_move
        self._apply_move(move)
        bonus = move.lands_on_rosetta
        player = self.active_player

        self.events.publish(
            MoveConfirmed(
                player_id=player.player_id,
                piece_id=move.piece.piece_id,
                target_square_id=move.target_square.id if move.target_square else None,
                captured_piece_id=move.captures.piece_id if move.captures else None,
                finished=move.finishes,
                bonus=bonus,
            )
        )

        if player.all_finished():
            self._end_game(player.player_id)
        elif bonus:
            self._grant_bonus_roll()
        else:
            self._advance_turn()
        return move

    def abandon(self) -> None:
        """The host is dropping this game: make sure nothing scheduled fires against it any more."""
        self._cancel_scheduled_pass()
        self.generation += 1

    # -- PRIVATE HELPERS ---
    def _has_any_legal_move(self) -> bool:
        if self.last_roll is None:
            return False
        return has_any_legal_move(
            self.active_player, self.last_roll, self.board, self.all_pieces()
        )

    def _apply_move(self, move: Move) -> None:
        if move.captures is not None:
            move.captures.reset()
        if move.finishes:
            move.piece.finish()
        else:
            move.piece.position_index = move.target_index

    def _clear_turn(self) -> None:
        self._cancel_scheduled_pass()
        self.pending_move = None
        self.last_roll = None
        self.last_dice = ()

    def _grant_bonus_roll(self) -> None:
        self._clear_turn()
        self._change_phase(TurnPhase.AWAITING_ROLL)
        self.events.publish(TurnStarted(player_id=self.current_player, bonus=True))

    def _advance_turn(self) -> None:
        self._clear_turn()
        self.current_player = 1 if self.current_player == 0 else 0
        self._change_phase(TurnPhase.AWAITING_ROLL)
        self.events.publish(TurnStarted(player_id=self.current_player))

    def _end_game(self, winner: int) -> None:
        self._clear_turn()
        self.winner = winner
        self._change_phase(TurnPhase.GAME_OVER)
        self.events.publish(GameWon(player_id=winner))

    def _change_phase(self, new_phase: TurnPhase) -> None:
        logger.debug(f"Player {self.current_player + 1}: {self.phase} -> {new_phase}")
        self.phase = new_phase
        self.generation += 1

    # --- AUTO-PASS ---
    def _schedule_auto_pass(self, reason: str) -> None:
        """Pass the turn after a short delay. Only one pass can be waiting at any time."""
        self._cancel_scheduled_pass()
        self.pending_move = None
        self.events.publish(TurnPassed(player_id=self.current_player, reason=reason))
        generation = self.generation
        self._scheduled_pass = self.scheduler.call_later(
            self.auto_pass_delay, lambda: self._auto_pass(generation)
        )

    def _auto_pass(self, generation: int) -> None:
        if generation != self.generation or self.is_over:
            logger.debug(f"Discarding stale auto-pass (generation {generation}, now {self.generation})")
            return
        self._scheduled_pass = None
        self._advance_turn()

    def _cancel_scheduled_pass(self) -> None:
        if self._scheduled_pass is not None:
            self._scheduled_pass.cancel()
            self._scheduled_pass = None
