from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .board import (
    FINISHED,
    OFF_BOARD,
    PIECES_PER_SIDE,
    RESERVE,
    SAFE_INDEX,
    SIDES,
    Side,
    is_rosette,
    other_side,
    path_location,
)
from .state import NO_DICE, MatchState, Piece


class RejectReason(str, Enum):
    GAME_OVER = 'game over'
    NOT_ROLLED = 'roll first'
    ALREADY_ROLLED = 'already rolled'
    UNKNOWN_PIECE = 'unknown piece'
    NOT_YOUR_TURN = 'not your turn'
    ILLEGAL_TARGET = 'illegal target'


def target_index(piece: Piece, roll: int) -> int:
    """Path index the piece would reach with this roll (may exceed 14)."""
    return piece.position + roll


def occupant_at(state: MatchState, location: str, exclude: Optional[int] = None) -> Optional[int]:
    """Index of the on-board piece sitting on the given cell, if any."""
    for i, p in enumerate(state.pieces):
        if i == exclude or not p.on_board:
            continue
        if path_location(p.owner, p.position) == location:
            return i
    return None


def _is_legal(state: MatchState, index: int) -> bool:
    piece = state.pieces[index]
    target = target_index(piece, state.last_roll)
    if target == FINISHED:
        return True
    if target > FINISHED:
        # Bearing off needs an exact roll
        return False
    occ = occupant_at(state, path_location(piece.owner, target), exclude=index)
    if occ is None:
        return True
    if state.pieces[occ].owner == piece.owner:
        return False
    # Opponent on the central rosette is safe
    return target != SAFE_INDEX


def legal_moves(state: MatchState) -> Tuple[int, ...]:
    """Indices of the current player's pieces that can move with last_roll."""
    if state.last_roll <= 0:
        return ()
    return tuple(
        i for i, p in enumerate(state.pieces)
        if p.owner == state.current_player and not p.is_finished and _is_legal(state, i)
    )


def roll(state: MatchState, dice: Sequence[int]) -> MatchState:
    """
    Records a throw of the four binary dice.

    Ignored (the same state comes back) unless the current player is waiting
    to roll. A zero roll leaves no legal moves but does not end the turn;
    the caller decides when to switch.
    """
    if not state.waiting_for_roll or state.winner is not None:
        return state
    values = tuple(int(d) for d in dice)
    if len(values) != 4 or any(d not in (0, 1) for d in values):
        raise ValueError(f'expected four binary dice, got {list(dice)!r}')
    rolled = replace(state, dice=values, last_roll=sum(values), waiting_for_roll=False, possible_moves=())
    if rolled.last_roll == 0:
        return rolled
    return replace(rolled, possible_moves=legal_moves(rolled))


def switch_turn(state: MatchState) -> MatchState:
    """Hands the turn to the other side and clears the roll; a finished match is left as is."""
    if state.winner is not None:
        return state
    return replace(
        state,
        current_player=other_side(state.current_player),
        waiting_for_roll=True,
        possible_moves=(),
        last_roll=0,
        dice=NO_DICE,
    )


def detect_winner(pieces: Sequence[Piece]) -> Optional[Side]:
    for side in SIDES:
        if sum(1 for p in pieces if p.owner == side and p.is_finished) == PIECES_PER_SIDE:
            return side
    return None


def apply_move(state: MatchState, index: int) -> MatchState:
    """Moves a piece from possible_moves and returns the resulting state; anything else is a no-op."""
    if index not in state.possible_moves:
        return state
    piece = state.pieces[index]
    target = target_index(piece, state.last_roll)
    pieces: List[Piece] = list(state.pieces)

    if target == FINISHED:
        pieces[index] = piece.moved_to(FINISHED)
        winner = detect_winner(pieces)
        moved = replace(state, pieces=tuple(pieces))
        if winner is not None:
            return replace(moved, winner=winner, possible_moves=())
        # No bonus turn for bearing off
        return switch_turn(moved)

    occ = occupant_at(state, path_location(piece.owner, target), exclude=index)
    if occ is not None and state.pieces[occ].owner != piece.owner:
        pieces[occ] = state.pieces[occ].moved_to(RESERVE)
    pieces[index] = piece.moved_to(target)
    moved = replace(state, pieces=tuple(pieces))

    if is_rosette(target):
        return replace(moved, waiting_for_roll=True, possible_moves=())
    return switch_turn(moved)


def check_roll(state: MatchState) -> Optional[RejectReason]:
    if state.winner is not None:
        return RejectReason.GAME_OVER
    if not state.waiting_for_roll:
        return RejectReason.ALREADY_ROLLED
    return None


def check_move(state: MatchState, index: int) -> Optional[RejectReason]:
    """Why apply_move would ignore this index, or None when it is legal."""
    if state.winner is not None:
        return RejectReason.GAME_OVER
    if state.waiting_for_roll:
        return RejectReason.NOT_ROLLED
    if not 0 <= index < len(state.pieces):
        return RejectReason.UNKNOWN_PIECE
    if state.pieces[index].owner != state.current_player:
        return RejectReason.NOT_YOUR_TURN
    if index not in state.possible_moves:
        return RejectReason.ILLEGAL_TARGET
    return None


def captured_by(state: MatchState, index: int) -> Optional[int]:
    """Opponent piece that moving `index` would send back to the reserve."""
    if index not in state.possible_moves:
        return None
    piece = state.pieces[index]
    target = target_index(piece, state.last_roll)
    if target >= FINISHED:
        return None
    occ = occupant_at(state, path_location(piece.owner, target), exclude=index)
    if occ is None or state.pieces[occ].owner == piece.owner:
        return None
    return occ


def move_target(state: MatchState, index: int) -> Optional[str]:
    """Destination cell of a movable piece ('OFF' when bearing off)."""
    if index not in state.possible_moves:
        return None
    target = target_index(state.pieces[index], state.last_roll)
    if target == FINISHED:
        return OFF_BOARD
    return path_location(state.pieces[index].owner, target)


def must_pass(state: MatchState) -> bool:
    """True once the player has rolled and has nothing to move."""
    return state.winner is None and not state.waiting_for_roll and not state.possible_moves
