from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple, Union

from .board import (
    DARK,
    FINISHED,
    LIGHT,
    PIECES_PER_SIDE,
    RESERVE,
    SIDES,
    Side,
    path_location,
)

Dice = Tuple[int, int, int, int]
NO_DICE: Dice = (0, 0, 0, 0)


@dataclass(frozen=True)
class Piece:
    """One game piece. Position -1 is the reserve, 0..13 the owner's path, 14 borne off."""
    id: str
    owner: Side
    position: int = RESERVE

    @property
    def is_finished(self) -> bool:
        return self.position == FINISHED

    @property
    def in_reserve(self) -> bool:
        return self.position == RESERVE

    @property
    def on_board(self) -> bool:
        return not self.is_finished and not self.in_reserve

    def location(self) -> Optional[str]:
        """Board cell id, or None while in reserve or after bearing off."""
        if not self.on_board:
            return None
        return path_location(self.owner, self.position)

    def moved_to(self, position: int) -> 'Piece':
        return replace(self, position=position)


@dataclass(frozen=True)
class AwaitingRoll:
    player: Side


@dataclass(frozen=True)
class AwaitingMove:
    player: Side
    movable: Tuple[int, ...]


@dataclass(frozen=True)
class GameOver:
    winner: Side


Phase = Union[AwaitingRoll, AwaitingMove, GameOver]


@dataclass(frozen=True)
class MatchState:
    """Immutable snapshot of one match. Rule functions return new instances."""
    pieces: Tuple[Piece, ...]
    current_player: Side = LIGHT
    dice: Dice = NO_DICE
    last_roll: int = 0
    waiting_for_roll: bool = True
    possible_moves: Tuple[int, ...] = ()
    winner: Optional[Side] = None

    @property
    def phase(self) -> Phase:
        if self.winner is not None:
            return GameOver(self.winner)
        if self.waiting_for_roll:
            return AwaitingRoll(self.current_player)
        return AwaitingMove(self.current_player, self.possible_moves)

    def pieces_of(self, side: Side) -> Tuple[int, ...]:
        return tuple(i for i, p in enumerate(self.pieces) if p.owner == side)

    def finished_count(self, side: Side) -> int:
        return sum(1 for p in self.pieces if p.owner == side and p.is_finished)

    def with_positions(self, positions: Dict[int, int]) -> 'MatchState':
        """Returns a copy with the given piece indices relocated (setup helper; moves are not recomputed)."""
        pieces = tuple(
            p.moved_to(positions[i]) if i in positions else p
            for i, p in enumerate(self.pieces)
        )
        return replace(self, pieces=pieces)


def initial_state(starting_player: Side = LIGHT) -> MatchState:
    """Fresh match: every piece in reserve, starting side to roll."""
    if starting_player not in SIDES:
        raise ValueError(f'unknown side: {starting_player!r}')
    pieces = tuple(
        Piece(id=f'{side}-{i}', owner=side)
        for side in (LIGHT, DARK)
        for i in range(PIECES_PER_SIDE)
    )
    return MatchState(pieces=pieces, current_player=starting_player)
