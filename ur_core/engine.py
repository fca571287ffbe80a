from __future__ import annotations

import random
import sqlite3
from dataclasses import dataclass
from typing import Optional

from .board import FINISHED, Side, is_rosette
from .moves import (
    RejectReason,
    apply_move,
    captured_by,
    check_move,
    check_roll,
    roll,
    switch_turn,
    target_index,
)
from .state import MatchState, Phase, initial_state
from .tally import MemoryTallyStore, TallyStore, WinTally, debug_enabled


@dataclass(frozen=True)
class MoveResult:
    """Outcome of MatchEngine.move_piece; ok=False means the state was left untouched."""
    ok: bool
    reason: Optional[RejectReason] = None
    captured: Optional[int] = None
    bonus_turn: bool = False
    finished: bool = False
    winner: Optional[Side] = None


class MatchEngine:
    """
    Single owner of the current match.

    Every mutation goes through roll_dice / move_piece / switch_turn /
    reset_game, each of which swaps in a new immutable MatchState, so a
    snapshot handed out earlier never changes under the caller.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        store: Optional[TallyStore] = None,
        seed: Optional[int] = None,
        state: Optional[MatchState] = None,
    ) -> None:
        self.rng = rng if rng is not None else random.Random(seed)
        self.store: TallyStore = store if store is not None else MemoryTallyStore()
        self._wins: WinTally = self.store.load()
        # A custom starting position is only used until the first reset
        self._state: MatchState = state if state is not None else initial_state()

    @property
    def state(self) -> MatchState:
        return self._state

    @property
    def wins(self) -> WinTally:
        return self._wins

    @property
    def phase(self) -> Phase:
        return self._state.phase

    def roll_dice(self) -> int:
        """Throws the four binary dice; returns the previous roll unchanged when a roll is not due."""
        if check_roll(self._state) is not None:
            return self._state.last_roll
        dice = [self.rng.randint(0, 1) for _ in range(4)]
        self._state = roll(self._state, dice)
        return self._state.last_roll

    def move_piece(self, piece_index: int) -> MoveResult:
        reason = check_move(self._state, piece_index)
        if reason is not None:
            return MoveResult(ok=False, reason=reason)
        before = self._state
        target = target_index(before.pieces[piece_index], before.last_roll)
        captured = captured_by(before, piece_index)
        self._state = apply_move(before, piece_index)
        winner = self._state.winner
        if winner is not None and before.winner is None:
            self._record_win(winner)
        return MoveResult(
            ok=True,
            captured=captured,
            bonus_turn=target != FINISHED and is_rosette(target),
            finished=target == FINISHED,
            winner=winner,
        )

    def switch_turn(self) -> None:
        self._state = switch_turn(self._state)

    def reset_game(self) -> None:
        self._state = initial_state()

    def _record_win(self, side: Side) -> None:
        self._wins = self._wins.incremented(side)
        # The finished match stands even if the tally cannot be written
        try:
            self.store.save(self._wins)
        except (sqlite3.Error, OSError) as e:
            if debug_enabled():
                print(f'[tally] save failed: {e}')
