from __future__ import annotations

# Facade module that re-exports the Ur core API for the Flask app and tests.
# Single-responsibility modules live under ur_core/*.

try:
    from .ur_core.board import (  # type: ignore
        BOARD_LAYOUT,
        DARK,
        LIGHT,
        PIECES_PER_SIDE,
        ROSETTE_INDICES,
        SAFE_INDEX,
        Cell,
        Side,
        board_cells,
        other_side,
        path_location,
    )
    from .ur_core.state import (  # type: ignore
        AwaitingMove,
        AwaitingRoll,
        GameOver,
        MatchState,
        Piece,
        initial_state,
    )
    from .ur_core.moves import (  # type: ignore
        RejectReason,
        apply_move,
        captured_by,
        check_move,
        check_roll,
        detect_winner,
        legal_moves,
        move_target,
        must_pass,
        roll,
        switch_turn,
    )
    from .ur_core.engine import MatchEngine, MoveResult  # type: ignore
    from .ur_core.tally import (  # type: ignore
        MemoryTallyStore,
        SqliteTallyStore,
        WinTally,
        parse_tally,
    )
except ImportError:
    from ur_core.board import (  # type: ignore
        BOARD_LAYOUT,
        DARK,
        LIGHT,
        PIECES_PER_SIDE,
        ROSETTE_INDICES,
        SAFE_INDEX,
        Cell,
        Side,
        board_cells,
        other_side,
        path_location,
    )
    from ur_core.state import (  # type: ignore
        AwaitingMove,
        AwaitingRoll,
        GameOver,
        MatchState,
        Piece,
        initial_state,
    )
    from ur_core.moves import (  # type: ignore
        RejectReason,
        apply_move,
        captured_by,
        check_move,
        check_roll,
        detect_winner,
        legal_moves,
        move_target,
        must_pass,
        roll,
        switch_turn,
    )
    from ur_core.engine import MatchEngine, MoveResult  # type: ignore
    from ur_core.tally import (  # type: ignore
        MemoryTallyStore,
        SqliteTallyStore,
        WinTally,
        parse_tally,
    )


def main() -> None:
    # CLI driver delegated to ur_core.cli
    try:
        from .ur_core.cli import main as _main  # type: ignore
    except ImportError:
        from ur_core.cli import main as _main  # type: ignore
    _main()


if __name__ == '__main__':
    main()
