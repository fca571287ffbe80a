"""
Royal Game of Ur core Python package.

Rules engine for the two-player race game; presentation layers (app.py,
the terminal CLI) call into it and never re-derive game rules.
Modules:
- board.py: sides, path-to-location mapping, board layout
- state.py: Piece, MatchState, phases
- moves.py: pure rule functions (roll, legal_moves, apply_move, switch_turn)
- engine.py: MatchEngine, the single owner of a live match
- tally.py: persisted win tally
"""
