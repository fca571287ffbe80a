from __future__ import annotations

import argparse
from typing import Dict, List, Optional

from .board import BOARD_LAYOUT, DARK, LIGHT, PIECES_PER_SIDE, SIDES, Side
from .engine import MatchEngine
from .moves import move_target, must_pass
from .state import MatchState
from .tally import MemoryTallyStore, SqliteTallyStore, WinTally

SYMBOLS = {LIGHT: 'X', DARK: 'O'}


def piece_label(state: MatchState, index: int) -> str:
    """Per-side label such as X3 / O0 (number is the piece's slot within its side)."""
    piece = state.pieces[index]
    return f'{SYMBOLS[piece.owner]}{state.pieces_of(piece.owner).index(index)}'


def render_board(state: MatchState) -> str:
    """Text view of the 3x8 board plus reserve and finished counts."""
    occupied: Dict[str, int] = {}
    for i, p in enumerate(state.pieces):
        loc = p.location()
        if loc is not None:
            occupied[loc] = i
    lines: List[str] = []
    for row in BOARD_LAYOUT:
        cells: List[str] = []
        for cell in row:
            if cell.id is None:
                cells.append('    ')
            elif cell.id in occupied:
                cells.append(f'[{piece_label(state, occupied[cell.id])}]')
            elif cell.rosette:
                cells.append('[**]')
            else:
                cells.append('[  ]')
        lines.append(''.join(cells))
    for side in SIDES:
        reserve = [piece_label(state, i) for i in state.pieces_of(side) if state.pieces[i].in_reserve]
        lines.append(
            f"{SYMBOLS[side]} {side}: reserve {' '.join(reserve) or '-'}"
            f" | home {state.finished_count(side)}/{PIECES_PER_SIDE}"
        )
    return '\n'.join(lines)


def describe_dice(state: MatchState) -> str:
    return ' '.join('#' if d else '.' for d in state.dice) + f'  = {state.last_roll}'


def format_tally(wins: WinTally) -> str:
    return f'Wins - light: {wins.light_wins}, dark: {wins.dark_wins}'


def prompt_piece(state: MatchState, show_targets: bool = False) -> int:
    side: Side = state.current_player
    slots = state.pieces_of(side)
    options = {slots.index(i): i for i in state.possible_moves}
    shown = []
    for n, i in sorted(options.items()):
        shown.append(f'{n}->{move_target(state, i)}' if show_targets else str(n))
    print('Movable pieces:', ', '.join(shown))
    while True:
        text = input(f'{side} piece number: ').strip()
        try:
            n = int(text)
        except ValueError:
            print('Could not parse. Try again.')
            continue
        if n in options:
            return options[n]
        print('Illegal move. Try again.')


def play_match(engine: MatchEngine, show_targets: bool = False) -> Optional[Side]:
    """Hot-seat loop for one match; returns the winner."""
    while engine.state.winner is None:
        state = engine.state
        print()
        print(render_board(state))
        input(f"{state.current_player}'s turn - press Enter to roll ")
        engine.roll_dice()
        state = engine.state
        print('Dice:', describe_dice(state))
        if must_pass(state):
            print('No legal move, turn passes.' if state.last_roll else 'Rolled 0, turn passes.')
            engine.switch_turn()
            continue
        result = engine.move_piece(prompt_piece(state, show_targets))
        if result.captured is not None:
            print(f'Captured {piece_label(state, result.captured)}!')
        if result.bonus_turn:
            print('Rosette! Roll again.')
    print()
    print(render_board(engine.state))
    print(f'{engine.state.winner} wins!')
    return engine.state.winner


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Royal Game of Ur, hot-seat in the terminal')
    parser.add_argument('--db', default=None, help='SQLite file keeping the win tally (default: $UR_DB or data/ur_wins.db)')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the dice')
    parser.add_argument('--no-persist', action='store_true', help='Do not read or write the win tally')
    parser.add_argument('--show-targets', action='store_true', help='Show the destination cell of each movable piece')
    args = parser.parse_args(argv)

    store = MemoryTallyStore() if args.no_persist else SqliteTallyStore(args.db)
    engine = MatchEngine(store=store, seed=args.seed)
    print(format_tally(engine.wins))
    while True:
        play_match(engine, show_targets=args.show_targets)
        print(format_tally(engine.wins))
        again = input('Play again? [y/N] ').strip().lower()
        if again not in ('y', 'yes'):
            break
        engine.reset_game()
