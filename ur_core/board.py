from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

Side = str  # 'light' or 'dark'

LIGHT: Side = 'light'
DARK: Side = 'dark'
SIDES: Tuple[Side, Side] = (LIGHT, DARK)

PIECES_PER_SIDE = 7
PATH_LENGTH = 14       # path indices 0..13
RESERVE = -1
FINISHED = PATH_LENGTH  # 14 == borne off

COMBAT_START = 4
COMBAT_END = 11
ROSETTE_INDICES: Tuple[int, ...] = (3, 7, 13)
SAFE_INDEX = 7

OFF_BOARD = 'OFF'


def other_side(side: Side) -> Side:
    """Returns the opposing side."""
    if side == LIGHT:
        return DARK
    if side == DARK:
        return LIGHT
    raise ValueError(f'unknown side: {side!r}')


def side_prefix(side: Side) -> str:
    if side not in SIDES:
        raise ValueError(f'unknown side: {side!r}')
    return 'L' if side == LIGHT else 'D'


def is_rosette(index: int) -> bool:
    return index in ROSETTE_INDICES


def is_combat(index: int) -> bool:
    return COMBAT_START <= index <= COMBAT_END


def path_location(owner: Side, index: int) -> str:
    """
    Maps a path index of the given side to the id of the physical board cell.

    Indices 0-3 and 12-13 are private to each side (L0..L5 / D0..D5); indices
    4-11 land on the shared combat row (C0..C7) whoever the owner is. Two
    pieces collide exactly when their locations are equal.
    """
    prefix = side_prefix(owner)
    if not 0 <= index < PATH_LENGTH:
        raise ValueError(f'path index out of board: {index}')
    if is_combat(index):
        return f'C{index - COMBAT_START}'
    if index < COMBAT_START:
        return f'{prefix}{index}'
    # 12 -> L4/D4, 13 -> L5/D5
    return f'{prefix}{index - COMBAT_END + 3}'


@dataclass(frozen=True)
class Cell:
    """One slot of the 3x8 display grid; gaps have no id."""
    id: Optional[str]
    rosette: bool = False

    @property
    def empty(self) -> bool:
        return self.id is None


def _private_row(prefix: str) -> Tuple[Cell, ...]:
    return (
        Cell(f'{prefix}3', rosette=True),
        Cell(f'{prefix}2'),
        Cell(f'{prefix}1'),
        Cell(f'{prefix}0'),
        Cell(None),
        Cell(None),
        Cell(f'{prefix}4'),
        Cell(f'{prefix}5', rosette=True),
    )


BOARD_LAYOUT: Tuple[Tuple[Cell, ...], ...] = (
    _private_row('L'),
    tuple(Cell(f'C{i}', rosette=(i + COMBAT_START) == SAFE_INDEX) for i in range(COMBAT_END - COMBAT_START + 1)),
    _private_row('D'),
)


def board_cells() -> List[str]:
    """All playable cell ids, row-major."""
    return [cell.id for row in BOARD_LAYOUT for cell in row if cell.id is not None]
