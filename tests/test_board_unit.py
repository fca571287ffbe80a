import unittest

from game import (
    BOARD_LAYOUT,
    DARK,
    LIGHT,
    ROSETTE_INDICES,
    board_cells,
    other_side,
    path_location,
)


class TestBoardUnit(unittest.TestCase):
    def test_given_private_indices_when_mapping_then_cells_are_side_exclusive(self):
        for idx in (0, 1, 2, 3, 12, 13):
            self.assertNotEqual(path_location(LIGHT, idx), path_location(DARK, idx))
        self.assertEqual(path_location(LIGHT, 0), 'L0')
        self.assertEqual(path_location(DARK, 3), 'D3')
        self.assertEqual(path_location(LIGHT, 12), 'L4')
        self.assertEqual(path_location(DARK, 13), 'D5')

    def test_given_combat_indices_when_mapping_then_both_sides_share_the_cell(self):
        for idx in range(4, 12):
            self.assertEqual(path_location(LIGHT, idx), path_location(DARK, idx))
            self.assertEqual(path_location(LIGHT, idx), f'C{idx - 4}')

    def test_given_off_board_index_when_mapping_then_value_error(self):
        for idx in (-1, 14, 20):
            with self.assertRaises(ValueError):
                path_location(LIGHT, idx)
        with self.assertRaises(ValueError):
            path_location('purple', 2)

    def test_given_layout_when_listing_cells_then_every_path_cell_appears_once(self):
        cells = board_cells()
        self.assertEqual(len(cells), 20)
        self.assertEqual(len(set(cells)), 20)
        for side in (LIGHT, DARK):
            for idx in range(14):
                self.assertIn(path_location(side, idx), cells)

    def test_given_layout_when_reading_rosettes_then_they_match_rosette_indices(self):
        rosettes = {cell.id for row in BOARD_LAYOUT for cell in row if cell.rosette}
        expected = {path_location(side, idx) for side in (LIGHT, DARK) for idx in ROSETTE_INDICES}
        self.assertEqual(rosettes, expected)
        self.assertEqual(len(BOARD_LAYOUT), 3)
        for row in BOARD_LAYOUT:
            self.assertEqual(len(row), 8)
        self.assertTrue(BOARD_LAYOUT[0][4].empty)

    def test_given_side_when_flipping_then_other_side(self):
        self.assertEqual(other_side(LIGHT), DARK)
        self.assertEqual(other_side(DARK), LIGHT)
        with self.assertRaises(ValueError):
            other_side('nobody')


if __name__ == '__main__':
    unittest.main(verbosity=2)
