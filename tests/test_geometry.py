import unittest

from brickfall.geometry import Brick, Coord


class BrickGeometryTest(unittest.TestCase):
    def test_cells_cover_inclusive_range_in_order(self) -> None:
        b = Brick.from_endpoints(0, (1, 0, 1), (1, 2, 1))
        self.assertEqual(
            list(b.cells()),
            [Coord(1, 0, 1), Coord(1, 1, 1), Coord(1, 2, 1)],
        )

    def test_cells_is_restartable(self) -> None:
        b = Brick.from_endpoints(3, (0, 0, 4), (0, 0, 6))
        self.assertEqual(list(b.cells()), list(b.cells()))
        self.assertEqual(len(list(b.cells())), 3)

    def test_single_cell_brick(self) -> None:
        b = Brick.from_endpoints(0, (2, 2, 2), (2, 2, 2))
        self.assertEqual(list(b.cells()), [Coord(2, 2, 2)])

    def test_endpoints_are_normalised(self) -> None:
        b = Brick.from_endpoints(7, (2, 0, 9), (0, 0, 9))
        self.assertEqual(b.lo, Coord(0, 0, 9))
        self.assertEqual(b.hi, Coord(2, 0, 9))
        self.assertEqual(b.id, 7)

    def test_shifted_down_by_does_not_mutate(self) -> None:
        b = Brick.from_endpoints(1, (1, 1, 8), (1, 1, 9))
        moved = b.shifted_down_by(3)
        self.assertEqual((moved.min_z, moved.max_z), (5, 6))
        self.assertEqual((b.min_z, b.max_z), (8, 9))
        self.assertEqual(moved.id, b.id)
        self.assertEqual((moved.lo.x, moved.lo.y), (1, 1))

    def test_shift_below_zero_is_rejected(self) -> None:
        b = Brick.from_endpoints(0, (0, 0, 1), (0, 0, 1))
        self.assertEqual(b.shifted_down_by(1).min_z, 0)
        with self.assertRaises(ValueError):
            b.shifted_down_by(2)

    def test_bottom_cells(self) -> None:
        b = Brick.from_endpoints(0, (0, 0, 3), (1, 0, 3))
        self.assertEqual(list(b.bottom_cells()), [Coord(0, 0, 3), Coord(1, 0, 3)])

    def test_bottom_cells_of_vertical_brick(self) -> None:
        b = Brick.from_endpoints(0, (2, 1, 4), (2, 1, 7))
        self.assertEqual(list(b.bottom_cells()), [Coord(2, 1, 4)])

    def test_negative_coordinate_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Brick(id=0, lo=Coord(-1, 0, 1), hi=Coord(0, 0, 1))

    def test_bricks_are_values(self) -> None:
        a = Brick.from_endpoints(0, (0, 0, 1), (0, 0, 1))
        b = Brick.from_endpoints(0, (0, 0, 1), (0, 0, 1))
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))


if __name__ == "__main__":
    unittest.main()
