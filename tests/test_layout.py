from __future__ import annotations

import unittest

from lifegrid_core.layout import EMPTY_LAYOUT, compute_grid_layout


class GridLayoutTests(unittest.TestCase):
    def test_small_square_viewport(self) -> None:
        layout = compute_grid_layout(10, 100, 100)
        self.assertEqual((layout.rows, layout.columns), (3, 4))
        self.assertAlmostEqual(layout.cell_size, 20.0)
        self.assertAlmostEqual(layout.offset_x, 10.0)
        self.assertAlmostEqual(layout.offset_y, 20.0)

    def test_rows_follow_viewport_aspect(self) -> None:
        layout = compute_grid_layout(960, 1920, 1080)
        self.assertEqual((layout.rows, layout.columns), (23, 42))
        self.assertAlmostEqual(layout.cell_size, 1536 / 42)
        tall = compute_grid_layout(960, 1080, 1920)
        self.assertGreater(tall.rows, tall.columns)

    def test_capacity_and_fit_invariants(self) -> None:
        for units in (1, 7, 12, 100, 960, 1200):
            for width, height in ((1, 1), (1920, 1080), (300, 900), (37, 5), (5000, 40)):
                with self.subTest(units=units, width=width, height=height):
                    layout = compute_grid_layout(units, width, height)
                    self.assertGreaterEqual(layout.rows, 1)
                    self.assertGreaterEqual(layout.columns, 1)
                    self.assertGreaterEqual(layout.capacity, units)
                    self.assertGreaterEqual(layout.cell_size, 0.0)
                    self.assertLessEqual(layout.columns * layout.cell_size, width * 0.8 + 1e-6)
                    self.assertLessEqual(layout.rows * layout.cell_size, height * 0.8 + 1e-6)
                    self.assertAlmostEqual(2 * layout.offset_x + layout.columns * layout.cell_size, width)
                    self.assertAlmostEqual(2 * layout.offset_y + layout.rows * layout.cell_size, height)

    def test_degenerate_inputs_return_empty_layout(self) -> None:
        self.assertEqual(compute_grid_layout(0, 100, 100), EMPTY_LAYOUT)
        self.assertEqual(compute_grid_layout(-5, 100, 100), EMPTY_LAYOUT)
        self.assertEqual(compute_grid_layout(10, 0, 100), EMPTY_LAYOUT)
        self.assertEqual(compute_grid_layout(10, 100, -1), EMPTY_LAYOUT)
        self.assertEqual(compute_grid_layout(10, float("nan"), 100), EMPTY_LAYOUT)
        self.assertEqual(compute_grid_layout(10, float("inf"), 100), EMPTY_LAYOUT)
        self.assertEqual(EMPTY_LAYOUT.capacity, 0)
        self.assertEqual(EMPTY_LAYOUT.cell_size, 0.0)


if __name__ == "__main__":
    unittest.main()
