#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from vchip.display import Display


class TestDisplay(unittest.TestCase):
    def setUp(self):
        self.display = Display()
        self.display_small = Display(4, 5)

    def test_display_size(self):
        self.assertEqual((64, 32), self.display.get_vid_size())
        self.assertEqual(64 * 32, len(self.display.present()))
        self.assertEqual((4, 5), self.display_small.get_vid_size())

    def test_display_writes(self):
        ds = self.display_small
        self.assertFalse(ds.set_pixel(0, 0))
        self.assertEqual("0100000000000000000000000000000000000000", ds.cells.hex())
        self.assertFalse(ds.set_pixel(1, 1))
        self.assertEqual("0100000000010000000000000000000000000000", ds.cells.hex())
        self.assertTrue(ds.set_pixel(0, 0))  # Erases the first pixel
        self.assertEqual("0000000000010000000000000000000000000000", ds.cells.hex())

    def test_display_self_inverse(self):
        d = self.display

        for x, y in (0, 0), (63, 31), (10, 20), (64, 32), (-1, -1):
            before = bytes(d.cells)
            d.set_pixel(x, y)
            self.assertNotEqual(before, bytes(d.cells))
            d.set_pixel(x, y)
            self.assertEqual(before, bytes(d.cells))

        # Restoring a lit pixel works too
        d.set_pixel(5, 5)
        d.set_pixel(5, 5)
        d.set_pixel(5, 5)
        self.assertEqual(1, d.get_pixel(5, 5))

    def test_display_wrap(self):
        d = self.display
        d.set_pixel(64, 0)
        self.assertEqual(1, d.get_pixel(0, 0))
        d.set_pixel(-1, 0)
        self.assertEqual(1, d.get_pixel(63, 0))
        d.set_pixel(3, 32)
        self.assertEqual(1, d.get_pixel(3, 0))
        d.set_pixel(3, -1)
        self.assertEqual(1, d.get_pixel(3, 31))
        d.set_pixel(-1, -1)
        self.assertEqual(1, d.get_pixel(63, 31))
        self.assertEqual(5, sum(d.present()))

    def test_display_wrap_once_only(self):
        d = self.display
        # 150 wraps to 86, which is still off the right edge, so the pixel lands on the next row
        self.assertFalse(d.set_pixel(150, 0))
        self.assertEqual(1, d.get_pixel(22, 1))
        self.assertEqual(1, sum(d.present()))
        self.assertTrue(d.set_pixel(150, 0))
        self.assertEqual(0, sum(d.present()))

    def test_display_outside_buffer(self):
        d = self.display
        # 200 wraps to 136, which on the bottom row is past the end of the buffer entirely
        self.assertFalse(d.set_pixel(200, 31))
        self.assertFalse(d.set_pixel(200, 31))
        self.assertFalse(d.set_pixel(0, -40))  # -40 wraps to -8
        self.assertEqual(0, sum(d.present()))

    def test_display_clear(self):
        d = self.display

        for i in range(64):
            d.set_pixel(i, i % 32)

        self.assertEqual(64, sum(d.present()))
        d.clear()
        self.assertTrue(all(cell == 0 for cell in d.present()))
        self.assertEqual(64 * 32, len(d.present()))

    def test_display_present(self):
        d = self.display
        view = d.present()
        self.assertTrue(view.readonly)

        with self.assertRaises(TypeError):
            view[0] = 1

        # The view follows later writes, without copying
        d.set_pixel(0, 0)
        self.assertEqual(1, view[0])
