"""
Tests for splitting image dimensions into A4 page descriptors.
"""

import unittest

import pytest

from slicer.config import A4_WIDTH_MM, A4_HEIGHT_MM
from slicer.errors import InvalidImageDimensions
from slicer.paginator import PageSpec, paginate, round_half_up


SIZES = [
    (1, 1), (1000, 3000), (1000, 500), (5000, 1000), (4000, 1000),
    (210, 594), (1080, 19999), (333, 7777), (1920, 1080), (123, 4567),
]


def row_ranges(width, height):
    return [spec.row_range(height) for spec in paginate(width, height)]


class TestRoundHalfUp(unittest.TestCase):

    def test_rounds_halves_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(1414.5), 1415)
        self.assertEqual(round_half_up(1414.2857), 1414)
        self.assertEqual(round_half_up(0.0), 0)


class TestPaginate(unittest.TestCase):

    def test_tall_image(self):
        """1000x3000 becomes three pages, the last one short."""
        pages = paginate(1000, 3000)

        self.assertEqual(len(pages), 3)
        self.assertEqual([p.index for p in pages], [0, 1, 2])
        self.assertEqual(row_ranges(1000, 3000), [(0, 1414), (1414, 2829), (2829, 3000)])
        self.assertAlmostEqual(pages[0].target_height, 1000 * 297 / 210)
        self.assertAlmostEqual(pages[2].source_height, 3000 - 2 * 1000 * 297 / 210)
        for page in pages:
            self.assertEqual(page.target_size, (1000, 1414))

    def test_image_shorter_than_one_page(self):
        pages = paginate(1000, 500)

        self.assertEqual(len(pages), 1)
        self.assertEqual(pages[0].source_y_offset, 0)
        self.assertEqual(pages[0].source_height, 500)
        self.assertEqual(pages[0].row_range(500), (0, 500))
        self.assertEqual(pages[0].target_size, (1000, 1414))

    def test_panoramic_image_uses_half_height_as_page_width(self):
        pages = paginate(5000, 1000)

        self.assertEqual(len(pages), 2)
        self.assertEqual(pages[0].target_width, 500)
        self.assertAlmostEqual(pages[0].target_height, 500 * 297 / 210)
        self.assertEqual(pages[0].target_size, (500, 707))
        self.assertEqual(row_ranges(5000, 1000), [(0, 707), (707, 1000)])

    def test_ratio_of_exactly_four_keeps_full_width(self):
        pages = paginate(4000, 1000)

        self.assertEqual(pages[0].target_width, 4000)
        self.assertEqual(len(pages), 1)

    def test_panorama_ratio_is_configurable(self):
        pages = paginate(5000, 1000, panorama_ratio=10)

        self.assertEqual(pages[0].target_width, 5000)
        self.assertEqual(len(pages), 1)

    def test_exact_multiple_of_page_height_has_no_empty_page(self):
        pages = paginate(210, 594)

        self.assertEqual(len(pages), 2)
        self.assertEqual(row_ranges(210, 594), [(0, 297), (297, 594)])

    def test_pages_cover_image_without_gaps_or_overlaps(self):
        for width, height in SIZES:
            ranges = row_ranges(width, height)
            self.assertEqual(ranges[0][0], 0, (width, height))
            self.assertEqual(ranges[-1][1], height, (width, height))
            for (_, bottom), (top, _) in zip(ranges, ranges[1:]):
                self.assertEqual(bottom, top, (width, height))
            for top, bottom in ranges:
                self.assertLess(top, bottom, (width, height))

    def test_page_count_formula(self):
        import math
        for width, height in SIZES:
            pages = paginate(width, height)
            expected = max(1, math.ceil(round(height / pages[0].target_height, 9)))
            self.assertEqual(len(pages), expected, (width, height))

    def test_target_aspect_ratio_is_a4(self):
        a4 = A4_WIDTH_MM / A4_HEIGHT_MM
        for width, height in SIZES:
            for page in paginate(width, height):
                ratio = page.target_width / page.target_height
                self.assertAlmostEqual(ratio / a4, 1.0, delta=1e-6)

    def test_is_deterministic(self):
        self.assertEqual(paginate(1080, 19999), paginate(1080, 19999))


@pytest.mark.parametrize("width,height", [(0, 100), (100, 0), (0, 0), (-5, 100), (None, 100)])
def test_invalid_dimensions(width, height):
    with pytest.raises(InvalidImageDimensions):
        paginate(width, height)


def test_row_range_is_clipped_to_image():
    spec = PageSpec(index=0, source_y_offset=0, source_height=10.6, target_width=10, target_height=14.14)
    assert spec.row_range(10) == (0, 10)
